#!/usr/bin/env python3
"""
Simple example showing how to link a database to the code.
"""

import os

from prodcode import ProductCode, SQLiteStorage
from prodcode.driver import run


def main():
    print("=== Database Connection Example ===\n")

    db_path = "example.db"
    print(f"1. Connecting to database: {db_path}")

    with SQLiteStorage(db_path) as storage:
        print("\n2. Insert MO, then rename it to MV:")
        run(storage, echo=lambda line: print(f"   {line}"))

        print("\n3. Rows as stored:")
        for code in ProductCode.all(storage):
            print(f"   {code!r}")

    print(f"\n4. Database file size: {os.path.getsize(db_path)} bytes")
    print(f"   Database location: {os.path.abspath(db_path)}")

    # Clean up (optional)
    # os.remove(db_path)


if __name__ == "__main__":
    main()
