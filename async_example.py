#!/usr/bin/env python3
"""
Example demonstrating async saves of product codes.
"""

import asyncio

from prodcode import AsyncInMemoryStorage, ProductCode


async def save_concurrently(storage: AsyncInMemoryStorage):
    """Several tasks save the same code; only one row results."""
    print("=== Concurrent saves of the same code ===\n")

    codes = [ProductCode("SW", "M", "Software") for _ in range(5)]
    actions = await asyncio.gather(*(code.save_async(storage) for code in codes))

    print(f"   Actions: {actions}")
    rows = await ProductCode.all_async(storage)
    print(f"   Rows: {[str(code) for code in rows]}")


async def rename(storage: AsyncInMemoryStorage):
    """Rename a code by passing its prior identity explicitly."""
    print("\n=== Rename with explicit prior code ===\n")

    code = ProductCode("HW", "H", "Hardware")
    await code.save_async(storage)

    renamed = ProductCode("HD", "H", "Hardware")
    action = await renamed.save_async(storage, prior_code="HW")
    print(f"   Action: {action}")
    rows = await ProductCode.all_async(storage)
    print(f"   Rows: {[str(code) for code in rows]}")


async def main():
    async with AsyncInMemoryStorage() as storage:
        await save_concurrently(storage)
        await rename(storage)


if __name__ == "__main__":
    asyncio.run(main())
