"""
Demo driver: insert a product code, rename it, and list the table.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import typer

from .config import connect, load_config
from .exceptions import StorageError
from .product_code import ProductCode
from .storage import StorageBackend

logger = logging.getLogger(__name__)

SEPARATOR = "-------"

app = typer.Typer(add_completion=False, help="Product code insert-then-update demo.")


def print_all_codes(storage: StorageBackend, echo: Callable[[str], None] = print) -> None:
    """Echo every persisted product code, one per line."""
    for code in ProductCode.all(storage):
        echo(str(code))


def run(storage: StorageBackend, echo: Callable[[str], None] = print) -> ProductCode:
    """
    Save a new product code, rename it, save again, listing the table
    after each save.
    """
    code = ProductCode("MO", "N", "Movies")
    code.save(storage)
    print_all_codes(storage, echo)
    echo(SEPARATOR)
    code.code = "MV"
    code.save(storage)
    print_all_codes(storage, echo)
    return code


@app.command()
def demo(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Properties file with url, user and password. Defaults to db.properties.",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        case_sensitive=False,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    ),
):
    """
    Run the insert-then-update demo against the configured database.
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    try:
        settings = load_config(config)
        with connect(settings) as storage:
            run(storage, echo=typer.echo)
    except StorageError as e:
        logger.error("Demo failed: %s", e)
        raise typer.Exit(code=1) from e


def main():
    app()


if __name__ == "__main__":
    main()
