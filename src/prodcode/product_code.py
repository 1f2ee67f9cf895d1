"""
ProductCode entity mapped onto the product_code table.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, TYPE_CHECKING

from .exceptions import StorageError

if TYPE_CHECKING:
    from .async_storage import AsyncStorageBackend
    from .storage import StorageBackend

logger = logging.getLogger(__name__)

SELECT_QUERY = "SELECT * FROM product_code"
INSERT_QUERY = (
    "INSERT INTO product_code(prod_code, discount_code, description) VALUES(?, ?, ?)"
)
UPDATE_QUERY = (
    "UPDATE product_code SET prod_code = ?, discount_code = ?, description = ? "
    "WHERE prod_code = ?"
)

INSERT = "insert"
UPDATE = "update"


class ProductCode:
    """
    One row of the product_code table.

    Two product codes compare equal when either their codes or their
    descriptions match. save() relies on this to decide between INSERT
    and UPDATE, so the comparison is deliberately loose.

    Example usage:
        with SQLiteStorage("sample.db") as storage:
            code = ProductCode("MO", "N", "Movies")
            code.save(storage)          # INSERT

            code.code = "MV"
            code.save(storage)          # UPDATE ... WHERE prod_code = 'MO'

            print(ProductCode.all(storage))
    """

    def __init__(self, code: str, discount_code: str, description: str) -> None:
        self._code = _check_code(code)
        self._discount_code = _check_discount_code(discount_code)
        self._description = description
        self._previous_code: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProductCode":
        """
        Build a product code from a persisted row.

        Args:
            row: Mapping holding the prod_code, discount_code and
                 description columns

        Raises:
            StorageError: If a column is missing or empty
        """
        try:
            code = row["prod_code"]
            discount_code = row["discount_code"]
            description = row["description"]
        except (KeyError, IndexError) as e:
            raise StorageError(f"product_code row is missing column {e}") from e

        if code is None or not discount_code or description is None:
            raise StorageError(f"product_code row has empty columns: {dict(row)!r}")

        return cls(code, discount_code[0], description)

    @property
    def code(self) -> str:
        return self._code

    @code.setter
    def code(self, code: str) -> None:
        """Set a new code, remembering the old one as previous_code."""
        code = _check_code(code)
        self._previous_code = self._code
        self._code = code

    @property
    def discount_code(self) -> str:
        return self._discount_code

    @discount_code.setter
    def discount_code(self, discount_code: str) -> None:
        self._discount_code = _check_discount_code(discount_code)

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, description: str) -> None:
        self._description = description

    @property
    def previous_code(self) -> Optional[str]:
        """Code the row was stored under before the last rename, if any."""
        return self._previous_code

    def to_row(self) -> Tuple[str, str, str]:
        """Column values in prod_code, discount_code, description order."""
        return (self._code, self._discount_code, self._description)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductCode):
            return NotImplemented
        return self._code == other._code or self._description == other._description

    # Mutable, and equality is not transitive
    __hash__ = None

    def __str__(self) -> str:
        return self._code

    def __repr__(self) -> str:
        return (
            f"ProductCode(code={self._code!r}, discount_code={self._discount_code!r}, "
            f"description={self._description!r})"
        )

    # Persistence

    @classmethod
    def convert(cls, rows: Iterable[Mapping[str, Any]]) -> List["ProductCode"]:
        """Convert query rows to a list of product codes."""
        return [cls.from_row(row) for row in rows]

    @classmethod
    def all(cls, storage: "StorageBackend") -> List["ProductCode"]:
        """
        Get every persisted product code.

        Returns:
            Product codes in the order the storage returns them
        """
        return cls.convert(storage.query(SELECT_QUERY))

    def save(self, storage: "StorageBackend", prior_code: Optional[str] = None) -> str:
        """
        Persist this product code.

        If a persisted row equals this product code, that row is updated,
        located by its prior code. Otherwise a new row is inserted. The read
        and the write run in one transaction.

        Args:
            storage: Storage backend to write to
            prior_code: Code the row is currently stored under. Defaults to
                        previous_code, then to code.

        Returns:
            "insert" or "update"

        Raises:
            StorageError: If any storage operation fails
        """
        with storage.transaction():
            previous_state = self.all(storage)
            action, sql, params = self._plan(previous_state, prior_code)
            count = storage.execute(sql, params)
        return self._saved(action, count, params)

    @classmethod
    async def all_async(cls, storage: "AsyncStorageBackend") -> List["ProductCode"]:
        """Async variant of all()."""
        return cls.convert(await storage.query(SELECT_QUERY))

    async def save_async(
        self, storage: "AsyncStorageBackend", prior_code: Optional[str] = None
    ) -> str:
        """Async variant of save()."""
        async with storage.transaction():
            previous_state = await self.all_async(storage)
            action, sql, params = self._plan(previous_state, prior_code)
            count = await storage.execute(sql, params)
        return self._saved(action, count, params)

    def _plan(
        self, previous_state: List["ProductCode"], prior_code: Optional[str]
    ) -> Tuple[str, str, Tuple[str, ...]]:
        actual_product = ProductCode(self._code, self._discount_code, self._description)
        if actual_product in previous_state:
            key = prior_code or self._previous_code or self._code
            return UPDATE, UPDATE_QUERY, self.to_row() + (key,)
        return INSERT, INSERT_QUERY, self.to_row()

    def _saved(self, action: str, count: int, params: Tuple[str, ...]) -> str:
        if action == UPDATE and count == 0:
            logger.warning(
                "Update of product code %s matched no row with prod_code=%s",
                self._code, params[-1],
            )
        else:
            logger.info("Saved product code %s (%s)", self._code, action)
        self._previous_code = None
        return action


def _check_code(code: Optional[str]) -> str:
    if code is None:
        raise ValueError("code must not be None")
    return code


def _check_discount_code(discount_code: str) -> str:
    if not isinstance(discount_code, str) or len(discount_code) != 1:
        raise ValueError(f"discount_code must be a single character, got {discount_code!r}")
    return discount_code
