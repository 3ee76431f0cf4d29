"""Storage engine: the only owner of the persisted sweet collection.

Every operation is a whole-collection read-modify-write against one backend
slot. There is no locking; two writers sharing a backend race and the later
write wins.
"""

import logging
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Optional,
    Union,
)

from pydantic import (
    TypeAdapter,
    ValidationError,
)

from .backends import StorageBackend
from .config import (
    DEFAULT_STORAGE_KEY,
    SweetShopConfig,
    create_backend,
)
from .exceptions import (
    InsufficientStockError,
    PersistenceError,
    SweetNotFoundError,
)
from .models import (
    FIRST_SWEET_ID,
    SEED_SWEETS,
    InventoryStats,
    OperationResult,
    Sweet,
    SweetCandidate,
)
from .query import (
    aggregate,
    distinct_categories,
)
from .utils import (
    to_float,
    to_int,
)


logger = logging.getLogger(__name__)

_SWEET_LIST = TypeAdapter(List[Sweet])

NOT_FOUND_MESSAGE = "Sweet not found"


def seed_sweets() -> List[Sweet]:
    """Fresh copies of the sample collection used for empty or corrupt storage."""
    return [sweet.model_copy() for sweet in SEED_SWEETS]


def next_sweet_id(sweets: Iterable[Sweet]) -> int:
    """Id for a new sweet: one past the current maximum, or 1001 when empty."""
    return max((sweet.id for sweet in sweets), default=FIRST_SWEET_ID - 1) + 1


def parse_collection(payload: Union[str, bytes]) -> List[Sweet]:
    """Deserialize a persisted collection.

    Raises:
        ValueError: If the payload is not a JSON array of valid sweets with distinct ids
    """
    sweets = _SWEET_LIST.validate_json(payload)
    ids = [sweet.id for sweet in sweets]
    if len(ids) != len(set(ids)):
        raise ValueError("Duplicate sweet ids in persisted collection")
    return sweets


class SweetStorage:
    """Persistent sweet collection with CRUD and stock mutations.

    Usage:
        storage = SweetStorage(JsonFileBackend("data"))
        sweet = storage.add({"name": "Rasgulla", "category": "Milk-Based", "price": "12", "quantity": "30"})
        result = storage.purchase(sweet.id, 5)

    Failures never escape as exceptions: reads fall back to the seed dataset,
    writes report False or None, and stock mutations return an OperationResult.
    """

    def __init__(self, backend: StorageBackend, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        """Initialize the storage engine.

        Args:
            backend: Persistence medium holding the collection slot.
            storage_key: Name of the slot. Defaults to "sweetshop_inventory".
        """
        self.backend = backend
        self.storage_key = storage_key

    @classmethod
    def from_config(cls, config: SweetShopConfig) -> "SweetStorage":
        """Create a storage engine with the backend a configuration describes."""
        return cls(create_backend(config), storage_key=config.storage_key)

    # ==============================================================================
    # Persistence
    # ==============================================================================

    def load(self) -> List[Sweet]:
        """Return the persisted collection.

        Falls back to the seed dataset, and persists it, when nothing was saved
        yet or the saved data cannot be read or parsed.
        """
        try:
            payload = self.backend.get(self.storage_key)
            if payload is not None:
                return parse_collection(payload)
        except (PersistenceError, ValidationError, ValueError) as e:
            logger.error("Error loading sweets: %s", e)

        return self._seed()

    def _seed(self) -> List[Sweet]:
        sweets = seed_sweets()
        logger.info("Seeding '%s' with %d sample sweets", self.storage_key, len(sweets))
        self.save(sweets)
        return sweets

    def save(self, sweets: Iterable[Union[Sweet, Dict[str, Any]]]) -> bool:
        """Serialize and persist the whole collection in a single write.

        Returns:
            True on success, False if the collection could not be serialized or
            the backend rejected the write
        """
        try:
            collection = _SWEET_LIST.validate_python(list(sweets))
            payload = _SWEET_LIST.dump_json(collection).decode("utf-8")
            self.backend.put(self.storage_key, payload)
        except (PersistenceError, ValidationError) as e:
            logger.error("Error saving sweets: %s", e)
            return False
        return True

    def clear(self) -> bool:
        """Remove all persisted state. The next load() reseeds."""
        try:
            self.backend.delete(self.storage_key)
        except PersistenceError as e:
            logger.error("Error clearing storage: %s", e)
            return False
        return True

    # ==============================================================================
    # CRUD
    # ==============================================================================

    def add(self, candidate: Union[SweetCandidate, Dict[str, Any]]) -> Optional[Sweet]:
        """Create a sweet with the next free id and persist it.

        Price is coerced to a float and quantity to an int. Business rules are
        not checked here; run validation.validate() on raw input first.

        Returns:
            The new Sweet, or None if it could not be built or persisted
        """
        try:
            if isinstance(candidate, dict):
                candidate = SweetCandidate.model_validate(candidate)

            sweets = self.load()
            sweet = Sweet(
                id=next_sweet_id(sweets),
                name=candidate.name,
                category=candidate.category,
                price=to_float(candidate.price),
                quantity=to_int(candidate.quantity),
            )
        except (ValidationError, ValueError) as e:
            logger.error("Error adding sweet: %s", e)
            return None

        if not self.save([*sweets, sweet]):
            return None

        logger.debug("Added sweet %d (%s)", sweet.id, sweet.name)
        return sweet

    def get_by_id(self, sweet_id: int) -> Optional[Sweet]:
        """Return the sweet with the given id, or None."""
        return next((sweet for sweet in self.load() if sweet.id == sweet_id), None)

    def delete_by_id(self, sweet_id: int) -> bool:
        """Remove the sweet with the given id and persist.

        A missing id is not an error: the collection is rewritten unchanged.

        Returns:
            True if the rewrite succeeded
        """
        sweets = self.load()
        remaining = [sweet for sweet in sweets if sweet.id != sweet_id]
        if len(remaining) < len(sweets):
            logger.debug("Deleting sweet %d", sweet_id)
        return self.save(remaining)

    # ==============================================================================
    # Stock mutations
    # ==============================================================================

    def _find(self, sweets: List[Sweet], sweet_id: int) -> int:
        for index, sweet in enumerate(sweets):
            if sweet.id == sweet_id:
                return index
        raise SweetNotFoundError(sweet_id)

    def purchase(self, sweet_id: int, quantity: int) -> OperationResult:
        """Remove units from stock.

        The amount is not range-checked; callers supply a positive integer.

        Returns:
            OperationResult; fails if the sweet is missing, stock is insufficient
            or the amount is not a whole number
        """
        sweets = self.load()
        try:
            index = self._find(sweets, sweet_id)
            updated = sweets[index].decrease_quantity(quantity)
        except SweetNotFoundError:
            return OperationResult(success=False, message=NOT_FOUND_MESSAGE)
        except InsufficientStockError as e:
            return OperationResult(success=False, message=f"Insufficient stock! Only {e.available} available")
        except ValidationError as e:
            logger.error("Error processing purchase: %s", e)
            return OperationResult(success=False, message="Error processing purchase")

        sweets[index] = updated
        if not self.save(sweets):
            return OperationResult(success=False, message="Error processing purchase")

        logger.debug("Purchased %s of sweet %d, %d left", quantity, sweet_id, updated.quantity)
        return OperationResult(success=True, message=f"Purchased {quantity} {updated.name}(s)")

    def restock(self, sweet_id: int, quantity: int) -> OperationResult:
        """Add units to stock. There is no upper bound.

        A negative amount is accepted unless it would leave the stock below zero.

        Returns:
            OperationResult; fails if the sweet is missing or the amount is not a whole number
        """
        sweets = self.load()
        try:
            index = self._find(sweets, sweet_id)
        except SweetNotFoundError:
            return OperationResult(success=False, message=NOT_FOUND_MESSAGE)

        current = sweets[index]
        if current.quantity + quantity < 0:
            return OperationResult(success=False, message=f"Insufficient stock! Only {current.quantity} available")

        try:
            sweets[index] = current.increase_quantity(quantity)
        except ValidationError as e:
            logger.error("Error updating stock: %s", e)
            return OperationResult(success=False, message="Error updating stock")

        if not self.save(sweets):
            return OperationResult(success=False, message="Error updating stock")

        logger.debug("Restocked %s of sweet %d", quantity, sweet_id)
        return OperationResult(success=True, message="Stock updated successfully!")

    # ==============================================================================
    # Queries
    # ==============================================================================

    def list_categories(self) -> List[str]:
        """Distinct categories in the collection, sorted ascending and case-sensitive."""
        return distinct_categories(self.load())

    def stats(self) -> InventoryStats:
        """Aggregate statistics for the current collection."""
        return aggregate(self.load())
