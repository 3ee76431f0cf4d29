"""Data models for the sweet shop inventory."""

from enum import Enum
from typing import (
    Any,
    List,
    Optional,
    Union,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from .exceptions import InsufficientStockError


# Fixed; not configurable.
LOW_STOCK_THRESHOLD = 10

# First id handed out when the collection is empty.
FIRST_SWEET_ID = 1001


class SortKey(str, Enum):
    """Fields a sweet collection can be ordered by."""

    NAME = "name"
    CATEGORY = "category"
    PRICE = "price"
    QUANTITY = "quantity"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class Sweet(BaseModel):
    """A single inventory record.

    Instances are revalidated whenever they pass through validation.
    """

    model_config = ConfigDict(revalidate_instances="always")

    id: int = Field(..., description="Unique sweet identifier, assigned by the storage engine")
    name: str = Field(..., description="Sweet name")
    category: str = Field(..., description="Sweet category, e.g. 'Milk-Based'")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price")
    quantity: int = Field(..., ge=0, description="Units in stock")

    @field_validator("name", "category")
    @classmethod
    def require_text(cls, value: str) -> str:
        """Reject names and categories that are blank after trimming."""
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def is_low_stock(self) -> bool:
        """Check if stock is below the low-stock threshold."""
        return self.quantity < LOW_STOCK_THRESHOLD

    def decrease_quantity(self, amount: int) -> "Sweet":
        """Return a copy with ``amount`` units removed.

        Raises:
            InsufficientStockError: If ``amount`` exceeds the units in stock
            pydantic.ValidationError: If the new quantity is not a whole number >= 0
        """
        if amount > self.quantity:
            raise InsufficientStockError(available=self.quantity, requested=amount)
        return self._with_quantity(self.quantity - amount)

    def increase_quantity(self, amount: int) -> "Sweet":
        """Return a copy with ``amount`` units added.

        Raises:
            pydantic.ValidationError: If the new quantity is not a whole number >= 0
        """
        return self._with_quantity(self.quantity + amount)

    def _with_quantity(self, quantity: Any) -> "Sweet":
        return Sweet.model_validate({**self.model_dump(), "quantity": quantity})


class SweetCandidate(BaseModel):
    """Raw input for a new sweet, usually straight from a form.

    Values are left untyped; the validation engine decides whether they are usable
    and the storage engine coerces them.
    """

    name: Any = None
    category: Any = None
    price: Any = None
    quantity: Any = None


class FilterCriteria(BaseModel):
    """Filter state as supplied by the presentation layer.

    Empty strings mean "no bound" for prices and "all" for the category.
    """

    search_term: str = ""
    category: str = "all"
    min_price: Optional[Union[str, float]] = ""
    max_price: Optional[Union[str, float]] = ""


class InventoryStats(BaseModel):
    """Inventory aggregate over a collection snapshot."""

    total_items: int
    total_quantity: int
    total_value: float
    low_stock_count: int
    category_count: int


class OperationResult(BaseModel):
    """Outcome of a stock mutation."""

    success: bool
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating a candidate sweet."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)


SEED_SWEETS: List[Sweet] = [
    Sweet(id=1001, name="Kaju Katli", category="Nut-Based", price=50, quantity=20),
    Sweet(id=1002, name="Gajar Halwa", category="Vegetable-Based", price=30, quantity=15),
    Sweet(id=1003, name="Gulab Jamun", category="Milk-Based", price=10, quantity=50),
]
