"""Inventory storage and query engine for a single-location sweet shop."""

from .backends import (
    JsonFileBackend,
    MemoryBackend,
    StorageBackend,
)
from .config import (
    SweetShopConfig,
    create_backend,
    load_config,
)
from .exceptions import (
    ConfigurationError,
    InsufficientStockError,
    PersistenceError,
    SweetNotFoundError,
    SweetShopError,
    SweetValidationError,
)
from .models import (
    LOW_STOCK_THRESHOLD,
    SEED_SWEETS,
    FilterCriteria,
    InventoryStats,
    OperationResult,
    SortKey,
    SortOrder,
    Sweet,
    SweetCandidate,
    ValidationResult,
)
from .query import (
    aggregate,
    filter_sweets,
    sort_sweets,
)
from .storage import SweetStorage
from .validation import (
    ensure_valid,
    validate,
)


__all__ = [
    "ConfigurationError",
    "FilterCriteria",
    "InsufficientStockError",
    "InventoryStats",
    "JsonFileBackend",
    "LOW_STOCK_THRESHOLD",
    "MemoryBackend",
    "OperationResult",
    "PersistenceError",
    "SEED_SWEETS",
    "SortKey",
    "SortOrder",
    "StorageBackend",
    "Sweet",
    "SweetCandidate",
    "SweetNotFoundError",
    "SweetShopConfig",
    "SweetShopError",
    "SweetStorage",
    "SweetValidationError",
    "ValidationResult",
    "aggregate",
    "create_backend",
    "ensure_valid",
    "filter_sweets",
    "load_config",
    "sort_sweets",
    "validate",
]
