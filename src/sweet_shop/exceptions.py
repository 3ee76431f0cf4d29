"""Exception hierarchy for the sweet shop inventory engine."""

from typing import (
    List,
    Optional,
)


class SweetShopError(Exception):
    """Base class for all sweet shop errors."""


class SweetValidationError(SweetShopError):
    """Candidate sweet failed one or more field rules.

    Attributes:
        errors: Every violated rule message, in rule order.
    """

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid sweet")


class SweetNotFoundError(SweetShopError):
    """No sweet with the requested id exists."""

    def __init__(self, sweet_id: int) -> None:
        self.sweet_id = sweet_id
        super().__init__(f"Sweet with ID {sweet_id} not found")


class InsufficientStockError(SweetShopError):
    """A purchase asked for more units than are in stock."""

    def __init__(self, available: int, requested: int) -> None:
        self.available = available
        self.requested = requested
        super().__init__(f"Insufficient stock. Available: {available}, Requested: {requested}")


class PersistenceError(SweetShopError):
    """The storage backend failed to read, write or delete a slot."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)


class ConfigurationError(SweetShopError):
    """The configuration file could not be read or holds invalid settings."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)
