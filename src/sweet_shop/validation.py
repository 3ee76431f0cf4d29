"""Field rules guarding the add path.

Never used for purchase, restock or delete.
"""

from typing import (
    Any,
    Dict,
    List,
    Union,
)

from .exceptions import SweetValidationError
from .models import (
    SweetCandidate,
    ValidationResult,
)
from .utils import parse_number


NAME_REQUIRED = "Sweet name is required"
CATEGORY_REQUIRED = "Category is required"
PRICE_REQUIRED = "Valid price is required"
QUANTITY_REQUIRED = "Valid quantity is required"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_valid_amount(value: Any) -> bool:
    number = parse_number(value)
    return number is not None and number >= 0


def validate(candidate: Union[SweetCandidate, Dict[str, Any]]) -> ValidationResult:
    """Check a candidate sweet against every field rule.

    All violated rules are reported together, in field order.

    Args:
        candidate: SweetCandidate or a plain dict with name, category, price and quantity

    Returns:
        ValidationResult with is_valid and the accumulated error messages
    """
    if isinstance(candidate, dict):
        candidate = SweetCandidate.model_validate(candidate)

    errors: List[str] = []

    if _is_blank(candidate.name):
        errors.append(NAME_REQUIRED)

    if _is_blank(candidate.category):
        errors.append(CATEGORY_REQUIRED)

    if not _is_valid_amount(candidate.price):
        errors.append(PRICE_REQUIRED)

    if not _is_valid_amount(candidate.quantity):
        errors.append(QUANTITY_REQUIRED)

    return ValidationResult(is_valid=not errors, errors=errors)


def ensure_valid(candidate: Union[SweetCandidate, Dict[str, Any]]) -> SweetCandidate:
    """Validate a candidate and return it, raising on any violation.

    Raises:
        SweetValidationError: With every violated rule message
    """
    if isinstance(candidate, dict):
        candidate = SweetCandidate.model_validate(candidate)
    result = validate(candidate)
    if not result.is_valid:
        raise SweetValidationError(result.errors)
    return candidate
