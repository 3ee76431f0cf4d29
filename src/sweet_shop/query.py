"""Filter, sort and aggregate functions over a snapshot of the collection.

Nothing in this module touches persistence or mutates its input.
"""

import math
import unicodedata
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Union,
)

from .models import (
    FilterCriteria,
    InventoryStats,
    SortKey,
    SortOrder,
    Sweet,
)
from .utils import parse_number


ALL_CATEGORIES = "all"


def _price_bound(value: Any, default: float) -> float:
    """Parse a filter price bound; blank or unparseable means no bound."""
    number = parse_number(value)
    return default if number is None else number


def filter_sweets(
    sweets: Iterable[Sweet], criteria: Optional[Union[FilterCriteria, Dict[str, Any]]] = None
) -> List[Sweet]:
    """Filter sweets by name, category and price range.

    A sweet is kept when all of these hold:
    - its name contains ``search_term`` ignoring case (an empty term matches everything)
    - ``category`` is "all" or empty, or equals the sweet's category exactly
    - ``min_price <= price <= max_price``; missing bounds default to 0 and infinity

    Args:
        sweets: Collection snapshot
        criteria: FilterCriteria or a dict with the same keys

    Returns:
        Matching sweets in their input order
    """
    if criteria is None:
        criteria = FilterCriteria()
    elif isinstance(criteria, dict):
        criteria = FilterCriteria.model_validate(criteria)

    term = criteria.search_term.lower()
    category = criteria.category
    min_price = _price_bound(criteria.min_price, 0.0)
    max_price = _price_bound(criteria.max_price, math.inf)

    return [
        sweet
        for sweet in sweets
        if term in sweet.name.lower()
        and (category in (ALL_CATEGORIES, "") or sweet.category == category)
        and min_price <= sweet.price <= max_price
    ]


def collation_key(text: str) -> tuple:
    """Sort key approximating locale-aware string collation.

    Compares letters ignoring accents and case first, then accents, then case
    with lowercase ahead of uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (base.casefold(), decomposed.casefold(), text.swapcase())


_SORT_KEYS: Dict[SortKey, Callable[[Sweet], Any]] = {
    SortKey.NAME: lambda sweet: collation_key(sweet.name),
    SortKey.CATEGORY: lambda sweet: collation_key(sweet.category),
    SortKey.PRICE: lambda sweet: sweet.price,
    SortKey.QUANTITY: lambda sweet: sweet.quantity,
}


def sort_sweets(
    sweets: Iterable[Sweet],
    key: Union[SortKey, str] = SortKey.NAME,
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> List[Sweet]:
    """Return a new list of sweets ordered by one field.

    The sort is stable in both directions: sweets that compare equal keep
    their relative order from the input.

    Raises:
        ValueError: If key or order is not a recognised value
    """
    sort_key = SortKey(key)
    descending = SortOrder(order) == SortOrder.DESC
    return sorted(sweets, key=_SORT_KEYS[sort_key], reverse=descending)


def calculate_total_value(sweets: Iterable[Sweet]) -> float:
    """Sum of price times quantity over the collection."""
    return sum(sweet.price * sweet.quantity for sweet in sweets)


def distinct_categories(sweets: Iterable[Sweet]) -> List[str]:
    """Distinct categories, sorted ascending and case-sensitive."""
    return sorted({sweet.category for sweet in sweets})


def low_stock_sweets(sweets: Iterable[Sweet]) -> List[Sweet]:
    """Sweets below the low-stock threshold, in collection order."""
    return [sweet for sweet in sweets if sweet.is_low_stock]


def aggregate(sweets: Iterable[Sweet]) -> InventoryStats:
    """Compute inventory statistics for a collection snapshot."""
    snapshot = list(sweets)
    return InventoryStats(
        total_items=len(snapshot),
        total_quantity=sum(sweet.quantity for sweet in snapshot),
        total_value=calculate_total_value(snapshot),
        low_stock_count=len(low_stock_sweets(snapshot)),
        category_count=len(distinct_categories(snapshot)),
    )
