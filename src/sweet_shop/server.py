"""MCP server exposing the sweet shop inventory.

Tools take raw string input the way a shop form supplies it; the server
validates and coerces it before calling the storage engine.

Run with:
    python -m sweet_shop
"""

from typing import (
    List,
    Union,
)

from mcp.server.fastmcp import FastMCP

from .config import load_config
from .models import (
    FilterCriteria,
    InventoryStats,
    OperationResult,
    Sweet,
    SweetCandidate,
)
from .query import (
    aggregate,
    filter_sweets,
    low_stock_sweets,
    sort_sweets,
)
from .storage import (
    NOT_FOUND_MESSAGE,
    SweetStorage,
)
from .utils import (
    configure_logging,
    to_int,
)
from .validation import validate


config = load_config()
configure_logging(name="sweet_shop", level=config.log_level)

storage = SweetStorage.from_config(config)

mcp = FastMCP("Sweet Shop Server")


def _mcp_level_to_python(level: str) -> str:
    """Map an MCP logging level to a Python logging level name."""
    level = level.lower()
    if level == "notice":
        return "WARNING"
    if level in ("alert", "emergency"):
        return "CRITICAL"
    return level.upper()


@mcp._mcp_server.set_logging_level()
async def set_logging_level(level: str) -> None:
    configure_logging(name="sweet_shop", level=_mcp_level_to_python(level))


# ==============================================================================
# Query Tools
# ==============================================================================


@mcp.tool(name="list_sweets")
def list_sweets_tool(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    search_term: str = "",
    category: str = "all",
    min_price: str = "",
    max_price: str = "",
    sort_by: str = "name",
    order: str = "asc",
) -> Union[List[Sweet], str]:
    """List sweets matching the filters, sorted by one field.

    Parameters:
        search_term (str): Case-insensitive substring of the sweet name (empty matches all)
        category (str): Exact category, or "all" (default)
        min_price (str): Lower price bound, empty for none
        max_price (str): Upper price bound, empty for none
        sort_by (str): One of name, category, price, quantity
        order (str): asc or desc

    Returns:
        List of Sweet objects, or an error message for an unknown sort field or order

    Example:
        list_sweets(search_term="gul", max_price="20", sort_by="price")
    """
    criteria = FilterCriteria(search_term=search_term, category=category, min_price=min_price, max_price=max_price)
    try:
        return sort_sweets(filter_sweets(storage.load(), criteria), sort_by, order)
    except ValueError:
        return f"Invalid sort '{sort_by} {order}'. Use name, category, price or quantity with asc or desc."


@mcp.tool(name="get_sweet")
def get_sweet_tool(sweet_id: int) -> Union[Sweet, str]:
    """Get a single sweet by id.

    Returns:
        Sweet object, or a not-found message
    """
    sweet = storage.get_by_id(sweet_id)
    if sweet is None:
        return NOT_FOUND_MESSAGE
    return sweet


@mcp.tool(name="list_categories")
def list_categories_tool() -> List[str]:
    """Get the distinct sweet categories, sorted alphabetically."""
    return storage.list_categories()


@mcp.tool(name="inventory_stats")
def inventory_stats_tool() -> InventoryStats:
    """Get inventory totals.

    Returns:
        InventoryStats with total_items, total_quantity, total_value,
        low_stock_count (quantity below 10) and category_count
    """
    return storage.stats()


# ==============================================================================
# Mutation Tools
# ==============================================================================


@mcp.tool(name="add_sweet")
def add_sweet_tool(name: str, category: str, price: str, quantity: str) -> Union[Sweet, str]:
    """Add a new sweet. The id is assigned automatically.

    Parameters:
        name (str): Sweet name (required)
        category (str): Category name (required)
        price (str): Unit price, a number >= 0
        quantity (str): Units in stock, a number >= 0

    Returns:
        The created Sweet, or a message listing every invalid field

    Example:
        add_sweet("Rasgulla", "Milk-Based", "12", "30")
    """
    candidate = SweetCandidate(name=name, category=category, price=price, quantity=quantity)
    result = validate(candidate)
    if not result.is_valid:
        return "Invalid sweet: " + "; ".join(result.errors)

    sweet = storage.add(candidate)
    if sweet is None:
        return "Error adding sweet"
    return sweet


@mcp.tool(name="delete_sweet")
def delete_sweet_tool(sweet_id: int) -> OperationResult:
    """Delete a sweet permanently. Deleting an unknown id succeeds and changes nothing."""
    if storage.delete_by_id(sweet_id):
        return OperationResult(success=True, message="Sweet deleted successfully!")
    return OperationResult(success=False, message="Error deleting sweet")


def _stock_amount(quantity: str) -> Union[int, OperationResult]:
    try:
        return to_int(quantity)
    except ValueError:
        return OperationResult(success=False, message="Please enter a valid quantity")


@mcp.tool(name="purchase_sweet")
def purchase_sweet_tool(sweet_id: int, quantity: str = "1") -> OperationResult:
    """Sell units of a sweet, reducing its stock.

    Fails if the sweet does not exist or fewer units are in stock than requested.
    """
    amount = _stock_amount(quantity)
    if isinstance(amount, OperationResult):
        return amount
    return storage.purchase(sweet_id, amount)


@mcp.tool(name="restock_sweet")
def restock_sweet_tool(sweet_id: int, quantity: str) -> OperationResult:
    """Add units of a sweet to stock. Fails only if the sweet does not exist."""
    amount = _stock_amount(quantity)
    if isinstance(amount, OperationResult):
        return amount
    return storage.restock(sweet_id, amount)


@mcp.tool(name="reset_inventory")
def reset_inventory_tool() -> List[Sweet]:
    """Erase the inventory and restore the sample sweets.

    Returns:
        The reseeded collection
    """
    storage.clear()
    return storage.load()


# ==============================================================================
# Resources
# ==============================================================================


@mcp.resource("sweets://inventory")
def get_inventory() -> List[Sweet]:
    """Returns the whole collection in insertion order."""
    return storage.load()


@mcp.resource("sweets://categories")
def get_categories() -> List[str]:
    """Returns the distinct categories, sorted alphabetically."""
    return storage.list_categories()


@mcp.resource("sweets://stats")
def get_stats() -> InventoryStats:
    """Returns inventory totals."""
    return aggregate(storage.load())


@mcp.resource("sweets://low-stock")
def get_low_stock() -> Union[List[Sweet], str]:
    """Returns sweets with fewer than 10 units in stock."""
    sweets = low_stock_sweets(storage.load())
    if not sweets:
        return "No sweets are low on stock."
    return sweets


def main() -> None:
    """Run the server over stdio."""
    mcp.run()


if __name__ == "__main__":
    main()
