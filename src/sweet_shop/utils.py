"""Shared helpers: logging setup, input coercion and display formatting."""

import logging
import math
from typing import (
    Any,
    Optional,
    Union,
)

from .models import LOW_STOCK_THRESHOLD


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "sweet_shop"


def configure_logging(name: Optional[str] = None, level: Union[str, int] = "WARNING") -> logging.Logger:
    """Configure a logger with a single stream handler.

    Calling it again for the same logger only changes the level.

    Args:
        name: Logger name. None configures the root logger.
        level: Level name (case-insensitive) or numeric level.

    Returns:
        The configured logger.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(handler.get_name() == HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def parse_number(value: Any) -> Optional[float]:
    """Coerce a form value to a float.

    Returns None for missing, blank, boolean, non-numeric or non-finite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def to_int(value: Any) -> int:
    """Coerce a form value to an int, truncating any fractional part.

    Raises:
        ValueError: If the value is not numeric or not finite
    """
    number = parse_number(value)
    if number is None:
        raise ValueError(f"Cannot convert {value!r} to an integer")
    return int(number)


def to_float(value: Any) -> float:
    """Coerce a form value to a float.

    Raises:
        ValueError: If the value is not numeric
    """
    number = parse_number(value)
    if number is None:
        raise ValueError(f"Cannot convert {value!r} to a number")
    return number


def format_currency(value: Union[int, float, str]) -> str:
    """Format a price in rupees with two decimals."""
    return f"₹{float(value):.2f}"


def stock_status(quantity: int) -> str:
    """CSS-style status class for a stock level."""
    if quantity < LOW_STOCK_THRESHOLD:
        return "stock-low"
    return "stock-ok"
