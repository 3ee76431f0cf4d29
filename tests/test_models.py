"""Tests for the Sweet model and the shared helpers."""

import logging

import pytest
from pydantic import ValidationError

from sweet_shop.exceptions import InsufficientStockError
from sweet_shop.models import (
    LOW_STOCK_THRESHOLD,
    SEED_SWEETS,
    Sweet,
)
from sweet_shop.utils import (
    configure_logging,
    format_currency,
    parse_number,
    stock_status,
    to_int,
)


# ============================================================================
# Sweet Model Tests
# ============================================================================


class TestSweet:
    """Tests for the Sweet model."""

    def test_field_constraints(self) -> None:
        """Test that negative amounts and blank text are rejected."""
        with pytest.raises(ValidationError):
            Sweet(id=1, name="Barfi", category="Milk-Based", price=-1, quantity=1)
        with pytest.raises(ValidationError):
            Sweet(id=1, name="Barfi", category="Milk-Based", price=1, quantity=-1)
        with pytest.raises(ValidationError):
            Sweet(id=1, name="  ", category="Milk-Based", price=1, quantity=1)
        with pytest.raises(ValidationError):
            Sweet(id=1, name="Barfi", category="", price=1, quantity=1)

    def test_decrease_quantity_returns_copy(self) -> None:
        """Test that decreasing stock leaves the source instance untouched."""
        sweet = Sweet(id=7, name="Peda", category="Milk-Based", price=6, quantity=10)
        updated = sweet.decrease_quantity(4)

        assert updated.quantity == 6
        assert sweet.quantity == 10
        assert updated.model_dump(exclude={"quantity"}) == sweet.model_dump(exclude={"quantity"})

    def test_decrease_quantity_to_zero(self) -> None:
        """Test that the whole stock can be sold."""
        sweet = Sweet(id=7, name="Peda", category="Milk-Based", price=6, quantity=10)

        assert sweet.decrease_quantity(10).quantity == 0

    def test_non_finite_price_is_rejected(self) -> None:
        """Test that a price JSON cannot represent is refused."""
        with pytest.raises(ValidationError):
            Sweet(id=7, name="Peda", category="Milk-Based", price=float("inf"), quantity=1)

    def test_fractional_stock_change_is_rejected(self) -> None:
        """Test that stock changes must leave a whole number of units."""
        sweet = Sweet(id=7, name="Peda", category="Milk-Based", price=6, quantity=10)

        with pytest.raises(ValidationError):
            sweet.increase_quantity(2.5)  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            sweet.decrease_quantity(0.5)  # type: ignore[arg-type]
        assert sweet.quantity == 10

    def test_decrease_quantity_insufficient(self) -> None:
        """Test that overselling raises with the available amount."""
        sweet = Sweet(id=7, name="Peda", category="Milk-Based", price=6, quantity=3)

        with pytest.raises(InsufficientStockError, match="Available: 3, Requested: 4") as exc_info:
            sweet.decrease_quantity(4)

        assert exc_info.value.available == 3
        assert exc_info.value.requested == 4

    def test_increase_quantity(self) -> None:
        """Test adding stock."""
        sweet = Sweet(id=7, name="Peda", category="Milk-Based", price=6, quantity=3)

        assert sweet.increase_quantity(1000).quantity == 1003

    def test_is_low_stock(self) -> None:
        """Test the low-stock threshold boundary."""
        low = Sweet(id=1, name="A", category="C", price=1, quantity=LOW_STOCK_THRESHOLD - 1)
        ok = Sweet(id=2, name="B", category="C", price=1, quantity=LOW_STOCK_THRESHOLD)

        assert low.is_low_stock is True
        assert ok.is_low_stock is False

    def test_seed_dataset(self) -> None:
        """Test the fixed sample records."""
        assert [(s.id, s.name, s.category, s.price, s.quantity) for s in SEED_SWEETS] == [
            (1001, "Kaju Katli", "Nut-Based", 50, 20),
            (1002, "Gajar Halwa", "Vegetable-Based", 30, 15),
            (1003, "Gulab Jamun", "Milk-Based", 10, 50),
        ]


# ============================================================================
# Utility Tests
# ============================================================================


class TestCoercion:
    """Tests for parse_number() and to_int()."""

    @pytest.mark.parametrize(
        "value, expected",
        [("12.5", 12.5), (" 7 ", 7.0), (3, 3.0), (0, 0.0), ("-2", -2.0)],
    )
    def test_parse_number(self, value: object, expected: float) -> None:
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "nan", "Infinity", "-inf", "1e309", 10**400, True, [1]])
    def test_parse_number_rejects(self, value: object) -> None:
        assert parse_number(value) is None

    def test_to_int_truncates(self) -> None:
        assert to_int("2.9") == 2
        assert to_int("30") == 30
        assert to_int(4.0) == 4

    def test_to_int_rejects_non_numeric(self) -> None:
        with pytest.raises(ValueError):
            to_int("lots")
        with pytest.raises(ValueError):
            to_int("inf")


class TestFormatting:
    """Tests for display helpers."""

    def test_format_currency(self) -> None:
        assert format_currency(50) == "₹50.00"
        assert format_currency("12.5") == "₹12.50"

    def test_stock_status(self) -> None:
        assert stock_status(9) == "stock-low"
        assert stock_status(10) == "stock-ok"


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_level_and_adds_one_handler(self) -> None:
        """Test that repeated calls do not stack handlers."""
        logger = configure_logging(name="sweet_shop.test_logging", level="debug")
        configure_logging(name="sweet_shop.test_logging", level="ERROR")

        assert logger.level == logging.ERROR
        assert len(logger.handlers) == 1
        assert logger.handlers[0].get_name() == "sweet_shop"
