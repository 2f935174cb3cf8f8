"""Exceptions raised by the kiosk core.

Every error leaves the state it was raised from untouched, so callers can
report the reason to the operator and carry on.
"""

from decimal import Decimal

from .enums import Category


class KioskError(Exception):
    """Base class for all kiosk core errors."""


# --- Meal builder / checkout validation ---


class NoSizeSelected(KioskError):
    def __init__(self) -> None:
        super().__init__("Choose a meal size first")


class QuotaExceeded(KioskError):
    def __init__(self, category: Category, limit: int) -> None:
        self.category = category
        self.limit = limit
        super().__init__(
            f"Limit of {limit} {category.value} option(s) reached; deselect one to swap"
        )


class EmptySelection(KioskError):
    def __init__(self) -> None:
        super().__init__("The meal is empty; choose at least one item")


class NothingToCheckout(KioskError):
    def __init__(self) -> None:
        super().__init__("The cart is empty")


class NoPaymentMethodSelected(KioskError):
    def __init__(self) -> None:
        super().__init__("Choose a payment method")


class NotASizeItem(KioskError, ValueError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item {item_id!r} is not a meal size")


class CartLineNotFound(KioskError, KeyError):
    def __init__(self, line_id: str) -> None:
        self.line_id = line_id
        super().__init__(f"No cart line with id {line_id!r}")


# --- Catalog / admin ---


class ItemNotFound(KioskError, KeyError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"No catalog item with id {item_id!r}")


class InvalidStockDelta(KioskError, ValueError):
    def __init__(self, delta: Decimal | int) -> None:
        self.delta = delta
        super().__init__(f"Stock delta must be positive, got {delta}")


# --- Persistence ---


class PersistenceLoadFailure(KioskError):
    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Could not load {key!r}: {reason}")
