"""Order-taking kiosk core: meal composition, checkout and stock reconciliation."""

from .admin import AdminService
from .app import Kiosk, open_kiosk
from .builder import MealBuilder
from .cart import Cart
from .checkout import commit_order, flatten_cart
from .enums import BuilderState, CartLineKind, Category, PaymentMethod
from .errors import (
    CartLineNotFound,
    EmptySelection,
    InvalidStockDelta,
    ItemNotFound,
    KioskError,
    NoPaymentMethodSelected,
    NoSizeSelected,
    NotASizeItem,
    NothingToCheckout,
    PersistenceLoadFailure,
    QuotaExceeded,
)
from .models import CartLine, ChangeEvent, Item, ItemDraft, Order, RestockRequest, StockStatus
from .session import OrderSession
from .stock import add_stock, compute_stock_view, confirm_restock, request_restock
from .store import CatalogStore, ChangeBus, OrderLedger

__all__ = [
    "AdminService",
    "BuilderState",
    "Cart",
    "CartLine",
    "CartLineKind",
    "CartLineNotFound",
    "CatalogStore",
    "Category",
    "ChangeBus",
    "ChangeEvent",
    "EmptySelection",
    "InvalidStockDelta",
    "Item",
    "ItemDraft",
    "ItemNotFound",
    "Kiosk",
    "KioskError",
    "MealBuilder",
    "NoPaymentMethodSelected",
    "NoSizeSelected",
    "NotASizeItem",
    "NothingToCheckout",
    "Order",
    "OrderLedger",
    "OrderSession",
    "PaymentMethod",
    "PersistenceLoadFailure",
    "QuotaExceeded",
    "RestockRequest",
    "StockStatus",
    "add_stock",
    "commit_order",
    "compute_stock_view",
    "confirm_restock",
    "flatten_cart",
    "open_kiosk",
    "request_restock",
]
