"""One customer's pass through the kiosk: compose meals, add extras, pay."""

from datetime import datetime

from loguru import logger

from .builder import MealBuilder
from .cart import Cart
from .checkout import commit_order
from .defaults import DEFAULT_CUSTOMER_NAME, DEFAULT_QUOTAS, QuotaTable
from .enums import Category, PaymentMethod
from .models import Item, Order
from .store import CatalogStore, OrderLedger


class OrderSession:
    def __init__(
        self,
        catalog: CatalogStore,
        ledger: OrderLedger,
        quotas: QuotaTable = DEFAULT_QUOTAS,
        default_customer_name: str = DEFAULT_CUSTOMER_NAME,
    ) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.default_customer_name = default_customer_name
        self.cart = Cart()
        self.builder = MealBuilder(self.cart, quotas)
        self.customer_name = ""
        self.payment_method: PaymentMethod | None = None

    def menu(self, category: Category) -> list[Item]:
        """Orderable items of one category (inactive items are hidden)."""
        return self.catalog.active_items(category)

    def finish(self, now: datetime) -> Order:
        """Commit the cart as an order and start over for the next customer.

        On failure the session is left exactly as it was.
        """
        order = commit_order(
            self.cart,
            self.customer_name,
            self.payment_method,
            now,
            self.ledger,
            default_customer_name=self.default_customer_name,
        )
        self.reset()
        return order

    def reset(self) -> None:
        self.cart.clear()
        self.builder.reset()
        self.customer_name = ""
        self.payment_method = None
        logger.debug("Order session reset")
