from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from loguru import logger

from .cart import Cart
from .defaults import DEFAULT_CUSTOMER_NAME
from .enums import PaymentMethod
from .errors import NoPaymentMethodSelected, NothingToCheckout
from .models import CartLine, Item, Order
from .store import OrderLedger


def flatten_cart(lines: Iterable[CartLine]) -> tuple[Item, ...]:
    """Repeat each line's items `quantity` times, keeping cart order."""
    return tuple(item for line in lines for _ in range(line.quantity) for item in line.items)


def commit_order(
    cart: Cart,
    customer_name: str,
    payment_method: PaymentMethod | None,
    now: datetime,
    ledger: OrderLedger,
    default_customer_name: str = DEFAULT_CUSTOMER_NAME,
) -> Order:
    """Turn the cart into a new ledger entry.

    Stock is not touched here; it is derived from the ledger on demand.
    The cart itself is left as is for the caller to clear.

    Raises:
        NothingToCheckout: the cart has no lines.
        NoPaymentMethodSelected: no payment method was chosen.
    """
    if cart.is_empty:
        raise NothingToCheckout()
    if payment_method is None:
        raise NoPaymentMethodSelected()

    line_items = flatten_cart(cart.lines)
    order = Order(
        customer_name=customer_name.strip() or default_customer_name,
        line_items=line_items,
        payment_method=payment_method,
        timestamp=now,
        total_value=sum((item.price for item in line_items), Decimal("0")),
    )
    ledger.append(order)
    logger.info(
        "Checkout complete for {} via {} ({} lines)",
        order.customer_name,
        payment_method.value,
        len(cart.lines),
    )
    return order
