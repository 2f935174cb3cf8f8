"""Stock reconciliation: remaining stock derived from the order history.

Nothing here keeps a running counter. Remaining stock is always recomputed
from the catalog and the full ledger, so the two can never drift apart.
Restocking moves an item's checkpoint forward instead of deleting history.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from loguru import logger

from .errors import InvalidStockDelta
from .models import Item, Order, RestockRequest, StockStatus

# Smallest datetime step; a restock checkpoint lands strictly after "now".
RESTOCK_EPSILON = timedelta(microseconds=1)


def _counts_towards(order: Order, item: Item) -> bool:
    checkpoint = item.restock_checkpoint
    return checkpoint is None or order.timestamp > checkpoint


def _status(item: Item, consumed: Decimal) -> StockStatus:
    remaining = max(Decimal("0"), item.capacity - consumed)
    if item.capacity == 0:
        percentage = 0.0
    else:
        percentage = min(100.0, max(0.0, float(remaining / item.capacity * 100)))
    return StockStatus(
        item_id=item.item_id,
        consumed=consumed,
        remaining=remaining,
        percentage_remaining=percentage,
        low_stock=remaining <= item.min_alert_threshold,
        critical=remaining == 0,
    )


def compute_stock_view(
    items: Iterable[Item], orders: Iterable[Order]
) -> dict[str, StockStatus]:
    """Compute consumption and remaining stock for every catalog item.

    Only orders placed strictly after an item's restock checkpoint count
    against it. Line items whose id is no longer in the catalog are ignored.
    Each occurrence consumes the portion size recorded in the order's own
    snapshot, not the current catalog value.

    Returns:
        Mapping of item_id -> StockStatus, in catalog order.
    """
    catalog = {item.item_id: item for item in items}
    consumed = dict.fromkeys(catalog, Decimal("0"))

    for order in orders:
        for snapshot in order.line_items:
            item = catalog.get(snapshot.item_id)
            if item is None:
                continue
            if _counts_towards(order, item):
                consumed[item.item_id] += snapshot.portion_size

    return {
        item_id: _status(item, consumed[item_id]) for item_id, item in catalog.items()
    }


def low_stock_items(items: Iterable[Item], orders: Iterable[Order]) -> list[Item]:
    """Active items at or below their alert threshold."""
    items = list(items)
    view = compute_stock_view(items, orders)
    return [item for item in items if item.active and view[item.item_id].low_stock]


def format_quantity(value: Decimal | int, unit: str) -> str:
    """Render a stock quantity for display, e.g. `200g`, `1.5kg`, `12un`."""
    value = Decimal(value)
    if unit == "g" and value >= 1000:
        return f"{value / 1000:.1f}kg"
    if value == value.to_integral_value():
        return f"{int(value)}{unit}"
    return f"{value.normalize()}{unit}"


def request_restock(item: Item) -> RestockRequest:
    """Describe a restock so the operator can confirm it. Mutates nothing."""
    return RestockRequest(
        item_id=item.item_id,
        item_name=item.name,
        description=(
            f"Confirm restock of {item.name}? Stock returns to "
            f"{format_quantity(item.capacity, item.unit)} (100%)."
        ),
    )


def confirm_restock(item: Item, now: datetime) -> Item:
    """Restart the item's consumption counter at `now`.

    The checkpoint is placed one tick after `now`, so an order stamped with
    the very same instant is excluded from the new counter. Capacity is
    left as is.
    """
    if now.tzinfo is None:
        raise ValueError("confirm_restock needs a timezone-aware datetime")
    restocked = item.with_changes(restock_checkpoint=now + RESTOCK_EPSILON)
    logger.info("Restock confirmed for {} at {}", item.item_id, now.isoformat())
    return restocked


def add_stock(item: Item, delta: Decimal | int) -> Item:
    """Raise the item's capacity by `delta`; the checkpoint is untouched."""
    if delta <= 0:
        raise InvalidStockDelta(delta)
    updated = item.with_changes(capacity=item.capacity + delta)
    logger.info(
        "Stock added to {}: +{} (capacity {} -> {})",
        item.item_id,
        delta,
        item.capacity,
        updated.capacity,
    )
    return updated
