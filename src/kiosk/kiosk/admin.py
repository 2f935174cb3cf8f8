"""Admin-facing operations on the catalog and order history.

Restocking is two-phase: `request_restock` returns what to show the
operator, `confirm_restock` applies it once they agree.
"""

import re
import unicodedata
from datetime import datetime
from decimal import Decimal

from loguru import logger

from . import stock
from .models import Item, ItemDraft, RestockRequest, StockStatus
from .store import CatalogStore, OrderLedger


def _slugify(name: str) -> str:
    ascii_name = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    return re.sub(r"[^a-z0-9]+", "_", ascii_name.lower()).strip("_") or "item"


def fresh_item_id(name: str, taken: set[str]) -> str:
    """Readable id derived from `name`, suffixed until it is unused."""
    base = _slugify(name)
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    return candidate


class AdminService:
    def __init__(self, catalog: CatalogStore, ledger: OrderLedger) -> None:
        self.catalog = catalog
        self.ledger = ledger

    def update_item(self, item: Item) -> Item:
        """Replace the catalog entry with the same id.

        `item` is re-validated first, so a record built with
        `model_construct` or `model_copy(update=...)` cannot slip in
        invalid values.
        """
        validated = Item.model_validate(item.model_dump())
        self.catalog.replace(validated)
        return validated

    def create_item(self, draft: ItemDraft) -> Item:
        item_id = fresh_item_id(draft.name, {item.item_id for item in self.catalog.items})
        item = Item(item_id=item_id, **draft.model_dump())
        self.catalog.append(item)
        return item

    def set_active(self, item_id: str, active: bool) -> Item:
        """Show or hide an item on the ordering screens."""
        item = self.catalog.get(item_id).with_changes(active=active)
        self.catalog.replace(item)
        return item

    def add_stock(self, item_id: str, delta: Decimal | int) -> Item:
        item = stock.add_stock(self.catalog.get(item_id), delta)
        self.catalog.replace(item)
        return item

    def request_restock(self, item_id: str) -> RestockRequest:
        return stock.request_restock(self.catalog.get(item_id))

    def confirm_restock(self, item_id: str, now: datetime) -> Item:
        item = stock.confirm_restock(self.catalog.get(item_id), now)
        self.catalog.replace(item)
        return item

    def stock_view(self) -> dict[str, StockStatus]:
        return stock.compute_stock_view(self.catalog.items, self.ledger.orders)

    def reset_ledger(self) -> None:
        self.ledger.clear()

    def reset_catalog(self) -> None:
        logger.warning("Restoring default catalog; stock and name edits are lost")
        self.catalog.reset()
