"""Catalog Store and Order Ledger.

Both hold their whole collection in memory as an immutable tuple, write the
full collection through the persistence port after every mutation, and
announce it on an optional `ChangeBus` so other sessions can replace their
copy wholesale (last writer wins, no merging).
"""

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .enums import Category
from .errors import ItemNotFound, PersistenceLoadFailure
from .models import ChangeEvent, Item, ItemList, Order, OrderList
from .persistence import PersistencePort

T = TypeVar("T")

Listener = Callable[[ChangeEvent, object], None]


class ChangeBus:
    """Best-effort fan-out of collection snapshots between sessions."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: ChangeEvent, origin: object = None) -> None:
        for listener in list(self._listeners):
            listener(event, origin)


class _SnapshotStore(Generic[T]):
    def __init__(
        self,
        key: str,
        adapter: TypeAdapter,
        persistence: PersistencePort,
        defaults: tuple[T, ...],
        bus: ChangeBus | None = None,
    ) -> None:
        self.key = key
        self._adapter = adapter
        self._persistence = persistence
        self._defaults = defaults
        self._bus = bus
        self._records: tuple[T, ...] = self._load()
        self._unsubscribe = bus.subscribe(self._on_change) if bus else None

    def _load(self) -> tuple[T, ...]:
        try:
            raw = self._persistence.load(self.key)
            if raw is None:
                logger.info("No stored {} record, starting from defaults", self.key)
                return self._defaults
            try:
                records = self._adapter.validate_json(raw)
            except ValidationError as exc:
                raise PersistenceLoadFailure(
                    self.key, f"{exc.error_count()} validation error(s)"
                ) from exc
        except PersistenceLoadFailure as exc:
            logger.warning("{} - falling back to defaults", exc)
            return self._defaults
        logger.info("Loaded {} ({} records)", self.key, len(records))
        return tuple(records)

    def _commit(self, records: Iterable[T]) -> None:
        self._records = tuple(records)
        value = self._adapter.dump_json(list(self._records)).decode("utf-8")
        try:
            self._persistence.save(self.key, value)
        except OSError:
            logger.exception("Failed to save {}; keeping in-memory state", self.key)
        if self._bus is not None:
            self._bus.publish(ChangeEvent(key=self.key, value=value), origin=self)

    def _on_change(self, event: ChangeEvent, origin: object) -> None:
        if origin is self or event.key != self.key:
            return
        self.apply_change(event)

    def apply_change(self, event: ChangeEvent) -> None:
        """Replace the whole collection with the snapshot carried by `event`."""
        try:
            records = self._adapter.validate_json(event.value)
        except ValidationError:
            logger.warning("Ignoring malformed {} change event", event.key)
            return
        self._records = tuple(records)
        logger.info("Replaced {} from another session ({} records)", self.key, len(self._records))

    def close(self) -> None:
        """Stop listening to other sessions."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class CatalogStore(_SnapshotStore[Item]):
    def __init__(
        self,
        persistence: PersistencePort,
        defaults: Iterable[Item],
        key: str = "kiosk_db_items",
        bus: ChangeBus | None = None,
    ) -> None:
        super().__init__(key, ItemList, persistence, tuple(defaults), bus)

    @property
    def items(self) -> tuple[Item, ...]:
        return self._records

    def find(self, item_id: str) -> Item | None:
        return next((item for item in self._records if item.item_id == item_id), None)

    def get(self, item_id: str) -> Item:
        item = self.find(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return item

    def active_items(self, category: Category | None = None) -> list[Item]:
        """Items visible for ordering, optionally limited to one category."""
        return [
            item
            for item in self._records
            if item.active and (category is None or item.category == category)
        ]

    def replace(self, item: Item) -> None:
        if self.find(item.item_id) is None:
            raise ItemNotFound(item.item_id)
        self._commit(item if i.item_id == item.item_id else i for i in self._records)
        logger.info("Catalog item updated: {}", item.item_id)

    def append(self, item: Item) -> None:
        if self.find(item.item_id) is not None:
            raise ValueError(f"Catalog already has an item with id {item.item_id!r}")
        self._commit((*self._records, item))
        logger.info("Catalog item created: {}", item.item_id)

    def reset(self) -> None:
        self._commit(self._defaults)
        logger.info("Catalog reset to defaults ({} items)", len(self._defaults))


class OrderLedger(_SnapshotStore[Order]):
    """Append-only order history, most recent first."""

    def __init__(
        self,
        persistence: PersistencePort,
        key: str = "kiosk_db_orders",
        bus: ChangeBus | None = None,
    ) -> None:
        super().__init__(key, OrderList, persistence, (), bus)

    @property
    def orders(self) -> tuple[Order, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def append(self, order: Order) -> None:
        self._commit((order, *self._records))
        logger.info(
            "Order {} recorded: {} items, total {}",
            order.order_id,
            len(order.line_items),
            order.total_value,
        )

    def clear(self) -> None:
        count = len(self._records)
        self._commit(())
        logger.warning("Order history cleared ({} orders removed)", count)
