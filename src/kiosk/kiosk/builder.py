"""Meal composition under size-dependent category quotas.

A meal starts IDLE; choosing a size moves it to SIZING_DONE, where category
items can be toggled within the size's quotas. Committing hands a snapshot
of the selection to the cart as a MEAL line and starts over at IDLE.
"""

import uuid

from loguru import logger

from .cart import Cart
from .defaults import DEFAULT_QUOTAS, QuotaTable, quota_for
from .enums import BuilderState, CartLineKind, Category
from .errors import EmptySelection, NoSizeSelected, NotASizeItem, QuotaExceeded
from .models import CartLine, Item


class MealBuilder:
    def __init__(self, cart: Cart, quotas: QuotaTable = DEFAULT_QUOTAS) -> None:
        self.cart = cart
        self.quotas = quotas
        self._size: Item | None = None
        self._selection: list[Item] = []

    @property
    def state(self) -> BuilderState:
        return BuilderState.IDLE if self._size is None else BuilderState.SIZING_DONE

    @property
    def size(self) -> Item | None:
        return self._size

    @property
    def selection(self) -> tuple[Item, ...]:
        """Chosen non-size items, in the order they were picked."""
        return tuple(self._selection)

    def limit_for(self, category: Category) -> int:
        if self._size is None:
            return 0
        return quota_for(self.quotas, self._size.item_id, category)

    def count_for(self, category: Category) -> int:
        return sum(1 for item in self._selection if item.category == category)

    def is_selected(self, item_id: str) -> bool:
        if self._size is not None and self._size.item_id == item_id:
            return True
        return any(item.item_id == item_id for item in self._selection)

    def select_size(self, size_item: Item) -> None:
        """Choose the meal size, dropping any picks made under another size."""
        if size_item.category is not Category.SIZE:
            raise NotASizeItem(size_item.item_id)
        if self._size is not None and self._size.item_id == size_item.item_id:
            return
        if self._selection:
            logger.debug(
                "Size changed to {}; discarding {} selected item(s)",
                size_item.item_id,
                len(self._selection),
            )
        self._size = size_item
        self._selection = []

    def toggle_category_item(self, item: Item) -> None:
        if item.category is Category.SIZE:
            self.select_size(item)
            return
        if self._size is None:
            raise NoSizeSelected()

        for index, selected in enumerate(self._selection):
            if selected.item_id == item.item_id:
                del self._selection[index]
                return

        limit = self.limit_for(item.category)
        if self.count_for(item.category) >= limit:
            logger.debug(
                "Quota reached for {} under {} (limit {})",
                item.category.value,
                self._size.item_id,
                limit,
            )
            raise QuotaExceeded(item.category, limit)
        self._selection.append(item)

    def commit_to_cart(self) -> CartLine:
        if self._size is None:
            raise NoSizeSelected()
        if not self._selection:
            raise EmptySelection()

        line = CartLine(
            line_id=uuid.uuid4().hex,
            kind=CartLineKind.MEAL,
            title=self._size.name,
            items=(self._size, *self._selection),
        )
        self.cart.add_meal(line)
        logger.info("Meal committed to cart: {} with {} item(s)", line.title, len(self._selection))
        self.reset()
        return line

    def reset(self) -> None:
        self._size = None
        self._selection = []
