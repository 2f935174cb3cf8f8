from decimal import Decimal

from loguru import logger

from .enums import CartLineKind
from .errors import CartLineNotFound
from .models import CartLine, Item


def extra_line_id(item_id: str) -> str:
    return f"extra-{item_id}"


class Cart:
    """Finished meals and counted extras waiting for checkout."""

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        """Number of units in the cart, counting quantities."""
        return sum(line.quantity for line in self._lines)

    @property
    def total_value(self) -> Decimal:
        return sum((line.subtotal for line in self._lines), Decimal("0"))

    def _index(self, line_id: str) -> int:
        for index, line in enumerate(self._lines):
            if line.line_id == line_id:
                return index
        raise CartLineNotFound(line_id)

    def add_meal(self, line: CartLine) -> None:
        if line.kind is not CartLineKind.MEAL:
            raise ValueError(f"Expected a meal line, got {line.kind.value}")
        self._lines.append(line)
        logger.debug("Cart: added meal {} ({} items)", line.title, len(line.items))

    def extra_quantity(self, item_id: str) -> int:
        line_id = extra_line_id(item_id)
        return next((line.quantity for line in self._lines if line.line_id == line_id), 0)

    def adjust_extra_quantity(self, item: Item, delta: int) -> None:
        """Counter-style add/remove of a drink or extra."""
        line_id = extra_line_id(item.item_id)
        try:
            index = self._index(line_id)
        except CartLineNotFound:
            if delta > 0:
                self._lines.append(
                    CartLine(
                        line_id=line_id,
                        kind=CartLineKind.EXTRA,
                        title=item.name,
                        items=(item,),
                    )
                )
                logger.debug("Cart: added extra {}", item.item_id)
            return
        self._set_quantity(index, self._lines[index].quantity + delta)

    def adjust_line_quantity(self, line_id: str, delta: int) -> None:
        """Change a line's quantity. Meals never go below 1; extras at 0 are removed."""
        index = self._index(line_id)
        line = self._lines[index]
        new_quantity = line.quantity + delta
        if line.kind is CartLineKind.MEAL and new_quantity < 1:
            return
        self._set_quantity(index, new_quantity)

    def _set_quantity(self, index: int, quantity: int) -> None:
        line = self._lines[index]
        if quantity <= 0:
            del self._lines[index]
            logger.debug("Cart: removed {}", line.line_id)
            return
        self._lines[index] = line.with_quantity(quantity)

    def remove_line(self, line_id: str) -> None:
        del self._lines[self._index(line_id)]
        logger.debug("Cart: removed {}", line_id)

    def clear(self) -> None:
        self._lines.clear()
