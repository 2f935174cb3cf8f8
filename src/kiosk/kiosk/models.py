import uuid
from decimal import Decimal
from typing import Any, Self

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, TypeAdapter

from .enums import CartLineKind, Category, PaymentMethod


class ItemDraft(BaseModel):
    """Catalog entry fields as typed in by an admin, before an id is assigned."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    category: Category
    price: Decimal = Field(default=Decimal("0"), ge=0)
    portion_size: Decimal = Field(gt=0)
    unit: str
    capacity: Decimal = Field(ge=0)
    min_alert_threshold: Decimal = Field(default=Decimal("0"), ge=0)
    active: bool = True
    restock_checkpoint: AwareDatetime | None = None
    has_delay: bool = False
    stock_name: str | None = None


class Item(ItemDraft):
    item_id: str = Field(min_length=1)

    def with_changes(self, **changes: Any) -> Self:
        """Return a re-validated copy with `changes` applied.

        Unlike `model_copy(update=...)`, invalid values (negative capacity,
        zero portion size, ...) raise `pydantic.ValidationError`.
        """
        return type(self).model_validate({**self.model_dump(), **changes})

    def __hash__(self) -> int:
        return hash(self.item_id)


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    customer_name: str
    line_items: tuple[Item, ...]
    payment_method: PaymentMethod
    timestamp: AwareDatetime
    total_value: Decimal = Field(ge=0)


class CartLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_id: str
    kind: CartLineKind
    title: str
    items: tuple[Item, ...] = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)

    @property
    def unit_price(self) -> Decimal:
        return sum((item.price for item in self.items), Decimal("0"))

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return CartLine(
            line_id=self.line_id,
            kind=self.kind,
            title=self.title,
            items=self.items,
            quantity=quantity,
        )


class StockStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    consumed: Decimal
    remaining: Decimal
    percentage_remaining: float
    low_stock: bool
    critical: bool


class RestockRequest(BaseModel):
    """First phase of a restock: what the operator is asked to confirm."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    item_name: str
    description: str


class ChangeEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str


ItemList = TypeAdapter(list[Item])
OrderList = TypeAdapter(list[Order])
