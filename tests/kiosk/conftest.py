"""Shared pytest fixtures for kiosk tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from kiosk.builder import MealBuilder
from kiosk.cart import Cart
from kiosk.defaults import DEFAULT_CATALOG
from kiosk.enums import Category
from kiosk.models import Item
from kiosk.persistence import InMemoryPersistence
from kiosk.store import CatalogStore, OrderLedger

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def make_item(item_id: str, category: Category, **overrides) -> Item:
    fields = {
        "item_id": item_id,
        "name": item_id.replace("_", " ").title(),
        "category": category,
        "price": Decimal("0"),
        "portion_size": 1,
        "unit": "un",
        "capacity": 100,
        "min_alert_threshold": 10,
    }
    fields.update(overrides)
    return Item(**fields)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def later():
    """Return a timestamp `minutes` after NOW."""

    def _later(minutes: int) -> datetime:
        return NOW + timedelta(minutes=minutes)

    return _later


@pytest.fixture
def small() -> Item:
    return make_item("tamanho_p", Category.SIZE, name="Marmita P", price=Decimal("18.00"))


@pytest.fixture
def large() -> Item:
    return make_item("tamanho_g", Category.SIZE, name="Marmita G", price=Decimal("26.00"))


@pytest.fixture
def arroz() -> Item:
    return make_item(
        "arroz",
        Category.STARCH_SIDE,
        portion_size=200,
        unit="g",
        capacity=1000,
        min_alert_threshold=200,
    )


@pytest.fixture
def feijao() -> Item:
    return make_item("feijao", Category.STARCH_SIDE, portion_size=200, unit="g", capacity=1000)


@pytest.fixture
def frango() -> Item:
    return make_item("frango", Category.PROTEIN)


@pytest.fixture
def bife() -> Item:
    return make_item("bife", Category.PROTEIN)


@pytest.fixture
def coca() -> Item:
    return make_item("coca", Category.DRINK, price=Decimal("6.00"))


@pytest.fixture
def catalog_items(small, large, arroz, feijao, frango, bife, coca) -> tuple[Item, ...]:
    return (small, large, arroz, feijao, frango, bife, coca)


@pytest.fixture
def quotas():
    return {
        "tamanho_p": {Category.STARCH_SIDE: 2, Category.PROTEIN: 1},
        "tamanho_g": {Category.STARCH_SIDE: 2, Category.PROTEIN: 3},
    }


@pytest.fixture
def persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture
def catalog(persistence, catalog_items) -> CatalogStore:
    return CatalogStore(persistence, catalog_items)


@pytest.fixture
def ledger(persistence) -> OrderLedger:
    return OrderLedger(persistence)


@pytest.fixture
def default_catalog_store(persistence) -> CatalogStore:
    return CatalogStore(persistence, DEFAULT_CATALOG)


@pytest.fixture
def cart() -> Cart:
    return Cart()


@pytest.fixture
def builder(cart, quotas) -> MealBuilder:
    return MealBuilder(cart, quotas)
