"""Tests for admin operations and kiosk wiring."""

from decimal import Decimal

import pytest
from loguru import logger
from pydantic import ValidationError

from kiosk.admin import AdminService, fresh_item_id
from kiosk.app import Kiosk, open_kiosk
from kiosk.builder import MealBuilder
from kiosk.cart import Cart
from kiosk.checkout import commit_order
from kiosk.config import Settings
from kiosk.defaults import DEFAULT_CUSTOMER_NAME, DEFAULT_QUOTAS
from kiosk.enums import Category, PaymentMethod
from kiosk.errors import InvalidStockDelta, ItemNotFound
from kiosk.logging import setup_logging
from kiosk.models import ItemDraft, Order
from kiosk.persistence import InMemoryPersistence
from kiosk.store import ChangeBus


@pytest.fixture
def admin(catalog, ledger) -> AdminService:
    return AdminService(catalog, ledger)


def feijoada_draft(**overrides) -> ItemDraft:
    fields = {
        "name": "Feijoada Completa",
        "category": Category.PROTEIN,
        "price": Decimal("0"),
        "portion_size": 250,
        "unit": "g",
        "capacity": 5000,
        "min_alert_threshold": 1000,
    }
    fields.update(overrides)
    return ItemDraft(**fields)


class TestItemIds:
    """Readable ids generated for new catalog items."""

    def test_slug_strips_accents(self):
        assert fresh_item_id("Feijão Tropeiro", set()) == "feijao_tropeiro"

    def test_suffix_on_collision(self):
        taken = {"salada", "salada_2"}
        assert fresh_item_id("Salada", taken) == "salada_3"

    def test_empty_slug(self):
        assert fresh_item_id("!!!", set()) == "item"


class TestAdminService:
    """Admin edits, stock changes and bulk resets."""

    def test_create_item(self, admin, catalog):
        item = admin.create_item(feijoada_draft())
        assert item.item_id == "feijoada_completa"
        assert catalog.get("feijoada_completa") == item
        assert catalog.items[-1] == item

    def test_create_twice_gets_unique_ids(self, admin):
        first = admin.create_item(feijoada_draft())
        second = admin.create_item(feijoada_draft())
        assert first.item_id != second.item_id

    def test_invalid_draft_rejected(self):
        with pytest.raises(ValidationError):
            feijoada_draft(capacity=-5)

    def test_update_item(self, admin, catalog, arroz):
        admin.update_item(arroz.with_changes(min_alert_threshold=300))
        assert catalog.get("arroz").min_alert_threshold == 300

    def test_update_revalidates(self, admin, catalog, arroz):
        sneaky = arroz.model_copy(update={"capacity": -1})
        with pytest.raises(ValidationError):
            admin.update_item(sneaky)
        assert catalog.get("arroz") == arroz

    def test_update_unknown(self, admin, arroz):
        with pytest.raises(ItemNotFound):
            admin.update_item(arroz.with_changes(item_id="ghost"))

    def test_set_active(self, admin, catalog):
        admin.set_active("frango", False)
        assert catalog.get("frango").active is False
        assert "frango" not in {i.item_id for i in catalog.active_items()}

    def test_add_stock(self, admin, catalog):
        admin.add_stock("arroz", 250)
        assert catalog.get("arroz").capacity == 1250
        with pytest.raises(InvalidStockDelta):
            admin.add_stock("arroz", 0)
        with pytest.raises(ItemNotFound):
            admin.add_stock("ghost", 10)

    def test_two_phase_restock(self, admin, catalog, arroz, small, ledger, later):
        cart = Cart()
        builder = MealBuilder(cart)
        builder.select_size(small)
        builder.toggle_category_item(arroz)
        builder.commit_to_cart()
        commit_order(cart, "Ana", PaymentMethod.PIX, later(1), ledger)
        assert admin.stock_view()["arroz"].consumed == 200

        request = admin.request_restock("arroz")
        assert request.item_name == arroz.name
        assert catalog.get("arroz").restock_checkpoint is None

        admin.confirm_restock("arroz", later(1))
        assert admin.stock_view()["arroz"].consumed == 0
        assert len(ledger) == 1

    def test_resets(self, admin, catalog, ledger, arroz, now):
        ledger.append(
            Order(
                customer_name="Ana",
                line_items=(arroz,),
                payment_method=PaymentMethod.CASH,
                timestamp=now,
                total_value=Decimal("0"),
            )
        )
        admin.set_active("arroz", False)

        admin.reset_ledger()
        admin.reset_catalog()

        assert ledger.orders == ()
        assert catalog.get("arroz").active is True


class TestOpenKiosk:
    """Process-wide wiring of stores, admin and sessions."""

    def test_wiring_with_json_files(self, tmp_path, now):
        settings = Settings(data_dir=tmp_path, default_customer_name="Balcão")
        kiosk = open_kiosk(settings)

        assert len(kiosk.catalog.items) > 0
        session = kiosk.new_session()
        size = session.menu(Category.SIZE)[0]
        protein = session.menu(Category.PROTEIN)[0]
        session.builder.select_size(size)
        session.builder.toggle_category_item(protein)
        session.builder.commit_to_cart()
        session.payment_method = PaymentMethod.DEBIT_CARD
        order = session.finish(now)

        assert order.customer_name == "Balcão"
        assert (tmp_path / "kiosk_db_orders.json").exists()
        assert kiosk.stock_view()[protein.item_id].consumed == protein.portion_size
        kiosk.close()

    def test_kiosks_on_one_bus_stay_in_sync(self, tmp_path):
        settings = Settings(data_dir=tmp_path)
        bus = ChangeBus()
        shared = InMemoryPersistence()
        front = open_kiosk(settings, persistence=shared, bus=bus)
        back_office = open_kiosk(settings, persistence=shared, bus=bus)

        back_office.admin.add_stock("arroz_branco", 1000)
        assert front.catalog.get("arroz_branco").capacity == 6000

    def test_direct_construction_uses_default_quotas(self, tmp_path, catalog, ledger):
        kiosk = Kiosk(
            settings=Settings(data_dir=tmp_path),
            catalog=catalog,
            ledger=ledger,
            admin=AdminService(catalog, ledger),
        )
        assert kiosk.quotas == DEFAULT_QUOTAS

        session = kiosk.new_session()
        size = session.menu(Category.SIZE)[0]
        session.builder.select_size(size)
        assert session.builder.limit_for(Category.PROTEIN) > 0

    def test_settings_share_the_counter_name(self, tmp_path):
        assert Settings(data_dir=tmp_path).default_customer_name == DEFAULT_CUSTOMER_NAME


class TestLogging:
    """Loguru sink configuration."""

    def test_setup_logging_writes_file(self, tmp_path):
        setup_logging(level="INFO", log_dir=tmp_path)
        logger.info("kiosk test line")
        logger.remove()
        assert "kiosk test line" in (tmp_path / "kiosk.log").read_text(encoding="utf-8")
