"""Process-wide wiring of the kiosk core.

Usage:
    kiosk = open_kiosk()
    session = kiosk.new_session()
"""

from dataclasses import dataclass, field

from loguru import logger

from .admin import AdminService
from .config import Settings, get_settings
from .logging import setup_logging
from .defaults import DEFAULT_CATALOG, DEFAULT_QUOTAS, QuotaTable
from .models import StockStatus
from .persistence import JsonFilePersistence, PersistencePort
from .session import OrderSession
from .stock import compute_stock_view
from .store import CatalogStore, ChangeBus, OrderLedger


@dataclass
class Kiosk:
    settings: Settings
    catalog: CatalogStore
    ledger: OrderLedger
    admin: AdminService
    quotas: QuotaTable = field(default_factory=lambda: DEFAULT_QUOTAS)

    def new_session(self) -> OrderSession:
        return OrderSession(
            self.catalog,
            self.ledger,
            self.quotas,
            default_customer_name=self.settings.default_customer_name,
        )

    def stock_view(self) -> dict[str, StockStatus]:
        return compute_stock_view(self.catalog.items, self.ledger.orders)

    def close(self) -> None:
        self.catalog.close()
        self.ledger.close()


def open_kiosk(
    settings: Settings | None = None,
    persistence: PersistencePort | None = None,
    bus: ChangeBus | None = None,
    configure_logging: bool = False,
) -> Kiosk:
    """Load the catalog and ledger and wire up the admin service.

    Args:
        settings: defaults to the cached environment settings.
        persistence: defaults to JSON files under `settings.data_dir`.
        bus: shared with other kiosks in the process to keep them in sync.
        configure_logging: install the stderr and file log sinks first.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(level=settings.log_level)
    if persistence is None:
        persistence = JsonFilePersistence(settings.data_dir)

    catalog = CatalogStore(persistence, DEFAULT_CATALOG, key=settings.items_key, bus=bus)
    ledger = OrderLedger(persistence, key=settings.orders_key, bus=bus)
    logger.info(
        "Kiosk ready: {} catalog items, {} orders in history",
        len(catalog.items),
        len(ledger),
    )
    return Kiosk(
        settings=settings,
        catalog=catalog,
        ledger=ledger,
        admin=AdminService(catalog, ledger),
    )
