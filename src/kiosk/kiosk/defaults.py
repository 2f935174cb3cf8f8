"""Built-in catalog and per-size quota table.

The catalog is what a fresh install (or an admin "reset catalog") starts
from. Sizes carry the meal's base price; sides and proteins are included
in it, drinks and extras are charged separately.
"""

from collections.abc import Mapping
from decimal import Decimal

from .enums import Category
from .models import Item


def _item(
    item_id: str,
    name: str,
    category: Category,
    price: str,
    portion_size: int,
    unit: str,
    capacity: int,
    min_alert_threshold: int,
    stock_name: str | None = None,
    has_delay: bool = False,
) -> Item:
    return Item(
        item_id=item_id,
        name=name,
        category=category,
        price=Decimal(price),
        portion_size=portion_size,
        unit=unit,
        capacity=capacity,
        min_alert_threshold=min_alert_threshold,
        stock_name=stock_name,
        has_delay=has_delay,
    )


DEFAULT_CATALOG: tuple[Item, ...] = (
    # Sizes
    _item("tamanho_p", "Marmita P", Category.SIZE, "18.00", 1, "un", 50, 10, "Embalagem P (Isopor)"),
    _item("tamanho_m", "Marmita M", Category.SIZE, "22.00", 1, "un", 50, 10, "Embalagem M (Isopor)"),
    _item("tamanho_g", "Marmita G", Category.SIZE, "26.00", 1, "un", 50, 10, "Embalagem G (Isopor)"),
    # Starch sides
    _item("arroz_branco", "Arroz Branco", Category.STARCH_SIDE, "0", 200, "g", 5000, 1000, "Arroz Branco (Cozido)"),
    _item("feijao_carioca", "Feijão Carioca", Category.STARCH_SIDE, "0", 200, "g", 4000, 800, "Feijão Carioca (Caldo)"),
    _item("feijao_preto", "Feijão Preto", Category.STARCH_SIDE, "0", 200, "g", 3000, 600, "Feijão Preto (Caldo)"),
    _item("arroz_integral", "Arroz Integral", Category.STARCH_SIDE, "0", 200, "g", 2000, 500, "Arroz Integral (Cozido)"),
    # Vegetable sides
    _item("farofa", "Farofa da Casa", Category.VEGETABLE_SIDE, "0", 80, "g", 1000, 200, "Farinha/Farofa Pronta"),
    _item("fritas", "Batata Frita", Category.VEGETABLE_SIDE, "0", 120, "g", 2000, 500, "Batata Congelada (Saco)"),
    _item("salada", "Salada Mix", Category.VEGETABLE_SIDE, "0", 1, "porção", 30, 5, "Hortifruti (Mix Folhas)"),
    _item("legumes", "Legumes Vapor", Category.VEGETABLE_SIDE, "0", 100, "g", 2000, 400, "Legumes (Cenoura/Vagem)"),
    # Proteins
    _item("bife_acebolado", "Bife Acebolado", Category.PROTEIN, "0", 1, "un", 40, 5, "Carne (Contra-filé Cru)"),
    _item("frango_grelhado", "Filé de Frango", Category.PROTEIN, "0", 1, "un", 40, 5, "Peito de Frango (Cru)"),
    _item("linguica", "Linguiça Toscana", Category.PROTEIN, "0", 1, "un", 50, 10, "Linguiça Toscana (Crua)"),
    _item("omelete", "Omelete", Category.PROTEIN, "0", 1, "un", 30, 5, "Ovos (Cartela)"),
    # Drinks
    _item("coca_lata", "Coca-Cola Lata 350ml", Category.DRINK, "6.00", 1, "un", 48, 12),
    _item("guarana_lata", "Guaraná Lata 350ml", Category.DRINK, "6.00", 1, "un", 48, 12),
    _item("agua_sem_gas", "Água s/ Gás 500ml", Category.DRINK, "4.00", 1, "un", 60, 12),
    _item("suco_laranja", "Suco de Laranja 500ml", Category.DRINK, "8.00", 1, "un", 20, 5, has_delay=True),
    # Extras
    _item("embalagem_extra", "Embalagem Extra (Separada)", Category.EXTRA, "1.50", 1, "un", 100, 20),
    _item("talheres", "Talheres Descartáveis", Category.EXTRA, "0.50", 1, "kit", 1000, 100),
    _item("copo", "Copo Descartável", Category.EXTRA, "0.25", 1, "un", 1000, 100),
)

# Counter sales where the customer gave no name
DEFAULT_CUSTOMER_NAME = "Cliente Balcão"

QuotaTable = Mapping[str, Mapping[Category, int]]

DEFAULT_QUOTAS: QuotaTable = {
    "tamanho_p": {Category.STARCH_SIDE: 2, Category.VEGETABLE_SIDE: 2, Category.PROTEIN: 1},
    "tamanho_m": {Category.STARCH_SIDE: 2, Category.VEGETABLE_SIDE: 2, Category.PROTEIN: 2},
    "tamanho_g": {Category.STARCH_SIDE: 2, Category.VEGETABLE_SIDE: 2, Category.PROTEIN: 3},
}


def quota_for(quotas: QuotaTable, size_id: str, category: Category) -> int:
    """Maximum picks of `category` for a meal of size `size_id` (0 if unset)."""
    return quotas.get(size_id, {}).get(category, 0)
