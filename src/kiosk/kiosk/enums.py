from enum import StrEnum


class Category(StrEnum):
    SIZE = "size"
    STARCH_SIDE = "starch-side"
    VEGETABLE_SIDE = "vegetable-side"
    PROTEIN = "protein"
    EXTRA = "extra"
    DRINK = "drink"


class PaymentMethod(StrEnum):
    CREDIT_CARD = "credit-card"
    DEBIT_CARD = "debit-card"
    PIX = "pix"
    CASH = "cash"
    MEAL_VOUCHER = "meal-voucher"


class CartLineKind(StrEnum):
    MEAL = "meal"
    EXTRA = "extra"


class BuilderState(StrEnum):
    IDLE = "idle"
    SIZING_DONE = "sizing-done"
