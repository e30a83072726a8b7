from decimal import Decimal, ROUND_HALF_UP


MONEY_QUANT = Decimal("0.01")
PCT_QUANT = Decimal("0.000001")
UNIT_QUANT = Decimal("1")
HUNDRED = Decimal("100")


def money(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def pct(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(PCT_QUANT, rounding=ROUND_HALF_UP)


def whole(value: Decimal | int | float | str) -> Decimal:
    return Decimal(str(value)).quantize(UNIT_QUANT, rounding=ROUND_HALF_UP)


def safe_pct(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return pct(0)
    return pct((numerator / denominator) * HUNDRED)
