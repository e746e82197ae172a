from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")


def parse_money(value) -> Decimal:
    if value is None:
        raise ValueError("missing money value")

    if isinstance(value, Decimal):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    if isinstance(value, (int, float)):
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

    normalized = value.strip()
    if not normalized:
        raise ValueError("empty money value")

    is_negative = normalized.startswith("(") and normalized.endswith(")")
    normalized = normalized.replace("$", "").replace(",", "")

    if is_negative:
        normalized = normalized[1:-1]

    try:
        amount = Decimal(normalized).quantize(
            CENTS,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    return -amount if is_negative else amount


def format_delta(amount: Decimal, is_earning: bool, label: str) -> str:
    """Render a signed cash-flow line, e.g. ``"+$50.00: Paycheck"``."""
    sign = "+" if is_earning else "-"
    return f"{sign}${abs(amount):.2f}: {label}"
