"""Currency helpers: amounts travel as floats on the wire and are summed as Decimal."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(value: float | int | str | Decimal) -> Decimal:
    """Convert a wire amount to Decimal without float noise (0.1 -> Decimal('0.1'))."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value: float | Decimal, symbol: str = "₵") -> str:
    """'₵0.60' style display string."""
    return f"{symbol}{quantize(to_money(value))}"


def format_delta(value: float | Decimal, symbol: str = "₵", free_label: str | None = None) -> str:
    """
    Signed display string for a price modifier: '+₵0.25', '-₵0.10'.
    When free_label is given, a zero delta renders as '+<free_label>'.
    """
    amount = quantize(to_money(value))
    if free_label is not None and amount == 0:
        return f"+{free_label}"
    if amount < 0:
        return f"-{symbol}{-amount}"
    return f"+{symbol}{amount}"
