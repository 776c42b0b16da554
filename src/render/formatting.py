"""Korean won display helpers used by the renderers and MCP tools."""

import math

EOK = 100_000_000  # 억
MAN = 10_000       # 만


def _round_half_up(value: float) -> int:
    return int(math.floor(abs(value) + 0.5))


def format_currency(value: float) -> str:
    """Full won amount with separators and no decimals, e.g. '₩150,000,000'."""
    sign = '-' if value < 0 and _round_half_up(value) != 0 else ''
    return f"{sign}₩{_round_half_up(value):,}"


def format_currency_short(value: float) -> str:
    """Abbreviated won amount: '1.5억', '3,750만' or '2,500원'."""
    sign = '-' if value < 0 else ''
    magnitude = abs(value)
    if magnitude >= EOK:
        return f"{sign}{magnitude / EOK:.1f}억"
    if magnitude >= MAN:
        return f"{sign}{_round_half_up(magnitude / MAN):,}만"
    return f"{sign}{_round_half_up(magnitude):,}원"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"


def format_signed_percent(value: float, decimals: int = 0) -> str:
    """Percent with an explicit '+' for positive changes, as in the price scenario table."""
    prefix = '+' if value > 0 else ''
    return f"{prefix}{format_percent(value, decimals)}"
