"""Display formatting for money amounts."""

from __future__ import annotations


def fmt_money(amount: float) -> str:
    """Whole dollars with thousands separators, sign dropped: ``$6,141``."""
    return f"${abs(amount):,.0f}"


def fmt_big(amount: float) -> str:
    """Large aggregates in trillions, billions or millions: ``$2.1 trillion``."""
    value = abs(amount)
    if value >= 1e12:
        return f"${value / 1e12:.1f} trillion"
    if value >= 1e9:
        return f"${value / 1e9:.1f} billion"
    if value >= 1e6:
        return f"${value / 1e6:.1f} million"
    return fmt_money(value)


def fmt_people(count: float) -> str:
    """Headcounts in millions: ``1.3 million``."""
    millions = count / 1e6
    if millions == int(millions):
        return f"{int(millions)} million"
    return f"{millions:.1f} million"
