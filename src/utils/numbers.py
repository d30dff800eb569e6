"""Numeric helpers for dashboard figures."""

from decimal import ROUND_HALF_UP, Decimal


def is_number(value) -> bool:
    """True for ints and floats stored in a row; booleans do not count."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def round_half_up(value: float, places: int = 0) -> float | int:
    """Round with .5 going up, as the dashboards display it (`round` would go to even)."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)
