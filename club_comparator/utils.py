from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round like a calculator does (2.5 -> 3), not like ``round`` (2.5 -> 2)."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def fmt_int(value: float) -> str:
    """Format ``value`` with no decimals, half-up."""
    return str(round_half_up(value, 0))


def fmt_dec(value: float, places: int = 1) -> str:
    """Format ``value`` with a fixed number of decimals, half-up."""
    return str(round_half_up(value, places))


def normalize_club_name(name: Optional[str]) -> Optional[str]:
    """Trim and collapse inner whitespace; return None if empty."""
    if not name:
        return None
    n = " ".join(str(name).strip().split())
    return n or None
