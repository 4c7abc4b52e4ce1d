"""
Utility functions for TripLedger
"""
from __future__ import annotations
import math
import uuid
from datetime import date, datetime
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from errors import InvalidInputError

EPSILON = 0.01
CENT = Decimal("0.01")


def today_str() -> str:
    """Get today's date as ISO string"""
    return date.today().isoformat()


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string, also accepting a full ISO timestamp"""
    return datetime.strptime(s.strip()[:10], "%Y-%m-%d").date()


def new_id() -> str:
    return str(uuid.uuid4())


def parse_amount(x, field: str = "amount") -> float:
    """Convert a number or numeric string to float, rejecting anything else"""
    if isinstance(x, bool):
        raise InvalidInputError(f"{field} must be a number, got {x!r}")
    if isinstance(x, str):
        x = x.strip()
    try:
        value = float(x)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field} must be a number, got {x!r}") from None
    if not math.isfinite(value):
        raise InvalidInputError(f"{field} must be finite, got {x!r}")
    return value


def parse_positive(x, field: str = "amount") -> float:
    value = parse_amount(x, field)
    if value <= 0:
        raise InvalidInputError(f"{field} must be positive, got {value}")
    return value


def to_decimal(x: float) -> Decimal:
    # str() keeps the shortest repr, so 0.1 stays 0.1 rather than its binary expansion
    return Decimal(str(x))


def round2(x: float) -> float:
    """Round half-up to cents"""
    return float(to_decimal(x).quantize(CENT, rounding=ROUND_HALF_UP))


def floor2(x: Decimal) -> Decimal:
    """Truncate toward negative infinity at cents"""
    return x.quantize(CENT, rounding=ROUND_FLOOR)


def within_epsilon(a: float, b: float, eps: float = EPSILON) -> bool:
    """True when two amounts differ by no more than eps"""
    # rounding guards against 0.01000000000002 style float noise at the boundary
    return round(abs(a - b), 9) <= eps
