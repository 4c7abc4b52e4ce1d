"""
Splitting an expense total among participants for TripLedger
"""
from __future__ import annotations
import logging
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from errors import InvalidInputError, ValidationError
from models import RebalanceResult
from utils import CENT, floor2, parse_amount, parse_positive, to_decimal, within_epsilon

logger = logging.getLogger(__name__)


class SplitType(Enum):
    """Types of expense splits"""
    EQUAL = "EQUAL"
    EXACT = "EXACT"
    PERCENTAGE = "PERCENTAGE"


def _require_ids(participant_ids: Iterable[str]) -> List[str]:
    ids = list(participant_ids)
    if not ids:
        raise InvalidInputError("At least one participant is required")
    if len(set(ids)) != len(ids):
        raise InvalidInputError(f"Duplicate participant in {ids}")
    return ids


def _split_evenly(total: Decimal, ids: List[str]) -> Dict[str, float]:
    """
    Floor the per-head share to cents and hand the leftover to ids[0].
    Works for zero and negative totals too.
    """
    count = len(ids)
    base = floor2(total / count)
    remainder = (total - base * count).quantize(CENT, rounding=ROUND_HALF_UP)
    out = {i: float(base) for i in ids}
    out[ids[0]] = float(base + remainder)
    return out


def allocate_equal(total: float, participant_ids: Sequence[str]) -> Dict[str, float]:
    """
    Divide total equally. Every share is the per-head amount floored to cents,
    except the first participant who also takes the rounding remainder, so the
    shares add up to total exactly.
    """
    amount = parse_positive(total, "total")
    ids = _require_ids(participant_ids)
    out = _split_evenly(to_decimal(amount), ids)
    logger.debug("Equal split of %.2f among %d: %s", amount, len(ids), out)
    return out


def allocate_exact(total: float, amounts: Mapping[str, float]) -> Dict[str, float]:
    """Take caller-supplied amounts as they are, after checking they add up to total"""
    expected = parse_positive(total, "total")
    _require_ids(amounts)
    out = {pid: parse_amount(v, f"amount for {pid}") for pid, v in amounts.items()}
    actual = sum(out.values())
    if not within_epsilon(actual, expected):
        raise ValidationError(expected, actual)
    return out


def allocate_percentage(total: float, percents: Mapping[str, float]) -> Dict[str, float]:
    """
    Convert percentages of total into amounts. Percentages must add up to 100;
    amounts are rounded to cents with any residue given to the first participant.
    """
    amount = parse_positive(total, "total")
    ids = _require_ids(percents)
    pct = {pid: parse_amount(percents[pid], f"percentage for {pid}") for pid in ids}
    pct_sum = sum(pct.values())
    if not within_epsilon(pct_sum, 100.0):
        raise ValidationError(100.0, pct_sum, f"Percentages add up to {pct_sum:.2f}, expected 100")

    dec_total = to_decimal(amount)
    shares = {
        pid: (to_decimal(p) * dec_total / 100).quantize(CENT, rounding=ROUND_HALF_UP)
        for pid, p in pct.items()
    }
    shares[ids[0]] += dec_total - sum(shares.values(), Decimal("0"))
    out = {pid: float(v) for pid, v in shares.items()}
    logger.debug("Percentage split of %.2f: %s", amount, out)
    return out


def allocate(
    split_type: SplitType,
    total: float,
    participant_ids: Optional[Sequence[str]] = None,
    values: Optional[Mapping[str, float]] = None,
) -> Dict[str, float]:
    """Dispatch to the allocation policy for split_type"""
    if split_type is SplitType.EQUAL:
        if participant_ids is None:
            participant_ids = list(values or {})
        return allocate_equal(total, participant_ids)
    if values is None:
        raise InvalidInputError(f"{split_type.value} split needs per-participant values")
    if split_type is SplitType.EXACT:
        return allocate_exact(total, values)
    if split_type is SplitType.PERCENTAGE:
        return allocate_percentage(total, values)
    raise InvalidInputError(f"Unknown split type {split_type!r}")


def distribute_remaining(
    total: float,
    current_shares: Mapping[str, float],
    locked_ids: Sequence[str],
    selected_ids: Sequence[str],
) -> RebalanceResult:
    """
    Recompute the shares of participants the user has not fixed by hand.

    Locked participants keep their current value; what is left of total is
    split equally among the others in selected order. When every selected
    participant is locked, the one locked first is released so there is always
    somebody to absorb the difference. The caller keeps the returned
    locked_ids for the next call.
    """
    amount = parse_positive(total, "total")
    selected = _require_ids(selected_ids)

    locked: List[str] = []
    for pid in locked_ids:
        if pid in selected and pid not in locked:
            locked.append(pid)
    if len(locked) >= len(selected):
        released = locked.pop(0)
        logger.debug("All participants locked, releasing %s", released)

    fixed = {pid: to_decimal(parse_amount(current_shares.get(pid, 0.0), f"share for {pid}")) for pid in locked}
    remaining = to_decimal(amount) - sum(fixed.values(), Decimal("0"))
    auto = [pid for pid in selected if pid not in fixed]
    computed = _split_evenly(remaining, auto)

    shares = {pid: float(fixed[pid]) if pid in fixed else computed[pid] for pid in selected}
    return RebalanceResult(shares=shares, locked_ids=locked)
