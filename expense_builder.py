"""
Building validated expense records for TripLedger
"""
from __future__ import annotations
import logging
from typing import Collection, Dict, Mapping, Optional

from errors import InvalidInputError, MissingCategoryError, PayerMismatchError, SplitMismatchError
from models import TRANSFER_TAG, Expense, ExpenseSplit, PayerShare
from utils import new_id, parse_amount, parse_date, parse_positive, today_str, within_epsilon

logger = logging.getLogger(__name__)


def _check_date(d: Optional[str]) -> str:
    if not d:
        return today_str()
    try:
        return parse_date(d).isoformat()
    except (AttributeError, ValueError):
        raise InvalidInputError(f"Date must be YYYY-MM-DD, got {d!r}") from None


def _check_members(ids, participant_ids: Optional[Collection[str]], role: str) -> None:
    if participant_ids is None:
        return
    unknown = [pid for pid in ids if pid not in participant_ids]
    if unknown:
        raise InvalidInputError(f"Unknown {role}: {', '.join(map(str, unknown))}")


def build_expense(
    description: str,
    amount: float,
    splits: Mapping[str, float],
    tag: Optional[str],
    payer: Optional[str] = None,
    payer_amounts: Optional[Mapping[str, float]] = None,
    exchange_rate: float = 1.0,
    original_currency: Optional[str] = None,
    date: Optional[str] = None,
    notes: Optional[str] = None,
    expense_id: Optional[str] = None,
    participant_ids: Optional[Collection[str]] = None,
) -> Expense:
    """
    Validate entry-form values and produce an Expense in trip currency.

    amount, payer_amounts and splits are in the entry currency; every value is
    multiplied by exchange_rate. Give either payer (pays everything) or
    payer_amounts (several payers). Pass expense_id when editing to keep the
    record's identity, and participant_ids to reject ids outside the trip.
    Nothing is built unless every check passes.
    """
    description = (description or "").strip()
    if not description:
        raise InvalidInputError("Description is required")
    entry_amount = parse_positive(amount, "amount")
    rate = parse_positive(exchange_rate, "exchange rate")
    if not tag or not str(tag).strip():
        raise MissingCategoryError("A category must be selected")
    date = _check_date(date)
    trip_amount = entry_amount * rate

    if (payer is None) == (payer_amounts is None):
        raise InvalidInputError("Give either a single payer or payer amounts")
    if payer is not None:
        if not str(payer).strip():
            raise InvalidInputError("Payer is required")
        _check_members([payer], participant_ids, "payer")
        payers = [PayerShare(payer, trip_amount)]
    else:
        paid: Dict[str, float] = {}
        for pid, v in payer_amounts.items():
            val = parse_amount(v, f"amount paid by {pid}")
            if val > 0:
                paid[pid] = val
        total_paid = sum(paid.values())
        if not paid or not within_epsilon(total_paid, entry_amount):
            raise PayerMismatchError(entry_amount, total_paid)
        _check_members(paid, participant_ids, "payer")
        payers = [PayerShare(pid, val * rate) for pid, val in paid.items()]

    if not splits:
        raise InvalidInputError("At least one participant must share the expense")
    shares = {pid: parse_amount(v, f"share of {pid}") for pid, v in splits.items()}
    total_split = sum(shares.values())
    if not within_epsilon(total_split, entry_amount):
        raise SplitMismatchError(entry_amount, total_split)
    _check_members(shares, participant_ids, "beneficiary")

    expense = Expense(
        id=expense_id or new_id(),
        description=description,
        amount=trip_amount,
        date=date,
        payers=payers,
        splits=[ExpenseSplit(pid, val * rate) for pid, val in shares.items()],
        tag=str(tag).strip(),
        original_currency=original_currency,
        exchange_rate=rate,
        notes=(notes or "").strip(),
    )
    logger.debug("Built expense %s: %.2f %s", expense.id, expense.amount, expense.tag)
    return expense


def build_transfer(
    sender_id: str,
    receiver_id: str,
    amount: float,
    exchange_rate: float = 1.0,
    original_currency: Optional[str] = None,
    date: Optional[str] = None,
    description: Optional[str] = None,
    participant_ids: Optional[Collection[str]] = None,
) -> Expense:
    """Record money handed directly from sender to receiver"""
    if not sender_id or not receiver_id:
        raise InvalidInputError("Both sender and receiver are required")
    if sender_id == receiver_id:
        raise InvalidInputError("Cannot transfer money to yourself")
    entry_amount = parse_positive(amount, "amount")
    return build_expense(
        description=description or f"Transfer from {sender_id} to {receiver_id}",
        amount=entry_amount,
        splits={receiver_id: entry_amount},
        tag=TRANSFER_TAG,
        payer=sender_id,
        exchange_rate=exchange_rate,
        original_currency=original_currency,
        date=date,
        participant_ids=participant_ids,
    )
