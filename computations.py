"""
Business logic and computations for TripLedger
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple

from errors import InvalidInputError
from models import Expense, Transaction, Trip
from utils import EPSILON, parse_date, round2

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


def filter_expenses_by_date(
    expenses: List[Expense],
    start: Optional[date],
    end: Optional[date]
) -> List[Expense]:
    """Filter expenses by inclusive date range"""
    if not start and not end:
        return list(expenses)
    out = []
    for e in expenses:
        try:
            ed = parse_date(e.date)
        except ValueError:
            raise InvalidInputError(f"Expense {e.id} has no valid date: {e.date!r}") from None
        if start and ed < start:
            continue
        if end and ed > end:
            continue
        out.append(e)
    return out


def calculate_balances(trip: Trip) -> Dict[str, float]:
    """
    Net position of every participant: what they paid minus what they owe.
    Positive -> should receive; negative -> should pay.
    """
    balances = {p.id: 0.0 for p in trip.participants}

    for e in trip.expenses:
        for payer in e.payers:
            if payer.participant_id in balances:
                balances[payer.participant_id] += payer.amount
            else:
                logger.warning("Expense %s: payer %s is not on the trip", e.id, payer.participant_id)
        for split in e.splits:
            if split.participant_id in balances:
                balances[split.participant_id] -= split.amount
            else:
                logger.warning("Expense %s: beneficiary %s is not on the trip", e.id, split.participant_id)

    return balances


def calculate_settlement(balances: Mapping[str, float]) -> List[Transaction]:
    """
    Greedy settlement: largest debtor pays largest creditor until one side runs out.

    Ties keep the order of the balance map (the sort is stable), so the plan is
    deterministic. Balances within one cent of zero count as settled.
    """
    debtors: List[List] = []
    creditors: List[List] = []
    for pid, amount in balances.items():
        if amount < -EPSILON:
            debtors.append([pid, -amount])
        elif amount > EPSILON:
            creditors.append([pid, amount])
    debtors.sort(key=lambda x: x[1], reverse=True)
    creditors.sort(key=lambda x: x[1], reverse=True)

    transactions = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        x = round2(min(debtor[1], creditor[1]))
        transactions.append(Transaction(from_id=debtor[0], to_id=creditor[0], amount=x))
        debtor[1] -= x
        creditor[1] -= x
        if debtor[1] < EPSILON:
            i += 1
        if creditor[1] < EPSILON:
            j += 1

    logger.debug(
        "Settlement of %d debtors and %d creditors in %d transactions",
        len(debtors), len(creditors), len(transactions),
    )
    return transactions


def apply_transactions(
    balances: Mapping[str, float],
    transactions: List[Transaction]
) -> Dict[str, float]:
    """Balances after the debtors have paid: payer goes up, receiver goes down"""
    out = dict(balances)
    for t in transactions:
        out[t.from_id] = out.get(t.from_id, 0.0) + t.amount
        out[t.to_id] = out.get(t.to_id, 0.0) - t.amount
    return out


def compute_summary(
    trip: Trip,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> Dict[str, dict]:
    """
    Compute summary statistics for each participant.
    Returns dict mapping participant id -> {paid, consumed, net}
    """
    exps = filter_expenses_by_date(trip.expenses, start, end)
    paid = {p.id: 0.0 for p in trip.participants}
    consumed = {p.id: 0.0 for p in trip.participants}

    for e in exps:
        for payer in e.payers:
            if payer.participant_id in paid:
                paid[payer.participant_id] += payer.amount
        for split in e.splits:
            if split.participant_id in consumed:
                consumed[split.participant_id] += split.amount

    return {
        pid: {
            "paid": paid[pid],
            "consumed": consumed[pid],
            "net": paid[pid] - consumed[pid],
        } for pid in paid
    }


def category_totals(trip: Trip) -> List[Tuple[str, float]]:
    """Spending per category, largest first; transfers are not spending"""
    totals: Dict[str, float] = {}
    for e in trip.expenses:
        if e.is_transfer:
            continue
        tag = e.tag or UNCATEGORIZED
        totals[tag] = totals.get(tag, 0.0) + e.amount
    return sorted(totals.items(), key=lambda x: x[1], reverse=True)


def payer_totals(trip: Trip) -> Dict[str, float]:
    """Total paid by each participant, omitting those who paid nothing"""
    totals = {p.id: 0.0 for p in trip.participants}
    for e in trip.expenses:
        for payer in e.payers:
            if payer.participant_id in totals:
                totals[payer.participant_id] += payer.amount
    return {pid: v for pid, v in totals.items() if v > 0}


def total_expenses(trip: Trip) -> float:
    return sum(e.amount for e in trip.expenses)
