"""
CSV export and import functionality for TripLedger
"""
from __future__ import annotations
import csv
from typing import List, Optional

from errors import InvalidInputError
from models import Expense, ExpenseSplit, PayerShare

HEADER = [
    "id", "date", "description", "amount", "payers", "splits",
    "tag", "original_currency", "exchange_rate", "notes",
]


def _encode_shares(shares) -> str:
    return ";".join(f"{s.participant_id}:{s.amount}" for s in shares)


def _decode_shares(text: str, cls) -> list:
    out = []
    for pair in (text or "").split(";"):
        if ":" not in pair:
            continue
        # ids may contain ':', amounts never do
        k, v = pair.rsplit(":", 1)
        out.append(cls(k.strip(), float(v.strip())))
    return out


def _optional_float(text: str) -> Optional[float]:
    text = (text or "").strip()
    return float(text) if text else None


def export_expenses_to_csv(expenses: List[Expense], filepath: str) -> None:
    """
    Export expenses list to CSV file
    payers and splits columns hold "participant_id:amount" pairs joined by ';'
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for e in expenses:
            writer.writerow([
                e.id,
                e.date,
                e.description,
                e.amount,
                _encode_shares(e.payers),
                _encode_shares(e.splits),
                e.tag,
                e.original_currency or "",
                "" if e.exchange_rate is None else e.exchange_rate,
                e.notes,
            ])


def import_expenses_from_csv(filepath: str) -> List[Expense]:
    """
    Import expenses list from CSV file
    Returns list of Expense objects
    """
    expenses = []

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for line, row in enumerate(reader, start=2):
            try:
                expense = Expense(
                    id=row['id'],
                    date=row['date'],
                    description=row['description'],
                    amount=float(row['amount']),
                    payers=_decode_shares(row['payers'], PayerShare),
                    splits=_decode_shares(row['splits'], ExpenseSplit),
                    tag=row['tag'],
                    original_currency=row.get('original_currency') or None,
                    exchange_rate=_optional_float(row.get('exchange_rate')),
                    notes=row.get('notes') or '',
                )
            except (KeyError, ValueError) as exc:
                raise InvalidInputError(f"{filepath} line {line}: {exc}") from exc
            expenses.append(expense)

    return expenses
