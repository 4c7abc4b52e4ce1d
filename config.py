"""
Configuration and data conversion for TripLedger
"""
from __future__ import annotations
import json
import logging
from dataclasses import asdict
from typing import List, Optional, Union

from models import Category, Expense, ExpenseSplit, Participant, PayerShare, Trip

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = (
    Category("food", "Food", "Utensils", "#F59E0B"),
    Category("transport", "Transport", "Car", "#3B82F6"),
    Category("shopping", "Shopping", "ShoppingBag", "#EC4899"),
    Category("accommodation", "Accommodation", "Bed", "#8B5CF6"),
    Category("attractions", "Attractions", "Ticket", "#10B981"),
    Category("general", "General", "Zap", "#6B7280"),
)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Set up root logging for applications embedding the engine"""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_categories(path: str) -> List[Category]:
    """Load categories list from JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return list(DEFAULT_CATEGORIES)
    cats = [Category(**c) for c in data.get("categories", [])]
    return cats or list(DEFAULT_CATEGORIES)


def get_default_trip(categories_path: Optional[str] = None) -> Trip:
    """Create an empty trip with the configured categories"""
    cats = load_categories(categories_path) if categories_path else list(DEFAULT_CATEGORIES)
    return Trip(
        id="default",
        destination="",
        base_currency="USD",
        trip_currency="USD",
        categories=cats,
    )


def expense_to_dict(e: Expense) -> dict:
    d = {
        "id": e.id,
        "description": e.description,
        "amount": e.amount,
        "date": e.date,
        "payers": [{"participantId": p.participant_id, "amount": p.amount} for p in e.payers],
        "splits": [{"participantId": s.participant_id, "amount": s.amount} for s in e.splits],
        "tag": e.tag,
    }
    if e.original_currency is not None:
        d["originalCurrency"] = e.original_currency
    if e.exchange_rate is not None:
        d["exchangeRate"] = e.exchange_rate
    if e.notes:
        d["notes"] = e.notes
    return d


def dict_to_expense(d: dict) -> Expense:
    """
    Convert a stored expense dict to an Expense.
    Old records carry a single "paidBy" id instead of a "payers" list; they are
    rewritten as one payer covering the whole amount.
    """
    amount = float(d["amount"])
    payers = d.get("payers")
    if payers is None:
        legacy = d.get("paidBy")
        payers = [{"participantId": legacy, "amount": amount}] if legacy else []
        logger.debug("Expense %s: converted legacy paidBy", d.get("id"))

    return Expense(
        id=d["id"],
        description=d.get("description", ""),
        amount=amount,
        date=d.get("date", ""),
        payers=[PayerShare(p["participantId"], float(p["amount"])) for p in payers],
        splits=[ExpenseSplit(s["participantId"], float(s["amount"])) for s in d.get("splits", [])],
        tag=d.get("tag", ""),
        original_currency=d.get("originalCurrency"),
        exchange_rate=d.get("exchangeRate"),
        notes=d.get("notes", ""),
    )


def trip_to_dict(trip: Trip) -> dict:
    """Convert Trip object to dictionary for JSON serialization"""
    return {
        "id": trip.id,
        "destination": trip.destination,
        "baseCurrency": trip.base_currency,
        "tripCurrency": trip.trip_currency,
        "participants": [asdict(p) for p in trip.participants],
        "expenses": [expense_to_dict(e) for e in trip.expenses],
        "categories": [asdict(c) for c in trip.categories],
        "createdAt": trip.created_at,
    }


def dict_to_trip(d: dict) -> Trip:
    """Convert dictionary from JSON to Trip object"""
    cats = [Category(**c) for c in d.get("categories", [])] or list(DEFAULT_CATEGORIES)
    return Trip(
        id=d["id"],
        destination=d.get("destination", ""),
        base_currency=d.get("baseCurrency", ""),
        trip_currency=d.get("tripCurrency", ""),
        participants=[Participant(p["id"], p["name"]) for p in d.get("participants", [])],
        expenses=[dict_to_expense(e) for e in d.get("expenses", [])],
        categories=cats,
        created_at=d.get("createdAt", ""),
    )
