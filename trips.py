"""
Trip editing for TripLedger

Every function returns a new Trip and leaves its argument untouched.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from config import DEFAULT_CATEGORIES
from errors import InvalidInputError, ParticipantInUseError
from models import Category, Expense, Participant, Trip
from utils import new_id

logger = logging.getLogger(__name__)


def create_trip(
    destination: str,
    trip_currency: str,
    base_currency: Optional[str] = None,
    participant_names: Optional[List[str]] = None,
    categories: Optional[List[Category]] = None,
) -> Trip:
    """Start an empty trip; base currency defaults to the trip currency"""
    if not destination or not destination.strip():
        raise InvalidInputError("Destination is required")
    if categories is None:
        categories = list(DEFAULT_CATEGORIES)
    trip = Trip(
        id=new_id(),
        destination=destination.strip(),
        base_currency=base_currency or trip_currency,
        trip_currency=trip_currency,
        categories=list(categories),
        created_at=datetime.now(timezone.utc).isoformat(),
    )
    for name in participant_names or []:
        trip = add_participant(trip, name)
    return trip


def add_participant(trip: Trip, name: str) -> Trip:
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Participant name is required")
    return replace(trip, participants=trip.participants + [Participant(new_id(), name)])


def rename_participant(trip: Trip, participant_id: str, name: str) -> Trip:
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Participant name is required")
    if participant_id not in trip.participant_ids():
        raise InvalidInputError(f"Unknown participant {participant_id}")
    people = [replace(p, name=name) if p.id == participant_id else p for p in trip.participants]
    return replace(trip, participants=people)


def participant_in_use(trip: Trip, participant_id: str) -> bool:
    """True if the participant paid for or shares any expense"""
    return any(participant_id in e.participant_ids() for e in trip.expenses)


def remove_participant(trip: Trip, participant_id: str) -> Trip:
    if participant_in_use(trip, participant_id):
        raise ParticipantInUseError(participant_id)
    return replace(trip, participants=[p for p in trip.participants if p.id != participant_id])


def participant_name(trip: Trip, participant_id: str) -> str:
    """Display name, falling back to the id for unknown participants"""
    for p in trip.participants:
        if p.id == participant_id:
            return p.name
    return participant_id


def add_expense(trip: Trip, expense: Expense) -> Trip:
    if any(e.id == expense.id for e in trip.expenses):
        raise InvalidInputError(f"Expense {expense.id} already exists")
    logger.debug("Trip %s: adding expense %s", trip.id, expense.id)
    return replace(trip, expenses=trip.expenses + [expense])


def update_expense(trip: Trip, expense: Expense) -> Trip:
    """Replace the expense with the same id"""
    if not any(e.id == expense.id for e in trip.expenses):
        raise InvalidInputError(f"Unknown expense {expense.id}")
    return replace(trip, expenses=[expense if e.id == expense.id else e for e in trip.expenses])


def remove_expense(trip: Trip, expense_id: str) -> Trip:
    return replace(trip, expenses=[e for e in trip.expenses if e.id != expense_id])
