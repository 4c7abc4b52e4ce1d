"""
Data models for TripLedger
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

TRANSFER_TAG = "Transfer"


@dataclass(frozen=True)
class Participant:
    """Person taking part in a trip"""
    id: str
    name: str


@dataclass(frozen=True)
class PayerShare:
    """Amount a participant contributed to an expense (trip currency)"""
    participant_id: str
    amount: float


@dataclass(frozen=True)
class ExpenseSplit:
    """Amount of an expense a participant owes (trip currency)"""
    participant_id: str
    amount: float


@dataclass
class Expense:
    """Single expense or transfer, stored in trip currency"""
    id: str
    description: str
    amount: float
    date: str  # YYYY-MM-DD
    payers: List[PayerShare]
    splits: List[ExpenseSplit]
    tag: str
    original_currency: Optional[str] = None
    exchange_rate: Optional[float] = None  # original amount * rate = amount
    notes: str = ""

    @property
    def is_transfer(self) -> bool:
        return self.tag == TRANSFER_TAG

    def participant_ids(self) -> List[str]:
        """Ids referenced as payer or beneficiary, in order of first appearance"""
        seen: Dict[str, None] = {}
        for p in self.payers:
            seen.setdefault(p.participant_id, None)
        for s in self.splits:
            seen.setdefault(s.participant_id, None)
        return list(seen)


@dataclass(frozen=True)
class Category:
    """Spending category shown for expense tags"""
    id: str
    name: str
    icon: str = "Zap"
    color: str = "#6B7280"


@dataclass
class Trip:
    """Complete trip containing all data"""
    id: str
    destination: str
    base_currency: str
    trip_currency: str
    participants: List[Participant] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    created_at: str = ""

    def participant_ids(self) -> List[str]:
        return [p.id for p in self.participants]


@dataclass(frozen=True)
class Transaction:
    """Settling payment from a debtor to a creditor"""
    from_id: str
    to_id: str
    amount: float


@dataclass(frozen=True)
class RebalanceResult:
    """Shares after redistributing the unlocked remainder"""
    shares: Dict[str, float]
    locked_ids: List[str]
