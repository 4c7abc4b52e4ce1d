"""
Exceptions raised by the TripLedger engine
"""
from __future__ import annotations


class TripLedgerError(Exception):
    """Base class for every error raised by TripLedger"""


class InvalidInputError(TripLedgerError, ValueError):
    """Non-positive amount, empty participant set or malformed number"""


class ValidationError(TripLedgerError, ValueError):
    """Supplied amounts do not add up to the expected total"""

    label = "Allocation"

    def __init__(self, expected: float, actual: float, message: str = ""):
        self.expected = expected
        self.actual = actual
        if not message:
            message = f"{self.label} total {actual:.2f} does not match expected {expected:.2f}"
        super().__init__(message)


class PayerMismatchError(ValidationError):
    """Payer amounts do not add up to the expense amount"""

    label = "Payers"


class SplitMismatchError(ValidationError):
    """Split amounts do not add up to the expense amount"""

    label = "Splits"


class MissingCategoryError(InvalidInputError):
    """Expense has no category tag"""


class ParticipantInUseError(TripLedgerError):
    """Participant is still referenced by an expense"""

    def __init__(self, participant_id: str):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id} is referenced by an expense and cannot be removed")
