import pytest

from config import DEFAULT_CATEGORIES
from errors import InvalidInputError, ParticipantInUseError
from expense_builder import build_expense
from trips import (
    add_expense,
    add_participant,
    create_trip,
    participant_in_use,
    participant_name,
    remove_expense,
    remove_participant,
    rename_participant,
    update_expense,
)


@pytest.fixture
def trip():
    return create_trip("Tokyo", "JPY", base_currency="USD", participant_names=["Alice", "Bob", "Carol"])


def ids(trip):
    return [p.id for p in trip.participants]


def test_create_trip(trip):
    assert trip.destination == "Tokyo"
    assert trip.trip_currency == "JPY"
    assert trip.base_currency == "USD"
    assert [p.name for p in trip.participants] == ["Alice", "Bob", "Carol"]
    assert len(set(ids(trip))) == 3
    assert trip.categories == list(DEFAULT_CATEGORIES)
    assert trip.expenses == []


def test_create_trip_requires_destination():
    with pytest.raises(InvalidInputError):
        create_trip(" ", "EUR")


def test_add_participant_returns_new_trip(trip):
    bigger = add_participant(trip, " Dave ")
    assert [p.name for p in bigger.participants][-1] == "Dave"
    assert len(trip.participants) == 3
    with pytest.raises(InvalidInputError):
        add_participant(trip, "")


def test_rename_participant(trip):
    alice = ids(trip)[0]
    renamed = rename_participant(trip, alice, "Alicia")
    assert participant_name(renamed, alice) == "Alicia"
    assert participant_name(trip, alice) == "Alice"
    with pytest.raises(InvalidInputError):
        rename_participant(trip, "nobody", "X")


def test_participant_name_falls_back_to_id(trip):
    assert participant_name(trip, "nobody") == "nobody"


def test_cannot_remove_participant_with_expenses(trip):
    alice, bob, carol = ids(trip)
    e = build_expense("Sushi", 60, splits={alice: 30, bob: 30}, tag="Food", payer=alice)
    trip = add_expense(trip, e)
    assert participant_in_use(trip, bob)
    assert not participant_in_use(trip, carol)
    with pytest.raises(ParticipantInUseError) as exc:
        remove_participant(trip, bob)
    assert exc.value.participant_id == bob
    assert ids(remove_participant(trip, carol)) == [alice, bob]


def test_expense_edits(trip):
    alice, bob, _ = ids(trip)
    e = build_expense("Train", 40, splits={alice: 20, bob: 20}, tag="Transport", payer=bob)
    trip = add_expense(trip, e)
    with pytest.raises(InvalidInputError):
        add_expense(trip, e)

    edited = build_expense("Train", 50, splits={alice: 25, bob: 25}, tag="Transport", payer=bob, expense_id=e.id)
    trip = update_expense(trip, edited)
    assert [x.amount for x in trip.expenses] == [50]

    other = build_expense("Bus", 4, splits={alice: 4}, tag="Transport", payer=alice)
    with pytest.raises(InvalidInputError):
        update_expense(trip, other)

    assert remove_expense(trip, e.id).expenses == []
    assert remove_expense(trip, "missing").expenses == trip.expenses
