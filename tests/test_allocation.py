import pytest

from allocation import (
    SplitType,
    allocate,
    allocate_equal,
    allocate_exact,
    allocate_percentage,
    distribute_remaining,
)
from errors import InvalidInputError, ValidationError


def test_equal_first_participant_takes_remainder():
    shares = allocate_equal(100, ["A", "B", "C"])
    assert shares == {"A": 33.34, "B": 33.33, "C": 33.33}
    assert round(sum(shares.values()), 2) == 100.00


def test_equal_keeps_given_order():
    shares = allocate_equal(100, ["C", "B", "A"])
    assert shares["C"] == 33.34
    assert shares["A"] == 33.33


@pytest.mark.parametrize("total", [0.01, 0.3, 1, 10, 33.33, 99.99, 100, 1234.56, 100000.07])
def test_equal_sums_to_total(total):
    for count in range(1, 51):
        ids = [f"p{i}" for i in range(count)]
        shares = allocate_equal(total, ids)
        assert round(sum(shares.values()), 2) == round(total, 2)
        assert all(shares[i] == shares["p1"] for i in ids[1:])


def test_equal_rejects_bad_input():
    with pytest.raises(InvalidInputError):
        allocate_equal(10, [])
    with pytest.raises(InvalidInputError):
        allocate_equal(0, ["A"])
    with pytest.raises(InvalidInputError):
        allocate_equal(-5, ["A"])
    with pytest.raises(InvalidInputError):
        allocate_equal("abc", ["A"])


@pytest.mark.parametrize("call", [
    lambda: allocate_exact(0, {"A": 0}),
    lambda: allocate_exact(-10, {"A": -10}),
    lambda: allocate_exact(10, {}),
    lambda: allocate_percentage(10, {}),
    lambda: allocate_percentage(0, {"A": 100}),
    lambda: allocate_percentage(-1, {"A": 100}),
    lambda: distribute_remaining(10, {}, [], []),
    lambda: distribute_remaining(0, {"A": 0}, [], ["A"]),
    lambda: distribute_remaining(-5, {"A": 0}, [], ["A"]),
])
def test_every_policy_rejects_empty_sets_and_non_positive_totals(call):
    with pytest.raises(InvalidInputError):
        call()


def test_exact_passes_through():
    assert allocate_exact(100, {"A": 60, "B": 40}) == {"A": 60.0, "B": 40.0}
    assert allocate_exact(100, {"A": 60.005, "B": 40}) == {"A": 60.005, "B": 40.0}


def test_exact_allows_negative_shares():
    assert allocate_exact(50, {"A": 70, "B": -20}) == {"A": 70.0, "B": -20.0}


def test_exact_mismatch_reports_both_sums():
    with pytest.raises(ValidationError) as exc:
        allocate_exact(100, {"A": 40, "B": 40})
    assert exc.value.expected == 100
    assert exc.value.actual == 80
    assert "80.00" in str(exc.value) and "100.00" in str(exc.value)


def test_percentage():
    assert allocate_percentage(200, {"A": 50, "B": 25, "C": 25}) == {"A": 100.0, "B": 50.0, "C": 50.0}


def test_percentage_allows_negative_shares():
    assert allocate_percentage(100, {"A": 120, "B": -20}) == {"A": 120.0, "B": -20.0}


def test_percentage_rounds_to_exact_total():
    shares = allocate_percentage(100, {"A": 33.33, "B": 33.33, "C": 33.34})
    assert shares == {"A": 33.33, "B": 33.33, "C": 33.34}
    shares = allocate_percentage(10, {"A": 33.333, "B": 33.333, "C": 33.334})
    assert round(sum(shares.values()), 2) == 10.0


def test_percentage_must_add_to_100():
    with pytest.raises(ValidationError) as exc:
        allocate_percentage(100, {"A": 50, "B": 40})
    assert exc.value.expected == 100.0
    assert exc.value.actual == 90.0


def test_allocate_dispatch():
    assert allocate(SplitType.EQUAL, 90, ["A", "B", "C"]) == {"A": 30.0, "B": 30.0, "C": 30.0}
    assert allocate(SplitType.EXACT, 10, values={"A": 4, "B": 6}) == {"A": 4.0, "B": 6.0}
    assert allocate(SplitType.PERCENTAGE, 10, values={"A": 40, "B": 60}) == {"A": 4.0, "B": 6.0}
    with pytest.raises(InvalidInputError):
        allocate(SplitType.EXACT, 10, ["A"])


def test_distribute_remaining_splits_among_unlocked():
    result = distribute_remaining(100, {"A": 50, "B": 0, "C": 0, "D": 0}, ["A"], ["A", "B", "C", "D"])
    assert result.shares == {"A": 50.0, "B": 16.68, "C": 16.66, "D": 16.66}
    assert result.locked_ids == ["A"]


def test_distribute_remaining_unlocks_earliest_when_all_locked():
    result = distribute_remaining(90, {"A": 10, "B": 20, "C": 30}, ["B", "A", "C"], ["A", "B", "C"])
    assert result.locked_ids == ["A", "C"]
    assert result.shares == {"A": 10.0, "B": 50.0, "C": 30.0}


def test_distribute_remaining_ignores_unselected_locks():
    result = distribute_remaining(30, {"A": 5, "X": 100}, ["X", "A"], ["A", "B"])
    assert result.locked_ids == ["A"]
    assert result.shares == {"A": 5.0, "B": 25.0}


def test_distribute_remaining_over_allocated():
    result = distribute_remaining(10, {"A": 15}, ["A"], ["A", "B"])
    assert result.shares == {"A": 15.0, "B": -5.0}


def test_distribute_remaining_does_not_touch_inputs():
    current = {"A": 50.0}
    locked = ["A"]
    distribute_remaining(100, current, locked, ["A", "B"])
    assert current == {"A": 50.0}
    assert locked == ["A"]
