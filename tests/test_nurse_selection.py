import random
from datetime import date

import pytest

from src.core.exceptions import InvalidStatusTransition
from src.modules.appointments.assignment import SlotLocks, select_nurse
from src.modules.appointments.status import can_transition, ensure_transition
from src.modules.users.models import User
from src.shared.enums import AppointmentStatus, NurseSelectionPolicy, UserRole


def _nurse(user_id: str, name: str) -> User:
    return User(user_id=user_id, name=name, email=f"{user_id}@clinic.example.edu", role=UserRole.NURSE)


NURSES = [_nurse("N3", "Cora"), _nurse("N1", "Alice"), _nurse("N2", "Bella")]


def test_first_available_is_alphabetical():
    chosen = select_nurse(NURSES, NurseSelectionPolicy.FIRST_AVAILABLE)
    assert chosen.user_id == "N1"


def test_least_loaded_prefers_fewest_bookings():
    loads = {"N1": 3, "N2": 1, "N3": 2}
    chosen = select_nurse(NURSES, NurseSelectionPolicy.LEAST_LOADED, loads=loads)
    assert chosen.user_id == "N2"


def test_least_loaded_breaks_ties_by_name_then_id():
    twins = [_nurse("N9", "Alice"), _nurse("N5", "Alice"), _nurse("N2", "Bella")]
    chosen = select_nurse(twins, NurseSelectionPolicy.LEAST_LOADED, loads={"N2": 0})
    assert chosen.user_id == "N5"


def test_random_policy_uses_given_generator():
    picks = {select_nurse(NURSES, NurseSelectionPolicy.RANDOM, rng=random.Random(seed)).user_id for seed in range(30)}
    assert picks <= {"N1", "N2", "N3"}
    assert len(picks) > 1


def test_random_policy_is_reproducible_with_seed():
    first = select_nurse(NURSES, NurseSelectionPolicy.RANDOM, rng=random.Random(7))
    second = select_nurse(NURSES, NurseSelectionPolicy.RANDOM, rng=random.Random(7))
    assert first is second


@pytest.mark.parametrize("policy", list(NurseSelectionPolicy))
def test_selection_requires_candidates(policy):
    with pytest.raises(ValueError):
        select_nurse([], policy)


def test_slot_locks_are_shared_per_slot():
    locks = SlotLocks()
    slot_date = date(2025, 3, 10)

    lock = locks.for_slot(slot_date, "10:00")
    assert locks.for_slot(slot_date, "10:00") is lock
    assert locks.for_slot(slot_date, "10:30") is not lock
    assert locks.for_slot(date(2025, 3, 11), "10:00") is not lock

    del lock
    assert len(locks) == 0


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED),
        (AppointmentStatus.PENDING, AppointmentStatus.CANCELLED),
        (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED),
        (AppointmentStatus.CONFIRMED, AppointmentStatus.NO_SHOW),
        (AppointmentStatus.COMPLETED, AppointmentStatus.COMPLETED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (AppointmentStatus.CONFIRMED, AppointmentStatus.PENDING),
        (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED),
        (AppointmentStatus.CANCELLED, AppointmentStatus.CONFIRMED),
        (AppointmentStatus.NO_SHOW, AppointmentStatus.COMPLETED),
    ],
)
def test_rejected_transitions(current, target):
    assert not can_transition(current, target)
    with pytest.raises(InvalidStatusTransition):
        ensure_transition(current, target)
