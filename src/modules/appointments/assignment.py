"""Nurse selection for auto-assigned bookings."""

from __future__ import annotations

import asyncio
import random
import weakref
from collections.abc import Mapping, Sequence
from datetime import date

from src.modules.users.models import User
from src.shared.enums import NurseSelectionPolicy


def select_nurse(
    candidates: Sequence[User],
    policy: NurseSelectionPolicy,
    loads: Mapping[str, int] | None = None,
    rng: random.Random | None = None,
) -> User:
    """Pick one nurse out of the free candidates for a slot.

    ``loads`` maps nurse id to the number of appointments that nurse already
    has on the requested day; only the least-loaded policy reads it.
    """
    if not candidates:
        raise ValueError("select_nurse needs at least one candidate")

    if policy == NurseSelectionPolicy.RANDOM:
        return (rng or random).choice(list(candidates))

    ordered = sorted(candidates, key=lambda nurse: (nurse.name, nurse.user_id))
    if policy == NurseSelectionPolicy.FIRST_AVAILABLE:
        return ordered[0]

    loads = loads or {}
    return min(ordered, key=lambda nurse: loads.get(nurse.user_id, 0))


class SlotLocks:
    """One asyncio.Lock per (date, time) slot, dropped once nobody holds it."""

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[tuple[date, str], asyncio.Lock] = weakref.WeakValueDictionary()

    def for_slot(self, slot_date: date, slot_time: str) -> asyncio.Lock:
        key = (slot_date, slot_time)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)


slot_locks = SlotLocks()
