"""
Mutable schedule state used while the solver runs.

assign() is the only write path. It keeps shift -> volunteers,
volunteer -> shifts and the per-shift role tally in step.
"""

import logging
from typing import Iterable, Optional

from .types import (
    RoleCategory,
    Schedule,
    ScheduleInvariantError,
    Volunteer,
)


logger = logging.getLogger(__name__)


class ScheduleState:

    def __init__(self, shift_ids: Iterable[str], filer_cap: Optional[int] = None):
        self.filer_cap = filer_cap
        self._shift_volunteers: dict[str, list[str]] = {}
        self._volunteer_shifts: dict[str, list[str]] = {}
        self._role_counts: dict[str, dict[RoleCategory, int]] = {}
        self._pairs: set[tuple[str, str]] = set()
        for shift_id in shift_ids:
            self._shift_volunteers[shift_id] = []
            self._role_counts[shift_id] = {role: 0 for role in RoleCategory}

    def register(self, volunteer: Volunteer) -> None:
        """Make a volunteer show up in the output even with zero shifts."""
        self._volunteer_shifts.setdefault(volunteer.name, [])

    def assign(self, shift_id: str, volunteer: Volunteer) -> None:
        if shift_id not in self._shift_volunteers:
            raise ScheduleInvariantError(f"Unknown shift {shift_id}")
        if (shift_id, volunteer.name) in self._pairs:
            raise ScheduleInvariantError(f"{volunteer.name} already assigned to {shift_id}")
        if not volunteer.is_internal_services and self.shift_count(volunteer.name) >= volunteer.max_shifts:
            raise ScheduleInvariantError(
                f"{volunteer.name} is at max_shifts ({volunteer.max_shifts}), cannot add {shift_id}"
            )
        if (
            volunteer.role == RoleCategory.FILER
            and self.filer_cap is not None
            and self._role_counts[shift_id][RoleCategory.FILER] >= self.filer_cap
        ):
            raise ScheduleInvariantError(f"Filer cap ({self.filer_cap}) reached on {shift_id}")

        self._shift_volunteers[shift_id].append(volunteer.name)
        self._volunteer_shifts.setdefault(volunteer.name, []).append(shift_id)
        self._role_counts[shift_id][volunteer.role] += 1
        self._pairs.add((shift_id, volunteer.name))
        logger.debug(f"Assigned {volunteer.name} ({volunteer.role.value}) to {shift_id}")

    def is_assigned(self, shift_id: str, volunteer_name: str) -> bool:
        return (shift_id, volunteer_name) in self._pairs

    def shift_count(self, volunteer_name: str) -> int:
        return len(self._volunteer_shifts.get(volunteer_name, ()))

    def shifts_for(self, volunteer_name: str) -> list[str]:
        return list(self._volunteer_shifts.get(volunteer_name, ()))

    def remaining_capacity(self, volunteer: Volunteer) -> int:
        return volunteer.max_shifts - self.shift_count(volunteer.name)

    def headcount(self, shift_id: str) -> int:
        return len(self._shift_volunteers[shift_id])

    def role_count(self, shift_id: str, role: RoleCategory) -> int:
        return self._role_counts[shift_id][role]

    def volunteers_on(self, shift_id: str) -> list[str]:
        return list(self._shift_volunteers[shift_id])

    def filer_cap_allows(self, shift_id: str, volunteer: Volunteer) -> bool:
        if volunteer.role != RoleCategory.FILER or self.filer_cap is None:
            return True
        return self._role_counts[shift_id][RoleCategory.FILER] < self.filer_cap

    def freeze(self) -> Schedule:
        return Schedule.from_dicts(
            self._shift_volunteers,
            self._volunteer_shifts,
            self._role_counts,
        )
