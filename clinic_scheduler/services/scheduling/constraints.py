"""
Constraint checking utilities for schedule validation.
Handles role minimums, the filer cap, volunteer capacity and map consistency.
"""

from typing import Iterable

from .topology import ShiftTopology
from .types import (
    PRIMARY_ROLES,
    RoleCategory,
    Schedule,
    SchedulingOptions,
    StaffingShortfall,
    Volunteer,
)


def find_staffing_shortfalls(
    schedule: Schedule,
    topology: ShiftTopology,
    role_minimum: int,
) -> list[StaffingShortfall]:
    """Every (shift, primary role) whose count is below the per-shift minimum, in grid order."""
    shortfalls = []
    for shift_id in topology.shift_ids:
        counts = schedule.role_counts.get(shift_id, {})
        for role in PRIMARY_ROLES:
            actual = counts.get(role, 0)
            if actual < role_minimum:
                shortfalls.append(StaffingShortfall(
                    shift_id=shift_id, role=role, target=role_minimum, actual=actual,
                ))
    return shortfalls


def find_capacity_violations(
    schedule: Schedule,
    volunteers: Iterable[Volunteer],
) -> dict[str, int]:
    """
    Check nobody works more than max_shifts. Internal services are exempt.

    Returns:
        volunteer name -> shifts over the limit
    """
    violations = {}
    for volunteer in volunteers:
        if volunteer.is_internal_services:
            continue
        over = len(schedule.shifts_for(volunteer.name)) - volunteer.max_shifts
        if over > 0:
            violations[volunteer.name] = over
    return violations


def find_filer_cap_violations(
    schedule: Schedule,
    filer_cap: int,
) -> dict[str, int]:
    """shift id -> filer headcount, for shifts above the cap."""
    return {
        shift_id: counts.get(RoleCategory.FILER, 0)
        for shift_id, counts in schedule.role_counts.items()
        if counts.get(RoleCategory.FILER, 0) > filer_cap
    }


def find_consistency_errors(schedule: Schedule) -> list[str]:
    """Double-booking and any pair present in only one of the two maps."""
    errors = []

    by_shift = set()
    for shift_id, names in schedule.shift_assignments.items():
        if len(set(names)) != len(names):
            errors.append(f"{shift_id} lists a volunteer more than once")
        by_shift.update((shift_id, name) for name in names)

    by_volunteer = set()
    for name, shift_ids in schedule.volunteer_assignments.items():
        if len(set(shift_ids)) != len(shift_ids):
            errors.append(f"{name} lists a shift more than once")
        by_volunteer.update((shift_id, name) for shift_id in shift_ids)

    for shift_id, name in sorted(by_shift - by_volunteer):
        errors.append(f"{name} on {shift_id} missing from volunteer assignments")
    for shift_id, name in sorted(by_volunteer - by_shift):
        errors.append(f"{name} on {shift_id} missing from shift assignments")

    return errors


def validate_schedule(
    schedule: Schedule,
    volunteers: Iterable[Volunteer],
    topology: ShiftTopology,
    options: SchedulingOptions,
) -> dict:
    """
    Validate a complete schedule against all constraints.

    Returns:
        {
            'valid': bool,
            'staffing_shortfalls': [StaffingShortfall],
            'capacity_violations': {volunteer: over},
            'filer_cap_violations': {shift_id: filers},
            'consistency_errors': [str],
        }
    """
    staffing = find_staffing_shortfalls(schedule, topology, options.role_minimum)
    capacity = find_capacity_violations(schedule, volunteers)
    filer_cap = find_filer_cap_violations(schedule, options.filer_cap)
    consistency = find_consistency_errors(schedule)

    return {
        'valid': not staffing and not capacity and not filer_cap and not consistency,
        'staffing_shortfalls': staffing,
        'capacity_violations': capacity,
        'filer_cap_violations': filer_cap,
        'consistency_errors': consistency,
    }
