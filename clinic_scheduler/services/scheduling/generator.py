"""
Schedule generator - main orchestration layer.

This module provides the high-level API for generating schedules,
combining record preparation, solving and mentor pairing into a single flow.
"""

import logging
from typing import Iterable, Optional, Sequence

from .availability import prepare_volunteers
from .mentors import compute_mentor_teams
from .solver import solve_schedule
from .topology import DEFAULT_TOPOLOGY, ShiftTopology
from .types import (
    AvailabilityDiagnostic,
    NoEligibleVolunteersError,
    SchedulePlan,
    ScheduleResult,
    SchedulingOptions,
    Volunteer,
    VolunteerRecord,
)


logger = logging.getLogger(__name__)

NO_AVAILABILITY_MESSAGE = "No availability data found - cannot generate schedule"


def _attach_diagnostics(result: ScheduleResult, diagnostics: list[AvailabilityDiagnostic]):
    result.diagnostics = diagnostics
    if diagnostics:
        result.warnings.append(f"{len(diagnostics)} availability entries dropped or excluded")


def generate_schedule(
    records: Iterable[VolunteerRecord],
    topology: ShiftTopology = DEFAULT_TOPOLOGY,
    options: Optional[SchedulingOptions] = None,
) -> ScheduleResult:
    """
    Generate a schedule from raw availability records.

    main entry point for schedule generation. This function:
    1. Classifies roles and validates availability against the topology
    2. Runs the greedy solver
    3. Returns the result with diagnostics attached

    Args:
        records: availability form submissions
        topology: the shift grid
        options: SchedulingOptions, defaults if None

    Returns:
        ScheduleResult containing:
        - schedule: shift/volunteer maps and per-shift role counts
        - shortfalls: (shift, role) pairs below the per-shift minimum
        - filer_shortfalls: filers below the minimum shift count
        - diagnostics: dropped availability tokens and excluded records
        - warnings: human-readable summary lines

    Raises:
        NoEligibleVolunteersError: If no record survives filtering
    """
    volunteers, diagnostics = prepare_volunteers(records, topology)
    result = generate_schedule_from_volunteers(volunteers, topology, options)
    _attach_diagnostics(result, diagnostics)
    return result


def generate_schedule_from_volunteers(
    volunteers: Sequence[Volunteer],
    topology: ShiftTopology = DEFAULT_TOPOLOGY,
    options: Optional[SchedulingOptions] = None,
) -> ScheduleResult:
    """
    Generate a schedule from already prepared volunteers.

    Useful for testing or when volunteers come from somewhere other than the form.
    """
    if not volunteers:
        logger.error(NO_AVAILABILITY_MESSAGE)
        raise NoEligibleVolunteersError(NO_AVAILABILITY_MESSAGE)
    return solve_schedule(volunteers, topology, options)


def generate_plan(
    records: Iterable[VolunteerRecord],
    senior_mentor_names: Iterable[str] = (),
    first_time_mentor_names: Iterable[str] = (),
    topology: ShiftTopology = DEFAULT_TOPOLOGY,
    options: Optional[SchedulingOptions] = None,
) -> SchedulePlan:
    """Generate a schedule and pair first-time mentors with seniors on it."""
    volunteers, diagnostics = prepare_volunteers(records, topology)
    result = generate_schedule_from_volunteers(volunteers, topology, options)
    _attach_diagnostics(result, diagnostics)

    mentor_teams = compute_mentor_teams(
        result.schedule.volunteer_assignments,
        volunteers,
        senior_mentor_names,
        first_time_mentor_names,
        topology,
    )
    return SchedulePlan(result=result, mentor_teams=mentor_teams)
