"""
Scheduling service package.

Usage:
    from clinic_scheduler.services.scheduling import generate_schedule, VolunteerRecord

    # Simple usage - prepare records and solve in one call
    result = generate_schedule(records)

    # Or prepare volunteers separately for inspection/testing
    from clinic_scheduler.services.scheduling import prepare_volunteers, solve_schedule

    volunteers, diagnostics = prepare_volunteers(records, DEFAULT_TOPOLOGY)
    result = solve_schedule(volunteers, DEFAULT_TOPOLOGY)
"""

from .types import (
    RoleCategory,
    PRIMARY_ROLES,
    VolunteerRecord,
    Volunteer,
    AvailabilityDiagnostic,
    SchedulingOptions,
    StaffingShortfall,
    FilerShortfall,
    Schedule,
    ScheduleResult,
    SchedulePlan,
    MentorTeams,
    NoEligibleVolunteersError,
    ScheduleInvariantError,
)
from .topology import (
    SlotDefinition,
    ShiftDefinition,
    ShiftTopology,
    build_topology,
    DEFAULT_SLOTS,
    DEFAULT_DAY_LABELS,
    DEFAULT_TOPOLOGY,
)
from .roles import classify_role
from .availability import prepare_volunteers, parse_availability
from .solver import ScheduleSolver, solve_schedule
from .mentors import compute_mentor_teams
from .diff import ShiftChange, diff_schedules
from .generator import generate_schedule, generate_schedule_from_volunteers, generate_plan

__all__ = [
    # Types
    "RoleCategory",
    "PRIMARY_ROLES",
    "VolunteerRecord",
    "Volunteer",
    "AvailabilityDiagnostic",
    "SchedulingOptions",
    "StaffingShortfall",
    "FilerShortfall",
    "Schedule",
    "ScheduleResult",
    "SchedulePlan",
    "MentorTeams",
    "NoEligibleVolunteersError",
    "ScheduleInvariantError",
    "ShiftChange",
    # Topology
    "SlotDefinition",
    "ShiftDefinition",
    "ShiftTopology",
    "build_topology",
    "DEFAULT_SLOTS",
    "DEFAULT_DAY_LABELS",
    "DEFAULT_TOPOLOGY",
    # Main entry points
    "generate_schedule",
    "generate_schedule_from_volunteers",
    "generate_plan",
    "compute_mentor_teams",
    "diff_schedules",
    # Lower-level functions
    "classify_role",
    "prepare_volunteers",
    "parse_availability",
    "ScheduleSolver",
    "solve_schedule",
]
