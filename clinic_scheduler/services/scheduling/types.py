"""
Internal data types for scheduling logic.
decoupled from storage rows and HTTP schemas for cleaner logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union


class RoleCategory(str, Enum):
    FILER = "FILER"
    MENTOR = "MENTOR"
    FRONTLINE = "FRONTLINE"
    INTERNAL_SERVICES = "INTERNAL_SERVICES"


# Fill priority for per-shift role minimums and balancing
PRIMARY_ROLES: tuple[RoleCategory, ...] = (
    RoleCategory.FILER,
    RoleCategory.MENTOR,
    RoleCategory.FRONTLINE,
)


class NoEligibleVolunteersError(ValueError):
    """Raised when no availability record survives filtering."""


class ScheduleInvariantError(RuntimeError):
    """Raised when a phase tries to break a schedule invariant (a bug, not bad input)."""


@dataclass
class VolunteerRecord:
    """A raw availability form submission."""
    first_name: str
    last_name: str
    email: str
    role: Optional[str]
    max_shifts: int
    prefer_consecutive: bool = False
    availability: Union[str, Sequence[str]] = ""

    @property
    def full_name(self) -> str:
        return " ".join(part.strip() for part in (self.first_name, self.last_name) if part and part.strip())


@dataclass(frozen=True)
class Volunteer:
    """A volunteer ready for scheduling: classified role, validated availability."""
    name: str
    email: str
    role: RoleCategory
    max_shifts: int
    prefer_consecutive: bool
    available_shifts: tuple[str, ...] = ()

    @property
    def is_internal_services(self) -> bool:
        return self.role == RoleCategory.INTERNAL_SERVICES


@dataclass(frozen=True)
class AvailabilityDiagnostic:
    """A dropped availability token or an excluded record."""
    volunteer: str
    token: Optional[str]
    message: str


@dataclass(frozen=True)
class SchedulingOptions:
    prioritize_consecutive: bool = True
    role_minimum: int = 1  # per shift, per primary role
    filer_cap: int = 2  # hard max filers on one shift
    filer_min_shifts: int = 3

    def validate(self) -> None:
        if self.role_minimum < 0:
            raise ValueError("role_minimum must be >= 0.")
        if self.filer_cap < 1:
            raise ValueError("filer_cap must be >= 1.")
        if self.filer_min_shifts < 0:
            raise ValueError("filer_min_shifts must be >= 0.")


@dataclass(frozen=True)
class StaffingShortfall:
    """A primary role below its per-shift minimum."""
    shift_id: str
    role: RoleCategory
    target: int
    actual: int


@dataclass(frozen=True)
class FilerShortfall:
    """A filer who could not reach the minimum shift count."""
    volunteer: str
    target: int
    actual: int


@dataclass(frozen=True)
class Schedule:
    """
    Immutable engine output.

    shift_assignments: shift id -> volunteer names in assignment order
    volunteer_assignments: volunteer name -> shift ids in assignment order
    role_counts: shift id -> role -> headcount
    """
    shift_assignments: Mapping[str, tuple[str, ...]]
    volunteer_assignments: Mapping[str, tuple[str, ...]]
    role_counts: Mapping[str, Mapping[RoleCategory, int]]

    @classmethod
    def from_dicts(
        cls,
        shift_assignments: Mapping[str, Sequence[str]],
        volunteer_assignments: Mapping[str, Sequence[str]],
        role_counts: Mapping[str, Mapping[RoleCategory, int]],
    ) -> "Schedule":
        return cls(
            shift_assignments=MappingProxyType({k: tuple(v) for k, v in shift_assignments.items()}),
            volunteer_assignments=MappingProxyType({k: tuple(v) for k, v in volunteer_assignments.items()}),
            role_counts=MappingProxyType({k: MappingProxyType(dict(v)) for k, v in role_counts.items()}),
        )

    def headcount(self, shift_id: str) -> int:
        return len(self.shift_assignments.get(shift_id, ()))

    def shifts_for(self, volunteer_name: str) -> tuple[str, ...]:
        return self.volunteer_assignments.get(volunteer_name, ())


@dataclass
class ScheduleResult:
    """Output of the scheduling algorithm."""
    schedule: Schedule
    shortfalls: list[StaffingShortfall] = field(default_factory=list)
    filer_shortfalls: list[FilerShortfall] = field(default_factory=list)
    diagnostics: list[AvailabilityDiagnostic] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.shortfalls


MentorTeams = dict[str, dict[str, Optional[str]]]


@dataclass
class SchedulePlan:
    """A schedule together with the mentor pairing derived from it."""
    result: ScheduleResult
    mentor_teams: MentorTeams = field(default_factory=dict)
