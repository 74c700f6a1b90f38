import pytest

from clinic_scheduler.services.scheduling.topology import (
    DEFAULT_TOPOLOGY,
    SlotDefinition,
    ShiftTopology,
    build_topology,
)
from clinic_scheduler.services.scheduling.types import (
    RoleCategory,
    SchedulingOptions,
    Volunteer,
    VolunteerRecord,
)


def make_volunteer(
    name: str,
    role: RoleCategory = RoleCategory.FILER,
    max_shifts: int = 3,
    available=(),
    prefer_consecutive: bool = False,
) -> Volunteer:
    return Volunteer(
        name=name,
        email=f"{name.lower().replace(' ', '.')}@example.org",
        role=role,
        max_shifts=max_shifts,
        prefer_consecutive=prefer_consecutive,
        available_shifts=tuple(available),
    )


def make_record(
    first_name: str,
    role: str = "Filer",
    max_shifts: int = 3,
    availability="",
    prefer_consecutive: bool = False,
    last_name: str = "",
) -> VolunteerRecord:
    return VolunteerRecord(
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}@example.org",
        role=role,
        max_shifts=max_shifts,
        prefer_consecutive=prefer_consecutive,
        availability=availability,
    )


def two_day_single_slot_topology() -> ShiftTopology:
    # D1A, D2A: never consecutive, D2A is the final day
    return build_topology(["Sat", "Sun"], [SlotDefinition(key="A")])


def isolated_options(**overrides) -> SchedulingOptions:
    # turns off role minimums and the filer top-up so one pass can be tested alone
    values = dict(role_minimum=0, filer_min_shifts=0, filer_cap=5)
    values.update(overrides)
    return SchedulingOptions(**values)


CLINIC_ROLES = ["Filer", "Mentor", "Frontline", "Senior Mentor", "Internal Services", "Tax Preparer"]


def clinic_records(count: int = 24) -> list[VolunteerRecord]:
    # deterministic, varied availability across the default 12-shift grid
    shift_ids = DEFAULT_TOPOLOGY.shift_ids
    records = []
    for i in range(count):
        available = [
            shift_ids[j] for j in range(len(shift_ids))
            if (i * 7 + j * 3) % 5 < 3
        ]
        records.append(make_record(
            first_name=f"Volunteer{i:02d}",
            last_name="Test",
            role=CLINIC_ROLES[i % len(CLINIC_ROLES)],
            max_shifts=1 + i % 6,
            availability=", ".join(available),
            prefer_consecutive=(i % 3 == 0),
        ))
    return records


@pytest.fixture
def topology() -> ShiftTopology:
    return DEFAULT_TOPOLOGY


@pytest.fixture
def small_topology() -> ShiftTopology:
    # 2 days x 2 slots
    return build_topology(["Day 1", "Day 2"], [SlotDefinition(key="A"), SlotDefinition(key="B")])


@pytest.fixture
def options() -> SchedulingOptions:
    return SchedulingOptions(prioritize_consecutive=True, role_minimum=1, filer_cap=2, filer_min_shifts=3)


@pytest.fixture
def example_volunteers() -> list[Volunteer]:
    # Alice/Bob/Carol/Dave walkthrough on the 12-shift grid
    return [
        make_volunteer("Alice", RoleCategory.FILER, 3, ["D1A", "D1B", "D1C"]),
        make_volunteer("Bob", RoleCategory.FILER, 1, ["D1A"]),
        make_volunteer("Carol", RoleCategory.MENTOR, 1, ["D1A"]),
        make_volunteer("Dave", RoleCategory.FRONTLINE, 1, ["D1A"]),
    ]
