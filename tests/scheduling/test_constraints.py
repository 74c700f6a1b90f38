import pytest

from clinic_scheduler.services.scheduling.constraints import (
    find_capacity_violations,
    find_consistency_errors,
    find_filer_cap_violations,
    find_staffing_shortfalls,
    validate_schedule,
)
from clinic_scheduler.services.scheduling.solver import solve_schedule
from clinic_scheduler.services.scheduling.types import (
    RoleCategory,
    Schedule,
    SchedulingOptions,
    StaffingShortfall,
)

from conftest import make_volunteer


def counts(filer=0, mentor=0, frontline=0, internal=0):
    return {
        RoleCategory.FILER: filer,
        RoleCategory.MENTOR: mentor,
        RoleCategory.FRONTLINE: frontline,
        RoleCategory.INTERNAL_SERVICES: internal,
    }


class TestStaffingShortfalls:

    def test_lists_missing_roles_in_grid_order(self, small_topology):
        schedule = Schedule.from_dicts(
            {"D1A": ["F", "M", "L"], "D1B": ["F"], "D2A": [], "D2B": []},
            {"F": ["D1A", "D1B"], "M": ["D1A"], "L": ["D1A"]},
            {
                "D1A": counts(filer=1, mentor=1, frontline=1),
                "D1B": counts(filer=1),
                "D2A": counts(),
                "D2B": counts(),
            },
        )
        shortfalls = find_staffing_shortfalls(schedule, small_topology, role_minimum=1)

        assert shortfalls[0] == StaffingShortfall("D1B", RoleCategory.MENTOR, 1, 0)
        assert len(shortfalls) == 2 + 3 + 3

    def test_internal_services_not_counted(self, small_topology):
        schedule = Schedule.from_dicts(
            {s: [] for s in small_topology.shift_ids},
            {},
            {s: counts(filer=1, mentor=1, frontline=1) for s in small_topology.shift_ids},
        )
        assert find_staffing_shortfalls(schedule, small_topology, role_minimum=1) == []


class TestCapacityViolations:

    def test_over_max(self):
        bob = make_volunteer("Bob", max_shifts=1, available=["D1A", "D1B"])
        schedule = Schedule.from_dicts({"D1A": ["Bob"], "D1B": ["Bob"]}, {"Bob": ["D1A", "D1B"]}, {})
        assert find_capacity_violations(schedule, [bob]) == {"Bob": 1}

    def test_internal_services_exempt(self):
        ivy = make_volunteer("Ivy", RoleCategory.INTERNAL_SERVICES, 1, ["D1A", "D1B"])
        schedule = Schedule.from_dicts({"D1A": ["Ivy"], "D1B": ["Ivy"]}, {"Ivy": ["D1A", "D1B"]}, {})
        assert find_capacity_violations(schedule, [ivy]) == {}


class TestFilerCapViolations:

    def test_over_cap(self):
        schedule = Schedule.from_dicts({}, {}, {"D1A": counts(filer=3), "D1B": counts(filer=2)})
        assert find_filer_cap_violations(schedule, filer_cap=2) == {"D1A": 3}


class TestConsistencyErrors:

    def test_consistent(self):
        schedule = Schedule.from_dicts({"D1A": ["Amy"]}, {"Amy": ["D1A"]}, {})
        assert find_consistency_errors(schedule) == []

    def test_missing_reverse_entry(self):
        schedule = Schedule.from_dicts({"D1A": ["Amy"]}, {"Amy": []}, {})
        errors = find_consistency_errors(schedule)
        assert errors == ["Amy on D1A missing from volunteer assignments"]

    def test_double_booking(self):
        schedule = Schedule.from_dicts({"D1A": ["Amy", "Amy"]}, {"Amy": ["D1A"]}, {})
        assert "D1A lists a volunteer more than once" in find_consistency_errors(schedule)


class TestValidateSchedule:

    def test_solved_schedule_only_fails_on_staffing(self, example_volunteers, topology, options):
        result = solve_schedule(example_volunteers, topology, options)
        validation = validate_schedule(result.schedule, example_volunteers, topology, options)

        assert validation['valid'] is False
        assert validation['staffing_shortfalls'] == result.shortfalls
        assert validation['capacity_violations'] == {}
        assert validation['filer_cap_violations'] == {}
        assert validation['consistency_errors'] == []

    def test_fully_staffed_is_valid(self, small_topology):
        volunteers = []
        for role in (RoleCategory.FILER, RoleCategory.MENTOR, RoleCategory.FRONTLINE):
            volunteers.append(make_volunteer(f"{role.value}-1", role, 2, ["D1A", "D2A"]))
            volunteers.append(make_volunteer(f"{role.value}-2", role, 2, ["D1B", "D2B"]))
        options = SchedulingOptions(role_minimum=1, filer_cap=2, filer_min_shifts=0)

        result = solve_schedule(volunteers, small_topology, options)
        validation = validate_schedule(result.schedule, volunteers, small_topology, options)

        assert validation['valid'] is True
        assert result.success is True
