import pytest

from clinic_scheduler.services.scheduling.state import ScheduleState
from clinic_scheduler.services.scheduling.types import RoleCategory, ScheduleInvariantError

from conftest import make_volunteer


SHIFTS = ["D1A", "D1B", "D2A"]


class TestAssign:

    def test_updates_both_directions_and_tally(self):
        state = ScheduleState(SHIFTS, filer_cap=2)
        alice = make_volunteer("Alice", RoleCategory.MENTOR, 2, SHIFTS)

        state.assign("D1B", alice)

        assert state.volunteers_on("D1B") == ["Alice"]
        assert state.shifts_for("Alice") == ["D1B"]
        assert state.role_count("D1B", RoleCategory.MENTOR) == 1
        assert state.is_assigned("D1B", "Alice") is True
        assert state.remaining_capacity(alice) == 1

    def test_double_booking_rejected(self):
        state = ScheduleState(SHIFTS)
        alice = make_volunteer("Alice", max_shifts=3, available=SHIFTS)
        state.assign("D1A", alice)
        with pytest.raises(ScheduleInvariantError):
            state.assign("D1A", alice)

    def test_capacity_enforced(self):
        state = ScheduleState(SHIFTS)
        bob = make_volunteer("Bob", max_shifts=1, available=SHIFTS)
        state.assign("D1A", bob)
        with pytest.raises(ScheduleInvariantError):
            state.assign("D1B", bob)

    def test_internal_services_exempt_from_capacity(self):
        state = ScheduleState(SHIFTS)
        ivy = make_volunteer("Ivy", RoleCategory.INTERNAL_SERVICES, 1, SHIFTS)
        for shift_id in SHIFTS:
            state.assign(shift_id, ivy)
        assert state.shift_count("Ivy") == 3

    def test_filer_cap_enforced(self):
        state = ScheduleState(SHIFTS, filer_cap=1)
        state.assign("D1A", make_volunteer("F1", available=SHIFTS))
        with pytest.raises(ScheduleInvariantError):
            state.assign("D1A", make_volunteer("F2", available=SHIFTS))

    def test_filer_cap_ignores_other_roles(self):
        state = ScheduleState(SHIFTS, filer_cap=1)
        state.assign("D1A", make_volunteer("F1", available=SHIFTS))
        state.assign("D1A", make_volunteer("M1", RoleCategory.MENTOR, available=SHIFTS))
        assert state.headcount("D1A") == 2

    def test_unknown_shift_rejected(self):
        state = ScheduleState(SHIFTS)
        with pytest.raises(ScheduleInvariantError):
            state.assign("D9A", make_volunteer("F1", available=["D9A"]))


class TestFreeze:

    def test_registered_volunteer_without_shifts_present(self):
        state = ScheduleState(SHIFTS)
        state.register(make_volunteer("Idle", available=SHIFTS))
        schedule = state.freeze()
        assert schedule.volunteer_assignments["Idle"] == ()

    def test_frozen_schedule_is_read_only(self):
        state = ScheduleState(SHIFTS)
        state.assign("D1A", make_volunteer("Alice", available=SHIFTS))
        schedule = state.freeze()

        assert schedule.shift_assignments["D1A"] == ("Alice",)
        with pytest.raises(TypeError):
            schedule.shift_assignments["D1A"] = ("Mallory",)
        with pytest.raises(TypeError):
            schedule.role_counts["D1A"][RoleCategory.FILER] = 9

    def test_freeze_is_a_snapshot(self):
        state = ScheduleState(SHIFTS)
        schedule = state.freeze()
        state.assign("D1A", make_volunteer("Alice", available=SHIFTS))
        assert schedule.shift_assignments["D1A"] == ()
