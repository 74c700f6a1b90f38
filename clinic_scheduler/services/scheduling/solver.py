"""
Shift assignment solver using ordered greedy passes.

Strategy:
0. Sort volunteers: consecutive-preferring first, then scarcest availability
1. Meet the per-shift minimum for filer, mentor and frontline
1.5. Give internal services every shift they declared
2. Chain consecutive runs for volunteers who asked for them
3. Top filers up to the minimum shift count
4. Fill remaining capacity, always feeding the most under-staffed (shift, role)

Earlier passes make harder guarantees, so they claim capacity first.
"""

import logging
from typing import Optional, Sequence

from .availability import build_shift_index
from .constraints import find_staffing_shortfalls
from .state import ScheduleState
from .topology import ShiftTopology
from .types import (
    PRIMARY_ROLES,
    FilerShortfall,
    RoleCategory,
    ScheduleResult,
    SchedulingOptions,
    Volunteer,
)


logger = logging.getLogger(__name__)


class ScheduleSolver:
    """
    Greedy multi-pass solver for volunteer shift scheduling.
    """

    def __init__(
        self,
        volunteers: Sequence[Volunteer],
        topology: ShiftTopology,
        options: Optional[SchedulingOptions] = None,
    ):
        self.topology = topology
        self.options = options or SchedulingOptions()
        self.options.validate()
        self.volunteers: list[Volunteer] = self._prioritize(volunteers)
        self.shift_index: dict[str, list[Volunteer]] = build_shift_index(self.volunteers)
        self.state = ScheduleState(topology.shift_ids, filer_cap=self.options.filer_cap)
        self.filer_shortfalls: list[FilerShortfall] = []
        # (volunteer, chain) for every run assigned by the consecutive pass
        self.consecutive_chains: list[tuple[str, tuple[str, ...]]] = []

        for volunteer in self.volunteers:
            self.state.register(volunteer)

    def solve(self) -> ScheduleResult:
        """
        Main solving method.

        Returns:
            ScheduleResult with the schedule and any shortfalls
        """
        #1: Role minimums per shift
        self._fill_role_minimums()
        #1.5: Internal services take every declared shift
        self._assign_internal_services()
        #2: Consecutive runs
        self._chain_consecutive_shifts()
        #3: Filer minimum shift guarantee
        self._guarantee_filer_minimum()
        #4: Balanced fill until nobody can be placed
        self._balance_remaining_capacity()
        #5: Result
        return self._build_result()

    def _prioritize(self, volunteers: Sequence[Volunteer]) -> list[Volunteer]:
        """0: Most constrained first. sorted() is stable, so input order breaks ties."""

        def priority(volunteer: Volunteer) -> tuple[bool, int]:
            wants_chain_last = (
                not volunteer.prefer_consecutive if self.options.prioritize_consecutive else False
            )
            return (wants_chain_last, len(volunteer.available_shifts))

        return sorted(volunteers, key=priority)

    def _assign(self, shift_id: str, volunteer: Volunteer):
        self.state.assign(shift_id, volunteer)

    def _can_take(self, shift_id: str, volunteer: Volunteer) -> bool:
        return (
            not self.state.is_assigned(shift_id, volunteer.name)
            and self.state.remaining_capacity(volunteer) > 0
            and self.state.filer_cap_allows(shift_id, volunteer)
        )

    def _fill_role_minimums(self):
        """1: Fill each primary role up to the minimum on every shift."""
        before = self._assignment_count()
        for shift_id in self.topology.shift_ids:
            for role in PRIMARY_ROLES:
                self._fill_role_minimum(shift_id, role)
        logger.info(f"Role minimums: {self._assignment_count() - before} assignments")

    def _fill_role_minimum(self, shift_id: str, role: RoleCategory):
        needed = self.options.role_minimum - self.state.role_count(shift_id, role)
        if needed <= 0:
            return

        candidates = [
            v for v in self.shift_index.get(shift_id, [])
            if v.role == role and self._can_take(shift_id, v)
        ]
        # Least remaining capacity first keeps volunteers with slack flexible for later passes
        candidates.sort(key=self.state.remaining_capacity)

        for volunteer in candidates:
            if needed <= 0:
                break
            if not self.state.filer_cap_allows(shift_id, volunteer):
                break
            self._assign(shift_id, volunteer)
            needed -= 1

    def _assign_internal_services(self):
        """1.5: Internal services skip contention and the max_shifts cap."""
        before = self._assignment_count()
        for volunteer in self.volunteers:
            if not volunteer.is_internal_services:
                continue
            for shift_id in volunteer.available_shifts:
                if not self.state.is_assigned(shift_id, volunteer.name):
                    self._assign(shift_id, volunteer)
        logger.info(f"Internal services: {self._assignment_count() - before} assignments")

    def _chain_consecutive_shifts(self):
        """2: Assign whole consecutive runs (2+ shifts) or nothing."""
        before = self._assignment_count()
        for volunteer in self.volunteers:
            if not volunteer.prefer_consecutive or volunteer.is_internal_services:
                continue

            for run in self.topology.consecutive_runs(volunteer.available_shifts):
                if len(run) < 2:
                    continue

                chain = [s for s in run if not self.state.is_assigned(s, volunteer.name)]
                chain = [s for s in chain if self.state.filer_cap_allows(s, volunteer)]
                chain = chain[:max(self.state.remaining_capacity(volunteer), 0)]

                if len(chain) < 2:
                    continue

                for shift_id in chain:
                    self._assign(shift_id, volunteer)
                self.consecutive_chains.append((volunteer.name, tuple(chain)))

        logger.info(
            f"Consecutive chains: {len(self.consecutive_chains)} chains, "
            f"{self._assignment_count() - before} assignments"
        )

    def _guarantee_filer_minimum(self):
        """3: Top up filers who can work the minimum, spreading them onto the emptiest shifts."""
        target = self.options.filer_min_shifts

        for volunteer in self.volunteers:
            if volunteer.role != RoleCategory.FILER or volunteer.max_shifts < target:
                continue

            while (
                self.state.shift_count(volunteer.name) < target
                and self.state.remaining_capacity(volunteer) > 0
            ):
                open_shifts = [
                    s for s in volunteer.available_shifts
                    if not self.state.is_assigned(s, volunteer.name)
                    and self.state.filer_cap_allows(s, volunteer)
                ]
                if not open_shifts:
                    break
                best = min(
                    open_shifts,
                    key=lambda s: (self.state.headcount(s), self.topology.order_of(s)),
                )
                self._assign(best, volunteer)

            actual = self.state.shift_count(volunteer.name)
            if actual < target:
                logger.warning(
                    f"Filer {volunteer.name} has {actual} of {target} minimum shifts "
                    f"({len(volunteer.available_shifts)} declared)"
                )
                self.filer_shortfalls.append(
                    FilerShortfall(volunteer=volunteer.name, target=target, actual=actual)
                )

    def _balance_remaining_capacity(self):
        """4: One assignment per iteration; stops once no (shift, volunteer) pair is eligible."""
        pool = [v for v in self.volunteers if not v.is_internal_services]
        index = build_shift_index(pool)

        added = 0
        while True:
            pick = self._next_balanced_assignment(index)
            if pick is None:
                break
            shift_id, volunteer = pick
            self._assign(shift_id, volunteer)
            added += 1

        logger.info(f"Balanced fill: {added} assignments")

    def _next_balanced_assignment(
        self,
        index: dict[str, list[Volunteer]],
    ) -> Optional[tuple[str, Volunteer]]:
        eligible_cache: dict[str, list[Volunteer]] = {}

        def eligible(shift_id: str) -> list[Volunteer]:
            if shift_id not in eligible_cache:
                eligible_cache[shift_id] = self._eligible_for_balance(shift_id, index)
            return eligible_cache[shift_id]

        for shift_id, role in self._role_deficits():
            candidates = eligible(shift_id)
            if candidates:
                return shift_id, self._choose_candidate(shift_id, candidates, role)

        # No role deficit can be fed: fall back to the emptiest shift with anyone eligible
        by_headcount = sorted(
            self.topology.shift_ids,
            key=lambda s: (self.state.headcount(s), self.topology.order_of(s)),
        )
        for shift_id in by_headcount:
            candidates = eligible(shift_id)
            if candidates:
                return shift_id, self._choose_candidate(shift_id, candidates, None)

        return None

    def _role_deficits(self) -> list[tuple[str, RoleCategory]]:
        """
        (shift, role) pairs below the role's average headcount, largest deficit first.
        Ties go to grid order, then role priority.
        """
        shift_ids = self.topology.shift_ids
        scored = []
        for role_rank, role in enumerate(PRIMARY_ROLES):
            counts = [self.state.role_count(s, role) for s in shift_ids]
            average = sum(counts) / len(shift_ids)
            for shift_rank, (shift_id, count) in enumerate(zip(shift_ids, counts)):
                deficit = average - count
                if deficit > 0:
                    scored.append((deficit, shift_rank, role_rank, shift_id, role))

        scored.sort(key=lambda item: (-item[0], item[1], item[2]))
        return [(shift_id, role) for _, _, _, shift_id, role in scored]

    def _eligible_for_balance(
        self,
        shift_id: str,
        index: dict[str, list[Volunteer]],
    ) -> list[Volunteer]:
        eligible = []
        for volunteer in index.get(shift_id, []):
            if not self._can_take(shift_id, volunteer):
                continue
            if not volunteer.prefer_consecutive and self._creates_consecutive_pair(shift_id, volunteer):
                continue
            eligible.append(volunteer)
        return eligible

    def _creates_consecutive_pair(self, shift_id: str, volunteer: Volunteer) -> bool:
        return any(
            self.state.is_assigned(neighbour, volunteer.name)
            for neighbour in self.topology.neighbours(shift_id)
        )

    def _choose_candidate(
        self,
        shift_id: str,
        candidates: list[Volunteer],
        role: Optional[RoleCategory],
    ) -> Volunteer:
        if role is not None:
            matching = [v for v in candidates if v.role == role]
            if matching:
                candidates = matching

        if self.topology.is_final_day(shift_id):
            # Keep newcomers from piling onto the last day
            final_day = self.topology.final_day
            spread = [
                v for v in candidates
                if any(self.topology.day_of(s) != final_day for s in self.state.shifts_for(v.name))
            ]
            if spread:
                candidates = spread

        # max() keeps the first of equal keys, i.e. priority order
        return max(candidates, key=self.state.remaining_capacity)

    def _assignment_count(self) -> int:
        return sum(self.state.headcount(s) for s in self.topology.shift_ids)

    def _build_result(self) -> ScheduleResult:
        """5: Freeze the state and report what could not be met."""
        schedule = self.state.freeze()
        shortfalls = find_staffing_shortfalls(schedule, self.topology, self.options.role_minimum)

        warnings = []
        if shortfalls:
            short_shifts = len({s.shift_id for s in shortfalls})
            warnings.append(f"{short_shifts} shifts below target staffing")
        if self.filer_shortfalls:
            warnings.append(f"{len(self.filer_shortfalls)} filers below minimum shift count")

        logger.info(
            f"Schedule built: {self._assignment_count()} assignments, "
            f"{len(shortfalls)} staffing shortfalls"
        )

        return ScheduleResult(
            schedule=schedule,
            shortfalls=shortfalls,
            filer_shortfalls=list(self.filer_shortfalls),
            warnings=warnings,
        )


def solve_schedule(
    volunteers: Sequence[Volunteer],
    topology: ShiftTopology,
    options: Optional[SchedulingOptions] = None,
) -> ScheduleResult:
    """
    Main entry point for the assignment engine.

    Args:
        volunteers: prepared volunteers (see availability.prepare_volunteers)
        topology: the shift grid
        options: SchedulingOptions, defaults if None

    Returns:
        ScheduleResult with the schedule and shortfalls
    """
    solver = ScheduleSolver(volunteers, topology, options)
    return solver.solve()
