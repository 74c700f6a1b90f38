"""
Mentor pairing.

Pairs each first-time mentor with a senior mentor for every day they work:
1. Round robin: the senior with the fewest first-timers that day takes the next one
2. Overlap repair: a pair that never shares a shift moves to the first senior who does

Mentors on neither designation list work independently and are left out.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from .topology import ShiftTopology
from .types import MentorTeams, Volunteer


logger = logging.getLogger(__name__)


def _name_key(name: str) -> str:
    return " ".join(name.split()).lower()


def shifts_by_day(
    volunteer_assignments: Mapping[str, Sequence[str]],
    topology: ShiftTopology,
) -> dict[int, dict[str, set[str]]]:
    """day -> volunteer name -> shift ids worked that day"""
    result: dict[int, dict[str, set[str]]] = {day: {} for day in range(1, topology.days + 1)}
    for name, shift_ids in volunteer_assignments.items():
        for shift_id in shift_ids:
            day = topology.day_of(shift_id)
            result[day].setdefault(name, set()).add(shift_id)
    return result


def pair_mentors_for_day(
    first_time_mentors: Sequence[str],
    seniors: Sequence[str],
    day_shifts: Mapping[str, set[str]],
) -> dict[str, Optional[str]]:
    """
    Pair one day's first-time mentors with that day's seniors.
    Both sequences are in roster order, which is the tie-break for both passes.
    """
    pairs: dict[str, Optional[str]] = {}
    load = {senior: 0 for senior in seniors}

    # Pass 1
    for mentor in first_time_mentors:
        if not seniors:
            pairs[mentor] = None
            continue
        senior = min(seniors, key=lambda s: load[s])
        load[senior] += 1
        pairs[mentor] = senior

    # Pass 2: loads are not rebalanced, overlap wins over balance
    for mentor, senior in list(pairs.items()):
        if senior is None:
            continue
        mentor_shifts = day_shifts.get(mentor, set())
        if mentor_shifts & day_shifts.get(senior, set()):
            continue
        for candidate in seniors:
            if mentor_shifts & day_shifts.get(candidate, set()):
                logger.debug(f"Moved {mentor} from {senior} to {candidate} for shift overlap")
                pairs[mentor] = candidate
                break
        else:
            logger.info(f"No senior shares a shift with {mentor}, keeping {senior}")

    return pairs


def compute_mentor_teams(
    volunteer_assignments: Mapping[str, Sequence[str]],
    volunteer_roster: Iterable[Volunteer],
    senior_mentor_names: Iterable[str],
    first_time_mentor_names: Iterable[str],
    topology: ShiftTopology,
) -> MentorTeams:
    """
    Compute day-by-day senior assignments for first-time mentors.

    Args:
        volunteer_assignments: volunteer name -> assigned shift ids
        volunteer_roster: volunteers in roster order
        senior_mentor_names: designated seniors
        first_time_mentor_names: designated first-timers; a name on both lists counts as senior
        topology: supplies day labels and the shift -> day mapping

    Returns:
        {day_label: {first_time_mentor: senior name or None}}; a first-time
        mentor appears on every day they work, with None if no senior works that day
    """
    senior_keys = {_name_key(n) for n in senior_mentor_names}
    first_time_keys = {_name_key(n) for n in first_time_mentor_names} - senior_keys
    roster = list(volunteer_roster)
    by_day = shifts_by_day(volunteer_assignments, topology)

    teams: MentorTeams = {}
    for day, day_label in enumerate(topology.day_labels, start=1):
        day_shifts = by_day[day]
        seniors = [
            v.name for v in roster
            if _name_key(v.name) in senior_keys and day_shifts.get(v.name)
        ]
        first_timers = [
            v.name for v in roster
            if _name_key(v.name) in first_time_keys and day_shifts.get(v.name)
        ]
        teams[day_label] = pair_mentors_for_day(first_timers, seniors, day_shifts)
        logger.info(f"{day_label}: {len(first_timers)} first-time mentors, {len(seniors)} seniors")

    return teams
