"""
Schedule diffing for change notifications.
Only volunteers who already had a schedule are reported; additions are not changes.
"""

from dataclasses import dataclass
from typing import Mapping, Sequence


@dataclass(frozen=True)
class ShiftChange:
    old: tuple[str, ...]
    new: tuple[str, ...]

    @property
    def added(self) -> tuple[str, ...]:
        return tuple(sorted(set(self.new) - set(self.old)))

    @property
    def removed(self) -> tuple[str, ...]:
        return tuple(sorted(set(self.old) - set(self.new)))


def diff_schedules(
    old_assignments: Mapping[str, Sequence[str]],
    new_assignments: Mapping[str, Sequence[str]],
) -> dict[str, ShiftChange]:
    """
    Compare volunteer -> shifts maps.

    Returns:
        volunteer name -> ShiftChange (sorted, deduplicated) for volunteers in
        both maps whose shift sets differ. Order of shifts is ignored.
    """
    changes = {}
    for name, old_shifts in old_assignments.items():
        if name not in new_assignments:
            continue
        old_sorted = tuple(sorted(set(old_shifts)))
        new_sorted = tuple(sorted(set(new_assignments[name])))
        if old_sorted != new_sorted:
            changes[name] = ShiftChange(old=old_sorted, new=new_sorted)
    return changes
