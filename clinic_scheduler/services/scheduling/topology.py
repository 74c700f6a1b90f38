"""
Shift topology: the fixed days x time-slots grid of the event.

Shift ids (D1A, D1B, ...) depend only on the day index and slot key, so
display labels can be changed without invalidating stored availability.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence


@dataclass(frozen=True)
class SlotDefinition:
    key: str
    start_label: str = ""
    end_label: str = ""


@dataclass(frozen=True)
class ShiftDefinition:
    id: str
    day: int  # 1-based
    slot_index: int  # 0-based
    slot_key: str
    day_label: str
    start_label: str
    end_label: str


def make_shift_id(day: int, slot_key: str) -> str:
    return f"D{day}{slot_key}"


@dataclass(frozen=True)
class ShiftTopology:
    day_labels: tuple[str, ...]
    slots: tuple[SlotDefinition, ...]
    shifts: tuple[ShiftDefinition, ...] = field(init=False, repr=False)
    _by_id: dict = field(init=False, repr=False, compare=False)
    _order: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        shifts = tuple(
            ShiftDefinition(
                id=make_shift_id(day, slot.key),
                day=day,
                slot_index=slot_index,
                slot_key=slot.key,
                day_label=day_label,
                start_label=slot.start_label,
                end_label=slot.end_label,
            )
            for day, day_label in enumerate(self.day_labels, start=1)
            for slot_index, slot in enumerate(self.slots)
        )
        # frozen dataclass: derived fields go through object.__setattr__
        object.__setattr__(self, "shifts", shifts)
        object.__setattr__(self, "_by_id", {s.id: s for s in shifts})
        object.__setattr__(self, "_order", {s.id: i for i, s in enumerate(shifts)})

    @property
    def days(self) -> int:
        return len(self.day_labels)

    @property
    def final_day(self) -> int:
        return self.days

    @property
    def shift_ids(self) -> list[str]:
        return [s.id for s in self.shifts]

    def is_valid(self, shift_id: str) -> bool:
        return shift_id in self._by_id

    def get(self, shift_id: str) -> Optional[ShiftDefinition]:
        return self._by_id.get(shift_id)

    def _require(self, shift_id: str) -> ShiftDefinition:
        shift = self._by_id.get(shift_id)
        if shift is None:
            raise KeyError(f"Unknown shift id: {shift_id}")
        return shift

    def order_of(self, shift_id: str) -> int:
        """Position of a shift in grid order (day-major, slot-minor)."""
        self._require(shift_id)
        return self._order[shift_id]

    def day_of(self, shift_id: str) -> int:
        return self._require(shift_id).day

    def day_label_of(self, shift_id: str) -> str:
        return self._require(shift_id).day_label

    def is_final_day(self, shift_id: str) -> bool:
        return self.day_of(shift_id) == self.final_day

    def shift_ids_for_day(self, day: int) -> list[str]:
        return [s.id for s in self.shifts if s.day == day]

    def sort_shift_ids(self, shift_ids: Iterable[str]) -> list[str]:
        return sorted(shift_ids, key=self.order_of)

    def are_consecutive(self, first: str, second: str) -> bool:
        """Same day and adjacent slot positions, in either order."""
        a = self._require(first)
        b = self._require(second)
        return a.day == b.day and abs(a.slot_index - b.slot_index) == 1

    def neighbours(self, shift_id: str) -> list[str]:
        shift = self._require(shift_id)
        result = []
        for offset in (-1, 1):
            index = shift.slot_index + offset
            if 0 <= index < len(self.slots):
                result.append(make_shift_id(shift.day, self.slots[index].key))
        return result

    def consecutive_runs(self, shift_ids: Iterable[str]) -> list[list[str]]:
        """
        Split a set of shifts into maximal runs of consecutive shifts.

        Input is deduplicated and sorted in grid order; single shifts come
        back as runs of length 1.
        """
        ordered = self.sort_shift_ids(set(shift_ids))
        runs: list[list[str]] = []
        for shift_id in ordered:
            if runs and self.are_consecutive(runs[-1][-1], shift_id):
                runs[-1].append(shift_id)
            else:
                runs.append([shift_id])
        return runs


def build_topology(day_labels: Sequence[str], slots: Sequence[SlotDefinition]) -> ShiftTopology:
    """Create a validated topology from day labels and slot definitions."""
    if not day_labels:
        raise ValueError("Topology needs at least one day.")
    if len(set(day_labels)) != len(day_labels):
        raise ValueError(f"Day labels must be unique, got {list(day_labels)}")
    if not slots:
        raise ValueError("Topology needs at least one slot per day.")
    keys = [slot.key for slot in slots]
    if len(set(keys)) != len(keys):
        raise ValueError(f"Slot keys must be unique, got {keys}")
    if any(not key or not key.isalpha() for key in keys):
        raise ValueError(f"Slot keys must be non-empty letters, got {keys}")
    return ShiftTopology(day_labels=tuple(day_labels), slots=tuple(slots))


DEFAULT_SLOTS: tuple[SlotDefinition, ...] = (
    SlotDefinition(key="A", start_label="9:45 AM", end_label="1:15 PM"),
    SlotDefinition(key="B", start_label="12:45 PM", end_label="4:15 PM"),
    SlotDefinition(key="C", start_label="3:45 PM", end_label="7:00 PM"),
)

DEFAULT_DAY_LABELS: tuple[str, ...] = ("Day 1", "Day 2", "Day 3", "Day 4")

DEFAULT_TOPOLOGY = build_topology(DEFAULT_DAY_LABELS, DEFAULT_SLOTS)
