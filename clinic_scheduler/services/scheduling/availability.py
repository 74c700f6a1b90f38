"""
Availability preparation utilities.
Turns raw form records into Volunteers the solver can work with.
"""

import logging
from typing import Iterable, Optional, Sequence, Union

from .roles import classify_role
from .topology import ShiftTopology
from .types import (
    AvailabilityDiagnostic,
    Volunteer,
    VolunteerRecord,
)


logger = logging.getLogger(__name__)


def split_availability(raw: Union[str, Sequence[str], None]) -> list[str]:
    """Split a comma-delimited availability string (or list) into cleaned tokens."""
    if raw is None:
        return []
    if isinstance(raw, str):
        parts = raw.split(",")
    else:
        parts = list(raw)
    tokens = []
    for part in parts:
        token = str(part).strip().upper()
        if token:
            tokens.append(token)
    return tokens


def parse_availability(
    raw: Union[str, Sequence[str], None],
    topology: ShiftTopology,
    volunteer_name: str = "",
) -> tuple[list[str], list[AvailabilityDiagnostic]]:
    """
    Validate availability tokens against the topology.

    Returns:
        (valid shift ids in grid order without duplicates, diagnostics for dropped tokens)
    """
    valid: set[str] = set()
    diagnostics: list[AvailabilityDiagnostic] = []

    for token in split_availability(raw):
        if topology.is_valid(token):
            valid.add(token)
            continue
        diagnostic = AvailabilityDiagnostic(
            volunteer=volunteer_name,
            token=token,
            message=f"Unrecognized shift id '{token}' dropped",
        )
        logger.warning(f"{volunteer_name}: {diagnostic.message}")
        diagnostics.append(diagnostic)

    return topology.sort_shift_ids(valid), diagnostics


def prepare_volunteer(
    record: VolunteerRecord,
    topology: ShiftTopology,
) -> tuple[Optional[Volunteer], list[AvailabilityDiagnostic]]:
    """Classify and validate a single record. Returns (None, diagnostics) if excluded."""
    name = record.full_name
    shift_ids, diagnostics = parse_availability(record.availability, topology, name)

    reason = None
    if not name:
        reason = "Record has no name"
    elif record.max_shifts is None or record.max_shifts <= 0:
        reason = f"max_shifts is {record.max_shifts}"
    elif not shift_ids:
        reason = "No valid availability"

    if reason:
        logger.warning(f"Excluding {name or record.email or '<unnamed>'}: {reason}")
        diagnostics.append(AvailabilityDiagnostic(volunteer=name, token=None, message=f"Excluded: {reason}"))
        return None, diagnostics

    volunteer = Volunteer(
        name=name,
        email=(record.email or "").strip(),
        role=classify_role(record.role),
        max_shifts=record.max_shifts,
        prefer_consecutive=bool(record.prefer_consecutive),
        available_shifts=tuple(shift_ids),
    )
    return volunteer, diagnostics


def prepare_volunteers(
    records: Iterable[VolunteerRecord],
    topology: ShiftTopology,
) -> tuple[list[Volunteer], list[AvailabilityDiagnostic]]:
    """
    Prepare every record, keeping input order.

    Full name is the key within one run, so a repeated name keeps the first
    record and drops the rest with a diagnostic.
    """
    volunteers: list[Volunteer] = []
    diagnostics: list[AvailabilityDiagnostic] = []
    seen: set[str] = set()

    for record in records:
        volunteer, record_diagnostics = prepare_volunteer(record, topology)
        diagnostics.extend(record_diagnostics)
        if volunteer is None:
            continue
        if volunteer.name in seen:
            logger.warning(f"Duplicate volunteer name {volunteer.name}, keeping first record")
            diagnostics.append(AvailabilityDiagnostic(
                volunteer=volunteer.name, token=None, message="Excluded: duplicate name",
            ))
            continue
        seen.add(volunteer.name)
        volunteers.append(volunteer)

    logger.info(f"Prepared {len(volunteers)} volunteers, {len(diagnostics)} diagnostics")
    return volunteers, diagnostics


def build_shift_index(volunteers: Iterable[Volunteer]) -> dict[str, list[Volunteer]]:
    """Reverse index: shift id -> volunteers who declared it, in the given order."""
    index: dict[str, list[Volunteer]] = {}
    for volunteer in volunteers:
        for shift_id in volunteer.available_shifts:
            index.setdefault(shift_id, []).append(volunteer)
    return index


def available_volunteers_for_shift(
    volunteers: Iterable[Volunteer],
    shift_id: str,
) -> list[Volunteer]:
    """Volunteers who declared a given shift."""
    return [v for v in volunteers if shift_id in v.available_shifts]
