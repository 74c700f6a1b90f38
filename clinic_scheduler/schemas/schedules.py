from pydantic import BaseModel
from typing import Dict, List, Optional

from clinic_scheduler.schemas.volunteers import AvailabilityRecordIn, AvailabilityDiagnosticResponse
from clinic_scheduler.services.scheduling.types import RoleCategory


class ShiftResponse(BaseModel):
    id: str
    day: int
    slot_key: str
    day_label: str
    start_label: str
    end_label: str

    class Config:
        from_attributes = True


class ScheduleGenerateRequest(BaseModel):
    records: List[AvailabilityRecordIn]
    senior_mentors: List[str] = []
    first_time_mentors: List[str] = []
    prioritize_consecutive: Optional[bool] = None


class StaffingShortfallResponse(BaseModel):
    shift_id: str
    role: RoleCategory
    target: int
    actual: int

    class Config:
        from_attributes = True


class FilerShortfallResponse(BaseModel):
    volunteer: str
    target: int
    actual: int

    class Config:
        from_attributes = True


class ScheduleResponse(BaseModel):
    success: bool
    shift_assignments: Dict[str, List[str]]
    volunteer_assignments: Dict[str, List[str]]
    role_counts: Dict[str, Dict[RoleCategory, int]]
    shortfalls: List[StaffingShortfallResponse]
    filer_shortfalls: List[FilerShortfallResponse]
    diagnostics: List[AvailabilityDiagnosticResponse]
    warnings: List[str]
    mentor_teams: Dict[str, Dict[str, Optional[str]]]


class ScheduleDiffRequest(BaseModel):
    old_assignments: Dict[str, List[str]]
    new_assignments: Dict[str, List[str]]


class ShiftChangeResponse(BaseModel):
    old: List[str]
    new: List[str]
    added: List[str]
    removed: List[str]


class ScheduleDiffResponse(BaseModel):
    changes: Dict[str, ShiftChangeResponse]
