from pydantic import BaseModel, Field
from typing import List, Optional, Union

from clinic_scheduler.services.scheduling.types import VolunteerRecord


class AvailabilityRecordIn(BaseModel):
    first_name: str
    last_name: str = ""
    email: str = ""
    role: Optional[str] = None
    max_shifts: int = Field(ge=0, le=12)
    prefer_consecutive: bool = False
    availability: Union[str, List[str]] = ""

    def to_record(self) -> VolunteerRecord:
        return VolunteerRecord(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            role=self.role,
            max_shifts=self.max_shifts,
            prefer_consecutive=self.prefer_consecutive,
            availability=self.availability,
        )


class AvailabilityDiagnosticResponse(BaseModel):
    volunteer: str
    token: Optional[str]
    message: str

    class Config:
        from_attributes = True
