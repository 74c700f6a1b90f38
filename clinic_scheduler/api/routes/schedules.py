import logging
from dataclasses import replace
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from clinic_scheduler.api.deps import get_scheduling_options, get_topology
from clinic_scheduler.schemas.schedules import (
    FilerShortfallResponse,
    ScheduleDiffRequest,
    ScheduleDiffResponse,
    ScheduleGenerateRequest,
    ScheduleResponse,
    ShiftChangeResponse,
    ShiftResponse,
    StaffingShortfallResponse,
)
from clinic_scheduler.schemas.volunteers import AvailabilityDiagnosticResponse
from clinic_scheduler.services.scheduling import (
    NoEligibleVolunteersError,
    SchedulingOptions,
    ShiftTopology,
    diff_schedules,
    generate_plan,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.get("/topology", response_model=List[ShiftResponse])
def get_shift_topology(topology: ShiftTopology = Depends(get_topology)):
    return [ShiftResponse.model_validate(shift) for shift in topology.shifts]


@router.post("/generate", response_model=ScheduleResponse)
def generate(
    payload: ScheduleGenerateRequest,
    topology: ShiftTopology = Depends(get_topology),
    options: SchedulingOptions = Depends(get_scheduling_options),
):
    if payload.prioritize_consecutive is not None:
        options = replace(options, prioritize_consecutive=payload.prioritize_consecutive)

    try:
        plan = generate_plan(
            [record.to_record() for record in payload.records],
            senior_mentor_names=payload.senior_mentors,
            first_time_mentor_names=payload.first_time_mentors,
            topology=topology,
            options=options,
        )
    except NoEligibleVolunteersError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = plan.result
    schedule = result.schedule
    if result.warnings:
        logger.info(f"Schedule generated with warnings: {result.warnings}")

    return ScheduleResponse(
        success=result.success,
        shift_assignments={k: list(v) for k, v in schedule.shift_assignments.items()},
        volunteer_assignments={k: list(v) for k, v in schedule.volunteer_assignments.items()},
        role_counts={k: dict(v) for k, v in schedule.role_counts.items()},
        shortfalls=[StaffingShortfallResponse.model_validate(s) for s in result.shortfalls],
        filer_shortfalls=[FilerShortfallResponse.model_validate(s) for s in result.filer_shortfalls],
        diagnostics=[AvailabilityDiagnosticResponse.model_validate(d) for d in result.diagnostics],
        warnings=result.warnings,
        mentor_teams=plan.mentor_teams,
    )


@router.post("/diff", response_model=ScheduleDiffResponse)
def diff(payload: ScheduleDiffRequest):
    changes = diff_schedules(payload.old_assignments, payload.new_assignments)
    return ScheduleDiffResponse(
        changes={
            name: ShiftChangeResponse(
                old=list(change.old),
                new=list(change.new),
                added=list(change.added),
                removed=list(change.removed),
            )
            for name, change in changes.items()
        }
    )
