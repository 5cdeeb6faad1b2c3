"""
Waiting queue endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from bedflow.core.dependencies import get_state
from bedflow.core.exceptions import PatientNotFoundError
from bedflow.core.state import BedManagementState
from bedflow.schemas.patient import (
    PatientCreate,
    PatientResponse,
    QueueEntryResponse,
    PriorityExplanationResponse,
)
from bedflow.schemas.responses import MessageResponse
from bedflow.utils.helpers import format_wait_time

router = APIRouter()


@router.get("", response_model=List[QueueEntryResponse])
def get_queue(state: BedManagementState = Depends(get_state)):
    """Waiting patients, most urgent first."""
    now = state.clock()
    return [
        QueueEntryResponse.from_patient(p, position, now)
        for position, p in enumerate(state.queue.ordered_snapshot(now), start=1)
    ]


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def add_patient(
    request: PatientCreate,
    state: BedManagementState = Depends(get_state),
):
    """Admits a patient into the waiting queue."""
    patient = state.queue.enqueue(request)
    return PatientResponse.model_validate(patient)


@router.get("/{patient_id}/priority", response_model=PriorityExplanationResponse)
def explain_priority(patient_id: str, state: BedManagementState = Depends(get_state)):
    """Explains how the priority of a waiting patient is computed."""
    try:
        breakdown = state.queue.explain(patient_id)
    except PatientNotFoundError:
        raise HTTPException(status_code=404, detail="Patient not found in queue")

    return PriorityExplanationResponse(
        patient_id=breakdown.patient_id,
        triage_level=breakdown.triage_level,
        wait_hours=round(breakdown.wait_hours, 4),
        wait_time=format_wait_time(int(breakdown.wait_hours * 60)),
        score=round(breakdown.score, 4),
        position=breakdown.position,
        queue_size=breakdown.queue_size,
        details=breakdown.details,
    )


@router.delete("/{patient_id}", response_model=MessageResponse)
async def remove_patient(patient_id: str, state: BedManagementState = Depends(get_state)):
    """Removes a patient from the queue; the record is discarded."""
    try:
        state.queue.dequeue(patient_id)
    except PatientNotFoundError:
        raise HTTPException(status_code=404, detail="Patient not found in queue")

    return MessageResponse(
        success=True,
        message=f"Patient {patient_id} removed from queue",
        data={"patient_id": patient_id}
    )
