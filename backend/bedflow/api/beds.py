"""
Bed endpoints.
Capacity management, status changes, assignment, transfer and discharge.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
import logging

from bedflow.core.dependencies import get_state, get_assignment_service
from bedflow.core.exceptions import (
    ValidationError,
    BedNotFoundError,
    PatientNotFoundError,
    BedOccupiedError,
    InvalidTransitionError,
    NoBedAvailableError,
    SourceBedNotOccupiedError,
    TargetBedNotAvailableError,
    InvalidTransferError,
)
from bedflow.core.state import BedManagementState
from bedflow.models.bed import Bed
from bedflow.models.enums import BedStatusEnum, WardEnum
from bedflow.schemas.bed import (
    BedResponse,
    BedCreateRequest,
    BedStatusRequest,
    SmartAssignRequest,
    ManualAssignRequest,
    TransferRequest,
    TransferResponse,
)
from bedflow.schemas.responses import MessageResponse
from bedflow.services.assignment_service import AssignmentService

router = APIRouter()
logger = logging.getLogger("bedflow.api.beds")


def to_response(bed: Bed) -> BedResponse:
    return BedResponse.model_validate(bed)


def parse_status_filter(value: Optional[str]) -> Optional[BedStatusEnum]:
    """Matches a status filter case-insensitively ("available" == "Available")."""
    if value is None:
        return None
    needle = value.strip().lower()
    for member in BedStatusEnum:
        if member.value.lower() == needle:
            return member
    raise HTTPException(status_code=422, detail=f"Unknown bed status: {value}")


# ============================================
# CAPACITY MANAGEMENT
# ============================================

@router.get("", response_model=List[BedResponse])
def list_beds(
    bed_status: Optional[str] = Query(None, alias="status"),
    ward: Optional[WardEnum] = None,
    state: BedManagementState = Depends(get_state),
):
    """Lists beds, optionally filtered by status (any case) and ward."""
    status_filter = parse_status_filter(bed_status)
    return [to_response(b) for b in state.beds.list(status=status_filter, ward=ward)]


@router.post("", response_model=BedResponse, status_code=status.HTTP_201_CREATED)
async def create_bed(
    request: BedCreateRequest,
    state: BedManagementState = Depends(get_state),
):
    """Adds an Available bed to a ward."""
    try:
        bed = state.beds.add(request.ward, request.distance_from_station)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return to_response(bed)


@router.get("/{bed_id}", response_model=BedResponse)
def get_bed(bed_id: str, state: BedManagementState = Depends(get_state)):
    """Gets a specific bed."""
    try:
        return to_response(state.beds.get(bed_id))
    except BedNotFoundError:
        raise HTTPException(status_code=404, detail="Bed not found")


@router.delete("/{bed_id}", response_model=MessageResponse)
async def delete_bed(bed_id: str, state: BedManagementState = Depends(get_state)):
    """Removes an unoccupied bed."""
    try:
        state.beds.remove(bed_id)
    except BedNotFoundError:
        raise HTTPException(status_code=404, detail="Bed not found")
    except BedOccupiedError as e:
        logger.warning(e.message)
        raise HTTPException(status_code=409, detail=e.message)

    return MessageResponse(success=True, message=f"Bed {bed_id} removed", data={"bed_id": bed_id})


@router.patch("/{bed_id}/status", response_model=BedResponse)
async def set_bed_status(
    bed_id: str,
    request: BedStatusRequest,
    state: BedManagementState = Depends(get_state),
):
    """Changes the status of an unoccupied bed."""
    try:
        bed = state.beds.set_status(bed_id, request.status)
    except BedNotFoundError:
        raise HTTPException(status_code=404, detail="Bed not found")
    except InvalidTransitionError as e:
        logger.warning(e.message)
        raise HTTPException(status_code=409, detail=e.message)
    return to_response(bed)


# ============================================
# ASSIGNMENT
# ============================================

@router.post("/assign", response_model=BedResponse)
async def smart_assign(
    request: SmartAssignRequest,
    service: AssignmentService = Depends(get_assignment_service),
):
    """
    Assigns the closest Available bed.

    Beds of the requested ward are preferred; when none is free any
    Available bed is used.
    """
    try:
        patient = service.resolve_patient(request.patient_id, request.patient)
        bed = service.smart_assign(request.ward, patient)
    except PatientNotFoundError:
        raise HTTPException(status_code=404, detail="Patient not found in queue")
    except NoBedAvailableError as e:
        logger.warning(e.message)
        raise HTTPException(status_code=409, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return to_response(bed)


@router.post("/transfer", response_model=TransferResponse)
async def transfer_patient(
    request: TransferRequest,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Moves a patient to another bed; the source bed goes to cleaning."""
    try:
        source, target = service.transfer(request.source_bed_id, request.target_bed_id)
    except InvalidTransferError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except BedNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (SourceBedNotOccupiedError, TargetBedNotAvailableError) as e:
        logger.warning(e.message)
        raise HTTPException(status_code=409, detail=e.message)

    return TransferResponse(source_bed=to_response(source), target_bed=to_response(target))


@router.post("/{bed_id}/assign", response_model=BedResponse)
async def manual_assign(
    bed_id: str,
    request: ManualAssignRequest,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assigns a patient to a bed chosen by the caller."""
    try:
        patient = service.resolve_patient(request.patient_id, request.patient)
        bed = service.manual_assign(bed_id, patient)
    except BedNotFoundError:
        raise HTTPException(status_code=404, detail="Bed not found")
    except PatientNotFoundError:
        raise HTTPException(status_code=404, detail="Patient not found in queue")
    except TargetBedNotAvailableError as e:
        logger.warning(e.message)
        raise HTTPException(status_code=409, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return to_response(bed)


@router.post("/{bed_id}/discharge", response_model=BedResponse)
async def discharge_patient(
    bed_id: str,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Discharges the patient of a bed. Beds without patient are left as they are."""
    try:
        bed = service.discharge(bed_id)
    except BedNotFoundError:
        raise HTTPException(status_code=404, detail="Bed not found")
    return to_response(bed)
