"""
Bed schemas.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional

from bedflow.models.enums import BedStatusEnum, BedTypeEnum, WardEnum
from bedflow.schemas.patient import PatientCreate, PatientResponse


class BedResponse(BaseModel):
    """Response schema for a bed."""

    id: str
    ward: WardEnum
    status: BedStatusEnum
    distance_from_station: float
    type: BedTypeEnum
    patient: Optional[PatientResponse] = None

    class Config:
        from_attributes = True


class BedCreateRequest(BaseModel):
    """Request to add a bed."""
    ward: WardEnum
    distance_from_station: float = Field(ge=0)


class BedStatusRequest(BaseModel):
    """Request to change a bed status."""
    status: BedStatusEnum


class PatientReference(BaseModel):
    """
    Either a waiting patient (by id) or a new patient (by data).
    Exactly one of both must be given.
    """
    patient_id: Optional[str] = None
    patient: Optional[PatientCreate] = None

    @model_validator(mode="after")
    def check_single_reference(self):
        if (self.patient_id is None) == (self.patient is None):
            raise ValueError("Provide either patient_id or patient")
        return self


class SmartAssignRequest(PatientReference):
    """Request for automatic assignment."""
    ward: Optional[WardEnum] = None


class ManualAssignRequest(PatientReference):
    """Request to assign a chosen bed."""
    pass


class TransferRequest(BaseModel):
    """Request to move a patient between beds."""
    source_bed_id: str
    target_bed_id: str


class TransferResponse(BaseModel):
    """Both beds after a transfer."""
    source_bed: BedResponse
    target_bed: BedResponse
