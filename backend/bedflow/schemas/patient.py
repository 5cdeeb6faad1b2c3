"""
Patient schemas.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from bedflow.models.patient import Patient


class PatientCreate(BaseModel):
    """Schema to admit a patient."""
    name: str = Field(min_length=1)
    triage_level: int = Field(ge=1, le=5)
    condition: str = "Stable"
    extra: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        # Unknown clinical fields end up in the patient extra mapping
        extra = "allow"


class PatientResponse(BaseModel):
    """Response schema for a patient."""
    id: str
    name: str
    triage_level: int
    condition: str
    joined_at: Optional[datetime] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        from_attributes = True


class QueueEntryResponse(PatientResponse):
    """Waiting patient with its current score."""
    position: int
    score: float
    wait_hours: float

    @classmethod
    def from_patient(cls, patient: Patient, position: int, now: datetime) -> "QueueEntryResponse":
        return cls(
            **patient.model_dump(),
            position=position,
            score=round(patient.score(now), 4),
            wait_hours=round(patient.wait_hours(now), 4),
        )


class PriorityExplanationResponse(BaseModel):
    """Breakdown of a waiting patient's priority."""
    patient_id: str
    triage_level: int
    wait_hours: float
    wait_time: str
    score: float
    position: int
    queue_size: int
    details: List[str] = []


class DirectoryEntryResponse(BaseModel):
    """Patient located in the directory."""
    patient: PatientResponse
    location: str
    bed_id: Optional[str] = None
