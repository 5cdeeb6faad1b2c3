"""
Bed model.
"""
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from bedflow.models.enums import (
    BedStatusEnum,
    BedTypeEnum,
    WardEnum,
    CRITICAL_WARDS,
)
from bedflow.models.patient import Patient


class Bed(BaseModel):
    """
    A hospital bed.

    ``patient`` is set if and only if the status is Occupied. The
    registry and the assignment service are the only writers.
    """

    id: str
    ward: WardEnum
    status: BedStatusEnum = BedStatusEnum.AVAILABLE
    distance_from_station: float = Field(ge=0)
    patient: Optional[Patient] = None

    @computed_field
    @property
    def type(self) -> BedTypeEnum:
        if self.ward in CRITICAL_WARDS:
            return BedTypeEnum.CRITICAL
        return BedTypeEnum.STANDARD

    @property
    def is_available(self) -> bool:
        return self.status == BedStatusEnum.AVAILABLE

    @property
    def is_occupied(self) -> bool:
        return self.status == BedStatusEnum.OCCUPIED

    def occupy(self, patient: Patient) -> None:
        """Attaches a patient and marks the bed Occupied."""
        self.patient = patient
        self.status = BedStatusEnum.OCCUPIED

    def release(self) -> Optional[Patient]:
        """
        Detaches the patient and sends the bed to cleaning.

        Returns:
            The patient that occupied the bed, if any
        """
        patient = self.patient
        self.patient = None
        self.status = BedStatusEnum.CLEANING
        return patient
