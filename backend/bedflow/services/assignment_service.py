"""
Bed Assignment Service.
Contains the allocation logic: greedy assignment, manual assignment,
transfers and discharges.

Every operation checks all of its preconditions before the first write
and runs under the lock shared by the bed registry and the waiting queue,
so two assignments can never both take the same bed.
"""
from typing import Optional, List, Tuple
import logging

from bedflow.core.exceptions import (
    ValidationError,
    NoBedAvailableError,
    SourceBedNotOccupiedError,
    TargetBedNotAvailableError,
    InvalidTransferError,
)
from bedflow.core.state import BedManagementState
from bedflow.models.bed import Bed
from bedflow.models.enums import WardEnum
from bedflow.models.patient import Patient
from bedflow.services.priority_service import PatientData
from bedflow.utils.helpers import natural_id_key

logger = logging.getLogger("bedflow.assignment")


def select_closest_bed(candidates: List[Bed]) -> Optional[Bed]:
    """
    Greedy choice: the bed closest to the nursing station.

    Equal distances resolve to the lowest bed id.
    """
    if not candidates:
        return None
    return min(
        candidates,
        key=lambda bed: (bed.distance_from_station, natural_id_key(bed.id))
    )


class AssignmentService:
    """
    Service for bed assignment.

    Handles:
    - Smart assignment (ward match, fallback to any ward, closest bed)
    - Manual assignment to a chosen bed
    - Transfers between beds
    - Discharges
    """

    def __init__(self, state: BedManagementState):
        self.state = state
        self.beds = state.beds
        self.queue = state.queue
        self.lock = state.lock

    # ============================================
    # PATIENT RESOLUTION
    # ============================================

    def resolve_patient(
        self,
        patient_id: Optional[str] = None,
        patient_data: Optional[PatientData] = None,
    ) -> Patient:
        """
        Turns a patient reference into a patient.

        Args:
            patient_id: Id of a waiting patient
            patient_data: Data of a new patient admitted straight to a bed

        Returns:
            The waiting patient, or a new one built from the data
        """
        if patient_id is not None:
            return self.queue.get(patient_id)
        if patient_data is not None:
            return self.queue.create_patient(patient_data)
        raise ValidationError("A patient id or patient data is required")

    def _check_assignable(self, patient: Patient) -> bool:
        """
        Verifies the patient can take a bed.

        Returns:
            True if the patient is currently in the waiting queue
        """
        holder = self.beds.find_by_patient(patient.id)
        if holder is not None:
            raise ValidationError(
                f"Patient {patient.id} already occupies bed {holder.id}"
            )

        queued = self.queue.get_by_id(patient.id)
        if queued is not None and queued is not patient:
            raise ValidationError(
                f"Patient {patient.id} conflicts with a different waiting patient"
            )
        return queued is not None

    def _commit_assignment(self, bed: Bed, patient: Patient, from_queue: bool) -> Bed:
        """Occupies the bed, moves the patient out of the queue and publishes."""
        if from_queue:
            self.queue.take(patient.id)
        bed.occupy(patient)

        self.beds.notify_updated(bed)
        if from_queue:
            self.queue.notify_changed()

        logger.info(f"Patient {patient.id} ({patient.name}) assigned to bed {bed.id} ({bed.ward.value})")
        return bed

    # ============================================
    # ASSIGNMENT
    # ============================================

    def smart_assign(self, ward_needed: Optional[WardEnum], patient: Patient) -> Bed:
        """
        Assigns the closest Available bed, preferring the requested ward.

        1. Available beds of the requested ward
        2. If there are none, Available beds of any ward
        3. The closest one to the station wins

        Args:
            ward_needed: Ward the patient needs (None means any ward)
            patient: Patient to place

        Returns:
            The assigned bed
        """
        with self.lock:
            from_queue = self._check_assignable(patient)

            candidates: List[Bed] = []
            if ward_needed is not None:
                candidates = self.beds.candidates_by_ward_available(ward_needed)
            if not candidates:
                if ward_needed is not None:
                    logger.debug(f"No available bed in {WardEnum(ward_needed).value}, using fallback pool")
                candidates = self.beds.candidates_any_available()

            bed = select_closest_bed(candidates)
            if bed is None:
                raise NoBedAvailableError(WardEnum(ward_needed).value if ward_needed else None)

            return self._commit_assignment(bed, patient, from_queue)

    def manual_assign(self, bed_id: str, patient: Patient) -> Bed:
        """
        Assigns a patient to a bed chosen by the caller.

        Args:
            bed_id: Target bed id
            patient: Patient to place

        Returns:
            The assigned bed
        """
        with self.lock:
            bed = self.beds.get(bed_id)
            if not bed.is_available:
                raise TargetBedNotAvailableError(bed_id, bed.status.value)

            from_queue = self._check_assignable(patient)
            return self._commit_assignment(bed, patient, from_queue)

    # ============================================
    # TRANSFER
    # ============================================

    def transfer(self, source_bed_id: str, target_bed_id: str) -> Tuple[Bed, Bed]:
        """
        Moves a patient from one bed to another.

        The source bed goes to cleaning; the very same patient object ends
        up in the target bed.

        Args:
            source_bed_id: Occupied bed
            target_bed_id: Available bed

        Returns:
            (source bed, target bed) after the move
        """
        if source_bed_id == target_bed_id:
            raise InvalidTransferError(source_bed_id)

        with self.lock:
            source = self.beds.get(source_bed_id)
            target = self.beds.get(target_bed_id)

            if not source.is_occupied:
                raise SourceBedNotOccupiedError(source_bed_id, source.status.value)
            if not target.is_available:
                raise TargetBedNotAvailableError(target_bed_id, target.status.value)

            patient = source.release()
            target.occupy(patient)

            self.beds.notify_updated(source)
            self.beds.notify_updated(target)

            logger.info(f"Patient {patient.id} transferred from bed {source.id} to bed {target.id}")
            return source, target

    # ============================================
    # DISCHARGE
    # ============================================

    def discharge(self, bed_id: str) -> Bed:
        """
        Discharges the patient of a bed; the bed goes to cleaning.

        Discharging a bed with no patient changes nothing.

        Args:
            bed_id: Bed id

        Returns:
            The bed
        """
        with self.lock:
            bed = self.beds.get(bed_id)
            if not bed.is_occupied:
                logger.debug(f"Bed {bed_id} has no patient to discharge ({bed.status.value})")
                return bed

            patient = bed.release()
            self.beds.notify_updated(bed)

            logger.info(f"Patient {patient.id} discharged from bed {bed_id}")
            return bed
