"""
Bed registry.
Owns every bed and enforces the direct status transitions.
"""
from typing import Optional, List
import threading
import logging

from bedflow.config import settings
from bedflow.core.events import EventBroadcaster
from bedflow.core.exceptions import (
    ValidationError,
    BedNotFoundError,
    BedOccupiedError,
    InvalidTransitionError,
)
from bedflow.models.bed import Bed
from bedflow.models.enums import BedStatusEnum, EventTopicEnum, WardEnum
from bedflow.repositories.base import BaseRegistry

logger = logging.getLogger("bedflow.beds")


class BedRegistry(BaseRegistry[Bed]):
    """Registry for bed operations."""

    def __init__(
        self,
        lock: threading.RLock,
        broadcaster: EventBroadcaster,
        id_prefix: str = None,
    ):
        super().__init__(lock, broadcaster, id_prefix or settings.BED_ID_PREFIX)

    # ============================================
    # LIFECYCLE
    # ============================================

    def add(self, ward: WardEnum, distance_from_station: float) -> Bed:
        """
        Creates a new Available bed.

        Args:
            ward: Ward the bed belongs to
            distance_from_station: Distance to the nursing station

        Returns:
            The created bed
        """
        try:
            ward = WardEnum(ward)
        except ValueError:
            raise ValidationError(f"Unknown ward: {ward}")
        if distance_from_station is None or distance_from_station < 0:
            raise ValidationError("distance_from_station must be a non-negative number")

        with self.lock:
            bed = Bed(
                id=self.next_id(),
                ward=ward,
                distance_from_station=distance_from_station,
            )
            self._items[bed.id] = bed
            logger.info(f"Bed {bed.id} created in {bed.ward.value} (distance {bed.distance_from_station})")
            self.notify_updated(bed)
            return bed

    def remove(self, bed_id: str) -> bool:
        """
        Deletes a bed.

        Args:
            bed_id: Bed id

        Returns:
            True when the bed was deleted
        """
        with self.lock:
            bed = self.get(bed_id)
            if bed.is_occupied:
                raise BedOccupiedError(bed_id)

            del self._items[bed_id]
            logger.info(f"Bed {bed_id} removed")
            self.broadcaster.publish(EventTopicEnum.BED_REMOVED, bed_id)
            return True

    # ============================================
    # QUERIES
    # ============================================

    def get(self, bed_id: str) -> Bed:
        """
        Gets a bed or fails.

        Raises:
            BedNotFoundError: If the bed does not exist
        """
        bed = self.get_by_id(bed_id)
        if bed is None:
            raise BedNotFoundError(bed_id)
        return bed

    def list(
        self,
        status: Optional[BedStatusEnum] = None,
        ward: Optional[WardEnum] = None,
    ) -> List[Bed]:
        """
        Lists beds, optionally filtered.

        Args:
            status: Only beds with this status
            ward: Only beds of this ward

        Returns:
            Matching beds, in no particular order
        """
        beds = self.get_all()
        if status is not None:
            beds = [b for b in beds if b.status == status]
        if ward is not None:
            beds = [b for b in beds if b.ward == ward]
        return beds

    def candidates_by_ward_available(self, ward: WardEnum) -> List[Bed]:
        """Available beds of a ward."""
        return self.list(status=BedStatusEnum.AVAILABLE, ward=ward)

    def candidates_any_available(self) -> List[Bed]:
        """Available beds of any ward."""
        return self.list(status=BedStatusEnum.AVAILABLE)

    def find_by_patient(self, patient_id: str) -> Optional[Bed]:
        """Returns the bed holding a patient, if any."""
        with self.lock:
            for bed in self._items.values():
                if bed.patient is not None and bed.patient.id == patient_id:
                    return bed
        return None

    # ============================================
    # STATUS
    # ============================================

    def set_status(self, bed_id: str, new_status: BedStatusEnum) -> Bed:
        """
        Changes the status of an unoccupied bed.

        Occupied is neither a valid source nor a valid target here: beds
        enter Occupied through assignment or transfer and leave it
        through discharge or transfer.

        Args:
            bed_id: Bed id
            new_status: Requested status

        Returns:
            The updated bed
        """
        try:
            new_status = BedStatusEnum(new_status)
        except ValueError:
            raise ValidationError(f"Unknown bed status: {new_status}")

        with self.lock:
            bed = self.get(bed_id)
            if bed.is_occupied or new_status == BedStatusEnum.OCCUPIED:
                raise InvalidTransitionError(bed_id, bed.status.value, new_status.value)

            previous = bed.status
            bed.status = new_status
            logger.info(f"Bed {bed_id} status {previous.value} -> {bed.status.value}")
            self.notify_updated(bed)
            return bed

    def notify_updated(self, bed: Bed) -> None:
        """Publishes a copy of the bed so observers cannot alter it."""
        self.broadcaster.publish(EventTopicEnum.BED_UPSERTED, bed.model_copy(deep=True))
