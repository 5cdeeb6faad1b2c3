"""
Priority Service.
Manages the waiting queue and the dynamic urgency score.

Scoring:
- score = triage_level - hours waited (lower is more urgent)
- Waiting promotes a patient: triage 3 after two hours ranks like a
  fresh triage 1
- Equal scores are ordered by entry time, then by id
"""
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from datetime import datetime, timezone
import threading
import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError

from bedflow.config import settings
from bedflow.core.events import EventBroadcaster
from bedflow.core.exceptions import PatientNotFoundError, ValidationError
from bedflow.models.enums import EventTopicEnum
from bedflow.models.patient import Patient
from bedflow.repositories.base import BaseRegistry
from bedflow.utils.helpers import natural_id_key, utc_now

logger = logging.getLogger("bedflow.priority")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

PatientData = Union[BaseModel, Dict[str, Any]]


def rank_key(patient: Patient, now: datetime) -> Tuple:
    """
    Sort key of a waiting patient.

    Ascending score first; patients without an entry time sort after
    those with one on equal score.
    """
    if patient.joined_at is None:
        joined = (1, _EPOCH)
    else:
        joined = (0, patient.joined_at)
    return (patient.score(now),) + joined + (natural_id_key(patient.id),)


def order_patients(patients: List[Patient], now: datetime) -> List[Patient]:
    """Orders patients by urgency at a given instant."""
    return sorted(patients, key=lambda p: rank_key(p, now))


@dataclass
class PriorityBreakdown:
    """Breakdown of a patient's priority."""
    patient_id: str
    triage_level: int
    wait_hours: float
    score: float
    position: int
    queue_size: int
    details: List[str] = field(default_factory=list)


class PriorityQueue(BaseRegistry[Patient]):
    """
    Waiting queue of patients.

    The order is never cached: every snapshot recomputes scores against
    the reference time, so the ranking shifts as time passes.
    """

    def __init__(
        self,
        lock: threading.RLock,
        broadcaster: EventBroadcaster,
        clock: Callable[[], datetime] = utc_now,
        id_prefix: str = None,
    ):
        super().__init__(lock, broadcaster, id_prefix or settings.PATIENT_ID_PREFIX)
        self.clock = clock

    # ============================================
    # ADMISSION
    # ============================================

    def create_patient(self, data: PatientData) -> Patient:
        """
        Builds a patient with a fresh id without queueing it.

        Used for direct admission straight into a bed.

        Fields the model does not know are kept in ``extra``.

        Args:
            data: Schema or dictionary with name, triage_level and
                optional condition / extra

        Returns:
            The new patient

        Raises:
            ValidationError: If the data does not describe a valid patient
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        fields = {k: v for k, v in data.items() if k not in ("id", "joined_at")}

        extra = dict(fields.pop("extra", None) or {})
        for key in [k for k in fields if k not in Patient.model_fields]:
            extra[key] = fields.pop(key)

        with self.lock:
            try:
                patient = Patient(id="", joined_at=self.clock(), extra=extra, **fields)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid patient data: {e.errors()[0]['msg']}")
            patient.id = self.next_id()
            return patient

    def enqueue(self, data: PatientData) -> Patient:
        """
        Admits a patient into the waiting queue.

        Args:
            data: Schema or dictionary with the patient fields

        Returns:
            The queued patient
        """
        with self.lock:
            patient = self.create_patient(data)
            self._items[patient.id] = patient
            logger.info(
                f"Patient {patient.id} ({patient.name}) queued with triage {patient.triage_level}"
            )
            self.notify_changed()
            return patient

    def dequeue(self, patient_id: str) -> Patient:
        """
        Removes a patient from the queue.

        Args:
            patient_id: Patient id

        Returns:
            The removed patient
        """
        with self.lock:
            patient = self._items.pop(patient_id, None)
            if patient is None:
                raise PatientNotFoundError(patient_id)
            logger.info(f"Patient {patient_id} left the queue")
            self.notify_changed()
            return patient

    def take(self, patient_id: str) -> Patient:
        """
        Removes a patient without publishing.

        For multi-step operations that publish once everything is
        committed. The caller must hold the lock.
        """
        patient = self._items.pop(patient_id, None)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient

    # ============================================
    # QUERIES
    # ============================================

    def get(self, patient_id: str) -> Patient:
        """Gets a waiting patient or fails with PatientNotFoundError."""
        patient = self.get_by_id(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient

    def contains(self, patient_id: str) -> bool:
        return self.exists(patient_id)

    def ordered_snapshot(self, now: Optional[datetime] = None) -> List[Patient]:
        """
        Returns the waiting patients ordered by urgency.

        Args:
            now: Reference time; the clock is read once when omitted

        Returns:
            Patients, most urgent first
        """
        if now is None:
            now = self.clock()
        return order_patients(self.get_all(), now)

    def explain(self, patient_id: str, now: Optional[datetime] = None) -> PriorityBreakdown:
        """
        Explains the current priority of a waiting patient.

        Args:
            patient_id: Patient id
            now: Reference time

        Returns:
            Score components and queue position (1-based)
        """
        if now is None:
            now = self.clock()

        with self.lock:
            patient = self.get(patient_id)
            ordered = self.ordered_snapshot(now)

        position = next(i for i, p in enumerate(ordered, start=1) if p.id == patient_id)
        wait_hours = patient.wait_hours(now)
        score = patient.score(now)

        details = [f"Triage level: {patient.triage_level}"]
        if patient.joined_at is None:
            details.append("No entry time recorded, waiting time counted as 0")
        else:
            details.append(f"Waiting: {wait_hours:.2f} h")
        details.append(f"Score: {score:.2f} (position {position} of {len(ordered)})")

        return PriorityBreakdown(
            patient_id=patient.id,
            triage_level=patient.triage_level,
            wait_hours=wait_hours,
            score=score,
            position=position,
            queue_size=len(ordered),
            details=details,
        )

    def notify_changed(self) -> None:
        """Publishes the full ordered snapshot."""
        snapshot = [p.model_copy(deep=True) for p in self.ordered_snapshot()]
        self.broadcaster.publish(EventTopicEnum.QUEUE_SNAPSHOT_CHANGED, snapshot)
