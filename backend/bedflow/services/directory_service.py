"""
Patient directory.
Searches every patient in the system, waiting or bedded.
"""
from typing import List, Optional
from dataclasses import dataclass

from bedflow.core.state import BedManagementState
from bedflow.models.patient import Patient
from bedflow.utils.helpers import natural_id_key


@dataclass
class DirectoryEntry:
    """A patient and where it currently is."""
    patient: Patient
    location: str  # "queue" or "bed"
    bed_id: Optional[str] = None


class DirectoryService:
    """Linear search over the waiting queue and the occupied beds."""

    def __init__(self, state: BedManagementState):
        self.state = state

    def all_entries(self) -> List[DirectoryEntry]:
        with self.state.lock:
            entries = [
                DirectoryEntry(patient=p, location="queue")
                for p in self.state.queue.get_all()
            ]
            entries.extend(
                DirectoryEntry(patient=bed.patient, location="bed", bed_id=bed.id)
                for bed in self.state.beds.get_all()
                if bed.patient is not None
            )
        entries.sort(key=lambda e: natural_id_key(e.patient.id))
        return entries

    def search(self, query: Optional[str] = None) -> List[DirectoryEntry]:
        """
        Finds patients whose id or name contains the query.

        Args:
            query: Case-insensitive fragment; empty returns everyone

        Returns:
            Matching entries ordered by patient id
        """
        entries = self.all_entries()
        if not query:
            return entries

        needle = query.strip().lower()
        return [
            e for e in entries
            if needle in e.patient.id.lower() or needle in e.patient.name.lower()
        ]
