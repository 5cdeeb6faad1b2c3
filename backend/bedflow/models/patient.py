"""
Patient model.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


SECONDS_PER_HOUR = 3600


class Patient(BaseModel):
    """
    A patient in the system.

    Lives either in the waiting queue or in the patient slot of exactly
    one bed. Optional clinical metadata goes into ``extra``.
    """

    id: str
    name: str
    triage_level: int = Field(ge=1, le=5)
    condition: str = "Stable"
    joined_at: Optional[datetime] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    def wait_hours(self, now: datetime) -> float:
        """
        Hours waited since entering the queue.

        Args:
            now: Reference time

        Returns:
            Elapsed hours, 0 when the entry time is unknown
        """
        if self.joined_at is None:
            return 0.0
        return (now - self.joined_at).total_seconds() / SECONDS_PER_HOUR

    def score(self, now: datetime) -> float:
        """Urgency score; lower is more urgent."""
        return self.triage_level - self.wait_hours(now)
