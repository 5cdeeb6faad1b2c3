"""
Data models of the system.
Re-exports every model for simpler imports.
"""
from bedflow.models.enums import (
    WardEnum,
    BedStatusEnum,
    BedTypeEnum,
    EventTopicEnum,
)
from bedflow.models.patient import Patient
from bedflow.models.bed import Bed

__all__ = [
    # Enums
    "WardEnum",
    "BedStatusEnum",
    "BedTypeEnum",
    "EventTopicEnum",
    # Models
    "Patient",
    "Bed",
]
