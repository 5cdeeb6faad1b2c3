"""
Core module: central functionality of the system.
"""
from bedflow.core.events import EventBroadcaster
from bedflow.core.exceptions import (
    BaseAppException,
    ValidationError,
    NotFoundError,
    BedNotFoundError,
    PatientNotFoundError,
    NoBedAvailableError,
    BedOccupiedError,
    InvalidTransitionError,
    SourceBedNotOccupiedError,
    TargetBedNotAvailableError,
    InvalidTransferError,
)

__all__ = [
    "EventBroadcaster",
    "BaseAppException",
    "ValidationError",
    "NotFoundError",
    "BedNotFoundError",
    "PatientNotFoundError",
    "NoBedAvailableError",
    "BedOccupiedError",
    "InvalidTransitionError",
    "SourceBedNotOccupiedError",
    "TargetBedNotAvailableError",
    "InvalidTransferError",
]
