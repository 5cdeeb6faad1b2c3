"""
Custom exceptions of the system.
Every failed operation raises one of these so callers can tell the
conditions apart and translate them for users.
"""


class BaseAppException(Exception):
    """
    Base application exception.
    Every custom exception inherits from this one.
    """
    def __init__(self, message: str, code: str = "ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================
# VALIDATION ERRORS
# ============================================

class ValidationError(BaseAppException):
    """Invalid input data."""
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


# ============================================
# NOT FOUND ERRORS
# ============================================

class NotFoundError(BaseAppException):
    """Resource not found."""
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} with identifier '{identifier}' not found",
            "NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class PatientNotFoundError(NotFoundError):
    """Patient not found."""
    def __init__(self, patient_id: str):
        super().__init__("Patient", patient_id)


class BedNotFoundError(NotFoundError):
    """Bed not found."""
    def __init__(self, bed_id: str):
        super().__init__("Bed", bed_id)


# ============================================
# BED STATE ERRORS
# ============================================

class NoBedAvailableError(BaseAppException):
    """No Available bed exists in the requested ward nor in the fallback pool."""
    def __init__(self, ward: str = None):
        where = f"ward {ward} or any other ward" if ward else "any ward"
        super().__init__(
            f"No available bed in {where}",
            "NO_BED_AVAILABLE"
        )
        self.ward = ward


class BedOccupiedError(BaseAppException):
    """Removal attempted on an occupied bed."""
    def __init__(self, bed_id: str):
        super().__init__(
            f"Bed {bed_id} is occupied and cannot be removed",
            "BED_OCCUPIED"
        )
        self.bed_id = bed_id


class InvalidTransitionError(BaseAppException):
    """Direct status change not allowed for the bed."""
    def __init__(self, bed_id: str, current_status: str, requested_status: str):
        super().__init__(
            f"Cannot change bed {bed_id} from {current_status} to {requested_status}. "
            f"Occupied beds change only through discharge or transfer",
            "INVALID_TRANSITION"
        )
        self.bed_id = bed_id
        self.current_status = current_status
        self.requested_status = requested_status


# ============================================
# ASSIGNMENT AND TRANSFER ERRORS
# ============================================

class SourceBedNotOccupiedError(BaseAppException):
    """Transfer source bed has no patient."""
    def __init__(self, bed_id: str, current_status: str):
        super().__init__(
            f"Source bed {bed_id} must be Occupied. Current status: {current_status}",
            "SOURCE_BED_NOT_OCCUPIED"
        )
        self.bed_id = bed_id
        self.current_status = current_status


class TargetBedNotAvailableError(BaseAppException):
    """Target bed cannot receive a patient."""
    def __init__(self, bed_id: str, current_status: str):
        super().__init__(
            f"Target bed {bed_id} must be Available. Current status: {current_status}",
            "TARGET_BED_NOT_AVAILABLE"
        )
        self.bed_id = bed_id
        self.current_status = current_status


class InvalidTransferError(BaseAppException):
    """Source and target of a transfer are the same bed."""
    def __init__(self, bed_id: str):
        super().__init__(
            f"Cannot transfer a patient from bed {bed_id} to itself",
            "INVALID_TRANSFER"
        )
        self.bed_id = bed_id
