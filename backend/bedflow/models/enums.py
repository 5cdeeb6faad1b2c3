"""
System enumerations.
Centralized to avoid circular imports.
"""
from enum import Enum


class WardEnum(str, Enum):
    """Specialty ward a bed belongs to."""
    ICU = "ICU"
    CARDIOLOGY = "Cardiology"
    GENERAL = "General"
    PEDIATRICS = "Pediatrics"


class BedStatusEnum(str, Enum):
    """Status of a hospital bed."""
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    CLEANING = "Cleaning"
    RESERVED = "Reserved"
    MAINTENANCE = "Maintenance"
    DAMAGED = "Damaged"


class BedTypeEnum(str, Enum):
    """Display classification of a bed."""
    CRITICAL = "Critical"
    STANDARD = "Standard"


class EventTopicEnum(str, Enum):
    """Topics published after every committed mutation."""
    BED_UPSERTED = "bed-upserted"
    BED_REMOVED = "bed-removed"
    QUEUE_SNAPSHOT_CHANGED = "queue-snapshot-changed"


# ============================================
# MAPPINGS
# ============================================

# Wards whose beds are displayed as critical care
CRITICAL_WARDS = {WardEnum.ICU}
