"""
Shared helper functions.
"""
from typing import Dict, Iterable, Tuple
from datetime import datetime, timezone
import re

from bedflow.models.bed import Bed
from bedflow.models.enums import BedStatusEnum, WardEnum


_NUMERIC_SUFFIX = re.compile(r"^(.*?)(\d+)$")


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def natural_id_key(identifier: str) -> Tuple[str, int, str]:
    """
    Sort key that orders generated ids numerically.

    "BED-2" sorts before "BED-10"; ids without a numeric suffix fall
    back to plain string order.

    Args:
        identifier: Bed or patient id

    Returns:
        Tuple usable as a sort key
    """
    match = _NUMERIC_SUFFIX.match(identifier)
    if match:
        return (match.group(1), int(match.group(2)), "")
    return (identifier, -1, identifier)


def count_beds_by_status(beds: Iterable[Bed]) -> Dict[str, int]:
    """
    Counts beds per status.

    Args:
        beds: Beds to count

    Returns:
        Dictionary with a "total" entry plus one entry per status value
    """
    stats = {"total": 0}
    for status in BedStatusEnum:
        stats[status.value] = 0

    for bed in beds:
        stats["total"] += 1
        stats[bed.status.value] += 1

    return stats


def count_beds_by_ward(beds: Iterable[Bed]) -> Dict[str, Dict[str, int]]:
    """Per-ward totals of beds, available beds and occupied beds."""
    stats = {
        ward.value: {"total": 0, "available": 0, "occupied": 0}
        for ward in WardEnum
    }
    for bed in beds:
        entry = stats[bed.ward.value]
        entry["total"] += 1
        if bed.is_available:
            entry["available"] += 1
        elif bed.is_occupied:
            entry["occupied"] += 1
    return stats


def format_wait_time(minutes: int) -> str:
    """
    Formats waiting minutes in a readable way.

    Args:
        minutes: Time in minutes

    Returns:
        Formatted string (e.g. "45 min", "2h 30m", "1d 5h")
    """
    if minutes < 60:
        return f"{minutes} min"

    hours = minutes // 60
    mins = minutes % 60

    if hours < 24:
        return f"{hours}h {mins}m"

    days = hours // 24
    hrs = hours % 24
    return f"{days}d {hrs}h"
