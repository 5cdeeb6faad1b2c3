"""
Shared utilities of the system.
"""
from bedflow.utils.helpers import (
    utc_now,
    natural_id_key,
    count_beds_by_status,
    count_beds_by_ward,
    format_wait_time,
)
from bedflow.utils.logger import configure_logging, get_logger

__all__ = [
    "utc_now",
    "natural_id_key",
    "count_beds_by_status",
    "count_beds_by_ward",
    "format_wait_time",
    "configure_logging",
    "get_logger",
]
