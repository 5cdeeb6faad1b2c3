"""
Statistics Service.
Occupancy figures for dashboards.
"""
from typing import Any, Dict

from bedflow.core.state import BedManagementState
from bedflow.utils.helpers import count_beds_by_status, count_beds_by_ward


class StatisticsService:
    """Computes occupancy statistics from the live state."""

    def __init__(self, state: BedManagementState):
        self.state = state

    def summary(self) -> Dict[str, Any]:
        """
        Occupancy summary.

        Returns:
            Counts per status and per ward, waiting patients and the
            share of beds occupied (percentage, one decimal)
        """
        with self.state.lock:
            beds = self.state.beds.get_all()
            waiting = self.state.queue.count()

        by_status = count_beds_by_status(beds)
        total = by_status["total"]
        occupied = by_status["Occupied"]

        return {
            "total_beds": total,
            "by_status": {k: v for k, v in by_status.items() if k != "total"},
            "by_ward": count_beds_by_ward(beds),
            "waiting_patients": waiting,
            "occupancy_percentage": round(occupied * 100 / total, 1) if total else 0.0,
        }
