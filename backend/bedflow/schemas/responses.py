"""
Common response schemas.
"""
from pydantic import BaseModel
from typing import Dict, Optional


class MessageResponse(BaseModel):
    """Generic response with a message."""
    success: bool
    message: str
    data: Optional[dict] = None


class WardStatisticsResponse(BaseModel):
    """Bed counts of one ward."""
    total: int
    available: int
    occupied: int


class StatisticsResponse(BaseModel):
    """Occupancy statistics."""
    total_beds: int
    by_status: Dict[str, int]
    by_ward: Dict[str, WardStatisticsResponse]
    waiting_patients: int
    occupancy_percentage: float
