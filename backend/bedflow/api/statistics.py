"""
Statistics endpoints.
"""
from fastapi import APIRouter, Depends

from bedflow.core.dependencies import get_statistics_service
from bedflow.schemas.responses import StatisticsResponse
from bedflow.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("", response_model=StatisticsResponse)
def get_statistics(service: StatisticsService = Depends(get_statistics_service)):
    """Occupancy statistics of every bed and the waiting queue."""
    return StatisticsResponse(**service.summary())
