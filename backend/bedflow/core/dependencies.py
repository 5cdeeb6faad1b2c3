"""
FastAPI dependencies.
Expose the service root built at startup to the endpoints.
"""
from fastapi import Depends, Request

from bedflow.core.state import BedManagementState
from bedflow.services.assignment_service import AssignmentService
from bedflow.services.directory_service import DirectoryService
from bedflow.services.statistics_service import StatisticsService


def get_state(request: Request) -> BedManagementState:
    """Returns the state owned by the running application."""
    return request.app.state.bed_state


def get_assignment_service(
    state: BedManagementState = Depends(get_state),
) -> AssignmentService:
    return AssignmentService(state)


def get_directory_service(
    state: BedManagementState = Depends(get_state),
) -> DirectoryService:
    return DirectoryService(state)


def get_statistics_service(
    state: BedManagementState = Depends(get_state),
) -> StatisticsService:
    return StatisticsService(state)
