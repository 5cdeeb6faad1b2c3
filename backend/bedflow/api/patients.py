"""
Patient directory endpoints.
"""
from fastapi import APIRouter, Depends
from typing import List, Optional

from bedflow.core.dependencies import get_directory_service
from bedflow.schemas.patient import DirectoryEntryResponse, PatientResponse
from bedflow.services.directory_service import DirectoryService

router = APIRouter()


@router.get("/directory", response_model=List[DirectoryEntryResponse])
def search_directory(
    q: Optional[str] = None,
    service: DirectoryService = Depends(get_directory_service),
):
    """Searches patients (waiting or bedded) by id or name."""
    return [
        DirectoryEntryResponse(
            patient=PatientResponse.model_validate(entry.patient),
            location=entry.location,
            bed_id=entry.bed_id,
        )
        for entry in service.search(q)
    ]
