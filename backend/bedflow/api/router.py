"""
Main router grouping every sub-router.
"""
from fastapi import APIRouter

from bedflow.api import health
from bedflow.api import beds
from bedflow.api import queue
from bedflow.api import patients
from bedflow.api import statistics
from bedflow.api import websocket

api_router = APIRouter()

# ============================================
# INCLUDE ALL ROUTERS
# ============================================

api_router.include_router(health.router)

api_router.include_router(
    beds.router,
    prefix="/beds",
    tags=["Beds"]
)

api_router.include_router(
    queue.router,
    prefix="/queue",
    tags=["Queue"]
)

api_router.include_router(
    patients.router,
    prefix="/patients",
    tags=["Patients"]
)

api_router.include_router(
    statistics.router,
    prefix="/statistics",
    tags=["Statistics"]
)

api_router.include_router(
    websocket.router,
    tags=["WebSocket"]
)
