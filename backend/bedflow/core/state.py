"""
Service root.
Owns the shared lock, the broadcaster and both registries. One instance
is built at startup and injected everywhere it is needed.
"""
from typing import Callable
from datetime import datetime
import threading
import logging

from bedflow.core.events import EventBroadcaster
from bedflow.repositories.bed_registry import BedRegistry
from bedflow.services.priority_service import PriorityQueue
from bedflow.utils.helpers import utc_now

logger = logging.getLogger("bedflow.state")


class BedManagementState:
    """
    In-memory allocation state.

    The bed registry and the waiting queue share a single re-entrant lock,
    so any operation spanning both runs as one indivisible unit.
    """

    def __init__(
        self,
        broadcaster: EventBroadcaster = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.lock = threading.RLock()
        self.broadcaster = broadcaster or EventBroadcaster()
        self.clock = clock
        self.beds = BedRegistry(self.lock, self.broadcaster)
        self.queue = PriorityQueue(self.lock, self.broadcaster, clock=clock)
        logger.info("Bed management state initialized")

    def shutdown(self) -> None:
        """Drops every bed and waiting patient."""
        with self.lock:
            bed_count = self.beds.count()
            patient_count = self.queue.count()
            self.beds.clear()
            self.queue.clear()
        logger.info(f"Bed management state cleared ({bed_count} beds, {patient_count} waiting patients)")
