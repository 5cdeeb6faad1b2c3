"""
Pytest fixtures for the tests.
"""
import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from bedflow.core.events import EventBroadcaster
from bedflow.core.state import BedManagementState
from bedflow.main import create_app
from bedflow.models.enums import BedStatusEnum, WardEnum


class FakeClock:
    """Controllable clock for time-dependent ordering."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class EventRecorder:
    """Subscriber that keeps every event it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, topic, payload):
        self.events.append((topic, payload))

    def topics(self):
        return [topic for topic, _ in self.events]

    def clear(self):
        self.events.clear()


@pytest.fixture(name="clock")
def clock_fixture():
    """Clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture(name="broadcaster")
def broadcaster_fixture():
    return EventBroadcaster()


@pytest.fixture(name="recorder")
def recorder_fixture(broadcaster):
    """Records every event published by the test state."""
    recorder = EventRecorder()
    broadcaster.subscribe(recorder)
    return recorder


@pytest.fixture(name="state")
def state_fixture(broadcaster, clock):
    """Fresh allocation state with a controllable clock."""
    return BedManagementState(broadcaster=broadcaster, clock=clock)


@pytest.fixture(name="client")
def client_fixture(state):
    """Test client serving the test state."""
    app = create_app(state=state)

    with TestClient(app) as client:
        yield client


# Test data fixtures

@pytest.fixture
def patient_data():
    """Test patient data."""
    return {
        "name": "John Smith",
        "triage_level": 2,
        "condition": "Chest pain",
    }


@pytest.fixture
def create_bed(state):
    """Factory fixture to create beds."""
    def _create_bed(ward=WardEnum.GENERAL, distance=10, status=None):
        bed = state.beds.add(ward, distance)
        if status is not None and status != BedStatusEnum.AVAILABLE:
            state.beds.set_status(bed.id, status)
        return bed

    return _create_bed


@pytest.fixture
def enqueue_patient(state):
    """Factory fixture to queue patients."""
    def _enqueue_patient(name="Test Patient", triage_level=3, **kwargs):
        return state.queue.enqueue({"name": name, "triage_level": triage_level, **kwargs})

    return _enqueue_patient


@pytest.fixture
def ward_with_beds(create_bed):
    """The three-bed scenario: two ICU beds and a closer General bed."""
    return {
        "A": create_bed(WardEnum.ICU, 5),
        "B": create_bed(WardEnum.ICU, 2),
        "C": create_bed(WardEnum.GENERAL, 1),
    }


@pytest.fixture
def check_occupancy(state):
    """Asserts that a bed holds a patient if and only if it is Occupied."""
    def _check():
        for bed in state.beds.get_all():
            assert (bed.patient is not None) == (bed.status == BedStatusEnum.OCCUPIED), bed.id

    return _check
