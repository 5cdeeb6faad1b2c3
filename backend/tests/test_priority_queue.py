"""
Tests for the waiting queue and the urgency score.

Uses the fixtures defined in conftest.py
"""
import pytest
from datetime import timedelta

from bedflow.core.exceptions import PatientNotFoundError, ValidationError
from bedflow.models.enums import EventTopicEnum
from bedflow.models.patient import Patient
from bedflow.schemas.patient import PatientCreate
from bedflow.services.priority_service import order_patients


# ============================================
# SCORE
# ============================================

class TestScore:
    """Tests for the urgency score."""

    def test_score_subtracts_waiting_hours(self, clock):
        patient = Patient(
            id="P-1", name="Ann", triage_level=4,
            joined_at=clock.now - timedelta(hours=1, minutes=30)
        )

        assert patient.wait_hours(clock.now) == pytest.approx(1.5)
        assert patient.score(clock.now) == pytest.approx(2.5)

    def test_missing_entry_time_counts_as_no_wait(self, clock):
        patient = Patient(id="P-1", name="Ann", triage_level=2)

        assert patient.wait_hours(clock.now) == 0
        assert patient.score(clock.now) == 2

    def test_triage_level_bounds(self):
        with pytest.raises(ValueError):
            Patient(id="P-1", name="Ann", triage_level=0)
        with pytest.raises(ValueError):
            Patient(id="P-1", name="Ann", triage_level=6)


# ============================================
# ADMISSION
# ============================================

class TestEnqueue:
    """Tests for queue admission and removal."""

    def test_enqueue_sets_id_and_entry_time(self, state, clock):
        patient = state.queue.enqueue({"name": "Jane Doe", "triage_level": 1})

        assert patient.id == "P-1"
        assert patient.joined_at == clock.now
        assert patient.condition == "Stable"
        assert state.queue.contains(patient.id)

    def test_enqueue_from_schema_keeps_extra_metadata(self, state):
        patient = state.queue.enqueue(
            PatientCreate(name="Bob", triage_level=3, extra={"allergies": ["penicillin"]})
        )

        assert patient.extra == {"allergies": ["penicillin"]}

    def test_enqueue_ignores_client_id_and_time(self, state, clock):
        patient = state.queue.enqueue({
            "id": "P-77", "name": "Eve", "triage_level": 5, "joined_at": None
        })

        assert patient.id == "P-1"
        assert patient.joined_at == clock.now

    def test_unknown_fields_kept_in_extra(self, state):
        patient = state.queue.enqueue({
            "name": "Ann", "triage_level": 2, "needs": "ICU", "extra": {"allergies": "none"}
        })

        assert patient.extra == {"allergies": "none", "needs": "ICU"}

    def test_invalid_patient_data_rejected(self, state, recorder):
        with pytest.raises(ValidationError):
            state.queue.enqueue({"name": "Ann", "triage_level": 9})
        with pytest.raises(ValidationError):
            state.queue.enqueue({"triage_level": 2})

        assert state.queue.count() == 0
        assert recorder.events == []
        assert state.queue.enqueue({"name": "Ann", "triage_level": 2}).id == "P-1"

    def test_patient_ids_unique(self, enqueue_patient):
        ids = {enqueue_patient(name=f"Patient {i}").id for i in range(20)}
        assert len(ids) == 20

    def test_enqueue_publishes_snapshot(self, state, recorder):
        state.queue.enqueue({"name": "A", "triage_level": 3})
        state.queue.enqueue({"name": "B", "triage_level": 1})

        topic, snapshot = recorder.events[-1]
        assert topic == EventTopicEnum.QUEUE_SNAPSHOT_CHANGED
        assert [p.name for p in snapshot] == ["B", "A"]

    def test_dequeue(self, state, enqueue_patient, recorder):
        patient = enqueue_patient()
        recorder.clear()

        removed = state.queue.dequeue(patient.id)

        assert removed is patient
        assert not state.queue.contains(patient.id)
        assert recorder.events == [(EventTopicEnum.QUEUE_SNAPSHOT_CHANGED, [])]

    def test_dequeue_missing_patient(self, state):
        with pytest.raises(PatientNotFoundError):
            state.queue.dequeue("P-404")


# ============================================
# ORDERING
# ============================================

class TestOrdering:
    """Tests for the ordered snapshot."""

    def test_lower_triage_first(self, state, enqueue_patient):
        enqueue_patient(name="Low", triage_level=5)
        enqueue_patient(name="High", triage_level=1)
        enqueue_patient(name="Mid", triage_level=3)

        assert [p.name for p in state.queue.ordered_snapshot()] == ["High", "Mid", "Low"]

    def test_waiting_promotes_patient(self, state, clock, enqueue_patient):
        """Triage 3 after two hours ties a fresh triage 1 and wins on entry time."""
        a = enqueue_patient(name="A", triage_level=3)
        clock.advance(hours=2)
        b = enqueue_patient(name="B", triage_level=1)

        snapshot = state.queue.ordered_snapshot()

        assert a.score(clock.now) == b.score(clock.now) == 1
        assert [p.id for p in snapshot] == [a.id, b.id]

    def test_long_wait_outranks_better_triage(self, state, clock, enqueue_patient):
        enqueue_patient(name="Waiting", triage_level=4)
        clock.advance(hours=5)
        enqueue_patient(name="Fresh", triage_level=1)

        assert state.queue.ordered_snapshot()[0].name == "Waiting"

    def test_tie_on_same_entry_time_breaks_on_id(self, state, enqueue_patient):
        ids = [enqueue_patient(name=f"P{i}", triage_level=2).id for i in range(12)]

        assert [p.id for p in state.queue.ordered_snapshot()] == ids

    def test_snapshot_is_idempotent_for_same_instant(self, state, clock, enqueue_patient):
        for level in (3, 1, 4, 2, 3):
            enqueue_patient(triage_level=level)
            clock.advance(minutes=17)

        first = [p.id for p in state.queue.ordered_snapshot(clock.now)]
        second = [p.id for p in state.queue.ordered_snapshot(clock.now)]
        assert first == second

    def test_scores_recomputed_on_every_call(self, state, clock, enqueue_patient):
        patient = enqueue_patient(triage_level=3)

        assert state.queue.explain(patient.id).score == pytest.approx(3)

        clock.advance(hours=2)
        assert state.queue.explain(patient.id).score == pytest.approx(1)

    def test_patients_without_entry_time_sort_last_on_tie(self, clock):
        timed = Patient(id="P-2", name="Timed", triage_level=2, joined_at=clock.now)
        untimed = Patient(id="P-1", name="Untimed", triage_level=2)

        ordered = order_patients([untimed, timed], clock.now)
        assert [p.id for p in ordered] == ["P-2", "P-1"]


# ============================================
# EXPLANATION
# ============================================

class TestExplain:
    """Tests for the priority breakdown."""

    def test_explain(self, state, clock, enqueue_patient):
        first = enqueue_patient(name="First", triage_level=4)
        clock.advance(hours=1)
        enqueue_patient(name="Second", triage_level=1)

        breakdown = state.queue.explain(first.id)

        assert breakdown.wait_hours == pytest.approx(1)
        assert breakdown.score == pytest.approx(3)
        assert breakdown.position == 2
        assert breakdown.queue_size == 2
        assert breakdown.details

    def test_explain_missing_patient(self, state):
        with pytest.raises(PatientNotFoundError):
            state.queue.explain("P-1")
