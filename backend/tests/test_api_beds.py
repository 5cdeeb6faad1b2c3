"""
Tests for the bed endpoints.
"""
import pytest
from fastapi import status

from bedflow.models.enums import BedStatusEnum, WardEnum


class TestBedEndpoints:
    """Tests for capacity management."""

    def test_create_bed(self, client):
        response = client.post("/api/beds", json={"ward": "ICU", "distance_from_station": 4})
        assert response.status_code == status.HTTP_201_CREATED

        data = response.json()
        assert data["id"] == "BED-1"
        assert data["status"] == "Available"
        assert data["type"] == "Critical"
        assert data["patient"] is None

    def test_create_bed_invalid_distance(self, client):
        response = client.post("/api/beds", json={"ward": "ICU", "distance_from_station": -3})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_bed_unknown_ward(self, client):
        response = client.post("/api/beds", json={"ward": "Oncology", "distance_from_station": 3})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_list_beds_with_filters(self, client, create_bed):
        create_bed(WardEnum.ICU)
        create_bed(WardEnum.GENERAL, status=BedStatusEnum.CLEANING)

        assert len(client.get("/api/beds").json()) == 2
        assert [b["ward"] for b in client.get("/api/beds", params={"ward": "ICU"}).json()] == ["ICU"]

        cleaning = client.get("/api/beds", params={"status": "Cleaning"}).json()
        assert [b["status"] for b in cleaning] == ["Cleaning"]

    def test_list_beds_status_filter_ignores_case(self, client, create_bed):
        create_bed()
        create_bed(status=BedStatusEnum.CLEANING)

        data = client.get("/api/beds", params={"status": "available"}).json()

        assert [b["status"] for b in data] == ["Available"]

    def test_list_beds_unknown_status(self, client):
        response = client.get("/api/beds", params={"status": "exploded"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_get_bed(self, client, create_bed):
        bed = create_bed()

        response = client.get(f"/api/beds/{bed.id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == bed.id

    def test_get_bed_not_found(self, client):
        response = client.get("/api/beds/BED-404")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_bed(self, client, state, create_bed):
        bed = create_bed()

        response = client.delete(f"/api/beds/{bed.id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        assert not state.beds.exists(bed.id)

    def test_delete_occupied_bed_fails(self, client, create_bed, enqueue_patient):
        bed = create_bed()
        patient = enqueue_patient()
        client.post(f"/api/beds/{bed.id}/assign", json={"patient_id": patient.id})

        response = client.delete(f"/api/beds/{bed.id}")
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_change_status(self, client, create_bed):
        bed = create_bed()

        response = client.patch(f"/api/beds/{bed.id}/status", json={"status": "Maintenance"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "Maintenance"

    def test_change_status_to_occupied_fails(self, client, create_bed):
        bed = create_bed()

        response = client.patch(f"/api/beds/{bed.id}/status", json={"status": "Occupied"})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert bed.status == BedStatusEnum.AVAILABLE


class TestAssignmentEndpoints:
    """Tests for assignment, transfer and discharge."""

    def test_smart_assign_waiting_patient(self, client, state, ward_with_beds, enqueue_patient):
        patient = enqueue_patient(triage_level=1)

        response = client.post("/api/beds/assign", json={"patient_id": patient.id, "ward": "ICU"})
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["id"] == ward_with_beds["B"].id
        assert data["status"] == "Occupied"
        assert data["patient"]["id"] == patient.id
        assert state.queue.count() == 0

    def test_smart_assign_new_patient(self, client, ward_with_beds, patient_data):
        response = client.post("/api/beds/assign", json={"patient": patient_data, "ward": "General"})
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["id"] == ward_with_beds["C"].id
        assert data["patient"]["name"] == patient_data["name"]
        assert data["patient"]["id"].startswith("P-")

    def test_smart_assign_no_bed(self, client, enqueue_patient):
        patient = enqueue_patient()

        response = client.post("/api/beds/assign", json={"patient_id": patient.id, "ward": "ICU"})
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_smart_assign_unknown_patient(self, client, ward_with_beds):
        response = client.post("/api/beds/assign", json={"patient_id": "P-404"})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize("body", [
        {},
        {"patient_id": "P-1", "patient": {"name": "X", "triage_level": 1}},
    ])
    def test_smart_assign_requires_one_reference(self, client, body):
        response = client.post("/api/beds/assign", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_manual_assign(self, client, ward_with_beds, enqueue_patient):
        patient = enqueue_patient()
        target = ward_with_beds["A"]

        response = client.post(f"/api/beds/{target.id}/assign", json={"patient_id": patient.id})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["patient"]["id"] == patient.id

    def test_manual_assign_unavailable_bed(self, client, create_bed, enqueue_patient):
        bed = create_bed(status=BedStatusEnum.DAMAGED)
        patient = enqueue_patient()

        response = client.post(f"/api/beds/{bed.id}/assign", json={"patient_id": patient.id})
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_manual_assign_missing_bed(self, client, enqueue_patient):
        patient = enqueue_patient()

        response = client.post("/api/beds/BED-404/assign", json={"patient_id": patient.id})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_transfer(self, client, create_bed, enqueue_patient):
        source = create_bed(WardEnum.GENERAL)
        target = create_bed(WardEnum.ICU)
        patient = enqueue_patient()
        client.post(f"/api/beds/{source.id}/assign", json={"patient_id": patient.id})

        response = client.post(
            "/api/beds/transfer",
            json={"source_bed_id": source.id, "target_bed_id": target.id}
        )
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["source_bed"]["status"] == "Cleaning"
        assert data["source_bed"]["patient"] is None
        assert data["target_bed"]["status"] == "Occupied"
        assert data["target_bed"]["patient"]["id"] == patient.id

    def test_transfer_errors(self, client, create_bed):
        source = create_bed()
        target = create_bed()

        same = client.post(
            "/api/beds/transfer",
            json={"source_bed_id": source.id, "target_bed_id": source.id}
        )
        assert same.status_code == status.HTTP_400_BAD_REQUEST

        empty = client.post(
            "/api/beds/transfer",
            json={"source_bed_id": source.id, "target_bed_id": target.id}
        )
        assert empty.status_code == status.HTTP_409_CONFLICT

        missing = client.post(
            "/api/beds/transfer",
            json={"source_bed_id": "BED-404", "target_bed_id": target.id}
        )
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    def test_discharge(self, client, create_bed, enqueue_patient):
        bed = create_bed()
        patient = enqueue_patient()
        client.post(f"/api/beds/{bed.id}/assign", json={"patient_id": patient.id})

        response = client.post(f"/api/beds/{bed.id}/discharge")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "Cleaning"

        again = client.post(f"/api/beds/{bed.id}/discharge")
        assert again.status_code == status.HTTP_200_OK
        assert again.json()["status"] == "Cleaning"

    def test_discharge_missing_bed(self, client):
        response = client.post("/api/beds/BED-404/discharge")
        assert response.status_code == status.HTTP_404_NOT_FOUND
