"""Unit tests for data file routes."""

import pytest
from fastapi.testclient import TestClient

from ccrm.domain import CourseCode
from ccrm.enrollment import EnrollmentEngine
from ccrm.registry import RecordsService
from ccrm.storage import VirtualStorage


@pytest.mark.unit
class TestSave:
    """Tests for POST /data/save."""

    def test_save_exports_records_and_enrollments(
        self,
        client: TestClient,
        storage: VirtualStorage,
        records: RecordsService,
        engine: EnrollmentEngine,
    ) -> None:
        engine.enroll(records.get_student("s001"), records.get_course("CS101"))

        response = client.post("/api/v1/data/save")

        assert response.status_code == 200
        assert response.json()["data"]["files"] == [
            "exports/students.csv",
            "exports/courses.csv",
            "exports/instructors.csv",
            "exports/enrollments.csv",
        ]
        assert storage.read_lines("exports/enrollments.csv") == [
            "studentId,courseCode,grade",
            "s001,CS101,NOT_GRADED",
        ]

    def test_save_onto_directory_fails(self, client: TestClient, storage: VirtualStorage) -> None:
        storage.create_directory("exports")
        storage.create_directory("exports/courses.csv")

        response = client.post("/api/v1/data/save")

        assert response.status_code == 500
        assert response.json()["error"] == "Storage operation failed"
        assert not storage.exists("exports/students.csv")


@pytest.mark.unit
class TestLoad:
    """Tests for POST /data/load."""

    def test_load_counts(self, client: TestClient) -> None:
        response = client.post("/api/v1/data/load")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "students": 3,
            "courses": 3,
            "instructors": 2,
            "enrollments": 0,
        }

    def test_load_restores_persisted_enrollments(
        self, client: TestClient, storage: VirtualStorage, engine: EnrollmentEngine
    ) -> None:
        storage.write(
            "data/enrollments.csv",
            ["studentId,courseCode,grade", "s001,CS101,A", "s001,MA201,B", "s404,CS101,A"],
        )

        response = client.post("/api/v1/data/load")

        assert response.json()["data"]["enrollments"] == 2
        assert len(engine) == 2
        assert round(engine.gpa("s001"), 2) == 8.43

    def test_failed_load_keeps_records_and_ledger(
        self,
        client: TestClient,
        storage: VirtualStorage,
        records: RecordsService,
        engine: EnrollmentEngine,
    ) -> None:
        engine.enroll(records.get_student("s001"), records.get_course("CS101"))
        storage.write("data/students.csv", ["id,regNo,fullName,email", "s100,N1,New,n@x.com"])
        storage.create_directory("data/enrollments.csv")

        response = client.post("/api/v1/data/load")

        assert response.status_code == 500
        assert [e.key for e in engine.enrollments] == [("s001", CourseCode("CS", 101))]
        assert list(records.students) == ["s001", "s002", "s003"]

    def test_load_rebuilds_ledger(
        self, client: TestClient, records: RecordsService, engine: EnrollmentEngine
    ) -> None:
        engine.enroll(records.get_student("s001"), records.get_course("CS101"))

        client.post("/api/v1/data/load")

        assert len(engine) == 0


@pytest.mark.unit
class TestBackup:
    """Tests for POST /data/backup and GET /data/backups/size."""

    def test_backup_after_save(self, client: TestClient) -> None:
        client.post("/api/v1/data/save")

        response = client.post("/api/v1/data/backup")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["directory"].startswith("backups/backup_")
        assert len(data["files"]) == 4

        size = client.get("/api/v1/data/backups/size").json()["data"]["size"]
        assert size > 0

    def test_backup_without_exports(self, client: TestClient) -> None:
        response = client.post("/api/v1/data/backup")

        assert response.status_code == 200
        assert response.json()["data"]["files"] == []

    def test_size_without_backups(self, client: TestClient) -> None:
        response = client.get("/api/v1/data/backups/size")

        assert response.json()["data"]["size"] == 0
