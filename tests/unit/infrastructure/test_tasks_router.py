"""
Unit tests for the tasks router, with the repository and identity overridden.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from task_tracker.config import settings
from task_tracker.domain.models.base import (
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ForbiddenError,
    utc_now,
)
from task_tracker.domain.models.task import TaskStatus
from task_tracker.infrastructure.auth.dependencies import get_current_user_id, jwt_handler
from task_tracker.infrastructure.web.middleware.error_handler import ERROR_TITLES, status_code_for
from task_tracker.infrastructure.web.routers.tasks import get_task_repository
from task_tracker.main import create_application


BASE = f"{settings.api_prefix}/tasks"


class FailingRepository:
    """Repository whose reads blow up."""

    async def find_by_user_id(self, user_id):
        raise RuntimeError("database is down")


@pytest.fixture
def app(repository):
    application = create_application()
    application.dependency_overrides[get_task_repository] = lambda: repository
    return application


@pytest.fixture
def client(app):
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    return TestClient(app)


class TestTaskCommands:
    """Test cases for the command routes."""

    def test_create_task(self, client, repository):
        response = client.post(BASE, json={"title": "From the API", "description": "Created over HTTP"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert body["status"] == "PENDING"
        assert body["owner_id"] == "user-1"
        assert repository.stored(1).title == "From the API"

    def test_create_task_invalid_title(self, client):
        response = client.post(BASE, json={"title": "   "})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"] == {"field": "title"}

    def test_create_task_rejects_unknown_fields(self, client):
        response = client.post(BASE, json={"title": "Extra", "priority": "high"})

        assert response.status_code == 422

    def test_update_task_clears_deadline(self, client, repository, task_factory):
        repository.add(task_factory(deadline=utc_now() + timedelta(days=2)))

        response = client.put(f"{BASE}/1", json={"title": "Renamed", "deadline": None})

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["deadline"] is None

    def test_update_task_keeps_omitted_deadline(self, client, repository, task_factory):
        repository.add(task_factory(deadline=utc_now() + timedelta(days=2)))

        response = client.put(f"{BASE}/1", json={"title": "Renamed"})

        assert response.status_code == 200
        assert response.json()["deadline"] is not None

    def test_change_status_business_rule(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.FAILED))

        response = client.patch(f"{BASE}/1/status", json={"status": "PENDING"})

        assert response.status_code == 422
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"

    def test_change_status_action(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.FAILED))

        response = client.patch(f"{BASE}/1/status", json={"action": "complete"})

        assert response.status_code == 200
        assert response.json()["status"] == "COMPLETED"

    def test_change_status_rejects_status_with_action(self, client, repository, task_factory):
        repository.add(task_factory())

        response = client.patch(f"{BASE}/1/status", json={"status": "COMPLETED", "action": "start"})

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "action"}
        assert repository.stored(1).status == TaskStatus.PENDING

    def test_update_task_clears_description(self, client, repository, task_factory):
        repository.add(task_factory(description="old"))

        response = client.put(f"{BASE}/1", json={"description": None})

        assert response.status_code == 200
        assert response.json()["description"] == ""

    def test_soft_delete(self, client, repository, task_factory):
        repository.add(task_factory())

        response = client.delete(f"{BASE}/1")

        assert response.status_code == 200
        assert response.json()["permanent"] is False
        assert repository.stored(1).status == TaskStatus.CANCELLED

    def test_permanent_delete(self, client, repository, task_factory):
        repository.add(task_factory())

        response = client.delete(f"{BASE}/1", params={"permanent": "true"})

        assert response.status_code == 200
        assert response.json()["permanent"] is True
        assert 1 not in repository.data

    def test_foreign_task_is_forbidden(self, client, repository, task_factory):
        repository.add(task_factory(owner_id="someone-else"))

        response = client.delete(f"{BASE}/1")

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"


class TestDisplayRoutes:
    """Test cases for the display routes."""

    def test_list_for_display(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.IN_PROGRESS))
        repository.add(task_factory(status=TaskStatus.CANCELLED))

        response = client.get(f"{BASE}/display")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["filter"] == {"applied": "ALL", "display_text": "All"}
        assert body["tasks"][0]["status_class"] == "in-progress"

    def test_list_with_invalid_filter(self, client):
        response = client.get(f"{BASE}/display", params={"status": "archived"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_STATUS_FILTER"

    def test_blank_filter_lists_all(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.IN_PROGRESS))
        repository.add(task_factory(status=TaskStatus.PENDING))

        response = client.get(f"{BASE}/display", params={"status": " "})

        assert response.status_code == 200
        assert response.json()["filter"]["applied"] == "ALL"
        assert response.json()["count"] == 2

    def test_single_task_for_display(self, client, repository, task_factory):
        repository.add(task_factory())

        response = client.get(f"{BASE}/1/display")

        assert response.status_code == 200
        assert response.json()["status_text"] == "Pending"

    def test_missing_task_for_display(self, client):
        response = client.get(f"{BASE}/5/display")

        assert response.status_code == 404
        assert response.json()["code"] == "TASK_NOT_FOUND"

    def test_statistics_for_display(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.COMPLETED))

        response = client.get(f"{BASE}/statistics/display")

        assert response.status_code == 200
        body = response.json()
        assert body["total_tasks_formatted"] == "1 task"
        assert body["completion_rate_formatted"] == "100%"
        assert body["insights"][0]["priority"] == 9


class TestQueryRoutes:
    """Test cases for the plain read routes."""

    def test_list_tasks(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.COMPLETED))
        repository.add(task_factory(status=TaskStatus.CANCELLED))

        response = client.get(BASE)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["tasks"][0]["status"] == "COMPLETED"
        assert "status_text" not in body["tasks"][0]

    def test_list_tasks_with_filter(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.COMPLETED))
        repository.add(task_factory(status=TaskStatus.PENDING))

        response = client.get(BASE, params={"status": "PENDING"})

        assert response.status_code == 200
        assert [t["status"] for t in response.json()["tasks"]] == ["PENDING"]

    def test_get_task(self, client, repository, task_factory):
        repository.add(task_factory(title="Renew passport"))

        response = client.get(f"{BASE}/1")

        assert response.status_code == 200
        assert response.json()["title"] == "Renew passport"

    def test_get_missing_task(self, client):
        response = client.get(f"{BASE}/9")

        assert response.status_code == 404
        assert response.json()["code"] == "TASK_NOT_FOUND"

    def test_statistics(self, client, repository, task_factory):
        repository.add(task_factory(status=TaskStatus.COMPLETED))
        repository.add(task_factory(status=TaskStatus.IN_PROGRESS))

        response = client.get(f"{BASE}/statistics")

        assert response.status_code == 200
        body = response.json()
        assert body["total_tasks"] == 2
        assert body["completion_rate"] == 50
        assert "insights" not in body


class TestAuthenticationAndErrors:
    """Test cases for authentication and unexpected errors."""

    def test_missing_token(self, app):
        response = TestClient(app).get(f"{BASE}/display")

        assert response.status_code == 401

    def test_invalid_token(self, app):
        response = TestClient(app).get(
            f"{BASE}/display", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401

    def test_valid_token(self, app, repository, task_factory):
        repository.add(task_factory(owner_id="user-7"))
        token = jwt_handler.create_access_token("user-7")

        response = TestClient(app).get(
            f"{BASE}/display", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_unexpected_error_is_a_500(self, app):
        app.dependency_overrides[get_task_repository] = lambda: FailingRepository()
        app.dependency_overrides[get_current_user_id] = lambda: "user-1"

        response = TestClient(app, raise_server_exceptions=False).get(f"{BASE}/statistics/display")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal Server Error"

    @pytest.mark.parametrize("exc, expected", [
        (ValidationError("bad", "title"), 400),
        (BusinessRuleViolation("not allowed"), 422),
        (EntityNotFoundError("Task", 1), 404),
        (ForbiddenError("not yours"), 403),
    ])
    def test_domain_error_status_codes(self, exc, expected):
        assert status_code_for(exc) == expected
        assert status_code_for(exc) in ERROR_TITLES

    def test_health(self, client):
        response = client.get(f"{settings.api_prefix}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
