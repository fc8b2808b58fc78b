"""API tests for status transition, ownership and history routes."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from taskflow.api.dependencies.workflow import get_workflow_engine
from taskflow.api.main import create_app
from taskflow.bootstrap.container import WorkflowContainer
from taskflow.domain.errors import PersistenceError
from taskflow.domain.models.checklist import ChecklistItem
from taskflow.domain.models.task import Task


@pytest.fixture
def client(
    container: WorkflowContainer,
    make_task: Callable[..., Task],
    make_item: Callable[..., ChecklistItem],
) -> Iterator[TestClient]:
    container.tasks.add_tasks(  # type: ignore[attr-defined]
        make_task("t1"), make_task("t2", owner_id=None)
    )
    container.checklist_items.seed(  # type: ignore[attr-defined]
        make_item("c1", task_id="t1", text="Sign-off", is_mandatory=True)
    )
    with TestClient(create_app(container)) as test_client:
        yield test_client


class TestStatusEndpoint:
    def test_transition(self, client: TestClient) -> None:
        response = client.patch(
            "/v1/tasks/t1/status", json={"status": "In Progress", "changed_by": "u1"}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["changed"] is True
        assert body["from_status"] == "To Do"
        assert body["task"]["status"] == "In Progress"

    def test_missing_reason_is_400(self, client: TestClient) -> None:
        response = client.patch(
            "/v1/tasks/t1/status", json={"status": "Blocked", "changed_by": "u1"}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "BLOCKED_REASON_REQUIRED"

    def test_missing_task_is_404(self, client: TestClient) -> None:
        response = client.patch(
            "/v1/tasks/ghost/status", json={"status": "Done", "changed_by": "u1"}
        )

        assert response.status_code == 404

    def test_block_mode_checklist_is_422(self, client: TestClient) -> None:
        client.put("/v1/enforcement/mandatory_checklist", json={"mode": "block"})

        response = client.patch(
            "/v1/tasks/t1/status", json={"status": "Done", "changed_by": "u1"}
        )

        detail = response.json()["detail"]
        assert response.status_code == 422
        assert detail["policy"] == "mandatory_checklist"
        assert detail["errors"][0]["items"][0]["text"] == "Sign-off"
        history = client.get("/v1/tasks/t1/status-history").json()
        assert history == []

    def test_warn_mode_checklist_returns_warning(self, client: TestClient) -> None:
        response = client.patch(
            "/v1/tasks/t1/status", json={"status": "Done", "changed_by": "u1"}
        )

        assert response.status_code == 200
        assert response.json()["warnings"][0]["code"] == "MANDATORY_CHECKLIST_INCOMPLETE"


class TestBlockEndpoints:
    def test_block_then_unblock(self, client: TestClient) -> None:
        blocked = client.post(
            "/v1/tasks/t1/block",
            json={"blocked_reason": "vendor", "blocked_by": "u1"},
        )
        unblocked = client.post(
            "/v1/tasks/t1/unblock", json={"status": "In Progress", "unblocked_by": "u2"}
        )

        assert blocked.json()["task"]["blocked_reason"] == "vendor"
        assert blocked.json()["task"]["blocked_at"] is not None
        assert unblocked.json()["task"]["blocked_reason"] is None
        latest = client.get("/v1/tasks/t1/status-history/latest").json()
        assert latest["note"] == "Task unblocked"

    def test_unblock_unblocked_task_is_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/tasks/t1/unblock", json={"status": "In Progress", "unblocked_by": "u2"}
        )

        assert response.json()["detail"]["code"] == "TASK_NOT_BLOCKED"


class TestOwnershipEndpoints:
    def test_creation_warns_without_owner(self, client: TestClient) -> None:
        response = client.post("/v1/tasks/t2/creation", json={"created_by": "u1"})

        body = response.json()
        assert response.status_code == 200
        assert body["history_entry"]["from_status"] is None
        assert body["warnings"][0]["code"] == "OWNER_REQUIRED"

    def test_owner_change_blocked_in_block_mode(self, client: TestClient) -> None:
        client.put("/v1/enforcement/ownership", json={"mode": "block"})

        response = client.put(
            "/v1/tasks/t1/owner", json={"owner_id": "", "changed_by": "admin"}
        )

        assert response.status_code == 422
        assert response.json()["detail"]["errors"][0]["code"] == "OWNER_REQUIRED"


class TestHistoryEndpoints:
    def test_by_user_pagination(self, client: TestClient) -> None:
        client.patch("/v1/tasks/t1/status", json={"status": "Doing", "changed_by": "u1"})
        client.patch("/v1/tasks/t1/status", json={"status": "Review", "changed_by": "u1"})

        page = client.get(
            "/v1/tasks/status-history/by-user/u1", params={"limit": 1, "offset": 0}
        ).json()
        too_big = client.get(
            "/v1/tasks/status-history/by-user/u1", params={"limit": 501}
        )

        assert [e["to_status"] for e in page] == ["Review"]
        assert too_big.status_code == 422

    def test_can_start(self, client: TestClient) -> None:
        response = client.get("/v1/tasks/t1/can-start")

        assert response.json() == {
            "task_id": "t1",
            "has_blocking": False,
            "blocking_tasks": [],
        }


class TestErrorHandling:
    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.get(
            "/v1/tasks/t1/status-history", headers={"X-Correlation-ID": "req-7"}
        )

        assert response.headers["X-Correlation-ID"] == "req-7"

    def test_persistence_errors_are_sanitised(self, container: WorkflowContainer) -> None:
        engine = AsyncMock()
        engine.get_task_status_history.side_effect = PersistenceError(
            "status_history_select", "connection refused to db-1:5432"
        )
        app = create_app(container)
        app.dependency_overrides[get_workflow_engine] = lambda: engine

        with TestClient(app) as client:
            response = client.get(
                "/v1/tasks/t1/status-history", headers={"X-Correlation-ID": "req-9"}
            )

        assert response.status_code == 500
        assert response.json()["detail"] == {
            "error": "InternalServerError",
            "message": "An internal error occurred",
            "correlation_id": "req-9",
        }
        assert "db-1" not in response.text
