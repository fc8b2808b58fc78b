"""API tests for checklist and enforcement routes."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from taskflow.api.main import create_app
from taskflow.bootstrap.container import WorkflowContainer
from taskflow.domain.models.task import Task


@pytest.fixture
def client(
    container: WorkflowContainer, make_task: Callable[..., Task]
) -> Iterator[TestClient]:
    container.tasks.add_task(make_task("t1"))  # type: ignore[attr-defined]
    with TestClient(create_app(container)) as test_client:
        yield test_client


def _add_item(client: TestClient, text: str, mandatory: bool = False) -> dict:
    response = client.post(
        "/v1/tasks/t1/checklist", json={"text": text, "is_mandatory": mandatory}
    )
    assert response.status_code == 201
    return response.json()


class TestChecklistEndpoints:
    def test_add_and_list(self, client: TestClient) -> None:
        _add_item(client, "Sign-off", mandatory=True)
        _add_item(client, "Notes")

        items = client.get("/v1/tasks/t1/checklist").json()

        assert [(i["text"], i["position"]) for i in items] == [
            ("Sign-off", 0),
            ("Notes", 1),
        ]

    def test_blank_text_is_400(self, client: TestClient) -> None:
        response = client.post("/v1/tasks/t1/checklist", json={"text": "  "})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "CHECKLIST_TEXT_REQUIRED"

    def test_toggle_records_history(self, client: TestClient) -> None:
        item = _add_item(client, "Sign-off", mandatory=True)

        checked = client.patch(
            f"/v1/tasks/checklist-items/{item['id']}",
            json={"is_completed": True, "actor_id": "u1", "actor_name": "Uma"},
        )
        history = client.get(f"/v1/tasks/checklist-items/{item['id']}/history").json()
        task_history = client.get("/v1/tasks/t1/checklist/history").json()

        assert checked.json()["completed_by"] == "u1"
        assert [h["action"] for h in history] == ["CHECKED"]
        assert task_history == history

    def test_toggle_without_actor_is_400(self, client: TestClient) -> None:
        item = _add_item(client, "Sign-off")

        response = client.patch(
            f"/v1/tasks/checklist-items/{item['id']}", json={"is_completed": True}
        )

        assert response.json()["detail"]["code"] == "ACTOR_REQUIRED"

    def test_unknown_item_is_404(self, client: TestClient) -> None:
        response = client.patch("/v1/tasks/checklist-items/nope", json={"text": "x"})

        assert response.status_code == 404

    def test_validation_preview(self, client: TestClient) -> None:
        _add_item(client, "Sign-off", mandatory=True)
        client.put(
            "/v1/enforcement/mandatory_checklist",
            json={"mode": "block", "department_id": "dept-ops"},
        )

        result = client.get(
            "/v1/tasks/t1/checklist/validation", params={"department_id": "dept-ops"}
        ).json()
        open_items = client.get("/v1/tasks/t1/checklist/uncompleted-mandatory").json()

        assert result["is_valid"] is False
        assert result["enforcement_mode"] == "block"
        assert [i["text"] for i in result["uncompleted_mandatory_items"]] == ["Sign-off"]
        assert [i["text"] for i in open_items] == ["Sign-off"]


class TestEnforcementEndpoints:
    def test_resolution_order(self, client: TestClient) -> None:
        client.put("/v1/enforcement/ownership", json={"mode": "block"})
        client.put(
            "/v1/enforcement/ownership", json={"mode": "warn", "department_id": "dept-ops"}
        )

        department = client.get(
            "/v1/enforcement/ownership", params={"department_id": "dept-ops"}
        ).json()
        other = client.get(
            "/v1/enforcement/ownership", params={"department_id": "dept-eng"}
        ).json()

        assert department["mode"] == "warn"
        assert other["mode"] == "block"

    def test_invalid_mode_is_400(self, client: TestClient) -> None:
        response = client.put("/v1/enforcement/ownership", json={"mode": "strict"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_ENFORCEMENT_MODE"

    def test_unknown_policy_is_422(self, client: TestClient) -> None:
        assert client.get("/v1/enforcement/speed").status_code == 422

    def test_list_and_clear(self, client: TestClient) -> None:
        client.put("/v1/enforcement/mandatory_checklist", json={"mode": "block"})

        listed = client.get("/v1/enforcement").json()
        cleared = client.delete("/v1/enforcement/mandatory_checklist").json()
        after = client.get("/v1/enforcement/mandatory_checklist").json()

        assert [(s["scope_key"], s["mode"]) for s in listed] == [("global", "block")]
        assert cleared == {"deleted": True}
        assert after["mode"] == "warn"

    def test_owner_requirement_switch(
        self,
        client: TestClient,
        container: WorkflowContainer,
        make_task: Callable[..., Task],
    ) -> None:
        container.tasks.add_task(make_task("t2", owner_id=None))  # type: ignore[attr-defined]
        client.put("/v1/enforcement/ownership", json={"mode": "block"})

        blocked = client.post("/v1/tasks/t2/creation", json={"created_by": "u1"})
        switched = client.put(
            "/v1/enforcement/ownership/require-owner",
            json={"required": False, "department_id": "dept-ops"},
        )
        effective = client.get(
            "/v1/enforcement/ownership/require-owner",
            params={"department_id": "dept-ops"},
        ).json()
        created = client.post("/v1/tasks/t2/creation", json={"created_by": "u1"})
        listed = client.get("/v1/enforcement", params={"policy": "ownership"}).json()

        assert blocked.status_code == 422
        assert switched.status_code == 200
        assert switched.json()["mode"] == "block"
        assert switched.json()["require_owner"] is False
        assert effective == {"department_id": "dept-ops", "require_owner": False}
        assert created.status_code == 200
        assert created.json()["warnings"] == []
        assert [(s["scope_key"], s["require_owner"]) for s in listed] == [
            ("dept-ops", False),
            ("global", True),
        ]
