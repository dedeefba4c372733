"""
Integration tests for tenant isolation

Data of one tenant must never be listed, read, changed or counted from
another tenant, whatever the role of the caller.
"""

import uuid

from taskdesk.models.task import Task


def test_listing_only_returns_current_tenant_tasks(client, acme, globex, create_task, auth_headers):
    create_task(acme.tenant, acme.manager, "Acme task")
    create_task(globex.tenant, globex.manager, "Globex task")

    acme_titles = [
        task["title"]
        for task in client.get("/api/tasks", headers=auth_headers(acme.manager, acme.tenant)).json()["data"]
    ]
    globex_titles = [
        task["title"]
        for task in client.get("/api/tasks", headers=auth_headers(globex.manager, globex.tenant)).json()["data"]
    ]

    assert acme_titles == ["Acme task"]
    assert globex_titles == ["Globex task"]


def test_cross_tenant_task_lookup_is_not_found(client, acme, globex, create_task, auth_headers):
    foreign = create_task(globex.tenant, globex.manager, "Globex secret")

    response = client.get(f"/api/tasks/{foreign.id}", headers=auth_headers(acme.manager, acme.tenant))

    assert response.status_code == 404


def test_cross_tenant_update_and_delete_are_not_found(client, db, acme, globex, create_task, auth_headers):
    foreign = create_task(globex.tenant, globex.manager, "Globex secret")
    headers = auth_headers(acme.manager, acme.tenant)

    assert client.put(f"/api/tasks/{foreign.id}", json={"title": "Mine now"}, headers=headers).status_code == 404
    assert client.delete(f"/api/tasks/{foreign.id}", headers=headers).status_code == 404

    db.refresh(foreign)
    assert foreign.title == "Globex secret"


def test_multi_tenant_user_sees_tasks_of_the_selected_tenant_only(
    client, acme, globex, create_user, create_task, auth_headers
):
    consultant = create_user("consultant@example.com", tenants=[acme.tenant, globex.tenant])
    create_task(acme.tenant, acme.manager, "Acme job", assigned_to=consultant)
    create_task(globex.tenant, globex.manager, "Globex job", assigned_to=consultant)

    response = client.get("/api/tasks", headers=auth_headers(consultant, acme.tenant, "globex"))

    assert [task["title"] for task in response.json()["data"]] == ["Globex job"]


def test_created_task_belongs_to_resolved_tenant(client, db, acme, globex, create_user, auth_headers):
    consultant = create_user("consultant@example.com", tenants=[acme.tenant, globex.tenant])

    response = client.post(
        "/api/tasks",
        json={"title": "Filed in globex"},
        headers=auth_headers(consultant, acme.tenant, "globex"),
    )

    task = db.get(Task, uuid.UUID(response.json()["task"]["id"]))
    assert task.tenant_id == globex.tenant.id


def test_stats_are_tenant_scoped(client, acme, globex, create_task, auth_headers):
    create_task(acme.tenant, acme.manager, "Acme 1")
    create_task(acme.tenant, acme.manager, "Acme 2")
    create_task(globex.tenant, globex.manager, "Globex 1")

    stats = client.get("/api/dashboard/stats", headers=auth_headers(globex.manager, globex.tenant)).json()["stats"]

    assert stats["total_tasks"] == 1


def test_subscription_is_tenant_scoped(client, acme, globex, auth_headers):
    acme_plan = client.get("/api/subscription/current", headers=auth_headers(acme.manager, acme.tenant))
    globex_plan = client.get("/api/subscription/current", headers=auth_headers(globex.manager, globex.tenant))

    assert acme_plan.json()["subscription"]["plan"] == "basic"
    assert globex_plan.json()["subscription"]["plan"] == "pro"
