"""
Tests for the categories API and the icon catalogue.
"""
from helpers import create_category, create_project, create_prompt


async def test_create_appends_and_applies_defaults(client):
    first = await create_category(client, "UI")
    second = await create_category(client, "Backend", color="#EF4444", icon="Server")

    assert first["position"] == 0
    assert first["color"] == "#6B7280"
    assert first["icon"] == "Tag"
    assert second["position"] == 1
    assert second["color"] == "#EF4444"
    assert second["icon"] == "Server"


async def test_unknown_icon_falls_back(client):
    category = await create_category(client, "Odd", icon="NotARealIcon")
    assert category["icon"] == "Tag"

    response = await client.put(f"/api/categories/{category['id']}", json={"icon": "rocket"})
    assert response.json()["icon"] == "Rocket"


async def test_icon_catalogue(client):
    response = await client.get("/api/categories/icons")
    assert response.status_code == 200
    body = response.json()
    assert body["fallback"] == "Tag"
    assert "Code" in body["icons"]


async def test_create_rejects_blank_name(client):
    response = await client.post("/api/categories", json={"name": " "})
    assert response.status_code == 400


async def test_reorder_categories(client):
    ids = [(await create_category(client, n))["id"] for n in ("A", "B", "C")]

    response = await client.put(
        "/api/categories/reorder", json={"categoryIds": [ids[1], ids[2], ids[0]]}
    )
    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body] == ["B", "C", "A"]
    assert [c["position"] for c in body] == [0, 1, 2]


async def test_update_missing_category(client):
    response = await client.put("/api/categories/missing", json={"name": "X"})
    assert response.status_code == 404


async def test_delete_category_nulls_prompt_references(client):
    project = await create_project(client, "P1")
    category = await create_category(client, "Docs")
    other = await create_category(client, "Other")
    tagged = [
        (await create_prompt(client, project["id"], f"tagged {i}", category["id"]))["id"]
        for i in range(3)
    ]
    untouched = await create_prompt(client, project["id"], "other", other["id"])

    response = await client.delete(f"/api/categories/{category['id']}")
    assert response.status_code == 200

    for prompt_id in tagged:
        prompt = (await client.get(f"/api/prompts/{prompt_id}")).json()
        assert prompt["category_id"] is None
        assert prompt["project_id"] == project["id"]
    assert (await client.get(f"/api/prompts/{untouched['id']}")).json()["category_id"] == other["id"]

    listing = (await client.get("/api/categories")).json()
    assert [c["name"] for c in listing] == ["Other"]
