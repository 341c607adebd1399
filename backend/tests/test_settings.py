"""
Tests for the key/value settings API and default seeding.
"""
from datetime import datetime

import pytest

from prompto.services.seed_defaults import CATEGORIES_VISIBLE_KEY, seed_default_settings


async def test_missing_setting_is_404(client):
    response = await client.get("/api/settings/unknown")
    assert response.status_code == 404


@pytest.mark.parametrize(
    "value, stored",
    [(True, "true"), (False, "false"), ("compact", "compact"), (3, "3"), (["a", "b"], '["a", "b"]')],
)
async def test_put_stores_value_as_string(client, value, stored):
    response = await client.put("/api/settings/view", json={"value": value})
    assert response.status_code == 200
    assert response.json()["key"] == "view"
    assert response.json()["value"] == stored

    fetched = await client.get("/api/settings/view")
    assert fetched.json()["value"] == stored


async def test_put_returns_updated_at(client):
    first = (await client.put("/api/settings/theme", json={"value": "dark"})).json()
    second = (await client.put("/api/settings/theme", json={"value": "light"})).json()
    assert first["updated_at"]
    assert datetime.fromisoformat(second["updated_at"]) > datetime.fromisoformat(first["updated_at"])

    fetched = (await client.get("/api/settings/theme")).json()
    assert fetched == second


async def test_put_overwrites_existing_value(client):
    await client.put(f"/api/settings/{CATEGORIES_VISIBLE_KEY}", json={"value": True})
    await client.put(f"/api/settings/{CATEGORIES_VISIBLE_KEY}", json={"value": False})

    response = await client.get(f"/api/settings/{CATEGORIES_VISIBLE_KEY}")
    assert response.json()["value"] == "false"

    listing = await client.get("/api/settings")
    assert [s["key"] for s in listing.json()] == [CATEGORIES_VISIBLE_KEY]


async def test_put_requires_value(client):
    assert (await client.put("/api/settings/x", json={})).status_code == 422
    assert (await client.put("/api/settings/x", json={"value": None})).status_code == 400


async def test_delete_setting(client):
    await client.put("/api/settings/temp", json={"value": "1"})
    assert (await client.delete("/api/settings/temp")).status_code == 200
    assert (await client.get("/api/settings/temp")).status_code == 404
    assert (await client.delete("/api/settings/temp")).status_code == 404


async def test_seed_defaults_is_idempotent(client, db):
    assert await seed_default_settings(db) == 1
    assert await seed_default_settings(db) == 0

    response = await client.get(f"/api/settings/{CATEGORIES_VISIBLE_KEY}")
    assert response.json()["value"] == "true"


async def test_seed_keeps_user_value(client, db):
    await client.put(f"/api/settings/{CATEGORIES_VISIBLE_KEY}", json={"value": False})
    assert await seed_default_settings(db) == 0

    response = await client.get(f"/api/settings/{CATEGORIES_VISIBLE_KEY}")
    assert response.json()["value"] == "false"
