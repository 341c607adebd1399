"""Small request helpers shared by the API tests."""


async def create_project(client, name: str, **extra) -> dict:
    response = await client.post("/api/projects", json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()


async def create_category(client, name: str, **extra) -> dict:
    response = await client.post("/api/categories", json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()


async def create_prompt(client, project_id: str, content: str, category_id: str | None = None) -> dict:
    payload = {"project_id": project_id, "content": content}
    if category_id is not None:
        payload["category_id"] = category_id
    response = await client.post("/api/prompts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def active_prompts(client, project_id: str) -> list[dict]:
    response = await client.get(f"/api/prompts/project/{project_id}")
    assert response.status_code == 200, response.text
    return response.json()


async def archived_prompts(client, project_id: str) -> list[dict]:
    response = await client.get(f"/api/prompts/project/{project_id}", params={"archived": "true"})
    assert response.status_code == 200, response.text
    return response.json()
