async def toggle(client, recipe_id, user_id="ana"):
    response = await client.post("/api/favorites", json={"recipeId": recipe_id, "userId": user_id})
    assert response.status_code == 200, response.text
    return response.json()


async def test_toggle_adds_then_removes(client, create_recipe):
    recipe = await create_recipe()

    assert await toggle(client, recipe["id"]) == {"isFavorite": True, "favorites": 1}
    assert await toggle(client, recipe["id"]) == {"isFavorite": False, "favorites": 0}

    restored = (await client.get(f"/api/recipes/{recipe['id']}")).json()
    assert restored["favorites"] == 0


async def test_counter_counts_distinct_users(client, create_recipe):
    recipe = await create_recipe()

    await toggle(client, recipe["id"], "ana")
    result = await toggle(client, recipe["id"], "bruno")

    assert result["favorites"] == 2
    assert (await client.get(f"/api/recipes/{recipe['id']}")).json()["favorites"] == 2


async def test_default_user_when_user_is_omitted(client, create_recipe):
    recipe = await create_recipe()

    response = await client.post("/api/favorites", json={"recipeId": recipe["id"]})
    status = await client.get(f"/api/favorites/{recipe['id']}")

    assert response.json()["isFavorite"] is True
    assert status.json() == {"isFavorite": True}


async def test_status_is_per_user(client, create_recipe):
    recipe = await create_recipe()
    await toggle(client, recipe["id"], "ana")

    ana = await client.get(f"/api/favorites/{recipe['id']}", params={"userId": "ana"})
    bruno = await client.get(f"/api/favorites/{recipe['id']}", params={"userId": "bruno"})

    assert ana.json()["isFavorite"] is True
    assert bruno.json()["isFavorite"] is False


async def test_list_favorites_most_recent_first(client, create_recipe):
    first = await create_recipe(title="Primeira")
    second = await create_recipe(title="Segunda")
    await toggle(client, second["id"])
    await toggle(client, first["id"])

    favorites = (await client.get("/api/favorites", params={"userId": "ana"})).json()

    assert [r["id"] for r in favorites] == [first["id"], second["id"]]


async def test_toggle_missing_recipe(client):
    response = await client.post("/api/favorites", json={"recipeId": "missing", "userId": "ana"})

    assert response.status_code == 404
