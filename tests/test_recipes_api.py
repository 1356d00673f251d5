from conftest import recipe_payload


async def test_create_recipe_sets_defaults(client):
    response = await client.post("/api/recipes", json=recipe_payload())

    assert response.status_code == 201
    recipe = response.json()
    assert recipe["id"]
    assert recipe["rating"] == 0
    assert recipe["favorites"] == 0
    assert recipe["createdAt"] == recipe["updatedAt"]
    assert recipe["prepTime"] == "20"
    assert recipe["tags"] == ["doce", "chocolate", "caseiro"]
    assert recipe["instructions"] == ["Bata as cenouras", "Asse por 40 minutos"]


async def test_create_recipe_cleans_lists(client):
    payload = recipe_payload(
        ingredients=[{"item": "Ovos", "quantity": "3"}, {"item": "  ", "quantity": ""}],
        instructions=["Misture", "   ", "Asse"],
        tags=[" Doce", "doce", "", "Festa "],
    )

    recipe = (await client.post("/api/recipes", json=payload)).json()

    assert [i["item"] for i in recipe["ingredients"]] == ["Ovos"]
    assert recipe["instructions"] == ["Misture", "Asse"]
    assert recipe["tags"] == ["Doce", "Festa"]


async def test_create_recipe_accepts_snake_case_and_numbers(client):
    payload = recipe_payload()
    del payload["prepTime"]
    payload["prep_time"] = 15
    payload["servings"] = 4

    recipe = (await client.post("/api/recipes", json=payload)).json()

    assert recipe["prepTime"] == "15"
    assert recipe["servings"] == "4"


async def test_blank_title_is_rejected(client):
    response = await client.post("/api/recipes", json=recipe_payload(title="   "))

    assert response.status_code == 400
    assert response.json() == {"error": "Recipe title is required"}


async def test_missing_title_is_a_validation_error(client):
    payload = recipe_payload()
    del payload["title"]

    response = await client.post("/api/recipes", json=payload)

    assert response.status_code == 422


async def test_invalid_difficulty_is_a_validation_error(client):
    response = await client.post("/api/recipes", json=recipe_payload(difficulty="impossivel"))

    assert response.status_code == 422


async def test_get_recipe(client, create_recipe):
    created = await create_recipe()

    response = await client.get(f"/api/recipes/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


async def test_get_missing_recipe(client):
    response = await client.get("/api/recipes/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Recipe not found"}


async def test_list_is_newest_first(client, create_recipe):
    first = await create_recipe(title="Primeira")
    second = await create_recipe(title="Segunda")

    recipes = (await client.get("/api/recipes")).json()

    assert [r["id"] for r in recipes] == [second["id"], first["id"]]


async def test_list_filters(client, create_recipe):
    bolo = await create_recipe()
    salada = await create_recipe(
        title="Salada Caesar",
        description="Clássica salada Caesar com croutons",
        category="saladas",
        difficulty="facil",
        prepTime="15",
        cookTime="0",
        ingredients=[{"item": "Alface romana", "quantity": "1 pé"}],
        tags=["Saudável", "Rápido"],
    )

    async def ids(**params):
        response = await client.get("/api/recipes", params=params)
        assert response.status_code == 200
        return [r["id"] for r in response.json()]

    assert await ids(search="ALFACE") == [salada["id"]]
    assert await ids(category="sobremesas") == [bolo["id"]]
    assert await ids(difficulty="medio") == [bolo["id"]]
    assert await ids(difficulty="desconhecida") == []
    assert await ids(tags="Festa,Rápido") == [salada["id"]]
    assert await ids(maxTime=30) == [salada["id"]]
    assert await ids(minRating=1) == []
    assert await ids(search="bolo", category="saladas") == []


async def test_list_scoped_to_owner(client, create_recipe):
    mine = await create_recipe(userId="ana")
    await create_recipe(userId="bruno")

    recipes = (await client.get("/api/recipes", params={"userId": "ana"})).json()

    assert [r["id"] for r in recipes] == [mine["id"]]


async def test_partial_update_keeps_other_fields(client, create_recipe):
    created = await create_recipe()

    response = await client.put(
        f"/api/recipes/{created['id']}",
        json={"title": "Bolo de Cenoura Vegano", "rating": 4.5},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Bolo de Cenoura Vegano"
    assert updated["rating"] == 4.5
    assert updated["description"] == created["description"]
    assert updated["ingredients"] == created["ingredients"]
    assert updated["tags"] == created["tags"]
    assert updated["createdAt"] == created["createdAt"]
    assert updated["updatedAt"] >= created["updatedAt"]


async def test_update_replaces_lists_wholesale(client, create_recipe):
    created = await create_recipe()

    updated = (await client.put(
        f"/api/recipes/{created['id']}",
        json={"tags": ["caseiro", "Vegano"], "instructions": ["Um passo só"]},
    )).json()

    assert updated["tags"] == ["caseiro", "Vegano"]
    assert updated["instructions"] == ["Um passo só"]
    assert updated["ingredients"] == created["ingredients"]


async def test_shared_tag_keeps_each_recipes_spelling(client, create_recipe):
    first = await create_recipe(title="Primeira", tags=["Vegano"])
    second = await create_recipe(title="Segunda", tags=["vegano"])

    assert first["tags"] == ["Vegano"]
    assert second["tags"] == ["vegano"]
    assert (await client.get(f"/api/recipes/{second['id']}")).json()["tags"] == ["vegano"]

    for term in ("vegano", "VEGANO"):
        found = (await client.get("/api/recipes", params={"tags": term})).json()
        assert {r["id"] for r in found} == {first["id"], second["id"]}


async def test_update_respells_and_reorders_tags(client, create_recipe):
    created = await create_recipe(tags=["a", "b"])

    updated = (await client.put(f"/api/recipes/{created['id']}", json={"tags": ["B", "c", "a"]})).json()

    assert updated["tags"] == ["B", "c", "a"]
    assert (await client.get(f"/api/recipes/{created['id']}")).json()["tags"] == ["B", "c", "a"]


async def test_update_ignores_protected_fields(client, create_recipe):
    created = await create_recipe(userId="ana")

    updated = (await client.put(
        f"/api/recipes/{created['id']}",
        json={"id": "other", "userId": "bruno", "favorites": 99, "description": "Nova"},
    )).json()

    assert updated["id"] == created["id"]
    assert updated["userId"] == "ana"
    assert updated["favorites"] == 0
    assert updated["description"] == "Nova"


async def test_update_rejects_blank_title(client, create_recipe):
    created = await create_recipe()

    response = await client.put(f"/api/recipes/{created['id']}", json={"title": ""})

    assert response.status_code == 400


async def test_update_missing_recipe(client):
    response = await client.put("/api/recipes/missing", json={"title": "Nada"})

    assert response.status_code == 404


async def test_delete_recipe_removes_its_favorites(client, create_recipe):
    created = await create_recipe()
    await client.post("/api/favorites", json={"recipeId": created["id"], "userId": "ana"})

    response = await client.delete(f"/api/recipes/{created['id']}")

    assert response.status_code == 200
    assert (await client.get(f"/api/recipes/{created['id']}")).status_code == 404
    assert (await client.get("/api/favorites", params={"userId": "ana"})).json() == []
    stats = (await client.get("/api/stats", params={"userId": "ana"})).json()
    assert stats["totalFavorites"] == 0


async def test_delete_missing_recipe(client):
    response = await client.delete("/api/recipes/missing")

    assert response.status_code == 404


async def test_recipe_card(client, create_recipe):
    created = await create_recipe()
    await client.post("/api/favorites", json={"recipeId": created["id"], "userId": "ana"})

    card = (await client.get(f"/api/recipes/{created['id']}/card", params={"userId": "ana"})).json()

    assert card["servingsLabel"] == "8 porções"
    assert card["totalTime"] == "60 min"
    assert card["visibleTags"] == ["doce", "chocolate"]
    assert card["overflowBadge"] == "+1"
    assert card["isFavorite"] is True


async def test_stats(client, create_recipe):
    first = await create_recipe()
    await create_recipe(title="Mousse")
    await create_recipe(title="Salada", category="saladas")
    await client.post("/api/favorites", json={"recipeId": first["id"], "userId": "ana"})

    stats = (await client.get("/api/stats", params={"userId": "ana"})).json()

    assert stats == {
        "totalRecipes": 3,
        "totalFavorites": 1,
        "categoryCounts": {"sobremesas": 2, "saladas": 1},
    }


async def test_stats_scoped_to_owner(client, create_recipe):
    await create_recipe(userId="ana")
    await create_recipe(userId="bruno", category="saladas")

    stats = (await client.get("/api/stats", params={"userId": "ana", "ownerId": "bruno"})).json()

    assert stats["totalRecipes"] == 1
    assert stats["categoryCounts"] == {"saladas": 1}


async def test_init_seeds_sample_recipes_once(client):
    first = await client.post("/api/init")
    second = await client.post("/api/init")

    assert first.status_code == 200
    assert second.json() == {"message": "Database already initialized"}
    titles = {r["title"] for r in (await client.get("/api/recipes")).json()}
    assert titles == {"Pasta com Ervas Frescas", "Bolo de Chocolate", "Salada Caesar"}


async def test_health_endpoints(client):
    assert (await client.get("/health")).json()["status"] == "healthy"
    assert (await client.get("/api/health/")).status_code == 200
    assert (await client.get("/api/health/live")).json() == {"status": "alive"}


async def test_responses_carry_request_and_timing_headers(client):
    response = await client.get("/api/recipes")

    assert response.headers["X-Request-ID"]
    assert float(response.headers["X-Process-Time"]) >= 0
