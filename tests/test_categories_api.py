from services.category_service import DEFAULT_CATEGORIES


async def list_slugs(client, user_id):
    response = await client.get("/api/categories", params={"userId": user_id})
    assert response.status_code == 200
    return [c["slug"] for c in response.json()["categories"]]


async def test_defaults_are_listed_for_every_user(client):
    categories = (await client.get("/api/categories", params={"userId": "ana"})).json()["categories"]

    assert {c["slug"] for c in categories} == {c["slug"] for c in DEFAULT_CATEGORIES}
    assert all(c["isDefault"] for c in categories)
    names = [c["name"] for c in categories]
    assert names == sorted(names)


async def test_list_requires_user(client):
    response = await client.get("/api/categories")

    assert response.status_code == 400


async def test_create_category_derives_slug(client):
    response = await client.post("/api/categories", json={"userId": "ana", "name": "Café da Manhã"})

    assert response.status_code == 201
    category = response.json()["category"]
    assert category["slug"] == "cafe-da-manha"
    assert category["isDefault"] is False
    assert category["userId"] == "ana"


async def test_user_categories_are_private(client):
    await client.post("/api/categories", json={"userId": "ana", "name": "Massas"})

    assert "massas" in await list_slugs(client, "ana")
    assert "massas" not in await list_slugs(client, "bruno")


async def test_duplicate_slug_conflicts(client):
    await client.post("/api/categories", json={"userId": "ana", "name": "Massas"})

    duplicate = await client.post("/api/categories", json={"userId": "ana", "name": "MASSAS"})
    default_clash = await client.post("/api/categories", json={"userId": "ana", "name": "Sobremesas"})
    other_user = await client.post("/api/categories", json={"userId": "bruno", "name": "Massas"})

    assert duplicate.status_code == 409
    assert default_clash.status_code == 409
    assert other_user.status_code == 201


async def test_name_without_letters_is_rejected(client):
    response = await client.post("/api/categories", json={"userId": "ana", "name": "!!!"})

    assert response.status_code == 400


async def test_default_category_cannot_be_deleted(client):
    response = await client.delete("/api/categories", params={"userId": "ana", "slug": "sobremesas"})

    assert response.status_code == 403
    assert "sobremesas" in await list_slugs(client, "ana")


async def test_delete_own_category(client):
    await client.post("/api/categories", json={"userId": "ana", "name": "Massas"})

    response = await client.delete("/api/categories", params={"userId": "ana", "slug": "massas"})

    assert response.status_code == 200
    assert "massas" not in await list_slugs(client, "ana")


async def test_delete_missing_or_foreign_category(client):
    await client.post("/api/categories", json={"userId": "ana", "name": "Massas"})

    missing = await client.delete("/api/categories", params={"userId": "ana", "slug": "nada"})
    foreign = await client.delete("/api/categories", params={"userId": "bruno", "slug": "massas"})
    no_slug = await client.delete("/api/categories", params={"userId": "ana"})

    assert missing.status_code == 404
    assert foreign.status_code == 404
    assert no_slug.status_code == 400


async def test_rename_category_moves_recipes(client, create_recipe):
    await client.post("/api/categories", json={"userId": "ana", "name": "Massas"})
    recipe = await create_recipe(userId="ana", category="massas")

    response = await client.put(
        "/api/categories/massas", params={"userId": "ana"}, json={"name": "Massas Frescas"}
    )

    assert response.status_code == 200
    assert response.json()["slug"] == "massas-frescas"
    moved = (await client.get(f"/api/recipes/{recipe['id']}")).json()
    assert moved["category"] == "massas-frescas"


async def test_rename_default_category_is_forbidden(client):
    response = await client.put(
        "/api/categories/saladas", params={"userId": "ana"}, json={"name": "Saladas Verdes"}
    )

    assert response.status_code == 403


async def test_rename_to_existing_slug_conflicts(client):
    await client.post("/api/categories", json={"userId": "ana", "name": "Massas"})

    response = await client.put(
        "/api/categories/massas", params={"userId": "ana"}, json={"name": "Bebidas"}
    )

    assert response.status_code == 409


async def test_reserved_system_user_is_rejected(client):
    listing = await client.get("/api/categories", params={"userId": "system"})
    created = await client.post("/api/categories", json={"userId": "system", "name": "Massas"})
    deleted = await client.delete("/api/categories", params={"userId": "system", "slug": "saladas"})

    assert listing.status_code == 400
    assert created.status_code == 400
    assert deleted.status_code == 400
    assert "saladas" in await list_slugs(client, "ana")
