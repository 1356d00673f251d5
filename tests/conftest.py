import os

os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_recipe_book.db")

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from core.database import build_engine, build_session_factory, create_tables, get_db
from main import app
from services.category_service import category_service


def recipe_payload(**overrides):
    payload = {
        "title": "Bolo de Cenoura",
        "description": "Bolo fofinho com cobertura de chocolate",
        "prepTime": "20",
        "cookTime": "40",
        "servings": "8",
        "difficulty": "medio",
        "category": "sobremesas",
        "ingredients": [
            {"item": "Cenoura", "quantity": "3 unidades"},
            {"item": "Farinha de trigo", "quantity": "2 xícaras"},
        ],
        "instructions": ["Bata as cenouras", "Asse por 40 minutos"],
        "tags": ["doce", "chocolate", "caseiro"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async with session_factory() as session:
        await category_service.seed_default_categories(session)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def create_recipe(client):
    async def _create(**overrides):
        response = await client.post("/api/recipes", json=recipe_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def gemini_reply(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"candidates": [{"content": {"parts": [{"text": text}]}}]},
    )
