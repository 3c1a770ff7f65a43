from typing import List

import pytest
from fastapi.testclient import TestClient

from kondate.app import create_app
from kondate.features.pantry.api.routes import get_pantry
from kondate.features.recipes.domain.models import Recipe
from kondate.shared.api.deps import get_current_user, get_provider
from kondate.shared.auth.supabase_auth import AuthUser

RECIPE_JSON = (
    '{"recipes":[{"name":"Curry","description":"d","cookingTime":"20min",'
    '"difficulty":"Easy","ingredients":["rice"],"steps":["cook"]}]}'
)
FENCED_RECIPE = f"```json\n{RECIPE_JSON}\n```"


def make_recipe(name: str = "Curry") -> Recipe:
    return Recipe(
        name=name,
        description="A quick dish.",
        cookingTime="20 min",
        difficulty="Easy",
        ingredients=["rice", "onion"],
        steps=["chop", "cook", "serve"],
    )


class FakeProvider:
    def __init__(self, text: str = FENCED_RECIPE, configured: bool = True):
        self.text = text
        self.configured = configured
        self.prompts: List[str] = []

    async def generate_text(self, prompt, *, sampling=None):
        self.prompts.append(prompt)
        return self.text


class FakePantry:
    def __init__(self, names=("egg", "tomato"), member_count=4):
        self.names = list(names)
        self.member_count = member_count

    async def in_stock_names(self):
        return self.names

    async def recipe_inputs(self):
        return self.names, self.member_count


@pytest.fixture
def recipe_factory():
    return make_recipe


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def pantry():
    return FakePantry()


@pytest.fixture
def app(provider, pantry):
    app = create_app()
    app.dependency_overrides[get_provider] = lambda: provider
    app.dependency_overrides[get_pantry] = lambda: pantry
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def authed_client(app):
    app.dependency_overrides[get_current_user] = lambda: AuthUser(id="user-1", email="a@example.com", access_token="tok")
    return TestClient(app)
