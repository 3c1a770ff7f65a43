import json

import httpx
import pytest

from kondate.features.recipes.app.client import RecipeGenerationClient
from kondate.features.recipes.domain.models import Difficulty
from kondate.features.recipes.infra.transports import ModelTransport, RelayTransport
from kondate.shared.errors import AuthenticationRequired, GenerationFailed, MalformedResponse, ProviderUnconfigured
from kondate.shared.llm.gemini_client import GeminiClient

from conftest import FENCED_RECIPE, RECIPE_JSON, FakeProvider


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_generate_one_via_model():
    provider = FakeProvider()
    client = RecipeGenerationClient(ModelTransport(provider, lang="en"))
    recipe = await client.generate_one(["rice", "egg"], 2, 1, 3)
    assert recipe.name == "Curry"
    assert recipe.cooking_time == "20min"
    assert recipe.difficulty is Difficulty.EASY
    assert "Japanese" in provider.prompts[0]
    assert "rice, egg" in provider.prompts[0]


@pytest.mark.asyncio
async def test_first_recipe_is_returned():
    text = json.dumps({"recipes": [
        {"name": "A", "difficulty": "Hard", "ingredients": ["x"], "steps": ["y"]},
        {"name": "B", "difficulty": "Easy", "ingredients": ["x"], "steps": ["y"]},
    ]})
    client = RecipeGenerationClient(ModelTransport(FakeProvider(text)))
    recipe = await client.generate_one(["x"], 2, 2, 3)
    assert recipe.name == "A"


@pytest.mark.asyncio
async def test_malformed_output_becomes_generation_failed():
    client = RecipeGenerationClient(ModelTransport(FakeProvider("sorry, I cannot help")))
    with pytest.raises(GenerationFailed) as ei:
        await client.generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, MalformedResponse)
    assert "sorry" not in ei.value.message


@pytest.mark.asyncio
async def test_empty_recipe_list():
    client = RecipeGenerationClient(ModelTransport(FakeProvider('{"recipes": []}')))
    with pytest.raises(GenerationFailed) as ei:
        await client.generate_one(["rice"], 2, 1, 3)
    assert ei.value.message == "No recipe was produced."


@pytest.mark.asyncio
async def test_invalid_recipe_fields():
    text = '{"recipes": [{"name": "A", "difficulty": "Extreme", "ingredients": [], "steps": []}]}'
    client = RecipeGenerationClient(ModelTransport(FakeProvider(text)))
    with pytest.raises(GenerationFailed):
        await client.generate_one(["rice"], 2, 1, 3)


@pytest.mark.asyncio
async def test_japanese_difficulty_label_accepted():
    text = '{"recipes": [{"name": "親子丼", "difficulty": "普通", "ingredients": ["卵"], "steps": ["煮る"]}]}'
    client = RecipeGenerationClient(ModelTransport(FakeProvider(text)))
    recipe = await client.generate_one(["卵"], 2, 1, 3)
    assert recipe.difficulty is Difficulty.NORMAL
    assert recipe.to_wire()["difficulty"] == "Normal"


@pytest.mark.asyncio
async def test_gemini_request_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": FENCED_RECIPE}]}}]})

    gemini = GeminiClient(api_key="k", model="gemini-test", base_url="https://llm.test/v1beta", http_client=_mock_client(handler))
    client = RecipeGenerationClient(ModelTransport(gemini))
    recipe = await client.generate_one(["rice"], 2, 1, 3)

    assert recipe.name == "Curry"
    assert seen["url"] == "https://llm.test/v1beta/models/gemini-test:generateContent"
    assert seen["key"] == "k"
    assert seen["body"]["generationConfig"] == {
        "temperature": 0.7,
        "topP": 0.8,
        "topK": 50,
        "maxOutputTokens": 3072,
    }
    assert "rice" in seen["body"]["contents"][0]["parts"][0]["text"]


@pytest.mark.asyncio
async def test_gemini_http_error_is_wrapped():
    gemini = GeminiClient(api_key="k", http_client=_mock_client(lambda r: httpx.Response(503, text="overloaded")))
    client = RecipeGenerationClient(ModelTransport(gemini))
    with pytest.raises(GenerationFailed) as ei:
        await client.generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, httpx.HTTPStatusError)


@pytest.mark.parametrize("response", [
    httpx.Response(200, text="<html>gateway</html>"),
    httpx.Response(200, json=[{"error": "x"}]),
    httpx.Response(200, json={"candidates": ["x"]}),
])
@pytest.mark.asyncio
async def test_gemini_unreadable_body_is_wrapped(response):
    gemini = GeminiClient(api_key="k", http_client=_mock_client(lambda r: response))
    client = RecipeGenerationClient(ModelTransport(gemini))
    with pytest.raises(GenerationFailed) as ei:
        await client.generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, MalformedResponse)


@pytest.mark.asyncio
async def test_gemini_without_key():
    def handler(request):
        raise AssertionError("provider must not be called")

    gemini = GeminiClient(api_key="", http_client=_mock_client(handler))
    with pytest.raises(ProviderUnconfigured):
        await gemini.generate_text("hi")
    client = RecipeGenerationClient(ModelTransport(gemini))
    with pytest.raises(GenerationFailed) as ei:
        await client.generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, ProviderUnconfigured)


@pytest.mark.asyncio
async def test_relay_attaches_bearer_and_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        recipe = json.loads(RECIPE_JSON)["recipes"][0]
        return httpx.Response(200, json={"recipe": recipe})

    transport = RelayTransport("user-token", url="https://api.test/v1/recipes/generate", http_client=_mock_client(handler))
    recipe = await RecipeGenerationClient(transport).generate_one(["rice", "egg"], 4, 2, 3)

    assert recipe.name == "Curry"
    assert seen["auth"] == "Bearer user-token"
    assert seen["body"] == {"ingredients": ["rice", "egg"], "memberCount": 4, "recipeIndex": 2, "totalRecipes": 3}


@pytest.mark.asyncio
async def test_relay_without_token_makes_no_request():
    def handler(request):
        raise AssertionError("relay must not be called")

    transport = RelayTransport(None, url="https://api.test/v1/recipes/generate", http_client=_mock_client(handler))
    with pytest.raises(GenerationFailed) as ei:
        await RecipeGenerationClient(transport).generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, AuthenticationRequired)


@pytest.mark.asyncio
async def test_relay_rejected_credential():
    transport = RelayTransport(
        "expired",
        url="https://api.test/v1/recipes/generate",
        http_client=_mock_client(lambda r: httpx.Response(401, json={"error": "Authentication is required."})),
    )
    with pytest.raises(GenerationFailed) as ei:
        await RecipeGenerationClient(transport).generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, AuthenticationRequired)


@pytest.mark.asyncio
async def test_relay_server_error():
    transport = RelayTransport(
        "tok",
        url="https://api.test/v1/recipes/generate",
        http_client=_mock_client(lambda r: httpx.Response(500, json={"error": "Recipe generation failed."})),
    )
    with pytest.raises(GenerationFailed) as ei:
        await RecipeGenerationClient(transport).generate_one(["rice"], 2, 1, 3)
    assert isinstance(ei.value.cause, httpx.HTTPStatusError)
