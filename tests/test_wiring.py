import pytest

from kondate.cli import main
from kondate.features.recipes.app.orchestrator import BatchPolicy
from kondate.features.recipes.app.use_cases import build_orchestrator, build_transport
from kondate.features.recipes.domain.models import GenerationRequest
from kondate.features.recipes.infra.transports import ModelTransport, RelayTransport
from kondate.shared.errors import GenerationFailed, MalformedResponse, message_for
from kondate.shared.llm.gemini_client import GeminiClient


def test_build_transport():
    assert isinstance(build_transport("relay", access_token="t"), RelayTransport)
    assert isinstance(build_transport("direct", provider=GeminiClient(api_key="k")), ModelTransport)
    with pytest.raises(ValueError):
        build_transport("carrier-pigeon")


def test_build_orchestrator_policy():
    orch = build_orchestrator(build_transport("relay", access_token="t"), policy="best_effort")
    assert orch.policy is BatchPolicy.BEST_EFFORT
    assert build_orchestrator(build_transport("relay")).policy is BatchPolicy.FAIL_FAST


def test_generation_request_invariants():
    req = GenerationRequest.build(["egg", "egg", " rice"], 2, 1, 3)
    assert req.ingredients == ("egg", "rice")
    with pytest.raises(ValueError):
        GenerationRequest.build([], 2, 1, 3)
    with pytest.raises(ValueError):
        GenerationRequest.build(["egg"], 0, 1, 3)


def test_localized_messages():
    assert message_for("generation_failed", "ja") == "レシピの生成に失敗しました"
    assert message_for("generation_failed", "en") == "Recipe generation failed."
    assert GenerationFailed().status_code == 500
    assert MalformedResponse(raw_excerpt="raw").message != "raw"


def test_cli_relay_without_token(capsys):
    code = main(["--ingredients", "egg,rice", "--transport", "relay", "--token", ""])
    assert code == 1
    assert "[ERROR] Recipe generation failed." in capsys.readouterr().err


def test_cli_no_ingredients(capsys):
    code = main(["--ingredients", " , "])
    assert code == 1
    assert "[ERROR] Please select at least one ingredient." in capsys.readouterr().err


@pytest.mark.parametrize("flag", ["--count", "--members"])
def test_cli_rejects_non_positive_numbers(flag, capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--ingredients", "egg", flag, "0"])
    assert ei.value.code == 2
    assert "must be at least 1" in capsys.readouterr().err
