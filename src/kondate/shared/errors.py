"""
Error taxonomy shared by the recipe core, the pantry feature and the API layer.

Every error carries an HTTP status and a user-safe message. Internal details
(raw model output, upstream bodies) stay on the exception object for logging
and never end up in ``message``.
"""
from __future__ import annotations

from typing import Dict, Optional

from kondate.shared.config.settings import settings

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "no_ingredients": "Please select at least one ingredient.",
        "auth_required": "Authentication is required.",
        "provider_unconfigured": "The recipe provider API key is not configured.",
        "malformed_response": "Could not read the generated recipe. Please try again.",
        "generation_failed": "Recipe generation failed.",
        "no_recipe": "No recipe was produced.",
        "duplicate_ingredient": "This ingredient has already been added.",
        "not_found": "The requested item was not found.",
        "store_error": "The data service is unavailable.",
    },
    "ja": {
        "no_ingredients": "食材を選択してください",
        "auth_required": "認証が必要です",
        "provider_unconfigured": "Gemini APIキーが設定されていません",
        "malformed_response": "レシピの解析に失敗しました。もう一度試してください。",
        "generation_failed": "レシピの生成に失敗しました",
        "no_recipe": "レシピが生成されませんでした",
        "duplicate_ingredient": "この食材は既に追加されています",
        "not_found": "データが見つかりません",
        "store_error": "ネットワークエラーが発生しました",
    },
}


def message_for(key: str, lang: Optional[str] = None) -> str:
    lang = (lang or settings.APP_LANG or "en").lower()
    table = MESSAGES["ja"] if lang.startswith("ja") else MESSAGES["en"]
    return table[key]


class KondateError(Exception):
    status_code = 500
    message_key = "generation_failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or message_for(self.message_key)
        super().__init__(self.message)


class NoIngredientsProvided(KondateError):
    status_code = 400
    message_key = "no_ingredients"


class AuthenticationRequired(KondateError):
    status_code = 401
    message_key = "auth_required"


class ProviderUnconfigured(KondateError):
    status_code = 500
    message_key = "provider_unconfigured"


class MalformedResponse(KondateError):
    """Model output did not contain a parseable ``recipes`` payload. Retryable."""

    status_code = 500
    message_key = "malformed_response"

    def __init__(self, message: Optional[str] = None, *, raw_excerpt: str = ""):
        super().__init__(message)
        self.raw_excerpt = raw_excerpt


class GenerationFailed(KondateError):
    status_code = 500
    message_key = "generation_failed"

    def __init__(self, message: Optional[str] = None, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DuplicateIngredient(KondateError):
    status_code = 409
    message_key = "duplicate_ingredient"


class NotFound(KondateError):
    status_code = 404
    message_key = "not_found"


class StoreError(KondateError):
    status_code = 502
    message_key = "store_error"
