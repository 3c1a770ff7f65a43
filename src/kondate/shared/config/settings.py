from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # General
    LOG_LEVEL: str = Field(default="INFO", description="Application log level")
    BIND: str = Field(default="0.0.0.0:8076", description="API bind address")
    APP_LANG: str = Field(default="en", description="Prompt and message language: en | ja")

    # CORS
    CORS_ALLOW_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow credentials in CORS")
    CORS_ALLOW_METHODS: str = Field(default="*", description="Allowed CORS methods")
    CORS_ALLOW_HEADERS: str = Field(default="*", description="Allowed CORS headers")

    # LLM
    GEMINI_API_KEY: str = Field(default="", description="Gemini API key")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST base URL",
    )
    GEMINI_MODEL: str = Field(default="gemini-2.0-flash", description="Generation model ID")
    LLM_MAX_CONCURRENCY: int = Field(default=10, description="Maximum concurrency for LLM requests")
    LLM_REQUEST_TIMEOUT: int = Field(default=60, description="LLM HTTP timeout (seconds)")

    # Recipes
    RECIPE_TRANSPORT: str = Field(default="relay", description="Client transport: relay | direct")
    RECIPE_RELAY_URL: str = Field(
        default="http://127.0.0.1:8076/v1/recipes/generate",
        description="Relay endpoint used by the relay transport",
    )
    RECIPE_COUNT: int = Field(default=3, description="Recipes per batch")
    RECIPE_BATCH_POLICY: str = Field(default="fail_fast", description="fail_fast | best_effort")

    # Supabase
    SUPABASE_URL: str = Field(default="", description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(default="", description="Supabase anon (public) key")
    SUPABASE_TIMEOUT: int = Field(default=15, description="Supabase HTTP timeout (seconds)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
