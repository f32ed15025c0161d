from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = "Travana API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    http_timeout: float = 10.0

    openai_api_key: str = Field(default="", description="Optional OpenAI API key")
    openai_model_trip: str = "gpt-4.1"
    openai_model_chat: str = "gpt-4.1-mini"

    google_places_api_key: str | None = None
    google_translate_api_key: str | None = None
    openweather_api_key: str | None = None
    ticketmaster_api_key: str | None = None
    rapidapi_key: str | None = None
    skyscanner_api_key: str | None = None
    amadeus_api_key: str | None = None
    amadeus_client_secret: str | None = None
    kiwi_api_key: str | None = None
    spotify_client_id: str | None = None
    spotify_client_secret: str | None = None
    stripe_secret_key: str | None = None
    stripe_publishable_key: str | None = None
    airalo_affiliate_link: str | None = None

    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    use_supabase: bool = False

    # None keeps everything in memory for the lifetime of the process
    storage_path: str | None = None
    seed_demo_users: bool = True

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
