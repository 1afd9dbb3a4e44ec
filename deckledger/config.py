from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckLedger"
    debug: bool = False

    # Which remote store backs the mirrors
    remote_backend: Literal["supabase", "sql"] = "supabase"

    supabase_url: str = "http://localhost:54321"
    supabase_key: str = ""
    request_timeout: float = 30.0

    database_url: str = "postgresql+asyncpg://localhost:5432/deckledger"

    # Identity the local service acts as; empty means signed out
    user_id: str = ""
    access_token: str = ""


settings = Settings()
