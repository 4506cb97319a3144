"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["memory", "file", "supabase"] = "file"
    data_dir: Path = Path("data")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_state_table: str = "app_state"
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "low"
    openai_store: bool = False
    menu_timeout_seconds: float = 60.0
    simulated_student: str = "Aluno Exemplo"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_supabase_credentials(self) -> "Settings":
        if self.storage_backend == "supabase" and not (
            self.supabase_url and self.supabase_service_key
        ):
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "when storage_backend is 'supabase'"
            )
        return self
