from __future__ import annotations
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AIConstants

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Credencial do provedor de IA; vazia significa servidor mal configurado
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = AIConstants.DEFAULT_MODEL

    # Bases de referência (BNCC e SAEB) consumidas somente para leitura
    BNCC_DATA_PATH: str = str(DATA_DIR / "bncc.json")
    SAEB_DATA_PATH: str = str(DATA_DIR / "saeb.json")

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


_settings_singleton: Settings | None = None


def get_settings() -> Settings:
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = Settings()
    return _settings_singleton


settings = get_settings()
