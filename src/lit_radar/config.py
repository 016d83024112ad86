"""Zentrale Konfiguration via Pydantic Settings."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from environment / .env file.

    Gewichte, Schwellwerte und Lexika sind feste Konstanten der Domain-Schicht
    und hier nicht enthalten.
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Analyse
    default_granularity: str = "YEAR"
    analysis_timeout_seconds: float = 30.0
    max_documents: int = 5000

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def log_level_value(self) -> int:
        """Log-Level als numerischer Wert (unbekannte Namen -> INFO)."""
        level = logging.getLevelName(self.log_level.strip().upper())
        return level if isinstance(level, int) else logging.INFO
