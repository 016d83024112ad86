"""FastAPI Application Factory."""

from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lit_radar.api.analysis import router as analysis_router
from lit_radar.api.data import router as data_router
from lit_radar.config import Settings
from lit_radar.domain.extraction import DEFAULT_PATTERNS
from lit_radar.domain.lexicons import DEFAULT_LEXICON

logger = logging.getLogger(__name__)


def _configure_logging(level: int = logging.INFO) -> None:
    """Strukturiertes Logging mit Zeitstempel, Level und Modul-Name."""
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger("lit_radar")
    root.setLevel(level)
    # Mehrfaches create_app() (Tests) darf keine doppelten Handler anlegen
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        root.addHandler(handler)
    # Verhindert doppelte Log-Eintraege bei uvicorn
    root.propagate = False


def create_app() -> FastAPI:
    """Erstellt und konfiguriert die FastAPI-Anwendung."""
    settings = Settings()
    _configure_logging(settings.log_level_value)

    app = FastAPI(
        title="Literature Radar API",
        description=(
            "Semantische Tripel-Extraktion, Klassifikationsvergleich und "
            "Keyword-Trends fuer wissenschaftliche Artikel."
        ),
        version="0.1.0",
    )

    # CORS (konfigurierbar via CORS_ORIGINS env variable)
    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(analysis_router)
    app.include_router(data_router)

    logger.info(
        "Lexikon: %d Entitaeten, %d Verben, %d Eigenschaften; %d Extraktionsmuster",
        len(DEFAULT_LEXICON.entities), len(DEFAULT_LEXICON.action_verbs),
        len(DEFAULT_LEXICON.property_terms), len(DEFAULT_PATTERNS),
    )
    logger.info(
        "Max. Batchgroesse: %d Dokumente, Timeout: %.0fs",
        settings.max_documents, settings.analysis_timeout_seconds,
    )

    return app
