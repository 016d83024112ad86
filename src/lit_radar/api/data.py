"""GET-Endpoints fuer Health, Metadata und Lexikon."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter

from lit_radar.config import Settings
from lit_radar.domain.extraction import DEFAULT_PATTERNS
from lit_radar.domain.lexicons import DEFAULT_LEXICON
from lit_radar.domain.models import Granularity
from lit_radar.domain.temporal_metrics import TREND_THRESHOLD

router = APIRouter(tags=["Data"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Service Health Check."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/api/v1/data/metadata")
async def data_metadata() -> dict[str, Any]:
    """Analyse-Parameter der laufenden Instanz."""
    settings = Settings()
    return {
        "default_granularity": settings.default_granularity,
        "granularities": [g.value for g in Granularity],
        "max_documents": settings.max_documents,
        "analysis_timeout_seconds": settings.analysis_timeout_seconds,
        "trend_threshold": TREND_THRESHOLD,
    }


@router.get("/api/v1/data/lexicon")
async def domain_lexicon() -> dict[str, Any]:
    """Domain-Lexika und Extraktionsmuster (sortiert, kleingeschrieben)."""
    return {
        "entities": sorted(DEFAULT_LEXICON.entities),
        "action_verbs": sorted(DEFAULT_LEXICON.action_verbs),
        "property_terms": sorted(DEFAULT_LEXICON.property_terms),
        "patterns": [
            {"name": p.name, "kind": p.kind.value} for p in DEFAULT_PATTERNS
        ],
    }
