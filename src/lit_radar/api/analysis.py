"""POST-Endpoints fuer Extraktion, Klassifikationsvergleich und Keyword-Trends."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import Any, cast

from fastapi import APIRouter, HTTPException

from lit_radar.api.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    ComparisonPanel,
    DocumentBatchRequest,
    ExplainabilityMetadata,
    ExtractionPanel,
    ExtractionRequest,
    PeriodComparisonPanel,
    PeriodComparisonRequest,
    TemporalPanel,
    TemporalRequest,
)
from lit_radar.config import Settings
from lit_radar.domain.models import Document
from lit_radar.use_cases.comparison import analyze_comparison
from lit_radar.use_cases.extraction import analyze_corpus_extraction, analyze_extraction
from lit_radar.use_cases.temporal import analyze_period_comparison, analyze_temporal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Analysis"])


def _limit_documents(
    documents: Sequence[Document],
    settings: Settings,
    warnings: list[str],
) -> list[Document]:
    """Batch auf Settings.max_documents kappen (Reihenfolge bleibt erhalten)."""
    if len(documents) > settings.max_documents:
        logger.warning(
            "Batch mit %d Dokumenten auf %d gekuerzt", len(documents), settings.max_documents,
        )
        warnings.append(
            f"Batch auf {settings.max_documents} von {len(documents)} Dokumenten gekuerzt"
        )
        return list(documents[: settings.max_documents])
    return list(documents)


def _require_batch_size(documents: Sequence[Document], settings: Settings) -> list[Document]:
    """Batches ueber Settings.max_documents ablehnen (HTTP 422)."""
    if len(documents) > settings.max_documents:
        logger.warning(
            "Batch mit %d Dokumenten abgelehnt (max. %d)", len(documents), settings.max_documents,
        )
        raise HTTPException(
            status_code=422,
            detail=f"Batch mit {len(documents)} Dokumenten ueberschreitet das Limit von "
            f"{settings.max_documents}",
        )
    return list(documents)


@router.post("/extract", response_model=ExtractionPanel)
async def extract_triples(request: ExtractionRequest) -> ExtractionPanel:
    """Semantische Tripel aus einem Text extrahieren."""
    panel, _methods, _warnings = await asyncio.to_thread(analyze_extraction, request.text)
    return panel


@router.post("/compare", response_model=ComparisonPanel)
async def compare_classifications(request: DocumentBatchRequest) -> ComparisonPanel:
    """Regelbasierte und statistische Klassifikation eines Batches vergleichen."""
    settings = Settings()
    documents = _require_batch_size(request.documents, settings)
    panel, _methods, _warnings = await asyncio.to_thread(analyze_comparison, documents)
    return panel


@router.post("/trends", response_model=TemporalPanel)
async def keyword_trends(request: TemporalRequest) -> TemporalPanel:
    """Keyword-Trends ueber die Zeit."""
    settings = Settings()
    documents = _require_batch_size(request.documents, settings)
    granularity = request.granularity or settings.default_granularity
    panel, _methods, _warnings = await asyncio.to_thread(
        analyze_temporal, documents, granularity,
    )
    return panel


@router.post("/periods", response_model=PeriodComparisonPanel)
async def compare_periods(request: PeriodComparisonRequest) -> PeriodComparisonPanel:
    """Relative Keyword-Veraenderung zwischen zwei Zeitraeumen."""
    settings = Settings()
    documents = _require_batch_size(request.documents, settings)
    panel, _methods, _warnings = await asyncio.to_thread(
        analyze_period_comparison,
        documents,
        (request.period1_start, request.period1_end),
        (request.period2_start, request.period2_end),
    )
    return panel


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_corpus(request: AnalysisRequest) -> AnalysisResponse:
    """
    Kombinierte Analyse: Alle drei Auswertungen parallel ausfuehren.

    Gibt ein komplettes Ergebnis-Objekt zurueck mit:
    - Extraktion: Tripel ueber alle Dokumente, Relevanzanteil, Praedikat-Haeufigkeiten
    - Vergleich: Regelbasiert vs. statistisch, Korrelation, Uebereinstimmung, Diskrepanzen
    - Trends: Keyword-Zeitreihen, aufstrebende und ruecklaeufige Keywords
    """
    t0 = time.monotonic()
    settings = Settings()
    pre_warnings: list[str] = []
    documents = _limit_documents(request.documents, settings, pre_warnings)
    granularity = request.granularity or settings.default_granularity
    timeout = settings.analysis_timeout_seconds

    # Alle Analysen parallel (per-Analyse Timeout, Graceful Degradation)
    tasks: list[Any] = [
        asyncio.to_thread(analyze_corpus_extraction, documents),
        asyncio.to_thread(analyze_comparison, documents),
        asyncio.to_thread(analyze_temporal, documents, granularity),
    ]
    results = await asyncio.gather(
        *[asyncio.wait_for(t, timeout=timeout) for t in tasks],
        return_exceptions=True,
    )

    # Ergebnisse entpacken (fehlgeschlagene Analysen -> leere Panels)
    names = ["Extraktion", "Vergleich", "Trends"]
    empty_panels: list[Any] = [ExtractionPanel(), ComparisonPanel(), TemporalPanel()]
    panels: list[Any] = []
    all_methods: list[str] = []
    all_warnings: list[str] = list(pre_warnings)

    for i, result in enumerate(results):
        if isinstance(result, BaseException):
            err_type = type(result).__name__
            logger.warning("Analyse %s fehlgeschlagen: %s: %s", names[i], err_type, result)
            panels.append(empty_panels[i])
            all_warnings.append(f"{names[i]}: Timeout oder Fehler ({err_type})")
        else:
            panel, methods, warnings = result
            panels.append(panel)
            all_methods.extend(methods)
            all_warnings.extend(warnings)

    extraction, comparison, temporal = panels

    # Duplikate entfernen
    all_methods = list(dict.fromkeys(all_methods))
    all_warnings = list(dict.fromkeys(all_warnings))

    elapsed_ms = int((time.monotonic() - t0) * 1000)

    return AnalysisResponse(
        documents_analyzed=len(documents),
        extraction=cast(ExtractionPanel, extraction),
        comparison=cast(ComparisonPanel, comparison),
        temporal=cast(TemporalPanel, temporal),
        explainability=ExplainabilityMetadata(
            methods=all_methods,
            deterministic=True,
            warnings=all_warnings,
            query_time_ms=elapsed_ms,
        ),
    )
