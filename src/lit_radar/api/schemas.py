"""Pydantic Request/Response Models fuer die API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from lit_radar.domain.models import (
    ComparisonPanel,
    Document,
    ExplainabilityMetadata,
    ExtractionPanel,
    PeriodComparisonPanel,
    TemporalPanel,
)

# --- Request ---

class ExtractionRequest(BaseModel):
    """Anfrage fuer die Tripel-Extraktion eines einzelnen Textes."""

    text: str = Field(
        "", max_length=2_000_000, description="Artikeltext, Absaetze durch Leerzeilen getrennt"
    )


class DocumentBatchRequest(BaseModel):
    """Anfrage mit einem Dokument-Batch (Klassifikationsvergleich)."""

    documents: list[Document] = Field(default_factory=list, description="Vom Ingester gelieferte Dokumente")


class TemporalRequest(DocumentBatchRequest):
    """Anfrage fuer die Keyword-Trendanalyse."""

    granularity: str | None = Field(
        None, max_length=20, description="YEAR, QUARTER oder MONTH (Default aus Settings)"
    )


class PeriodComparisonRequest(DocumentBatchRequest):
    """Anfrage fuer den Vergleich zweier Zeitraeume (Grenzen inklusive)."""

    period1_start: datetime
    period1_end: datetime
    period2_start: datetime
    period2_end: datetime


class AnalysisRequest(TemporalRequest):
    """Anfrage fuer die kombinierte Analyse (Extraktion, Vergleich, Trends)."""


# --- Response: Gesamt-Analyse ---

class AnalysisResponse(BaseModel):
    """Komplette Analyse-Antwort mit allen Panels."""

    documents_analyzed: int = 0
    extraction: ExtractionPanel = ExtractionPanel()
    comparison: ComparisonPanel = ComparisonPanel()
    temporal: TemporalPanel = TemporalPanel()
    explainability: ExplainabilityMetadata = ExplainabilityMetadata()


__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "ComparisonPanel",
    "DocumentBatchRequest",
    "ExplainabilityMetadata",
    "ExtractionPanel",
    "ExtractionRequest",
    "PeriodComparisonPanel",
    "PeriodComparisonRequest",
    "TemporalPanel",
    "TemporalRequest",
]
