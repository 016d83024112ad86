"""Domain-Modelle fuer die Literaturanalyse.

Zentrale Datenstrukturen der Domain-Schicht. Diese Modelle sind
framework-unabhaengig definiert (nur Pydantic fuer Validierung und
Serialisierung) und haben keine Abhaengigkeiten zu aeusseren Schichten.
Alle Ergebnis-Records sind unveraenderlich (frozen).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    field_serializer,
    field_validator,
)


def to_naive_utc(value: datetime) -> datetime:
    """Zeitstempel auf naive UTC-Zeit normieren (naive Werte gelten als UTC)."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# --- Eingabe: Dokumente (vom externen Ingester geliefert) ---

class Document(BaseModel):
    """Ein wissenschaftlicher Artikel mit vorab ermittelten Keyword-Statistiken."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., min_length=1)
    title: str | None = None
    abstract: str | None = None
    full_text: str | None = None
    publication_date: datetime | None = None
    word_count: NonNegativeInt = 0
    keyword_counts: dict[str, NonNegativeInt] = {}
    relevance_score: float = 0.0
    matched_terms: frozenset[str] = frozenset()
    ground_truth: str | None = None

    @field_validator("publication_date")
    @classmethod
    def _normalize_publication_date(cls, value: datetime | None) -> datetime | None:
        # Gemischte Eingaben (mit/ohne Offset) muessen vergleichbar bleiben
        return to_naive_utc(value) if value is not None else None

    def keyword_count(self, keyword: str) -> int:
        """Zaehler eines Keywords; fehlende Eintraege zaehlen als 0."""
        return self.keyword_counts.get(keyword, 0)

    def content_text(self) -> str:
        """Abstract und Volltext als getrennte Absaetze."""
        parts = [p for p in (self.abstract, self.full_text) if p and p.strip()]
        return "\n\n".join(parts)


# --- Klassifikationsvergleich ---

class ClassificationResult(BaseModel):
    """Regelbasierte und statistische Klassifikation eines Dokuments."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    rule_based_score: float = 0.0
    statistical_score: float = 0.0
    rule_based_features: dict[str, float] = {}
    statistical_features: dict[str, float] = {}
    rule_based_labels: tuple[str, ...] = ()
    statistical_labels: tuple[str, ...] = ()
    ground_truth: str | None = None

    @property
    def score_difference(self) -> float:
        return abs(self.rule_based_score - self.statistical_score)

    @property
    def has_agreement(self) -> bool:
        """Uebereinstimmung = nicht-leere Schnittmenge der Label-Mengen."""
        return not set(self.rule_based_labels).isdisjoint(self.statistical_labels)


class ComparisonAnalysis(BaseModel):
    """Batch-Vergleich beider Klassifikationsverfahren."""

    model_config = ConfigDict(frozen=True)

    results: tuple[ClassificationResult, ...] = ()
    score_correlation: float = 0.0
    agreement_rate: float = 0.0
    feature_importance: dict[str, float] = {}
    discrepancies: dict[str, int] = {}

    # Ground-Truth-Auswertung (nur Dokumente mit ground_truth)
    evaluated_documents: int = 0
    rule_based_precision: float = 0.0
    rule_based_recall: float = 0.0
    statistical_precision: float = 0.0
    statistical_recall: float = 0.0


# --- Temporale Keyword-Analyse ---

class Granularity(str, Enum):
    """Zeitliche Aufloesung der Buckets."""

    YEAR = "YEAR"
    QUARTER = "QUARTER"
    MONTH = "MONTH"


class KeywordTrend(BaseModel):
    """Zeitreihe und linearer Trend eines Keywords."""

    model_config = ConfigDict(frozen=True)

    keyword: str
    counts_by_interval: dict[str, int] = {}
    slope: float = 0.0
    r_squared: float = 0.0
    first_seen: datetime | None = None
    last_seen: datetime | None = None


class TemporalAnalysisResult(BaseModel):
    """Keyword-Trends eines Dokumentkorpus."""

    model_config = ConfigDict(frozen=True)

    keyword_trends: dict[str, KeywordTrend] = {}
    emerging_keywords: tuple[str, ...] = ()
    declining_keywords: tuple[str, ...] = ()
    granularity: Granularity = Granularity.YEAR
    total_documents: int = 0
    dated_documents: int = 0


# --- Panel-Modelle (API-Ausgabe) ---

class ExtractionPanel(BaseModel):
    """Tripel-Extraktion eines Textes."""

    paragraph_count: int = 0
    sentence_count: int = 0
    total_triples: int = 0
    relevant_triples: int = 0
    relevance_ratio: float = 0.0
    paragraph_triples: list[dict[str, Any]] = []
    sentence_triples: list[dict[str, Any]] = []
    top_triples: list[dict[str, Any]] = []
    predicate_frequency: dict[str, int] = {}
    subject_frequency: dict[str, int] = {}
    object_frequency: dict[str, int] = {}
    analysis_text: str = ""


class ComparisonPanel(BaseModel):
    """Regelbasiert vs. statistisch."""

    documents_analyzed: int = 0
    score_correlation: float = 0.0
    agreement_rate: float = 0.0
    feature_importance: list[dict[str, Any]] = []
    discrepancies: list[dict[str, Any]] = []
    results: list[dict[str, Any]] = []
    evaluated_documents: int = 0
    rule_based_precision: float = 0.0
    rule_based_recall: float = 0.0
    statistical_precision: float = 0.0
    statistical_recall: float = 0.0
    analysis_text: str = ""


class TemporalPanel(BaseModel):
    """Keyword-Trends ueber die Zeit."""

    granularity: str = Granularity.YEAR.value
    total_documents: int = 0
    dated_documents: int = 0
    keyword_trends: list[dict[str, Any]] = []
    emerging_keywords: list[str] = []
    declining_keywords: list[str] = []
    analysis_text: str = ""


class PeriodComparisonPanel(BaseModel):
    """Relative Keyword-Veraenderung zwischen zwei Zeitraeumen."""

    period1_documents: int = 0
    period2_documents: int = 0
    changes: dict[str, float] = {}
    new_keywords: list[str] = []
    vanished_keywords: list[str] = []

    @field_serializer("changes", when_used="json")
    def _serialize_changes(self, changes: dict[str, float]) -> dict[str, float | str]:
        # JSON kennt kein Infinity: neu aufgetretene Keywords als "Infinity"
        return {
            keyword: ("Infinity" if math.isinf(change) and change > 0 else change)
            for keyword, change in changes.items()
        }


# --- Explainability ---

class ExplainabilityMetadata(BaseModel):
    """Transparenz-Metadaten fuer jede Analyse."""

    methods: list[str] = []
    deterministic: bool = True
    warnings: list[str] = []
    query_time_ms: int = 0
