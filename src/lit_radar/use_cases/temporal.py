"""Temporale Keyword-Analyse: Trends und Periodenvergleich."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from lit_radar.domain.analysis_text import generate_temporal_text
from lit_radar.domain.models import (
    Document,
    Granularity,
    PeriodComparisonPanel,
    TemporalAnalysisResult,
    TemporalPanel,
    to_naive_utc,
)
from lit_radar.domain.temporal_metrics import (
    TREND_THRESHOLD,
    analyze_trends,
    compare_periods,
    documents_in_period,
    parse_granularity,
    split_period_changes,
)
from lit_radar.use_cases._helpers import warn_undated_documents

logger = logging.getLogger(__name__)


def _trend_rows(result: TemporalAnalysisResult) -> list[dict[str, Any]]:
    """Trends nach Steigung absteigend, bei Gleichstand alphabetisch."""
    rows: list[dict[str, Any]] = []
    ordered = sorted(result.keyword_trends.values(), key=lambda t: (-t.slope, t.keyword))
    for trend in ordered:
        rows.append({
            "keyword": trend.keyword,
            "counts_by_interval": dict(trend.counts_by_interval),
            "total": sum(trend.counts_by_interval.values()),
            "slope": round(trend.slope, 4),
            "r_squared": round(trend.r_squared, 4),
            "first_seen": trend.first_seen.isoformat() if trend.first_seen else None,
            "last_seen": trend.last_seen.isoformat() if trend.last_seen else None,
        })
    return rows


def build_temporal_panel(result: TemporalAnalysisResult) -> TemporalPanel:
    panel = TemporalPanel(
        granularity=result.granularity.value,
        total_documents=result.total_documents,
        dated_documents=result.dated_documents,
        keyword_trends=_trend_rows(result),
        emerging_keywords=list(result.emerging_keywords),
        declining_keywords=list(result.declining_keywords),
    )
    panel.analysis_text = generate_temporal_text(panel)
    return panel


def analyze_temporal(
    documents: Sequence[Document],
    granularity: str | Granularity | None = None,
) -> tuple[TemporalPanel, list[str], list[str]]:
    """
    Keyword-Trends ueber die Zeit analysieren.

    Args:
        documents: Dokumente mit Keyword-Zaehlern und Publikationsdatum
        granularity: YEAR, QUARTER oder MONTH (unbekannt/leer: YEAR)
    """
    methods: list[str] = []
    warnings: list[str] = []

    if not documents:
        return TemporalPanel(granularity=parse_granularity(granularity).value), methods, warnings

    warn_undated_documents(documents, warnings)

    result = analyze_trends(documents, granularity)
    logger.info(
        "Trends: %d Dokumente (%d datiert), %d Keywords, Granularitaet %s",
        result.total_documents, result.dated_documents,
        len(result.keyword_trends), result.granularity.value,
    )

    methods.append(f"Zeit-Buckets nach {result.granularity.value}")
    methods.append(
        f"OLS-Steigung ueber nicht-leere Buckets (Schwelle +/-{TREND_THRESHOLD})"
    )

    return build_temporal_panel(result), methods, warnings


def analyze_period_comparison(
    documents: Sequence[Document],
    period1: tuple[datetime, datetime],
    period2: tuple[datetime, datetime],
) -> tuple[PeriodComparisonPanel, list[str], list[str]]:
    """Relative Keyword-Veraenderung zwischen zwei (inklusiven) Zeitraeumen."""
    methods: list[str] = []
    warnings: list[str] = []

    for label, (start, end) in (("Periode 1", period1), ("Periode 2", period2)):
        if to_naive_utc(start) > to_naive_utc(end):
            warnings.append(f"{label}: Start liegt nach Ende, Zeitraum ist leer")

    warn_undated_documents(documents, warnings)

    changes = compare_periods(documents, period1, period2)
    new_keywords, vanished = split_period_changes(changes)
    period1_docs = len(documents_in_period(documents, *period1))
    period2_docs = len(documents_in_period(documents, *period2))
    logger.info(
        "Periodenvergleich: %d vs. %d Dokumente, %d Keywords",
        period1_docs, period2_docs, len(changes),
    )

    methods.append("Relative Veraenderung (c2 - c1) / c1, neu aufgetretene Keywords = +inf")

    panel = PeriodComparisonPanel(
        period1_documents=period1_docs,
        period2_documents=period2_docs,
        changes=changes,
        new_keywords=new_keywords,
        vanished_keywords=vanished,
    )
    return panel, methods, warnings
