"""Reine Berechnungsfunktionen fuer die temporale Keyword-Analyse.

Alle Funktionen sind zustandslos und ohne I/O.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime

from lit_radar.domain.metrics import linear_trend, relative_change
from lit_radar.domain.models import (
    Document,
    Granularity,
    KeywordTrend,
    TemporalAnalysisResult,
    to_naive_utc,
)

TREND_THRESHOLD = 0.1
"""Minimale Steigung (Betrag), ab der ein Keyword als Trend gilt."""


def parse_granularity(value: str | Granularity | None) -> Granularity:
    """Granularitaet case-insensitiv parsen, unbekannte Werte ergeben YEAR."""
    if isinstance(value, Granularity):
        return value
    if not value:
        return Granularity.YEAR
    try:
        return Granularity(value.strip().upper())
    except ValueError:
        return Granularity.YEAR


def bucket_label(timestamp: datetime, granularity: Granularity) -> str:
    """Bucket-Label: YYYY, YYYY-Qn oder YYYY-MM (lexikografisch = chronologisch)."""
    if granularity is Granularity.MONTH:
        return f"{timestamp.year:04d}-{timestamp.month:02d}"
    if granularity is Granularity.QUARTER:
        quarter = (timestamp.month - 1) // 3 + 1
        return f"{timestamp.year:04d}-Q{quarter}"
    return f"{timestamp.year:04d}"


def group_by_bucket(
    documents: Iterable[Document],
    granularity: Granularity,
) -> dict[str, list[Document]]:
    """Datierte Dokumente nach Bucket gruppieren (Buckets sortiert)."""
    grouped: dict[str, list[Document]] = defaultdict(list)
    for doc in documents:
        if doc.publication_date is None:
            continue
        grouped[bucket_label(doc.publication_date, granularity)].append(doc)
    return {label: grouped[label] for label in sorted(grouped)}


def collect_keywords(documents: Iterable[Document]) -> list[str]:
    """Vereinigung aller matched_terms, sortiert."""
    keywords: set[str] = set()
    for doc in documents:
        keywords.update(doc.matched_terms)
    return sorted(keywords)


def keyword_trend(
    keyword: str,
    buckets: dict[str, list[Document]],
) -> KeywordTrend:
    """Zeitreihe, Steigung und Sichtungsdaten eines Keywords.

    Nur Buckets mit Summe > 0 gehen in die Reihe ein; die Steigung wird ueber
    deren Positionsindex berechnet, Luecken werden also nicht als 0 gezaehlt.
    """
    counts_by_interval: dict[str, int] = {}
    first_seen: datetime | None = None
    last_seen: datetime | None = None

    for label, docs in buckets.items():
        total = sum(doc.keyword_count(keyword) for doc in docs)
        if total <= 0:
            continue
        counts_by_interval[label] = total

        for doc in docs:
            if doc.keyword_count(keyword) <= 0 or doc.publication_date is None:
                continue
            if first_seen is None or doc.publication_date < first_seen:
                first_seen = doc.publication_date
            if last_seen is None or doc.publication_date > last_seen:
                last_seen = doc.publication_date

    slope, r_squared = linear_trend(list(counts_by_interval.values()))
    return KeywordTrend(
        keyword=keyword,
        counts_by_interval=counts_by_interval,
        slope=slope,
        r_squared=r_squared,
        first_seen=first_seen,
        last_seen=last_seen,
    )


def classify_trends(
    trends: dict[str, KeywordTrend],
    threshold: float = TREND_THRESHOLD,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Emerging (slope > threshold, absteigend) und declining (slope < -threshold, aufsteigend)."""
    emerging = sorted(
        (t for t in trends.values() if t.slope > threshold),
        key=lambda t: (-t.slope, t.keyword),
    )
    declining = sorted(
        (t for t in trends.values() if t.slope < -threshold),
        key=lambda t: (t.slope, t.keyword),
    )
    return tuple(t.keyword for t in emerging), tuple(t.keyword for t in declining)


def analyze_trends(
    documents: Sequence[Document],
    granularity: str | Granularity | None = Granularity.YEAR,
) -> TemporalAnalysisResult:
    """Keyword-Trends eines Korpus. Undatierte Dokumente zaehlen nur in total_documents."""
    resolved = parse_granularity(granularity)
    buckets = group_by_bucket(documents, resolved)

    trends = {kw: keyword_trend(kw, buckets) for kw in collect_keywords(documents)}
    emerging, declining = classify_trends(trends)

    return TemporalAnalysisResult(
        keyword_trends=trends,
        emerging_keywords=emerging,
        declining_keywords=declining,
        granularity=resolved,
        total_documents=len(documents),
        dated_documents=sum(len(docs) for docs in buckets.values()),
    )


# ---------------------------------------------------------------------------
# Periodenvergleich
# ---------------------------------------------------------------------------


def documents_in_period(
    documents: Iterable[Document],
    start: datetime,
    end: datetime,
) -> list[Document]:
    """Datierte Dokumente mit start <= publication_date <= end.

    Grenzen mit Zeitzone werden wie die Publikationsdaten auf naive UTC-Zeit normiert.
    """
    start, end = to_naive_utc(start), to_naive_utc(end)
    return [
        doc for doc in documents
        if doc.publication_date is not None and start <= doc.publication_date <= end
    ]


def aggregate_keyword_counts(documents: Iterable[Document]) -> dict[str, int]:
    """Summe aller keyword_counts (nicht nur matched_terms) ueber die Dokumente."""
    totals: dict[str, int] = defaultdict(int)
    for doc in documents:
        for keyword, count in doc.keyword_counts.items():
            totals[keyword] += count
    return dict(totals)


def compare_periods(
    documents: Sequence[Document],
    period1: tuple[datetime, datetime],
    period2: tuple[datetime, datetime],
) -> dict[str, float]:
    """Relative Veraenderung je Keyword von Periode 1 nach Periode 2.

    Schluessel: Vereinigung der Keywords beider Perioden (sortiert).
    Neu aufgetretene Keywords erhalten +inf.
    """
    counts1 = aggregate_keyword_counts(documents_in_period(documents, *period1))
    counts2 = aggregate_keyword_counts(documents_in_period(documents, *period2))

    return {
        keyword: relative_change(counts1.get(keyword, 0), counts2.get(keyword, 0))
        for keyword in sorted(set(counts1) | set(counts2))
    }


def split_period_changes(changes: dict[str, float]) -> tuple[list[str], list[str]]:
    """(neue Keywords mit +inf, verschwundene Keywords mit -100%)."""
    new_keywords = [kw for kw, change in changes.items() if math.isinf(change) and change > 0]
    vanished = [kw for kw, change in changes.items() if change == -1.0]
    return new_keywords, vanished
