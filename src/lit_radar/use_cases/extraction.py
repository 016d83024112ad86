"""Tripel-Extraktion: Semantische Aussagen aus Artikeltext."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from lit_radar.domain.analysis_text import generate_extraction_text
from lit_radar.domain.extraction import TripleExtractor
from lit_radar.domain.models import Document, ExtractionPanel
from lit_radar.domain.triples import ExtractionResult, SemanticTriple
from lit_radar.use_cases._helpers import warn_empty_texts

logger = logging.getLogger(__name__)

TOP_TRIPLES = 10


def _sorted_frequency(frequency: Mapping[str, int]) -> dict[str, int]:
    """Haeufigkeiten absteigend, bei Gleichstand alphabetisch."""
    return dict(sorted(frequency.items(), key=lambda item: (-item[1], item[0])))


def _top_triples(triples: Sequence[SemanticTriple], limit: int) -> list[dict[str, str | float]]:
    """Eindeutige Tripel nach Konfidenz (stabil: erste Fundstelle gewinnt)."""
    unique: dict[SemanticTriple, SemanticTriple] = {}
    for triple in triples:
        unique.setdefault(triple, triple)
    ranked = sorted(unique.values(), key=lambda t: -t.confidence)
    return [t.as_dict() for t in ranked[:limit]]


def build_extraction_panel(
    result: ExtractionResult,
    relevant_count: int,
) -> ExtractionPanel:
    total = result.total_triples
    panel = ExtractionPanel(
        paragraph_count=result.paragraph_count,
        sentence_count=result.sentence_count,
        total_triples=total,
        relevant_triples=relevant_count,
        relevance_ratio=round(relevant_count / total, 4) if total > 0 else 0.0,
        paragraph_triples=[t.as_dict() for t in result.paragraph_triples],
        sentence_triples=[t.as_dict() for t in result.sentence_triples],
        top_triples=_top_triples(result.triples, TOP_TRIPLES),
        predicate_frequency=_sorted_frequency(result.predicate_frequency),
        subject_frequency=_sorted_frequency(result.subject_frequency),
        object_frequency=_sorted_frequency(result.object_frequency),
    )
    panel.analysis_text = generate_extraction_text(panel)
    return panel


def analyze_extraction(
    text: str | None,
    *,
    extractor: TripleExtractor | None = None,
) -> tuple[ExtractionPanel, list[str], list[str]]:
    """
    Tripel aus einem einzelnen Text extrahieren.

    Args:
        text: Artikeltext (Absaetze durch Leerzeilen getrennt)
        extractor: Optional, TripleExtractor (Default: Standard-Lexikon und -Muster)
    """
    if extractor is None:
        extractor = TripleExtractor()
    methods: list[str] = []
    warnings: list[str] = []

    if not text or not text.strip():
        warnings.append("Leerer Text, keine Tripel extrahierbar")
        return ExtractionPanel(), methods, warnings

    result = extractor.extract_triples(text)
    relevant = extractor.filter_relevant(result.triples)
    logger.info(
        "Extraktion: %d Absaetze, %d Saetze, %d Tripel (%d relevant)",
        result.paragraph_count, result.sentence_count, result.total_triples, len(relevant),
    )

    methods.append(f"Regex-Muster-Extraktion ({len(extractor.patterns)} Muster, Absatz- und Satzebene)")
    methods.append("Lexikon-basierte Konfidenz (Basis 0,5 + Entitaet/Verb/Eigenschaft)")
    methods.append("Relevanzfilter (Domaenen-Entitaeten und Eigenschaftsbegriffe)")

    return build_extraction_panel(result, len(relevant)), methods, warnings


def analyze_corpus_extraction(
    documents: Sequence[Document],
    *,
    extractor: TripleExtractor | None = None,
) -> tuple[ExtractionPanel, list[str], list[str]]:
    """Tripel-Extraktion ueber alle Dokumente eines Korpus (zusammengefasst)."""
    if extractor is None:
        extractor = TripleExtractor()
    methods: list[str] = []
    warnings: list[str] = []

    if not documents:
        return ExtractionPanel(), methods, warnings

    warn_empty_texts(documents, warnings)

    triples: list[SemanticTriple] = []
    paragraph_count = 0
    sentence_count = 0
    for doc in documents:
        partial = extractor.extract_triples(doc.content_text())
        triples.extend(partial.triples)
        paragraph_count += partial.paragraph_count
        sentence_count += partial.sentence_count

    result = ExtractionResult.from_triples(
        triples,
        paragraph_count=paragraph_count,
        sentence_count=sentence_count,
    )
    relevant = extractor.filter_relevant(result.triples)
    logger.info(
        "Korpus-Extraktion: %d Dokumente, %d Tripel (%d relevant)",
        len(documents), result.total_triples, len(relevant),
    )

    methods.append(f"Regex-Muster-Extraktion ueber {len(documents)} Dokumente")
    methods.append("Relevanzfilter (Domaenen-Entitaeten und Eigenschaftsbegriffe)")

    return build_extraction_panel(result, len(relevant)), methods, warnings
