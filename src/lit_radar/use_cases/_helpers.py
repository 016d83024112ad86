"""Shared Hilfsfunktionen fuer Use Cases.

Datenqualitaets-Pruefungen, die mehrere Use Cases als Warnungen melden.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lit_radar.domain.models import Document

logger = logging.getLogger(__name__)


def warn_undated_documents(documents: Sequence[Document], warnings: list[str]) -> int:
    """Warnung fuer Dokumente ohne Publikationsdatum. Gibt deren Anzahl zurueck."""
    undated = sum(1 for doc in documents if doc.publication_date is None)
    if undated:
        logger.warning("%d von %d Dokumenten ohne Publikationsdatum", undated, len(documents))
        warnings.append(
            f"{undated} von {len(documents)} Dokumenten ohne Publikationsdatum "
            f"(von der Trendanalyse ausgeschlossen)"
        )
    return undated


def warn_empty_texts(documents: Sequence[Document], warnings: list[str]) -> int:
    """Warnung fuer Dokumente ohne Abstract und Volltext."""
    empty = sum(1 for doc in documents if not doc.content_text())
    if empty:
        logger.warning("%d von %d Dokumenten ohne Text", empty, len(documents))
        warnings.append(
            f"{empty} von {len(documents)} Dokumenten ohne Abstract/Volltext "
            f"(keine Tripel extrahierbar)"
        )
    return empty


def warn_missing_word_counts(documents: Sequence[Document], warnings: list[str]) -> int:
    """Warnung fuer Dokumente mit word_count = 0 (Dichten werden mit Nenner 1 berechnet)."""
    missing = sum(1 for doc in documents if doc.word_count == 0)
    if missing:
        logger.warning("%d von %d Dokumenten ohne Wortanzahl", missing, len(documents))
        warnings.append(f"{missing} von {len(documents)} Dokumenten ohne Wortanzahl")
    return missing
