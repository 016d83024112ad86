"""Relevanzfilter fuer Tripel (zustandslos, reihenfolgeerhaltend)."""

from __future__ import annotations

from collections.abc import Iterable

from lit_radar.domain.lexicons import DEFAULT_LEXICON, DomainLexicon
from lit_radar.domain.triples import SemanticTriple


def is_relevant(triple: SemanticTriple, lexicon: DomainLexicon = DEFAULT_LEXICON) -> bool:
    """Tripel ist relevant, wenn seine Rollen eine Entitaet oder Eigenschaft erwaehnen."""
    text = f"{triple.subject} {triple.predicate} {triple.object}"
    return lexicon.mentions_entity(text) or lexicon.mentions_property(text)


def filter_relevant(
    triples: Iterable[SemanticTriple],
    lexicon: DomainLexicon = DEFAULT_LEXICON,
) -> list[SemanticTriple]:
    return [t for t in triples if is_relevant(t, lexicon)]
