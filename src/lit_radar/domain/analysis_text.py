"""Reine Funktionen fuer deterministische Analyse-Textgenerierung.

Alle Funktionen sind zustandslos und ohne I/O.
Template-basierte deutsche Texte, kein LLM erforderlich.
"""

from __future__ import annotations

from lit_radar.domain.models import ComparisonPanel, ExtractionPanel, TemporalPanel


# ---------------------------------------------------------------------------
# Hilfsfunktionen (Formatierung)
# ---------------------------------------------------------------------------


def _fmt_int(value: int) -> str:
    """Integer mit deutschem Tausender-Punkt (1.234)."""
    return f"{value:,}".replace(",", ".")


def _fmt_pct(value: float, decimals: int = 1) -> str:
    """Prozent mit Komma (67,3%)."""
    return f"{value:.{decimals}f}".replace(".", ",") + "%"


def _fmt_float(value: float, decimals: int = 2) -> str:
    """Dezimalzahl mit Komma (0,87)."""
    return f"{value:.{decimals}f}".replace(".", ",")


def _correlation_word(r: float) -> str:
    """Pearson-r als qualitative Bewertung."""
    magnitude = abs(r)
    if magnitude >= 0.7:
        strength = "starke"
    elif magnitude >= 0.4:
        strength = "mittlere"
    elif magnitude >= 0.1:
        strength = "schwache"
    else:
        return "keine nennenswerte Korrelation"
    direction = "positive" if r > 0 else "negative"
    return f"eine {strength} {direction} Korrelation"


# ---------------------------------------------------------------------------
# Tripel-Extraktion
# ---------------------------------------------------------------------------


def generate_extraction_text(panel: ExtractionPanel) -> str:
    """Analysetext fuer die Tripel-Extraktion."""
    if panel.paragraph_count == 0:
        return ""

    parts: list[str] = []

    # Satz 1: Textumfang
    parts.append(
        f"Der Text umfasst {_fmt_int(panel.paragraph_count)} Absaetze "
        f"und {_fmt_int(panel.sentence_count)} Saetze."
    )

    if panel.total_triples == 0:
        parts.append("Es wurden keine semantischen Tripel erkannt.")
        return " ".join(parts)

    # Satz 2: Tripel und Relevanz
    parts.append(
        f"Insgesamt wurden {_fmt_int(panel.total_triples)} semantische Tripel extrahiert, "
        f"davon {_fmt_int(panel.relevant_triples)} domaenenrelevant "
        f"({_fmt_pct(panel.relevance_ratio * 100)})."
    )

    # Satz 3: Haeufigstes Praedikat
    if panel.predicate_frequency:
        top_predicate = max(
            sorted(panel.predicate_frequency),
            key=lambda p: panel.predicate_frequency[p],
        )
        parts.append(
            f"Das haeufigste Praedikat ist \"{top_predicate}\" "
            f"({_fmt_int(panel.predicate_frequency[top_predicate])}x)."
        )

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Klassifikationsvergleich
# ---------------------------------------------------------------------------


def generate_comparison_text(panel: ComparisonPanel) -> str:
    """Analysetext fuer den Vergleich regelbasiert vs. statistisch."""
    if panel.documents_analyzed == 0:
        return ""

    parts: list[str] = []

    # Satz 1: Umfang + Uebereinstimmung
    parts.append(
        f"Fuer {_fmt_int(panel.documents_analyzed)} Dokumente stimmen beide Verfahren "
        f"in {_fmt_pct(panel.agreement_rate * 100)} der Faelle in mindestens einem Label ueberein."
    )

    # Satz 2: Korrelation
    if panel.documents_analyzed >= 2:
        parts.append(
            f"Die Scores zeigen {_correlation_word(panel.score_correlation)} "
            f"(r = {_fmt_float(panel.score_correlation)})."
        )

    # Satz 3: Trennschaerfstes Merkmal
    if panel.feature_importance:
        top = panel.feature_importance[0]
        variance = float(top.get("variance", 0.0))
        if variance > 0:
            parts.append(
                f"Die hoechste Varianz hat das Merkmal \"{top.get('feature', '')}\" "
                f"({_fmt_float(variance, 4)})."
            )

    # Satz 4: Haeufigste Diskrepanz
    if panel.discrepancies:
        top_disc = panel.discrepancies[0]
        parts.append(
            f"Die haeufigste Abweichung ({_fmt_int(int(top_disc.get('count', 0)))}x) ist "
            f"{top_disc.get('description', '')}."
        )

    # Satz 5: Ground-Truth-Auswertung
    if panel.evaluated_documents > 0:
        parts.append(
            f"Gegen {_fmt_int(panel.evaluated_documents)} Referenzlabels erreicht das "
            f"regelbasierte Verfahren Precision {_fmt_pct(panel.rule_based_precision * 100)} "
            f"und Recall {_fmt_pct(panel.rule_based_recall * 100)}, das statistische "
            f"Precision {_fmt_pct(panel.statistical_precision * 100)} "
            f"und Recall {_fmt_pct(panel.statistical_recall * 100)}."
        )

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Temporale Keyword-Trends
# ---------------------------------------------------------------------------

_GRANULARITY_DE = {
    "YEAR": "Jahren",
    "QUARTER": "Quartalen",
    "MONTH": "Monaten",
}


def generate_temporal_text(panel: TemporalPanel) -> str:
    """Analysetext fuer die Keyword-Trends."""
    if panel.total_documents == 0:
        return ""

    parts: list[str] = []
    unit = _GRANULARITY_DE.get(panel.granularity, "Jahren")

    # Satz 1: Datenbasis
    parts.append(
        f"Von {_fmt_int(panel.total_documents)} Dokumenten sind "
        f"{_fmt_int(panel.dated_documents)} datiert und wurden nach {unit} gruppiert."
    )

    # Satz 2: Keywords
    parts.append(f"Es wurden {_fmt_int(len(panel.keyword_trends))} Keywords verfolgt.")

    # Satz 3/4: Trends
    if panel.emerging_keywords:
        shown = ", ".join(panel.emerging_keywords[:3])
        parts.append(
            f"Aufstrebend sind {_fmt_int(len(panel.emerging_keywords))} Keywords, "
            f"angefuehrt von {shown}."
        )
    if panel.declining_keywords:
        shown = ", ".join(panel.declining_keywords[:3])
        parts.append(
            f"Ruecklaeufig sind {_fmt_int(len(panel.declining_keywords))} Keywords, "
            f"angefuehrt von {shown}."
        )
    if not panel.emerging_keywords and not panel.declining_keywords:
        parts.append("Kein Keyword zeigt einen ausgepraegten Trend.")

    return " ".join(parts)
