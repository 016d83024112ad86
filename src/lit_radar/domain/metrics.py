"""Deterministische Metriken fuer Klassifikationsvergleich und Trendanalyse.

Reine Funktionen ohne IO, deterministisch und einzeln testbar.
Jede Division ist abgesichert; unzureichende Daten ergeben 0.0.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np
from scipy import stats


def ratio(numerator: float, denominator: float) -> float:
    """Quotient mit Nenner-Untergrenze 1: numerator / max(1, denominator)."""
    return numerator / max(1, denominator)


def shannon_entropy(counts: Iterable[int]) -> float:
    """
    Shannon-Entropie einer Haeufigkeitsverteilung in Bit.

    Formula: H = -sum(p_i * log2(p_i)), p_i = count_i / total

    Returns 0.0 wenn die Gesamtsumme 0 ist. Nullzaehler tragen nichts bei.
    """
    values = [c for c in counts if c > 0]
    total = sum(values)
    if total == 0:
        return 0.0
    entropy = 0.0
    for count in values:
        p = count / total
        entropy -= p * math.log2(p)
    return entropy


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson-Korrelationskoeffizient zweier gleich langer Reihen.

    Formula: r = sum(dx * dy) / sqrt(sum(dx^2) * sum(dy^2))

    Returns 0.0 bei weniger als 2 Werten, ungleicher Laenge oder wenn eine
    der Reihen keine Varianz hat.
    """
    if len(x) != len(y) or len(x) < 2:
        return 0.0

    xa = np.asarray(x, dtype=np.float64)
    ya = np.asarray(y, dtype=np.float64)
    dx = xa - xa.mean()
    dy = ya - ya.mean()

    denominator = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
    if denominator <= 0.0:
        return 0.0
    r = float(np.sum(dx * dy)) / denominator
    # Rundungsfehler auf [-1, 1] begrenzen
    return max(-1.0, min(1.0, r))


def population_variance(values: Sequence[float]) -> float:
    """Populationsvarianz (ddof=0). Returns 0.0 bei weniger als 2 Werten."""
    if len(values) < 2:
        return 0.0
    return float(np.var(np.asarray(values, dtype=np.float64)))


def linear_trend(values: Sequence[float]) -> tuple[float, float]:
    """
    OLS-Trend einer chronologisch geordneten Reihe ueber den Positionsindex.

    x = 0, 1, ..., n-1; y = values.

    Returns:
        (slope, r_squared); (0.0, 0.0) bei weniger als 2 Werten.
        Eine konstante Reihe ergibt exakt slope = 0.0.
    """
    if len(values) < 2:
        return 0.0, 0.0

    x = np.arange(len(values), dtype=np.float64)
    y = np.asarray(values, dtype=np.float64)
    fit = stats.linregress(x, y)
    slope = float(fit.slope)
    r_value = float(fit.rvalue)
    if not math.isfinite(r_value):
        r_value = 0.0
    return slope, r_value * r_value


def relative_change(before: int, after: int) -> float:
    """
    Relative Veraenderung zwischen zwei Zeitraeumen.

    Formula: (after - before) / before

    Konventionen:
    - before = 0, after > 0: +inf (neu aufgetreten)
    - before = 0, after = 0: 0.0
    """
    if before == 0:
        return math.inf if after > 0 else 0.0
    return (after - before) / before
