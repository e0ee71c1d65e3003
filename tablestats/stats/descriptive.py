"""Order statistics for single columns: medians, quantiles and percentile ranks."""

from __future__ import annotations

import numpy as np

from ..errors import DomainError


def median(values: np.ndarray) -> float:
    return float(np.median(np.asarray(values, dtype=float)))


def quantile(values: np.ndarray, percent: float) -> float:
    """Return the ``percent`` quantile break, interpolating between order statistics.

    The break sits at index ``p * (n - 1)`` of the sorted values, with
    ``p = percent / 100``.

    Raises:
        DomainError: If ``percent`` lies outside ``[0, 100]``.
    """
    if not 0.0 <= float(percent) <= 100.0:
        raise DomainError("The percent must be between 0.0 and 100.0, inclusive.")
    x = np.asarray(values, dtype=float)
    return float(np.quantile(x, float(percent) / 100.0))


def quantiles(values: np.ndarray, n: int) -> np.ndarray:
    """Return the ``n + 1`` breaks dividing ``values`` into ``n`` equal groups."""
    if int(n) < 1:
        raise DomainError("The number of quantiles must be greater than zero.")
    breaks = np.linspace(0.0, 1.0, int(n) + 1)
    x = np.asarray(values, dtype=float)
    return np.quantile(x, breaks)


def percentile(values: np.ndarray, value: float) -> float:
    """Return the percentile rank of ``value`` among ``values``.

    The rank is the count of observations ``<= value``; between two distinct
    neighbours it is interpolated linearly, and values beyond either end clamp
    to ``0`` or ``n``.
    """
    x = np.sort(np.asarray(values, dtype=float))
    n = len(x)
    v = float(value)
    count_le = int(np.searchsorted(x, v, side="right"))
    insertion = int(np.searchsorted(x, v, side="left"))
    if count_le > insertion or insertion in (0, n):
        rank = float(count_le)
    else:
        lo = x[insertion - 1]
        hi = x[insertion]
        rank = insertion + (v - lo) / (hi - lo)
    return rank / n * 100.0
