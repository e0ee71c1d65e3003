"""Means, standard deviations, covariance and correlation with a dirty-flag cache.

All four outputs come from one pass over the effective window:

    means       = (1/m) * column_sums(X)
    covariance  = (X'X - m * outer(means, means)) / divisor
    std_devs    = sqrt(diag(covariance))
    correlation = covariance / outer(std_devs, std_devs)

where ``divisor`` is ``m - 1`` with Bessel's correction and ``m`` without.
They are always recomputed together so the cached bundle never mixes results
from different data or divisor choices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .linalg import cross_product, elementwise_divide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Moments:
    """One consistent set of moment statistics over ``n_used`` observations."""

    means: np.ndarray
    std_devs: np.ndarray
    covariance: np.ndarray
    correlation: np.ndarray
    n_used: int
    bessel: bool


def compute_moments(window: np.ndarray, bessel: bool = True) -> Moments:
    """Compute the moment bundle for an ``(m, v)`` observation window.

    Args:
        window (numpy.ndarray): Effective-window observations, most recent
            last. Must hold at least one row.
        bessel (bool): Divide the covariance by ``m - 1`` when ``True``.

    Returns:
        Moments: Means and standard deviations of length ``v``, covariance and
        correlation of shape ``(v, v)``.

    Note:
        With a single observation and Bessel's correction the divisor is zero,
        so the standard deviations are ``nan``; without the correction they
        are ``0.0``. Zero-variance columns give ``nan`` correlations.
    """
    x = np.asarray(window, dtype=float)
    m = int(x.shape[0])
    if m < 1:
        raise ValueError("At least one observation is required for moments.")

    means = x.sum(axis=0) / m
    mean_outer = m * np.outer(means, means)
    divisor = (m - 1) if bessel else m

    with np.errstate(divide="ignore", invalid="ignore"):
        covariance = (cross_product(x) - mean_outer) / divisor
        # Round-off can push a constant column's variance a hair below zero.
        variances = np.clip(np.diag(covariance), 0.0, None)
        std_devs = np.sqrt(variances)
    correlation = elementwise_divide(covariance, np.outer(std_devs, std_devs))

    return Moments(
        means=means,
        std_devs=std_devs,
        covariance=covariance,
        correlation=correlation,
        n_used=m,
        bessel=bool(bessel),
    )


class MomentCache:
    """Cached moment bundle with two independent invalidation triggers.

    ``data_changed`` is raised by any mutation of the observations or the
    window size; ``correction_changed`` only when the Bessel setting flips to
    a new value. ``current`` is the single revalidation point: if either flag
    is raised it recomputes the whole bundle, stores it, and clears both.
    """

    def __init__(self):
        self._moments: Optional[Moments] = None
        self.data_changed: bool = True
        self.correction_changed: bool = False

    @property
    def is_stale(self) -> bool:
        return self._moments is None or self.data_changed or self.correction_changed

    def mark_data_changed(self) -> None:
        self.data_changed = True

    def mark_correction_changed(self) -> None:
        self.correction_changed = True

    def current(
        self, window_source: Callable[[], np.ndarray], bessel: bool
    ) -> Moments:
        """Return the cached bundle, recomputing it first if it is stale.

        Args:
            window_source: Zero-argument callable returning the effective
                window; called only when a recompute is needed.
            bessel: Current Bessel-correction setting.
        """
        if self.is_stale:
            window = window_source()
            moments = compute_moments(window, bessel)
            logger.debug(
                "Recomputed moments over %d observations (bessel=%s)",
                moments.n_used,
                moments.bessel,
            )
            self._moments = moments
            self.data_changed = False
            self.correction_changed = False
        return self._moments

    @property
    def last(self) -> Optional[Moments]:
        """Most recently computed bundle, without revalidating."""
        return self._moments
