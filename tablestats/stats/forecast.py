"""Trend forecasts built on the least-squares routine.

Each model regresses one variable against a synthetic time index
``t = 0 .. n-1`` (the most recent observation has the largest ``t``):

- ``"linear"``:     ``Y = a + b * t``, fitted directly.
- ``"compound"``:   ``Y = a * (1 + r) ** t``, fitted as ``ln Y = ln a + ln(1 + r) * t``.
- ``"continuous"``: ``Y = a * exp(r * t)``, fitted as ``ln Y = ln a + r * t``.

A forecast ``horizon`` periods past the last observation evaluates the fitted
curve at ``t = n + horizon - 1``; negative horizons backcast.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..errors import ConfigurationError, DomainError
from .regression import ols_coefficients

logger = logging.getLogger(__name__)

TREND_MODELS: Tuple[str, ...] = ("linear", "compound", "continuous")


@dataclass(frozen=True)
class TrendFit:
    """Fitted growth curve.

    Attributes:
        model: One of ``TREND_MODELS``.
        constant: ``a`` in every model.
        rate: Slope ``b`` (linear), compound rate ``r`` or continuous rate ``r``.
        n_used: Number of observations the curve was fitted to.
    """

    model: str
    constant: float
    rate: float
    n_used: int

    @property
    def parameters(self) -> Tuple[float, float]:
        return (self.constant, self.rate)

    def value_at(self, horizon: float) -> float:
        """Evaluate the curve ``horizon`` periods past the last observation."""
        t = self.n_used + horizon - 1
        if self.model == "linear":
            return self.constant + self.rate * t
        # Growth past the float range comes back as inf.
        with np.errstate(over="ignore"):
            if self.model == "compound":
                return float(self.constant * np.power(1.0 + self.rate, t))
            return float(self.constant * np.exp(self.rate * t))


def _check_model(model: str) -> str:
    if model not in TREND_MODELS:
        raise ConfigurationError(
            f"Unknown forecast model {model!r}; expected one of {', '.join(TREND_MODELS)}."
        )
    return model


def fit_trend(values: np.ndarray, model: str = "linear") -> TrendFit:
    """Fit a growth curve to a series of observations, oldest first.

    Args:
        values (numpy.ndarray): Observations of one variable over the
            effective window.
        model (str): ``"linear"``, ``"compound"`` or ``"continuous"``.

    Returns:
        TrendFit: The fitted constant and slope/rate.

    Raises:
        ConfigurationError: If ``values`` is empty or ``model`` is unknown.
        DomainError: If a log-based model meets a value ``<= 0``.
        NumericError: If the time regression cannot be solved.

    Note:
        A single observation cannot show a trend: the fit is skipped and the
        observation itself is returned as the constant with a zero rate.
    """
    _check_model(model)
    y = np.asarray(values, dtype=float).reshape(-1)
    n = int(len(y))
    if n == 0:
        raise ConfigurationError(
            "There must be at least one observation for a forecast."
        )
    if n == 1:
        return TrendFit(model=model, constant=float(y[0]), rate=0.0, n_used=1)

    if model != "linear":
        if np.any(y <= 0):
            raise DomainError(
                f"The {model} growth forecast takes the log of the data, "
                f"so all observations must be positive."
            )
        y = np.log(y)

    time_index = np.arange(n, dtype=float).reshape(n, 1)
    intercept, slope = (float(c) for c in ols_coefficients(y, time_index))

    if model != "linear":
        with np.errstate(over="ignore"):
            constant = float(np.exp(intercept))
            growth = float(np.exp(slope))
    if model == "compound":
        fit = TrendFit(model, constant, growth - 1.0, n)
    elif model == "continuous":
        fit = TrendFit(model, constant, slope, n)
    else:
        fit = TrendFit(model, intercept, slope, n)
    logger.debug(
        "Fitted %s trend over %d observations: constant=%g rate=%g",
        model,
        n,
        fit.constant,
        fit.rate,
    )
    return fit
