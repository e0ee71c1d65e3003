"""
Numerical routines behind the statistics table.

This subpackage provides the arithmetic the table delegates to. All functions
operate on arrays and primitive types; none of them hold table state.

Modules:
    moments:
        Means, standard deviations, covariance and correlation computed in
        one pass, plus the dirty-flag cache that decides when to recompute.

    regression:
        Ordinary least squares with an intercept, model diagnostics
        (SST/SSR/SSE, R², adjusted R², F) and coefficient inference.

    forecast:
        Linear, compound and continuous growth curves fitted against a time
        index, and their extrapolation.

    descriptive:
        Medians, quantile breaks and percentile ranks.

    distributions:
        Gamma/beta special functions and the normal, Student-t, chi-square
        and binomial distributions, with domain checks.

    linalg:
        The few dense linear-algebra operations the regression needs.

Design Principle:
    This subpackage has no dependency on the table or printing modules.
    It provides pure numerical utilities that can be independently tested.
"""

from .descriptive import median, percentile, quantile, quantiles
from .forecast import TREND_MODELS, TrendFit, fit_trend
from .moments import MomentCache, Moments, compute_moments
from .regression import (
    REGRESSION_STAT_NAMES,
    RegressionResult,
    ols_coefficients,
    ols_regression,
)

__all__ = [
    "median",
    "percentile",
    "quantile",
    "quantiles",
    "TREND_MODELS",
    "TrendFit",
    "fit_trend",
    "MomentCache",
    "Moments",
    "compute_moments",
    "REGRESSION_STAT_NAMES",
    "RegressionResult",
    "ols_coefficients",
    "ols_regression",
]
