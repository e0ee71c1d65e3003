"""
A Python package for keeping an in-memory table of numeric observations.

Callers append observations row by row, then ask for descriptive statistics,
covariance and correlation matrices, ordinary least-squares regressions and
trend forecasts, optionally over only the most recent observations.

Modules:
    - table: The StatsTable observation store and its statistics.
    - stats: Numerical routines (moments, regression, forecasts, order
      statistics, probability distributions and special functions).
    - printing: Fixed-width text rendering of data and matrices.
    - config: Default table settings.
    - errors: Error kinds and the "unavailable" result sentinel.
"""

__version__ = "1.0.0"

from .config import DEFAULT_SETTINGS, TableSettings
from .errors import (
    ConfigurationError,
    DomainError,
    NumericError,
    ShapeError,
    StatsTableError,
    UnavailableResult,
    is_unavailable,
    require_available,
)
from .stats.forecast import TREND_MODELS, TrendFit
from .stats.regression import REGRESSION_STAT_NAMES, RegressionResult
from .table import StatsTable

__all__ = [
    # Table
    "StatsTable",
    "TableSettings",
    "DEFAULT_SETTINGS",
    # Results
    "RegressionResult",
    "REGRESSION_STAT_NAMES",
    "TrendFit",
    "TREND_MODELS",
    # Errors
    "StatsTableError",
    "ConfigurationError",
    "ShapeError",
    "DomainError",
    "NumericError",
    "UnavailableResult",
    "is_unavailable",
    "require_available",
]
