"""The statistics table: a growable observation store with cached statistics.

A table holds numeric observations row by row, one column per variable. On
top of the store it offers means, standard deviations, covariance and
correlation (cached, recomputed only after the data or the Bessel setting
changes), OLS regressions over any subset of variables, and linear, compound
and continuous trend forecasts.

Statistics, regressions and forecasts use the effective window: the most
recent ``window_size`` observations, or all of them when ``window_size`` is
0. Order statistics (medians, quantiles, percentiles) always use every
retained observation.

A table is not safe for concurrent mutation; callers sharing one across
threads must serialize access themselves.
"""

from __future__ import annotations

import logging
import numbers
import warnings
from typing import Any, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .config import DEFAULT_SETTINGS, TableSettings
from .errors import (
    ConfigurationError,
    ShapeError,
    UnavailableResult,
    require_available,
)
from .printing import format_matrix
from .stats import descriptive
from .stats.forecast import TrendFit, fit_trend
from .stats.moments import MomentCache, Moments
from .stats.regression import RegressionResult, ols_regression

logger = logging.getLogger(__name__)

Variable = Union[int, str]

TOO_FEW = "Less than two variables or observations."
NO_OBSERVATIONS = "There are no observations in the table."


def _coerce_rows(rows: Any) -> np.ndarray:
    """Convert a sequence of equal-width numeric rows to a 2-D float array."""
    if isinstance(rows, pd.DataFrame):
        rows = rows.to_numpy(dtype=float)
    try:
        row_list = [np.asarray(r, dtype=float) for r in rows]
    except (TypeError, ValueError) as exc:
        raise ShapeError("Observations must be sequences of numbers.") from exc
    if not row_list:
        raise ConfigurationError("input list was empty")
    if any(r.ndim != 1 for r in row_list):
        raise ShapeError(
            "Each observation must be a flat sequence of numbers; "
            "use add() for a single observation."
        )
    widths = {len(r) for r in row_list}
    if len(widths) != 1:
        raise ShapeError(
            "All observations must have the same number of variables, "
            f"got widths {sorted(widths)}."
        )
    if widths.pop() == 0:
        raise ShapeError("input list contained only empty lists")
    return np.vstack(row_list)


class StatsTable:
    """Growable table of observations with descriptive and inferential statistics.

    Args:
        settings (TableSettings, optional): Growth increment, initial Bessel
            setting and print formats. Defaults to ``DEFAULT_SETTINGS``.

    Example:
        >>> tbl = StatsTable()
        >>> tbl.append([[0, 2], [1, 5], [2, 8], [3, 11]])
        >>> fit = tbl.regress([1, 0])
        >>> [round(float(c), 6) for c in fit.coefficients]
        [2.0, 3.0]
    """

    def __init__(self, settings: Optional[TableSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self._data: Optional[np.ndarray] = None
        self._n_vars = 0
        self._n_obs = 0
        self._window_size = 0
        self._names: Optional[List[str]] = None
        self._use_bessel = bool(self.settings.use_bessel_correction)
        self._cache = MomentCache()
        self._regression: Optional[RegressionResult] = None
        self._forecast: Optional[TrendFit] = None

    # Construction ---------------------------------------------------------

    @classmethod
    def from_rows(
        cls, rows: Iterable[Sequence[float]], settings: Optional[TableSettings] = None
    ) -> "StatsTable":
        """Create a table pre-loaded with ``rows``; the width comes from the rows."""
        tbl = cls(settings)
        tbl.replace_all(rows)
        return tbl

    @classmethod
    def from_dataframe(
        cls, df: pd.DataFrame, settings: Optional[TableSettings] = None
    ) -> "StatsTable":
        """Create a table from a numeric DataFrame, naming variables after its columns."""
        tbl = cls.from_rows(df.to_numpy(dtype=float), settings)
        tbl.set_names([str(c) for c in df.columns])
        return tbl

    def create_empty(self, variable_count: int) -> None:
        """Establish an empty table ``variable_count`` variables wide.

        Calling it again with the same width is a no-op that keeps any data.

        Raises:
            ConfigurationError: If ``variable_count < 1`` or the table already
                has a different width.
        """
        variable_count = int(variable_count)
        if variable_count < 1:
            raise ConfigurationError(
                f"A table needs at least one variable, got {variable_count}."
            )
        if self._data is not None:
            if variable_count != self._n_vars:
                raise ConfigurationError(
                    f"The table already has {self._n_vars} variables; "
                    f"cannot recreate it with {variable_count}."
                )
            return
        self._data = np.zeros((self.settings.growth_increment, variable_count))
        self._n_vars = variable_count
        self._n_obs = 0
        self._cache.mark_data_changed()

    # Observation store ----------------------------------------------------

    @property
    def has_data(self) -> bool:
        """True once the number of variables has been established."""
        return self._data is not None

    @property
    def variable_count(self) -> int:
        return self._n_vars

    @property
    def observation_count(self) -> int:
        return self._n_obs

    @property
    def capacity(self) -> int:
        return 0 if self._data is None else int(self._data.shape[0])

    def __len__(self) -> int:
        return self._n_obs

    def __repr__(self) -> str:
        return (
            f"StatsTable(variables={self._n_vars}, observations={self._n_obs}, "
            f"window_size={self._window_size})"
        )

    def append(self, rows: Iterable[Sequence[float]]) -> None:
        """Append observations, oldest first.

        The first append to a table without an established width sets the
        width. The store either takes every row or is left untouched.

        Raises:
            ShapeError: If the rows are ragged or their width differs from
                the table's.
            ConfigurationError: If ``rows`` is empty.
        """
        new_rows = _coerce_rows(rows)
        k, width = new_rows.shape
        if self._data is not None and width != self._n_vars:
            raise ShapeError(
                "Number of variables in observation to be added does not match "
                f"the dimension of the table ({width} != {self._n_vars})."
            )

        increment = self.settings.growth_increment
        if self._data is None:
            self._data = np.zeros((max(k, increment), width))
            self._n_vars = width
        elif self._n_obs + k > self.capacity:
            grown = np.zeros((self.capacity + max(k, increment), self._n_vars))
            grown[: self._n_obs] = self._data[: self._n_obs]
            logger.debug(
                "Grew table buffer from %d to %d rows", self.capacity, grown.shape[0]
            )
            self._data = grown

        self._data[self._n_obs : self._n_obs + k] = new_rows
        self._n_obs += k
        self._cache.mark_data_changed()

    def add(self, row: Sequence[float]) -> None:
        """Append a single observation."""
        self.append([row])

    def trim_to_last(self, n: int) -> None:
        """Keep only the most recent ``n`` observations.

        A no-op when ``n`` is at least the observation count; otherwise the
        buffer shrinks to exactly ``n`` rows.
        """
        n = int(n)
        if n < 0:
            raise ConfigurationError(f"Cannot trim to a negative size ({n}).")
        if self._data is None or self._n_obs <= n:
            return
        self._data = self._data[self._n_obs - n : self._n_obs].copy()
        logger.debug("Trimmed table from %d to %d observations", self._n_obs, n)
        self._n_obs = n
        self._cache.mark_data_changed()

    def replace_all(self, rows: Iterable[Sequence[float]]) -> None:
        """Replace every observation and the table width with ``rows``.

        Variable names are left as they are; keeping them consistent with the
        new width is the caller's job.
        """
        new_rows = _coerce_rows(rows)
        self._data = new_rows.copy()
        self._n_obs, self._n_vars = new_rows.shape
        self._cache.mark_data_changed()

    def get_all_data(self) -> np.ndarray:
        """Return a copy of every retained observation, shape ``(n, v)``."""
        self._require_width()
        return self._data[: self._n_obs].copy()

    def to_dataframe(self, use_window: bool = False) -> pd.DataFrame:
        """Return the observations as a DataFrame labeled by variable names."""
        self._require_width()
        data = self._window() if use_window else self._data[: self._n_obs]
        return pd.DataFrame(data.copy(), columns=self._labels())

    def column(self, variable: Variable, use_window: bool = True) -> np.ndarray:
        """Return one variable's observations, most recent last.

        Args:
            variable: Index or name of the variable.
            use_window: Restrict to the effective window when ``True``;
                return every retained observation otherwise.
        """
        index = self._variable_index(variable)
        data = self._window() if use_window else self._data[: self._n_obs]
        return data[:, index].copy()

    # Names ----------------------------------------------------------------

    @property
    def names(self) -> Optional[List[str]]:
        return None if self._names is None else list(self._names)

    def set_names(self, names: Sequence[str]) -> None:
        """Label the variables by position.

        On a table without an established width this creates an empty table
        with ``len(names)`` variables.

        Raises:
            ConfigurationError: If a name is not a string or the number of
                names differs from the table width.
        """
        names = list(names)
        if not all(isinstance(name, str) for name in names):
            raise ConfigurationError("Expected a list of strings for the names.")
        if self._data is None:
            self.create_empty(len(names))
        if len(names) != self._n_vars:
            raise ConfigurationError(
                "Number of variables in set-names does not match the dimension "
                f"of the table ({len(names)} != {self._n_vars})."
            )
        if len(set(names)) != len(names):
            warnings.warn(
                "Duplicate variable names; lookups by name return the first match.",
                UserWarning,
                stacklevel=2,
            )
        self._names = names

    def get_names(self) -> Optional[List[str]]:
        return self.names

    def name_index(self, name: str) -> Optional[int]:
        """Return the position of ``name``, or ``None`` if it is not a variable name."""
        if self._names is None:
            return None
        for i, candidate in enumerate(self._names[: self._n_vars]):
            if candidate == name:
                return i
        return None

    # Configuration --------------------------------------------------------

    @property
    def window_size(self) -> int:
        return self._window_size

    def get_window_size(self) -> int:
        return self._window_size

    def set_window_size(self, n: int) -> None:
        """Use only the most recent ``n`` observations; 0 means all of them."""
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
            raise ConfigurationError(
                f"The window size must be a non-negative integer, got {n!r}."
            )
        self._window_size = int(n)
        self._cache.mark_data_changed()

    @property
    def use_bessel_correction(self) -> bool:
        return self._use_bessel

    def set_bessel_correction(self, enabled: bool) -> None:
        """Choose ``n - 1`` (``True``) or ``n`` (``False``) as the covariance divisor."""
        enabled = bool(enabled)
        if enabled != self._use_bessel:
            self._use_bessel = enabled
            self._cache.mark_correction_changed()

    @property
    def effective_count(self) -> int:
        """Number of observations inside the effective window."""
        if self._window_size == 0:
            return self._n_obs
        return min(self._window_size, self._n_obs)

    # Moments --------------------------------------------------------------

    def _moments(self) -> Moments:
        return self._cache.current(self._window, self._use_bessel)

    def means(self) -> Union[np.ndarray, UnavailableResult]:
        if self._n_obs == 0:
            return UnavailableResult(NO_OBSERVATIONS)
        return self._moments().means.copy()

    def std_devs(self) -> Union[np.ndarray, UnavailableResult]:
        if self._n_obs == 0:
            return UnavailableResult(NO_OBSERVATIONS)
        return self._moments().std_devs.copy()

    def covariance(self) -> Union[np.ndarray, UnavailableResult]:
        if self.effective_count < 2 or self._n_vars < 2:
            return UnavailableResult(TOO_FEW)
        return self._moments().covariance.copy()

    def correlation(self) -> Union[np.ndarray, UnavailableResult]:
        if self.effective_count < 2 or self._n_vars < 2:
            return UnavailableResult(TOO_FEW)
        return self._moments().correlation.copy()

    # Order statistics -----------------------------------------------------

    def medians(self) -> Union[np.ndarray, UnavailableResult]:
        if self._n_obs == 0:
            return UnavailableResult(NO_OBSERVATIONS)
        data = self._data[: self._n_obs]
        return np.array([descriptive.median(data[:, j]) for j in range(self._n_vars)])

    def quantile(self, variable: Variable, percent: float) -> Union[float, UnavailableResult]:
        values = self.column(variable, use_window=False)
        if len(values) == 0:
            return UnavailableResult(NO_OBSERVATIONS)
        return descriptive.quantile(values, percent)

    def quantiles(self, variable: Variable, n: int) -> Union[np.ndarray, UnavailableResult]:
        values = self.column(variable, use_window=False)
        if len(values) == 0:
            return UnavailableResult(NO_OBSERVATIONS)
        return descriptive.quantiles(values, n)

    def percentile(self, variable: Variable, value: float) -> Union[float, UnavailableResult]:
        values = self.column(variable, use_window=False)
        if len(values) == 0:
            return UnavailableResult(NO_OBSERVATIONS)
        return descriptive.percentile(values, value)

    # Regression -----------------------------------------------------------

    def regress(self, variables: Sequence[Variable]) -> RegressionResult:
        """Regress the first listed variable on the rest, over the effective window.

        Args:
            variables: Indices or names; the first is the dependent variable.

        Returns:
            RegressionResult: Also kept as ``last_regression``. A failed call
            leaves the previous result in place.

        Raises:
            ConfigurationError: For an empty or over-long list, an unknown or
                out-of-range variable, or a variable listed twice.
            NumericError: If the design matrix is singular or there are too
                few observations.
        """
        self._require_width()
        requested = list(variables)
        if not requested:
            raise ConfigurationError("The regress-on variable list is empty.")
        if len(requested) > self._n_vars:
            raise ConfigurationError("Too many variables in the regress-on list.")
        indices = [self._variable_index(v) for v in requested]
        duplicates = sorted({i for i in indices if indices.count(i) > 1})
        if duplicates:
            labels = ", ".join(self._labels()[i] for i in duplicates)
            raise ConfigurationError(
                f"Duplicate variables in the regress-on variable list: {labels}."
            )

        window = self._window()
        result = ols_regression(
            window[:, indices[0]],
            window[:, indices[1:]],
            variables=indices,
            labels=[self._labels()[i] for i in indices],
        )
        logger.debug(
            "Regressed variable %d on %s over %d observations (R2=%g)",
            indices[0],
            indices[1:],
            window.shape[0],
            result.r_squared,
        )
        self._regression = result
        return result

    def regress_all(self) -> RegressionResult:
        """Regress the first variable on every other variable."""
        self._require_width()
        return self.regress(list(range(self._n_vars)))

    @property
    def last_regression(self) -> Optional[RegressionResult]:
        return self._regression

    def get_regression_stats(self) -> List[float]:
        """Statistics of the last regression in ``REGRESSION_STAT_NAMES`` order."""
        return self._require_regression().statistics()

    def get_coefficient_stats(self) -> List[List[float]]:
        """``[p_values, t_stats, std_errors]`` of the last regression."""
        return self._require_regression().coefficient_statistics()

    # Forecasts ------------------------------------------------------------

    def forecast(self, variable: Variable, horizon: float, model: str = "linear") -> float:
        """Fit a trend to ``variable`` and evaluate it ``horizon`` periods ahead.

        ``horizon`` 0 gives the fitted value at the last observation; negative
        values backcast.

        Raises:
            ConfigurationError: If the table has no observations.
            DomainError: For a log-based model over non-positive values.
        """
        if self._n_obs == 0:
            raise ConfigurationError(
                "There must be at least one observation for a forecast."
            )
        fit = fit_trend(self.column(variable, use_window=True), model)
        self._forecast = fit
        return fit.value_at(horizon)

    def forecast_linear(self, variable: Variable, horizon: float) -> float:
        return self.forecast(variable, horizon, "linear")

    def forecast_compound(self, variable: Variable, horizon: float) -> float:
        return self.forecast(variable, horizon, "compound")

    def forecast_continuous(self, variable: Variable, horizon: float) -> float:
        return self.forecast(variable, horizon, "continuous")

    @property
    def last_forecast(self) -> Optional[TrendFit]:
        return self._forecast

    def get_forecast_parameters(self) -> List[float]:
        """``[constant, slope_or_rate]`` of the last forecast."""
        if self._forecast is None:
            raise ConfigurationError("No forecast has been made with this table.")
        return list(self._forecast.parameters)

    # Printing -------------------------------------------------------------

    def render_data(self) -> str:
        if self._data is None:
            raise ConfigurationError(
                "Attempt to print a data table before one has been created."
            )
        return format_matrix(
            self._data[: self._n_obs],
            corner=self.settings.data_corner_label,
            row_labels=[str(i) for i in range(self._n_obs)],
            col_labels=self._labels(),
            settings=self.settings,
        )

    def render_covariance(self) -> str:
        labels = self._labels()
        return format_matrix(
            require_available(self.covariance()), None, labels, labels, self.settings
        )

    def render_correlation(self) -> str:
        labels = self._labels()
        return format_matrix(
            require_available(self.correlation()), None, labels, labels, self.settings
        )

    # Internals ------------------------------------------------------------

    def _require_width(self) -> None:
        if self._data is None:
            raise ConfigurationError(
                "The table has no variables yet; add observations or set names first."
            )

    def _require_regression(self) -> RegressionResult:
        if self._regression is None:
            raise ConfigurationError("No regression has been run on this table.")
        return self._regression

    def _window(self) -> np.ndarray:
        m = self.effective_count
        return self._data[self._n_obs - m : self._n_obs]

    def _labels(self) -> List[str]:
        if self._names is not None and len(self._names) == self._n_vars:
            return list(self._names)
        return [str(i) for i in range(self._n_vars)]

    def _variable_index(self, variable: Variable) -> int:
        self._require_width()
        if isinstance(variable, str):
            index = self.name_index(variable)
            if index is None:
                raise ConfigurationError(f"Variable name {variable} not found.")
            return index
        if isinstance(variable, bool) or not isinstance(variable, numbers.Integral):
            raise ConfigurationError(
                f"Expected a variable number or name but found {variable!r} instead."
            )
        index = int(variable)
        if index < 0 or index >= self._n_vars:
            raise ConfigurationError(
                f"Variable number {index} out of range; the table has "
                f"{self._n_vars} variables."
            )
        return index
