"""Provide the ordinary least-squares routine behind table regressions.

This module supports:
- multi-variable OLS fits with an intercept,
- model-level diagnostics (sums of squares, degrees of freedom, R², F), and
- coefficient-level standard errors, t statistics and two-tailed p-values.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from ..errors import NumericError
from .distributions import p_value_for_f, p_value_for_t
from .linalg import cross_product, design_matrix, inverse, solve_least_squares

REGRESSION_STAT_NAMES: Tuple[str, ...] = (
    "r_squared",
    "adj_r_squared",
    "f_stat",
    "f_p_value",
    "std_error_of_estimate",
    "df_total",
    "df_regression",
    "df_error",
    "sst",
    "ssr",
    "sse",
)


@dataclass(frozen=True)
class RegressionResult:
    """Outcome of one OLS fit.

    ``coefficients[0]`` is the intercept; ``coefficients[i]`` for ``i >= 1``
    belongs to ``variables[i]``. ``variables[0]`` is the dependent variable.
    """

    variables: Tuple[int, ...]
    coefficients: np.ndarray
    std_errors: np.ndarray
    t_stats: np.ndarray
    p_values: np.ndarray
    sst: float
    ssr: float
    sse: float
    df_total: int
    df_regression: int
    df_error: int
    r_squared: float
    adj_r_squared: float
    f_stat: float
    f_p_value: float
    std_error_of_estimate: float
    labels: Tuple[str, ...] = field(default=())

    def statistics(self) -> List[float]:
        """Model statistics in the order of ``REGRESSION_STAT_NAMES``."""
        return [float(getattr(self, name)) for name in REGRESSION_STAT_NAMES]

    def coefficient_statistics(self) -> List[List[float]]:
        """Nested list ``[p_values, t_stats, std_errors]``."""
        return [
            [float(v) for v in self.p_values],
            [float(v) for v in self.t_stats],
            [float(v) for v in self.std_errors],
        ]

    def as_dict(self) -> dict:
        return dict(zip(REGRESSION_STAT_NAMES, self.statistics()))

    def to_frame(self) -> pd.DataFrame:
        """Coefficient table indexed by ``"constant"`` then the regressor labels."""
        if self.labels:
            index = ["constant"] + list(self.labels[1:])
        else:
            index = ["constant"] + [str(v) for v in self.variables[1:]]
        return pd.DataFrame(
            {
                "coefficient": self.coefficients,
                "std_error": self.std_errors,
                "t_stat": self.t_stats,
                "p_value": self.p_values,
            },
            index=index,
        )


def ols_coefficients(y: np.ndarray, independents: np.ndarray) -> np.ndarray:
    """Solve for the intercept and slopes of ``y`` on ``independents`` only.

    Raises:
        NumericError: If the design matrix is rank deficient.
    """
    y_arr = np.asarray(y, dtype=float).reshape(-1)
    x = design_matrix(independents, len(y_arr))
    return solve_least_squares(x, y_arr)


def ols_regression(
    y: np.ndarray,
    independents: np.ndarray,
    variables: Sequence[int] = (),
    labels: Sequence[str] = (),
) -> RegressionResult:
    """Fit ``y`` on ``independents`` plus an intercept by ordinary least squares.

    Args:
        y (numpy.ndarray): Dependent observations, length ``n``.
        independents (numpy.ndarray): ``(n, k)`` regressors; ``k`` may be zero
            for an intercept-only model.
        variables (Sequence[int]): Table indices of ``y`` and the regressors,
            recorded on the result.
        labels (Sequence[str]): Optional display names matching ``variables``.

    Returns:
        RegressionResult: Coefficients, per-coefficient inference and model
        diagnostics.

    Raises:
        NumericError: If the design matrix is rank deficient (collinear
            regressors) or there are not more observations than coefficients.

    Note:
        ``dfTotal = n - 1``, ``dfRegression = v - 1`` and
        ``dfError = dfTotal - dfRegression`` where ``v`` counts the intercept.
        F and its p-value are ``nan`` for an intercept-only model. A constant
        dependent variable leaves R² and F undefined; that case is reported
        with a warning and ``nan``/``inf`` values rather than an exception.

    References:
        Ordinary least squares with classical (homoskedastic) standard errors.
    """
    y_arr = np.asarray(y, dtype=float).reshape(-1)
    n = int(len(y_arr))
    x = design_matrix(independents, n)
    v = int(x.shape[1])
    if n <= v:
        raise NumericError(
            f"Regression needs more observations than coefficients; "
            f"got {n} observations for {v} coefficients."
        )

    beta = solve_least_squares(x, y_arr)

    ybar = float(np.mean(y_arr))
    sst = float(np.sum((y_arr - ybar) ** 2))
    resid = x @ beta - y_arr
    sse = float(np.sum(resid**2))
    ssr = sst - sse

    df_total = n - 1
    df_regression = v - 1
    df_error = df_total - df_regression

    if sst <= 0:
        warnings.warn(
            "Dependent variable has zero variance; R-squared and F are undefined.",
            UserWarning,
            stacklevel=2,
        )

    mse = sse / df_error
    with np.errstate(divide="ignore", invalid="ignore"):
        r2 = float(1.0 - np.divide(sse, sst))
        adj_r2 = float(1.0 - (1.0 - r2) * (df_total / df_error))
        if df_regression > 0:
            f_stat = float(np.divide(ssr / df_regression, mse))
        else:
            f_stat = math.nan
    f_p = p_value_for_f(f_stat, df_regression, df_error)
    std_err_est = math.sqrt(mse)

    xx_inv = inverse(cross_product(x))
    with np.errstate(divide="ignore", invalid="ignore"):
        # Exact fits can leave tiny negative diagonal terms from round-off.
        se = np.sqrt(np.clip(mse * np.diag(xx_inv), 0.0, None))
        t_stats = beta / se
    p_values = np.array([p_value_for_t(float(t), df_error) for t in t_stats])

    return RegressionResult(
        variables=tuple(int(i) for i in variables),
        coefficients=beta,
        std_errors=se,
        t_stats=t_stats,
        p_values=p_values,
        sst=sst,
        ssr=ssr,
        sse=sse,
        df_total=df_total,
        df_regression=df_regression,
        df_error=df_error,
        r_squared=r2,
        adj_r_squared=adj_r2,
        f_stat=f_stat,
        f_p_value=f_p,
        std_error_of_estimate=std_err_est,
        labels=tuple(str(s) for s in labels),
    )
