"""Probability distributions and special functions.

The calls into scipy are collected here so the rest of the package depends on
a small, domain-checked surface. Every function takes and returns plain
floats and raises ``DomainError`` for parameters outside the valid range,
instead of letting scipy return ``nan`` silently.

Two helpers, ``p_value_for_f`` and ``p_value_for_t``, serve the regression
routine. They let ``nan`` statistics pass through as ``nan`` p-values, since a
degenerate fit is reported rather than rejected.
"""

from __future__ import annotations

import math

import numpy as np
from scipy import special
from scipy.stats import binom, chi2, norm
from scipy.stats import t as student_t

from ..errors import DomainError


def _require_positive(name: str, **params: float) -> None:
    bad = [k for k, v in params.items() if not float(v) > 0.0]
    if bad:
        raise DomainError(f"The arguments to {name} must be positive.")


def _require_open_unit(name: str, area: float) -> None:
    if not 0.0 < float(area) < 1.0:
        raise DomainError(
            f"The area parameter in {name} must be greater than 0.0 and less than 1.0."
        )


def _require_probability(p: float) -> None:
    if not 0.0 <= float(p) <= 1.0:
        raise DomainError(
            f"The probability of success must be between 0 and 1, got {p!r}."
        )


def _require_trials(n: int, k: int) -> None:
    if n < 0 or k < 0 or k > n:
        raise DomainError(
            f"Binomial arguments require 0 <= k <= n, got n={n}, k={k}."
        )


# Special functions ------------------------------------------------------------


def gamma(a: float) -> float:
    """Return the gamma function of ``a``.

    Gamma is defined for negative non-integers too, but the argument is
    restricted to positive values.
    """
    _require_positive("gamma", a=a)
    return float(special.gamma(float(a)))


def log_gamma(a: float) -> float:
    """Return the natural log of the gamma function of ``a`` (``a > 0``)."""
    _require_positive("logGamma", a=a)
    return float(special.gammaln(float(a)))


def incomplete_gamma(a: float, x: float) -> float:
    """Return the regularized lower incomplete gamma ``P(a, x)``."""
    _require_positive("incompleteGamma", a=a)
    if float(x) < 0.0:
        raise DomainError("The arguments to incompleteGamma must be positive.")
    return float(special.gammainc(float(a), float(x)))


def incomplete_gamma_complement(a: float, x: float) -> float:
    """Return the regularized upper incomplete gamma ``Q(a, x) = 1 - P(a, x)``."""
    _require_positive("incompleteGammaComplement", a=a)
    if float(x) < 0.0:
        raise DomainError(
            "The arguments to incompleteGammaComplement must be positive."
        )
    return float(special.gammaincc(float(a), float(x)))


def beta(a: float, b: float) -> float:
    """Return the beta function ``B(a, b)``."""
    _require_positive("beta", a=a, b=b)
    return float(special.beta(float(a), float(b)))


def big_beta(a: float, b: float) -> float:
    """Return ``B(a, b)`` computed in log space, usable for very large arguments."""
    _require_positive("beta", a=a, b=b)
    return math.exp(log_gamma(a) + log_gamma(b) - log_gamma(float(a) + float(b)))


def incomplete_beta(a: float, b: float, x: float) -> float:
    """Return the regularized incomplete beta ``I_x(a, b)``.

    Raises:
        DomainError: If ``a`` or ``b`` is not positive, or ``x`` lies outside
            ``[0, 1]``.
    """
    if not (float(a) > 0.0 and float(b) > 0.0 and 0.0 <= float(x) <= 1.0):
        raise DomainError(
            "The arguments to incompleteBeta must be positive, and the "
            "integration point must be between 0 and 1 inclusive."
        )
    return float(special.betainc(float(a), float(b), float(x)))


# Normal and log-normal --------------------------------------------------------


def normal_density(x: float, mean: float = 0.0, sd: float = 1.0) -> float:
    """Return the normal probability density at ``x``."""
    _require_positive("normal", sd=sd)
    return float(norm.pdf(float(x), loc=float(mean), scale=float(sd)))


def normal_left(x: float, mean: float = 0.0, sd: float = 1.0) -> float:
    """Return the area to the left of ``x`` under the normal density."""
    _require_positive("normal-left", sd=sd)
    return float(norm.cdf(float(x), loc=float(mean), scale=float(sd)))


def normal_inverse(area: float, mean: float = 0.0, sd: float = 1.0) -> float:
    """Return the ``x`` to the left of which lies ``area`` of the normal density."""
    _require_open_unit("normal-inverse", area)
    _require_positive("normal-inverse", sd=sd)
    return float(mean) + float(norm.ppf(float(area))) * float(sd)


def lognormal_left(x: float, location: float, scale: float) -> float:
    """Return the log-normal CDF at ``x``; ``0.0`` for ``x <= 0``."""
    _require_positive("lognormal-left", scale=scale)
    if float(x) <= 0.0:
        return 0.0
    y = (math.log(float(x)) - float(location)) / float(scale)
    return normal_left(y)


def lognormal_density(x: float, location: float, scale: float) -> float:
    """Return the log-normal probability density at ``x`` (``x > 0``)."""
    _require_positive("lognormal", x=x, scale=scale)
    y = (math.log(float(x)) - float(location)) / float(scale)
    return math.exp(-y * y / 2.0) / (float(x) * math.sqrt(2.0 * math.pi) * float(scale))


def lognormal_inverse(area: float, location: float, scale: float) -> float:
    """Return the log-normal quantile for ``area``; ``0.0`` for ``area <= 0``."""
    if float(area) <= 0.0:
        return 0.0
    if float(area) >= 1.0:
        raise DomainError(
            "The area parameter in lognormal-inverse must be less than 1.0."
        )
    _require_positive("lognormal-inverse", scale=scale)
    return math.exp(float(location) + normal_inverse(area) * float(scale))


# Student t --------------------------------------------------------------------


def student_left(t: float, df: float) -> float:
    """Return the area to the left of ``t`` under Student's t with ``df`` dof."""
    if not float(df) > 0.0:
        raise DomainError(f"Degrees of freedom must be positive, got {df!r}.")
    return float(student_t.cdf(float(t), float(df)))


def student_inverse(area: float, df: float) -> float:
    """Return ``t`` such that the area to its left under Student's t equals ``area``."""
    _require_open_unit("student-inverse", area)
    if not float(df) > 0.0:
        raise DomainError(f"Degrees of freedom must be positive, got {df!r}.")
    return float(student_t.ppf(float(area), float(df)))


# Chi-square -------------------------------------------------------------------


def chi_square_left(x: float, df: float) -> float:
    """Return the area from 0 to ``x`` under the chi-square density."""
    if float(x) < 0.0 or not float(df) > 0.0:
        raise DomainError("The ChiSquare arguments must be positive.")
    return float(chi2.cdf(float(x), float(df)))


def chi_square_right(x: float, df: float) -> float:
    """Return the area from ``x`` to infinity under the chi-square density."""
    if float(x) < 0.0 or not float(df) > 0.0:
        raise DomainError("The ChiSquare arguments must be positive.")
    return float(chi2.sf(float(x), float(df)))


# Binomial ---------------------------------------------------------------------


def binomial_coefficient(n: int, k: int) -> float:
    """Return ``n`` choose ``k`` as a float rounded to the nearest integer."""
    n, k = int(n), int(k)
    if n < 0:
        raise DomainError(f"n must be non-negative, got {n}.")
    if k < 0 or k > n:
        return 0.0
    return float(np.rint(special.comb(n, k, exact=False)))


def binomial_probability(n: int, k: int, p: float) -> float:
    """Return the probability of exactly ``k`` successes in ``n`` trials."""
    n, k = int(n), int(k)
    _require_trials(n, k)
    _require_probability(p)
    return float(binom.pmf(k, n, float(p)))


def binomial_sum_to(n: int, k: int, p: float) -> float:
    """Return the sum of binomial terms ``0`` through ``k``."""
    n, k = int(n), int(k)
    _require_trials(n, k)
    _require_probability(p)
    return float(binom.cdf(k, n, float(p)))


def binomial_sum_above(n: int, k: int, p: float) -> float:
    """Return the sum of binomial terms ``k + 1`` through ``n``."""
    n, k = int(n), int(k)
    _require_trials(n, k)
    _require_probability(p)
    return float(binom.sf(k, n, float(p)))


# Regression helpers -----------------------------------------------------------


def p_value_for_f(fstat: float, dfn: int, dfd: int) -> float:
    """Return the right-tail p-value of an F statistic.

    Uses ``P(F > f) = I_x(dfd / 2, dfn / 2)`` with ``x = dfd / (dfd + dfn * f)``.
    A ``nan`` statistic or zero numerator degrees of freedom yields ``nan``.
    """
    if dfd <= 0 or dfn < 0:
        raise DomainError(
            f"Degrees of freedom must be positive, got dfn={dfn}, dfd={dfd}."
        )
    if dfn == 0 or math.isnan(fstat):
        return math.nan
    if math.isinf(fstat):
        return 0.0
    # SSR can come out a hair below zero when the fit explains nothing.
    if fstat <= 0.0:
        return 1.0
    x = dfd / (dfd + dfn * fstat)
    return incomplete_beta(dfd / 2.0, dfn / 2.0, x)


def p_value_for_t(tstat: float, df: int) -> float:
    """Return the two-tailed p-value of a t statistic: ``2 * T(-|t|)``."""
    if math.isnan(tstat):
        return math.nan
    return 2.0 * student_left(-abs(tstat), df)
