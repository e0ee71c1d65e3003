"""Minimal dense linear-algebra interface used by the regression routines.

Everything the table needs from a matrix library goes through these few
functions, so numpy stays an implementation detail of this module and of the
callers' array handling.
"""

from __future__ import annotations

import numpy as np

from ..errors import NumericError


def design_matrix(independents: np.ndarray, n_rows: int) -> np.ndarray:
    """Prepend a column of ones (the intercept) to ``independents``.

    Args:
        independents (numpy.ndarray): ``(n, k)`` array of independent
            variables; ``k`` may be zero.
        n_rows (int): Number of observations ``n``.

    Returns:
        numpy.ndarray: ``(n, k + 1)`` design matrix.
    """
    x = np.asarray(independents, dtype=float)
    if x.ndim == 1:
        x = x.reshape(n_rows, 1)
    return np.hstack([np.ones((n_rows, 1), dtype=float), x])


def solve_least_squares(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Solve ``x @ beta = y`` in the least-squares sense.

    Raises:
        NumericError: If ``x`` is rank deficient, including the case of fewer
            rows than columns.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n, v = x.shape
    if n < v:
        raise NumericError("Matrix is rank deficient.")
    try:
        beta, _, rank, _ = np.linalg.lstsq(x, y, rcond=None)
    except np.linalg.LinAlgError as exc:
        raise NumericError(f"Least-squares solve failed: {exc}") from exc
    if rank < v:
        raise NumericError("Matrix is rank deficient.")
    return beta


def inverse(m: np.ndarray) -> np.ndarray:
    """Invert a square matrix, raising ``NumericError`` if it is singular."""
    try:
        return np.linalg.inv(np.asarray(m, dtype=float))
    except np.linalg.LinAlgError as exc:
        raise NumericError("Matrix is singular.") from exc


def cross_product(x: np.ndarray) -> np.ndarray:
    """Return ``x.T @ x``."""
    x = np.asarray(x, dtype=float)
    return x.T @ x


def elementwise_divide(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Divide elementwise; zero denominators yield ``inf``/``nan`` silently."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.asarray(a, dtype=float) / np.asarray(b, dtype=float)
