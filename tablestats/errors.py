"""Error kinds raised by the statistics table and its numerical helpers.

Every error carries the human-readable message a host integration would show
to its user. The value classes derive from ``ValueError`` so callers that
already guard numerical code with ``except ValueError`` keep working.

``UnavailableResult`` is not an exception: covariance and correlation queries
return it when too few observations or variables exist, and callers decide
whether that is worth an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class StatsTableError(Exception):
    """Base class for all statistics-table failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(StatsTableError, ValueError):
    """Invalid request against the table's current configuration."""


class ShapeError(StatsTableError, ValueError):
    """Observation rows inconsistent with the established table width."""


class DomainError(StatsTableError, ValueError):
    """Input outside a function's valid domain."""


class NumericError(StatsTableError, ArithmeticError):
    """Linear-algebra failure, e.g. a singular or rank-deficient design."""


@dataclass(frozen=True)
class UnavailableResult:
    """Sentinel returned when a statistic cannot be formed from the data.

    Attributes:
        reason: Human-readable explanation, suitable for an error message.
    """

    reason: str = "Less than two variables or observations."

    def __bool__(self) -> bool:
        return False


def is_unavailable(value: Any) -> bool:
    return isinstance(value, UnavailableResult)


def require_available(value: Any) -> Any:
    """Return ``value`` unchanged, or raise ``DomainError`` if it is unavailable."""
    if isinstance(value, UnavailableResult):
        raise DomainError(value.reason)
    return value
