"""Define default settings shared by statistics tables."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_GROWTH_INCREMENT: int = 10


@dataclass(frozen=True)
class TableSettings:
    """Container for per-table tunables.

    Attributes:
        growth_increment: Minimum number of rows added to the backing buffer
            whenever an append outgrows it. Bulk appends larger than this grow
            the buffer by exactly the number of new rows.

        use_bessel_correction: Initial divisor choice for covariance. ``True``
            divides by ``n - 1`` (sample estimator), ``False`` by ``n``.

        number_format: Format spec for numbers in rendered text tables. The
            ``#`` flag keeps trailing zeros so every column lines up.

        label_width: Width of right-justified column labels in rendered
            tables; should match the width in ``number_format``.

        data_corner_label: Corner heading above the observation numbers when
            rendering the raw data.
    """

    growth_increment: int = DEFAULT_GROWTH_INCREMENT
    use_bessel_correction: bool = True
    number_format: str = "#12.8g"
    label_width: int = 12
    data_corner_label: str = "Obsv #"

    def __post_init__(self):
        if int(self.growth_increment) < 1:
            raise ConfigurationError(
                f"growth_increment must be >= 1, got {self.growth_increment!r}"
            )
        if int(self.label_width) < 1:
            raise ConfigurationError(
                f"label_width must be >= 1, got {self.label_width!r}"
            )


DEFAULT_SETTINGS = TableSettings()
