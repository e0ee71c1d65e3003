import numpy as np
import pytest

from tablestats import DomainError, StatsTable, is_unavailable
from tablestats.stats.descriptive import median, percentile, quantile, quantiles


class TestOrderStatistics:
    def test_median(self):
        assert median(np.array([3.0, 1.0, 2.0])) == 2.0
        assert median(np.array([4.0, 1.0, 3.0, 2.0])) == 2.5

    def test_quantile_interpolates(self):
        values = np.array([4.0, 1.0, 3.0, 2.0])
        assert quantile(values, 50) == pytest.approx(2.5)
        assert quantile(values, 0) == 1.0
        assert quantile(values, 100) == 4.0
        assert quantile(values, 25) == pytest.approx(1.75)

    @pytest.mark.parametrize("percent", [-1, 100.5])
    def test_quantile_range(self, percent):
        with pytest.raises(DomainError, match="between 0.0 and 100.0"):
            quantile(np.array([1.0, 2.0]), percent)

    def test_quantiles(self):
        np.testing.assert_allclose(
            quantiles(np.arange(1.0, 6.0), 4), [1.0, 2.0, 3.0, 4.0, 5.0]
        )
        with pytest.raises(DomainError):
            quantiles(np.arange(3.0), 0)

    def test_percentile(self):
        values = np.array([3.0, 1.0, 4.0, 2.0])
        assert percentile(values, 2.0) == pytest.approx(50.0)
        assert percentile(values, 2.5) == pytest.approx(62.5)
        assert percentile(values, 0.0) == 0.0
        assert percentile(values, 10.0) == 100.0

    def test_percentile_with_ties(self):
        assert percentile(np.array([1.0, 2.0, 2.0, 3.0]), 2.0) == pytest.approx(75.0)


class TestTableOrderStatistics:
    """Order statistics ignore the window and use every retained row."""

    def test_medians_use_all_rows(self):
        tbl = StatsTable.from_rows([[1, 10], [2, 30], [3, 20], [100, 0]])
        tbl.set_window_size(2)
        np.testing.assert_allclose(tbl.medians(), [2.5, 15.0])

    def test_quantile_and_percentile_by_name(self):
        tbl = StatsTable.from_rows([[float(i)] for i in range(1, 6)])
        tbl.set_names(["score"])
        assert tbl.quantile("score", 50) == 3.0
        np.testing.assert_allclose(tbl.quantiles("score", 2), [1.0, 3.0, 5.0])
        assert tbl.percentile("score", 4.0) == pytest.approx(80.0)

    def test_empty_table(self):
        tbl = StatsTable()
        tbl.create_empty(1)
        assert is_unavailable(tbl.medians())
        assert is_unavailable(tbl.quantile(0, 50))
        assert is_unavailable(tbl.quantiles(0, 4))
        assert is_unavailable(tbl.percentile(0, 1.0))
