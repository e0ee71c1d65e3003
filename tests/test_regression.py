import math

import numpy as np
import pytest
from scipy import stats as sps

from tablestats import (
    REGRESSION_STAT_NAMES,
    ConfigurationError,
    NumericError,
    StatsTable,
)
from tablestats.stats.regression import ols_regression


def _noisy_rows(n=30, seed=3):
    rng = np.random.default_rng(seed)
    x1 = rng.uniform(0, 10, n)
    x2 = rng.uniform(-5, 5, n)
    y = 1.5 + 0.8 * x1 - 2.0 * x2 + rng.normal(scale=0.5, size=n)
    return np.column_stack([y, x1, x2])


class TestExactFit:
    def test_recovers_line(self, linear_table):
        fit = linear_table.regress([1, 0])
        np.testing.assert_allclose(fit.coefficients, [2.0, 3.0], atol=1e-9)
        assert math.isclose(fit.r_squared, 1.0, rel_tol=1e-12)
        assert fit.sse == pytest.approx(0.0, abs=1e-18)
        assert fit.df_total == 5
        assert fit.df_regression == 1
        assert fit.df_error == 4

    def test_names_accepted(self, linear_table):
        linear_table.set_names(["x", "y"])
        fit = linear_table.regress(["y", "x"])
        assert fit.variables == (1, 0)
        assert fit.labels == ("y", "x")
        assert list(fit.to_frame().index) == ["constant", "x"]


class TestNoisyFit:
    """Multi-variable fit compared against direct numpy/scipy computation."""

    def test_matches_reference(self):
        data = _noisy_rows()
        tbl = StatsTable.from_rows(data)
        fit = tbl.regress([0, 1, 2])

        y = data[:, 0]
        x = np.column_stack([np.ones(len(y)), data[:, 1:]])
        beta, *_ = np.linalg.lstsq(x, y, rcond=None)
        resid = y - x @ beta
        sse = float(resid @ resid)
        sst = float(((y - y.mean()) ** 2).sum())
        df_error = len(y) - 3
        mse = sse / df_error
        se = np.sqrt(mse * np.diag(np.linalg.inv(x.T @ x)))
        t_stats = beta / se
        f_stat = ((sst - sse) / 2) / mse

        np.testing.assert_allclose(fit.coefficients, beta)
        np.testing.assert_allclose(fit.std_errors, se)
        np.testing.assert_allclose(fit.t_stats, t_stats)
        np.testing.assert_allclose(
            fit.p_values, 2 * sps.t.sf(np.abs(t_stats), df_error), rtol=1e-6, atol=1e-15
        )
        assert fit.sse == pytest.approx(sse)
        assert fit.sst == pytest.approx(sst)
        assert fit.ssr == pytest.approx(sst - sse)
        assert fit.r_squared == pytest.approx(1 - sse / sst)
        assert fit.adj_r_squared == pytest.approx(
            1 - (1 - fit.r_squared) * (len(y) - 1) / df_error
        )
        assert fit.f_stat == pytest.approx(f_stat)
        assert fit.f_p_value == pytest.approx(sps.f.sf(f_stat, 2, df_error), abs=1e-12)
        assert fit.std_error_of_estimate == pytest.approx(math.sqrt(mse))

    def test_statistics_order(self):
        tbl = StatsTable.from_rows(_noisy_rows())
        fit = tbl.regress([0, 1, 2])
        stats = tbl.get_regression_stats()
        assert len(stats) == len(REGRESSION_STAT_NAMES) == 11
        assert stats[0] == fit.r_squared
        assert stats[2] == fit.f_stat
        assert stats[5:8] == [fit.df_total, fit.df_regression, fit.df_error]
        assert stats[8:] == [fit.sst, fit.ssr, fit.sse]
        assert fit.as_dict()["sse"] == fit.sse

    def test_coefficient_stats_layout(self):
        tbl = StatsTable.from_rows(_noisy_rows())
        fit = tbl.regress([0, 2])
        p_values, t_stats, std_errors = tbl.get_coefficient_stats()
        assert len(p_values) == len(t_stats) == len(std_errors) == 2
        assert t_stats == pytest.approx(list(fit.t_stats))
        frame = fit.to_frame()
        assert list(frame.columns) == ["coefficient", "std_error", "t_stat", "p_value"]
        assert frame.loc["constant", "std_error"] == pytest.approx(std_errors[0])

    def test_regress_all(self):
        tbl = StatsTable.from_rows(_noisy_rows())
        assert tbl.regress_all().variables == (0, 1, 2)

    def test_window_restricts_fit(self):
        rows = [[2.0 + 3.0 * x, x] for x in range(5)]
        rows += [[100.0 - x, x] for x in range(5, 10)]
        tbl = StatsTable.from_rows(rows)
        tbl.set_window_size(5)
        fit = tbl.regress([0, 1])
        np.testing.assert_allclose(fit.coefficients, [100.0, -1.0], atol=1e-9)


class TestRegressionErrors:
    def test_duplicate_variables(self):
        tbl = StatsTable.from_rows(_noisy_rows())
        tbl.set_names(["y", "x", "z"])
        with pytest.raises(ConfigurationError, match="Duplicate variables.*: x\\."):
            tbl.regress(["y", "x", 1])
        assert tbl.last_regression is None

    def test_too_many_variables(self, linear_table):
        with pytest.raises(ConfigurationError, match="Too many"):
            linear_table.regress([1, 0, 0])

    def test_empty_list(self, linear_table):
        with pytest.raises(ConfigurationError):
            linear_table.regress([])

    def test_collinear_design(self):
        tbl = StatsTable.from_rows([[x * x, x, 2 * x] for x in range(6)])
        with pytest.raises(NumericError):
            tbl.regress([0, 1, 2])

    def test_too_few_observations(self):
        tbl = StatsTable.from_rows([[1, 2], [3, 5]])
        with pytest.raises(NumericError):
            tbl.regress([0, 1])

    def test_failure_keeps_previous_result(self):
        rows = [[x * x, x, 2 * x] for x in range(6)]
        tbl = StatsTable.from_rows(rows)
        good = tbl.regress([0, 1])
        with pytest.raises(NumericError):
            tbl.regress([0, 1, 2])
        assert tbl.last_regression is good

    def test_stats_before_regression(self):
        tbl = StatsTable.from_rows([[1, 2]])
        with pytest.raises(ConfigurationError, match="No regression"):
            tbl.get_regression_stats()
        with pytest.raises(ConfigurationError, match="No regression"):
            tbl.get_coefficient_stats()


class TestDegenerateFits:
    def test_intercept_only(self):
        fit = ols_regression(np.array([1.0, 2.0, 4.0]), np.zeros((3, 0)))
        assert fit.coefficients[0] == pytest.approx(7 / 3)
        assert fit.df_regression == 0
        assert math.isnan(fit.f_stat)
        assert math.isnan(fit.f_p_value)

    def test_constant_dependent_warns(self):
        with pytest.warns(UserWarning, match="zero variance"):
            fit = ols_regression(np.full(4, 3.0), np.arange(4.0))
        assert fit.sst == 0.0
