#!/usr/bin/env python3
"""
Demonstration script for the statistics table.
"""

# Walkthrough:
# 1) Build a table of synthetic monthly observations (sales, advertising,
#    price) with a known linear relationship plus noise.
# 2) Report means, standard deviations and the correlation matrix over the
#    whole history and over a recent window.
# 3) Regress sales on advertising and price and log the model statistics.
# 4) Forecast sales with the linear, compound and continuous trend models.

import logging
import os
import sys
import time

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tablestats import REGRESSION_STAT_NAMES, StatsTable, is_unavailable


def build_demo_table(n_months=36, seed=2024):
    """Return a table of synthetic sales driven by advertising and price."""
    rng = np.random.default_rng(seed)
    advertising = rng.uniform(10.0, 50.0, n_months)
    price = rng.uniform(4.0, 8.0, n_months)
    trend = 200.0 * 1.01 ** np.arange(n_months)
    sales = trend + 3.0 * advertising - 12.0 * price + rng.normal(0, 5.0, n_months)

    table = StatsTable()
    table.set_names(["sales", "advertising", "price"])
    for row in zip(sales, advertising, price):
        table.add(row)
    return table


def main():
    """Run the demonstration and log each result."""

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    start_time = time.time()
    logging.info("Building demonstration table")
    table = build_demo_table()
    logging.info(
        "Table holds %d observations of %d variables",
        table.observation_count,
        table.variable_count,
    )

    logging.info("Means: %s", np.round(table.means(), 4).tolist())
    logging.info("Standard deviations: %s", np.round(table.std_devs(), 4).tolist())
    logging.info("Correlation matrix:\n%s", table.render_correlation())

    table.set_window_size(12)
    logging.info(
        "Means over the last %d observations: %s",
        table.effective_count,
        np.round(table.means(), 4).tolist(),
    )

    fit = table.regress(["sales", "advertising", "price"])
    for name, value in zip(REGRESSION_STAT_NAMES, fit.statistics()):
        logging.info("  %-22s %12.6g", name, value)
    logging.info("Coefficients:\n%s", fit.to_frame().to_string())

    table.set_window_size(0)
    for model in ("linear", "compound", "continuous"):
        value = table.forecast("sales", 1, model)
        constant, rate = table.get_forecast_parameters()
        logging.info(
            "%s forecast one period ahead: %.4f (constant=%.4f, rate=%.6f)",
            model.capitalize(),
            value,
            constant,
            rate,
        )

    table.trim_to_last(1)
    if is_unavailable(table.covariance()):
        logging.warning(
            "Covariance unavailable after trimming: %s", table.covariance().reason
        )

    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    logging.info("Demonstration completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
