import numpy as np
import pytest

from tablestats import ConfigurationError, StatsTable, TableSettings
from tablestats.printing import format_matrix


def test_format_matrix_layout():
    text = format_matrix(
        np.array([[1.0, 2.5]]), corner="Obsv #", row_labels=["0"], col_labels=["x", "y"]
    )
    lines = text.split("\n")
    assert lines[0] == "Obsv # " + " " * 11 + "x " + " " * 11 + "y "
    assert lines[1] == "0      " + "   1.0000000 " + "   2.5000000 "
    assert text.endswith("\n")


def test_format_matrix_without_labels():
    text = format_matrix(np.array([[0.5]]))
    assert text == "\n  0.50000000 \n"


def test_render_data():
    tbl = StatsTable.from_rows([[1, 2], [3, 4], [5, 6]])
    tbl.set_names(["height", "weight"])
    lines = tbl.render_data().splitlines()
    assert lines[0].startswith("Obsv # ")
    assert lines[0].split() == ["Obsv", "#", "height", "weight"]
    assert len(lines) == 4
    assert lines[3].split() == ["2", "5.0000000", "6.0000000"]


def test_render_data_before_creation():
    with pytest.raises(ConfigurationError, match="before one has been created"):
        StatsTable().render_data()


def test_render_correlation_uses_names():
    tbl = StatsTable.from_rows([[1, 2], [2, 4], [3, 7]])
    tbl.set_names(["a", "b"])
    lines = tbl.render_correlation().splitlines()
    assert lines[0].split() == ["a", "b"]
    assert lines[1].split()[:2] == ["a", "1.0000000"]
    assert len(lines) == 3


def test_custom_number_format():
    tbl = StatsTable.from_rows([[1.0]], TableSettings(number_format="8.3f", label_width=8))
    assert tbl.render_data().splitlines()[1] == "0         1.000 "
