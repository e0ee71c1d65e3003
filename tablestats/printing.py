"""Render matrices as labeled fixed-width text tables.

Pure formatting: nothing here reads or changes table state.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .config import DEFAULT_SETTINGS, TableSettings


def format_matrix(
    matrix: np.ndarray,
    corner: Optional[str] = None,
    row_labels: Optional[Sequence[str]] = None,
    col_labels: Optional[Sequence[str]] = None,
    settings: TableSettings = DEFAULT_SETTINGS,
) -> str:
    """Format a 2-D array as text with optional row and column labels.

    Args:
        matrix (numpy.ndarray): Values to print, one text row per matrix row.
        corner (str, optional): Heading above the row labels.
        row_labels (Sequence[str], optional): Left-justified label per row,
            padded to the longest label (or the corner).
        col_labels (Sequence[str], optional): Right-justified heading per
            column, ``settings.label_width`` wide.
        settings (TableSettings): Supplies the number format and label width.

    Returns:
        str: Header line followed by one line per row, each cell followed by
        a single space and each line terminated by a newline.
    """
    values = np.atleast_2d(np.asarray(matrix, dtype=float))

    max_len = len(corner) if corner is not None else 0
    if row_labels is not None:
        max_len = max([max_len] + [len(str(label)) for label in row_labels])

    def row_label(text: str) -> str:
        return f"{text:<{max_len}} " if max_len else f"{text} "

    parts = []
    if corner is not None:
        parts.append(row_label(corner))
    elif col_labels is not None:
        parts.append(row_label(" "))
    if col_labels is not None:
        for label in col_labels:
            parts.append(f"{str(label):>{settings.label_width}} ")
    parts.append("\n")

    for i, row in enumerate(values):
        if row_labels is not None:
            parts.append(row_label(str(row_labels[i])))
        for value in row:
            parts.append(f"{value:{settings.number_format}} ")
        parts.append("\n")
    return "".join(parts)
