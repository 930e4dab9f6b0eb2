"""
Data Cleaning
=============

Removes degenerate columns and rows from a parsed matrix.

Columns go first. A column that is missing everywhere (e.g. the empty field
after a trailing delimiter) would otherwise keep every row "incomplete",
and a row whose only values sat in such a column must go as well.

The result may be empty (0 rows or 0 columns); that is valid output.
"""

import logging

import numpy as np


logger = logging.getLogger(__name__)


class DataCleaner:
    """
    Drops all-NaN columns, then all-NaN rows.

    Cleaning is idempotent: ``clean(clean(m))`` equals ``clean(m)``.
    The input matrix is never modified; a new array is returned.
    """

    def clean(self, matrix: np.ndarray) -> np.ndarray:
        """
        Remove fully-missing columns, then fully-missing rows.

        Args:
            matrix: Parsed matrix, shape (n_rows, n_columns)

        Returns:
            np.ndarray: Cleaned copy with no all-NaN row or column

        Raises:
            ValueError: If ``matrix`` is not 2-D
        """
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.ndim != 2:
            raise ValueError(
                f"matrix must be 2D (rows, columns), got {matrix.ndim}D"
            )

        missing = np.isnan(matrix)

        # An empty axis makes np.all() True, so a 0-row matrix loses all
        # columns here; both shapes are "empty" downstream.
        valid_cols = ~missing.all(axis=0)
        cleaned = matrix[:, valid_cols]

        valid_rows = ~np.isnan(cleaned).all(axis=1)
        cleaned = cleaned[valid_rows, :]

        dropped_cols = int((~valid_cols).sum())
        dropped_rows = int((~valid_rows).sum())
        if dropped_cols or dropped_rows:
            logger.debug(
                f"Cleaned matrix: dropped {dropped_cols} empty columns and "
                f"{dropped_rows} empty rows -> {cleaned.shape}"
            )

        if cleaned.size == 0:
            logger.warning(f"Cleaning left an empty matrix {cleaned.shape}")

        return cleaned
