"""
Numeric Block Parser
====================

Converts the data lines of a text export into a rectangular float matrix.

Every data line is split on comma or tab and each token is parsed as an
IEEE double. Tokens that are not numbers (empty fields, stray text) become
NaN, the missing-value marker used by the cleaner; they are never mapped
to zero.

Parsing Strategies:
------------------
1. strict: every row must have exactly as many fields as the first row.
   Well-formed board exports always take this path.
2. tolerant: the matrix is as wide as the widest row. Shorter rows are
   padded with NaN on the right (boards intermittently drop trailing aux
   columns, sometimes on the very first sample); no field is discarded.

Each strategy returns a ``ParseAttempt`` describing success or failure; the
parser tries them in order and only raises ``MalformedDataError`` when the
tolerant strategy cannot produce a single column.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging
import math

import numpy as np

from openbci_txt.core.exceptions import MalformedDataError
from openbci_txt.data.parsing.line_classifier import split_fields


logger = logging.getLogger(__name__)

MISSING = math.nan

STRICT = 'strict'
TOLERANT = 'tolerant'


@dataclass(frozen=True)
class ParseAttempt:
    """
    Outcome of one parsing strategy.

    Attributes:
        strategy: Strategy name ('strict' or 'tolerant')
        matrix: Parsed matrix, None if the strategy failed
        reason: Why the strategy failed (empty on success)
        padded_rows: Rows narrower than the matrix, padded with NaN
        widened_rows: Rows wider than the first data row
    """
    strategy: str
    matrix: Optional[np.ndarray] = None
    reason: str = ''
    padded_rows: int = 0
    widened_rows: int = 0

    @property
    def success(self) -> bool:
        return self.matrix is not None


def parse_token(token: str) -> float:
    """Parse one field as float, NaN if it is not a number."""
    # float() also accepts digit separators such as "1_000"
    if '_' in token:
        return MISSING
    try:
        return float(token)
    except ValueError:
        return MISSING


class NumericParser:
    """
    Parses the numeric block of a text export.

    Column count is taken from the first data line unless a later row is
    wider. The parser is stateless; one instance can parse any number of
    files, concurrently if needed.

    Example:
        >>> parser = NumericParser()
        >>> parser.parse(['Index,A', '0,1.5', '1,2.5'], data_start_line=2)
        array([[0. , 1.5],
               [1. , 2.5]])
    """

    def parse(self, lines: Sequence[str], data_start_line: int) -> np.ndarray:
        """
        Parse ``lines[data_start_line - 1:]`` into a float matrix.

        Args:
            lines: All lines of the file
            data_start_line: 1-based index of the first data line

        Returns:
            np.ndarray: float64 matrix, shape (n_rows, n_columns)

        Raises:
            MalformedDataError: If no column can be produced
        """
        return self.parse_with_report(lines, data_start_line).matrix

    def parse_with_report(self,
                          lines: Sequence[str],
                          data_start_line: int) -> ParseAttempt:
        """
        Parse the numeric block and report which strategy succeeded.

        Args:
            lines: All lines of the file
            data_start_line: 1-based index of the first data line

        Returns:
            ParseAttempt: The successful attempt

        Raises:
            ValueError: If ``data_start_line`` is < 1
            MalformedDataError: If no column can be produced
        """
        if data_start_line < 1:
            raise ValueError(f"data_start_line must be >= 1, got {data_start_line}")

        block = lines[data_start_line - 1:]
        if not block:
            raise MalformedDataError(
                "no lines at or after the data start line",
                line_number=data_start_line,
            )

        rows = [split_fields(line) for line in block]
        width = len(rows[0])

        attempt = self._parse_strict(rows, width)
        if not attempt.success:
            logger.debug(f"Strict parse rejected: {attempt.reason}")
            attempt = self._parse_tolerant(rows, width)

        if not attempt.success:
            raise MalformedDataError(attempt.reason, line_number=data_start_line)

        if attempt.padded_rows or attempt.widened_rows:
            logger.warning(
                f"Ragged data block: {attempt.padded_rows} short rows padded "
                f"to {attempt.matrix.shape[1]} columns, {attempt.widened_rows} "
                f"rows wider than the first data row ({width} columns)"
            )

        logger.debug(
            f"Parsed {attempt.matrix.shape[0]} rows x {attempt.matrix.shape[1]} "
            f"columns ({attempt.strategy})"
        )
        return attempt

    # =========================================================================
    # STRATEGIES
    # =========================================================================

    def _parse_strict(self, rows: List[List[str]], width: int) -> ParseAttempt:
        """All rows must share the first row's field count."""
        if width < 1:
            return ParseAttempt(STRICT, reason="first data line has no fields")

        for offset, row in enumerate(rows):
            if len(row) != width:
                return ParseAttempt(
                    STRICT,
                    reason=(
                        f"row {offset + 1} of the data block has {len(row)} "
                        f"fields, expected {width}"
                    ),
                )

        matrix = np.array(
            [[parse_token(token) for token in row] for row in rows],
            dtype=np.float64,
        ).reshape(len(rows), width)
        return ParseAttempt(STRICT, matrix=matrix)

    def _parse_tolerant(self, rows: List[List[str]], width: int) -> ParseAttempt:
        """Widen to the longest row and pad shorter rows with NaN."""
        n_columns = max(len(row) for row in rows)
        if n_columns < 1:
            return ParseAttempt(
                TOLERANT,
                reason="tokenization produced no columns in the data block",
            )

        matrix = np.full((len(rows), n_columns), MISSING, dtype=np.float64)
        padded = widened = 0

        for i, row in enumerate(rows):
            if len(row) < n_columns:
                padded += 1
            if len(row) > width:
                widened += 1
            for j, token in enumerate(row):
                matrix[i, j] = parse_token(token)

        return ParseAttempt(
            TOLERANT,
            matrix=matrix,
            padded_rows=padded,
            widened_rows=widened,
        )
