"""
Header Detection
================

Finds where the numeric block of a text export starts and captures the
header line directly above it.

Only the line immediately preceding the first data line is treated as the
header. Any earlier metadata (comments, board banners, blank lines) is
skipped, so a column-name row separated from the data by a blank line is
not picked up: the blank line becomes the "header" and yields no tokens.
"""

from typing import Optional, Sequence, Tuple
import logging

from openbci_txt.core.exceptions import EmptyFileError, NoDataFoundError
from openbci_txt.core.types.eeg_data import ParseResult
from openbci_txt.data.parsing.line_classifier import LineClassifier, split_fields


logger = logging.getLogger(__name__)


class HeaderDetector:
    """
    Locates the first data line and the adjacent header.

    Attributes:
        classifier (LineClassifier): Per-line metadata/data classifier

    Example:
        >>> detector = HeaderDetector()
        >>> result = detector.detect([
        ...     '%OpenBCI Raw EEG Data',
        ...     'Index, Ch1, Ch2',
        ...     '0, 1.5, 2.5',
        ... ])
        >>> result.data_start_line
        3
        >>> result.header_tokens
        ('Index', 'Ch1', 'Ch2')
    """

    def __init__(self, classifier: Optional[LineClassifier] = None):
        self.classifier = classifier or LineClassifier()

    def detect(self, lines: Sequence[str]) -> ParseResult:
        """
        Scan lines for the start of the numeric block.

        Args:
            lines: All lines of the file, in order

        Returns:
            ParseResult: Header tokens and 1-based data start line

        Raises:
            EmptyFileError: If ``lines`` is empty
            NoDataFoundError: If every line is metadata
        """
        if not lines:
            raise EmptyFileError()

        data_start_line = self.find_data_start(lines)
        if data_start_line is None:
            raise NoDataFoundError(n_lines=len(lines))

        if data_start_line > 1:
            header_tokens = self.tokenize_header(lines[data_start_line - 2])
            logger.debug(
                f"Detected {data_start_line - 1} metadata lines, "
                f"header: {', '.join(header_tokens) or '(empty)'}"
            )
        else:
            header_tokens = ()
            logger.debug("No header detected")

        return ParseResult(
            header_tokens=header_tokens,
            data_start_line=data_start_line,
        )

    def find_data_start(self, lines: Sequence[str]) -> Optional[int]:
        """1-based index of the first data line, or None if there is none."""
        for index, line in enumerate(lines, start=1):
            if self.classifier.is_data(line):
                return index
        return None

    @staticmethod
    def tokenize_header(line: str) -> Tuple[str, ...]:
        """Split a header line on comma/tab, trim tokens, drop empty ones."""
        tokens = (token.strip() for token in split_fields(line))
        return tuple(token for token in tokens if token)
