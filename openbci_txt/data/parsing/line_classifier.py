"""
Line Classification
===================

Decides, per raw line, whether it belongs to the metadata preamble or the
numeric data block.

Acquisition-board metadata and header rows begin with alphabetic text or a
comment marker; numeric samples begin with a digit, sign or decimal point:

    %OpenBCI Raw EEG Data           -> METADATA
    %Number of channels = 8         -> METADATA
    Sample Index, EXG Channel 0,... -> METADATA
    0, -2381.54, 12.07, ...         -> DATA
    (blank line)                    -> METADATA

This module also owns field splitting, shared by the header detector and
the numeric parser.
"""

from typing import List, Sequence
import re

from openbci_txt.core.types.eeg_data import LineKind


# First non-whitespace character of a metadata line
METADATA_PATTERN = re.compile(r'^[A-Za-z%#]')

# Field delimiters; a file may use either, or both
DELIMITER_PATTERN = re.compile(r'[,\t]')


def split_fields(line: str) -> List[str]:
    """
    Split a line on comma or tab.

    Tokens are returned untrimmed and empty tokens are kept, so
    ``'1,,3'`` yields three fields.
    """
    return DELIMITER_PATTERN.split(line.rstrip('\r\n'))


class LineClassifier:
    """
    Classifies raw lines as metadata or data.

    Classification is a pure function of the line content; the classifier
    holds no state and may be shared between threads.

    Example:
        >>> classifier = LineClassifier()
        >>> classifier.classify('%OpenBCI Raw EEG Data')
        <LineKind.METADATA: 'metadata'>
        >>> classifier.classify('-0.5, 1.25')
        <LineKind.DATA: 'data'>
    """

    def classify(self, line: str) -> LineKind:
        """
        Classify a single line.

        Args:
            line: Raw text line (with or without trailing newline)

        Returns:
            LineKind: METADATA if the trimmed line is empty or starts with a
            letter, '%' or '#'; DATA otherwise
        """
        trimmed = line.strip()
        if not trimmed or METADATA_PATTERN.match(trimmed):
            return LineKind.METADATA
        return LineKind.DATA

    def is_data(self, line: str) -> bool:
        """Shorthand for ``classify(line) is LineKind.DATA``."""
        return self.classify(line) is LineKind.DATA

    def classify_all(self, lines: Sequence[str]) -> List[LineKind]:
        """Classify every line in order."""
        return [self.classify(line) for line in lines]
