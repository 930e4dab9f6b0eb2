"""
Channel Extraction
==================

Classifies the recording device from the cleaned matrix's column count and
slices out the EEG channels.

Column layout of an OpenBCI text export:
    column 1      sample index
    columns 2..   EEG channels
    trailing      auxiliary / accelerometer / timestamps

Device Rules (first match wins):
-------------------------------
    columns >= 11  -> Cyton     EEG = columns 2..9  (8 channels)
    columns >= 5   -> Ganglion  EEG = columns 2..5  (4 channels)
    otherwise      -> Generic   EEG = columns 2..c  (empty if c <= 1)

Nothing beyond the column count is checked: any 11-column file is treated
as Cyton. Callers needing certainty should cross-check the header tokens.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import logging

import numpy as np

from openbci_txt.core.types.eeg_data import DeviceKind, EEGChannelSet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceRule:
    """
    One entry of the device classification table.

    Attributes:
        device: Device kind assigned when the rule matches
        matches: Predicate on the total column count
        first_column: 0-based index of the first EEG column
        n_channels: Number of EEG columns, None for "all remaining"
    """
    device: DeviceKind
    matches: Callable[[int], bool]
    first_column: int = 1
    n_channels: Optional[int] = None

    def columns(self, n_columns: int) -> Tuple[int, ...]:
        """0-based EEG column indices for a matrix with ``n_columns``."""
        stop = n_columns if self.n_channels is None else self.first_column + self.n_channels
        return tuple(range(self.first_column, min(stop, n_columns)))


DEFAULT_RULES: Tuple[DeviceRule, ...] = (
    DeviceRule(DeviceKind.CYTON, lambda c: c >= 11, n_channels=8),
    DeviceRule(DeviceKind.GANGLION, lambda c: c >= 5, n_channels=4),
    DeviceRule(DeviceKind.GENERIC, lambda c: True),
)


class ChannelExtractor:
    """
    Maps column count to a device kind and EEG column slice.

    Attributes:
        rules: Ordered device rules; the last rule should always match

    Example:
        >>> extractor = ChannelExtractor()
        >>> channels, device = extractor.extract(np.zeros((10, 6)))
        >>> device, channels.shape
        (<DeviceKind.GANGLION: 'ganglion'>, (10, 4))
    """

    def __init__(self, rules: Optional[List[DeviceRule]] = None):
        self.rules: Tuple[DeviceRule, ...] = tuple(rules) if rules else DEFAULT_RULES

    def classify(self, n_columns: int) -> DeviceRule:
        """
        Return the first rule matching ``n_columns``.

        Raises:
            ValueError: If no rule matches
        """
        for rule in self.rules:
            if rule.matches(n_columns):
                return rule
        raise ValueError(f"No device rule matches {n_columns} columns")

    def extract(self, matrix: np.ndarray) -> Tuple[EEGChannelSet, DeviceKind]:
        """
        Classify the device and slice out its EEG columns.

        Args:
            matrix: Cleaned matrix, shape (n_samples, n_columns)

        Returns:
            Tuple of (EEGChannelSet, DeviceKind). The channel data is a copy,
            never a view of ``matrix``.
        """
        if matrix.ndim != 2:
            raise ValueError(
                f"matrix must be 2D (samples, columns), got {matrix.ndim}D"
            )

        n_columns = matrix.shape[1]
        rule = self.classify(n_columns)
        columns = rule.columns(n_columns)

        data = matrix[:, list(columns)].copy() if columns else np.empty(
            (matrix.shape[0], 0), dtype=np.float64
        )

        logger.debug(
            f"{n_columns} columns -> {rule.device.value}, "
            f"EEG columns {[c + 1 for c in columns]}"
        )

        return EEGChannelSet(data=data, device=rule.device, columns=columns), rule.device
