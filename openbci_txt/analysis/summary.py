"""
Recording Summary
=================

Time axis and basic statistics for a parsed recording.

The sampling frequency never comes from the file: it is passed in by the
caller or looked up in the configuration by device kind
(``acquisition.sampling_rate.<device>``).

Statistics:
----------
| Field            | Description                         | Formula           |
|------------------|-------------------------------------|-------------------|
| duration_seconds | Time stamp of the last sample       | (n - 1) / fs      |
| n_samples        | Number of samples after cleaning    | n                 |
| sampling_rate    | Sampling frequency (Hz)             | fs                |
| min_value        | Smallest EEG value, NaN ignored     | nanmin(eeg)       |
| max_value        | Largest EEG value, NaN ignored      | nanmax(eeg)       |

Usage Example:
    ```python
    from openbci_txt.analysis import summarize, format_summary

    summary = summarize(recording)  # rate from config by device
    for line in format_summary(summary, title='File 1 Statistics'):
        print(line)
    ```
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional
import logging
import math

import numpy as np

from openbci_txt.core.types.eeg_data import EEGRecording


logger = logging.getLogger(__name__)


def time_axis(n_samples: int, sampling_rate: float) -> np.ndarray:
    """
    Time stamps in seconds: ``arange(n_samples) / sampling_rate``.

    Raises:
        ValueError: If n_samples is negative or sampling_rate is not positive
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be >= 0, got {n_samples}")
    if not sampling_rate > 0:
        raise ValueError(f"sampling_rate must be > 0, got {sampling_rate}")
    return np.arange(n_samples, dtype=np.float64) / float(sampling_rate)


@dataclass(frozen=True)
class RecordingSummary:
    """
    Basic statistics of one recording.

    ``min_value``/``max_value`` are NaN when there is no finite EEG value.
    ``duration_seconds`` is 0.0 for an empty recording.
    """
    duration_seconds: float
    n_samples: int
    sampling_rate: float
    min_value: float
    max_value: float
    units: str = 'uV'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(recording: EEGRecording,
              sampling_rate: Optional[float] = None,
              units: Optional[str] = None) -> RecordingSummary:
    """
    Compute duration, sample count and value range of a recording.

    Args:
        recording: Parsed recording
        sampling_rate: Sampling frequency in Hz (default: configured rate
            for the recording's device kind)
        units: Value units for display (default: ``acquisition.units``)

    Returns:
        RecordingSummary
    """
    if sampling_rate is None or units is None:
        from openbci_txt.core.config import get_config
        config = get_config()
        if sampling_rate is None:
            sampling_rate = config.get_sampling_rate(recording.device.value)
            logger.debug(
                f"Using configured sampling rate {sampling_rate} Hz "
                f"for {recording.device.value}"
            )
        if units is None:
            units = config.get('acquisition.units', 'uV')

    t = time_axis(recording.n_samples, sampling_rate)
    duration = float(t[-1]) if t.size else 0.0

    eeg = recording.eeg
    finite = eeg[np.isfinite(eeg)]
    if finite.size:
        min_value = float(finite.min())
        max_value = float(finite.max())
    else:
        min_value = max_value = math.nan

    return RecordingSummary(
        duration_seconds=duration,
        n_samples=recording.n_samples,
        sampling_rate=float(sampling_rate),
        min_value=min_value,
        max_value=max_value,
        units=units,
    )


def format_summary(summary: RecordingSummary, title: Optional[str] = None) -> List[str]:
    """
    Render a summary as text lines.

    Example:
        >>> format_summary(RecordingSummary(3.996, 1000, 250.0, -12.5, 40.0))
        ['Duration: 4.00 seconds', 'Samples: 1000',
         'Sampling Frequency: 250.00 Hz', 'Voltage Range: -12.50 to 40.00 uV']
    """
    lines = []
    if title:
        lines.append(f"=== {title} ===")
    lines.extend([
        f"Duration: {summary.duration_seconds:.2f} seconds",
        f"Samples: {summary.n_samples}",
        f"Sampling Frequency: {summary.sampling_rate:.2f} Hz",
        f"Voltage Range: {summary.min_value:.2f} to {summary.max_value:.2f} {summary.units}",
    ])
    return lines
