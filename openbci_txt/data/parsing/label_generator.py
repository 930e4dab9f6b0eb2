"""
Channel Labels
==============

Assigns a readable label to each extracted EEG channel.

Header tokens are used when there are enough of them to cover the sample
index column plus every channel; otherwise labels are synthesized as
``<prefix>_Ch<i>``. Header-derived labels are used verbatim (no
deduplication or sanitizing).
"""

from typing import List, Optional, Sequence


class LabelGenerator:
    """
    Produces channel labels from header tokens or a prefix.

    Example:
        >>> LabelGenerator().generate(['Index', 'Ch1', 'Ch2', 'Ch3'], 3)
        ['Ch1', 'Ch2', 'Ch3']
        >>> LabelGenerator().generate([], 2, prefix='File1')
        ['File1_Ch1', 'File1_Ch2']
    """

    def __init__(self, default_prefix: str = 'File'):
        self.default_prefix = default_prefix

    def generate(self,
                 header_tokens: Sequence[str],
                 n_channels: int,
                 prefix: Optional[str] = None) -> List[str]:
        """
        Label ``n_channels`` channels.

        Args:
            header_tokens: Tokens of the header line (first one is the
                sample index column)
            n_channels: Number of extracted EEG channels
            prefix: Prefix for synthesized labels

        Returns:
            List[str]: Exactly ``n_channels`` labels
        """
        if n_channels < 0:
            raise ValueError(f"n_channels must be >= 0, got {n_channels}")

        if header_tokens and len(header_tokens) >= n_channels + 1:
            return list(header_tokens[1:n_channels + 1])

        prefix = self.default_prefix if prefix is None else prefix
        return [f"{prefix}_Ch{i}" for i in range(1, n_channels + 1)]
