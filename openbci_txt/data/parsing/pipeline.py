"""
Ingestion Pipeline
==================

Chains the parsing stages for one file's lines:

    lines -> HeaderDetector -> NumericParser -> DataCleaner
          -> ChannelExtractor -> LabelGenerator -> EEGRecording

The pipeline holds only its (stateless) stages, so one instance can be
reused for any number of files, including from several threads at once.
File I/O is the loader's job; the pipeline only sees lines.

Example:
    ```python
    from openbci_txt.data.parsing import IngestionPipeline

    pipeline = IngestionPipeline()
    recording = pipeline.run(lines, label_prefix='File1', source_file='a.txt')
    print(recording.device, recording.channel_labels)
    ```
"""

from typing import Optional, Sequence
import logging

from openbci_txt.core.types.eeg_data import EEGRecording
from openbci_txt.data.parsing.line_classifier import LineClassifier
from openbci_txt.data.parsing.header_detector import HeaderDetector
from openbci_txt.data.parsing.numeric_parser import NumericParser
from openbci_txt.data.parsing.data_cleaner import DataCleaner
from openbci_txt.data.parsing.channel_extractor import ChannelExtractor
from openbci_txt.data.parsing.label_generator import LabelGenerator


logger = logging.getLogger(__name__)


class IngestionPipeline:
    """
    Sequential, stateless text-export ingestion.

    Attributes:
        header_detector (HeaderDetector): Finds data start and header
        parser (NumericParser): Parses the numeric block
        cleaner (DataCleaner): Drops empty columns/rows
        extractor (ChannelExtractor): Device kind and EEG columns
        labeler (LabelGenerator): Channel labels
    """

    def __init__(self,
                 header_detector: Optional[HeaderDetector] = None,
                 parser: Optional[NumericParser] = None,
                 cleaner: Optional[DataCleaner] = None,
                 extractor: Optional[ChannelExtractor] = None,
                 labeler: Optional[LabelGenerator] = None):
        self.header_detector = header_detector or HeaderDetector(LineClassifier())
        self.parser = parser or NumericParser()
        self.cleaner = cleaner or DataCleaner()
        self.extractor = extractor or ChannelExtractor()
        self.labeler = labeler or LabelGenerator()

    def run(self,
            lines: Sequence[str],
            label_prefix: str = 'File',
            source_file: str = '') -> EEGRecording:
        """
        Run every stage on one file's lines.

        Args:
            lines: All lines of the file
            label_prefix: Prefix for synthesized channel labels
            source_file: Path recorded on the result

        Returns:
            EEGRecording: Parsed recording

        Raises:
            EmptyFileError: If ``lines`` is empty
            NoDataFoundError: If no line is a data line
            MalformedDataError: If the data block yields no column
        """
        parse_result = self.header_detector.detect(lines)

        attempt = self.parser.parse_with_report(lines, parse_result.data_start_line)
        raw = attempt.matrix

        cleaned = self.cleaner.clean(raw)

        channels, device = self.extractor.extract(cleaned)

        labels = self.labeler.generate(
            parse_result.header_tokens, channels.n_channels, prefix=label_prefix
        )

        return EEGRecording(
            data=cleaned,
            channels=channels,
            channel_labels=labels,
            header_tokens=parse_result.header_tokens,
            data_start_line=parse_result.data_start_line,
            source_file=source_file,
            metadata={
                'raw_shape': raw.shape,
                'parse_strategy': attempt.strategy,
                'padded_rows': attempt.padded_rows,
                'widened_rows': attempt.widened_rows,
                'n_lines': len(lines),
            },
        )
