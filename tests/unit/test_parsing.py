"""
Unit Tests for Parsing Stages
=============================

This module contains unit tests for the text ingestion pipeline.

Test Coverage:
- LineClassifier metadata/data decisions
- HeaderDetector data start and header tokens
- NumericParser strict and tolerant strategies
- DataCleaner column/row removal
- ChannelExtractor device rules and column slices
- LabelGenerator header and synthesized labels
- IngestionPipeline end to end
"""

import logging

import pytest
import numpy as np

from openbci_txt.core.exceptions import (
    EmptyFileError,
    MalformedDataError,
    NoDataFoundError,
)
from openbci_txt.core.types.eeg_data import DeviceKind, LineKind
from openbci_txt.data.parsing import (
    ChannelExtractor,
    DataCleaner,
    DeviceRule,
    HeaderDetector,
    IngestionPipeline,
    LabelGenerator,
    LineClassifier,
    NumericParser,
    parse_token,
    split_fields,
)


def make_lines(n_rows, n_cols, comments=(), header=None, delimiter=','):
    """Build the lines of a synthetic text export."""
    lines = list(comments)
    if header is not None:
        lines.append(header)
    for i in range(n_rows):
        values = [str(i)] + [f"{i * 0.5 + c:.3f}" for c in range(1, n_cols)]
        lines.append(delimiter.join(values))
    return lines


class TestLineClassifier:
    """Test cases for LineClassifier."""

    def setup_method(self):
        self.classifier = LineClassifier()

    @pytest.mark.parametrize("line", [
        '%OpenBCI Raw EEG Data',
        '%Number of channels = 8',
        '# comment',
        'Sample Index, EXG Channel 0',
        'index,ch1',
        '',
        '   ',
        '\t%indented comment',
    ])
    def test_metadata_lines(self, line):
        """Test that text, comments and blank lines are metadata."""
        assert self.classifier.classify(line) is LineKind.METADATA

    @pytest.mark.parametrize("line", [
        '0, -2381.54, 12.07',
        '-0.5,1.25',
        '+3\t4',
        '.5,1',
        '   12,13',
        '1e3,2e-1',
    ])
    def test_data_lines(self, line):
        """Test that lines starting with a digit, sign or point are data."""
        assert self.classifier.classify(line) is LineKind.DATA
        assert self.classifier.is_data(line)

    def test_trailing_newline_ignored(self):
        """Test that a trailing newline does not change the decision."""
        assert self.classifier.classify('0,1,2\n') is LineKind.DATA
        assert self.classifier.classify('%meta\r\n') is LineKind.METADATA

    def test_classify_all_is_deterministic(self):
        """Test classify_all returns one decision per line, repeatably."""
        lines = ['%a', 'Index,Ch1', '0,1', '1,2']
        first = self.classifier.classify_all(lines)
        second = self.classifier.classify_all(lines)

        assert first == second
        assert first == [
            LineKind.METADATA, LineKind.METADATA, LineKind.DATA, LineKind.DATA
        ]

    def test_split_fields_keeps_empty_tokens(self):
        """Test that splitting keeps empty fields and mixes delimiters."""
        assert split_fields('1,,3') == ['1', '', '3']
        assert split_fields('1\t2,3\n') == ['1', '2', '3']
        assert split_fields('1,2,') == ['1', '2', '']


class TestHeaderDetector:
    """Test cases for HeaderDetector."""

    def setup_method(self):
        self.detector = HeaderDetector()

    def test_header_directly_above_data(self):
        """Test data start index and header tokens."""
        result = self.detector.detect([
            '%OpenBCI Raw EEG Data',
            'Index, Ch1, Ch2',
            '0, 1.5, 2.5',
        ])

        assert result.data_start_line == 3
        assert result.header_tokens == ('Index', 'Ch1', 'Ch2')
        assert result.has_header
        assert result.n_metadata_lines == 2

    def test_data_on_first_line(self):
        """Test that data on line 1 means no header."""
        result = self.detector.detect(['0,1,2', '1,2,3'])

        assert result.data_start_line == 1
        assert result.header_tokens == ()
        assert not result.has_header

    def test_only_adjacent_line_is_header(self):
        """Test that a blank line between header and data hides the header."""
        result = self.detector.detect(['Index,Ch1', '', '0,1'])

        assert result.data_start_line == 3
        assert result.header_tokens == ()

    def test_comment_line_as_header(self):
        """Test that a comment directly above the data is tokenized as-is."""
        result = self.detector.detect(['Index,Ch1', '%Sample Rate = 250 Hz', '0,1'])

        assert result.header_tokens == ('%Sample Rate = 250 Hz',)

    def test_tokenize_header_trims_and_drops_empty(self):
        """Test header tokens are trimmed and empty ones removed."""
        tokens = HeaderDetector.tokenize_header(' Index ,, Ch1\t Ch2 ,')

        assert tokens == ('Index', 'Ch1', 'Ch2')

    def test_empty_input(self):
        """Test that no lines raises EmptyFileError."""
        with pytest.raises(EmptyFileError):
            self.detector.detect([])

    def test_metadata_only(self):
        """Test that a file without data lines raises NoDataFoundError."""
        with pytest.raises(NoDataFoundError) as exc_info:
            self.detector.detect(['%OpenBCI Raw EEG Data', 'Index,Ch1', ''])

        assert exc_info.value.n_lines == 3

    def test_find_data_start_none(self):
        """Test find_data_start returns None when there is no data."""
        assert self.detector.find_data_start(['%a', 'b']) is None


class TestNumericParser:
    """Test cases for NumericParser."""

    def setup_method(self):
        self.parser = NumericParser()

    def test_rectangular_block(self):
        """Test that N rows x C columns parse to shape (N, C)."""
        lines = make_lines(10, 6, header='Index,A,B,C,D,E')
        attempt = self.parser.parse_with_report(lines, data_start_line=2)

        assert attempt.success
        assert attempt.strategy == 'strict'
        assert attempt.matrix.shape == (10, 6)
        assert attempt.matrix.dtype == np.float64
        np.testing.assert_allclose(attempt.matrix[:, 0], np.arange(10))

    def test_tab_delimited(self):
        """Test tab separated rows."""
        matrix = self.parser.parse(['0\t1.5\t2', '1\t2.5\t3'], data_start_line=1)

        np.testing.assert_array_equal(matrix, [[0, 1.5, 2], [1, 2.5, 3]])

    def test_bad_tokens_become_nan(self):
        """Test that non-numeric and empty fields are NaN, not zero."""
        matrix = self.parser.parse(['1,abc,3', '4,,6'], data_start_line=1)

        assert np.isnan(matrix[0, 1])
        assert np.isnan(matrix[1, 1])
        assert matrix[0, 0] == 1.0
        assert matrix[1, 2] == 6.0

    def test_trailing_delimiter_adds_nan_column(self):
        """Test that a trailing comma yields a NaN column."""
        matrix = self.parser.parse(['0,1,', '1,2,'], data_start_line=1)

        assert matrix.shape == (2, 3)
        assert np.isnan(matrix[:, 2]).all()

    def test_ragged_rows_use_tolerant_strategy(self):
        """Test that the matrix takes the widest row and pads the rest."""
        attempt = self.parser.parse_with_report(
            ['1,2,3', '4,5', '6,7,8,9'], data_start_line=1
        )

        assert attempt.strategy == 'tolerant'
        assert attempt.padded_rows == 2
        assert attempt.widened_rows == 1
        assert attempt.matrix.shape == (3, 4)
        np.testing.assert_array_equal(attempt.matrix[2], [6, 7, 8, 9])
        assert np.isnan(attempt.matrix[0, 3])
        assert np.isnan(attempt.matrix[1, 2:]).all()

    def test_short_first_row_keeps_later_columns(self):
        """Test a short first sample does not narrow a Cyton block."""
        lines = ['0,' + ','.join(['1.0'] * 8)]
        lines += [f'{i},' + ','.join(['2.0'] * 11) for i in range(1, 20)]

        attempt = self.parser.parse_with_report(lines, data_start_line=1)

        assert attempt.matrix.shape == (20, 12)
        assert attempt.padded_rows == 1
        assert attempt.widened_rows == 19
        assert np.isnan(attempt.matrix[0, 9:]).all()
        assert attempt.matrix[5, 11] == 2.0

    def test_ragged_rows_logged(self, caplog):
        """Test that ragged rows are reported at WARNING."""
        with caplog.at_level(logging.WARNING, logger='openbci_txt'):
            self.parser.parse(['1,2,3', '4,5'], data_start_line=1)

        assert any('Ragged data block' in r.message for r in caplog.records)

    def test_blank_line_in_block(self):
        """Test that a blank line inside the block becomes an all-NaN row."""
        matrix = self.parser.parse(['0,1', '', '2,3'], data_start_line=1)

        assert matrix.shape == (3, 2)
        assert np.isnan(matrix[1]).all()

    def test_start_after_end(self):
        """Test that an empty block raises MalformedDataError."""
        with pytest.raises(MalformedDataError):
            self.parser.parse(['0,1'], data_start_line=5)

    def test_invalid_start(self):
        """Test that a start line below 1 is rejected."""
        with pytest.raises(ValueError):
            self.parser.parse(['0,1'], data_start_line=0)

    def test_parse_token(self):
        """Test single token parsing."""
        assert parse_token(' 1.5 ') == 1.5
        assert parse_token('-2e3') == -2000.0
        assert np.isnan(parse_token(''))
        assert np.isnan(parse_token('12:00:01'))

    def test_parse_token_rejects_digit_separators(self):
        """Test underscore-grouped digits are not read as numbers."""
        assert np.isnan(parse_token('1_000'))
        assert np.isnan(parse_token('0_5'))


class TestDataCleaner:
    """Test cases for DataCleaner."""

    def setup_method(self):
        self.cleaner = DataCleaner()

    def test_drops_nan_columns_then_rows(self):
        """Test removal of all-NaN columns and rows."""
        nan = np.nan
        matrix = np.array([
            [1.0, nan, 3.0],
            [nan, nan, nan],
            [4.0, nan, 6.0],
        ])

        cleaned = self.cleaner.clean(matrix)

        np.testing.assert_array_equal(cleaned, [[1.0, 3.0], [4.0, 6.0]])

    def test_partial_nan_kept(self):
        """Test that rows and columns with some values survive."""
        nan = np.nan
        matrix = np.array([[1.0, nan], [nan, 2.0]])

        cleaned = self.cleaner.clean(matrix)

        assert cleaned.shape == (2, 2)

    def test_idempotent(self):
        """Test clean(clean(m)) == clean(m)."""
        nan = np.nan
        matrix = np.array([
            [nan, 1.0, nan],
            [nan, nan, nan],
            [nan, 2.0, 5.0],
        ])

        once = self.cleaner.clean(matrix)
        twice = self.cleaner.clean(once)

        np.testing.assert_array_equal(once, twice)

    def test_no_all_nan_left(self):
        """Test that no all-NaN row or column remains."""
        rng = np.random.default_rng(0)
        matrix = rng.normal(size=(20, 6))
        matrix[rng.random(matrix.shape) < 0.6] = np.nan
        matrix[:, 3] = np.nan
        matrix[7, :] = np.nan

        cleaned = self.cleaner.clean(matrix)

        assert not np.isnan(cleaned).all(axis=0).any()
        assert not np.isnan(cleaned).all(axis=1).any()

    def test_all_nan_gives_empty(self):
        """Test that an all-NaN matrix cleans to an empty matrix."""
        cleaned = self.cleaner.clean(np.full((3, 4), np.nan))

        assert cleaned.size == 0

    def test_input_not_modified(self):
        """Test that the input matrix is left untouched."""
        matrix = np.array([[1.0, np.nan], [2.0, np.nan]])
        original = matrix.copy()

        self.cleaner.clean(matrix)

        np.testing.assert_array_equal(matrix, original)

    def test_rejects_non_2d(self):
        """Test that 1D input is rejected."""
        with pytest.raises(ValueError):
            self.cleaner.clean(np.zeros(5))


class TestChannelExtractor:
    """Test cases for ChannelExtractor."""

    def setup_method(self):
        self.extractor = ChannelExtractor()

    @pytest.mark.parametrize("n_columns, device, columns", [
        (13, DeviceKind.CYTON, (1, 2, 3, 4, 5, 6, 7, 8)),
        (11, DeviceKind.CYTON, (1, 2, 3, 4, 5, 6, 7, 8)),
        (10, DeviceKind.GANGLION, (1, 2, 3, 4)),
        (5, DeviceKind.GANGLION, (1, 2, 3, 4)),
        (4, DeviceKind.GENERIC, (1, 2, 3)),
        (2, DeviceKind.GENERIC, (1,)),
        (1, DeviceKind.GENERIC, ()),
        (0, DeviceKind.GENERIC, ()),
    ])
    def test_device_boundaries(self, n_columns, device, columns):
        """Test device rules at the column-count boundaries."""
        matrix = np.arange(3 * n_columns, dtype=float).reshape(3, n_columns)

        channels, detected = self.extractor.extract(matrix)

        assert detected is device
        assert channels.device is device
        assert channels.columns == columns
        assert channels.shape == (3, len(columns))
        if columns:
            np.testing.assert_array_equal(channels.data, matrix[:, list(columns)])

    def test_expected_channels(self):
        """Test board channel counts match the extracted slice."""
        channels, device = self.extractor.extract(np.zeros((2, 11)))
        assert channels.n_channels == device.expected_channels == 8

        channels, device = self.extractor.extract(np.zeros((2, 6)))
        assert channels.n_channels == device.expected_channels == 4

    def test_extracted_data_is_copy(self):
        """Test that channel data does not alias the matrix."""
        matrix = np.zeros((4, 6))
        channels, _ = self.extractor.extract(matrix)

        channels.data[0, 0] = 99.0

        assert matrix[0, 1] == 0.0

    def test_custom_rules(self):
        """Test a custom rule table is honored in order."""
        rules = [
            DeviceRule(DeviceKind.CYTON, lambda c: c >= 17, n_channels=16),
            DeviceRule(DeviceKind.GENERIC, lambda c: True),
        ]
        extractor = ChannelExtractor(rules)

        channels, device = extractor.extract(np.zeros((2, 17)))

        assert device is DeviceKind.CYTON
        assert channels.n_channels == 16

    def test_no_matching_rule(self):
        """Test classify raises when no rule matches."""
        extractor = ChannelExtractor([
            DeviceRule(DeviceKind.CYTON, lambda c: c >= 11, n_channels=8)
        ])

        with pytest.raises(ValueError):
            extractor.classify(3)


class TestLabelGenerator:
    """Test cases for LabelGenerator."""

    def setup_method(self):
        self.labeler = LabelGenerator()

    def test_labels_from_header(self):
        """Test header tokens after the index column are used."""
        labels = self.labeler.generate(['Index', 'Ch1', 'Ch2', 'Ch3'], 3)

        assert labels == ['Ch1', 'Ch2', 'Ch3']

    def test_header_longer_than_needed(self):
        """Test extra header tokens are ignored."""
        labels = self.labeler.generate(['Index', 'A', 'B', 'C', 'Aux'], 2)

        assert labels == ['A', 'B']

    def test_synthesized_without_header(self):
        """Test labels are synthesized from the prefix."""
        labels = self.labeler.generate([], 2, prefix='File1')

        assert labels == ['File1_Ch1', 'File1_Ch2']

    def test_synthesized_when_header_too_short(self):
        """Test a short header falls back to synthesized labels."""
        labels = self.labeler.generate(['Index', 'Ch1'], 4, prefix='File2')

        assert labels == ['File2_Ch1', 'File2_Ch2', 'File2_Ch3', 'File2_Ch4']

    def test_default_prefix(self):
        """Test the default prefix is used when none is given."""
        assert LabelGenerator('Rec').generate([], 1) == ['Rec_Ch1']

    def test_zero_channels(self):
        """Test zero channels gives no labels."""
        assert self.labeler.generate(['Index'], 0) == []

    def test_negative_channels(self):
        """Test negative channel count is rejected."""
        with pytest.raises(ValueError):
            self.labeler.generate([], -1)


class TestIngestionPipeline:
    """End-to-end tests for IngestionPipeline."""

    def setup_method(self):
        self.pipeline = IngestionPipeline()

    def test_ganglion_export(self):
        """Test two comments + header + 100 rows x 6 columns."""
        lines = make_lines(
            100, 6,
            comments=['%OpenBCI Raw EEG Data', '%Sample Rate = 200 Hz'],
            header='Index,Ch1,Ch2,Ch3,Ch4,Ch5',
        )

        recording = self.pipeline.run(lines, label_prefix='File1')

        assert recording.data_start_line == 4
        assert recording.metadata['raw_shape'] == (100, 6)
        assert recording.shape == (100, 6)
        assert recording.device is DeviceKind.GANGLION
        assert recording.eeg.shape == (100, 4)
        assert recording.channel_labels == ['Ch1', 'Ch2', 'Ch3', 'Ch4']

    def test_cyton_export_with_timestamp_column(self):
        """Test a GUI-style export whose text timestamp column is dropped."""
        header = ', '.join(
            ['Sample Index']
            + [f'EXG Channel {i}' for i in range(8)]
            + [f'Accel Channel {i}' for i in range(3)]
            + ['Timestamp (Formatted)']
        )
        lines = ['%OpenBCI Raw EXG Data', '%Number of channels = 8', header]
        for i in range(50):
            values = [str(i)] + [f'{-2381.5 + i + c:.2f}' for c in range(11)]
            values.append('2024-01-01 10:00:00.000')
            lines.append(', '.join(values))

        recording = self.pipeline.run(lines)

        assert recording.metadata['raw_shape'] == (50, 13)
        assert recording.shape == (50, 12)
        assert recording.device is DeviceKind.CYTON
        assert recording.channel_labels == [f'EXG Channel {i}' for i in range(8)]

    def test_no_header_synthesizes_labels(self):
        """Test labels use the prefix when the data starts on line 1."""
        recording = self.pipeline.run(make_lines(5, 3), label_prefix='File2')

        assert recording.device is DeviceKind.GENERIC
        assert recording.channel_labels == ['File2_Ch1', 'File2_Ch2']

    def test_ragged_metadata_reported(self):
        """Test the parse strategy and ragged counts are recorded."""
        recording = self.pipeline.run(['0,1,2', '1,2', '2,3,4'])

        assert recording.metadata['parse_strategy'] == 'tolerant'
        assert recording.metadata['padded_rows'] == 1

    def test_index_only_file(self):
        """Test a single-column file gives an empty channel set."""
        recording = self.pipeline.run(['0', '1', '2'])

        assert recording.device is DeviceKind.GENERIC
        assert recording.n_channels == 0
        assert recording.channel_labels == []

    def test_metadata_only(self):
        """Test NoDataFoundError for a file without samples."""
        with pytest.raises(NoDataFoundError):
            self.pipeline.run(['%OpenBCI Raw EEG Data', 'Index,Ch1'])

    def test_recordings_do_not_share_arrays(self):
        """Test that two runs produce independent arrays."""
        lines = make_lines(4, 6)
        first = self.pipeline.run(lines)
        second = self.pipeline.run(lines)

        first.data[0, 0] = 123.0
        first.eeg[0, 0] = 456.0

        assert second.data[0, 0] == 0.0
        assert second.eeg[0, 0] != 456.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
