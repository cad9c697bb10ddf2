"""
Unit tests for NonMaxExtractor.
"""

import numpy as np
import pytest

from footline.detection.local_max import LocalMaxExtractor, NonMaxExtractor


class TestNonMaxExtractor:
    """Tests for peak finding in vote histograms."""

    @pytest.fixture
    def extractor(self):
        return NonMaxExtractor()

    def test_is_local_max_extractor(self, extractor):
        assert isinstance(extractor, LocalMaxExtractor)

    def test_single_peak(self, extractor):
        histogram = np.zeros((20, 30), dtype=np.float32)
        histogram[5, 12] = 9
        histogram[6, 12] = 4

        assert extractor.find_local_maxima(histogram, 2, 1) == [(12, 5, 9.0)]

    def test_min_count(self, extractor):
        histogram = np.zeros((10, 10), dtype=np.float32)
        histogram[2, 2] = 3
        histogram[7, 7] = 8

        assert extractor.find_local_maxima(histogram, 1, 5) == [(7, 7, 8.0)]

    def test_radius_suppresses_smaller_peaks(self, extractor):
        histogram = np.zeros((20, 20), dtype=np.float32)
        histogram[10, 10] = 10
        histogram[10, 13] = 6

        assert len(extractor.find_local_maxima(histogram, 1, 1)) == 2
        assert extractor.find_local_maxima(histogram, 3, 1) == [(10, 10, 10.0)]

    def test_peaks_at_border(self, extractor):
        histogram = np.zeros((8, 8), dtype=np.float32)
        histogram[0, 0] = 5
        histogram[7, 7] = 6

        assert extractor.find_local_maxima(histogram, 2, 1) == [(0, 0, 5.0), (7, 7, 6.0)]

    def test_plateau(self):
        histogram = np.zeros((9, 9), dtype=np.float32)
        histogram[4, 4] = 7
        histogram[4, 5] = 7

        assert NonMaxExtractor().find_local_maxima(histogram, 1, 1) == [
            (4, 4, 7.0),
            (5, 4, 7.0),
        ]
        assert NonMaxExtractor(strict=True).find_local_maxima(histogram, 1, 1) == []

    def test_row_major_order(self, extractor):
        histogram = np.zeros((10, 10), dtype=np.float32)
        histogram[8, 1] = 5
        histogram[1, 8] = 5
        histogram[1, 2] = 5

        peaks = extractor.find_local_maxima(histogram, 1, 1)

        assert [(x, y) for x, y, _ in peaks] == [(2, 1), (8, 1), (1, 8)]

    def test_empty_histogram(self, extractor):
        assert extractor.find_local_maxima(np.zeros((0, 0), dtype=np.float32), 2, 1) == []

    def test_zero_histogram(self, extractor):
        assert extractor.find_local_maxima(np.zeros((5, 5), dtype=np.float32), 2, 1) == []
