"""Tests for contours.classifier module."""

import math

import numpy as np
import pytest

from contours.classifier import (
    ABOVE,
    BELOW,
    INSIDE,
    classify_weight,
    is_band_threshold,
    normalize_threshold,
    normalize_thresholds,
)
from contours.errors import InvalidThreshold


class TestClassifyLevel:
    """Single threshold: 1 if weight >= threshold else 0."""

    def test_above(self):
        assert classify_weight(7, 6) == 1

    def test_equal_counts_as_above(self):
        assert classify_weight(6, 6) == 1

    def test_below(self):
        assert classify_weight(5.999, 6) == 0

    def test_negative_values(self):
        assert classify_weight(-3, -5) == 1
        assert classify_weight(-6, -5) == 0


class TestClassifyInterval:
    """Interval threshold: 0 below lo, 1 inside [lo, hi], 2 above hi."""

    @pytest.mark.parametrize(
        ('weight', 'expected'),
        [
            (0.0, BELOW),
            (1.0, INSIDE),
            (1.5, INSIDE),
            (2.0, INSIDE),
            (2.0001, ABOVE),
        ],
    )
    def test_digits(self, weight, expected):
        assert classify_weight(weight, (1, 2)) == expected

    def test_degenerate_interval(self):
        """lo == hi is allowed; only the exact value is inside."""
        assert classify_weight(3, [3, 3]) == INSIDE
        assert classify_weight(2.9, [3, 3]) == BELOW
        assert classify_weight(3.1, [3, 3]) == ABOVE

    def test_invalid_threshold_rejected(self):
        """classify never guesses a digit for a malformed threshold."""
        with pytest.raises(InvalidThreshold):
            classify_weight(1, 'high')


class TestNormalizeThreshold:
    """Tests for threshold validation and normalization."""

    def test_number(self):
        value = normalize_threshold(5)
        assert value == 5.0
        assert isinstance(value, float)
        assert not is_band_threshold(value)

    def test_pair(self):
        value = normalize_threshold([1, 2.5])
        assert value == (1.0, 2.5)
        assert is_band_threshold(value)

    @pytest.mark.parametrize(
        'bad',
        [
            None,
            True,
            'abc',
            b'12',
            math.nan,
            math.inf,
            [],
            [1],
            [1, 2, 3],
            [2, 1],
            [1, math.nan],
            [1, 'x'],
            [False, 1],
            {'lo': 1, 'hi': 2},
        ],
    )
    def test_invalid(self, bad):
        with pytest.raises(InvalidThreshold):
            normalize_threshold(bad)

    @pytest.mark.parametrize(
        'unordered',
        [
            {1: 0, 2: 0},
            {2.0, 1.0},
            frozenset({1, 2}),
            iter([1, 2]),
        ],
    )
    def test_unordered_pair_rejected(self, unordered):
        """Only ordered sequences make an interval; mappings and sets raise."""
        with pytest.raises(InvalidThreshold):
            normalize_threshold(unordered)

    def test_numpy_pair(self):
        assert normalize_threshold(np.array([1.0, 2.5])) == (1.0, 2.5)

    def test_numpy_2d_rejected(self):
        with pytest.raises(InvalidThreshold):
            normalize_threshold(np.array([[1.0, 2.0]]))

    def test_index_attached(self):
        with pytest.raises(InvalidThreshold) as exc_info:
            normalize_threshold([3, 1], index=4)
        assert exc_info.value.index == 4
        assert exc_info.value.threshold == [3, 1]
        assert 'index 4' in str(exc_info.value)


class TestNormalizeThresholds:
    """Tests for whole-request threshold validation."""

    def test_mixed(self):
        assert normalize_thresholds([1, (2, 3), 4.5]) == [1.0, (2.0, 3.0), 4.5]

    def test_empty(self):
        assert normalize_thresholds([]) == []

    def test_first_bad_index_reported(self):
        """Validation reports the position of the first malformed entry."""
        with pytest.raises(InvalidThreshold) as exc_info:
            normalize_thresholds([1, 2, [5, 4], 'x'])
        assert exc_info.value.index == 2

    @pytest.mark.parametrize('bad', [5, '5', None])
    def test_not_a_sequence(self, bad):
        with pytest.raises(InvalidThreshold):
            normalize_thresholds(bad)
