"""Классификация значения в узле сетки относительно порога (VertexClassifier)."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from numbers import Real
from typing import Union

import numpy as np

from contours.errors import InvalidThreshold

# Изолиния - одно число, изополоса - пара (lo, hi)
Threshold = Union[float, tuple[float, float]]

BAND_THRESHOLD_LEN = 2

# Цифры классификации узла
BELOW = 0
INSIDE = 1
ABOVE = 2


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def normalize_threshold(value: object, index: int | None = None) -> Threshold:
    """
    Validate a threshold and return its canonical form.

    A finite number becomes ``float`` (isoline level). A two-element sequence
    of finite numbers with ``lo <= hi`` becomes ``(lo, hi)`` (isoband
    interval). Anything else raises :class:`InvalidThreshold`; nothing is
    coerced silently.
    """
    if _is_number(value):
        level = float(value)
        if not math.isfinite(level):
            raise InvalidThreshold(value, index)
        return level

    # Интервал - только упорядоченная последовательность; dict и set отвергаются
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidThreshold(value, index)
        items = value.tolist()
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        items = list(value)
    else:
        raise InvalidThreshold(value, index)
    if len(items) != BAND_THRESHOLD_LEN or not all(_is_number(v) for v in items):
        raise InvalidThreshold(value, index)
    lo, hi = float(items[0]), float(items[1])
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo > hi:
        raise InvalidThreshold(value, index)
    return lo, hi


def is_band_threshold(threshold: Threshold) -> bool:
    """True for an ``(lo, hi)`` interval, False for a single level."""
    return isinstance(threshold, tuple)


def classify_weight(weight: float, threshold: object) -> int:
    """
    Classify one weight against a threshold.

    Isolines: 1 if ``weight >= threshold`` else 0.
    Isobands: 0 below ``lo``, 1 inside ``[lo, hi]``, 2 above ``hi``.
    Raises :class:`InvalidThreshold` for a malformed threshold.
    """
    return classify_normalized(weight, normalize_threshold(threshold))


def classify_normalized(weight: float, threshold: Threshold) -> int:
    """Same as :func:`classify_weight` for an already normalized threshold."""
    if isinstance(threshold, tuple):
        lo, hi = threshold
        if weight < lo:
            return BELOW
        return INSIDE if weight <= hi else ABOVE
    return INSIDE if weight >= threshold else BELOW


def normalize_thresholds(thresholds: Iterable[object]) -> list[Threshold]:
    """
    Validate every threshold of a request before any work starts.

    The first malformed entry raises :class:`InvalidThreshold` with its index.
    """
    if isinstance(thresholds, (str, bytes)) or not isinstance(thresholds, Iterable):
        raise InvalidThreshold(thresholds)
    return [normalize_threshold(value, i) for i, value in enumerate(thresholds)]
