"""Frequency spectrum bars computed from FFT output."""

from __future__ import annotations

import bisect
import math
from collections.abc import Iterable

MIN_FREQ = 20.0
MAX_FREQ = 20000.0
MAX_DB = 2.8
DEFAULT_NUM_BARS = 200


def logspace(start: float, stop: float, num: int) -> list[float]:
    """Return num values spaced evenly on a base-10 log scale.

    The exponents run from start to stop inclusive.
    """
    if num < 2:
        raise ValueError("number of points must be at least 2")
    step = (stop - start) / (num - 1)
    return [10.0 ** (start + i * step) for i in range(num)]


class Spectrum:
    """Accumulates FFT magnitudes into log-spaced frequency bars."""

    def __init__(self, num_bars: int = DEFAULT_NUM_BARS) -> None:
        self.num_bars = num_bars
        self.freqs = logspace(math.log10(MIN_FREQ), math.log10(MAX_FREQ), num_bars)
        self.magnitude_accs = [0.0] * num_bars

    def add_magnitude(self, freq: float, magnitude: float) -> None:
        """Add a magnitude to the bar whose upper bound first exceeds freq.

        Frequencies below the first bound fall into the first bar;
        frequencies at or above the last bound are ignored.
        """
        index = max(bisect.bisect_right(self.freqs, freq), 1)
        if index < len(self.freqs):
            self.magnitude_accs[index - 1] += magnitude

    def accumulate(
        self,
        bins: Iterable[tuple[float, float]],
        sample_rate: float,
        period_size: int,
    ) -> list[float]:
        """Reset the bars and fill them from complex FFT bins (re, im)."""
        self.magnitude_accs = [0.0] * self.num_bars
        for i, (real, imag) in enumerate(bins):
            freq = i * sample_rate / period_size
            self.add_magnitude(freq, math.hypot(real, imag))
        return list(self.magnitude_accs)

    def decibels(self) -> list[float]:
        """Return log10(1 + magnitude) for every bar."""
        return [math.log10(1.0 + acc) for acc in self.magnitude_accs]

    def bar_rects(self, width: int, height: int) -> list[tuple[int, int, int, int]]:
        """Return an (x, y, w, h) rectangle for each bar within width x height."""
        rect_w = width // self.num_bars
        rects = []
        for i, db in enumerate(self.decibels()):
            percent = min(db / MAX_DB, 1.0)
            rects.append(
                (i * rect_w, int(height * (1 - percent)), rect_w, int(height * percent))
            )
        return rects