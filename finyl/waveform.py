"""Geometry of the scrolling waveform view: sample lines, grids and zoom."""

from __future__ import annotations

import logging
from collections.abc import Sequence

_log = logging.getLogger(__name__)

MIN_RANGE = 130000
MAX_RANGE = 4000000
_MARGIN_DIVISOR = 10000
_SAMPLE_SCALE = 32768.0
_BARS_PER_GRID = 32

Color = tuple[int, int, int, int]
Line = tuple[int, int, int, int]
Rect = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
WAVE_COLOR: Color = (100, 100, 250, 255)
GRID_COLOR: Color = (100, 0, 100, 255)
CENTER_COLOR: Color = (255, 0, 250, 255)


def get_index(wave_width: int, starti: int, x: int, wave_range: int) -> int:
    """Return the sample index shown at pixel column x."""
    return starti + int((x / wave_width) * wave_range)


def get_pixel(ioffset: int, wave_range: int, window_width: int) -> int:
    """Return the pixel column of a sample offset within the visible range."""
    return int((ioffset / wave_range) * window_width)


def scaled_left_sample(samples: Sequence[int], mindex: int) -> float:
    """Return the left channel of interleaved stereo frame mindex, scaled to [-1, 1)."""
    return samples[mindex * 2] / _SAMPLE_SCALE


class WaveView:
    """One deck's waveform: its size, zoom range and drawing geometry."""

    def __init__(
        self,
        wave_width: int,
        wave_height: int,
        wave_range: int,
        wave_iteration_margin: int,
    ) -> None:
        self.wave_width = wave_width
        self.wave_height = wave_height
        self.wave_height_half = wave_height // 2
        self.wave_range = wave_range
        self.wave_iteration_margin = wave_iteration_margin
        self.init = False

    def set_range(self, wave_range: int) -> bool:
        """Set the number of samples shown across the view.

        Values outside the supported range are ignored. Returns True when
        the range was applied; the view then needs a full redraw.
        """
        if wave_range < MIN_RANGE or wave_range > MAX_RANGE:
            return False
        self.wave_range = wave_range
        self.wave_iteration_margin = wave_range // _MARGIN_DIVISOR
        self.init = True
        _log.debug(
            "wave_range %d, wave_iteration_margin %d",
            wave_range,
            self.wave_iteration_margin,
        )
        return True

    def double_range(self) -> bool:
        """Zoom out by showing twice as many samples."""
        return self.set_range(self.wave_range * 2)

    def half_range(self) -> bool:
        """Zoom in by showing half as many samples."""
        return self.set_range(self.wave_range // 2)

    def sample_line(
        self, stem_samples: Sequence[Sequence[int]], x: int, mindex: int
    ) -> list[tuple[Color, Line]]:
        """Return the coloured vertical lines drawn for frame mindex at column x.

        With one stem a single line runs from the sample to the centre. With
        two, the first stem is drawn white and the second is stacked on top of
        it when both share a sign, or drawn from the centre otherwise.
        """
        half = self.wave_height_half
        if len(stem_samples) == 1:
            sample = scaled_left_sample(stem_samples[0], mindex)
            y = int(self.wave_height / 2.0 - sample * half)
            return [(WAVE_COLOR, (x, y, x, half))]

        amount0 = int(scaled_left_sample(stem_samples[0], mindex) * half)
        lines: list[tuple[Color, Line]] = [(WHITE, (x, half - amount0, x, half))]

        amount1 = int(scaled_left_sample(stem_samples[1], mindex) * half)
        if (amount0 > 0 and amount1 > 0) or (amount0 < 0 and amount1 < 0):
            top = half - (amount0 + amount1)
            lines.append((WAVE_COLOR, (x, top, x, half - amount0)))
        else:
            lines.append((WAVE_COLOR, (x, half - amount1, x, half)))
        return lines

    def static_grid_positions(
        self, beat_times: Sequence[float], sample_rate: float
    ) -> list[Rect]:
        """Return the rectangles of the fixed bar grid around the centre line.

        Grid lines are spaced every 32 beats, using the gap between the first
        two beats (in milliseconds). Fewer than two beats give no grid.
        """
        if len(beat_times) < 2:
            return []
        duration = int(beat_times[1] - beat_times[0])
        samples = int(duration * (sample_rate / 1000.0))
        if samples == 0:
            return []

        center = self.wave_range // 2
        rects: list[Rect] = []
        i = 1
        while True:
            step = _BARS_PER_GRID * i * samples
            xl = get_pixel(center - step, self.wave_range, self.wave_width)
            if xl > self.wave_width or xl < 0:
                break
            rects.append((xl - 1, 0, 2, self.wave_height))
            xr = get_pixel(center + step, self.wave_range, self.wave_width)
            rects.append((xr - 1, 0, 2, self.wave_height))
            i += 1
        return rects

    def center_line(self) -> Rect:
        """Return the rectangle marking the playback position."""
        return (self.wave_width // 2 - 1, 0, 2, self.wave_height)