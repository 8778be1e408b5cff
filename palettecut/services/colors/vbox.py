"""
Volumetric boxes in the reduced color cube.

A VBox is an immutable value: its population, volume and average color are
computed once from the histogram when the box is built and never change
afterwards. Narrowing a box produces a new, fully recomputed box.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

import numpy as np

from .color_space import MULTIPLIER, Color, Histogram


class ColorChannel(IntEnum):
    """Cube axis; the value is the axis number of Histogram.cube."""
    RED = 0
    GREEN = 1
    BLUE = 2


@dataclass(frozen=True)
class VBox:
    r_min: int
    r_max: int
    g_min: int
    g_max: int
    b_min: int
    b_max: int
    average: Color
    count: int
    volume: int

    @classmethod
    def from_bounds(cls, histogram: Histogram, r_min: int, r_max: int,
                    g_min: int, g_max: int, b_min: int, b_max: int) -> "VBox":
        """Build a box from inclusive bounds with count, volume and average filled in."""
        bounds = (r_min, r_max, g_min, g_max, b_min, b_max)
        region = histogram.region(*bounds)
        return cls(
            *bounds,
            average=calc_average(region, bounds),
            count=int(region.sum(dtype=np.int64)),
            volume=calc_volume(bounds),
        )

    @property
    def bounds(self) -> Tuple[int, int, int, int, int, int]:
        return self.r_min, self.r_max, self.g_min, self.g_max, self.b_min, self.b_max

    def channel_range(self, channel: ColorChannel) -> Tuple[int, int]:
        bounds = self.bounds
        return bounds[2 * channel], bounds[2 * channel + 1]

    def with_channel_range(self, histogram: Histogram, channel: ColorChannel,
                           low: int, high: int) -> "VBox":
        """Copy of this box with one channel's bounds replaced, recomputed against histogram."""
        bounds = list(self.bounds)
        bounds[2 * channel] = low
        bounds[2 * channel + 1] = high
        return VBox.from_bounds(histogram, *bounds)

    def widest_color_channel(self) -> ColorChannel:
        """Channel with the largest span; ties resolve red, then green, then blue."""
        r_width = self.r_max - self.r_min
        g_width = self.g_max - self.g_min
        b_width = self.b_max - self.b_min

        widest = max(r_width, g_width, b_width)
        if widest == r_width:
            return ColorChannel.RED
        elif widest == g_width:
            return ColorChannel.GREEN
        return ColorChannel.BLUE


def calc_volume(bounds: Tuple[int, int, int, int, int, int]) -> int:
    """Number of reduced-space cells spanned by the bounds, empty ones included."""
    r_min, r_max, g_min, g_max, b_min, b_max = bounds
    return (r_max - r_min + 1) * (g_max - g_min + 1) * (b_max - b_min + 1)


def calc_average(region: np.ndarray, bounds: Tuple[int, int, int, int, int, int]) -> Color:
    """
    Population-weighted centroid of a box, mapped back to 8-bit channels.

    Each populated cell contributes weight * (coordinate + 0.5) * MULTIPLIER,
    truncated to an integer. A box without population falls back to the
    midpoint of its bounds.
    """
    r_min, r_max, g_min, g_max, b_min, b_max = bounds

    cells = np.nonzero(region)
    weights = region[cells].astype(np.float64)
    total = int(weights.sum())

    if total > 0:
        sums = []
        for offset, coords in zip((r_min, g_min, b_min), cells):
            contributions = weights * (coords + offset + 0.5) * MULTIPLIER
            sums.append(int(contributions.astype(np.int64).sum()))
        return Color(*(channel_sum // total for channel_sum in sums))

    return Color(
        min(MULTIPLIER * (r_min + r_max + 1) // 2, 255),
        min(MULTIPLIER * (g_min + g_max + 1) // 2, 255),
        min(MULTIPLIER * (b_min + b_max + 1) // 2, 255),
    )
