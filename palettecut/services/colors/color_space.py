"""
Reduced color space primitives.

Channels are cut down to their upper SIGNAL_BITS bits, which turns the RGB
cube into 32 x 32 x 32 cells. Histogram counts pixels per cell.
"""

from typing import NamedTuple, Optional, Tuple

import numpy as np


SIGNAL_BITS = 5  # Use only upper 5 bits of 8 bits
RIGHT_SHIFT = 8 - SIGNAL_BITS
MULTIPLIER = 1 << RIGHT_SHIFT
HISTOGRAM_SIZE = 1 << (3 * SIGNAL_BITS)
VBOX_LENGTH = 1 << SIGNAL_BITS


class Color(NamedTuple):
    """An 8-bit RGB color."""
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def make_color_index_of(red: int, green: int, blue: int) -> int:
    """Get reduced-space color index for a pixel."""
    return (red << (2 * SIGNAL_BITS)) + (green << SIGNAL_BITS) + blue


def split_color_index(index: int) -> Tuple[int, int, int]:
    """Inverse of make_color_index_of."""
    mask = VBOX_LENGTH - 1
    return (index >> (2 * SIGNAL_BITS)) & mask, (index >> SIGNAL_BITS) & mask, index & mask


class Histogram:
    """
    Pixel counts over the reduced color cube.

    `counts` is the flat int32 table addressed by make_color_index_of; `cube`
    is a (32, 32, 32) view of the same storage addressed as [r, g, b].
    """

    def __init__(self, counts: Optional[np.ndarray] = None):
        if counts is None:
            counts = np.zeros(HISTOGRAM_SIZE, dtype=np.int32)
        counts = np.asarray(counts, dtype=np.int32)
        if counts.shape != (HISTOGRAM_SIZE,):
            raise ValueError(f"Histogram needs {HISTOGRAM_SIZE} buckets, got shape {counts.shape}")
        self.counts = counts
        self.cube = counts.reshape(VBOX_LENGTH, VBOX_LENGTH, VBOX_LENGTH)

    @classmethod
    def from_cells(cls, cells) -> "Histogram":
        """Build a histogram from {(r, g, b): count} over reduced coordinates."""
        histogram = cls()
        for (r, g, b), count in cells.items():
            histogram.counts[make_color_index_of(r, g, b)] = count
        return histogram

    def __getitem__(self, index: int) -> int:
        return int(self.counts[index])

    @property
    def total(self) -> int:
        return int(self.counts.sum(dtype=np.int64))

    def region(self, r_min: int, r_max: int, g_min: int, g_max: int,
               b_min: int, b_max: int) -> np.ndarray:
        """Cube cells inside inclusive bounds; empty when any min exceeds its max."""
        if r_min > r_max or g_min > g_max or b_min > b_max:
            return self.cube[0:0, 0:0, 0:0]
        return self.cube[r_min:r_max + 1, g_min:g_max + 1, b_min:b_max + 1]
