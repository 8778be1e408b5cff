"""
Median-cut splitting of a VBox.

The box is cut across its widest channel at a coordinate that balances the
population on both sides, then nudged away from empty slices.
"""

from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from .color_space import VBOX_LENGTH, Histogram
from .vbox import ColorChannel, VBox


class PaletteError(Exception):
    """Base class for quantization failures."""
    pass


class InvalidVBox(PaletteError):
    """A split was attempted on a box without population."""
    pass


class VBoxCutFailed(PaletteError):
    """No cut coordinate could be found for a box."""
    pass


def apply_median_cut(histogram: Histogram, vbox: VBox) -> Tuple[VBox, Optional[VBox]]:
    """
    Split a box in two along its widest channel.

    Args:
        histogram: Histogram the box was computed from
        vbox: Box to split

    Returns:
        Tuple of (first, second). A box holding a single pixel cannot be split
        and comes back unchanged with second set to None.

    Raises:
        InvalidVBox: If the box has no population
        VBoxCutFailed: If no cut coordinate exists
    """
    if vbox.count == 0:
        raise InvalidVBox(f"cannot split an empty box {vbox.bounds}")

    # Only one pixel, no split.
    if vbox.count == 1:
        return vbox, None

    axis = vbox.widest_color_channel()
    low, high = vbox.channel_range(axis)

    # Population of every slice across the cut axis.
    region = histogram.region(*vbox.bounds)
    other_axes = tuple(int(a) for a in ColorChannel if a != axis)
    slice_sums = region.sum(axis=other_axes, dtype=np.int64)
    cumulative = np.cumsum(slice_sums)
    total = int(cumulative[-1])

    partial_sum = [-1] * VBOX_LENGTH
    look_ahead_sum = [-1] * VBOX_LENGTH
    for coord, running in zip(range(low, high + 1), cumulative.tolist()):
        partial_sum[coord] = running
        look_ahead_sum[coord] = total - running

    return _cut(histogram, vbox, axis, partial_sum, look_ahead_sum, total)


def _cut(histogram: Histogram, vbox: VBox, axis: ColorChannel, partial_sum: List[int],
         look_ahead_sum: List[int], total: int) -> Tuple[VBox, VBox]:
    low, high = vbox.channel_range(axis)

    for i in range(low, high + 1):
        if partial_sum[i] <= total // 2:
            continue

        left = i - low
        right = high - i

        if left <= right:
            d2 = min(high - 1, i + right // 2)
        else:
            # Float division truncated toward zero on purpose, this matches
            # the JavaScript color-thief rounding.
            d2 = max(low, int((i - 1) - left / 2.0))

        # Avoid 0-count.
        while d2 < 0 or partial_sum[d2] <= 0:
            d2 += 1
        count2 = look_ahead_sum[d2]
        while count2 == 0 and d2 > 0 and partial_sum[d2 - 1] > 0:
            d2 -= 1
            count2 = look_ahead_sum[d2]

        first = vbox.with_channel_range(histogram, axis, low, d2)
        second = vbox.with_channel_range(histogram, axis, d2 + 1, high)
        logger.debug(f"Cut {axis.name.lower()} {low}..{high} at {d2}: "
                     f"{first.count} | {second.count}")
        return first, second

    raise VBoxCutFailed(f"no cut point on {axis.name.lower()} for box {vbox.bounds}")
