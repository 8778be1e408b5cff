"""
Median-cut quantizer.

Splits boxes out of a priority queue in two phases: first by population,
then by population times volume, and returns the average color of every box
with the highest priority first.
"""

import math
from functools import cmp_to_key
from typing import Callable, List, Optional, Tuple, Union

from loguru import logger

from palettecut.config import config

from .color_space import Color, Histogram
from .median_cut import InvalidVBox, apply_median_cut
from .sampler import ColorFormat, PixelBuffer, make_histogram_and_vbox
from .vbox import VBox


FRACTION_BY_POPULATION = 0.75
MAX_ITERATIONS = 1000

Comparator = Callable[[VBox, VBox], int]


def compare_by_count(a: VBox, b: VBox) -> int:
    """Order boxes by ascending population."""
    return (a.count > b.count) - (a.count < b.count)


def compare_by_product(a: VBox, b: VBox) -> int:
    """Order boxes by population times volume; equal populations fall back to volume."""
    if a.count == b.count:
        # If count is 0 for both (or the same), sort by volume.
        return (a.volume > b.volume) - (a.volume < b.volume)
    a_product = a.count * a.volume
    b_product = b.count * b.volume
    return (a_product > b_product) - (a_product < b_product)


def iterate(queue: List[VBox], comparator: Comparator, target: int, histogram: Histogram) -> int:
    """
    Split the last box of the queue until `target` colors exist.

    The color counter starts at 1 and grows with every two-way split. The
    queue is re-sorted after each change; the loop gives up after
    MAX_ITERATIONS rounds without raising.

    Returns:
        Number of iterations used
    """
    key = cmp_to_key(comparator)
    color = 1
    iterations = 0

    while iterations < MAX_ITERATIONS and queue:
        iterations += 1
        vbox = queue[-1]
        if vbox.count == 0:
            queue.sort(key=key)
            continue
        queue.pop()

        first, second = apply_median_cut(histogram, vbox)
        queue.append(first)
        if second is not None:
            queue.append(second)
            color += 1

        queue.sort(key=key)

        if color >= target:
            break

    logger.debug(f"{comparator.__name__}: {len(queue)} boxes after {iterations} iterations "
                 f"(target {target}, reached {color})")
    return iterations


def quantize(pixels: PixelBuffer, color_format: ColorFormat, quality: int, max_colors: int) -> List[Color]:
    """Run both splitting phases and return the averaged colors."""
    vbox, histogram = make_histogram_and_vbox(pixels, color_format, quality)
    if vbox.count == 0:
        raise InvalidVBox("no pixel survived sampling")

    queue = [vbox]

    # Round up to have the same behavior as in JavaScript.
    target = math.ceil(FRACTION_BY_POPULATION * max_colors)

    # First set of colors, sorted by population.
    iterate(queue, compare_by_count, target, histogram)

    # Re-sort by the product of pixel occupancy times the size in color space.
    queue.sort(key=cmp_to_key(compare_by_product))

    # Next set, median cuts using the (npix * vol) sorting.
    iterate(queue, compare_by_product, max_colors - len(queue), histogram)

    # Highest priority first.
    queue.reverse()

    return [box.average for box in queue][:max_colors]


def resolve_arguments(quality: Optional[int] = None,
                      max_colors: Optional[int] = None) -> Tuple[int, int]:
    """
    Apply config defaults to quality and max_colors and check their ranges.

    Raises:
        ValueError: If either value is not an integer within its range
    """
    if quality is None:
        quality = config.DEFAULT_QUALITY
    if max_colors is None:
        max_colors = config.DEFAULT_MAX_COLORS

    if not config.validate_quality(quality):
        raise ValueError(
            f"quality must be an integer within {config.MIN_QUALITY}..{config.MAX_QUALITY}, got {quality!r}"
        )
    if not config.validate_max_colors(max_colors):
        raise ValueError(
            f"max_colors must be an integer within {config.MIN_MAX_COLORS}..{config.MAX_MAX_COLORS}, "
            f"got {max_colors!r}"
        )
    return int(quality), int(max_colors)


def get_palette(pixels: PixelBuffer,
                color_format: Union[ColorFormat, str],
                quality: Optional[int] = None,
                max_colors: Optional[int] = None) -> List[Color]:
    """
    Returns a representative color palette of an image.

    Args:
        pixels: Raw interleaved 8-bit pixel data (bytes-like or numpy array)
        color_format: Channel order of pixels, a ColorFormat or its tag ("rgba")
        quality: Sampling step in pixels, 1..10 (default from config)
        max_colors: Upper bound of the palette size, 2..255 (default from config).
            Fewer colors come back when the image does not split further.

    Returns:
        Colors ordered from highest to lowest priority

    Raises:
        ValueError: If quality, max_colors or color_format is out of range
        InvalidVBox: If no pixel survives sampling
        VBoxCutFailed: If a box cannot be cut
    """
    quality, max_colors = resolve_arguments(quality, max_colors)
    if not isinstance(color_format, ColorFormat):
        if not config.validate_color_format(color_format):
            raise ValueError(
                f"Unsupported color format {color_format!r}. "
                f"Supported: {', '.join(config.SUPPORTED_COLOR_FORMATS)}"
            )
        color_format = ColorFormat(str(color_format).lower())

    return quantize(pixels, color_format, quality, max_colors)
