"""
Color sampling and histogram construction.

Walks a raw interleaved pixel buffer, drops near-transparent and near-white
pixels, reduces every kept pixel to 5 bits per channel and counts it in the
histogram. The tightest reduced-space box around the kept pixels becomes the
seed VBox of the quantizer.
"""

from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np
from loguru import logger

from .color_space import HISTOGRAM_SIZE, RIGHT_SHIFT, SIGNAL_BITS, Histogram
from .vbox import VBox


# Skip rules
MIN_ALPHA = 125
WHITE_THRESHOLD = 250

PixelBuffer = Union[bytes, bytearray, memoryview, np.ndarray]


class ColorFormat(Enum):
    """Channel order of an interleaved pixel buffer."""
    RGB = "rgb"
    RGBA = "rgba"
    ARGB = "argb"
    BGR = "bgr"
    BGRA = "bgra"

    @property
    def channels(self) -> int:
        return len(self.value)

    @property
    def offsets(self) -> Tuple[int, int, int, Optional[int]]:
        """Byte offsets of R, G, B and A inside one pixel (A is None when absent)."""
        layout = self.value
        alpha = layout.index("a") if "a" in layout else None
        return layout.index("r"), layout.index("g"), layout.index("b"), alpha


def _as_byte_array(pixels: PixelBuffer) -> np.ndarray:
    if isinstance(pixels, np.ndarray):
        return np.asarray(pixels, dtype=np.uint8).ravel()
    return np.frombuffer(pixels, dtype=np.uint8)


def sample_pixels(pixels: PixelBuffer, color_format: ColorFormat, quality: int) -> np.ndarray:
    """
    Pick every `quality`-th pixel and drop the near-transparent and near-white ones.

    Trailing bytes that do not form a whole pixel are ignored.

    Returns:
        Kept pixels as an (N, 3) uint8 array in RGB order
    """
    data = _as_byte_array(pixels)
    channels = color_format.channels
    pixel_count = data.size // channels

    samples = data[:pixel_count * channels].reshape(pixel_count, channels)[::quality]
    r_off, g_off, b_off, a_off = color_format.offsets
    r = samples[:, r_off]
    g = samples[:, g_off]
    b = samples[:, b_off]

    keep = (r <= WHITE_THRESHOLD) | (g <= WHITE_THRESHOLD) | (b <= WHITE_THRESHOLD)
    if a_off is not None:
        keep &= samples[:, a_off] >= MIN_ALPHA

    kept = np.stack([r[keep], g[keep], b[keep]], axis=-1)
    logger.debug(f"Sampled {len(samples)}/{pixel_count} pixels "
                 f"({color_format.value}, quality={quality}), kept {len(kept)}")
    return kept


def make_histogram_and_vbox(pixels: PixelBuffer, color_format: ColorFormat,
                            quality: int) -> Tuple[VBox, Histogram]:
    """
    Build the histogram and the seed VBox from raw pixels.

    Args:
        pixels: Interleaved 8-bit pixel data laid out per color_format
        color_format: Channel order of the buffer
        quality: Sampling stride in pixels

    Returns:
        Tuple of (seed VBox, Histogram). When no pixel survives sampling the
        seed box keeps the sentinel bounds (min 255, max 0) and has count 0.
    """
    kept = sample_pixels(pixels, color_format, quality)
    reduced = (kept >> RIGHT_SHIFT).astype(np.int64)

    if len(reduced):
        indices = (reduced[:, 0] << (2 * SIGNAL_BITS)) + (reduced[:, 1] << SIGNAL_BITS) + reduced[:, 2]
        histogram = Histogram(np.bincount(indices, minlength=HISTOGRAM_SIZE).astype(np.int32))
        lows = reduced.min(axis=0)
        highs = reduced.max(axis=0)
        bounds = (int(lows[0]), int(highs[0]),
                  int(lows[1]), int(highs[1]),
                  int(lows[2]), int(highs[2]))
    else:
        histogram = Histogram()
        bounds = (255, 0, 255, 0, 255, 0)

    vbox = VBox.from_bounds(histogram, *bounds)
    logger.debug(f"Seed box {vbox.bounds} count={vbox.count} volume={vbox.volume}")
    return vbox, histogram
