"""
Palette Extraction API

Bridges decoded Pillow images to the raw-buffer quantizer and wraps the
result in a report with timing, logging and metrics.
"""

import time
from typing import List, Optional, Tuple

from PIL import Image

from palettecut.config import config
from palettecut.schemas import PaletteColor, PaletteMetadata, PaletteResponse
from palettecut.utils.ids import generate_request_id
from palettecut.utils.logging import get_logger
from palettecut.utils.metrics import get_metrics

from .color_space import Color
from .median_cut import PaletteError
from .quantizer import get_palette, resolve_arguments
from .sampler import ColorFormat

# Pillow modes whose raw bytes the quantizer reads as-is
_MODE_FORMATS = {
    "RGB": ColorFormat.RGB,
    "RGBA": ColorFormat.RGBA,
}

_ALPHA_BANDS = ("A", "a")


def image_to_buffer(image: Image.Image) -> Tuple[bytes, ColorFormat]:
    """
    Get raw pixel bytes and their channel layout from a Pillow image.

    RGB and RGBA images are read directly. Other modes are converted, to RGBA
    when the image carries transparency (an "A" band, the premultiplied "a"
    band of RGBa and La, or a transparency key) so that the alpha skip rule
    applies, otherwise to RGB.
    """
    if image.mode not in _MODE_FORMATS:
        has_alpha = (
            any(band in _ALPHA_BANDS for band in image.getbands())
            or "transparency" in image.info
        )
        image = image.convert("RGBA" if has_alpha else "RGB")

    return image.tobytes(), _MODE_FORMATS[image.mode]


def palette_from_image(image: Image.Image,
                       quality: Optional[int] = None,
                       max_colors: Optional[int] = None) -> List[Color]:
    """
    Compute the palette of a decoded Pillow image.

    Args:
        image: Decoded image in any Pillow mode
        quality: Sampling step in pixels (default from config)
        max_colors: Upper bound of the palette size (default from config)

    Returns:
        Colors ordered from highest to lowest priority
    """
    pixels, color_format = image_to_buffer(image)
    return get_palette(pixels, color_format, quality, max_colors)


def extract_palette(image: Image.Image,
                    quality: Optional[int] = None,
                    max_colors: Optional[int] = None) -> PaletteResponse:
    """
    Compute the palette of an image and report on it.

    Arguments are checked before any logging or metrics, so a ValueError
    leaves no trace. Errors from the quantizer are logged, counted and
    re-raised unchanged.
    """
    quality, max_colors = resolve_arguments(quality, max_colors)

    log = get_logger()
    metrics = get_metrics() if config.METRICS_ENABLED else None
    request_id = generate_request_id()
    width, height = image.size

    pixels, color_format = image_to_buffer(image)
    log.info("Starting palette extraction", extra={
        "request_id": request_id,
        "mode": image.mode,
        "color_format": color_format.value,
        "quality": quality,
        "max_colors": max_colors
    })
    if metrics:
        metrics.increment_request_count()
        metrics.increment_format_count(color_format.value)

    start_time = time.time()
    try:
        colors = get_palette(pixels, color_format, quality, max_colors)
    except PaletteError as e:
        log.error(f"Palette extraction failed: {e}", extra={
            "request_id": request_id,
            "error_type": type(e).__name__
        })
        if metrics:
            metrics.increment_failure_count(type(e).__name__)
        raise
    duration_ms = (time.time() - start_time) * 1000

    if metrics:
        metrics.record_timing("quantize", duration_ms)
        metrics.record_palette_size(len(colors))

    if len(colors) < max_colors:
        log.debug(f"Palette smaller than requested: {len(colors)} < {max_colors}",
                  extra={"request_id": request_id})
    log.info(f"Palette extraction complete: {len(colors)} colors",
             extra={"request_id": request_id, "ms_quantize": duration_ms})

    return PaletteResponse(
        request_id=request_id,
        palette=[
            PaletteColor(hex=color.hex, rgb=list(color), rank=rank)
            for rank, color in enumerate(colors)
        ],
        metadata=PaletteMetadata(
            color_format=color_format.value,
            quality=quality,
            requested_colors=max_colors,
            returned_colors=len(colors),
            width=width,
            height=height,
            duration_ms=duration_ms
        )
    )
