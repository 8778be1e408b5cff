"""
palettecut

Representative color palettes from raw pixel data using median-cut
quantization.
"""

from palettecut.services.colors import (
    Color,
    ColorFormat,
    InvalidVBox,
    PaletteError,
    VBoxCutFailed,
    get_palette,
)
from palettecut.services.colors.extract_api import extract_palette, palette_from_image

__version__ = "1.0.0"

__all__ = [
    'Color',
    'ColorFormat',
    'InvalidVBox',
    'PaletteError',
    'VBoxCutFailed',
    'extract_palette',
    'get_palette',
    'palette_from_image'
]
