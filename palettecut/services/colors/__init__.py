"""
palettecut Colors Module

Median-cut palette extraction over raw pixel buffers: sampling into a
reduced-precision histogram, VBox splitting and color averaging.
"""

from .color_space import Color, Histogram, make_color_index_of, split_color_index
from .median_cut import InvalidVBox, PaletteError, VBoxCutFailed, apply_median_cut
from .quantizer import get_palette
from .sampler import ColorFormat, make_histogram_and_vbox
from .vbox import ColorChannel, VBox

__all__ = [
    'Color',
    'ColorChannel',
    'ColorFormat',
    'Histogram',
    'InvalidVBox',
    'PaletteError',
    'VBox',
    'VBoxCutFailed',
    'apply_median_cut',
    'get_palette',
    'make_color_index_of',
    'make_histogram_and_vbox',
    'split_color_index'
]
