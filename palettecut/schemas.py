"""
palettecut Schemas
Pydantic models for palette extraction reports.
"""
from typing import List
from pydantic import BaseModel, Field


class PaletteColor(BaseModel):
    """Single color of a palette."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    rgb: List[int] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Color as [R, G, B], each 0-255"
    )
    rank: int = Field(
        ...,
        ge=0,
        description="Position in the palette, 0 is the highest priority box"
    )


class PaletteMetadata(BaseModel):
    """Parameters and timing of a palette extraction."""
    color_format: str = Field(..., description="Channel layout the image was read as")
    quality: int = Field(..., ge=1, le=10, description="Sampling step in pixels")
    requested_colors: int = Field(..., ge=2, le=255, description="max_colors passed to the quantizer")
    returned_colors: int = Field(..., ge=0, description="Number of colors actually returned")
    width: int = Field(..., ge=0, description="Image width in pixels")
    height: int = Field(..., ge=0, description="Image height in pixels")
    duration_ms: float = Field(..., ge=0.0, description="Wall time spent quantizing")


class PaletteResponse(BaseModel):
    """Palette extraction report."""
    request_id: str = Field(..., description="Unique id of this extraction")
    palette: List[PaletteColor] = Field(..., description="Colors ordered by priority")
    metadata: PaletteMetadata = Field(..., description="Extraction parameters and timing")
