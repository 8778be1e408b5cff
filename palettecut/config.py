"""
palettecut Configuration
Manages environment variables and defaults for the palette services.
"""
import numbers
import os


def _is_int(value) -> bool:
    # bool is an Integral subclass but never a valid count
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class Config:
    """Configuration class for palettecut."""

    # Palette defaults used when the caller omits them
    DEFAULT_QUALITY: int = int(os.environ.get("PALETTECUT_DEFAULT_QUALITY", "10"))
    DEFAULT_MAX_COLORS: int = int(os.environ.get("PALETTECUT_DEFAULT_MAX_COLORS", "10"))

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("PALETTECUT_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTECUT_METRICS_ENABLED", "1")))

    # Accepted ranges
    MIN_QUALITY: int = 1
    MAX_QUALITY: int = 10
    MIN_MAX_COLORS: int = 2
    MAX_MAX_COLORS: int = 255

    SUPPORTED_COLOR_FORMATS = ["rgb", "rgba", "argb", "bgr", "bgra"]

    @classmethod
    def validate_quality(cls, quality: int) -> bool:
        """Validate sampling stride."""
        return _is_int(quality) and cls.MIN_QUALITY <= quality <= cls.MAX_QUALITY

    @classmethod
    def validate_max_colors(cls, max_colors: int) -> bool:
        """Validate requested palette size."""
        return _is_int(max_colors) and cls.MIN_MAX_COLORS <= max_colors <= cls.MAX_MAX_COLORS

    @classmethod
    def validate_color_format(cls, color_format: str) -> bool:
        """Validate a channel layout tag."""
        return str(color_format).lower() in cls.SUPPORTED_COLOR_FORMATS


# Global config instance
config = Config()
