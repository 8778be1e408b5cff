"""
Test configuration and fixtures for palettecut tests.
"""
import numpy as np
import pytest


# Four flat quadrants; every color lands in its own reduced cell.
QUADRANT_COLORS = [
    (200, 40, 40),
    (40, 160, 60),
    (30, 60, 190),
    (220, 200, 60),
]


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palettecut.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def primaries_rgb():
    """2x2 RGB buffer: red, green, blue, white."""
    return bytes([
        255, 0, 0,
        0, 255, 0,
        0, 0, 255,
        255, 255, 255,
    ])


@pytest.fixture
def quadrant_colors():
    return list(QUADRANT_COLORS)


@pytest.fixture
def quadrant_image_array():
    """32x32 RGB image made of four 16x16 flat quadrants."""
    img = np.zeros((32, 32, 3), dtype=np.uint8)
    img[:16, :16] = QUADRANT_COLORS[0]
    img[:16, 16:] = QUADRANT_COLORS[1]
    img[16:, :16] = QUADRANT_COLORS[2]
    img[16:, 16:] = QUADRANT_COLORS[3]
    return img


@pytest.fixture
def noise_image_array():
    """Deterministic 64x64 RGB noise."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
