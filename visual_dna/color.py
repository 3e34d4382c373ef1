"""Color conversion utilities.

This module provides the color space conversions used by the palette
strategies. Separating these from the gene factory keeps them testable in
isolation.

Design Note:
    These are pure functions with no lab dependencies.
"""

from visual_dna.math_utils import js_round


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert HSL (each 0.0-1.0) to an RGB tuple of 0-255 ints.

    Args:
        hue: Hue value from 0.0 to 1.0 (wraps around like a color wheel)
        saturation: Color saturation from 0.0 (gray) to 1.0 (vivid)
        lightness: 0.0 (black) to 1.0 (white)

    Returns:
        Tuple of (R, G, B) values, each 0-255

    Example:
        >>> hsl_to_rgb(0.0, 1.0, 0.5)
        (255, 0, 0)
        >>> hsl_to_rgb(0.5, 0.0, 0.5)
        (128, 128, 128)
    """
    if saturation == 0:
        r = g = b = lightness
    else:
        if lightness < 0.5:
            q = lightness * (1 + saturation)
        else:
            q = lightness + saturation - lightness * saturation
        p = 2 * lightness - q
        r = _hue_to_channel(p, q, hue + 1 / 3)
        g = _hue_to_channel(p, q, hue)
        b = _hue_to_channel(p, q, hue - 1 / 3)

    return (js_round(r * 255), js_round(g * 255), js_round(b * 255))


def rgb_distance(a: tuple[float, float, float], b: tuple[float, float, float]) -> float:
    """Euclidean distance between two RGB triples (max ~441.67)."""
    return ((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2) ** 0.5
