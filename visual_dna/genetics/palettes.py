"""Palette strategies for color genes.

Each strategy maps a color sub-seed to four colors (primary, secondary,
accent, background). One strategy is chosen per genome with
``select_palette``. Elemental colors use a separate table keyed by element.
"""

import math
from typing import Callable, Dict, List, NamedTuple, Tuple

from visual_dna.color import hsl_to_rgb
from visual_dna.genetics.gene import Rgba
from visual_dna.math_utils import clamp


class Palette(NamedTuple):
    primary: Rgba
    secondary: Rgba
    accent: Rgba
    background: Rgba


class ElementalPalette(NamedTuple):
    primary: Rgba
    secondary: Rgba
    accent: Rgba


GOLDEN_ANGLE = 137.5


def rainbow_palette(seed: float, coherence: float) -> Palette:
    """Golden-angle hue with complementary and square-offset hues."""
    hue = (seed * GOLDEN_ANGLE) % 360
    hue2 = (hue + 180) % 360
    hue3 = (hue + 90) % 360
    hue4 = (hue + 270) % 360

    def hsl(h: float, s: float, l: float) -> Rgba:
        return Rgba(*hsl_to_rgb(h / 360, s, l), a=0.8)

    return Palette(
        primary=hsl(hue, 0.8, 0.5),
        secondary=hsl(hue2, 0.7, 0.5),
        accent=hsl(hue3, 0.9, 0.6),
        background=hsl(hue4, 0.3, 0.2),
    )


def temperature_palette(seed: float, coherence: float) -> Palette:
    """Cool (blue/green) below 0.5, warm (red/orange) above."""
    temp = (seed % 100) / 100
    if temp < 0.5:
        r = math.floor(temp * 100)
        g = math.floor(100 + temp * 155)
        b = math.floor(200 + temp * 55)
    else:
        r = math.floor(200 + (temp - 0.5) * 110)
        g = math.floor(100 - (temp - 0.5) * 100)
        b = math.floor(50 - (temp - 0.5) * 50)

    return Palette(
        primary=Rgba(r, g, b, 0.8),
        secondary=Rgba(math.floor(r * 0.8), math.floor(g * 0.8), math.floor(b * 0.8), 0.6),
        accent=Rgba(min(255, r + 50), min(255, g + 50), min(255, b + 50), 0.9),
        background=Rgba(math.floor(r * 0.2), math.floor(g * 0.2), math.floor(b * 0.2), 0.3),
    )


EMOTION_PALETTES: Dict[str, List[Tuple[int, int, int]]] = {
    "joy": [(255, 200, 0), (255, 150, 0), (255, 255, 100), (255, 100, 0)],
    "calm": [(100, 150, 255), (150, 200, 255), (200, 220, 255), (50, 100, 200)],
    "energy": [(255, 0, 100), (255, 100, 0), (255, 0, 200), (150, 0, 50)],
    "mystery": [(100, 0, 200), (150, 0, 255), (200, 100, 255), (50, 0, 100)],
    "nature": [(0, 200, 100), (100, 255, 100), (0, 150, 50), (0, 100, 50)],
}
_EMOTIONS = tuple(EMOTION_PALETTES)


def emotion_palette(seed: float, coherence: float) -> Palette:
    emotion = _EMOTIONS[abs(math.floor(seed)) % len(_EMOTIONS)]
    colors = EMOTION_PALETTES[emotion]
    return Palette(
        primary=Rgba(*colors[0], a=0.8),
        secondary=Rgba(*colors[1], a=0.6),
        accent=Rgba(*colors[2], a=0.9),
        background=Rgba(*colors[3], a=0.3),
    )


# (base rgb, variance): nebula, deep space, star, black hole
COSMIC_PALETTES: List[Tuple[Tuple[int, int, int], int]] = [
    ((255, 100, 200), 80),
    ((50, 0, 100), 60),
    ((255, 200, 100), 100),
    ((20, 20, 40), 30),
]


def _color_variant(base: Tuple[int, int, int], variance: int, seed: float) -> Rgba:
    half = variance / 2

    def channel(value: int, offset: float) -> int:
        return math.floor(clamp(value + (offset % variance) - half, 0, 255))

    return Rgba(
        r=channel(base[0], seed),
        g=channel(base[1], seed * 1.1),
        b=channel(base[2], seed * 1.2),
        a=0.5 + (seed % 50) / 100,
    )


def cosmic_palette(seed: float, coherence: float) -> Palette:
    base, variance = COSMIC_PALETTES[abs(math.floor(seed)) % len(COSMIC_PALETTES)]
    return Palette(
        primary=_color_variant(base, variance, seed),
        secondary=_color_variant(base, variance, seed * 1.1),
        accent=_color_variant(base, variance, seed * 1.2),
        background=_color_variant((0, 0, 0), 50, seed * 1.3),
    )


def quantum_palette(seed: float, coherence: float) -> Palette:
    """Prime-multiplied noise channels; alpha follows quantum coherence."""

    def noise(p1: int, p2: int, p3: int, alpha: float) -> Rgba:
        return Rgba(
            math.floor((seed * p1) % 256),
            math.floor((seed * p2) % 256),
            math.floor((seed * p3) % 256),
            alpha,
        )

    return Palette(
        primary=noise(37, 73, 97, 0.7 + coherence * 0.3),
        secondary=noise(101, 103, 107, 0.5 + coherence * 0.5),
        accent=noise(109, 113, 127, 0.8),
        background=noise(131, 137, 139, 0.2),
    )


def dimensional_palette(seed: float, coherence: float) -> Palette:
    """Phase-shifted sine channels over 1 to 7 dimensions."""
    dimension = (seed % 7) + 1
    phase = (seed % 360) * math.pi / 180

    r = math.floor(128 + 127 * math.sin(phase * dimension))
    g = math.floor(128 + 127 * math.sin(phase * dimension + math.pi * 2 / 3))
    b = math.floor(128 + 127 * math.sin(phase * dimension + math.pi * 4 / 3))

    return Palette(
        primary=Rgba(r, g, b, 0.8),
        secondary=Rgba(
            math.floor(r * 0.7 + 50), math.floor(g * 0.7 + 50), math.floor(b * 0.7 + 50), 0.6
        ),
        accent=Rgba(min(255, r + 100), min(255, g + 100), min(255, b + 100), 0.9),
        background=Rgba(math.floor(r * 0.3), math.floor(g * 0.3), math.floor(b * 0.3), 0.3),
    )


PaletteStrategy = Callable[[float, float], Palette]

PALETTE_STRATEGIES: Dict[str, PaletteStrategy] = {
    "rainbow": rainbow_palette,
    "temperature": temperature_palette,
    "emotion": emotion_palette,
    "cosmic": cosmic_palette,
    "quantum": quantum_palette,
    "dimensional": dimensional_palette,
}
PALETTE_NAMES: Tuple[str, ...] = tuple(PALETTE_STRATEGIES)


def select_palette(seed: float) -> str:
    """Name of the strategy used for a color sub-seed."""
    return PALETTE_NAMES[math.floor(seed * 0.001) % len(PALETTE_NAMES)]


def build_palette(seed: float, coherence: float = 0.5) -> Palette:
    return PALETTE_STRATEGIES[select_palette(seed)](seed, coherence)


# =============================================================================
# Elemental colors
# =============================================================================

# element -> (primary base, variance channel index, variance scale, secondary, accent)
_ELEMENT_COLORS: Dict[str, Tuple[Tuple[int, int, int], int, int, Tuple[int, int, int], Tuple[int, int, int]]] = {
    "fire": ((255, 100, 30), 1, 100, (255, 150, 0), (255, 50, 0)),
    "ice": ((100, 200, 255), 1, 55, (150, 220, 255), (200, 240, 255)),
    "lightning": ((255, 255, 100), 2, 100, (200, 200, 255), (255, 255, 255)),
    "shadow": ((50, 50, 100), 0, 50, (100, 50, 150), (150, 100, 200)),
    "light": ((255, 255, 200), 2, 55, (255, 240, 180), (255, 255, 255)),
    "holy": ((255, 255, 200), 2, 55, (255, 240, 180), (255, 255, 255)),
    "nature": ((50, 200, 50), 0, 100, (100, 255, 100), (150, 255, 200)),
    "void": ((20, 20, 20), 2, 50, (50, 30, 80), (100, 50, 150)),
    "crystal": ((200, 255, 200), 2, 55, (150, 200, 255), (255, 255, 255)),
    "plasma": ((255, 100, 255), 1, 100, (200, 50, 200), (255, 0, 255)),
}


def elemental_colors(element: str, seed: float) -> ElementalPalette:
    """Primary/secondary/accent colors for an element.

    The primary color varies with the seed; unknown elements get a
    seed-derived grey-ish palette.
    """
    variance = (seed % 50) / 100

    if element == "quantum":
        level = 100 + math.floor(variance * 155)
        return ElementalPalette(
            primary=Rgba(level, level, level),
            secondary=Rgba(255, 200, 255),
            accent=Rgba(200, 255, 200),
        )

    entry = _ELEMENT_COLORS.get(element)
    if entry is None:
        return ElementalPalette(
            primary=Rgba(
                100 + math.floor(variance * 155),
                100 + math.floor((seed * 0.1) % 155),
                100 + math.floor((seed * 0.2) % 155),
            ),
            secondary=Rgba(150, 150, 150),
            accent=Rgba(200, 200, 200),
        )

    base, channel, scale, secondary, accent = entry
    primary = list(base)
    primary[channel] += math.floor(variance * scale)
    return ElementalPalette(
        primary=Rgba(*primary),
        secondary=Rgba(*secondary),
        accent=Rgba(*accent),
    )
