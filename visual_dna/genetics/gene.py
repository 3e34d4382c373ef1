"""Gene field definitions.

This module provides:
- NumericSemantic: the perturbation model a numeric gene mutates with
- NumericGene / BooleanGene / EnumGene / ColorGene: declarative, tagged
  specifications for every field of a gene group
- Rgba: the value type carried by color genes

Gene groups list their fields as specs, so mutation, crossover, the codec and
validation iterate the schema instead of inspecting runtime value types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


class NumericSemantic(Enum):
    """How a numeric gene is perturbed during mutation."""

    COLOR_CHANNEL = "color_channel"
    """0-255 color channel: wide additive noise, clamped to [0, 255]."""

    ALPHA = "alpha"
    """0-1 alpha channel: moderate additive noise, clamped to [0, 1]."""

    RATIO = "ratio"
    """Ratios, intensities and levels: clamped to [0, 1]."""

    SIZE = "size"
    """Sizes, radii and scales: noise grows with magnitude, floored at 1."""

    SPEED = "speed"
    """Speeds and velocities: noise grows with magnitude, sign may flip."""

    OTHER = "other"
    """Any other scalar: noise grows with magnitude, unclamped."""


@dataclass(frozen=True)
class NumericGene:
    """A scalar gene.

    Attributes:
        name: Attribute name on the gene group
        semantic: Perturbation model used by mutation
        integral: Whether values are whole numbers (counts, durations)
    """

    name: str
    semantic: NumericSemantic = NumericSemantic.OTHER
    integral: bool = False


@dataclass(frozen=True)
class BooleanGene:
    name: str


@dataclass(frozen=True)
class EnumGene:
    """A categorical gene drawn from a fixed enumeration.

    Attributes:
        name: Attribute name on the gene group
        choices: Legal values
        resample: Whether mutation may resample this gene; other enums are
            left unchanged by mutation
    """

    name: str
    choices: Tuple[str, ...]
    resample: bool = False


@dataclass(frozen=True)
class ColorGene:
    """An RGB(A) color gene; each channel mutates independently."""

    name: str
    has_alpha: bool = True


GeneSpec = Union[NumericGene, BooleanGene, EnumGene, ColorGene]


@dataclass
class Rgba:
    """Color value: 0-255 integer channels and a 0-1 alpha."""

    r: int
    g: int
    b: int
    a: float = 1.0

    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def copy(self) -> "Rgba":
        return Rgba(self.r, self.g, self.b, self.a)

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}


COLOR_CHANNELS: Tuple[str, ...] = ("r", "g", "b")
