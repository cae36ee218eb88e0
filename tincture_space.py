# -*- coding: utf-8 -*-
"""
Tincture: Exact color space transforms and palette interpolation
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tincture_space.py — Color value types.

Every representation is an immutable three-component NamedTuple, so a color
is both attribute-accessible (``c.red``) and subscriptable (``c[0]``), and
unpacks like a plain tuple. Values are never shared or mutated; each
conversion in ``tincture_transform`` returns a fresh instance.

Float components are carried as ``numpy.float32`` by the transform engine.
Instances built by hand may hold Python floats; the engine narrows them on
entry.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, TypeAlias

__all__ = [
    "Rgb888",
    "URgb",
    "SRgb",
    "Hsl",
    "Hsv",
    "Xyz",
    "Lab",
    "ColorSpace",
]

# Packed 24-bit color in the low three bytes of a 32-bit word: 0x00RRGGBB.
Rgb888: TypeAlias = int


class URgb(NamedTuple):
    """Byte-triple RGB, each channel in [0, 255]."""
    red: int
    green: int
    blue: int


class SRgb(NamedTuple):
    """
    Gamma-encoded sRGB, each channel nominally in [0, 1].

    These are display values, not linear light; ``srgb_to_xyz`` applies the
    sRGB decode curve before the matrix.
    """
    red: float
    green: float
    blue: float


class Hsl(NamedTuple):
    """Hue in [0, 1) for 0-360 degrees; saturation and lightness in [0, 1]."""
    hue: float
    saturation: float
    lightness: float


class Hsv(NamedTuple):
    """Hue in [0, 1) for 0-360 degrees; saturation and value in [0, 1]."""
    hue: float
    saturation: float
    value: float


class Xyz(NamedTuple):
    """CIE 1931 tristimulus values relative to the D65 white point."""
    x: float
    y: float
    z: float


class Lab(NamedTuple):
    """CIE 1976 L*a*b*. Lightness in [0, 100]; a* and b* unbounded."""
    lightness: float
    a: float
    b: float


class ColorSpace(Enum):
    """Closed set of representations the engine converts between."""
    RGB888 = "rgb888"
    URGB = "urgb"
    SRGB = "srgb"
    HSL = "hsl"
    HSV = "hsv"
    XYZ = "xyz"
    LAB = "lab"

    @property
    def value_type(self) -> type:
        return _VALUE_TYPES[self]


_VALUE_TYPES: dict[ColorSpace, type] = {
    ColorSpace.RGB888: int,
    ColorSpace.URGB: URgb,
    ColorSpace.SRGB: SRgb,
    ColorSpace.HSL: Hsl,
    ColorSpace.HSV: Hsv,
    ColorSpace.XYZ: Xyz,
    ColorSpace.LAB: Lab,
}
