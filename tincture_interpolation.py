# -*- coding: utf-8 -*-
"""
Tincture: Exact color space transforms and palette interpolation
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Palette Interpolation
=====================
Maps a palette and a position ``t`` (nominally [0, 1]) to one sRGB color.

- Nearest neighbour picks entry ``round((size - 1) * t)``.
- Linear interpolation blends the two entries around ``(size - 1) * t``,
  either directly in sRGB or after projecting both endpoints into HSV, HSL,
  XYZ or Lab. The blended value is projected back to sRGB.

Hue is blended as a plain number. Endpoints with hues 0.1 and 0.9 meet at
0.5 (cyan), not at 0.0 (red): the sweep goes the long way around the wheel.

Positions are not clamped. A ``t`` outside [0, 1] that lands outside the
palette raises ``IndexError``; negative indices never wrap.
"""

from typing import Callable, Dict, Final, Literal, NamedTuple, Tuple

import numpy as np

from tincture_math import ceilf, f32, floorf, roundf
from tincture_palette import Palette
from tincture_space import ColorSpace, Lab, SRgb
from tincture_transform import (
    hsl_to_srgb,
    hsv_to_srgb,
    lab_to_xyz,
    srgb_to_hsl,
    srgb_to_hsv,
    srgb_to_xyz,
    to_srgb,
    xyz_to_lab,
    xyz_to_srgb,
)

__all__ = [
    "InterpolationMethod",
    "interpolate",
    "interpolate_nearest_neighbor",
    "interpolate_linear",
    "interpolate_hsv_linear",
    "interpolate_hsl_linear",
    "interpolate_xyz_linear",
    "interpolate_lab_linear",
]

InterpolationMethod = Literal["nearest", "linear"]


def _srgb_to_lab(srgb: SRgb) -> Lab:
    return xyz_to_lab(srgb_to_xyz(srgb))

def _lab_to_srgb(lab: Lab) -> SRgb:
    return xyz_to_srgb(lab_to_xyz(lab))


# (into the space, back to sRGB) for every space a palette can be blended in.
_CONVERTERS: Final[Dict[ColorSpace, Tuple[Callable[[SRgb], NamedTuple], Callable[..., SRgb]]]] = {
    ColorSpace.SRGB: (to_srgb, to_srgb),
    ColorSpace.HSV: (srgb_to_hsv, hsv_to_srgb),
    ColorSpace.HSL: (srgb_to_hsl, hsl_to_srgb),
    ColorSpace.XYZ: (srgb_to_xyz, xyz_to_srgb),
    ColorSpace.LAB: (_srgb_to_lab, _lab_to_srgb),
}


def _entry(palette: Palette, index: np.float32) -> SRgb:
    size = len(palette)
    if not np.isfinite(index) or not 0 <= index < size:
        raise IndexError(f"Palette index {index} out of range for size {size}")
    return palette[int(index)]

def _scaled_position(palette: Palette, t: float) -> np.float32:
    return f32(len(palette) - 1) * f32(t)


def interpolate_nearest_neighbor(palette: Palette, t: float) -> SRgb:
    """
    Pick the palette color closest to ``t``.

    The index is ``round((size - 1) * t)`` with ties away from zero, so on a
    three-color palette ``t = 0.25`` selects entry 1.
    """
    return _entry(palette, roundf(_scaled_position(palette, t)))

def _interpolate_space_linear(palette: Palette, t: float, space: ColorSpace) -> SRgb:
    into, back = _CONVERTERS[space]
    indexf = _scaled_position(palette, t)
    i_0 = floorf(indexf)
    i_1 = ceilf(indexf)
    remainder = indexf - i_0

    p0 = into(_entry(palette, i_0))
    p1 = into(_entry(palette, i_1))
    keep = f32(1.0) - remainder
    lerp = type(p0)._make(a * keep + b * remainder for a, b in zip(p0, p1))
    return back(lerp)

def interpolate_linear(palette: Palette, t: float) -> SRgb:
    """Interpolate linearly in sRGB."""
    return _interpolate_space_linear(palette, t, ColorSpace.SRGB)

def interpolate_hsv_linear(palette: Palette, t: float) -> SRgb:
    """Interpolate linearly in HSV and return an sRGB color."""
    return _interpolate_space_linear(palette, t, ColorSpace.HSV)

def interpolate_hsl_linear(palette: Palette, t: float) -> SRgb:
    """Interpolate linearly in HSL and return an sRGB color."""
    return _interpolate_space_linear(palette, t, ColorSpace.HSL)

def interpolate_xyz_linear(palette: Palette, t: float) -> SRgb:
    """Interpolate linearly in CIE XYZ and return an sRGB color."""
    return _interpolate_space_linear(palette, t, ColorSpace.XYZ)

def interpolate_lab_linear(palette: Palette, t: float) -> SRgb:
    """Interpolate linearly in CIE L*a*b* and return an sRGB color."""
    return _interpolate_space_linear(palette, t, ColorSpace.LAB)


def interpolate(
    palette: Palette,
    t: float,
    space: ColorSpace = ColorSpace.SRGB,
    method: InterpolationMethod = "linear",
) -> SRgb:
    """
    Single entry point over every interpolation mode.

    Args:
        palette: Control points; must hold at least one color.
        t: Position along the palette, nominally [0, 1].
        space: Space to blend in for ``method="linear"``. Must be one of
            SRGB, HSV, HSL, XYZ or LAB.
        method: ``"nearest"`` or ``"linear"``. ``space`` has no effect on
            ``"nearest"``, which always returns a palette entry.

    Returns:
        The interpolated sRGB color.

    Raises:
        ValueError: Unknown method, or a space that cannot be blended in.
        IndexError: ``t`` maps outside the palette.
    """
    if method == "nearest":
        return interpolate_nearest_neighbor(palette, t)
    if method != "linear":
        raise ValueError(f"Unknown interpolation method: {method}")
    if space not in _CONVERTERS:
        raise ValueError(f"Cannot interpolate in {space!r}; "
                         f"expected one of {[s.name for s in _CONVERTERS]}")
    return _interpolate_space_linear(palette, t, space)
