# -*- coding: utf-8 -*-
"""
Tincture: Exact color space transforms and palette interpolation
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Color Transformation Engine
===========================
Pure, stateless conversions between packed RGB, byte RGB, sRGB, HSL, HSV,
CIE XYZ and CIE L*a*b*.

Every conversion is total: no function raises on numeric input, nothing is
validated, and only the final sRGB encode step clamps. Integer outputs are
masked to 8 bits per channel, so out-of-range floats wrap silently.

Two float-to-byte paths exist on purpose and must not be unified:

- ``srgb_to_rgb888`` truncates ``channel * 255``.
- ``srgb_to_urgb`` rounds ``channel * 255`` (ties away from zero).

For inputs that are not exact multiples of 1/255 the two disagree.

The public surface is one function per ordered pair (``srgb_to_xyz`` ...)
plus overloaded ``to_*`` entry points that dispatch on the argument type:

    >>> to_urgb(0x123456)
    URgb(red=18, green=52, blue=86)
    >>> to_rgb888(to_urgb(0x123456)) == 0x123456
    True

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE 15:2004 "Colorimetry"
    - http://www.brucelindbloom.com/index.html?Eqn_RGB_XYZ_Matrix.html
    - https://en.wikipedia.org/wiki/HSL_and_HSV#Hue_and_chroma
"""

from functools import singledispatch
from numbers import Integral
from typing import Final, Tuple

import numpy as np

from tincture_math import (
    ArrayF32,
    as_vector,
    decode_srgb,
    encode_srgb,
    f32,
    floorf,
    isnanf,
    lab_f,
    lab_f_inv,
    matvec3,
    maxf,
    minf,
    roundf,
    wrapf,
)
from tincture_space import Hsl, Hsv, Lab, Rgb888, SRgb, URgb, Xyz

__all__ = [
    # --- Constants ---
    "REF_WHITE_D65",
    "M_SRGB_TO_XYZ",
    "M_XYZ_TO_SRGB",

    # --- Pairwise conversions ---
    "rgb888_to_urgb",
    "urgb_to_rgb888",
    "rgb888_to_srgb",
    "urgb_to_srgb",
    "srgb_to_rgb888",
    "srgb_to_urgb",
    "srgb_to_xyz",
    "xyz_to_srgb",
    "xyz_to_lab",
    "lab_to_xyz",
    "srgb_to_hsl",
    "srgb_to_hsv",
    "hsl_to_srgb",
    "hsv_to_srgb",

    # --- Overloaded entry points ---
    "to_rgb888",
    "to_urgb",
    "to_srgb",
    "to_hsl",
    "to_hsv",
    "to_xyz",
    "to_lab",
]

# --- Constants ---

# CIE 1931 2 degree, illuminant D65, Y = 1.
# Derived from the xy chromaticity (0.312727, 0.329023): X = x/y,
# Z = (1 - x - y)/y. These are the same four-to-six figure values d3-color
# uses; more digits make the white point drift off a* = b* = 0.
REF_WHITE_D65: Final[Xyz] = Xyz(f32(0.95047), f32(1.0), f32(1.08883))
_WHITE: Final[ArrayF32] = np.array(REF_WHITE_D65, dtype=np.float32)

# Row-major, applied to column vectors. Defined by IEC 61966-2-1.
M_SRGB_TO_XYZ: Final[ArrayF32] = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041]
], dtype=np.float32)

M_XYZ_TO_SRGB: Final[ArrayF32] = np.array([
    [ 3.2404542, -1.5371385, -0.4985314],
    [-0.9692660,  1.8760108,  0.0415560],
    [ 0.0556434, -0.2040259,  1.0572252]
], dtype=np.float32)

_BYTE_MAX: Final[np.float32] = f32(255.0)

# Which of (chroma, x, 0) lands in (R, G, B) for each 60 degree hue segment.
_SEGMENT_ORDER: Final[Tuple[Tuple[int, int, int], ...]] = (
    (0, 1, 2),  # 0: (C, X, 0)
    (1, 0, 2),  # 1: (X, C, 0)
    (2, 0, 1),  # 2: (0, C, X)
    (2, 1, 0),  # 3: (0, X, C)
    (1, 2, 0),  # 4: (X, 0, C)
    (0, 2, 1),  # 5: (C, 0, X)
)


# =============================================================================
# 1. INTEGER <-> FLOAT CHANNELS
# =============================================================================

def _to_int(value: np.float32) -> int:
    # Non-finite floats convert to 0, matching what a hardware float->int
    # conversion leaves in the low byte.
    if not np.isfinite(value):
        return 0
    return int(value)

def _truncate_byte(channel: float) -> int:
    return _to_int(f32(channel) * _BYTE_MAX) & 0xFF

def _round_byte(channel: float) -> int:
    return _to_int(roundf(f32(channel) * _BYTE_MAX)) & 0xFF

def rgb888_to_urgb(rgb888: Rgb888) -> URgb:
    """Split ``0x00RRGGBB`` into its three bytes. The top byte is ignored."""
    value = int(rgb888)
    return URgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

def urgb_to_rgb888(urgb: URgb) -> Rgb888:
    """Pack three bytes into ``0x00RRGGBB``."""
    red, green, blue = (int(c) & 0xFF for c in urgb)
    return (red << 16) | (green << 8) | blue

def rgb888_to_srgb(rgb888: Rgb888) -> SRgb:
    return urgb_to_srgb(rgb888_to_urgb(rgb888))

def urgb_to_srgb(urgb: URgb) -> SRgb:
    return SRgb(*(f32(int(c) & 0xFF) / _BYTE_MAX for c in urgb))

def srgb_to_rgb888(srgb: SRgb) -> Rgb888:
    """
    Pack sRGB into ``0x00RRGGBB`` by *truncating* ``channel * 255``.

    Use ``srgb_to_urgb`` for the rounding variant.
    """
    red, green, blue = (_truncate_byte(c) for c in srgb)
    return (red << 16) | (green << 8) | blue

def srgb_to_urgb(srgb: SRgb) -> URgb:
    """Convert sRGB to bytes by *rounding* ``channel * 255``, ties away from zero."""
    return URgb(*(_round_byte(c) for c in srgb))


# =============================================================================
# 2. sRGB <-> XYZ <-> LAB
# =============================================================================

def srgb_to_xyz(srgb: SRgb) -> Xyz:
    """
    Converts gamma-encoded sRGB to XYZ (D65).

    The sRGB decode curve is applied per channel, then the linear channels
    go through ``M_SRGB_TO_XYZ`` with float64 accumulation. Input is not
    clamped.

    Args:
        srgb: Gamma-encoded sRGB color.

    Returns:
        XYZ tristimulus values relative to ``REF_WHITE_D65``.
    """
    linear = decode_srgb(as_vector(srgb))
    return Xyz(*matvec3(M_SRGB_TO_XYZ, linear))

def xyz_to_srgb(xyz: Xyz) -> SRgb:
    """
    Converts XYZ (D65) to gamma-encoded sRGB.

    Linear channels are not clamped; the encode curve clamps its output to
    [0, 1], which is the only clamping anywhere in the engine.

    Args:
        xyz: XYZ tristimulus values relative to ``REF_WHITE_D65``.

    Returns:
        Gamma-encoded sRGB color.
    """
    linear = matvec3(M_XYZ_TO_SRGB, as_vector(xyz))
    return SRgb(*encode_srgb(linear))

def xyz_to_lab(xyz: Xyz) -> Lab:
    """
    Converts XYZ to CIELAB against the D65 white point.

        L* = 116 f(Y/Yn) - 16
        a* = 500 (f(X/Xn) - f(Y/Yn))
        b* = 200 (f(Y/Yn) - f(Z/Zn))
    """
    fx, fy, fz = lab_f(as_vector(xyz) / _WHITE)
    return Lab(
        f32(116.0) * fy - f32(16.0),
        f32(500.0) * (fx - fy),
        f32(200.0) * (fy - fz),
    )

def lab_to_xyz(lab: Lab) -> Xyz:
    """
    Converts CIELAB to XYZ against the D65 white point.

    A NaN a* (or b*) contributes a zero offset, so X (or Z) falls back to
    the achromatic value instead of turning NaN. NaN lightness still
    propagates.
    """
    lightness, a, b = (f32(c) for c in lab)
    fy = (lightness + f32(16.0)) / f32(116.0)
    x_offset = f32(0.0) if isnanf(a) else a / f32(500.0)
    z_offset = f32(0.0) if isnanf(b) else b / f32(200.0)

    f_xyz = lab_f_inv(as_vector((fy + x_offset, fy, fy - z_offset)))
    return Xyz(*(_WHITE * f_xyz))


# =============================================================================
# 3. sRGB <-> HSL / HSV
# =============================================================================

def _hue_and_range(srgb: SRgb) -> Tuple[np.float32, np.float32, np.float32, np.float32]:
    """
    Shared hue derivation for HSL and HSV.

    Returns:
        ``(hue, max, min, max - min)`` with hue normalized to [0, 1).
    """
    red, green, blue = (f32(c) for c in srgb)
    hi = maxf(red, green, blue)
    lo = minf(red, green, blue)
    dv = hi - lo

    if dv == 0.0:
        hue = f32(0.0)
    elif red == hi:
        hue = wrapf((green - blue) / dv, 6.0)
    elif green == hi:
        hue = f32(2.0) + (blue - red) / dv
    else:
        hue = f32(4.0) + (red - green) / dv
    return hue / f32(6.0), hi, lo, dv

def srgb_to_hsl(srgb: SRgb) -> Hsl:
    hue, hi, lo, dv = _hue_and_range(srgb)
    lightness = (hi + lo) * f32(0.5)
    if dv == 0.0:
        saturation = f32(0.0)
    else:
        saturation = dv / (f32(1.0) - abs(f32(2.0) * lightness - f32(1.0)))
    return Hsl(hue, saturation, lightness)

def srgb_to_hsv(srgb: SRgb) -> Hsv:
    hue, hi, _lo, dv = _hue_and_range(srgb)
    saturation = f32(0.0) if hi == 0.0 else dv / hi
    return Hsv(hue, saturation, hi)

def _hue_chroma_to_srgb(hue: float, chroma: np.float32, dv: np.float32) -> SRgb:
    """
    Place chroma on the hue hexagon and lift every channel by ``dv``.

    The segment index wraps modulo 6, so hue 1.0 lands back on red. A
    non-finite hue selects no segment and yields ``(dv, dv, dv)``.
    """
    hue_p = f32(hue) * f32(360.0) / f32(60.0)
    x = chroma * (f32(1.0) - abs(wrapf(hue_p, 2.0) - f32(1.0)))
    parts = (chroma, x, f32(0.0))

    if np.isfinite(hue_p):
        order = _SEGMENT_ORDER[int(floorf(hue_p)) % 6]
        rgb = tuple(parts[i] for i in order)
    else:
        rgb = (f32(0.0), f32(0.0), f32(0.0))
    return SRgb(*(channel + dv for channel in rgb))

def hsv_to_srgb(hsv: Hsv) -> SRgb:
    hue, saturation, value = (f32(c) for c in hsv)
    chroma = value * saturation
    return _hue_chroma_to_srgb(hue, chroma, value - chroma)

def hsl_to_srgb(hsl: Hsl) -> SRgb:
    hue, saturation, lightness = (f32(c) for c in hsl)
    chroma = (f32(1.0) - abs(f32(2.0) * lightness - f32(1.0))) * saturation
    return _hue_chroma_to_srgb(hue, chroma, lightness - f32(0.5) * chroma)


# =============================================================================
# 4. OVERLOADED ENTRY POINTS
# =============================================================================
# Each to_* dispatches on the type of its single argument. Passing a type
# with no registered conversion is a programming error and raises TypeError.

def _unsupported(target: str, color: object) -> TypeError:
    return TypeError(f"No conversion from {type(color).__name__} to {target}")

@singledispatch
def to_rgb888(color: object) -> Rgb888:
    raise _unsupported("Rgb888", color)

to_rgb888.register(URgb, urgb_to_rgb888)
to_rgb888.register(SRgb, srgb_to_rgb888)

@singledispatch
def to_urgb(color: object) -> URgb:
    raise _unsupported("URgb", color)

to_urgb.register(Integral, rgb888_to_urgb)
to_urgb.register(SRgb, srgb_to_urgb)

@singledispatch
def to_srgb(color: object) -> SRgb:
    raise _unsupported("SRgb", color)

@to_srgb.register
def _(color: SRgb) -> SRgb:
    return SRgb(*(f32(c) for c in color))

to_srgb.register(Integral, rgb888_to_srgb)
to_srgb.register(URgb, urgb_to_srgb)
to_srgb.register(Hsl, hsl_to_srgb)
to_srgb.register(Hsv, hsv_to_srgb)
to_srgb.register(Xyz, xyz_to_srgb)

@singledispatch
def to_hsl(color: object) -> Hsl:
    raise _unsupported("Hsl", color)

to_hsl.register(SRgb, srgb_to_hsl)

@singledispatch
def to_hsv(color: object) -> Hsv:
    raise _unsupported("Hsv", color)

to_hsv.register(SRgb, srgb_to_hsv)

@singledispatch
def to_xyz(color: object) -> Xyz:
    raise _unsupported("Xyz", color)

to_xyz.register(SRgb, srgb_to_xyz)
to_xyz.register(Lab, lab_to_xyz)

@singledispatch
def to_lab(color: object) -> Lab:
    raise _unsupported("Lab", color)

to_lab.register(Xyz, xyz_to_lab)


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Tincture Transform Engine Validation ---")

    print("1. Packed / byte round trip...")
    urgb = to_urgb(0x00123456)
    ok = urgb == URgb(0x12, 0x34, 0x56) and to_rgb888(urgb) == 0x00123456
    print(f"   {urgb} -> {to_rgb888(urgb):#08x} {'[PASS]' if ok else '[FAIL]'}")

    print("2. White point...")
    white_xyz = to_xyz(SRgb(1.0, 1.0, 1.0))
    err = np.max(np.abs(np.array(white_xyz) - _WHITE))
    print(f"   XYZ(white) = {white_xyz}  err {err:.2e} "
          f"{'[PASS]' if err < 1e-6 else '[FAIL]'}")
    white_lab = to_lab(white_xyz)
    err = np.max(np.abs(np.array(white_lab) - np.array([100.0, 0.0, 0.0])))
    print(f"   Lab(white) = {white_lab}  err {err:.2e} "
          f"{'[PASS]' if err < 1e-4 else '[FAIL]'}")

    print("3. HSL / HSV round trip over the byte cube (step 15)...")
    worst = 0.0
    for r in range(0, 256, 15):
        for g in range(0, 256, 15):
            for b in range(0, 256, 15):
                srgb = to_srgb(URgb(r, g, b))
                for there in (to_hsl(srgb), to_hsv(srgb)):
                    back = to_srgb(there)
                    worst = max(worst, float(np.max(np.abs(np.subtract(back, srgb)))))
    print(f"   Max Error: {worst:.2e} {'[PASS]' if worst < 1e-5 else '[FAIL]'}")

    print("4. XYZ -> Lab -> XYZ...")
    xyz_in = to_xyz(to_srgb(0xf0e68c))
    xyz_out = to_xyz(to_lab(xyz_in))
    err = float(np.max(np.abs(np.subtract(xyz_in, xyz_out))))
    print(f"   Max Error: {err:.2e} {'[PASS]' if err < 1e-6 else '[FAIL]'}")
