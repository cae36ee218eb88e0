# -*- coding: utf-8 -*-
"""
Tincture: Exact color space transforms and palette interpolation
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Numeric Primitives
==================
Single-precision scalar helpers and the Numba-compiled kernels that the
transform engine is built on.

Everything the engine computes is carried as ``numpy.float32`` so that
results reproduce a single-precision reference to within one or two ULP.
Two places deliberately widen:

1. ``matvec3`` accumulates its three products in float64 before narrowing,
   which removes most of the summation error of a float32 dot product.
2. The per-channel transfer kernels evaluate their power terms in float64
   and narrow on store.

Rounding follows libm (``round`` is half away from zero, not banker's
rounding), and the modulo used for hue wrapping is floored so that the
result carries the sign of the divisor.
"""

from typing import Final, TypeAlias, Union

import numpy as np
import numpy.typing as npt
from numba import njit

__all__ = [
    # --- Type Aliases ---
    "ArrayF32",
    "Scalar",

    # --- Constants ---
    "LAB_DELTA",
    "LAB_EPSILON",
    "LAB_OFFSET",

    # --- Configuration ---
    "set_strict_ieee",
    "is_strict_ieee",

    # --- Scalar primitives ---
    "f32",
    "powf",
    "roundf",
    "floorf",
    "ceilf",
    "wrapf",
    "isnanf",
    "clampf",
    "minf",
    "maxf",

    # --- Vector primitives ---
    "as_vector",
    "matvec3",
    "encode_srgb",
    "decode_srgb",
    "lab_f",
    "lab_f_inv",
]

# --- Type Aliases ---
ArrayF32: TypeAlias = npt.NDArray[np.float32]
Scalar: TypeAlias = Union[float, int, np.floating, np.integer]

# --- Exact Rational Lab Constants ---
# delta = 6/29 is where f(t) switches between the cube root and the linear
# segment; epsilon = delta^3 is the same threshold on the t axis.
LAB_DELTA: Final[float] = 6.0 / 29.0
LAB_EPSILON: Final[float] = LAB_DELTA * LAB_DELTA * LAB_DELTA
LAB_OFFSET: Final[float] = 4.0 / 29.0
_LAB_SLOPE: Final[float] = (1.0 / LAB_DELTA) * (1.0 / LAB_DELTA) / 3.0
_LAB_SLOPE_INV: Final[float] = 3.0 * LAB_DELTA * LAB_DELTA

# sRGB transfer constants (IEC 61966-2-1)
_GAMMA_A: Final[float] = 0.055
_GAMMA_EXP: Final[float] = 2.4


# --- Runtime Configuration ---
# Strict mode (default) runs every kernel with fastmath=False so results are
# reproducible across machines. Fast mode allows FP reassociation.
#
# Toggle at runtime via:
#     import tincture_math as tm
#     tm.set_strict_ieee(False)  # fastmath kernels
#     tm.set_strict_ieee(True)   # back to strict (default)
_STRICT_IEEE: bool = True

def set_strict_ieee(enabled: bool = True) -> None:
    """
    Toggle between strict IEEE 754 (default) and fastmath Numba kernels.

    Fast mode may change the last bit of matrix products and transfer
    curves, which is enough to break exact round-trip expectations on
    packed RGB. Leave it on unless throughput matters more than
    reproducibility.

    Args:
        enabled: If True, use strict IEEE mode.
    """
    global _STRICT_IEEE
    _STRICT_IEEE = bool(enabled)

def is_strict_ieee() -> bool:
    """Returns True when the strict kernels are active."""
    return _STRICT_IEEE


# =============================================================================
# 1. SCALAR PRIMITIVES
# =============================================================================

def f32(value: Scalar) -> np.float32:
    """Narrow a Python or NumPy number to float32."""
    return np.float32(value)

def powf(base: Scalar, exponent: Scalar) -> np.float32:
    """Scalar form of the ``v ** (1/2.4)`` step in the ``_encode_srgb_*`` kernels."""
    return np.float32(np.power(np.float32(base), np.float32(exponent)))

def roundf(value: Scalar) -> np.float32:
    """
    Round to nearest, ties away from zero (C ``roundf`` semantics).

    The ``+ 0.5`` step is taken in float64; in float32 the value just below
    0.5 would otherwise round up to 1.0.
    """
    v = float(value)
    return np.float32(np.copysign(np.floor(abs(v) + 0.5), v))

def floorf(value: Scalar) -> np.float32:
    return np.floor(np.float32(value))

def ceilf(value: Scalar) -> np.float32:
    return np.ceil(np.float32(value))

def wrapf(value: Scalar, divisor: Scalar) -> np.float32:
    """
    Floored float modulo; the result takes the sign of ``divisor``.

    A tiny negative ``value`` rounds up to exactly ``divisor`` in float32;
    that case folds to 0 so the result stays in [0, divisor).
    """
    d = np.float32(divisor)
    r = np.mod(np.float32(value), d)
    return np.float32(0.0) if r == d else r

def isnanf(value: Scalar) -> bool:
    return bool(np.isnan(value))

def clampf(value: Scalar, low: float = 0.0, high: float = 1.0) -> np.float32:
    """
    Clamp to [low, high]. NaN passes through unchanged.

    Scalar form of the output clamp in the ``_encode_srgb_*`` kernels.
    """
    v = np.float32(value)
    if v < low:
        return np.float32(low)
    if v > high:
        return np.float32(high)
    return v

def minf(first: Scalar, *rest: Scalar) -> np.float32:
    return np.float32(min(first, *rest)) if rest else np.float32(first)

def maxf(first: Scalar, *rest: Scalar) -> np.float32:
    return np.float32(max(first, *rest)) if rest else np.float32(first)


# =============================================================================
# 2. LOW-LEVEL VECTOR KERNELS (Numba Optimized)
# =============================================================================
# All kernels take contiguous float32 vectors and return new float32 arrays.
# Each exists twice: a strict (fastmath=False) and a fast (fastmath=True)
# variant, selected by the dispatchers in section 3.

@njit(cache=True, fastmath=False)
def _matvec3_strict(matrix: ArrayF32, vector: ArrayF32) -> ArrayF32:
    """
    3x3 matrix times 3-vector.

    Each product is formed in float32, widened, and summed in float64 before
    the row result is narrowed back to float32.
    """
    out = np.empty(3, dtype=np.float32)
    for row in range(3):
        acc = np.float64(matrix[row, 0] * vector[0])
        acc += np.float64(matrix[row, 1] * vector[1])
        acc += np.float64(matrix[row, 2] * vector[2])
        out[row] = np.float32(acc)
    return out

@njit(cache=True, fastmath=True)
def _matvec3_fast(matrix: ArrayF32, vector: ArrayF32) -> ArrayF32:
    """3x3 matrix times 3-vector, fastmath variant."""
    out = np.empty(3, dtype=np.float32)
    for row in range(3):
        acc = np.float64(matrix[row, 0] * vector[0])
        acc += np.float64(matrix[row, 1] * vector[1])
        acc += np.float64(matrix[row, 2] * vector[2])
        out[row] = np.float32(acc)
    return out

@njit(cache=True, fastmath=False)
def _encode_srgb_strict(linear: ArrayF32) -> ArrayF32:
    """
    sRGB OETF (linear light to gamma encoded), clamped to [0, 1].

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(linear)
    for i in range(linear.size):
        v = linear[i]
        if v <= 0.0031308:
            e = 12.92 * v
        else:
            e = (1.0 + _GAMMA_A) * (v ** (1.0 / _GAMMA_EXP)) - _GAMMA_A
        if e < 0.0:
            e = 0.0
        elif e > 1.0:
            e = 1.0
        out[i] = e
    return out

@njit(cache=True, fastmath=True)
def _encode_srgb_fast(linear: ArrayF32) -> ArrayF32:
    """sRGB OETF, fastmath variant."""
    out = np.empty_like(linear)
    for i in range(linear.size):
        v = linear[i]
        if v <= 0.0031308:
            e = 12.92 * v
        else:
            e = (1.0 + _GAMMA_A) * (v ** (1.0 / _GAMMA_EXP)) - _GAMMA_A
        if e < 0.0:
            e = 0.0
        elif e > 1.0:
            e = 1.0
        out[i] = e
    return out

@njit(cache=True, fastmath=False)
def _decode_srgb_strict(srgb: ArrayF32) -> ArrayF32:
    """
    sRGB EOTF (gamma encoded to linear light). Not clamped.

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(srgb)
    for i in range(srgb.size):
        v = srgb[i]
        if v <= 0.04045:
            out[i] = v / 12.92
        else:
            out[i] = ((v + _GAMMA_A) / (1.0 + _GAMMA_A)) ** _GAMMA_EXP
    return out

@njit(cache=True, fastmath=True)
def _decode_srgb_fast(srgb: ArrayF32) -> ArrayF32:
    """sRGB EOTF, fastmath variant."""
    out = np.empty_like(srgb)
    for i in range(srgb.size):
        v = srgb[i]
        if v <= 0.04045:
            out[i] = v / 12.92
        else:
            out[i] = ((v + _GAMMA_A) / (1.0 + _GAMMA_A)) ** _GAMMA_EXP
    return out

@njit(cache=True, fastmath=False)
def _lab_f_strict(t: ArrayF32) -> ArrayF32:
    """
    CIELAB forward nonlinearity f(t).

    Cube root above epsilon, a linear segment below it so the slope at zero
    stays finite.
    """
    out = np.empty_like(t)
    for i in range(t.size):
        v = t[i]
        if v > LAB_EPSILON:
            out[i] = v ** (1.0 / 3.0)
        else:
            out[i] = v * _LAB_SLOPE + LAB_OFFSET
    return out

@njit(cache=True, fastmath=True)
def _lab_f_fast(t: ArrayF32) -> ArrayF32:
    """CIELAB f(t), fastmath variant."""
    out = np.empty_like(t)
    for i in range(t.size):
        v = t[i]
        if v > LAB_EPSILON:
            out[i] = v ** (1.0 / 3.0)
        else:
            out[i] = v * _LAB_SLOPE + LAB_OFFSET
    return out

@njit(cache=True, fastmath=False)
def _lab_f_inv_strict(t: ArrayF32) -> ArrayF32:
    """CIELAB inverse nonlinearity f_inv(t)."""
    out = np.empty_like(t)
    for i in range(t.size):
        v = t[i]
        if v > LAB_DELTA:
            out[i] = v * v * v
        else:
            out[i] = _LAB_SLOPE_INV * (v - LAB_OFFSET)
    return out

@njit(cache=True, fastmath=True)
def _lab_f_inv_fast(t: ArrayF32) -> ArrayF32:
    """CIELAB f_inv(t), fastmath variant."""
    out = np.empty_like(t)
    for i in range(t.size):
        v = t[i]
        if v > LAB_DELTA:
            out[i] = v * v * v
        else:
            out[i] = _LAB_SLOPE_INV * (v - LAB_OFFSET)
    return out


# =============================================================================
# 3. KERNEL DISPATCHERS
# =============================================================================
# Thin wrappers that check _STRICT_IEEE and delegate to the matching
# compiled variant.

def as_vector(values) -> ArrayF32:
    """Pack any 3-sequence into a contiguous float32 vector for the kernels."""
    vec = np.ascontiguousarray(values, dtype=np.float32)
    if vec.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {vec.shape}")
    return vec

def matvec3(matrix: ArrayF32, vector: ArrayF32) -> ArrayF32:
    """Dispatch the 3x3 matrix-vector product to strict or fast kernel."""
    if _STRICT_IEEE:
        return _matvec3_strict(matrix, vector)
    return _matvec3_fast(matrix, vector)

def encode_srgb(linear: ArrayF32) -> ArrayF32:
    """Dispatch sRGB OETF to strict or fast kernel."""
    if _STRICT_IEEE:
        return _encode_srgb_strict(linear)
    return _encode_srgb_fast(linear)

def decode_srgb(srgb: ArrayF32) -> ArrayF32:
    """Dispatch sRGB EOTF to strict or fast kernel."""
    if _STRICT_IEEE:
        return _decode_srgb_strict(srgb)
    return _decode_srgb_fast(srgb)

def lab_f(t: ArrayF32) -> ArrayF32:
    """Dispatch Lab f(t) to strict or fast kernel."""
    if _STRICT_IEEE:
        return _lab_f_strict(t)
    return _lab_f_fast(t)

def lab_f_inv(t: ArrayF32) -> ArrayF32:
    """Dispatch Lab f_inv(t) to strict or fast kernel."""
    if _STRICT_IEEE:
        return _lab_f_inv_strict(t)
    return _lab_f_inv_fast(t)
