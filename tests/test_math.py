"""Tests for tincture_math: scalar primitives and Numba kernels."""

import math

import numpy as np
import pytest

import tincture_math as tm
from tincture_math import (
    LAB_DELTA,
    LAB_EPSILON,
    LAB_OFFSET,
    as_vector,
    ceilf,
    clampf,
    decode_srgb,
    encode_srgb,
    floorf,
    isnanf,
    lab_f,
    lab_f_inv,
    matvec3,
    maxf,
    minf,
    powf,
    roundf,
    wrapf,
)


@pytest.fixture
def fast_kernels():
    tm.set_strict_ieee(False)
    try:
        yield
    finally:
        tm.set_strict_ieee(True)


class TestRoundf:
    def test_ties_away_from_zero(self):
        assert roundf(0.5) == 1.0
        assert roundf(1.5) == 2.0
        assert roundf(2.5) == 3.0
        assert roundf(-0.5) == -1.0
        assert roundf(-2.5) == -3.0

    def test_just_below_half_rounds_down(self):
        assert roundf(np.float32(0.49999997)) == 0.0

    def test_returns_float32(self):
        assert isinstance(roundf(1.2), np.float32)


class TestWrapf:
    def test_negative_takes_divisor_sign(self):
        assert wrapf(-0.5, 6.0) == pytest.approx(5.5)

    def test_above_divisor(self):
        assert wrapf(7.0, 6.0) == pytest.approx(1.0)

    def test_in_range_unchanged(self):
        assert wrapf(3.5, 2.0) == pytest.approx(1.5)

    def test_tiny_negative_folds_to_zero(self):
        out = wrapf(np.float32(-1e-8), 6.0)
        assert out == 0.0
        assert isinstance(out, np.float32)


class TestScalarHelpers:
    def test_floor_ceil(self):
        assert floorf(1.5) == 1.0
        assert ceilf(1.5) == 2.0
        assert floorf(-0.5) == -1.0
        assert ceilf(2.0) == 2.0

    def test_clamp(self):
        assert clampf(-0.2) == 0.0
        assert clampf(1.5) == 1.0
        assert clampf(0.25) == np.float32(0.25)

    def test_clamp_passes_nan(self):
        assert math.isnan(clampf(float("nan")))

    def test_isnan(self):
        assert isnanf(float("nan"))
        assert not isnanf(0.0)

    def test_min_max(self):
        assert minf(0.3, 0.1, 0.2) == np.float32(0.1)
        assert maxf(0.3, 0.1, 0.2) == np.float32(0.3)
        assert maxf(0.7) == np.float32(0.7)

    def test_pow(self):
        assert powf(2.0, 3.0) == 8.0
        assert isinstance(powf(2.0, 0.5), np.float32)


class TestMatvec3:
    def test_identity(self):
        eye = np.eye(3, dtype=np.float32)
        vec = as_vector((0.25, 0.5, 0.75))
        np.testing.assert_array_equal(matvec3(eye, vec), vec)

    def test_accumulates_in_double(self):
        # In float32, 2**24 + 1 + 1 stays at 2**24; summed in float64 the
        # two ones survive and 2**24 + 2 is exactly representable.
        ones = np.ones((3, 3), dtype=np.float32)
        vec = as_vector((16777216.0, 1.0, 1.0))
        out = matvec3(ones, vec)
        assert out.dtype == np.float32
        assert out[0] == np.float32(16777218.0)

    def test_fast_kernel_agrees(self, fast_kernels):
        ones = np.ones((3, 3), dtype=np.float32)
        out = matvec3(ones, as_vector((0.25, 0.5, 0.125)))
        assert out[0] == pytest.approx(0.875)


class TestAsVector:
    def test_float32_contiguous(self):
        vec = as_vector([1, 2, 3])
        assert vec.dtype == np.float32
        assert vec.flags["C_CONTIGUOUS"]

    def test_wrong_length(self):
        with pytest.raises(ValueError, match="Expected 3 components"):
            as_vector((1.0, 2.0))


class TestTransferCurves:
    def test_encode_known_values(self):
        out = encode_srgb(as_vector((0.0, 1.0, 0.5)))
        assert out[0] == 0.0
        assert out[1] == pytest.approx(1.0, abs=1e-6)
        assert out[2] == pytest.approx(0.735357, abs=1e-5)

    def test_encode_clamps(self):
        out = encode_srgb(as_vector((-1.0, 2.0, 0.001)))
        assert out[0] == 0.0
        assert out[1] == 1.0
        assert out[2] == pytest.approx(0.01292, abs=1e-7)

    def test_decode_is_not_clamped(self):
        out = decode_srgb(as_vector((-1.0, 2.0, 0.5)))
        assert out[0] < 0.0
        assert out[1] > 1.0

    def test_linear_segments_meet(self):
        out = decode_srgb(as_vector((0.04045, 0.04045, 0.04045)))
        assert out[0] == pytest.approx(0.0031308, abs=1e-6)

    def test_decode_inverts_encode(self):
        values = as_vector((0.002, 0.2, 0.9))
        np.testing.assert_allclose(decode_srgb(encode_srgb(values)), values, rtol=1e-5)

    def test_fast_kernels_agree(self, fast_kernels):
        out = encode_srgb(as_vector((0.0, 1.0, 0.5)))
        assert out[2] == pytest.approx(0.735357, abs=1e-5)

    def test_scalar_primitives_match_encode(self):
        out = encode_srgb(as_vector((-0.5, 1.5, 0.5)))
        assert out[0] == clampf(-0.5)
        assert out[1] == clampf(1.5)
        gamma = 1.055 * powf(0.5, 1.0 / 2.4) - 0.055
        assert out[2] == pytest.approx(gamma, abs=1e-6)


class TestLabNonlinearity:
    def test_endpoints(self):
        out = lab_f(as_vector((0.0, 1.0, LAB_EPSILON)))
        assert out[0] == pytest.approx(LAB_OFFSET)
        assert out[1] == pytest.approx(1.0)
        assert out[2] == pytest.approx(LAB_DELTA, rel=1e-6)

    def test_inverse_round_trip(self):
        values = as_vector((0.001, 0.2, 0.95))
        np.testing.assert_allclose(lab_f_inv(lab_f(values)), values, rtol=1e-5)

    def test_inverse_linear_segment(self):
        out = lab_f_inv(as_vector((LAB_OFFSET, LAB_DELTA, 1.0)))
        assert out[0] == pytest.approx(0.0, abs=1e-7)
        assert out[1] == pytest.approx(LAB_EPSILON, rel=1e-5)
        assert out[2] == 1.0


class TestStrictToggle:
    def test_default_is_strict(self):
        assert tm.is_strict_ieee()

    def test_toggle(self, fast_kernels):
        assert not tm.is_strict_ieee()
