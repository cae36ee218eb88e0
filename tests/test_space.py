"""Tests for tincture_space value types and project metadata."""

import pytest

import __about__
from tincture_space import ColorSpace, Hsl, Hsv, Lab, SRgb, URgb, Xyz


class TestValueTypes:
    def test_named_and_positional_access(self):
        lab = Lab(53.2, 80.1, 67.2)
        assert lab.lightness == lab[0] == 53.2
        assert lab.a == lab[1]
        assert lab.b == lab[2]

    def test_unpacking(self):
        hue, saturation, value = Hsv(0.25, 0.5, 0.75)
        assert (hue, saturation, value) == (0.25, 0.5, 0.75)

    def test_immutable(self):
        srgb = SRgb(0.1, 0.2, 0.3)
        with pytest.raises(AttributeError):
            srgb.red = 0.5

    def test_make_from_sequence(self):
        assert Xyz._make([0.1, 0.2, 0.3]) == Xyz(0.1, 0.2, 0.3)
        with pytest.raises(TypeError):
            Hsl._make([0.1, 0.2])

    def test_types_are_distinct(self):
        assert type(SRgb(0.0, 0.0, 0.0)) is not type(Xyz(0.0, 0.0, 0.0))


class TestColorSpace:
    @pytest.mark.parametrize("space, value_type", [
        (ColorSpace.RGB888, int),
        (ColorSpace.URGB, URgb),
        (ColorSpace.SRGB, SRgb),
        (ColorSpace.HSL, Hsl),
        (ColorSpace.HSV, Hsv),
        (ColorSpace.XYZ, Xyz),
        (ColorSpace.LAB, Lab),
    ])
    def test_value_type(self, space, value_type):
        assert space.value_type is value_type

    def test_lookup_by_value(self):
        assert ColorSpace("lab") is ColorSpace.LAB


class TestMetadata:
    def test_summary(self):
        summary = __about__.metadata_summary()
        assert summary["title"] == "Tincture"
        assert summary["version"] == __about__.__version__
        assert summary["license"] == "LGPL-3.0-or-later"
