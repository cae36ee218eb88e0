# -*- coding: utf-8 -*-
"""
Tincture: Exact color space transforms and palette interpolation
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tincture_palette.py — Ordered, read-only sRGB palettes.

A palette is the list of control points the interpolators in
``tincture_interpolation`` walk along. Source colors are converted to
``SRgb`` exactly once, at construction, and the palette is frozen from then
on, so it can be shared between threads without locking.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, Union, overload

from tincture_space import Rgb888, SRgb, URgb
from tincture_transform import to_srgb

__all__ = ["Palette", "PaletteSource", "create_palette"]

logger = logging.getLogger(__name__)

PaletteSource = Union[Rgb888, URgb, SRgb]


@dataclass(slots=True, frozen=True)
class Palette:
    """
    Immutable sequence of sRGB control points.

    Index 0 and index ``size - 1`` are the interpolation endpoints; order is
    the order the source colors were given in.
    """
    colors: Tuple[SRgb, ...] = ()

    @property
    def size(self) -> int:
        return len(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[SRgb]:
        return iter(self.colors)

    @overload
    def __getitem__(self, index: int) -> SRgb: ...
    @overload
    def __getitem__(self, index: slice) -> Tuple[SRgb, ...]: ...

    def __getitem__(self, index):
        return self.colors[index]

    def __repr__(self) -> str:
        return f"Palette(size={self.size})"


def create_palette(values: Iterable[PaletteSource]) -> Palette:
    """
    Build a palette from packed RGB, byte RGB or sRGB colors.

    Args:
        values: Source colors in interpolation order. Packed values use the
            ``0x00RRGGBB`` layout. Mixed types are accepted.

    Returns:
        A frozen ``Palette`` with one ``SRgb`` per source color.

    Raises:
        TypeError: If an element is not a packed int, ``URgb`` or ``SRgb``.
    """
    colors = tuple(to_srgb(value) for value in values)
    if not colors:
        warnings.warn(
            "create_palette(): empty source. Interpolating this palette "
            "will raise IndexError.",
            stacklevel=2,
        )
    logger.debug("Created palette with %d colors", len(colors))
    return Palette(colors)
