# -*- coding: utf-8 -*-
"""
Swatchbook: Perceptually uniform palettes from a single base colour
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Palette Derivation
==================
Builds a complete button palette (normal / hover / clicked / disabled /
focus + outline) from one base colour.  All arithmetic happens in HSLuv so
that a fixed lightness step looks like the same visual change for every hue.

Rules (defaults of ``PaletteRules``):
  * hover     -- L +10, or L -10 when L > 80 (move away from white).
  * clicked   -- L -15, or L +15 when L < 20 (move away from black).
  * disabled  -- same hue, S = 20, L = 0.5 * L + 25 (lightness compression).
                 For greyish bases (S < 35) whose disabled L ends up within
                 15 of the base, L is pushed a further 20 away from the base.
  * focus     -- background identical to hover.
  * outline   -- complementary hue, S = 100, L = 20 above base L 60 and
                 L = 90 otherwise.  A single threshold keeps the outline
                 from flickering between bands for bases near the midpoint.
  * text      -- black or white, chosen against each entry's own background.

Derivation is a pure function of (base colour, rules).  The only state in
this module is ``PaletteState``, an immutable (base, palette) pair that the
UI layer owns and replaces wholesale through ``update_palette``.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, fields
from typing import Final, Iterator, NamedTuple, Optional, Sequence, Tuple, Union

from swatch_colorchain import (
    PUHSL,
    DeviceColor,
    _check_channels,
    device_color_to_puhsl,
    puhsl_to_device_color,
)
from swatch_contrast import complementary_hue, high_contrast_text
from swatch_states import RenderState

__all__ = [
    "SwatchInputWarning",
    "PaletteRules",
    "DEFAULT_RULES",
    "DEFAULT_BASE_PUHSL",
    "StateCoords",
    "PaletteEntry",
    "Palette",
    "PaletteState",
    "hover_coords",
    "clicked_coords",
    "disabled_coords",
    "focus_outline_coords",
    "derive_state_coords",
    "derive_palette",
    "derive_palette_from_puhsl",
    "initial_state",
    "update_palette",
]


class SwatchInputWarning(UserWarning):
    """A base colour had to be sanitized before a palette could be derived."""


# ---------------------------------------------------------------------------
# 1.  Configuration
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class PaletteRules:
    """Constants of the derivation rules.  Lightness/saturation values in [0, 100]."""
    hover_threshold:          float = 80.0
    hover_step:               float = 10.0
    clicked_threshold:        float = 20.0
    clicked_step:             float = 15.0
    disabled_saturation:      float = 20.0
    disabled_scale:           float = 0.5
    disabled_offset:          float = 25.0
    low_saturation_threshold: float = 35.0
    min_disabled_separation:  float = 15.0
    low_saturation_boost:     float = 20.0
    outline_saturation:       float = 100.0
    outline_threshold:        float = 60.0
    outline_dark:             float = 20.0
    outline_light:            float = 90.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"PaletteRules.{f.name} must be finite, got {value}")
            if f.name == "disabled_scale":
                if not 0.0 <= value <= 1.0:
                    raise ValueError(f"PaletteRules.disabled_scale must be in [0, 1], got {value}")
            elif not 0.0 <= value <= 100.0:
                raise ValueError(f"PaletteRules.{f.name} must be in [0, 100], got {value}")


DEFAULT_RULES: Final[PaletteRules] = PaletteRules()

# Initial base colour of a freshly created palette state.
DEFAULT_BASE_PUHSL: Final[PUHSL] = PUHSL(0.0, 75.0, 50.0)


# ---------------------------------------------------------------------------
# 2.  Palette data classes
# ---------------------------------------------------------------------------
class StateCoords(NamedTuple):
    """HSLuv coordinates of every palette background, plus the focus outline."""
    normal:   PUHSL
    hover:    PUHSL
    clicked:  PUHSL
    disabled: PUHSL
    focus:    PUHSL
    outline:  PUHSL


@dataclass(slots=True, frozen=True)
class PaletteEntry:
    """Colours painted for one render state."""
    background:     DeviceColor
    text:           DeviceColor
    coords:         PUHSL
    outline:        Optional[DeviceColor] = None
    outline_coords: Optional[PUHSL] = None


@dataclass(slots=True, frozen=True)
class Palette:
    """The five render-state entries.  Only ``focus`` carries an outline."""
    normal:   PaletteEntry
    hover:    PaletteEntry
    clicked:  PaletteEntry
    disabled: PaletteEntry
    focus:    PaletteEntry

    def __getitem__(self, state: Union[str, RenderState]) -> PaletteEntry:
        try:
            return getattr(self, RenderState(state).value)
        except ValueError:
            raise KeyError(state) from None

    def items(self) -> Iterator[Tuple[RenderState, PaletteEntry]]:
        for state in RenderState:
            yield state, getattr(self, state.value)


# ---------------------------------------------------------------------------
# 3.  Rules in HSLuv space
# ---------------------------------------------------------------------------
def hover_coords(primary: PUHSL, rules: PaletteRules = DEFAULT_RULES) -> PUHSL:
    if primary.l > rules.hover_threshold:
        return primary._replace(l=primary.l - rules.hover_step)
    return primary._replace(l=primary.l + rules.hover_step)


def clicked_coords(primary: PUHSL, rules: PaletteRules = DEFAULT_RULES) -> PUHSL:
    if primary.l < rules.clicked_threshold:
        return primary._replace(l=primary.l + rules.clicked_step)
    return primary._replace(l=primary.l - rules.clicked_step)


def disabled_coords(primary: PUHSL, rules: PaletteRules = DEFAULT_RULES) -> PUHSL:
    """
    Lightness-compressed, faintly tinted variant of *primary*.

    The low-saturation fix pushes L away from the base (upwards when the
    compressed L is at or above it, downwards otherwise) so that the result
    is always at least ``min_disabled_separation`` from the base L.
    """
    l = primary.l * rules.disabled_scale + rules.disabled_offset
    if (primary.s < rules.low_saturation_threshold
            and abs(l - primary.l) < rules.min_disabled_separation):
        if l >= primary.l:
            l += rules.low_saturation_boost
        else:
            l -= rules.low_saturation_boost
    return PUHSL(primary.h, rules.disabled_saturation, l)


def focus_outline_coords(primary: PUHSL, focus: PUHSL,
                         rules: PaletteRules = DEFAULT_RULES) -> PUHSL:
    """
    Complementary, fully saturated ring colour.

    The lightness band depends only on whether the base L exceeds
    ``outline_threshold``: 60.0 gives the light band, 60.01 the dark one.
    """
    h = complementary_hue(focus).h
    if primary.l > rules.outline_threshold:
        l = rules.outline_dark
    else:
        l = rules.outline_light
    return PUHSL(h, rules.outline_saturation, l)


def derive_state_coords(primary: PUHSL, rules: PaletteRules = DEFAULT_RULES) -> StateCoords:
    """Applies every rule to the base coordinates."""
    primary = PUHSL(*primary)
    hover = hover_coords(primary, rules)
    focus = hover
    return StateCoords(
        normal=primary,
        hover=hover,
        clicked=clicked_coords(primary, rules),
        disabled=disabled_coords(primary, rules),
        focus=focus,
        outline=focus_outline_coords(primary, focus, rules),
    )


# ---------------------------------------------------------------------------
# 4.  Palette construction
# ---------------------------------------------------------------------------
def _coerce_base(base: Sequence[float]) -> DeviceColor:
    """Sanitizes a base colour to a DeviceColor, warning if anything changed."""
    _check_channels(base)
    channels = [float(c) for c in base]
    if len(channels) == 3:
        channels.append(1.0)

    clean = [min(max(c, 0.0), 1.0) if math.isfinite(c) else 0.0 for c in channels]
    if clean != channels:
        warnings.warn(
            f"derive_palette(base={tuple(channels)}): non-finite or out-of-range "
            f"channels were sanitized to {tuple(clean)}.",
            SwatchInputWarning,
            stacklevel=3,
        )
    return DeviceColor(*clean)


def _text_color(background: PUHSL) -> DeviceColor:
    return puhsl_to_device_color(*high_contrast_text(background))


def _entry(coords: PUHSL, background: Optional[DeviceColor] = None,
           outline_coords: Optional[PUHSL] = None) -> PaletteEntry:
    if background is None:
        background = puhsl_to_device_color(*coords)
    outline = None
    if outline_coords is not None:
        outline = puhsl_to_device_color(*outline_coords)
    return PaletteEntry(
        background=background,
        text=_text_color(coords),
        coords=coords,
        outline=outline,
        outline_coords=outline_coords,
    )


def derive_palette(base: Sequence[float], rules: PaletteRules = DEFAULT_RULES) -> Palette:
    """
    Derives the full palette for a base device colour.

    Args:
        base: DeviceColor or (r, g, b[, a]) in [0, 1].  Out-of-range or
              non-finite channels are sanitized with a ``SwatchInputWarning``.
        rules: Derivation constants.

    Returns:
        Palette.  ``normal`` paints the base colour itself (alpha kept); all
        other backgrounds are opaque colours rebuilt from HSLuv.
    """
    base_color = _coerce_base(base)
    coords = derive_state_coords(device_color_to_puhsl(base_color), rules)

    return Palette(
        normal=_entry(coords.normal, background=base_color),
        hover=_entry(coords.hover),
        clicked=_entry(coords.clicked),
        disabled=_entry(coords.disabled),
        focus=_entry(coords.focus, outline_coords=coords.outline),
    )


def derive_palette_from_puhsl(h: float, s: float, l: float,
                              rules: PaletteRules = DEFAULT_RULES) -> Palette:
    """Palette for an HSLuv base; the base is rendered to device colour first."""
    return derive_palette(puhsl_to_device_color(h, s, l), rules)


# ---------------------------------------------------------------------------
# 5.  UI-owned state
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class PaletteState:
    """Current base colour and the palette derived from it."""
    base:    DeviceColor
    palette: Palette
    rules:   PaletteRules = DEFAULT_RULES


def initial_state(rules: PaletteRules = DEFAULT_RULES) -> PaletteState:
    """State for the default base colour (H 0, S 75, L 50)."""
    base = puhsl_to_device_color(*DEFAULT_BASE_PUHSL)
    return PaletteState(base=base, palette=derive_palette(base, rules), rules=rules)


def update_palette(state: PaletteState, new_base: Sequence[float]) -> PaletteState:
    """
    Returns the state for *new_base*.

    The palette is recomputed from scratch; *state* is left untouched and
    stays usable until the caller swaps in the result.  An unchanged base
    returns *state* itself.
    """
    base = _coerce_base(new_base)
    if base == state.base:
        return state
    return PaletteState(base=base, palette=derive_palette(base, state.rules), rules=state.rules)
