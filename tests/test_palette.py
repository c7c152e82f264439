# -*- coding: utf-8 -*-
"""Tests for palette derivation and the UI-owned palette state."""

import dataclasses
import math
import warnings

import numpy as np
import pytest

from swatch_colorchain import PUHSL, DeviceColor, device_color_to_puhsl, puhsl_to_device_color
from swatch_contrast import high_contrast_text
from swatch_palette import (
    DEFAULT_RULES,
    PaletteRules,
    SwatchInputWarning,
    clicked_coords,
    derive_palette,
    derive_palette_from_puhsl,
    derive_state_coords,
    disabled_coords,
    focus_outline_coords,
    hover_coords,
    initial_state,
    update_palette,
)
from swatch_states import RenderState

RED = DeviceColor(1.0, 0.0, 0.0, 1.0)


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("l, expected", [(0.0, 10.0), (50.0, 60.0), (80.0, 90.0), (80.5, 70.5), (100.0, 90.0)])
def test_hover_moves_away_from_white(l, expected):
    assert hover_coords(PUHSL(10.0, 40.0, l)) == PUHSL(10.0, 40.0, expected)


@pytest.mark.parametrize("l, expected", [(0.0, 15.0), (19.9, 34.9), (20.0, 5.0), (50.0, 35.0), (100.0, 85.0)])
def test_clicked_moves_away_from_black(l, expected):
    assert clicked_coords(PUHSL(10.0, 40.0, l)).l == pytest.approx(expected)


def test_disabled_compresses_lightness_for_saturated_bases():
    disabled = disabled_coords(PUHSL(250.0, 50.0, 50.0))
    assert disabled == PUHSL(250.0, 20.0, 50.0)
    assert disabled_coords(PUHSL(250.0, 90.0, 100.0)).l == 75.0
    assert disabled_coords(PUHSL(250.0, 90.0, 0.0)).l == 25.0


@pytest.mark.parametrize("s", [0.0, 10.0, 20.0, 34.9])
def test_disabled_is_distinct_for_greyish_bases(s):
    for l in np.linspace(0.0, 100.0, 201):
        disabled = disabled_coords(PUHSL(40.0, s, float(l)))
        assert abs(disabled.l - l) >= 15.0 - 1e-9
        assert disabled.s == 20.0
        assert disabled.h == 40.0


def test_disabled_fix_direction():
    # Compressed L above the base is pushed further up, below it further down.
    assert disabled_coords(PUHSL(0.0, 10.0, 40.0)).l == pytest.approx(65.0)
    assert disabled_coords(PUHSL(0.0, 10.0, 60.0)).l == pytest.approx(35.0)
    assert disabled_coords(PUHSL(0.0, 10.0, 70.0)).l == pytest.approx(40.0)


@pytest.mark.parametrize("l, expected", [(60.0, 90.0), (60.01, 20.0), (10.0, 90.0), (95.0, 20.0)])
def test_outline_band_threshold(l, expected):
    primary = PUHSL(30.0, 50.0, l)
    outline = focus_outline_coords(primary, hover_coords(primary))
    assert outline.l == expected
    assert outline.s == 100.0
    assert outline.h == 210.0


def test_state_coords_focus_is_hover():
    coords = derive_state_coords((100.0, 60.0, 40.0))
    assert coords.focus == coords.hover
    assert coords.normal == PUHSL(100.0, 60.0, 40.0)


# ---------------------------------------------------------------------------
# Full palette
# ---------------------------------------------------------------------------
def test_red_palette():
    palette = derive_palette(RED)
    normal = palette.normal.coords
    assert normal.h == pytest.approx(12.177, abs=0.05)
    assert normal.s == pytest.approx(100.0, abs=0.05)
    assert normal.l == pytest.approx(53.237, abs=0.02)

    disabled = palette.disabled.coords
    assert disabled.h == normal.h
    assert disabled.s == 20.0
    assert disabled.l == pytest.approx(0.5 * normal.l + 25.0)
    assert disabled.l == pytest.approx(51.62, abs=0.02)

    assert palette.hover.coords.l == pytest.approx(normal.l + 10.0)
    assert palette.clicked.coords.l == pytest.approx(normal.l - 15.0)


def test_normal_background_is_the_base():
    base = DeviceColor(0.2, 0.4, 0.6, 0.5)
    palette = derive_palette(base)
    assert palette.normal.background == base
    for state in (RenderState.HOVER, RenderState.CLICKED, RenderState.DISABLED, RenderState.FOCUS):
        assert palette[state].background.a == 1.0


def test_three_channel_base_is_opaque():
    assert derive_palette((0.2, 0.4, 0.6)).normal.background == DeviceColor(0.2, 0.4, 0.6, 1.0)


def test_only_focus_has_an_outline():
    palette = derive_palette(RED)
    for state, entry in palette.items():
        if state is RenderState.FOCUS:
            assert entry.outline == puhsl_to_device_color(*entry.outline_coords)
        else:
            assert entry.outline is None
            assert entry.outline_coords is None


def test_focus_background_equals_hover():
    palette = derive_palette((0.3, 0.7, 0.2))
    assert palette.focus.background == palette.hover.background
    assert palette.focus.coords == palette.hover.coords


def test_text_is_chosen_against_each_background():
    rng = np.random.default_rng(8)
    for rgb in rng.random((20, 3)):
        palette = derive_palette(tuple(rgb))
        for _, entry in palette.items():
            assert entry.text == puhsl_to_device_color(*high_contrast_text(entry.coords))
            assert entry.text in (DeviceColor(0.0, 0.0, 0.0, 1.0), puhsl_to_device_color(0.0, 0.0, 100.0))


def test_derivation_is_deterministic():
    assert derive_palette((0.1, 0.5, 0.9)) == derive_palette((0.1, 0.5, 0.9))


def test_derive_palette_from_puhsl():
    palette = derive_palette_from_puhsl(200.0, 60.0, 45.0)
    assert palette == derive_palette(puhsl_to_device_color(200.0, 60.0, 45.0))
    assert palette.normal.coords.l == pytest.approx(45.0, abs=1e-3)


def test_getitem_and_items():
    palette = derive_palette(RED)
    assert palette["hover"] is palette.hover
    assert palette[RenderState.DISABLED] is palette.disabled
    assert [state for state, _ in palette.items()] == list(RenderState)
    with pytest.raises(KeyError):
        palette["pressed"]


# ---------------------------------------------------------------------------
# Input handling
# ---------------------------------------------------------------------------
def test_invalid_channels_warn_and_are_sanitized():
    with pytest.warns(SwatchInputWarning):
        palette = derive_palette((1.5, math.nan, 0.0))
    assert palette.normal.background == DeviceColor(1.0, 0.0, 0.0, 1.0)


def test_valid_input_does_not_warn():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        derive_palette((0.0, 1.0, 0.0, 1.0))


@pytest.mark.parametrize("base", [(0.5, 0.5), (0.1, 0.2, 0.3, 0.4, 0.5)])
def test_wrong_channel_count_raises(base):
    with pytest.raises(ValueError, match="3 or 4 channels"):
        derive_palette(base)


# ---------------------------------------------------------------------------
# Rules configuration
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("changes", [
    {"hover_step": -1.0},
    {"outline_light": 120.0},
    {"disabled_scale": 1.5},
    {"clicked_step": math.nan},
])
def test_rules_validation(changes):
    with pytest.raises(ValueError):
        PaletteRules(**changes)


def test_rules_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_RULES.hover_step = 5.0


def test_custom_rules():
    rules = PaletteRules(hover_step=5.0, disabled_saturation=0.0)
    coords = derive_state_coords(PUHSL(0.0, 50.0, 50.0), rules)
    assert coords.hover.l == 55.0
    assert coords.disabled.s == 0.0


# ---------------------------------------------------------------------------
# Palette state
# ---------------------------------------------------------------------------
def test_initial_state():
    state = initial_state()
    normal = state.palette.normal.coords
    assert normal.s == pytest.approx(75.0, abs=1e-3)
    assert normal.l == pytest.approx(50.0, abs=1e-3)

    # The base is stored as a device colour, so its hue comes back from the
    # round trip within a few 1e-6 degrees of 0.
    outline = state.palette.focus.outline_coords
    assert outline.h == pytest.approx(180.0, abs=1e-4)
    assert outline.s == 100.0
    assert outline.l == 90.0


def test_update_palette_with_same_base_is_identity():
    state = initial_state()
    assert update_palette(state, tuple(state.base)) is state


def test_update_palette_replaces_the_palette():
    state = initial_state()
    new_state = update_palette(state, RED)
    assert new_state is not state
    assert new_state.base == RED
    assert new_state.palette == derive_palette(RED)
    assert new_state.rules is state.rules
    assert state.palette == derive_palette(state.base)


def test_update_palette_keeps_custom_rules():
    rules = PaletteRules(hover_step=5.0)
    state = update_palette(initial_state(rules), RED)
    assert state.rules is rules
    assert state.palette.hover.coords.l == pytest.approx(state.palette.normal.coords.l + 5.0)
