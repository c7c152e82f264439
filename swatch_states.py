# -*- coding: utf-8 -*-
"""
Swatchbook: Perceptually uniform palettes from a single base colour
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Interaction State Resolution
============================
Maps the raw interaction flags kept by a widget to the single palette entry
that should be painted.  No history is kept: the result is a pure function
of the flags at paint time.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, Tuple


class RenderState(str, Enum):
    """Palette entry names, in declaration order of a Palette."""
    NORMAL = "normal"
    HOVER = "hover"
    CLICKED = "clicked"
    DISABLED = "disabled"
    FOCUS = "focus"


@dataclass(slots=True, frozen=True)
class InteractionFlags:
    """Point-in-time snapshot of a widget's interaction flags."""
    disabled:    bool = False
    clicked:     bool = False
    hover:       bool = False
    focus:       bool = False
    force_focus: bool = False

    def with_changes(self, **changes: bool) -> InteractionFlags:
        """Returns a copy with the given flags replaced."""
        return replace(self, **changes)


# First matching flag wins; NORMAL when none is set.
STATE_PRIORITY: Final[Tuple[Tuple[str, RenderState], ...]] = (
    ("disabled",    RenderState.DISABLED),
    ("force_focus", RenderState.FOCUS),
    ("clicked",     RenderState.CLICKED),
    ("hover",       RenderState.HOVER),
    ("focus",       RenderState.FOCUS),
)


def resolve_render_state(flags: InteractionFlags) -> RenderState:
    """
    Picks the render state for the current flags.

    Priority: disabled > force_focus > clicked > hover > focus > normal.
    """
    for attr, state in STATE_PRIORITY:
        if getattr(flags, attr):
            return state
    return RenderState.NORMAL
