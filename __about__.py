# -*- coding: utf-8 -*-
# Swatchbook: Perceptually uniform palettes from a single base colour.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for the opticsWolf Swatchbook.

The version string is also reported by ``metadata_summary`` together with
the colour model the palettes are built in, so a rendering layer can log
which conversion it is using.
"""

from typing import Final, Tuple

__title__: Final[str] = "Swatchbook"
__description__: Final[str] = (
    "HSLuv colour conversion and single-colour UI palette derivation "
    "with deterministic interaction states and legible text."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"
__url__: Final[str] = "https://github.com/opticsWolf/swatchbook"

# Colour model of the palette rules and the gamut they are clipped to.
COLOR_MODEL: Final[str] = "HSLuv"
GAMUT: Final[str] = "sRGB (D65)"
# Render states every derived palette provides, in palette order.
PALETTE_STATES: Final[Tuple[str, ...]] = ("normal", "hover", "clicked", "disabled", "focus")


def metadata_summary() -> dict[str, str]:
    """Project metadata plus the colour model, for logging and introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "license": __license__,
        "url": __url__,
        "color_model": f"{COLOR_MODEL} over {GAMUT}",
        "states": ", ".join(PALETTE_STATES),
    }
