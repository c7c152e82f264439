# -*- coding: utf-8 -*-
"""
Swatchbook: Perceptually uniform palettes from a single base colour
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Numeric Foundations
===================
Shared constants, matrices and the numeric-safety guard used by every stage
of the HSLuv conversion chain.

Every conversion in Swatchbook follows a "never fail, degrade to a defined
value" policy: any intermediate that comes out as NaN or +/-Inf is replaced
by a safe default right at the stage boundary instead of being allowed to
propagate.  That policy lives here in exactly two places:

1. ``_sanitize``: a Numba scalar kernel used inside the JIT stage kernels.
2. ``sanitized``: a decorator for Python-level functions returning arrays.

NOTE: Kernels that rely on ``_sanitize`` are compiled with ``fastmath=False``
and ``error_model="numpy"``.  Fastmath lets LLVM assume values are finite
(folding the NaN checks away), and the default Python error model raises
``ZeroDivisionError`` instead of producing Inf.

References:
    - CIE 15:2004 "Colorimetry"
    - IEC 61966-2-1:1999 (sRGB Standard)
    - HSLuv reference implementation, https://www.hsluv.org/math/
"""

import functools
import math
import numpy as np
import numpy.typing as npt
from numba import njit
from typing import Any, Callable, Dict, Final, TypeAlias

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "EPS",
    "EPSILON",
    "KAPPA",
    "L_MAX",
    "UNBOUNDED_CHROMA",
    "REF_WHITE_D65",
    "REF_U",
    "REF_V",
    "DEG2RAD",
    "RAD2DEG",
    "KERNEL_OPTS",

    # --- Matrices ---
    "M_XYZ_TO_SRGB",
    "M_SRGB_TO_XYZ",

    # --- Guards ---
    "_sanitize",
    "_clamp",
    "sanitized",
    "handle_shapes",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating]

# --- Tolerances ---
# EPS: magnitude below which a denominator or a lightness is treated as zero.
EPS: Final[float] = 1e-10
# Lightness above which a colour is considered pure white (chroma undefined).
L_MAX: Final[float] = 99.99999
# Returned by the gamut solver when no boundary line intersects the hue ray.
UNBOUNDED_CHROMA: Final[float] = 1e10

# --- CIE L* constants ---
# Values as published with the HSLuv reference.  They agree with the exact
# rationals (6/29)^3 and (29/3)^3 to the printed precision.
EPSILON: Final[float] = 0.0088564516
KAPPA: Final[float] = 903.2962962

DEG2RAD: Final[float] = math.pi / 180.0
RAD2DEG: Final[float] = 180.0 / math.pi

# --- Reference White (D65, Y = 1.0) ---
# The white point of the sRGB matrices below (their row sums).  The gamut
# solver derives its line coefficients from REF_U / REF_V, so solver, chain
# and matrices all agree on one white.
REF_WHITE_D65: Final[ArrayFloat] = np.array([0.95047, 1.00000, 1.08883], dtype=np.float64)
_REF_X: Final[float] = 0.95047
_REF_Y: Final[float] = 1.0
_REF_Z: Final[float] = 1.08883

_REF_DENOM: Final[float] = _REF_X + 15.0 * _REF_Y + 3.0 * _REF_Z
REF_U: Final[float] = 4.0 * _REF_X / _REF_DENOM
REF_V: Final[float] = 9.0 * _REF_Y / _REF_DENOM

# --- sRGB Matrices ---
# Defined by IEC 61966-2-1.  The same XYZ -> linear RGB rows feed both the
# forward conversion and the gamut boundary solver so that a colour built at
# S = 100 lands exactly on the gamut surface.
M_XYZ_TO_SRGB: Final[ArrayFloat] = np.array([
    [ 3.2404542, -1.5371385, -0.4985314],
    [-0.9692660,  1.8760108,  0.0415560],
    [ 0.0556434, -0.2040259,  1.0572252]
], dtype=np.float64)

M_SRGB_TO_XYZ: Final[ArrayFloat] = np.array([
    [ 0.4124564,  0.3575761,  0.1804375],
    [ 0.2126729,  0.7151522,  0.0721750],
    [ 0.0193339,  0.1191920,  0.9503041]
], dtype=np.float64)

# Compilation options shared by every kernel that depends on IEEE inf/NaN.
KERNEL_OPTS: Final[Dict[str, Any]] = {
    "cache": True,
    "fastmath": False,
    "error_model": "numpy",
}


# =============================================================================
# 1. SCALAR GUARDS (Numba)
# =============================================================================

@njit(**KERNEL_OPTS)
def _sanitize(v: float, default: float = 0.0) -> float:
    """Replaces NaN / +-Inf with *default*; finite values pass through."""
    if math.isnan(v) or math.isinf(v):
        return default
    return v

@njit(**KERNEL_OPTS)
def _clamp(v: float, lo: float, hi: float) -> float:
    """Clamps a (sanitized) scalar to [lo, hi]."""
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


# =============================================================================
# 2. ROBUST DECORATORS
# =============================================================================

def sanitized(default: float = 0.0) -> Callable[[Callable[..., ArrayFloat]], Callable[..., ArrayFloat]]:
    """
    Decorator factory replacing non-finite entries of an array result.

    Used on the Python-level array API so that the guard is applied once per
    stage boundary rather than inlined after each operation.

    Args:
        default: Value substituted for NaN and +/-Inf.
    """
    def decorator(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ArrayFloat:
            res = np.asarray(func(*args, **kwargs), dtype=np.float64)
            return np.where(np.isfinite(res), res, default)
        return wrapper
    return decorator


def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) and safeguard shape.

    This ensures that 1D inputs (single pixels) are treated as 2D batches
    internally, simplifying the kernels.  Lists and tuples are accepted and
    converted to contiguous float64.

    Args:
        func: The function to decorate.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)

    Raises:
        ValueError: If the last dimension is not 3.
    """
    @functools.wraps(func)
    def wrapper(arr: ArrayFloat, *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.ndim != 2 or arr_in.shape[-1] != 3:
            raise ValueError(f"Expected shape (3,) or (N, 3), got {arr.shape}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper
