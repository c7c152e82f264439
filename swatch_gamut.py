# -*- coding: utf-8 -*-
"""
Swatchbook: Perceptually uniform palettes from a single base colour
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Gamut Boundary Solver
=====================
Geometry of the sRGB gamut in the CIELUV u/v plane at fixed lightness.

For a fixed L* the set of reproducible colours is a convex hexagon in the
(u, v) plane.  Each edge is the locus where one linear RGB channel sits at
one of its extremes (t = 0 black, t = 1 full intensity), giving
3 channels x 2 extremes = 6 candidate lines ``v = slope * u + intercept``.

The maximum chroma on a hue ray is the distance from the origin to the
nearest edge crossed by that ray.  HSLuv saturation is chroma expressed as a
percentage of this distance, so every (H, S, L) with S in [0, 100] is inside
the gamut.

The line coefficients are derived from the XYZ -> sRGB matrix and the
reference white (REF_U, REF_V) used by the conversion chain.  For the HSLuv
white they reduce to the published integers 284517, 94839, 838422, 769860,
731718, 632260 and 126452; deriving them keeps the solver and the chain on
one white point, so a colour on the gamut surface maps to exactly S = 100.

The candidates are kept as a fixed (6, 2) array plus a (6,) validity mask.
A line is invalid when its solve is degenerate (parallel to every ray, or
near-zero L) and is filtered out before the minimisation.
"""

import math
import numpy as np
from numba import njit
from typing import List, NamedTuple, Tuple

from swatch_numerics import (
    ArrayFloat,
    EPS,
    EPSILON,
    KAPPA,
    DEG2RAD,
    UNBOUNDED_CHROMA,
    KERNEL_OPTS,
    M_XYZ_TO_SRGB,
    REF_U,
    REF_V,
    _sanitize,
)

__all__ = [
    "BoundaryLine",
    "boundary_candidates",
    "boundary_lines",
    "max_chroma",
    "max_chroma_batch",
]

N_BOUNDARY_LINES = 6

# Common factor of the line coefficients.  With it the coefficients take the
# magnitudes of the published integer form (126452 = 4 * _LINE_SCALE, ...),
# which the EPS threshold on the denominator is calibrated for.
_LINE_SCALE = 31613.0


class BoundaryLine(NamedTuple):
    """One edge of the gamut hexagon: ``v = slope * u + intercept``."""
    slope: float
    intercept: float


# =============================================================================
# 1. KERNELS
# =============================================================================

@njit(**KERNEL_OPTS)
def _lightness_scale(L: float) -> float:
    """
    Y / Yn for a given L*, the scale factor shared by all six lines.

    Piecewise CIE rule: cubic above the EPSILON knee, linear near black.
    """
    sub1 = _sanitize(((L + 16.0) / 116.0) ** 3, 0.0)
    if sub1 > EPSILON:
        return sub1
    return _sanitize(L / KAPPA, 0.0)

@njit(**KERNEL_OPTS)
def _boundary_lines_kernel(L: float) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    Solves the six candidate boundary lines for lightness L.

    Returns:
        lines: (6, 2) array of (slope, intercept), row index = 2 * channel + t.
        valid: (6,) bool mask; False rows must not be used.
    """
    lines = np.zeros((N_BOUNDARY_LINES, 2), dtype=np.float64)
    valid = np.zeros(N_BOUNDARY_LINES, dtype=np.bool_)

    L_s = _sanitize(L, 0.0)
    sub2 = _lightness_scale(L_s)
    if abs(sub2) < EPS:
        return lines, valid

    for c in range(3):
        m0 = M_XYZ_TO_SRGB[c, 0]
        m1 = M_XYZ_TO_SRGB[c, 1]
        m2 = M_XYZ_TO_SRGB[c, 2]

        top1 = _sanitize(_LINE_SCALE * (9.0 * m0 - 3.0 * m2) * sub2, 0.0)
        top2_base = _sanitize(_LINE_SCALE * 13.0 * (9.0 * REF_U * m0 + 4.0 * REF_V * m1
                                                    + (12.0 - 3.0 * REF_U - 20.0 * REF_V) * m2)
                              * sub2 * L_s, 0.0)
        bottom_base = _sanitize(_LINE_SCALE * (20.0 * m2 - 4.0 * m1) * sub2, 0.0)

        for t in range(2):
            top2 = _sanitize(top2_base - _LINE_SCALE * 52.0 * REF_V * t * L_s, 0.0)
            bottom = _sanitize(bottom_base + _LINE_SCALE * 4.0 * t, 0.0)
            if abs(bottom) < EPS:
                continue

            slope = top1 / bottom
            intercept = top2 / bottom
            if math.isnan(slope) or math.isinf(slope) or math.isnan(intercept) or math.isinf(intercept):
                continue

            idx = 2 * c + t
            lines[idx, 0] = slope
            lines[idx, 1] = intercept
            valid[idx] = True
    return lines, valid

@njit(**KERNEL_OPTS)
def _ray_length(slope: float, intercept: float, sin_h: float, cos_h: float) -> float:
    """
    Distance along a hue ray to one boundary line.

    A ray parallel to the line has no intersection; the non-finite quotient
    is mapped to -1 so that callers discard it with the negative lengths.
    """
    return _sanitize(intercept / (sin_h - slope * cos_h), -1.0)

@njit(**KERNEL_OPTS)
def _max_chroma_kernel(L: float, H: float) -> float:
    """
    Distance from the origin to the nearest valid boundary along hue H (deg).

    Intersections behind the origin (negative length) or at infinity are
    ignored.  Returns UNBOUNDED_CHROMA when nothing qualifies.
    """
    lines, valid = _boundary_lines_kernel(L)
    h_rad = _sanitize(H, 0.0) * DEG2RAD
    sin_h = math.sin(h_rad)
    cos_h = math.cos(h_rad)

    min_length = UNBOUNDED_CHROMA
    for i in range(N_BOUNDARY_LINES):
        if not valid[i]:
            continue
        length = _ray_length(lines[i, 0], lines[i, 1], sin_h, cos_h)
        if length >= 0.0 and length < min_length:
            min_length = length
    return min_length

@njit(**KERNEL_OPTS)
def _max_chroma_batch_kernel(L: ArrayFloat, H: ArrayFloat) -> ArrayFloat:
    """Element-wise max chroma over two equally shaped 1D arrays."""
    n = L.shape[0]
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        out[i] = _max_chroma_kernel(L[i], H[i])
    return out


# =============================================================================
# 2. PUBLIC API
# =============================================================================

def boundary_candidates(L: float) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    Full candidate set for lightness L.

    Returns:
        (lines, valid): a (6, 2) float64 array of (slope, intercept) and a
        (6,) bool mask.  Rows are ordered R(t=0), R(t=1), G(t=0), G(t=1),
        B(t=0), B(t=1).
    """
    return _boundary_lines_kernel(float(L))

def boundary_lines(L: float) -> List[BoundaryLine]:
    """
    The valid gamut boundary lines for lightness L.

    At L = 0 the lightness scale vanishes and no line is defined, so the
    result is empty.  Otherwise up to six lines are returned.
    """
    lines, valid = _boundary_lines_kernel(float(L))
    return [BoundaryLine(float(m), float(b)) for (m, b), ok in zip(lines, valid) if ok]

def max_chroma(L: float, H: float) -> float:
    """
    Maximum chroma reachable inside sRGB at lightness L and hue H (degrees).

    The result is always >= 0.  A value of ``UNBOUNDED_CHROMA`` means the
    solve was degenerate (in practice only at L = 0 or L = 100) and callers
    must fall back to zero saturation.
    """
    return float(_max_chroma_kernel(float(L), float(H)))

def max_chroma_batch(L: ArrayFloat, H: ArrayFloat) -> ArrayFloat:
    """
    Vectorised ``max_chroma``.

    Args:
        L: Lightness values, any shape broadcastable against H.
        H: Hue angles in degrees.

    Returns:
        Array of the broadcast shape.
    """
    L_b, H_b = np.broadcast_arrays(np.asarray(L, dtype=np.float64),
                                   np.asarray(H, dtype=np.float64))
    shape = L_b.shape
    res = _max_chroma_batch_kernel(np.ascontiguousarray(L_b.ravel()),
                                   np.ascontiguousarray(H_b.ravel()))
    return res.reshape(shape)


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Swatchbook Gamut Boundary Validation ---")

    print("1. Boundary line count across lightness...")
    for L_test in (0.0, 1e-12, 5.0, 50.0, 99.0, 100.0):
        print(f"   L={L_test:>7}: {len(boundary_lines(L_test))} valid lines")

    print("2. Max chroma non-negativity (grid)...")
    L_grid, H_grid = np.meshgrid(np.linspace(0.5, 99.5, 100), np.linspace(0.0, 359.0, 360))
    chroma = max_chroma_batch(L_grid, H_grid)
    print(f"   min={chroma.min():.4f}  max={chroma.max():.4f} "
          f"{'[PASS]' if np.all(chroma >= 0.0) else '[FAIL]'}")
