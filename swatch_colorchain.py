# -*- coding: utf-8 -*-
"""
Swatchbook: Perceptually uniform palettes from a single base colour
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

HSLuv Conversion Chain
======================
Bidirectional transform between gamma-encoded device RGB and HSLuv
(perceptually uniform Hue / Saturation / Lightness):

    sRGB <-> linear RGB <-> XYZ <-> CIELUV <-> LCh(uv) <-> HSLuv

Each stage takes and returns the whole (L, a, b)-style triple.  The two
stages closest to HSLuv consult the gamut boundary solver to translate
between absolute chroma and saturation-as-percentage-of-gamut.

Numerical policy:
    Every stage sanitizes its inputs and outputs (NaN / Inf -> 0) and the
    public entry points clamp their results (H in [0, 360], S and L in
    [0, 100], device channels in [0, 1]).  A malformed colour still yields
    *some* paintable colour; nothing here raises on data.

    At L* ~ 0 (black) and L* ~ 100 (white) chroma is undefined.  Saturation
    is forced to 0 and the hue is carried through unchanged.

Architecture Note:
    Like the Loom colour engine, the scalar per-pixel stage functions are
    Numba kernels.  Batched (N, 3) kernels loop over rows and call them, and
    ``ColorSpaceChain`` exposes both an internal ``_raw`` fast-path (assumes
    validated (N, 3) float64) and a ``@handle_shapes`` public API.  The
    module-level functions (``puhsl_to_device_color`` & co.) are the
    single-colour API consumed by the rendering layer.
"""

import math
import numpy as np
from numba import njit
from typing import NamedTuple, Sequence, Tuple

from swatch_numerics import (
    ArrayFloat,
    EPS,
    EPSILON,
    KAPPA,
    L_MAX,
    DEG2RAD,
    RAD2DEG,
    REF_U,
    REF_V,
    UNBOUNDED_CHROMA,
    KERNEL_OPTS,
    M_XYZ_TO_SRGB,
    M_SRGB_TO_XYZ,
    _sanitize,
    _clamp,
    sanitized,
    handle_shapes,
)
from swatch_gamut import _max_chroma_kernel

__all__ = [
    # --- Data types ---
    "DeviceColor",
    "PUHSL",

    # --- Classes ---
    "ColorSpaceChain",

    # --- Single-colour API ---
    "puhsl_to_device_color",
    "device_color_to_puhsl",
    "device_color_to_puhsla",
    "puhsl_to_lch",
    "lch_to_puhsl",

    # --- Packed colours ---
    "to_packed",
    "from_packed",
    "puhsl_to_packed",
    "packed_to_puhsl",
    "packed_to_puhsla",

    # --- Transfer functions ---
    "_srgb_companding",
    "_srgb_inverse_companding",
]


class DeviceColor(NamedTuple):
    """Gamma-encoded sRGB plus linear alpha, every channel in [0, 1]."""
    r: float
    g: float
    b: float
    a: float = 1.0


class PUHSL(NamedTuple):
    """HSLuv coordinates: hue (deg), saturation (% of gamut), lightness (L*)."""
    h: float
    s: float
    l: float


# =============================================================================
# 1. TRANSFER FUNCTIONS & HELPERS (Numba)
# =============================================================================

@njit(**KERNEL_OPTS)
def _srgb_companding(c: float) -> float:
    """
    sRGB OETF (linear -> gamma encoded).

    Standard: IEC 61966-2-1.  Negative linear values take the linear branch.
    """
    v = _sanitize(c, 0.0)
    if v <= 0.0031308:
        return 12.92 * v
    return 1.055 * (v ** (1.0 / 2.4)) - 0.055

@njit(**KERNEL_OPTS)
def _srgb_inverse_companding(c: float) -> float:
    """sRGB EOTF (gamma encoded -> linear).  Input is clamped to [0, 1]."""
    v = _clamp(_sanitize(c, 0.0), 0.0, 1.0)
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4

@njit(**KERNEL_OPTS)
def _atan2(y_in: float, x_in: float) -> float:
    """
    Four-quadrant arctangent with explicit axis cases.

    x = 0 is resolved by the sign of y (+-pi/2); the origin maps to 0.
    """
    y = _sanitize(y_in, 0.0)
    x = _sanitize(x_in, 0.0)

    if x > 0.0:
        return math.atan(y / x)
    if x < 0.0 and y >= 0.0:
        return math.atan(y / x) + math.pi
    if x < 0.0 and y < 0.0:
        return math.atan(y / x) - math.pi
    if y > 0.0:
        return math.pi / 2.0
    if y < 0.0:
        return -math.pi / 2.0
    return 0.0

@njit(**KERNEL_OPTS)
def _chroma_undefined(L: float) -> bool:
    """True at the lightness extremes where hue and chroma carry no meaning."""
    return L < EPS or L > L_MAX


# =============================================================================
# 2. PER-PIXEL STAGES (Numba)
# =============================================================================
# Forward: HSLuv -> LCh -> Luv -> XYZ -> sRGB

@njit(**KERNEL_OPTS)
def _puhsl_to_lch_px(H: float, S: float, L: float) -> Tuple[float, float, float]:
    H = _sanitize(H, 0.0)
    S = _sanitize(S, 0.0)
    L = _sanitize(L, 0.0)

    if _chroma_undefined(L):
        return L, 0.0, H

    max_c = _max_chroma_kernel(L, H)
    if max_c <= EPS or max_c >= UNBOUNDED_CHROMA:
        return L, 0.0, H

    C = _sanitize(max_c * (_clamp(S, 0.0, 100.0) / 100.0), 0.0)
    return L, C, H

@njit(**KERNEL_OPTS)
def _lch_to_luv_px(L: float, C: float, H: float) -> Tuple[float, float, float]:
    L = _sanitize(L, 0.0)
    C = _sanitize(C, 0.0)
    h_rad = _sanitize(H, 0.0) * DEG2RAD
    u = _sanitize(C * math.cos(h_rad), 0.0)
    v = _sanitize(C * math.sin(h_rad), 0.0)
    return L, u, v

@njit(**KERNEL_OPTS)
def _luv_to_xyz_px(L: float, u: float, v: float) -> Tuple[float, float, float]:
    L = _sanitize(L, 0.0)
    u = _sanitize(u, 0.0)
    v = _sanitize(v, 0.0)

    # Y from L* (reference white Y = 1)
    if L <= 8.0:
        Y = L / KAPPA
    else:
        Y = ((L + 16.0) / 116.0) ** 3

    # u', v' of the sample; black takes the white point chromaticity
    if L < EPS:
        up = REF_U
        vp = REF_V
    else:
        up = u / (13.0 * L) + REF_U
        vp = v / (13.0 * L) + REF_V

    denom = 4.0 * vp
    if abs(denom) < EPS:
        denom = math.copysign(EPS, denom)

    X = _sanitize(Y * 9.0 * up / denom, 0.0)
    Z = _sanitize(Y * (12.0 - 3.0 * up - 20.0 * vp) / denom, 0.0)
    return X, _sanitize(Y, 0.0), Z

@njit(**KERNEL_OPTS)
def _xyz_to_rgb_px(X: float, Y: float, Z: float) -> Tuple[float, float, float]:
    X = _sanitize(X, 0.0)
    Y = _sanitize(Y, 0.0)
    Z = _sanitize(Z, 0.0)

    r_lin = M_XYZ_TO_SRGB[0, 0] * X + M_XYZ_TO_SRGB[0, 1] * Y + M_XYZ_TO_SRGB[0, 2] * Z
    g_lin = M_XYZ_TO_SRGB[1, 0] * X + M_XYZ_TO_SRGB[1, 1] * Y + M_XYZ_TO_SRGB[1, 2] * Z
    b_lin = M_XYZ_TO_SRGB[2, 0] * X + M_XYZ_TO_SRGB[2, 1] * Y + M_XYZ_TO_SRGB[2, 2] * Z

    r = _clamp(_sanitize(_srgb_companding(r_lin), 0.0), 0.0, 1.0)
    g = _clamp(_sanitize(_srgb_companding(g_lin), 0.0), 0.0, 1.0)
    b = _clamp(_sanitize(_srgb_companding(b_lin), 0.0), 0.0, 1.0)
    return r, g, b

# Backward: sRGB -> XYZ -> Luv -> LCh -> HSLuv

@njit(**KERNEL_OPTS)
def _rgb_to_xyz_px(r: float, g: float, b: float) -> Tuple[float, float, float]:
    r_lin = _srgb_inverse_companding(r)
    g_lin = _srgb_inverse_companding(g)
    b_lin = _srgb_inverse_companding(b)

    X = M_SRGB_TO_XYZ[0, 0] * r_lin + M_SRGB_TO_XYZ[0, 1] * g_lin + M_SRGB_TO_XYZ[0, 2] * b_lin
    Y = M_SRGB_TO_XYZ[1, 0] * r_lin + M_SRGB_TO_XYZ[1, 1] * g_lin + M_SRGB_TO_XYZ[1, 2] * b_lin
    Z = M_SRGB_TO_XYZ[2, 0] * r_lin + M_SRGB_TO_XYZ[2, 1] * g_lin + M_SRGB_TO_XYZ[2, 2] * b_lin
    return _sanitize(X, 0.0), _sanitize(Y, 0.0), _sanitize(Z, 0.0)

@njit(**KERNEL_OPTS)
def _xyz_to_luv_px(X: float, Y: float, Z: float) -> Tuple[float, float, float]:
    X = _sanitize(X, 0.0)
    Y = _sanitize(Y, 0.0)
    Z = _sanitize(Z, 0.0)

    denom = X + 15.0 * Y + 3.0 * Z
    if abs(denom) < EPS:
        return 0.0, 0.0, 0.0

    # Reference white Y = 1, so Y / Yn == Y
    if Y > EPSILON:
        L = 116.0 * (Y ** (1.0 / 3.0)) - 16.0
    else:
        L = KAPPA * Y

    up = 4.0 * X / denom
    vp = 9.0 * Y / denom

    u = _sanitize(13.0 * L * (up - REF_U), 0.0)
    v = _sanitize(13.0 * L * (vp - REF_V), 0.0)
    return _sanitize(L, 0.0), u, v

@njit(**KERNEL_OPTS)
def _luv_to_lch_px(L: float, u: float, v: float) -> Tuple[float, float, float]:
    L = _sanitize(L, 0.0)
    u = _sanitize(u, 0.0)
    v = _sanitize(v, 0.0)

    C = _sanitize(math.sqrt(u * u + v * v), 0.0)
    h_deg = _atan2(v, u) * RAD2DEG
    if h_deg < 0.0:
        h_deg += 360.0
    # -tiny + 360 rounds to 360
    if h_deg >= 360.0:
        h_deg -= 360.0
    return L, C, _sanitize(h_deg, 0.0)

@njit(**KERNEL_OPTS)
def _lch_to_puhsl_px(L: float, C: float, H: float) -> Tuple[float, float, float]:
    L = _sanitize(L, 0.0)
    C = _sanitize(C, 0.0)
    H = _sanitize(H, 0.0)

    if _chroma_undefined(L):
        return H, 0.0, L

    max_c = _max_chroma_kernel(L, H)
    if max_c <= EPS or max_c >= UNBOUNDED_CHROMA:
        return H, 0.0, L

    S = _clamp(_sanitize(C / max_c * 100.0, 0.0), 0.0, 100.0)
    return H, S, L

# Fused pipelines (no intermediate arrays)

@njit(**KERNEL_OPTS)
def _puhsl_to_rgb_px(H: float, S: float, L: float) -> Tuple[float, float, float]:
    L1, C, H1 = _puhsl_to_lch_px(H, S, L)
    L2, u, v = _lch_to_luv_px(L1, C, H1)
    X, Y, Z = _luv_to_xyz_px(L2, u, v)
    return _xyz_to_rgb_px(X, Y, Z)

@njit(**KERNEL_OPTS)
def _rgb_to_puhsl_px(r: float, g: float, b: float) -> Tuple[float, float, float]:
    X, Y, Z = _rgb_to_xyz_px(r, g, b)
    L, u, v = _xyz_to_luv_px(X, Y, Z)
    L1, C, H = _luv_to_lch_px(L, u, v)
    H1, S, L2 = _lch_to_puhsl_px(L1, C, H)
    return (_clamp(_sanitize(H1, 0.0), 0.0, 360.0),
            _clamp(_sanitize(S, 0.0), 0.0, 100.0),
            _clamp(_sanitize(L2, 0.0), 0.0, 100.0))


# =============================================================================
# 3. BATCH KERNELS (Numba)
# =============================================================================
# One row loop per stage.  Input shape (N, 3), output shape (N, 3).

@njit(**KERNEL_OPTS)
def _puhsl_to_lch_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _puhsl_to_lch_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _lch_to_luv_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _lch_to_luv_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _luv_to_xyz_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _luv_to_xyz_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _xyz_to_rgb_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _xyz_to_rgb_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _rgb_to_xyz_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _rgb_to_xyz_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _xyz_to_luv_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _xyz_to_luv_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _luv_to_lch_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _luv_to_lch_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _lch_to_puhsl_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _lch_to_puhsl_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _puhsl_to_rgb_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _puhsl_to_rgb_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out

@njit(**KERNEL_OPTS)
def _rgb_to_puhsl_kernel(arr: ArrayFloat) -> ArrayFloat:
    out = np.empty_like(arr)
    for i in range(arr.shape[0]):
        out[i, 0], out[i, 1], out[i, 2] = _rgb_to_puhsl_px(arr[i, 0], arr[i, 1], arr[i, 2])
    return out


# =============================================================================
# 4. COLOR SPACE CHAIN
# =============================================================================

class ColorSpaceChain:
    """Static utility class for the batched HSLuv transform chain.

    Every public method accepts a single triple of shape (3,) or a batch of
    shape (N, 3) and returns the same shape.  Column order follows the name
    of the space: HSLuv is (H, S, L), LCh is (L, C, H), Luv is (L, u, v).
    """

    # =====================================================================
    #  Internal _raw fast-path methods  (assume validated (N, 3) float64)
    # =====================================================================

    @staticmethod
    def _puhsl_to_rgb_raw(puhsl_array: ArrayFloat) -> ArrayFloat:
        """Raw HSLuv → sRGB.  *puhsl_array* must be (N, 3) float64."""
        return _puhsl_to_rgb_kernel(puhsl_array)

    @staticmethod
    def _rgb_to_puhsl_raw(rgb_array: ArrayFloat) -> ArrayFloat:
        """Raw sRGB → HSLuv.  *rgb_array* must be (N, 3) float64."""
        return _rgb_to_puhsl_kernel(rgb_array)

    # =====================================================================
    #  Public API  (shape-safe wrappers)
    # =====================================================================

    @staticmethod
    @handle_shapes
    def puhsl_to_lch(puhsl_array: ArrayFloat) -> ArrayFloat:
        """
        Converts HSLuv to LCh(uv).

        Saturation is clamped to [0, 100] and scaled by the maximum in-gamut
        chroma at (L, H).  At the lightness extremes chroma is 0.
        """
        return _puhsl_to_lch_kernel(puhsl_array)

    @staticmethod
    @handle_shapes
    def lch_to_luv(lch_array: ArrayFloat) -> ArrayFloat:
        """Converts LCh(uv) to CIELUV (polar to cartesian)."""
        return _lch_to_luv_kernel(lch_array)

    @staticmethod
    @handle_shapes
    def luv_to_xyz(luv_array: ArrayFloat) -> ArrayFloat:
        """
        Converts CIELUV to XYZ (D65, Y = 1).

        Black (L ~ 0) takes the white-point chromaticity so no division by
        zero occurs.
        """
        return _luv_to_xyz_kernel(luv_array)

    @staticmethod
    @handle_shapes
    def xyz_to_rgb(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ (D65) to gamma-encoded sRGB.

        Output is display-referred: every channel is clamped to [0, 1].
        """
        return _xyz_to_rgb_kernel(xyz_array)

    @staticmethod
    @handle_shapes
    def rgb_to_xyz(rgb_array: ArrayFloat) -> ArrayFloat:
        """
        Converts gamma-encoded sRGB to XYZ (D65).

        Input channels are clamped to [0, 1] before the EOTF.
        """
        return _rgb_to_xyz_kernel(rgb_array)

    @staticmethod
    @handle_shapes
    def xyz_to_luv(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ to CIELUV.

        Returns (0, 0, 0) where X + 15Y + 3Z vanishes.
        """
        return _xyz_to_luv_kernel(xyz_array)

    @staticmethod
    @handle_shapes
    def luv_to_lch(luv_array: ArrayFloat) -> ArrayFloat:
        """Converts CIELUV to LCh(uv), hue in degrees [0, 360)."""
        return _luv_to_lch_kernel(luv_array)

    @staticmethod
    @handle_shapes
    def lch_to_puhsl(lch_array: ArrayFloat) -> ArrayFloat:
        """
        Converts LCh(uv) to HSLuv.

        Saturation is chroma as a percentage of the in-gamut maximum,
        clamped to [0, 100].
        """
        return _lch_to_puhsl_kernel(lch_array)

    # --- Convenience: full chain ---

    @staticmethod
    @handle_shapes
    @sanitized(0.0)
    def puhsl_to_rgb(puhsl_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion HSLuv -> sRGB [0..1]."""
        return ColorSpaceChain._puhsl_to_rgb_raw(puhsl_array)

    @staticmethod
    @handle_shapes
    @sanitized(0.0)
    def rgb_to_puhsl(rgb_array: ArrayFloat) -> ArrayFloat:
        """Direct conversion sRGB [0..1] -> HSLuv, clamped to its domain."""
        return ColorSpaceChain._rgb_to_puhsl_raw(rgb_array)


# =============================================================================
# 5. SINGLE-COLOUR API
# =============================================================================

def _check_channels(color: Sequence[float]) -> None:
    """Raises ValueError unless *color* has 3 (RGB) or 4 (RGBA) channels."""
    if len(color) not in (3, 4):
        raise ValueError(f"Device colour needs 3 or 4 channels, got {len(color)}")

def _alpha(a: float) -> float:
    a = float(a)
    if not math.isfinite(a):
        return 0.0
    return min(max(a, 0.0), 1.0)

def puhsl_to_lch(h: float, s: float, l: float) -> Tuple[float, float, float]:
    """HSLuv -> (L, C, H) for a single colour."""
    return _puhsl_to_lch_px(float(h), float(s), float(l))

def lch_to_puhsl(l: float, c: float, h: float) -> PUHSL:
    """(L, C, H) -> HSLuv for a single colour."""
    return PUHSL(*_lch_to_puhsl_px(float(l), float(c), float(h)))

def puhsl_to_device_color(h: float, s: float, l: float, a: float = 1.0) -> DeviceColor:
    """
    Converts an HSLuv colour to a device colour.

    Args:
        h: Hue in degrees.
        s: Saturation, percentage of the maximum chroma at (l, h).
        l: Lightness L* in [0, 100].
        a: Alpha, passed through (sanitized and clamped to [0, 1]).

    Returns:
        DeviceColor with every channel in [0, 1].
    """
    r, g, b = _puhsl_to_rgb_px(float(h), float(s), float(l))
    return DeviceColor(r, g, b, _alpha(a))

def device_color_to_puhsla(color: Sequence[float]) -> Tuple[float, float, float, float]:
    """
    Converts a device colour to (H, S, L, A).

    *color* may be a DeviceColor or any sequence of 3 or 4 floats; a missing
    alpha is taken as 1.0.
    """
    _check_channels(color)
    r, g, b = (float(c) for c in color[:3])
    a = color[3] if len(color) > 3 else 1.0
    h, s, l = _rgb_to_puhsl_px(r, g, b)
    return h, s, l, _alpha(a)

def device_color_to_puhsl(color: Sequence[float]) -> PUHSL:
    """Converts a device colour to HSLuv, ignoring alpha."""
    h, s, l, _ = device_color_to_puhsla(color)
    return PUHSL(h, s, l)


# =============================================================================
# 6. PACKED 0xAARRGGBB COLOURS
# =============================================================================

def _to_byte(c: float) -> int:
    c = float(c)
    if not math.isfinite(c):
        return 0
    return int(round(min(max(c, 0.0), 1.0) * 255.0))

def to_packed(color: Sequence[float]) -> int:
    """
    Packs a device colour into a 32-bit 0xAARRGGBB integer.

    Channels are clamped to [0, 1] and rounded to 8 bits.
    """
    _check_channels(color)
    r, g, b = color[:3]
    a = color[3] if len(color) > 3 else 1.0
    return (_to_byte(a) << 24) | (_to_byte(r) << 16) | (_to_byte(g) << 8) | _to_byte(b)

def from_packed(value: int) -> DeviceColor:
    """Unpacks a 32-bit 0xAARRGGBB integer (higher bits are ignored)."""
    v = int(value) & 0xFFFFFFFF
    return DeviceColor(
        ((v >> 16) & 0xFF) / 255.0,
        ((v >> 8) & 0xFF) / 255.0,
        (v & 0xFF) / 255.0,
        ((v >> 24) & 0xFF) / 255.0,
    )

def puhsl_to_packed(h: float, s: float, l: float, a: float = 1.0) -> int:
    """HSLuv (+ alpha) straight to a packed 0xAARRGGBB integer."""
    return to_packed(puhsl_to_device_color(h, s, l, a))

def packed_to_puhsl(value: int) -> PUHSL:
    """Packed 0xAARRGGBB integer to HSLuv."""
    return device_color_to_puhsl(from_packed(value))

def packed_to_puhsla(value: int) -> Tuple[float, float, float, float]:
    """Packed 0xAARRGGBB integer to (H, S, L, A)."""
    return device_color_to_puhsla(from_packed(value))


# =============================================================================
# Validation Block
# =============================================================================
if __name__ == "__main__":
    print("--- Swatchbook HSLuv Chain Validation ---")

    # 1. Round-Trip Invariant Test (sRGB -> HSLuv -> sRGB)
    print("1. Testing Round-Trip Stability (sRGB->HSLuv->sRGB)...")
    rng = np.random.default_rng(7)
    rgb_in = rng.random((1000, 3))
    puhsl = ColorSpaceChain.rgb_to_puhsl(rgb_in)
    rgb_out = ColorSpaceChain.puhsl_to_rgb(puhsl)
    max_err = np.max(np.abs(rgb_in - rgb_out))
    print(f"   Max Error: {max_err:.2e} {'[PASS]' if max_err < 1e-3 else '[FAIL]'}")

    # 2. Reference value
    print("2. Testing pure red reference...")
    red = device_color_to_puhsl(DeviceColor(1.0, 0.0, 0.0, 1.0))
    print(f"   Red -> H={red.h:.3f} S={red.s:.3f} L={red.l:.3f} (Expected ~12.177, 100, 53.237)")

    # 3. Shape Safety Test
    print("3. Testing Shape Safety...")
    try:
        ColorSpaceChain.rgb_to_puhsl(np.zeros((10, 5)))
    except ValueError as e:
        print(f"   Caught expected error: {e}")

    # 4. Degenerate inputs
    print("4. Testing NaN / Inf inputs...")
    print(f"   HSLuv(nan, inf, -inf) -> {puhsl_to_device_color(float('nan'), float('inf'), float('-inf'))}")
