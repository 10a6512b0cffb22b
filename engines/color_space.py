"""Color space conversion.

Every function takes channel values as Python numbers or numpy arrays of a
common shape and returns a tuple of the same kind, so the buffer-level
transforms can run them over whole images at once.
"""

import numpy as np
from typing import Tuple

# sRGB (D65) to XYZ
SRGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])

D65_WHITE = (95.047, 100.0, 108.883)

LAB_EPSILON = 0.008856
LAB_KAPPA = 7.787


def _unwrap(value):
    """Turn 0-d arrays back into numpy scalars."""
    value = np.asarray(value)
    return value[()] if value.ndim == 0 else value


def clamp(value, lo, hi):
    """Clamp scalars or arrays to [lo, hi]."""
    return _unwrap(np.minimum(np.maximum(value, lo), hi))


def _rescale_and_clamp(value, min_in, max_in, max_out):
    normalized = (np.asarray(value, dtype=np.float64) - min_in) * max_out / (max_in - min_in)
    return clamp(normalized, 0, max_out)


def rgb_to_hsv(r, g, b) -> Tuple:
    """RGB [0,255] to HSV, all three components scaled to [0,255]."""
    r = np.asarray(r, dtype=np.float64) / 255.0
    g = np.asarray(g, dtype=np.float64) / 255.0
    b = np.asarray(b, dtype=np.float64) / 255.0

    c_max = np.maximum(np.maximum(r, g), b)
    c_min = np.minimum(np.minimum(r, g), b)
    delta = c_max - c_min

    with np.errstate(divide='ignore', invalid='ignore'):
        s = np.where(c_max == 0, 0.0, delta / c_max)
        # Red wins ties with green, green wins ties with blue
        h = np.where(
            c_max == r,
            np.mod((g - b) / delta, 6.0),
            np.where(c_max == g, (b - r) / delta + 2.0, (r - g) / delta + 4.0),
        )
    h = np.where(delta == 0, 0.0, h) / 6.0

    return _unwrap(h * 255.0), _unwrap(s * 255.0), _unwrap(c_max * 255.0)


def hsv_to_rgb(h, s, v) -> Tuple:
    """HSV in [0,1] to RGB integers in [0,255]."""
    h = np.asarray(h, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)

    i = np.floor(h * 6.0)
    f = h * 6.0 - i
    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)
    sector = np.mod(i, 6).astype(np.int64)

    r = np.choose(sector, [v, q, p, p, t, v])
    g = np.choose(sector, [t, v, v, q, p, p])
    b = np.choose(sector, [p, p, t, v, v, q])

    # Round half up
    return tuple(_unwrap(np.floor(c * 255.0 + 0.5).astype(np.int64)) for c in (r, g, b))


def _srgb_decode(channel: np.ndarray) -> np.ndarray:
    return np.where(
        channel > 0.04045,
        np.power((channel + 0.055) / 1.055, 2.4),
        channel / 12.92,
    )


def rgb_to_xyz(r, g, b) -> Tuple:
    """RGB [0,255] to CIE XYZ scaled so that white has Y = 100."""
    rgb = np.stack([
        np.asarray(r, dtype=np.float64),
        np.asarray(g, dtype=np.float64),
        np.asarray(b, dtype=np.float64),
    ], axis=-1) / 255.0
    linear = _srgb_decode(rgb) * 100.0
    xyz = linear @ SRGB_TO_XYZ.T
    return _unwrap(xyz[..., 0]), _unwrap(xyz[..., 1]), _unwrap(xyz[..., 2])


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(t > LAB_EPSILON, np.cbrt(t), t * LAB_KAPPA + 16.0 / 116.0)


def xyz_to_lab(x, y, z) -> Tuple:
    """XYZ to display-range L*a*b*.

    L is rescaled from [0,100] to [0,255]; a and b are offset by 128. All
    three are clamped to [0,255], so the result is a byte image rather than
    canonical Lab.
    """
    fx = _lab_f(np.asarray(x, dtype=np.float64) / D65_WHITE[0])
    fy = _lab_f(np.asarray(y, dtype=np.float64) / D65_WHITE[1])
    fz = _lab_f(np.asarray(z, dtype=np.float64) / D65_WHITE[2])

    l_star = 116.0 * fy - 16.0
    a_star = 500.0 * (fx - fy)
    b_star = 200.0 * (fy - fz)

    return (
        _rescale_and_clamp(l_star, 0, 100, 255),
        clamp(a_star + 128.0, 0, 255),
        clamp(b_star + 128.0, 0, 255),
    )


def rgb_to_lab(r, g, b) -> Tuple:
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


def rgb_to_cmyk(r, g, b) -> Tuple:
    """RGB [0,255] to CMYK, every component in [0,255].

    Pure black (k == 1) yields c = m = y = 0.
    """
    c = 1.0 - np.asarray(r, dtype=np.float64) / 255.0
    m = 1.0 - np.asarray(g, dtype=np.float64) / 255.0
    y = 1.0 - np.asarray(b, dtype=np.float64) / 255.0
    k = np.minimum(np.minimum(c, m), y)

    black = k >= 1.0
    denom = np.where(black, 1.0, 1.0 - k)
    c = np.where(black, 0.0, (c - k) / denom) * 255.0
    m = np.where(black, 0.0, (m - k) / denom) * 255.0
    y = np.where(black, 0.0, (y - k) / denom) * 255.0

    return _unwrap(c), _unwrap(m), _unwrap(y), _unwrap(k * 255.0)


def rgb_to_ycbcr(r, g, b) -> Tuple:
    """RGB to YCbCr using ITU-R BT.601 (full range, unclamped)."""
    r = np.asarray(r, dtype=np.float64)
    g = np.asarray(g, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    y = 0.299 * r + 0.587 * g + 0.114 * b
    cb = -0.168736 * r - 0.331264 * g + 0.5 * b + 128.0
    cr = 0.5 * r - 0.418688 * g - 0.081312 * b + 128.0
    return _unwrap(y), _unwrap(cb), _unwrap(cr)


def ycbcr_to_rgb(y, cb, cr) -> Tuple:
    """YCbCr to RGB using ITU-R BT.601, clamped to [0,255]."""
    y = np.asarray(y, dtype=np.float64)
    cb = np.asarray(cb, dtype=np.float64) - 128.0
    cr = np.asarray(cr, dtype=np.float64) - 128.0
    r = y + 1.402 * cr
    g = y - 0.344136 * cb - 0.714136 * cr
    b = y + 1.772 * cb
    return clamp(r, 0, 255), clamp(g, 0, 255), clamp(b, 0, 255)
