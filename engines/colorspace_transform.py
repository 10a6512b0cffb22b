"""Whole-buffer color space conversions and their threshold variants.

The converted components are written straight into the R, G, B (and for
CMYK, A) slots of the output buffer. The result is a visualization of the
color space, not an RGB image re-composited from it.
"""

import logging
from typing import Optional

import numpy as np

from engines.color_space import rgb_to_cmyk, rgb_to_hsv, rgb_to_lab, rgb_to_ycbcr
from models.effect_params import ChromaOverflow
from models.errors import NoImageSet
from models.pixel_buffer import PixelBuffer, from_channels
from utils.constants import (
    CHROMA_OVERFLOW_MODES,
    CMYK_THRESHOLD,
    HSV_THRESHOLD,
    LAB_THRESHOLD,
    YCBCR_CHROMA_GAIN,
    YCBCR_CHROMA_SCALE,
    YCBCR_THRESHOLD,
)

logger = logging.getLogger(__name__)


def _split(buffer: PixelBuffer):
    rgb = buffer.rgb.astype(np.float64)
    return rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]


def _compose(buffer: PixelBuffer, c0, c1, c2, alpha=None, dtype=np.uint8) -> PixelBuffer:
    """Write three components (and optionally alpha) into a copy of ``buffer``."""
    out = buffer.writable_array()
    out[:, :, 0] = c0
    out[:, :, 1] = c1
    out[:, :, 2] = c2
    if alpha is not None:
        out[:, :, 3] = alpha
    return from_channels(buffer, out, dtype)


def _binarize_above(channel: np.ndarray, threshold: float) -> np.ndarray:
    return np.where(channel > threshold, 255.0, 0.0)


def _binarize_not_below(channel: np.ndarray, threshold: float) -> np.ndarray:
    return np.where(channel < threshold, 0.0, 255.0)


def to_hsv(buffer: PixelBuffer) -> PixelBuffer:
    """H, S, V into R, G, B; alpha kept."""
    logger.debug("HSV conversion of %dx%d buffer", buffer.width, buffer.height)
    h, s, v = rgb_to_hsv(*_split(buffer))
    return _compose(buffer, h, s, v)


def to_hsv_threshold(buffer: PixelBuffer, threshold: float = HSV_THRESHOLD) -> PixelBuffer:
    """HSV with V binarized: above ``threshold`` becomes 255, otherwise 0."""
    logger.debug("HSV threshold %s on %dx%d buffer", threshold, buffer.width, buffer.height)
    h, s, v = rgb_to_hsv(*_split(buffer))
    return _compose(buffer, h, s, _binarize_above(v, threshold))


def to_lab(buffer: PixelBuffer) -> PixelBuffer:
    """Display-range L, a, b into R, G, B; alpha kept."""
    logger.debug("Lab conversion of %dx%d buffer", buffer.width, buffer.height)
    l_star, a_star, b_star = rgb_to_lab(*_split(buffer))
    return _compose(buffer, l_star, a_star, b_star)


def to_lab_threshold(buffer: PixelBuffer, threshold: float = LAB_THRESHOLD) -> PixelBuffer:
    """Lab with L binarized: below ``threshold`` becomes 0, otherwise 255."""
    logger.debug("Lab threshold %s on %dx%d buffer", threshold, buffer.width, buffer.height)
    l_star, a_star, b_star = rgb_to_lab(*_split(buffer))
    return _compose(buffer, _binarize_not_below(l_star, threshold), a_star, b_star)


def to_cmyk(buffer: PixelBuffer) -> PixelBuffer:
    """C, M, Y, K into R, G, B, A."""
    logger.debug("CMYK conversion of %dx%d buffer", buffer.width, buffer.height)
    c, m, y, k = rgb_to_cmyk(*_split(buffer))
    return _compose(buffer, c, m, y, alpha=k)


def to_cmyk_threshold(buffer: PixelBuffer, threshold: float = CMYK_THRESHOLD) -> PixelBuffer:
    """CMYK with only the C channel binarized (below ``threshold`` becomes 0)."""
    logger.debug("CMYK threshold %s on %dx%d buffer", threshold, buffer.width, buffer.height)
    c, m, y, k = rgb_to_cmyk(*_split(buffer))
    return _compose(buffer, _binarize_not_below(c, threshold), m, y, alpha=k)


def to_ycbcr(buffer: PixelBuffer) -> PixelBuffer:
    """Y, Cb, Cr into R, G, B; alpha forced opaque."""
    logger.debug("YCbCr conversion of %dx%d buffer", buffer.width, buffer.height)
    y, cb, cr = rgb_to_ycbcr(*_split(buffer))
    return _compose(buffer, y, cb, cr, alpha=255)


def _apply_overflow(values: np.ndarray, overflow: ChromaOverflow):
    """Return (values, dtype) for the chosen out-of-range chroma policy."""
    if overflow == 'keep':
        return values, np.int16
    if overflow == 'clip':
        return values, np.uint8
    if overflow == 'wrap':
        return np.mod(np.rint(values), 256), np.uint8
    raise ValueError(f"Chroma overflow must be one of {CHROMA_OVERFLOW_MODES}, got {overflow!r}")


def to_ycbcr_threshold(
    buffer: PixelBuffer,
    threshold: float = YCBCR_THRESHOLD,
    overflow: ChromaOverflow = 'keep',
) -> PixelBuffer:
    """YCbCr where pixels brighter than ``threshold`` get boosted chroma.

    Y is left as is. Where ``y > threshold`` the Cb and Cr slots receive
    ``min(src * 1.1, 255) * 2`` computed from the source pixel's G and B
    values respectively. That can reach 510; ``overflow`` selects whether
    such values are kept (``int16`` buffer), clipped or wrapped modulo 256.
    """
    logger.debug(
        "YCbCr threshold %s (overflow=%s) on %dx%d buffer",
        threshold, overflow, buffer.width, buffer.height,
    )
    r, g, b = _split(buffer)
    y, cb, cr = rgb_to_ycbcr(r, g, b)

    # Only the boosted chroma may leave the byte range
    bright = y > threshold
    boosted_cb = np.minimum(g * YCBCR_CHROMA_GAIN, 255.0) * YCBCR_CHROMA_SCALE
    boosted_cr = np.minimum(b * YCBCR_CHROMA_GAIN, 255.0) * YCBCR_CHROMA_SCALE

    out = buffer.writable_array()
    out[:, :, 0] = np.clip(y, 0, 255)
    out[:, :, 1] = np.where(bright, boosted_cb, np.clip(cb, 0, 255))
    out[:, :, 2] = np.where(bright, boosted_cr, np.clip(cr, 0, 255))
    out[:, :, 3] = 255
    out, dtype = _apply_overflow(out, overflow)
    return from_channels(buffer, out, dtype)


class ColorSpaceTransformer:
    """Holds a current image and converts it on request.

    Thin stateful surface over the module functions, for callers that set
    one captured frame and then ask for several views of it.
    """

    def __init__(self, image: Optional[PixelBuffer] = None):
        self.image = image

    def set_image(self, image: PixelBuffer) -> None:
        self.image = image

    def is_image_set(self) -> bool:
        return self.image is not None

    def _require_image(self) -> PixelBuffer:
        if self.image is None:
            logger.warning("No image set. Call set_image() first.")
            raise NoImageSet("No image set. Call set_image() first.")
        return self.image

    def to_hsv(self) -> PixelBuffer:
        return to_hsv(self._require_image())

    def to_hsv_threshold(self, threshold: float = HSV_THRESHOLD) -> PixelBuffer:
        return to_hsv_threshold(self._require_image(), threshold)

    def to_lab(self) -> PixelBuffer:
        return to_lab(self._require_image())

    def to_lab_threshold(self, threshold: float = LAB_THRESHOLD) -> PixelBuffer:
        return to_lab_threshold(self._require_image(), threshold)

    def to_cmyk(self) -> PixelBuffer:
        return to_cmyk(self._require_image())

    def to_cmyk_threshold(self, threshold: float = CMYK_THRESHOLD) -> PixelBuffer:
        return to_cmyk_threshold(self._require_image(), threshold)

    def to_ycbcr(self) -> PixelBuffer:
        return to_ycbcr(self._require_image())

    def to_ycbcr_threshold(
        self,
        threshold: float = YCBCR_THRESHOLD,
        overflow: ChromaOverflow = 'keep',
    ) -> PixelBuffer:
        return to_ycbcr_threshold(self._require_image(), threshold, overflow)
