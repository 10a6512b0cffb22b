"""Image I/O using OpenCV."""

import logging

import cv2
import numpy as np

from models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def load_buffer(path: str) -> PixelBuffer:
    """Load any image OpenCV can read as an RGBA buffer."""
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError(f"Could not load image from {path}")

    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = np.clip(img * 255.0, 0, 255).astype(np.uint8)
    if img.ndim == 2:
        rgba = cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    elif img.shape[2] == 4:
        rgba = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    else:
        rgba = cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)

    logger.info("Loaded %s (%dx%d)", path, rgba.shape[1], rgba.shape[0])
    return PixelBuffer.from_array(rgba)


def save_buffer(buffer: PixelBuffer, path: str) -> None:
    """Save an RGBA buffer; out-of-range values are clipped first."""
    if not buffer.is_clamped:
        logger.warning("Clipping out-of-range values before saving %s", path)
    pixels = np.ascontiguousarray(buffer.clipped().pixels)
    if not cv2.imwrite(str(path), cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)):
        raise ValueError(f"Could not save image to {path}")
    logger.info("Saved %s", path)
