"""Spatial effects: box blur and block pixelation."""

import logging

import numpy as np
from scipy.ndimage import correlate

from engines.block_processor import block_means, paint_blocks
from models.pixel_buffer import PixelBuffer, from_channels

logger = logging.getLogger(__name__)


def box_kernel(level: int) -> np.ndarray:
    """Uniform (2k+1)x(2k+1) kernel whose cells are 1/(2k+1)^2."""
    if level < 0:
        raise ValueError(f"Blur level must be >= 0, got {level}")
    size = 2 * level + 1
    return np.full((size, size), 1.0 / size ** 2)


def apply_blur(buffer: PixelBuffer, level_blur: int = 1) -> PixelBuffer:
    """Box blur of R, G, B; alpha kept.

    Neighbors outside the image contribute nothing and the weights are not
    renormalized, so pixels near the border come out darker.
    """
    kernel = box_kernel(level_blur)
    logger.debug(
        "Blur level %d (%dx%d kernel) on %dx%d buffer",
        level_blur, kernel.shape[0], kernel.shape[1], buffer.width, buffer.height,
    )
    out = buffer.writable_array()
    for c in range(3):
        out[:, :, c] = correlate(out[:, :, c], kernel, mode='constant', cval=0.0)
    return from_channels(buffer, out)


def apply_pixelation_grayscale(buffer: PixelBuffer, block_size: int) -> PixelBuffer:
    """Fill each block with the block mean of (r + g + b) / 3; alpha opaque."""
    logger.debug("Gray pixelation block %d on %dx%d buffer", block_size, buffer.width, buffer.height)
    out = buffer.writable_array()
    intensity = out[:, :, :3].sum(axis=-1) / 3.0
    paint_blocks(out[:, :, :3], block_means(intensity, block_size))
    out[:, :, 3] = 255
    return from_channels(buffer, out)


def apply_pixelation_color(buffer: PixelBuffer, block_size: int) -> PixelBuffer:
    """Fill each block with its mean R, G, B; alpha kept."""
    logger.debug("Color pixelation block %d on %dx%d buffer", block_size, buffer.width, buffer.height)
    out = buffer.writable_array()
    paint_blocks(out[:, :, :3], block_means(out[:, :, :3], block_size))
    return from_channels(buffer, out)


class EffectsEngine:
    """Groups the spatial effects; holds no state."""

    def apply_blur(self, buffer: PixelBuffer, level_blur: int = 1) -> PixelBuffer:
        return apply_blur(buffer, level_blur)

    def apply_pixelation_grayscale(self, buffer: PixelBuffer, block_size: int) -> PixelBuffer:
        return apply_pixelation_grayscale(buffer, block_size)

    def apply_pixelation_color(self, buffer: PixelBuffer, block_size: int) -> PixelBuffer:
        return apply_pixelation_color(buffer, block_size)
