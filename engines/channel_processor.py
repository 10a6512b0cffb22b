"""Grayscale, brightness and single-channel operations on RGB buffers."""

import logging
import numbers
from typing import Optional

import numpy as np

from models.errors import InvalidChannelIndex, NoImageSet
from models.pixel_buffer import PixelBuffer, from_channels
from utils.constants import GRAYSCALE_BRIGHTNESS

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def _check_channel(channel_index) -> int:
    if (
        isinstance(channel_index, bool)
        or not isinstance(channel_index, numbers.Integral)
        or channel_index not in (0, 1, 2)
    ):
        raise InvalidChannelIndex(channel_index)
    return int(channel_index)


def to_grayscale(buffer: PixelBuffer, brightness_factor: float = GRAYSCALE_BRIGHTNESS) -> PixelBuffer:
    """BT.601 luminance scaled by ``brightness_factor``, written to R, G and B."""
    logger.debug("Grayscale x%s on %dx%d buffer", brightness_factor, buffer.width, buffer.height)
    out = buffer.writable_array()
    gray = np.clip(out[:, :, :3] @ LUMA_WEIGHTS * brightness_factor, 0, 255)
    out[:, :, :3] = gray[:, :, np.newaxis]
    return from_channels(buffer, out)


def adjust_brightness(buffer: PixelBuffer, amount: float) -> PixelBuffer:
    """Add ``amount`` to R, G and B, clamping each to [0,255]."""
    logger.debug("Brightness %+g on %dx%d buffer", amount, buffer.width, buffer.height)
    out = buffer.writable_array()
    out[:, :, :3] = np.clip(out[:, :, :3] + amount, 0, 255)
    return from_channels(buffer, out)


def extract_channel(buffer: PixelBuffer, channel_index: int) -> PixelBuffer:
    """Keep one of R, G, B and zero the other two; alpha kept."""
    channel_index = _check_channel(channel_index)
    logger.debug("Extract channel %d of %dx%d buffer", channel_index, buffer.width, buffer.height)
    out = buffer.writable_array()
    keep = out[:, :, channel_index].copy()
    out[:, :, :3] = 0
    out[:, :, channel_index] = keep
    return from_channels(buffer, out)


def apply_threshold(buffer: PixelBuffer, threshold_value: float, channel_index: int) -> PixelBuffer:
    """Binarize one channel (above threshold -> 255) and zero the other two."""
    channel_index = _check_channel(channel_index)
    logger.debug(
        "Threshold %s on channel %d of %dx%d buffer",
        threshold_value, channel_index, buffer.width, buffer.height,
    )
    out = buffer.writable_array()
    binary = np.where(out[:, :, channel_index] > threshold_value, 255.0, 0.0)
    out[:, :, :3] = 0
    out[:, :, channel_index] = binary
    return from_channels(buffer, out)


class ChannelProcessor:
    """Stateful surface over the channel functions, mirroring ``ColorSpaceTransformer``."""

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

    def to_grayscale(self, brightness_factor: float = GRAYSCALE_BRIGHTNESS) -> PixelBuffer:
        return to_grayscale(self._require_image(), brightness_factor)

    def adjust_brightness(self, amount: float) -> PixelBuffer:
        return adjust_brightness(self._require_image(), amount)

    def extract_channel(self, channel_index: int) -> PixelBuffer:
        return extract_channel(self._require_image(), channel_index)

    def apply_threshold(self, threshold_value: float, channel_index: int) -> PixelBuffer:
        return apply_threshold(self._require_image(), threshold_value, channel_index)
