"""Batch views of one captured frame and the named effect registry."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from models.effect_params import ChannelThresholds, ColorSpaceThresholds, EffectParams
from models.errors import UnknownEffect
from models.pixel_buffer import PixelBuffer
from engines.colorspace_transform import (
    to_cmyk,
    to_cmyk_threshold,
    to_hsv,
    to_hsv_threshold,
    to_lab,
    to_lab_threshold,
    to_ycbcr,
    to_ycbcr_threshold,
)
from engines.channel_processor import (
    adjust_brightness,
    apply_threshold,
    extract_channel,
    to_grayscale,
)
from engines.effects import apply_blur, apply_pixelation_color, apply_pixelation_grayscale
from utils.constants import CHANNEL_NAMES, FILTER_KEYS
from utils.metrics import Timer

logger = logging.getLogger(__name__)


@dataclass
class ProcessedImageSet:
    """Named output buffers of one batch call."""

    images: Dict[str, PixelBuffer] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    def __getitem__(self, key: str) -> PixelBuffer:
        return self.images[key]

    def __contains__(self, key: str) -> bool:
        return key in self.images

    def keys(self):
        return self.images.keys()


def convert_color_spaces(buffer: PixelBuffer) -> ProcessedImageSet:
    """HSV, LAB, CMYK and YCbCr views of ``buffer``."""
    timer = Timer()
    images = {
        'HSV': timer.measure(to_hsv, buffer),
        'LAB': timer.measure(to_lab, buffer),
        'CMYK': timer.measure(to_cmyk, buffer),
        'YCbCr': timer.measure(to_ycbcr, buffer),
    }
    logger.info("Converted %dx%d buffer to %d color spaces in %.1f ms",
                buffer.width, buffer.height, len(images), timer.elapsed_ms)
    return ProcessedImageSet(images, timer.elapsed_ms)


def threshold_color_spaces(
    buffer: PixelBuffer,
    thresholds: Optional[ColorSpaceThresholds] = None,
) -> ProcessedImageSet:
    """Threshold variant of every color space, one threshold per space."""
    thresholds = thresholds or ColorSpaceThresholds()
    timer = Timer()
    images = {
        'HSV': timer.measure(to_hsv_threshold, buffer, thresholds.hsv),
        'LAB': timer.measure(to_lab_threshold, buffer, thresholds.lab),
        'CMYK': timer.measure(to_cmyk_threshold, buffer, thresholds.cmyk),
        'YCbCr': timer.measure(
            to_ycbcr_threshold, buffer, thresholds.ycbcr, thresholds.chroma_overflow
        ),
    }
    logger.info("Thresholded %dx%d buffer in %d color spaces in %.1f ms",
                buffer.width, buffer.height, len(images), timer.elapsed_ms)
    return ProcessedImageSet(images, timer.elapsed_ms)


def split_channels(
    buffer: PixelBuffer,
    thresholds: Optional[ChannelThresholds] = None,
) -> ProcessedImageSet:
    """Grayscale, the three isolated channels and their thresholded versions."""
    thresholds = thresholds or ChannelThresholds()
    timer = Timer()
    images = {'GRAYSCALE': timer.measure(to_grayscale, buffer)}
    for index, name in enumerate(CHANNEL_NAMES):
        images[f'{name}_CHANNEL'] = timer.measure(extract_channel, buffer, index)
    for index, (name, value) in enumerate(zip(CHANNEL_NAMES, thresholds.as_tuple())):
        images[f'{name}_THRESHOLD'] = timer.measure(apply_threshold, buffer, value, index)
    logger.info("Split %dx%d buffer into %d channel views in %.1f ms",
                buffer.width, buffer.height, len(images), timer.elapsed_ms)
    return ProcessedImageSet(images, timer.elapsed_ms)


EffectFn = Callable[[PixelBuffer, EffectParams], PixelBuffer]

EFFECTS: Dict[str, EffectFn] = {
    'grayscale': lambda buf, p: to_grayscale(buf, p.brightness_factor),
    'blur': lambda buf, p: apply_blur(buf, p.blur_level),
    'HSV': lambda buf, p: to_hsv(buf),
    'Lab': lambda buf, p: to_lab(buf),
    'CMYK': lambda buf, p: to_cmyk(buf),
    'YCbCr': lambda buf, p: to_ycbcr(buf),
    'pixelationGray': lambda buf, p: apply_pixelation_grayscale(buf, p.block_size),
    'pixelationColor': lambda buf, p: apply_pixelation_color(buf, p.block_size),
    'brightness': lambda buf, p: adjust_brightness(buf, p.brightness_amount),
    'HSVThreshold': lambda buf, p: to_hsv_threshold(buf, p.threshold),
    'LabThreshold': lambda buf, p: to_lab_threshold(buf, p.threshold),
    'CMYKThreshold': lambda buf, p: to_cmyk_threshold(buf, p.threshold),
    'YCbCrThreshold': lambda buf, p: to_ycbcr_threshold(buf, p.threshold, p.chroma_overflow),
}


def resolve_effect(name: str) -> str:
    """Map a keyboard shortcut ("1".."7") or effect name to its registry name."""
    name = FILTER_KEYS.get(str(name), name)
    if name not in EFFECTS:
        raise UnknownEffect(name)
    return name


def apply_effect(name: str, buffer: PixelBuffer, params: Optional[EffectParams] = None) -> PixelBuffer:
    """Run one registered effect on ``buffer``."""
    params = params or EffectParams()
    effect = resolve_effect(name)
    logger.debug("Applying effect %s to %dx%d buffer", effect, buffer.width, buffer.height)
    return EFFECTS[effect](buffer, params)
