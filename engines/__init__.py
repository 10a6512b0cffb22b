"""Pixel engines - pure computation, no GUI dependencies."""

from .color_space import (
    clamp,
    rgb_to_hsv,
    hsv_to_rgb,
    rgb_to_xyz,
    xyz_to_lab,
    rgb_to_lab,
    rgb_to_cmyk,
    rgb_to_ycbcr,
    ycbcr_to_rgb,
)
from .colorspace_transform import (
    ColorSpaceTransformer,
    to_hsv,
    to_hsv_threshold,
    to_lab,
    to_lab_threshold,
    to_cmyk,
    to_cmyk_threshold,
    to_ycbcr,
    to_ycbcr_threshold,
)
from .channel_processor import (
    ChannelProcessor,
    to_grayscale,
    adjust_brightness,
    extract_channel,
    apply_threshold,
)
from .effects import (
    EffectsEngine,
    box_kernel,
    apply_blur,
    apply_pixelation_grayscale,
    apply_pixelation_color,
)
from .pipeline import (
    ProcessedImageSet,
    EFFECTS,
    apply_effect,
    convert_color_spaces,
    threshold_color_spaces,
    split_channels,
)

__all__ = [
    'clamp',
    'rgb_to_hsv',
    'hsv_to_rgb',
    'rgb_to_xyz',
    'xyz_to_lab',
    'rgb_to_lab',
    'rgb_to_cmyk',
    'rgb_to_ycbcr',
    'ycbcr_to_rgb',
    'ColorSpaceTransformer',
    'to_hsv',
    'to_hsv_threshold',
    'to_lab',
    'to_lab_threshold',
    'to_cmyk',
    'to_cmyk_threshold',
    'to_ycbcr',
    'to_ycbcr_threshold',
    'ChannelProcessor',
    'to_grayscale',
    'adjust_brightness',
    'extract_channel',
    'apply_threshold',
    'EffectsEngine',
    'box_kernel',
    'apply_blur',
    'apply_pixelation_grayscale',
    'apply_pixelation_color',
    'ProcessedImageSet',
    'EFFECTS',
    'apply_effect',
    'convert_color_spaces',
    'threshold_color_spaces',
    'split_channels',
]
