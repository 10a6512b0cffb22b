"""Data models: pixel buffers, parameter sets and errors."""

from .pixel_buffer import PixelBuffer
from .effect_params import EffectParams, ColorSpaceThresholds, ChannelThresholds
from .errors import (
    PixelEngineError,
    NoImageSet,
    InvalidChannelIndex,
    BufferShapeError,
    UnknownEffect,
)

__all__ = [
    'PixelBuffer',
    'EffectParams',
    'ColorSpaceThresholds',
    'ChannelThresholds',
    'PixelEngineError',
    'NoImageSet',
    'InvalidChannelIndex',
    'BufferShapeError',
    'UnknownEffect',
]
