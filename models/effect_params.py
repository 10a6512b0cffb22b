"""Parameter sets for effects and batch conversions."""

from dataclasses import dataclass
from typing import Literal

from utils.constants import (
    BLUR_LEVEL,
    CHANNEL_THRESHOLD,
    CHROMA_OVERFLOW_MODES,
    COLOR_SPACE_THRESHOLD,
    GRAYSCALE_BRIGHTNESS,
    PIXELATION_BLOCK,
)

ChromaOverflow = Literal['keep', 'clip', 'wrap']


@dataclass
class EffectParams:
    """Parameters consumed by the named effect registry."""

    blur_level: int = BLUR_LEVEL
    block_size: int = PIXELATION_BLOCK
    brightness_factor: float = GRAYSCALE_BRIGHTNESS
    brightness_amount: float = 0
    threshold: float = COLOR_SPACE_THRESHOLD
    chroma_overflow: ChromaOverflow = 'keep'

    def __post_init__(self):
        if self.blur_level < 0:
            raise ValueError(f"Blur level must be >= 0, got {self.blur_level}")
        if self.block_size < 1:
            raise ValueError(f"Block size must be >= 1, got {self.block_size}")
        if self.chroma_overflow not in CHROMA_OVERFLOW_MODES:
            raise ValueError(
                f"Chroma overflow must be one of {CHROMA_OVERFLOW_MODES}, got {self.chroma_overflow!r}"
            )


@dataclass
class ColorSpaceThresholds:
    """One threshold per color space, as set by the threshold sliders."""

    hsv: float = COLOR_SPACE_THRESHOLD
    lab: float = COLOR_SPACE_THRESHOLD
    cmyk: float = COLOR_SPACE_THRESHOLD
    ycbcr: float = COLOR_SPACE_THRESHOLD
    chroma_overflow: ChromaOverflow = 'keep'

    def __post_init__(self):
        if self.chroma_overflow not in CHROMA_OVERFLOW_MODES:
            raise ValueError(
                f"Chroma overflow must be one of {CHROMA_OVERFLOW_MODES}, got {self.chroma_overflow!r}"
            )


@dataclass
class ChannelThresholds:
    """Per-channel thresholds for the RGB split view."""

    red: float = CHANNEL_THRESHOLD
    green: float = CHANNEL_THRESHOLD
    blue: float = CHANNEL_THRESHOLD

    def as_tuple(self) -> tuple:
        return (self.red, self.green, self.blue)
