"""RGBA8 raster shared by every engine."""

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from models.errors import BufferShapeError

CHANNELS = 4
# Boosted YCbCr chroma reaches 2 * 255
UNCLAMPED_MAX = 510


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Immutable RGBA raster, row-major, top-left origin.

    ``pixels`` has shape ``(height, width, 4)``. Values are ``uint8``, except
    for buffers produced by the unclamped YCbCr threshold which are ``int16``
    and may exceed 255 (see ``is_clamped``).
    """

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        if not isinstance(self.width, (int, np.integer)) or self.width <= 0:
            raise BufferShapeError(f"Width must be a positive integer, got {self.width!r}")
        if not isinstance(self.height, (int, np.integer)) or self.height <= 0:
            raise BufferShapeError(f"Height must be a positive integer, got {self.height!r}")

        pixels = np.asarray(self.pixels)
        expected = self.width * self.height * CHANNELS
        if pixels.size != expected:
            raise BufferShapeError(
                f"Expected {expected} values for {self.width}x{self.height} RGBA, got {pixels.size}"
            )
        if pixels.ndim != 1 and pixels.shape != (self.height, self.width, CHANNELS):
            raise BufferShapeError(
                f"Expected flat or ({self.height}, {self.width}, {CHANNELS}) array, got shape {pixels.shape}"
            )
        if pixels.dtype == np.int16:
            if pixels.min() < 0 or pixels.max() > UNCLAMPED_MAX:
                raise BufferShapeError(f"Unclamped channel values must lie in [0, {UNCLAMPED_MAX}]")
        elif pixels.dtype != np.uint8:
            if pixels.min() < 0 or pixels.max() > 255:
                raise BufferShapeError("Channel values must lie in [0, 255]")
            pixels = np.rint(pixels).astype(np.uint8)

        pixels = np.array(pixels.reshape(self.height, self.width, CHANNELS), copy=True)
        pixels.flags.writeable = False
        object.__setattr__(self, 'pixels', pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """Wrap an ``(h, w, 4)`` or ``(h, w, 3)`` array; RGB input gets opaque alpha."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise BufferShapeError(f"Expected (h, w, 3) or (h, w, 4) array, got shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=array.dtype)
            array = np.concatenate([array, alpha], axis=-1)
        return cls(width=array.shape[1], height=array.shape[0], pixels=array)

    @classmethod
    def from_flat(cls, width: int, height: int, values: Iterable[int]) -> 'PixelBuffer':
        """Build from a flat R,G,B,A,R,G,B,A... sequence."""
        return cls(width=width, height=height, pixels=np.fromiter(values, dtype=np.int64))

    @classmethod
    def blank(cls, width: int, height: int, fill: Sequence[int] = (0, 0, 0, 255)) -> 'PixelBuffer':
        pixels = np.empty((height, width, CHANNELS), dtype=np.uint8)
        pixels[...] = np.asarray(fill, dtype=np.uint8)
        return cls(width=width, height=height, pixels=pixels)

    @property
    def shape(self) -> tuple:
        return self.pixels.shape

    @property
    def flat(self) -> np.ndarray:
        """The ``width * height * 4`` channel sequence (read-only view)."""
        return self.pixels.reshape(-1)

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    @property
    def is_clamped(self) -> bool:
        """True when every value fits an 8-bit channel."""
        return self.pixels.dtype == np.uint8 or bool(
            self.pixels.min() >= 0 and self.pixels.max() <= 255
        )

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(self.width, self.height, self.pixels)

    def clipped(self) -> 'PixelBuffer':
        """Displayable ``uint8`` copy, clamping any out-of-range values."""
        return PixelBuffer(self.width, self.height, np.clip(self.pixels, 0, 255).astype(np.uint8))

    def writable_array(self, dtype=np.float64) -> np.ndarray:
        """Fresh mutable copy of the pixels, for building an output buffer."""
        return self.pixels.astype(dtype, copy=True)

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height}, dtype={self.pixels.dtype})"


def to_channel_bytes(values: np.ndarray, dtype=np.uint8) -> np.ndarray:
    """Round half to even and clamp, the way a clamped byte array stores floats."""
    rounded = np.rint(values)
    if dtype == np.uint8:
        rounded = np.clip(rounded, 0, 255)
    return rounded.astype(dtype)


def from_channels(source: PixelBuffer, values: np.ndarray, dtype=np.uint8) -> PixelBuffer:
    """New buffer with ``source``'s dimensions holding ``values`` (float, (h, w, 4))."""
    return PixelBuffer(source.width, source.height, to_channel_bytes(values, dtype))
