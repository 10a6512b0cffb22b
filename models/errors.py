"""Exception types raised by the pixel engine."""


class PixelEngineError(Exception):
    """Base class for all engine errors."""


class NoImageSet(PixelEngineError):
    """A conversion was requested before ``set_image`` was called."""


class InvalidChannelIndex(PixelEngineError, ValueError):
    """Channel index is not one of 0 (red), 1 (green) or 2 (blue)."""

    def __init__(self, channel_index):
        self.channel_index = channel_index
        super().__init__(f"Channel index must be 0, 1 or 2, got {channel_index!r}")


class BufferShapeError(PixelEngineError, ValueError):
    """Buffer dimensions or storage length are inconsistent."""


class UnknownEffect(PixelEngineError, KeyError):
    """Effect name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown effect: {self.name!r}"
