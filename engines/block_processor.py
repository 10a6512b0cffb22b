"""Block processing: splitting a raster into tiles and painting them back."""

import numpy as np
from typing import Iterator, List, Tuple


def block_grid(shape: Tuple[int, int], block_size: int) -> Iterator[Tuple[slice, slice]]:
    """Yield (row, col) slices of BxB tiles, row-major; edge tiles are clipped."""
    if block_size < 1:
        raise ValueError(f"Block size must be >= 1, got {block_size}")
    h, w = shape
    for i in range(0, h, block_size):
        for j in range(0, w, block_size):
            yield slice(i, min(i + block_size, h)), slice(j, min(j + block_size, w))


def block_means(channels: np.ndarray, block_size: int) -> List[Tuple[slice, slice, np.ndarray]]:
    """Per-tile mean over the valid pixels of each tile, one value per trailing channel."""
    means = []
    for rows, cols in block_grid(channels.shape[:2], block_size):
        tile = channels[rows, cols]
        means.append((rows, cols, tile.reshape(-1, *channels.shape[2:]).mean(axis=0)))
    return means


def paint_blocks(target: np.ndarray, means: List[Tuple[slice, slice, np.ndarray]]) -> np.ndarray:
    """Fill each tile of ``target`` (in place) with its value and return it."""
    for rows, cols, value in means:
        target[rows, cols] = value
    return target
