"""Tests for grayscale, brightness and single-channel operations."""

import numpy as np
import pytest
from engines.channel_processor import (
    ChannelProcessor,
    adjust_brightness,
    apply_threshold,
    extract_channel,
    to_grayscale,
)
from models.errors import InvalidChannelIndex, NoImageSet
from models.pixel_buffer import PixelBuffer
from utils.test_images import generate_noise, generate_solid


def test_threshold_isolates_and_binarizes_red():
    """R=200 everywhere with threshold 128 on red gives pure red."""
    image = generate_solid(4, 3, (200, 90, 30), alpha=60)
    result = apply_threshold(image, 128, 0)
    assert np.all(result.rgb == [255, 0, 0])
    assert np.all(result.alpha == 60)


def test_threshold_below_goes_dark():
    """Channel values at or below the threshold become 0."""
    image = PixelBuffer.from_flat(2, 1, [0, 128, 0, 255, 0, 129, 0, 255])
    result = apply_threshold(image, 128, 1)
    assert list(result.pixels[0, 0, :3]) == [0, 0, 0]
    assert list(result.pixels[0, 1, :3]) == [0, 255, 0]


def test_grayscale_identity_on_gray():
    """A factor of 1.0 leaves gray pixels unchanged."""
    image = generate_solid(3, 3, (100, 100, 100))
    assert to_grayscale(image, 1.0) == image


def test_grayscale_default_brightens_and_clamps():
    """Default factor 1.2 brightens, clamping at 255; alpha kept."""
    image = PixelBuffer.from_flat(2, 1, [100, 100, 100, 7, 250, 250, 250, 8])
    result = to_grayscale(image)
    assert list(result.pixels[0, 0]) == [120, 120, 120, 7]
    assert list(result.pixels[0, 1]) == [255, 255, 255, 8]


def test_grayscale_uses_luma_weights():
    """Pure green weighs 0.587."""
    result = to_grayscale(generate_solid(1, 1, (0, 255, 0)), 1.0)
    assert list(result.pixels[0, 0, :3]) == [150, 150, 150]


@pytest.mark.parametrize("amount, expected", [
    (20, [30, 255, 120]),
    (-50, [0, 200, 50]),
    (0, [10, 250, 100]),
])
def test_adjust_brightness_clamps_per_channel(amount, expected):
    """Each of R, G, B is shifted and clamped independently."""
    image = generate_solid(1, 1, (10, 250, 100), alpha=33)
    result = adjust_brightness(image, amount)
    assert list(result.pixels[0, 0]) == expected + [33]


@pytest.mark.parametrize("channel", [0, 1, 2])
def test_extract_channel(channel):
    """Only the chosen channel survives; alpha kept."""
    image = generate_solid(2, 2, (10, 20, 30), alpha=40)
    result = extract_channel(image, channel)
    expected = [0, 0, 0, 40]
    expected[channel] = (10, 20, 30)[channel]
    assert list(result.pixels[1, 1]) == expected


@pytest.mark.parametrize("bad_index", [3, -1, 1.5, True, '0', None])
def test_invalid_channel_index(bad_index):
    """Indices outside {0, 1, 2} are reported, not silently ignored."""
    image = generate_solid(1, 1)
    with pytest.raises(InvalidChannelIndex):
        extract_channel(image, bad_index)
    with pytest.raises(ValueError):
        apply_threshold(image, 128, bad_index)


def test_numpy_integer_channel_index_accepted():
    """numpy integers are valid channel indices."""
    image = generate_solid(1, 1, (1, 2, 3))
    assert list(extract_channel(image, np.int64(2)).pixels[0, 0, :3]) == [0, 0, 3]


def test_operations_do_not_mutate_input():
    """Every channel operation leaves its input alone."""
    image = generate_noise(5, 5)
    before = image.pixels.copy()
    to_grayscale(image)
    adjust_brightness(image, 40)
    extract_channel(image, 0)
    apply_threshold(image, 100, 2)
    assert np.array_equal(image.pixels, before)


def test_processor_requires_image():
    """Stateful calls fail before set_image."""
    processor = ChannelProcessor()
    with pytest.raises(NoImageSet):
        processor.to_grayscale()
    with pytest.raises(NoImageSet):
        processor.apply_threshold(120, 0)


def test_processor_matches_functions():
    """The stateful surface delegates to the pure functions."""
    image = generate_noise(4, 4, seed=2)
    processor = ChannelProcessor(image)
    assert processor.is_image_set()
    assert processor.to_grayscale(0.8) == to_grayscale(image, 0.8)
    assert processor.adjust_brightness(-10) == adjust_brightness(image, -10)
    assert processor.extract_channel(1) == extract_channel(image, 1)
    assert processor.apply_threshold(50, 2) == apply_threshold(image, 50, 2)
