"""Tests for whole-buffer color space conversions."""

import numpy as np
import pytest
from engines.color_space import rgb_to_lab
from engines.colorspace_transform import (
    ColorSpaceTransformer,
    to_cmyk,
    to_cmyk_threshold,
    to_hsv,
    to_hsv_threshold,
    to_lab,
    to_lab_threshold,
    to_ycbcr,
    to_ycbcr_threshold,
)
from models.errors import NoImageSet
from models.pixel_buffer import PixelBuffer
from utils.test_images import generate_noise, generate_solid

ALL_CONVERSIONS = [to_hsv, to_hsv_threshold, to_lab, to_lab_threshold,
                   to_cmyk, to_cmyk_threshold, to_ycbcr, to_ycbcr_threshold]


def _pixel(buf, x=0, y=0):
    return [int(v) for v in buf.pixels[y, x]]


@pytest.mark.parametrize("convert", ALL_CONVERSIONS)
def test_input_not_mutated(convert):
    """Every conversion returns a new buffer of the same size."""
    image = generate_noise(9, 7)
    before = image.pixels.copy()
    result = convert(image)
    assert result is not image
    assert (result.width, result.height) == (9, 7)
    assert np.array_equal(image.pixels, before)


def test_hsv_layout_keeps_alpha():
    """H, S, V go to R, G, B and alpha is untouched."""
    image = PixelBuffer.from_flat(2, 1, [255, 0, 0, 77, 0, 255, 0, 12])
    result = to_hsv(image)
    assert _pixel(result, 0) == [0, 255, 255, 77]
    assert _pixel(result, 1) == [85, 255, 255, 12]


def test_hsv_threshold_above_is_on():
    """V above the threshold is on, V below it is off."""
    image = generate_solid(1, 1, (128, 128, 128))
    assert _pixel(to_hsv_threshold(image, 128.5))[2] == 0
    assert _pixel(to_hsv_threshold(image, 127.5))[2] == 255


def test_hsv_threshold_default():
    """Default V threshold is 125."""
    assert _pixel(to_hsv_threshold(generate_solid(1, 1, (124, 124, 124))))[2] == 0
    assert _pixel(to_hsv_threshold(generate_solid(1, 1, (126, 126, 126))))[2] == 255


def test_lab_extremes():
    """White and black land at the ends of L with neutral a/b."""
    image = PixelBuffer.from_flat(2, 1, [255, 255, 255, 255, 0, 0, 0, 40])
    result = to_lab(image)
    assert _pixel(result, 0) == [255, 128, 128, 255]
    assert _pixel(result, 1) == [0, 128, 128, 40]


def test_lab_threshold_binarizes_lightness_only():
    """L becomes 0/255, a and b match the plain conversion."""
    image = generate_noise(8, 8, seed=3)
    plain = to_lab(image)
    thresholded = to_lab_threshold(image, 128)
    l_channel = thresholded.pixels[:, :, 0]
    assert set(np.unique(l_channel)) <= {0, 255}
    assert np.array_equal(thresholded.pixels[:, :, 1:], plain.pixels[:, :, 1:])
    l_star, _, _ = rgb_to_lab(*np.moveaxis(image.rgb.astype(float), -1, 0))
    assert np.array_equal(l_channel == 255, l_star >= 128)


def test_cmyk_writes_key_into_alpha():
    """C, M, Y, K fill all four slots; black stays NaN free."""
    image = PixelBuffer.from_flat(2, 1, [0, 0, 0, 200, 255, 0, 0, 10])
    result = to_cmyk(image)
    assert _pixel(result, 0) == [0, 0, 0, 255]
    assert _pixel(result, 1) == [0, 255, 255, 0]


def test_cmyk_threshold_only_touches_cyan():
    """Only C is binarized; M, Y, K match the plain conversion."""
    image = generate_noise(8, 8, seed=5)
    plain = to_cmyk(image)
    thresholded = to_cmyk_threshold(image, 128)
    assert set(np.unique(thresholded.pixels[:, :, 0])) <= {0, 255}
    assert np.array_equal(thresholded.pixels[:, :, 1:], plain.pixels[:, :, 1:])


def test_cmyk_threshold_low_cyan_goes_off():
    """Cyan below the threshold maps to 0."""
    image = generate_solid(1, 1, (200, 255, 255))
    assert _pixel(to_cmyk_threshold(image, 128)) == [0, 0, 0, 0]
    image = generate_solid(1, 1, (0, 255, 255))
    assert _pixel(to_cmyk_threshold(image, 128)) == [255, 0, 0, 0]


def test_ycbcr_forces_opaque_alpha():
    """YCbCr output is always opaque."""
    image = generate_solid(2, 2, (255, 255, 255), alpha=10)
    result = to_ycbcr(image)
    assert _pixel(result) == [255, 128, 128, 255]


def test_ycbcr_threshold_above_range_is_plain_conversion():
    """A threshold no Y can exceed leaves Cb/Cr untouched."""
    image = generate_noise(16, 16, seed=7)
    result = to_ycbcr_threshold(image, threshold=300)
    assert np.array_equal(result.pixels, to_ycbcr(image).pixels)
    assert result.is_clamped


def test_ycbcr_threshold_boosts_from_source_green_and_blue():
    """Bright pixels get min(src * 1.1, 255) * 2 from their G and B values."""
    image = generate_solid(1, 1, (100, 150, 200))
    result = to_ycbcr_threshold(image, threshold=128)
    assert _pixel(result) == [141, 330, 440, 255]
    assert not result.is_clamped


def test_ycbcr_threshold_dark_pixels_unchanged():
    """Pixels with Y at or below the threshold keep their chroma."""
    image = generate_solid(1, 1, (20, 40, 60))
    assert np.array_equal(to_ycbcr_threshold(image, 128).pixels, to_ycbcr(image).pixels)


@pytest.mark.parametrize("overflow, expected", [
    ('keep', [255, 510, 510, 255]),
    ('clip', [255, 255, 255, 255]),
    ('wrap', [255, 254, 254, 255]),
])
def test_ycbcr_threshold_overflow_policies(overflow, expected):
    """Out-of-range chroma is kept, clipped or wrapped on request."""
    image = generate_solid(1, 1, (255, 255, 255))
    result = to_ycbcr_threshold(image, 128, overflow=overflow)
    assert _pixel(result) == expected


def test_ycbcr_threshold_rejects_unknown_overflow():
    """Unknown overflow policies are refused."""
    with pytest.raises(ValueError):
        to_ycbcr_threshold(generate_solid(1, 1), 128, overflow='saturate')


def test_transformer_requires_image():
    """Stateful conversions fail before set_image."""
    transformer = ColorSpaceTransformer()
    assert not transformer.is_image_set()
    with pytest.raises(NoImageSet):
        transformer.to_hsv()
    with pytest.raises(NoImageSet):
        transformer.to_ycbcr_threshold(100)


def test_transformer_matches_functions():
    """The stateful surface delegates to the pure functions."""
    image = generate_noise(6, 6, seed=1)
    transformer = ColorSpaceTransformer()
    transformer.set_image(image)
    assert transformer.is_image_set()
    assert transformer.to_lab() == to_lab(image)
    assert transformer.to_cmyk_threshold(90) == to_cmyk_threshold(image, 90)
    assert transformer.to_hsv_threshold() == to_hsv_threshold(image)


def test_transformer_instances_are_independent():
    """Setting an image on one instance does not affect another."""
    first = ColorSpaceTransformer(generate_solid(1, 1))
    second = ColorSpaceTransformer()
    assert first.is_image_set()
    assert not second.is_image_set()
