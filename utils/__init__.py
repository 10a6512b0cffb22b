"""Shared utilities."""

from .constants import FILTER_KEYS, CHANNEL_NAMES
from .metrics import compute_psnr_ssim, Timer
from .test_images import generate_checkerboard, generate_gradient, generate_color_bars
from .image_io import load_buffer, save_buffer

__all__ = [
    'FILTER_KEYS',
    'CHANNEL_NAMES',
    'compute_psnr_ssim',
    'Timer',
    'generate_checkerboard',
    'generate_gradient',
    'generate_color_bars',
    'load_buffer',
    'save_buffer',
]
