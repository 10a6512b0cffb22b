"""Metrics: PSNR and SSIM between buffers, runtime timing."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict

from models.pixel_buffer import PixelBuffer


def compute_psnr_ssim(original: PixelBuffer, processed: PixelBuffer) -> Dict[str, float]:
    """Compute PSNR and SSIM on RGB and on the BT.601 luma channel.

    Out-of-range buffers are clipped first. Identical images give an
    infinite PSNR.
    """
    original_rgb = original.clipped().rgb
    processed_rgb = processed.clipped().rgb
    if original_rgb.shape != processed_rgb.shape:
        raise ValueError(f"Shape mismatch: {original_rgb.shape} vs {processed_rgb.shape}")

    # SSIM needs a 7x7 window; fall back to the largest odd size that fits
    win_size = min(7, *original_rgb.shape[:2])
    if win_size % 2 == 0:
        win_size -= 1

    with np.errstate(divide='ignore'):
        psnr_rgb = peak_signal_noise_ratio(original_rgb, processed_rgb, data_range=255)

    original_y = original_rgb.astype(np.float64) @ np.array([0.299, 0.587, 0.114])
    processed_y = processed_rgb.astype(np.float64) @ np.array([0.299, 0.587, 0.114])
    with np.errstate(divide='ignore'):
        psnr_y = peak_signal_noise_ratio(original_y, processed_y, data_range=255)

    if win_size >= 3:
        ssim_rgb = structural_similarity(
            original_rgb, processed_rgb, channel_axis=2, data_range=255, win_size=win_size
        )
        ssim_y = structural_similarity(original_y, processed_y, data_range=255, win_size=win_size)
    else:
        ssim_rgb = ssim_y = float('nan')

    return {
        'psnr_rgb': float(psnr_rgb),
        'ssim_rgb': float(ssim_rgb),
        'psnr_y': float(psnr_y),
        'ssim_y': float(ssim_y)
    }


class Timer:
    """Accumulates wall time of the calls it measures."""
    
    def __init__(self):
        self.elapsed_ms = 0.0
        self.calls = 0
    
    def measure(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.elapsed_ms += (time.perf_counter() - start) * 1000.0
        self.calls += 1
        return result
