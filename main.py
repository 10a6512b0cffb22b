"""
Pixel Space Studio
Color space conversions, channel views and pixel effects on RGBA images
"""

import logging
import sys
from pathlib import Path

USAGE = """\
Usage: python main.py <image_path> <effect> [param] [output]
       python main.py --synthetic[=<demo>] <effect> [param] [output]
       python main.py <image_path> spaces|thresholds|channels [param] [output_dir]

Effects: {effects}
Shortcuts 1-7 select the face-filter effects ({shortcuts}).
Demo images: {demos} (default gradient).
"""

DEFAULT_DEMO = 'gradient'

# Which EffectParams field the optional [param] sets, per effect
PARAM_FIELDS = {
    'grayscale': ('brightness_factor', float),
    'blur': ('blur_level', int),
    'pixelationGray': ('block_size', int),
    'pixelationColor': ('block_size', int),
    'brightness': ('brightness_amount', float),
    'HSVThreshold': ('threshold', float),
    'LabThreshold': ('threshold', float),
    'CMYKThreshold': ('threshold', float),
    'YCbCrThreshold': ('threshold', float),
}


def _print_metrics(original, processed):
    from utils.metrics import compute_psnr_ssim

    metrics = compute_psnr_ssim(original, processed)
    print(f"PSNR (RGB): {metrics['psnr_rgb']:.2f} dB")
    print(f"SSIM (RGB): {metrics['ssim_rgb']:.4f}")
    print(f"PSNR (Y):   {metrics['psnr_y']:.2f} dB")


def load_source(source):
    """Load an image path, or generate a demo for ``--synthetic[=<demo>]``."""
    from utils.image_io import load_buffer
    from utils.test_images import DEMO_IMAGES, generate_demo_image

    if source == '--synthetic' or source.startswith('--synthetic='):
        key = source.partition('=')[2] or DEFAULT_DEMO
        print(f"Generating test image ({key})...")
        image = generate_demo_image(key)
        if image is None:
            raise ValueError(f"Unknown demo image {key!r}, expected one of {', '.join(DEMO_IMAGES)}")
        return image

    print(f"Loading: {source}")
    return load_buffer(source)


def run_effect(image, name, param, output):
    from models.effect_params import EffectParams
    from engines.pipeline import apply_effect, resolve_effect
    from utils.image_io import save_buffer

    effect = resolve_effect(name)
    params = EffectParams()
    if param is not None:
        if effect not in PARAM_FIELDS:
            raise ValueError(f"Effect {effect} takes no parameter, got {param!r}")
        field_name, cast = PARAM_FIELDS[effect]
        params = EffectParams(**{field_name: cast(param)})

    result = apply_effect(effect, image, params)

    print(f"\n=== {effect} ===")
    _print_metrics(image, result)

    output = output or f"{effect}.png"
    save_buffer(result, output)
    print(f"\nSaved: {output}")


def run_batch(image, mode, param, output_dir):
    from models.effect_params import ChannelThresholds, ColorSpaceThresholds
    from engines.pipeline import convert_color_spaces, split_channels, threshold_color_spaces
    from utils.image_io import save_buffer

    if mode == 'spaces':
        if param is not None:
            raise ValueError(f"spaces takes no parameter, got {param!r}")
        result = convert_color_spaces(image)
    elif mode == 'thresholds':
        value = float(param) if param is not None else ColorSpaceThresholds().hsv
        result = threshold_color_spaces(image, ColorSpaceThresholds(value, value, value, value))
    else:
        value = float(param) if param is not None else ChannelThresholds().red
        result = split_channels(image, ChannelThresholds(value, value, value))

    out_dir = Path(output_dir or '.')
    out_dir.mkdir(parents=True, exist_ok=True)
    print(f"\n=== {mode} ({result.elapsed_ms:.2f} ms) ===")
    for key in result.keys():
        path = out_dir / f"{key}.png"
        save_buffer(result[key], path)
        print(f"Saved: {path}")


def main():
    from engines.pipeline import EFFECTS
    from models.errors import PixelEngineError
    from utils.constants import FILTER_KEYS
    from utils.test_images import DEMO_IMAGES

    args = sys.argv[1:]
    verbose = '-v' in args
    args = [a for a in args if a != '-v']
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if len(args) < 2 or args[0] == '--help':
        shortcuts = ', '.join(f"{k}={v}" for k, v in FILTER_KEYS.items())
        print(USAGE.format(
            effects=', '.join(EFFECTS), shortcuts=shortcuts, demos=', '.join(DEMO_IMAGES),
        ))
        sys.exit(0)

    source, name = args[0], args[1]
    param = args[2] if len(args) > 2 else None
    output = args[3] if len(args) > 3 else None

    try:
        image = load_source(source)
        print(f"Image: {image.width}x{image.height}")

        if name in ('spaces', 'thresholds', 'channels'):
            run_batch(image, name, param, output)
        else:
            run_effect(image, name, param, output)
    except (PixelEngineError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
