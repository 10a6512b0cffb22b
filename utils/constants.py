"""Default parameters and names shared across engines and the CLI."""

# Threshold defaults of the individual color-space conversions
HSV_THRESHOLD = 125
LAB_THRESHOLD = 128
CMYK_THRESHOLD = 128
YCBCR_THRESHOLD = 128

# Slider start values of the original capture screens
COLOR_SPACE_THRESHOLD = 128
CHANNEL_THRESHOLD = 120

GRAYSCALE_BRIGHTNESS = 1.2

# Face-filter defaults
BLUR_LEVEL = 5
PIXELATION_BLOCK = 5

YCBCR_CHROMA_GAIN = 1.1
YCBCR_CHROMA_SCALE = 2

CHANNEL_NAMES = ('RED', 'GREEN', 'BLUE')

CHROMA_OVERFLOW_MODES = ('keep', 'clip', 'wrap')

# Keyboard shortcuts of the face filter screen
FILTER_KEYS = {
    '1': 'grayscale',
    '2': 'blur',
    '3': 'HSV',
    '4': 'Lab',
    '5': 'CMYK',
    '6': 'pixelationGray',
    '7': 'pixelationColor',
}
