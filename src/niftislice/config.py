"""Defaults shared by the viewer core, renderer and CLI."""

# Volume metadata
DEFAULT_SPACING = 1.0
MAX_DIMENSIONS = 7
SPATIAL_AXES = 3

# Info panel
INFO_TITLE = "NIfTI Image Info"
DIMENSION_SEPARATOR = "×"
SPACING_DECIMALS = 3
UNKNOWN_KIND_NAME = "unknown"

# Display quantization
DISPLAY_MAX = 255

# Quad preview output
QUAD_FILENAME = "quad.png"
QUAD_FIGSIZE_IN = (8.0, 8.0)
QUAD_DPI = 100
QUAD_BACKGROUND = "black"
QUAD_TEXT_COLOR = "white"
QUAD_FONT_SIZE = 11

# Per-slice PNG export
SLICE_DIRNAME = "slices"
DEFAULT_PHYSICAL_ASPECT = True
DEFAULT_SAVE_SLICES = False
