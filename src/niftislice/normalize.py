"""Per-slice min/max normalization into 8-bit display samples."""

from dataclasses import dataclass

import numpy as np

from .config import DISPLAY_MAX
from .errors import DegenerateRange
from .slicer import Slice

# largest span for which DISPLAY_MAX * (s - min) stays finite
_SAFE_SPAN = np.finfo(np.float64).max / DISPLAY_MAX


@dataclass(frozen=True)
class DisplayBuffer:
    pixels: np.ndarray
    width: int
    height: int

    def as_2d(self) -> np.ndarray:
        return self.pixels.reshape(self.height, self.width)


def normalize_samples(samples) -> np.ndarray:
    """
    Stretch samples linearly so the observed min maps to 0 and max to 255.

    Parameters
    ----------
    samples : array-like
        Any real-valued samples; flattened.

    Returns
    -------
    np.ndarray
        uint8 array of the same length. NaN samples map to 0, +inf to 255.

    Raises
    ------
    DegenerateRange
        No finite samples, or all finite samples are equal.
    """
    v = np.asarray(samples, dtype=np.float64).reshape(-1)
    finite = np.isfinite(v)
    if not finite.any():
        raise DegenerateRange("Slice has no finite samples to normalize.")

    vmin = float(v[finite].min())
    vmax = float(v[finite].max())
    if vmax <= vmin:
        raise DegenerateRange(f"Slice is flat (min = max = {vmin:g}).")

    span = vmax - vmin
    with np.errstate(over="ignore", invalid="ignore"):
        if np.isfinite(span) and span < _SAFE_SPAN:
            scaled = DISPLAY_MAX * (v - vmin) / span
        else:
            # range too wide for float64: halve both terms before subtracting
            scaled = DISPLAY_MAX * ((v / 2 - vmin / 2) / (vmax / 2 - vmin / 2))
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=float(DISPLAY_MAX), neginf=0.0)
    # round half up, not numpy's half-to-even
    return np.clip(np.floor(scaled + 0.5), 0, DISPLAY_MAX).astype(np.uint8)


def normalize(sl: Slice) -> DisplayBuffer:
    pixels = normalize_samples(sl.samples)
    pixels.flags.writeable = False
    return DisplayBuffer(pixels=pixels, width=sl.width, height=sl.height)
