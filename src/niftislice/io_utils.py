"""I/O and utility helpers used by the preview."""

import time
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path

import cv2
import imageio.v3 as iio
import numpy as np
import SimpleITK as sitk

from .config import QUAD_FILENAME
from .normalize import DisplayBuffer
from .volume import Volume

_DOUBLE_SUFFIXES = (".nii.gz", ".nrrd.gz", ".mha.gz")


def fmt_t(sec: float) -> str:
    return str(timedelta(seconds=int(sec)))


@contextmanager
def timer(label: str, verbose: bool = True):
    t0 = time.time()
    yield
    dt = time.time() - t0
    if verbose:
        print(f"[{label}] {fmt_t(dt)}")


def volume_stem(path: Path) -> str:
    name = Path(path).name
    for suffix in _DOUBLE_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return Path(name).stem


def default_output_path(input_path: Path, out_dir: Path | None = None) -> Path:
    input_path = Path(input_path)
    out_dir = Path(out_dir) if out_dir is not None else input_path.parent
    return out_dir / f"{volume_stem(input_path)}_{QUAD_FILENAME}"


def load_volume(path: Path, verbose: bool = True) -> Volume:
    """Decode a NIfTI (or any SimpleITK-readable) file into a Volume."""
    path = Path(path)
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"Volume file not found: {path}")

    try:
        img = sitk.ReadImage(str(path))
    except RuntimeError as e:
        raise ValueError(f"Could not decode {path}: {e}") from e

    n_comp = img.GetNumberOfComponentsPerPixel()
    if n_comp != 1:
        raise ValueError(f"{path.name} has {n_comp} components per pixel; only scalar volumes are supported")

    # (..., z, y, x) copy of the pixel buffer; size/spacing stay in (x, y, z, ...) order.
    arr = sitk.GetArrayFromImage(img)
    vol = Volume.from_array(arr, spacing=img.GetSpacing())

    if verbose:
        print(f"[LOAD] {path.name}: shape={vol.shape} kind={vol.scalar_kind_name()}")
    return vol


def scale_to_spacing(img: np.ndarray, spacing_col: float, spacing_row: float) -> np.ndarray:
    """Nearest-neighbour resize so one pixel covers the same distance on both axes."""
    finest = min(spacing_col, spacing_row)
    h, w = img.shape[:2]
    new_w = max(1, int(round(w * spacing_col / finest)))
    new_h = max(1, int(round(h * spacing_row / finest)))
    if (new_w, new_h) == (w, h):
        return img
    # cv2 wants a writable buffer; display buffers are read-only
    return cv2.resize(np.array(img), (new_w, new_h), interpolation=cv2.INTER_NEAREST)


def save_display_png(buf: DisplayBuffer, path: Path, spacing: tuple | None = None, verbose: bool = True) -> Path:
    """Write a display buffer as 8-bit grayscale PNG, output-Y pointing up."""
    path = Path(path)
    img = buf.as_2d()
    if spacing is not None:
        img = scale_to_spacing(img, *spacing)
    img = np.ascontiguousarray(np.flipud(img))

    path.parent.mkdir(parents=True, exist_ok=True)
    iio.imwrite(path, img)
    if verbose:
        print(f"[PNG] Saved {path} ({img.shape[1]}×{img.shape[0]})")
    return path
