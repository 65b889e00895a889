"""Preview orchestration: load a volume, cut three slices, render the quad view."""

from pathlib import Path

from .config import DEFAULT_PHYSICAL_ASPECT, DEFAULT_SAVE_SLICES, SLICE_DIRNAME
from .errors import VolumeError
from .io_utils import default_output_path, load_volume, save_display_png, timer, volume_stem
from .normalize import normalize
from .render import render_quad
from .slicer import Axis, center_index, extract_slice, slice_spacing


def resolve_index(volume, axis: Axis, indices: dict | None = None) -> int:
    """Requested index for ``axis``, or the center slice when none was given."""
    if indices:
        for key, value in indices.items():
            if value is not None and Axis.parse(key) is axis:
                return value
    return center_index(volume, axis)


def quadrant_buffers(volume, indices: dict | None = None, verbose: bool = True) -> dict:
    """Display buffers keyed by Axis; a failing quadrant is reported and left out."""
    buffers = {}
    for axis in Axis:
        try:
            index = resolve_index(volume, axis, indices)
            buf = normalize(extract_slice(volume, axis, index))
        except VolumeError as e:
            if verbose:
                print(f"[SKIP] {axis.plane}: {type(e).__name__}: {e}")
            continue
        buffers[axis] = buf
        if verbose:
            print(f"[SLICE] {axis.plane:<8} index={index:<4d} {buf.width}×{buf.height}")
    return buffers


def run_preview(
    input_path: Path,
    output_path: Path | None = None,
    out_dir: Path | None = None,
    indices: dict | None = None,
    save_slices: bool = DEFAULT_SAVE_SLICES,
    physical_aspect: bool = DEFAULT_PHYSICAL_ASPECT,
    verbose: bool = True,
) -> Path:
    if verbose:
        print("=" * 60)
        print("Volume quad preview")
        print("=" * 60)

    input_path = Path(input_path)
    if not input_path.exists() or not input_path.is_file():
        raise FileNotFoundError(f"Input volume not found: {input_path}")
    if output_path is None:
        output_path = default_output_path(input_path, out_dir)
    output_path = Path(output_path)

    with timer("Load volume", verbose):
        volume = load_volume(input_path, verbose=verbose)

    with volume:
        if verbose:
            volume.print_summary()

        with timer("Extract + normalize", verbose):
            buffers = quadrant_buffers(volume, indices, verbose=verbose)

        with timer("Render quad", verbose):
            render_quad(volume, buffers, output_path, verbose=verbose)

        if save_slices:
            slice_dir = output_path.parent / SLICE_DIRNAME
            stem = volume_stem(input_path)
            with timer("Save slices", verbose):
                for axis, buf in buffers.items():
                    index = resolve_index(volume, axis, indices)
                    spacing = slice_spacing(volume, axis) if physical_aspect else None
                    png = slice_dir / f"{stem}_{axis.plane}_{index:04d}.png"
                    save_display_png(buf, png, spacing=spacing, verbose=verbose)

    if verbose:
        print("=" * 60)
        print("Preview complete")
        print("=" * 60)
    return output_path
