"""Four-quadrant preview figure: axial, sagittal, coronal and an info panel."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .config import (
    DISPLAY_MAX,
    QUAD_BACKGROUND,
    QUAD_DPI,
    QUAD_FIGSIZE_IN,
    QUAD_FONT_SIZE,
    QUAD_TEXT_COLOR,
)
from .slicer import Axis, slice_spacing

# (row, col) in the 2x2 grid; the info panel takes (1, 1)
QUAD_LAYOUT = {
    Axis.Z: (0, 0),
    Axis.X: (0, 1),
    Axis.Y: (1, 0),
}
INFO_CELL = (1, 1)


def info_text(volume) -> str:
    return "\n".join(volume.summary())


def render_quad(volume, buffers: dict, output_path: Path, verbose: bool = True) -> Path:
    """Draw whichever display buffers are present and the info panel, then save.

    Quadrants with no buffer (a slice that could not be extracted or
    normalized) are left blank.
    """
    output_path = Path(output_path)
    fig, axes = plt.subplots(2, 2, figsize=QUAD_FIGSIZE_IN, dpi=QUAD_DPI, facecolor=QUAD_BACKGROUND)

    for ax in axes.ravel():
        ax.set_facecolor(QUAD_BACKGROUND)
        ax.set_axis_off()

    for axis, (row, col) in QUAD_LAYOUT.items():
        buf = buffers.get(axis)
        if buf is None:
            continue
        sp_col, sp_row = slice_spacing(volume, axis)
        axes[row, col].imshow(
            buf.as_2d(),
            cmap="gray",
            vmin=0,
            vmax=DISPLAY_MAX,
            origin="lower",
            aspect=sp_row / sp_col,
            interpolation="nearest",
        )

    info_ax = axes[INFO_CELL]
    info_ax.text(
        0.02,
        0.98,
        info_text(volume),
        transform=info_ax.transAxes,
        ha="left",
        va="top",
        family="monospace",
        fontsize=QUAD_FONT_SIZE,
        color=QUAD_TEXT_COLOR,
    )

    fig.tight_layout()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)

    if verbose:
        drawn = ", ".join(a.plane for a in QUAD_LAYOUT if a in buffers) or "none"
        print(f"[QUAD] Saved {output_path} (slices drawn: {drawn})")
    return output_path
