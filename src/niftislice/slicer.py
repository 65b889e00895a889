"""Orthogonal slice extraction from a Volume.

Voxel (x, y, z) lives at flat index ``z*nx*ny + y*nx + x``. An axial slice
(Z fixed) is one contiguous run of the buffer; coronal (Y fixed) and sagittal
(X fixed) slices are strided gathers. Whatever the stored encoding, samples
come out as float64.
"""

import operator
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from .config import SPATIAL_AXES
from .errors import InvalidSliceRequest
from .volume import Volume

CANONICAL_DTYPE = np.float64


class Axis(IntEnum):
    """Spatial axis held fixed by a slice."""

    X = 0
    Y = 1
    Z = 2

    @property
    def plane(self) -> str:
        return _PLANE_NAMES[self]

    @classmethod
    def parse(cls, axis) -> "Axis":
        """Accept an Axis, 0/1/2, or a name such as "z" or "axial"."""
        if isinstance(axis, str):
            key = axis.strip().lower()
            for a in cls:
                if key in (a.name.lower(), a.plane):
                    return a
            raise InvalidSliceRequest(f"Unknown axis: {axis!r}")
        try:
            return cls(axis)
        except (TypeError, ValueError):
            raise InvalidSliceRequest(f"Unknown axis: {axis!r}") from None


_PLANE_NAMES = {Axis.X: "sagittal", Axis.Y: "coronal", Axis.Z: "axial"}


@dataclass(frozen=True)
class Slice:
    """2-D cut through a volume; ``samples`` is flat, row ``r`` = output-Y ``r``."""

    samples: np.ndarray
    width: int
    height: int
    axis: Axis
    index: int

    def as_2d(self) -> np.ndarray:
        return self.samples.reshape(self.height, self.width)


def spatial_extents(volume: Volume) -> tuple[int, int, int]:
    if volume.dimension_count() < SPATIAL_AXES:
        raise InvalidSliceRequest(
            f"Need at least {SPATIAL_AXES} dimensions to slice, volume has {volume.dimension_count()}"
        )
    nx, ny, nz = (volume.extent(a) for a in Axis)
    if nx <= 0 or ny <= 0 or nz <= 0:
        raise InvalidSliceRequest(f"Empty spatial extent ({nx}, {ny}, {nz})")
    return nx, ny, nz


def extract_slice(volume: Volume, axis, index: int) -> Slice:
    """Cut the plane at ``index`` along ``axis``.

    Z fixed gives width=nx, height=ny; Y fixed gives width=nx, height=nz;
    X fixed gives width=ny, height=nz. Volumes with a time axis are cut at
    time index 0.
    """
    axis = Axis.parse(axis)
    nx, ny, nz = spatial_extents(volume)

    try:
        index = operator.index(index)
    except TypeError:
        raise InvalidSliceRequest(f"Slice index must be an integer, got {index!r}") from None

    n = (nx, ny, nz)[axis]
    if index < 0 or index >= n:
        raise InvalidSliceRequest(f"{axis.plane} index {index} out of range [0, {n - 1}]")

    # Scalar-kind dispatch happens once here; everything below is dtype-agnostic.
    typed = volume.typed_samples()
    plane = nx * ny

    if axis is Axis.Z:
        raw = typed[index * plane : (index + 1) * plane]
        width, height = nx, ny
    else:
        grid = typed[: plane * nz].reshape(nz, ny, nx)
        if axis is Axis.Y:
            raw = grid[:, index, :]
            width, height = nx, nz
        else:
            raw = grid[:, :, index]
            width, height = ny, nz

    samples = raw.astype(CANONICAL_DTYPE, order="C").reshape(-1)
    samples.flags.writeable = False
    return Slice(samples=samples, width=width, height=height, axis=axis, index=index)


def center_index(volume: Volume, axis) -> int:
    return volume.extent(Axis.parse(axis)) // 2


def center_indices(volume: Volume) -> dict:
    spatial_extents(volume)
    return {a: center_index(volume, a) for a in Axis}


def voxel_data(volume: Volume) -> np.ndarray:
    """Whole first volume as float64, indexed (z, y, x)."""
    nx, ny, nz = spatial_extents(volume)
    typed = volume.typed_samples()
    vol = typed[: nx * ny * nz].reshape(nz, ny, nx).astype(CANONICAL_DTYPE)
    vol.flags.writeable = False
    return vol


def in_plane_axes(axis) -> tuple:
    """(column axis, row axis) of the plane cut with ``axis`` fixed."""
    axis = Axis.parse(axis)
    if axis is Axis.Z:
        return Axis.X, Axis.Y
    if axis is Axis.Y:
        return Axis.X, Axis.Z
    return Axis.Y, Axis.Z


def slice_spacing(volume: Volume, axis) -> tuple[float, float]:
    col, row = in_plane_axes(axis)
    return volume.spacing(col), volume.spacing(row)
