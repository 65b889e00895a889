"""niftislice package public API."""

from .errors import (
    DegenerateRange,
    IndexOutOfBounds,
    InvalidSliceRequest,
    OutOfRange,
    UnsupportedScalarKind,
    VolumeError,
)
from .normalize import DisplayBuffer, normalize
from .slicer import Axis, Slice, center_index, extract_slice, voxel_data
from .volume import ScalarKind, Volume


def run_preview(*args, **kwargs):
    from .preview import run_preview as _run_preview

    return _run_preview(*args, **kwargs)


__all__ = [
    "Axis",
    "DegenerateRange",
    "DisplayBuffer",
    "IndexOutOfBounds",
    "InvalidSliceRequest",
    "OutOfRange",
    "ScalarKind",
    "Slice",
    "UnsupportedScalarKind",
    "Volume",
    "VolumeError",
    "center_index",
    "extract_slice",
    "normalize",
    "run_preview",
    "voxel_data",
]
