"""Volume metadata and typed access to the decoded sample buffer."""

from enum import Enum

import numpy as np

from .config import (
    DEFAULT_SPACING,
    DIMENSION_SEPARATOR,
    INFO_TITLE,
    MAX_DIMENSIONS,
    SPACING_DECIMALS,
    UNKNOWN_KIND_NAME,
)
from .errors import IndexOutOfBounds, OutOfRange, UnsupportedScalarKind


class ScalarKind(Enum):
    UINT8 = "uint8"
    INT16 = "int16"
    INT32 = "int32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag) -> "ScalarKind":
        """Map a decoder tag (kind, dtype, dtype name) onto a supported kind."""
        if isinstance(tag, cls):
            return tag
        if tag is None:
            raise UnsupportedScalarKind("No scalar kind given")
        try:
            name = np.dtype(tag).name
        except TypeError:
            name = str(tag)
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedScalarKind(f"Unsupported scalar kind: {tag}") from None


class Volume:
    """Read-only view over a decoded scalar volume.

    Samples are laid out row-major with X varying fastest, then Y, then Z,
    then time. ``shape`` and ``spacing`` are given in that same (x, y, z, t)
    order, as SimpleITK reports them.

    The volume owns a single reference to the sample buffer. ``close()`` (or
    leaving a ``with`` block) drops it; arrays already handed out by
    ``typed_samples()`` keep their data alive until they are discarded.
    """

    def __init__(self, shape, spacing, scalar_tag, samples):
        shape = tuple(int(n) for n in shape)
        if not 1 <= len(shape) <= MAX_DIMENSIONS:
            raise ValueError(f"Volume must have 1..{MAX_DIMENSIONS} dimensions, got {len(shape)}")
        if any(n < 0 for n in shape):
            raise ValueError(f"Negative extent in shape {shape}")

        self._shape = shape
        self._spacing = tuple(spacing) if spacing is not None else ()
        self._tag = scalar_tag
        if isinstance(samples, np.ndarray):
            samples = np.ascontiguousarray(samples)
        try:
            self._buffer = memoryview(samples).cast("B").toreadonly()
        except TypeError as e:
            raise ValueError(f"Samples must be a C-contiguous buffer: {e}") from e

        try:
            kind = ScalarKind.from_tag(scalar_tag)
        except UnsupportedScalarKind:
            kind = None
        if kind is not None:
            expected = self.sample_count() * kind.dtype.itemsize
            if self._buffer.nbytes != expected:
                raise ValueError(
                    f"Sample buffer holds {self._buffer.nbytes} bytes; shape {shape} "
                    f"of {kind.label} needs {expected}"
                )

    @classmethod
    def from_array(cls, array: np.ndarray, spacing=None) -> "Volume":
        """Wrap a numpy array indexed (..., z, y, x), e.g. from ``sitk.GetArrayFromImage``."""
        array = np.ascontiguousarray(array)
        if not array.dtype.isnative:
            array = array.astype(array.dtype.newbyteorder("="))
        return cls(array.shape[::-1], spacing, array.dtype.name, array)

    @property
    def shape(self) -> tuple:
        return self._shape

    @property
    def closed(self) -> bool:
        return self._buffer is None

    def close(self):
        self._buffer = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        state = "closed" if self.closed else "open"
        return f"Volume(shape={self._shape}, kind={self.scalar_kind_name()}, {state})"

    def _live_buffer(self) -> memoryview:
        if self._buffer is None:
            raise ValueError("Volume has been released")
        return self._buffer

    def _check_axis(self, axis) -> int:
        try:
            axis = int(axis)
        except (TypeError, ValueError):
            raise OutOfRange(f"Axis must be an integer, got {axis!r}") from None
        if axis < 0 or axis >= self.dimension_count():
            raise OutOfRange(f"Axis {axis} out of range for {self.dimension_count()}-D volume")
        return axis

    def dimension_count(self) -> int:
        return len(self._shape)

    def extent(self, axis) -> int:
        return self._shape[self._check_axis(axis)]

    def spacing(self, axis) -> float:
        axis = self._check_axis(axis)
        if axis >= len(self._spacing) or self._spacing[axis] is None:
            return DEFAULT_SPACING
        s = float(self._spacing[axis])
        if not np.isfinite(s) or s <= 0.0:
            return DEFAULT_SPACING
        return s

    def scalar_kind(self) -> ScalarKind:
        return ScalarKind.from_tag(self._tag)

    def scalar_kind_name(self) -> str:
        try:
            return self.scalar_kind().label
        except UnsupportedScalarKind:
            return UNKNOWN_KIND_NAME

    def sample_count(self) -> int:
        return int(np.prod(self._shape, dtype=np.int64))

    def typed_samples(self) -> np.ndarray:
        """Flat read-only array of all samples decoded per ``scalar_kind()``."""
        kind = self.scalar_kind()
        return np.frombuffer(self._live_buffer(), dtype=kind.dtype)

    def raw_sample(self, flat_index: int):
        kind = self.scalar_kind()
        buf = self._live_buffer()
        n = self.sample_count()
        if flat_index < 0 or flat_index >= n:
            raise IndexOutOfBounds(f"Sample index {flat_index} out of range [0, {n})")
        itemsize = kind.dtype.itemsize
        return np.frombuffer(buf, dtype=kind.dtype, count=1, offset=flat_index * itemsize)[0].item()

    def summary(self) -> list[str]:
        ndim = self.dimension_count()
        dims = DIMENSION_SEPARATOR.join(str(n) for n in self._shape)
        spacing = ", ".join(f"{self.spacing(a):.{SPACING_DECIMALS}f}" for a in range(ndim))
        n_volumes = self._shape[3] if ndim > 3 else 1
        return [
            INFO_TITLE,
            "",
            f"Dimensions: {dims}",
            f"Spacing: {spacing}",
            f"Volumes: {n_volumes}",
            f"Data type: {self.scalar_kind_name()}",
        ]

    def print_summary(self):
        print("\n" + "=" * 40)
        for line in self.summary():
            print(line)
        print("=" * 40 + "\n")
