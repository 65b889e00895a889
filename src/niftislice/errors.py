"""Recoverable errors raised by the volume accessor, slicer and normalizer.

Every error here is local to one quadrant: callers skip drawing that slice and
carry on with the others.
"""


class VolumeError(Exception):
    """Base class for per-slice failures."""


class InvalidSliceRequest(VolumeError, ValueError):
    """Bad axis or index, or a volume with fewer than three spatial axes."""


class UnsupportedScalarKind(VolumeError, ValueError):
    """The decoder produced a sample encoding the core does not handle."""


class DegenerateRange(VolumeError, ValueError):
    """A slice has no finite spread of values to normalize."""


class OutOfRange(VolumeError, IndexError):
    """Axis beyond the populated dimensions of a volume."""


class IndexOutOfBounds(VolumeError, IndexError):
    """Flat sample index beyond the end of the sample buffer."""
