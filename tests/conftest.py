import numpy as np
import pytest

from niftislice.volume import Volume


def _ramp_volume(nx, ny, nz, dtype=np.int16, nt=None, spacing=None):
    """Volume whose sample at (x, y, z) is its flat index z*nx*ny + y*nx + x."""
    shape = (nz, ny, nx) if nt is None else (nt, nz, ny, nx)
    arr = np.arange(int(np.prod(shape))).astype(dtype).reshape(shape)
    return Volume.from_array(arr, spacing=spacing), arr


@pytest.fixture
def make_volume():
    return _ramp_volume


@pytest.fixture
def ramp_volume():
    vol, _ = _ramp_volume(4, 3, 5, dtype=np.int16, spacing=(0.5, 0.75, 2.0))
    return vol
