import numpy as np
import pytest

from niftislice.errors import InvalidSliceRequest, UnsupportedScalarKind
from niftislice.slicer import (
    Axis,
    center_index,
    center_indices,
    extract_slice,
    in_plane_axes,
    slice_spacing,
    voxel_data,
)
from niftislice.volume import ScalarKind, Volume


NX, NY, NZ = 4, 3, 5


def test_slice_dimensions_match_free_axes(ramp_volume):
    expected = {Axis.X: (NY, NZ), Axis.Y: (NX, NZ), Axis.Z: (NX, NY)}
    for axis, (w, h) in expected.items():
        for i in range(ramp_volume.extent(axis)):
            sl = extract_slice(ramp_volume, axis, i)
            assert (sl.width, sl.height) == (w, h)
            assert sl.samples.size == w * h
            assert sl.samples.dtype == np.float64


@pytest.mark.parametrize("kind", list(ScalarKind))
def test_axial_slice_is_contiguous_run(make_volume, kind):
    vol, arr = make_volume(NX, NY, NZ, dtype=kind.dtype)
    flat = arr.ravel()
    for z in range(NZ):
        sl = extract_slice(vol, Axis.Z, z)
        expected = flat[z * NX * NY : (z + 1) * NX * NY].astype(np.float64)
        assert np.array_equal(sl.samples, expected)


def test_coronal_and_axial_agree_on_shared_voxels(ramp_volume):
    for j in range(NY):
        coronal = extract_slice(ramp_volume, Axis.Y, j).as_2d()
        for z in range(NZ):
            axial = extract_slice(ramp_volume, Axis.Z, z).as_2d()
            for x in range(NX):
                assert coronal[z, x] == axial[j, x]


def test_sagittal_gathers_fixed_x(make_volume, ramp_volume):
    _, arr = make_volume(NX, NY, NZ)
    for i in range(NX):
        sag = extract_slice(ramp_volume, Axis.X, i).as_2d()
        assert np.array_equal(sag, arr[:, :, i].astype(np.float64))
        # flat index z*nx*ny + y*nx + x
        assert sag[2, 1] == 2 * NX * NY + 1 * NX + i


@pytest.mark.parametrize("dtype", [np.int16, np.float64])
def test_two_by_two_volume(dtype):
    raw = np.array([1, 2, 3, 4], dtype=dtype).tobytes()
    vol = Volume((2, 2, 1), (1.0, 1.0, 1.0), np.dtype(dtype).name, raw)
    sl = extract_slice(vol, Axis.Z, 0)
    assert sl.samples.tolist() == [1.0, 2.0, 3.0, 4.0]


@pytest.mark.parametrize("index", [NZ, -1])
def test_out_of_range_index(ramp_volume, index):
    with pytest.raises(InvalidSliceRequest):
        extract_slice(ramp_volume, Axis.Z, index)


def test_non_integer_index_and_unknown_axis(ramp_volume):
    with pytest.raises(InvalidSliceRequest):
        extract_slice(ramp_volume, Axis.Z, 1.5)
    with pytest.raises(InvalidSliceRequest):
        extract_slice(ramp_volume, 3, 0)
    with pytest.raises(InvalidSliceRequest):
        extract_slice(ramp_volume, "oblique", 0)


def test_needs_three_spatial_dimensions():
    vol = Volume.from_array(np.arange(6, dtype=np.uint8).reshape(2, 3))
    with pytest.raises(InvalidSliceRequest):
        extract_slice(vol, Axis.Z, 0)


def test_empty_extent_is_rejected():
    vol = Volume((2, 0, 3), None, "uint8", b"")
    with pytest.raises(InvalidSliceRequest):
        extract_slice(vol, Axis.X, 0)


def test_unsupported_kind():
    vol = Volume.from_array(np.zeros((2, 2, 2), dtype=np.uint16))
    with pytest.raises(UnsupportedScalarKind):
        extract_slice(vol, Axis.Z, 0)


def test_time_axis_uses_first_volume(make_volume):
    vol, arr = make_volume(NX, NY, NZ, dtype=np.float32, nt=3)
    sl = extract_slice(vol, Axis.Y, 1)
    assert np.array_equal(sl.as_2d(), arr[0, :, 1, :].astype(np.float64))


def test_slice_is_immutable(ramp_volume):
    sl = extract_slice(ramp_volume, "axial", 0)
    assert sl.axis is Axis.Z
    assert not sl.samples.flags.writeable


def test_axis_parse_names():
    assert Axis.parse("sagittal") is Axis.X
    assert Axis.parse("Y") is Axis.Y
    assert Axis.parse(2) is Axis.Z
    assert Axis.Z.plane == "axial"


def test_center_indices(ramp_volume):
    assert center_index(ramp_volume, Axis.X) == 2
    assert center_indices(ramp_volume) == {Axis.X: 2, Axis.Y: 1, Axis.Z: 2}


def test_in_plane_spacing(ramp_volume):
    assert in_plane_axes(Axis.Y) == (Axis.X, Axis.Z)
    assert slice_spacing(ramp_volume, Axis.X) == (0.75, 2.0)
    assert slice_spacing(ramp_volume, Axis.Z) == (0.5, 0.75)


def test_voxel_data(make_volume, ramp_volume):
    _, arr = make_volume(NX, NY, NZ)
    vol = voxel_data(ramp_volume)
    assert vol.shape == (NZ, NY, NX)
    assert vol.dtype == np.float64
    assert np.array_equal(vol, arr)
