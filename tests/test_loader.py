"""Tests for ParameterLoader and ParameterSet."""

import builtins
import logging

import numpy as np
import pytest

from turbml import (
    CountMismatchError,
    FileOpenError,
    MalformedTokenError,
    MissingMetadataError,
    ParameterLoader,
    ParameterSet,
    TruncatedDataError,
    ZoneNotFoundError,
    load_parameters,
)


@pytest.fixture
def param_file(tmp_path):
    """Write a parameter file and return its path."""

    def write(text: str, name: str = "params.dat"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return write


@pytest.fixture
def opened_files(monkeypatch):
    """Record files opened for reading, looked up by path."""
    opened = []
    real_open = builtins.open

    def recording_open(file, mode="r", *args, **kwargs):
        f = real_open(file, mode, *args, **kwargs)
        if "r" in mode:
            opened.append((str(file), f))
        return f

    monkeypatch.setattr(builtins, "open", recording_open)
    return lambda path: [f for name, f in opened if name == str(path)]


MULTIZONE = (
    "IZONE=1\n"
    "NPARA=2\n"
    "0.5\n"
    "0.75\n"
    "IZONE=2\n"
    "NPARA=3\n"
    "1.5 2.5\n"
    "3.5\n"
    "IZONE=3\n"
    "NPARA=1\n"
    "9.0\n"
)


class TestParameterLoader:
    """Eager loading of parameter files."""

    def test_single_zone(self, param_file):
        """A well-formed file loads every value in order."""
        path = param_file("NPARA=3\n1.0\n2.5\n-3.25\n")
        loader = ParameterLoader(path, zone=0, n_zones=1, global_points=3)
        assert loader.count() == 3
        assert loader.get_parameter(0) == 1.0
        assert loader.get_parameter(1) == 2.5
        assert loader.get_parameter(2) == -3.25

    def test_count_mismatch(self, param_file):
        """A file with the wrong number of points is rejected."""
        path = param_file("NPARA=3\n1.0\n2.5\n-3.25\n")
        with pytest.raises(CountMismatchError) as exc_info:
            ParameterLoader(path, zone=0, n_zones=1, global_points=4)
        message = str(exc_info.value)
        assert "(3)" in message
        assert "(4)" in message
        assert str(path) in message

    @pytest.mark.parametrize(
        "zone,expected",
        [(0, [0.5, 0.75]), (1, [1.5, 2.5, 3.5]), (2, [9.0])],
    )
    def test_multizone(self, param_file, zone, expected):
        """Each zone gets only its own block."""
        path = param_file(MULTIZONE)
        loader = ParameterLoader(
            path, zone=zone, n_zones=3, global_points=len(expected), multizone=True
        )
        assert list(loader.parameters) == expected

    def test_zone_not_found(self, param_file):
        """Requesting a zone absent from the file fails."""
        path = param_file(MULTIZONE)
        with pytest.raises(ZoneNotFoundError):
            ParameterLoader(path, zone=3, n_zones=4, global_points=1, multizone=True)

    def test_missing_npara(self, param_file):
        """A file without NPARA= fails regardless of zone content."""
        path = param_file("IZONE=1\n1.0\n2.0\n")
        with pytest.raises(MissingMetadataError):
            ParameterLoader(path, zone=0, n_zones=2, global_points=2, multizone=True)
        with pytest.raises(MissingMetadataError):
            ParameterLoader(path, zone=0, n_zones=1, global_points=2)

    def test_missing_file(self, tmp_path):
        """A path that does not exist fails with FileOpenError."""
        path = tmp_path / "missing.dat"
        with pytest.raises(FileOpenError) as exc_info:
            ParameterLoader(path, zone=0, n_zones=1, global_points=1)
        assert "missing.dat" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_harmonic_balance(self, param_file):
        """Harmonic balance ignores zone markers and reads from the top."""
        path = param_file("NPARA=2\n4.0\n5.0\n")
        loader = ParameterLoader(
            path, zone=1, n_zones=3, global_points=2, harmonic_balance=True, time_instance=1
        )
        assert list(loader.parameters) == [4.0, 5.0]
        assert loader.metadata.zone is None

    def test_negative_point_count(self, param_file):
        """The expected point count must be non-negative."""
        path = param_file("NPARA=0\n")
        with pytest.raises(ValueError):
            ParameterLoader(path, zone=0, n_zones=1, global_points=-1)

    def test_empty_file_block(self, param_file):
        """NPARA=0 matches a domain without points."""
        path = param_file("NPARA=0\n")
        loader = ParameterLoader(path, zone=0, n_zones=1, global_points=0)
        assert loader.count() == 0

    def test_set_parameter(self, param_file):
        """Values are overwritten in place and the count never changes."""
        path = param_file("NPARA=2\n1.0\n2.0\n")
        loader = ParameterLoader(path, zone=0, n_zones=1, global_points=2)
        loader.set_parameter(1, 7.5)
        assert loader.get_parameter(1) == 7.5
        assert loader.count() == 2

    def test_quiet_on_non_reporting_rank(self, param_file, caplog):
        """Only the reporting process logs progress."""
        caplog.set_level(logging.INFO, logger="turbml")
        path = param_file("NPARA=1\n1.0\n")
        ParameterLoader(path, zone=0, n_zones=1, global_points=1, is_reporting_rank=False)
        assert caplog.records == []
        ParameterLoader(path, zone=0, n_zones=1, global_points=1)
        assert "Reading the parameter values." in caplog.text

    @pytest.mark.parametrize(
        "text,points,error",
        [
            ("NPARA=3\n1.0\n2.5\n-3.25\n", 4, CountMismatchError),
            ("NPARA=2\n1.0\nabc\n", 2, MalformedTokenError),
            ("NPARA=3\n1.0\n2.0\n", 3, TruncatedDataError),
            ("1.0\n", 1, MissingMetadataError),
        ],
    )
    def test_file_closed_on_error(self, param_file, opened_files, text, points, error):
        """The file is closed even when loading fails."""
        path = param_file(text)
        with pytest.raises(error):
            ParameterLoader(path, zone=0, n_zones=1, global_points=points)
        handles = opened_files(path)
        assert len(handles) == 1
        assert handles[0].closed

    def test_file_closed_on_success(self, param_file, opened_files):
        """The file is closed once the values are loaded."""
        path = param_file("NPARA=1\n1.0\n")
        ParameterLoader(path, zone=0, n_zones=1, global_points=1)
        handles = opened_files(path)
        assert len(handles) == 1
        assert handles[0].closed

    def test_load_parameters(self, param_file):
        """The convenience function returns the ParameterSet."""
        path = param_file(MULTIZONE)
        params = load_parameters(path, global_points=1, zone=2, n_zones=3, multizone=True)
        assert isinstance(params, ParameterSet)
        assert params.get(0) == 9.0


class TestParameterSet:
    """Indexed access to loaded values."""

    def test_accessors(self):
        """get/set and their solver-facing aliases agree."""
        params = ParameterSet([1.0, 2.0, 3.0])
        assert params.count() == 3
        assert len(params) == 3
        assert params.get(1) == params.get_parameter(1) == params[1] == 2.0
        params.set_parameter(2, -1.0)
        assert params.get(2) == -1.0

    def test_slice(self):
        """Slicing returns a read-only array of the selected points."""
        params = ParameterSet([1.0, 2.0, 3.0, 4.0])
        part = params[1:3]
        assert part.tolist() == [2.0, 3.0]
        with pytest.raises(ValueError):
            part[0] = 0.0

    def test_out_of_range(self):
        """Indices past the end raise IndexError."""
        params = ParameterSet([1.0])
        with pytest.raises(IndexError):
            params.get(1)
        with pytest.raises(IndexError):
            params.set(5, 0.0)

    def test_values_are_copied(self):
        """The set owns its values."""
        source = np.array([1.0, 2.0])
        params = ParameterSet(source)
        source[0] = 99.0
        assert params.get(0) == 1.0

    def test_array_view_is_read_only(self):
        """as_array exposes the values without allowing resizing or writes."""
        params = ParameterSet([1.0, 2.0])
        view = params.as_array()
        assert view.tolist() == [1.0, 2.0]
        with pytest.raises(ValueError):
            view[0] = 5.0
        params.set(0, 5.0)
        assert view[0] == 5.0

    def test_rejects_multidimensional(self):
        """Parameters are a flat sequence."""
        with pytest.raises(ValueError):
            ParameterSet([[1.0, 2.0], [3.0, 4.0]])
