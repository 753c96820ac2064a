"""Eager loader for per-point turbulence-model parameter files.

The loader is built by the solver once the global point count of the active
domain is known. Construction reads the whole file; afterwards the values
are available through the ParameterSet accessors.
"""

import logging
from pathlib import Path
from typing import Union

from .config import LoaderConfig
from .errors import FileOpenError
from .parameters import ParameterSet
from .reader import ParameterFileMetadata, match_params_points, read_values, scan_metadata
from .zones import ZoneSelector

logger = logging.getLogger(__name__)


class ParameterLoader:
    """Loads the parameter block of one zone and checks it against the mesh."""

    def __init__(
        self,
        filename: Union[str, Path],
        zone: int,
        n_zones: int,
        global_points: int,
        *,
        multizone: bool = False,
        harmonic_balance: bool = False,
        time_instance: int = 0,
        strict: bool = True,
        is_reporting_rank: bool = True,
    ):
        """Read the parameter file.

        Args:
            filename: Path of the ASCII parameter file
            zone: 0-based index of the zone being read
            n_zones: Total number of zones
            global_points: Number of points in the active domain
            multizone: The file holds one IZONE= block per zone
            harmonic_balance: Harmonic-balance run, no zone search
            time_instance: Time instance reported in harmonic-balance mode
            strict: Reject malformed numeric tokens instead of reading 0.0
            is_reporting_rank: Whether this process logs informational messages

        Raises:
            ParameterFileError: If the file is unreadable or inconsistent
        """
        if global_points < 0:
            raise ValueError(f"global_points must be non-negative, got {global_points}")

        self.filename = str(filename)
        self.selector = ZoneSelector(
            zone=zone,
            n_zones=n_zones,
            multizone=multizone,
            harmonic_balance=harmonic_balance,
            time_instance=time_instance,
        )
        self.global_points = global_points
        self.is_reporting_rank = is_reporting_rank

        try:
            f = open(self.filename, "rb")
        except OSError as e:
            raise FileOpenError(self.filename, e.strerror or str(e)) from e

        with f:
            self.metadata: ParameterFileMetadata = scan_metadata(
                f, self.selector, self.filename, report=is_reporting_rank
            )
            match_params_points(self.filename, self.metadata.declared_count, global_points)
            if is_reporting_rank:
                logger.info("Reading the parameter values.")
            values = read_values(f, self.metadata, self.filename, strict=strict)

        self.parameters = ParameterSet(values)

    @classmethod
    def from_config(
        cls,
        config: LoaderConfig,
        zone: int,
        n_zones: int,
        global_points: int,
        is_reporting_rank: bool = True,
    ) -> "ParameterLoader":
        """Build a loader from solver configuration options."""
        return cls(
            config.ml_param_filename,
            zone,
            n_zones,
            global_points,
            multizone=config.multizone_mesh,
            harmonic_balance=config.harmonic_balance,
            time_instance=config.time_instance,
            strict=config.strict_tokens,
            is_reporting_rank=is_reporting_rank,
        )

    def get_parameter(self, index: int) -> float:
        return self.parameters.get(index)

    def set_parameter(self, index: int, value: float) -> None:
        self.parameters.set(index, value)

    def count(self) -> int:
        return self.parameters.count()


def load_parameters(
    filename: Union[str, Path],
    global_points: int,
    zone: int = 0,
    n_zones: int = 1,
    **options,
) -> ParameterSet:
    """Convenience function to load a parameter file into a ParameterSet."""
    loader = ParameterLoader(filename, zone, n_zones, global_points, **options)
    return loader.parameters
