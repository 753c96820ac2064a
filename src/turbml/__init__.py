"""Per-point turbulence-model parameter loading.

Reads an ASCII file of one scalar per mesh point (e.g. a learned correction
to a turbulence model) and checks it against the solver's point count.

Example usage:
    from turbml import ParameterLoader

    loader = ParameterLoader("turb_params.dat", zone=0, n_zones=1, global_points=n_points)
    beta = loader.get_parameter(i_point)
"""

__version__ = "0.1.0"

from .config import LoaderConfig, load_config
from .errors import (
    CountMismatchError,
    FileOpenError,
    MalformedTokenError,
    MissingMetadataError,
    ParameterFileError,
    TruncatedDataError,
    ZoneNotFoundError,
)
from .loader import ParameterLoader, load_parameters
from .logging_config import setup_logging
from .parameters import ParameterSet
from .reader import ParameterFileMetadata, match_params_points, read_values, scan_metadata
from .zones import ZoneSelector

__all__ = [
    # Loading
    "ParameterLoader",
    "load_parameters",
    "ParameterSet",
    "ZoneSelector",
    # Reader
    "ParameterFileMetadata",
    "scan_metadata",
    "read_values",
    "match_params_points",
    # Config
    "LoaderConfig",
    "load_config",
    "setup_logging",
    # Errors
    "ParameterFileError",
    "FileOpenError",
    "ZoneNotFoundError",
    "MissingMetadataError",
    "CountMismatchError",
    "MalformedTokenError",
    "TruncatedDataError",
]
