"""Errors raised while loading a turbulence-model parameter file.

Every error carries the name of the offending file. None of them are
recoverable at this layer: a mismatched or malformed parameter file makes the
downstream computation physically wrong, so the embedding solver is expected
to stop.
"""

from typing import Optional

FORMAT_HINT = "Check the parameter file format (IZONE=<n>, NPARA=<count>, values)."


class ParameterFileError(Exception):
    """Base class for parameter file errors."""

    def __init__(self, filename: str, message: str, hint: str = FORMAT_HINT):
        self.filename = filename
        super().__init__(f"{message} [{filename}]\n{hint}")


class FileOpenError(ParameterFileError):
    """Raised when the parameter file cannot be opened for reading."""

    def __init__(self, filename: str, reason: Optional[str] = None):
        message = "Error opening parameter file"
        if reason:
            message += f": {reason}"
        super().__init__(filename, message, hint="Check if the file exists.")


class ZoneNotFoundError(ParameterFileError):
    """Raised when a multizone file has no IZONE= block for the requested zone."""

    def __init__(self, filename: str, zone: int):
        self.zone = zone
        super().__init__(
            filename,
            f"Could not find the IZONE={zone + 1} keyword or the zone contents",
        )


class MissingMetadataError(ParameterFileError):
    """Raised when the NPARA= keyword is absent."""

    def __init__(self, filename: str):
        super().__init__(filename, "Could not find NPARA= keyword")


class CountMismatchError(ParameterFileError):
    """Raised when the declared parameter count differs from the point count."""

    def __init__(self, filename: str, declared: int, expected: int):
        self.declared = declared
        self.expected = expected
        super().__init__(
            filename,
            f"Mismatch between the number of parameters ({declared}) "
            f"and number of points in the problem ({expected})",
            hint="Check the parameter file.",
        )


class MalformedTokenError(ParameterFileError):
    """Raised when a token cannot be parsed as the expected number."""

    def __init__(self, filename: str, token: str, line: int, expected: str = "float"):
        self.token = token
        self.line = line
        super().__init__(
            filename,
            f"Malformed token {token!r} at line {line}: expected a {expected}",
        )


class TruncatedDataError(ParameterFileError):
    """Raised when the file ends before all declared values were read."""

    def __init__(self, filename: str, declared: int, found: int):
        self.declared = declared
        self.found = found
        super().__init__(
            filename,
            f"Expected {declared} parameter values after NPARA= but found {found}",
        )
