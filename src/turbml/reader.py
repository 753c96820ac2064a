"""Reader for the ASCII turbulence-model parameter format.

File layout:

    IZONE=1          (optional, one per zone block)
    NPARA=<count>
    <value_0>
    ...
    <value_count-1>

Values are whitespace separated and may share lines. The metadata scan makes
one buffered pass over the file and remembers the byte offset where the
value section starts; the value reader seeks back to that offset instead of
reopening the file.
"""

import logging
import re
from dataclasses import dataclass
from typing import BinaryIO, Optional

import numpy as np

from .errors import (
    CountMismatchError,
    MalformedTokenError,
    MissingMetadataError,
    TruncatedDataError,
    ZoneNotFoundError,
)
from .zones import ZoneSelector

logger = logging.getLogger(__name__)

ZONE_KEYWORD = "IZONE="
COUNT_KEYWORD = "NPARA="

# Bytes are decoded leniently; only keywords and numbers matter.
ENCODING = "latin-1"

# Plain decimal or scientific literals, inf and nan. Python-only forms such
# as digit-grouping underscores are rejected.
FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
INTEGER_PATTERN = re.compile(r"[+-]?\d+")


@dataclass
class ParameterFileMetadata:
    """What the metadata scan learned about a parameter file."""

    declared_count: int
    npara_line: int  # 1-based line number of the governing NPARA= line
    value_offset: int  # byte offset of the line after NPARA=
    zone: Optional[int] = None  # 1-based IZONE= number, None if not searched


def _keyword_value(line: str, keyword: str) -> Optional[str]:
    """Return the text after ``keyword`` if the line starts with it."""
    stripped = line.lstrip()
    if not stripped.startswith(keyword):
        return None
    return stripped[len(keyword):].strip()


def _parse_integer(text: str, filename: str, line_no: int) -> int:
    if not INTEGER_PATTERN.fullmatch(text) or int(text) < 0:
        raise MalformedTokenError(filename, text, line_no, expected="non-negative integer")
    return int(text)


def _find_zone(stream: BinaryIO, selector: ZoneSelector, filename: str) -> int:
    """Advance the stream past the IZONE= line of the selected zone.

    Returns the number of lines consumed.
    """
    line_no = 0
    for raw in iter(stream.readline, b""):
        line_no += 1
        value = _keyword_value(raw.decode(ENCODING), ZONE_KEYWORD)
        if value is None:
            continue
        if _parse_integer(value, filename, line_no) == selector.file_zone:
            return line_no
    raise ZoneNotFoundError(filename, selector.zone)


def scan_metadata(
    stream: BinaryIO,
    selector: ZoneSelector,
    filename: str,
    report: bool = True,
) -> ParameterFileMetadata:
    """Locate the active zone block and its declared parameter count.

    Every NPARA= line is honoured and the last one wins. Inside a zone
    block the scan ends at the next IZONE= line.

    Args:
        stream: Binary stream positioned at the start of the file
        selector: Zone of the running solver
        filename: Name used in error messages
        report: Whether this process emits informational messages

    Raises:
        ZoneNotFoundError: If the selected zone has no IZONE= block
        MissingMetadataError: If no NPARA= keyword is found
        MalformedTokenError: If IZONE= or NPARA= is not followed by an integer
    """
    line_no = 0
    zone = None

    if selector.harmonic_balance:
        if report:
            logger.info("Reading time instance %d.", selector.time_instance + 1)
    elif selector.searches_zone:
        line_no = _find_zone(stream, selector, filename)
        zone = selector.file_zone
        if report:
            logger.info("Reading zone %d from parameter file %s.", zone, filename)

    metadata = None
    block_ended = False
    while not block_ended:
        raw = stream.readline()
        if not raw:
            break
        line_no += 1
        line = raw.decode(ENCODING)

        if zone is not None and _keyword_value(line, ZONE_KEYWORD) is not None:
            break

        value = _keyword_value(line, COUNT_KEYWORD)
        if value is None:
            continue

        declared = _parse_integer(value, filename, line_no)
        metadata = ParameterFileMetadata(
            declared_count=declared,
            npara_line=line_no,
            value_offset=stream.tell(),
            zone=zone,
        )

        # Skip the value lines so numbers are never mistaken for keywords.
        for _ in range(declared):
            raw = stream.readline()
            if not raw:
                break
            line_no += 1
            if zone is not None and _keyword_value(raw.decode(ENCODING), ZONE_KEYWORD) is not None:
                block_ended = True
                break

    if metadata is None:
        raise MissingMetadataError(filename)

    logger.debug(
        "%s: NPARA=%d at line %d", filename, metadata.declared_count, metadata.npara_line
    )
    return metadata


def match_params_points(filename: str, declared_count: int, global_points: int) -> None:
    """Check that the file declares one parameter per point.

    Raises:
        CountMismatchError: If the counts differ
    """
    if declared_count != global_points:
        raise CountMismatchError(filename, declared_count, global_points)


def _parse_value(token: str, filename: str, line_no: int, strict: bool) -> float:
    if FLOAT_PATTERN.fullmatch(token):
        return float(token)
    if strict:
        raise MalformedTokenError(filename, token, line_no)
    logger.warning(
        "%s: malformed token %r at line %d replaced by 0.0", filename, token, line_no
    )
    return 0.0


def read_values(
    stream: BinaryIO,
    metadata: ParameterFileMetadata,
    filename: str,
    strict: bool = True,
) -> np.ndarray:
    """Read the declared number of values following the NPARA= line.

    Args:
        stream: Seekable binary stream of the parameter file
        metadata: Result of :func:`scan_metadata` on the same file
        filename: Name used in error messages
        strict: Raise on malformed tokens instead of substituting 0.0

    Returns:
        float64 array of length ``metadata.declared_count`` in file order

    Raises:
        MalformedTokenError: If a token is not a float and ``strict`` is set
        TruncatedDataError: If the file or zone block ends too early
    """
    declared = metadata.declared_count
    values = np.empty(declared, dtype=np.float64)
    stream.seek(metadata.value_offset)

    line_no = metadata.npara_line
    n_read = 0
    while n_read < declared:
        raw = stream.readline()
        if not raw:
            break
        line_no += 1
        line = raw.decode(ENCODING)
        if metadata.zone is not None and _keyword_value(line, ZONE_KEYWORD) is not None:
            break
        for token in line.split():
            values[n_read] = _parse_value(token, filename, line_no, strict)
            n_read += 1
            if n_read == declared:
                break

    if n_read < declared:
        raise TruncatedDataError(filename, declared, n_read)
    return values
