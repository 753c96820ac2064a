"""Zone selection for multizone and harmonic-balance parameter files."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ZoneSelector:
    """Which block of a parameter file belongs to the running zone.

    Zones are 0-based here and 1-based in the file (``IZONE=<zone + 1>``).
    In harmonic-balance mode the time instances replace the zones and no
    zone search is done.
    """

    zone: int = 0
    n_zones: int = 1
    multizone: bool = False
    harmonic_balance: bool = False
    time_instance: int = 0

    def __post_init__(self):
        if self.zone < 0 or self.n_zones < 0 or self.time_instance < 0:
            raise ValueError(
                f"Zone indices must be non-negative, got zone={self.zone}, "
                f"n_zones={self.n_zones}, time_instance={self.time_instance}"
            )

    @property
    def is_zoned(self) -> bool:
        """True when the file holds one block per zone or time instance."""
        return (self.n_zones > 1 and self.multizone) or self.harmonic_balance

    @property
    def searches_zone(self) -> bool:
        """True when an IZONE= marker has to be located before NPARA=."""
        return self.is_zoned and not self.harmonic_balance

    @property
    def file_zone(self) -> int:
        """1-based zone number as written after IZONE=."""
        return self.zone + 1
