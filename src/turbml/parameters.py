"""In-memory container of per-point turbulence-model parameters."""

from typing import Iterator, Union

import numpy as np


class ParameterSet:
    """Fixed-size sequence of float parameters indexed by point.

    The size is set once from the file and never changes. Values can be
    overwritten in place.
    """

    def __init__(self, values: Union[np.ndarray, list[float]]):
        self._values = np.array(values, dtype=np.float64)
        if self._values.ndim != 1:
            raise ValueError(f"Parameters must be one-dimensional, got shape {self._values.shape}")

    def __len__(self) -> int:
        return self._values.shape[0]

    def __getitem__(self, index: Union[int, slice]) -> Union[float, np.ndarray]:
        """Value of one point, or a read-only array for a slice."""
        if isinstance(index, slice):
            return self.as_array()[index]
        return float(self._values[index])

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def __repr__(self) -> str:
        return f"ParameterSet(n={len(self)})"

    def count(self) -> int:
        """Number of parameters, equal to the number of points."""
        return len(self)

    def get(self, index: int) -> float:
        """Get the parameter of point ``index``."""
        return float(self._values[index])

    def set(self, index: int, value: float) -> None:
        """Overwrite the parameter of point ``index``."""
        self._values[index] = value

    # Names used by solver code
    get_parameter = get
    set_parameter = set

    def as_array(self) -> np.ndarray:
        """Read-only view of the underlying values."""
        view = self._values.view()
        view.flags.writeable = False
        return view
