"""Solver configuration options consumed by the parameter loader.

Example YAML:
```yaml
ml_param_filename: turb_params.dat
multizone_mesh: true
harmonic_balance: false
time_instance: 0
strict_tokens: true
```
"""

from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field


class LoaderConfig(BaseModel):
    """Options that control where and how parameters are read."""

    ml_param_filename: str
    multizone_mesh: bool = False
    harmonic_balance: bool = False
    time_instance: int = Field(default=0, ge=0)
    strict_tokens: bool = True


def load_config(path: Union[str, Path]) -> LoaderConfig:
    """Load a LoaderConfig from a YAML file.

    A relative ``ml_param_filename`` is taken relative to the config file.

    Raises:
        ValueError: If the document is not a mapping
        pydantic.ValidationError: If an option is missing or has a bad value
    """
    path = Path(path)
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping of options")

    filename = data.get("ml_param_filename")
    if isinstance(filename, str) and not Path(filename).is_absolute():
        data["ml_param_filename"] = str(path.parent / filename)

    return LoaderConfig(**data)
