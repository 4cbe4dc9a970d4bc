"""
Configuration for gctkit operations.

Supports YAML and JSON config files. Operations read their numeric
tolerances and default melt suffixes from the process-wide config unless
explicit values are passed.

Examples:
    >>> from pathlib import Path
    >>> from gctkit.config import load_config, set_config
    >>> set_config(load_config(Path("gctkit.yaml")))
"""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

__all__ = ['GCTConfig', 'load_config', 'get_config', 'set_config']


@dataclass(frozen=True)
class GCTConfig:
    """
    Defaults shared by the annotated-matrix operations.

    Attributes:
        whole_number_tol: Tolerance for treating numeric selectors as indices
        symmetry_rtol: Relative tolerance of the melt symmetry check
        symmetry_atol: Absolute tolerance of the melt symmetry check
        melt_suffixes: Suffixes for colliding row/column descriptor fields
        strict_cardinality: Raise instead of warn when annotations fan out
    """
    whole_number_tol: float = 1e-8
    symmetry_rtol: float = 1e-5
    symmetry_atol: float = 1e-8
    melt_suffixes: Tuple[str, str] = (".x", ".y")
    strict_cardinality: bool = False

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'GCTConfig':
        """
        Build a config from a mapping, rejecting unknown keys.

        Raises:
            ValueError: On unknown keys or malformed melt_suffixes
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")

        values = dict(values)
        if 'melt_suffixes' in values:
            suffixes = values['melt_suffixes']
            if not isinstance(suffixes, (list, tuple)) or len(suffixes) != 2:
                raise ValueError("melt_suffixes must be a pair of strings")
            values['melt_suffixes'] = (str(suffixes[0]), str(suffixes[1]))

        return replace(cls(), **values)


_current = GCTConfig()


def get_config() -> GCTConfig:
    """Return the process-wide default configuration."""
    return _current


def set_config(config: GCTConfig) -> None:
    """Replace the process-wide default configuration."""
    global _current
    if not isinstance(config, GCTConfig):
        raise TypeError(f"config must be GCTConfig, got {type(config)}")
    _current = config


def load_config(config_path: Path) -> GCTConfig:
    """
    Load configuration from YAML or JSON file.

    Parameters:
        config_path: Path to config file (.yaml, .yml, or .json)

    Returns:
        GCTConfig with file values over the defaults

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported or invalid

    Examples:
        >>> config = load_config(Path("gctkit.yaml"))
        >>> config.melt_suffixes
        ('_gene', '_experiment')
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    try:
        with open(config_path, 'r') as f:
            if suffix in ('.yaml', '.yml'):
                config = yaml.safe_load(f)
            elif suffix == '.json':
                config = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported config format: {suffix}. "
                    f"Use .yaml, .yml, or .json"
                )
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    if config is None:
        return GCTConfig()

    if not isinstance(config, dict):
        raise ValueError("Config file must contain a dictionary/mapping at top level")

    return GCTConfig.from_dict(config)
