"""
YAML configuration file loader for the intersection solvers.

This module provides utilities to load and validate YAML configuration files
for solver parameters and curve input files.
"""

import yaml
from dataclasses import dataclass, fields
from typing import Dict, Any, List, Tuple
from pathlib import Path


@dataclass
class SolverParameters:
    """
    Algorithm parameters shared by all solvers.

    Attributes:
        naive_threshold (int): Quadrant density at or below which a quadrant
            is solved by brute force
        point_decimals (int): Decimals kept when deduplicating points
        max_depth (int): Deepest subdivision level before brute force is forced
        min_quadrant_size (float): Quadrants whose larger side is at most this
            size are solved by brute force
        self_intersect (bool): Whether crossings within one curve count
    """
    naive_threshold: int = 2
    point_decimals: int = 4
    max_depth: int = 32
    min_quadrant_size: float = 1e-9
    self_intersect: bool = False

    def __post_init__(self):
        for name in ('naive_threshold', 'point_decimals', 'max_depth'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        if isinstance(self.min_quadrant_size, bool) or \
                not isinstance(self.min_quadrant_size, (int, float)) or self.min_quadrant_size < 0:
            raise ValueError(f"min_quadrant_size must be a non-negative number, "
                             f"got {self.min_quadrant_size!r}")
        if not isinstance(self.self_intersect, bool):
            raise ValueError(f"self_intersect must be true or false, got {self.self_intersect!r}")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'SolverParameters':
        """
        Build parameters from the 'parameters' section of a solver config.

        Unknown keys are rejected so that typos do not go unnoticed.

        Raises:
            ValueError: If a key is unknown or a value is invalid
        """
        params = (config or {}).get('parameters', {}) or {}
        known = {f.name for f in fields(cls)}
        unknown = set(params) - known
        if unknown:
            raise ValueError(f"Unknown solver parameters: {', '.join(sorted(unknown))}")
        return cls(**params)


def load_yaml_config(filepath: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path to YAML file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If file is not valid YAML

    Example:
        >>> config = load_yaml_config('configs/solver.yaml')
        >>> print(config['solver']['parameters']['naive_threshold'])
        2
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        try:
            config = yaml.safe_load(f)
            return config if config is not None else {}
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML file {filepath}: {e}")


def load_solver_config(config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load solver configuration from YAML file.

    Args:
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with solver settings:
        - parameters: algorithm parameters (see SolverParameters)
        - output: {save_path, plot_filename, results_filename}

    Example:
        >>> solver_config = load_solver_config()
        >>> threshold = solver_config['parameters']['naive_threshold']
    """
    config_path = Path(config_dir) / 'solver.yaml'
    config = load_yaml_config(str(config_path))
    return config.get('solver', {})


def load_curves_config(filepath: str) -> List[Tuple[str, List[List[float]]]]:
    """
    Load curves from a YAML file.

    The file holds a top-level 'curves' list; each entry has a 'points' list
    of [x, y] pairs and an optional 'name'.

    Args:
        filepath: Path to the curves file

    Returns:
        List of (name, points) pairs in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the 'curves' section is missing or an entry is malformed

    Example:
        >>> curves = load_curves_config('configs/curves.yaml')
        >>> name, points = curves[0]
    """
    config = load_yaml_config(filepath)
    entries = config.get('curves')
    if not isinstance(entries, list):
        raise ValueError(f"Missing 'curves' list in {filepath}")

    curves = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict) or 'points' not in entry:
            raise ValueError(f"Curve #{idx} in {filepath} has no 'points'")
        points = entry['points'] or []
        for point in points:
            if not isinstance(point, (list, tuple)) or len(point) != 2:
                raise ValueError(f"Curve #{idx} in {filepath} has a malformed point: {point!r}")
        curves.append((str(entry.get('name', f"c{idx}")), [list(p) for p in points]))

    return curves


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple configuration dictionaries.

    Later dictionaries override earlier ones for conflicting keys.

    Args:
        *configs: Variable number of configuration dictionaries

    Returns:
        Merged configuration dictionary

    Example:
        >>> base_config = {'a': 1, 'b': 2}
        >>> override_config = {'b': 3, 'c': 4}
        >>> merged = merge_configs(base_config, override_config)
        >>> print(merged)
        {'a': 1, 'b': 3, 'c': 4}
    """
    merged = {}
    for config in configs:
        merged.update(config)
    return merged
