import yaml

from pathlib import Path
from typing  import Optional


def default_bodies_filepath() -> Path:
  # Adjust path traversal: utility -> body_fixed_gravity
  package_root = Path(__file__).parent.parent
  return package_root / 'data' / 'supported_bodies.yaml'


def load_supported_bodies(
  config_path : Optional[Path] = None,
) -> dict:
  """
  Load supported bodies from YAML configuration file.

  Input:
  ------
    config_path : Path, optional
      YAML file to read. Defaults to the packaged data/supported_bodies.yaml.

  Output:
  -------
    bodies : dict
      Body properties keyed by upper-case body name, e.g.
        {'EARTH': {'flattening': ..., 'radius__km': ..., 'gp__km3_per_s2': ...}}
  """
  config_path = Path(config_path) if config_path is not None else default_bodies_filepath()

  if not config_path.exists():
    raise FileNotFoundError(f"Configuration file not found: {config_path}")

  with open(config_path, 'r') as f:
    bodies = yaml.safe_load(f) or {}

  return {str(name).upper(): props for name, props in bodies.items()}
