import numpy as np

from pathlib import Path
from types   import SimpleNamespace
from typing  import Optional, Sequence

from body_fixed_gravity.model.constants import CONVERTER
from body_fixed_gravity.utility.loader  import load_supported_bodies


ANGULAR_REPRESENTATIONS = ('Spherical', 'Ellipsoid')


def representation_label(
  representation : Optional[str],
  state_type     : Optional[str],
  horizon        : Optional[str],
) -> str:
  if state_type is not None:
    return f"{state_type} ({horizon})"
  return representation


def is_angular(
  representation : Optional[str],
  state_type     : Optional[str],
) -> bool:
  """
  True when the position holds (latitude, longitude, height).
  """
  if state_type is not None:
    return state_type == 'Spherical'
  return representation in ANGULAR_REPRESENTATIONS


def degrees_to_internal(
  values  : Sequence[float],
  angular : bool,
) -> np.ndarray:
  """
  Convert command-line (lat [deg], lon [deg], height [km]) to radians.
  Cartesian values pass through.
  """
  pos = np.array(values, dtype=float)
  if angular:
    pos[0:2] = pos[0:2] * CONVERTER.RAD_PER_DEG
  return pos


def internal_to_degrees(
  values  : Sequence[float],
  angular : bool,
) -> np.ndarray:
  pos = np.array(values, dtype=float)
  if angular:
    pos[0:2] = pos[0:2] * CONVERTER.DEG_PER_RAD
  return pos


def build_body_config(
  body            : str,
  bodies_filepath : Optional[Path]  = None,
  flattening      : Optional[float] = None,
  radius          : Optional[float] = None,
  gp              : Optional[float] = None,
) -> SimpleNamespace:
  """
  Resolve the body shape and gravity constants.

  Values come from the supported-bodies YAML file; explicit arguments override
  them. A body missing from the file is only accepted if flattening, radius
  and gp are all given explicitly.

  Input:
  ------
    body : str
      Body name (case-insensitive).
    bodies_filepath : Path, optional
      Supported-bodies YAML file.
    flattening : float, optional
      Flattening override [-].
    radius : float, optional
      Mean/equatorial radius override [km].
    gp : float, optional
      Gravitational parameter override [km³/s²].

  Output:
  -------
    body_config : SimpleNamespace
      name, flattening, radius, gp.
  """
  name   = body.upper()
  bodies = load_supported_bodies(bodies_filepath)

  if name in bodies:
    props = bodies[name]
  elif flattening is not None and radius is not None and gp is not None:
    props = {}
  else:
    raise ValueError(f"Body {name} is not supported. Supported bodies: {list(bodies.keys())}")

  body_config = SimpleNamespace(
    name       = name,
    flattening = float(flattening if flattening is not None else props['flattening']),
    radius     = float(radius     if radius     is not None else props['radius__km']),
    gp         = float(gp         if gp         is not None else props['gp__km3_per_s2']),
  )

  if not 0.0 <= body_config.flattening < 1.0:
    raise ValueError(f"Flattening must be in [0, 1), received {body_config.flattening}")
  if body_config.radius <= 0.0:
    raise ValueError(f"Radius must be positive, received {body_config.radius} km")

  return body_config


def build_config(
  body                 : str                       = 'EARTH',
  bodies_filepath      : Optional[str]             = None,
  flattening           : Optional[float]           = None,
  radius               : Optional[float]           = None,
  gp                   : Optional[float]           = None,
  convert_values       : Optional[Sequence[float]] = None,
  from_rep             : Optional[str]             = None,
  to_rep               : Optional[str]             = None,
  from_type            : Optional[str]             = None,
  from_horizon         : Optional[str]             = None,
  to_type              : Optional[str]             = None,
  to_horizon           : Optional[str]             = None,
  gravity_filepath     : Optional[str]             = None,
  gravity_degree_order : Optional[Sequence[int]]   = None,
  acceleration_at      : Optional[Sequence[float]] = None,
  log_filepath         : Optional[str]             = None,
) -> SimpleNamespace:
  """
  Build the run configuration from command-line style inputs.

  Angles of spherical and geodetic inputs are given in degrees and converted
  to radians here; the numerical core only sees radians.

  Output:
  -------
    config : SimpleNamespace
      body       : SimpleNamespace (name, flattening, radius, gp)
      conversion : SimpleNamespace | None
      gravity    : SimpleNamespace | None
      log_filepath : Path | None
  """
  body_config = build_body_config(
    body            = body,
    bodies_filepath = Path(bodies_filepath) if bodies_filepath is not None else None,
    flattening      = flattening,
    radius          = radius,
    gp              = gp,
  )

  # Conversion request
  conversion = None
  if convert_values is not None:
    uses_reps  = from_rep  is not None or to_rep  is not None
    uses_types = from_type is not None or to_type is not None
    if uses_reps and uses_types:
      raise ValueError("Use either --from-rep/--to-rep or --from-type/--to-type, not both.")

    if uses_types:
      if from_type is None or to_type is None:
        raise ValueError("Both --from-type and --to-type are required.")
      from_horizon = from_horizon or 'Sphere'
      to_horizon   = to_horizon   or 'Sphere'
    else:
      if from_rep is None or to_rep is None:
        raise ValueError("Both --from-rep and --to-rep are required with --convert.")

    from_angular = is_angular(from_rep, from_type)
    conversion = SimpleNamespace(
      input_pos      = degrees_to_internal(convert_values, from_angular),
      from_rep       = from_rep,
      to_rep         = to_rep,
      from_type      = from_type,
      from_horizon   = from_horizon if uses_types else None,
      to_type        = to_type,
      to_horizon     = to_horizon if uses_types else None,
      from_angular   = from_angular,
      to_angular     = is_angular(to_rep, to_type),
      from_label     = representation_label(from_rep, from_type, from_horizon),
      to_label       = representation_label(to_rep,   to_type,   to_horizon),
    )

  # Gravity request
  gravity = None
  if gravity_filepath is not None:
    if gravity_degree_order is not None:
      degree, order = gravity_degree_order
    else:
      degree, order = None, None
    gravity = SimpleNamespace(
      filepath        = Path(gravity_filepath),
      degree          = degree,
      order           = order,
      acceleration_at = np.array(acceleration_at, dtype=float) if acceleration_at is not None else None,
    )
  elif acceleration_at is not None:
    raise ValueError("--acceleration-at requires --gravity-file.")

  return SimpleNamespace(
    body         = body_config,
    conversion   = conversion,
    gravity      = gravity,
    log_filepath = Path(log_filepath) if log_filepath is not None else None,
  )


def print_configuration(
  config : SimpleNamespace,
) -> None:
  """
  Print the resolved configuration.

  Input:
  ------
    config : SimpleNamespace
      Configuration from build_config.
  """
  print("\nConfiguration")
  print(f"  Body")
  print(f"    Name       : {config.body.name}")
  print(f"    Flattening : {config.body.flattening:.10f}")
  print(f"    Radius     : {config.body.radius:.6f} km")
  print(f"    GP         : {config.body.gp:.6f} km³/s²")

  if config.conversion is not None:
    print(f"  Conversion")
    print(f"    From : {config.conversion.from_label}")
    print(f"    To   : {config.conversion.to_label}")

  if config.gravity is not None:
    degree_order_str = "file" if config.gravity.degree is None else f"{config.gravity.degree} {config.gravity.order}"
    print(f"  Gravity File")
    print(f"    Filepath     : {config.gravity.filepath}")
    print(f"    Degree/Order : {degree_order_str}")

  if config.log_filepath is not None:
    print(f"  Log File")
    print(f"    Filepath : {config.log_filepath}")
