"""
Body-Fixed State and Gravity File Tool

Description:
  This script converts a body-fixed position between the Cartesian, Spherical
  and Spherical-Ellipsoid (geodetic) representations, and loads harmonic
  gravity coefficient files (COF, GRV, DAT) into a normalized coefficient table.

  The script performs the following steps:
  1. Resolves the body shape and gravitational parameter from body_fixed_gravity/data/supported_bodies.yaml.
  2. Converts the given position, if --convert is used.
  3. Loads and summarizes the gravity file, if --gravity-file is used.
  4. Evaluates the gravity acceleration at a position, if --acceleration-at is used.

  Angles on the command line are degrees; heights and positions are km.

Usage:

  Argument                     Required   Description
  ---------------------------  --------   --------------------------------------------------
  --body                       No         Central body (default: EARTH)
  --bodies-file                No         Alternative supported-bodies YAML file
  --flattening                 No         Override the body flattening
  --radius                     No         Override the body radius [km]
  --gp                         No         Override the fallback gravitational parameter [km³/s²]
  --convert                    No         Position to convert (three values)
  --from-rep, --to-rep         No         Cartesian, Spherical or Ellipsoid
  --from-type, --to-type       No         Cartesian or Spherical (alternative to --from-rep/--to-rep)
  --from-horizon, --to-horizon No         Sphere or Ellipsoid (default: Sphere)
  --gravity-file               No         Gravity coefficient file to load
  --gravity-degree-order       No         Truncation degree and order for the acceleration
  --acceleration-at            No         Body-fixed position [km] for the acceleration
  --log-file                   No         Copy terminal output to a file

  Example Commands:
    python -m body_fixed_gravity.main \
      --body earth \
      --convert 6378.1363 0 0 \
      --from-rep Cartesian \
      --to-rep Ellipsoid

    python -m body_fixed_gravity.main \
      --convert 45 90 100 \
      --from-type Spherical --from-horizon Ellipsoid \
      --to-type Cartesian

    python -m body_fixed_gravity.main \
      --gravity-file JGM2.cof \
      --gravity-degree-order 8 8 \
      --acceleration-at 7000 0 0
"""
import sys

from types  import SimpleNamespace
from typing import Optional, Sequence

from body_fixed_gravity.input.cli                        import parse_command_line_arguments
from body_fixed_gravity.input.configuration              import build_config, internal_to_degrees, print_configuration
from body_fixed_gravity.model.body_fixed_state_converter import BodyFixedStateConverter, ConvergenceError, InvalidStateRepresentationError
from body_fixed_gravity.model.coefficient_table          import GravityFileError
from body_fixed_gravity.model.gravity_field              import create_gravity_model
from body_fixed_gravity.model.gravity_file               import load_gravity_file
from body_fixed_gravity.utility.logger                   import logging_to
from body_fixed_gravity.utility.printer                  import print_acceleration, print_conversion_result, print_gravity_summary


def run_conversion(
  conversion : SimpleNamespace,
  body       : SimpleNamespace,
) -> dict:
  """
  Convert the configured position.

  Input:
  ------
    conversion : SimpleNamespace
      Conversion request from build_config.
    body : SimpleNamespace
      Body shape (flattening, radius).

  Output:
  -------
    result : dict
      input_pos/output_pos in radians, input_display/output_display in degrees.
  """
  if conversion.from_type is not None:
    output_pos = BodyFixedStateConverter.convert_state(
      conversion.input_pos,
      conversion.from_type,
      conversion.from_horizon,
      conversion.to_type,
      conversion.to_horizon,
      body.flattening,
      body.radius,
    )
  else:
    output_pos = BodyFixedStateConverter.convert(
      conversion.input_pos,
      conversion.from_rep,
      conversion.to_rep,
      body.flattening,
      body.radius,
    )

  return {
    'from'           : conversion.from_label,
    'to'             : conversion.to_label,
    'from_angular'   : conversion.from_angular,
    'to_angular'     : conversion.to_angular,
    'input_pos'      : conversion.input_pos,
    'output_pos'     : output_pos,
    'input_display'  : internal_to_degrees(conversion.input_pos, conversion.from_angular),
    'output_display' : internal_to_degrees(output_pos,           conversion.to_angular),
  }


def run_gravity(
  gravity : SimpleNamespace,
  body    : SimpleNamespace,
) -> dict:
  """
  Load the configured gravity file and, if requested, evaluate the acceleration.
  The body radius and gp are fallbacks for files that do not give their own.
  """
  gravity_file = load_gravity_file(
    gravity.filepath,
    radius = body.radius,
    gp     = body.gp,
  )
  print_gravity_summary(gravity_file)

  result = {
    'gravity_file' : gravity_file,
    'acceleration' : None,
  }

  if gravity.acceleration_at is not None:
    model   = create_gravity_model(gravity_file, gravity.degree, gravity.order)
    acc_vec = model.compute(gravity.acceleration_at)
    print_acceleration(gravity, acc_vec)
    result['acceleration'] = acc_vec

  return result


def main(
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
) -> dict:
  """
  Main function to run the body-fixed conversion and gravity file tasks.

  Builds the configuration, then runs the requested conversion and gravity
  file load. Conversion and gravity file errors are reported and returned
  instead of raised.

  Output:
  -------
    result : dict
      success    : bool
      message    : str (on failure)
      conversion : dict | None
      gravity    : dict | None
  """

  # Process inputs and setup
  config = build_config(
    body                 = body,
    bodies_filepath      = bodies_filepath,
    flattening           = flattening,
    radius               = radius,
    gp                   = gp,
    convert_values       = convert_values,
    from_rep             = from_rep,
    to_rep               = to_rep,
    from_type            = from_type,
    from_horizon         = from_horizon,
    to_type              = to_type,
    to_horizon           = to_horizon,
    gravity_filepath     = gravity_filepath,
    gravity_degree_order = gravity_degree_order,
    acceleration_at      = acceleration_at,
    log_filepath         = log_filepath,
  )

  with logging_to(config.log_filepath):
    # Print input configuration
    print_configuration(config)

    result = {
      'success'    : True,
      'conversion' : None,
      'gravity'    : None,
    }

    try:
      if config.conversion is not None:
        result['conversion'] = run_conversion(config.conversion, config.body)
        print_conversion_result(result['conversion'])

      if config.gravity is not None:
        result['gravity'] = run_gravity(config.gravity, config.body)

    except (InvalidStateRepresentationError, ConvergenceError, GravityFileError) as e:
      print(f"\n[ERROR] {e}")
      return {'success': False, 'message': str(e)}

  return result


def run_from_command_line(
  argv : Optional[Sequence[str]] = None,
) -> None:
  # Parse command-line arguments
  args = parse_command_line_arguments(argv)

  # Run main function
  try:
    result = main(
      body                 = args.body,
      bodies_filepath      = args.bodies_filepath,
      flattening           = args.flattening,
      radius               = args.radius,
      gp                   = args.gp,
      convert_values       = args.convert_values,
      from_rep             = args.from_rep,
      to_rep               = args.to_rep,
      from_type            = args.from_type,
      from_horizon         = args.from_horizon,
      to_type              = args.to_type,
      to_horizon           = args.to_horizon,
      gravity_filepath     = args.gravity_filepath,
      gravity_degree_order = args.gravity_degree_order,
      acceleration_at      = args.acceleration_at,
      log_filepath         = args.log_filepath,
    )
  except (ValueError, FileNotFoundError) as e:
    print(f"[ERROR] {e}")
    sys.exit(1)

  if not result['success']:
    sys.exit(1)


if __name__ == "__main__":
  run_from_command_line()
