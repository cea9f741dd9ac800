import sys
import argparse

from typing import Optional, Sequence


def parse_command_line_arguments(
  argv : Optional[Sequence[str]] = None,
) -> argparse.Namespace:
  """
  Parse command-line arguments for the body-fixed state and gravity tool.

  Input:
  ------
    argv : Sequence[str], optional
      Arguments to parse. Defaults to sys.argv[1:].

  Output:
  -------
    args : argparse.Namespace
      Parsed command-line arguments.
  """
  parser = argparse.ArgumentParser(
    description     = 'Body-fixed state conversion and harmonic gravity file tool',
    formatter_class = argparse.RawDescriptionHelpFormatter,
  )

  # If no arguments provided, print help and exit
  if argv is None and len(sys.argv) == 1:
    parser.print_help(sys.stderr)
    sys.exit(1)

  # Body arguments
  parser.add_argument(
    '--body',
    type    = str,
    default = 'EARTH',
    help    = 'Central body name from the supported-bodies YAML file (default: EARTH).',
  )
  parser.add_argument(
    '--bodies-file',
    dest    = 'bodies_filepath',
    type    = str,
    default = None,
    help    = 'Alternative supported-bodies YAML file.',
  )
  parser.add_argument(
    '--flattening',
    type    = float,
    default = None,
    help    = 'Override the body flattening [-].',
  )
  parser.add_argument(
    '--radius',
    type    = float,
    default = None,
    help    = 'Override the body mean/equatorial radius [km].',
  )
  parser.add_argument(
    '--gp',
    type    = float,
    default = None,
    help    = 'Override the fallback gravitational parameter [km^3/s^2].',
  )

  # Conversion arguments
  parser.add_argument(
    '--convert',
    dest    = 'convert_values',
    type    = float,
    nargs   = 3,
    metavar = ('V1', 'V2', 'V3'),
    default = None,
    help    = 'Position to convert: x y z [km], or lat [deg] lon [deg] height [km].',
  )
  parser.add_argument(
    '--from-rep',
    dest    = 'from_rep',
    type    = str,
    choices = ['Cartesian', 'Spherical', 'Ellipsoid'],
    default = None,
    help    = 'Representation of the input position.',
  )
  parser.add_argument(
    '--to-rep',
    dest    = 'to_rep',
    type    = str,
    choices = ['Cartesian', 'Spherical', 'Ellipsoid'],
    default = None,
    help    = 'Representation of the output position.',
  )
  parser.add_argument(
    '--from-type',
    dest    = 'from_type',
    type    = str,
    choices = ['Cartesian', 'Spherical'],
    default = None,
    help    = 'State type of the input position (use with --from-horizon).',
  )
  parser.add_argument(
    '--from-horizon',
    dest    = 'from_horizon',
    type    = str,
    choices = ['Sphere', 'Ellipsoid'],
    default = None,
    help    = 'Horizon reference of the input position (default: Sphere).',
  )
  parser.add_argument(
    '--to-type',
    dest    = 'to_type',
    type    = str,
    choices = ['Cartesian', 'Spherical'],
    default = None,
    help    = 'State type of the output position (use with --to-horizon).',
  )
  parser.add_argument(
    '--to-horizon',
    dest    = 'to_horizon',
    type    = str,
    choices = ['Sphere', 'Ellipsoid'],
    default = None,
    help    = 'Horizon reference of the output position (default: Sphere).',
  )

  # Gravity arguments
  parser.add_argument(
    '--gravity-file',
    dest    = 'gravity_filepath',
    type    = str,
    default = None,
    help    = 'Gravity coefficient file (.cof, .grv or .dat) to load and summarize.',
  )
  parser.add_argument(
    '--gravity-degree-order',
    dest    = 'gravity_degree_order',
    type    = int,
    nargs   = 2,
    metavar = ('DEGREE', 'ORDER'),
    default = None,
    help    = 'Truncation degree and order for acceleration evaluation (e.g. 8 8).',
  )
  parser.add_argument(
    '--acceleration-at',
    dest    = 'acceleration_at',
    type    = float,
    nargs   = 3,
    metavar = ('X', 'Y', 'Z'),
    default = None,
    help    = 'Body-fixed position [km] at which to evaluate the gravity acceleration.',
  )

  # Output arguments
  parser.add_argument(
    '--log-file',
    dest    = 'log_filepath',
    type    = str,
    default = None,
    help    = 'Copy terminal output to this file.',
  )

  # Parse arguments
  args = parser.parse_args(argv)

  return args
