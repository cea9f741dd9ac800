"""
Unit Tests for Configuration and Command-Line Input
===================================================

Tests for the supported-bodies loader, configuration building and argument
parsing.

Tests:
------
TestLoadSupportedBodies
  - test_default_file_has_earth          : verify the packaged YAML file resolves Earth
  - test_default_file_matches_constants  : verify every packaged body agrees with SOLARSYSTEMCONSTANTS
  - test_default_file_is_packaged        : verify the default YAML file lives inside the package
  - test_missing_file_raises             : verify a missing YAML file raises FileNotFoundError
  - test_custom_file_keys_upper_case     : verify body names are upper-cased

TestBuildConfig
  - test_body_lookup_case_insensitive    : verify body names are matched case-insensitively
  - test_overrides_take_precedence       : verify explicit values override the YAML file
  - test_unknown_body_raises             : verify an unknown body without overrides raises
  - test_invalid_flattening_raises       : verify flattening outside [0, 1) raises
  - test_angles_converted_to_radians     : verify angular inputs are stored in radians
  - test_state_type_defaults_to_sphere   : verify missing horizons default to Sphere
  - test_mixed_tag_styles_raise          : verify --from-rep and --from-type cannot be mixed
  - test_missing_to_rep_raises           : verify both ends of a conversion are required
  - test_acceleration_needs_gravity_file : verify --acceleration-at requires --gravity-file

TestParseCommandLineArguments
  - test_conversion_arguments            : verify conversion flags parse into the namespace
  - test_gravity_arguments               : verify gravity flags parse into the namespace
  - test_invalid_choice_exits            : verify an unknown representation is rejected

Usage:
------
  python -m pytest body_fixed_gravity/validation/test_configuration.py -v
"""
import pytest
import numpy as np

from pathlib import Path

import body_fixed_gravity
from body_fixed_gravity.input.cli           import parse_command_line_arguments
from body_fixed_gravity.input.configuration import build_body_config, build_config
from body_fixed_gravity.model.constants     import CONVERTER, SOLARSYSTEMCONSTANTS
from body_fixed_gravity.utility.loader      import default_bodies_filepath, load_supported_bodies


class TestLoadSupportedBodies:
  """
  Tests for load_supported_bodies.
  """

  def test_default_file_has_earth(self):
    bodies = load_supported_bodies()

    assert 'EARTH' in bodies
    assert bodies['EARTH']['radius__km']     == SOLARSYSTEMCONSTANTS.EARTH.RADIUS.EQUATOR
    assert bodies['EARTH']['flattening']     == SOLARSYSTEMCONSTANTS.EARTH.FLATTENING
    assert bodies['EARTH']['gp__km3_per_s2'] == SOLARSYSTEMCONSTANTS.EARTH.GP

  def test_default_file_matches_constants(self):
    bodies = load_supported_bodies()

    for name, props in bodies.items():
      body_constants = getattr(SOLARSYSTEMCONSTANTS, name)
      assert props['radius__km']     == body_constants.RADIUS.EQUATOR
      assert props['flattening']     == body_constants.FLATTENING
      assert props['gp__km3_per_s2'] == body_constants.GP

  def test_default_file_is_packaged(self):
    filepath     = default_bodies_filepath()
    package_root = Path(body_fixed_gravity.__file__).parent

    assert filepath.is_file()
    assert filepath.parent.parent == package_root

  def test_missing_file_raises(self, tmp_path):
    with pytest.raises(FileNotFoundError):
      load_supported_bodies(tmp_path / 'missing.yaml')

  def test_custom_file_keys_upper_case(self, write_file):
    filepath = write_file('bodies.yaml', [
      "ceres:",
      "  flattening     : 0.075",
      "  radius__km     : 482.0",
      "  gp__km3_per_s2 : 62.6",
    ])

    bodies = load_supported_bodies(filepath)

    assert list(bodies.keys()) == ['CERES']
    assert bodies['CERES']['radius__km'] == 482.0


class TestBuildConfig:
  """
  Tests for build_body_config and build_config.
  """

  def test_body_lookup_case_insensitive(self):
    body_config = build_body_config('moon')

    assert body_config.name   == 'MOON'
    assert body_config.radius == 1738.2

  def test_overrides_take_precedence(self):
    body_config = build_body_config('EARTH', flattening=0.0, radius=6371.0)

    assert body_config.flattening == 0.0
    assert body_config.radius     == 6371.0
    assert body_config.gp         == SOLARSYSTEMCONSTANTS.EARTH.GP

  def test_unknown_body_raises(self):
    with pytest.raises(ValueError):
      build_body_config('VULCAN')

    body_config = build_body_config('VULCAN', flattening=0.01, radius=1000.0, gp=100.0)
    assert body_config.name == 'VULCAN'

  def test_invalid_flattening_raises(self):
    with pytest.raises(ValueError):
      build_body_config('EARTH', flattening=1.0)
    with pytest.raises(ValueError):
      build_body_config('EARTH', flattening=-0.1)

  def test_angles_converted_to_radians(self):
    config = build_config(
      convert_values = [45.0, 90.0, 100.0],
      from_rep       = 'Ellipsoid',
      to_rep         = 'Cartesian',
    )

    assert config.conversion.from_angular
    assert not config.conversion.to_angular
    assert np.allclose(config.conversion.input_pos, [45.0 * CONVERTER.RAD_PER_DEG, 90.0 * CONVERTER.RAD_PER_DEG, 100.0])
    assert config.gravity is None
    assert config.log_filepath is None

  def test_state_type_defaults_to_sphere(self):
    config = build_config(
      convert_values = [7000.0, 0.0, 0.0],
      from_type      = 'Cartesian',
      to_type        = 'Spherical',
    )

    assert config.conversion.from_horizon == 'Sphere'
    assert config.conversion.to_horizon   == 'Sphere'
    assert config.conversion.to_label     == 'Spherical (Sphere)'
    assert config.conversion.to_angular

  def test_mixed_tag_styles_raise(self):
    with pytest.raises(ValueError):
      build_config(convert_values=[7000.0, 0.0, 0.0], from_rep='Cartesian', to_type='Spherical')

  def test_missing_to_rep_raises(self):
    with pytest.raises(ValueError):
      build_config(convert_values=[7000.0, 0.0, 0.0], from_rep='Cartesian')

  def test_acceleration_needs_gravity_file(self):
    with pytest.raises(ValueError):
      build_config(acceleration_at=[7000.0, 0.0, 0.0])


class TestParseCommandLineArguments:
  """
  Tests for parse_command_line_arguments.
  """

  def test_conversion_arguments(self):
    args = parse_command_line_arguments([
      '--body', 'mars',
      '--convert', '10', '20', '5',
      '--from-rep', 'Spherical',
      '--to-rep', 'Ellipsoid',
    ])

    assert args.body           == 'mars'
    assert args.convert_values == [10.0, 20.0, 5.0]
    assert args.from_rep       == 'Spherical'
    assert args.to_rep         == 'Ellipsoid'
    assert args.from_type is None

  def test_gravity_arguments(self):
    args = parse_command_line_arguments([
      '--gravity-file', 'JGM2.cof',
      '--gravity-degree-order', '8', '8',
      '--acceleration-at', '7000', '0', '0',
      '--log-file', 'output/run.log',
    ])

    assert args.gravity_filepath     == 'JGM2.cof'
    assert args.gravity_degree_order == [8, 8]
    assert args.acceleration_at      == [7000.0, 0.0, 0.0]
    assert args.log_filepath         == 'output/run.log'

  def test_invalid_choice_exits(self):
    with pytest.raises(SystemExit):
      parse_command_line_arguments(['--convert', '1', '2', '3', '--from-rep', 'Polar', '--to-rep', 'Cartesian'])
