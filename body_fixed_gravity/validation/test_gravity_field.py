"""
Unit Tests for Gravity Field Module
===================================

Tests for the spherical-harmonic acceleration evaluator.

Tests:
------
TestSphericalHarmonicsGravity
  - test_known_solution_point_mass          : verify degree 0 gives -GM r / |r|³
  - test_known_solution_j2_equator          : verify the J2 radial term on the equator
  - test_known_solution_j2_pole             : verify the J2 radial term above the pole
  - test_truncation_to_point_mass           : verify degree 0 truncation ignores higher terms
  - test_sectorial_term_breaks_symmetry     : verify C22 adds a tangential component off the axes
  - test_origin_raises                      : verify the body center is rejected
  - test_unallocated_table_raises           : verify a table without bounds is rejected

TestLoadGravityField
  - test_load_from_cof_file                 : verify file load plus evaluation uses the file's GM and radius

Usage:
------
  python -m pytest body_fixed_gravity/validation/test_gravity_field.py -v
"""
import pytest
import numpy as np

from body_fixed_gravity.model.coefficient_table import HarmonicCoefficientTable
from body_fixed_gravity.model.constants         import SOLARSYSTEMCONSTANTS
from body_fixed_gravity.model.gravity_field     import SphericalHarmonicsGravity, load_gravity_field


EARTH_RADIUS = SOLARSYSTEMCONSTANTS.EARTH.RADIUS.EQUATOR
EARTH_GP     = SOLARSYSTEMCONSTANTS.EARTH.GP
EARTH_J2     = SOLARSYSTEMCONSTANTS.EARTH.J2


def j2_table():
  table = HarmonicCoefficientTable()
  table.declare_bounds(2, 2)
  table.set_coefficient(2, 0, -EARTH_J2 / np.sqrt(5), 0.0)
  return table


class TestSphericalHarmonicsGravity:
  """
  Tests for SphericalHarmonicsGravity.compute.
  """

  def test_known_solution_point_mass(self):
    table = HarmonicCoefficientTable()
    table.declare_bounds(0, 0)
    model = SphericalHarmonicsGravity(table, EARTH_GP, EARTH_RADIUS)

    pos_vec = np.array([4000.0, -3000.0, 5000.0])
    acc_vec = model.compute(pos_vec)

    expected = -EARTH_GP * pos_vec / np.linalg.norm(pos_vec)**3
    assert np.allclose(acc_vec, expected, rtol=1e-12, atol=0.0)

  def test_known_solution_j2_equator(self):
    model   = SphericalHarmonicsGravity(j2_table(), EARTH_GP, EARTH_RADIUS)
    pos_mag = 7000.0

    acc_vec = model.compute([pos_mag, 0.0, 0.0])

    expected_x = -EARTH_GP / pos_mag**2 * (1.0 + 1.5 * EARTH_J2 * (EARTH_RADIUS / pos_mag)**2)
    assert acc_vec[0] == pytest.approx(expected_x, rel=1e-12)
    assert acc_vec[1] == pytest.approx(0.0, abs=1e-15)
    assert acc_vec[2] == pytest.approx(0.0, abs=1e-15)

  def test_known_solution_j2_pole(self):
    model   = SphericalHarmonicsGravity(j2_table(), EARTH_GP, EARTH_RADIUS)
    pos_mag = 7000.0

    acc_vec = model.compute([0.0, 0.0, pos_mag])

    expected_z = -EARTH_GP / pos_mag**2 * (1.0 - 3.0 * EARTH_J2 * (EARTH_RADIUS / pos_mag)**2)
    assert acc_vec[2] == pytest.approx(expected_z, rel=1e-12)
    assert acc_vec[0] == pytest.approx(0.0, abs=1e-15)
    assert acc_vec[1] == pytest.approx(0.0, abs=1e-15)

  def test_truncation_to_point_mass(self):
    model   = SphericalHarmonicsGravity(j2_table(), EARTH_GP, EARTH_RADIUS, degree=0, order=0)
    pos_vec = np.array([7000.0, 0.0, 0.0])

    acc_vec = model.compute(pos_vec)

    assert acc_vec[0] == pytest.approx(-EARTH_GP / 7000.0**2, rel=1e-12)

  def test_sectorial_term_breaks_symmetry(self):
    table = j2_table()
    table.set_coefficient(2, 2, 2.43914352398e-06, -1.40016683654e-06)
    model = SphericalHarmonicsGravity(table, EARTH_GP, EARTH_RADIUS)

    pos_vec = np.array([5000.0, 5000.0, 0.0])
    acc_vec = model.compute(pos_vec)

    radial     = pos_vec / np.linalg.norm(pos_vec)
    tangential = acc_vec - np.dot(acc_vec, radial) * radial
    assert np.linalg.norm(tangential) > 0.0
    assert acc_vec[2] == pytest.approx(0.0, abs=1e-15)

  def test_origin_raises(self):
    model = SphericalHarmonicsGravity(j2_table(), EARTH_GP, EARTH_RADIUS)
    with pytest.raises(ValueError):
      model.compute([0.0, 0.0, 0.0])

  def test_unallocated_table_raises(self):
    with pytest.raises(ValueError):
      SphericalHarmonicsGravity(HarmonicCoefficientTable(), EARTH_GP, EARTH_RADIUS)


class TestLoadGravityField:
  """
  Tests for load_gravity_field.
  """

  def test_load_from_cof_file(self, cof_file):
    model = load_gravity_field(cof_file, radius=1.0, gp=1.0)

    assert model.gp     == pytest.approx(398600.4415, rel=1e-12)
    assert model.radius == pytest.approx(6378.1363,   rel=1e-12)
    assert model.degree == 2

    acc_vec = model.compute([7000.0, 0.0, 0.0])
    assert acc_vec[0] < -model.gp / 7000.0**2
