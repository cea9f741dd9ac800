"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for all validation tests: body shapes and writers for small
synthetic COF, GRV and DAT gravity files.
"""
import pytest

from pathlib import Path

from body_fixed_gravity.model.constants import SOLARSYSTEMCONSTANTS


@pytest.fixture(scope="session")
def project_root():
  """Return the project root directory."""
  return Path(__file__).parent.parent.parent


@pytest.fixture
def earth_shape():
  """Earth flattening [-] and equatorial radius [km]."""
  return SOLARSYSTEMCONSTANTS.EARTH.FLATTENING, SOLARSYSTEMCONSTANTS.EARTH.RADIUS.EQUATOR


def cof_potfield_line(degree, order, gm, radius, normalized=1.0, cb_flag=1):
  """POTFIELD record with degree in columns 8-10 and order in 11-13."""
  return f"{'POTFIELD':<8}{degree:>3}{order:>3} {cb_flag} {gm:.10E} {radius:.10E} {normalized:.1f}"


def cof_recoef_line(degree, order, Cnm, Snm=None):
  """RECOEF record with C in columns 17-37 and S in 38-58."""
  snm_str = '' if Snm is None else f"{Snm:>21.12E}"
  return f"{'RECOEF':<8}{degree:>3}{order:>3}   {Cnm:>21.12E}{snm_str}"


@pytest.fixture
def write_file(tmp_path):
  """Write lines to a file under tmp_path and return its path."""
  def _write(filename, lines):
    filepath = tmp_path / filename
    filepath.write_text('\n'.join(lines) + '\n')
    return filepath
  return _write


@pytest.fixture
def cof_file(write_file):
  """
  Minimal COF file: degree/order 2, GM and radius in file units (m³/s², m),
  and a single C20 record with a blank S field.
  """
  return write_file('minimal.cof', [
    "COMMENT minimal test field",
    cof_potfield_line(2, 2, 398600.4415e9, 6378136.3),
    cof_recoef_line(2, 0, -0.001082626),
    "END",
  ])


@pytest.fixture
def cof_lines():
  """Builders for COF records."""
  return cof_potfield_line, cof_recoef_line


@pytest.fixture
def write_grv(write_file):
  """
  Write a GRV file with the given header values and coefficient lines.
  """
  def _write(coefficient_lines, degree=4, order=4, gm=3.986004415e14, ref_distance=6378136.3, normalized='No'):
    lines = [
      "stk.v.4.3",
      "",
      "# Synthetic test field",
      "BEGIN Gravity",
      f"  Degree      {degree}",
      f"  Order       {order}",
      f"  GM          {gm:.10e}",
      f"  RefDistance {ref_distance}",
      f"  Normalized  {normalized}",
      "  BEGIN Coefficients",
    ]
    lines += [f"    {line}" for line in coefficient_lines]
    lines += [
      "  END Coefficients",
      "END Gravity",
    ]
    return write_file('test.grv', lines)
  return _write


@pytest.fixture
def dat_file(write_file):
  """
  DAT file with GM and radius records, two drift-rate rows and three
  coefficient rows (max degree 3, max order 2).
  """
  return write_file('test.dat', [
    "# Synthetic DAT gravity field",
    "3.986004415E+14",
    "6378136.3",
    "DRIFT RATES: n m dC/dt dS/dt",
    "2 0 1.16275534E-11 0.0",
    "2 1 -3.2E-12 1.62E-11",
    "# COEFFICIENTS: n m C S",
    "2 0 -4.84165371736E-04 0.0",
    "2 2 2.43914352398E-06 -1.40016683654E-06",
    "3 0 9.57254173792E-07 0.0",
  ])
