"""
Model Package
=============

Body-fixed state conversion, coefficient tables, gravity file loaders and the
spherical-harmonic gravity evaluator.
"""

from .body_fixed_state_converter import BodyFixedStateConverter, ConvergenceError, InvalidStateRepresentationError
from .coefficient_table          import GravityFileError, HarmonicCoefficientTable, OutOfBoundsPolicy
from .gravity_file               import GravityFileType, get_file_info, get_file_type, load_gravity_file

__all__ = [
  'BodyFixedStateConverter',
  'ConvergenceError',
  'InvalidStateRepresentationError',
  'GravityFileError',
  'HarmonicCoefficientTable',
  'OutOfBoundsPolicy',
  'GravityFileType',
  'get_file_info',
  'get_file_type',
  'load_gravity_file',
]
