"""
Validation Package
==================

Test suite for the body-fixed state converter and the gravity file loaders.

Modules:
--------
- test_body_fixed_state_converter : Tests for Cartesian/Spherical/Ellipsoid conversions
- test_normalization              : Tests for the degree/order normalization factors
- test_coefficient_table          : Tests for the coefficient table bounds contract
- test_gravity_file               : Tests for the COF, GRV and DAT loaders
- test_gravity_field              : Tests for the spherical-harmonic acceleration
- test_configuration              : Tests for body lookup, configuration and argument parsing
- test_main                       : End-to-end tests for the command-line entry point

Usage:
------
Run all tests:
  python -m pytest body_fixed_gravity/validation/ -v

Run a specific test module:
  python -m pytest body_fixed_gravity/validation/test_gravity_file.py -v

Run a specific test class:
  python -m pytest body_fixed_gravity/validation/test_gravity_file.py::TestCofLoader -v
"""
