"""
Body-Fixed Gravity
==================

Body-fixed position conversions (Cartesian, Spherical, Spherical-Ellipsoid)
and harmonic gravity coefficient file loaders (COF, GRV, DAT).
"""
