"""
Harmonic Normalization
======================

Factors converting unnormalized spherical-harmonic coefficients to the fully
normalized convention:

  Cbar[n,m] = V[n,m] * C[n,m]
  V[n,m]    = sqrt( (n+m)! / ((2 - delta_0m) * (2n+1) * (n-m)!) )

The factorial ratio is evaluated in log space with log-gamma. V itself
exceeds the float range once n + m is above roughly 300, so unnormalized
files are only meaningful below that.

References:
- Montenbruck & Gill, "Satellite Orbits", Eq. 3.14
"""
import numpy as np

from scipy.special import gammaln


def normalization_factor(
  degree : int,
  order  : int,
) -> float:
  """
  Unnormalized -> normalized factor V[n,m].

  Input:
  ------
    degree : int
      Degree n >= 0.
    order : int
      Order 0 <= m <= n.

  Output:
  -------
    factor : float
      V[n,m], or 0.0 when m > n.
  """
  if order > degree or order < 0 or degree < 0:
    return 0.0

  kronecker = 1.0 if order == 0 else 2.0
  log_ratio = gammaln(degree + order + 1) - gammaln(degree - order + 1)
  return float(np.exp(0.5 * (log_ratio - np.log(kronecker * (2 * degree + 1)))))


def unit_normalization(
  degree : int,
  order  : int,
) -> float:
  """Provider that leaves coefficients untouched."""
  return 1.0


class NormalizationTable:
  """
  Precomputed triangular table of normalization factors V[n,m].

  Instances are callable as provider(n, m) and can be handed to the gravity
  file loaders in place of normalization_factor.
  """

  def __init__(
    self,
    max_degree : int,
  ):
    self.max_degree = max_degree
    self.V          = np.zeros((max_degree + 1, max_degree + 1))

    for n_degree in range(max_degree + 1):
      for m_order in range(n_degree + 1):
        self.V[n_degree, m_order] = normalization_factor(n_degree, m_order)

  def __call__(
    self,
    degree : int,
    order  : int,
  ) -> float:
    if degree > self.max_degree:
      return normalization_factor(degree, order)
    if order > degree or order < 0:
      return 0.0
    return float(self.V[degree, order])
