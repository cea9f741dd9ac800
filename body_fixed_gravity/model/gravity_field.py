"""
Gravity Field Module
====================

Computes the body-fixed gravitational acceleration of a spherical-harmonic
gravity field loaded from a coefficient file.

The evaluator works on unnormalized coefficients, recovered from the table's
normalized values as C = Cbar / V[n,m], and uses the V/W recursion of
Cunningham, which stays regular at the poles.

References:
- Montenbruck & Gill, "Satellite Orbits", Chapter 3.2
"""
import numpy as np

from pathlib import Path
from typing  import Optional, Sequence, Union

from body_fixed_gravity.model.coefficient_table import HarmonicCoefficientTable
from body_fixed_gravity.model.gravity_file      import HarmonicGravity, load_gravity_file
from body_fixed_gravity.model.normalization     import normalization_factor


class SphericalHarmonicsGravity:
  """
  Compute gravitational acceleration using spherical harmonics expansion.

  Notation:
    n : degree (zonal index)
    m : order (sectorial index)

  Positions are body-fixed [km]; accelerations are body-fixed [km/s²].
  The n = 0 term (C[0,0] = 1) is the point-mass acceleration.
  """

  def __init__(
    self,
    coefficients : HarmonicCoefficientTable,
    gp           : float,
    radius       : float,
    degree       : Optional[int] = None,
    order        : Optional[int] = None,
  ):
    """
    Initialize spherical harmonics gravity model.

    Input:
    ------
      coefficients : HarmonicCoefficientTable
        Table with normalized C and S coefficient arrays.
      gp : float
        Gravitational parameter [km³/s²].
      radius : float
        Reference radius [km].
      degree : int, optional
        Maximum degree to use (defaults to coefficients.max_degree).
      order : int, optional
        Maximum order to use (defaults to coefficients.max_order).
    """
    if not coefficients.is_allocated:
      raise ValueError("Coefficient table has no declared degree/order bounds.")

    self.coefficients = coefficients
    self.gp           = gp
    self.radius       = radius
    self.degree       = coefficients.max_degree if degree is None else min(degree, coefficients.max_degree)
    self.order        = coefficients.max_order  if order  is None else min(order,  coefficients.max_order)
    self.order        = min(self.order, self.degree)

    self._unnormalize()

  def _unnormalize(self) -> None:
    """
    Convert the truncated normalized coefficients to unnormalized ones.
    """
    self._C = np.zeros((self.degree + 1, self.order + 1))
    self._S = np.zeros((self.degree + 1, self.order + 1))

    for n_degree in range(self.degree + 1):
      for m_order in range(min(n_degree, self.order) + 1):
        scale = normalization_factor(n_degree, m_order)
        self._C[n_degree, m_order] = self.coefficients.C[n_degree, m_order] / scale
        self._S[n_degree, m_order] = self.coefficients.S[n_degree, m_order] / scale

  def compute(
    self,
    pos_vec : Sequence[float],
  ) -> np.ndarray:
    """
    Compute the gravitational acceleration at a body-fixed position.

    Input:
    ------
      pos_vec : Sequence[float]
        Body-fixed position [km].

    Output:
    -------
      acc_vec : np.ndarray
        Body-fixed acceleration [km/s²].
    """
    x, y, z = np.asarray(pos_vec, dtype=float)
    r_sq    = x*x + y*y + z*z
    if r_sq == 0.0:
      raise ValueError("Acceleration is undefined at the body center.")

    Re = self.radius

    # Auxiliary quantities
    x0  = Re * x / r_sq
    y0  = Re * y / r_sq
    z0  = Re * z / r_sq
    rho = Re * Re / r_sq

    # V and W up to degree + 1 for the derivatives
    n_max = self.degree + 1
    V = np.zeros((n_max + 2, n_max + 2))
    W = np.zeros((n_max + 2, n_max + 2))

    # Zonal terms V(n,0); W(n,0) = 0
    V[0, 0] = Re / np.sqrt(r_sq)
    V[1, 0] = z0 * V[0, 0]
    for n_degree in range(2, n_max + 1):
      V[n_degree, 0] = ((2*n_degree - 1) * z0 * V[n_degree-1, 0] - (n_degree - 1) * rho * V[n_degree-2, 0]) / n_degree

    # Tesseral and sectorial terms
    for m_order in range(1, n_max + 1):
      # Sectorial: n=m
      V[m_order, m_order] = (2*m_order - 1) * (x0 * V[m_order-1, m_order-1] - y0 * W[m_order-1, m_order-1])
      W[m_order, m_order] = (2*m_order - 1) * (x0 * W[m_order-1, m_order-1] + y0 * V[m_order-1, m_order-1])

      # First tesseral: n=m+1
      if m_order < n_max:
        V[m_order+1, m_order] = (2*m_order + 1) * z0 * V[m_order, m_order]
        W[m_order+1, m_order] = (2*m_order + 1) * z0 * W[m_order, m_order]

      # Remaining tesseral for this m
      for n_degree in range(m_order + 2, n_max + 1):
        fac_1 = (2*n_degree - 1)        / (n_degree - m_order)
        fac_2 = (n_degree + m_order - 1) / (n_degree - m_order)
        V[n_degree, m_order] = fac_1 * z0 * V[n_degree-1, m_order] - fac_2 * rho * V[n_degree-2, m_order]
        W[n_degree, m_order] = fac_1 * z0 * W[n_degree-1, m_order] - fac_2 * rho * W[n_degree-2, m_order]

    # Accelerations
    ax = 0.0
    ay = 0.0
    az = 0.0
    for m_order in range(self.order + 1):
      for n_degree in range(m_order, self.degree + 1):
        Cnm = self._C[n_degree, m_order]
        Snm = self._S[n_degree, m_order]

        # Skip if both coefficients are zero
        if Cnm == 0.0 and Snm == 0.0:
          continue

        if m_order == 0:
          ax -= Cnm * V[n_degree+1, 1]
          ay -= Cnm * W[n_degree+1, 1]
          az -= (n_degree + 1) * Cnm * V[n_degree+1, 0]
        else:
          fac = 0.5 * (n_degree - m_order + 1) * (n_degree - m_order + 2)
          ax += 0.5 * (-Cnm * V[n_degree+1, m_order+1] - Snm * W[n_degree+1, m_order+1]) \
                + fac * ( Cnm * V[n_degree+1, m_order-1] + Snm * W[n_degree+1, m_order-1])
          ay += 0.5 * (-Cnm * W[n_degree+1, m_order+1] + Snm * V[n_degree+1, m_order+1]) \
                + fac * (-Cnm * W[n_degree+1, m_order-1] + Snm * V[n_degree+1, m_order-1])
          az += (n_degree - m_order + 1) * (-Cnm * V[n_degree+1, m_order] - Snm * W[n_degree+1, m_order])

    # Scale by GM/Re^2
    scale = self.gp / (Re * Re)
    return scale * np.array([ax, ay, az])


def load_gravity_field(
  filepath : Union[str, Path],
  radius   : float,
  gp       : float,
  degree   : Optional[int] = None,
  order    : Optional[int] = None,
) -> SphericalHarmonicsGravity:
  """
  Convenience function to load a gravity file and create the evaluator.

  Input:
  ------
    filepath : str | Path
      Path to a COF, GRV or DAT coefficient file.
    radius : float
      Fallback reference radius [km].
    gp : float
      Fallback gravitational parameter [km³/s²].
    degree : int, optional
      Maximum degree.
    order : int, optional
      Maximum order.

  Output:
  -------
    model : SphericalHarmonicsGravity
      Ready-to-use gravity model.
  """
  gravity_file = load_gravity_file(filepath, radius, gp)
  return create_gravity_model(gravity_file, degree, order)


def create_gravity_model(
  gravity_file : HarmonicGravity,
  degree       : Optional[int] = None,
  order        : Optional[int] = None,
) -> SphericalHarmonicsGravity:
  return SphericalHarmonicsGravity(
    coefficients = gravity_file.coefficients,
    gp           = gravity_file.gp,
    radius       = gravity_file.body_radius,
    degree       = degree,
    order        = order,
  )
