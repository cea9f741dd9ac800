"""
Harmonic Coefficient Table
==========================

Degree/order bounded storage for fully normalized spherical-harmonic
coefficients C[n,m] and S[n,m].

The table is filled in two phases: declare_bounds() allocates the arrays once
the degree and order are known, then set_coefficient() stores entries. Storing
before the bounds are declared is an error. Entries outside the bounds are
handled by the table's OutOfBoundsPolicy.
"""
import numpy as np

from enum   import Enum
from typing import Optional


class GravityFileError(Exception):
  """
  Raised when a gravity file cannot be read or a required field fails to parse.
  """


class OutOfBoundsPolicy(Enum):
  IGNORE = 'ignore'  # drop the coefficient silently
  RAISE  = 'raise'   # raise GravityFileError


class HarmonicCoefficientTable:
  """
  Container for spherical harmonic gravity field coefficients.

  Notation:
    n : degree, 0..max_degree
    m : order,  0..max_order
  """

  def __init__(
    self,
    out_of_bounds : OutOfBoundsPolicy = OutOfBoundsPolicy.IGNORE,
  ):
    self.out_of_bounds = out_of_bounds
    self.max_degree    : Optional[int]        = None
    self.max_order     : Optional[int]        = None
    self.C             : Optional[np.ndarray] = None
    self.S             : Optional[np.ndarray] = None
    self.num_stored    = 0
    self.num_dropped   = 0

  @property
  def is_allocated(self) -> bool:
    return self.C is not None

  def declare_bounds(
    self,
    max_degree : int,
    max_order  : int,
  ) -> None:
    """
    Allocate coefficient arrays for the given degree and order.

    Input:
    ------
      max_degree : int
        Maximum degree NN.
      max_order : int
        Maximum order MM.

    Raises:
    -------
      GravityFileError
        If a bound is negative, or if different bounds are declared after
        coefficients have been stored.
    """
    if max_degree < 0 or max_order < 0:
      raise GravityFileError(
        f"Invalid degree/order bounds: degree = {max_degree}, order = {max_order}"
      )

    if self.is_allocated:
      if max_degree == self.max_degree and max_order == self.max_order:
        return
      if self.num_stored > 0:
        raise GravityFileError(
          f"Degree/order bounds already declared as {self.max_degree}/{self.max_order} "
          f"with {self.num_stored} coefficients stored; cannot redeclare as {max_degree}/{max_order}"
        )

    self.max_degree = max_degree
    self.max_order  = max_order

    # Allocate coefficient arrays (n x m)
    self.C = np.zeros((max_degree + 1, max_order + 1))
    self.S = np.zeros((max_degree + 1, max_order + 1))

    # C(0,0) = 1 for normalized coefficients (represents point mass)
    self.C[0, 0] = 1.0

  def set_coefficient(
    self,
    degree : int,
    order  : int,
    Cnm    : float,
    Snm    : float,
  ) -> bool:
    """
    Set a single coefficient pair.

    Input:
    ------
      degree : int
        Degree (n)
      order : int
        Order (m)
      Cnm : float
        C coefficient
      Snm : float
        S coefficient

    Output:
    -------
      stored : bool
        True if stored, False if dropped as out of bounds.
    """
    if not self.is_allocated:
      raise GravityFileError(
        f"Coefficient ({degree}, {order}) set before degree/order bounds were declared"
      )

    in_bounds = (
      0 <= degree <= self.max_degree and
      0 <= order  <= self.max_order
    )
    if not in_bounds:
      if self.out_of_bounds is OutOfBoundsPolicy.RAISE:
        raise GravityFileError(
          f"Coefficient ({degree}, {order}) outside declared bounds "
          f"degree = {self.max_degree}, order = {self.max_order}"
        )
      self.num_dropped += 1
      return False

    self.C[degree, order] = Cnm
    self.S[degree, order] = Snm
    self.num_stored += 1
    return True
