"""
Body-Fixed State Converter
==========================

Converts body-fixed positions between the Cartesian, Spherical and
Spherical-Ellipsoid (geodetic) representations of a body whose shape is given
by a flattening and a mean (equatorial) radius.

Representations:
- Cartesian : (x, y, z) [km]
- Spherical : (latitude [rad], longitude [rad], height above mean sphere [km])
- Ellipsoid : (geodetic latitude [rad], longitude [rad], height above ellipsoid [km])

All angles are radians. Longitudes produced by any conversion lie in [0, 2π).

References:
- Vallado, "Fundamentals of Astrodynamics and Applications", Section 3.3
"""
import numpy as np

from enum   import Enum
from typing import Sequence

from body_fixed_gravity.model.constants import MATHCONSTANTS, NUMERICS


class InvalidStateRepresentationError(ValueError):
  """
  Raised when a representation, state type or horizon tag is not recognized.
  """


class ConvergenceError(ArithmeticError):
  """
  Raised when the geodetic latitude iteration does not converge.
  """


class StateRepresentation(str, Enum):
  CARTESIAN = 'Cartesian'
  SPHERICAL = 'Spherical'
  ELLIPSOID = 'Ellipsoid'


class StateType(str, Enum):
  CARTESIAN = 'Cartesian'
  SPHERICAL = 'Spherical'


class HorizonReference(str, Enum):
  SPHERE    = 'Sphere'
  ELLIPSOID = 'Ellipsoid'


def _parse_tag(
  enum_cls : type,
  tag      : str,
) -> Enum:
  try:
    return enum_cls(tag)
  except ValueError:
    valid = ', '.join(member.value for member in enum_cls)
    raise InvalidStateRepresentationError(
      f"Unknown {enum_cls.__name__} '{tag}'. Valid values: {valid}"
    ) from None


def _wrap_longitude(
  longitude : float,
) -> float:
  # atan2 output is in [-π, π]; tiny negatives would round to exactly 2π
  if longitude < 0.0:
    longitude += MATHCONSTANTS.TWO_PI
  if longitude >= MATHCONSTANTS.TWO_PI:
    longitude = 0.0
  # -0.0 + 0.0 is +0.0
  return float(longitude) + 0.0


class BodyFixedStateConverter:
  """
  Stateless conversions between body-fixed position representations.

  Every method takes the body shape as (flattening, mean_radius) by value.
  The spherical conversions accept the flattening for a uniform signature
  but do not use it.
  """

  @staticmethod
  def convert(
    pos                 : Sequence[float],
    from_representation : str,
    to_representation   : str,
    flattening          : float,
    mean_radius         : float,
  ) -> np.ndarray:
    """
    Convert a position from one representation to another.

    Input:
    ------
      pos : Sequence[float]
        Position in the 'from' representation.
      from_representation : str
        One of 'Cartesian', 'Spherical', 'Ellipsoid'.
      to_representation : str
        One of 'Cartesian', 'Spherical', 'Ellipsoid'.
      flattening : float
        Flattening of the body's reference ellipsoid [-].
      mean_radius : float
        Mean (equatorial) radius of the body [km].

    Output:
    -------
      out_pos : np.ndarray
        Position in the 'to' representation.

    Raises:
    -------
      InvalidStateRepresentationError
        If either representation tag is unknown.
    """
    from_rep = _parse_tag(StateRepresentation, from_representation)
    to_rep   = _parse_tag(StateRepresentation, to_representation)

    if from_rep is to_rep:
      return np.array(pos, dtype=float)

    conversions = {
      (StateRepresentation.CARTESIAN, StateRepresentation.SPHERICAL) : BodyFixedStateConverter.cartesian_to_spherical,
      (StateRepresentation.CARTESIAN, StateRepresentation.ELLIPSOID) : BodyFixedStateConverter.cartesian_to_spherical_ellipsoid,
      (StateRepresentation.SPHERICAL, StateRepresentation.CARTESIAN) : BodyFixedStateConverter.spherical_to_cartesian,
      (StateRepresentation.SPHERICAL, StateRepresentation.ELLIPSOID) : BodyFixedStateConverter.spherical_to_spherical_ellipsoid,
      (StateRepresentation.ELLIPSOID, StateRepresentation.CARTESIAN) : BodyFixedStateConverter.spherical_ellipsoid_to_cartesian,
      (StateRepresentation.ELLIPSOID, StateRepresentation.SPHERICAL) : BodyFixedStateConverter.spherical_ellipsoid_to_spherical,
    }
    return conversions[(from_rep, to_rep)](pos, flattening, mean_radius)

  @staticmethod
  def convert_state(
    pos          : Sequence[float],
    from_type    : str,
    from_horizon : str,
    to_type      : str,
    to_horizon   : str,
    flattening   : float,
    mean_radius  : float,
  ) -> np.ndarray:
    """
    Convert a position given a state type and a horizon reference on each side.

    A 'Spherical' state on a 'Sphere' horizon is the spherical representation;
    on an 'Ellipsoid' horizon it is the geodetic representation. The horizon of
    a 'Cartesian' state has no effect.

    Input:
    ------
      pos : Sequence[float]
        Position in the 'from' representation.
      from_type, to_type : str
        'Cartesian' or 'Spherical'.
      from_horizon, to_horizon : str
        'Sphere' or 'Ellipsoid'.
      flattening : float
        Flattening of the body's reference ellipsoid [-].
      mean_radius : float
        Mean (equatorial) radius of the body [km].

    Output:
    -------
      out_pos : np.ndarray
        Position in the 'to' representation.
    """
    from_type_enum    = _parse_tag(StateType,        from_type)
    from_horizon_enum = _parse_tag(HorizonReference, from_horizon)
    to_type_enum      = _parse_tag(StateType,        to_type)
    to_horizon_enum   = _parse_tag(HorizonReference, to_horizon)

    def as_representation(state_type, horizon):
      if state_type is StateType.CARTESIAN:
        return StateRepresentation.CARTESIAN
      if horizon is HorizonReference.SPHERE:
        return StateRepresentation.SPHERICAL
      return StateRepresentation.ELLIPSOID

    return BodyFixedStateConverter.convert(
      pos,
      as_representation(from_type_enum, from_horizon_enum),
      as_representation(to_type_enum,   to_horizon_enum),
      flattening,
      mean_radius,
    )

  @staticmethod
  def cartesian_to_spherical(
    cart        : Sequence[float],
    flattening  : float,
    mean_radius : float,
  ) -> np.ndarray:
    """
    Cartesian (x, y, z) to spherical (latitude, longitude, height).
    """
    x, y, z = np.asarray(cart, dtype=float)

    longitude = _wrap_longitude(np.arctan2(y, x))

    pos_mag = np.sqrt(x*x + y*y + z*z)
    if pos_mag == 0.0:
      return np.array([0.0, longitude, -mean_radius])
    latitude = np.arcsin(z / pos_mag)

    height = pos_mag - mean_radius
    return np.array([latitude, longitude, height])

  @staticmethod
  def spherical_to_cartesian(
    spherical   : Sequence[float],
    flattening  : float,
    mean_radius : float,
  ) -> np.ndarray:
    """
    Spherical (latitude, longitude, height) to Cartesian (x, y, z).
    """
    latitude, longitude, height = np.asarray(spherical, dtype=float)

    unit_vec = np.array([
      np.cos(latitude) * np.cos(longitude),
      np.cos(latitude) * np.sin(longitude),
      np.sin(latitude),
    ])
    return (height + mean_radius) * unit_vec

  @staticmethod
  def spherical_ellipsoid_to_cartesian(
    sph_ell     : Sequence[float],
    flattening  : float,
    mean_radius : float,
  ) -> np.ndarray:
    """
    Geodetic (latitude, longitude, height) to Cartesian (x, y, z).

    Input:
    ------
      sph_ell : Sequence[float]
        Geodetic latitude [rad], longitude [rad], height above ellipsoid [km].
      flattening : float
        Flattening of the reference ellipsoid [-].
      mean_radius : float
        Equatorial radius of the reference ellipsoid [km].

    Output:
    -------
      cart : np.ndarray
        Body-fixed position [km].
    """
    latitude, longitude, height = np.asarray(sph_ell, dtype=float)
    sin_lat = np.sin(latitude)

    # Eccentricity squared, prime-vertical radius of curvature
    ee = 2.0 * flattening - flattening * flattening
    C  = mean_radius / np.sqrt(1.0 - ee * sin_lat * sin_lat)
    S  = C * (1.0 - ee)

    rxy = (C + height) * np.cos(latitude)
    rz  = (S + height) * sin_lat

    return np.array([
      rxy * np.cos(longitude),
      rxy * np.sin(longitude),
      rz,
    ])

  @staticmethod
  def cartesian_to_spherical_ellipsoid(
    cart           : Sequence[float],
    flattening     : float,
    mean_radius    : float,
    tolerance      : float = NUMERICS.GEODETIC_LATITUDE_TOLERANCE,
    max_iterations : int   = NUMERICS.GEODETIC_MAX_ITERATIONS,
  ) -> np.ndarray:
    """
    Cartesian (x, y, z) to geodetic (latitude, longitude, height).

    The geodetic latitude is found by fixed-point iteration starting from the
    geocentric latitude:
      lat_{k+1} = atan((z + C_k * ee * sin(lat_k)) / rxy)
    until |lat_{k+1} - lat_k| < tolerance. Deep inside the body the iteration
    contracts slowly; if max_iterations is reached while the change is still
    shrinking, the limit is estimated from the last three iterates by Aitken
    extrapolation and returned. Within NUMERICS.NEAR_POLE_ANGLE of
    a pole the height is recovered from z instead of rxy, since cos(lat) -> 0.

    Input:
    ------
      cart : Sequence[float]
        Body-fixed position [km].
      flattening : float
        Flattening of the reference ellipsoid [-].
      mean_radius : float
        Equatorial radius of the reference ellipsoid [km].
      tolerance : float
        Convergence tolerance on the latitude change [rad].
      max_iterations : int
        Maximum number of fixed-point iterations.

    Output:
    -------
      sph_ell : np.ndarray
        Geodetic latitude [rad], longitude [rad], height above ellipsoid [km].

    Raises:
    -------
      ConvergenceError
        If the latitude change is not shrinking when max_iterations is reached.
    """
    x, y, z = np.asarray(cart, dtype=float)

    longitude = _wrap_longitude(np.arctan2(y, x))

    rxy = np.sqrt(x*x + y*y)
    ee  = 2.0 * flattening - flattening * flattening

    if rxy == 0.0:
      # On the polar axis the latitude is exact
      if z == 0.0:
        return np.array([0.0, longitude, -mean_radius])
      latitude = np.copysign(MATHCONSTANTS.PI_OVER_TWO, z)
    else:
      # Geocentric latitude as initial guess
      latitude       = np.arctan2(z, rxy)
      latitude_prev  = latitude
      latitude_prev2 = latitude
      delta          = 1.0
      delta_prev     = np.inf
      iterations     = 0
      while delta >= tolerance:
        if iterations >= max_iterations:
          if iterations < 2 or delta >= delta_prev:
            raise ConvergenceError(
              f"Geodetic latitude did not converge after {max_iterations} iterations "
              f"(position = {x}, {y}, {z} km, last change = {delta:.3e} rad)"
            )
          # Still contracting: Aitken extrapolation of the last three iterates
          step      = latitude - latitude_prev
          step_prev = latitude_prev - latitude_prev2
          if step != step_prev:
            latitude = latitude - step * step / (step - step_prev)
          break
        latitude_prev2 = latitude_prev
        latitude_prev  = latitude
        delta_prev     = delta
        sin_lat        = np.sin(latitude)
        C              = mean_radius / np.sqrt(1.0 - ee * sin_lat * sin_lat)
        latitude       = np.arctan((z + C * ee * sin_lat) / rxy)
        delta          = abs(latitude - latitude_prev)
        iterations    += 1

    # Height above the reference ellipsoid
    sin_lat = np.sin(latitude)
    C       = mean_radius / np.sqrt(1.0 - ee * sin_lat * sin_lat)
    S       = C * (1.0 - ee)
    if (MATHCONSTANTS.PI_OVER_TWO - abs(latitude)) > NUMERICS.NEAR_POLE_ANGLE:
      height = rxy / np.cos(latitude) - C
    else:
      height = z / sin_lat - S

    return np.array([latitude, longitude, height])

  @staticmethod
  def spherical_to_spherical_ellipsoid(
    spherical   : Sequence[float],
    flattening  : float,
    mean_radius : float,
  ) -> np.ndarray:
    """
    Spherical to geodetic, through Cartesian.
    """
    cart = BodyFixedStateConverter.spherical_to_cartesian(spherical, flattening, mean_radius)
    return BodyFixedStateConverter.cartesian_to_spherical_ellipsoid(cart, flattening, mean_radius)

  @staticmethod
  def spherical_ellipsoid_to_spherical(
    sph_ell     : Sequence[float],
    flattening  : float,
    mean_radius : float,
  ) -> np.ndarray:
    """
    Geodetic to spherical, through Cartesian.
    """
    cart = BodyFixedStateConverter.spherical_ellipsoid_to_cartesian(sph_ell, flattening, mean_radius)
    return BodyFixedStateConverter.cartesian_to_spherical(cart, flattening, mean_radius)

  @staticmethod
  def is_valid_state_representation(
    representation : str,
  ) -> bool:
    return representation in BodyFixedStateConverter.get_valid_representations()

  @staticmethod
  def get_valid_representations() -> list:
    return [rep.value for rep in StateRepresentation]
