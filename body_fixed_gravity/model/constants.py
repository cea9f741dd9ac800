class CONVERTER:
  # Angle Conversions
  RAD_PER_DEG = 3.141592653589793 / 180.0  # [radian] per [degree]
  DEG_PER_RAD = 180.0 / 3.141592653589793  # [degree] per [radian]

  # Distance Conversions
  M_PER_KM = 1000.0                        # [meters] per [kilometer]

  # Gravitational Parameter Conversions
  M3_PER_KM3 = 1.0e9                       # [meters³] per [kilometer³]

class MATHCONSTANTS:
  PI           = 3.141592653589793
  TWO_PI       = 2.0 * PI
  PI_OVER_TWO  = PI / 2.0

class NUMERICS:
  """
  Tolerances and limits for the iterative body-fixed solvers.
  """
  GEODETIC_LATITUDE_TOLERANCE = 1.0e-13    # Convergence on latitude change [rad]
  GEODETIC_MAX_ITERATIONS     = 100        # Hard cap on fixed-point iterations
  NEAR_POLE_ANGLE             = 0.02       # Switch to z-based height within this angle of a pole [rad]

class SOLARSYSTEMCONSTANTS:
  """
  Body shape and gravity constants, in kilometer units.
  Flattening values follow the usual reference ellipsoids; GP values are the
  ones shipped with the common JGM/EGM gravity files.
  """

  class MERCURY:
    class RADIUS:
      EQUATOR = 2439.7                      # Mercury's equatorial radius [km]
    FLATTENING = 0.0                        # Mercury's flattening [-]
    GP         = 22032.080486418            # Mercury's gravitational parameter [km³/s²]

  class VENUS:
    class RADIUS:
      EQUATOR = 6051.8                      # Venus's equatorial radius [km]
    FLATTENING = 0.0                        # Venus's flattening [-]
    GP         = 324858.59882646            # Venus's gravitational parameter [km³/s²]

  class EARTH:
    class RADIUS:
      EQUATOR = 6378.1363                   # Earth's equatorial radius (JGM-2/EGM96) [km]

    FLATTENING = 0.0033527                  # Earth's flattening [-]
    GP         = 398600.4415                # Earth's gravitational parameter [km³/s²]
    J2         = 1.0826269e-3               # Earth's J2 coefficient (unnormalized)

  class MOON:
    class RADIUS:
      EQUATOR = 1738.2                      # Moon's equatorial radius [km]
    FLATTENING = 0.0012                     # Moon's flattening [-]
    GP         = 4902.8005821478            # Moon's gravitational parameter [km³/s²]

  class MARS:
    class RADIUS:
      EQUATOR = 3396.19                     # Mars's equatorial radius [km]
    FLATTENING = 0.0064763                  # Mars's flattening [-]
    GP         = 42828.314258067            # Mars's gravitational parameter [km³/s²]

  class JUPITER:
    class RADIUS:
      EQUATOR = 71492.0                     # Jupiter's equatorial radius [km]
    FLATTENING = 0.0648744                  # Jupiter's flattening [-]
    GP         = 126712767.8578             # Jupiter's gravitational parameter [km³/s²]

  class SATURN:
    class RADIUS:
      EQUATOR = 60268.0                     # Saturn's equatorial radius [km]
    FLATTENING = 0.0979624                  # Saturn's flattening [-]
    GP         = 37940626.061137            # Saturn's gravitational parameter [km³/s²]
