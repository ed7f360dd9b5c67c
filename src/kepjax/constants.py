"""
The `constants` module defines mathematical and physical constants used by the
two-body helpers and acceleration models.

The state conversion engine does not read any of these: it always takes the
gravitational parameter as an explicit argument.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Time Constants
"""
Length of a Julian day. Units: *s*
"""
JULIAN_DAY = 86400.0

"""
Length of a Julian year. Units: *days*
"""
JULIAN_YEAR_DAYS = 365.25

"""
Length of a Julian year. Units: *s*
"""
JULIAN_YEAR = 3.15576e7

# Physical Constants
"""
Newtonian constant of gravitation. Units: *m^3 kg^-1 s^-2*

References:

1. W. J. Larson and J. R. Wertz, *Space Mission Analysis and Design (3rd Ed.)*, 1999
"""
GRAVITATIONAL_CONSTANT = 6.67259e-11

"""
Speed of light in vacuum. Units: *m/s*

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2010
"""
C_LIGHT = 299792458.0  # [m/s] Exact definition Vallado

"""
Astronomical Unit. Equal to the mean distance of the Earth from the sun.
TDB-compatible value. Units: *m*

References:

1. P. Gerard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11  # [m] Astronomical Unit IAU 2010

# Earth Constants
"""
Earth's equatorial radius. [m]

References:

1. GGM05s Gravity Model
"""
R_EARTH = 6.378136300e6  # [m] GGM05s Value

"""
Earth's Gravitational constant [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_EARTH = 3.986004415e14  # [m^3/s^2] GGM05s Value

"""
Earth's first zonal harmonic. [dimensionless]

References:

1. GGM05s Gravity Model.
"""
J2_EARTH = 0.0010826358191967  # [] GGM05s value

# Venus Constants
"""
Gravitational constant of Venus. [m^3/s^2]

References:

1. NASA Orbit Determination Toolbox (ODTBX), 2012.
"""
GM_VENUS = 3.2485504415e14

# Sun Constants
"""
Gravitational constant of the Sun. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_SUN = 132712440041.939400 * 1e9  # Gravitational constant of the Sun

"""
Nominal solar radiation pressure at 1 AU. [N/m^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
P_SUN = 4.560e-6  # [N/m^2] (~1367 W/m^2) Solar radiation pressure at 1 AU

"""
Gravitational constant of the Moon. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_MOON = 4902.800066 * 1e9
