"""Physical constants in SI units"""

__all__ = ["AU", "R_sun", "R_jup", "seconds_per_day", "radians_per_degree"]

import math

AU = 1.495978707e11
"""Astronomical unit [m]"""

R_sun = 6.957e8
"""Nominal solar radius (IAU 2015 Resolution B3) [m]"""

R_jup = 7.1492e7
"""Nominal equatorial Jupiter radius (IAU 2015 Resolution B3) [m]"""

seconds_per_day = 86400.0

radians_per_degree = math.pi / 180.0
