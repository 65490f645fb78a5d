__all__ = ["CircularOrbit"]

from synthlc.orbits.circular import CircularOrbit as CircularOrbit
