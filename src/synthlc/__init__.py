__all__ = [
    "constants",
    "core",
    "light_curves",
    "orbits",
    "CircularOrbit",
    "ModelParameters",
    "generate_synthetic",
    "light_curve",
]

from synthlc import (
    constants as constants,
    core as core,
    light_curves as light_curves,
    orbits as orbits,
)
from synthlc.light_curves.small_planet import (
    generate_synthetic as generate_synthetic,
    light_curve as light_curve,
)
from synthlc.model import ModelParameters as ModelParameters
from synthlc.orbits.circular import CircularOrbit as CircularOrbit
from synthlc.synthlc_version import __version__ as __version__
