__all__ = ["transforms", "small_planet_light_curve", "generate_synthetic"]

from synthlc.light_curves import transforms as transforms
from synthlc.light_curves.small_planet import (
    generate_synthetic as generate_synthetic,
    light_curve as small_planet_light_curve,
)
