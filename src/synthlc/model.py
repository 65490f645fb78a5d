"""The parameters of a star-planet system"""

__all__ = ["ModelParameters"]

import equinox as eqx
import jax.numpy as jnp

from synthlc import constants
from synthlc.orbits.circular import CircularOrbit
from synthlc.types import Array, Scalar


class ModelParameters(eqx.Module):
    """The physical parameters of a transiting planet on a circular orbit

    This is a JAX Pytree, so a model can be passed through ``jax.jit`` and a stack
    of models can be mapped over with ``jax.vmap``.

    Args:
        a: Semi-major axis [AU].
        rs: Stellar radius [solar radii].
        rp: Planetary radius [Jupiter radii].
        period: Orbital period [days].
        i: Orbital inclination [degrees], where 90 is edge on.
        epoch (Optional[Scalar]): Time of a reference transit [Julian days].
            Default is 0.
        c1, c2, c3, c4 (Optional[Scalar]): The coefficients of the non-linear limb
            darkening law. Default is 0, for a uniform disk.
    """

    a: Scalar
    rs: Scalar
    rp: Scalar
    period: Scalar
    i: Scalar
    epoch: Scalar
    c1: Scalar
    c2: Scalar
    c3: Scalar
    c4: Scalar

    def __init__(
        self,
        *,
        a: Scalar,
        rs: Scalar,
        rp: Scalar,
        period: Scalar,
        i: Scalar,
        epoch: Scalar = 0.0,
        c1: Scalar = 0.0,
        c2: Scalar = 0.0,
        c3: Scalar = 0.0,
        c4: Scalar = 0.0,
    ):
        self.a = a
        self.rs = rs
        self.rp = rp
        self.period = period
        self.i = i
        self.epoch = epoch
        self.c1 = c1
        self.c2 = c2
        self.c3 = c3
        self.c4 = c4

    @property
    def distance_ratio(self) -> Scalar:
        """The orbital radius in units of the stellar radius"""
        return self.a * constants.AU / (self.rs * constants.R_sun)

    @property
    def radius_ratio(self) -> Scalar:
        """The planet radius in units of the stellar radius"""
        return (self.rp * constants.R_jup) / (self.rs * constants.R_sun)

    @property
    def angular_frequency(self) -> Scalar:
        return 2.0 * jnp.pi / (self.period * constants.seconds_per_day)

    @property
    def cos_inclination(self) -> Scalar:
        return jnp.cos(self.i * constants.radians_per_degree)

    @property
    def limb_dark_coeffs(self) -> Array:
        """The coefficients ``[c0, c1, c2, c3, c4]`` with ``c0 = 1 - c1 - c2 - c3 - c4``

        These are stacked along the last axis.
        """
        c0 = 1.0 - self.c1 - self.c2 - self.c3 - self.c4
        return jnp.stack(
            jnp.broadcast_arrays(c0, self.c1, self.c2, self.c3, self.c4), axis=-1
        )

    @property
    def orbit(self) -> CircularOrbit:
        return CircularOrbit.from_model(self)
