"""Sky-plane geometry of a planet on a circular orbit"""

from typing import TYPE_CHECKING

import equinox as eqx
import jax.numpy as jnp

from synthlc import constants
from synthlc.types import ArrayLike, Scalar

if TYPE_CHECKING:
    from synthlc.model import ModelParameters


class CircularOrbit(eqx.Module):
    """A circular orbit parameterized in units of the stellar radius

    Times are Julian days, and the planet is at inferior conjunction (the center of
    the transit) at ``epoch``.

    Args:
        period: Orbital period [days].
        epoch: Time of a reference transit [days].
        distance_ratio: Orbital radius in units of the stellar radius.
        cos_inclination: Cosine of the orbital inclination.
        radius_ratio (Optional[Scalar]): Ratio of the planet radius to the stellar
            radius. Default is 0.
    """

    period: Scalar
    epoch: Scalar
    distance_ratio: Scalar
    cos_inclination: Scalar
    radius_ratio: Scalar

    def __init__(
        self,
        *,
        period: Scalar,
        epoch: Scalar,
        distance_ratio: Scalar,
        cos_inclination: Scalar,
        radius_ratio: Scalar | None = None,
    ):
        self.period = period
        self.epoch = epoch
        self.distance_ratio = distance_ratio
        self.cos_inclination = cos_inclination
        self.radius_ratio = 0.0 if radius_ratio is None else radius_ratio

    @classmethod
    def from_model(cls, model: "ModelParameters") -> "CircularOrbit":
        return cls(
            period=model.period,
            epoch=model.epoch,
            distance_ratio=model.distance_ratio,
            cos_inclination=model.cos_inclination,
            radius_ratio=model.radius_ratio,
        )

    @property
    def period_seconds(self) -> Scalar:
        return self.period * constants.seconds_per_day

    @property
    def angular_frequency(self) -> Scalar:
        """The orbital angular frequency [rad / s]"""
        return 2.0 * jnp.pi / self.period_seconds

    def elapsed_seconds(self, time: ArrayLike) -> Scalar:
        """The time since ``epoch`` in seconds"""
        return (time - self.epoch) * constants.seconds_per_day

    def separation(self, time: ArrayLike) -> Scalar:
        """The projected center-to-center distance in units of the stellar radius

        Args:
            time (ArrayLike): The time [days]
        """
        angle = self.angular_frequency * self.elapsed_seconds(time)
        x2 = jnp.square(jnp.sin(angle))
        y2 = jnp.square(self.cos_inclination * jnp.cos(angle))
        return self.distance_ratio * jnp.sqrt(x2 + y2)

    def phase(self, time: ArrayLike) -> Scalar:
        """The orbital phase folded into the range ``(-0.5, 0.5]``

        The fractional part of the number of orbits since ``epoch`` is taken with the
        sign of its argument and then made positive, so phases before ``epoch`` are
        mirrored onto positive values.

        Args:
            time (ArrayLike): The time [days]
        """
        orbits = self.elapsed_seconds(time) / self.period_seconds
        phase = jnp.fabs(jnp.fmod(orbits, 1.0))
        return jnp.where(phase > 0.5, phase - 1.0, phase)

    def in_transit_window(self, time: ArrayLike) -> Scalar:
        """Whether ``time`` falls within a quarter orbit of a primary transit

        Occultations are only evaluated inside this window, which excludes secondary
        eclipses.
        """
        phase = self.phase(time)
        return jnp.logical_and(phase > -0.25, phase < 0.25)
