"""Synthetic transit light curves in the small planet approximation"""

__all__ = ["light_curve", "generate_synthetic"]

import logging
from functools import cache

import jax
import jax.numpy as jnp

from synthlc.core.limb_dark import DEFAULT_STEP, occulted_flux
from synthlc.light_curves.types import LightCurveFunc
from synthlc.light_curves.utils import vectorize
from synthlc.model import ModelParameters
from synthlc.types import Array, ArrayLike, Scalar

logger = logging.getLogger(__name__)


def light_curve(model: ModelParameters, *, dr: float = DEFAULT_STEP) -> LightCurveFunc:
    """Compute the light curve of a star transited by a small planet

    The flux is only evaluated within a quarter of an orbit of each primary transit,
    and is exactly one elsewhere; secondary eclipses are not modeled. See
    :func:`synthlc.core.limb_dark.occulted_flux` for the occultation itself.

    Args:
        model (ModelParameters): The parameters of the star-planet system
        dr (float): The quadrature step size used to average the stellar intensity
            under the planet, in units of the stellar radius

    Returns:
        A function which takes the time in Julian days as input, with any shape, and
        returns the relative flux with the same shape
    """
    orbit = model.orbit
    coeffs = model.limb_dark_coeffs
    radius_ratio = orbit.radius_ratio

    @vectorize
    def light_curve_impl(time: Scalar) -> Array:
        if jnp.ndim(time) != 0:
            raise ValueError(
                "The time passed to 'light_curve' has shape "
                f"{jnp.shape(time)}, but a scalar was expected; "
                "this shouldn't typically happen so please open an issue "
                "demonstrating the problem"
            )

        z = orbit.separation(time)
        flux = occulted_flux(coeffs, z, radius_ratio, dr=dr)
        return jnp.where(orbit.in_transit_window(time), flux, jnp.ones_like(flux))

    return light_curve_impl


def generate_synthetic(timestamps: ArrayLike, model: ModelParameters) -> Array:
    """Generate the synthetic light curve of ``model`` at the given times

    Args:
        timestamps (ArrayLike): A one dimensional array of times in Julian days
        model (ModelParameters): The parameters of the star-planet system

    Returns:
        The relative flux at each timestamp, in the same order. Degenerate parameters,
        such as a planet crossing the exact center of the star, give non-finite or
        non-physical values rather than raising.
    """
    _check_precision()
    timestamps = jnp.asarray(timestamps)
    if timestamps.ndim != 1:
        raise ValueError(
            "The timestamps passed to 'generate_synthetic' must be one dimensional; "
            f"got shape {timestamps.shape}"
        )
    logger.debug("Generating a synthetic light curve at %d times", timestamps.shape[0])
    if timestamps.shape[0] == 0:
        return jnp.zeros(0, dtype=jnp.result_type(timestamps, float))
    return _generate_synthetic(timestamps, model)


@jax.jit
def _generate_synthetic(timestamps: Array, model: ModelParameters) -> Array:
    return light_curve(model)(timestamps)


@cache
def _check_precision() -> None:
    if not jax.config.jax_enable_x64:
        logger.warning(
            "Double precision is disabled, so synthetic light curves are computed "
            "in single precision; enable it with "
            "jax.config.update('jax_enable_x64', True) to match reference results"
        )
