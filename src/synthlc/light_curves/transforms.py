"""Light curves derived from :func:`synthlc.light_curves.small_planet.light_curve`

Both transforms are built from a :class:`synthlc.model.ModelParameters`, and take the
period, epoch, and transit window from its circular orbit.
"""

__all__ = ["exposure_stencil", "integrated_light_curve", "interpolated_light_curve"]

import jax.numpy as jnp
import numpy as np

from synthlc.core.limb_dark import DEFAULT_STEP
from synthlc.light_curves.small_planet import light_curve
from synthlc.light_curves.types import LightCurveFunc
from synthlc.light_curves.utils import vectorize
from synthlc.model import ModelParameters
from synthlc.types import Array, Scalar


def exposure_stencil(
    order: int = 0, num_samples: int = 7
) -> tuple[np.ndarray, np.ndarray]:
    """The sample offsets and weights used to average the flux over one exposure

    Order ``0`` samples the midpoints of ``num_samples`` equal sub-exposures with equal
    weights, which is the "resampling" scheme of `Kipping (2010)
    <https://arxiv.org/abs/1004.3741>`_. Orders ``1`` and ``2`` sample a regular grid
    including both ends of the exposure, with the weights of the trapezoid rule and
    Simpson's rule respectively.

    Args:
        order (int): The order of the scheme, ``0``, ``1``, or ``2``
        num_samples (int): The number of samples per exposure; rounded up to an odd
            number, and to at least 3 for orders ``1`` and ``2``

    Returns:
        The offsets from the center of the exposure, in units of the exposure time, and
        the matching weights, which sum to one
    """
    num_samples = int(num_samples)
    if num_samples < 1:
        raise ValueError(
            f"'num_samples' must be a positive integer; got {num_samples}"
        )
    num_samples += 1 - num_samples % 2
    if order != 0:
        # Both ends and the midpoint
        num_samples = max(num_samples, 3)

    if order == 0:
        offsets = (np.arange(num_samples) + 0.5) / num_samples - 0.5
        weights = np.ones(num_samples)
    elif order == 1:
        offsets = np.linspace(-0.5, 0.5, num_samples)
        weights = np.full(num_samples, 2.0)
        weights[[0, -1]] = 1.0
    elif order == 2:
        offsets = np.linspace(-0.5, 0.5, num_samples)
        weights = np.where(np.arange(num_samples) % 2 == 1, 4.0, 2.0)
        weights[[0, -1]] = 1.0
    else:
        raise ValueError(f"The exposure stencil order must be 0, 1, or 2; got {order}")

    return offsets, weights / weights.sum()


def integrated_light_curve(
    model: ModelParameters,
    exposure_time: Scalar,
    *,
    order: int = 0,
    num_samples: int = 7,
    dr: float = DEFAULT_STEP,
) -> LightCurveFunc:
    """The light curve of ``model`` averaged over finite exposures

    Each exposure has a length of ``exposure_time`` and is centered on the input
    time. The light curve has kinks at the contact points, so the number of samples
    usually matters more for accuracy than the order; see :func:`exposure_stencil`.

    Args:
        model (ModelParameters): The parameters of the star-planet system
        exposure_time (Scalar): The exposure time [days]
        order (int): The order of the integration scheme
        num_samples (int): The number of light curve evaluations per exposure
        dr (float): The quadrature step size passed to the light curve

    Returns:
        A function which takes the time in Julian days as input, with any shape, and
        returns the exposure averaged flux with the same shape
    """
    if jnp.ndim(exposure_time) != 0:
        raise ValueError(
            "The exposure time passed to 'integrated_light_curve' has shape "
            f"{jnp.shape(exposure_time)}, but a scalar was expected; "
            "to use different exposure times, build one light curve per exposure time"
        )

    offsets, weights = exposure_stencil(order, num_samples)
    flux = light_curve(model, dr=dr)

    @vectorize
    def integrated_light_curve_impl(time: Scalar) -> Array:
        samples = flux(time + exposure_time * offsets)
        return jnp.dot(jnp.asarray(weights, dtype=samples.dtype), samples)

    return integrated_light_curve_impl


def interpolated_light_curve(
    model: ModelParameters, *, num_samples: int, dr: float = DEFAULT_STEP
) -> LightCurveFunc:
    """The light curve of ``model`` interpolated from a pre-computed grid

    The flux depends on the time only through the separation, which is periodic and
    symmetric about ``epoch``, and through the transit window. It is therefore fixed
    by its values over the first quarter orbit after ``epoch``. These are computed once
    on a regular grid in phase, and the returned function interpolates them linearly
    at the absolute phase of each input time.

    Args:
        model (ModelParameters): The parameters of the star-planet system
        num_samples (int): The number of points in the grid spanning a quarter orbit
        dr (float): The quadrature step size passed to the light curve

    Returns:
        A function which takes the time in Julian days as input, with any shape, and
        returns the interpolated flux with the same shape
    """
    orbit = model.orbit
    phase_grid = jnp.linspace(0.0, 0.25, num_samples)
    flux_grid = light_curve(model, dr=dr)(orbit.epoch + orbit.period * phase_grid)

    @vectorize
    def interpolated_light_curve_impl(time: Scalar) -> Array:
        flux = jnp.interp(jnp.abs(orbit.phase(time)), phase_grid, flux_grid)
        return jnp.where(orbit.in_transit_window(time), flux, jnp.ones_like(flux))

    return interpolated_light_curve_impl
