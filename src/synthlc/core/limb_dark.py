"""This module provides the functions needed to compute the flux occulted by a small
planet transiting a star with the four parameter non-linear limb darkening law of
`Claret (2000) <https://ui.adsabs.harvard.edu/abs/2000A%26A...363.1081C>`_, using the
"small planet" approximation from section 5 of `Mandel & Agol (2002)
<https://arxiv.org/abs/astro-ph/0210099>`_.

Under this approximation the stellar intensity is taken to be constant under the disk
of the planet, and equal to its mean over the annulus covered by the planet. That mean
is computed using a fixed step rectangle rule in the normalized radial coordinate.
"""

__all__ = [
    "DEFAULT_STEP",
    "intensity",
    "intensity_from_coeffs",
    "omega",
    "integrated_intensity",
    "integrated_intensity_from_coeffs",
    "occulted_flux",
]

from functools import partial

import jax
import jax.numpy as jnp

from synthlc.types import Array, ArrayLike

DEFAULT_STEP = 1e-3
"""The quadrature step used when integrating the intensity, in units of the stellar
radius"""


def intensity(
    r: ArrayLike, c1: ArrayLike, c2: ArrayLike, c3: ArrayLike, c4: ArrayLike
) -> Array:
    """The limb darkened intensity at normalized radius ``r`` on the stellar disk

    .. math::

        I(r) = 1 - \\sum_{n=1}^4 c_n\\,(1 - \\mu^{n/2})

    where :math:`\\mu = (1 - r^2)^{1/2}`. The intensity at the center of the disk is
    one. The domain ``0 <= r <= 1`` is not enforced, and values of ``r`` with
    ``|r| > 1`` produce ``nan``.

    Args:
        r (ArrayLike): The radial coordinate in units of the stellar radius
        c1, c2, c3, c4 (ArrayLike): The non-linear limb darkening coefficients

    Returns:
        The intensity, broadcast over the input shapes
    """
    mu2 = 1.0 - jnp.square(r)
    result = 1.0
    result -= c1 * (1.0 - jnp.power(mu2, 1.0 / 4.0))
    result -= c2 * (1.0 - jnp.power(mu2, 2.0 / 4.0))
    result -= c3 * (1.0 - jnp.power(mu2, 3.0 / 4.0))
    result -= c4 * (1.0 - jnp.power(mu2, 4.0 / 4.0))
    return result


def intensity_from_coeffs(r: ArrayLike, coeffs: ArrayLike) -> Array:
    """Like :func:`intensity`, but with packed coefficients

    The first four entries of ``coeffs`` are passed to the law in order, and the last
    one is ignored. With the packing ``[c0, c1, c2, c3, c4]`` used by
    :func:`occulted_flux` this evaluates ``intensity(r, c0, c1, c2, c3)``, which is
    what the reference light curves are computed with.

    Args:
        r (ArrayLike): The radial coordinate in units of the stellar radius
        coeffs (ArrayLike): An array with a trailing dimension of size 5

    Returns:
        The intensity at ``r``
    """
    coeffs = _check_coeffs(coeffs, "intensity_from_coeffs")
    return intensity(r, *_unpack(coeffs))


def omega(coeffs: ArrayLike) -> Array:
    """The normalization of the disk integrated intensity

    .. math::

        \\Omega = \\sum_{n=0}^4 \\frac{c_n}{n + 4}

    Args:
        coeffs (ArrayLike): The coefficients ``[c0, c1, c2, c3, c4]``, where
            ``c0 = 1 - c1 - c2 - c3 - c4``
    """
    coeffs = _check_coeffs(coeffs, "omega")
    result = jnp.zeros_like(coeffs[..., 0])
    for n in range(5):
        result += coeffs[..., n] / (n + 4.0)
    return result


@jnp.vectorize
def integrated_intensity(
    dr: ArrayLike,
    c1: ArrayLike,
    c2: ArrayLike,
    c3: ArrayLike,
    c4: ArrayLike,
    r_low: ArrayLike,
    r_high: ArrayLike,
) -> Array:
    """Integrate the intensity over an annulus of the stellar disk

    This approximates

    .. math::

        \\int_{r_\\mathrm{low}}^{r_\\mathrm{high}} I(r)\\,2\\,r\\,\\mathrm{d}r

    with the rectangle rule, evaluating the integrand at ``r_low + k * dr`` for every
    ``k >= 0`` such that this point does not exceed ``r_high``. The number of steps is
    computed up front rather than by accumulating ``dr``, so it does not depend on
    rounding, and no sample is taken beyond ``r_high``. If ``r_high < r_low`` the
    result is zero.

    Args:
        dr (ArrayLike): The step size
        c1, c2, c3, c4 (ArrayLike): The non-linear limb darkening coefficients
        r_low (ArrayLike): The lower integration limit
        r_high (ArrayLike): The upper integration limit
    """
    num_steps = _num_steps(dr, r_low, r_high)
    return _rectangle_sum(dr, c1, c2, c3, c4, r_low, r_high, num_steps)


def integrated_intensity_from_coeffs(
    dr: ArrayLike, coeffs: ArrayLike, r_low: ArrayLike, r_high: ArrayLike
) -> Array:
    """Like :func:`integrated_intensity`, but with packed coefficients

    As in :func:`intensity_from_coeffs`, the law takes its coefficients from the first
    four entries of ``coeffs``.

    Args:
        dr (ArrayLike): The step size
        coeffs (ArrayLike): An array with a trailing dimension of size 5
        r_low (ArrayLike): The lower integration limit
        r_high (ArrayLike): The upper integration limit
    """
    coeffs = _check_coeffs(coeffs, "integrated_intensity_from_coeffs")
    return integrated_intensity(dr, *_unpack(coeffs), r_low, r_high)


def occulted_flux(
    coeffs: ArrayLike, z: ArrayLike, p: ArrayLike, *, dr: float = DEFAULT_STEP
) -> Array:
    """Compute the relative flux of a star partially covered by a small planet

    The geometry falls into one of three regimes:

    - no overlap (``z >= 1 + p``): the flux is exactly one,
    - the planet fully inside the disk (``z <= 1 - p``): the mean intensity is
      taken over the annulus ``[z - p, z + p]``,
    - the planet on the limb: the mean intensity is taken over ``[z - p, 1]`` and
      multiplied by the area of the overlapping region.

    The mean intensity uses the packed form of the law, so the annulus is integrated
    with ``coeffs[..., :4]`` (see :func:`integrated_intensity_from_coeffs`), while
    :func:`omega` uses all five coefficients.

    Degenerate geometries are not special cased; for example ``z = 0`` divides by
    zero, so the result is not finite.

    Args:
        coeffs (ArrayLike): The coefficients ``[c0, c1, c2, c3, c4]``
        z (ArrayLike): The center-to-center sky separation in units of the stellar
            radius
        p (ArrayLike): The radius ratio between the planet and the star
        dr (float): The quadrature step size

    Returns:
        The flux relative to the unocculted star
    """
    coeffs = _check_coeffs(coeffs, "occulted_flux")
    return _occulted_flux_impl(coeffs, z, p, dr)


@partial(jnp.vectorize, signature="(5),(),()->()", excluded={3})
def _occulted_flux_impl(coeffs: Array, z: Array, p: Array, dr: float) -> Array:
    c1, c2, c3, c4 = _unpack(coeffs)
    norm = omega(coeffs)
    p2 = jnp.square(p)

    full_occ = jnp.less_equal(z, 1 - p)
    no_occ = jnp.logical_and(~full_occ, jnp.greater_equal(z, 1 + p))

    # A single quadrature covers both overlapping regimes
    r_low = z - p
    r_high = jnp.where(full_occ, z + p, jnp.ones_like(z))
    num_steps = jnp.where(no_occ, 0, _num_steps(dr, r_low, r_high))
    integral = _rectangle_sum(dr, c1, c2, c3, c4, r_low, r_high, num_steps)

    full_integral = integral * (1.0 / (4.0 * z * p))
    full_flux = 1.0 - (p2 * full_integral / 4.0 / norm)

    partial_integral = integral * (1.0 / (1 - jnp.square(r_low)))
    sqrt_term = jnp.sqrt(p2 - jnp.square(z - 1.0)) * (z - 1.0)
    acos_term = p2 * jnp.arccos((z - 1.0) / p)
    partial_flux = 1.0 - (
        partial_integral * (acos_term - sqrt_term) / (4.0 * jnp.pi * norm)
    )

    flux = jnp.where(no_occ, jnp.ones_like(partial_flux), partial_flux)
    return jnp.where(full_occ, full_flux, flux)


def _num_steps(dr: ArrayLike, r_low: ArrayLike, r_high: ArrayLike) -> Array:
    span = jnp.asarray(r_high) - jnp.asarray(r_low)
    valid = jnp.logical_and(jnp.isfinite(span), span >= 0)
    span = jnp.where(valid, span, jnp.zeros_like(span))
    return jnp.where(valid, jnp.floor(span / dr).astype(jnp.int32) + 1, 0)


def _rectangle_sum(
    dr: ArrayLike,
    c1: ArrayLike,
    c2: ArrayLike,
    c3: ArrayLike,
    c4: ArrayLike,
    r_low: ArrayLike,
    r_high: ArrayLike,
    num_steps: ArrayLike,
) -> Array:
    dtype = jnp.result_type(dr, c1, c2, c3, c4, r_low, float)

    def step(k, total):
        r = jnp.minimum(r_low + k * dr, r_high)
        return total + (intensity(r, c1, c2, c3, c4) * dr * 2.0 * r).astype(dtype)

    return jax.lax.fori_loop(0, num_steps, step, jnp.zeros((), dtype=dtype))


def _check_coeffs(coeffs: ArrayLike, name: str) -> Array:
    coeffs = jnp.asarray(coeffs)
    if coeffs.ndim == 0:
        raise ValueError(
            f"The limb darkening coefficients passed to '{name}' must be an array "
            "with a trailing dimension of size 5; got a scalar"
        )
    if coeffs.shape[-1] < 5:
        raise IndexError(
            f"'{name}' requires the 5 limb darkening coefficients "
            f"[c0, c1, c2, c3, c4]; got {coeffs.shape[-1]}"
        )
    if coeffs.shape[-1] != 5:
        raise ValueError(
            f"The limb darkening coefficients passed to '{name}' must have a trailing "
            f"dimension of size 5; got shape {coeffs.shape}"
        )
    return coeffs


def _unpack(coeffs: Array) -> tuple[Array, Array, Array, Array]:
    return coeffs[..., 0], coeffs[..., 1], coeffs[..., 2], coeffs[..., 3]
