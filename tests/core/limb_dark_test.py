import jax
import jax.numpy as jnp
import numpy as np
import pytest

from synthlc.core.limb_dark import (
    intensity,
    intensity_from_coeffs,
    integrated_intensity,
    integrated_intensity_from_coeffs,
    occulted_flux,
    omega,
)
from synthlc.test_utils import assert_allclose

COEFFS = [
    [0.0, 0.0, 0.0, 0.0],
    [0.3, 0.2, 0.1, 0.05],
    [0.5, 0.0, 0.0, 0.0],
    [0.2, 0.1, 0.1, 0.05],
]


def _packed(c):
    return jnp.array([1.0 - sum(c), *c])


@pytest.mark.parametrize("c", COEFFS)
def test_intensity_center_and_limb(c):
    assert_allclose(intensity(0.0, *c), 1.0)
    assert_allclose(intensity(1.0, *c), 1.0 - sum(c), atol=1e-7)


def test_intensity_matches_law():
    c = np.array([0.3, 0.2, 0.1, 0.05])
    r = np.linspace(0, 1, 11)
    mu = np.sqrt(1 - r**2)
    expect = 1 - sum(c[n] * (1 - mu ** (0.5 * (n + 1))) for n in range(4))
    assert_allclose(intensity(r, *c), expect, atol=1e-6)


def test_intensity_outside_disk_is_nan():
    assert np.isnan(intensity(1.5, 0.3, 0.2, 0.1, 0.05))


@pytest.mark.parametrize("c", COEFFS)
def test_intensity_from_coeffs(c):
    # The law takes the first four packed entries, c0 through c3
    r = jnp.linspace(0, 1, 25)
    coeffs = _packed(c)
    assert_allclose(intensity_from_coeffs(r, coeffs), intensity(r, *coeffs[:4]))


def test_intensity_from_coeffs_ignores_last_entry():
    r = jnp.linspace(0, 1, 25)
    coeffs = jnp.array([0.3, 0.2, 0.1, 0.05, 0.0])
    assert_allclose(
        intensity_from_coeffs(r, coeffs),
        intensity_from_coeffs(r, coeffs.at[4].set(0.8)),
    )
    assert_allclose(intensity_from_coeffs(r, coeffs), intensity(r, 0.3, 0.2, 0.1, 0.05))


def test_omega():
    assert_allclose(omega(jnp.array([1.0, 0.0, 0.0, 0.0, 0.0])), 0.25)
    coeffs = np.array([0.35, 0.3, 0.2, 0.1, 0.05])
    expect = sum(coeffs[n] / (n + 4) for n in range(5))
    assert_allclose(omega(coeffs), expect)


@pytest.mark.parametrize(
    "func",
    [
        omega,
        lambda coeffs: intensity_from_coeffs(0.5, coeffs),
        lambda coeffs: integrated_intensity_from_coeffs(1e-3, coeffs, 0.1, 0.2),
        lambda coeffs: occulted_flux(coeffs, 0.5, 0.1),
    ],
)
def test_coeffs_shape_errors(func):
    with pytest.raises(IndexError):
        func(jnp.array([1.0, 0.0, 0.0, 0.0]))
    with pytest.raises(IndexError):
        func(jnp.array([]))
    with pytest.raises(ValueError):
        func(jnp.zeros(6))


def test_integrated_intensity_includes_upper_limit():
    # With a step that divides the range exactly, both limits are sampled
    dr = 0.0625
    calc = integrated_intensity(dr, 0.0, 0.0, 0.0, 0.0, 0.25, 0.5)
    r = np.array([0.25, 0.3125, 0.375, 0.4375, 0.5])
    assert_allclose(calc, np.sum(2 * r * dr))


def test_integrated_intensity_empty_range():
    assert integrated_intensity(1e-3, 0.3, 0.2, 0.1, 0.05, 0.6, 0.4) == 0.0


def test_integrated_intensity_uniform():
    r_low = np.array([0.0, 0.1, 0.35, 0.75])
    r_high = r_low + 0.2
    calc = integrated_intensity(1e-3, 0.0, 0.0, 0.0, 0.0, r_low, r_high)
    assert calc.shape == r_low.shape
    assert_allclose(calc, r_high**2 - r_low**2, atol=2e-3)


@pytest.mark.parametrize("c", COEFFS)
def test_integrated_intensity_compare_quad(c):
    integrate = pytest.importorskip("scipy.integrate")

    def integrand(r):
        return float(intensity(r, *c)) * 2 * r

    for r_low, r_high in [(0.0, 1.0), (0.1, 0.9), (0.75, 0.95)]:
        expect, _ = integrate.quad(integrand, r_low, r_high)
        calc = integrated_intensity(1e-3, *c, r_low, r_high)
        assert_allclose(calc, expect, atol=5e-3)


@pytest.mark.parametrize("c", COEFFS)
def test_integrated_intensity_from_coeffs(c):
    coeffs = _packed(c)
    calc = integrated_intensity_from_coeffs(1e-3, coeffs, 0.2, 0.7)
    expect = integrated_intensity(1e-3, *coeffs[:4], 0.2, 0.7)
    assert_allclose(calc, expect)


@pytest.mark.parametrize("c", COEFFS)
def test_no_overlap(c):
    p = 0.1
    z = jnp.array([1 + p + 1e-3, 1.5, 2.0, 10.0])
    flux = occulted_flux(_packed(c), z, p)
    np.testing.assert_array_equal(flux, np.ones(4))


@pytest.mark.parametrize("c", COEFFS)
def test_full_overlap_depth(c):
    # For a small planet the depth is the covered area times the local intensity of
    # the packed law, normalized by omega
    p = 0.1
    z = 0.5
    coeffs = _packed(c)
    flux = occulted_flux(coeffs, z, p)
    expect = 1 - p**2 * intensity_from_coeffs(z, coeffs) / (4 * omega(coeffs))
    assert_allclose(flux, expect, atol=2e-4)


def test_constant_law_depth():
    # With the first four entries zero the intensity is one everywhere
    p = 0.1
    coeffs = jnp.array([0.0, 0.0, 0.0, 0.0, 2.0])
    flux = occulted_flux(coeffs, 0.5, p)
    assert_allclose(flux, 1 - p**2, atol=1e-4)


@pytest.mark.parametrize("c", COEFFS)
def test_deeper_at_center(c):
    p = 0.1
    center = occulted_flux(_packed(c), 0.2, p)
    limb = occulted_flux(_packed(c), 0.8, p)
    assert center < limb


@pytest.mark.parametrize("c", COEFFS)
def test_zero_separation_is_not_finite(c):
    # The full overlap normalization divides by z
    flux = occulted_flux(_packed(c), 0.0, 0.1)
    assert not np.isfinite(flux)


@pytest.mark.skipif(
    not jax.config.jax_enable_x64,
    reason="Resolving the contact points requires double precision",
)
@pytest.mark.parametrize("c", COEFFS)
@pytest.mark.parametrize("p", [0.0567, 0.1234])
def test_continuous_at_contacts(c, p):
    coeffs = _packed(c)
    eps = 1e-6
    for contact in [1 - p, 1 + p]:
        z = jnp.array([contact - eps, contact + eps])
        inside, outside = occulted_flux(coeffs, z, p)
        assert_allclose(inside, outside, atol=1e-5)


@pytest.mark.parametrize("c", COEFFS)
def test_monotonic_ingress(c):
    p = 0.1234
    z = jnp.linspace(1 + p + 1e-3, p + 0.05, 200)
    flux = occulted_flux(_packed(c), z, p)
    assert np.all(np.isfinite(flux))
    assert np.all(np.diff(flux) <= 1e-4)
    assert flux[-1] < 1 - 0.5 * p**2


def test_occulted_flux_jit_vmap():
    coeffs = _packed([0.3, 0.2, 0.1, 0.05])
    z = jnp.linspace(0.1, 1.2, 50)
    expect = occulted_flux(coeffs, z, 0.1)
    calc = jax.jit(jax.vmap(lambda z_: occulted_flux(coeffs, z_, 0.1)))(z)
    assert_allclose(calc, expect)
