import numpy as np
import pytest

from TRX.LIMITER import available_mass, limit, limit_outflux, scale_factor


def test_available_mass_subtracts_committed_sinks():
    assert available_mass(100.0, 2.5, 4.0) == pytest.approx(90.0)


def test_available_mass_never_negative():
    assert available_mass(10.0, 20.0, 1.0) == 0.0


@pytest.mark.parametrize("potential", [0.0, 1.0e-12, 5.0, 999.999, 1000.0])
def test_scale_is_exactly_one_when_potential_fits(potential):
    assert scale_factor(potential, 1000.0) == 1.0


def test_outflux_untouched_when_potential_equals_available():
    outflux = np.array([1.0, 2.0, 3.5])
    before = outflux.copy()
    scale = limit_outflux(outflux, 2.0, 13.0)
    assert scale == 1.0
    assert np.array_equal(outflux, before)


def test_outflux_scaled_proportionally():
    outflux = np.array([30.0, 20.0, 0.0])
    scale = limit_outflux(outflux, 1.0, 40.0)
    assert scale == pytest.approx(0.8)
    assert outflux == pytest.approx([24.0, 16.0, 0.0])
    assert outflux.sum() == pytest.approx(40.0)


def test_outflux_scaled_with_timestep():
    outflux = np.array([10.0, 10.0])
    limit_outflux(outflux, 10.0, 50.0)
    assert outflux.sum() * 10.0 == pytest.approx(50.0)


def test_limit_single_outflux():
    assert limit(50.0, 1.0, 40.0) == pytest.approx(40.0)
    assert limit(50.0, 1.0, 1000.0) == 50.0
    assert limit(5.0, 1.0, 0.0) == 0.0
