import pytest

from TRX.CONCENTRATION import ROUNDOFF, STABLE, UNSTABLE, concentration, integrate
from TRX.main import messages, step
from TRX.topology import Layer, Source

from .helpers import make_chemicals, make_overland, make_sim


def test_integrate_stable():
    c, mass, value, status = integrate(100.0, 0.0, 50.0, 1.0, 100.0, 1.0e-7)
    assert (c, mass, value, status) == pytest.approx((0.5, 50.0, 50.0, STABLE))


def test_integrate_roundoff_clamped():
    c, mass, value, status = integrate(1.0, 0.0, 1.0 + 1.0e-9, 1.0, 1.0, 1.0e-7)
    assert status == ROUNDOFF
    assert c == 0.0 and mass == 0.0 and value < 0.0


def test_integrate_unstable_clamped():
    c, mass, value, status = integrate(1.0, 0.0, 2.0, 1.0, 1.0, 1.0e-7)
    assert status == UNSTABLE
    assert c == 0.0 and mass == 0.0
    assert value == pytest.approx(-1.0)


def test_integrate_vanishing_volume():
    c, mass, _, status = integrate(5.0, 1.0, 0.0, 1.0, 0.0, 1.0e-7)
    assert status == STABLE
    assert c == 0.0 and mass == 6.0


def test_negative_inflow_reported_once():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, mask=((True, True),))
    domain.conc[0, 0, 0] = 10.0
    domain.inflow[1, Source.WEST] = -5.0
    sim = make_sim(chemicals, overland=domain)

    msg = messages()
    step(sim, msg)

    assert len(sim.instabilities) == 1
    event = sim.instabilities[0]
    assert event.domain == 'OVERLAND'
    assert event.chemical == 'tracer'
    assert event.compartment == '0_1'
    assert event.layer == Layer.water_column()
    assert event.value == pytest.approx(-50.0)
    assert event.time == 0.0
    assert domain.conc[0, 1, 0] == 0.0

    log = msg(1, 'Done')
    assert sum('Instability' in line for line in log) == 1
    assert sum('Error count 1' in line for line in log) == 1


def test_roundoff_is_silent():
    chemicals = make_chemicals()
    domain = make_overland(chemicals)
    domain.adv_in[0, 0, Source.POINT] = -1.0e-9
    sim = make_sim(chemicals, overland=domain)

    errors, _ = concentration(sim, 'OVERLAND')
    assert errors[0] == 0
    assert sim.instabilities == []
    assert domain.conc_new[0, 0, 0] == 0.0


def test_overdrawn_water_column_reported_once():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, volume=1.0)
    domain.conc[0, 0, 0] = 10.0
    domain.adv_out[0, 0, Source.EAST] = 15.0
    domain.dsp_out[0, 0, Source.EAST] = 5.0
    sim = make_sim(chemicals, overland=domain)

    errors, _ = concentration(sim, 'OVERLAND')
    assert errors[0] == 1
    assert domain.adv_out[0, 0, Source.EAST] == 15.0
    assert domain.dsp_out[0, 0, Source.EAST] == 5.0
    assert domain.conc_new[0, 0, 0] == 0.0
    assert len(sim.instabilities) == 1
    assert sim.instabilities[0].value == pytest.approx(-10.0)


def test_independently_limited_sinks_overdraw_and_report():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, volume=1.0, outlets=[(0, 0)])
    domain.conc[0, 0, 0] = 100.0
    domain.infiltration_rate[0] = 1.0
    domain.outflow[0, Source.BOUNDARY] = 1.0
    sim = make_sim(chemicals, overland=domain)

    step(sim)

    # each sink is capped on its own, so both remove the full 100 g
    assert domain.inf_out[0, 0, 0] == pytest.approx(100.0)
    assert domain.adv_out[0, 0, Source.BOUNDARY] == pytest.approx(100.0)
    assert domain.conc[0, 0, 0] == 0.0
    assert len(sim.instabilities) == 1
    assert sim.instabilities[0].value == pytest.approx(-100.0)


def test_layer_with_vanishing_volume_is_emptied():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, maxstack=1)
    domain.volume[0, 1] = 1.0
    domain.new_volume[0, 1] = 1.0e-9
    domain.conc[0, 0, 1] = 50.0
    sim = make_sim(chemicals, overland=domain)

    concentration(sim, 'OVERLAND')
    assert domain.conc_new[0, 0, 1] == 0.0


def test_deposition_and_erosion_change_surface_layer():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, maxstack=1)
    domain.volume[0, 1] = 10.0
    domain.new_volume[0, 1] = 10.0
    domain.conc[0, 0, :] = [1.0, 5.0]
    domain.dep_out[0, 0] = domain.dep_in[0, 0] = 20.0
    domain.ers_out[0, 0] = domain.ers_in[0, 0] = 5.0
    sim = make_sim(chemicals, overland=domain)

    concentration(sim, 'OVERLAND')
    assert domain.conc_new[0, 0, 0] == pytest.approx((100.0 - 20.0 + 5.0) / 100.0)
    assert domain.conc_new[0, 0, 1] == pytest.approx((50.0 + 20.0 - 5.0) / 10.0)


def test_cumulative_masses_in_kilograms():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, outlets=[(0, 0)])
    domain.conc[0, 0, 0] = 10.0
    domain.adv_out[0, 0, Source.BOUNDARY] = 10.0
    sim = make_sim(chemicals, overland=domain, dt=50.0)

    concentration(sim, 'OVERLAND')
    assert domain.adv_out_mass[0, 0, Source.BOUNDARY] == pytest.approx(0.5)
    assert domain.peak_flux[0, 0] == pytest.approx(0.01)
    assert domain.peak_time[0, 0] == 50.0
