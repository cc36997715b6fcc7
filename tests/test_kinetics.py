import numpy as np
import pytest

from TRX.KINETICS import dissolution, kinetics, pathway_fluxes, surface_area
from TRX.YIELD import yields
from TRX.chemistry import DISSOLUTION

from .helpers import make_chemicals, make_overland, make_sim

BIO, HYD, OXI, PHT, RAD, VLT, UDR = range(7)


def test_biodegradation_first_order():
    chemicals = make_chemicals([{"name": "benzene", "kbio_w": 0.02}])
    domain = make_overland(chemicals)
    domain.conc[0, 0, 0] = 10.0
    sim = make_sim(chemicals, overland=domain)

    errors, messages = kinetics(sim, 'OVERLAND')
    assert len(errors) == len(messages) == 0
    assert domain.kin_out[0, BIO, 0, 0] == pytest.approx(20.0)
    assert domain.kin_out[0, HYD:, 0, 0].sum() == 0.0


def test_committed_mass_per_pathway():
    rates = np.array([0.6, 0.3, 0.5, 0.5, 0.0, 0.0, 0.0])
    flux = pathway_fluxes(rates, np.ones(7), 1.0, 1.0, 1.0)
    # hydrolysis sees biodegradation only, oxidation sees both
    assert flux[BIO] == pytest.approx(0.6)
    assert flux[HYD] == pytest.approx(0.3)
    assert flux[OXI] == pytest.approx(0.1)
    # photolysis sees biodegradation only
    assert flux[PHT] == pytest.approx(0.4)
    assert flux[RAD:].sum() == 0.0


def test_oxidation_gets_nothing_after_biodegradation_and_hydrolysis():
    rates = np.array([0.5, 0.5, 0.5, 0.0, 0.0, 0.0, 0.0])
    flux = pathway_fluxes(rates, np.ones(7), 10.0, 1.0, 1.0)
    assert flux[BIO] == pytest.approx(5.0)
    assert flux[HYD] == pytest.approx(5.0)
    assert flux[OXI] == 0.0


def test_bacteria_scales_hydrolysis_not_biodegradation():
    chemicals = make_chemicals([{"name": "x", "kbio_w": 0.01, "khyd_w": 0.01}])
    domain = make_overland(chemicals, volume=1.0)
    domain.conc[0, 0, 0] = 10.0
    domain.environment["bacteria"][0, 0] = 2.0
    sim = make_sim(chemicals, overland=domain)

    kinetics(sim, 'OVERLAND')
    assert domain.kin_out[0, BIO, 0, 0] == pytest.approx(0.1)
    assert domain.kin_out[0, HYD, 0, 0] == pytest.approx(0.2)


def test_environment_factors_scale_pathways():
    chemicals = make_chemicals([{"name": "x", "kbio_w": 0.001, "khyd_w": 0.001, "koxi_w": 0.001, "kpht_w": 0.001,
        "kvlt_w": 0.001, "kudr_w": 0.001}])
    domain = make_overland(chemicals)
    domain.conc[0, 0, 0] = 1.0
    domain.fd[0, 0, 0] = 0.5
    domain.environment["bacteria"][0, 0] = 2.0
    domain.environment["oxidant"][0, 0] = 3.0
    domain.environment["light"][0, 0] = 0.0
    domain.environment["udr"][0, 0] = 4.0
    sim = make_sim(chemicals, overland=domain)

    kinetics(sim, 'OVERLAND')
    out = domain.kin_out[0, :, 0, 0]
    assert out[BIO] == pytest.approx(0.1)
    assert out[HYD] == pytest.approx(0.2)
    assert out[OXI] == pytest.approx(0.3)
    assert out[PHT] == 0.0
    assert out[VLT] == pytest.approx(0.05)
    assert out[UDR] == pytest.approx(0.4)


def test_surface_layer_uses_solid_rates():
    chemicals = make_chemicals([{"name": "x", "khyd_w": 0.0, "khyd_s": 0.01}])
    domain = make_overland(chemicals, maxstack=2)
    domain.volume[0, 1:] = 10.0
    domain.conc[0, 0, :] = 1.0
    sim = make_sim(chemicals, overland=domain)

    kinetics(sim, 'OVERLAND')
    assert domain.kin_out[0, HYD, 0, 0] == 0.0
    assert domain.kin_out[0, HYD, 0, 2] == pytest.approx(0.1)
    # buried layers do not react
    assert domain.kin_out[0, HYD, 0, 1] == 0.0


def test_radioactive_decay_yields_daughter():
    chemicals = make_chemicals([{"name": "parent", "krad_w": 0.01}, {"name": "daughter"}],
        yields=[{"from": "parent", "to": "daughter", "pathway": 5, "yield": 0.5}])
    domain = make_overland(chemicals)
    domain.conc[0, 0, 0] = 10.0
    sim = make_sim(chemicals, overland=domain)

    kinetics(sim, 'OVERLAND')
    yields(sim, 'OVERLAND')
    assert domain.kin_out[0, RAD, 0, 0] == pytest.approx(10.0)
    assert domain.kin_in[1, RAD, 0, 0] == pytest.approx(5.0)
    assert domain.kin_in[0].sum() == 0.0


def test_surface_area_of_spherical_grains():
    assert surface_area(1000.0, 1.0, 6.0e-3, 1.0) == pytest.approx(1000.0)
    assert surface_area(1000.0, 1.0, 1.0e-3, 2.0) == pytest.approx(3000.0)


def dissolving(conc=0.0):
    chemicals = make_chemicals([{"name": "tce", "kdsl_w": 1.0e-4, "solubility": 6.0}],
        solids=[{"name": "napl", "spgravity": 1.0, "diameter": 6.0e-3}],
        yields=[{"from": "napl", "to": "tce", "pathway": 8, "yield": 1.0}])
    domain = make_overland(chemicals, volume=1.0)
    domain.csed[0, 0, 0] = 1000.0
    domain.csed_new[0, 0, 0] = 1000.0
    domain.conc[0, 0, 0] = conc
    return domain, make_sim(chemicals, overland=domain)


def test_dissolution_moves_solids_mass_into_chemical():
    domain, sim = dissolving()
    dissolution(sim, 'OVERLAND')
    yields(sim, 'OVERLAND')

    assert domain.dsl_out[0, 0, 0] == pytest.approx(0.6)
    assert domain.csed_new[0, 0, 0] == pytest.approx(999.4)
    assert domain.kin_in[0, DISSOLUTION, 0, 0] == pytest.approx(0.6)


def test_no_dissolution_at_saturation():
    domain, sim = dissolving(conc=8.0)
    dissolution(sim, 'OVERLAND')
    assert domain.dsl_out.sum() == 0.0
    assert domain.csed_new[0, 0, 0] == 1000.0


def test_solids_class_dissolves_into_one_chemical_only():
    with pytest.raises(ValueError):
        make_chemicals([{"name": "a"}, {"name": "b"}], solids=[{"name": "napl"}],
            yields=[{"from": "napl", "to": "a", "pathway": 8, "yield": 1.0},
                {"from": "napl", "to": "b", "pathway": 8, "yield": 1.0}])
