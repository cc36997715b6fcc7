import pytest

from TRX.main import step
from TRX.topology import Source
from TRX.CONCENTRATION import concentration
from TRX.utilities import (concentration_table, group_concentrations, group_phase_fractions, group_transport,
    mass_balance, maximum_table, outlet_summary, outlet_total, station_values)

from .helpers import make_chemicals, make_overland, make_sim


def draining():
    chemicals = make_chemicals([{'name': 'atrazine', 'partition': 1, 'kp': 0.01, 'kb': 0.01}])
    domain = make_overland(chemicals, mask=((True, True),), outlets=[(0, 1)])
    domain.conc[0, :, 0] = [10.0, 5.0]
    domain.csed[0, :, 0] = 100.0
    domain.environment['doc'][:] = 10.0
    domain.outflow[0, Source.EAST] = domain.inflow[1, Source.WEST] = 1.0
    domain.outflow[1, Source.BOUNDARY] = 2.0
    return domain, make_sim(chemicals, overland=domain, dt=10.0)


def test_station_values_split_phases():
    domain, sim = draining()
    step(sim)
    values = station_values(domain, 0, 1)
    assert values['dissolved'] + values['bound'] + values['particulate'] == pytest.approx(values['total'])
    assert values['bound'] > 0.0 and values['particulate'] > 0.0


def test_outlet_mass_and_peak():
    domain, sim = draining()
    step(sim)
    step(sim)

    # 2 m3/s at 5 g/m3 for the first 10 s
    first = 2.0 * 5.0 * 10.0 / 1000.0
    assert outlet_total(domain, 0) > first
    summary = outlet_summary(domain, sim.chemicals)
    assert summary['outlet'].tolist() == ['0_1']
    assert summary['peak_flux'][0] == pytest.approx(domain.peak_flux[0, 1])
    assert summary['peak_time'][0] in (10.0, 20.0)


def test_mass_balance_closes():
    domain, sim = draining()
    before = domain.total_mass(0) / 1000.0
    for _ in range(3):
        step(sim)
    balance = mass_balance(domain, sim.chemicals).loc['atrazine']
    assert balance['mass'] + balance['adv_out_boundary'] == pytest.approx(before)


def test_concentration_table_lists_occupied_layers():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, mask=((True, True),), maxstack=1)
    domain.nstack[1] = 0
    table = concentration_table(domain, chemicals)
    assert table[['compartment', 'layer']].values.tolist() == [['0_0', 0], ['0_0', 1], ['0_1', 0]]


def grouped():
    chemicals = make_chemicals([{'name': 'pcb1', 'group': 'pcb'}, {'name': 'pcb2', 'group': 'pcb'},
        {'name': 'lead'}])
    domain = make_overland(chemicals, mask=((True, True),), maxstack=1)
    domain.nstack[:] = [1, 0]
    domain.volume[0, 1] = 10.0
    domain.conc[:, 0, 0] = [2.0, 3.0, 7.0]
    domain.conc[:, 1, 0] = [1.0, 0.0, 0.0]
    domain.conc[:, 0, 1] = [40.0, 60.0, 10.0]
    domain.fd[:, 0, 0] = [0.5, 1.0, 1.0]
    domain.fp[0, 0, 0, 0] = 0.5
    domain.csed[0, 0, :] = [100.0, 2.0e6]
    return chemicals, domain


def test_chemicals_without_group_report_alone():
    chemicals, _ = grouped()
    assert chemicals.groups == ['pcb', 'lead']
    assert chemicals.group.tolist() == [0, 0, 1]


def test_group_concentration_sums_members():
    chemicals, domain = grouped()
    total = group_concentrations(domain, chemicals)
    assert total.loc['0_0', 'pcb'] == pytest.approx(5.0)
    assert total.loc['0_0', 'lead'] == pytest.approx(7.0)
    assert total.loc['0_1', 'pcb'] == pytest.approx(1.0)

    dissolved = group_concentrations(domain, chemicals, 'dissolved')
    assert dissolved.loc['0_0', 'pcb'] == pytest.approx(4.0)

    # 1 g/m3 particulate on 100 g/m3 of solids
    sorbed = group_concentrations(domain, chemicals, 'sorbed')
    assert sorbed.loc['0_0', 'pcb'] == pytest.approx(1.0e4)
    assert sorbed.loc['0_1', 'pcb'] == 0.0

    bed = group_concentrations(domain, chemicals, 'sorbed', surface=True)
    assert bed.loc['0_0', 'pcb'] == pytest.approx(50.0)
    assert bed.loc['0_1'].sum() == 0.0

    with pytest.raises(ValueError):
        group_concentrations(domain, chemicals, 'gaseous')


def test_group_phase_fraction():
    chemicals, domain = grouped()
    fraction = group_phase_fractions(domain, chemicals, 'particulate')
    assert fraction.loc['0_0', 'pcb'] == pytest.approx(0.2)
    assert fraction.loc['0_1', 'lead'] == 0.0


def test_group_transport():
    chemicals, domain = grouped()
    domain.dep_mass[:, 0] = [1.0, 2.0, 4.0]
    domain.ers_mass[:, 0] = [0.5, 0.5, 1.0]
    net = group_transport(domain, chemicals, 'net_deposition')
    assert net.loc['0_0', 'pcb'] == pytest.approx(2.0)
    assert net.loc['0_0', 'lead'] == pytest.approx(3.0)
    with pytest.raises(ValueError):
        group_transport(domain, chemicals, 'volatilization')


def test_maximum_concentration_is_kept():
    chemicals = make_chemicals()
    domain = make_overland(chemicals, maxstack=1, volume=1.0, outlets=[(0, 0)])
    domain.volume[0, 1] = domain.new_volume[0, 1] = 1.0
    domain.csed_new[0, 0, 1] = 1.0e6
    domain.conc[0, 0, :] = [10.0, 4.0]
    domain.adv_out[0, 0, Source.BOUNDARY] = 6.0
    sim = make_sim(chemicals, overland=domain)

    concentration(sim, 'OVERLAND')
    assert domain.max_conc[0, 0] == pytest.approx(4.0)
    assert domain.max_bed[0, 0] == pytest.approx(4.0)

    domain.advance()
    domain.reset_fluxes()
    concentration(sim, 'OVERLAND')
    assert domain.max_conc[0, 0] == pytest.approx(4.0)

    table = maximum_table(domain, chemicals)
    assert table.loc[0, 'water'] == pytest.approx(4.0)
    assert table.loc[0, 'surface'] == pytest.approx(4.0)
