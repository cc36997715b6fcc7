import numpy as np
import pandas as pd

from TRX.chemistry import ChemicalTable
from TRX.state import Domain, Simulation
from TRX.scenario import Scenario
from TRX.topology import OverlandGrid, ChannelNetwork, Source


def make_chemicals(chemicals=None, solids=None, yields=None):
    if chemicals is None:
        chemicals = [{"name": "tracer"}]
    if solids is None:
        solids = [{"name": "sand"}]
    return ChemicalTable(
        pd.DataFrame(chemicals),
        pd.DataFrame(solids),
        None if yields is None else pd.DataFrame(yields),
    )


def make_overland(chemicals, mask=((True,),), maxstack=0, outlets=(), volume=100.0, area=1.0):
    grid = OverlandGrid(np.array(mask, dtype=bool), outlets=outlets)
    domain = Domain(grid, chemicals.nchem, chemicals.nsolids, maxstack)
    domain.area[:] = area
    domain.volume[:, 0] = volume
    domain.new_volume[:, 0] = volume
    return domain


def make_channel(chemicals, nnodes=(1,), maxstack=0, volume=100.0, **kwargs):
    updirection = [[0] + [7] * (n - 1) for n in nnodes]      # upstream node lies WEST
    downdirection = [[3] * (n - 1) + [0] for n in nnodes]    # downstream node lies EAST
    network = ChannelNetwork(list(nnodes), updirection, downdirection, **kwargs)
    domain = Domain(network, chemicals.nchem, chemicals.nsolids, maxstack)
    domain.area[:] = 1.0
    domain.volume[:, 0] = volume
    domain.new_volume[:, 0] = volume
    return domain


def make_sim(chemicals, overland=None, channel=None, dt=1.0, **kwargs):
    return Simulation(chemicals, dt, overland=overland, channel=channel, **kwargs)


def make_scenario():
    '''Three cell overland scenario with one layered cell holding two chemicals'''
    scenario = Scenario()
    scenario.control = {'Steps': 4, 'Dt': 10.0, 'Tolerance': 1.0e-6, 'ErosionScale': 0.5}
    scenario.chemicals = pd.DataFrame([{'name': 'copper', 'partition': 1, 'kp': 0.001},
        {'name': 'zinc'}])
    scenario.solids = pd.DataFrame([{'name': 'clay', 'spgravity': 2.6}])
    ov = scenario.tables['OVERLAND']
    ov['GRID'] = pd.DataFrame([{'nrows': 2, 'ncols': 2, 'cellsize': 30.0}])
    ov['COMPARTMENTS'] = pd.DataFrame({'row': [0, 1, 1], 'col': [0, 0, 1], 'area': 900.0,
        'volume': [9.0, 18.0, 27.0], 'nstack': [1, 1, 0], 'outlet': [0, 0, 1], 'doc': 2.0})
    ov['LAYERS'] = pd.DataFrame({'row': [0, 1], 'col': [0, 0], 'layer': 1, 'volume': 90.0,
        'porosity': 0.4})
    ov['SOLIDS'] = pd.DataFrame({'row': [0, 0], 'col': [0, 0], 'solids': 'clay', 'layer': [0, 1],
        'csed': [50.0, 1.4e6], 'deposition': [0.01, 0.0]})
    ov['FLOWS'] = pd.DataFrame({'row': [0, 1], 'col': [0, 0], 'source': [int(Source.SOUTH), int(Source.NORTH)],
        'inflow': [0.0, 0.2], 'outflow': [0.2, 0.0]})
    ov['INITIAL'] = pd.DataFrame({'row': [0, 0], 'col': [0, 0], 'chemical': ['copper', 'copper'],
        'layer': [0, 1], 'concentration': [3.0, 40.0]})
    ov['BOUNDARY'] = pd.DataFrame({'row': [1], 'col': [1], 'chemical': ['zinc'], 'concentration': [0.5]})
    ov['LOADS'] = pd.DataFrame({'row': [1, 0], 'col': [1, 0], 'chemical': ['zinc', 'copper'],
        'option': [0, 2], 'value': [8.64, 1.0]})
    ov['STATIONS'] = pd.DataFrame({'station': ['gauge'], 'row': [1], 'col': [1]})
    return scenario


def add_channel(scenario):
    '''Two node channel link draining south through the western overland cells'''
    ch = scenario.tables['CHANNEL']
    ch['NETWORK'] = pd.DataFrame({'link': [0, 0], 'node': [0, 1], 'updirection': [0, 1],
        'downdirection': [5, 0]})
    ch['COMPARTMENTS'] = pd.DataFrame({'link': [0, 0], 'node': [0, 1], 'area': 10.0, 'volume': 5.0,
        'row': [0, 1], 'col': [0, 0], 'outlet': [0, 1]})
    return scenario
