''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
Scenario tables and construction of the simulation state from them '''

from collections import defaultdict
from numpy import asarray, zeros, int64, float64
from pandas import DataFrame

from TRX.chemistry import ChemicalTable
from TRX.state import Domain, Simulation, PointLoad, DistributedLoad, ENVIRONMENT
from TRX.topology import OverlandGrid, ChannelNetwork, Source, TopologyError


KEYS = {'OVERLAND': ('row', 'col'), 'CHANNEL': ('link', 'node')}
OPTIONS = {0: 'mass', 1: 'flow', 2: 'distributed'}


class ScenarioError(KeyError):
    '''A table the scenario needs is missing'''


class Scenario():

    def __init__(self) -> None:
        self.control = {}
        self.chemicals = DataFrame(columns=['name'])
        self.solids = DataFrame(columns=['name'])
        self.yields = DataFrame(columns=['from', 'to', 'pathway', 'yield'])
        self.tables = defaultdict(dict)

    def table(self, domain, name, required=False):
        if name in self.tables[domain]:
            return self.tables[domain][name]
        if required:
            raise ScenarioError(f'{domain}/{name} table is required')
        return DataFrame()

    @property
    def domains(self):
        return [name for name in KEYS if 'COMPARTMENTS' in self.tables[name]]


def compartments(topology, frame):
    '''Compartment index of every row of a table keyed by (row, col) or (link, node)'''
    key1, key2 = KEYS[topology.kind]
    if key1 not in frame.columns or key2 not in frame.columns:
        raise ScenarioError(f'{topology.kind} table needs {key1} and {key2} columns')
    return asarray([topology.compartment(int(a), int(b)) for a, b in zip(frame[key1], frame[key2])], dtype=int64)


def _flagged(frame, column):
    if column not in frame.columns:
        return zeros(len(frame), dtype=bool)
    return frame[column].fillna(0).to_numpy() != 0


def _layers(frame):
    '''layer column of a table, the water column (0) when absent'''
    if 'layer' not in frame.columns:
        return zeros(len(frame), dtype=int64)
    return frame['layer'].to_numpy(dtype=int64)


def build_topology(scenario, name):
    cells = scenario.table(name, 'COMPARTMENTS', required=True)
    if name == 'OVERLAND':
        grid = scenario.table(name, 'GRID', required=True).iloc[0]
        outlets = cells.loc[_flagged(cells, 'outlet'), ['row', 'col']].astype(int).itertuples(index=False)
        topology = OverlandGrid.from_cells(int(grid['nrows']), int(grid['ncols']),
            list(zip(cells['row'].astype(int), cells['col'].astype(int))),
            outlets=[tuple(o) for o in outlets], cellsize=grid.get('cellsize', 1.0),
            xllcorner=grid.get('xllcorner', 0.0), yllcorner=grid.get('yllcorner', 0.0),
            nodata=grid.get('nodata', -9999.0))
        return topology

    network = scenario.table(name, 'NETWORK', required=True).sort_values(['link', 'node'])
    nlinks = int(network['link'].max()) + 1
    nnodes = [int((network['link'] == link).sum()) for link in range(nlinks)]
    updirection = [network.loc[network['link'] == link, 'updirection'].astype(int).tolist() for link in range(nlinks)]
    downdirection = [network.loc[network['link'] == link, 'downdirection'].astype(int).tolist() for link in range(nlinks)]
    upbranches, downbranches = defaultdict(dict), defaultdict(dict)
    for row in scenario.table(name, 'BRANCHES').itertuples(index=False):
        target = upbranches if row.end == 'up' else downbranches
        target[int(row.link)][int(row.direction)] = int(row.branch)
    outlets = sorted({int(link) for link in cells.loc[_flagged(cells, 'outlet'), 'link']})
    topology = ChannelNetwork(nnodes, updirection, downdirection, upbranches, downbranches, outlets)
    if len(cells) != topology.ncomp:
        raise TopologyError(f'CHANNEL network declares {topology.ncomp} nodes but COMPARTMENTS has {len(cells)} rows')
    return topology


def build_domain(scenario, name, chemicals):
    '''Domain with its static inputs and initial concentrations filled from the scenario'''
    topology = build_topology(scenario, name)
    cells = scenario.table(name, 'COMPARTMENTS', required=True)
    layers = scenario.table(name, 'LAYERS')
    maxstack = int(cells['nstack'].max()) if 'nstack' in cells.columns else 0
    if not layers.empty:
        maxstack = max(maxstack, int(layers['layer'].max()))
    domain = Domain(topology, chemicals.nchem, chemicals.nsolids, maxstack)

    idx = compartments(topology, cells)
    domain.area[idx] = cells['area'].to_numpy(dtype=float64)
    domain.nstack[idx] = cells['nstack'].to_numpy(dtype=int64) if 'nstack' in cells.columns else 0
    domain.volume[idx, 0] = cells['volume'].to_numpy(dtype=float64)
    domain.new_volume[idx, 0] = cells.get('new_volume', cells['volume']).to_numpy(dtype=float64)
    if 'infiltration' in cells.columns:
        domain.infiltration_rate[idx] = cells['infiltration'].to_numpy(dtype=float64)
    if 'wetting_front' in cells.columns:
        domain.wetting_front[idx] = cells['wetting_front'].to_numpy(dtype=float64)
    if 'rain' in cells.columns:
        domain.rain_rate[idx] = cells['rain'].to_numpy(dtype=float64)
    for key in ENVIRONMENT:
        if key in cells.columns:
            domain.environment[key][idx, 0] = cells[key].to_numpy(dtype=float64)

    if not layers.empty:
        lidx = compartments(topology, layers)
        lay = layers['layer'].to_numpy(dtype=int64)
        if (lay < 1).any():
            raise TopologyError(f'{name} LAYERS are numbered from 1')
        domain.volume[lidx, lay] = layers['volume'].to_numpy(dtype=float64)
        domain.new_volume[lidx, lay] = layers.get('new_volume', layers['volume']).to_numpy(dtype=float64)
        for column, target in (('porosity', domain.porosity), ('moisture_deficit', domain.moisture_deficit),
                ('top', domain.top), ('bottom', domain.bottom)):
            if column in layers.columns:
                target[lidx, lay] = layers[column].to_numpy(dtype=float64)
        for key in ENVIRONMENT:
            if key in layers.columns:
                domain.environment[key][lidx, lay] = layers[key].to_numpy(dtype=float64)

    domain.fpoc[:] = chemicals.fpoc[:, None, None]
    solids = scenario.table(name, 'SOLIDS')
    if not solids.empty:
        sidx = compartments(topology, solids)
        isolid = asarray([chemicals.solids.index(str(s)) for s in solids['solids']], dtype=int64)
        lay = _layers(solids)
        domain.csed[isolid, sidx, lay] = solids['csed'].to_numpy(dtype=float64)
        if 'fpoc' in solids.columns:
            domain.fpoc[isolid, sidx, lay] = solids['fpoc'].to_numpy(dtype=float64)
        surface = lay == 0
        for column, target in (('deposition', domain.deposition), ('erosion', domain.erosion)):
            if column in solids.columns:
                target[isolid[surface], sidx[surface]] = solids.loc[surface, column].to_numpy(dtype=float64)
    domain.csed_new[:] = domain.csed

    flows = scenario.table(name, 'FLOWS')
    if not flows.empty:
        fidx = compartments(topology, flows)
        source = asarray([Source(int(s)) for s in flows['source']], dtype=int64)
        for column, target in (('inflow', domain.inflow), ('outflow', domain.outflow), ('dispersion', domain.dispersion)):
            if column in flows.columns:
                target[fidx, source] = flows[column].to_numpy(dtype=float64)

    initial = scenario.table(name, 'INITIAL')
    if not initial.empty:
        cidx = compartments(topology, initial)
        ichem = asarray([chemicals.index(str(c)) for c in initial['chemical']], dtype=int64)
        lay = _layers(initial)
        domain.conc[ichem, cidx, lay] = initial['concentration'].to_numpy(dtype=float64)

    boundary = scenario.table(name, 'BOUNDARY')
    if not boundary.empty:
        bidx = compartments(topology, boundary)
        ichem = asarray([chemicals.index(str(c)) for c in boundary['chemical']], dtype=int64)
        domain.boundary[ichem, bidx] = boundary['concentration'].to_numpy(dtype=float64)

    loads = scenario.table(name, 'LOADS')
    if not loads.empty:
        for icomp, row in zip(compartments(topology, loads), loads.to_dict('records')):
            ichem = chemicals.index(str(row['chemical']))
            option = int(row.get('option', 0))
            if OPTIONS.get(option) == 'distributed':
                domain.distributed_loads.append(DistributedLoad(ichem, int(icomp), float(row['value'])))
            elif option in OPTIONS:
                domain.point_loads.append(PointLoad(ichem, int(icomp), option, float(row['value']),
                    float(row.get('flow', 0.0))))
            else:
                raise ValueError(f'{name} load option must be 0, 1 or 2, got {option}')

    return domain


def link_floodplain(overland, channel, cells):
    '''Pair each channel node with the overland cell it lies in'''
    if 'row' not in cells.columns or 'col' not in cells.columns:
        return
    for icomp, row, col in zip(compartments(channel.topology, cells), cells['row'], cells['col']):
        if row < 0 or col < 0:
            continue
        icell = overland.topology.compartment(int(row), int(col))
        if overland.partner[icell] >= 0:
            raise TopologyError(f'overland cell ({row}, {col}) holds more than one channel node')
        overland.partner[icell] = icomp
        channel.partner[icomp] = icell


def stations(scenario, domain):
    '''{station name: compartment index} of the reporting stations'''
    table = scenario.table(domain.name, 'STATIONS')
    if table.empty:
        return {}
    return dict(zip(table['station'].astype(str), compartments(domain.topology, table)))


def build_simulation(scenario):
    control = scenario.control
    for key in ('Steps', 'Dt'):
        if key not in control:
            raise ScenarioError(f'CONTROL/GLOBAL needs {key}')
    chemicals = ChemicalTable(scenario.chemicals, scenario.solids, scenario.yields)
    domains = {name: build_domain(scenario, name, chemicals) for name in scenario.domains}
    if not domains:
        raise ScenarioError('scenario has neither OVERLAND nor CHANNEL compartments')
    if len(domains) == 2:
        link_floodplain(domains['OVERLAND'], domains['CHANNEL'], scenario.table('CHANNEL', 'COMPARTMENTS'))
    return Simulation(chemicals, float(control['Dt']), overland=domains.get('OVERLAND'),
        channel=domains.get('CHANNEL'), tolerance=float(control.get('Tolerance', 1.0e-7)),
        erosion_scale=float(control.get('ErosionScale', 1.0)))


class SteadyForcing():
    '''Hydraulic and solids inputs held at their scenario values.

    After the first step each layer starts from the volume and solids
    concentration the previous step ended with.'''

    def update(self, sim) -> None:
        if sim.steps == 0:
            return
        for domain in sim.domains.values():
            domain.volume[:] = domain.new_volume
            domain.csed[:] = domain.csed_new
