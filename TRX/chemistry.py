''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
Chemical, solids and yield property tables '''

from collections import namedtuple
from enum import IntEnum
from numpy import array, zeros, float64, int64
from pandas import DataFrame, isna


PATHWAYS = ('biodegradation', 'hydrolysis', 'oxidation', 'photolysis', 'radioactive',
    'volatilization', 'userdefined', 'dissolution')
CODES = ('bio', 'hyd', 'oxi', 'pht', 'rad', 'vlt', 'udr', 'dsl')
NPATHWAYS = len(PATHWAYS)
NKINETIC = 7          # pathways that remove chemical mass; dissolution removes solids
DISSOLUTION = 7       # zero based pathway index

RATE_COLUMNS = [f'k{code}_{domain}' for code in CODES for domain in ('w', 's')]

CHEMICAL_DEFAULTS = {'partition': 0, 'kp': 0.0, 'koc': 0.0, 'kb': 0.0, 'nux': 0.0, 'solubility': 0.0,
    **{column: 0.0 for column in RATE_COLUMNS}}
SOLIDS_DEFAULTS = {'spgravity': 2.65, 'diameter': 1.0e-5, 'fpoc': 0.0}

Reaction = namedtuple('Reaction', 'source product pathway fraction')


class PartitionMode(IntEnum):
    NONE = 0
    SOLIDS = 1
    CARBON = 2

    @classmethod
    def from_option(cls, option):
        '''Option values above 1 all select organic carbon normalized partitioning'''
        option = int(option)
        if option <= 0:
            return cls.NONE
        return cls.SOLIDS if option == 1 else cls.CARBON


def _complete(table, defaults, kind):
    if 'name' not in table.columns:
        raise ValueError(f'{kind} table needs a name column')
    table = table.copy()
    for column, value in defaults.items():
        if column not in table.columns:
            table[column] = value
    table[list(defaults)] = table[list(defaults)].fillna(defaults)
    return table.reset_index(drop=True)


class ChemicalTable():
    '''Chemistry coefficients in the array form used by the process modules.

    rates[ichem, pathway, 0] is the water column rate constant (1/s) and
    rates[ichem, pathway, 1] the solid layer rate constant.
    '''

    def __init__(self, chemicals: DataFrame, solids: DataFrame, yields: DataFrame = None) -> None:
        chemicals = _complete(chemicals, CHEMICAL_DEFAULTS, 'chemical')
        solids = _complete(solids, SOLIDS_DEFAULTS, 'solids')

        self.names = [str(n) for n in chemicals['name']]
        self.solids = [str(n) for n in solids['name']]
        self.nchem = len(self.names)
        self.nsolids = len(self.solids)
        if len(set(self.names)) != self.nchem or len(set(self.solids)) != self.nsolids:
            raise ValueError('chemical and solids names must be unique')

        self.mode = array([PartitionMode.from_option(p) for p in chemicals['partition']], dtype=int64)
        self.kp = chemicals['kp'].to_numpy(dtype=float64)
        self.koc = chemicals['koc'].to_numpy(dtype=float64)
        self.kb = chemicals['kb'].to_numpy(dtype=float64)
        self.nux = chemicals['nux'].to_numpy(dtype=float64)
        self.solubility = chemicals['solubility'].to_numpy(dtype=float64)

        self.rates = zeros((self.nchem, NPATHWAYS, 2))
        for ipath, code in enumerate(CODES):
            self.rates[:, ipath, 0] = chemicals[f'k{code}_w'].to_numpy(dtype=float64)
            self.rates[:, ipath, 1] = chemicals[f'k{code}_s'].to_numpy(dtype=float64)

        # reporting group of each chemical; a chemical without one reports alone
        if 'group' in chemicals.columns:
            groups = [name if isna(group) else str(group) for name, group in zip(self.names, chemicals['group'])]
        else:
            groups = list(self.names)
        self.groups = list(dict.fromkeys(groups))
        self.group = array([self.groups.index(g) for g in groups], dtype=int64)

        self.spgravity = solids['spgravity'].to_numpy(dtype=float64)
        self.diameter = solids['diameter'].to_numpy(dtype=float64)
        self.fpoc = solids['fpoc'].to_numpy(dtype=float64)

        self.reactions = self._reactions(yields)

    def _reactions(self, yields):
        reactions = []
        if yields is None or yields.empty:
            return reactions
        dissolving = set()
        # 'from' and 'yield' are keywords, so rows are read as dicts
        for row in yields.to_dict('records'):
            pathway = int(row['pathway']) - 1
            if not 0 <= pathway < NPATHWAYS:
                raise ValueError(f'yield pathway must be 1 to {NPATHWAYS}, got {row["pathway"]}')
            source_names = self.solids if pathway == DISSOLUTION else self.names
            source = str(row['from'])
            if source not in source_names:
                raise ValueError(f'yield source {source} is not a known {"solids class" if pathway == DISSOLUTION else "chemical"}')
            product = str(row['to'])
            if product not in self.names:
                raise ValueError(f'yield product {product} is not a known chemical')
            if pathway == DISSOLUTION:
                if source in dissolving:
                    raise ValueError(f'solids class {source} dissolves into more than one chemical')
                dissolving.add(source)
            reactions.append(Reaction(source_names.index(source), self.names.index(product), pathway, float(row['yield'])))
        return reactions

    def dissolving(self):
        '''(solids class, chemical, yield) for every pure phase dissolution reaction'''
        return [(r.source, r.product, r.fraction) for r in self.reactions if r.pathway == DISSOLUTION]

    def index(self, name):
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(f'unknown chemical {name}') from None
