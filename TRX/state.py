''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
Simulation state shared by all chemical transport process modules '''

from collections import namedtuple
from numpy import full, zeros, ones, nan, int64, float64

from TRX.chemistry import NPATHWAYS, NKINETIC
from TRX.topology import NSOURCES


ENVIRONMENT = {'doc': 0.0, 'fdoc': 1.0, 'hardness': 0.0, 'ph': 7.0, 'temperature': 20.0,
    'oxidant': 0.0, 'bacteria': 1.0, 'light': 1.0, 'udr': 1.0}

PointLoad = namedtuple('PointLoad', 'chemical compartment option value flow')
DistributedLoad = namedtuple('DistributedLoad', 'chemical compartment value')
InstabilityEvent = namedtuple('InstabilityEvent', 'domain chemical compartment layer value time')

# flux arrays cleared at the start of every step (g/s)
FLUXES = ('adv_in', 'adv_out', 'dsp_in', 'dsp_out', 'dep_out', 'dep_in', 'ers_out', 'ers_in',
    'pore_out', 'pore_in', 'inf_out', 'inf_in', 'kin_out', 'kin_in', 'dsl_out')


class Domain():
    '''All per compartment arrays of one spatial domain (overland or channel).

    Layer position 0 of every [..., layer] array is the water column and
    positions 1..nstack[icomp] are the solid layers, surface layer last.

    Inputs owned by collaborators (hydraulics, solids transport, stack manager
    and environmental series) are refreshed every step before the chemical
    processes run; the chemical arrays are owned here.
    '''

    def __init__(self, topology, nchem, nsolids, maxstack):
        n = topology.ncomp
        nl = maxstack + 1
        self.name = topology.kind
        self.topology = topology
        self.ncomp = n
        self.nchem = nchem
        self.nsolids = nsolids
        self.maxstack = maxstack

        # geometry, hydraulics and stack (collaborator inputs)
        self.area = zeros(n)
        self.nstack = full(n, maxstack, dtype=int64)
        self.volume = zeros((n, nl))
        self.new_volume = zeros((n, nl))
        self.porosity = zeros((n, nl))
        self.moisture_deficit = zeros((n, nl))
        self.top = zeros((n, nl))
        self.bottom = zeros((n, nl))
        self.infiltration_rate = zeros(n)          # m/s
        self.wetting_front = full(n, nan)          # elevation, nan when not simulated
        self.rain_rate = zeros(n)                  # net rain, m/s
        self.inflow = zeros((n, NSOURCES))         # m3/s
        self.outflow = zeros((n, NSOURCES))
        self.dispersion = zeros((n, NSOURCES))
        self.deposition = zeros((nsolids, n))      # m3/s of water column cleared per solids class
        self.erosion = zeros((nsolids, n))         # m3/s of surface layer eroded per solids class
        self.csed = zeros((nsolids, n, nl))        # g/m3
        self.csed_new = zeros((nsolids, n, nl))
        self.fpoc = zeros((nsolids, n, nl))
        self.environment = {key: full((n, nl), value) for key, value in ENVIRONMENT.items()}
        self.boundary = full((nchem, n), nan)      # outlet boundary concentration, g/m3
        self.partner = full(n, -1, dtype=int64)    # floodplain compartment in the other domain
        self.point_loads = []
        self.distributed_loads = []

        # chemical state
        self.conc = zeros((nchem, n, nl))
        self.conc_new = zeros((nchem, n, nl))
        self.fp = zeros((nchem, nsolids, n, nl))
        self.fb = zeros((nchem, n, nl))
        self.fd = ones((nchem, n, nl))

        # instantaneous fluxes, g/s
        self.adv_in = zeros((nchem, n, NSOURCES))
        self.adv_out = zeros((nchem, n, NSOURCES))
        self.dsp_in = zeros((nchem, n, NSOURCES))
        self.dsp_out = zeros((nchem, n, NSOURCES))
        self.dep_out = zeros((nchem, n))           # water column to surface layer
        self.dep_in = zeros((nchem, n))
        self.ers_out = zeros((nchem, n))           # surface layer to water column
        self.ers_in = zeros((nchem, n))
        self.pore_out = zeros((nchem, n))          # porewater released from the surface layer
        self.pore_in = zeros((nchem, n))
        self.inf_out = zeros((nchem, n, nl))
        self.inf_in = zeros((nchem, n, nl))
        self.kin_out = zeros((nchem, NPATHWAYS, n, nl))
        self.kin_in = zeros((nchem, NPATHWAYS, n, nl))
        self.dsl_out = zeros((nsolids, n, nl))

        # cumulative masses, kg
        self.adv_in_mass = zeros((nchem, n, NSOURCES))
        self.adv_out_mass = zeros((nchem, n, NSOURCES))
        self.dsp_in_mass = zeros((nchem, n, NSOURCES))
        self.dsp_out_mass = zeros((nchem, n, NSOURCES))
        self.dep_mass = zeros((nchem, n))
        self.ers_mass = zeros((nchem, n))
        self.pore_mass = zeros((nchem, n))
        self.inf_mass = zeros((nchem, n, nl))
        self.kin_out_mass = zeros((nchem, NPATHWAYS, n, nl))
        self.kin_in_mass = zeros((nchem, NPATHWAYS, n, nl))

        # outlet peaks
        self.peak_flux = zeros((nchem, n))         # kg/s
        self.peak_time = zeros((nchem, n))         # s

        # largest concentrations reached: water column (g/m3), surface layer (mg/kg)
        self.max_conc = zeros((nchem, n))
        self.max_bed = zeros((nchem, n))

    def reset_fluxes(self):
        for name in FLUXES:
            getattr(self, name)[:] = 0.0

    def advance(self):
        '''Make the integrated concentrations current for the next step'''
        self.conc[:] = self.conc_new

    def mass(self, ichem, icomp, layer):
        return self.conc[ichem, icomp, layer] * self.volume[icomp, layer]

    def kinetic_outflux(self, ichem, icomp, layer):
        '''Sum of the seven chemical reaction outfluxes (g/s)'''
        return self.kin_out[ichem, :NKINETIC, icomp, layer].sum()

    def mobile_fraction(self, ichem, icomp, layer):
        return self.fd[ichem, icomp, layer] + self.fb[ichem, icomp, layer]

    def particulate_fraction(self, ichem, icomp, layer):
        return min(self.fp[ichem, :, icomp, layer].sum(), 1.0)

    def layers(self, icomp):
        '''Water column and, when the stack is not empty, the surface layer'''
        surface = self.nstack[icomp]
        return (0, surface) if surface >= 1 else (0,)

    def total_mass(self, ichem):
        '''Mass (g) of one chemical in all water columns and occupied layers'''
        total = 0.0
        for icomp in range(self.ncomp):
            top = self.nstack[icomp]
            total += (self.conc[ichem, icomp, :top + 1] * self.volume[icomp, :top + 1]).sum()
        return total


class Simulation():
    '''Run wide settings, chemistry and the domains being simulated'''

    def __init__(self, chemicals, dt, overland=None, channel=None, tolerance=1.0e-7,
            erosion_scale=1.0, start=0.0):
        self.chemicals = chemicals
        self.dt = float(dt)
        self.tolerance = float(tolerance)
        self.erosion_scale = float(erosion_scale)
        self.time = float(start)
        self.steps = 0
        self.domains = {}
        for domain in (overland, channel):
            if domain is not None:
                self.domains[domain.name] = domain
        self.instabilities = []

    @property
    def overland(self):
        return self.domains.get('OVERLAND')

    @property
    def channel(self):
        return self.domains.get('CHANNEL')

    def domain(self, name):
        return self.domains[name]

    def partner(self, name):
        '''The domain on the other side of the floodplain'''
        return self.domains.get('CHANNEL' if name == 'OVERLAND' else 'OVERLAND')

    def total_mass(self, ichem):
        return sum(domain.total_mass(ichem) for domain in self.domains.values())
