''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Advection of chemicals in the water column.

in-flux  = inflow (m3/s) from a direction * concentration of the neighbor there
out-flux = outflow (m3/s) toward a direction * own concentration

POINT     aggregated point and distributed loads (positive in, negative out)
1-8       compass neighbors; overland cells only use N, E, S, W
BOUNDARY  outlets only; inflow carries the boundary concentration (0 when none)

FLOODPLAIN exchange is computed by FLOODPL after both domains have advected.
'''

from numpy import zeros, isnan
from TRX.LIMITER import available_mass, limit_outflux
from TRX.topology import Source

ERRMSGS = ()

KGDAY = 1000.0 / 86400.0      # kg/d to g/s


def loads(domain):
	''' net external load (g/s) per chemical and compartment split into (in, out) '''
	load = zeros((domain.nchem, domain.ncomp))
	for pl in domain.point_loads:
		if pl.option == 0:
			load[pl.chemical, pl.compartment] += pl.value * KGDAY
		else:
			# a negative flow is a withdrawal at the compartment's own concentration
			c = pl.value if pl.flow >= 0.0 else domain.conc[pl.chemical, pl.compartment, 0]
			load[pl.chemical, pl.compartment] += pl.flow * c
	for dl in domain.distributed_loads:
		i = dl.compartment
		# g/m2/mm * m2 * m/s * mm/m
		load[dl.chemical, i] += dl.value * domain.area[i] * domain.rain_rate[i] * 1000.0

	inload = zeros(load.shape)
	outload = zeros(load.shape)
	inload[load > 0.0] = load[load > 0.0]
	outload[load < 0.0] = -load[load < 0.0]
	return inload, outload


def advection(sim, name):
	''' advective in/out fluxes of every chemical in every water column '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	topology = domain.topology
	neighbors = topology.neighbors
	dt = sim.dt
	inload, outload = loads(domain)

	for ichem in range(domain.nchem):
		for i in range(domain.ncomp):
			c = domain.conc[ichem, i, 0]
			influx = domain.adv_in[ichem, i]
			outflux = domain.adv_out[ichem, i]

			influx[Source.POINT] = inload[ichem, i]
			outflux[Source.POINT] = outload[ichem, i]

			for direction in topology.directions:
				j = neighbors[i, direction]
				cin = domain.conc[ichem, j, 0] if j >= 0 else 0.0
				influx[direction] = domain.inflow[i, direction] * cin
				outflux[direction] = domain.outflow[i, direction] * c

			if topology.outlet[i]:
				cbc = domain.boundary[ichem, i]
				if isnan(cbc):
					cbc = 0.0
				influx[Source.BOUNDARY] = domain.inflow[i, Source.BOUNDARY] * cbc
				outflux[Source.BOUNDARY] = domain.outflow[i, Source.BOUNDARY] * c

			committed = domain.dep_out[ichem, i] + domain.kinetic_outflux(ichem, i, 0)
			available = available_mass(domain.mass(ichem, i, 0), committed, dt)
			limit_outflux(outflux, dt, available)

	return errorsV, ERRMSGS
