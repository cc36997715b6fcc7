''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Dispersion of chemicals in the water column, driven by concentration gradients.

gradient = own concentration - concentration across the face
out-flux = dispersion flow (m3/s) * gradient     when gradient > 0
in-flux  = dispersion flow (m3/s) * -gradient    when gradient < 0

1-8         compass neighbors
FLOODPLAIN  the paired compartment of the other domain
BOUNDARY    outlets only, against the boundary concentration (no flux when none)

available mass = mass - (deposition + kinetics + advection out-fluxes) * dt
'''

from numpy import zeros, isnan
from numba import njit
from TRX.LIMITER import available_mass, limit_outflux
from TRX.topology import Source

ERRMSGS = ()


@njit(cache=True)
def gradient_flux(c, cadj, flow):
	''' (in, out) dispersive flux (g/s) for concentration c against neighbor cadj '''
	gradient = c - cadj
	if gradient > 0.0:
		return 0.0, flow * gradient
	elif gradient < 0.0:
		return -flow * gradient, 0.0
	return 0.0, 0.0


def dispersion(sim, name):
	''' gradient driven exchange of water column chemical with each neighbor '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	other = sim.partner(name)
	topology = domain.topology
	neighbors = topology.neighbors
	dt = sim.dt

	for ichem in range(domain.nchem):
		for i in range(domain.ncomp):
			c = domain.conc[ichem, i, 0]
			influx = domain.dsp_in[ichem, i]
			outflux = domain.dsp_out[ichem, i]

			for direction in topology.directions:
				j = neighbors[i, direction]
				if j < 0:
					continue
				influx[direction], outflux[direction] = gradient_flux(c, domain.conc[ichem, j, 0],
					domain.dispersion[i, direction])

			if domain.partner[i] >= 0 and other is not None:
				influx[Source.FLOODPLAIN], outflux[Source.FLOODPLAIN] = gradient_flux(c,
					other.conc[ichem, domain.partner[i], 0], domain.dispersion[i, Source.FLOODPLAIN])

			if topology.outlet[i]:
				# no boundary concentration means no gradient across the outlet
				cbc = domain.boundary[ichem, i]
				if isnan(cbc):
					cbc = c
				influx[Source.BOUNDARY], outflux[Source.BOUNDARY] = gradient_flux(c, cbc,
					domain.dispersion[i, Source.BOUNDARY])

			committed = (domain.dep_out[ichem, i] + domain.kinetic_outflux(ichem, i, 0)
				+ domain.adv_out[ichem, i].sum())
			available = available_mass(domain.mass(ichem, i, 0), committed, dt)
			limit_outflux(outflux, dt, available)

	return errorsV, ERRMSGS
