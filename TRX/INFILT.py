''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Infiltration (overland) and transmission loss (channel) of mobile chemical.

Water column -> surface layer: rate * area * c * (fd + fb).
Layer k -> layer k - 1 (or out of the stack below layer 1): only once the
wetting front has passed below the bottom of layer k, at the same rate
applied to that layer's mobile concentration.
'''

from numpy import zeros, isnan
from TRX.LIMITER import available_mass, limit

ERRMSGS = ()


def infiltration(sim, name):
	''' infiltration or transmission loss fluxes from the water column down the stack '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	dt = sim.dt
	for i in range(domain.ncomp):
		rate = domain.infiltration_rate[i]
		if rate <= 0.0:
			continue
		k = domain.nstack[i]
		front = domain.wetting_front[i]
		flow = rate * domain.area[i]          # m3/s
		for ichem in range(domain.nchem):
			fmobile = domain.mobile_fraction(ichem, i, 0)
			c = domain.conc[ichem, i, 0]
			mass = domain.volume[i, 0] * c * fmobile
			flux = limit(flow * c * fmobile, dt, available_mass(mass, domain.kinetic_outflux(ichem, i, 0), dt))
			domain.inf_out[ichem, i, 0] = flux
			if k >= 1:
				domain.inf_in[ichem, i, k] = flux

			if isnan(front):
				continue
			for layer in range(k, 0, -1):
				if front >= domain.bottom[i, layer]:
					break
				fmobile = domain.mobile_fraction(ichem, i, layer)
				c = domain.conc[ichem, i, layer]
				mass = domain.volume[i, layer] * c * fmobile
				flux = limit(flow * c * fmobile, dt,
					available_mass(mass, domain.kinetic_outflux(ichem, i, layer), dt))
				domain.inf_out[ichem, i, layer] = flux
				if layer > 1:
					domain.inf_in[ichem, i, layer - 1] = flux

	return errorsV, ERRMSGS
