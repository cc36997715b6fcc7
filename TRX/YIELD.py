''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Reaction products: each yield entry turns a fraction of the source's pathway
outflux into an influx of the product chemical.  Only the water column and
the surface layer react, so products never reach the subsurface layers.
'''

from numpy import zeros
from TRX.chemistry import DISSOLUTION

ERRMSGS = ()


def yields(sim, name):
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	for reaction in sim.chemicals.reactions:
		source, product, pathway, fraction = reaction
		for i in range(domain.ncomp):
			for layer in domain.layers(i):
				if pathway == DISSOLUTION:
					lost = domain.dsl_out[source, i, layer]
				else:
					lost = domain.kin_out[source, pathway, i, layer]
				domain.kin_in[product, pathway, i, layer] += lost * fraction

	return errorsV, ERRMSGS
