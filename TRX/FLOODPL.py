''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

from numpy import zeros
from TRX.LIMITER import available_mass, scale_factor
from TRX.topology import Source

ERRMSGS = ()

FLOOD = Source.FLOODPLAIN


def _committed(domain, ichem, i):
	''' outflux already scheduled from a water column, including infiltration/transmission loss '''
	return (domain.dep_out[ichem, i] + domain.kinetic_outflux(ichem, i, 0) + domain.inf_out[ichem, i, 0]
		+ domain.adv_out[ichem, i].sum() - domain.adv_out[ichem, i, FLOOD])


def floodplain(sim, name=None):
	''' advective exchange between the water columns of overland cells and their channel nodes

	Each side's outflux is capped against its own available mass; the matching
	influx on the other side is scaled by the same factor. '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	overland = sim.overland
	channel = sim.channel
	if overland is None or channel is None:
		return errorsV, ERRMSGS

	dt = sim.dt
	for j in range(channel.ncomp):
		i = channel.partner[j]
		if i < 0:
			continue
		for ichem in range(channel.nchem):
			cov = overland.conc[ichem, i, 0]
			cch = channel.conc[ichem, j, 0]

			out_ov = overland.outflow[i, FLOOD] * cov
			scale_ov = scale_factor(out_ov * dt,
				available_mass(overland.mass(ichem, i, 0), _committed(overland, ichem, i), dt))
			out_ch = channel.outflow[j, FLOOD] * cch
			scale_ch = scale_factor(out_ch * dt,
				available_mass(channel.mass(ichem, j, 0), _committed(channel, ichem, j), dt))

			overland.adv_out[ichem, i, FLOOD] = out_ov * scale_ov
			channel.adv_in[ichem, j, FLOOD] = channel.inflow[j, FLOOD] * cov * scale_ov
			channel.adv_out[ichem, j, FLOOD] = out_ch * scale_ch
			overland.adv_in[ichem, i, FLOOD] = overland.inflow[i, FLOOD] * cch * scale_ch

	return errorsV, ERRMSGS
