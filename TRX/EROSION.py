''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Particulate chemical exchange between the water column and the surface layer.

deposition = sum over solids classes of deposition flow * c(water) * fp(water)
erosion    = sum over solids classes of erosion flow * c(surface) * fp(surface)

When erosion shrinks the surface layer (next volume < current volume) the
mobile phases of the lost volume are released to the water column as a
porewater flux so the layer concentration cannot diverge as its volume
approaches zero.
'''

from numpy import zeros
from numba import njit
from TRX.LIMITER import available_mass, limit

ERRMSGS = ()


@njit(cache=True)
def particulate_flux(flows, c, fp):
	''' sum of flow (m3/s) * c (g/m3) * particulate fraction over solids classes '''
	flux = 0.0
	for s in range(len(flows)):
		flux += flows[s] * c * fp[s]
	return flux


@njit(cache=True)
def porewater_release(volume, new_volume, c, fmobile):
	''' mobile phase mass (g) held in the volume a layer loses over the step '''
	bulk = volume - new_volume
	if bulk <= 0.0:
		return 0.0
	return bulk * c * fmobile


def deposition(sim, name):
	''' particulate chemical settling from the water column onto the surface layer '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	dt = sim.dt
	for i in range(domain.ncomp):
		if domain.nstack[i] < 1:
			continue
		for ichem in range(domain.nchem):
			c = domain.conc[ichem, i, 0]
			flux = particulate_flux(domain.deposition[:, i], c, domain.fp[ichem, :, i, 0])
			if flux <= 0.0:
				continue
			mass = domain.volume[i, 0] * c * domain.particulate_fraction(ichem, i, 0)
			available = available_mass(mass, domain.kinetic_outflux(ichem, i, 0), dt)
			flux = limit(flux, dt, available)
			domain.dep_out[ichem, i] = flux
			domain.dep_in[ichem, i] = flux

	return errorsV, ERRMSGS


def erosion(sim, name):
	''' particulate chemical scoured from the surface layer, plus porewater release '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	dt = sim.dt
	for i in range(domain.ncomp):
		k = domain.nstack[i]
		if k < 1:
			continue
		for ichem in range(domain.nchem):
			c = domain.conc[ichem, i, k]
			flux = particulate_flux(domain.erosion[:, i], c, domain.fp[ichem, :, i, k])
			if flux <= 0.0:
				continue
			kinetics = domain.kinetic_outflux(ichem, i, k)
			mass = domain.volume[i, k] * c * domain.particulate_fraction(ichem, i, k)
			flux = limit(flux, dt, available_mass(mass, kinetics, dt))
			domain.ers_out[ichem, i] = flux
			domain.ers_in[ichem, i] = flux

			fmobile = domain.mobile_fraction(ichem, i, k)
			release = porewater_release(domain.volume[i, k], domain.new_volume[i, k], c, fmobile)
			if release > 0.0:
				pore = release / dt * sim.erosion_scale
				mass = domain.volume[i, k] * c * fmobile
				pore = limit(pore, dt, available_mass(mass, kinetics, dt))
				domain.pore_out[ichem, i] = pore
				domain.pore_in[ichem, i] = pore

	return errorsV, ERRMSGS
