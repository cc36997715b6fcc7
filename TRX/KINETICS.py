''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Chemical reaction pathways in the water column and the surface solid layer.

pathway          outflux (g/s)                    available mass
biodegradation   k * c * V                        c * V
hydrolysis       k * bacteria * c * V             c * V - biodegradation * dt
oxidation        k * oxidant * c * V              c * V - (biodegradation + hydrolysis) * dt
photolysis       k * light * c * V                c * V - biodegradation * dt
radioactive      k * c * V                        c * V - biodegradation * dt
volatilization   k * fd * c * V                   c * V - biodegradation * dt
user defined     k * udr * c * V                  c * V - biodegradation * dt

Only the pathways listed in the available mass column are treated as
committed when a pathway is capped; the others are not subtracted.

Dissolution removes pure phase chemical carried as a solids class:
	outflux = k * 6 * csed * V / (diameter * spgravity * densityw) * (solubility - fd * c)
with densityw = 1000 kg/m3, capped by the solids mass left for the next
step.  The dissolved mass reaches the chemical through the yield table (YIELD).
'''

from numpy import zeros
from numba import njit
from TRX.LIMITER import available_mass, limit
from TRX.chemistry import DISSOLUTION

ERRMSGS = ()

# environment factor multiplying each pathway rate; None is first order
FACTORS = (None, 'bacteria', 'oxidant', 'light', None, None, 'udr')
BIODEGRADATION, HYDROLYSIS, OXIDATION = 0, 1, 2
VOLATILIZATION = 5
DENSITYW = 1000.0


@njit(cache=True)
def pathway_fluxes(rates, factors, c, volume, dt):
	''' capped outfluxes (g/s) of the seven reaction pathways '''
	flux = zeros(len(rates))
	mass = c * volume
	flux[BIODEGRADATION] = limit(rates[0] * factors[0] * mass, dt, mass)
	available = available_mass(mass, flux[BIODEGRADATION], dt)
	flux[HYDROLYSIS] = limit(rates[1] * factors[1] * mass, dt, available)
	flux[OXIDATION] = limit(rates[2] * factors[2] * mass, dt,
		available_mass(mass, flux[BIODEGRADATION] + flux[HYDROLYSIS], dt))
	for p in range(OXIDATION + 1, len(rates)):
		flux[p] = limit(rates[p] * factors[p] * mass, dt, available)
	return flux


@njit(cache=True)
def surface_area(csed, volume, diameter, spgravity):
	''' total particle surface area (m2) of a solids class, spherical grains '''
	return 6.0 * csed * volume / (diameter * spgravity * DENSITYW)


def kinetics(sim, name):
	''' reaction pathway outfluxes for every chemical '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	chem = sim.chemicals
	dt = sim.dt
	env = domain.environment
	factors = zeros(len(FACTORS))

	for i in range(domain.ncomp):
		for layer in domain.layers(i):
			side = 0 if layer == 0 else 1
			volume = domain.volume[i, layer]
			for ichem in range(chem.nchem):
				rates = chem.rates[ichem, :DISSOLUTION, side]
				if not rates.any():
					continue
				for p, key in enumerate(FACTORS):
					factors[p] = 1.0 if key is None else env[key][i, layer]
				factors[VOLATILIZATION] = domain.fd[ichem, i, layer]
				domain.kin_out[ichem, :DISSOLUTION, i, layer] = pathway_fluxes(rates, factors,
					domain.conc[ichem, i, layer], volume, dt)

	return errorsV, ERRMSGS


def dissolution(sim, name):
	''' pure phase solids dissolving into their linked chemical '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	chem = sim.chemicals
	dt = sim.dt
	for isolid, ichem, _ in chem.dissolving():
		for i in range(domain.ncomp):
			for layer in domain.layers(i):
				rate = chem.rates[ichem, DISSOLUTION, 0 if layer == 0 else 1]
				if rate <= 0.0:
					continue
				csed = domain.csed[isolid, i, layer]
				area = surface_area(csed, domain.volume[i, layer], chem.diameter[isolid], chem.spgravity[isolid])
				deficit = chem.solubility[ichem] - domain.fd[ichem, i, layer] * domain.conc[ichem, i, layer]
				if deficit <= 0.0 or area <= 0.0:
					continue
				new_volume = domain.new_volume[i, layer]
				available = available_mass(domain.csed_new[isolid, i, layer] * new_volume, 0.0, dt)
				flux = limit(rate * area * deficit, dt, available)
				domain.dsl_out[isolid, i, layer] = flux
				if new_volume > 0.0:
					domain.csed_new[isolid, i, layer] = max(domain.csed_new[isolid, i, layer] - flux * dt / new_volume, 0.0)

	return errorsV, ERRMSGS
