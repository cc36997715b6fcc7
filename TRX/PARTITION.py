''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
'''

'''
Equilibrium phase partitioning of each chemical among the dissolved phase,
DOC bound phase and one particulate phase per solids class.

pic  solids partition coefficient (m3/g), divided by the porosity term
pib  DOC binding coefficient (m3/g), divided by the porosity term
m    solids (or particulate organic carbon) concentration (g/m3)
b    DOC (or effective DOC) concentration (g/m3)

fp[s] = pic * m[s] / (term + pib * b + sum(pic * m))
fb    = pib * b    / (term + pib * b + sum(pic * m))
fd    = 1 - sum(fp) - fb

term is 1 in the water column (coefficients divided by volumetric porosity)
and the water filled porosity phi in solid layers.
'''

from numpy import zeros, isnan
from numba import njit

ERRMSGS = ()

INFINITE = 1.0e30
NONE, SOLIDS, CARBON = 0, 1, 2


@njit(cache=True)
def water_porosity(csed, spgravity):
	''' volume of water per total volume of the water column (no air space) '''
	fsolids = 0.0
	for s in range(len(csed)):
		fsolids += csed[s] / (spgravity[s] * 1.0e6)
	return 1.0 - fsolids


@njit(cache=True)
def saturated_fraction(front, top, bottom, deficit):
	''' water filled fraction of a layer's pore space from the wetting front elevation

	above the layer the layer keeps its initial moisture, below it the layer is
	saturated and in between the saturation is interpolated linearly '''
	if isnan(front):
		return 0.0
	initial = 1.0 - deficit
	if front >= top:
		return initial
	if front <= bottom or top <= bottom:
		return 1.0
	return initial + deficit * (top - front) / (top - bottom)


@njit(cache=True)
def rescale_particulate(fp):
	''' rescale fp in place when rounding pushes its sum past 1; returns the sum '''
	total = 0.0
	for s in range(len(fp)):
		total += fp[s]
	if total > 1.0:
		for s in range(len(fp)):
			fp[s] = fp[s] / total
		total = 1.0
	return total


@njit(cache=True)
def phase_fractions(mode, kp, koc, kb, nux, csed, fpoc, doc, fdoc, porosity, water_column):
	''' returns (fp, fb, fd) for one chemical in one water column or solid layer '''
	nsolids = len(csed)
	fp = zeros(nsolids)
	if mode == NONE:
		return fp, 0.0, 1.0

	pic = zeros(nsolids)
	m = zeros(nsolids)
	sumpicm = 0.0
	for s in range(nsolids):
		if mode == SOLIDS:
			pic0 = kp
			m[s] = csed[s]
		else:
			pic0 = koc
			m[s] = csed[s] * fpoc[s]

		if porosity > 0.0:
			pic0 = pic0 / porosity
		else:
			pic0 = INFINITE

		# particle interaction correction in the water column only
		if water_column and nux > 0.0:
			pic[s] = pic0 / (1.0 + m[s] * pic0 / nux)
		else:
			pic[s] = pic0
		sumpicm += pic[s] * m[s]

	if mode == SOLIDS:
		pib = kb
		b = doc
	else:
		pib = koc
		b = doc * fdoc
	if porosity > 0.0:
		pib = pib / porosity
	else:
		pib = 0.0

	term = 1.0
	if not water_column:
		term = max(porosity, 0.0)
	denominator = term + pib * b + sumpicm
	if denominator <= 0.0:
		return fp, 0.0, 1.0

	for s in range(nsolids):
		fp[s] = pic[s] * m[s] / denominator
	sumfp = rescale_particulate(fp)
	fb = pib * b / denominator
	fd = 1.0 - sumfp - fb
	return fp, fb, fd


def partition(sim, name):
	''' phase fractions for every chemical in every water column and occupied solid layer '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	chem = sim.chemicals
	doc = domain.environment['doc']
	fdoc = domain.environment['fdoc']

	for i in range(domain.ncomp):
		porosity = water_porosity(domain.csed[:, i, 0], chem.spgravity)
		for ichem in range(chem.nchem):
			fp, fb, fd = phase_fractions(chem.mode[ichem], chem.kp[ichem], chem.koc[ichem],
				chem.kb[ichem], chem.nux[ichem], domain.csed[:, i, 0], domain.fpoc[:, i, 0],
				doc[i, 0], fdoc[i, 0], porosity, True)
			domain.fp[ichem, :, i, 0] = fp
			domain.fb[ichem, i, 0] = fb
			domain.fd[ichem, i, 0] = fd

		# solid layers, surface first
		for layer in range(domain.nstack[i], 0, -1):
			fsaturated = saturated_fraction(domain.wetting_front[i], domain.top[i, layer],
				domain.bottom[i, layer], domain.moisture_deficit[i, layer])
			phi = fsaturated * domain.porosity[i, layer]
			for ichem in range(chem.nchem):
				fp, fb, fd = phase_fractions(chem.mode[ichem], chem.kp[ichem], chem.koc[ichem],
					chem.kb[ichem], chem.nux[ichem], domain.csed[:, i, layer], domain.fpoc[:, i, layer],
					doc[i, layer], fdoc[i, layer], phi, False)
				domain.fp[ichem, :, i, layer] = fp
				domain.fb[ichem, i, layer] = fb
				domain.fd[ichem, i, layer] = fd

	return errorsV, ERRMSGS
