''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

'''
Explicit mass balance update of every water column and occupied solid layer.

new mass = mass + (sum of influx - sum of outflux) * dt
new concentration = new mass / next step volume (0 when the volume vanishes)

A negative new mass is set to zero; when its magnitude reaches the tolerance
the result is recorded as an instability event as well.

The largest water column (g/m3) and surface layer (mg/kg) concentrations
of every compartment are kept for reporting.
'''

from numpy import maximum, zeros
from numba import njit
from TRX.chemistry import NKINETIC
from TRX.state import InstabilityEvent
from TRX.topology import Layer, Source

ERRMSGS = ('CONCENTRATION: negative mass beyond round-off tolerance set to zero',)   #ERRMSG0

STABLE, ROUNDOFF, UNSTABLE = 0, 1, 2


@njit(cache=True)
def integrate(mass, influx, outflux, dt, new_volume, tolerance):
	''' returns (new concentration, new mass, unclamped new mass, status) '''
	value = mass + (influx - outflux) * dt
	status = STABLE
	new_mass = value
	if value < 0.0:
		status = ROUNDOFF if -value < tolerance else UNSTABLE
		new_mass = 0.0
	if new_volume > 0.0:
		return new_mass / new_volume, new_mass, value, status
	return 0.0, new_mass, value, status


def concentration(sim, name):
	''' next step concentrations of every chemical in the domain '''
	errorsV = zeros(len(ERRMSGS), dtype=int)

	domain = sim.domain(name)
	dt = sim.dt
	tolerance = sim.tolerance
	d = domain
	kin = slice(0, NKINETIC)

	for ichem in range(d.nchem):
		for i in range(d.ncomp):
			# water column
			mass = d.mass(ichem, i, 0)
			influx = (d.adv_in[ichem, i].sum() + d.dsp_in[ichem, i].sum() + d.ers_in[ichem, i]
				+ d.pore_in[ichem, i] + d.kin_in[ichem, :, i, 0].sum())
			outflux = (d.adv_out[ichem, i].sum() + d.dsp_out[ichem, i].sum() + d.dep_out[ichem, i]
				+ d.inf_out[ichem, i, 0] + d.kin_out[ichem, kin, i, 0].sum())
			c, _, value, status = integrate(mass, influx, outflux, dt, d.new_volume[i, 0], tolerance)
			d.conc_new[ichem, i, 0] = c
			if status == UNSTABLE:
				errorsV[0] += 1
				_report(sim, d, ichem, i, 0, value)

			# solid layers
			k = d.nstack[i]
			d.conc_new[ichem, i, k + 1:] = 0.0
			for layer in range(1, k + 1):
				if d.new_volume[i, layer] < tolerance:
					d.conc_new[ichem, i, layer] = 0.0
					continue
				mass = d.mass(ichem, i, layer)
				influx = d.inf_in[ichem, i, layer] + d.kin_in[ichem, :, i, layer].sum()
				outflux = d.inf_out[ichem, i, layer] + d.kin_out[ichem, kin, i, layer].sum()
				if layer == k:
					influx += d.dep_in[ichem, i]
					outflux += d.ers_out[ichem, i] + d.pore_out[ichem, i]
				c, _, value, status = integrate(mass, influx, outflux, dt, d.new_volume[i, layer], tolerance)
				d.conc_new[ichem, i, layer] = c
				if status == UNSTABLE:
					errorsV[0] += 1
					_report(sim, d, ichem, i, layer, value)

	accumulate(d, dt)
	track_maxima(d)
	track_outlets(d, sim.time + dt)
	return errorsV, ERRMSGS


def _report(sim, domain, ichem, icomp, layer, value):
	sim.instabilities.append(InstabilityEvent(domain.name, sim.chemicals.names[ichem],
		domain.topology.label(icomp), Layer(layer), value, sim.time))


def accumulate(domain, dt):
	''' add this step's transported mass (kg) to the cumulative totals '''
	factor = dt / 1000.0
	domain.adv_in_mass += domain.adv_in * factor
	domain.adv_out_mass += domain.adv_out * factor
	domain.dsp_in_mass += domain.dsp_in * factor
	domain.dsp_out_mass += domain.dsp_out * factor
	domain.dep_mass += domain.dep_out * factor
	domain.ers_mass += domain.ers_out * factor
	domain.pore_mass += domain.pore_out * factor
	domain.inf_mass += domain.inf_out * factor
	domain.kin_out_mass += domain.kin_out * factor
	domain.kin_in_mass += domain.kin_in * factor


def track_outlets(domain, time):
	''' peak outlet flux (kg/s) and the time it occurred '''
	outlets = domain.topology.outlet
	flux = (domain.adv_out[:, :, Source.BOUNDARY] + domain.dsp_out[:, :, Source.BOUNDARY]) / 1000.0
	higher = (flux > domain.peak_flux) & outlets[None, :]
	domain.peak_flux[higher] = flux[higher]
	domain.peak_time[higher] = time


def track_maxima(domain):
	''' largest water column (g/m3) and surface layer (mg/kg) concentrations of the next state '''
	water = domain.conc_new[:, :, 0]
	higher = water > domain.max_conc
	domain.max_conc[higher] = water[higher]
	for i in range(domain.ncomp):
		k = domain.nstack[i]
		if k < 1:
			continue
		solids = domain.csed_new[:, i, k].sum()
		if solids <= 0.0:
			continue
		bed = domain.conc_new[:, i, k] / solids * 1.0e6
		domain.max_bed[:, i] = maximum(domain.max_bed[:, i], bed)
