''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
'''

'''
Mass conservation limiter shared by every flux and kinetics process.

potential = sum(outflux) * dt
available = mass - committed * dt, never below zero
when potential > available every contributing outflux is scaled by available / potential
'''

from numba import njit


@njit(cache=True)
def available_mass(mass, committed, dt):
	''' mass (g) less the mass committed to other sinks (g/s) over the step '''
	available = mass - committed * dt
	if available < 0.0:
		available = 0.0
	return available


@njit(cache=True)
def scale_factor(potential, available):
	''' 1.0 exactly when the potential loss fits in the available mass '''
	if potential > available:
		return available / potential
	return 1.0


@njit(cache=True)
def limit_outflux(outflux, dt, available):
	''' scale the outflux array (g/s) in place; returns the scale factor applied '''
	potential = 0.0
	for k in range(len(outflux)):
		potential += outflux[k]
	potential = potential * dt

	scale = scale_factor(potential, available)
	if scale < 1.0:
		for k in range(len(outflux)):
			outflux[k] = outflux[k] * scale
	return scale


@njit(cache=True)
def limit(outflux, dt, available):
	''' single outflux (g/s) capped to the available mass '''
	return outflux * scale_factor(outflux * dt, available)
