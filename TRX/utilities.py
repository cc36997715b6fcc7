''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
General routines for TRX '''

from numpy import zeros
from pandas import DataFrame

from TRX.chemistry import PATHWAYS, NKINETIC
from TRX.topology import Source, COMPASS


def station_values(domain, ichem, icomp):
    '''
    Water column concentrations reported at a monitoring station.

    Parameters
    ----------
    domain : Domain
    ichem : int
        chemical index
    icomp : int
        compartment index of the station

    Returns
    -------
    dict
        total, dissolved, bound and particulate concentration (g/m3)
    '''

    c = domain.conc[ichem, icomp, 0]
    fd = domain.fd[ichem, icomp, 0]
    fb = domain.fb[ichem, icomp, 0]
    return {'total': c, 'dissolved': c * fd, 'bound': c * fb, 'particulate': c * (1.0 - fd - fb)}


def mass_balance(domain, chemicals):
    '''
    Cumulative transported mass (kg) of each chemical summed over the domain.

    Returns
    -------
    Pandas DataFrame
        one row per chemical, one column per source or process
    '''

    rows = {}
    for ichem, name in enumerate(chemicals.names):
        row = {}
        for source in Source:
            if source in COMPASS:
                continue
            row[f'adv_in_{source.name.lower()}'] = domain.adv_in_mass[ichem, :, source].sum()
            row[f'adv_out_{source.name.lower()}'] = domain.adv_out_mass[ichem, :, source].sum()
        row['dsp_out_boundary'] = domain.dsp_out_mass[ichem, :, Source.BOUNDARY].sum()
        row['dsp_in_boundary'] = domain.dsp_in_mass[ichem, :, Source.BOUNDARY].sum()
        row['deposition'] = domain.dep_mass[ichem].sum()
        row['erosion'] = domain.ers_mass[ichem].sum()
        row['porewater'] = domain.pore_mass[ichem].sum()
        row['infiltration'] = domain.inf_mass[ichem, :, 0].sum()
        for ipath, pathway in enumerate(PATHWAYS[:NKINETIC]):
            row[f'{pathway}_out'] = domain.kin_out_mass[ichem, ipath].sum()
        for ipath, pathway in enumerate(PATHWAYS):
            row[f'{pathway}_in'] = domain.kin_in_mass[ichem, ipath].sum()
        row['mass'] = domain.total_mass(ichem) / 1000.0
        rows[name] = row
    return DataFrame.from_dict(rows, orient='index')


def outlet_summary(domain, chemicals):
    '''Outlet masses (kg), peak flux (kg/s) and time of peak (s) per chemical and outlet'''
    rows = []
    for icomp in domain.topology.outlet.nonzero()[0]:
        for ichem, name in enumerate(chemicals.names):
            rows.append({'outlet': domain.topology.label(icomp), 'chemical': name,
                'adv_out': domain.adv_out_mass[ichem, icomp, Source.BOUNDARY],
                'adv_in': domain.adv_in_mass[ichem, icomp, Source.BOUNDARY],
                'dsp_out': domain.dsp_out_mass[ichem, icomp, Source.BOUNDARY],
                'dsp_in': domain.dsp_in_mass[ichem, icomp, Source.BOUNDARY],
                'peak_flux': domain.peak_flux[ichem, icomp],
                'peak_time': domain.peak_time[ichem, icomp]})
    return DataFrame(rows, columns=['outlet', 'chemical', 'adv_out', 'adv_in', 'dsp_out', 'dsp_in',
        'peak_flux', 'peak_time'])


def outlet_total(domain, ichem):
    '''Net mass (kg) of a chemical that left the domain through all outlets'''
    outlets = domain.topology.outlet
    out = (domain.adv_out_mass[ichem, outlets, Source.BOUNDARY] + domain.dsp_out_mass[ichem, outlets, Source.BOUNDARY]).sum()
    back = (domain.adv_in_mass[ichem, outlets, Source.BOUNDARY] + domain.dsp_in_mass[ichem, outlets, Source.BOUNDARY]).sum()
    return out - back


def concentration_table(domain, chemicals):
    '''Long table of the current concentration of every chemical, compartment and occupied layer'''
    rows = []
    for ichem, name in enumerate(chemicals.names):
        for icomp in range(domain.ncomp):
            for layer in range(domain.nstack[icomp] + 1):
                rows.append((name, domain.topology.label(icomp), layer, domain.conc[ichem, icomp, layer]))
    return DataFrame(rows, columns=['chemical', 'compartment', 'layer', 'concentration'])


PHASES = ('total', 'dissolved', 'bound', 'mobile', 'particulate')


def _phase_fraction(domain, ichem, icomp, layer, phase):
    if phase == 'dissolved':
        return domain.fd[ichem, icomp, layer]
    if phase == 'bound':
        return domain.fb[ichem, icomp, layer]
    if phase == 'mobile':
        return domain.fd[ichem, icomp, layer] + domain.fb[ichem, icomp, layer]
    if phase == 'particulate':
        return domain.fp[ichem, :, icomp, layer].sum()
    return 1.0


def _report_layer(domain, icomp, surface):
    '''Water column, or the surface layer; None when the stack is empty'''
    if not surface:
        return 0
    k = domain.nstack[icomp]
    return k if k >= 1 else None


def group_concentrations(domain, chemicals, phase='total', surface=False):
    '''
    Concentration of each chemical reporting group summed over its members.

    Parameters
    ----------
    phase : str
        one of PHASES, or 'sorbed' for the particulate concentration per
        unit solids mass (mg/kg)
    surface : bool
        report the surface layer instead of the water column

    Returns
    -------
    Pandas DataFrame
        one row per compartment, one column per group (g/m3 or mg/kg)
    '''

    if phase not in PHASES and phase != 'sorbed':
        raise ValueError(f'phase must be one of {PHASES} or sorbed, got {phase}')
    sums = zeros((domain.ncomp, len(chemicals.groups)))
    for icomp in range(domain.ncomp):
        layer = _report_layer(domain, icomp, surface)
        if layer is None:
            continue
        solids = domain.csed[:, icomp, layer].sum()
        for ichem in range(chemicals.nchem):
            if phase == 'sorbed':
                # every chemical held in a solid layer counts as sorbed
                fraction = domain.fp[ichem, :, icomp, layer].sum() if layer == 0 else 1.0
                fraction = fraction / solids * 1.0e6 if solids > 0.0 else 0.0
            else:
                fraction = _phase_fraction(domain, ichem, icomp, layer, phase)
            sums[icomp, chemicals.group[ichem]] += domain.conc[ichem, icomp, layer] * fraction
    return DataFrame(sums, index=[domain.topology.label(i) for i in range(domain.ncomp)],
        columns=chemicals.groups)


def group_phase_fractions(domain, chemicals, phase, surface=False):
    '''Share of each group's total concentration held in one phase (0 where the group is absent)'''
    part = group_concentrations(domain, chemicals, phase, surface)
    total = group_concentrations(domain, chemicals, 'total', surface)
    return (part / total.where(total > 0.0)).fillna(0.0)


TRANSPORT = ('infiltration', 'erosion', 'deposition', 'net_deposition')


def group_transport(domain, chemicals, pathway):
    '''
    Transport of each reporting group out of every water column.

    infiltration is the current flux (g/s); erosion, deposition and
    net_deposition (deposition less erosion) are cumulative masses (kg).
    '''

    if pathway == 'infiltration':
        values = domain.inf_out[:, :, 0]
    elif pathway == 'erosion':
        values = domain.ers_mass
    elif pathway == 'deposition':
        values = domain.dep_mass
    elif pathway == 'net_deposition':
        values = domain.dep_mass - domain.ers_mass
    else:
        raise ValueError(f'pathway must be one of {TRANSPORT}, got {pathway}')
    sums = zeros((domain.ncomp, len(chemicals.groups)))
    for ichem in range(chemicals.nchem):
        sums[:, chemicals.group[ichem]] += values[ichem]
    return DataFrame(sums, index=[domain.topology.label(i) for i in range(domain.ncomp)],
        columns=chemicals.groups)


def maximum_table(domain, chemicals):
    '''Largest water column (g/m3) and surface layer (mg/kg) concentration of every compartment'''
    rows = []
    for ichem, name in enumerate(chemicals.names):
        for icomp in range(domain.ncomp):
            rows.append((name, domain.topology.label(icomp), domain.max_conc[ichem, icomp],
                domain.max_bed[ichem, icomp]))
    return DataFrame(rows, columns=['chemical', 'compartment', 'water', 'surface'])


def versions(import_list=[]):
    '''
    Versions of libraries required by TRX

    Parameters
    ----------
    import_list : list of strings, optional
        DESCRIPTION. The default is [].

    Returns
    -------
    Pandas DataFrame
        Libary verson strings.
    '''

    import sys
    import platform
    import importlib
    import datetime

    names = ['Python']
    data  = [sys.version]
    import_list = ['TRX', 'numpy', 'numba', 'pandas'] + list(import_list)
    for import_ in import_list:
        imodule = importlib.import_module(import_)
        names.append(import_)
        data.append(imodule.__version__)
    names.extend(['os', 'processor', 'Date/Time'])
    data.extend([platform.platform(), platform.processor(),
      str(datetime.datetime.now())[0:19]])
    return DataFrame(data, index=names, columns=['version'])
