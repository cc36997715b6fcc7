''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
'''

from datetime import datetime as dt
from pandas import DataFrame, Timestamp, to_timedelta

from TRX.configuration import activities
from TRX.scenario import build_simulation, stations, SteadyForcing
from TRX.utilities import (versions, station_values, mass_balance, outlet_summary, concentration_table,
    group_concentrations, maximum_table)
from TRXIO.io import IOManager
from TRXIO.protocols import Category, SupportsForcing
from TRXIO.grids import read_restart, write_restart


def main(io_manager:IOManager, restart_in:str=None, restart_out:str=None, forcing=None, verbose:bool=True):
    """Runs main TRX program.

    Parameters
    ----------

    restart_in: str - [optional] Default is None.
        Directory of restart grids replacing the scenario's initial concentrations.
    restart_out: str - [optional] Default is None.
        Directory receiving restart grids of the final concentrations.
    forcing: [optional] Default is steady scenario inputs.
        Object whose update(sim) refreshes the hydraulic and solids inputs every step.
    verbose: Boolean - [optional] Default is True.
        Also saves library versions with the run log.
    Return
    ------------
    Simulation
        the state at the end of the run

    """

    msg = messages()
    msg(1, 'Processing started')

    scenario = io_manager.read_scenario()
    sim = build_simulation(scenario)
    if restart_in:
        read_restart(sim, restart_in)
        msg(2, f'Initial concentrations read from {restart_in}')
    forcing = SteadyForcing() if forcing is None else forcing
    if not isinstance(forcing, SupportsForcing):
        raise TypeError(f'forcing must provide update(sim), got {type(forcing).__name__}')

    nsteps = int(scenario.control['Steps'])
    report = max(int(scenario.control.get('Report', 1)), 1)
    start = Timestamp(scenario.control.get('Start', '2000-01-01'))
    monitored = {name: stations(scenario, domain) for name, domain in sim.domains.items()}
    records = {(name, station): [] for name, found in monitored.items() for station in found}

    names = ', '.join(sim.chemicals.names)
    msg(1, f'Simulation Start: {start}, Steps: {nsteps}, DT(seconds): {sim.dt}, Chemicals: {names}')
    for _ in range(nsteps):
        forcing.update(sim)
        step(sim, msg)
        if sim.steps % report == 0:
            stamp = start + to_timedelta(sim.time, unit='s')
            for name, found in monitored.items():
                domain = sim.domain(name)
                for station, icomp in found.items():
                    row = {'time': stamp}
                    for ichem, chemical in enumerate(sim.chemicals.names):
                        for key, value in station_values(domain, ichem, icomp).items():
                            row[f'{chemical}_{key}'] = value
                    records[(name, station)].append(row)

    for (name, station), rows in records.items():
        if rows:
            io_manager.write_table(DataFrame(rows).set_index('time'), Category.RESULTS, name, station, 'CHEMICAL')
    for name, domain in sim.domains.items():
        tables = {'MASSBALANCE': mass_balance(domain, sim.chemicals),
            'OUTLETS': outlet_summary(domain, sim.chemicals),
            'CONCENTRATION': concentration_table(domain, sim.chemicals),
            'MAXIMUM': maximum_table(domain, sim.chemicals),
            'GROUPS': group_concentrations(domain, sim.chemicals)}
        for activity, table in tables.items():
            if not table.empty:
                io_manager.write_table(table, Category.RESULTS, name, 'ALL', activity)
    if restart_out:
        write_restart(sim, restart_out)
        msg(2, f'Restart grids written to {restart_out}')

    msglist = msg(1, 'Done', final=True)

    df = DataFrame(msglist, columns=['logfile'])
    io_manager.write_log(df)

    if verbose:
        df = versions(['tables'])
        io_manager.write_versioning(df)
    return sim


def step(sim, msg=None):
    '''Advance every domain one timestep in the order set by configuration.activities'''
    for domain in sim.domains.values():
        domain.reset_fluxes()

    reported = len(sim.instabilities)
    for operation, processes in activities.items():
        for activity, function in processes.items():
            target = activity if operation == 'CONCENTRATION' else operation
            if target != 'FLOODPLAIN' and target not in sim.domains:
                continue
            errors, errmessages = function(sim, target)
            if msg is None:
                continue
            for errorcnt, errormsg in zip(errors, errmessages):
                if errorcnt > 0:
                    msg(4, f'Error count {errorcnt}: {errormsg}')

    if msg is not None:
        for event in sim.instabilities[reported:]:
            msg(3, f'Instability at t={event.time:.1f}s: {event.domain} {event.compartment} {event.layer!r} '
                f'{event.chemical} mass {event.value:.6g} g set to zero')

    for domain in sim.domains.values():
        domain.advance()
    sim.time += sim.dt
    sim.steps += 1


def messages():
    '''Closure routine; msg() prints messages to screen and run log'''
    start = dt.now()
    mlist = []
    def msg(indent, message, final=False):
        now = dt.now()
        m = str(now)[:22] + '   ' * indent + message
        if final:
            mn,sc = divmod((now-start).seconds, 60)
            ms = (now-start).microseconds // 100_000
            m = '; '.join((m, f'Run time is about {mn:02}:{sc:02}.{ms} (mm:ss)'))
        print(m)
        mlist.append(m)
        return mlist
    return msg
