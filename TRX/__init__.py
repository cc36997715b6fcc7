''' Copyright (c) 2020 by RESPEC, INC.
Authors: Robert Heaphy, Ph.D. and Paul Duda
License: LGPL2
'''

from TRX.main import main, step
from TRX.scenario import Scenario, build_simulation
from TRX.utilities import versions, mass_balance
from importlib.metadata import version

__version__ = version('trx-chem')
