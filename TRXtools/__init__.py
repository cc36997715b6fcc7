from importlib.metadata import version

from TRXtools.commands import run, massbalance


__version__ = version('trx-chem')
