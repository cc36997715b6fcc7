import pandas as pd
from TRXIO.protocols import (Category, SupportsReadScenario, SupportsReadTable, SupportsWriteTable,
	SupportsWriteLogging)
from typing import Dict, Tuple, Union

from TRX.scenario import Scenario

TableKey = Tuple[Category, Union[str,None], Union[str,None], Union[str,None]]

class IOManager:
	"""Routes scenario input, result tables and run logs of a TRX run"""

	def __init__(self,
			io_combined: Union[SupportsReadScenario, SupportsWriteTable, None] = None,
			scenario: Union[SupportsReadScenario,None]=None,
			output: Union[SupportsReadTable,SupportsWriteTable,None]=None,
			log: Union[SupportsWriteLogging,None]=None,) -> None:
		""" io_combined: one object serving scenario, output and log, used for
			whichever of the three is not given separately (an HDF5 file usually).
		scenario: SupportsReadScenario/None (Default None)
			source of the chemical, solids, yield and domain tables
		output: SupportsWriteTable & SupportsReadTable / None (Default None)
			destination of station series, mass balances, outlet summaries and
			final concentrations. Tables are also cached here so a caller can
			read them back without touching storage; None keeps them in memory only.
		log: SupportsWriteLogging/None (Default None)
			destination of the run log and library versions
		"""

		self._scenario = io_combined if scenario is None else scenario
		self._output = io_combined if output is None else output
		self._log = io_combined if log is None else log

		self._tables: Dict[TableKey, pd.DataFrame] = {}

	def read_scenario(self) -> Scenario:
		if self._scenario is None:
			raise ValueError('IOManager has no scenario source')
		return self._scenario.read_scenario()

	def write_table(self,
			table:pd.DataFrame,
			category:Category,
			domain:Union[str,None]=None,
			station:Union[str,None]=None,
			name:Union[str,None]=None) -> None:
		self._tables[(category, domain, station, name)] = table.copy(deep=True)
		if self._output is not None:
			self._output.write_table(table, category, domain, station, name)

	def read_table(self,
			category:Category,
			domain:Union[str,None]=None,
			station:Union[str,None]=None,
			name:Union[str,None]=None) -> pd.DataFrame:
		cached = self._tables.get((category, domain, station, name))
		if cached is not None:
			return cached.copy(deep=True)
		if self._output is not None:
			return self._output.read_table(category, domain, station, name)
		return pd.DataFrame()

	def tables(self):
		'''keys (category, domain, station, name) of every table written this run'''
		return list(self._tables)

	def write_log(self, trx_log:pd.DataFrame) -> None:
		if self._log: self._log.write_log(trx_log)

	def write_versioning(self, versions:pd.DataFrame) -> None:
		if self._log: self._log.write_versioning(versions)
