import pandas as pd
from pandas.io.pytables import read_hdf
from TRXIO.protocols import Category
from typing import Union

from TRX.scenario import Scenario, KEYS

PROPERTY_TABLES = ('CHEMICALS', 'SOLIDS', 'YIELDS')

class HDF5():
	"""One HDF5 file holding a scenario, its results and the run log"""

	def __init__(self, file_path:str) -> None:
		self.file_path = file_path
		self._store = pd.HDFStore(file_path)

	def __del__(self):
		self._store.close()

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, trace):
		self.__del__()

	def read_scenario(self) -> Scenario:
		"""Collect the scenario tables of the file

		/CONTROL/GLOBAL          run settings in an Info column
		/CHEMICALS, /SOLIDS, /YIELDS
		/OVERLAND/<TABLE>, /CHANNEL/<TABLE>
		"""
		scenario = Scenario()
		for path in self._store.keys():
			group, *rest = path[1:].split(sep='/')
			if group == 'CONTROL' and rest == ['GLOBAL']:
				scenario.control = self._store[path].to_dict()['Info']
			elif group in PROPERTY_TABLES and not rest:
				setattr(scenario, group.lower(), self._store[path])
			elif group in KEYS and len(rest) == 1:
				scenario.tables[group][rest[0]] = self._store[path]
		return scenario

	def write_scenario(self, scenario:Scenario) -> None:
		"""Store every non empty scenario table; control values are kept as strings"""
		control = pd.DataFrame({'Info': {key: str(value) for key, value in scenario.control.items()}})
		control.to_hdf(self._store, key='CONTROL/GLOBAL', format='t', data_columns=True)
		for group in PROPERTY_TABLES:
			table = getattr(scenario, group.lower())
			if not table.empty:
				table.to_hdf(self._store, key=group, format='t', data_columns=True)
		for domain, tables in scenario.tables.items():
			for name, table in tables.items():
				if not table.empty:
					table.to_hdf(self._store, key=f'{domain}/{name}', format='t', data_columns=True)

	@staticmethod
	def _path(category:Category, domain:Union[str,None], station:Union[str,None], name:Union[str,None]) -> str:
		return f'{category.name}/{domain}_{station}/{name}'

	def read_table(self,
			category:Category,
			domain:Union[str,None]=None,
			station:Union[str,None]=None,
			name:Union[str,None]=None) -> pd.DataFrame:
		try:
			return read_hdf(self._store, self._path(category, domain, station, name))
		except KeyError:
			return pd.DataFrame()

	def write_table(self,
			table:pd.DataFrame,
			category:Category,
			domain:Union[str,None]=None,
			station:Union[str,None]=None,
			name:Union[str,None]=None,
			compress:bool=False) -> None:
		"""Saves a result table, e.g. /RESULTS/OVERLAND_ALL/MASSBALANCE"""
		complevel = 9 if compress else None
		table.to_hdf(self._store, key=self._path(category, domain, station, name), format='t',
			data_columns=True, complevel=complevel)

	def write_log(self, trx_log:pd.DataFrame) -> None:
		trx_log.to_hdf(self._store, key='RUN_INFO/LOGFILE', data_columns=True, format='t')

	def write_versioning(self, versioning:pd.DataFrame) -> None:
		versioning.to_hdf(self._store, key='RUN_INFO/VERSIONS', data_columns=True, format='t')
