from typing import Protocol, Union, runtime_checkable
import pandas as pd
from enum import Enum
from TRX.scenario import Scenario

class Category(Enum):
	RESULTS = 'RESULT'

@runtime_checkable
class SupportsReadScenario(Protocol):
	def read_scenario(self) -> Scenario:
		...

@runtime_checkable
class SupportsWriteScenario(Protocol):
	def write_scenario(self, scenario:Scenario) -> None:
		...

@runtime_checkable
class SupportsReadTable(Protocol):
	def read_table(self,
		category:Category,
		domain:Union[str,None]=None,
		station:Union[str,None]=None,
		name:Union[str,None]=None) -> pd.DataFrame:
		...

@runtime_checkable
class SupportsWriteTable(Protocol):
	def write_table(self,
		table:pd.DataFrame,
		category:Category,
		domain:Union[str,None]=None,
		station:Union[str,None]=None,
		name:Union[str,None]=None) -> None:
		...

@runtime_checkable
class SupportsWriteLogging(Protocol):
	def write_log(self, trx_log:pd.DataFrame) -> None:
		...

	def write_versioning(self, versions:pd.DataFrame) -> None:
		...

@runtime_checkable
class SupportsForcing(Protocol):
	"""Collaborator refreshing hydraulic and solids inputs before every step"""
	def update(self, sim) -> None:
		...
