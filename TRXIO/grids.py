from pathlib import Path
import numpy as np
from typing import Dict, Tuple, Union

from TRX.topology import TopologyError

HEADER = ('ncols', 'nrows', 'xllcorner', 'yllcorner', 'cellsize', 'NODATA_value')

def write_grid(path:Union[str,Path], values:np.ndarray, cellsize:float=1.0, xllcorner:float=0.0,
		yllcorner:float=0.0, nodata:float=-9999.0) -> None:
	"""Write a 2-D array as an ASCII grid (six line header, then rows north to south)"""
	nrows, ncols = values.shape
	with open(path, 'w') as fp:
		for key, value in zip(HEADER, (ncols, nrows, xllcorner, yllcorner, cellsize, nodata)):
			fp.write(f'{key:<14}{value}\n')
		np.savetxt(fp, values, fmt='%.9g')

def read_grid(path:Union[str,Path]) -> Tuple[np.ndarray, Dict[str,float]]:
	"""Read an ASCII grid; returns (values, header)"""
	header = {}
	with open(path) as fp:
		for key in HEADER:
			name, value = fp.readline().split()
			if name.lower() != key.lower():
				raise ValueError(f'{path}: expected {key} in grid header, found {name}')
			header[key] = float(value)
		values = np.loadtxt(fp, ndmin=2)
	nrows, ncols = int(header['nrows']), int(header['ncols'])
	if values.shape != (nrows, ncols):
		raise TopologyError(f'{path}: header declares {nrows} x {ncols} values but {values.shape[0]} x {values.shape[1]} were read')
	return values, header

def write_links(path:Union[str,Path], network, values:np.ndarray) -> None:
	"""Write channel node values link by link: 'link nnodes v1 .. vn' per line"""
	with open(path, 'w') as fp:
		fp.write(f'nlinks {network.nlinks}\n')
		for link, nnodes in enumerate(network.nnodes):
			start = network.offset[link]
			row = ' '.join(f'{v:.9g}' for v in values[start:start + nnodes])
			fp.write(f'{link} {nnodes} {row}\n')

def read_links(path:Union[str,Path], network) -> np.ndarray:
	values = np.zeros(network.ncomp)
	with open(path) as fp:
		nlinks = int(fp.readline().split()[1])
		if nlinks != network.nlinks:
			raise TopologyError(f'{path}: {nlinks} links in file but the network has {network.nlinks}')
		for line in fp:
			if not line.strip():
				continue
			link, nnodes, *data = line.split()
			link, nnodes = int(link), int(nnodes)
			if nnodes != network.nnodes[link] or len(data) != nnodes:
				raise TopologyError(f'{path}: link {link} has {network.nnodes[link]} nodes, file gives {len(data)}')
			start = network.offset[link]
			values[start:start + nnodes] = [float(v) for v in data]
	return values

def _grid_file(directory:Path, chemical:str, layer:int, kind:str) -> Path:
	suffix = 'grd' if kind == 'OVERLAND' else 'txt'
	return directory / kind / f'{chemical}_L{layer}.{suffix}'

def write_restart(sim, directory:Union[str,Path]) -> None:
	"""Concentration of every chemical in every layer, one file per chemical per layer"""
	directory = Path(directory)
	for name, domain in sim.domains.items():
		(directory / name).mkdir(parents=True, exist_ok=True)
		topology = domain.topology
		for ichem, chemical in enumerate(sim.chemicals.names):
			for layer in range(domain.maxstack + 1):
				path = _grid_file(directory, chemical, layer, name)
				if name == 'OVERLAND':
					values = np.full((topology.nrows, topology.ncols), topology.nodata)
					for icomp, (row, col) in enumerate(topology.cells):
						if layer <= domain.nstack[icomp]:
							values[row, col] = domain.conc[ichem, icomp, layer]
					write_grid(path, values, topology.cellsize, topology.xllcorner, topology.yllcorner, topology.nodata)
				else:
					write_links(path, topology, domain.conc[ichem, :, layer])

def read_restart(sim, directory:Union[str,Path]) -> None:
	"""Replace concentrations with those of the restart files found in directory"""
	directory = Path(directory)
	for name, domain in sim.domains.items():
		topology = domain.topology
		for ichem, chemical in enumerate(sim.chemicals.names):
			for layer in range(domain.maxstack + 1):
				path = _grid_file(directory, chemical, layer, name)
				if not path.exists():
					continue
				if name == 'OVERLAND':
					values, header = read_grid(path)
					if values.shape != (topology.nrows, topology.ncols):
						raise TopologyError(f'{path}: grid is {values.shape[0]} x {values.shape[1]} but the '
							f'overland domain is {topology.nrows} x {topology.ncols}')
					for icomp, (row, col) in enumerate(topology.cells):
						value = values[row, col]
						domain.conc[ichem, icomp, layer] = 0.0 if value == header['NODATA_value'] else value
				else:
					domain.conc[ichem, :, layer] = read_links(path, topology)
