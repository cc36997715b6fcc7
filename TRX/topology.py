''' Copyright (c) 2020 by RESPEC, INC.
Author: Robert Heaphy, Ph.D.
License: LGPL2
Compartment topology for the overland grid and the channel network '''

from enum import IntEnum
from numpy import arange, asarray, full, nonzero, zeros, int64


NSOURCES = 11


class TopologyError(ValueError):
    '''Declared network or grid dimensions disagree with the data supplied for them.'''


class Source(IntEnum):
    '''Flow path slots of a compartment; 1-8 are compass directions.'''
    POINT = 0
    NORTH = 1
    NORTHEAST = 2
    EAST = 3
    SOUTHEAST = 4
    SOUTH = 5
    SOUTHWEST = 6
    WEST = 7
    NORTHWEST = 8
    FLOODPLAIN = 9
    BOUNDARY = 10


CARDINAL = (Source.NORTH, Source.EAST, Source.SOUTH, Source.WEST)
COMPASS = tuple(Source(k) for k in range(1, 9))


def opposite(direction):
    '''Compass direction pointing back the other way, e.g. NORTH -> SOUTH'''
    if direction not in COMPASS:
        raise ValueError(f'{direction} is not a compass direction')
    return Source((direction + 3) % 8 + 1)


class Layer(int):
    '''Position in a compartment: the water column or one solid layer of the stack.

    Solid layers count from 1 (deepest) up to the current surface layer; the
    water column sits on top of the stack and is stored at array position 0.
    '''

    def __new__(cls, index):
        index = int(index)
        if index < 0:
            raise ValueError(f'layer index must be >= 0, got {index}')
        return super().__new__(cls, index)

    @classmethod
    def water_column(cls):
        return cls(0)

    @classmethod
    def solid(cls, index):
        if int(index) < 1:
            raise ValueError(f'solid layers are numbered from 1, got {index}')
        return cls(index)

    @property
    def is_water_column(self):
        return self == 0

    def __repr__(self):
        return 'WaterColumn' if self == 0 else f'SolidLayer({int(self)})'

    __str__ = __repr__


WATER_COLUMN = Layer.water_column()


class OverlandGrid():
    '''Active cells of a raster; neighbors along the four cardinal directions.

    mask: 2-D boolean array, True where the cell is part of the watershed
    outlets: sequence of (row, col) cells that drain across the domain boundary
    '''

    kind = 'OVERLAND'
    directions = CARDINAL

    def __init__(self, mask, outlets=(), cellsize=1.0, xllcorner=0.0, yllcorner=0.0, nodata=-9999.0):
        mask = asarray(mask, dtype=bool)
        if mask.ndim != 2:
            raise TopologyError(f'overland mask must be 2-D, got {mask.ndim} dimension(s)')
        self.mask = mask
        self.nrows, self.ncols = mask.shape
        self.cellsize = float(cellsize)
        self.xllcorner = float(xllcorner)
        self.yllcorner = float(yllcorner)
        self.nodata = float(nodata)

        rows, cols = nonzero(mask)           # row-major order
        self.cells = list(zip(rows.tolist(), cols.tolist()))
        self.ncomp = len(self.cells)
        self.index = full(mask.shape, -1, dtype=int64)
        self.index[rows, cols] = arange(self.ncomp)

        self.outlet = zeros(self.ncomp, dtype=bool)
        for row, col in outlets:
            self.outlet[self.compartment(row, col)] = True

        self.neighbors = self._resolve()

    @classmethod
    def from_cells(cls, nrows, ncols, cells, **kwargs):
        '''Build the grid from a declared size and a list of (row, col) active cells'''
        mask = zeros((int(nrows), int(ncols)), dtype=bool)
        for row, col in cells:
            if not (0 <= row < nrows and 0 <= col < ncols):
                raise TopologyError(f'cell ({row}, {col}) lies outside the declared {nrows} x {ncols} grid')
            mask[row, col] = True
        if mask.sum() != len(cells):
            raise TopologyError(f'{len(cells)} cells declared but only {mask.sum()} are distinct')
        return cls(mask, **kwargs)

    def compartment(self, row, col):
        if not (0 <= row < self.nrows and 0 <= col < self.ncols) or self.index[row, col] < 0:
            raise TopologyError(f'cell ({row}, {col}) is not an active overland cell')
        return int(self.index[row, col])

    def label(self, icomp):
        row, col = self.cells[icomp]
        return f'{row}_{col}'

    def _resolve(self):
        offsets = {Source.NORTH: (-1, 0), Source.EAST: (0, 1), Source.SOUTH: (1, 0), Source.WEST: (0, -1)}
        neighbors = full((self.ncomp, NSOURCES), -1, dtype=int64)
        for icomp, (row, col) in enumerate(self.cells):
            for direction, (drow, dcol) in offsets.items():
                r, c = row + drow, col + dcol
                if 0 <= r < self.nrows and 0 <= c < self.ncols:
                    neighbors[icomp, direction] = self.index[r, c]
        return neighbors


class ChannelNetwork():
    '''Links of channel nodes joined at junctions.

    nnodes: number of nodes for each link (links are numbered from 0)
    updirection, downdirection: per link, the compass direction from each node
        to its upstream and downstream node within the link
    upbranches, downbranches: per link, {direction: link} of the links joining
        at the first (upstream) or last (downstream) node
    outlets: links whose last node drains across the domain boundary
    '''

    kind = 'CHANNEL'
    directions = COMPASS

    def __init__(self, nnodes, updirection, downdirection, upbranches=None, downbranches=None, outlets=()):
        self.nnodes = [int(n) for n in nnodes]
        self.nlinks = len(self.nnodes)
        if len(updirection) != self.nlinks or len(downdirection) != self.nlinks:
            raise TopologyError(f'{self.nlinks} links declared but node directions given for '
                f'{len(updirection)} (up) and {len(downdirection)} (down)')
        for link, n in enumerate(self.nnodes):
            if n < 1:
                raise TopologyError(f'link {link} must have at least one node')
            if len(updirection[link]) != n or len(downdirection[link]) != n:
                raise TopologyError(f'link {link} declares {n} nodes but has {len(updirection[link])} '
                    f'upstream and {len(downdirection[link])} downstream directions')
        self.updirection = [[Source(d) if d else None for d in dirs] for dirs in updirection]
        self.downdirection = [[Source(d) if d else None for d in dirs] for dirs in downdirection]
        self.upbranches = {int(k): {Source(d): int(l) for d, l in v.items()} for k, v in (upbranches or {}).items()}
        self.downbranches = {int(k): {Source(d): int(l) for d, l in v.items()} for k, v in (downbranches or {}).items()}
        for branches in (self.upbranches, self.downbranches):
            for link, joined in branches.items():
                for other in [link, *joined.values()]:
                    if not 0 <= other < self.nlinks:
                        raise TopologyError(f'branch refers to link {other} but only {self.nlinks} links are declared')

        self.offset = zeros(self.nlinks + 1, dtype=int64)
        self.offset[1:] = asarray(self.nnodes).cumsum()
        self.ncomp = int(self.offset[-1])
        self.cells = [(link, node) for link, n in enumerate(self.nnodes) for node in range(n)]

        self.outlet = zeros(self.ncomp, dtype=bool)
        for link in outlets:
            self.outlet[self.compartment(link, self.nnodes[link] - 1)] = True

        self.neighbors = self._resolve()

    def compartment(self, link, node):
        if not (0 <= link < self.nlinks and 0 <= node < self.nnodes[link]):
            raise TopologyError(f'node ({link}, {node}) is not part of the channel network')
        return int(self.offset[link] + node)

    def label(self, icomp):
        link, node = self.cells[icomp]
        return f'{link}_{node}'

    def _resolve(self):
        neighbors = full((self.ncomp, NSOURCES), -1, dtype=int64)

        def connect(icomp, direction, other):
            if direction is None:
                raise TopologyError(f'channel node {self.label(icomp)} has a neighbor with no direction')
            if neighbors[icomp, direction] >= 0 and neighbors[icomp, direction] != other:
                raise TopologyError(f'channel node {self.label(icomp)} has two neighbors to the {direction.name}')
            neighbors[icomp, direction] = other

        for link, n in enumerate(self.nnodes):
            for node in range(n):
                icomp = self.compartment(link, node)
                # a single node link is both the first and the last node
                if node == 0:
                    for direction, up in self.upbranches.get(link, {}).items():
                        connect(icomp, direction, self.compartment(up, self.nnodes[up] - 1))
                else:
                    connect(icomp, self.updirection[link][node], icomp - 1)
                if node == n - 1:
                    for direction, down in self.downbranches.get(link, {}).items():
                        connect(icomp, direction, self.compartment(down, 0))
                else:
                    connect(icomp, self.downdirection[link][node], icomp + 1)
        return neighbors
