# Copyright (C) 2025 AuxLiB authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
"""Mesh."""

from dataclasses import dataclass, field

import functools

import numpy as onp

from .errors import MissingState

# positive current collector | cathode | separator | anode | negative current collector
REGIONS = ('a', 'p', 's', 'n', 'z')

ELECTRODES = ('p', 'n')
ELECTROLYTE = ('p', 's', 'n')


@dataclass(frozen=True)
class MeshCounts:
    '''
    Number of control volumes per region, and radial shells per particle
    '''
    p:int = 10
    s:int = 10
    n:int = 10
    a:int = 0
    z:int = 0
    r_p:int = 10
    r_n:int = 10

    def __post_init__(self):
        for name in REGIONS + ('r_p', 'r_n'):
            val = getattr(self, name)
            if int(val) != val or val < 0:
                raise ValueError(f"count '{name}' must be a non-negative integer, got {val}")

    def count(self, region, radial=False):
        num = getattr(self, region)
        if radial and region in ELECTRODES:
            num = num * getattr(self, 'r_' + region)
        return num


@dataclass(frozen=True)
class RegionLayout:
    '''
    Offset table of a segmented vector

    An empty 'regions' tuple stands for an unpartitioned vector (I, V, P).
    '''
    regions:tuple
    lengths:tuple
    bounds:dict = field(init=False, compare=False, hash=False, repr=False)

    def __post_init__(self):
        if len(self.regions) != len(self.lengths):
            raise ValueError(f"{len(self.regions)} regions but {len(self.lengths)} lengths")
        unknown = [r for r in self.regions if r not in REGIONS]
        if unknown:
            raise ValueError(f"unknown regions {unknown}, expected a subset of {REGIONS}")

        ends = onp.cumsum((0,) + tuple(self.lengths))
        bounds = {r: slice(int(ends[i]), int(ends[i+1])) for i, r in enumerate(self.regions)}
        object.__setattr__(self, 'bounds', bounds)

    @property
    def partitioned(self):
        return len(self.regions) > 0

    @property
    def size(self):
        return int(sum(self.lengths))

    def slice(self, region, name='vector'):
        try:
            return self.bounds[region]
        except KeyError:
            raise MissingState(f"{name}.{region}") from None


@functools.lru_cache(maxsize=None)
def get_layout(counts, regions, radial=False):
    '''
    One layout per (configuration, region set); shared by every evaluation
    '''
    regions = tuple(regions)
    lengths = tuple(counts.count(r, radial) for r in regions)
    return RegionLayout(regions, lengths)


@dataclass
class Mesh:

    name:str

    def to_dict(self):
        return self.__dict__


def generate_mesh(counts, thickness, name='aux_mesh_macro'):
    '''
    1D finite-volume mesh through the cell sandwich

    thickness: {region: l} in metres; regions without control volumes may be omitted
    '''

    mesh = Mesh(name)

    mesh.counts = counts

    # dimensionless spacing and physical control-volume widths
    mesh.dx = {}
    mesh.widths = {}
    mesh.cells = {}

    centres = []
    x0 = 0.
    start = 0
    for region in REGIONS:
        num = counts.count(region)
        l = thickness.get(region, 0.)
        if num == 0:
            mesh.dx[region] = 0.
            mesh.widths[region] = 0.
            mesh.cells[region] = onp.arange(start, start, dtype=onp.int32)
            x0 += l
            continue
        dx = 1. / num
        h = dx * l
        mesh.dx[region] = dx
        mesh.widths[region] = h
        mesh.cells[region] = onp.arange(start, start + num, dtype=onp.int32)
        centres.append(x0 + h * (onp.arange(num) + 0.5))
        x0 += l
        start += num

    mesh.points = onp.concatenate(centres) if centres else onp.zeros(0)
    mesh.num_cells = len(mesh.points)
    mesh.length = x0

    return mesh


def region_points(mesh, regions):
    '''
    Control-volume centres of the given regions, concatenated in order
    '''
    idx = onp.concatenate([mesh.cells[r] for r in regions])
    return mesh.points[idx]
