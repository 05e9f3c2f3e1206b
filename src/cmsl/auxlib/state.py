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
"""Segmented vectors and the state container."""

import jax
import jax.numpy as np

from .errors import MissingState, ShapeMismatch
from .mesh import RegionLayout, get_layout


@jax.tree_util.register_pytree_node_class
class SegmentedVector:
    '''
    A 1D array split into named contiguous regions

    The region views (.a, .p, .s, .n, .z) are slices of the backing array
    resolved through the layout's offset table.
    '''

    def __init__(self, values, layout, name='vector'):

        values = np.asarray(values)
        if values.ndim == 0:
            values = values.reshape(1)
        elif values.ndim != 1:
            raise ShapeMismatch(name, layout.size, values.shape)

        if layout.partitioned and values.shape[0] != layout.size:
            raise ShapeMismatch(name, layout.size, values.shape[0])

        self.values = values
        self.layout = layout
        self.name = name

    # ---- pytree ----

    def tree_flatten(self):
        return (self.values,), (self.layout, self.name)

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        # no validation, jax may pass placeholders here
        obj = object.__new__(cls)
        obj.values, = children
        obj.layout, obj.name = aux_data
        return obj

    # ---- views ----

    @property
    def regions(self):
        return self.layout.regions

    @property
    def lengths(self):
        return self.layout.lengths

    def region(self, name):
        return self.values[self.layout.slice(name, self.name)]

    @property
    def a(self):
        return self.region('a')

    @property
    def p(self):
        return self.region('p')

    @property
    def s(self):
        return self.region('s')

    @property
    def n(self):
        return self.region('n')

    @property
    def z(self):
        return self.region('z')

    def __len__(self):
        return self.values.shape[0]

    def __getitem__(self, ind):
        return self.values[ind]

    def __repr__(self):
        return f"SegmentedVector({self.name!r}, regions={self.regions}, lengths={self.lengths})"


@jax.tree_util.register_pytree_node_class
class StateContainer:
    '''
    Mapping from quantity name to segmented vector

    Created fresh for every residual evaluation. Nothing in here survives
    to the next call.
    '''

    def __init__(self, counts, states=None):
        self.counts = counts
        self._states = {}
        if states is not None:
            for name, vec in states.items():
                self.put(name, vec)

    def tree_flatten(self):
        names = tuple(self._states.keys())
        return tuple(self._states[k] for k in names), (self.counts, names)

    @classmethod
    def tree_unflatten(cls, aux_data, children):
        obj = object.__new__(cls)
        obj.counts, names = aux_data
        obj._states = dict(zip(names, children))
        return obj

    def layout(self, regions, lengths=None, radial=False):
        regions = tuple(regions)
        if lengths is None:
            return get_layout(self.counts, regions, radial)
        return RegionLayout(regions, tuple(lengths))

    def set(self, name, values, regions=(), lengths=None, radial=False):
        '''
        Store 'values' under 'name'

        regions: region names spanned, in order; () for unpartitioned values
        lengths: explicit region lengths, default from the mesh counts
        radial: electrode regions hold one value per radial shell
        '''
        vec = SegmentedVector(values, self.layout(regions, lengths, radial), name)
        self._states[name] = vec
        return vec

    def put(self, name, vec):
        if not isinstance(vec, SegmentedVector):
            raise TypeError(f"'{name}' must be a SegmentedVector, got {type(vec).__name__}")
        self._states[name] = vec
        return vec

    def get(self, name):
        try:
            return self._states[name]
        except KeyError:
            raise MissingState(name) from None

    def __getitem__(self, name):
        return self.get(name)

    def __contains__(self, name):
        return name in self._states

    def __iter__(self):
        return iter(self._states)

    def __len__(self):
        return len(self._states)

    def names(self):
        return tuple(self._states.keys())

    def copy(self):
        return StateContainer(self.counts, dict(self._states))

    def to_dict(self):
        return {k: v.values for k, v in self._states.items()}
