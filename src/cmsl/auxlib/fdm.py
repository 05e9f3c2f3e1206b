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
"""First derivatives on the region-partitioned finite-volume mesh.

For each chain of regions the first and last control volumes use the
second-order forward and backward schemes; all other control volumes use a
central scheme

    df/dx(i) = (f[i+1] - f[i-1]) / span(i)

where ``span(i)`` is the distance between the centres of the two
neighbours. Inside a region that is ``2 h`` (``h = dx * l``). At an
interface the neighbour on the other side sits half a width of each region
away, so the last control volume of the left region gets
``(3 h_left + h_right) / 2`` and the first control volume of the right
region gets ``(h_left + 3 h_right) / 2``.
"""

import numpy as onp
import jax.numpy as np

from .errors import InsufficientMesh
from .mesh import ELECTROLYTE, RegionLayout
from .state import SegmentedVector


class Stencil:
    '''
    Precomputed three-point stencil for one chain of adjacent regions
    '''

    def __init__(self, regions, counts, widths):

        regions = tuple(regions)

        for r in regions:
            if counts[r] < 3:
                raise InsufficientMesh(r, counts[r])

        spans = []
        for k, r in enumerate(regions):
            h = widths[r]
            span = onp.full(counts[r], 2 * h)
            if k > 0:
                span[0] = 0.5 * (widths[regions[k-1]] + 3 * h)
            if k < len(regions) - 1:
                span[-1] = 0.5 * (3 * h + widths[regions[k+1]])
            spans.append(span)

        # the two ends are overwritten by the one-sided schemes
        self.spans = np.asarray(onp.concatenate(spans)[1:-1])
        self.h_first = widths[regions[0]]
        self.h_last = widths[regions[-1]]

        self.layout = RegionLayout(regions, tuple(counts[r] for r in regions))

    def __call__(self, f):

        f = np.asarray(f)

        d_first = (-3 * f[0] + 4 * f[1] - f[2]) / (2 * self.h_first)
        d_mid = (f[2:] - f[:-2]) / self.spans
        d_last = (3 * f[-1] - 4 * f[-2] + f[-3]) / (2 * self.h_last)

        return np.concatenate([d_first[None], d_mid, d_last[None]])


def first_derivative(f, regions, counts, widths, name='df'):
    '''
    One-off derivative of 'f' sampled on 'regions'

    counts: {region: number of control volumes}
    widths: {region: control-volume width (m)}
    '''
    stencil = Stencil(regions, counts, widths)
    return SegmentedVector(stencil(f), stencil.layout, name)


def pre_derivative_fns(params):
    '''
    Bind the stencils of a parameter set and return 'thermal_derivatives'
    '''

    mesh = params.mesh
    counts = {r: params.N.count(r) for r in ELECTROLYTE}
    widths = mesh.widths

    # the solid phase is discontinuous across the separator
    stencil_sp = Stencil(('p',), counts, widths)
    stencil_sn = Stencil(('n',), counts, widths)
    stencil_e = Stencil(ELECTROLYTE, counts, widths)

    layout_s = RegionLayout(('p', 'n'), (counts['p'], counts['n']))

    def thermal_derivatives(Phi_s, Phi_e, c_e):
        '''
        Spatial derivatives of the solid potential, electrolyte potential
        and electrolyte concentration used by the ohmic heat
        '''
        dPhi_s = np.concatenate([stencil_sp(Phi_s.p), stencil_sn(Phi_s.n)])
        dPhi_e = stencil_e(np.concatenate([Phi_e.p, Phi_e.s, Phi_e.n]))
        dc_e = stencil_e(np.concatenate([c_e.p, c_e.s, c_e.n]))

        return (SegmentedVector(dPhi_s, layout_s, 'dPhi_s'),
                SegmentedVector(dPhi_e, stencil_e.layout, 'dPhi_e'),
                SegmentedVector(dc_e, stencil_e.layout, 'dc_e'))

    return thermal_derivatives
