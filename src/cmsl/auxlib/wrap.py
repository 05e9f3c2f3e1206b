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
"""Residual evaluation wrapper."""

import jax
import jax.numpy as np

from . import logger
from .core import pre_aux_fns
from .errors import MissingState
from .heat import pre_heat_fns
from .mesh import ELECTRODES, ELECTROLYTE, REGIONS, get_layout
from .state import SegmentedVector, StateContainer

# regions spanned by each primary state
PRIMARY_REGIONS = {
    'Phi_s': ELECTRODES,
    'Phi_e': ELECTROLYTE,
    'c_e': ELECTROLYTE,
    'j': ELECTRODES,
    'j_s': ('n',),
    'film': ('n',),
    'c_s_avg': ELECTRODES,
    'Q': ELECTRODES,
    'T': REGIONS,
    'I': (),
}


def primary_layout(params, name):
    regions = PRIMARY_REGIONS.get(name, ())
    radial = name == 'c_s_avg' and params.fickian
    return get_layout(params.N, regions, radial)


def aux_wrapper(params, thermal=True, jit=False):
    '''
    Return 'evaluate', which maps the primary states of one residual
    evaluation to a fully populated state container

    primary: {name: array}; 'T' may be empty, a single value or the full profile
    '''

    build_auxiliary_states = pre_aux_fns(params)

    if thermal:
        build_heat_generation_rates = pre_heat_fns(params)

    def evaluate(primary):

        logger.debug(f"Evaluating auxiliary states from {sorted(primary)}")

        states = StateContainer(params.N)

        for name, values in primary.items():
            if name == 'T':
                # tagged with its regions by build_T
                states.set(name, values)
            else:
                states.put(name, SegmentedVector(values, primary_layout(params, name), name))

        build_auxiliary_states(states)

        if thermal:
            build_heat_generation_rates(states)

        return states

    logger.info(f"Residual wrapper ready: {sum(params.N.count(r) for r in ELECTROLYTE)} "
                f"control volumes, thermal={thermal}, jit={jit}")

    if jit:
        return jax.jit(evaluate)

    return evaluate


def assign_dofs(params, variables):
    '''
    Contiguous index table {name: SegmentedVector of indices} for the
    given variables, in order
    '''
    ind = {}
    start = 0
    for var in variables:
        layout = primary_layout(params, var)
        size = layout.size if layout.partitioned else 1
        ind[var] = SegmentedVector(np.arange(start, start + size), layout, var)
        start += size

    return ind


def build_residuals(res_tot, res, ind, variables=None):
    '''
    Copy the residual of every variable into 'res_tot' at its indices and
    return the updated vector
    '''
    if variables is None:
        variables = tuple(res.keys())

    for var in variables:
        if var not in res or var not in ind:
            raise MissingState(var)

        ind_var = ind[var]
        res_var = res[var]

        if isinstance(ind_var, SegmentedVector):
            ind_var = ind_var.values
        if isinstance(res_var, SegmentedVector):
            res_var = res_var.values

        res_tot = res_tot.at[ind_var].set(res_var)

    return res_tot
