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
"""Auxiliary states.

Every ``build_*`` function reads from and writes into the state container.
``pre_aux_fns`` resolves the submodel choices of a parameter set once and
returns the pipeline in its fixed order:

    j_aging -> I, V, P -> T -> c_s_star -> U -> eta -> K_eff
"""

import jax.numpy as np

from . import logger
from .coeffs import calc_I1C
from .const import F
from .errors import UnknownSubmodel
from .mesh import ELECTRODES, ELECTROLYTE, REGIONS
from .para import Aging, SolidDiffusion


def build_j_aging(states, p):
    '''
    Ionic flux including the side reaction, if any

    'j_orig' keeps the flux given by the solver; 'j_aging' (and from here on
    'j') is the one every later step uses.
    '''
    j = states['j']

    j_orig = states.set('j_orig', j.values, ELECTRODES)

    if not p.aging.enabled:
        states.put('j_aging', j_orig)
        states.put('j', j_orig)
        return

    j_s = states['j_s']

    j_aging = np.concatenate([j.p, j.n + j_s.n])

    states.set('j_aging', j_aging, ELECTRODES)
    # redefine the ionic flux
    states.set('j', j_aging, ELECTRODES)


def build_I_V_P(states, p, I1C=None):
    '''
    Current, voltage and power
    '''
    if I1C is None:
        I1C = calc_I1C(p)

    Phi_s = states['Phi_s']

    I = states['I'][0] * I1C
    V = Phi_s[0] - Phi_s[-1]
    P = I * V

    states.set('I', I)
    states.set('V', V)
    states.set('P', P)


def build_T(states, p):
    '''
    Broadcast the reference (or a single given) temperature when the
    temperature profile is not solved for
    '''
    T = states['T']
    num = sum(p.N.count(r) for r in REGIONS)

    if len(T) == 0:
        T = np.full(num, p.T0, dtype=np.float64)
    elif len(T) == 1:
        T = np.full(num, T[0], dtype=np.float64)
    elif T.regions == REGIONS:
        return
    else:
        T = T.values

    states.set('T', T, REGIONS)


def pre_c_s_star_fns(p):
    '''
    Surface concentration for the configured solid diffusion model
    '''

    if p.solid_diffusion is SolidDiffusion.QUADRATIC:

        def build_c_s_star(states):
            c_s_avg = states['c_s_avg']
            j = states['j']
            T = states['T']

            D_sp_eff, D_sn_eff = p.laws.D_s_eff(c_s_avg.p, c_s_avg.n, T.p, T.n, p)

            c_s_star_p = c_s_avg.p - (p.Rp_p / (D_sp_eff * 5)) * j.p
            c_s_star_n = c_s_avg.n - (p.Rp_n / (D_sn_eff * 5)) * j.n

            states.set('c_s_star', np.concatenate([c_s_star_p, c_s_star_n]), ELECTRODES)

    elif p.solid_diffusion is SolidDiffusion.POLYNOMIAL:

        def build_c_s_star(states):
            c_s_avg = states['c_s_avg']
            j = states['j']
            Q = states['Q']
            T = states['T']

            D_sp_eff, D_sn_eff = p.laws.D_s_eff(c_s_avg.p, c_s_avg.n, T.p, T.n, p)

            c_s_star_p = c_s_avg.p + (p.Rp_p / (D_sp_eff * 35)) * (-j.p + 8 * D_sp_eff * Q.p)
            c_s_star_n = c_s_avg.n + (p.Rp_n / (D_sn_eff * 35)) * (-j.n + 8 * D_sn_eff * Q.n)

            states.set('c_s_star', np.concatenate([c_s_star_p, c_s_star_n]), ELECTRODES)

    elif p.solid_diffusion is SolidDiffusion.FICKIAN:

        N = p.N

        def build_c_s_star(states):
            c_s_avg = states['c_s_avg']

            # outermost radial shell of every control volume
            c_s_star_p = c_s_avg.p.reshape(N.p, N.r_p)[:, -1]
            c_s_star_n = c_s_avg.n.reshape(N.n, N.r_n)[:, -1]

            states.set('c_s_star', np.concatenate([c_s_star_p, c_s_star_n]), ELECTRODES)

    else:
        raise UnknownSubmodel('SolidDiffusion', p.solid_diffusion, [m.value for m in SolidDiffusion])

    return build_c_s_star


def build_c_s_star(states, p):
    pre_c_s_star_fns(p)(states)


def build_OCV(states, p):
    '''
    Open circuit voltages of the positive & negative electrodes
    '''
    c_s_star = states['c_s_star']
    T = states['T']

    # Put the surface concentration into a fraction
    theta_p = c_s_star.p / p.c_max_p
    theta_n = c_s_star.n / p.c_max_n

    U_p, dUdT_p = p.laws.OCV_p(theta_p, T.p, p)
    U_n, dUdT_n = p.laws.OCV_n(theta_n, T.n, p)

    states.set('U', np.concatenate([U_p, U_n]), ELECTRODES)
    states.set('dU_dT', np.concatenate([np.broadcast_to(dUdT_p, U_p.shape),
                                        np.broadcast_to(dUdT_n, U_n.shape)]), ELECTRODES)


def pre_eta_fns(p):
    '''
    Overpotentials for the configured film resistance and aging mode
    '''

    R_film_n = p.R_film_n

    if p.aging is Aging.SEI:
        def aging_drop(states, j_n):
            film = states['film']
            return F * j_n * (p.R_SEI + film.n / p.k_n_aging)

    elif p.aging is Aging.R_AGING:
        def aging_drop(states, j_n):
            return F * j_n * p.R_aging

    elif p.aging is Aging.NONE:
        aging_drop = None

    else:
        raise UnknownSubmodel('Aging', p.aging, [m.value for m in Aging])

    def build_eta(states):
        Phi_s = states['Phi_s']
        Phi_e = states['Phi_e']
        U = states['U']
        j = states['j_aging']

        eta_p = Phi_s.p - Phi_e.p - U.p
        eta_n = Phi_s.n - Phi_e.n - U.n

        if R_film_n is not None:
            eta_n = eta_n - j.n * R_film_n

        if aging_drop is not None:
            eta_n = eta_n - aging_drop(states, j.n)

        states.set('eta', np.concatenate([eta_p, eta_n]), ELECTRODES)

    return build_eta


def build_eta(states, p):
    pre_eta_fns(p)(states)


def build_K_eff(states, p):
    '''
    Effective electrolyte conductivity
    '''
    c_e = states['c_e']
    T = states['T']

    K_eff_p, K_eff_s, K_eff_n = p.laws.K_eff(c_e.p, c_e.s, c_e.n, T.p, T.s, T.n, p)

    K_eff = np.concatenate([np.broadcast_to(K_eff_p, c_e.p.shape),
                            np.broadcast_to(K_eff_s, c_e.s.shape),
                            np.broadcast_to(K_eff_n, c_e.n.shape)])

    states.set('K_eff', K_eff, ELECTROLYTE)


def pre_aux_fns(p):
    '''
    Resolve the submodels once and return 'build_auxiliary_states'
    '''

    I1C = calc_I1C(p)
    build_c_s_star = pre_c_s_star_fns(p)
    build_eta = pre_eta_fns(p)

    logger.info(f"Auxiliary states: solid diffusion '{p.solid_diffusion.value}', "
                f"aging '{p.aging.value}', 1C = {I1C:.6g} A/m^2")

    def build_auxiliary_states(states):
        '''
        Derive the auxiliary states in place; the order is fixed
        '''
        build_j_aging(states, p)
        build_I_V_P(states, p, I1C)
        build_T(states, p)
        build_c_s_star(states)
        build_OCV(states, p)
        build_eta(states)
        build_K_eff(states, p)

        return states

    return build_auxiliary_states


def build_auxiliary_states(states, p):
    return pre_aux_fns(p)(states)
