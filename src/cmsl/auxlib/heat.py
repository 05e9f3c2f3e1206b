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
"""Heat generation rates of the thermal model."""

import jax.numpy as np

from .coeffs import conductivity_effective, surface_area_to_volume_ratio
from .const import F, R
from .fdm import pre_derivative_fns
from .mesh import ELECTRODES, ELECTROLYTE


def pre_heat_fns(p):
    '''
    Bind the stencils and coefficients and return
    'build_heat_generation_rates'
    '''

    thermal_derivatives = pre_derivative_fns(p)

    a_p, a_n = surface_area_to_volume_ratio(p)
    sigma_eff_p, sigma_eff_n = conductivity_effective(p)
    t_plus = p.t_plus

    def build_heat_generation_rates(states):
        '''
        Reversible, reaction and ohmic heat per region [W/m^3]
        '''

        Phi_s = states['Phi_s']
        Phi_e = states['Phi_e']
        j = states['j_aging']
        T = states['T']
        c_e = states['c_e']
        dUdT = states['dU_dT']
        eta = states['eta']
        K_eff = states['K_eff']

        dPhi_s, dPhi_e, dc_e = thermal_derivatives(Phi_s, Phi_e, c_e)

        # ---- reversible ----

        Q_rev_p = F * a_p * j.p * T.p * dUdT.p
        Q_rev_n = F * a_n * j.n * T.n * dUdT.n

        # ---- reaction ----

        Q_rxn_p = F * a_p * j.p * eta.p
        Q_rxn_n = F * a_n * j.n * eta.n

        # ---- ohmic ----

        nu_p, nu_s, nu_n = p.laws.thermodynamic_factor(c_e.p, c_e.s, c_e.n, T.p, T.s, T.n, p)

        Q_ohm_p = (sigma_eff_p * dPhi_s.p**2 + K_eff.p * dPhi_e.p**2
                   + 2 * R * K_eff.p * T.p * (1 - t_plus) * nu_p / F * (dc_e.p / c_e.p) * dPhi_e.p)
        # no solid phase in the separator
        Q_ohm_s = (K_eff.s * dPhi_e.s**2
                   + 2 * R * K_eff.s * T.s * (1 - t_plus) * nu_s / F * (dc_e.s / c_e.s) * dPhi_e.s)
        Q_ohm_n = (sigma_eff_n * dPhi_s.n**2 + K_eff.n * dPhi_e.n**2
                   + 2 * R * K_eff.n * T.n * (1 - t_plus) * nu_n / F * (dc_e.n / c_e.n) * dPhi_e.n)

        states.set('Q_rev', np.concatenate([Q_rev_p, Q_rev_n]), ELECTRODES)
        states.set('Q_rxn', np.concatenate([Q_rxn_p, Q_rxn_n]), ELECTRODES)
        states.set('Q_ohm', np.concatenate([Q_ohm_p, Q_ohm_s, Q_ohm_n]), ELECTROLYTE)

        return states

    return build_heat_generation_rates


def build_heat_generation_rates(states, p):
    return pre_heat_fns(p)(states)
