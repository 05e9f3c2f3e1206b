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
"""Physics laws.

The auxiliary states only call these; they never look inside. Any object
with the methods of :class:`PhysicsLaws` can be handed to ``ParameterSets``.
Every method receives the parameter set ``p`` last.
"""

from typing import Protocol, runtime_checkable

import jax.numpy as np

from .const import F, R


@runtime_checkable
class PhysicsLaws(Protocol):

    def rxn_rate(self, T_p, T_n, c_s_avg_p, c_s_avg_n, p):
        """Reaction rate constants (k_p, k_n)."""

    def OCV_p(self, theta_p, T_p, p):
        """Open circuit voltage of the positive electrode, (U, dU/dT)."""

    def OCV_n(self, theta_n, T_n, p):
        """Open circuit voltage of the negative electrode, (U, dU/dT)."""

    def D_s_eff(self, c_s_avg_p, c_s_avg_n, T_p, T_n, p):
        """Effective solid diffusivities (D_p, D_n) [m^2/s]."""

    def D_eff(self, c_e_p, c_e_s, c_e_n, T_p, T_s, T_n, p):
        """Effective electrolyte diffusivities per region [m^2/s]."""

    def K_eff(self, c_e_p, c_e_s, c_e_n, T_p, T_s, T_n, p):
        """Effective electrolyte conductivities per region [S/m]."""

    def thermodynamic_factor(self, c_e_p, c_e_s, c_e_n, T_p, T_s, T_n, p):
        """Thermodynamic factor per region [-]."""

    def rxn_p(self, c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p):
        """Pore-wall flux of the positive electrode [mol/(m^2 s)]."""

    def rxn_n(self, c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p):
        """Pore-wall flux of the negative electrode [mol/(m^2 s)]."""


def calcKappa(c):

    a0 = 0.0911
    a1 = 1.9101e-3
    a2 = -1.052e-6
    a3 = 0.1554e-9

    kappa = a0 + a1 * c + a2 * c**2 + a3 * c**3

    return kappa


def calcDf(c_e):

    return 5.34e-10 * np.exp(-0.65 * c_e / 1000)


def calcUoc_neg(sto):

    exp = np.exp
    tanh = np.tanh

    Uoc_an = (0.194 + 1.5 * exp(-120.0 * sto)
            +0.0351 * tanh((sto - 0.286) / 0.083)
            -0.0045 * tanh((sto - 0.849) / 0.119)
            -0.035 * tanh((sto - 0.9233) / 0.05)
            -0.0147 * tanh((sto - 0.5) / 0.034)
            -0.102 * tanh((sto - 0.194) / 0.142)
            -0.022 * tanh((sto - 0.9) / 0.0164)
            -0.011 * tanh((sto - 0.124) / 0.0226)
            +0.0155 * tanh((sto - 0.105) / 0.029))

    return Uoc_an


def calcUoc_pos(sto):

    sto = sto * 1.062

    tanh = np.tanh

    Uoc_ca = (2.16216 + 0.07645 * tanh(30.834 - 54.4806 * sto)
           +2.1581 * tanh(52.294 - 50.294 * sto)
           -0.14169 * tanh(11.0923 - 19.8543 * sto)
           +0.2051 * tanh(1.4684 - 5.4888 * sto)
           +0.2531 * tanh((-sto + 0.56478) / 0.1316)
           -0.02167 * tanh((sto - 0.525) / 0.006))

    return Uoc_ca


class DefaultLaws:
    '''
    Graphite / NMC cell ('Marquis2019' curves from PyBaMM)

    Constant kinetics and solid diffusivities, Bruggeman-corrected
    electrolyte transport, isothermal OCVs and Butler-Volmer fluxes.
    '''

    def rxn_rate(self, T_p, T_n, c_s_avg_p, c_s_avg_n, p):
        return p.k_p, p.k_n

    def OCV_p(self, theta_p, T_p, p):
        U = calcUoc_pos(theta_p)
        return U, np.zeros_like(U)

    def OCV_n(self, theta_n, T_n, p):
        U = calcUoc_neg(theta_n)
        return U, np.zeros_like(U)

    def D_s_eff(self, c_s_avg_p, c_s_avg_n, T_p, T_n, p):
        return p.D_sp, p.D_sn

    def D_eff(self, c_e_p, c_e_s, c_e_n, T_p, T_s, T_n, p):
        D_eff_p = calcDf(c_e_p) * p.eps_p**p.brug_p
        D_eff_s = calcDf(c_e_s) * p.eps_s**p.brug_s
        D_eff_n = calcDf(c_e_n) * p.eps_n**p.brug_n
        return D_eff_p, D_eff_s, D_eff_n

    def K_eff(self, c_e_p, c_e_s, c_e_n, T_p, T_s, T_n, p):
        K_eff_p = calcKappa(c_e_p) * p.eps_p**p.brug_p
        K_eff_s = calcKappa(c_e_s) * p.eps_s**p.brug_s
        K_eff_n = calcKappa(c_e_n) * p.eps_n**p.brug_n
        return K_eff_p, K_eff_s, K_eff_n

    def thermodynamic_factor(self, c_e_p, c_e_s, c_e_n, T_p, T_s, T_n, p):
        return np.ones_like(c_e_p), np.ones_like(c_e_s), np.ones_like(c_e_n)

    def rxn_BV(self, c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p):
        '''
        Bulter-Volmer equation
        '''

        alpha_a = 0.5
        alpha_c = 0.5

        j0 = k * (c_max - c_s_star)**alpha_a * (c_e)**alpha_a * (c_s_star)**alpha_c

        BV = np.exp(alpha_a * F / R / T * eta) - np.exp(-alpha_c * F / R / T * eta)

        return j0 * BV

    def rxn_p(self, c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p):
        return self.rxn_BV(c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p)

    def rxn_n(self, c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p):
        return self.rxn_BV(c_s_star, c_e, T, eta, k, lambda_MHC, c_max, p)
