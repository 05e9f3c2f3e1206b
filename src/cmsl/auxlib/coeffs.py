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
"""Constants and coefficients."""

import jax.numpy as np

from .const import F
from .mesh import REGIONS


# -------------------- configuration only --------------------

def active_material(p):
    '''
    Electrode active material fraction [-]
    '''
    eps_sp = 1.0 - (p.eps_fp + p.eps_p)
    eps_sn = 1.0 - (p.eps_fn + p.eps_n)

    return eps_sp, eps_sn


def conductivity_effective(p):
    '''
    Effective conductivity [S/m]
    '''
    eps_sp, eps_sn = active_material(p)

    sigma_eff_p = p.sigma_p * eps_sp
    sigma_eff_n = p.sigma_n * eps_sn

    return sigma_eff_p, sigma_eff_n


def surface_area_to_volume_ratio(p):
    '''
    Surface area to volume ratio for a sphere (SA/V = 4 pi r^2 / (4/3 pi r^3))
    multiplied by the active material fraction [m^2/m^3]
    '''
    eps_sp, eps_sn = active_material(p)

    a_p = 3 * eps_sp / p.Rp_p
    a_n = 3 * eps_sn / p.Rp_n

    return a_p, a_n


def capacity_products(p):
    '''
    Utilizable lithium per unit area of each electrode [mol/m^2]
    '''
    eps_sp, eps_sn = active_material(p)

    cap_p = eps_sp * p.l_p * p.c_max_p * (p.theta_min_p - p.theta_max_p)
    cap_n = eps_sn * p.l_n * p.c_max_n * (p.theta_max_n - p.theta_min_n)

    return cap_p, cap_n


def limiting_electrode(p):
    '''
    Electrode with the smaller capacity product; the cathode on a tie
    '''
    cap_p, cap_n = capacity_products(p)
    return 'n' if cap_n < cap_p else 'p'


def calc_I1C(p):
    '''
    1C current density [A/m^2] set by the limiting electrode
    '''
    return (F / 3600.0) * min(*capacity_products(p))


# -------------------- state dependent --------------------

def coeff_reaction_rate(states, p):
    '''
    Reaction rates (k) of cathode and anode [m^2.5/(m^0.5 s)]
    '''
    T = states['T']
    c_s_avg = states['c_s_avg']

    return p.laws.rxn_rate(T.p, T.n, c_s_avg.p, c_s_avg.n, p)


def coeff_solid_diffusion_effective(states, p):
    c_s_avg = states['c_s_avg']
    T = states['T']

    return p.laws.D_s_eff(c_s_avg.p, c_s_avg.n, T.p, T.n, p)


def coeff_electrolyte_diffusion_effective(states, p):
    c_e = states['c_e']
    T = states['T']

    return p.laws.D_eff(c_e.p, c_e.s, c_e.n, T.p, T.s, T.n, p)


def calc_SOC(c_s_avg, p):
    '''
    Cell state of charge from the anode average concentration [-]
    '''
    c_s_avg_mean = np.mean(c_s_avg.n)

    return (c_s_avg_mean / p.c_max_n - p.theta_min_n) / (p.theta_max_n - p.theta_min_n)


def temperature_weighting(T, p):
    '''
    Thickness-weighted cell temperature [K]

    Regions without control volumes (e.g. no current collectors) are skipped.
    '''
    thickness = p.thickness

    num = 0.
    den = 0.
    for r in REGIONS:
        if p.N.count(r) == 0:
            continue
        num = num + np.mean(T.region(r)) * thickness[r]
        den = den + thickness[r]

    return num / den


# -------------------- flat solution vector --------------------

def eta_plating(Y, ind):
    '''
    Lithium plating overpotential at the separator side of the anode [V]
    '''
    return Y[ind['Phi_s'].n[0]] - Y[ind['Phi_e'].n[0]]


def calc_j(Y, p, ind):
    '''
    Pore-wall flux implied by the flat solution vector 'Y' at the reference
    temperature, for consistent initial conditions

    ind: {name: SegmentedVector of indices into Y}
    '''
    laws = p.laws

    T_p = np.full(p.N.p, p.T0)
    T_n = np.full(p.N.n, p.T0)

    c_s_avg_p = Y[ind['c_s_avg'].p]
    c_s_avg_n = Y[ind['c_s_avg'].n]

    if p.fickian:
        # outermost radial shell of each control volume
        c_s_star_p = c_s_avg_p.reshape(p.N.p, p.N.r_p)[:, -1]
        c_s_star_n = c_s_avg_n.reshape(p.N.n, p.N.r_n)[:, -1]
    else:
        c_s_star_p = c_s_avg_p
        c_s_star_n = c_s_avg_n

    # Calculate the reaction rates
    k_p_eff, k_n_eff = laws.rxn_rate(T_p, T_n, c_s_avg_p, c_s_avg_n, p)

    U_p = laws.OCV_p(c_s_star_p / p.c_max_p, T_p, p)[0]
    U_n = laws.OCV_n(c_s_star_n / p.c_max_n, T_n, p)[0]

    eta_p = Y[ind['Phi_s'].p] - Y[ind['Phi_e'].p] - U_p
    eta_n = Y[ind['Phi_s'].n] - Y[ind['Phi_e'].n] - U_n

    j_p_calc = laws.rxn_p(c_s_star_p, Y[ind['c_e'].p], T_p, eta_p, k_p_eff, p.lambda_MHC_p, p.c_max_p, p)
    j_n_calc = laws.rxn_n(c_s_star_n, Y[ind['c_e'].n], T_n, eta_n, k_n_eff, p.lambda_MHC_n, p.c_max_n, p)

    return np.concatenate([j_p_calc, j_n_calc])
