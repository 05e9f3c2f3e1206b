"""Auxiliary state builder."""

import jax.numpy as np
import numpy as onp
import pytest

from cmsl.auxlib.coeffs import calc_I1C
from cmsl.auxlib.const import F
from cmsl.auxlib.core import (
    build_auxiliary_states,
    build_c_s_star,
    build_eta,
    build_I_V_P,
    build_j_aging,
    build_K_eff,
    build_OCV,
    build_T,
    pre_aux_fns,
)
from cmsl.auxlib.errors import MissingState, ShapeMismatch
from cmsl.auxlib.laws import calcKappa, calcUoc_neg, calcUoc_pos
from cmsl.auxlib.mesh import ELECTRODES, REGIONS
from cmsl.auxlib.para import Aging, SolidDiffusion
from cmsl.auxlib.state import StateContainer
from cmsl.auxlib.wrap import PRIMARY_REGIONS, primary_layout


def _states(params, primary):
    states = StateContainer(params.N)
    for name, values in primary.items():
        if name == 'T':
            states.set(name, values)
        else:
            layout = primary_layout(params, name)
            states.set(name, values, layout.regions, radial=name == 'c_s_avg' and params.fickian)
    return states


# ---- j_aging ----

def test_flux_unchanged_without_aging(params, make_primary):
    states = _states(params, make_primary(params, j_p=-3e-6, j_n=2e-6))
    j = states['j']

    build_j_aging(states, params)

    onp.testing.assert_array_equal(states['j_aging'].values, j.values)
    onp.testing.assert_array_equal(states['j_orig'].values, j.values)
    assert states['j'] is states['j_aging']
    assert states['j_aging'].regions == ELECTRODES


@pytest.mark.parametrize("aging", ['SEI', 'R_aging'])
def test_side_reaction_only_enters_the_anode(make_params, make_primary, aging):
    params = make_params(aging=aging)
    states = _states(params, make_primary(params, j_p=-3e-6, j_n=2e-6))
    j = states['j']
    j_s = states['j_s']

    build_j_aging(states, params)

    onp.testing.assert_array_equal(states['j_aging'].p, j.p)
    onp.testing.assert_array_equal(states['j_aging'].n, j.n + j_s.n)
    onp.testing.assert_array_equal(states['j_orig'].values, j.values)
    onp.testing.assert_array_equal(states['j'].values, states['j_aging'].values)


def test_aging_needs_the_side_reaction_flux(make_params, make_primary):
    params = make_params(aging='SEI')
    primary = make_primary(params)
    del primary['j_s']
    states = _states(params, primary)

    with pytest.raises(MissingState) as err:
        build_j_aging(states, params)
    assert err.value.name == 'j_s'


# ---- I, V, P ----

@pytest.mark.parametrize("I", [1.0, -0.5, 2.3, 0.0])
def test_power_is_current_times_voltage(params, make_primary, I):
    states = _states(params, make_primary(params, I=I))
    Phi_s = states['Phi_s']

    build_I_V_P(states, params)

    assert float(states['I'][0]) == pytest.approx(I * calc_I1C(params))
    assert states['V'][0] == Phi_s[0] - Phi_s[-1]
    assert states['P'][0] == states['I'][0] * states['V'][0]


# ---- T ----

def test_empty_temperature_defaults_to_reference(params, make_primary):
    states = _states(params, make_primary(params))

    build_T(states, params)

    T = states['T']
    assert T.regions == REGIONS
    assert len(T) == 13
    onp.testing.assert_array_equal(T.values, params.T0)


def test_scalar_temperature_is_broadcast(params, make_primary):
    states = _states(params, make_primary(params, T=[310.]))

    build_T(states, params)

    onp.testing.assert_array_equal(states['T'].values, 310.)
    assert states['T'].regions == REGIONS


def test_temperature_profile_is_kept(params, make_primary):
    profile = np.linspace(295., 305., 13)
    states = _states(params, make_primary(params, T=profile))

    build_T(states, params)

    onp.testing.assert_array_equal(states['T'].values, profile)
    onp.testing.assert_array_equal(states['T'].s, profile[5:8])


def test_temperature_profile_of_wrong_length(params, make_primary):
    states = _states(params, make_primary(params, T=np.full(7, 300.)))

    with pytest.raises(ShapeMismatch):
        build_T(states, params)


# ---- c_s_star ----

@pytest.mark.parametrize("model", ['quadratic', 'polynomial'])
def test_zero_flux_surface_equals_average(make_params, make_primary, model):
    params = make_params(solid_diffusion=model)
    states = _states(params, make_primary(params))
    build_T(states, params)

    build_c_s_star(states, params)

    onp.testing.assert_array_equal(states['c_s_star'].values, states['c_s_avg'].values)


def test_quadratic_surface_concentration(make_params, make_primary):
    params = make_params(solid_diffusion=SolidDiffusion.QUADRATIC)
    states = _states(params, make_primary(params, j_p=-1e-5, j_n=1e-5))
    build_T(states, params)

    build_c_s_star(states, params)

    c_s_avg = states['c_s_avg']
    c_s_star = states['c_s_star']
    onp.testing.assert_allclose(c_s_star.p, c_s_avg.p + params.Rp_p / (5 * params.D_sp) * 1e-5)
    onp.testing.assert_allclose(c_s_star.n, c_s_avg.n - params.Rp_n / (5 * params.D_sn) * 1e-5)


def test_polynomial_surface_concentration(make_params, make_primary):
    params = make_params(solid_diffusion='polynomial')
    primary = make_primary(params, j_p=-1e-5, j_n=1e-5)
    primary['Q'] = np.concatenate([np.full(5, 2e6), np.full(5, -1e6)])
    states = _states(params, primary)
    build_T(states, params)

    build_c_s_star(states, params)

    c_s_avg = states['c_s_avg']
    D_p, D_n = params.D_sp, params.D_sn
    expected_p = c_s_avg.p + params.Rp_p / (35 * D_p) * (1e-5 + 8 * D_p * 2e6)
    expected_n = c_s_avg.n + params.Rp_n / (35 * D_n) * (-1e-5 - 8 * D_n * 1e6)
    onp.testing.assert_allclose(states['c_s_star'].p, expected_p)
    onp.testing.assert_allclose(states['c_s_star'].n, expected_n)


def test_polynomial_needs_the_second_moment(make_params, make_primary):
    params = make_params(solid_diffusion='polynomial')
    primary = make_primary(params)
    del primary['Q']
    states = _states(params, primary)
    build_T(states, params)

    with pytest.raises(MissingState) as err:
        build_c_s_star(states, params)
    assert err.value.name == 'Q'


def test_fickian_samples_the_outermost_shell(params, make_primary):
    N = params.N
    primary = make_primary(params)
    primary['c_s_avg'] = np.arange(float(N.p * N.r_p + N.n * N.r_n))
    states = _states(params, primary)

    build_c_s_star(states, params)

    c_s_star = states['c_s_star']
    # r_p = 4 shells per cathode CV, r_n = 3 per anode CV
    onp.testing.assert_array_equal(c_s_star.p, [3., 7., 11., 15., 19.])
    onp.testing.assert_array_equal(c_s_star.n, [22., 25., 28., 31., 34.])


# ---- U, eta, K_eff ----

def test_open_circuit_voltage(params, make_primary):
    states = _states(params, make_primary(params, sto_p=0.55, sto_n=0.7))
    build_T(states, params)
    build_c_s_star(states, params)

    build_OCV(states, params)

    onp.testing.assert_allclose(states['U'].p, calcUoc_pos(0.55), rtol=1e-12)
    onp.testing.assert_allclose(states['U'].n, calcUoc_neg(0.7), rtol=1e-12)
    onp.testing.assert_array_equal(states['dU_dT'].values, 0.)
    assert states['dU_dT'].regions == ELECTRODES


def _through_ocv(params, primary):
    states = _states(params, primary)
    build_j_aging(states, params)
    build_T(states, params)
    build_c_s_star(states, params)
    build_OCV(states, params)
    return states


def test_overpotential_without_film(params, make_primary):
    primary = make_primary(params)
    primary['Phi_s'] = primary['Phi_s'] + 0.02
    states = _through_ocv(params, primary)

    build_eta(states, params)

    onp.testing.assert_allclose(states['eta'].values, 0.02, rtol=1e-9)


def test_film_resistance_lowers_the_anode_overpotential(make_params, make_primary):
    params = make_params(R_film_n=2e-3)
    states = _through_ocv(params, make_primary(params, j_p=-1e-5, j_n=1e-5))

    build_eta(states, params)

    eta = states['eta']
    onp.testing.assert_allclose(eta.p, 0., atol=1e-12)
    onp.testing.assert_allclose(eta.n, -1e-5 * 2e-3, rtol=1e-6)


def test_sei_overpotential(make_params, make_primary):
    params = make_params(aging=Aging.SEI, R_SEI=0.02, k_n_aging=0.5)
    states = _through_ocv(params, make_primary(params, j_p=-1e-5, j_n=1e-5))

    build_eta(states, params)

    j_n = 1e-5 - 2e-7
    onp.testing.assert_allclose(states['eta'].n, -F * j_n * (0.02 + 5e-9 / 0.5), rtol=1e-6)
    onp.testing.assert_allclose(states['eta'].p, 0., atol=1e-12)


def test_resistance_aging_overpotential(make_params, make_primary):
    params = make_params(aging='R_aging', R_aging=0.03, R_film_n=1e-3)
    states = _through_ocv(params, make_primary(params, j_p=-1e-5, j_n=1e-5))

    build_eta(states, params)

    j_n = 1e-5 - 2e-7
    onp.testing.assert_allclose(states['eta'].n, -j_n * 1e-3 - F * j_n * 0.03, rtol=1e-6)


def test_sei_overpotential_needs_the_film(make_params, make_primary):
    params = make_params(aging='SEI')
    primary = make_primary(params)
    del primary['film']
    states = _through_ocv(params, primary)

    with pytest.raises(MissingState) as err:
        build_eta(states, params)
    assert err.value.name == 'film'


def test_effective_conductivity(params, make_primary):
    states = _states(params, make_primary(params, c_e=1100.))
    build_T(states, params)

    build_K_eff(states, params)

    K_eff = states['K_eff']
    assert K_eff.regions == ('p', 's', 'n')
    onp.testing.assert_allclose(K_eff.p, calcKappa(1100.) * params.eps_p**params.brug_p)
    onp.testing.assert_allclose(K_eff.s, calcKappa(1100.) * params.eps_s**params.brug_s)
    onp.testing.assert_allclose(K_eff.n, calcKappa(1100.) * params.eps_n**params.brug_n)


# ---- whole pipeline ----

def test_pipeline_fills_every_auxiliary_state(params, make_primary):
    states = _states(params, make_primary(params))

    build_auxiliary_states(states, params)

    for name in ('j_orig', 'j_aging', 'I', 'V', 'P', 'T', 'c_s_star', 'U', 'dU_dT', 'eta', 'K_eff'):
        assert name in states


def test_pipeline_reports_the_first_missing_state(params, make_primary):
    primary = make_primary(params)
    del primary['Phi_s']
    states = _states(params, primary)

    with pytest.raises(MissingState) as err:
        build_auxiliary_states(states, params)
    assert err.value.name == 'Phi_s'


def test_bound_pipeline_is_reusable(params, make_primary):
    build = pre_aux_fns(params)

    first = build(_states(params, make_primary(params, j_p=-1e-6, j_n=1e-6)))
    second = build(_states(params, make_primary(params, j_p=-1e-6, j_n=1e-6)))

    for name in first.names():
        onp.testing.assert_array_equal(first[name].values, second[name].values)


def test_primary_regions_cover_the_pipeline_inputs():
    for name in ('Phi_s', 'Phi_e', 'c_e', 'j', 'c_s_avg', 'T', 'I'):
        assert name in PRIMARY_REGIONS
