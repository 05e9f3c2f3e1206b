"""Shared fixtures: a 5/3/5 mesh and a synthetic primary state."""

import dataclasses

import jax.numpy as np
import pytest

from cmsl.auxlib.laws import calcUoc_neg, calcUoc_pos
from cmsl.auxlib.mesh import ELECTROLYTE, MeshCounts, region_points
from cmsl.auxlib.para import ParameterSets


@pytest.fixture
def counts():
    return MeshCounts(p=5, s=3, n=5, a=0, z=0, r_p=4, r_n=3)


@pytest.fixture
def make_params(counts):
    def _make(**kwargs):
        kwargs.setdefault('N', counts)
        return ParameterSets(**kwargs)
    return _make


@pytest.fixture
def params(make_params):
    return make_params()


@pytest.fixture
def make_primary():
    '''
    Uniform particles and electrolyte, linear electrolyte potential and a
    solid potential sitting exactly one OCV above it
    '''
    def _make(params, j_p=0., j_n=0., grad=-400., c_e=1000., sto_p=0.6, sto_n=0.8,
              T=None, I=1.):
        N = params.N
        x_e = region_points(params.mesh, ELECTROLYTE)

        Phi_e = -0.1 + grad * (x_e - x_e[0])

        U_p = calcUoc_pos(np.full(N.p, sto_p))
        U_n = calcUoc_neg(np.full(N.n, sto_n))
        Phi_s = np.concatenate([Phi_e[:N.p] + U_p, Phi_e[-N.n:] + U_n])

        if params.fickian:
            c_s_avg = np.concatenate([np.full(N.p * N.r_p, sto_p * params.c_max_p),
                                      np.full(N.n * N.r_n, sto_n * params.c_max_n)])
        else:
            c_s_avg = np.concatenate([np.full(N.p, sto_p * params.c_max_p),
                                      np.full(N.n, sto_n * params.c_max_n)])

        primary = {
            'Phi_s': Phi_s,
            'Phi_e': Phi_e,
            'c_e': np.full(N.p + N.s + N.n, c_e),
            'j': np.concatenate([np.full(N.p, j_p), np.full(N.n, j_n)]),
            'c_s_avg': c_s_avg,
            'Q': np.zeros(N.p + N.n),
            'T': np.array([]) if T is None else np.asarray(T, dtype=np.float64),
            'I': np.array([I]),
        }
        if params.aging.enabled:
            primary['j_s'] = np.full(N.n, -2e-7)
            primary['film'] = np.full(N.n, 5e-9)

        return primary
    return _make


@pytest.fixture
def replace():
    return dataclasses.replace
