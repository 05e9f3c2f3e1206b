"""Sensitivity of the ohmic heat to the electrolyte potential"""

import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

import jax
import jax.numpy as np
import numpy as onp

from cmsl.auxlib.para import ParameterSets
from cmsl.auxlib.wrap import aux_wrapper

from examples.heat.main import synthetic_state

if __name__ == "__main__":

    params = ParameterSets()

    evaluate = aux_wrapper(params)

    primary = synthetic_state(params)

    def Q_ohm_fn(Phi_e):
        states = evaluate({**primary, 'Phi_e': Phi_e})
        return states['Q_ohm'].values

    # Each column perturbs one control volume; columns are independent
    # evaluations of the same pipeline.
    jac = jax.jacfwd(Q_ohm_fn)(primary['Phi_e'])

    # Finite-difference check of one column
    h = 1e-7
    k = params.N.p
    e_k = np.zeros_like(primary['Phi_e']).at[k].set(1.)
    fd = (Q_ohm_fn(primary['Phi_e'] + h * e_k) - Q_ohm_fn(primary['Phi_e'] - h * e_k)) / (2 * h)

    print(f"Jacobian shape: {jac.shape}, nonzeros: {int(onp.count_nonzero(onp.asarray(jac)))}")
    print(f"max |AD - FD| in column {k}: {float(np.max(np.abs(jac[:, k] - fd))):.3e}")
