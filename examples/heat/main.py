"""Heat generation profile of a synthetic 1C discharge state"""

import os

import numpy as onp
import jax.numpy as np
import matplotlib.pyplot as plt
plt.rcParams.update({
    "font.family":'serif',
    "font.size": 18,
    "lines.linewidth": 2.5
})

from cmsl.auxlib.mesh import MeshCounts, region_points
from cmsl.auxlib.para import ParameterSets
from cmsl.auxlib.wrap import aux_wrapper


def synthetic_state(params):

    N = params.N
    mesh = params.mesh

    x_p = region_points(mesh, ('p',))
    x_n = region_points(mesh, ('n',))
    x_e = region_points(mesh, ('p', 's', 'n'))

    # potentials
    Phi_s = np.concatenate([3.9 - 2e2 * (x_p - x_p[0]),
                            0.1 - 5e1 * (x_n - x_n[-1])])
    Phi_e = -0.1 - 4e2 * (x_e - x_e[0])

    # electrolyte
    c_e = 1000. + 2e6 * (x_e - x_e.mean())

    # particles, one value per radial shell
    c_s_avg = np.concatenate([np.full(N.p * N.r_p, 0.6 * params.c_max_p),
                              np.full(N.n * N.r_n, 0.8 * params.c_max_n)])

    # cathode takes lithium, anode releases it
    j = np.concatenate([np.full(N.p, -1e-5), np.full(N.n, 1e-5)])

    return {'Phi_s': Phi_s, 'Phi_e': Phi_e, 'c_e': c_e, 'j': j,
            'c_s_avg': c_s_avg, 'T': np.array([]), 'I': np.array([1.])}


if __name__ == "__main__":

    params = ParameterSets(N=MeshCounts(p=20, s=10, n=20, r_p=10, r_n=10))

    evaluate = aux_wrapper(params, jit=True)

    states = evaluate(synthetic_state(params))

    print(f"I = {float(states['I'][0]):.4f} A/m^2, V = {float(states['V'][0]):.4f} V, "
          f"P = {float(states['P'][0]):.4f} W/m^2")

    # Postprocessing
    x = onp.asarray(region_points(params.mesh, ('p', 's', 'n'))) * 1e6
    x_pn = onp.concatenate([x[:params.N.p], x[-params.N.n:]])

    script_dir = os.path.dirname(os.path.abspath(__file__))
    output_dir = os.path.join(script_dir, 'output')
    os.makedirs(output_dir, exist_ok=True)

    plt.figure(figsize=(10, 7))
    plt.plot(x, states['Q_ohm'].values, label='ohmic')
    plt.scatter(x_pn, states['Q_rxn'].values, s=40, color='C1', label='reaction')
    plt.scatter(x_pn, states['Q_rev'].values, s=40, color='C2', facecolor='None', label='reversible')
    plt.xlabel(r'Through-plane position ($\mu$m)')
    plt.ylabel(r'Heat generation (W/m$^3$)')
    plt.legend(frameon=False)
    output_path = os.path.join(output_dir, 'heat.png')
    plt.savefig(output_path, dpi=300, format="png", bbox_inches='tight')
