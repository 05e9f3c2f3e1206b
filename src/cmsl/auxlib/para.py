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
"""Model parameter sets."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import functools

from .const import F
from .errors import UnknownSubmodel
from .laws import DefaultLaws, PhysicsLaws
from .mesh import MeshCounts, generate_mesh


class _Choice(Enum):

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        raise UnknownSubmodel(cls.__name__, value, [m.value for m in cls])


class SolidDiffusion(_Choice):
    QUADRATIC = 'quadratic'
    POLYNOMIAL = 'polynomial'
    FICKIAN = 'Fickian'


class Aging(_Choice):
    NONE = 'none'
    SEI = 'SEI'
    R_AGING = 'R_aging'

    @classmethod
    def coerce(cls, value):
        if value is None or value is False:
            return cls.NONE
        return super().coerce(value)

    @property
    def enabled(self):
        return self is not Aging.NONE


@dataclass(frozen=True)
class ParameterSets:
    '''
    Immutable parameter bundle shared by every evaluation of a run

    Regions: a (positive current collector), p (cathode), s (separator),
    n (anode), z (negative current collector).
    '''

    # ---- discretization & submodels ----

    N:MeshCounts = field(default_factory=MeshCounts)
    laws:PhysicsLaws = field(default_factory=DefaultLaws)
    solid_diffusion:SolidDiffusion = SolidDiffusion.FICKIAN
    aging:Aging = Aging.NONE

    # ---- geometry (m) ----

    l_a:float = 25e-6
    l_p:float = 100e-6
    l_s:float = 25e-6
    l_n:float = 100e-6
    l_z:float = 25e-6

    # ---- volume fractions ----

    eps_p:float = 0.30          # electrolyte, cathode
    eps_s:float = 1.00          # electrolyte, separator
    eps_n:float = 0.30          # electrolyte, anode
    eps_fp:float = 0.20         # filler, cathode
    eps_fn:float = 0.10         # filler, anode

    # bruggeman coefficient
    brug_p:float = 1.5
    brug_s:float = 1.5
    brug_n:float = 1.5

    # ---- solid phase ----

    sigma_p:float = 10.         # (S/m)
    sigma_n:float = 100.        # (S/m)

    Rp_p:float = 10e-6          # (m) particle radius in cathode
    Rp_n:float = 10e-6          # (m) particle radius in anode

    D_sp:float = 1e-13          # m^2/s
    D_sn:float = 3.9e-14        # m^2/s

    # maximum Li+ in electrode (mol/m^3)
    c_max_p:float = 5.1218e+04
    c_max_n:float = 2.4983e+04

    # stoichiometry at 0% (min) and 100% (max) state of charge
    theta_min_p:float = 0.9084
    theta_max_p:float = 0.2661
    theta_min_n:float = 0.0279
    theta_max_n:float = 0.9014

    # ---- electrolyte ----

    c_e0:float = 1000.          # (mol/m^3)
    t_plus:float = 0.4          # transference number

    # ---- kinetics ----

    k_p:float = 6e-7 / F        # m^2.5 mol^-0.5 s^-1
    k_n:float = 2e-5 / F
    lambda_MHC_p:float = 6.26e-20
    lambda_MHC_n:float = 6.26e-20

    # ---- thermal ----

    T0:float = 298.15           # Absolute temperature 25 celsius

    # ---- film & aging ----

    R_film_n:Optional[float] = None     # (Ohm m^2)
    R_SEI:float = 0.01                  # (Ohm m^2)
    k_n_aging:float = 1.0               # SEI ionic conductivity (S/m)
    R_aging:float = 0.01                # (Ohm m^2)

    def __post_init__(self):

        object.__setattr__(self, 'solid_diffusion', SolidDiffusion.coerce(self.solid_diffusion))
        object.__setattr__(self, 'aging', Aging.coerce(self.aging))

        if not isinstance(self.laws, PhysicsLaws):
            raise TypeError(f"'laws' does not implement PhysicsLaws: {type(self.laws).__name__}")

    @property
    def thickness(self):
        return {'a': self.l_a, 'p': self.l_p, 's': self.l_s, 'n': self.l_n, 'z': self.l_z}

    @property
    def fickian(self):
        return self.solid_diffusion is SolidDiffusion.FICKIAN

    @functools.cached_property
    def mesh(self):
        return generate_mesh(self.N, self.thickness)
