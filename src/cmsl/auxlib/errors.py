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
"""Errors.

All of them abort the current evaluation. The calling solver decides
whether to cut the step size or give up.
"""


class AuxStateError(Exception):
    pass


class ShapeMismatch(AuxStateError, ValueError):
    '''
    Vector length disagrees with the declared regions
    '''

    def __init__(self, name, expected, actual):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"'{name}' spans {expected} values but {actual} were given")


class InsufficientMesh(AuxStateError, ValueError):
    '''
    Region too small for the three-point stencils
    '''

    def __init__(self, region, count, minimum=3):
        self.region = region
        self.count = count
        self.minimum = minimum
        super().__init__(f"region '{region}' has {count} control volumes, "
                         f"at least {minimum} are needed")


class MissingState(AuxStateError, LookupError):

    def __init__(self, name):
        self.name = name
        super().__init__(f"state '{name}' is required but absent")

    def __str__(self):
        return self.args[0]


class UnknownSubmodel(AuxStateError, ValueError):

    def __init__(self, kind, value, choices):
        self.kind = kind
        self.value = value
        super().__init__(f"unknown {kind} '{value}', expected one of {list(choices)}")
