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
"""Auxiliary states of the P2D model."""

import logging

import jax

# float64 everywhere
jax.config.update("jax_enable_x64", True)


class _Formatter(logging.Formatter):

    fmt = "[%(asctime)s][%(name)s][%(levelname)s] %(message)s"

    def __init__(self):
        super().__init__(self.fmt, datefmt="%H:%M:%S")


logger = logging.getLogger("cmsl.auxlib")
logger.setLevel(logging.INFO)

if not logger.handlers:
    _ch = logging.StreamHandler()
    _ch.setFormatter(_Formatter())
    logger.addHandler(_ch)
