#
# BlendTengu - breathing gas blending library.
#
# Copyright (C) 2026 by BlendTengu Team
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
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

"""
Basic Usage
-----------

The BlendTengu breathing gas blending library exports its main API via
``blendtengu`` module. All pressures are in psi.

The blend plan for a cylinder can be calculated in few simple steps. The
following example blends trimix 21/35 into an empty cylinder using pure
helium, pure oxygen and air as top-off gas::

    >>> import blendtengu
    >>> from blendtengu.mix import AIR, Cylinder, GasMix
    >>> start = Cylinder(0, GasMix(21, 0))
    >>> target = Cylinder(3000, GasMix(21, 35))
    >>> result = blendtengu.solve_two_source_blend(start, target, AIR)
    >>> result.success
    True
    >>> for step in result.steps:
    ...     print(step)
    Step(kind="helium", gas="Helium", amount=1050.0000)
    Step(kind="oxygen", gas="Oxygen", amount=279.1139)
    Step(kind="topoff", gas="Air", amount=1670.8861)

If the cylinder contains too much helium or oxygen, then the plan starts
with bleed-down step

    >>> start = Cylinder(1000, GasMix(21, 35))
    >>> target = Cylinder(3000, GasMix(21, 10))
    >>> result = blendtengu.solve_two_source_blend(start, target, AIR)
    >>> result.steps[0].kind
    'bleed'
    >>> result.bleed_pressure < 1000
    True

Blending With Multiple Gases
----------------------------
Blend alternatives using any one, two or three available gases are
calculated with N-gas blender. The alternatives are sorted by estimated
cost::

    >>> from blendtengu.mix import OXYGEN
    >>> target = Cylinder(3000, GasMix(32, 0))
    >>> result = blendtengu.solve_ngas_blend(target, Cylinder(0, AIR.mix), [AIR, OXYGEN])
    >>> result.success
    True
    >>> for step in result.alternatives[0].fill_order:
    ...     print(step)
    Step(kind="gas", gas="Oxygen", amount=417.7215)
    Step(kind="gas", gas="Air", amount=2582.2785)

Configuring Solvers
-------------------
Tolerances and iteration counts of solvers are attributes of solver
objects. Use :func:`~blendtengu.create` function to create blending engine
and adjust its attributes::

    >>> blender = blendtengu.create()
    >>> blender.bleed_iterations
    40
    >>> blender.bleed_iterations = 25

"""

from .engine import Blender, summarize_volumes, has_bleed
from .multi import MultiBlender
from .cost import CostSettings, DEFAULT_COST_SETTINGS, calculate_gas_cost
from .error import BlendError, ConfigError, MixError, Failure
from . import const

__version__ = '0.1.0'


def create(bleed_iterations=None, pressure_tolerance=None):
    """
    Create blending engine.

    Usage

    >>> import blendtengu
    >>> blender = blendtengu.create(bleed_iterations=25)
    >>> blender.bleed_iterations
    25

    :param bleed_iterations: Number of bleed-down search iterations.
    :param pressure_tolerance: Allowed difference between blended and target
                               pressure [psi].
    """
    blender = Blender()
    if bleed_iterations is not None:
        blender.bleed_iterations = bleed_iterations
    if pressure_tolerance is not None:
        blender.pressure_tolerance = pressure_tolerance
    return blender


def solve_two_source_blend(start, target, top_gas):
    """
    Calculate blend plan using pure helium, pure oxygen and top-off gas.

    See :py:meth:`blendtengu.engine.Blender.blend`.
    """
    return create().blend(start, target, top_gas)


def solve_ngas_blend(target, start, gases, settings=None, selected_index=0):
    """
    Calculate blend alternatives using available gases.

    See :py:meth:`blendtengu.multi.MultiBlender.solve`.
    """
    return MultiBlender().solve(target, start, gases, settings, selected_index)


def solve_required_start_pressure(mix, target, top_gas):
    """
    Find cylinder start pressure, which allows to blend target without
    adding helium.

    See :py:meth:`blendtengu.engine.Blender.required_start_pressure`.
    """
    return create().required_start_pressure(mix, target, top_gas)


def solve_max_target_without_helium(start, target, top_gas):
    """
    Find maximum target helium percentage, which can be blended without
    adding helium.

    See :py:meth:`blendtengu.engine.Blender.max_target_he`.
    """
    return create().max_target_he(start, target, top_gas)


def project_chart(start, target, top_gas, deltas=const.CHART_DELTAS_PSI):
    """
    Calculate blend plans for start pressures lowered by deltas.

    See :py:meth:`blendtengu.engine.Blender.project_chart`.
    """
    return create().project_chart(start, target, top_gas, deltas)


def calculate_top_off(start, pressure, top_gas):
    """
    Calculate gas mix of a cylinder topped off with a gas.

    See :py:meth:`blendtengu.engine.Blender.top_off`.
    """
    return create().top_off(start, pressure, top_gas)


__all__ = [
    'create', 'Blender', 'MultiBlender', 'solve_two_source_blend',
    'solve_ngas_blend', 'solve_required_start_pressure',
    'solve_max_target_without_helium', 'project_chart', 'calculate_top_off',
    'summarize_volumes', 'has_bleed', 'calculate_gas_cost', 'CostSettings',
    'DEFAULT_COST_SETTINGS', 'BlendError', 'ConfigError', 'MixError',
    'Failure',
]

# vim: sw=4:et:ai
