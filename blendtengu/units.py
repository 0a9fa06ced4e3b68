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
Pressure unit conversion.

The solvers work with the canonical pressure unit [psi]. Conversion from
and to the unit used by a user happens at the boundary of the library,
i.e. in command line tool, and never inside a solver.
"""

from .error import ConfigError
from . import const


class Unit(object):
    """
    Pressure unit enumeration.
    """
    PSI = 'psi'
    BAR = 'bar'


UNITS = (Unit.PSI, Unit.BAR)


def _check(unit):
    if unit not in UNITS:
        raise ConfigError('Unknown pressure unit {}'.format(unit))


def to_display_pressure(value, unit):
    """
    Convert pressure in psi into pressure unit.

    :param value: Pressure [psi].
    :param unit: Pressure unit, see :class:`Unit`.
    """
    _check(unit)
    return value if unit == Unit.PSI else value / const.PSI_PER_BAR


def from_display_pressure(value, unit):
    """
    Convert pressure in pressure unit into psi.

    :param value: Pressure in pressure unit.
    :param unit: Pressure unit, see :class:`Unit`.
    """
    _check(unit)
    return value if unit == Unit.PSI else value * const.PSI_PER_BAR


def chart_deltas(unit):
    """
    Get chart projection start pressure deltas [psi] for pressure unit.

    For bar, the deltas are steps of 10 bar, otherwise steps of 100 psi.

    :param unit: Pressure unit, see :class:`Unit`.
    """
    if unit == Unit.BAR:
        n = len(const.CHART_DELTAS_PSI)
        return tuple(
            from_display_pressure(k * const.CHART_DELTA_BAR, unit)
            for k in range(n)
        )
    _check(unit)
    return const.CHART_DELTAS_PSI


# vim: sw=4:et:ai
