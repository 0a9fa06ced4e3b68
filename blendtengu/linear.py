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
Linear equations solvers for blending with one, two and three gases.

The solvers calculate pressure of each gas to be added to a cylinder, so
the added gas has required O2 and helium percentage. The gas mix of the
cylinder before blending is not considered by the solvers.

For two gases, pressure :math:`P` to be added and required O2 and helium
fractions :math:`F_{O_2}` and :math:`F_{He}` the equations are

    .. math::

        g_1 * O_{2,1} + g_2 * O_{2,2} = P * F_{O_2}

        g_1 * He_1 + g_2 * He_2 = P * F_{He}

The total pressure :math:`g_1 + g_2 = P` is not guaranteed by the
equations, so it is verified within a tolerance. For three gases, the
total pressure is the third equation. Both systems are solved with
Cramer's rule.
"""

from collections import namedtuple
import logging

from .mix import fraction
from . import const

logger = logging.getLogger(__name__)


Solution = namedtuple('Solution', 'amounts o2 he')
Solution.__doc__ = """
Solution of linear equations.

:var amounts: Pressure of each gas to add.
:var o2: O2 percentage of added gas.
:var he: Helium percentage of added gas.
"""


def det2(a, b, c, d):
    """
    Calculate determinant of 2x2 matrix `[[a, b], [c, d]]`.
    """
    return a * d - b * c


def det3(m):
    """
    Calculate determinant of 3x3 matrix.

    :param m: Matrix as tuple of rows.
    """
    (a, b, c), (d, e, f), (g, h, i) = m
    return a * det2(e, f, h, i) - b * det2(d, f, g, i) + c * det2(d, e, g, h)


def _solution(gases, amounts, pressure, tolerance):
    """
    Verify amounts of gases and calculate gas mix of added gas.

    Null is returned if any amount is negative or total pressure of the
    gases differs from pressure to be added by more than the tolerance.

    :param gases: Collection of gases.
    :param amounts: Pressure of each gas.
    :param pressure: Pressure to add.
    :param tolerance: Total pressure tolerance as fraction of pressure.
    """
    if any(v < -const.EPSILON for v in amounts):
        if __debug__:
            logger.debug('negative gas amount {}'.format(amounts))
        return None

    amounts = tuple(max(0, v) for v in amounts)
    total = sum(amounts)
    if total <= const.EPSILON:
        return None

    limit = max(const.MIN_PRESSURE_TOLERANCE, tolerance * pressure)
    if abs(total - pressure) > limit:
        if __debug__:
            logger.debug('total pressure {:.4f} vs. {:.4f} (limit {:.4f})'.format(
                total, pressure, limit
            ))
        return None

    o2 = sum(a * g.o2 for a, g in zip(amounts, gases)) / total
    he = sum(a * g.he for a, g in zip(amounts, gases)) / total
    return Solution(amounts, o2, he)


def solve_single(gas, o2, he, pressure, tolerance=const.SINGLE_GAS_TOLERANCE):
    """
    Check if single gas delivers required gas mix.

    :param gas: Gas to add.
    :param o2: Required O2 percentage.
    :param he: Required helium percentage.
    :param pressure: Pressure to add.
    :param tolerance: Allowed difference of O2 and helium [%].
    """
    if abs(gas.o2 - o2) <= tolerance and abs(gas.he - he) <= tolerance:
        return Solution((pressure,), gas.o2, gas.he)
    return None


def solve_pair(gas_a, gas_b, o2, he, pressure,
        tolerance=const.PAIR_PRESSURE_TOLERANCE):
    """
    Solve linear equations for two gases.

    If the equations matrix is singular, but there is no helium in the
    gases nor in required gas mix, then equation for O2 and total
    pressure is solved.

    :param gas_a: First gas.
    :param gas_b: Second gas.
    :param o2: Required O2 percentage.
    :param he: Required helium percentage.
    :param pressure: Pressure to add.
    :param tolerance: Total pressure tolerance as fraction of pressure.
    """
    a_o2, a_he = fraction(gas_a.o2), fraction(gas_a.he)
    b_o2, b_he = fraction(gas_b.o2), fraction(gas_b.he)
    t_o2, t_he = fraction(o2), fraction(he)

    d = det2(a_o2, b_o2, a_he, b_he)
    if abs(d) > const.EPSILON:
        p_o2 = pressure * t_o2
        p_he = pressure * t_he
        amount_a = det2(p_o2, b_o2, p_he, b_he) / d
        amount_b = det2(a_o2, p_o2, a_he, p_he) / d
    elif max(a_he, b_he, t_he) <= const.EPSILON:
        d = a_o2 - b_o2
        if abs(d) <= const.EPSILON:
            return None
        amount_a = pressure * (t_o2 - b_o2) / d
        amount_b = pressure - amount_a
    else:
        return None

    return _solution((gas_a, gas_b), (amount_a, amount_b), pressure, tolerance)


def solve_triple(gas_a, gas_b, gas_c, o2, he, pressure,
        tolerance=const.TRIPLE_PRESSURE_TOLERANCE):
    """
    Solve linear equations for three gases.

    No solution exists if gas mixes are linearly dependent (singular
    equations matrix).

    :param gas_a: First gas.
    :param gas_b: Second gas.
    :param gas_c: Third gas.
    :param o2: Required O2 percentage.
    :param he: Required helium percentage.
    :param pressure: Pressure to add.
    :param tolerance: Total pressure tolerance as fraction of pressure.
    """
    gases = (gas_a, gas_b, gas_c)
    m = (
        (1, 1, 1),
        tuple(fraction(g.o2) for g in gases),
        tuple(fraction(g.he) for g in gases),
    )
    rhs = (pressure, pressure * fraction(o2), pressure * fraction(he))

    d = det3(m)
    if abs(d) <= const.EPSILON:
        if __debug__:
            logger.debug('singular matrix for {}'.format(
                ', '.join(g.name for g in gases)
            ))
        return None

    # Cramer's rule - replace k-th column with right hand side
    column = lambda k: tuple(
        tuple(rhs[i] if j == k else row[j] for j in range(3))
        for i, row in enumerate(m)
    )
    amounts = tuple(det3(column(k)) / d for k in range(3))
    return _solution(gases, amounts, pressure, tolerance)


def solve(gases, o2, he, pressure, single=const.SINGLE_GAS_TOLERANCE,
        pair=const.PAIR_PRESSURE_TOLERANCE,
        triple=const.TRIPLE_PRESSURE_TOLERANCE):
    """
    Solve linear equations for one, two or three gases.

    :param gases: Collection of gases.
    :param o2: Required O2 percentage.
    :param he: Required helium percentage.
    :param pressure: Pressure to add.
    :param single: Single gas mix tolerance [%].
    :param pair: Two gases total pressure tolerance.
    :param triple: Three gases total pressure tolerance.
    """
    n = len(gases)
    if n == 1:
        return solve_single(gases[0], o2, he, pressure, single)
    elif n == 2:
        return solve_pair(*gases, o2=o2, he=he, pressure=pressure, tolerance=pair)
    elif n == 3:
        return solve_triple(*gases, o2=o2, he=he, pressure=pressure, tolerance=triple)
    else:
        raise ValueError('One, two or three gases supported, got {}'.format(n))


# vim: sw=4:et:ai
