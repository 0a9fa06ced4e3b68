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
Gas cost estimation.

Pressure added to a cylinder is converted into volume of gas using tank
volume and tank rated pressure

    .. math::

        V = P / P_{rated} * V_{tank}

and the volume is priced by its O2 and helium content.
"""

from collections import namedtuple

from .mix import fraction
from . import const


CostSettings = namedtuple(
    'CostSettings', 'price_o2 price_he tank_volume tank_rated_pressure'
)
CostSettings.__doc__ = """
Gas pricing configuration.

:var price_o2: Price of cubic foot of oxygen.
:var price_he: Price of cubic foot of helium, not configured if not
    positive.
:var tank_volume: Tank volume [cuft].
:var tank_rated_pressure: Tank rated pressure [psi].
"""

DEFAULT_COST_SETTINGS = CostSettings(
    const.PRICE_O2, const.PRICE_HE, const.TANK_VOLUME, const.TANK_RATED_PRESSURE
)

GasCost = namedtuple(
    'GasCost', 'oxygen_volume helium_volume oxygen_cost helium_cost total_cost'
)
GasCost.__doc__ = """
Cost of oxygen and helium added to a cylinder.

:var oxygen_volume: Volume of oxygen [cuft].
:var helium_volume: Volume of helium [cuft].
:var oxygen_cost: Price of oxygen.
:var helium_cost: Price of helium.
:var total_cost: Total price.
"""


def volume(pressure, settings):
    """
    Convert pressure added to a tank into volume of gas [cuft].

    Zero is returned if tank rated pressure is not positive.

    :param pressure: Pressure [psi].
    :param settings: Cost settings.
    """
    if settings.tank_rated_pressure <= 0:
        return 0
    return pressure / settings.tank_rated_pressure * settings.tank_volume


def heuristic_price(gas):
    """
    Estimate price of cubic foot of a gas by its rank.

    Air is the cheapest gas, then O2 enriched gases, then helium based
    gases. Pure helium is the most expensive gas.

    :param gas: Gas mix.
    """
    air_o2 = fraction(const.AIR_O2)
    enrichment = max(0, fraction(gas.o2) - air_o2) / (1 - air_o2)
    return const.HEURISTIC_PRICE_BASE \
        + const.HEURISTIC_PRICE_O2 * enrichment \
        + const.HEURISTIC_PRICE_HE * fraction(gas.he)


def gas_cost(gas, pressure, settings):
    """
    Estimate cost of gas added to a cylinder.

    If helium price is not configured, then gas is priced by its rank,
    see :func:`heuristic_price`.

    :param gas: Gas mix.
    :param pressure: Pressure of gas [psi].
    :param settings: Cost settings.
    """
    v = volume(pressure, settings)
    if settings.price_he <= 0:
        return v * heuristic_price(gas)
    return v * (
        fraction(gas.o2) * settings.price_o2 + fraction(gas.he) * settings.price_he
    )


def calculate_gas_cost(oxygen, helium, settings):
    """
    Calculate volume and cost of oxygen and helium added to a cylinder.

    :param oxygen: Pressure of oxygen [psi].
    :param helium: Pressure of helium [psi].
    :param settings: Cost settings.
    """
    o2_volume = volume(oxygen, settings)
    he_volume = volume(helium, settings)
    o2_cost = o2_volume * settings.price_o2
    he_cost = he_volume * settings.price_he
    return GasCost(o2_volume, he_volume, o2_cost, he_cost, o2_cost + he_cost)


# vim: sw=4:et:ai
