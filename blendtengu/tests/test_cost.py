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
Gas cost estimation tests.
"""

from blendtengu.cost import CostSettings, DEFAULT_COST_SETTINGS, volume, \
    heuristic_price, gas_cost, calculate_gas_cost
from blendtengu.mix import AIR, HELIUM, OXYGEN

from .tools import EAN32, TX2135

import unittest


class VolumeTestCase(unittest.TestCase):
    """
    Pressure to volume conversion tests.
    """
    def test_volume(self):
        """
        Test converting pressure into volume of gas
        """
        self.assertEqual(80, volume(3000, DEFAULT_COST_SETTINGS))
        self.assertEqual(40, volume(1500, DEFAULT_COST_SETTINGS))


    def test_volume_no_rated_pressure(self):
        """
        Test converting pressure into volume without tank rated pressure
        """
        settings = DEFAULT_COST_SETTINGS._replace(tank_rated_pressure=0)
        self.assertEqual(0, volume(3000, settings))



class GasCostTestCase(unittest.TestCase):
    """
    Gas cost tests.
    """
    def test_gas_cost(self):
        """
        Test cost of gas by its O2 and helium content
        """
        settings = CostSettings(1.0, 3.5, 80, 3000)
        self.assertAlmostEqual(80 * 0.21, gas_cost(AIR, 3000, settings))
        self.assertAlmostEqual(80 * 3.5, gas_cost(HELIUM, 3000, settings))
        self.assertAlmostEqual(
            80 * (0.21 + 0.35 * 3.5), gas_cost(TX2135, 3000, settings)
        )


    def test_heuristic_rank(self):
        """
        Test heuristic price rank of gases
        """
        prices = [heuristic_price(g) for g in (AIR, EAN32, OXYGEN, HELIUM)]
        self.assertEqual(sorted(prices), prices)
        self.assertAlmostEqual(0.1, heuristic_price(AIR))
        self.assertAlmostEqual(1.1, heuristic_price(OXYGEN))
        self.assertAlmostEqual(3.6, heuristic_price(HELIUM))


    def test_heuristic_cost(self):
        """
        Test cost of gas without helium price
        """
        settings = CostSettings(1.0, 0, 80, 3000)
        self.assertAlmostEqual(80 * 0.1, gas_cost(AIR, 3000, settings))
        self.assertAlmostEqual(80 * 1.1, gas_cost(OXYGEN, 3000, settings))


    def test_calculate_gas_cost(self):
        """
        Test oxygen and helium volume and cost
        """
        cost = calculate_gas_cost(750, 1500, DEFAULT_COST_SETTINGS)
        self.assertEqual(20, cost.oxygen_volume)
        self.assertEqual(40, cost.helium_volume)
        self.assertEqual(20, cost.oxygen_cost)
        self.assertEqual(140, cost.helium_cost)
        self.assertEqual(160, cost.total_cost)


# vim: sw=4:et:ai
