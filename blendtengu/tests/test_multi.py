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
Tests for blending with multiple gas sources.
"""

from blendtengu.engine import Kind, Step
from blendtengu.error import ConfigError, Failure
from blendtengu.mix import AIR, HELIUM, OXYGEN, Cylinder, Gas, GasMix
from blendtengu.multi import MultiBlender, fill_order, needed_mix
from blendtengu.linear import solve_triple

from .tools import _cylinder, _final, EAN32, TX2135, HELIOX

import unittest
from unittest import mock


class FillOrderTestCase(unittest.TestCase):
    """
    Fill order tests.
    """
    def test_fill_order(self):
        """
        Test ordering blend steps into fill sequence
        """
        steps = [
            Step(Kind.GAS, AIR, 100),
            Step(Kind.GAS, EAN32, 100),
            Step(Kind.GAS, OXYGEN, 50),
            Step(Kind.GAS, TX2135, 10),
            Step(Kind.GAS, HELIUM, 20),
            Step(Kind.BLEED, None, 30),
            Step(Kind.GAS, HELIOX, 0),
        ]
        order = fill_order(steps)
        self.assertEqual(Kind.BLEED, order[0].kind)
        gases = [s.gas for s in order[1:]]
        self.assertEqual([HELIUM, OXYGEN, TX2135, EAN32, AIR], gases)


    def test_fill_order_empty(self):
        """
        Test ordering no blend steps
        """
        self.assertEqual([], fill_order([]))



class NeededMixTestCase(unittest.TestCase):
    """
    Needed gas mix calculation tests.
    """
    def test_needed_mix(self):
        """
        Test calculating gas mix to be added to cylinder
        """
        added, mix = needed_mix(_cylinder(1000, 21, 35), _cylinder(3000, 21, 10))
        self.assertEqual(2000, added)
        self.assertAlmostEqual(21, mix.o2)
        self.assertAlmostEqual(-2.5, mix.he)


    def test_needed_mix_nothing_to_add(self):
        """
        Test calculating gas mix with no pressure to add
        """
        self.assertIsNone(needed_mix(_cylinder(3000), _cylinder(3000, 32)))
        self.assertIsNone(needed_mix(_cylinder(3500), _cylinder(3000, 32)))



class AlternativesTestCase(unittest.TestCase):
    """
    Blend alternatives generation tests.
    """
    def setUp(self):
        """
        Create N-gas blender.
        """
        self.blender = MultiBlender()


    def test_nitrox(self):
        """
        Test nitrox alternative from air and oxygen
        """
        found, failure = self.blender.alternatives(
            _cylinder(0), _cylinder(3000, 32), [AIR, OXYGEN]
        )
        self.assertIsNone(failure)
        self.assertEqual(1, len(found))

        a = found[0]
        self.assertEqual([OXYGEN, AIR], [s.gas for s in a.fill_order])
        self.assertAlmostEqual(417.7215, a.fill_order[0].amount, places=4)
        self.assertAlmostEqual(2582.2785, a.fill_order[1].amount, places=4)
        self.assertAlmostEqual(32, a.final_mix.o2)
        self.assertAlmostEqual(25.6, a.estimated_cost)


    def test_deduplicate(self):
        """
        Test deduplication of blend alternatives
        """
        found, _ = self.blender.alternatives(
            _cylinder(0), _cylinder(3000, 32), [AIR, OXYGEN, EAN32]
        )
        self.assertEqual(2, len(found))
        self.assertEqual([EAN32], [s.gas for s in found[0].steps])
        self.assertEqual([AIR, OXYGEN], [s.gas for s in found[1].steps])


    def test_rank(self):
        """
        Test ranking blend alternatives by cost
        """
        cost = lambda gas, pressure, settings: 10.0 if gas == EAN32 else 1.0
        with mock.patch('blendtengu.multi.gas_cost', side_effect=cost):
            found, _ = self.blender.alternatives(
                _cylinder(0), _cylinder(3000, 32), [AIR, OXYGEN, EAN32]
            )
        self.assertEqual([AIR, OXYGEN], [s.gas for s in found[0].steps])
        self.assertEqual(2, found[0].estimated_cost)
        self.assertEqual(10, found[1].estimated_cost)


    def test_max_alternatives(self):
        """
        Test limiting number of blend alternatives
        """
        self.blender.max_alternatives = 1
        found, _ = self.blender.alternatives(
            _cylinder(0), _cylinder(3000, 32), [AIR, OXYGEN, EAN32]
        )
        self.assertEqual(1, len(found))


    def test_singular_triple(self):
        """
        Test linearly dependent gases skipping three gas solution
        """
        gases = [
            Gas('a', 'A', 20, 20), Gas('b', 'B', 30, 30), Gas('c', 'C', 40, 40)
        ]
        with mock.patch('blendtengu.linear.solve_triple', wraps=solve_triple) as f:
            found, _ = self.blender.alternatives(
                _cylinder(0), _cylinder(3000, 30, 30), gases
            )
        self.assertEqual(1, f.call_count)
        self.assertEqual(1, len(found))
        self.assertEqual([gases[1]], [s.gas for s in found[0].steps])


    def test_bleed(self):
        """
        Test blend alternatives requiring bleed-down
        """
        start = _cylinder(1000, 21, 35)
        found, failure = self.blender.alternatives(
            start, _cylinder(3000, 21, 10), [AIR, OXYGEN, HELIUM]
        )
        self.assertIsNone(failure)
        a = found[0]
        self.assertEqual(Kind.BLEED, a.steps[0].kind)
        self.assertEqual(Kind.BLEED, a.fill_order[0].kind)
        self.assertAlmostEqual(142.857, a.steps[0].amount, delta=0.01)

        pressure, mix = _final(start, a.steps)
        self.assertAlmostEqual(3000, pressure, delta=1)
        self.assertAlmostEqual(10, mix.he, delta=0.1)
        self.assertAlmostEqual(10, a.final_mix.he, delta=0.1)


    def test_bleed_without_helium(self):
        """
        Test blend alternatives requiring bleed-down without helium source
        """
        start = _cylinder(1000, 21, 35)
        found, failure = self.blender.alternatives(
            start, _cylinder(3000, 21, 10), [AIR, OXYGEN]
        )
        self.assertIsNone(failure)
        self.assertEqual(1, len(found))

        a = found[0]
        self.assertEqual([Kind.BLEED, Kind.GAS], [s.kind for s in a.steps])
        self.assertAlmostEqual(142.857, a.steps[0].amount, delta=0.01)
        self.assertEqual(AIR, a.steps[1].gas)
        self.assertAlmostEqual(2142.857, a.steps[1].amount, delta=0.01)


    def test_bleed_scan(self):
        """
        Test blend alternatives requiring bleed-down below highest start
        pressure with valid needed gas mix
        """
        tx215 = Gas('tx215', 'Trimix 21/5', 21, 5)
        found, failure = self.blender.alternatives(
            _cylinder(1000, 21, 35), _cylinder(3000, 21, 10), [tx215]
        )
        self.assertIsNone(failure)

        a = found[0]
        self.assertEqual(Kind.BLEED, a.steps[0].kind)
        self.assertAlmostEqual(459.0164, a.steps[0].amount, delta=0.01)
        self.assertEqual(tx215, a.steps[1].gas)
        self.assertAlmostEqual(2459.0164, a.steps[1].amount, delta=0.01)


    def test_no_change(self):
        """
        Test blend alternatives for start cylinder matching target
        """
        found, failure = self.blender.alternatives(
            _cylinder(3000, 32), _cylinder(3000, 32), [AIR, OXYGEN]
        )
        self.assertEqual([], found)
        self.assertEqual(Failure.NO_CHANGE_REQUIRED, failure[0])


    def test_bleed_only(self):
        """
        Test blend alternatives for start cylinder above target pressure
        """
        found, failure = self.blender.alternatives(
            _cylinder(3200, 32), _cylinder(3000, 32), [AIR, OXYGEN]
        )
        self.assertIsNone(failure)
        self.assertEqual(1, len(found))

        a = found[0]
        self.assertEqual((Step(Kind.BLEED, None, 200),), a.steps)
        self.assertEqual(a.steps, a.fill_order)
        self.assertEqual(GasMix(32, 0), a.final_mix)
        self.assertEqual(0, a.estimated_cost)


    def test_no_gases(self):
        """
        Test blend alternatives without gases
        """
        found, failure = self.blender.alternatives(
            _cylinder(0), _cylinder(3000, 32), []
        )
        self.assertEqual([], found)
        self.assertEqual(Failure.NO_GAS_SOURCES, failure[0])


    def test_invalid_target(self):
        """
        Test blend alternatives for invalid target gas mix
        """
        found, failure = self.blender.alternatives(
            _cylinder(0), _cylinder(3000, 80, 30), [AIR]
        )
        self.assertEqual(Failure.INVALID_TARGET_COMPOSITION, failure[0])


    def test_not_found(self):
        """
        Test blend alternatives not found
        """
        found, failure = self.blender.alternatives(
            _cylinder(0), _cylinder(3000, 32), [AIR]
        )
        self.assertEqual([], found)
        self.assertEqual(Failure.NO_VALID_BLEND_FOUND, failure[0])



class SolveTestCase(unittest.TestCase):
    """
    N-gas blend orchestration tests.
    """
    def setUp(self):
        """
        Create N-gas blender.
        """
        self.blender = MultiBlender()


    def test_solve(self):
        """
        Test N-gas blend
        """
        result = self.blender.solve(
            _cylinder(3000, 32), _cylinder(0), [AIR, OXYGEN]
        )
        self.assertTrue(result.success)
        self.assertEqual(0, result.selected_index)
        self.assertEqual([], result.warnings)
        self.assertEqual([], result.errors)
        self.assertIsNone(result.failure)
        self.assertIsNone(result.suggestion)


    def test_selected_index(self):
        """
        Test selected alternative index clamped into valid range
        """
        args = _cylinder(3000, 32), _cylinder(0), [AIR, OXYGEN, EAN32]
        self.assertEqual(1, self.blender.solve(*args, selected_index=1).selected_index)
        self.assertEqual(1, self.blender.solve(*args, selected_index=10).selected_index)
        self.assertEqual(0, self.blender.solve(*args, selected_index=-3).selected_index)


    def test_deterministic(self):
        """
        Test N-gas blend returning the same alternatives
        """
        args = _cylinder(3000, 32), _cylinder(0), [AIR, OXYGEN, EAN32]
        r1 = self.blender.solve(*args)
        r2 = self.blender.solve(*args)
        self.assertEqual(r1.alternatives, r2.alternatives)


    def test_warnings(self):
        """
        Test N-gas blend mix warnings
        """
        result = self.blender.solve(
            _cylinder(3000, 50), _cylinder(0), [AIR, OXYGEN]
        )
        self.assertTrue(result.success)
        self.assertEqual(['High O2 - fire risk (>40% O2).'], result.warnings)


    def test_trimming_warning(self):
        """
        Test N-gas blend warning about gas mix trimming
        """
        self.blender.pair_tolerance = 0.03
        target = Cylinder(2000, GasMix(20, 77.5))
        result = self.blender.solve(target, _cylinder(0), [HELIUM, OXYGEN])
        self.assertTrue(result.success)
        self.assertEqual(1, len(result.warnings))
        self.assertIn('trimming', result.warnings[0])


    def test_invalid_input(self):
        """
        Test N-gas blend with invalid input
        """
        gases = [AIR, OXYGEN]
        result = self.blender.solve(_cylinder(0, 32), _cylinder(0), gases)
        self.assertEqual(Failure.TARGET_PRESSURE_INVALID, result.failure)

        result = self.blender.solve(_cylinder(3000, 32), _cylinder(-1), gases)
        self.assertEqual(Failure.START_PRESSURE_INVALID, result.failure)

        target = Cylinder(3000, GasMix(21, 79.0001))
        result = self.blender.solve(target, _cylinder(0), gases)
        self.assertFalse(result.success)
        self.assertEqual(Failure.INVALID_MIX, result.failure)
        self.assertEqual([], result.alternatives)

        result = self.blender.solve(_cylinder(3000, 32), _cylinder(0), [])
        self.assertEqual(Failure.NO_GAS_SOURCES, result.failure)


    def test_malformed_gas(self):
        """
        Test N-gas blend with malformed gas
        """
        target = _cylinder(3000, 32)
        start = _cylinder(0)
        self.assertRaises(ConfigError, self.blender.solve, target, start, [object()])
        self.assertRaises(
            ConfigError, self.blender.solve, target, start,
            [Gas('x', 'X', '21', 0)]
        )
        self.assertRaises(
            ConfigError, self.blender.solve, target, start,
            [Gas('x', 'X', 80, 30)]
        )


    def test_suggestion(self):
        """
        Test N-gas blend suggesting similar gas mix
        """
        result = self.blender.solve(_cylinder(3000, 32.8), _cylinder(0), [EAN32])
        self.assertFalse(result.success)
        self.assertEqual(Failure.NO_VALID_BLEND_FOUND, result.failure)

        s = result.suggestion
        self.assertAlmostEqual(-0.3, s.deviation_o2)
        self.assertEqual(0, s.deviation_he)
        self.assertEqual(EAN32, s.alternative.steps[0].gas)


    def test_no_suggestion(self):
        """
        Test N-gas blend without similar gas mix
        """
        result = self.blender.solve(_cylinder(3000, 40), _cylinder(0), [AIR])
        self.assertFalse(result.success)
        self.assertIsNone(result.suggestion)


# vim: sw=4:et:ai
