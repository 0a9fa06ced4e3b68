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
Generate random blend and verify blend plan.
"""

from blendtengu.engine import Kind
from blendtengu.mix import AIR, Cylinder, GasMix, blend_mix
import blendtengu

import random
from pprint import pprint

import unittest

class RandomTestCase(unittest.TestCase):
    """
    Generate random blend and verify blend plan.
    """
    def test_random(self):
        """
        Test random blend
        """
        start_p = random.randint(0, 3000)
        start_o2 = random.randint(18, 40)
        start_he = random.randint(0, 100 - start_o2 - 5)

        target_p = random.randint(1000, 4000)
        target_o2 = random.randint(10, 40)
        target_he = random.randint(0, 100 - target_o2 - 5)

        desc = """\
start: {} psi, {}/{}
target: {} psi, {}/{}
""".format(start_p, start_o2, start_he, target_p, target_o2, target_he)

        print(desc)

        start = Cylinder(start_p, GasMix(start_o2, start_he))
        target = Cylinder(target_p, GasMix(target_o2, target_he))
        result = blendtengu.solve_two_source_blend(start, target, AIR)
        if not result.success:
            print(result.failure, result.errors)
            return

        pprint(result.steps)

        self.assertTrue(all(s.amount >= 0 for s in result.steps), desc)

        bleed = sum(s.amount for s in result.steps if s.kind == Kind.BLEED)
        parts = [(start_p - bleed, start.mix)]
        parts.extend(
            (s.amount, s.gas) for s in result.steps if s.kind != Kind.BLEED
        )
        pressure = sum(p for p, _ in parts)
        self.assertAlmostEqual(target_p, pressure, delta=0.5, msg=desc)

        mix = blend_mix(parts)
        self.assertAlmostEqual(target_o2, mix.o2, delta=0.1, msg=desc)
        self.assertAlmostEqual(target_he, mix.he, delta=0.1, msg=desc)

# vim: sw=4:et:ai
