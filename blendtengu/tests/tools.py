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
BlendTengu unit tests tools.
"""

from blendtengu.engine import Kind
from blendtengu.mix import Cylinder, Gas, GasMix, blend_mix

EAN32 = Gas('ean32', 'EAN32', 32, 0)
EAN36 = Gas('ean36', 'EAN36', 36, 0)
TX2135 = Gas('tx2135', 'Trimix 21/35', 21, 35)
HELIOX = Gas('heliox', 'Heliox 50/50', 50, 50)


def _cylinder(pressure, o2=21, he=0):
    return Cylinder(pressure, GasMix(o2, he))


def _final(start, steps):
    """
    Calculate final pressure and gas mix of a cylinder after blend steps.
    """
    bleed = sum(s.amount for s in steps if s.kind == Kind.BLEED)
    parts = [(start.pressure - bleed, start.mix)]
    parts.extend((s.amount, s.gas) for s in steps if s.kind != Kind.BLEED)
    pressure = sum(p for p, _ in parts)
    return pressure, blend_mix(parts)


# vim: sw=4:et:ai
