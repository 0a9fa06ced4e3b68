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
Gas mixes, gas sources and cylinders.

Gas mix is described by O2 and helium percentage, nitrogen is the
remainder. Any object having `o2` and `he` attributes can be used as gas
mix by the solvers, i.e. :class:`GasMix` or :class:`Gas`.

Gas sources are described with a closed variant :class:`Source`

preset
    One of the predefined gases, i.e. air, oxygen, helium.
bank
    User defined gas bank, i.e. EAN36 bank of a fill station.
custom
    Session scoped custom mix.

The variant is resolved into :class:`Gas` with :func:`resolve_source`
before any solver is called, so solvers never depend on gas source kind.
"""

from collections import namedtuple
import logging

from .error import ConfigError, MixError
from . import const

logger = logging.getLogger(__name__)


GasMix = namedtuple('GasMix', 'o2 he')
GasMix.n2 = property(lambda m: 100 - m.o2 - m.he)
GasMix.__repr__ = lambda m: 'GasMix(o2={:.4f}, he={:.4f})'.format(m.o2, m.he)
GasMix.__doc__ = """
Gas mix composition.

:var o2: O2 percentage.
:var he: Helium percentage.
:var n2: Nitrogen percentage (remainder).
"""

Gas = namedtuple('Gas', 'id name o2 he')
Gas.mix = property(lambda g: GasMix(g.o2, g.he))
Gas.__doc__ = """
Gas source resolved into gas mix, which can be added to a cylinder.

:var id: Gas source identifier.
:var name: Gas name.
:var o2: O2 percentage.
:var he: Helium percentage.
"""

Cylinder = namedtuple('Cylinder', 'pressure mix')
Cylinder.__doc__ = """
Cylinder state - start or target of a blend.

:var pressure: Cylinder pressure [psi].
:var mix: Gas mix in the cylinder.
"""

Source = namedtuple('Source', 'kind key o2 he')
Source.__doc__ = """
Gas source variant.

:var kind: Gas source kind, see :class:`SourceKind`.
:var key: Preset or bank identifier, null for custom mix.
:var o2: O2 percentage of custom mix.
:var he: Helium percentage of custom mix.
"""


class SourceKind(object):
    """
    Gas source kind enumeration.
    """
    PRESET = 'preset'
    BANK = 'bank'
    CUSTOM = 'custom'


AIR = Gas('air', 'Air', 21, 0)
OXYGEN = Gas('oxygen', 'Oxygen', 100, 0)
HELIUM = Gas('helium', 'Helium', 0, 100)

PRESETS = (AIR, OXYGEN, HELIUM)

TRIMIX_PRESETS = (
    Gas('trimix-2135', 'Trimix 21/35', 21, 35),
    Gas('trimix-1845', 'Trimix 18/45', 18, 45),
    Gas('trimix-1555', 'Trimix 15/55', 15, 55),
)


def fraction(percent):
    """
    Convert percentage into fraction.

    :param percent: Percentage value, i.e. 32.
    """
    return percent / 100


def validate_mix(o2, he):
    """
    Validate gas mix.

    `MixError` is raised if

    #. O2 or helium percentage is negative.
    #. O2 or helium percentage is over 100%.
    #. Sum of O2 and helium percentage is over 100%.

    :param o2: O2 percentage.
    :param he: Helium percentage.
    """
    if o2 < 0 or he < 0:
        raise MixError('Gas fractions cannot be negative.')
    if o2 > 100 or he > 100:
        raise MixError('Gas fractions cannot exceed 100%.')
    if o2 + he > 100 + const.COMPOSITION_EPSILON:
        raise MixError('O2% + He% must be 100% or less.')


def clamp_mix(o2, he):
    """
    Clamp O2 and helium percentage into valid gas mix.

    O2 percentage is clamped into `[0, 100]` range, then helium percentage
    is clamped into `[0, 100 - O2]` range.

    :param o2: O2 percentage.
    :param he: Helium percentage.
    """
    o2 = min(100, max(0, o2))
    he = min(100 - o2, max(0, he))
    return GasMix(o2, he)


def blend_mix(parts):
    """
    Calculate gas mix of gases put together into a cylinder.

    :param parts: Collection of pairs - pressure and gas mix.
    """
    parts = list(parts)
    total = sum(p for p, _ in parts)
    if total <= 0:
        raise ConfigError('Cannot blend gas of zero pressure')

    o2 = sum(p * m.o2 for p, m in parts) / total
    he = sum(p * m.he for p, m in parts) / total
    return GasMix(o2, he)


def preset(key):
    """
    Create preset gas source.

    :param key: Preset identifier, i.e. `air`.
    """
    return Source(SourceKind.PRESET, key, None, None)


def bank(key):
    """
    Create gas bank source.

    :param key: Gas bank identifier.
    """
    return Source(SourceKind.BANK, key, None, None)


def custom(o2, he=0):
    """
    Create custom mix gas source.

    :param o2: O2 percentage.
    :param he: Helium percentage.
    """
    return Source(SourceKind.CUSTOM, None, o2, he)


def resolve_source(source, banks=()):
    """
    Resolve gas source into gas.

    Custom mix is clamped into valid gas mix. `ConfigError` is raised for
    unknown preset or gas bank.

    :param source: Gas source.
    :param banks: Collection of gas banks (:class:`Gas` objects).
    """
    if source.kind == SourceKind.PRESET:
        gases = PRESETS + TRIMIX_PRESETS
    elif source.kind == SourceKind.BANK:
        gases = tuple(banks)
    elif source.kind == SourceKind.CUSTOM:
        mix = clamp_mix(source.o2, source.he)
        name = 'Custom ({:.1f} O2 / {:.1f} He)'.format(mix.o2, mix.he)
        return Gas('custom', name, mix.o2, mix.he)
    else:
        raise ConfigError('Unknown gas source kind {}'.format(source.kind))

    gas = next((g for g in gases if g.id == source.key), None)
    if gas is None:
        raise ConfigError('Unknown gas {} {}'.format(source.kind, source.key))

    if __debug__:
        logger.debug('gas source {} resolved to {}'.format(source, gas))

    return gas


def gas_options(banks=()):
    """
    List gases available to top-off a cylinder - presets and gas banks.

    :param banks: Collection of gas banks.
    """
    return list(PRESETS) + list(banks)


# vim: sw=4:et:ai
