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
BlendTengu exceptions and failure codes.

Infeasible blends are not exceptional - solvers report them with failure
codes in result objects. Exceptions are raised for malformed input only.
"""

class BlendError(Exception):
    """
    Base class for BlendTengu errors.
    """


class ConfigError(BlendError):
    """
    Malformed solver input, i.e. gas list entry without gas mix or unknown
    gas preset.
    """


class MixError(BlendError):
    """
    Gas mix is not physically valid.
    """


class Failure(object):
    """
    Blend failure code enumeration.

    INVALID_MIX
        Gas mix fractions are negative, over 100% or sum over 100%.
    TARGET_PRESSURE_INVALID
        Target pressure is not greater than zero.
    START_PRESSURE_INVALID
        Start pressure is negative.
    BLEED_REQUIRED
        Cylinder has to be vented before blending.
    IMPOSSIBLE_TARGET
        Target mix has negative nitrogen fraction.
    UNREACHABLE_WITH_TOP_GAS
        Top-off gas cannot supply nitrogen required by target mix.
    NO_CHANGE_REQUIRED
        Start and target pressure are the same, there is nothing to add.
    TOLERANCE_EXCEEDED
        Blended pressure differs from target pressure.
    BLEED_SOLUTION_NOT_FOUND
        Bleed-down search exhausted without a feasible start pressure.
    HELIUM_REQUIRED
        Target cannot be reached without adding helium.
    NO_HELIUM_FREE_SOLUTION
        Reverse search found no blend without helium addition.
    NO_GAS_SOURCES
        No gas sources available for N-gas blending.
    INVALID_TARGET_COMPOSITION
        Target mix of N-gas blend is not valid.
    NO_VALID_BLEND_FOUND
        No gas combination reaches target mix, even after bleed-down.
    """
    INVALID_MIX = 'invalid_mix'
    TARGET_PRESSURE_INVALID = 'target_pressure_invalid'
    START_PRESSURE_INVALID = 'start_pressure_invalid'
    BLEED_REQUIRED = 'bleed_required'
    IMPOSSIBLE_TARGET = 'impossible_target'
    UNREACHABLE_WITH_TOP_GAS = 'unreachable_with_top_gas'
    NO_CHANGE_REQUIRED = 'no_change_required'
    TOLERANCE_EXCEEDED = 'tolerance_exceeded'
    BLEED_SOLUTION_NOT_FOUND = 'bleed_solution_not_found'
    HELIUM_REQUIRED = 'helium_required'
    NO_HELIUM_FREE_SOLUTION = 'no_helium_free_solution'
    NO_GAS_SOURCES = 'no_gas_sources'
    INVALID_TARGET_COMPOSITION = 'invalid_target_composition'
    NO_VALID_BLEND_FOUND = 'no_valid_blend_found'


# vim: sw=4:et:ai
