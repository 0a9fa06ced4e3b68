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
Blending with multiple gas sources.

The N-gas blender does not use pure helium and oxygen by default.
Instead, each single gas, each pair and each triple of available gas
sources is tried. Every combination delivering required gas mix is a
blend alternative. The alternatives are ranked by estimated cost.

The gas mix to be added to a cylinder is calculated from start and target
cylinder states

    .. math::

        F_{added} = (P_t * F_t - P_s * F_s) / (P_t - P_s)

If no combination of gases delivers the mix, then the highest start
pressure, for which any combination delivers the mix, is searched (minimal
bleed-down).
"""

from collections import namedtuple
import itertools
import logging
import numbers

from .cost import DEFAULT_COST_SETTINGS, gas_cost
from .engine import Kind, Step, mix_warnings
from .error import ConfigError, Failure, MixError
from .ft import bisect_search
from .mix import GasMix, blend_mix, validate_mix
from . import linear
from . import const

logger = logging.getLogger(__name__)


Alternative = namedtuple(
    'Alternative', 'steps final_mix estimated_cost fill_order'
)
Alternative.__doc__ = """
Blend alternative.

:var steps: Blend steps, bleed step first if bleed-down required.
:var final_mix: Gas mix of the cylinder after blending.
:var estimated_cost: Estimated cost of added gas.
:var fill_order: Blend steps in safe fill order.
"""

Suggestion = namedtuple('Suggestion', 'alternative deviation_o2 deviation_he')
Suggestion.__doc__ = """
Blend alternative for a target gas mix similar to requested one.

:var alternative: Blend alternative.
:var deviation_o2: Difference of O2 percentage from requested one.
:var deviation_he: Difference of helium percentage from requested one.
"""

MultiResult = namedtuple(
    'MultiResult',
    'success alternatives selected_index warnings errors failure suggestion'
)
MultiResult.__doc__ = """
Result of N-gas blend calculation.

:var success: True if any blend alternative is found.
:var alternatives: Blend alternatives ranked by estimated cost.
:var selected_index: Index of selected alternative.
:var warnings: List of mix warnings.
:var errors: List of error messages.
:var failure: Failure code, null on success.
:var suggestion: Blend suggestion for similar target gas mix, if no blend
    found.
"""


def _is_pure(value):
    return value >= 100 - const.EPSILON


def fill_order(steps):
    """
    Order blend steps into safe fill sequence.

    Bleed step is first, then pure helium, pure oxygen and remaining gases
    by descending helium and O2 percentage. Empty steps are dropped.

    :param steps: Collection of blend steps.
    """
    bleed = [s for s in steps if s.kind == Kind.BLEED]
    added = [s for s in steps if s.kind != Kind.BLEED and s.amount > const.EPSILON]
    key = lambda s: (
        not _is_pure(s.gas.he), not _is_pure(s.gas.o2), -s.gas.he, -s.gas.o2
    )
    return bleed + sorted(added, key=key)


def needed_mix(start, target):
    """
    Calculate pressure and gas mix to be added to start cylinder to reach
    target cylinder.

    Null is returned if there is no pressure to add.

    :param start: Start cylinder.
    :param target: Target cylinder.
    """
    added = target.pressure - start.pressure
    if added <= const.EPSILON:
        return None

    clean = lambda v: 0 if -const.EPSILON < v < 0 else v
    o2 = (target.pressure * target.mix.o2 - start.pressure * start.mix.o2) / added
    he = (target.pressure * target.mix.he - start.pressure * start.mix.he) / added
    return added, GasMix(clean(o2), clean(he))


def _valid_needed_mix(start, target):
    """
    Calculate pressure and gas mix to be added to start cylinder, if the
    gas mix is valid.

    Null is returned if there is no pressure to add or the gas mix is not
    valid.

    :param start: Start cylinder.
    :param target: Target cylinder.
    """
    needed = needed_mix(start, target)
    if needed is None:
        return None

    try:
        validate_mix(needed[1].o2, needed[1].he)
    except MixError:
        if __debug__:
            logger.debug('invalid needed mix {} at {:.4f}psi'.format(
                needed[1], start.pressure
            ))
        return None
    return needed


def _search_values(target, tolerance, step, lo, hi):
    """
    Create list of values around target value, closest first.
    """
    values = []
    n = int(round(tolerance / step))
    candidates = itertools.chain(
        (target,),
        *((target - k * step, target + k * step) for k in range(1, n + 1))
    )
    for v in candidates:
        if lo - const.EPSILON <= v <= hi + const.EPSILON:
            v = round(v, 4)
            if not any(abs(v - u) < 1e-4 for u in values):
                values.append(v)
    return values


def _key(alternative):
    """
    Create deduplication key of blend alternative.
    """
    return tuple(sorted(
        (s.gas.name if s.gas else s.kind, round(s.amount))
        for s in alternative.steps
    ))


class MultiBlender(object):
    """
    N-gas blender.

    :var max_alternatives: Maximum number of returned blend alternatives.
    :var bleed_iterations: Number of bleed-down search iterations.
    :var bleed_scan_steps: Number of start pressures sampled by bleed-down
        search.
    :var single_tolerance: Single gas mix tolerance [%].
    :var pair_tolerance: Two gases total pressure tolerance.
    :var triple_tolerance: Three gases total pressure tolerance.
    """
    def __init__(self):
        super().__init__()
        self.max_alternatives = const.MAX_ALTERNATIVES
        self.bleed_iterations = const.ALTERNATIVE_BLEED_SEARCH_ITERATIONS
        self.bleed_scan_steps = const.ALTERNATIVE_BLEED_SCAN_STEPS
        self.single_tolerance = const.SINGLE_GAS_TOLERANCE
        self.pair_tolerance = const.PAIR_PRESSURE_TOLERANCE
        self.triple_tolerance = const.TRIPLE_PRESSURE_TOLERANCE


    def _validate_gases(self, gases):
        """
        Validate list of gas sources.

        `ConfigError` is raised if a gas has no name, no numeric O2 and
        helium percentage or its gas mix is not valid.

        :param gases: Collection of gases.
        """
        for gas in gases:
            o2 = getattr(gas, 'o2', None)
            he = getattr(gas, 'he', None)
            if not hasattr(gas, 'name') \
                    or not isinstance(o2, numbers.Real) \
                    or not isinstance(he, numbers.Real):
                raise ConfigError('Invalid gas source {!r}'.format(gas))
            try:
                validate_mix(o2, he)
            except MixError as ex:
                raise ConfigError('Gas {}: {}'.format(gas.name, ex)) from ex


    def _alternative(self, start, steps, settings):
        """
        Create blend alternative from blend steps.

        :param start: Start cylinder.
        :param steps: Blend steps adding gas.
        :param settings: Cost settings.
        """
        parts = [(start.pressure, start.mix)]
        parts.extend((s.amount, s.gas) for s in steps)
        mix = blend_mix(parts)
        cost = sum(gas_cost(s.gas, s.amount, settings) for s in steps)
        return Alternative(tuple(steps), mix, cost, tuple(fill_order(steps)))


    def _direct(self, start, target, gases, settings):
        """
        Find blend alternatives without bleed-down.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param gases: Collection of gases.
        :param settings: Cost settings.
        """
        needed = _valid_needed_mix(start, target)
        if needed is None:
            return []

        pressure, mix = needed
        alternatives = []
        for k in range(1, 4):
            for combo in itertools.combinations(gases, k):
                solution = linear.solve(
                    combo, mix.o2, mix.he, pressure,
                    self.single_tolerance, self.pair_tolerance,
                    self.triple_tolerance
                )
                if solution is None:
                    continue
                steps = [
                    Step(Kind.GAS, g, a)
                    for g, a in zip(combo, solution.amounts)
                    if a > const.EPSILON
                ]
                alternatives.append(self._alternative(start, steps, settings))

        if __debug__:
            logger.debug('{} alternatives at {:.4f}psi'.format(
                len(alternatives), start.pressure
            ))
        return alternatives


    def _find_bleed(self, start, target, gases, settings):
        """
        Find the highest start pressure, for which any combination of gases
        delivers needed gas mix.

        The needed gas mix moves away from target gas mix as start pressure
        rises, so it is valid only below some pressure. The pressure is
        searched with bisection first. Combination of gases delivers the
        needed gas mix within an interval of start pressures, which does
        not have to reach zero pressure, i.e. single gas matching the
        needed gas mix. Therefore, start pressures below are sampled
        downwards and bisection refines the highest pressure found.

        A tuple of found pressure and blend alternatives is returned, or
        null if no pressure is found.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param gases: Collection of gases.
        :param settings: Cost settings.
        """
        attempt = lambda p: self._direct(
            start._replace(pressure=p), target, gases, settings
        )
        valid = lambda p: _valid_needed_mix(start._replace(pressure=p), target)

        hi = min(start.pressure, target.pressure)
        found = bisect_search(0, hi, valid, self.bleed_iterations, rising=False)
        limit = found[0] if found else 0
        if __debug__:
            logger.debug('needed mix valid up to {:.4f}psi'.format(limit))

        alternatives = attempt(limit)
        if alternatives:
            return limit, alternatives
        if limit <= const.EPSILON:
            return None

        n = self.bleed_scan_steps
        upper = limit
        for k in range(1, n + 1):
            pressure = limit * (1 - k / n)
            alternatives = attempt(pressure)
            if alternatives:
                break
            upper = pressure
        else:
            return None

        found = bisect_search(
            pressure, upper, attempt, self.bleed_iterations, rising=False
        )
        return found if found else (pressure, alternatives)


    def alternatives(self, start, target, gases, settings=DEFAULT_COST_SETTINGS):
        """
        Find blend alternatives ranked by estimated cost.

        A tuple of alternatives list and failure is returned. The failure
        is null or a pair of failure code and error message.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param gases: Collection of gases.
        :param settings: Cost settings.
        """
        if not gases:
            return [], (Failure.NO_GAS_SOURCES, 'No gas sources available.')

        try:
            validate_mix(target.mix.o2, target.mix.he)
        except MixError as ex:
            return [], (Failure.INVALID_TARGET_COMPOSITION, str(ex))

        same_mix = abs(start.mix.o2 - target.mix.o2) <= const.EPSILON \
            and abs(start.mix.he - target.mix.he) <= const.EPSILON
        excess = start.pressure - target.pressure
        if same_mix and abs(excess) <= const.EPSILON:
            return [], (
                Failure.NO_CHANGE_REQUIRED,
                'Target pressure matches start pressure.'
            )
        if same_mix and excess > 0:
            bleed = Step(Kind.BLEED, None, excess)
            return [Alternative((bleed,), start.mix, 0, (bleed,))], None

        found = self._direct(start, target, gases, settings)
        bleed = None
        if not found and start.pressure > const.EPSILON:
            result = self._find_bleed(start, target, gases, settings)
            if result is not None:
                pressure, found = result
                bleed = Step(Kind.BLEED, None, start.pressure - pressure)
                if __debug__:
                    logger.debug('bleed-down to {:.4f}psi'.format(pressure))

        if not found:
            return [], (
                Failure.NO_VALID_BLEND_FOUND,
                'No valid blend found with available gases.'
            )

        if bleed:
            found = [
                a._replace(
                    steps=(bleed,) + a.steps, fill_order=(bleed,) + a.fill_order
                )
                for a in found
            ]

        unique = []
        keys = set()
        for a in found:
            k = _key(a)
            if k not in keys:
                keys.add(k)
                unique.append(a)

        cost_key = lambda a: round(a.estimated_cost / const.COST_TIE_EPSILON)
        unique.sort(key=cost_key)
        return unique[:self.max_alternatives], None


    def suggest(self, start, target, gases, settings=DEFAULT_COST_SETTINGS):
        """
        Find the cheapest blend alternative for a target gas mix similar to
        the requested one.

        Target gas mixes are tried from the closest one. Bleed-down is not
        considered. Null is returned if no alternative is found.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param gases: Collection of gases.
        :param settings: Cost settings.
        """
        o2_values = _search_values(
            target.mix.o2, const.SIMILAR_O2_TOLERANCE, const.SIMILAR_O2_STEP,
            0, 100
        )
        for o2 in o2_values:
            he_values = _search_values(
                target.mix.he, const.SIMILAR_HE_TOLERANCE,
                const.SIMILAR_HE_STEP, 0, max(0, 100 - o2)
            )
            for he in he_values:
                if abs(o2 - target.mix.o2) < const.EPSILON \
                        and abs(he - target.mix.he) < const.EPSILON:
                    continue
                mix = GasMix(o2, he)
                found = self._direct(start, target._replace(mix=mix), gases, settings)
                if found:
                    best = min(found, key=lambda a: a.estimated_cost)
                    return Suggestion(best, o2 - target.mix.o2, he - target.mix.he)
        return None


    def solve(self, target, start, gases, settings=None, selected_index=0):
        """
        Calculate N-gas blend alternatives.

        `ConfigError` is raised if gas list contains malformed gas.

        :param target: Target cylinder.
        :param start: Start cylinder.
        :param gases: Collection of available gases.
        :param settings: Cost settings, defaults used if null.
        :param selected_index: Index of selected alternative.
        """
        if settings is None:
            settings = DEFAULT_COST_SETTINGS

        def failed(failure, message, warnings=(), suggestion=None):
            return MultiResult(
                False, [], 0, list(warnings), [message], failure, suggestion
            )

        if target.pressure <= 0:
            return failed(
                Failure.TARGET_PRESSURE_INVALID,
                'Target pressure must be greater than zero.'
            )
        if start.pressure < 0:
            return failed(
                Failure.START_PRESSURE_INVALID,
                'Start pressure cannot be negative.'
            )

        try:
            validate_mix(target.mix.o2, target.mix.he)
            validate_mix(start.mix.o2, start.mix.he)
        except MixError as ex:
            return failed(Failure.INVALID_MIX, str(ex))

        gases = list(gases)
        if not gases:
            return failed(
                Failure.NO_GAS_SOURCES, 'At least one gas source is required.'
            )
        self._validate_gases(gases)

        warnings = mix_warnings(target.mix.o2)

        found, failure = self.alternatives(start, target, gases, settings)
        if failure:
            code, message = failure
            suggestion = None
            if code == Failure.NO_VALID_BLEND_FOUND:
                suggestion = self.suggest(start, target, gases, settings)
            return failed(code, message, warnings, suggestion)

        index = min(max(0, selected_index), len(found) - 1)
        mix = found[index].final_mix
        if abs(mix.o2 - target.mix.o2) > const.TRIM_TOLERANCE \
                or abs(mix.he - target.mix.he) > const.TRIM_TOLERANCE:
            warnings.append(
                'Helium target may require additional trimming with oxygen'
                ' or helium.'
            )

        return MultiResult(True, found, index, warnings, [], None, None)


# vim: sw=4:et:ai
