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
BlendTengu partial pressure blending engine.

The engine calculates how much helium, oxygen and top-off gas has to be
added to a cylinder to reach target pressure and target gas mix. If the
cylinder contains too much of any gas, then the engine searches for
pressure the cylinder has to be vented (bled down) to.

Partial Pressure Equations
--------------------------
Let :math:`P_s` and :math:`P_t` be start and target pressure of
a cylinder and :math:`F_s` and :math:`F_t` be start and target fraction
of a gas. Partial pressure of the gas to be added is

    .. math::

        \\Delta = P_t * F_t - P_s * F_s

All nitrogen is delivered by top-off gas, so amount of top-off gas is

    .. math::

        T = (\\Delta_{total} - \\Delta_{He} - \\Delta_{O_2}) / F_{N_2}

and helium and oxygen amounts are

    .. math::

        He = \\Delta_{He} - F_{He} * T

        O_2 = \\Delta_{O_2} - F_{O_2} * T

where :math:`F_{N_2}`, :math:`F_{He}` and :math:`F_{O_2}` are fractions
of top-off gas. Negative amount of any gas means that the cylinder has to
be bled down.
"""

from collections import namedtuple
import logging

from .error import Failure, MixError
from .ft import bisect_search
from .mix import Cylinder, HELIUM, OXYGEN, blend_mix, fraction, validate_mix
from . import const

logger = logging.getLogger(__name__)


class Kind(object):
    """
    Blend step kind enumeration.

    BLEED
        Vent cylinder by amount of pressure. Always first step of a plan.
    HELIUM
        Add pure helium.
    OXYGEN
        Add pure oxygen.
    TOPOFF
        Add top-off gas.
    GAS
        Add gas from a gas source (N-gas blend).
    """
    BLEED = 'bleed'
    HELIUM = 'helium'
    OXYGEN = 'oxygen'
    TOPOFF = 'topoff'
    GAS = 'gas'


Step = namedtuple('Step', 'kind gas amount')
Step.__repr__ = lambda s: 'Step(kind="{}", gas="{}", amount={:.4f})'.format(
    s.kind, s.gas.name if s.gas else '', s.amount
)
Step.__doc__ = """
Blend step.

:var kind: Blend step kind, see :class:`Kind`.
:var gas: Gas to add, null for bleed step.
:var amount: Pressure to add or to vent [psi].
"""

BlendResult = namedtuple(
    'BlendResult', 'success steps warnings errors failure bleed_pressure'
)
BlendResult.__doc__ = """
Result of a blend calculation.

:var success: True if blend plan is found.
:var steps: Blend plan - list of blend steps.
:var warnings: List of mix warnings.
:var errors: List of error messages.
:var failure: Failure code, null on success.
:var bleed_pressure: Pressure the cylinder is vented to, null if no bleed
    required.
"""

Outcome = namedtuple('Outcome', 'failure message helium oxygen topoff')
Outcome.success = property(lambda o: o.failure is None)
Outcome.__doc__ = """
Outcome of the partial pressure equations solver.

:var failure: Failure code, null on success.
:var message: Error message.
:var helium: Pressure of helium to add.
:var oxygen: Pressure of oxygen to add.
:var topoff: Pressure of top-off gas to add.
"""

Volumes = namedtuple('Volumes', 'helium oxygen topoff')
Volumes.__doc__ = """
Total pressure of helium, oxygen and top-off gas added by a blend plan.
"""

TopOffResult = namedtuple(
    'TopOffResult', 'success mix pressure added warnings errors failure'
)
TopOffResult.__doc__ = """
Result of cylinder top-off calculation.

:var success: True if calculation succeeded.
:var mix: Final gas mix.
:var pressure: Final pressure [psi].
:var added: Pressure of top-off gas added [psi].
:var warnings: List of mix warnings.
:var errors: List of error messages.
:var failure: Failure code, null on success.
"""

ChartRow = namedtuple(
    'ChartRow', 'start_pressure helium oxygen topoff feasible'
)
ChartRow.__doc__ = """
Blend plan for a hypothetical start pressure.

Gas amounts are null if blend is not feasible without bleed-down.
"""

StartPressureResult = namedtuple(
    'StartPressureResult', 'success pressure blend errors failure'
)
StartPressureResult.__doc__ = """
Result of required start pressure search.

:var success: True if start pressure is found.
:var pressure: Start pressure not requiring helium addition [psi].
:var blend: Blend result at found start pressure.
:var errors: List of error messages.
:var failure: Failure code, null on success.
"""

TargetHeliumResult = namedtuple(
    'TargetHeliumResult', 'success he blend errors failure'
)
TargetHeliumResult.__doc__ = """
Result of maximum target helium search.

:var success: True if target helium percentage is found.
:var he: Maximum target helium percentage not requiring helium addition.
:var blend: Blend result for found target helium percentage.
:var errors: List of error messages.
:var failure: Failure code, null on success.
"""


def _failure(failure, message):
    return Outcome(failure, message, None, None, None)


def _failed(failure, message, warnings=()):
    return BlendResult(False, [], list(warnings), [message], failure, None)


def mix_warnings(o2):
    """
    Get list of warnings for a gas mix O2 percentage.

    :param o2: O2 percentage.
    """
    warnings = []
    if o2 < const.HYPOXIC_O2:
        warnings.append('Hypoxic mix (<18% O2).')
    if o2 > const.FIRE_RISK_O2:
        warnings.append('High O2 - fire risk (>40% O2).')
    return warnings


def summarize_volumes(result):
    """
    Sum helium, oxygen and top-off gas added by a blend plan.

    Zero volumes are returned for a failed blend result.

    :param result: Blend result.
    """
    if not result.success:
        return Volumes(0, 0, 0)

    amount = lambda kind: sum(s.amount for s in result.steps if s.kind == kind)
    return Volumes(amount(Kind.HELIUM), amount(Kind.OXYGEN), amount(Kind.TOPOFF))


def has_bleed(result):
    """
    Check if blend result requires bleed-down.

    :param result: Blend result.
    """
    return any(s.kind == Kind.BLEED for s in result.steps)


class Blender(object):
    """
    BlendTengu partial pressure blending engine.

    The engine blends a cylinder using pure helium, pure oxygen and single
    top-off gas.

    :var bleed_iterations: Number of bleed-down search iterations.
    :var reverse_iterations: Number of reverse solvers search iterations.
    :var pressure_tolerance: Allowed difference between blended and
        target pressure [psi].
    """
    def __init__(self):
        super().__init__()
        self.bleed_iterations = const.BLEED_SEARCH_ITERATIONS
        self.reverse_iterations = const.REVERSE_SEARCH_ITERATIONS
        self.pressure_tolerance = const.PRESSURE_EPSILON


    def _deltas(self, start, target):
        """
        Calculate partial pressure of total, O2, helium and nitrogen gas,
        which needs to be added to reach target.

        :param start: Start cylinder.
        :param target: Target cylinder.
        """
        s_o2 = fraction(start.mix.o2)
        s_he = fraction(start.mix.he)
        s_n2 = max(0, 1 - s_o2 - s_he)

        t_o2 = fraction(target.mix.o2)
        t_he = fraction(target.mix.he)
        t_n2 = 1 - t_o2 - t_he

        d_total = target.pressure - start.pressure
        d_o2 = target.pressure * t_o2 - start.pressure * s_o2
        d_he = target.pressure * t_he - start.pressure * s_he
        d_n2 = target.pressure * t_n2 - start.pressure * s_n2
        return d_total, d_o2, d_he, d_n2


    def _components(self, d_total, d_o2, d_he, top_gas):
        """
        Solve partial pressure equations for amount of helium, oxygen and
        top-off gas.

        The amounts can be negative. Null is returned if top-off gas
        contains no nitrogen and nitrogen of the target cannot be
        balanced.

        :param d_total: Total pressure to add.
        :param d_o2: Partial pressure of O2 to add.
        :param d_he: Partial pressure of helium to add.
        :param top_gas: Top-off gas.
        """
        top_o2 = fraction(top_gas.o2)
        top_he = fraction(top_gas.he)
        top_n2 = max(0, 1 - top_o2 - top_he)

        if top_n2 > const.EPSILON:
            topoff = (d_total - d_he - d_o2) / top_n2
            helium = d_he - top_he * topoff
            oxygen = d_o2 - top_o2 * topoff
        elif abs(d_total - (d_he + d_o2)) <= const.NITROGEN_BALANCE_EPSILON:
            topoff = 0
            helium = d_he
            oxygen = d_o2
        else:
            return None

        return helium, oxygen, topoff


    def _helium_demand(self, start, target, top_gas):
        """
        Calculate amount of helium required to blend target mix.

        The amount is negative if the cylinder contains too much helium.
        Null is returned if the equations cannot be solved.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param top_gas: Top-off gas.
        """
        d_total, d_o2, d_he, _ = self._deltas(start, target)
        v = self._components(d_total, d_o2, d_he, top_gas)
        return None if v is None else v[0]


    def _solve(self, start, target, top_gas):
        """
        Calculate amount of helium, oxygen and top-off gas to be added to
        start cylinder to reach target cylinder pressure and gas mix.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param top_gas: Top-off gas.
        """
        if target.pressure <= 0:
            return _failure(
                Failure.TARGET_PRESSURE_INVALID,
                'Target pressure must be greater than zero.'
            )

        if start.pressure > target.pressure + const.EPSILON:
            return _failure(
                Failure.BLEED_REQUIRED,
                'Target pressure is below current pressure. Bleed-down required.'
            )

        try:
            validate_mix(start.mix.o2, start.mix.he)
            validate_mix(target.mix.o2, target.mix.he)
            validate_mix(top_gas.o2, top_gas.he)
        except MixError as ex:
            return _failure(Failure.INVALID_MIX, str(ex))

        t_n2 = 1 - fraction(target.mix.o2) - fraction(target.mix.he)
        if t_n2 < -const.EPSILON:
            return _failure(
                Failure.IMPOSSIBLE_TARGET,
                'Target mix is not physically possible.'
            )

        d_total, d_o2, d_he, d_n2 = self._deltas(start, target)
        if min(d_o2, d_he, d_n2) < -const.EPSILON:
            return _failure(
                Failure.BLEED_REQUIRED,
                'Start mix exceeds target specification. Bleed-down recommended.'
            )

        if abs(d_total) <= const.EPSILON:
            return _failure(
                Failure.NO_CHANGE_REQUIRED,
                'Target pressure matches start pressure.'
            )

        v = self._components(d_total, d_o2, d_he, top_gas)
        if v is None:
            return _failure(
                Failure.UNREACHABLE_WITH_TOP_GAS,
                'Selected top-off gas cannot supply nitrogen of target mix.'
            )

        if min(v) < -const.EPSILON:
            return _failure(
                Failure.BLEED_REQUIRED,
                'Blend requires removing gas. Bleed-down suggested.'
            )

        helium, oxygen, topoff = (max(0, x) for x in v)

        pressure = start.pressure + helium + oxygen + topoff
        if abs(pressure - target.pressure) > self.pressure_tolerance:
            return _failure(
                Failure.TOLERANCE_EXCEEDED,
                'Unable to match target pressure with current inputs.'
            )

        if __debug__:
            logger.debug(
                'solved at {:.4f}psi: he={:.4f}, o2={:.4f}, topoff={:.4f}'
                .format(start.pressure, helium, oxygen, topoff)
            )

        return Outcome(None, None, helium, oxygen, topoff)


    def _find_bleed(self, start, target, top_gas):
        """
        Find start pressure, which allows to blend target mix.

        The start pressure is searched with bisection between zero and
        start cylinder pressure, keeping the start gas mix. Lower start
        pressures are feasible, so a successful attempt moves lower bound
        of the search up and a failed attempt moves upper bound down. The
        search converges to the highest feasible start pressure, which is
        the minimal bleed-down.

        A tuple of found pressure and solver outcome is returned. If no
        pressure is found, then pressure is null and outcome contains last
        encountered error message.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param top_gas: Top-off gas.
        """
        messages = []

        def attempt(pressure):
            outcome = self._solve(start._replace(pressure=pressure), target, top_gas)
            if outcome.success:
                return outcome
            messages.append(outcome.message)
            return None

        found = bisect_search(
            0, start.pressure, attempt, self.bleed_iterations, rising=False
        )
        if found is None:
            if messages:
                message = messages[-1]
            else:
                message = 'Unable to compute bleed-down solution.'
            if __debug__:
                logger.debug('bleed-down solution not found: {}'.format(message))
            return None, _failure(Failure.BLEED_SOLUTION_NOT_FOUND, message)

        pressure, outcome = found
        if __debug__:
            logger.debug('bleed-down from {:.4f}psi to {:.4f}psi'.format(
                start.pressure, pressure
            ))
        return pressure, outcome


    def _steps(self, outcome, top_gas):
        """
        Convert solver outcome into blend steps - helium, oxygen and top-off
        gas, skipping empty steps.
        """
        steps = (
            Step(Kind.HELIUM, HELIUM, outcome.helium),
            Step(Kind.OXYGEN, OXYGEN, outcome.oxygen),
            Step(Kind.TOPOFF, top_gas, outcome.topoff),
        )
        return [s for s in steps if s.amount > const.EPSILON]


    def blend(self, start, target, top_gas):
        """
        Calculate blend plan to reach target cylinder pressure and gas mix
        using pure helium, pure oxygen and top-off gas.

        If start cylinder contains too much gas, then bleed-down pressure
        is searched and the plan starts with bleed step.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param top_gas: Top-off gas.
        """
        warnings = mix_warnings(target.mix.o2)

        outcome = self._solve(start, target, top_gas)
        if outcome.success:
            steps = self._steps(outcome, top_gas)
            return BlendResult(True, steps, warnings, [], None, None)

        if outcome.failure != Failure.BLEED_REQUIRED \
                or start.pressure <= const.EPSILON:
            return _failed(outcome.failure, outcome.message, warnings)

        pressure, outcome = self._find_bleed(start, target, top_gas)
        if pressure is None:
            return _failed(outcome.failure, outcome.message, warnings)

        steps = [Step(Kind.BLEED, None, start.pressure - pressure)]
        steps.extend(self._steps(outcome, top_gas))
        return BlendResult(True, steps, warnings, [], None, pressure)


    def top_off(self, start, pressure, top_gas):
        """
        Calculate gas mix of a cylinder topped off with a gas.

        :param start: Start cylinder.
        :param pressure: Final pressure [psi].
        :param top_gas: Top-off gas.
        """
        def failed(failure, message):
            return TopOffResult(
                False, None, pressure, 0, [], [message], failure
            )

        if pressure <= const.EPSILON:
            return failed(
                Failure.TARGET_PRESSURE_INVALID,
                'Final pressure must be greater than zero.'
            )
        if start.pressure < 0:
            return failed(
                Failure.START_PRESSURE_INVALID,
                'Start pressure cannot be negative.'
            )

        added = pressure - start.pressure
        if added < -const.EPSILON:
            return failed(
                Failure.BLEED_REQUIRED,
                'Final pressure is below current pressure. Bleed-down required.'
            )

        try:
            validate_mix(start.mix.o2, start.mix.he)
            validate_mix(top_gas.o2, top_gas.he)
        except MixError as ex:
            return failed(Failure.INVALID_MIX, str(ex))

        added = max(0, added)
        mix = blend_mix(((start.pressure, start.mix), (added, top_gas)))
        return TopOffResult(
            True, mix, pressure, added, mix_warnings(mix.o2), [], None
        )


    def project_chart(self, start, target, top_gas, deltas=const.CHART_DELTAS_PSI):
        """
        Calculate blend plans for start pressures lowered by deltas.

        A row is not feasible if start pressure is negative or blend
        requires bleed-down.

        :param start: Start cylinder.
        :param target: Target cylinder.
        :param top_gas: Top-off gas.
        :param deltas: Collection of start pressure deltas [psi].
        """
        rows = []
        for delta in deltas:
            pressure = start.pressure - delta
            if pressure < 0:
                rows.append(ChartRow(0, None, None, None, False))
                continue

            result = self.blend(start._replace(pressure=pressure), target, top_gas)
            if not result.success or has_bleed(result):
                rows.append(ChartRow(pressure, None, None, None, False))
            else:
                v = summarize_volumes(result)
                rows.append(ChartRow(pressure, v.helium, v.oxygen, v.topoff, True))
        return rows


    def required_start_pressure(self, mix, target, top_gas):
        """
        Find cylinder start pressure, which allows to blend target without
        adding helium.

        The cylinder start gas mix is kept, only the start pressure is
        searched. Helium demand is linear in start pressure, so bisection
        converges to the start pressure, where helium demand drops to
        zero. If neither start gas mix nor target gas mix contains helium,
        then helium demand does not depend on start pressure and the
        highest start pressure not requiring bleed-down is searched. The
        blend at found pressure must not require bleed-down.

        :param mix: Start gas mix.
        :param target: Target cylinder.
        :param top_gas: Top-off gas.
        """
        def failed(failure, message):
            return StartPressureResult(False, 0, None, [message], failure)

        if target.pressure <= const.EPSILON:
            return failed(
                Failure.TARGET_PRESSURE_INVALID,
                'Target pressure must be greater than zero.'
            )

        try:
            validate_mix(mix.o2, mix.he)
        except MixError as ex:
            return failed(Failure.INVALID_MIX, str(ex))

        demand = lambda p: self._helium_demand(Cylinder(p, mix), target, top_gas)

        def no_helium(pressure):
            v = demand(pressure)
            return v is not None and v <= const.EPSILON

        full = demand(target.pressure)
        if full is None or full > const.EPSILON:
            return failed(
                Failure.HELIUM_REQUIRED,
                'Target cannot be met without adding helium at full cylinder'
                ' pressure.'
            )

        def helium_free(pressure):
            result = self.blend(Cylinder(pressure, mix), target, top_gas)
            return result.success and not has_bleed(result) \
                and summarize_volumes(result).helium <= const.EPSILON

        empty = demand(0)
        if empty is not None and abs(empty - full) <= const.EPSILON:
            # helium demand does not depend on start pressure, search the
            # highest start pressure not requiring bleed-down
            found = bisect_search(
                0, target.pressure, helium_free, self.reverse_iterations,
                rising=False
            )
        else:
            # helium demand falls with start pressure, search the lowest
            # start pressure; otherwise search the highest one
            rising = empty is None or empty >= full
            found = bisect_search(
                0, target.pressure, no_helium, self.reverse_iterations, rising
            )
        pressure = found[0] if found else target.pressure

        result = self.blend(Cylinder(pressure, mix), target, top_gas)
        if not result.success or has_bleed(result) \
                or summarize_volumes(result).helium > const.EPSILON:
            return failed(
                Failure.NO_HELIUM_FREE_SOLUTION,
                'Unable to determine required start pressure without helium'
                ' addition.'
            )

        if __debug__:
            logger.debug('required start pressure {:.4f}psi'.format(pressure))

        return StartPressureResult(True, pressure, result, [], None)


    def max_target_he(self, start, target, top_gas):
        """
        Find maximum target helium percentage, which can be blended without
        adding helium.

        Helium of start cylinder is kept, but no helium is bought. Helium
        demand grows with target helium percentage, so bisection converges
        to the target helium percentage, where helium demand drops to
        zero. If start cylinder has no spare helium or no such percentage
        is found, target without helium is tried. The blend for found
        percentage must not require bleed-down.

        :param start: Start cylinder.
        :param target: Target cylinder, its helium percentage is ignored.
        :param top_gas: Top-off gas.
        """
        def with_he(he):
            return target._replace(mix=target.mix._replace(he=he))

        def no_helium(he):
            v = self._helium_demand(start, with_he(he), top_gas)
            return v is not None and v <= const.EPSILON

        # no room for helium or no spare helium in start cylinder, only
        # target without helium is verified
        max_he = max(0, min(100 - target.mix.o2, 100))
        spare = self._helium_demand(start, with_he(0), top_gas)
        found = None
        no_spare = spare is not None and spare >= -const.EPSILON
        if max_he > const.EPSILON and not no_spare:
            found = bisect_search(
                0, max_he, no_helium, self.reverse_iterations, rising=False
            )
        he = found[0] if found else 0
        result = self.blend(start, with_he(he), top_gas)
        if result.success and not has_bleed(result) \
                and summarize_volumes(result).helium <= const.EPSILON:
            if __debug__:
                logger.debug('max target helium {:.4f}%'.format(he))
            return TargetHeliumResult(True, he, result, [], None)

        return TargetHeliumResult(
            False, 0, None,
            ['Unable to achieve a target mix without helium addition.'],
            Failure.NO_HELIUM_FREE_SOLUTION
        )


# vim: sw=4:et:ai
