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
BlendTengu output functions.

The implemented functions

- convert blend steps into plan rows with running cylinder pressure
- format blend plan as numbered text
- save blend plan rows in CSV file
"""

import csv
import logging
from collections import namedtuple

from .engine import Kind
from .units import Unit, to_display_pressure

logger = logging.getLogger(__name__)


PlanRow = namedtuple('PlanRow', 'kind gas o2 he amount pressure')
PlanRow.__doc__ = """
Blend plan row.

:var kind: Blend step kind.
:var gas: Gas name, empty for bleed step.
:var o2: O2 percentage of gas, null for bleed step.
:var he: Helium percentage of gas, null for bleed step.
:var amount: Pressure added or vented [psi].
:var pressure: Cylinder pressure after the step [psi].
"""

STEP_LABEL = {
    Kind.BLEED: 'Bleed down',
    Kind.HELIUM: 'Add helium',
    Kind.OXYGEN: 'Add oxygen',
    Kind.TOPOFF: 'Top off with',
    Kind.GAS: 'Add',
}


def _round(value, decimals):
    return round(value, decimals) if decimals else int(round(value))


def format_pressure(value, unit=Unit.PSI, decimals=0):
    """
    Format pressure [psi] in pressure unit, i.e. `3000 PSI`.

    :param value: Pressure [psi].
    :param unit: Pressure unit.
    :param decimals: Number of decimal places.
    """
    v = _round(to_display_pressure(value, unit), decimals)
    return '{} {}'.format(v, unit.upper())


def format_percentage(value, decimals=1):
    """
    Format percentage, i.e. `32.0%`.
    """
    return '{:.{}f}%'.format(value, decimals)


def plan_rows(start_pressure, steps):
    """
    Convert blend steps into plan rows with cylinder pressure after each
    step.

    :param start_pressure: Cylinder start pressure [psi].
    :param steps: Collection of blend steps.
    """
    pressure = start_pressure
    for step in steps:
        if step.kind == Kind.BLEED:
            pressure -= step.amount
            yield PlanRow(step.kind, '', None, None, step.amount, pressure)
        else:
            pressure += step.amount
            gas = step.gas
            yield PlanRow(step.kind, gas.name, gas.o2, gas.he, step.amount, pressure)


def format_plan(start_pressure, steps, unit=Unit.PSI):
    """
    Format blend steps as list of numbered text lines.

    :param start_pressure: Cylinder start pressure [psi].
    :param steps: Collection of blend steps.
    :param unit: Pressure unit.
    """
    lines = []
    rows = plan_rows(start_pressure, steps)
    for k, row in enumerate(rows, 1):
        label = STEP_LABEL[row.kind]
        if row.kind == Kind.BLEED:
            text = '{} {} to {}'.format(
                label,
                format_pressure(row.amount, unit),
                format_pressure(row.pressure, unit),
            )
        else:
            text = '{} {} {} ({}) -> {}'.format(
                label, row.gas,
                format_pressure(row.amount, unit),
                format_mix(row.o2, row.he),
                format_pressure(row.pressure, unit),
            )
        lines.append('{}. {}'.format(k, text))
    return lines


def format_mix(o2, he):
    """
    Format gas mix, i.e. `21/35`.

    :param o2: O2 percentage.
    :param he: Helium percentage.
    """
    return '{}/{}'.format(round(o2, 1), round(he, 1))


def csv_writer(f, rows, unit=Unit.PSI):
    """
    Write blend plan rows into a CSV file.

    :param f: File object.
    :param rows: Collection of plan rows.
    :param unit: Pressure unit.
    """
    header = ['kind', 'gas', 'o2', 'he', 'amount', 'pressure']

    fcsv = csv.writer(f)
    fcsv.writerow(header)
    for row in rows:
        fcsv.writerow([
            row.kind, row.gas,
            '' if row.o2 is None else row.o2,
            '' if row.he is None else row.he,
            round(to_display_pressure(row.amount, unit), 4),
            round(to_display_pressure(row.pressure, unit), 4),
        ])

    if __debug__:
        logger.debug('csv plan written, unit {}'.format(unit))


# vim: sw=4:et:ai
