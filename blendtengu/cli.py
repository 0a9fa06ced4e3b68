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
BlendTengu command line tool.

Pressures are given and displayed in pressure unit selected with
``--unit`` option and converted into psi before calling the solvers.
Gases are specified with

- preset name, i.e. `air`, `oxygen`, `helium`, `trimix-2135`
- gas bank name, defined with ``--bank NAME:O2/HE`` option
- custom gas mix `O2/HE` or `O2`, i.e. `32` or `21/35`
"""

import argparse
import logging
import sys

from .cost import CostSettings, calculate_gas_cost
from .engine import Blender, summarize_volumes
from .error import BlendError, ConfigError
from .mix import Cylinder, Gas, GasMix, bank, custom, preset, resolve_source, \
    validate_mix, PRESETS, TRIMIX_PRESETS
from .multi import MultiBlender
from .output import csv_writer, format_mix, format_percentage, format_plan, \
    format_pressure, plan_rows
from .units import UNITS, Unit, chart_deltas, from_display_pressure
from . import const

logger = logging.getLogger(__name__)

PRESET_KEYS = tuple(g.id for g in PRESETS + TRIMIX_PRESETS)


def mix_type(text):
    """
    Parse gas mix `O2/HE` or `O2`.

    :param text: Gas mix text, i.e. `21/35`.
    """
    try:
        o2, _, he = text.partition('/')
        mix = GasMix(float(o2), float(he) if he else 0.0)
        validate_mix(mix.o2, mix.he)
    except (ValueError, BlendError) as ex:
        raise argparse.ArgumentTypeError(
            'invalid gas mix {}: {}'.format(text, ex)
        ) from ex
    return mix


def bank_type(text):
    """
    Parse gas bank definition `NAME:O2/HE`.

    :param text: Gas bank definition, i.e. `ean36:36/0`.
    """
    name, sep, value = text.partition(':')
    if not sep or not name:
        raise argparse.ArgumentTypeError(
            'invalid gas bank {}, NAME:O2/HE expected'.format(text)
        )
    mix = mix_type(value)
    return Gas(name, name, mix.o2, mix.he)


def parse_gas(text, banks=()):
    """
    Resolve gas name or custom gas mix into gas.

    `ConfigError` is raised for unknown gas.

    :param text: Preset name, gas bank name or gas mix.
    :param banks: Collection of gas banks.
    """
    if text in PRESET_KEYS:
        source = preset(text)
    elif any(b.id == text for b in banks):
        source = bank(text)
    else:
        try:
            mix = mix_type(text)
        except argparse.ArgumentTypeError as ex:
            raise ConfigError('Unknown gas {}'.format(text)) from ex
        source = custom(mix.o2, mix.he)
    return resolve_source(source, banks)


def _pressure(args, value):
    return from_display_pressure(value, args.unit)


def _cylinders(args):
    start = Cylinder(_pressure(args, args.start_pressure), args.start_mix)
    target = Cylinder(_pressure(args, args.pressure), args.mix)
    return start, target


def _report(result, out):
    for w in result.warnings:
        print('Warning: {}'.format(w), file=out)
    for e in result.errors:
        print('Error: {}'.format(e), file=out)


def _print_plan(args, start_pressure, steps, out):
    if args.csv:
        csv_writer(out, plan_rows(start_pressure, steps), args.unit)
    else:
        for line in format_plan(start_pressure, steps, args.unit):
            print(line, file=out)


def cmd_blend(args, out):
    start, target = _cylinders(args)
    top_gas = parse_gas(args.top, args.bank)
    result = Blender().blend(start, target, top_gas)
    if result.success:
        _print_plan(args, start.pressure, result.steps, out)
        if not args.csv:
            v = summarize_volumes(result)
            cost = calculate_gas_cost(v.oxygen, v.helium, _settings(args))
            print(
                'Oxygen: {:.1f} cuft, helium: {:.1f} cuft, cost: {:.2f}'
                .format(cost.oxygen_volume, cost.helium_volume, cost.total_cost),
                file=out
            )
    _report(result, out)
    return result.success


def cmd_topoff(args, out):
    start = Cylinder(_pressure(args, args.start_pressure), args.start_mix)
    top_gas = parse_gas(args.top, args.bank)
    result = Blender().top_off(start, _pressure(args, args.pressure), top_gas)
    if result.success:
        print(
            'Add {} of {}, final mix {} O2 / {} He'.format(
                format_pressure(result.added, args.unit), top_gas.name,
                format_percentage(result.mix.o2),
                format_percentage(result.mix.he),
            ),
            file=out
        )
    _report(result, out)
    return result.success


def cmd_multi(args, out):
    start, target = _cylinders(args)
    gases = [parse_gas(g, args.bank) for g in args.gases]
    result = MultiBlender().solve(
        target, start, gases, _settings(args), args.select
    )
    if result.success:
        alternative = result.alternatives[result.selected_index]
        if args.csv:
            _print_plan(args, start.pressure, alternative.fill_order, out)
        else:
            for k, a in enumerate(result.alternatives):
                mark = '*' if k == result.selected_index else ' '
                print('{} {}. {} cost {:.2f}, final mix {}'.format(
                    mark, k, ', '.join(
                        s.gas.name for s in a.fill_order if s.gas
                    ),
                    a.estimated_cost,
                    format_mix(a.final_mix.o2, a.final_mix.he),
                ), file=out)
            _print_plan(args, start.pressure, alternative.fill_order, out)
    elif result.suggestion:
        s = result.suggestion
        mix = s.alternative.final_mix
        print('Similar blend possible: {} ({:+.1f} O2, {:+.1f} He)'.format(
            format_mix(mix.o2, mix.he), s.deviation_o2, s.deviation_he
        ), file=out)
    _report(result, out)
    return result.success


def cmd_start_pressure(args, out):
    target = Cylinder(_pressure(args, args.pressure), args.mix)
    top_gas = parse_gas(args.top, args.bank)
    result = Blender().required_start_pressure(args.start_mix, target, top_gas)
    if result.success:
        print(
            'Required start pressure: {}'.format(
                format_pressure(result.pressure, args.unit, 1)
            ),
            file=out
        )
        _print_plan(args, result.pressure, result.blend.steps, out)
    for e in result.errors:
        print('Error: {}'.format(e), file=out)
    return result.success


def cmd_max_he(args, out):
    start, target = _cylinders(args)
    top_gas = parse_gas(args.top, args.bank)
    result = Blender().max_target_he(start, target, top_gas)
    if result.success:
        print(
            'Maximum target helium: {}'.format(format_percentage(result.he)),
            file=out
        )
        _print_plan(args, start.pressure, result.blend.steps, out)
    for e in result.errors:
        print('Error: {}'.format(e), file=out)
    return result.success


def cmd_chart(args, out):
    start, target = _cylinders(args)
    top_gas = parse_gas(args.top, args.bank)
    rows = Blender().project_chart(
        start, target, top_gas, chart_deltas(args.unit)
    )
    fmt = lambda v: '-' if v is None else format_pressure(v, args.unit)
    for row in rows:
        print('{:>10} {:>10} {:>10} {:>10}'.format(
            format_pressure(row.start_pressure, args.unit),
            fmt(row.helium), fmt(row.oxygen), fmt(row.topoff)
        ), file=out)
    return True


def _settings(args):
    return CostSettings(
        args.price_o2, args.price_he, args.tank_volume, args.tank_rated_pressure
    )


def _cylinder_options(parser, target=True, start=True):
    if start:
        parser.add_argument(
            '-s', '--start-pressure', type=float, default=0,
            help='cylinder start pressure'
        )
    parser.add_argument(
        '-m', '--start-mix', type=mix_type, default=GasMix(21, 0),
        help='cylinder start gas mix O2/HE (default 21/0)'
    )
    parser.add_argument(
        '-p', '--pressure', type=float, required=True,
        help='target pressure'
    )
    if target:
        parser.add_argument(
            'mix', type=mix_type, help='target gas mix O2/HE'
        )


def _top_option(parser):
    parser.add_argument(
        '-t', '--top', default='air',
        help='top-off gas (default air)'
    )


def create_parser():
    """
    Create command line arguments parser.
    """
    parser = argparse.ArgumentParser(
        description='BlendTengu - breathing gas blending calculator.'
    )
    parser.add_argument(
        '-u', '--unit', choices=UNITS, default=Unit.PSI,
        help='pressure unit (default psi)'
    )
    parser.add_argument(
        '--csv', action='store_true', default=False,
        help='print blend plan as CSV'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true', default=False,
        help='explain what is being done'
    )
    parser.add_argument(
        '--bank', type=bank_type, action='append', default=[],
        help='gas bank NAME:O2/HE, can be repeated'
    )
    parser.add_argument(
        '--price-o2', type=float, default=const.PRICE_O2,
        help='price of cubic foot of oxygen'
    )
    parser.add_argument(
        '--price-he', type=float, default=const.PRICE_HE,
        help='price of cubic foot of helium'
    )
    parser.add_argument(
        '--tank-volume', type=float, default=const.TANK_VOLUME,
        help='tank volume [cuft]'
    )
    parser.add_argument(
        '--tank-rated-pressure', type=float, default=const.TANK_RATED_PRESSURE,
        help='tank rated pressure [psi]'
    )

    commands = parser.add_subparsers(dest='command')
    commands.required = True

    p = commands.add_parser('blend', help='blend with helium, oxygen and top-off gas')
    _cylinder_options(p)
    _top_option(p)
    p.set_defaults(func=cmd_blend)

    p = commands.add_parser('topoff', help='top off cylinder with a gas')
    _cylinder_options(p, target=False)
    _top_option(p)
    p.set_defaults(func=cmd_topoff)

    p = commands.add_parser('multi', help='blend with available gases')
    _cylinder_options(p)
    p.add_argument('gases', nargs='+', help='available gases')
    p.add_argument(
        '--select', type=int, default=0, help='selected blend alternative'
    )
    p.set_defaults(func=cmd_multi)

    p = commands.add_parser(
        'start-pressure', help='find start pressure not requiring helium'
    )
    _cylinder_options(p, start=False)
    _top_option(p)
    p.set_defaults(func=cmd_start_pressure)

    p = commands.add_parser(
        'max-he', help='find maximum target helium not requiring helium'
    )
    _cylinder_options(p)
    _top_option(p)
    p.set_defaults(func=cmd_max_he)

    p = commands.add_parser('chart', help='blend for lower start pressures')
    _cylinder_options(p)
    _top_option(p)
    p.set_defaults(func=cmd_chart)

    return parser


def main(argv=None, out=None):
    """
    Run BlendTengu command line tool.

    Exit code is returned - 0 on success, 1 on blend failure and 2 on
    invalid input.

    :param argv: Command line arguments, `sys.argv` used if null.
    :param out: Output file, standard output used if null.
    """
    if out is None:
        out = sys.stdout

    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARN
    logging.basicConfig(level=level)

    try:
        ok = args.func(args, out)
    except ConfigError as ex:
        logger.error(ex)
        print('Error: {}'.format(ex), file=sys.stderr)
        return 2

    return 0 if ok else 1


# vim: sw=4:et:ai
