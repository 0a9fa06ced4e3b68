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

import logging

logger = logging.getLogger(__name__)


def bisect_search(lo, hi, f, n, rising=True):
    """
    Find boundary of range, where function `f` returns true value, using
    `n` iterations of bisection.

    If `rising` is true, then `f` is assumed to be true at the upper part
    of the range `lo <= x <= hi` and the search converges to the lowest
    `x` for which `f(x)` is true. Otherwise `f` is assumed to be true at
    the lower part of the range and the search converges to the highest
    such `x`.

    A tuple `(x, v)` is returned, where `v = f(x)` for last `x` for which
    `f(x)` was true. If `f` is never true, then null is returned.

    The resolution of the search is `(hi - lo) / 2 ** n`.

    :param lo: Lower bound of the range.
    :param hi: Upper bound of the range.
    :param f: Function accepting `x` and returning true value on success.
    :param n: Number of iterations.
    :param rising: Function `f` is true at upper part of the range if true.
    """
    found = None
    if __debug__:
        logger.debug('bisect {} <= x <= {}, n: {}'.format(lo, hi, n))

    for i in range(n):
        x = (lo + hi) / 2

        if __debug__:
            assert lo <= x <= hi, 'bisect range: {} <= {} <= {}'.format(lo, x, hi)

        v = f(x)
        if v:
            found = x, v
            if rising:
                hi = x
            else:
                lo = x
        elif rising:
            lo = x
        else:
            hi = x

    if __debug__:
        logger.debug('bisect found: {}'.format(found[0] if found else None))

    return found


# vim: sw=4:et:ai
