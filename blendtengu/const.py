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
BlendTengu constants.

All pressures are expressed in the canonical pressure unit of the
library [psi]. Gas mix values are percentages unless stated otherwise.
"""

# allowed excess of O2% + He% over 100% to absorb rounding of inputs
COMPOSITION_EPSILON = 1e-9

# tolerance of gas fractions, pressure deltas and step amounts; step with
# amount below the value is not a step
EPSILON = 1e-6

# allowed difference between blended pressure and target pressure [psi]
PRESSURE_EPSILON = 0.5

# pure O2/He top-off gas: allowed nitrogen imbalance [psi]
NITROGEN_BALANCE_EPSILON = 1e-4

# blend alternatives with estimated cost closer than this keep input order
COST_TIE_EPSILON = 1e-6

# single gas matches needed mix if both O2 and He are within this many
# percentage points
SINGLE_GAS_TOLERANCE = 0.5

# acceptance thresholds of total pressure of two and three gas solutions,
# as a fraction of added pressure, but never below MIN_PRESSURE_TOLERANCE
PAIR_PRESSURE_TOLERANCE = 0.005
TRIPLE_PRESSURE_TOLERANCE = 0.01
MIN_PRESSURE_TOLERANCE = 1.0

# bisection iterations; resolution is range / 2 ** n, i.e. 40 iterations
# over 10000psi give ~1e-8psi and 20 iterations give ~0.01psi
BLEED_SEARCH_ITERATIONS = 40
REVERSE_SEARCH_ITERATIONS = 50
ALTERNATIVE_BLEED_SEARCH_ITERATIONS = 20

# number of start pressures sampled below the highest start pressure with
# valid needed gas mix, when searching bleed-down for N-gas blends
ALTERNATIVE_BLEED_SCAN_STEPS = 50

MAX_ALTERNATIVES = 5

# mix warnings [%]
HYPOXIC_O2 = 18
FIRE_RISK_O2 = 40

# final mix deviation requiring trimming warning [%]
TRIM_TOLERANCE = 0.5

# similar blend search, O2 and He tolerance and step [%]
SIMILAR_O2_TOLERANCE = 1
SIMILAR_O2_STEP = 0.1
SIMILAR_HE_TOLERANCE = 5
SIMILAR_HE_STEP = 0.5

PSI_PER_BAR = 14.5037738

# chart projection start pressure steps
CHART_DELTAS_PSI = (0, 100, 200, 300)
CHART_DELTA_BAR = 10

# default cost settings, price per cubic foot, tank volume [cuft] and
# tank rated pressure [psi]
PRICE_O2 = 1.0
PRICE_HE = 3.5
TANK_VOLUME = 80
TANK_RATED_PRESSURE = 3000

# heuristic price rank used when helium price is not configured; air is
# the cheapest, pure helium the most expensive gas
HEURISTIC_PRICE_BASE = 0.1
HEURISTIC_PRICE_O2 = 1.0
HEURISTIC_PRICE_HE = 3.5

AIR_O2 = 21

# vim: sw=4:et:ai
