#!/usr/bin/env python3
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

from setuptools import setup, find_packages

import blendtengu

setup(
    name='blendtengu',
    version=blendtengu.__version__,
    description='BlendTengu - breathing gas blending library',
    author='BlendTengu Team',
    packages=find_packages('.'),
    scripts=('bin/bt-blend',),
    include_package_data=True,
    long_description=\
"""\
BlendTengu is Python breathing gas blending library. It calculates partial
pressure blend plans for nitrox and trimix, bleed-down pressure, blends
using any available gases ranked by cost and reverse calculations of
start pressure and target helium not requiring helium addition.
""",
    classifiers=[
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python :: 3',
        'Development Status :: 4 - Beta',
    ],
    keywords='diving gas blending nitrox trimix',
    license='GPL',
    python_requires='>=3.6',
    install_requires=[],
    extras_require={
        'test': ['pytest'],
        'doc': ['sphinx', 'sphinx_rtd_theme'],
    },
)

# vim: sw=4:et:ai
