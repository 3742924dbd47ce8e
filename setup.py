#!/usr/bin/env python3
#
# This file is part of keyforge.
#
# keyforge is free software: you can redistribute it and/or modify it under the terms of the GNU
# General Public License as published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# keyforge is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without
# even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with keyforge.  If not,
# see <http://www.gnu.org/licenses/>.

"""setuptools based setup.py file for keyforge."""

import os
import sys

from setuptools import find_packages
from setuptools import setup

BASE_DIR = os.path.dirname(os.path.abspath(__file__))  # directory of this file

package_path = os.path.join(BASE_DIR, "ca")

if os.path.exists(package_path):
    sys.path.insert(0, package_path)

setup(
    packages=find_packages("ca", exclude=("keyforge.tests", "keyforge.tests.*")),
    package_dir={"": "ca"},
)
