# This file is part of keyforge.
#
# keyforge is free software: you can redistribute it and/or modify it under the terms of the GNU General
# Public License as published by the Free Software Foundation, either version 3 of the License, or (at your
# option) any later version.
#
# keyforge is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the
# implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License along with keyforge. If not, see
# <http://www.gnu.org/licenses/>.

"""Run the command line interface with ``python -m keyforge``."""

import sys

from keyforge.cli import main

sys.exit(main())
