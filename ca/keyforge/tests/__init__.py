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

"""Tests for keyforge."""

import pytest

# Register assertion helpers for better output in our helpers. See also:
#   https://docs.pytest.org/en/latest/how-to/writing_plugins.html#assertion-rewriting
# NOTE: No need to add test_* modules, they are included automatically.
pytest.register_assert_rewrite("keyforge.tests.base.assertions")
