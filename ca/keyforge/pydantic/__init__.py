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

"""Pydantic models used for configuring keyforge."""

from keyforge.pydantic.config import CertificateModel, ConfigModel
from keyforge.pydantic.csr import CSRModel
from keyforge.pydantic.key import Ed25519KeyModel, KeyModel, RSAKeyModel

__all__ = (
    "CSRModel",
    "CertificateModel",
    "ConfigModel",
    "Ed25519KeyModel",
    "KeyModel",
    "RSAKeyModel",
)
