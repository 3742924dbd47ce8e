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

"""Assertion helpers for tests."""

import stat
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from keyforge.typehints import PrivateKeyTypes


def assert_file_mode(path: Path, mode: int) -> None:
    """Assert that `path` has exactly the given permission bits."""
    actual = stat.S_IMODE(path.stat().st_mode)
    assert actual == mode, f"{path}: mode is {oct(actual)}, expected {oct(mode)}"


def assert_csr_matches_key(request: x509.CertificateSigningRequest, key: PrivateKeyTypes) -> None:
    """Assert that `request` has a valid signature and contains the public key of `key`."""
    assert request.is_signature_valid
    expected = key.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    assert request.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo) == expected
