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

"""Various type aliases used in throughout keyforge."""

import sys
from typing import Literal

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

# IMPORTANT: Do **not** import any module from keyforge at runtime here, or you risk circular imports.

if sys.version_info < (3, 11):  # pragma: only py<3.11
    from typing_extensions import Self as Self  # noqa: PLC0414
else:  # pragma: only py>=3.11
    from typing import Self as Self  # noqa: PLC0414

############
# Literals #
############

#: Key types that can be generated, spelled as in configuration files.
ParsableKeyType = Literal["ed25519", "rsa"]

SignatureHashAlgorithmName = Literal["SHA-256", "SHA-384", "SHA-512"]
"""Names of hash algorithms that can be used for signing certificate signing requests with RSA keys."""

#: Padding schemes for signing certificate signing requests with RSA keys.
RSAPaddingName = Literal["pkcs1v15", "pss"]

LogLevelName = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

################
# Type aliases #
################

PrivateKeyTypes = rsa.RSAPrivateKey | ed25519.Ed25519PrivateKey
"""Private key types supported by keyforge.

Any code receiving a private key can rely on it being one of these types, or raise
:py:class:`~keyforge.exceptions.UnsupportedKeyTypeError`.
"""

SignatureHashAlgorithm = hashes.SHA256 | hashes.SHA384 | hashes.SHA512
"""Hash algorithms that can be used for signing certificate signing requests with RSA keys."""
