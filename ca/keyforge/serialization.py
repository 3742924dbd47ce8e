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

"""Serialization of private keys as PEM-encoded PKCS#8 and back."""

import logging

from pydantic import BaseModel, ConfigDict

import asn1crypto.core
import asn1crypto.keys
import asn1crypto.pem
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import Encoding, PrivateFormat, load_der_private_key

from keyforge import constants
from keyforge.exceptions import AuthenticationError, DecodeError, EncodeError, UnsupportedKeyTypeError
from keyforge.typehints import PrivateKeyTypes

log = logging.getLogger(__name__)

PasswordType = str | bytes | None


class EncodedKeyDocument(BaseModel):
    """A PEM-encoded private key."""

    model_config = ConfigDict(frozen=True)

    pem: bytes
    encrypted: bool

    @property
    def label(self) -> str:
        """The label of the PEM block."""
        if self.encrypted:
            return constants.PEM_LABEL_ENCRYPTED_PRIVATE_KEY
        return constants.PEM_LABEL_PRIVATE_KEY


def _get_password(password: PasswordType) -> bytes | None:
    if not password:  # None or empty
        return None
    if isinstance(password, str):
        return password.encode("utf-8")
    return password


def serialize_private_key(key: PrivateKeyTypes, password: PasswordType = None) -> EncodedKeyDocument:
    """Serialize `key` as PEM-encoded PKCS#8 structure.

    If `password` is given and not empty, the key is encrypted with the best encryption available in
    cryptography and the PEM label is ``ENCRYPTED PRIVATE KEY``. Otherwise, the key is not encrypted and the
    label is ``PRIVATE KEY``.
    """
    if not isinstance(key, constants.PRIVATE_KEY_TYPES):
        raise UnsupportedKeyTypeError(f"{type(key).__name__}: Unsupported private key type.")

    password_bytes = _get_password(password)
    if password_bytes is None:
        encryption: serialization.KeySerializationEncryption = serialization.NoEncryption()
    else:
        encryption = serialization.BestAvailableEncryption(password_bytes)

    try:
        pem = key.private_bytes(
            encoding=Encoding.PEM, format=PrivateFormat.PKCS8, encryption_algorithm=encryption
        )
    except (ValueError, TypeError) as ex:
        raise EncodeError(f"Could not serialize private key: {ex}") from ex

    if not pem:  # pragma: no cover  # cryptography never returns empty data
        raise EncodeError("Could not serialize private key: Empty output.")

    return EncodedKeyDocument(pem=pem, encrypted=password_bytes is not None)


class PrivateKeyInfo(asn1crypto.core.Sequence):
    """Unencrypted PKCS#8 structure (RFC 5958), with the private key kept as opaque octet string.

    :py:class:`asn1crypto.keys.PrivateKeyInfo` parses the private key based on the algorithm, which fails for
    algorithms it does not know about. Parsing of the key itself is left to cryptography.
    """

    _fields = [
        ("version", asn1crypto.core.Integer),
        ("private_key_algorithm", asn1crypto.keys.PrivateKeyAlgorithm),
        ("private_key", asn1crypto.core.OctetString),
        ("attributes", asn1crypto.core.Any, {"implicit": 0, "optional": True}),
        ("public_key", asn1crypto.core.Any, {"implicit": 1, "optional": True}),
    ]


def _get_private_key_algorithm(der: bytes) -> str:
    """Get the private key algorithm of an unencrypted PKCS#8 structure as dotted string."""
    try:
        info = PrivateKeyInfo.load(der, strict=True)
        algorithm: str = info["private_key_algorithm"]["algorithm"].dotted
        private_key: bytes = info["private_key"].native
    except (ValueError, TypeError, KeyError) as ex:
        raise DecodeError(f"Could not decode PKCS#8 structure: {ex}") from ex

    if not private_key:
        raise DecodeError("Could not decode PKCS#8 structure: Private key is empty.")
    return algorithm


def _validate_encrypted_private_key_info(der: bytes) -> None:
    try:
        info = asn1crypto.keys.EncryptedPrivateKeyInfo.load(der, strict=True)
        encrypted_data: bytes = info["encrypted_data"].native
        info["encryption_algorithm"]["algorithm"].dotted  # noqa: B018  # parses the algorithm identifier
    except (ValueError, TypeError, KeyError) as ex:
        raise DecodeError(f"Could not decode encrypted PKCS#8 structure: {ex}") from ex

    if not encrypted_data:
        raise DecodeError("Could not decode encrypted PKCS#8 structure: Encrypted data is empty.")


def _load_der_private_key(der: bytes, password: bytes | None) -> PrivateKeyTypes:
    try:
        key = load_der_private_key(der, password)
    except UnsupportedAlgorithm as ex:
        raise UnsupportedKeyTypeError(f"Private key of this type is not supported: {ex}") from ex
    except (ValueError, TypeError) as ex:
        if password is None:
            raise DecodeError(f"Could not load private key: {ex}") from ex

        # cryptography passes the OpenSSL error directly here and it is notoriously unstable.
        raise AuthenticationError("Could not decrypt private key - bad password?") from ex

    if not isinstance(key, constants.PRIVATE_KEY_TYPES):
        raise UnsupportedKeyTypeError(f"{type(key).__name__}: Unsupported private key type.")
    return key


def parse_private_key(pem: bytes | str, password: PasswordType = None) -> PrivateKeyTypes:
    """Parse a PEM-encoded PKCS#8 private key, decrypting it with `password` if it is encrypted.

    Raises :py:class:`~keyforge.exceptions.DecodeError` if the data cannot be decoded,
    :py:class:`~keyforge.exceptions.AuthenticationError` if an encrypted key cannot be decrypted and
    :py:class:`~keyforge.exceptions.UnsupportedKeyTypeError` if the key is neither an RSA nor an Ed25519 key.
    """
    try:
        if isinstance(pem, str):
            pem = pem.encode("ascii")
        label, _headers, der = asn1crypto.pem.unarmor(pem)
    except (ValueError, TypeError) as ex:
        raise DecodeError(f"Could not decode PEM block: {ex}") from ex

    password_bytes = _get_password(password)

    if label == constants.PEM_LABEL_PRIVATE_KEY:
        algorithm = _get_private_key_algorithm(der)
        if algorithm not in constants.PRIVATE_KEY_ALGORITHM_OIDS:
            raise UnsupportedKeyTypeError(f"{algorithm}: Unsupported private key algorithm.")
        if password_bytes is not None:
            log.debug("Private key is not encrypted, ignoring password.")
        return _load_der_private_key(der, None)

    if label == constants.PEM_LABEL_ENCRYPTED_PRIVATE_KEY:
        _validate_encrypted_private_key_info(der)
        if password_bytes is None:
            raise AuthenticationError("Private key is encrypted, but no password was given.")
        return _load_der_private_key(der, password_bytes)

    raise DecodeError(f"{label}: Unsupported PEM block type.")


class KeySerializer:
    """Serializer for private keys, injected into the :py:class:`~keyforge.pipeline.Pipeline`."""

    def serialize(self, key: PrivateKeyTypes, password: PasswordType = None) -> EncodedKeyDocument:
        """Serialize `key`, see :py:func:`~keyforge.serialization.serialize_private_key`."""
        return serialize_private_key(key, password)

    def parse(self, pem: bytes | str, password: PasswordType = None) -> PrivateKeyTypes:
        """Parse `pem`, see :py:func:`~keyforge.serialization.parse_private_key`."""
        return parse_private_key(pem, password)
