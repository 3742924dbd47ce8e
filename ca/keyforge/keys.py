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

"""Generation of private keys."""

import abc
import logging
import typing

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

from keyforge import constants
from keyforge.exceptions import GenerationError, InvalidParameterError, UnsupportedKeyTypeError
from keyforge.pydantic.key import Ed25519KeyModel, KeyModel, RSAKeyModel
from keyforge.typehints import ParsableKeyType, PrivateKeyTypes

log = logging.getLogger(__name__)


def validate_rsa_key_size(bits: int) -> int:
    """Validate the size of an RSA key.

    >>> validate_rsa_key_size(4096)
    4096
    >>> validate_rsa_key_size(1024)
    Traceback (most recent call last):
        ...
    keyforge.exceptions.InvalidParameterError: 1024: RSA key size must be at least 2048 bits.
    """
    if bits < constants.MIN_RSA_KEY_SIZE:
        raise InvalidParameterError(
            f"{bits}: RSA key size must be at least {constants.MIN_RSA_KEY_SIZE} bits."
        )
    return bits


def generate_ed25519_key() -> ed25519.Ed25519PrivateKey:
    """Generate a new Ed25519 private key."""
    try:
        return ed25519.Ed25519PrivateKey.generate()
    except (UnsupportedAlgorithm, ValueError, OSError) as ex:
        raise GenerationError(f"Could not generate Ed25519 key: {ex}") from ex


def generate_rsa_key(bits: int) -> rsa.RSAPrivateKey:
    """Generate a new RSA private key with a modulus of `bits` bits.

    Generating large keys may take a noticeable amount of time.
    """
    validate_rsa_key_size(bits)
    try:
        return rsa.generate_private_key(public_exponent=constants.RSA_PUBLIC_EXPONENT, key_size=bits)
    except (UnsupportedAlgorithm, ValueError, OSError) as ex:
        raise GenerationError(f"Could not generate {bits} bit RSA key: {ex}") from ex


@typing.overload
def generate_private_key(key_options: RSAKeyModel) -> rsa.RSAPrivateKey: ...


@typing.overload
def generate_private_key(key_options: Ed25519KeyModel) -> ed25519.Ed25519PrivateKey: ...


def generate_private_key(key_options: KeyModel) -> PrivateKeyTypes:
    """Generate a private key as described by `key_options`.

    Failures of the random source are not retried but raised as
    :py:class:`~keyforge.exceptions.GenerationError` right away.
    """
    if isinstance(key_options, RSAKeyModel):
        return generate_rsa_key(key_options.bits)
    if isinstance(key_options, Ed25519KeyModel):
        return generate_ed25519_key()

    raise UnsupportedKeyTypeError(f"{key_options!r}: Unknown key type.")


def get_private_key_type(private_key: PrivateKeyTypes) -> ParsableKeyType:
    """Get the private key type as string from a given private key."""
    if isinstance(private_key, rsa.RSAPrivateKey):
        return "rsa"
    if isinstance(private_key, ed25519.Ed25519PrivateKey):
        return "ed25519"
    raise UnsupportedKeyTypeError(f"{type(private_key).__name__}: Unsupported private key type.")


class KeyGenerator(metaclass=abc.ABCMeta):
    """Base class for key generators.

    Implementations are injected into the :py:class:`~keyforge.pipeline.Pipeline`, so tests can replace key
    generation with a deterministic fake.
    """

    @abc.abstractmethod
    def generate(self, key_options: KeyModel) -> PrivateKeyTypes:
        """Generate a private key as described by `key_options`."""


class DefaultKeyGenerator(KeyGenerator):
    """Key generator using the cryptographically secure random source of the operating system."""

    def generate(self, key_options: KeyModel) -> PrivateKeyTypes:
        if isinstance(key_options, RSAKeyModel):
            log.debug("Generating %s bit RSA key.", key_options.bits)
        else:
            log.debug("Generating %s key.", key_options.type)
        return generate_private_key(key_options)
