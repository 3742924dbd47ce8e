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

"""Test key generation."""

import logging
from typing import Any

from pydantic import TypeAdapter

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

import pytest

from keyforge import keys
from keyforge.exceptions import GenerationError, InvalidParameterError, UnsupportedKeyTypeError
from keyforge.keys import (
    DefaultKeyGenerator,
    generate_ed25519_key,
    generate_private_key,
    generate_rsa_key,
    get_private_key_type,
)
from keyforge.pydantic.key import Ed25519KeyModel, KeyModel, RSAKeyModel
from keyforge.tests.base.doctest import doctest_module


def test_doctests() -> None:
    """Run doctests for this module."""
    failures, *_tests = doctest_module("keyforge.keys")
    assert failures == 0, f"{failures} doctests failed, see above for output."


def test_generate_ed25519_key() -> None:
    """Test generating an Ed25519 key."""
    key = generate_private_key(Ed25519KeyModel())
    assert isinstance(key, ed25519.Ed25519PrivateKey)
    assert get_private_key_type(key) == "ed25519"


def test_generate_rsa_key(rsa_key: rsa.RSAPrivateKey) -> None:
    """Test the key size and public exponent of a generated RSA key."""
    assert rsa_key.key_size == 2048
    assert rsa_key.public_key().public_numbers().e == 65537
    assert get_private_key_type(rsa_key) == "rsa"


def test_generate_rsa_key_from_model(monkeypatch: pytest.MonkeyPatch, rsa_key: rsa.RSAPrivateKey) -> None:
    """Test that the key size from the model is passed on."""
    calls: list[dict[str, Any]] = []

    def generate(**kwargs: Any) -> rsa.RSAPrivateKey:
        calls.append(kwargs)
        return rsa_key

    monkeypatch.setattr(keys.rsa, "generate_private_key", generate)
    key_options = TypeAdapter(KeyModel).validate_python({"type": "rsa", "bits": 4096})
    assert generate_private_key(key_options) is rsa_key
    assert calls == [{"public_exponent": 65537, "key_size": 4096}]


def test_keys_are_unique() -> None:
    """Test that two generated keys are different."""
    first = generate_ed25519_key().public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    second = generate_ed25519_key().public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    assert first != second


@pytest.mark.parametrize("bits", (0, 512, 1024, 2047))
def test_rsa_key_too_small(bits: int) -> None:
    """Test that small RSA keys are rejected before generating anything."""
    with pytest.raises(InvalidParameterError, match=rf"^{bits}: RSA key size must be at least 2048 bits\.$"):
        generate_rsa_key(bits)


def test_rsa_key_too_small_is_value_error() -> None:
    """Test that InvalidParameterError can also be caught as ValueError."""
    with pytest.raises(ValueError, match=r"RSA key size must be at least 2048 bits\.$"):
        generate_private_key(RSAKeyModel.model_construct(bits=1024))


def test_rsa_generation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that failures of the library are raised as GenerationError without retrying."""
    calls: list[int] = []

    def generate(public_exponent: int, key_size: int) -> rsa.RSAPrivateKey:
        calls.append(key_size)
        raise ValueError("entropy source failed")

    monkeypatch.setattr(keys.rsa, "generate_private_key", generate)
    with pytest.raises(GenerationError, match=r"^Could not generate 2048 bit RSA key: entropy source failed"):
        generate_rsa_key(2048)
    assert calls == [2048]


def test_ed25519_generation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that failures of the library are raised as GenerationError."""

    def generate() -> ed25519.Ed25519PrivateKey:
        raise OSError("getrandom failed")

    monkeypatch.setattr(keys.ed25519.Ed25519PrivateKey, "generate", generate)
    with pytest.raises(GenerationError, match=r"^Could not generate Ed25519 key: getrandom failed$"):
        generate_ed25519_key()


def test_generate_private_key_with_unknown_model() -> None:
    """Test passing an object that is not a key model."""
    with pytest.raises(UnsupportedKeyTypeError, match=r"Unknown key type\.$"):
        generate_private_key(object())  # type: ignore[call-overload]


def test_get_private_key_type_with_unsupported_key() -> None:
    """Test getting the type of an EC key, which is not supported."""
    key = ec.generate_private_key(ec.SECP256R1())
    with pytest.raises(UnsupportedKeyTypeError, match=r"Unsupported private key type\.$"):
        get_private_key_type(key)  # type: ignore[arg-type]


def test_default_key_generator(caplog: pytest.LogCaptureFixture) -> None:
    """Test the default key generator."""
    caplog.set_level(logging.DEBUG, logger="keyforge")
    key = DefaultKeyGenerator().generate(Ed25519KeyModel())
    assert isinstance(key, ed25519.Ed25519PrivateKey)
    assert caplog.record_tuples == [("keyforge.keys", logging.DEBUG, "Generating ed25519 key.")]
