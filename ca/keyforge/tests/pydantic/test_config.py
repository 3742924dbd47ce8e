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

"""Test Pydantic models for the configuration."""

from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from cryptography import x509
from cryptography.x509.oid import NameOID

import pytest

from keyforge.pydantic.config import ConfigModel
from keyforge.pydantic.csr import CSRModel
from keyforge.pydantic.key import Ed25519KeyModel, KeyModel, RSAKeyModel

KEY_ADAPTER: TypeAdapter[Ed25519KeyModel | RSAKeyModel] = TypeAdapter(KeyModel)


@pytest.mark.parametrize(
    ("value", "expected"),
    (
        ({}, Ed25519KeyModel()),
        ({"type": "ed25519", "bits": 4096}, Ed25519KeyModel()),
        ({"type": "rsa"}, RSAKeyModel(bits=2048)),
        ({"type": "RSA", "bits": "3072"}, RSAKeyModel(bits=3072)),
        ({"type": "rsa", "output": "/tmp/host.key"}, RSAKeyModel(output=Path("/tmp/host.key"))),
    ),
)
def test_key_model(value: dict[str, Any], expected: Ed25519KeyModel | RSAKeyModel) -> None:
    """Test parsing the key section."""
    assert KEY_ADAPTER.validate_python(value) == expected


@pytest.mark.parametrize(
    "value", ({"type": "rsa", "bits": 1024}, {"type": "dsa"}, {"type": "rsa", "bits": "x"})
)
def test_key_model_errors(value: dict[str, Any]) -> None:
    """Test invalid key sections."""
    with pytest.raises(ValidationError):
        KEY_ADAPTER.validate_python(value)


def test_key_model_password() -> None:
    """Test that the password is a secret."""
    model = KEY_ADAPTER.validate_python({"password": "secret"})
    assert model.password is not None
    assert model.password.get_secret_value() == "secret"
    assert "secret" not in repr(model)


def test_csr_model_cryptography() -> None:
    """Test the order of attributes in the subject."""
    model = CSRModel(
        common_name="example.com",
        organizational_unit="OU",
        organization="O",
        locality="L",
        state="ST",
        country="AT",
    )
    assert model.cryptography == x509.Name(
        [
            x509.NameAttribute(NameOID.COUNTRY_NAME, "AT"),
            x509.NameAttribute(NameOID.STATE_OR_PROVINCE_NAME, "ST"),
            x509.NameAttribute(NameOID.LOCALITY_NAME, "L"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "O"),
            x509.NameAttribute(NameOID.ORGANIZATIONAL_UNIT_NAME, "OU"),
            x509.NameAttribute(NameOID.COMMON_NAME, "example.com"),
        ]
    )


def test_csr_model_strips_whitespace() -> None:
    """Test that whitespace is stripped from fields."""
    model = CSRModel(common_name=" example.com ", organization="  ", ip_address=" 192.0.2.1\n")
    assert model.common_name == "example.com"
    assert model.organization == ""
    assert model.ip_address == "192.0.2.1"
    assert model.cryptography == x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "example.com")])


def test_csr_model_does_not_validate_ip_address() -> None:
    """Test that the IP address is not validated by the model."""
    assert CSRModel(common_name="example.com", ip_address="not-an-ip").ip_address == "not-an-ip"


def test_csr_model_is_frozen() -> None:
    """Test that the model cannot be modified."""
    model = CSRModel(common_name="example.com")
    with pytest.raises(ValidationError, match=r"Instance is frozen"):
        model.common_name = "example.net"  # type: ignore[misc]


def test_config_model_requires_csr() -> None:
    """Test that the csr section is required."""
    with pytest.raises(ValidationError, match=r"csr\n  Field required"):
        ConfigModel.model_validate({"key": {"type": "rsa"}})


def test_csr_model_common_name_max_length() -> None:
    """Test the maximum length of the common name."""
    assert CSRModel(common_name="a" * 64).common_name == "a" * 64
    with pytest.raises(ValidationError, match=r"String should have at most 64 characters"):
        CSRModel(common_name="a" * 65)


@pytest.mark.parametrize("value", ({"key": None}, {"certificate": None}, {"key": None, "certificate": None}))
def test_config_model_with_empty_sections(value: dict[str, Any]) -> None:
    """Test that empty sections use default values."""
    config = ConfigModel.model_validate({**value, "csr": {"common_name": "example.com"}})
    assert config.key == Ed25519KeyModel()
    assert config.certificate.output == Path("certificate.pem")
