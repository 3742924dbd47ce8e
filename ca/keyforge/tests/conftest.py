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

"""pytest configuration and fixtures."""

from pathlib import Path
from typing import Any

from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

import pytest
import yaml

from keyforge.keys import generate_ed25519_key, generate_rsa_key
from keyforge.pydantic.csr import CSRModel


@pytest.fixture
def ed25519_key() -> ed25519.Ed25519PrivateKey:
    """Fixture for a fresh Ed25519 private key."""
    return generate_ed25519_key()


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    """Fixture for an RSA private key (shared in the session, as generating RSA keys is slow)."""
    return generate_rsa_key(2048)


@pytest.fixture
def subject() -> CSRModel:
    """Fixture for a subject with all fields set."""
    return CSRModel(
        common_name="example.com",
        organization="Example Org",
        organizational_unit="Engineering",
        country="AT",
        state="Vienna",
        locality="Vienna",
        ip_address="192.0.2.1",
    )


@pytest.fixture
def minimal_subject() -> CSRModel:
    """Fixture for a subject with only the common name set."""
    return CSRModel(common_name="example.com")


@pytest.fixture
def config_data(tmp_path: Path) -> dict[str, Any]:
    """Fixture for raw configuration data writing output files to a temporary directory."""
    return {
        "key": {"type": "ed25519", "output": str(tmp_path / "private.key")},
        "csr": {"common_name": "example.com", "organization": "Example Org", "ip_address": "192.0.2.1"},
        "certificate": {"output": str(tmp_path / "certificate.pem")},
    }


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict[str, Any]) -> Path:
    """Fixture for a configuration file with `config_data`."""
    path = tmp_path / "config.yaml"
    with open(path, "w", encoding="utf-8") as stream:
        yaml.safe_dump(config_data, stream)
    return path


@pytest.fixture
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fixture removing all environment variables read by keyforge."""
    for name in (
        "KEYFORGE_CONFIG",
        "KEYFORGE_KEY_TYPE",
        "KEYFORGE_KEY_BITS",
        "KEYFORGE_KEY_OUTPUT",
        "KEYFORGE_KEY_PASSWORD",
        "KEYFORGE_CERTIFICATE_OUTPUT",
        "KEYFORGE_LOG_LEVEL",
        "KEYFORGE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
