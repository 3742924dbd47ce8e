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

"""Models describing the private key to generate.

The ``key`` section of the configuration is a tagged union discriminated by `type`:

>>> from pydantic import TypeAdapter
>>> TypeAdapter(KeyModel).validate_python({"type": "RSA", "bits": 4096})
RSAKeyModel(output=PosixPath('private.key'), password=None, type='rsa', bits=4096)
>>> TypeAdapter(KeyModel).validate_python({"output": "/etc/ssl/host.key"})
Ed25519KeyModel(output=PosixPath('/etc/ssl/host.key'), password=None, type='ed25519')
"""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from keyforge import constants
from keyforge.pydantic.type_aliases import Password
from keyforge.pydantic.validators import key_type_parser


class KeyModelBase(BaseModel):
    """Fields shared by all key types."""

    model_config = ConfigDict(frozen=True)

    output: Path = Field(
        default=Path(constants.DEFAULT_KEY_OUTPUT), description="Path of the private key file."
    )
    password: Password = Field(
        default=None,
        description="Encrypt the private key with this password. By default, the key is not encrypted.",
    )


class Ed25519KeyModel(KeyModelBase):
    """An Ed25519 key. Ed25519 keys have a fixed size, any configured `bits` are ignored."""

    type: Literal["ed25519"] = "ed25519"


class RSAKeyModel(KeyModelBase):
    """An RSA key with the given modulus size."""

    type: Literal["rsa"] = "rsa"
    bits: int = Field(
        default=constants.DEFAULT_RSA_KEY_SIZE,
        ge=constants.MIN_RSA_KEY_SIZE,
        description="Size of the modulus in bits.",
    )


KeyModel = Annotated[
    Ed25519KeyModel | RSAKeyModel, Field(discriminator="type"), BeforeValidator(key_type_parser)
]
"""Algorithm and output options of the private key, discriminated by `type`."""
