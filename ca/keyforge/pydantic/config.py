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

"""Model for the complete configuration."""

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from keyforge import constants
from keyforge.pydantic.csr import CSRModel
from keyforge.pydantic.key import Ed25519KeyModel, KeyModel
from keyforge.pydantic.validators import empty_section_parser


class CertificateModel(BaseModel):
    """The ``certificate`` section of the configuration."""

    model_config = ConfigDict(frozen=True)

    output: Path = Field(
        default=Path(constants.DEFAULT_CSR_OUTPUT),
        description="Path of the certificate signing request file.",
    )


class ConfigModel(BaseModel):
    """Complete configuration of keyforge.

    >>> config = ConfigModel.model_validate({"csr": {"common_name": "example.com"}})
    >>> config.key.type, config.key.output, config.certificate.output
    ('ed25519', PosixPath('private.key'), PosixPath('certificate.pem'))
    """

    model_config = ConfigDict(frozen=True)

    key: Annotated[KeyModel, BeforeValidator(empty_section_parser)] = Field(default_factory=Ed25519KeyModel)
    csr: CSRModel
    certificate: Annotated[CertificateModel, BeforeValidator(empty_section_parser)] = Field(
        default_factory=CertificateModel
    )
