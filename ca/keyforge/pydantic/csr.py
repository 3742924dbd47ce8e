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

"""Model for the subject of a certificate signing request."""

from pydantic import ConfigDict, Field

from cryptography import x509

from keyforge import constants
from keyforge.pydantic.base import CryptographyModel
from keyforge.pydantic.type_aliases import CountryCode, OptionalStr
from keyforge.typehints import RSAPaddingName, SignatureHashAlgorithmName


class CSRModel(CryptographyModel[x509.Name]):
    """The ``csr`` section of the configuration.

    Optional subject fields are only added to the subject if they are not empty:

    >>> CSRModel(common_name="example.com", organization="Example").cryptography
    <Name(CN=example.com,O=Example)>

    The IP address is not validated here, it is parsed when building the certificate signing
    request.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    common_name: str = Field(
        min_length=1, max_length=constants.MAX_COMMON_NAME_LENGTH, description="Common name of the subject."
    )
    organization: OptionalStr = ""
    organizational_unit: OptionalStr = ""
    country: CountryCode = ""
    state: OptionalStr = Field(default="", description="State or province name.")
    locality: OptionalStr = ""
    ip_address: OptionalStr = Field(
        default="", description="IPv4 or IPv6 address added as Subject Alternative Name."
    )

    # Signature options
    algorithm: SignatureHashAlgorithmName = Field(
        default=constants.DEFAULT_SIGNATURE_HASH_ALGORITHM,
        description="Hash algorithm used for signing with RSA keys. Ignored for Ed25519 keys.",
    )
    rsa_padding: RSAPaddingName = Field(
        default="pkcs1v15", description="Padding used for signing with RSA keys. Ignored for Ed25519 keys."
    )

    @property
    def cryptography(self) -> x509.Name:
        """The subject as :py:class:`~cg:cryptography.x509.Name`."""
        attributes = []
        for field, oid in constants.SUBJECT_FIELD_OIDS.items():
            if value := getattr(self, field):
                attributes.append(x509.NameAttribute(oid=oid, value=value))
        return x509.Name(attributes)
