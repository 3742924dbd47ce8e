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

"""Creation of certificate signing requests (CSRs)."""

import ipaddress
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.padding import AsymmetricPadding
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from keyforge import constants
from keyforge.exceptions import (
    DecodeError,
    EncodeError,
    InvalidParameterError,
    UnsupportedKeyTypeError,
    VerificationError,
)
from keyforge.pydantic.csr import CSRModel
from keyforge.typehints import PrivateKeyTypes, RSAPaddingName, SignatureHashAlgorithm

log = logging.getLogger(__name__)


class CSRDocument(BaseModel):
    """A signed certificate signing request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    request: x509.CertificateSigningRequest

    @property
    def label(self) -> str:
        """The label of the PEM block."""
        return constants.PEM_LABEL_CERTIFICATE_REQUEST

    @property
    def der(self) -> bytes:
        """The DER-encoded certificate signing request."""
        return self.request.public_bytes(Encoding.DER)

    @property
    def pem(self) -> bytes:
        """The PEM-encoded certificate signing request (label ``CERTIFICATE REQUEST``)."""
        return self.request.public_bytes(Encoding.PEM)


def parse_ip_address(value: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    """Parse an IPv4 or IPv6 address.

    >>> parse_ip_address("192.168.1.1")
    IPv4Address('192.168.1.1')
    >>> parse_ip_address("2001:db8::1")
    IPv6Address('2001:db8::1')
    >>> parse_ip_address("not-an-ip")
    Traceback (most recent call last):
        ...
    keyforge.exceptions.InvalidParameterError: not-an-ip: invalid IP address
    """
    try:
        return ipaddress.ip_address(value)
    except ValueError as ex:
        raise InvalidParameterError(f"{value}: invalid IP address") from ex


def get_signature_parameters(
    key: PrivateKeyTypes,
    algorithm: SignatureHashAlgorithm | None = None,
    rsa_padding: RSAPaddingName = "pkcs1v15",
) -> tuple[SignatureHashAlgorithm | None, AsymmetricPadding | None]:
    """Get the hash algorithm and padding for signing with `key`.

    Ed25519 keys use pure EdDSA and do not allow a hash algorithm. RSA keys use SHA-256 unless `algorithm` is
    given, with either PKCS#1 v1.5 or PSS padding.
    """
    if isinstance(key, ed25519.Ed25519PrivateKey):
        if algorithm is not None:
            raise UnsupportedKeyTypeError("Ed25519 keys do not allow an algorithm for signing.")
        return None, None

    if isinstance(key, rsa.RSAPrivateKey):
        if algorithm is None:
            algorithm = constants.HASH_ALGORITHM_TYPES[constants.DEFAULT_SIGNATURE_HASH_ALGORITHM]()

        if rsa_padding == "pss":
            return algorithm, padding.PSS(mgf=padding.MGF1(algorithm), salt_length=padding.PSS.DIGEST_LENGTH)
        return algorithm, padding.PKCS1v15()

    raise UnsupportedKeyTypeError(f"{type(key).__name__}: Unsupported private key type.")


def build_csr(
    key: PrivateKeyTypes,
    subject: CSRModel,
    algorithm: SignatureHashAlgorithm | None = None,
    rsa_padding: RSAPaddingName | None = None,
) -> CSRDocument:
    """Build a certificate signing request for `subject` signed with `key`.

    Empty subject fields are omitted from the subject. If `subject` has an IP address, it is added as the only
    entry of the Subject Alternative Name extension. The address is validated before anything is signed.

    For RSA keys, `algorithm` and `rsa_padding` default to the values configured in `subject`. Both are
    ignored for Ed25519 keys, but passing an `algorithm` explicitly for an Ed25519 key is an error.
    """
    if not isinstance(key, constants.PRIVATE_KEY_TYPES):
        raise UnsupportedKeyTypeError(f"{type(key).__name__}: Unsupported private key type.")

    try:
        name = subject.cryptography
    except ValueError as ex:  # cryptography validates attribute values
        raise InvalidParameterError(f"Invalid subject: {ex}") from ex

    builder = x509.CertificateSigningRequestBuilder().subject_name(name)

    if subject.ip_address:
        ip = parse_ip_address(subject.ip_address)
        builder = builder.add_extension(x509.SubjectAlternativeName([x509.IPAddress(ip)]), critical=False)

    if isinstance(key, rsa.RSAPrivateKey):
        if algorithm is None:
            algorithm = constants.HASH_ALGORITHM_TYPES[subject.algorithm]()
        if rsa_padding is None:
            rsa_padding = subject.rsa_padding
    hash_algorithm, signature_padding = get_signature_parameters(key, algorithm, rsa_padding or "pkcs1v15")

    kwargs: dict[str, Any] = {}
    if signature_padding is not None:
        kwargs["rsa_padding"] = signature_padding

    try:
        request = builder.sign(key, hash_algorithm, **kwargs)
    except (ValueError, TypeError) as ex:
        raise EncodeError(f"Could not sign certificate signing request: {ex}") from ex

    document = CSRDocument(request=request)
    if not document.pem:  # pragma: no cover  # cryptography never returns empty data
        raise EncodeError("Could not encode certificate signing request: Empty output.")
    if not request.is_signature_valid:  # pragma: no cover  # cryptography signs correctly
        raise EncodeError("Signature of the certificate signing request is not valid.")
    return document


def load_csr(pem: bytes) -> x509.CertificateSigningRequest:
    """Load a PEM-encoded certificate signing request."""
    try:
        return x509.load_pem_x509_csr(pem)
    except ValueError as ex:
        raise DecodeError(f"Could not load certificate signing request: {ex}") from ex


def verify_csr(request: x509.CertificateSigningRequest, key: PrivateKeyTypes) -> None:
    """Verify that `request` is validly signed by `key`.

    Raises :py:class:`~keyforge.exceptions.VerificationError` if the signature is invalid or the public key
    of the request is not the public key of `key`.
    """
    if not isinstance(key, constants.PRIVATE_KEY_TYPES):
        raise UnsupportedKeyTypeError(f"{type(key).__name__}: Unsupported private key type.")

    if not request.is_signature_valid:
        raise VerificationError("Signature of the certificate signing request is not valid.")

    expected = key.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    actual = request.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    if actual != expected:
        raise VerificationError("Certificate signing request does not match the private key.")


class CSRBuilder:
    """Builder for certificate signing requests, injected into the :py:class:`~keyforge.pipeline.Pipeline`.

    The `algorithm` and `rsa_padding` passed here take precedence over the values configured for the subject.
    """

    def __init__(
        self, algorithm: SignatureHashAlgorithm | None = None, rsa_padding: RSAPaddingName | None = None
    ) -> None:
        self.algorithm = algorithm
        self.rsa_padding = rsa_padding

    def build(self, key: PrivateKeyTypes, subject: CSRModel) -> CSRDocument:
        """Build a certificate signing request, see :py:func:`~keyforge.csr.build_csr`."""
        document = build_csr(key, subject, algorithm=self.algorithm, rsa_padding=self.rsa_padding)
        log.debug("Built certificate signing request for %s.", document.request.subject.rfc4514_string())
        return document
