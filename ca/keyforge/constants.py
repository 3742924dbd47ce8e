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

"""Constants used throughout keyforge."""

import enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa
from cryptography.x509.oid import NameOID

if TYPE_CHECKING:
    from keyforge.typehints import ParsableKeyType, SignatureHashAlgorithm, SignatureHashAlgorithmName

#: Minimum size of RSA keys in bits. Smaller keys are rejected both when loading configuration and when
#: generating keys.
MIN_RSA_KEY_SIZE = 2048

#: Default size of RSA keys in bits.
DEFAULT_RSA_KEY_SIZE = 2048

#: Public exponent of RSA keys.
RSA_PUBLIC_EXPONENT = 65537

#: Default path of the private key file.
DEFAULT_KEY_OUTPUT = "private.key"

#: Default path of the certificate signing request file.
DEFAULT_CSR_OUTPUT = "certificate.pem"

#: Configuration file loaded from the current working directory if no other file is given.
DEFAULT_CONFIG_FILE = "config.yaml"

#: Environment variable pointing to the configuration file.
CONFIG_PATH_ENVIRONMENT_VARIABLE = "KEYFORGE_CONFIG"

#: Prefix for all environment variables read by keyforge.
ENVIRONMENT_PREFIX = "KEYFORGE_"

#: Environment variables (without prefix) overriding values from the configuration file.
ENVIRONMENT_OVERRIDES: "MappingProxyType[str, tuple[str, str]]" = MappingProxyType(
    {
        "KEY_TYPE": ("key", "type"),
        "KEY_BITS": ("key", "bits"),
        "KEY_OUTPUT": ("key", "output"),
        "KEY_PASSWORD": ("key", "password"),
        "CERTIFICATE_OUTPUT": ("certificate", "output"),
    }
)

#: Permissions of the private key file (owner read/write only).
PRIVATE_KEY_FILE_MODE = 0o600

#: Permissions of the certificate signing request file (owner read/write, group/other read).
CSR_FILE_MODE = 0o644

#: Default log format. The asctime is truncated to omit milliseconds.
LOG_FORMAT = "[%(levelname)-8s %(asctime).19s] %(message)s"

#: Default log level.
LOG_LEVEL = "INFO"

PARSABLE_KEY_TYPES: tuple["ParsableKeyType", ...] = ("ed25519", "rsa")

#: Tuple of supported private key types.
PRIVATE_KEY_TYPES: tuple[type[rsa.RSAPrivateKey] | type[ed25519.Ed25519PrivateKey], ...] = (
    ed25519.Ed25519PrivateKey,
    rsa.RSAPrivateKey,
)

#: Object identifiers of private key algorithms in PKCS#8 structures that keyforge is able to load.
PRIVATE_KEY_ALGORITHM_OIDS = MappingProxyType(
    {
        "1.2.840.113549.1.1.1": "rsa",  # rsaEncryption, RFC 8017
        "1.3.101.112": "ed25519",  # id-Ed25519, RFC 8410
    }
)

PEM_LABEL_PRIVATE_KEY = "PRIVATE KEY"
PEM_LABEL_ENCRYPTED_PRIVATE_KEY = "ENCRYPTED PRIVATE KEY"
PEM_LABEL_CERTIFICATE_REQUEST = "CERTIFICATE REQUEST"

#: Maximum length of the common name (upper bound ub-common-name in RFC 5280).
MAX_COMMON_NAME_LENGTH = 64

#: Map of subject fields to the name OID used in the subject. The order of this mapping is the order of the
#: attributes in the subject of a certificate signing request.
SUBJECT_FIELD_OIDS = MappingProxyType(
    {
        "country": NameOID.COUNTRY_NAME,
        "state": NameOID.STATE_OR_PROVINCE_NAME,
        "locality": NameOID.LOCALITY_NAME,
        "organization": NameOID.ORGANIZATION_NAME,
        "organizational_unit": NameOID.ORGANIZATIONAL_UNIT_NAME,
        "common_name": NameOID.COMMON_NAME,
    }
)

#: Map of hash algorithm names to hash algorithm types.
HASH_ALGORITHM_TYPES: "MappingProxyType[SignatureHashAlgorithmName, type[SignatureHashAlgorithm]]" = (
    MappingProxyType(
        {
            "SHA-256": hashes.SHA256,
            "SHA-384": hashes.SHA384,
            "SHA-512": hashes.SHA512,
        }
    )
)

#: Default hash algorithm for signing certificate signing requests with RSA keys.
DEFAULT_SIGNATURE_HASH_ALGORITHM: "SignatureHashAlgorithmName" = "SHA-256"


class PipelineStage(enum.Enum):
    """Stages of a :py:class:`~keyforge.pipeline.Pipeline`, in the order they are run."""

    LOAD_CONFIG = "load_config"
    GENERATE_KEY = "generate_key"
    PERSIST_KEY = "persist_key"
    GENERATE_CSR = "generate_csr"
    PERSIST_CSR = "persist_csr"


class PipelineState(enum.Enum):
    """States of a :py:class:`~keyforge.pipeline.Pipeline`."""

    INIT = "init"
    CONFIG_LOADED = "config_loaded"
    KEY_GENERATED = "key_generated"
    KEY_PERSISTED = "key_persisted"
    CSR_GENERATED = "csr_generated"
    CSR_PERSISTED = "csr_persisted"
    DONE = "done"
    FAILED = "failed"


#: Human-readable descriptions of pipeline stages, used in log and error messages.
PIPELINE_STAGE_DESCRIPTIONS = MappingProxyType(
    {
        PipelineStage.LOAD_CONFIG: "configuration loading",
        PipelineStage.GENERATE_KEY: "private key generation",
        PipelineStage.PERSIST_KEY: "private key saving",
        PipelineStage.GENERATE_CSR: "CSR generation",
        PipelineStage.PERSIST_CSR: "CSR saving",
    }
)

#: State reached after a pipeline stage completed successfully.
PIPELINE_STAGE_STATES = MappingProxyType(
    {
        PipelineStage.LOAD_CONFIG: PipelineState.CONFIG_LOADED,
        PipelineStage.GENERATE_KEY: PipelineState.KEY_GENERATED,
        PipelineStage.PERSIST_KEY: PipelineState.KEY_PERSISTED,
        PipelineStage.GENERATE_CSR: PipelineState.CSR_GENERATED,
        PipelineStage.PERSIST_CSR: PipelineState.CSR_PERSISTED,
    }
)
