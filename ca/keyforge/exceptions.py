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

"""Exceptions raised by keyforge.

All exceptions derive from :py:class:`~keyforge.exceptions.KeyforgeError`. Where an exception corresponds to
a builtin exception, it also derives from it, so that for example an invalid parameter can still be caught as
``ValueError``.
"""

from typing import TYPE_CHECKING

from keyforge import constants

if TYPE_CHECKING:
    from keyforge.constants import PipelineStage


class KeyforgeError(Exception):
    """Base class for all exceptions raised by keyforge."""


class ConfigurationError(KeyforgeError, ValueError):
    """Configuration is missing or malformed."""


class InvalidParameterError(KeyforgeError, ValueError):
    """A parameter has an invalid value, e.g. an RSA key size that is too small."""


class GenerationError(KeyforgeError):
    """Generating a private key failed."""


class EncodeError(KeyforgeError, ValueError):
    """Encoding a key or certificate signing request failed."""


class DecodeError(KeyforgeError, ValueError):
    """Decoding PEM or DER data failed."""


class AuthenticationError(KeyforgeError):
    """An encrypted private key could not be decrypted (wrong or missing password)."""


class UnsupportedKeyTypeError(KeyforgeError, TypeError):
    """A private key is not of a supported type."""


class StorageError(KeyforgeError, OSError):
    """Reading or writing a file failed."""


class VerificationError(KeyforgeError):
    """A certificate signing request does not match a private key or has an invalid signature."""


class PipelineError(KeyforgeError):
    """A stage of the pipeline failed.

    The exception that caused the failure is available as `cause` (and as ``__cause__``), the stage that
    failed as `stage`.
    """

    def __init__(self, stage: "PipelineStage", cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"{constants.PIPELINE_STAGE_DESCRIPTIONS[stage]} failed: {cause}")
