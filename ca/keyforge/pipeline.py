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

"""Pipeline generating a private key and a certificate signing request.

The pipeline runs a fixed sequence of stages (see :py:class:`~keyforge.constants.PipelineStage`). Every stage
either succeeds or raises an exception, the first failure stops the pipeline and is raised as
:py:class:`~keyforge.exceptions.PipelineError`. Nothing is retried and nothing is rolled back: if saving the
certificate signing request fails, the private key file is left in place.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from keyforge import constants
from keyforge.conf import ConfigProvider
from keyforge.constants import PipelineStage, PipelineState
from keyforge.csr import CSRBuilder, CSRDocument
from keyforge.exceptions import PipelineError
from keyforge.keys import DefaultKeyGenerator, KeyGenerator, get_private_key_type
from keyforge.pydantic.config import ConfigModel
from keyforge.serialization import EncodedKeyDocument, KeySerializer
from keyforge.sinks import FileSink, FileSystemSink
from keyforge.typehints import ParsableKeyType, PrivateKeyTypes, Self

T = TypeVar("T")


class OutputPaths(BaseModel):
    """Paths of the files written by the pipeline."""

    model_config = ConfigDict(frozen=True)

    key: Path
    csr: Path

    @classmethod
    def from_config(
        cls, config: ConfigModel, key_path: Path | None = None, csr_path: Path | None = None
    ) -> Self:
        """Resolve output paths, with explicitly given paths taking precedence over the configuration.

        >>> config = ConfigModel.model_validate({"csr": {"common_name": "example.com"}})
        >>> paths = OutputPaths.from_config(config, csr_path=Path("example.csr"))
        >>> paths.key, paths.csr
        (PosixPath('private.key'), PosixPath('example.csr'))
        """
        return cls(
            key=config.key.output if key_path is None else key_path,
            csr=config.certificate.output if csr_path is None else csr_path,
        )


class PipelineResult(BaseModel):
    """Result of a successful pipeline run."""

    model_config = ConfigDict(frozen=True)

    paths: OutputPaths
    key_type: ParsableKeyType
    encrypted: bool


class Pipeline:
    """Pipeline loading configuration, generating a key and a CSR and saving both.

    All collaborators can be replaced, which is mostly useful for testing. `key_path` and `csr_path` override
    the output paths from the configuration. If `password` is not given, the password from the configuration
    (if any) is used to encrypt the private key.
    """

    state: PipelineState
    failed_stage: PipelineStage | None

    config: ConfigModel
    paths: OutputPaths
    private_key: PrivateKeyTypes
    encoded_key: EncodedKeyDocument
    csr: CSRDocument

    def __init__(
        self,
        config_provider: ConfigProvider,
        key_generator: KeyGenerator | None = None,
        file_sink: FileSink | None = None,
        csr_builder: CSRBuilder | None = None,
        key_serializer: KeySerializer | None = None,
        *,
        key_path: Path | None = None,
        csr_path: Path | None = None,
        password: str | bytes | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.config_provider = config_provider
        self.key_generator = DefaultKeyGenerator() if key_generator is None else key_generator
        self.file_sink = FileSystemSink() if file_sink is None else file_sink
        self.csr_builder = CSRBuilder() if csr_builder is None else csr_builder
        self.key_serializer = KeySerializer() if key_serializer is None else key_serializer
        self.key_path = key_path
        self.csr_path = csr_path
        self.password = password
        self.log = logging.getLogger(__name__) if log is None else log

        self.state = PipelineState.INIT
        self.failed_stage = None

    def _run_stage(self, stage: PipelineStage, func: Callable[[], T]) -> T:
        self.log.debug("Starting stage: %s", constants.PIPELINE_STAGE_DESCRIPTIONS[stage])
        try:
            value = func()
        except Exception as ex:  # pylint: disable=broad-exception-caught  # any failure stops the pipeline
            self.state = PipelineState.FAILED
            self.failed_stage = stage
            raise PipelineError(stage, ex) from ex

        self.state = constants.PIPELINE_STAGE_STATES[stage]
        return value

    def load_config(self) -> ConfigModel:
        """Load the configuration and resolve output paths."""
        config = self.config_provider.load()
        self.paths = OutputPaths.from_config(config, key_path=self.key_path, csr_path=self.csr_path)
        return config

    def generate_key(self) -> PrivateKeyTypes:
        """Generate the private key."""
        return self.key_generator.generate(self.config.key)

    def get_password(self) -> str | bytes | None:
        """Get the password used for encrypting the private key."""
        if self.password is not None:
            return self.password
        if self.config.key.password is not None:
            return self.config.key.password.get_secret_value()
        return None

    def persist_key(self) -> EncodedKeyDocument:
        """Serialize the private key and write it to disk."""
        encoded = self.key_serializer.serialize(self.private_key, self.get_password())
        self.file_sink.write(self.paths.key, encoded.pem, constants.PRIVATE_KEY_FILE_MODE)
        self.log.info("Private key written to %s.", self.paths.key)
        return encoded

    def generate_csr(self) -> CSRDocument:
        """Generate the certificate signing request."""
        return self.csr_builder.build(self.private_key, self.config.csr)

    def persist_csr(self) -> None:
        """Write the certificate signing request to disk."""
        self.file_sink.write(self.paths.csr, self.csr.pem, constants.CSR_FILE_MODE)
        self.log.info("Certificate signing request written to %s.", self.paths.csr)

    def run(self) -> PipelineResult:
        """Run all stages of the pipeline.

        Raises :py:class:`~keyforge.exceptions.PipelineError` if any stage fails. A pipeline can only be run
        once.
        """
        if self.state != PipelineState.INIT:
            raise RuntimeError(f"Pipeline was already run (state: {self.state.name}).")

        self.config = self._run_stage(PipelineStage.LOAD_CONFIG, self.load_config)
        self.private_key = self._run_stage(PipelineStage.GENERATE_KEY, self.generate_key)
        self.encoded_key = self._run_stage(PipelineStage.PERSIST_KEY, self.persist_key)
        self.csr = self._run_stage(PipelineStage.GENERATE_CSR, self.generate_csr)
        self._run_stage(PipelineStage.PERSIST_CSR, self.persist_csr)

        self.state = PipelineState.DONE
        return PipelineResult(
            paths=self.paths,
            key_type=get_private_key_type(self.private_key),
            encrypted=self.encoded_key.encrypted,
        )
