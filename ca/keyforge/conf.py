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

"""Loading of the keyforge configuration.

Configuration is read from a YAML file and may be overridden by environment variables:

>>> provider = DictConfigProvider(
...     {"key": {"type": "rsa"}, "csr": {"common_name": "example.com"}},
...     environ={"KEYFORGE_KEY_BITS": "4096"},
... )
>>> config = provider.load()
>>> config.key.type, config.key.bits
('rsa', 4096)
"""

import abc
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

import yaml

from keyforge import constants
from keyforge.exceptions import ConfigurationError
from keyforge.pydantic.config import ConfigModel

log = logging.getLogger(__name__)


def format_validation_error(ex: ValidationError) -> str:
    """Format a Pydantic validation error as a single line of text.

    >>> try:
    ...     ConfigModel.model_validate({})
    ... except ValidationError as ex:
    ...     print(format_validation_error(ex))
    csr: Field required
    """
    errors = []
    for error in ex.errors():
        location = ".".join(str(loc) for loc in error["loc"])
        if location:
            errors.append(f"{location}: {error['msg']}")
        else:
            errors.append(error["msg"])
    return "; ".join(errors)


def apply_environment_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Apply values from environment variables to the configuration loaded from a file.

    >>> apply_environment_overrides({"csr": {}}, {"KEYFORGE_KEY_TYPE": "rsa"})
    {'csr': {}, 'key': {'type': 'rsa'}}
    """
    for name, (section, field) in constants.ENVIRONMENT_OVERRIDES.items():
        value = environ.get(f"{constants.ENVIRONMENT_PREFIX}{name}")
        if value is None:
            continue

        section_data = data.get(section)
        if section_data is None:
            section_data = data[section] = {}
        elif not isinstance(section_data, dict):
            raise ConfigurationError(f"{section}: Section is not a key/value mapping.")
        section_data[field] = value
    return data


class ConfigProvider(metaclass=abc.ABCMeta):
    """Base class for all classes that provide the configuration."""

    @abc.abstractmethod
    def load(self) -> ConfigModel:
        """Load the configuration.

        Implementations must raise :py:class:`~keyforge.exceptions.ConfigurationError` if the configuration
        is missing or invalid.
        """

    def validate(self, data: dict[str, Any]) -> ConfigModel:
        """Validate raw configuration data."""
        try:
            return ConfigModel.model_validate(data)
        except ValidationError as ex:
            raise ConfigurationError(format_validation_error(ex)) from ex


class DictConfigProvider(ConfigProvider):
    """Provide configuration from a dictionary, e.g. for testing."""

    def __init__(self, data: dict[str, Any], environ: Mapping[str, str] | None = None) -> None:
        self.data = data
        self.environ: Mapping[str, str] = {} if environ is None else environ

    def load(self) -> ConfigModel:
        data = {k: dict(v) if isinstance(v, dict) else v for k, v in self.data.items()}
        return self.validate(apply_environment_overrides(data, self.environ))


class YAMLConfigProvider(ConfigProvider):
    """Provide configuration from a YAML file.

    If `path` is not given, the file named by the ``KEYFORGE_CONFIG`` environment variable is used, and
    ``config.yaml`` in the current working directory if that variable is not set either. `environ` defaults
    to :py:data:`os.environ`.
    """

    def __init__(self, path: Path | str | None = None, environ: Mapping[str, str] | None = None) -> None:
        self.environ: Mapping[str, str] = os.environ if environ is None else environ

        if path is None:
            path = self.environ.get(constants.CONFIG_PATH_ENVIRONMENT_VARIABLE)
        if not path:
            path = constants.DEFAULT_CONFIG_FILE
        self.path = Path(path)

    def read(self) -> dict[str, Any]:
        """Read the raw configuration data from the file."""
        try:
            with open(self.path, encoding="utf-8") as stream:
                data = yaml.safe_load(stream)
        except FileNotFoundError as ex:
            raise ConfigurationError(f"{self.path}: No such file or directory.") from ex
        except OSError as ex:
            raise ConfigurationError(f"{self.path}: Could not read file: {ex.strerror or ex}") from ex
        except yaml.YAMLError as ex:
            raise ConfigurationError(f"{self.path}: Invalid YAML.") from ex

        if data is None:
            return {}  # empty file
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.path}: File is not a key/value mapping.")
        return data

    def load(self) -> ConfigModel:
        data = self.read()
        log.debug("Loaded configuration from %s.", self.path)
        data = apply_environment_overrides(data, self.environ)

        try:
            return self.validate(data)
        except ConfigurationError as ex:
            raise ConfigurationError(f"{self.path}: {ex}") from ex.__cause__
