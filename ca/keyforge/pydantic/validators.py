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

"""Validators for Pydantic models."""

from typing import Any

from keyforge import constants


def empty_str_parser(value: Any) -> Any:
    """Convert ``None`` to an empty string.

    YAML files load keys without a value as ``None``:

    >>> empty_str_parser(None)
    ''
    >>> empty_str_parser("example.com")
    'example.com'
    """
    if value is None:
        return ""
    return value


def empty_str_to_none_parser(value: Any) -> Any:
    """Convert an empty string to ``None``.

    >>> empty_str_to_none_parser("") is None
    True
    >>> empty_str_to_none_parser("secret")
    'secret'
    """
    if value == "":
        return None
    return value


def empty_section_parser(value: Any) -> Any:
    """Convert ``None`` to an empty dictionary.

    YAML files load sections without any values (e.g. just ``key:``) as ``None``:

    >>> empty_section_parser(None)
    {}
    >>> empty_section_parser({"type": "rsa"})
    {'type': 'rsa'}
    """
    if value is None:
        return {}
    return value


def key_type_parser(value: Any) -> Any:
    """Normalize the `type` of a key configuration, defaulting to Ed25519.

    >>> key_type_parser({"type": "RSA", "bits": 4096})
    {'type': 'rsa', 'bits': 4096}
    >>> key_type_parser({})
    {'type': 'ed25519'}
    >>> key_type_parser(None)
    {'type': 'ed25519'}
    """
    if value is None:
        value = {}
    if isinstance(value, dict):
        key_type = value.get("type") or constants.PARSABLE_KEY_TYPES[0]
        if isinstance(key_type, str):
            key_type = key_type.strip().lower()
        return {**value, "type": key_type}
    return value


def country_code_validator(value: str) -> str:
    """Validate that a country code has exactly two characters, if given.

    >>> country_code_validator("AT")
    'AT'
    >>> country_code_validator("")
    ''
    >>> country_code_validator("AUT")
    Traceback (most recent call last):
        ...
    ValueError: AUT: Country code must have exactly two characters.
    """
    if value and len(value) != 2:
        raise ValueError(f"{value}: Country code must have exactly two characters.")
    return value
