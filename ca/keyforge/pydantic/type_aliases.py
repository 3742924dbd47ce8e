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

"""Reusable type aliases for Pydantic models."""

from typing import Annotated

from pydantic import AfterValidator, BeforeValidator, SecretStr

from keyforge.pydantic.validators import country_code_validator, empty_str_parser, empty_str_to_none_parser

#: A string that may be left empty in configuration files.
OptionalStr = Annotated[str, BeforeValidator(empty_str_parser)]

#: A two-letter country code, or an empty string.
CountryCode = Annotated[str, BeforeValidator(empty_str_parser), AfterValidator(country_code_validator)]

#: A password that is never included in string representations. Empty strings are treated as no password.
Password = Annotated[SecretStr | None, BeforeValidator(empty_str_to_none_parser)]
