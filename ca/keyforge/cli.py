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

"""Command line interface for keyforge."""

import argparse
import getpass
import os
import sys
import typing
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from termcolor import colored

from keyforge import __version__
from keyforge.conf import YAMLConfigProvider
from keyforge.csr import load_csr, verify_csr
from keyforge.exceptions import KeyforgeError, StorageError
from keyforge.log import configure_logging
from keyforge.pipeline import Pipeline
from keyforge.serialization import parse_private_key
from keyforge.typehints import LogLevelName


def err(msg: str) -> int:
    """Print an error message to stderr."""
    print(colored("keyforge:", "red", attrs=["bold"]), msg, file=sys.stderr)
    return 1


def ok(msg: str) -> int:
    """Print a success message."""
    print(colored("[OKAY]", "green"), msg)
    return 0


class PasswordAction(argparse.Action):
    """Action for adding a password argument.

    If the option is given without a value, the user is prompted for the password.

    >>> parser = argparse.ArgumentParser()
    >>> parser.add_argument("--password", nargs="?", action=PasswordAction)  # doctest: +ELLIPSIS
    PasswordAction(...)
    >>> parser.parse_args(["--password", "secret"])
    Namespace(password=b'secret')
    """

    def __init__(self, prompt: str = "Password: ", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.prompt = prompt

    def __call__(  # type: ignore[override] # argparse.Action defines much looser type for values
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | None,
        option_string: str | None = None,
    ) -> None:
        if values is None:
            values = getpass.getpass(prompt=self.prompt)

        setattr(namespace, self.dest, values.encode("utf-8"))


def read_file(path: Path) -> bytes:
    """Read a file, raising :py:class:`~keyforge.exceptions.StorageError` on failure."""
    try:
        return path.read_bytes()
    except OSError as ex:
        raise StorageError(f"{path}: Could not read file: {ex.strerror or ex}") from ex


def generate(args: argparse.Namespace) -> int:
    """Generate a private key and a certificate signing request."""
    pipeline = Pipeline(
        YAMLConfigProvider(args.config),
        key_path=args.key_out,
        csr_path=args.csr_out,
        password=args.password,
    )
    result = pipeline.run()

    encrypted = " (encrypted)" if result.encrypted else ""
    ok(f"{result.key_type} private key{encrypted} written to {result.paths.key}.")
    return ok(f"Certificate signing request written to {result.paths.csr}.")


def verify(args: argparse.Namespace) -> int:
    """Verify that a certificate signing request was signed with a private key."""
    key = parse_private_key(read_file(args.key), args.password)
    request = load_csr(read_file(args.csr))
    verify_csr(request, key)
    return ok(f"{args.csr} is signed by {args.key}.")


def add_password_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    """Add the ``--password`` argument to `parser`."""
    parser.add_argument("--password", nargs="?", action=PasswordAction, metavar="PASSWORD", help=help_text)


def get_parser() -> argparse.ArgumentParser:
    """Get the argument parser."""
    parser = argparse.ArgumentParser(
        prog="keyforge", description="Generate private keys and certificate signing requests."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Configuration file to load (default: $KEYFORGE_CONFIG or config.yaml).",
    )
    parser.add_argument(
        "--log-level",
        choices=typing.get_args(LogLevelName),
        type=str.upper,
        help="Log level (default: $KEYFORGE_LOG_LEVEL or INFO).",
    )

    # generate is also run if no command is given
    parser.set_defaults(func=generate, key_out=None, csr_out=None, password=None)
    subcommands = parser.add_subparsers(dest="command", title="commands")

    generate_parser = subcommands.add_parser(
        "generate", help="Generate a private key and a certificate signing request (default)."
    )
    generate_parser.set_defaults(func=generate)
    generate_parser.add_argument(
        "--key-out", type=Path, metavar="PATH", help="Write the private key to PATH (overrides key.output)."
    )
    generate_parser.add_argument(
        "--csr-out",
        type=Path,
        metavar="PATH",
        help="Write the certificate signing request to PATH (overrides certificate.output).",
    )
    add_password_argument(
        generate_parser, "Encrypt the private key with PASSWORD. Prompt for a password if omitted."
    )

    verify_parser = subcommands.add_parser(
        "verify", help="Verify that a certificate signing request matches a private key."
    )
    verify_parser.set_defaults(func=verify)
    verify_parser.add_argument("--key", type=Path, required=True, metavar="PATH", help="Private key file.")
    verify_parser.add_argument(
        "--csr", type=Path, required=True, metavar="PATH", help="Certificate signing request file."
    )
    add_password_argument(verify_parser, "Password for an encrypted private key. Prompt if omitted.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point of the command line interface, returns the exit status."""
    parser = get_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level, os.environ)
        return typing.cast(int, args.func(args))
    except KeyforgeError as ex:
        return err(str(ex))
