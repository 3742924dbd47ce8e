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

"""Sinks for writing generated artifacts."""

import abc
import fcntl
import logging
import os
from pathlib import Path

from keyforge.exceptions import StorageError

log = logging.getLogger(__name__)


class FileSink(metaclass=abc.ABCMeta):
    """Base class for all sinks that write bytes to a named location."""

    @abc.abstractmethod
    def write(self, path: Path, data: bytes, mode: int) -> None:
        """Write `data` to `path`, replacing any existing content.

        Implementations must make sure that the written file has the permissions given by `mode` and raise
        :py:class:`~keyforge.exceptions.StorageError` on any failure.
        """


class FileSystemSink(FileSink):
    """Sink writing to the local file system.

    The file is opened without truncating it, locked with an exclusive advisory lock, and only then truncated
    and written. The permission mode is set on the open file descriptor, so a pre-existing file with wider
    permissions is narrowed before any data is written to it.
    Symbolic links are not followed, writing to a path that is a symbolic link fails.
    """

    def write(self, path: Path, data: bytes, mode: int) -> None:
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_NOFOLLOW, mode)
        except OSError as ex:
            raise StorageError(f"{path}: Could not open file: {ex.strerror or ex}") from ex

        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            os.fchmod(fd, mode)
            os.ftruncate(fd, 0)

            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                view = view[written:]
            os.fsync(fd)
        except OSError as ex:
            raise StorageError(f"{path}: Could not write file: {ex.strerror or ex}") from ex
        finally:
            os.close(fd)  # also releases the lock

        log.debug("Wrote %d bytes to %s (mode %s).", len(data), path, oct(mode))
