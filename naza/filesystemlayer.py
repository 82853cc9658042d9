"""A small file-system abstraction with a disk backend and an in-memory backend.

The in-memory backend covers only what is needed to write, read, rename and
delete whole files: directories are implicit and are never listed.
"""

from __future__ import annotations

import abc
import enum
import os
import shutil
import threading
from pathlib import Path
from typing import BinaryIO


class FslType(enum.IntEnum):
    DISK = 1
    MEMORY = 2


class NotFoundError(FileNotFoundError):
    """Raised by the in-memory backend for a file that does not exist."""


class FileSystemLayer(abc.ABC):
    """Operations shared by every backend."""

    fsl_type: FslType

    @abc.abstractmethod
    def create(self, name: str):
        """Create ``name`` for writing, emptying it if it already exists."""

    @abc.abstractmethod
    def rename(self, old_path: str, new_path: str) -> None:
        """Move a file to a new name."""

    @abc.abstractmethod
    def makedirs(self, path: str, perm: int = 0o777) -> None:
        """Create ``path`` and any missing parents."""

    @abc.abstractmethod
    def remove(self, name: str) -> None:
        """Delete a single file."""

    @abc.abstractmethod
    def remove_all(self, path: str) -> None:
        """Delete ``path`` and everything below it."""

    @abc.abstractmethod
    def read_file(self, filename: str) -> bytes:
        """Return the whole content of a file."""

    @abc.abstractmethod
    def write_file(self, filename: str, data: bytes, perm: int = 0o666) -> None:
        """Replace the content of a file, creating it if needed."""


class DiskFileSystem(FileSystemLayer):
    """The real file system."""

    fsl_type = FslType.DISK

    def create(self, name: str) -> BinaryIO:
        return open(name, "w+b")

    def rename(self, old_path: str, new_path: str) -> None:
        os.rename(old_path, new_path)

    def makedirs(self, path: str, perm: int = 0o777) -> None:
        os.makedirs(path, mode=perm, exist_ok=True)

    def remove(self, name: str) -> None:
        os.remove(name)

    def remove_all(self, path: str) -> None:
        """Delete ``path`` recursively; a missing path is not an error."""
        p = Path(path)
        if p.is_dir() and not p.is_symlink():
            shutil.rmtree(p)
            return
        try:
            p.unlink()
        except FileNotFoundError:
            pass

    def read_file(self, filename: str) -> bytes:
        return Path(filename).read_bytes()

    def write_file(self, filename: str, data: bytes, perm: int = 0o666) -> None:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)


class MemoryFile:
    """A file held in memory; writes append to it."""

    def __init__(self) -> None:
        self._buf = bytearray()
        self._lock = threading.Lock()
        self.closed = False

    def write(self, data: bytes) -> int:
        with self._lock:
            self._buf += data
        return len(data)

    def close(self) -> None:
        """Mark the file closed; its content stays readable through the file system."""
        with self._lock:
            self.closed = True

    def __enter__(self) -> "MemoryFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _truncate(self) -> None:
        with self._lock:
            self._buf.clear()
            self.closed = False

    def _content(self) -> bytes:
        with self._lock:
            return bytes(self._buf)


class MemoryFileSystem(FileSystemLayer):
    """Files kept in a dictionary keyed by their full name."""

    fsl_type = FslType.MEMORY

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._files: dict[str, MemoryFile] = {}

    def _open(self, name: str) -> MemoryFile:
        with self._lock:
            fp = self._files.get(name)
            if fp is None:
                fp = MemoryFile()
                self._files[name] = fp
                return fp
        fp._truncate()
        return fp

    def create(self, name: str) -> MemoryFile:
        return self._open(name)

    def rename(self, old_path: str, new_path: str) -> None:
        with self._lock:
            try:
                fp = self._files.pop(old_path)
            except KeyError:
                raise NotFoundError(old_path) from None
            self._files[new_path] = fp

    def makedirs(self, path: str, perm: int = 0o777) -> None:
        """Directories are implicit in memory; nothing to do."""

    def remove(self, name: str) -> None:
        with self._lock:
            try:
                del self._files[name]
            except KeyError:
                raise NotFoundError(name) from None

    def remove_all(self, path: str) -> None:
        """Delete every file whose name lies below the directory ``path``."""
        if not path:
            raise ValueError("path must not be empty")
        separators = tuple(s for s in (os.sep, os.altsep) if s)
        if not path.endswith(separators):
            path += os.sep
        with self._lock:
            self._files = {k: v for k, v in self._files.items() if not k.startswith(path)}

    def read_file(self, filename: str) -> bytes:
        with self._lock:
            fp = self._files.get(filename)
        if fp is None:
            raise NotFoundError(filename)
        return fp._content()

    def write_file(self, filename: str, data: bytes, perm: int = 0o666) -> None:
        with self._open(filename) as fp:
            fp.write(data)


def fsl_factory(fsl_type: FslType) -> FileSystemLayer:
    """A new backend of the given type."""
    fsl_type = FslType(fsl_type)
    if fsl_type is FslType.DISK:
        return DiskFileSystem()
    return MemoryFileSystem()


DEFAULT_DISK = fsl_factory(FslType.DISK)
DEFAULT_MEMORY = fsl_factory(FslType.MEMORY)