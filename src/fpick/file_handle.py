"""
File handle value object
Pairs a filesystem path with an in-memory payload and its length
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "temporary_file.txt"

Payload = Union[str, bytes]
PathLike = Union[str, Path]


class FileHandle:
    """A path plus a text payload whose ``size`` always equals ``len(text)``.

    The path always carries a filename component: a directory given as the
    path gets ``default_filename`` appended. A handle built without a path
    points at ``<cwd>/temporary_file.txt``.

    Raw buffers (``bytearray``, ``memoryview``) must be passed together
    with an explicit ``length``; ``str`` and ``bytes`` may omit it.
    """

    def __init__(self, path: Optional[PathLike] = None, text: Optional[Payload] = None,
                 length: Optional[int] = None, default_filename: str = DEFAULT_FILENAME):
        if not default_filename:
            raise InvalidArgumentError("default_filename must not be empty")

        self.default_filename = default_filename
        self._path = Path.cwd() / default_filename
        self._text: Payload = ""
        self._size = 0

        if path is not None:
            self.set_path(path)
        if text is not None:
            self.set_text(text, length)
        elif length is not None:
            raise InvalidArgumentError("length given without a payload")

    def set_path(self, path: PathLike) -> bool:
        """Point the handle at ``path``.

        Returns False, keeping the previous path, when the parent directory
        of ``path`` does not exist. An existing directory gets the default
        filename appended.
        """
        new_path = Path(path)
        if not new_path.parent.exists():
            logger.debug(f"Ignoring path with missing parent directory: {new_path}")
            return False

        if new_path.is_dir():
            new_path = new_path / self.default_filename

        self._path = new_path
        return True

    def set_filename(self, name: str) -> None:
        """Replace the filename component, keeping the directory"""
        if not name or name in (".", "..") or Path(name).name != name:
            raise InvalidArgumentError(f"Invalid filename: {name!r}")
        self._path = self._path.with_name(name)

    def set_text(self, text: Union[Payload, bytearray, memoryview], length: Optional[int] = None) -> None:
        """Replace the payload and recompute its size.

        With ``length`` only the first ``length`` elements of ``text`` are
        kept; ``length`` may not exceed what ``text`` holds.
        """
        if isinstance(text, (bytearray, memoryview)):
            if length is None:
                raise InvalidArgumentError("Raw buffers need an explicit length")
            text = bytes(text)
        elif not isinstance(text, (str, bytes)):
            raise InvalidArgumentError(f"Unsupported payload type: {type(text).__name__}")

        if length is not None:
            if length < 0 or length > len(text):
                raise InvalidArgumentError(
                    f"Length {length} outside payload bounds (0-{len(text)})"
                )
            text = text[:length]

        self._text = text
        self._size = len(text)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def path_str(self) -> str:
        """Full path with forward slashes"""
        return self._path.as_posix()

    @property
    def directory(self) -> Path:
        return self._path.parent

    @property
    def directory_str(self) -> str:
        return self._path.parent.as_posix()

    @property
    def filename(self) -> str:
        return self._path.name

    @property
    def text(self) -> Payload:
        return self._text

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    def as_bytes(self, encoding: str = "utf-8") -> bytes:
        """Payload encoded for writing to disk"""
        if isinstance(self._text, bytes):
            return self._text
        return self._text.encode(encoding)

    def exists(self) -> bool:
        """True if the path is an existing entry that is not a directory"""
        return self._path.exists() and not self._path.is_dir()

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int):
            raise TypeError(f"FileHandle indices must be integers, not {type(index).__name__}")
        if index < 0 or index >= self._size:
            raise IndexError(f"Offset {index} out of range for payload of size {self._size}")

    def __getitem__(self, index: int):
        self._check_index(index)
        return self._text[index]

    def __setitem__(self, index: int, value) -> None:
        self._check_index(index)
        if isinstance(self._text, bytes):
            if isinstance(value, int):
                value = bytes([value])
            if not isinstance(value, bytes) or len(value) != 1:
                raise InvalidArgumentError("Byte payloads take a single byte")
        elif not isinstance(value, str) or len(value) != 1:
            raise InvalidArgumentError("Text payloads take a single character")
        self._text = self._text[:index] + value + self._text[index + 1:]

    def __eq__(self, other):
        if not isinstance(other, FileHandle):
            return NotImplemented
        return self._path == other._path and self._text == other._text

    def __repr__(self):
        return f"FileHandle(path={self.path_str!r}, size={self._size})"
