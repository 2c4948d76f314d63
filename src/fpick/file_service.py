"""
File service for fpick
Reads, appends to and creates files on behalf of FileHandle owners
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .errors import FileIOError, NotFoundError
from .file_handle import DEFAULT_FILENAME, FileHandle, Payload, PathLike

logger = logging.getLogger(__name__)


class WriteStatus(Enum):
    """Outcome of FileService.write"""
    WRITTEN = "written"
    IGNORED = "ignored"


class FileService:
    """Stateless file operations.

    ``write`` only appends to files that already exist; ``create`` is the one
    operation that truncates.
    """

    def __init__(self, default_filename: str = DEFAULT_FILENAME, encoding: str = "utf-8"):
        self.default_filename = default_filename
        self.encoding = encoding

    def new_handle(self, path: Optional[PathLike] = None, text: Optional[Payload] = None) -> FileHandle:
        return FileHandle(path, text, default_filename=self.default_filename)

    def read(self, path: PathLike) -> FileHandle:
        """Read a whole file into a new FileHandle.

        Args:
            path: File to read

        Returns:
            Handle carrying the raw bytes of the file and its path

        Raises:
            NotFoundError: path is missing or is a directory
            FileIOError: the file could not be opened or read
        """
        path = Path(path)
        if not path.exists() or path.is_dir():
            raise NotFoundError(path)

        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            raise FileIOError(path.name, "read") from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        handle = self.new_handle(path)
        handle.set_text(data, len(data))
        return handle

    def reload(self, handle: FileHandle) -> None:
        """Replace the payload of ``handle`` with the current file content"""
        fresh = self.read(handle.path)
        handle.set_text(fresh.text, fresh.size)

    def write(self, path: PathLike, text: Union[Payload, FileHandle]) -> WriteStatus:
        """Append ``text`` to an existing file.

        Missing paths and directories are ignored rather than created.

        Raises:
            FileIOError: the file exists but could not be opened for appending
        """
        path = Path(path)
        if not path.exists() or path.is_dir():
            logger.info(f"Ignoring write to missing file or directory: {path}")
            return WriteStatus.IGNORED

        if isinstance(text, FileHandle):
            data = text.as_bytes(self.encoding)
        elif isinstance(text, str):
            data = text.encode(self.encoding)
        else:
            data = bytes(text)

        try:
            with open(path, 'ab') as f:
                f.write(data)
        except OSError as e:
            logger.error(f"Error appending to {path}: {e}")
            raise FileIOError(path.name, "append") from e

        logger.debug(f"Appended {len(data)} bytes to {path}")
        return WriteStatus.WRITTEN

    def create(self, target: Union[PathLike, FileHandle], text: Optional[Payload] = None) -> FileHandle:
        """Create or truncate a file and write the handle's payload into it.

        A bare path creates a file holding ``text``, empty by default.
        Existing content is overwritten.

        Returns:
            The handle that was written

        Raises:
            FileIOError: the path could not be opened for writing
        """
        if isinstance(target, FileHandle):
            handle = target
        else:
            target = Path(target)
            if not target.parent.is_dir():
                logger.error(f"Cannot create {target}: parent directory does not exist")
                raise FileIOError(target.name, "create")
            handle = self.new_handle(target, text)
        path = handle.path

        try:
            with open(path, 'wb') as f:
                f.write(handle.as_bytes(self.encoding))
        except OSError as e:
            logger.error(f"Error creating {path}: {e}")
            raise FileIOError(handle.filename, "create") from e

        logger.debug(f"Created {path} ({handle.size} bytes)")
        return handle
