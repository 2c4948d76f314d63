"""Exception types raised by fpick"""


class FpickError(Exception):
    """Base class for all fpick errors"""


class NotFoundError(FpickError, FileNotFoundError):
    """A path is missing, or is a directory where a file was expected"""

    def __init__(self, path):
        super().__init__(f"File not found: {path}")
        self.path = path

    def __str__(self):
        return f"File not found: {self.path}"


class FileIOError(FpickError, OSError):
    """The filesystem refused to open a file for the requested mode.

    ``filename`` is the name of the offending file and ``mode`` one of
    ``read``, ``append`` or ``create``.
    """

    def __init__(self, filename: str, mode: str = "read"):
        verb = "create" if mode == "create" else "open"
        message = f"Cannot {verb} file: {filename}"
        super().__init__(message)
        self.filename = filename
        self.mode = mode
        self.message = message

    def __str__(self):
        return self.message


class InvalidArgumentError(FpickError, ValueError):
    """Malformed input passed to a constructor or mutator"""
