"""
Interactive directory browser
Renders a numbered directory listing, reads one command per pass and
ends with either a selected path or a cancellation
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .errors import FpickError, InvalidArgumentError
from .file_service import FileService
from .menu_utils import TextChannel

logger = logging.getLogger(__name__)

CMD_EXIT = "0"
CMD_BACK = "b"
CMD_CREATE = "c"
CMD_SELECT_DIR = "d"

MENU_ITEMS = [
    "b. BACK",
    "c. CREATE FILE",
    "d. SELECT CURRENT DIRECTORY",
    "0. EXIT\n",
]


@dataclass(frozen=True)
class DirectoryEntry:
    """One numbered row of a single render pass"""
    index: str
    is_directory: bool
    name: str


# Display index -> entry. Only valid for the render pass that built it.
Listing = Dict[str, DirectoryEntry]


@dataclass(frozen=True)
class Browsing:
    current_path: Path


@dataclass(frozen=True)
class Selected:
    path: Path


@dataclass(frozen=True)
class Cancelled:
    pass


BrowserState = Union[Browsing, Selected, Cancelled]


@dataclass(frozen=True)
class PromptCreate:
    """Ask for a filename and create it inside ``directory``"""
    directory: Path


@dataclass(frozen=True)
class ReportMissing:
    """A listed file vanished between render and selection"""
    path: Path


Effect = Union[PromptCreate, ReportMissing]


@dataclass(frozen=True)
class Transition:
    state: BrowserState
    effect: Optional[Effect] = None


def scan_directory(path: Path) -> Listing:
    """List the immediate children of ``path`` in enumeration order.

    Indices start at "1" and follow the order os.scandir yields; nothing is
    sorted.

    Raises:
        OSError: the directory could not be enumerated
    """
    listing: Listing = {}
    with os.scandir(path) as entries:
        for num, entry in enumerate(entries, 1):
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            index = str(num)
            listing[index] = DirectoryEntry(index, is_dir, entry.name)
    return listing


def parent_directory(path: Path) -> Path:
    """Parent of ``path``; a filesystem root is its own parent"""
    return path.parent


def transition(state: Browsing, command: Optional[str], listing: Listing,
               exists: Callable[[Path], bool] = os.path.exists) -> Transition:
    """Compute the next state for one command.

    Args:
        state: Current browsing state
        command: Token read from the channel, None when input ended
        listing: Index map from the most recent render of ``state``
        exists: Filesystem existence check used for file selections

    Returns:
        The next state plus an optional effect for the caller to perform
    """
    current = state.current_path

    if command is None or command == CMD_EXIT:
        return Transition(Cancelled())

    if command == CMD_BACK:
        return Transition(Browsing(parent_directory(current)))

    if command == CMD_CREATE:
        return Transition(state, PromptCreate(current))

    if command == CMD_SELECT_DIR:
        return Transition(Selected(current))

    entry = listing.get(command)
    if entry is None:
        return Transition(state)

    target = current / entry.name
    if entry.is_directory:
        return Transition(Browsing(target))

    if not exists(target):
        return Transition(state, ReportMissing(target))

    return Transition(Selected(target))


class DirectoryBrowser:
    """Text-menu browser that lets a user pick a file or a directory.

    Each call to ``run`` starts a fresh session at ``start_path`` (the
    process working directory by default).
    """

    def __init__(self, channel: TextChannel, service: Optional[FileService] = None,
                 start_path: Optional[Union[str, Path]] = None):
        self.channel = channel
        self.service = service or FileService()

        start = Path(start_path) if start_path is not None else Path.cwd()
        if not start.is_dir():
            raise InvalidArgumentError(f"Start path is not a directory: {start}")
        self.start_path = start.absolute()

    def render(self, path: Path, notice: Optional[str] = None) -> Listing:
        """Clear the display, print the listing and the menu, return the index map.

        ``notice`` is a message left by the previous command; it is printed
        after the clear so it stays visible.
        """
        self.channel.clear()
        if notice:
            self.channel.write(notice, style="bold red", end="\n\n")
        self.channel.write("DIRS / FILES:\n", style="bold blue")

        try:
            listing = scan_directory(path)
        except OSError as e:
            logger.warning(f"Cannot list directory {path}: {e}")
            self.channel.write(f"Cannot list directory: {e.strerror or e}", style="bold red")
            listing = {}

        for index, entry in listing.items():
            self.channel.write(f"{index}.", style="red", end=" ")
            if entry.is_directory:
                self.channel.write("(Dir)", style="bold blue", end="\t")
            else:
                self.channel.write("(File)", style="bold green", end="\t")
            self.channel.write(entry.name)

        self.channel.write("\nCURRENT_DIR: ", style="bold red", end=" ")
        self.channel.write(path.as_posix(), style="bold blue", end="\n\n")
        for item in MENU_ITEMS:
            self.channel.write(item, style="bold red")

        return listing

    def _create_file(self, directory: Path) -> Optional[str]:
        """Ask for a filename and create it; returns an error message on failure"""
        filename = self.channel.read_token("\nEnter filename: ")
        if not filename:
            return None

        try:
            self.service.create(directory / filename)
            logger.info(f"Created file {directory / filename}")
        except (FpickError, OSError) as e:
            logger.warning(f"Could not create {filename} in {directory}: {e}")
            return str(e)
        return None

    def run(self) -> Union[Selected, Cancelled]:
        """Browse until the user selects a path or exits"""
        state: BrowserState = Browsing(self.start_path)
        notice: Optional[str] = None

        while isinstance(state, Browsing):
            listing = self.render(state.current_path, notice)
            notice = None
            command = self.channel.read_token("Select menu item: ")
            result = transition(state, command, listing)

            if isinstance(result.effect, PromptCreate):
                notice = self._create_file(result.effect.directory)
            elif isinstance(result.effect, ReportMissing):
                logger.debug(f"Stale selection: {result.effect.path}")
                notice = "The file does not exist"

            if isinstance(result.state, Browsing) and result.state != state:
                logger.debug(f"Navigated to {result.state.current_path}")
            state = result.state

        logger.debug(f"Browser finished with {state}")
        return state

    def select_path(self) -> Optional[Path]:
        """Run the browser and return the chosen path, or None if cancelled"""
        outcome = self.run()
        if isinstance(outcome, Selected):
            return outcome.path
        return None
