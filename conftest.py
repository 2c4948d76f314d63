"""
Shared fixtures for fpick tests
"""

import re
from typing import Callable, List, Optional, Union

import pytest

from fpick.config_loader import CONFIG_ENV_VAR, reset_config_loader
from fpick.logger import reset_logger

ENTRY_LINE = re.compile(r"^(\d+)\. \((Dir|File)\)\t(.*)$")

Token = Union[str, None, Callable[["ScriptedChannel"], Optional[str]]]


class ScriptedChannel:
    """In-memory text channel fed from a list of tokens.

    A token may be a callable taking the channel, evaluated when the token
    is read, so tests can look up indices from the latest render. Running
    out of tokens behaves like end of input.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = list(tokens)
        self.pages: List[str] = [""]
        self.prompts: List[str] = []

    def write(self, text, style=None, end="\n"):
        self.pages[-1] += text + end

    def read_token(self, prompt=""):
        self.prompts.append(prompt)
        if not self.tokens:
            return None
        token = self.tokens.pop(0)
        if callable(token):
            token = token(self)
        return token

    def clear(self):
        self.pages.append("")

    @property
    def output(self) -> str:
        return "".join(self.pages)

    @property
    def last_page(self) -> str:
        return self.pages[-1]

    def entries(self, page: Optional[str] = None):
        """Parse (index, kind, name) rows from a rendered page"""
        page = self.last_page if page is None else page
        rows = []
        for line in page.splitlines():
            match = ENTRY_LINE.match(line)
            if match:
                rows.append(match.groups())
        return rows

    def index_of(self, name: str) -> str:
        for index, _, entry_name in self.entries():
            if entry_name == name:
                return index
        raise AssertionError(f"{name} not listed in the last render")


@pytest.fixture
def scripted():
    return ScriptedChannel


@pytest.fixture
def tree(tmp_path):
    """Directory holding a subdirectory ``sub`` and a file ``a.txt``"""
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.txt").write_text("alpha")
    return tmp_path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user configuration and cached loggers out of the tests"""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "no-such-config.yml"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    reset_config_loader()
    reset_logger()
    yield
    reset_config_loader()
    reset_logger()
