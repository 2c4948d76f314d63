import inquirer
import sys
from typing import Optional, Protocol

from rich.console import Console


class TextChannel(Protocol):
    """Line-oriented text I/O used by the directory browser"""

    def write(self, text: str, style: Optional[str] = None, end: str = "\n") -> None:
        ...

    def read_token(self, prompt: str = "") -> Optional[str]:
        ...

    def clear(self) -> None:
        ...


class ConsoleChannel:
    """TextChannel backed by a rich Console.

    Styles are rich style strings ("bold red", "green"); text is printed
    without markup so file names containing brackets show verbatim.
    """

    def __init__(self, console: Optional[Console] = None, clear_screen: bool = True):
        self.console = console or Console(highlight=False)
        self.clear_screen = clear_screen

    def write(self, text: str, style: Optional[str] = None, end: str = "\n") -> None:
        self.console.print(text, style=style, end=end, markup=False, highlight=False, soft_wrap=True)

    def read_token(self, prompt: str = "") -> Optional[str]:
        """
        Read one whitespace-delimited token.

        Returns:
            The first token of the line, "" for a blank line, or None when
            input is exhausted or interrupted
        """
        try:
            line = self.console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            return None
        parts = line.split()
        return parts[0] if parts else ""

    def clear(self) -> None:
        if self.clear_screen:
            self.console.clear()


def confirm(message: str, default: bool = True) -> bool:
    """
    Show a yes/no confirmation prompt.
    Falls back to simple input if TTY is not available.

    Args:
        message: The confirmation message
        default: Default value if user just presses Enter

    Returns:
        True if confirmed, False otherwise
    """
    if not sys.stdin.isatty():
        return _fallback_confirm(message, default)

    try:
        question = inquirer.Confirm('confirm', message=message, default=default)
        answer = inquirer.prompt([question])
        return answer['confirm'] if answer else default
    except KeyboardInterrupt:
        return False
    except Exception:
        return _fallback_confirm(message, default)


def _fallback_confirm(message: str, default: bool = True) -> bool:
    """Fallback confirmation when interactive mode fails."""
    default_str = "Y/n" if default else "y/N"

    try:
        response = input(f"{message} ({default_str}): ").strip().lower()
        if not response:
            return default
        return response in ['y', 'yes', 'true', '1']
    except (EOFError, KeyboardInterrupt):
        return default


def text_input(message: str, default: str = "", validate=None) -> Optional[str]:
    """
    Get text input from user with validation.
    Falls back to simple input if TTY is not available.

    Args:
        message: The input prompt message
        default: Default value
        validate: Optional validation function taking (answers, value)

    Returns:
        The input string, or None if cancelled
    """
    if not sys.stdin.isatty():
        return _fallback_text_input(message, default, validate)

    try:
        question = inquirer.Text('input', message=message, default=default, validate=validate or True)

        answer = inquirer.prompt([question])
        return answer['input'] if answer else None
    except KeyboardInterrupt:
        print("\n👋 Input cancelled")
        return None
    except Exception as e:
        print(f"⚠️  Interactive input failed, using fallback: {e}")
        return _fallback_text_input(message, default, validate)


def _fallback_text_input(message: str, default: str = "", validate=None) -> Optional[str]:
    """Fallback text input when interactive mode fails."""
    prompt = f"{message}"
    if default:
        prompt += f" (default: {default})"
    prompt += ": "

    try:
        while True:
            response = input(prompt).strip()
            if not response and default:
                response = default

            if not validate:
                return response if response else None

            try:
                if validate(None, response):
                    return response
                print("❌ Invalid value, try again")
            except Exception as e:
                print(f"❌ {e}")
    except (EOFError, KeyboardInterrupt):
        print("\n👋 Input cancelled")
        return None
