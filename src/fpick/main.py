import typer
from pathlib import Path
from rich.console import Console
from rich.table import Table
from typing import Optional

from .browser import DirectoryBrowser, Selected
from .config_loader import ConfigLoader, create_sample_config, get_config_loader, LOCAL_CONFIG_NAME
from .errors import FpickError, InvalidArgumentError
from .file_handle import FileHandle
from .file_service import FileService, WriteStatus
from .logger import setup_logger, set_debug_mode
from .menu_utils import ConsoleChannel, confirm, text_input

app = typer.Typer(help="Pick, read and create files from a text menu", invoke_without_command=True)
console = Console()
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _loader(ctx: typer.Context) -> ConfigLoader:
    return ctx.obj['loader']


def _service(ctx: typer.Context) -> FileService:
    return FileService(default_filename=_loader(ctx).settings.default_filename)


@app.callback()
def main(
    ctx: typer.Context,
    start: Optional[Path] = typer.Option(None, "--start", help="Directory to start browsing in"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a YAML config file"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Browse interactively when run without a command."""
    loader = ConfigLoader(config) if config else get_config_loader()
    settings = loader.settings
    setup_logger(level=settings.log_level, log_to_file=settings.log_to_file, log_dir=settings.log_dir)
    if debug:
        set_debug_mode()

    ctx.obj = {'loader': loader}

    if ctx.invoked_subcommand is None:
        _run_browser(ctx, start)


@app.command()
def browse(
    ctx: typer.Context,
    start: Optional[Path] = typer.Option(None, "--start", help="Directory to start browsing in"),
):
    """Browse directories and print the selected path"""
    _run_browser(ctx, start)


def _run_browser(ctx: typer.Context, start: Optional[Path]):
    settings = _loader(ctx).settings
    start_path = start if start is not None else settings.start_path()
    channel = ConsoleChannel(err_console, clear_screen=settings.clear_screen)

    try:
        browser = DirectoryBrowser(channel, _service(ctx), start_path)
    except InvalidArgumentError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    outcome = browser.run()
    if isinstance(outcome, Selected):
        typer.echo(str(outcome.path))
        return

    err_console.print("[yellow]Cancelled[/yellow]")
    raise typer.Exit(1)


@app.command()
def read(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to read"),
    size_only: bool = typer.Option(False, "--size-only", help="Only print the file summary"),
):
    """Read a file and show its content"""
    try:
        handle = _service(ctx).read(path)
    except FpickError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    _print_summary(handle)
    if not size_only and not handle.is_empty:
        console.print(handle.as_bytes().decode("utf-8", errors="replace"), markup=False, highlight=False, soft_wrap=True)


def _print_summary(handle: FileHandle):
    table = Table(title="File")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")

    table.add_row("Path", handle.path_str)
    table.add_row("Directory", handle.directory_str)
    table.add_row("Filename", handle.filename)
    table.add_row("Size", f"{handle.size} bytes")

    console.print(table)


@app.command()
def append(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Existing file to append to"),
    text: str = typer.Argument(..., help="Text to append"),
):
    """Append text to an existing file"""
    try:
        status = _service(ctx).write(path, text)
    except FpickError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if status is WriteStatus.IGNORED:
        err_console.print(f"[yellow]Ignored: {path} is not an existing file[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Appended {len(text)} characters to {path}[/green]")


@app.command()
def create(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to create"),
    text: str = typer.Option("", "--text", "-t", help="Initial content"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite without asking"),
    ask: bool = typer.Option(False, "--ask", "-a", help="Prompt for the initial content"),
):
    """Create a file, replacing any existing content"""
    service = _service(ctx)
    if ask and not text:
        text = text_input("Initial content")
        if text is None:
            err_console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(1)

    if path.exists() and not path.is_dir() and not force:
        if not confirm(f"{path} exists. Overwrite?", default=False):
            err_console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(1)

    try:
        handle = service.create(path, text)
    except FpickError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created {handle.path_str} ({handle.size} bytes)[/green]")


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path(LOCAL_CONFIG_NAME), help="Where to write the sample config"),
):
    """Write a sample configuration file"""
    try:
        created = create_sample_config(path)
    except FileExistsError as e:
        err_console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]Sample config written to {created}[/green]")


@app.command()
def info():
    """Show information about the CLI tool"""
    console.print("[bold blue]fpick - File Picker[/bold blue]")
    console.print("\nNavigate directories from a numbered menu and pick a file or directory.")
    console.print("\nCommands:")
    console.print("  • [cyan]fpick[/cyan] - Interactive browser, prints the selected path")
    console.print("  • [cyan]fpick browse --start <dir>[/cyan] - Browse from a given directory")
    console.print("  • [cyan]fpick read <path>[/cyan] - Show a file and its size")
    console.print("  • [cyan]fpick append <path> <text>[/cyan] - Append to an existing file")
    console.print("  • [cyan]fpick create <path>[/cyan] - Create or overwrite a file")
    console.print("  • [cyan]fpick init-config[/cyan] - Write a sample fpick.yml")
    console.print("  • [cyan]fpick info[/cyan] - Show this information")
    console.print("\nBrowser keys: [cyan]N[/cyan] open entry, [cyan]b[/cyan] back, "
                  "[cyan]c[/cyan] create file, [cyan]d[/cyan] select directory, [cyan]0[/cyan] exit")


if __name__ == "__main__":
    app()
