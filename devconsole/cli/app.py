import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import typer

from devconsole import data_home, get_version
from devconsole.cli import connections, di, logging
from devconsole.cli.console import get_console
from devconsole.config import Config
from devconsole.errors import DevConsoleError

app = typer.Typer(name="devconsole", help="Automate the PlayerIO developer console.")
app.add_typer(connections.app, name="connections")
console = get_console()


def make_log_sink(debug: bool) -> str:
    now = datetime.now(tz=timezone.utc)

    if debug:
        log_home = Path()
    else:
        log_home = data_home
    return str(log_home / f"devconsole_{now:%Y-%m-%d_%H-%M-%S}.log")


def parse_cookies(value: str) -> dict[str, str]:
    try:
        cookies = json.loads(value)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Cookies must be a JSON object: {exc}.")

    if not isinstance(cookies, dict):
        raise typer.BadParameter("Cookies must be a JSON object.")

    return {str(key): str(val) for key, val in cookies.items()}


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    base_url: Annotated[
        str,
        typer.Option(envvar="DEVCONSOLE_BASE_URL", show_envvar=False, help="Set console URL."),
    ] = "https://playerio.com",
    game: Annotated[
        str,
        typer.Option(
            envvar="DEVCONSOLE_GAME_PATH",
            show_envvar=False,
            help="Path of the game's root page on the console.",
        ),
    ] = "",
    cookies: Annotated[
        str,
        typer.Option(
            envvar="DEVCONSOLE_COOKIES",
            show_envvar=False,
            help="Authenticated session cookies as a JSON object.",
        ),
    ] = "{}",
    timeout: Annotated[
        int,
        typer.Option(envvar="DEVCONSOLE_HTTP_TIMEOUT", show_envvar=False, help="HTTP timeout."),
    ] = 20,
    version: Annotated[bool, typer.Option("--version", help="Show version and exit.")] = False,
    debug: Annotated[
        bool, typer.Option(envvar="DEVCONSOLE_DEBUG", show_envvar=False, help="Enable debug mode.")
    ] = False,
) -> None:
    """
    Drive a game's developer console from the terminal.
    """
    if version:
        typer.echo(get_version())
        raise typer.Exit

    logging.configure_logger(make_log_sink(debug), debug)
    config = Config(
        BASE_URL=base_url,
        COOKIES=parse_cookies(cookies),
        HTTP_TIMEOUT=timeout,
        GAME_PATH=game,
        DEBUG=debug,
    )
    di.configure_injection(config)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command(help="Show the game's name and identifiers.")
def info() -> None:
    game = di.get_game()

    console.print(f"Name: [accent]{game.name}[/]")
    console.print(f"Game ID: [accent]{game.game_id}[/]")
    console.print(f"Navigation ID: [accent]{game.navigation_id}[/]")


@app.command(help="Publish a note in the changelog.")
def note(content: str) -> None:
    game = di.get_game()

    with console.status("Publishing note..."):
        published = game.create_note(content)

    if not published:
        console.error("Console refused the note.")
        raise typer.Exit(code=1)

    console.success("Note published.")


def run() -> None:
    try:
        app()
    except DevConsoleError as exc:
        raise SystemExit(str(exc))
