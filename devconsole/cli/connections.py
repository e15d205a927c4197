from typing import Annotated

import typer
from rich.table import Table as RichTable
from typer import Exit, Option, Typer

from devconsole.cli.console import get_console
from devconsole.cli.di import get_game
from devconsole.models import Authentication, Connection, Table, TablePrivilegeSpec

app = Typer(help="Manage game connections.")
console = get_console()

FLAG_FIELDS = {flag: field for field, flag in TablePrivilegeSpec.FLAGS.items()}


def parse_table_option(value: str) -> TablePrivilegeSpec:
    """Parse ``Players:cansave,cancreate`` into a privilege spec."""
    name, _, raw_flags = value.partition(":")

    if not name:
        raise typer.BadParameter(f"Missing table name in {value!r}.")

    flags = {}

    for flag in filter(None, (item.strip().lower() for item in raw_flags.split(","))):
        try:
            flags[FLAG_FIELDS[flag]] = True
        except KeyError:
            choices = ", ".join(FLAG_FIELDS)
            raise typer.BadParameter(f"Unknown privilege {flag!r}, choose from: {choices}.")

    return TablePrivilegeSpec(table=Table(name=name), **flags)


def make_connections_table() -> RichTable:
    table = RichTable()

    table.add_column("Name")
    table.add_column("Description")

    return table


@app.command(name="list", help="Display connections of the game.")
def list_connections() -> None:
    game = get_game()
    table = make_connections_table()

    for connection in game.connections:
        table.add_row(connection.name, connection.description)

    console.print(table)


@app.command(help="Delete a connection.")
def delete(name: str) -> None:
    game = get_game()

    with console.status(f"Deleting connection {name}..."):
        deleted = game.delete_connection(Connection(name=name))

    if not deleted:
        console.error(f"Console refused to delete connection {name}.")
        raise Exit(code=1)

    console.success(f"Deleted connection {name}.")


@app.command(help="Create a connection and grant it table privileges.")
def create(
    identifier: str,
    description: Annotated[str, Option(help="Connection description.")] = "",
    auth: Annotated[
        Authentication, Option(help="Authentication method of the connection.")
    ] = Authentication.BASIC,
    secret: Annotated[
        str, Option(help="Shared secret, required by basic-requires-auth.")
    ] = "",
    game_db: Annotated[str, Option(help="Game database the connection uses.")] = "",
    table: Annotated[
        list[str],
        Option(help="Table privileges as NAME:flag,flag. Can be repeated."),
    ] = [],
) -> None:
    privileges = [parse_table_option(value) for value in table]
    game = get_game()

    with console.status(f"Creating connection {identifier}..."):
        game.create_connection(
            identifier,
            description=description,
            authentication=auth,
            game_db=game_db,
            privileges=privileges,
            shared_secret=secret,
        )

    console.success(f"Created connection {identifier}.")
