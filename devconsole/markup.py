"""
Extraction rules for the console's server-rendered pages.

The console has no API, so identifiers and state are recovered from the
markup. Each rule checks the structure it relies on and raises
MarkupShapeError instead of guessing when the page has diverged.
"""
from enum import auto
from typing import Collection
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from devconsole.errors import MarkupShapeError
from devconsole.models import Connection, FieldMapping
from devconsole.shared.compat import StrEnum

NAVIGATION_ID_INDEX = 4
MIN_NAVIGATION_PARTS = 6
GAME_ID_HEADING = "Game ID:"
CONNECTIONS_HEADING = "Connections"
ACCESS_RIGHTS_ID = "bigdbaccessrights"


class RootShape(StrEnum):
    FRESHLY_CREATED = auto()
    CONFIGURED = auto()


def _text(element: Tag) -> str:
    return element.get_text(strip=True)


def _select_one(document: Tag, selector: str, what: str) -> Tag:
    element = document.select_one(selector)

    if element is None:
        raise MarkupShapeError(f"Cannot find {what} ({selector!r}).")
    return element


def extract_navigation(document: BeautifulSoup) -> tuple[str, str]:
    """
    Return the navigation id and session token embedded in the first link of
    the left navigation menu, e.g. ``/my/games/overview/<navigation id>/<token>``.
    """
    anchor = _select_one(document, ".leftrail nav ul li > a", "navigation menu link")
    href = anchor.get("href")

    if not isinstance(href, str) or not href:
        raise MarkupShapeError("Navigation menu link has no href.")

    parts = urlparse(href).path.split("/")

    if len(parts) < MIN_NAVIGATION_PARTS:
        raise MarkupShapeError(f"Navigation link {href!r} has too few path segments.")

    navigation_id = parts[NAVIGATION_ID_INDEX]
    token = parts[-1]

    if not navigation_id or not token:
        raise MarkupShapeError(f"Navigation link {href!r} has empty identifiers.")

    return navigation_id, token


def detect_shape(document: BeautifulSoup) -> RootShape:
    if document.select_one(".gamecreatedinfo") is not None:
        return RootShape.FRESHLY_CREATED
    return RootShape.CONFIGURED


def _fresh_game_id(document: BeautifulSoup) -> str:
    cell = _select_one(document, ".yourgameid td", "game id cell")
    return _text(cell)


def _configured_game_id(document: BeautifulSoup) -> str:
    for heading in document.find_all("h3"):
        if _text(heading) != GAME_ID_HEADING:
            continue

        row = heading.parent.find_next_sibling(True) if heading.parent else None

        if row is None:
            raise MarkupShapeError(f"Nothing follows the {GAME_ID_HEADING!r} heading.")
        return _text(row)

    raise MarkupShapeError(f"Cannot find the {GAME_ID_HEADING!r} heading.")


GAME_ID_RULES = {
    RootShape.FRESHLY_CREATED: _fresh_game_id,
    RootShape.CONFIGURED: _configured_game_id,
}


def resolve_metadata(document: BeautifulSoup) -> tuple[str, str]:
    """Return the game's display name and game id."""
    header = _select_one(document, ".headerprefix", "game header")
    first_child = header.find(True)

    if first_child is None:
        raise MarkupShapeError("Game header has no child element.")

    name = _text(first_child)
    game_id = GAME_ID_RULES[detect_shape(document)](document)

    if not name or not game_id:
        raise MarkupShapeError("Game name or game id is empty.")

    return name, game_id


def parse_connections(document: BeautifulSoup) -> list[Connection]:
    for section in document.find_all("section"):
        if any(_text(heading) == CONNECTIONS_HEADING for heading in section.find_all("h3")):
            break
    else:
        raise MarkupShapeError(f"Cannot find the {CONNECTIONS_HEADING!r} section.")

    connections = []

    for row in section.select("tr.colrow"):
        anchor = row.find("a")

        if anchor is None:
            raise MarkupShapeError("Connection row has no name link.")

        division = row.find("div")
        description = _text(division) if division is not None else ""
        connections.append(Connection(name=_text(anchor), description=description))

    return connections


def parse_field_mappings(document: BeautifulSoup, labels: Collection[str]) -> list[FieldMapping]:
    """
    Map table labels of the access rights form to the field id prefix the
    server generated for them. Tables not listed in ``labels`` are skipped.
    """
    access_rights = _select_one(document, f"#{ACCESS_RIGHTS_ID}", "access rights section")
    mappings = []

    for label in access_rights.find_all("b"):
        table_name = _text(label)

        if table_name not in labels:
            continue

        group = label.find_next_sibling(True)
        checkbox = group.select_one("input[type=checkbox]") if group is not None else None

        if checkbox is None:
            raise MarkupShapeError(f"No privilege checkboxes follow table {table_name!r}.")

        field_id = checkbox.get("id")

        if not isinstance(field_id, str) or "-" not in field_id:
            raise MarkupShapeError(f"Unexpected checkbox id {field_id!r} for table {table_name!r}.")

        prefix = field_id.split("-")[0]

        if not prefix:
            raise MarkupShapeError(f"Empty field id prefix for table {table_name!r}.")

        mappings.append(FieldMapping(label=table_name, prefix=prefix))

    return mappings
