import pytest

from devconsole.errors import ConflictError, MarkupShapeError, ValidationError
from devconsole.game import DeveloperGame, load_session
from devconsole.models import Connection, GameSession, Table, TablePrivilegeSpec
from tests.conftest import CREATE_PATH, FRESH_ROOT_PAGE, ROOT_PATH, SETTINGS_PATH, FakeTransport


def test_load_session_configured_game(transport):
    session = load_session(transport, ROOT_PATH)

    assert session == GameSession(
        name="Space Miners",
        navigation_id="nav123",
        session_token="tok456",
        game_id="space-miners-xyz789",
    )


def test_load_session_fresh_game():
    session = load_session(FakeTransport({ROOT_PATH: FRESH_ROOT_PAGE}), ROOT_PATH)

    assert session.game_id == "space-miners-abc123"
    assert session.navigation_id == "nav123"


def test_game_requires_known_root_shape():
    with pytest.raises(MarkupShapeError):
        DeveloperGame(FakeTransport({ROOT_PATH: "<p>Please log in</p>"}), ROOT_PATH)


def test_game_properties(game):
    assert game.name == "Space Miners"
    assert game.game_id == "space-miners-xyz789"
    assert game.navigation_id == "nav123"


def test_game_root_fetched_once(transport):
    game = DeveloperGame(transport, ROOT_PATH)
    game.create_note("hello")
    game.create_note("again")

    assert [path for method, path, _ in transport.requests if method == "GET"] == [ROOT_PATH]


def test_game_connections_are_not_cached(game, transport):
    assert game.connections == game.connections
    assert [path for _, path, _ in transport.requests] == [SETTINGS_PATH, SETTINGS_PATH]


def test_game_delete_connection(game, transport):
    assert game.delete_connection(game.connections[0])
    assert transport.posts[0][0] == "/my/connections/delete/nav123/public/tok456"


def test_game_delete_connection_without_name(game, transport):
    with pytest.raises(ValidationError):
        game.delete_connection(Connection(name=""))

    assert transport.requests == []


def test_game_create_note(game):
    assert game.create_note("hello") is True

    with pytest.raises(ValidationError):
        game.create_note("")


def test_game_create_connection(game, transport):
    game.create_connection(
        "gameserver",
        privileges=[TablePrivilegeSpec(table=Table(name="Players"), can_save=True)],
    )

    create, edit = transport.posts

    assert create[0] == CREATE_PATH
    assert edit[0] == "/my/connections/edit/nav123/gameserver/tok456"
    assert create[1]["p1-cansave"] == "on"


def test_game_create_existing_connection(game, transport):
    with pytest.raises(ConflictError):
        game.create_connection("server")

    assert transport.posts == []
