from typing import Iterable

from loguru import logger

from devconsole.builder import ConnectionBuilder
from devconsole.changelog import NotePublisher
from devconsole.connections import ConnectionsRepository
from devconsole.markup import extract_navigation, resolve_metadata
from devconsole.models import (
    Authentication,
    AuthenticationVariant,
    Connection,
    GameSession,
    TablePrivilegeSpec,
)
from devconsole.transport import Transport


def load_session(transport: Transport, path: str) -> GameSession:
    document = transport.fetch_document(path)
    name, game_id = resolve_metadata(document)
    navigation_id, session_token = extract_navigation(document)
    return GameSession(
        name=name,
        navigation_id=navigation_id,
        session_token=session_token,
        game_id=game_id,
    )


class DeveloperGame:
    """
    A game on the developer console. The root page at ``path`` is read once,
    the session it yields is reused by every later request. Once the console
    session expires the object is stale and a new one must be built.
    """

    def __init__(self, transport: Transport, path: str) -> None:
        self._transport = transport
        self.session = load_session(transport, path)
        self._connections = ConnectionsRepository(transport, self.session)
        self._notes = NotePublisher(transport, self.session)
        logger.debug("Loaded game {name} ({id}).", name=self.name, id=self.game_id)

    @property
    def name(self) -> str:
        return self.session.name

    @property
    def navigation_id(self) -> str:
        return self.session.navigation_id

    @property
    def game_id(self) -> str:
        return self.session.game_id

    @property
    def connections(self) -> list[Connection]:
        return self._connections.list()

    def delete_connection(self, connection: Connection) -> bool:
        return self._connections.delete(connection)

    def create_note(self, content: str) -> bool:
        return self._notes.publish(content)

    def create_connection(
        self,
        identifier: str,
        description: str = "",
        authentication: Authentication | AuthenticationVariant = Authentication.BASIC,
        game_db: str | None = None,
        privileges: Iterable[TablePrivilegeSpec] = (),
        shared_secret: str | None = None,
    ) -> None:
        builder = ConnectionBuilder(self._transport, self.session, self._connections)
        builder.create(identifier, description, authentication, game_db, privileges, shared_secret)
