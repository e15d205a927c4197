import httpx
from loguru import logger

from devconsole.errors import ValidationError
from devconsole.markup import parse_connections
from devconsole.models import Connection, GameSession
from devconsole.transport import Transport

DELETE_CONFIRMATION = "delete connection"


class ConnectionsRepository:
    """
    Connections of a single game. The list lives on the console and is
    fetched again on every call.
    """

    def __init__(self, transport: Transport, session: GameSession) -> None:
        self._transport = transport
        self._session = session

    @property
    def settings_path(self) -> str:
        return f"/my/games/settings/{self._session.navigation_id}/{self._session.session_token}"

    def list(self) -> list[Connection]:
        document = self._transport.fetch_document(self.settings_path)
        connections = parse_connections(document)
        logger.debug("Found {count} connections.", count=len(connections))
        return connections

    def exists(self, name: str) -> bool:
        return any(connection.name == name for connection in self.list())

    def delete(self, connection: Connection) -> bool:
        if not connection.name:
            raise ValidationError("Unable to delete connection, its name cannot be empty.")

        path = (
            f"/my/connections/delete/{self._session.navigation_id}"
            f"/{connection.name}/{self._session.session_token}"
        )
        status_code = self._transport.post_form(path, {"Confirm": DELETE_CONFIRMATION})
        deleted = status_code == httpx.codes.OK

        if deleted:
            logger.info("Deleted connection {name}.", name=connection.name)
        else:
            logger.warning(
                "Console rejected deletion of {name} with status {status}.",
                name=connection.name,
                status=status_code,
            )

        return deleted
