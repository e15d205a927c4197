from enum import auto
from typing import Iterable

import httpx
from loguru import logger

from devconsole.connections import ConnectionsRepository
from devconsole.errors import ConflictError, RemoteError, ValidationError
from devconsole.markup import parse_field_mappings
from devconsole.models import (
    DEFAULT_GAME_DB,
    Authentication,
    AuthenticationVariant,
    ConnectionRequest,
    GameSession,
    TablePrivilegeSpec,
)
from devconsole.payload import build_connection_payload
from devconsole.shared.compat import StrEnum
from devconsole.transport import Transport


class BuilderState(StrEnum):
    IDLE = auto()
    VALIDATED = auto()
    FORM_FETCHED = auto()
    PRIVILEGES_MAPPED = auto()
    CREATED = auto()
    EDITED = auto()
    FAILED = auto()


def validate_request(
    identifier: str,
    description: str = "",
    authentication: Authentication | AuthenticationVariant = Authentication.BASIC,
    game_db: str | None = None,
    privileges: Iterable[TablePrivilegeSpec] = (),
    shared_secret: str | None = None,
) -> ConnectionRequest:
    if not identifier:
        raise ValidationError("Unable to create connection, identifier cannot be empty.")

    if any(char.isupper() or char.isdigit() for char in identifier):
        raise ValidationError(
            f"Unable to create connection {identifier!r}, identifier must be lowercase"
            " and cannot contain digits."
        )

    if isinstance(authentication, Authentication):
        authentication = authentication.to_variant(shared_secret)

    return ConnectionRequest(
        identifier=identifier,
        description=description,
        authentication=authentication,
        game_db=game_db or DEFAULT_GAME_DB,
        privileges=tuple(privileges),
    )


class ConnectionBuilder:
    """
    Creates a connection and grants it table privileges.

    The console needs two submissions: the create form registers the
    connection and the edit form attaches the privileges. If the edit fails
    the connection is left on the console without privileges, nothing is
    rolled back.
    """

    def __init__(
        self,
        transport: Transport,
        session: GameSession,
        connections: ConnectionsRepository,
    ) -> None:
        self._transport = transport
        self._session = session
        self._connections = connections
        self.state = BuilderState.IDLE

    @property
    def create_path(self) -> str:
        return f"/my/connections/create/{self._session.navigation_id}/{self._session.session_token}"

    def edit_path(self, identifier: str) -> str:
        return (
            f"/my/connections/edit/{self._session.navigation_id}"
            f"/{identifier}/{self._session.session_token}"
        )

    def create(
        self,
        identifier: str,
        description: str = "",
        authentication: Authentication | AuthenticationVariant = Authentication.BASIC,
        game_db: str | None = None,
        privileges: Iterable[TablePrivilegeSpec] = (),
        shared_secret: str | None = None,
    ) -> None:
        self.state = BuilderState.IDLE

        try:
            self._run(
                validate_request(
                    identifier, description, authentication, game_db, privileges, shared_secret
                )
            )
        except Exception:
            self._move(BuilderState.FAILED)
            raise

    def _run(self, request: ConnectionRequest) -> None:
        self._move(BuilderState.VALIDATED)

        if self._connections.exists(request.identifier):
            raise ConflictError(
                f"Unable to create connection {request.identifier!r},"
                " a connection already exists with that name."
            )

        document = self._transport.fetch_document(self.create_path)
        self._move(BuilderState.FORM_FETCHED)

        labels = {privilege.table_name for privilege in request.privileges}
        mappings = parse_field_mappings(document, labels)
        self._move(BuilderState.PRIVILEGES_MAPPED)

        unmapped = labels - {mapping.label for mapping in mappings}

        if unmapped:
            logger.warning(
                "Tables {tables} are not on the connection form, their privileges are ignored.",
                tables=sorted(unmapped),
            )

        payload = build_connection_payload(request, mappings)

        self._submit(self.create_path, payload, "create")
        self._move(BuilderState.CREATED)

        self._submit(self.edit_path(request.identifier), payload, "edit")
        self._move(BuilderState.EDITED)

        logger.info("Created connection {name}.", name=request.identifier)

    def _submit(self, path: str, payload: dict[str, str], step: str) -> None:
        status_code = self._transport.post_form(path, payload)

        if status_code == httpx.codes.OK:
            return

        if step == "edit":
            message = (
                f"Connection {payload['Identifier']!r} was created but its privileges were not"
                f" applied, the console answered {status_code}."
            )
        else:
            message = f"Console rejected connection {payload['Identifier']!r} with {status_code}."

        raise RemoteError(message, status_code=status_code, path=path)

    def _move(self, state: BuilderState) -> None:
        logger.debug("Connection builder: {old} -> {new}.", old=self.state, new=state)
        self.state = state
