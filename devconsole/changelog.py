import httpx
from loguru import logger

from devconsole.errors import ValidationError
from devconsole.models import GameSession
from devconsole.transport import Transport


class NotePublisher:
    def __init__(self, transport: Transport, session: GameSession) -> None:
        self._transport = transport
        self._session = session

    def publish(self, content: str) -> bool:
        if not content:
            raise ValidationError("Unable to create note, content cannot be empty.")

        path = f"/my/changelog/addnote/{self._session.navigation_id}/{self._session.session_token}"
        status_code = self._transport.post_form(path, {"Note": content})

        if status_code != httpx.codes.OK:
            logger.warning("Console rejected the note with status {status}.", status=status_code)
            return False

        logger.info("Published changelog note.")
        return True
