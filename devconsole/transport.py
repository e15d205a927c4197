from abc import ABC, abstractmethod
from types import TracebackType
from typing import Mapping
from urllib.parse import parse_qsl

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from devconsole.errors import RemoteError, RequestFailed

REDACTED_FIELDS = frozenset({"Basic256AuthSharedSecret"})


class Transport(ABC):
    """
    An already authenticated channel to the developer console. Cookies and
    the login flow are managed by whoever builds the transport.
    """

    @abstractmethod
    def get(self, path: str) -> str:
        pass

    @abstractmethod
    def post(self, path: str, fields: Mapping[str, str]) -> int:
        pass

    def fetch_document(self, path: str) -> BeautifulSoup:
        return BeautifulSoup(self.get(path), "html.parser")

    def post_form(self, path: str, fields: Mapping[str, str]) -> int:
        status_code = self.post(path, fields)
        logger.debug("Form posted to {path}, status {status}.", path=path, status=status_code)
        return status_code


class HttpTransport(Transport):
    def __init__(
        self,
        base_url: str,
        cookies: Mapping[str, str] | None = None,
        timeout: int = 20,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._session = httpx.Client(
            base_url=base_url,
            cookies=dict(cookies or {}),
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        self._session.event_hooks = {"request": [log_request]}

    def get(self, path: str) -> str:
        response = self._request("GET", path)

        if not response.is_success:
            raise RemoteError(
                f"Console returned {response.status_code} for {path}.",
                status_code=response.status_code,
                path=path,
            )
        return response.text

    def post(self, path: str, fields: Mapping[str, str]) -> int:
        response = self._request("POST", path, data=dict(fields))
        return response.status_code

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _request(
        self, method: str, path: str, data: dict[str, str] | None = None
    ) -> httpx.Response:
        try:
            return self._session.request(method, path, data=data)
        except httpx.RequestError as exc:
            logger.warning("HTTP request error occured: {exc}", exc=repr(exc))
            raise RequestFailed(f"Unable to reach the console: {exc}.") from exc


def redact(fields: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "[REDACTED]" if key in REDACTED_FIELDS else value for key, value in fields.items()
    }


def log_request(request: httpx.Request) -> None:
    content = None

    if request.headers.get("Content-Type") == "application/x-www-form-urlencoded":
        content = redact(dict(parse_qsl(request.content.decode(), keep_blank_values=True)))

    logger.debug(
        "Make {method} request to {path} with content {content}.",
        method=request.method,
        path=request.url.path,
        content=content,
    )
