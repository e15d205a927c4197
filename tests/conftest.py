from typing import Mapping

import pytest
from bs4 import BeautifulSoup

from devconsole.errors import RemoteError
from devconsole.game import DeveloperGame
from devconsole.models import GameSession
from devconsole.transport import Transport

NAVIGATION_ID = "nav123"
TOKEN = "tok456"
ROOT_PATH = f"/my/games/overview/{NAVIGATION_ID}/{TOKEN}"
SETTINGS_PATH = f"/my/games/settings/{NAVIGATION_ID}/{TOKEN}"
CREATE_PATH = f"/my/connections/create/{NAVIGATION_ID}/{TOKEN}"

NAVIGATION = f"""
<div class="leftrail">
  <nav>
    <ul>
      <li><a href="{ROOT_PATH}">Overview</a></li>
      <li><a href="{SETTINGS_PATH}">Settings</a></li>
    </ul>
  </nav>
</div>
"""

FRESH_ROOT_PAGE = f"""
<html><body>
<div class="headerprefix"><span>Space Miners</span><span>Overview</span></div>
<div class="gamecreatedinfo">
  <p>Your game has been created.</p>
  <table class="yourgameid"><tr><td>space-miners-abc123</td></tr></table>
</div>
{NAVIGATION}
</body></html>
"""

CONFIGURED_ROOT_PAGE = f"""
<html><body>
<div class="headerprefix"><span>Space Miners</span><span>Overview</span></div>
<table class="gameinfo">
  <tr><td><h3>Game ID:</h3></td><td> space-miners-xyz789 </td></tr>
</table>
{NAVIGATION}
</body></html>
"""

SETTINGS_PAGE = """
<html><body>
<section><h3>Tables</h3><table><tr class="colrow"><td><a>PlayerObjects</a></td></tr></table></section>
<section>
  <h3>Connections</h3>
  <table>
    <tr class="colhead"><th>Name</th></tr>
    <tr class="colrow"><td><a href="#">public</a><div>Public client access</div></td></tr>
    <tr class="colrow"><td><a href="#">server</a><div>Game server</div></td></tr>
  </table>
</section>
</body></html>
"""

PRIVILEGE_FLAGS = [
    "canloadbykeys",
    "cancreate",
    "canloadbyindexes",
    "candelete",
    "creatorhasfullrights",
    "cansave",
]


def privilege_group(prefix: str) -> str:
    inputs = "".join(
        f'<input type="checkbox" id="{prefix}-{flag}" name="{prefix}-{flag}">'
        for flag in PRIVILEGE_FLAGS
    )
    return f"<div>{inputs}</div>"


CREATE_PAGE = f"""
<html><body>
<form>
  <input type="text" name="Identifier">
  <div id="bigdbaccessrights">
    <b>Players</b>
    {privilege_group("p1")}
    <b>Scores</b>
    {privilege_group("s2")}
  </div>
</form>
</body></html>
"""


class FakeTransport(Transport):
    def __init__(self, pages: Mapping[str, str], statuses: Mapping[str, int] | None = None):
        self.pages = dict(pages)
        self.statuses = dict(statuses or {})
        self.requests: list[tuple[str, str, dict[str, str] | None]] = []

    def get(self, path: str) -> str:
        self.requests.append(("GET", path, None))

        try:
            return self.pages[path]
        except KeyError:
            raise RemoteError(f"No page at {path}.", status_code=404, path=path)

    def post(self, path: str, fields: Mapping[str, str]) -> int:
        self.requests.append(("POST", path, dict(fields)))
        return self.statuses.get(path, 200)

    @property
    def posts(self) -> list[tuple[str, dict[str, str]]]:
        return [
            (path, fields)
            for method, path, fields in self.requests
            if method == "POST" and fields is not None
        ]

    def reset(self) -> None:
        self.requests.clear()


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def pages() -> dict[str, str]:
    return {
        ROOT_PATH: CONFIGURED_ROOT_PAGE,
        SETTINGS_PATH: SETTINGS_PAGE,
        CREATE_PATH: CREATE_PAGE,
    }


@pytest.fixture
def transport(pages) -> FakeTransport:
    return FakeTransport(pages)


@pytest.fixture
def session() -> GameSession:
    return GameSession(
        name="Space Miners",
        navigation_id=NAVIGATION_ID,
        session_token=TOKEN,
        game_id="space-miners-xyz789",
    )


@pytest.fixture
def game(transport) -> DeveloperGame:
    game = DeveloperGame(transport, ROOT_PATH)
    transport.reset()
    return game
