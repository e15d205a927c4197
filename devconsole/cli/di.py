import inject

from devconsole.config import Config
from devconsole.errors import ValidationError
from devconsole.game import DeveloperGame
from devconsole.transport import HttpTransport, Transport


def make_transport(config: Config) -> Transport:
    return HttpTransport(str(config.BASE_URL), config.COOKIES, config.HTTP_TIMEOUT)


def configure_injection(config: Config) -> None:
    def configure_(binder: inject.Binder) -> None:
        binder.bind(Config, config)
        binder.bind(Transport, make_transport(config))

    inject.configure(configure_, clear=True)


def get_game() -> DeveloperGame:
    config: Config = inject.instance(Config)

    if not config.GAME_PATH:
        raise ValidationError("Game page path is not set, pass --game or DEVCONSOLE_GAME_PATH.")

    return DeveloperGame(inject.instance(Transport), config.GAME_PATH)
