from functools import cache

from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DEVCONSOLE_")

    BASE_URL: HttpUrl = HttpUrl("https://playerio.com")
    COOKIES: dict[str, str] = {}
    HTTP_TIMEOUT: int = 20
    GAME_PATH: str = ""
    DEBUG: bool = False


@cache
def get_config() -> Config:
    return Config()
