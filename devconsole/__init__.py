import os
from functools import cache
from importlib import metadata

from loguru import logger
from xdg_base_dirs import xdg_data_home

PACKAGE_NAME = "devconsole"


@cache
def get_version() -> str:
    return os.getenv("DEVCONSOLE_VERSION", metadata.version("devconsole"))


APP_LABEL = "devconsole"
data_home = xdg_data_home() / APP_LABEL

logger.disable(PACKAGE_NAME)

try:
    __version__ = get_version()
except metadata.PackageNotFoundError:
    # Not installed, running from a source checkout.
    __version__ = "0.0.0"
