import loguru

from devconsole import PACKAGE_NAME


def configure_logger(sink: str, debug: bool) -> None:
    if debug:
        log_size = "10 MB"
        level = "DEBUG"
    else:
        log_size = "5 MB"
        level = "INFO"

    loguru.logger.enable(PACKAGE_NAME)
    loguru.logger.remove()
    loguru.logger.add(sink, rotation=log_size, level=level)
