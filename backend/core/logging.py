from logging import basicConfig, getLogger

logger = getLogger("lark-options")


def init_logging(level: str) -> None:
    basicConfig(level=level.upper())
    logger.setLevel(level.upper())
