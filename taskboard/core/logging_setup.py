import logging
import sys

# Third-party loggers that are only interesting when something breaks
_NOISY_LOGGERS = ("sqlalchemy", "aiosqlite", "asyncpg", "httpx", "multipart")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a single stderr handler

    Safe to call more than once (e.g. one app per test); existing handlers
    are replaced rather than duplicated.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
