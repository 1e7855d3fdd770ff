"""
Logging Configuration
Routes every `furnace.*` module logger to stdout and, optionally, a log file.
"""
import logging
import pathlib as pl
import sys
import typing

PACKAGE_LOGGER: typing.Final[str] = "furnace"
LOG_FORMAT: typing.Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT: typing.Final[str] = "%H:%M:%S"

def _release_handlers(logger: logging.Logger) -> None:
    # A previous setup may hold a log file open.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

def setup_logging(level: int | str = logging.INFO, log_file: str | pl.Path | None = None, propagate: bool = False) -> logging.Logger:
    """
    Configures the package logger and returns it.

    Args:
        level: a logging level, or its name as given on the command line ("debug", "INFO", ...).
        log_file: also write to this file, truncated on every run. Missing parent directories are created.
        propagate: pass records on to the root logger as well (off, so a host application's
            handlers do not print every line twice).
    """
    if isinstance(level, str):
        parsed: int | str = logging.getLevelName(level.upper())
        if not isinstance(parsed, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = parsed

    logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = propagate
    _release_handlers(logger)

    formatter: logging.Formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path: pl.Path = pl.Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging at {logging.getLevelName(level)}" + (f", also to {log_file}" if log_file else ""))
    return logger
