# bookshelf/logging_config.py
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

FORMAT = (
    "%(asctime)s | %(levelname)-7s | %(name)s | "
    "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
)
formatter = logging.Formatter(FORMAT)


def _console_handler(level=logging.INFO) -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: Path, level=logging.INFO) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    for h in logger.handlers:
        if type(h) is type(handler) and getattr(h, "baseFilename", None) == getattr(
            handler, "baseFilename", None
        ):
            return
    logger.addHandler(handler)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Attach console (and optionally rotating file) handlers.

    Safe to call more than once: a handler of the same kind and target is
    never attached twice to the same logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers: list = [_console_handler(numeric_level)]
    if log_file:
        handlers.append(_file_handler(Path(log_file), numeric_level))

    # --- Application ---
    app_parent = logging.getLogger("bookshelf")
    app_parent.setLevel(numeric_level)
    for handler in handlers:
        _attach(app_parent, handler)
    app_parent.propagate = False

    # --- Uvicorn ---
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        ul = logging.getLogger(name)
        for handler in handlers:
            _attach(ul, handler)
        ul.propagate = False
