"""Logging configuration for the kvx process."""

from __future__ import annotations

import logging

from textual.logging import TextualHandler

from kvx.shared.app.runtime import RuntimeConfig

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(runtime: RuntimeConfig) -> logging.Logger:
    """Attach handlers to the ``kvx`` logger.

    The terminal belongs to Textual, so nothing is ever written to stderr;
    debug records go to the devtools console and optionally a file.
    """
    logger = logging.getLogger("kvx")
    for handler in list(logger.handlers):
        if getattr(handler, "_kvx_handler", False):
            logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = []
    if runtime.debug_mode:
        handlers.append(TextualHandler())
    if runtime.log_file is not None:
        runtime.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(runtime.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)
    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler._kvx_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if runtime.debug_mode else logging.INFO)
    return logger
