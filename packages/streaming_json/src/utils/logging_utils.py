import logging
import os
from typing import Optional, Union

PACKAGE_LOGGER = "streaming_json"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[str, int, None] = None,
    stream=None,
) -> logging.Logger:
    """Attach a handler to the ``streaming_json`` logger namespace.

    Only this package's records (decode-failure warnings from sessions,
    per-chunk debug lines) are routed; the root logger is left alone.
    Calling it again updates the level and reuses the installed handler.

    Parameters
    ----------
    level: str | int | None
        Desired log level (e.g., "DEBUG", "INFO"). If ``None``, the
        ``STREAMING_JSON_LOG_LEVEL`` environment variable is consulted,
        then ``LOG_LEVEL``, then ``WARNING``.
    stream:
        Stream for the handler; ``sys.stderr`` when omitted.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    if level is None:
        level = os.getenv("STREAMING_JSON_LOG_LEVEL") or os.getenv("LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    handler: Optional[logging.Handler] = next(
        (h for h in logger.handlers if getattr(h, "_streaming_json", False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler._streaming_json = True
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    return logger
