"""Logging facade for solc_bridge.

Library modules obtain loggers through :func:`get_logger` and never install handlers.
Applications that want output call :func:`configure_logging` once.
"""

import logging
import sys
from typing import Optional, Union

_ROOT_LOGGER_NAME = "solc_bridge"
_DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``solc_bridge`` namespace.

    Parameters
    ----------
    name : str
        Component name, e.g. ``"ArtifactStore"``.

    Returns
    -------
    logging.Logger
        The logger named ``solc_bridge.<name>``.
    """
    if name.startswith(_ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = logging.INFO, fmt: str = _DEFAULT_FORMAT) -> None:
    """Attach a stderr handler to the package root logger and set its level.

    Calling this more than once replaces the level and format but never adds a second
    handler.

    Parameters
    ----------
    level : Union[int, str]
        Logging level name or number.
    fmt : str
        Format string for the handler.
    """
    global _handler

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        root.addHandler(_handler)
    _handler.setFormatter(logging.Formatter(fmt))
