from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

LOGGER_NAME = "projinfo_core"
LOG_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"

_HANDLER: Optional[logging.Handler] = None


def configure_logging(log_path: Optional[str] = None, verbose: bool = False) -> Dict[str, str]:
    global _HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()

    if log_path:
        path = Path(log_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        target = str(path)
    else:
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
        target = "stderr"
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _HANDLER = handler

    return {
        "log_path": target,
        "format": "kv",
        "logger_name": LOGGER_NAME,
    }
