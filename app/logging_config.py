"""Logging configuration."""

import json
import logging
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("org_id", "user_id", "slug"):
            if hasattr(record, key):
                payload[key] = str(getattr(record, key))
        if record.exc_info:
            payload["error"] = str(record.exc_info[1])
        return json.dumps(payload)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str, default="INFO"
        Log level name.
    json_format : bool, default=False
        Emit JSON lines instead of plain text.

    Returns
    -------
    None
        Installs a stream handler on the root logger.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root.handlers):
        if getattr(handler, "_activation_tracker", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
    handler._activation_tracker = True  # type: ignore[attr-defined]
    root.addHandler(handler)
