"""
Logger utility.

Responsibility boundaries:
- Hands out loggers under the `valuegen` namespace.
- Emits structured event records for engine seeding and registry lookups.

Mutation constraints:
- Never configures handlers beyond a NullHandler; applications own output.
"""

import json
import logging
from typing import Any, Dict

ROOT_LOGGER_NAME = "valuegen"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class AuditLogger:
    """
    Structured event logger used for replay diagnostics.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME, level: int = logging.DEBUG) -> None:
        self._logger = get_logger(name)
        self._level = level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """
        Log a specific event.

        Args:
            event_type: The category of the event.
            data: The event payload. Values that are not JSON serializable
                are rendered with repr().
        """
        if not self._logger.isEnabledFor(self._level):
            return
        payload = json.dumps(data, default=repr, sort_keys=True)
        self._logger.log(self._level, "%s %s", event_type, payload)
