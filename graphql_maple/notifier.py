"""Warning side channel for deprecated fields."""

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def warn(self, message: str) -> None: ...


class LogNotifier:
    """Notifier that writes warnings to a stdlib logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def warn(self, message: str) -> None:
        self.log.warning(message)


def deprecation_message(name: str, reason: Optional[str]) -> str:
    """Text of the warning emitted when a deprecated field is invoked."""
    return f"Deprecation warning - function {name} is deprecated for the following reason: {reason or 'none given'}."
