"""
Context-aware logging for request signing

The signing adapter reports every stage of a request through a ContextLogger.
The context passed along is the PreparedRequest being processed, so an
implementation can pull trace identifiers out of its headers.
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable


DISCARD_LOGGER_NAME = "aws_signing_client.discard"


@runtime_checkable
class ContextLogger(Protocol):
    """Protocol for context-enabled logging"""

    def printf(self, ctx: Any, msg: str, *args: Any) -> None:
        """
        Log a %-style formatted message.

        Args:
            ctx: Context of the call, usually the request being signed
            msg: Message with %-style placeholders
            *args: Values for the placeholders
        """
        ...


class LoggingContextLogger:
    """
    ContextLogger that forwards to a standard library logger.

    The context is attached to each record as the ``signing_context``
    attribute so filters and formatters can use it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("aws_signing_client.adapter")
        self.level = level

    def printf(self, ctx: Any, msg: str, *args: Any) -> None:
        self.logger.log(self.level, msg, *args, extra={"signing_context": ctx})


class DefaultLogger(LoggingContextLogger):
    """
    ContextLogger that discards everything written to it.

    Uses a logger that is not registered with the logging manager, so
    configuring the root logger has no effect on it.
    """

    def __init__(self):
        discard = logging.Logger(DISCARD_LOGGER_NAME)
        discard.addHandler(logging.NullHandler())
        discard.propagate = False
        super().__init__(discard)
