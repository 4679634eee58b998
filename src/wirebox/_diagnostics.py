from __future__ import annotations

import logging


logger = logging.getLogger("wirebox")


class Diagnostics:
    """Collects the warnings raised while resolving one target.

    Messages are always kept in `messages`; they are only written to the
    `wirebox` logger when not in quiet mode.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet
        self.messages: list[str] = []

    def warning(self, msg: str) -> None:
        self.messages.append(msg)
        if not self.quiet:
            logger.warning(msg)

    def error(self, msg: str) -> None:
        self.messages.append(msg)
        if not self.quiet:
            logger.error(msg)
