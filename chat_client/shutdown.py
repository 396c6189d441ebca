"""Liveness flag and exit status shared by the two relays of a session."""

import asyncio

from chat_client.errors import ChatClientError, SessionEnded
from chat_client.logging import get_logger

logger = get_logger(__name__)


class ShutdownCoordinator:
    """Tracks whether a session is still live and how it should end.

    ``active`` starts true and can only be cleared. Both relays run on the
    same event loop, so a plain attribute is visible to each of them on
    their next check.

    A relay that needs the whole client to exit calls :meth:`terminate`,
    which records the exit status and cancels the foreground task attached
    with :meth:`attach`. The entry point turns the status into
    ``SystemExit`` once the streams are closed.
    """

    def __init__(self) -> None:
        self._active = True
        self._foreground: asyncio.Task | None = None
        self.exit_status: int | None = None
        self.reason: ChatClientError | None = None

    @property
    def active(self) -> bool:
        return self._active

    def attach(self, task: asyncio.Task) -> None:
        self._foreground = task

    def stop(self, reason: ChatClientError | None = None) -> bool:
        """Clear the flag. Returns True only for the call that cleared it.

        Only that call records its reason; a plain stop (local bye) has none.
        """
        if not self._active:
            return False
        self._active = False
        self.reason = reason
        logger.debug("session_stopping", reason=reason.message if reason else None)
        return True

    def terminate(self, reason: SessionEnded) -> bool:
        """Stop the session and ask the process to exit with ``reason.exit_status``.

        Does nothing once the session has already stopped, so a server
        hang-up after a local bye keeps the exit graceful. Returns True only
        for the call that stopped the session.
        """
        if not self.stop(reason):
            return False
        self.exit_status = reason.exit_status
        logger.debug("session_terminating", exit_status=reason.exit_status)
        if self._foreground is not None and not self._foreground.done():
            self._foreground.cancel()
        return True
