"""The two directional loops of a chat session.

relay_inbound runs as a background task: server -> console.
relay_outbound runs in the foreground: console -> server.

Both stop once the session's liveness flag is cleared.
"""

from chat_client.connection import Session
from chat_client.console import Console
from chat_client.errors import IOFailure, PeerBye, SessionEnded, StreamClosed
from chat_client.logging import get_logger
from chat_client.protocol import BYE, is_bye

logger = get_logger(__name__)


def _server_ended(session: Session, console: Console, reason: SessionEnded) -> None:
    # after a local bye the server closing on us is expected, not an error
    if session.shutdown.terminate(reason):
        console.print(f"\n[{reason.message}]")


async def relay_inbound(session: Session, console: Console) -> None:
    logger.debug("relay_started", relay="inbound")
    try:
        while session.active:
            line = await session.read_line()

            if line is None:
                _server_ended(session, console, StreamClosed())
                return

            if is_bye(line):
                _server_ended(session, console, PeerBye())
                return

            console.erase_line()
            console.print(f"Server: {line}")
            console.show_prompt()
    except OSError as exc:
        if session.shutdown.stop(IOFailure(str(exc) or exc.__class__.__name__)):
            console.print("\n[Connection lost]")
        logger.info("relay_failed", relay="inbound", error=str(exc))
    finally:
        logger.debug("relay_stopped", relay="inbound")


async def relay_outbound(session: Session, console: Console) -> None:
    """Send operator lines until "bye", end of input, or the session stops.

    Write failures propagate to the caller.
    """
    logger.debug("relay_started", relay="outbound")
    console.show_prompt()
    while session.active:
        line = await console.read_line()
        if line is None:
            break

        if is_bye(line):
            await session.send_line(BYE)
            console.print("[You left the chat]")
            session.shutdown.stop()
            break

        await session.send_line(line)
        console.show_prompt()
    logger.debug("relay_stopped", relay="outbound")
