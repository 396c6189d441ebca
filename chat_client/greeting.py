"""Echo the server's welcome text before the chat starts."""

from chat_client.connection import Session
from chat_client.console import Console
from chat_client.logging import get_logger
from chat_client.protocol import ends_greeting

logger = get_logger(__name__)


async def drain_greeting(session: Session, console: Console) -> None:
    """Print server lines until the "Type 'bye'" line (inclusive) or end of stream.

    Lines after the marker stay in the stream for the inbound relay.
    """
    count = 0
    while True:
        line = await session.read_line()
        if line is None:
            # server never sent the prompt line, carry on
            break
        console.print(line)
        count += 1
        if ends_greeting(line):
            break
    logger.debug("greeting_done", lines=count)
