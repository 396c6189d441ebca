"""Chat session entry point.

Usage:
    from chat_client import run_client

    asyncio.run(run_client("localhost", 12345))

run_client connects, echoes the server greeting, then relays lines both ways
until one side says "bye". It reports failures on the console instead of
raising them. When the server ends the chat it raises SystemExit(1) after
closing the connection.
"""

import asyncio

from chat_client.connection import Session, connect
from chat_client.console import Console
from chat_client.errors import ConnectError, HostUnreachable, InterruptedWait
from chat_client.greeting import drain_greeting
from chat_client.logging import get_logger
from chat_client.protocol import DEFAULT_ENCODING
from chat_client.relays import relay_inbound, relay_outbound
from chat_client.settings import DEFAULT_LINGER, ClientSettings

logger = get_logger(__name__)


async def _join(session: Session, inbound: asyncio.Task, linger: float) -> None:
    """Wait until the inbound relay has finished writing to the console."""
    if session.active:
        # console input ended; the server decides when the chat is over
        await asyncio.wait({inbound})
        return

    done, _ = await asyncio.wait({inbound}, timeout=linger)
    if not done:
        logger.debug("linger_expired", seconds=linger)
        # closing our side feeds EOF to the pending read
        await session.close()
        await asyncio.wait({inbound})


async def _chat(session: Session, console: Console, linger: float) -> None:
    inbound = asyncio.create_task(relay_inbound(session, console), name="inbound-relay")
    outbound = asyncio.create_task(relay_outbound(session, console), name="outbound-relay")
    session.shutdown.attach(outbound)
    try:
        await asyncio.wait({outbound})
        if not outbound.cancelled():
            # re-raise a failed write
            outbound.result()
        await _join(session, inbound, linger)
    finally:
        for task in (inbound, outbound):
            if not task.done():
                task.cancel()
        await asyncio.gather(inbound, outbound, return_exceptions=True)


async def run_client(
    host: str,
    port: int,
    *,
    console: Console | None = None,
    encoding: str = DEFAULT_ENCODING,
    linger: float = DEFAULT_LINGER,
) -> None:
    console = console if console is not None else Console()

    try:
        session = await connect(host, port, encoding=encoding)
    except HostUnreachable as exc:
        console.error(exc.message)
        console.print("Client stopped.")
        return
    except ConnectError as exc:
        console.error(f"Connection error: {exc.message}")
        console.print("Client stopped.")
        return

    try:
        console.print(f"Connected to {host}:{port}")
        await drain_greeting(session, console)
        await _chat(session, console, linger)
    except OSError as exc:
        console.error(f"Connection error: {exc}")
    except asyncio.CancelledError:
        console.error(f"Connection error: {InterruptedWait().message}")
        raise
    finally:
        await session.close()

    reason = session.shutdown.reason
    if reason is not None:
        logger.info("session_ended", reason=reason.message, exit_status=session.shutdown.exit_status)
    if session.shutdown.exit_status is not None:
        raise SystemExit(session.shutdown.exit_status)
    console.print("Client stopped.")


def run(settings: ClientSettings, console: Console | None = None) -> int:
    """Run one chat session to completion and return the process exit status."""
    asyncio.run(
        run_client(
            settings.host,
            settings.port,
            console=console,
            encoding=settings.encoding,
            linger=settings.linger,
        )
    )
    return 0
