"""Opening the TCP connection to the chat server."""

import asyncio
import socket
from dataclasses import dataclass, field

from chat_client.errors import ConnectError, HostUnreachable
from chat_client.logging import get_logger
from chat_client.protocol import DEFAULT_ENCODING, decode_line, encode_line
from chat_client.shutdown import ShutdownCoordinator

logger = get_logger(__name__)

# reader buffer limit; longer lines are still read whole, in pieces
DEFAULT_LIMIT = 2**16


@dataclass
class Session:
    """One chat conversation bound to one open connection."""

    host: str
    port: int
    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter
    encoding: str = DEFAULT_ENCODING
    shutdown: ShutdownCoordinator = field(default_factory=ShutdownCoordinator)

    @property
    def active(self) -> bool:
        return self.shutdown.active

    async def read_line(self) -> str | None:
        """Read one line from the server, None once the server has closed."""
        raw = await self._read_raw_line()
        if not raw:
            return None
        line = decode_line(raw, self.encoding)
        logger.debug("line_received", line=line)
        return line

    async def _read_raw_line(self) -> bytes:
        # lines may be longer than the reader's buffer limit; collect them in pieces
        chunks = []
        while True:
            try:
                chunks.append(await self.reader.readuntil(b"\n"))
                break
            except asyncio.IncompleteReadError as exc:
                chunks.append(exc.partial)
                break
            except asyncio.LimitOverrunError as exc:
                chunks.append(await self.reader.readexactly(exc.consumed))
        return b"".join(chunks)

    async def send_line(self, text: str) -> None:
        self.writer.write(encode_line(text, self.encoding))
        await self.writer.drain()
        logger.debug("line_sent", line=text)

    async def close(self) -> None:
        if self.writer.is_closing():
            return
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError:
            pass
        logger.debug("session_closed", host=self.host, port=self.port)


async def connect(
    host: str,
    port: int,
    *,
    encoding: str = DEFAULT_ENCODING,
    limit: int = DEFAULT_LIMIT,
) -> Session:
    """Open a connection to ``host:port``. One attempt, no retries.

    Raises:
        HostUnreachable: the host name could not be resolved
        ConnectError: any other failure while connecting
    """
    logger.debug("connecting", host=host, port=port)
    try:
        reader, writer = await asyncio.open_connection(host, port, limit=limit)
    except socket.gaierror as exc:
        logger.info("connect_failed", host=host, port=port, error=str(exc))
        raise HostUnreachable(host) from exc
    except OSError as exc:
        logger.info("connect_failed", host=host, port=port, error=str(exc))
        raise ConnectError(str(exc) or exc.__class__.__name__) from exc
    logger.info("connected", host=host, port=port)
    return Session(host=host, port=port, reader=reader, writer=writer, encoding=encoding)
