"""Client settings, filled in from the command line."""

from dataclasses import dataclass

from chat_client.protocol import DEFAULT_ENCODING

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 12345

# seconds to wait for the server to hang up after we said bye
DEFAULT_LINGER = 5.0


@dataclass
class ClientSettings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    encoding: str = DEFAULT_ENCODING
    linger: float = DEFAULT_LINGER
    log_level: str = "WARNING"
    log_format: str = "console"
