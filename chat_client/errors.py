"""Exceptions raised and reported by the chat client."""


class ChatClientError(Exception):
    """Base exception for client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HostUnreachable(ChatClientError):
    """The server name could not be resolved."""

    def __init__(self, host: str):
        super().__init__(f"Server not found: {host}")
        self.host = host


class ConnectError(ChatClientError):
    """The TCP connection could not be established."""


class SessionEnded(ChatClientError):
    """The server ended the chat; the process should exit with ``exit_status``."""

    exit_status = 1


class StreamClosed(SessionEnded):
    def __init__(self) -> None:
        super().__init__("Server closed the connection")


class PeerBye(SessionEnded):
    def __init__(self) -> None:
        super().__init__("Server left the chat")


class IOFailure(ChatClientError):
    """Reading from the server failed. Only the inbound relay stops."""


class InterruptedWait(ChatClientError):
    """Waiting for the inbound relay to finish was interrupted."""

    def __init__(self) -> None:
        super().__init__("interrupted")
