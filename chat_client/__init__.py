"""Line-oriented TCP chat client."""

from chat_client.client import run, run_client
from chat_client.connection import Session, connect
from chat_client.console import Console
from chat_client.errors import (
    ChatClientError,
    ConnectError,
    HostUnreachable,
    InterruptedWait,
    IOFailure,
    PeerBye,
    SessionEnded,
    StreamClosed,
)
from chat_client.settings import ClientSettings

__all__ = [
    "ChatClientError",
    "ClientSettings",
    "Console",
    "ConnectError",
    "HostUnreachable",
    "IOFailure",
    "InterruptedWait",
    "PeerBye",
    "Session",
    "SessionEnded",
    "StreamClosed",
    "connect",
    "run",
    "run_client",
]
