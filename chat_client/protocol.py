"""Newline-delimited text protocol shared with the chat server."""

BYE = "bye"

# a greeting line containing this ends the greeting phase
GREETING_END_MARKER = "Type 'bye'"

DEFAULT_ENCODING = "utf-8"


def is_bye(line: str) -> bool:
    return line.strip().lower() == BYE


def ends_greeting(line: str) -> bool:
    return GREETING_END_MARKER in line


def encode_line(text: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    return (text + "\n").encode(encoding)


def decode_line(raw: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode one line read from the wire, dropping its terminator."""
    text = raw.decode(encoding, errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text
