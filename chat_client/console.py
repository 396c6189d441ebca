"""Operator console: prompt, chat transcript and line input."""

import asyncio
import sys
import threading
from typing import TextIO

PROMPT = "You: "
ERASE_WIDTH = 60


class Console:
    """Writes the chat transcript and reads operator lines.

    Lines typed by the operator are read by a daemon thread and handed to
    the event loop through a queue, so a pending console read never blocks
    the network side and never keeps the process alive on exit.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        prompt: str = PROMPT,
        erase_width: int = ERASE_WIDTH,
    ):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.prompt = prompt
        self.erase_width = erase_width
        self._lines: asyncio.Queue | None = None

    def print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def error(self, text: str) -> None:
        self.stderr.write(text + "\n")
        self.stderr.flush()

    def show_prompt(self) -> None:
        self.stdout.write(self.prompt)
        self.stdout.flush()

    def erase_line(self) -> None:
        # overwrite a stale prompt before printing a server message
        self.stdout.write("\r" + " " * self.erase_width + "\r")
        self.stdout.flush()

    async def read_line(self) -> str | None:
        """Return the next operator line without its newline, or None at end of input."""
        if self._lines is None:
            self._lines = asyncio.Queue()
            reader = threading.Thread(
                target=self._read_stdin,
                args=(asyncio.get_running_loop(), self._lines),
                name="console-reader",
                daemon=True,
            )
            reader.start()
        line = await self._lines.get()
        if line is None:
            # stay at end of input for any later caller
            self._lines.put_nowait(None)
        return line

    def _read_stdin(self, loop: asyncio.AbstractEventLoop, lines: asyncio.Queue) -> None:
        while True:
            try:
                raw = self.stdin.readline()
            except (OSError, ValueError):
                raw = ""
            line: str | None = None
            if raw:
                line = raw[:-1] if raw.endswith("\n") else raw
                if line.endswith("\r"):
                    line = line[:-1]
            try:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            except RuntimeError:
                # event loop already closed, nobody is listening
                return
            if line is None:
                return
