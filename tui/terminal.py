"""ANSI terminal boundary: raw mode, size, cursor moves, writes, key reads.

POSIX only (``termios``/``tty``). Output is buffered until ``flush``.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, NamedTuple

ESC = "\x1b"

logger = logging.getLogger(__name__)

# Time to wait for the rest of an escape sequence after a lone ESC byte.
ESCAPE_TIMEOUT_S = 0.03
MAX_ESCAPE_LEN = 16

_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}


class TerminalError(RuntimeError):
    """The terminal cannot be used (size, raw mode, read or write failed)."""


class KeyEvent(NamedTuple):
    kind: str  # "char", "named" or "other"
    value: str


def decode_key(data: bytes) -> KeyEvent:
    """Classify the bytes of one key press."""

    if data == b"\x1b":
        return KeyEvent("named", "escape")
    if data == b"\x03":
        return KeyEvent("named", "interrupt")
    if data in (b"\r", b"\n"):
        return KeyEvent("named", "enter")
    if len(data) == 3 and data[:2] in (b"\x1b[", b"\x1bO"):
        name = _ARROWS.get(chr(data[2]))
        if name is not None:
            return KeyEvent("named", name)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return KeyEvent("other", data.hex())
    if len(text) == 1 and text.isprintable():
        return KeyEvent("char", text)
    return KeyEvent("other", text)


def _utf8_tail(lead: int) -> int:
    if lead >= 0xF0:
        return 3
    if lead >= 0xE0:
        return 2
    if lead >= 0xC0:
        return 1
    return 0


class Terminal:
    def __init__(
        self, *, stdin_fd: int | None = None, stdout: BinaryIO | None = None
    ):
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else int(stdin_fd)
        self.stdout = sys.stdout.buffer if stdout is None else stdout
        self._pending: list[str] = []
        self._unread = b""

    @contextmanager
    def session(self) -> Iterator[Terminal]:
        """Raw mode plus alternate screen; both undone on every exit path.

        When the session ends with an exception, a failure to write the
        restore sequence is logged and the original exception propagates.
        """

        fd = self.stdin_fd
        try:
            saved = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot enable raw mode: {exc}") from exc

        try:
            self.write(ESC + "[?1049h" + ESC + "[?25l")
            self.flush()
            yield self
        except BaseException:
            self._restore(fd, saved, propagating=True)
            raise
        else:
            self._restore(fd, saved, propagating=False)

    def _restore(self, fd: int, saved: list, *, propagating: bool) -> None:
        self._pending.clear()
        try:
            self.write(ESC + "[?25h" + ESC + "[?1049l")
            self.flush()
        except TerminalError as exc:
            if not propagating:
                self._restore_mode(fd, saved, propagating=False)
                raise
            logger.warning("could not restore screen: %s", exc)
        self._restore_mode(fd, saved, propagating=propagating)

    def _restore_mode(self, fd: int, saved: list, *, propagating: bool) -> None:
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        except (termios.error, OSError) as exc:
            if propagating:
                logger.warning("could not disable raw mode: %s", exc)
                return
            raise TerminalError(f"cannot disable raw mode: {exc}") from exc

    def size(self) -> tuple[int, int]:
        """Current (columns, rows); there is no fallback size."""

        try:
            size = os.get_terminal_size(self.stdout.fileno())
        except (OSError, ValueError) as exc:
            raise TerminalError(f"terminal size unavailable: {exc}") from exc
        if size.columns <= 0 or size.lines <= 0:
            raise TerminalError(
                f"terminal size unavailable: {size.columns}x{size.lines}"
            )
        return size.columns, size.lines

    def move_to(self, col: int, row: int) -> None:
        self._pending.append(f"{ESC}[{int(row) + 1};{int(col) + 1}H")

    def write(self, text: str) -> None:
        self._pending.append(text)

    def clear(self) -> None:
        self._pending.append(ESC + "[2J")

    def flush(self) -> None:
        data = "".join(self._pending).encode("utf-8")
        self._pending.clear()
        try:
            self.stdout.write(data)
            self.stdout.flush()
        except (OSError, ValueError) as exc:
            raise TerminalError(f"write failed: {exc}") from exc

    def _read(self, n: int) -> bytes:
        if self._unread:
            data, self._unread = self._unread[:n], self._unread[n:]
            return data
        try:
            data = os.read(self.stdin_fd, n)
        except OSError as exc:
            raise TerminalError(f"read failed: {exc}") from exc
        if not data:
            raise TerminalError("input closed")
        return data

    def _ready(self, timeout: float) -> bool:
        if self._unread:
            return True
        try:
            readable, _, _ = select.select([self.stdin_fd], [], [], timeout)
        except (OSError, ValueError) as exc:
            raise TerminalError(f"read failed: {exc}") from exc
        return bool(readable)

    def _read_escape(self) -> bytes:
        # Stops at the final byte of one CSI/SS3 sequence so queued keys stay
        # unread.
        data = b"\x1b"
        if not self._ready(ESCAPE_TIMEOUT_S):
            return data
        nxt = self._read(1)
        if nxt == b"\x1b":
            self._unread = nxt + self._unread
            return data
        data += nxt
        if nxt not in (b"[", b"O"):
            return data
        while len(data) < MAX_ESCAPE_LEN and self._ready(ESCAPE_TIMEOUT_S):
            b = self._read(1)
            data += b
            if 0x40 <= b[0] <= 0x7E:
                break
        return data

    def read_key(self) -> KeyEvent:
        """Block until one key arrives; bytes of later keys stay unread."""

        data = self._read(1)
        if data == b"\x1b":
            data = self._read_escape()
        else:
            tail = _utf8_tail(data[0])
            while tail > 0:
                more = self._read(tail)
                data += more
                tail -= len(more)
        return decode_key(data)
