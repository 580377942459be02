"""Terminal control helpers for the finder session.

Owns raw-mode lifecycle, alternate-screen switching, and resize notification.
All other modules reach the tty through ``TerminalController``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import signal
import termios
import tty

from .errors import TerminalError
from .input import read_key

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


class TerminalController:
    """Raw-mode handle over a pair of tty file descriptors."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"input is not a terminal: {exc}") from exc
        self._resize_read_fd: int | None = None
        self._resize_write_fd: int | None = None
        self._previous_winch_handler = None
        self._pending_bytes: list[bytes] = []

    @classmethod
    def open_tty(cls) -> TerminalController:
        """Bind to the controlling terminal so stdin/stdout may stay piped."""
        try:
            fd = os.open(TTY_PATH, os.O_RDWR)
        except OSError as exc:
            raise TerminalError(f"cannot open {TTY_PATH}: {exc}") from exc
        try:
            return cls(fd, fd)
        except TerminalError:
            os.close(fd)
            raise

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the hardware cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"cannot enter raw mode: {exc}") from exc
        # Enter alternate screen and hide cursor.
        self.write(b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore the saved tty attributes and the main screen buffer."""
        try:
            # Show cursor and restore the main screen buffer.
            os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, data: str | bytes) -> None:
        payload = data.encode("utf-8") if isinstance(data, str) else data
        try:
            while payload:
                written = os.write(self.stdout_fd, payload)
                payload = payload[written:]
        except OSError as exc:
            raise TerminalError(f"terminal write failed: {exc}") from exc

    def get_size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the terminal."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = shutil.get_terminal_size((80, 24))
        return max(1, size.lines), max(1, size.columns)

    def read_key(self) -> str:
        """Block for the next key token; ``"RESIZE"`` after a window change."""
        try:
            return read_key(self.stdin_fd, wake_fd=self._resize_read_fd, pending=self._pending_bytes)
        except OSError as exc:
            raise TerminalError(f"terminal read failed: {exc}") from exc

    def _on_winch(self, _signum, _frame) -> None:
        if self._resize_write_fd is None:
            return
        with contextlib.suppress(BlockingIOError):
            os.write(self._resize_write_fd, b"\x00")

    def _install_resize_handler(self) -> None:
        try:
            self._resize_read_fd, self._resize_write_fd = os.pipe()
            os.set_blocking(self._resize_write_fd, False)
            self._previous_winch_handler = signal.signal(signal.SIGWINCH, self._on_winch)
        except (ValueError, OSError) as exc:
            raise TerminalError(f"cannot watch for terminal resizes: {exc}") from exc

    def _remove_resize_handler(self) -> None:
        if self._previous_winch_handler is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch_handler)
            self._previous_winch_handler = None
        for fd in (self._resize_read_fd, self._resize_write_fd):
            if fd is not None:
                os.close(fd)
        self._resize_read_fd = None
        self._resize_write_fd = None

    def close(self) -> None:
        if self.stdin_fd == self.stdout_fd and self.stdin_fd > 2:
            os.close(self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket code with TUI enter/exit; restores the tty on every exit path."""
        try:
            self._install_resize_handler()
            try:
                self.enable_tui_mode()
                yield self
            finally:
                self.disable_tui_mode()
        finally:
            self._remove_resize_handler()
            self._pending_bytes.clear()
            logger.debug("Terminal restored")
