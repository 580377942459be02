"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens.
Handles ESC-sequence timing, multi-byte UTF-8 input, and resize wake-ups.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
RESIZE_KEY = "RESIZE"
INVALID_KEY = "INVALID"

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x01": "CTRL_A",
    b"\x03": "CTRL_C",
    b"\x05": "CTRL_E",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "SHIFT_TAB",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"8": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _drain(fd: int) -> None:
    while True:
        ready, _, _ = select.select([fd], [], [], 0)
        if not ready or not os.read(fd, 512):
            return


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_utf8(fd: int, lead: bytes) -> str:
    buf = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        buf += nxt
    try:
        return buf.decode("utf-8")
    except UnicodeDecodeError:
        return INVALID_KEY


def _read_csi(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    if not seq.isdigit():
        return "ESC"
    # ESC [ <digits> (; <modifier>)? ~  or  ESC [ 1 ; <modifier> <final>
    params = seq
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part == b"~":
            return _CSI_TILDE_KEYS.get(params.split(b";")[0], "ESC")
        if part in _CSI_FINAL_KEYS and params.startswith(b"1;"):
            return _CSI_FINAL_KEYS[part]
        if not (part.isdigit() or part == b";"):
            return "ESC"
        params += part
        if len(params) > 16:
            return "ESC"


def read_key(
    fd: int,
    timeout_ms: int | None = None,
    wake_fd: int | None = None,
    pending: list[bytes] | None = None,
) -> str:
    """Block until one key (or a resize wake-up) arrives and return its token.

    Printable input is returned as the character itself. Named keys use
    upper-case tokens such as ``"UP"`` or ``"CTRL_C"``. A byte on ``wake_fd``
    yields ``RESIZE_KEY``. Returns ``""`` on timeout or end of input, and
    ``INVALID_KEY`` for bytes that are not valid UTF-8.

    A byte read past a lone ESC is pushed onto ``pending`` and returned by the
    next call that shares the list. Without a list it is discarded.
    """
    if pending:
        ch = pending.pop(0)
    else:
        watched = [fd] if wake_fd is None else [fd, wake_fd]
        timeout = None if timeout_ms is None else max(0.0, timeout_ms / 1000.0)
        ready, _, _ = select.select(watched, [], [], timeout)
        if not ready:
            return ""
        if wake_fd is not None and wake_fd in ready:
            _drain(wake_fd)
            return RESIZE_KEY

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _decode_utf8(fd, ch)
        return ch.decode("ascii")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # SS3 form used by some terminals in application cursor mode.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_KEYS.get(final, "ESC")
    if pending is not None:
        pending.append(seq)
    return "ESC"
