"""Current-line redraw primitive.

A ``Terminal`` owns one logical line on a text stream: ``redraw`` erases
whatever it drew last and writes new content in its place, ``commit``
does the same and then moves on to a fresh line.
"""
from __future__ import annotations
import logging
import os
import shutil
import sys
from typing import Optional, TextIO

from taskline.utils.constants import ANSI_RESET
from taskline.utils.string_utils import truncate_visible, visible_width

logger = logging.getLogger(__name__)


def _isatty(stream) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def resolve_stream(name: str) -> TextIO:
    """Map a configured stream name to the live ``sys`` stream."""
    if name == 'stdout':
        return sys.stdout
    return sys.stderr


class Terminal:
    def __init__(self, stream: Optional[TextIO] = None, *, animate: Optional[bool] = None,
                 color: Optional[bool] = None, width: Optional[int] = None):
        self.stream = stream if stream is not None else sys.stderr
        tty = _isatty(self.stream)
        self.animate = tty if animate is None else animate
        if color is None:
            color = tty and os.environ.get("NO_COLOR") is None
        self.color = color
        self._width = width
        self._drawn = 0

    @property
    def width(self) -> int:
        if self._width:
            return self._width
        return shutil.get_terminal_size((80, 24)).columns

    def style(self, text: str, code: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{ANSI_RESET}"

    def _fit(self, text: str) -> str:
        # a wrapped line cannot be erased with a carriage return
        return truncate_visible(text, self.width - 1)

    def _erase(self) -> str:
        if not self._drawn:
            return "\r"
        return "\r" + " " * self._drawn + "\r"

    def _write(self, data: str) -> bool:
        try:
            self.stream.write(data)
            self.stream.flush()
            return True
        except (OSError, ValueError) as e:
            logger.debug("Skipping terminal write: %s", e)
            return False

    def redraw(self, text: str) -> bool:
        """Replace the current line with ``text``."""
        if not self.animate:
            return False
        line = self._fit(text)
        ok = self._write(self._erase() + line)
        if ok:
            self._drawn = visible_width(line)
        return ok

    def commit(self, text: str) -> bool:
        """Write ``text`` as a finished line and start a new current line."""
        if self.animate:
            ok = self._write(self._erase() + self._fit(text) + "\n")
        else:
            ok = self._write(text + "\n")
        self._drawn = 0
        return ok
