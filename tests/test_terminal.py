#!/usr/bin/env python
"""Tests for the current-line redraw primitive and width helpers."""
import io
import unittest

from taskline.core.terminal import Terminal
from taskline.utils.constants import ANSI_GREEN_BOLD
from taskline.utils.string_utils import indent_for, strip_ansi, truncate_visible, visible_width


class BrokenStream(io.StringIO):
    def write(self, s):
        raise OSError("stream gone")


class TerminalTests(unittest.TestCase):

    def test_redraw_erases_previous_width(self):
        stream = io.StringIO()
        term = Terminal(stream, animate=True, color=False, width=80)
        term.redraw("hello")
        term.redraw("hi")
        self.assertEqual(stream.getvalue(), "\rhello" + "\r" + " " * 5 + "\rhi")

    def test_commit_ends_line_and_resets(self):
        stream = io.StringIO()
        term = Terminal(stream, animate=True, color=False, width=80)
        term.redraw("hi")
        term.commit("done")
        term.redraw("next")
        self.assertEqual(stream.getvalue(), "\rhi\r  \rdone\n\rnext")

    def test_plain_stream_only_commits(self):
        stream = io.StringIO()
        term = Terminal(stream)
        self.assertFalse(term.animate)
        self.assertFalse(term.color)
        self.assertFalse(term.redraw("spinning"))
        self.assertTrue(term.commit("done"))
        self.assertEqual(stream.getvalue(), "done\n")

    def test_long_lines_are_truncated_to_width(self):
        stream = io.StringIO()
        term = Terminal(stream, animate=True, color=False, width=10)
        term.redraw("abcdefghijklmnop")
        self.assertEqual(stream.getvalue(), "\rabcdefgh…")

    def test_style_respects_color_flag(self):
        term = Terminal(io.StringIO(), animate=True, color=True)
        self.assertEqual(term.style("x", ANSI_GREEN_BOLD), "\x1b[32;1mx\x1b[0m")
        plain = Terminal(io.StringIO(), animate=True, color=False)
        self.assertEqual(plain.style("x", ANSI_GREEN_BOLD), "x")

    def test_write_failure_is_swallowed(self):
        term = Terminal(BrokenStream(), animate=True, color=False, width=80)
        with self.assertLogs("taskline.core.terminal", level="DEBUG"):
            self.assertFalse(term.redraw("x"))
        self.assertFalse(term.commit("y"))


class StringUtilsTests(unittest.TestCase):

    def test_visible_width_ignores_ansi_and_counts_wide(self):
        self.assertEqual(visible_width("\x1b[33;1m-\x1b[0m go"), 4)
        self.assertEqual(visible_width("データ"), 6)
        self.assertEqual(strip_ansi("\x1b[31;1m✘\x1b[0m"), "✘")

    def test_truncate_keeps_escape_codes(self):
        s = "\x1b[32;1m✔\x1b[0m a long message"
        out = truncate_visible(s, 6)
        self.assertEqual(visible_width(out), 6)
        self.assertTrue(out.startswith("\x1b[32;1m✔\x1b[0m"))
        self.assertEqual(truncate_visible("short", 10), "short")

    def test_indent_grows_with_depth(self):
        self.assertEqual(indent_for(0), "")
        self.assertEqual(indent_for(1), "  ┗━ ")
        self.assertEqual(indent_for(2), "       ┗━ ")


if __name__ == "__main__":
    unittest.main()
