"""String helpers for terminal line layout."""
from __future__ import annotations
import re
import unicodedata

from taskline.utils.constants import ANSI_PATTERN, BRANCH, INDENT_STEP

_ANSI_RE = re.compile(ANSI_PATTERN)

def strip_ansi(s: str) -> str:
    """Remove ANSI escape sequences from a string."""
    return _ANSI_RE.sub('', s) if s else s

def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ('W', 'F') else 1

def visible_width(s: str) -> int:
    """Number of terminal columns a string occupies, ignoring ANSI codes."""
    return sum(char_width(ch) for ch in strip_ansi(s or ''))

def truncate_visible(s: str, max_width: int, suffix: str = '…') -> str:
    """Truncate to ``max_width`` visible columns, keeping escape sequences intact."""
    if max_width <= 0:
        return ''
    if visible_width(s) <= max_width:
        return s
    budget = max_width - visible_width(suffix)
    out = []
    used = 0
    pos = 0
    while pos < len(s):
        m = _ANSI_RE.match(s, pos)
        if m:
            out.append(m.group(0))
            pos = m.end()
            continue
        w = char_width(s[pos])
        if used + w > budget:
            break
        out.append(s[pos])
        used += w
        pos += 1
    # keep trailing resets so colour never bleeds past the cut
    out.extend(_ANSI_RE.findall(s[pos:]))
    return ''.join(out) + suffix

def indent_for(depth: int) -> str:
    """Prefix drawn before the glyph of a task at ``depth``."""
    if depth <= 0:
        return ''
    return ' ' * ((depth - 1) * INDENT_STEP + 2) + BRANCH
