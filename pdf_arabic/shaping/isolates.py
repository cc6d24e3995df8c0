"""Unicode directional isolates.

An isolate pair fixes the base direction of the run it encloses without
letting the surrounding paragraph leak in or the run leak out.
"""

from __future__ import annotations

import re

LRI = "\u2066"  # Left-to-Right Isolate
RLI = "\u2067"  # Right-to-Left Isolate
FSI = "\u2068"  # First Strong Isolate
PDI = "\u2069"  # Pop Directional Isolate

OPENERS = frozenset((LRI, RLI, FSI))

_ISOLATE_RE = re.compile("[\u2066-\u2069]")


def contains_dir_isolate(s: str) -> bool:
    """Return True if ``s`` holds any isolate control character."""
    return bool(_ISOLATE_RE.search(s))


def wrap_ltr(s: str) -> str:
    return f"{LRI}{s}{PDI}"


def wrap_rtl(s: str) -> str:
    return f"{RLI}{s}{PDI}"


def strip_isolates(s: str) -> str:
    """Remove every isolate control character, keeping the enclosed text."""
    return _ISOLATE_RE.sub("", s)


def isolates_balanced(s: str) -> bool:
    """Check that every opener has a matching PDI and no PDI is unmatched.

    Nesting of any depth is accepted.
    """
    depth = 0
    for ch in s:
        if ch in OPENERS:
            depth += 1
        elif ch == PDI:
            if depth == 0:
                return False
            depth -= 1
    return depth == 0
