"""Idempotent, anchor-based line insertion for generated registry files.

Registry files (``src/routes.ts``) are plain TypeScript, so new entries are
injected by locating an *anchor* in the text and inserting one line next to
it.  Every call is append-if-absent: when the exact insertion text already
appears anywhere in the content, the content is returned unchanged.

Three placement policies are supported:

* ``AFTER_LINE``    -- the match ends with a newline; the insertion becomes the
  next line (e.g. directly below the last import of the leading import block).
* ``AFTER_MARKER``  -- the insertion goes on a new, indented line directly
  below a marker comment.
* ``BEFORE_RETURN`` -- the pattern captures a ``return`` line in the named
  group ``ret``; the insertion goes on its own indented line just above it.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from crudgen.errors import AnchorNotFoundError


class Placement(str, Enum):
    AFTER_LINE = "after_line"
    AFTER_MARKER = "after_marker"
    BEFORE_RETURN = "before_return"


@dataclass(frozen=True)
class Anchor:
    """A located insertion point inside a text file."""

    name: str
    pattern: re.Pattern[str]
    placement: Placement
    indent: str = "  "

    @classmethod
    def literal(
        cls,
        marker: str,
        placement: Placement = Placement.AFTER_MARKER,
        indent: str = "  ",
    ) -> "Anchor":
        """Build an anchor that matches *marker* verbatim."""
        return cls(marker, re.compile(re.escape(marker)), placement, indent)

    @classmethod
    def regex(
        cls,
        name: str,
        pattern: str,
        placement: Placement,
        indent: str = "  ",
        flags: int = 0,
    ) -> "Anchor":
        """Build an anchor from a regular expression."""
        compiled = re.compile(pattern, flags)
        if placement is Placement.BEFORE_RETURN and "ret" not in compiled.groupindex:
            raise ValueError(f"BEFORE_RETURN anchor {name!r} needs a named group 'ret'")
        return cls(name, compiled, placement, indent)


# Last line of the leading import block: an import line not followed by another.
IMPORT_BLOCK_END = Anchor.regex(
    "last import line",
    r"import.*\n(?!import)",
    Placement.AFTER_LINE,
)


def find_anchor(content: str, anchors: Sequence[Anchor]) -> tuple[Anchor, re.Match[str]] | None:
    """Return the first anchor (in priority order) that matches *content*."""
    for anchor in anchors:
        match = anchor.pattern.search(content)
        if match is not None:
            return anchor, match
    return None


def insert_at(content: str, anchor: Anchor, match: re.Match[str], insertion: str) -> str:
    """Insert *insertion* at the position *anchor* dictates for *match*."""
    if anchor.placement is Placement.AFTER_LINE:
        pos = match.end()
        return f"{content[:pos]}{insertion}\n{content[pos:]}"

    if anchor.placement is Placement.AFTER_MARKER:
        pos = match.end()
        return f"{content[:pos]}\n{anchor.indent}{insertion}{content[pos:]}"

    pos = match.start("ret")
    line_start = content.rfind("\n", 0, pos) + 1
    return f"{content[:line_start]}{anchor.indent}{insertion}\n{content[line_start:]}"


def patch(
    content: str,
    anchor: Anchor | str | Sequence[Anchor],
    insertion: str,
    *,
    strict: bool = False,
    path: Path | None = None,
) -> str:
    """Insert *insertion* once, next to the first matching anchor.

    Args:
        content: Current file content.
        anchor: An :class:`Anchor`, a literal marker string, or a sequence of
            anchors tried in order.
        insertion: The exact line to add (without indentation or newline).
        strict: Raise :class:`AnchorNotFoundError` when no anchor matches.
            When ``False`` the content is returned unmodified.
        path: File the content came from, used in error messages only.

    Returns:
        The patched content (or *content* itself when nothing changed).
    """
    if insertion in content:
        return content

    if isinstance(anchor, str):
        anchors: Sequence[Anchor] = [Anchor.literal(anchor)]
    elif isinstance(anchor, Anchor):
        anchors = [anchor]
    else:
        anchors = list(anchor)

    found = find_anchor(content, anchors)
    if found is None:
        if strict:
            raise AnchorNotFoundError(" | ".join(a.name for a in anchors), path)
        return content

    return insert_at(content, found[0], found[1], insertion)
