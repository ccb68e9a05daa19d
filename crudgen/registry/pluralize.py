"""English pluralization for storage collection names.

Module names are singular nouns (``user``, ``category``); MongoDB collections
are named after the plural (``users``, ``categories``).  The rules below are
evaluated in order and the first match wins, so the irregular table always
takes precedence over the suffix rules.

Examples::

    pluralize("person")  -> "people"
    pluralize("status")  -> "statuses"
    pluralize("city")    -> "cities"
    pluralize("knife")   -> "knives"
    pluralize("hero")    -> "heroes"
    pluralize("photo")   -> "photos"
"""

from __future__ import annotations

IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "foot": "feet",
    "tooth": "teeth",
    "mouse": "mice",
    "criterion": "criteria",
    "analysis": "analyses",
    "datum": "data",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "status": "statuses",
    "bus": "buses",
}

# Words ending in these are treated as already plural (or invariant).
UNCHANGED_SUFFIXES: tuple[str, ...] = ("ss", "us", "is")

SIBILANT_SUFFIXES: tuple[str, ...] = ("s", "sh", "ch", "x", "z")

O_EXCEPTIONS: frozenset[str] = frozenset({"photo", "piano", "memo"})

_VOWELS = frozenset("aeiou")


def pluralize(name: str) -> str:
    """Return the plural form of *name*.

    Matching is case-insensitive; suffix rules keep the original spelling of
    the stem.  Irregular plurals are returned exactly as stored in
    :data:`IRREGULAR_PLURALS`.
    """
    if not name:
        return name

    lower = name.lower()

    if lower in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[lower]

    if lower.endswith(UNCHANGED_SUFFIXES):
        return name

    if lower.endswith("y"):
        before_y = lower[-2] if len(lower) > 1 else ""
        if before_y in _VOWELS:
            return f"{name}s"
        return f"{name[:-1]}ies"

    if lower.endswith(SIBILANT_SUFFIXES):
        return f"{name}es"

    if lower.endswith("fe"):
        return f"{name[:-2]}ves"

    if lower.endswith("f"):
        return f"{name[:-1]}ves"

    if lower.endswith("o") and lower not in O_EXCEPTIONS:
        return f"{name}es"

    return f"{name}s"
