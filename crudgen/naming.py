"""Name-case helpers for generated identifiers and file names.

A module called ``tahun ajaran`` (or ``tahun-ajaran``, ``TahunAjaran``) becomes:

* ``tahun-ajaran`` -- directory and file names
* ``tahunAjaran``  -- route/router variables
* ``TahunAjaran``  -- classes and types
* ``TAHUN_AJARAN`` -- collection registry keys
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from crudgen.errors import InvalidNameError

_WORD_SPLIT = re.compile(r"[-_\s]+")


def split_words(text: str) -> list[str]:
    """Split *text* into lowercase words on separators and camelCase humps."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1 \2", text.strip())
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", s1)
    s3 = re.sub(r"[^A-Za-z0-9]+", " ", s2)
    return [w.lower() for w in _WORD_SPLIT.split(s3) if w]


def to_pascal_case(text: str) -> str:
    """``some-thing`` / ``some_thing`` / ``some thing`` -> ``SomeThing``."""
    return "".join(word.capitalize() for word in split_words(text))


def to_camel_case(text: str) -> str:
    """``some-thing`` -> ``someThing``."""
    pascal = to_pascal_case(text)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def to_kebab_case(text: str) -> str:
    """``SomeThing`` -> ``some-thing``."""
    return "-".join(split_words(text))


def to_snake_case(text: str) -> str:
    """``SomeThing`` -> ``some_thing``."""
    return "_".join(split_words(text))


def to_upper_snake_case(text: str) -> str:
    """``some-thing`` -> ``SOME_THING``."""
    return to_snake_case(text).upper()


def to_title_case(text: str) -> str:
    """``some-thing`` -> ``Some Thing``."""
    return " ".join(word.capitalize() for word in split_words(text))


@dataclass(frozen=True)
class ModuleName:
    """A module name and every case variant the templates need."""

    raw: str

    def __post_init__(self) -> None:
        words = split_words(self.raw)
        if not words:
            raise InvalidNameError(f"Name {self.raw!r} contains no letters or digits")
        if not words[0][0].isalpha():
            raise InvalidNameError(f"Name {self.raw!r} must start with a letter")

    @property
    def camel(self) -> str:
        return to_camel_case(self.raw)

    @property
    def pascal(self) -> str:
        return to_pascal_case(self.raw)

    @property
    def kebab(self) -> str:
        return to_kebab_case(self.raw)

    @property
    def snake(self) -> str:
        return to_snake_case(self.raw)

    @property
    def upper(self) -> str:
        return to_upper_snake_case(self.raw)

    @property
    def title(self) -> str:
        return to_title_case(self.raw)

    @property
    def collection(self) -> str:
        """Plural storage name, e.g. ``category`` -> ``categories``."""
        from crudgen.registry.pluralize import pluralize

        return pluralize(self.snake)

    def __str__(self) -> str:
        return self.kebab
