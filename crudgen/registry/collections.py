"""Collections registry (``src/config/collections.config.ts``).

The registry maps every generated module to its MongoDB collection name::

    export const COLLECTIONS = {
        ORDER: 'orders',
        USER: 'users'
    } as const

It is never patched line by line.  On every update the module names are
parsed back out of the existing file, the new module is added, and the whole
file is rendered again with the plurals recomputed from scratch.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from crudgen.naming import to_snake_case, to_upper_snake_case
from crudgen.registry.pluralize import pluralize
from crudgen.utils import print_info, read_text, write_text

_ENTRY_RE = re.compile(r"^\s*([A-Z][A-Z0-9_]*)\s*:\s*['\"]", re.MULTILINE)


class CollectionRegistry:
    """Ordered, de-duplicated set of module names backing the collections file."""

    def __init__(self, modules: Iterable[str] = ()) -> None:
        self._modules: set[str] = set()
        for module in modules:
            self.add(module)

    # -- Parsing / loading ---------------------------------------------------

    @classmethod
    def parse(cls, content: str) -> "CollectionRegistry":
        """Rebuild the registry from a previously rendered file."""
        return cls(key.lower() for key in _ENTRY_RE.findall(content))

    @classmethod
    async def load(cls, path: Path) -> "CollectionRegistry":
        """Load the registry at *path*; a missing file is an empty registry.

        Any other ``OSError`` (permissions, path is a directory) propagates.
        """
        try:
            content = await read_text(path)
        except FileNotFoundError:
            return cls()
        return cls.parse(content)

    # -- Mutation ------------------------------------------------------------

    def add(self, module: str) -> bool:
        """Add *module*; return ``False`` if it was already registered."""
        name = to_snake_case(module)
        if not name:
            raise ValueError(f"Cannot register empty module name {module!r}")
        if name in self._modules:
            return False
        self._modules.add(name)
        return True

    def __contains__(self, module: object) -> bool:
        return isinstance(module, str) and to_snake_case(module) in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    @property
    def modules(self) -> list[str]:
        return sorted(self._modules, key=to_upper_snake_case)

    def entries(self) -> list[tuple[str, str]]:
        """Return ``(KEY, plural)`` pairs sorted by key."""
        return [(to_upper_snake_case(m), pluralize(m.lower())) for m in self.modules]

    # -- Serialisation -------------------------------------------------------

    def render(self, generated_at: datetime | None = None) -> str:
        """Render the complete TypeScript registry file."""
        stamp = (generated_at or datetime.now(timezone.utc)).isoformat()
        body = ",\n".join(f"    {key}: '{plural}'" for key, plural in self.entries())
        lines = [
            "// This file is auto-generated. Do not edit manually",
            f"// Generated on: {stamp}",
            "",
            "export const COLLECTIONS = {",
        ]
        if body:
            lines.append(body)
        lines.extend([
            "} as const",
            "",
            "export type CollectionName = typeof COLLECTIONS[keyof typeof COLLECTIONS]",
            "",
            "// Collection names mapping",
            "export const collectionNames = Object.values(COLLECTIONS)",
            "",
        ])
        return "\n".join(lines)

    async def save(self, path: Path, generated_at: datetime | None = None) -> Path:
        return await write_text(path, self.render(generated_at))


async def update_collections_config(path: Path, module: str) -> CollectionRegistry:
    """Register *module* in the collections file at *path* and rewrite it."""
    registry = await CollectionRegistry.load(path)
    registry.add(module)
    await registry.save(path)
    print_info(f"Updated collections config with [bold]{module}[/bold] module")
    return registry
