"""Route registry (``src/routes.ts``) patching.

Each generated module (or standalone router) contributes one import statement
and one registration statement to ``setupRoutes``::

    import { Elysia } from 'elysia'
    import { orderRoutes } from './modules/order'

    // Auto-generated route imports

    export const setupRoutes = (app: Elysia) => {
      // Auto-generated route registrations
      app.use(orderRoutes)

      return app
    }

Registrations go directly below the marker comment.  Route files that lost
the marker are still accepted when ``setupRoutes`` opens straight onto its
``return app``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from crudgen.config import PROFILES, Framework
from crudgen.naming import ModuleName
from crudgen.registry.patcher import IMPORT_BLOCK_END, Anchor, Placement, patch
from crudgen.utils import print_info, read_text, write_text

REGISTRATIONS_MARKER = "// Auto-generated route registrations"

REGISTRATION_ANCHORS: tuple[Anchor, ...] = (
    Anchor.literal(REGISTRATIONS_MARKER),
    Anchor.regex(
        "setupRoutes body",
        r"export const setupRoutes = \([^)]*\)\s*=>\s*\{[^\n]*\n(?:[^\n]*\n)*?(?P<ret>[ \t]*return app\b)",
        Placement.BEFORE_RETURN,
    ),
)


@dataclass(frozen=True)
class RouteEntry:
    """One (import, registration) pair of the route registry."""

    variable: str
    import_statement: str
    registration: str

    @classmethod
    def for_module(cls, framework: Framework, name: ModuleName) -> "RouteEntry":
        """Entry for a module generated under ``src/modules/<kebab>``."""
        variable = f"{name.camel}{PROFILES[framework].route_suffix}"
        if framework is Framework.HONO:
            registration = f"app.route('/{name.kebab}', {variable})"
        else:
            registration = f"app.use({variable})"
        return cls(
            variable=variable,
            import_statement=f"import {{ {variable} }} from './modules/{name.kebab}'",
            registration=registration,
        )

    @classmethod
    def for_router(cls, name: ModuleName) -> "RouteEntry":
        """Entry for a standalone Hono router under ``src/routers``."""
        variable = f"{name.camel}{PROFILES[Framework.HONO].route_suffix}"
        return cls(
            variable=variable,
            import_statement=f"import {{ {variable} }} from './routers/{name.kebab}.router'",
            registration=f"app.route('/{name.kebab}', {variable})",
        )


def imports_variable(content: str, variable: str) -> bool:
    """Return ``True`` if an import statement in *content* binds *variable*."""
    pattern = rf"^\s*import\s*(?:type\s+)?\{{[^}}]*\b{re.escape(variable)}\b[^}}]*\}}"
    return re.search(pattern, content, re.MULTILINE) is not None


async def route_variable_taken(path: Path, entry: RouteEntry) -> bool:
    """Return ``True`` if another import in *path* binds the entry's variable.

    The entry's own import statement does not count, and a missing registry
    binds nothing.
    """
    try:
        content = await read_text(path)
    except FileNotFoundError:
        return False
    if entry.import_statement in content:
        return False
    return imports_variable(content, entry.variable)


def apply_route_entry(content: str, entry: RouteEntry, path: Path | None = None) -> str:
    """Add *entry*'s import and registration to *content* (each at most once).

    Raises:
        AnchorNotFoundError: If the file has no import line or no
            ``setupRoutes`` registration anchor.
    """
    content = patch(content, IMPORT_BLOCK_END, entry.import_statement, strict=True, path=path)
    return patch(content, REGISTRATION_ANCHORS, entry.registration, strict=True, path=path)


async def update_route_manager(path: Path, entry: RouteEntry, label: str) -> str:
    """Patch the route registry at *path* with *entry* and write it back.

    A missing routes file is an error: ``init`` always creates it.
    """
    content = await read_text(path)
    updated = apply_route_entry(content, entry, path)
    if updated != content:
        await write_text(path, updated)
    print_info(f"Updated routes manager with [bold]{label}[/bold]")
    return updated
