"""crudgen configuration.

Typed configuration for every command.  All settings use Pydantic v2 models
so they are validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

PROJECT_FILE_NAME = "crudgen.json"


class Framework(str, Enum):
    ELYSIA = "elysia"
    HONO = "hono"


class FrameworkProfile(BaseModel):
    """Everything that differs between the two generated project flavours."""

    framework: Framework
    display_name: str
    dependencies: list[str]
    dev_dependencies: list[str] = Field(default_factory=list)
    route_suffix: str = Field(description="Suffix of the exported route variable")
    supports_router_command: bool = False

    def install_commands(self) -> list[list[str]]:
        """Package-manager commands run by ``init`` (in order)."""
        commands = [["bun", "init", "-y"], ["bun", "add", *self.dependencies]]
        if self.dev_dependencies:
            commands.append(["bun", "add", "-d", *self.dev_dependencies])
        return commands


PROFILES: dict[Framework, FrameworkProfile] = {
    Framework.ELYSIA: FrameworkProfile(
        framework=Framework.ELYSIA,
        display_name="Elysia.js",
        dependencies=["elysia", "@elysiajs/cors", "@elysiajs/swagger", "mongodb"],
        dev_dependencies=["@types/mongodb"],
        route_suffix="Routes",
    ),
    Framework.HONO: FrameworkProfile(
        framework=Framework.HONO,
        display_name="Hono.js",
        dependencies=["hono", "zod", "mongodb"],
        dev_dependencies=["@types/mongodb"],
        route_suffix="Router",
        supports_router_command=True,
    ),
}

# Files ``bun init`` creates that the project templates replace.
BUN_INIT_LEFTOVERS: tuple[str, ...] = ("index.ts", "README.md", ".gitignore", "tsconfig.json")


class ProjectFile(BaseModel):
    """Contents of ``crudgen.json`` at the root of a generated project."""

    name: str
    framework: Framework

    def save(self, project_root: Path) -> Path:
        target = Path(project_root) / PROJECT_FILE_NAME
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2) + "\n", encoding="utf-8")
        return target

    @classmethod
    def load(cls, project_root: Path) -> "ProjectFile | None":
        """Return the project file under *project_root*, or ``None`` if absent."""
        path = Path(project_root) / PROJECT_FILE_NAME
        if not path.is_file():
            return None
        return cls.model_validate_json(path.read_text(encoding="utf-8"))


class Config(BaseModel):
    """Global crudgen configuration.

    ``project_root`` is the directory commands operate in: the parent
    directory for ``init``, the project itself for module and router
    generation.
    """

    project_root: Path = Field(default_factory=Path.cwd)
    framework: Framework = Field(default=Framework.ELYSIA)
    install_timeout: int = Field(default=300, ge=10, description="Per-command timeout in seconds")
    skip_install: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Derived values (read-only properties)
    # ------------------------------------------------------------------

    @property
    def profile(self) -> FrameworkProfile:
        return PROFILES[self.framework]

    @property
    def src_dir(self) -> Path:
        return self.project_root / "src"

    @property
    def modules_dir(self) -> Path:
        """Directory holding one sub-directory per generated module."""
        return self.src_dir / "modules"

    @property
    def routers_dir(self) -> Path:
        """Directory for standalone routers (``g:r``)."""
        return self.src_dir / "routers"

    @property
    def routes_path(self) -> Path:
        """Path to the route registry ``src/routes.ts``."""
        return self.src_dir / "routes.ts"

    @property
    def collections_path(self) -> Path:
        """Path to the collections registry."""
        return self.src_dir / "config" / "collections.config.ts"

    def router_file(self, kebab: str) -> Path:
        """Path of the standalone router called *kebab*."""
        return self.routers_dir / f"{kebab}.router.ts"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CRUDGEN_PROJECT_ROOT, CRUDGEN_FRAMEWORK, CRUDGEN_INSTALL_TIMEOUT,
            CRUDGEN_SKIP_INSTALL.

        Keyword *overrides* whose value is not ``None`` win over the
        environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDGEN_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["CRUDGEN_PROJECT_ROOT"])
        if os.environ.get("CRUDGEN_FRAMEWORK"):
            kwargs["framework"] = Framework(os.environ["CRUDGEN_FRAMEWORK"].lower())
        if os.environ.get("CRUDGEN_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["CRUDGEN_INSTALL_TIMEOUT"])
        if os.environ.get("CRUDGEN_SKIP_INSTALL"):
            kwargs["skip_install"] = os.environ["CRUDGEN_SKIP_INSTALL"].lower() in ("1", "true", "yes")

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    def with_project_file(self) -> "Config":
        """Return a copy whose framework comes from ``crudgen.json`` if present."""
        project = ProjectFile.load(self.project_root)
        if project is None:
            return self
        return self.model_copy(update={"framework": project.framework})
