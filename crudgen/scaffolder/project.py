"""Project initialisation (``crudgen init <projectName>``).

Creates ``<cwd>/<projectName>`` with a Bun + Elysia or Bun + Hono API
skeleton: dependencies installed through ``bun``, database config and
connection handle, an empty route registry, an empty collections registry,
``tsconfig.json``/``package.json``, env files, and ``crudgen.json`` recording
the framework for later ``g:m``/``g:r`` runs.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from crudgen.config import BUN_INIT_LEFTOVERS, Config, Framework, ProjectFile
from crudgen.errors import AlreadyExistsError, CommandError, InvalidNameError
from crudgen.registry.collections import CollectionRegistry
from crudgen.utils import (
    console,
    ensure_dir,
    format_command,
    path_exists,
    print_error,
    print_file_table,
    print_info,
    print_success,
    print_warning,
    run_command,
    write_text,
)

from .templates import ProjectParams, TemplateRenderer

_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

PROJECT_DIRS: tuple[str, ...] = (
    "src/modules",
    "src/shared/middleware",
    "src/shared/utils",
    "src/config",
)

TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ESNext",
        "module": "ESNext",
        "moduleResolution": "bundler",
        "types": ["bun-types"],
        "allowImportingTsExtensions": True,
        "moduleDetection": "force",
        "allowJs": True,
        "strict": True,
        "noUncheckedIndexedAccess": True,
        "noEmit": True,
        "composite": True,
        "skipLibCheck": True,
        "allowSyntheticDefaultImports": True,
        "forceConsistentCasingInFileNames": True,
        "rootDir": ".",
        "baseUrl": "src",
        "paths": {
            "@/*": ["*"],
            "@modules/*": ["modules/*"],
            "@shared/*": ["shared/*"],
            "@config/*": ["config/*"],
            "@utils/*": ["shared/utils/*"],
        },
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "dist"],
}


def build_package_json(project_name: str, config: Config) -> dict[str, Any]:
    """Return the ``package.json`` payload for a new project."""
    profile = config.profile
    return {
        "name": project_name,
        "version": "1.0.0",
        "type": "module",
        "scripts": {
            "dev": "bun run --watch src/index.ts",
            "start": "bun run src/index.ts",
            "build": "bun build ./src/index.ts --outdir ./dist --target bun",
        },
        "dependencies": {dep: "latest" for dep in profile.dependencies},
        "devDependencies": {dep: "latest" for dep in profile.dev_dependencies},
    }


class ProjectInitializer:
    """Scaffolds a new API project in ``config.project_root``."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def initialize(self, project_name: str) -> Path:
        """Create the project and return its root directory.

        Raises:
            AlreadyExistsError: The target directory exists; nothing was
                written.
            CommandError: A package-manager command failed.
        """
        try:
            if not _PROJECT_NAME_RE.match(project_name):
                raise InvalidNameError(f"Invalid project name {project_name!r}")

            project_root = self.config.project_root / project_name
            if await path_exists(project_root):
                print_warning(f"Project {project_name} already exists!")
                raise AlreadyExistsError(project_root, "Project")

            await ensure_dir(project_root)
            await self._install_dependencies(project_root)
            await self._create_directories(project_root)
            written = await self._render_project(project_root, project_name)
        except AlreadyExistsError:
            raise
        except Exception as exc:
            print_error(f"Error initializing project {project_name}: {exc}")
            raise

        print_file_table(written, project_root)
        print_success(f"Project {project_name} initialized successfully!")
        console.print("\n[blue]To get started:[/blue]")
        console.print(f"  cd {project_name}")
        console.print("  bun run dev\n")
        return project_root

    # -- Dependencies ------------------------------------------------------

    async def _install_dependencies(self, root: Path) -> None:
        """Run ``bun init`` and ``bun add`` inside *root*."""
        if self.config.skip_install:
            print_warning("Skipping dependency installation (--skip-install)")
            return

        print_info(f"Initializing Bun project for {self.config.profile.display_name}...")
        for cmd in self.config.profile.install_commands():
            print_info(f"$ {format_command(cmd)}")
            returncode, _stdout, stderr = await run_command(
                cmd, cwd=root, timeout=self.config.install_timeout
            )
            if returncode != 0:
                raise CommandError(
                    f"Command failed with exit code {returncode}: {format_command(cmd)}",
                    command=format_command(cmd),
                    stderr=stderr,
                )

        await asyncio.to_thread(_remove_leftovers, root)
        print_success("Dependencies installed successfully!")

    # -- Directory structure -----------------------------------------------

    async def _create_directories(self, root: Path) -> None:
        dirs = list(PROJECT_DIRS)
        if self.config.framework is Framework.HONO:
            dirs.append("src/routers")
        for d in dirs:
            await ensure_dir(root / d)

    # -- Files -------------------------------------------------------------

    async def _render_project(self, root: Path, project_name: str) -> list[Path]:
        params = ProjectParams.for_project(
            project_name, self.config.framework, self.config.profile.display_name
        )
        written: list[Path] = []
        written += await self.renderer.render_tree("common/project", root, params)
        written += await self.renderer.render_tree(
            f"{self.config.framework.value}/project", root, params
        )

        collections_path = root / "src" / "config" / "collections.config.ts"
        written.append(await CollectionRegistry().save(collections_path))

        written.append(await write_text(root / "tsconfig.json", _dump_json(TSCONFIG)))
        written.append(await write_text(
            root / "package.json", _dump_json(build_package_json(project_name, self.config))
        ))

        project_file = ProjectFile(name=project_name, framework=self.config.framework)
        written.append(await asyncio.to_thread(project_file.save, root))
        return written


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _remove_leftovers(root: Path) -> None:
    """Delete the files ``bun init`` creates that the templates replace."""
    for name in BUN_INIT_LEFTOVERS:
        (root / name).unlink(missing_ok=True)


def _dump_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2) + "\n"
