"""Shared pytest fixtures for the crudgen test suite.

Provides reusable fixtures for:
- Temporary Elysia / Hono project trees with freshly rendered registries
- Configs pointing at those trees
- A template renderer over the packaged templates
"""

from __future__ import annotations

from pathlib import Path

import pytest

from crudgen.config import Config, Framework
from crudgen.registry.collections import CollectionRegistry
from crudgen.scaffolder.templates import ProjectParams, TemplateRenderer


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def snapshot_tree(root: Path) -> dict[str, str]:
    """Return ``{relative path: content}`` for every file under *root*."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def _make_project(root: Path, framework: Framework, renderer: TemplateRenderer) -> Path:
    """Write the two registry files ``init`` would create, nothing else."""
    params = ProjectParams.for_project(root.name, framework, framework.value.title())
    routes = renderer.render(f"{framework.value}/project/src/routes.ts.j2", params)
    (root / "src" / "modules").mkdir(parents=True)
    (root / "src" / "config").mkdir(parents=True)
    (root / "src" / "routes.ts").write_text(routes, encoding="utf-8")
    (root / "src" / "config" / "collections.config.ts").write_text(
        CollectionRegistry().render(), encoding="utf-8"
    )
    return root


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def elysia_project(tmp_path: Path, renderer: TemplateRenderer) -> Path:
    """Minimal Elysia project tree with empty registries."""
    return _make_project(tmp_path / "elysia-api", Framework.ELYSIA, renderer)


@pytest.fixture
def hono_project(tmp_path: Path, renderer: TemplateRenderer) -> Path:
    """Minimal Hono project tree with empty registries."""
    return _make_project(tmp_path / "hono-api", Framework.HONO, renderer)


@pytest.fixture
def elysia_config(elysia_project: Path) -> Config:
    return Config(project_root=elysia_project, framework=Framework.ELYSIA)


@pytest.fixture
def hono_config(hono_project: Path) -> Config:
    return Config(project_root=hono_project, framework=Framework.HONO)


@pytest.fixture
def elysia_routes() -> str:
    """The route registry exactly as ``init`` writes it for Elysia."""
    return (
        "import { Elysia } from 'elysia'\n"
        "\n"
        "// Auto-generated route imports\n"
        "\n"
        "export const setupRoutes = (app: Elysia) => {\n"
        "  // Auto-generated route registrations\n"
        "\n"
        "  return app\n"
        "}\n"
    )


@pytest.fixture
def snapshot():
    """``snapshot(root)`` -> ``{relative path: content}`` of every file."""
    return snapshot_tree
