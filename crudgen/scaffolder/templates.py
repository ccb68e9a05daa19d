"""Jinja2 template rendering for project and module scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``crudgen/scaffolder/templates/`` directory and renders them with a typed
parameter record (:class:`ProjectParams`, :class:`ModuleParams`).  Templates
are data: rendering is a pure ``(template, params) -> str`` function, and the
``*_to_file`` helpers only add the write.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel, ConfigDict

from crudgen.config import Framework
from crudgen.naming import ModuleName, to_snake_case
from crudgen.utils import write_text


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Template files named ``dot-<name>.j2`` render to ``.<name>`` (package data
# globs skip real dotfiles).
_DOTFILE_PREFIX = "dot-"


# ---------------------------------------------------------------------------
# Parameter records
# ---------------------------------------------------------------------------


class ModuleParams(BaseModel):
    """Name variants of one module, as seen by the module templates."""

    name: str
    camel: str
    pascal: str
    kebab: str
    snake: str
    upper: str
    title: str
    collection: str

    @classmethod
    def from_name(cls, name: ModuleName) -> "ModuleParams":
        return cls(
            name=name.raw,
            camel=name.camel,
            pascal=name.pascal,
            kebab=name.kebab,
            snake=name.snake,
            upper=name.upper,
            title=name.title,
            collection=name.collection,
        )


class ProjectParams(BaseModel):
    """Project-level values used by the ``init`` templates."""

    model_config = ConfigDict(use_enum_values=True)

    project_name: str
    framework: Framework
    display_name: str
    db_name: str

    @classmethod
    def for_project(cls, project_name: str, framework: Framework, display_name: str) -> "ProjectParams":
        return cls(
            project_name=project_name,
            framework=framework,
            display_name=display_name,
            db_name=to_snake_case(project_name) or "app",
        )


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined variables are errors so a template typo
    never silently produces broken TypeScript.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any] | BaseModel) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"elysia/module/service.ts.j2"``).
            context: Variables available inside the template; a pydantic
                model is dumped to a dict first.

        Returns:
            The rendered template content as a string.
        """
        if isinstance(context, BaseModel):
            context = context.model_dump()
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any] | BaseModel,
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_path, context)
        return await write_text(output_path, content)

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any] | BaseModel,
        *,
        skip_patterns: list[str] | None = None,
    ) -> list[Path]:
        """Render every ``*.j2`` file under *template_prefix* to *output_dir*.

        The directory structure is preserved: a template at
        ``hono/project/src/index.ts.j2`` rendered with
        ``template_prefix="hono/project"`` and ``output_dir="/tmp/api"``
        writes to ``/tmp/api/src/index.ts``.

        Returns:
            List of written file paths.
        """
        skip_patterns = skip_patterns or []
        written: list[Path] = []
        out_base = Path(output_dir)

        for rel_str in self.list_templates(template_prefix):
            rel = Path(rel_str).relative_to(template_prefix)
            if any(pat in str(rel) for pat in skip_patterns):
                continue
            output_file = out_base / output_name(rel)
            written.append(await self.render_to_file(rel_str, output_file, context))

        return written

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory and always use
        forward slashes (Jinja2 loader names).
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


def output_name(rel: Path) -> Path:
    """Map a template path to its output path (drop ``.j2``, expand ``dot-``)."""
    name = rel.name[: -len(".j2")] if rel.name.endswith(".j2") else rel.name
    if name.startswith(_DOTFILE_PREFIX):
        name = "." + name[len(_DOTFILE_PREFIX):]
    return rel.with_name(name)


