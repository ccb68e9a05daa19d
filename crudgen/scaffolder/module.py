"""Module scaffolding (``crudgen generate:module <name>`` / ``g:m``).

Generates one CRUD module under ``src/modules/<kebab>/`` and registers it in
both registry files:

1. Refuse to touch an existing module directory, or a name already taken by
   a standalone router or another import in ``src/routes.ts``.
2. Add the module to ``src/config/collections.config.ts``.
3. Render the types, controller, service, routes and validation files (plus
   the ``index.ts`` barrel the route registry imports from).
4. Write them into the new directory.
5. Add the import and registration to ``src/routes.ts``.

There is no rollback: a failure in a later step leaves the files written by
earlier steps on disk.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.config import Config
from crudgen.errors import AlreadyExistsError
from crudgen.naming import ModuleName
from crudgen.registry.collections import update_collections_config
from crudgen.registry.routes import RouteEntry, route_variable_taken, update_route_manager
from crudgen.utils import (
    ensure_dir,
    path_exists,
    print_error,
    print_file_table,
    print_info,
    print_success,
    print_warning,
    write_text,
)

from .templates import ModuleParams, TemplateRenderer

# (template file, output file name) -- ``{kebab}`` is the module's kebab name.
MODULE_FILES: tuple[tuple[str, str], ...] = (
    ("types.ts.j2", "{kebab}.types.ts"),
    ("controller.ts.j2", "{kebab}.controller.ts"),
    ("service.ts.j2", "{kebab}.service.ts"),
    ("routes.ts.j2", "{kebab}.routes.ts"),
    ("validation.ts.j2", "{kebab}.validation.ts"),
    ("index.ts.j2", "index.ts"),
)


class ModuleGenerator:
    """Generates a CRUD module for the configured framework."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    def module_dir(self, name: ModuleName) -> Path:
        return self.config.modules_dir / name.kebab

    def render_files(self, name: ModuleName) -> dict[str, str]:
        """Render every module file in memory: ``{file name: content}``."""
        params = ModuleParams.from_name(name)
        prefix = f"{self.config.framework.value}/module"
        return {
            output.format(kebab=name.kebab): self.renderer.render(f"{prefix}/{template}", params)
            for template, output in MODULE_FILES
        }

    async def generate(self, raw_name: str) -> Path:
        """Generate the module called *raw_name* and return its directory.

        Raises:
            AlreadyExistsError: The module directory, a router of the same
                name, or another import of its route variable exists;
                nothing was written.
            AnchorNotFoundError: ``src/routes.ts`` has no usable anchor (the
                module files and collection entry are already written).
        """
        try:
            name = ModuleName(raw_name)
            module_dir = self.module_dir(name)

            if await path_exists(module_dir):
                print_warning(f"Module {name} already exists!")
                raise AlreadyExistsError(module_dir, "Module")

            router_file = self.config.router_file(name.kebab)
            if self.config.profile.supports_router_command and await path_exists(router_file):
                print_warning(f"Router {name} already exists!")
                raise AlreadyExistsError(router_file, "Router")

            entry = RouteEntry.for_module(self.config.framework, name)
            if await route_variable_taken(self.config.routes_path, entry):
                print_warning(f"{entry.variable} is already imported in routes.ts!")
                raise AlreadyExistsError(self.config.routes_path, f"Route {entry.variable}")

            files = self.render_files(name)

            print_info("Updating collections configuration...")
            await update_collections_config(self.config.collections_path, name.snake)

            await ensure_dir(module_dir)
            written = [
                await write_text(module_dir / filename, content)
                for filename, content in files.items()
            ]

            await update_route_manager(self.config.routes_path, entry, f"{name} module")
        except AlreadyExistsError:
            raise
        except Exception as exc:
            print_error(f"Error generating module {raw_name}: {exc}")
            raise

        print_file_table(written, self.config.project_root)
        print_success(f"Module {name} generated successfully!")
        return module_dir
