"""Standalone router scaffolding (``crudgen generate:router <name>`` / ``g:r``).

Hono projects only.  Writes ``src/routers/<kebab>.router.ts`` exporting an
empty ``<camel>Router`` and mounts it in ``src/routes.ts`` under
``/<kebab>``.
"""

from __future__ import annotations

from pathlib import Path

from crudgen.config import Config
from crudgen.errors import AlreadyExistsError, UnsupportedCommandError
from crudgen.naming import ModuleName
from crudgen.registry.routes import RouteEntry, route_variable_taken, update_route_manager
from crudgen.utils import path_exists, print_error, print_success, print_warning

from .templates import ModuleParams, TemplateRenderer

ROUTER_TEMPLATE = "hono/router/router.ts.j2"


class RouterGenerator:
    """Generates a standalone Hono router and registers it."""

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    def router_path(self, name: ModuleName) -> Path:
        return self.config.router_file(name.kebab)

    async def generate(self, raw_name: str) -> Path:
        """Generate the router called *raw_name* and return the file path."""
        profile = self.config.profile
        try:
            if not profile.supports_router_command:
                raise UnsupportedCommandError(
                    f"Standalone routers are not available for {profile.display_name} projects"
                )

            name = ModuleName(raw_name)
            router_path = self.router_path(name)

            if await path_exists(router_path):
                print_warning(f"Router {name} already exists!")
                raise AlreadyExistsError(router_path, "Router")

            # A module of the same name binds the same variable and mount path.
            module_dir = self.config.modules_dir / name.kebab
            if await path_exists(module_dir):
                print_warning(f"Module {name} already exists!")
                raise AlreadyExistsError(module_dir, "Module")

            entry = RouteEntry.for_router(name)
            if await route_variable_taken(self.config.routes_path, entry):
                print_warning(f"{entry.variable} is already imported in routes.ts!")
                raise AlreadyExistsError(self.config.routes_path, f"Route {entry.variable}")

            await self.renderer.render_to_file(
                ROUTER_TEMPLATE, router_path, ModuleParams.from_name(name)
            )
            await update_route_manager(self.config.routes_path, entry, f"{name} router")
        except AlreadyExistsError:
            raise
        except Exception as exc:
            print_error(f"Error generating router {raw_name}: {exc}")
            raise

        print_success(f"Router {name} generated successfully!")
        return router_path
