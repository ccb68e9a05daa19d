"""crudgen scaffolder -- generates projects, modules and routers.

Quick usage::

    from crudgen.config import Config, Framework
    from crudgen.scaffolder import ModuleGenerator

    config = Config(project_root=Path("my-api"), framework=Framework.HONO)
    module_dir = await ModuleGenerator(config).generate("order")
"""

from crudgen.scaffolder.module import ModuleGenerator
from crudgen.scaffolder.project import ProjectInitializer
from crudgen.scaffolder.router import RouterGenerator
from crudgen.scaffolder.templates import ModuleParams, ProjectParams, TemplateRenderer

__all__ = [
    "ModuleGenerator",
    "ModuleParams",
    "ProjectInitializer",
    "ProjectParams",
    "RouterGenerator",
    "TemplateRenderer",
]
