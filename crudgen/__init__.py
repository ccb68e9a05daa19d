"""crudgen -- scaffolding generator for Elysia and Hono web API projects.

Quick usage::

    crudgen init my-api --framework hono
    cd my-api
    crudgen g:m order
"""

__version__ = "0.1.0"
