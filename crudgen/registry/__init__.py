"""Registry files shared by every generated module.

* ``pluralize``  -- collection names from module names
* ``patcher``    -- idempotent anchor-based line insertion
* ``collections``-- ``src/config/collections.config.ts``
* ``routes``     -- ``src/routes.ts``
"""

from crudgen.registry.pluralize import pluralize
from crudgen.registry.patcher import Anchor, Placement, patch
from crudgen.registry.collections import CollectionRegistry, update_collections_config
from crudgen.registry.routes import RouteEntry, apply_route_entry, update_route_manager

__all__ = [
    "Anchor",
    "CollectionRegistry",
    "Placement",
    "RouteEntry",
    "apply_route_entry",
    "patch",
    "pluralize",
    "update_collections_config",
    "update_route_manager",
]
