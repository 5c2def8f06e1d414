from pokeadmin.api.admin import router as admin_router
from pokeadmin.api.auth import router as auth_router
from pokeadmin.api.catalog import router as catalog_router
from pokeadmin.api.collection import router as collection_router
from pokeadmin.api.health import router as health_router
from pokeadmin.api.usage import router as usage_router

__all__ = [
    "admin_router",
    "auth_router",
    "catalog_router",
    "collection_router",
    "health_router",
    "usage_router",
]
