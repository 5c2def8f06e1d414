import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pokeadmin.api import (
    admin_router,
    auth_router,
    catalog_router,
    collection_router,
    health_router,
    usage_router,
)
from pokeadmin.config import settings
from pokeadmin.models.failure import KnownError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if not settings.external_api_base_url:
        logger.warning(
            "EXTERNAL_API_BASE_URL is not set. Catalog lookups use the backup API only; "
            "collection and auth routes will fail."
        )
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pokeadmin"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures as {"message", "details"} with their status."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(admin_router)
app.include_router(auth_router)
app.include_router(catalog_router)
app.include_router(collection_router)
app.include_router(health_router)
app.include_router(usage_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.app_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
