"""
Main entrypoint for the Product Catalog API.

This module assembles the FastAPI application, sets up logging,
CORS and the central error mapper, and mounts the product router
under ``/api/products``.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn product_catalog_api.app.main:app --reload

``create_app`` accepts a ``Settings`` instance and a
``JsonDocumentStore`` so tests can run against an isolated data file.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.products import router as products_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.store import JsonDocumentStore
from .services.product_service import ProductService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[JsonDocumentStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module-level settings.
    store : Optional[JsonDocumentStore]
        Document store backing the product service.  When omitted a
        store is created for ``settings.data_path``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None, settings.is_development)

    if store is None:
        store = JsonDocumentStore(settings.data_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Creates the data file if it is missing.
        store.read()
        logger.info("Using product data file %s", store.path)
        yield

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store
    app.state.product_service = ProductService(store)

    app.include_router(products_router, prefix="/api/products", tags=["products"])
    register_exception_handlers(app)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
