"""FastAPI application entry point for marketplace_cms_bridge."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.clients.cms.CMSClientInterface import CMSClientInterface
from shared.clients.cms.CMSClientManager import CMSClientManager
from services.category.CategoryService import CategoryService
from server.core.ListingQueryService import ListingQueryService
from server.routers.CategoryRouter import router as category_router
from server.routers.ListingRouter import router as listing_router
from server.routers.error_handlers import register_exception_handlers

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    cms_client = CMSClientManager(helper_config=app.state.helper_config).get_client()

    logging.info("Booting CMS client...")
    await cms_client.boot()
    app.state.cms_client = cms_client

    app.state.category_service = CategoryService(
        helper_config=app.state.helper_config,
        cms_client=cms_client,
    )
    app.state.listing_query_service = ListingQueryService(
        helper_config=app.state.helper_config,
        cms_client=cms_client,
        category_service=app.state.category_service,
    )

    await check_connection(cms_client)

    # while the app is running...
    yield

    # when the app shuts down, close the client connection
    logging.info("Shutting down, closing CMS client...")
    await cms_client.close()
    logging.info("CMS client closed.")


app = FastAPI(
    title="marketplace_cms_bridge",
    description=(
        "Query layer between a marketplace frontend and a headless Strapi CMS. "
        "Translates category, text, price and attribute filters into Strapi REST queries "
        "and serves categories and listings."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(category_router)
app.include_router(listing_router)
register_exception_handlers(app)


@app.get("/health", tags=["health"])
async def health(request: Request) -> dict:
    """Report whether the CMS backend answers its healthcheck."""
    result = await request.app.state.cms_client.do_healthcheck()
    return {"status": "ok" if result.is_success else "degraded", "cms_status": result.status_code, "version": app_version}


async def check_connection(cms_client: CMSClientInterface) -> None:
    """Check connectivity to the CMS on startup.

    Failures are non-fatal: the server stays up and requests fail with 502 until the CMS is reachable.
    """
    try:
        result = await cms_client.do_healthcheck()
    except httpx.HTTPError as e:
        logging.warning("CMS client '%s' is not reachable: %s", cms_client.__class__.__name__, e)
        return
    if not result.is_success:
        logging.warning(
            "CMS client '%s' is not reachable (status %d). Requests may fail.",
            cms_client.__class__.__name__,
            result.status_code,
        )


if __name__ == "__main__":
    import uvicorn

    logging.info(
        "Starting marketplace_cms_bridge API Server v%s from root dir: %s on port 8000...",
        app_version,
        os.environ.get("ROOT_DIR", "unknown"),
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
