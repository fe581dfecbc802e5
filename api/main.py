import asyncio
import logging
import time
from contextlib import asynccontextmanager

import asyncpg
from fastapi import FastAPI, Request
from fastapi.openapi.docs import get_swagger_ui_html

from core import settings
from core.cors import install_cors
from core.db import Database
from core.errors import install_exception_handlers
from core.log import configure_logging
from products import router as products_router
from products.repository import ProductRepository

logger = logging.getLogger("api")

OPENAPI_TAGS = [
    {
        "name": "Products",
        "description": "API operations with products",
    }
]


async def connect_database(db: Database) -> None:
    """
    Connect and sync the products table. Failures are logged, not raised:
    the process keeps serving and store-backed requests answer 503.
    """
    try:
        await db.connect()
        await ProductRepository(db).sync_schema()
        logger.info("database_connected")
    except (
        OSError,
        RuntimeError,
        asyncio.TimeoutError,
        asyncpg.PostgresError,
        asyncpg.InterfaceError,
    ):
        logger.exception("database_connect_failed")
        await db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    db = Database()
    app.state.db = db
    await connect_database(db)
    try:
        yield
    finally:
        await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="REST API with FastAPI / asyncpg",
        version="1.0.0",
        description="API Docs for Products",
        openapi_tags=OPENAPI_TAGS,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    install_exception_handlers(app)

    install_cors(app)

    # Registered after the CORS check so rejected requests are logged too.
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.3f ms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.include_router(products_router.router, prefix="/api/products", tags=["Products"])

    @app.get("/docs", include_in_schema=False)
    async def docs():
        return get_swagger_ui_html(openapi_url=app.openapi_url, title="REST API Documentation")

    @app.get("/health", include_in_schema=False)
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host(),
        port=settings.api_port(),
        log_level=settings.log_level().lower(),
    )
