# pricing_table/main.py
import time
from typing import Optional

from fastapi import FastAPI, Request

from pricing_table import __version__
from pricing_table.api.pricing_table import router as pricing_table_router
from pricing_table.api.pricing_table import shortcode_router
from pricing_table.config import Settings, get_settings
from pricing_table.core.logging_config import logger, setup_logging
from pricing_table.engine.max_quantity import MaxQuantityResolver
from pricing_table.storage import CatalogLoader


def create_app(
    settings: Optional[Settings] = None,
    catalog=None,
    max_quantity_resolver: Optional[MaxQuantityResolver] = None,
) -> FastAPI:
    """
    App factory. `catalog` is anything with get_product / get_rule_sets;
    default is the YAML catalog from settings.catalog_path.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Dynamic Pricing Table", version=__version__)
    app.state.settings = settings
    app.state.catalog = catalog if catalog is not None else CatalogLoader(settings.catalog_path)
    app.state.max_quantity_resolver = max_quantity_resolver

    logger.info("startup", service="pricing-table", env=settings.app_env)

    # ----------------------------------------------------
    # Health
    # ----------------------------------------------------
    @app.get("/health", include_in_schema=True)
    def health() -> dict:
        return {"status": "ok"}

    # ----------------------------------------------------
    # Logging middleware
    # ----------------------------------------------------
    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start = time.time()

        request_id = request.headers.get("X-Request-ID", "unknown")
        client_ip = request.client.host if request.client else "unknown"

        bound_logger = logger.bind(
            request_id=request_id,
            ip=client_ip,
            endpoint=str(request.url.path),
            method=request.method,
        )

        bound_logger.info("request_started")
        response = await call_next(request)
        latency_ms = round((time.time() - start) * 1000, 2)

        bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
            "request_finished"
        )
        return response

    # ----------------------------------------------------
    # Routers
    # ----------------------------------------------------
    app.include_router(pricing_table_router)
    app.include_router(shortcode_router)

    return app
