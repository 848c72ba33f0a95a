from __future__ import annotations

import time
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from pricing_table.config import Settings
from pricing_table.core.logging_config import logger
from pricing_table.engine.context import Viewer
from pricing_table.i18n import pick_language
from pricing_table.renderer import TableRenderer
from pricing_table.schemas.pricing_table_v1 import PricingTableOutV1
from pricing_table.service import build_renderer, build_shortcodes

# ----------------------------
# Routers
# ----------------------------
router = APIRouter(prefix="/api/pricing-table", tags=["pricing-table"])
shortcode_router = APIRouter(prefix="/shortcodes", tags=["shortcodes"])


# ----------------------------
# Dependencies
# ----------------------------
def get_viewer(
    x_user_id: Optional[str] = Header(default=None),
    x_user_roles: Optional[str] = Header(default=None),
) -> Viewer:
    roles = (x_user_roles or "").split(",")
    return Viewer.of(x_user_id, roles)


def get_renderer(
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    lang: Optional[str] = Query(default=None),
    accept_language: Optional[str] = Header(default=None),
) -> TableRenderer:
    settings: Settings = request.app.state.settings
    catalog = request.app.state.catalog
    return build_renderer(
        catalog,
        catalog,
        viewer,
        settings=settings,
        lang=pick_language(
            accept_language=accept_language,
            user_pref=lang,
            fallback=settings.default_language,
        ),
        max_quantity_resolver=getattr(request.app.state, "max_quantity_resolver", None),
    )


def _log_obs(*, endpoint: str, product_id: int, viewer: Viewer, t0: float, rendered: bool) -> None:
    logger.bind(
        endpoint=endpoint,
        product_id=product_id,
        authenticated=viewer.is_authenticated,
        duration_ms=round((time.time() - t0) * 1000, 2),
        result="rendered" if rendered else "empty",
    ).info("pricing_table_request")


# ----------------------------
# 1) JSON
# ----------------------------
@router.get("/{product_id}", response_model=PricingTableOutV1)
def get_pricing_table(
    product_id: int,
    renderer: TableRenderer = Depends(get_renderer),
    viewer: Viewer = Depends(get_viewer),
) -> PricingTableOutV1:
    t0 = time.time()
    table = renderer.build_table(product_id)
    _log_obs(endpoint="json", product_id=product_id, viewer=viewer, t0=t0, rendered=table is not None)

    if table is None:
        raise HTTPException(status_code=404, detail="No pricing table for this product")
    return PricingTableOutV1.from_table(table)


# ----------------------------
# 2) HTML fragment
# ----------------------------
@router.get("/{product_id}/html", response_class=HTMLResponse)
def get_pricing_table_html(
    product_id: int,
    renderer: TableRenderer = Depends(get_renderer),
    viewer: Viewer = Depends(get_viewer),
) -> HTMLResponse:
    t0 = time.time()
    html = renderer.render(product_id)
    _log_obs(endpoint="html", product_id=product_id, viewer=viewer, t0=t0, rendered=bool(html))
    return HTMLResponse(html)


# ----------------------------
# 3) Shortcodes ([dynamic_pricing_table] / [pricing_table])
# ----------------------------
@shortcode_router.get("/{name}", response_class=HTMLResponse)
def render_shortcode(
    name: str,
    product_id: Optional[str] = Query(default=None),
    x_current_product_id: Optional[str] = Header(default=None),
    renderer: TableRenderer = Depends(get_renderer),
) -> HTMLResponse:
    registry = build_shortcodes(renderer)
    if name not in registry.names():
        raise HTTPException(status_code=404, detail=f"Unknown shortcode: {name}")

    html = registry.render(name, {"product_id": product_id}, current_product_id=x_current_product_id)
    return HTMLResponse(html)
