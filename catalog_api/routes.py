# catalog_api/routes.py
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from .database import CatalogStore
from .log import get_logger
from .middleware import PRODUCT_NOT_FOUND, PROTECTED, PROTECTED_WITH_BODY, error_response
from .query import ProductQuery, category_stats, query_products

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def get_store(request: Request) -> CatalogStore:
    """Dependency: the store owned by the running app."""
    return request.app.state.store


# ---------------------------
# Read-only endpoints
# ---------------------------
@router.api_route("", methods=["GET", "HEAD"])
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: CatalogStore = Depends(get_store),
):
    query = ProductQuery.from_params(category=category, search=search, page=page, limit=limit)
    return query_products(store.list(), query).to_json()


# must stay registered before /{product_id}
@router.api_route("/stats", methods=["GET", "HEAD"])
async def product_stats(store: CatalogStore = Depends(get_store)):
    return category_stats(store.list())


@router.api_route("/{product_id}", methods=["GET", "HEAD"])
async def get_product(product_id: str, store: CatalogStore = Depends(get_store)):
    p = store.find_by_id(product_id)
    if p is None:
        return error_response(404, PRODUCT_NOT_FOUND)
    return p.to_json()


# ---------------------------
# Mutating endpoints (x-api-key required)
# ---------------------------
@router.post("", status_code=201)
async def create_product(request: Request, store: CatalogStore = Depends(get_store)):
    ctx, rejection = await PROTECTED_WITH_BODY.run(request)
    if rejection is not None:
        return rejection

    product = ctx.product.to_product(str(uuid.uuid4()))
    store.insert(product)
    logger.info("product_created", product_id=product.id)
    return product.to_json()


@router.put("/{product_id}")
async def update_product(product_id: str, request: Request, store: CatalogStore = Depends(get_store)):
    ctx, rejection = await PROTECTED_WITH_BODY.run(request)
    if rejection is not None:
        return rejection

    existing = store.find_by_id(product_id)
    if existing is None:
        return error_response(404, PRODUCT_NOT_FOUND)

    updated = ctx.product.merge_into(existing)
    if not store.replace(product_id, updated):
        return error_response(404, PRODUCT_NOT_FOUND)
    logger.info("product_updated", product_id=product_id)
    return updated.to_json()


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, request: Request, store: CatalogStore = Depends(get_store)):
    _, rejection = await PROTECTED.run(request)
    if rejection is not None:
        return rejection

    if not store.remove(product_id):
        return error_response(404, PRODUCT_NOT_FOUND)
    logger.info("product_deleted", product_id=product_id)
    return Response(status_code=204)
