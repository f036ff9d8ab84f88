"""
Product routes.

    GET     ""                    list (search, category)
    GET     "/low-stock"          products at or below min stock
    GET     "/barcode/{barcode}"  lookup by barcode
    GET     "/{product_id}"
    POST    ""
    PATCH   "/{product_id}"
    DELETE  "/{product_id}"
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.notifications import NotificationService
from autoshop.rbac import Action, Identity, Resource, require_permission
from .schemas import CreateProductRequest, UpdateProductRequest
from .service import ProductService

products_router = APIRouter()


@products_router.get("")
async def list_products(
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.READ)),
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ProductService(db).search(search, category)


@products_router.get("/low-stock")
async def low_stock_products(
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ProductService(db).low_stock()


@products_router.get("/barcode/{barcode}")
async def product_by_barcode(
    barcode: str,
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ProductService(db).by_barcode(barcode)


@products_router.get("/{product_id}")
async def get_product(
    product_id: str,
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ProductService(db).get(product_id)


@products_router.post("", status_code=201)
async def create_product(
    request: Request,
    body: CreateProductRequest,
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    product = await ProductService(db).create(body.model_dump(), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "product",
        resource_id=product["_id"],
        description=f"Created product: {product['name']}",
        ip_address=client_ip(request),
    )
    await NotificationService(db).check_low_stock(product)
    return product


@products_router.patch("/{product_id}")
async def update_product(
    request: Request,
    product_id: str,
    body: UpdateProductRequest,
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    product = await ProductService(db).update(product_id, body.model_dump(exclude_unset=True))
    await ActivityService(db).log(
        identity, "update", "product",
        resource_id=product["_id"],
        description=f"Updated product: {product['name']}",
        details=body.model_dump(exclude_unset=True),
        ip_address=client_ip(request),
    )
    if body.stock_qty is not None or body.min_stock_level is not None:
        await NotificationService(db).check_low_stock(product)
    return product


@products_router.delete("/{product_id}")
async def delete_product(
    request: Request,
    product_id: str,
    identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.DELETE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    product = await ProductService(db).delete(product_id)
    await ActivityService(db).log(
        identity, "delete", "product",
        resource_id=product["_id"],
        description=f"Deleted product: {product['name']}",
        ip_address=client_ip(request),
    )
    return {"success": True}
