from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from .schemas import CreateSupplierRequest, UpdateSupplierRequest
from .service import SupplierService

suppliers_router = APIRouter()


@suppliers_router.get("")
async def list_suppliers(
    identity: Identity = Depends(require_permission(Resource.SUPPLIERS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await SupplierService(db).list()


@suppliers_router.post("", status_code=201)
async def create_supplier(
    request: Request,
    body: CreateSupplierRequest,
    identity: Identity = Depends(require_permission(Resource.SUPPLIERS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    supplier = await SupplierService(db).create(body.model_dump(), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "supplier",
        resource_id=supplier["_id"],
        description=f"Created supplier: {supplier['name']}",
        ip_address=client_ip(request),
    )
    return supplier


@suppliers_router.patch("/{supplier_id}")
async def update_supplier(
    request: Request,
    supplier_id: str,
    body: UpdateSupplierRequest,
    identity: Identity = Depends(require_permission(Resource.SUPPLIERS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    supplier = await SupplierService(db).update(supplier_id, body.model_dump(exclude_unset=True))
    await ActivityService(db).log(
        identity, "update", "supplier",
        resource_id=supplier["_id"],
        description=f"Updated supplier: {supplier['name']}",
        ip_address=client_ip(request),
    )
    return supplier


@suppliers_router.delete("/{supplier_id}")
async def delete_supplier(
    request: Request,
    supplier_id: str,
    identity: Identity = Depends(require_permission(Resource.SUPPLIERS, Action.DELETE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    supplier = await SupplierService(db).delete(supplier_id)
    await ActivityService(db).log(
        identity, "delete", "supplier",
        resource_id=supplier["_id"],
        description=f"Deleted supplier: {supplier['name']}",
        ip_address=client_ip(request),
    )
    return {"success": True}
