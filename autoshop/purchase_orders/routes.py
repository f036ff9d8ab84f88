from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from .schemas import CreatePurchaseOrderRequest, UpdatePurchaseOrderRequest
from .service import PurchaseOrderService

purchase_orders_router = APIRouter()


@purchase_orders_router.get("")
async def list_purchase_orders(
    identity: Identity = Depends(require_permission(Resource.PURCHASE_ORDERS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await PurchaseOrderService(db).list()


@purchase_orders_router.post("", status_code=201)
async def create_purchase_order(
    request: Request,
    body: CreatePurchaseOrderRequest,
    identity: Identity = Depends(require_permission(Resource.PURCHASE_ORDERS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    data = to_document(body)
    po = await PurchaseOrderService(db).create_po(data, created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "purchase_order",
        resource_id=po["_id"],
        description=f"Created purchase order {po['po_number']}",
        details={"total_amount": po["total_amount"]},
        ip_address=client_ip(request),
    )
    return po


@purchase_orders_router.patch("/{po_id}")
async def update_purchase_order(
    request: Request,
    po_id: str,
    body: UpdatePurchaseOrderRequest,
    identity: Identity = Depends(require_permission(Resource.PURCHASE_ORDERS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = to_document(body, exclude_unset=True)
    po = await PurchaseOrderService(db).update_po(po_id, changes, user_id=identity.user_id)
    await ActivityService(db).log(
        identity, "update", "purchase_order",
        resource_id=po["_id"],
        description=f"Updated purchase order {po['po_number']}",
        details={"status": po.get("status")},
        ip_address=client_ip(request),
    )
    return po
