from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from .schemas import CreateOrderRequest, UpdateOrderRequest
from .service import OrderService

orders_router = APIRouter()


@orders_router.get("")
async def list_orders(
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await OrderService(db).list()


@orders_router.get("/{order_id}")
async def get_order(
    order_id: str,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await OrderService(db).get(order_id)


@orders_router.post("", status_code=201)
async def create_order(
    request: Request,
    body: CreateOrderRequest,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    order = await OrderService(db).create_order(to_document(body), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "order",
        resource_id=order["_id"],
        description=f"Created order {order['invoice_number']} for {order['customer_name']}",
        details={"total": order["total"], "item_count": len(order["items"])},
        ip_address=client_ip(request),
    )
    return order


@orders_router.patch("/{order_id}")
async def update_order(
    request: Request,
    order_id: str,
    body: UpdateOrderRequest,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    order = await OrderService(db).update_order(order_id, to_document(body, exclude_unset=True))
    await ActivityService(db).log(
        identity, "update", "order",
        resource_id=order["_id"],
        description=f"Updated order {order['invoice_number']}",
        details={"payment_status": order.get("payment_status"), "delivery_status": order.get("delivery_status")},
        ip_address=client_ip(request),
    )
    return order


@orders_router.delete("/{order_id}")
async def delete_order(
    request: Request,
    order_id: str,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.DELETE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    order = await OrderService(db).delete(order_id)
    await ActivityService(db).log(
        identity, "delete", "order",
        resource_id=order["_id"],
        description=f"Deleted order {order['invoice_number']}",
        ip_address=client_ip(request),
    )
    return {"success": True}
