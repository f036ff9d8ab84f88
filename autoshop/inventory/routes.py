"""
Inventory transaction routes.

    GET   ""   list (product_id, type)
    POST  ""   record a stock movement
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.notifications import NotificationService
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from .schemas import CreateTransactionRequest, TransactionType
from .service import InventoryService

inventory_router = APIRouter()


@inventory_router.get("")
async def list_transactions(
    identity: Identity = Depends(require_permission(Resource.INVENTORY, Action.READ)),
    product_id: Optional[str] = Query(None),
    type: Optional[TransactionType] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await InventoryService(db).list_transactions(product_id, type.value if type else None)


@inventory_router.post("", status_code=201)
async def create_transaction(
    request: Request,
    body: CreateTransactionRequest,
    identity: Identity = Depends(require_permission(Resource.INVENTORY, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    transaction, product = await InventoryService(db).record(
        to_document(body), user_id=identity.user_id
    )
    if body.type in (TransactionType.OUT, TransactionType.ADJUSTMENT):
        await NotificationService(db).check_low_stock(product)

    await ActivityService(db).log(
        identity, "create", "inventory_transaction",
        resource_id=transaction["_id"],
        description=f"{body.type.value} {body.quantity} x {product.get('name', 'product')}",
        details={"previous_stock": transaction["previous_stock"], "new_stock": transaction["new_stock"]},
        ip_address=client_ip(request),
    )
    return transaction
