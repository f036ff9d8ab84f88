from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from .schemas import CreateCustomerRequest, UpdateCustomerRequest
from .service import CustomerService

customers_router = APIRouter()


@customers_router.get("")
async def list_customers(
    identity: Identity = Depends(require_permission(Resource.CUSTOMERS, Action.READ)),
    q: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """List customers, optionally searching name, phone, email and vehicle reg."""
    return await CustomerService(db).search(q)


@customers_router.get("/{customer_id}")
async def get_customer(
    customer_id: str,
    identity: Identity = Depends(require_permission(Resource.CUSTOMERS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await CustomerService(db).get(customer_id)


@customers_router.post("", status_code=201)
async def create_customer(
    request: Request,
    body: CreateCustomerRequest,
    identity: Identity = Depends(require_permission(Resource.CUSTOMERS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    customer = await CustomerService(db).create_customer(body.model_dump(), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "customer",
        resource_id=customer["_id"],
        description=f"Created customer: {customer['name']}",
        ip_address=client_ip(request),
    )
    return customer


@customers_router.patch("/{customer_id}")
async def update_customer(
    request: Request,
    customer_id: str,
    body: UpdateCustomerRequest,
    identity: Identity = Depends(require_permission(Resource.CUSTOMERS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = body.model_dump(exclude_unset=True)
    customer = await CustomerService(db).update_customer(customer_id, changes)
    await ActivityService(db).log(
        identity, "update", "customer",
        resource_id=customer["_id"],
        description=f"Updated customer: {customer['name']}",
        details=changes,
        ip_address=client_ip(request),
    )
    return customer


@customers_router.delete("/{customer_id}")
async def delete_customer(
    request: Request,
    customer_id: str,
    identity: Identity = Depends(require_permission(Resource.CUSTOMERS, Action.DELETE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    customer = await CustomerService(db).delete(customer_id)
    await ActivityService(db).log(
        identity, "delete", "customer",
        resource_id=customer["_id"],
        description=f"Deleted customer: {customer['name']}",
        ip_address=client_ip(request),
    )
    return {"success": True}
