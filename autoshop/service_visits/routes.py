"""
Service visit routes. Guarded by the `orders` resource, so Service Staff
can follow and update visits without creating or deleting them.
"""

from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from .schemas import CreateServiceVisitRequest, UpdateServiceVisitRequest
from .service import ServiceVisitService

service_visits_router = APIRouter()


@service_visits_router.get("")
async def list_service_visits(
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await ServiceVisitService(db).list()


@service_visits_router.post("", status_code=201)
async def create_service_visit(
    request: Request,
    body: CreateServiceVisitRequest,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    visit = await ServiceVisitService(db).create_visit(
        to_document(body), created_by=identity.user_id
    )
    await ActivityService(db).log(
        identity, "create", "service_visit",
        resource_id=visit["_id"],
        description=f"Created service visit for {visit['vehicle_reg']}",
        details={"status": visit["status"]},
        ip_address=client_ip(request),
    )
    return visit


@service_visits_router.patch("/{visit_id}")
async def update_service_visit(
    request: Request,
    visit_id: str,
    body: UpdateServiceVisitRequest,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    visit = await ServiceVisitService(db).update_visit(
        visit_id, to_document(body, exclude_unset=True)
    )
    await ActivityService(db).log(
        identity, "update", "service_visit",
        resource_id=visit["_id"],
        description=f"Updated service visit for {visit['vehicle_reg']}",
        details={"status": visit["status"]},
        ip_address=client_ip(request),
    )
    return visit


@service_visits_router.delete("/{visit_id}")
async def delete_service_visit(
    request: Request,
    visit_id: str,
    identity: Identity = Depends(require_permission(Resource.ORDERS, Action.DELETE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    visit = await ServiceVisitService(db).delete(visit_id)
    await ActivityService(db).log(
        identity, "delete", "service_visit",
        resource_id=visit["_id"],
        description=f"Deleted service visit for {visit['vehicle_reg']}",
        ip_address=client_ip(request),
    )
    return {"success": True}
