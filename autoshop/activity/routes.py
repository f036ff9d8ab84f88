"""
Activity log routes.

    GET   /   Admin only: filter by role, resource, date range
    POST  /   Any signed-in user records an entry for themselves
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.config import get_database
from autoshop.rbac import Identity, Role, require_auth, require_role
from .schemas import CreateActivityRequest
from .service import ActivityService, client_ip

activity_router = APIRouter()


@activity_router.get("")
async def list_activity_logs(
    identity: Identity = Depends(require_role(Role.ADMIN)),
    role: Optional[str] = Query(None),
    resource: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ActivityService(db)
    return await svc.list_logs(
        role=role, resource=resource,
        start_date=start_date, end_date=end_date, limit=limit,
    )


@activity_router.post("")
async def create_activity_log(
    request: Request,
    body: CreateActivityRequest,
    identity: Identity = Depends(require_auth),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ActivityService(db)
    return await svc.log(
        identity,
        action=body.action,
        resource=body.resource,
        resource_id=body.resource_id,
        description=body.description,
        details=body.details,
        ip_address=client_ip(request),
    )
