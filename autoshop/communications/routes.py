"""
Customer communication log (calls, messages, visits). Records only;
nothing is delivered from here.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from autoshop.utils.crud import CollectionService
from .schemas import CreateCommunicationRequest

communications_router = APIRouter()


class CommunicationService(CollectionService):
    collection_name = "communication_logs"
    entity = "Communication log"


@communications_router.get("")
async def list_communications(
    identity: Identity = Depends(require_permission(Resource.COMMUNICATIONS, Action.READ)),
    customer_id: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    filters = {"customer_id": customer_id} if customer_id else {}
    return await CommunicationService(db).list(filters, sort_field="date")


@communications_router.post("", status_code=201)
async def create_communication(
    request: Request,
    body: CreateCommunicationRequest,
    identity: Identity = Depends(require_permission(Resource.COMMUNICATIONS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    data = to_document(body)
    data["date"] = body.date or datetime.now(timezone.utc)
    data["handled_by"] = body.handled_by or identity.user_id
    log = await CommunicationService(db).create(data, created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "communication",
        resource_id=log["_id"],
        description=f"Logged {log['channel']} with customer {log['customer_id']}",
        ip_address=client_ip(request),
    )
    return log
