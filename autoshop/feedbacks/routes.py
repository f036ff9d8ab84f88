from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from autoshop.utils.crud import CollectionService
from .schemas import CreateFeedbackRequest, FeedbackStatus, FeedbackType, UpdateFeedbackRequest

feedbacks_router = APIRouter()


class FeedbackService(CollectionService):
    collection_name = "feedbacks"
    entity = "Feedback"


@feedbacks_router.get("")
async def list_feedbacks(
    identity: Identity = Depends(require_permission(Resource.FEEDBACKS, Action.READ)),
    customer_id: Optional[str] = Query(None),
    type: Optional[FeedbackType] = Query(None),
    status: Optional[FeedbackStatus] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    filters: dict = {}
    if customer_id:
        filters["customer_id"] = customer_id
    if type:
        filters["type"] = type.value
    if status:
        filters["status"] = status.value
    return await FeedbackService(db).list(filters)


@feedbacks_router.post("", status_code=201)
async def create_feedback(
    request: Request,
    body: CreateFeedbackRequest,
    identity: Identity = Depends(require_permission(Resource.FEEDBACKS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    feedback = await FeedbackService(db).create(to_document(body), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "feedback",
        resource_id=feedback["_id"],
        description=f"Recorded {feedback['type']} from customer {feedback['customer_id']}",
        ip_address=client_ip(request),
    )
    return feedback


@feedbacks_router.patch("/{feedback_id}")
async def update_feedback(
    request: Request,
    feedback_id: str,
    body: UpdateFeedbackRequest,
    identity: Identity = Depends(require_permission(Resource.FEEDBACKS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = to_document(body, exclude_unset=True)
    feedback = await FeedbackService(db).update(feedback_id, changes)
    await ActivityService(db).log(
        identity, "update", "feedback",
        resource_id=feedback["_id"],
        description=f"Updated feedback {feedback['_id']}",
        details=changes,
        ip_address=client_ip(request),
    )
    return feedback
