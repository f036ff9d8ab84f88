from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.config import get_database, settings
from autoshop.rbac import Action, Identity, Resource, require_permission
from .service import NotificationService

notifications_router = APIRouter()


@notifications_router.get("")
async def list_notifications(
    identity: Identity = Depends(require_permission(Resource.NOTIFICATIONS, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Latest notifications, newest first."""
    svc = NotificationService(db)
    return await svc.list(limit=settings.notifications_limit)


@notifications_router.patch("/mark-all-read")
async def mark_all_read(
    identity: Identity = Depends(require_permission(Resource.NOTIFICATIONS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    count = await NotificationService(db).mark_all_read()
    return {"success": True, "updated": count}


@notifications_router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    identity: Identity = Depends(require_permission(Resource.NOTIFICATIONS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await NotificationService(db).mark_read(notification_id)


@notifications_router.post("/check-overdue-payments")
async def check_overdue_payments(
    identity: Identity = Depends(require_permission(Resource.NOTIFICATIONS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    result = await NotificationService(db).check_overdue_payments(settings.overdue_payment_days)
    return {"success": True, **result}
