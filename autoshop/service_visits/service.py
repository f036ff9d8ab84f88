"""
Service visits: vehicles moving through the workshop.

Collection: service_visits

Status pipeline: inquired → working → waiting → completed. Any transition
is accepted. Entering `completed` credits the customer's loyalty once.
"""

import re
from typing import Optional

from autoshop.customers import CustomerService
from autoshop.notifications import NotificationService
from autoshop.utils.crud import CollectionService
from autoshop.utils.exceptions import BadRequest
from .schemas import VisitStatus

MAX_IMAGE_MB = 15
_DATA_URI = re.compile(r"^data:image/(png|jpeg|jpg|gif|webp);base64,")
_BASE64 = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")


def validate_images(images: Optional[list[str]]) -> bool:
    """True when every non-empty entry is a base64 image data URI of at most 15 MB."""
    if not images:
        return True
    for img in images:
        if not img:
            continue
        match = _DATA_URI.match(img)
        if not match:
            return False
        content = img[match.end():]
        if not _BASE64.match(content):
            return False
        if len(content) * 0.75 / (1024 * 1024) > MAX_IMAGE_MB:
            return False
    return True


def check_images(data: dict) -> None:
    for field, label in (("before_images", "before"), ("after_images", "after")):
        if not validate_images(data.get(field)):
            raise BadRequest(
                f"Invalid {label} images: must be valid base64 image data "
                f"(PNG, JPEG, GIF, WebP) under {MAX_IMAGE_MB}MB per image"
            )


class ServiceVisitService(CollectionService):
    collection_name = "service_visits"
    entity = "Service visit"

    def __init__(self, db):
        super().__init__(db)
        self.customers = CustomerService(db)
        self.notifications = NotificationService(db)

    async def create_visit(self, data: dict, created_by: str | None = None) -> dict:
        check_images(data)
        visit = await self.create(data, created_by=created_by)
        customer_name = await self.customers.name_of(visit.get("customer_id"))
        await self.notifications.notify_service_visit_status(visit, customer_name, visit["status"])
        if visit["status"] == VisitStatus.COMPLETED.value:
            await self.customers.record_completed_visit(visit["customer_id"], visit.get("total_amount", 0))
        return visit

    async def update_visit(self, visit_id: str, changes: dict) -> dict:
        check_images(changes)
        previous = await self._find_raw(visit_id)
        if not previous:
            raise self._not_found()

        visit = await self.update(visit_id, changes)
        new_status = changes.get("status")
        if new_status and new_status != previous.get("status"):
            customer_name = await self.customers.name_of(visit.get("customer_id"))
            await self.notifications.notify_service_visit_status(visit, customer_name, new_status)
            if new_status == VisitStatus.COMPLETED.value and visit.get("customer_id"):
                await self.customers.record_completed_visit(
                    visit["customer_id"], visit.get("total_amount", 0)
                )
        return visit
