"""
HR records: attendance, leave requests and tasks.

Collections: attendance, leaves, tasks
"""

from datetime import datetime
from typing import Optional

from autoshop.utils.crud import CollectionService


def leave_action(status: Optional[str]) -> str:
    """Activity verb for a leave update."""
    return {"approved": "approve", "rejected": "reject"}.get(status or "", "update")


def task_action(status: Optional[str]) -> str:
    return "complete" if status == "completed" else "update"


class AttendanceService(CollectionService):
    collection_name = "attendance"
    entity = "Attendance record"

    async def list_attendance(
        self,
        employee_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[dict]:
        filters: dict = {}
        if employee_id:
            filters["employee_id"] = employee_id
        if start_date and end_date:
            filters["date"] = {"$gte": start_date, "$lte": end_date}
        return await self.list(filters, sort_field="date")


class LeaveService(CollectionService):
    collection_name = "leaves"
    entity = "Leave request"

    async def list_leaves(self, employee_id: Optional[str] = None, status: Optional[str] = None) -> list[dict]:
        filters: dict = {}
        if employee_id:
            filters["employee_id"] = employee_id
        if status:
            filters["status"] = status
        return await self.list(filters)


class TaskService(CollectionService):
    collection_name = "tasks"
    entity = "Task"

    async def list_tasks(self, assigned_to: Optional[str] = None, status: Optional[str] = None) -> list[dict]:
        filters: dict = {}
        if assigned_to:
            filters["assigned_to"] = assigned_to
        if status:
            filters["status"] = status
        return await self.list(filters)
