"""
HR routes.

    /api/attendance   GET (employee_id, start_date, end_date), POST, PATCH /{id}
    /api/leaves       GET (employee_id, status), POST, PATCH /{id}
    /api/tasks        GET (assigned_to, status), POST, PATCH /{id}
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_permission
from autoshop.utils import to_document
from .schemas import (
    CreateAttendanceRequest,
    CreateLeaveRequest,
    CreateTaskRequest,
    LeaveStatus,
    TaskStatus,
    UpdateAttendanceRequest,
    UpdateLeaveRequest,
    UpdateTaskRequest,
)
from .service import AttendanceService, LeaveService, TaskService, leave_action, task_action

attendance_router = APIRouter()
leaves_router = APIRouter()
tasks_router = APIRouter()


# ── Attendance ───────────────────────────────────────────────

@attendance_router.get("")
async def list_attendance(
    identity: Identity = Depends(require_permission(Resource.ATTENDANCE, Action.READ)),
    employee_id: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await AttendanceService(db).list_attendance(employee_id, start_date, end_date)


@attendance_router.post("", status_code=201)
async def create_attendance(
    request: Request,
    body: CreateAttendanceRequest,
    identity: Identity = Depends(require_permission(Resource.ATTENDANCE, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    record = await AttendanceService(db).create(to_document(body), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "attendance",
        resource_id=record["_id"],
        description=f"Marked {record['status']} for employee {record['employee_id']}",
        ip_address=client_ip(request),
    )
    return record


@attendance_router.patch("/{attendance_id}")
async def update_attendance(
    request: Request,
    attendance_id: str,
    body: UpdateAttendanceRequest,
    identity: Identity = Depends(require_permission(Resource.ATTENDANCE, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    record = await AttendanceService(db).update(attendance_id, to_document(body, exclude_unset=True))
    await ActivityService(db).log(
        identity, "update", "attendance",
        resource_id=record["_id"],
        description=f"Updated attendance for employee {record['employee_id']}",
        details={"status": record.get("status")},
        ip_address=client_ip(request),
    )
    return record


# ── Leaves ───────────────────────────────────────────────────

@leaves_router.get("")
async def list_leaves(
    identity: Identity = Depends(require_permission(Resource.LEAVES, Action.READ)),
    employee_id: Optional[str] = Query(None),
    status: Optional[LeaveStatus] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await LeaveService(db).list_leaves(employee_id, status.value if status else None)


@leaves_router.post("", status_code=201)
async def create_leave(
    request: Request,
    body: CreateLeaveRequest,
    identity: Identity = Depends(require_permission(Resource.LEAVES, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    leave = await LeaveService(db).create(to_document(body), created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "leave",
        resource_id=leave["_id"],
        description=f"Created leave request for employee {leave['employee_id']}",
        details={"type": leave["leave_type"], "status": leave["status"]},
        ip_address=client_ip(request),
    )
    return leave


@leaves_router.patch("/{leave_id}")
async def update_leave(
    request: Request,
    leave_id: str,
    body: UpdateLeaveRequest,
    identity: Identity = Depends(require_permission(Resource.LEAVES, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = to_document(body, exclude_unset=True)
    if body.status in (LeaveStatus.APPROVED, LeaveStatus.REJECTED) and not body.approved_by:
        changes["approved_by"] = identity.user_id
    leave = await LeaveService(db).update(leave_id, changes)

    action = leave_action(changes.get("status"))
    verb = {"approve": "Approved", "reject": "Rejected"}.get(action, "Updated")
    await ActivityService(db).log(
        identity, action, "leave",
        resource_id=leave["_id"],
        description=f"{verb} leave request for employee {leave['employee_id']}",
        details={"status": leave["status"], "type": leave["leave_type"]},
        ip_address=client_ip(request),
    )
    return leave


# ── Tasks ────────────────────────────────────────────────────

@tasks_router.get("")
async def list_tasks(
    identity: Identity = Depends(require_permission(Resource.TASKS, Action.READ)),
    assigned_to: Optional[str] = Query(None),
    status: Optional[TaskStatus] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await TaskService(db).list_tasks(assigned_to, status.value if status else None)


@tasks_router.post("", status_code=201)
async def create_task(
    request: Request,
    body: CreateTaskRequest,
    identity: Identity = Depends(require_permission(Resource.TASKS, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    data = to_document(body) | {"assigned_by": identity.user_id}
    task = await TaskService(db).create(data, created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "task",
        resource_id=task["_id"],
        description=f"Created task: {task['title']}",
        details={"priority": task["priority"], "status": task["status"]},
        ip_address=client_ip(request),
    )
    return task


@tasks_router.patch("/{task_id}")
async def update_task(
    request: Request,
    task_id: str,
    body: UpdateTaskRequest,
    identity: Identity = Depends(require_permission(Resource.TASKS, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = to_document(body, exclude_unset=True)
    task = await TaskService(db).update(task_id, changes)
    action = task_action(changes.get("status"))
    await ActivityService(db).log(
        identity, action, "task",
        resource_id=task["_id"],
        description=f"{'Completed' if action == 'complete' else 'Updated'} task: {task['title']}",
        details={"status": task["status"], "priority": task["priority"]},
        ip_address=client_ip(request),
    )
    return task
