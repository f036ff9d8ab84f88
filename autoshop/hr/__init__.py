from .service import AttendanceService, LeaveService, TaskService, leave_action, task_action
from .routes import attendance_router, leaves_router, tasks_router

__all__ = [
    "AttendanceService",
    "LeaveService",
    "TaskService",
    "leave_action",
    "task_action",
    "attendance_router",
    "leaves_router",
    "tasks_router",
]
