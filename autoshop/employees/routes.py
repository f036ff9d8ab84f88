from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database
from autoshop.rbac import Action, Identity, Resource, require_auth, require_permission
from autoshop.utils import to_document
from .schemas import CreateEmployeeRequest, UpdateEmployeeRequest
from .service import EmployeeService

employees_router = APIRouter()
service_handlers_router = APIRouter()


@service_handlers_router.get("")
async def list_service_handlers(
    identity: Identity = Depends(require_auth),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Any signed-in user may see who can be assigned to a visit."""
    return await EmployeeService(db).service_handlers()


@employees_router.get("")
async def list_employees(
    identity: Identity = Depends(require_permission(Resource.EMPLOYEES, Action.READ)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await EmployeeService(db).list()


@employees_router.post("", status_code=201)
async def create_employee(
    request: Request,
    body: CreateEmployeeRequest,
    identity: Identity = Depends(require_permission(Resource.EMPLOYEES, Action.CREATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    data = to_document(body)
    employee = await EmployeeService(db).create(data, created_by=identity.user_id)
    await ActivityService(db).log(
        identity, "create", "employee",
        resource_id=employee["_id"],
        description=f"Created employee: {employee['name']}",
        details={"role": employee["role"]},
        ip_address=client_ip(request),
    )
    return employee


@employees_router.patch("/{employee_id}")
async def update_employee(
    request: Request,
    employee_id: str,
    body: UpdateEmployeeRequest,
    identity: Identity = Depends(require_permission(Resource.EMPLOYEES, Action.UPDATE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    changes = to_document(body, exclude_unset=True)
    employee = await EmployeeService(db).update(employee_id, changes)
    await ActivityService(db).log(
        identity, "update", "employee",
        resource_id=employee["_id"],
        description=f"Updated employee: {employee['name']}",
        ip_address=client_ip(request),
    )
    return employee


@employees_router.delete("/{employee_id}")
async def delete_employee(
    request: Request,
    employee_id: str,
    identity: Identity = Depends(require_permission(Resource.EMPLOYEES, Action.DELETE)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    employee = await EmployeeService(db).delete(employee_id)
    await ActivityService(db).log(
        identity, "delete", "employee",
        resource_id=employee["_id"],
        description=f"Deleted employee: {employee['name']}",
        ip_address=client_ip(request),
    )
    return {"success": True}
