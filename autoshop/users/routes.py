"""
User management: Admin role only.

    POST    /        provision an account
    GET     /        list accounts (newest first)
    PATCH   /{id}    change name, role or active flag
    DELETE  /{id}    hard delete (never your own account)
"""

from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.auth import AccountRepository, AuthService, get_account_repository, get_auth_service
from autoshop.config import get_database
from autoshop.rbac import Identity, Role, require_role
from autoshop.utils import to_object_id
from autoshop.utils.exceptions import CannotDeleteSelf, NotFound
from .schemas import CreateUserRequest, UpdateUserRequest

users_router = APIRouter()

admin_only = require_role(Role.ADMIN)


@users_router.post("")
async def create_user(
    request: Request,
    body: CreateUserRequest,
    identity: Identity = Depends(admin_only),
    svc: AuthService = Depends(get_auth_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    account = await svc.create_account(
        email=body.email, password=body.password, name=body.name, role=body.role,
    )
    await ActivityService(db).log(
        identity, "create", "user",
        resource_id=account.id,
        description=f"Created user: {account.email}",
        details={"role": account.role.value},
        ip_address=client_ip(request),
    )
    return account.public()


@users_router.get("")
async def list_users(
    identity: Identity = Depends(admin_only),
    accounts: AccountRepository = Depends(get_account_repository),
):
    return [a.public() for a in await accounts.list()]


@users_router.patch("/{user_id}")
async def update_user(
    request: Request,
    user_id: str,
    body: UpdateUserRequest,
    identity: Identity = Depends(admin_only),
    accounts: AccountRepository = Depends(get_account_repository),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    account = await accounts.update(user_id, body.model_dump(exclude_unset=True))
    if account is None:
        raise NotFound("User not found")
    await ActivityService(db).log(
        identity, "update", "user",
        resource_id=account.id,
        description=f"Updated user: {account.email}",
        details=body.model_dump(exclude_unset=True, mode="json"),
        ip_address=client_ip(request),
    )
    return account.public()


@users_router.delete("/{user_id}")
async def delete_user(
    request: Request,
    user_id: str,
    identity: Identity = Depends(admin_only),
    accounts: AccountRepository = Depends(get_account_repository),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    target = to_object_id(user_id)
    if target is not None and target == to_object_id(identity.user_id):
        raise CannotDeleteSelf()
    if not await accounts.delete(user_id):
        raise NotFound("User not found")
    await ActivityService(db).log(
        identity, "delete", "user",
        resource_id=user_id,
        description=f"Deleted user {user_id}",
        ip_address=client_ip(request),
    )
    return {"success": True}
