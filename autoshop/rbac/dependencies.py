"""
FastAPI dependencies that gate route handlers.

Usage:
    @router.get("")
    async def list_products(
        identity: Identity = Depends(require_permission(Resource.PRODUCTS, Action.READ)),
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        ...

Declare the guard before any database dependency: FastAPI resolves
dependencies in order, so a rejected request never reaches the store.
"""

from typing import Optional

from fastapi import Depends, Request

from .identity import Identity

from .permissions import (
    PermissionTable,
    check_permission,
    check_role,
    ensure_authenticated,
)
from .roles import Action, Resource, Role


def get_identity(request: Request) -> Optional[Identity]:
    """Identity attached by SessionMiddleware, or None."""
    return getattr(request.state, "identity", None)


def get_permission_table(request: Request) -> PermissionTable:
    return request.app.state.permission_table


def require_auth(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    return ensure_authenticated(identity)


def require_role(*roles: Role | str):
    allowed = frozenset(Role(r) for r in roles)

    def dependency(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
        return check_role(identity, allowed)

    return dependency


def require_permission(resource: Resource | str, action: Action | str):
    # Resolved at route registration: a typo fails on import, not at request time.
    resource = Resource(resource)
    action = Action(action)

    def dependency(
        identity: Optional[Identity] = Depends(get_identity),
        table: PermissionTable = Depends(get_permission_table),
    ) -> Identity:
        return check_permission(table, identity, resource, action)

    return dependency
