"""
Permission table and the request-time authorization checks.

The checks are plain functions over an Identity (or None) so they can be
exercised without an HTTP stack; rbac.dependencies adapts them to FastAPI.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Optional, TypeVar

from autoshop.utils.exceptions import Forbidden, Unauthenticated

from .identity import Identity
from .roles import Action, DEFAULT_GRANTS, Resource, Role

E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value) -> Optional[E]:
    try:
        return enum_cls(value)
    except ValueError:
        return None


class PermissionTable:
    """Immutable Role → Resource → {Action} mapping. Missing entries deny."""

    __slots__ = ("_grants",)

    def __init__(self, grants: Mapping[Role, Mapping[Resource, Iterable[Action]]]):
        frozen = {}
        for role, resources in grants.items():
            frozen[Role(role)] = MappingProxyType(
                {
                    Resource(resource): frozenset(Action(a) for a in actions)
                    for resource, actions in resources.items()
                }
            )
        object.__setattr__(self, "_grants", MappingProxyType(frozen))

    def __setattr__(self, name, value):
        raise AttributeError("PermissionTable is immutable")

    def is_allowed(self, role, resource, action) -> bool:
        """True only if the table explicitly grants `action` on `resource` to `role`."""
        role = _coerce(Role, role)
        resource = _coerce(Resource, resource)
        action = _coerce(Action, action)
        if role is None or resource is None or action is None:
            return False
        resources = self._grants.get(role)
        if not resources:
            return False
        return action in resources.get(resource, frozenset())

    def permissions_for(self, role) -> dict[str, list[str]]:
        """Plain-dict view of a role's grants, e.g. for the /me endpoint."""
        role = _coerce(Role, role)
        if role is None or role not in self._grants:
            return {}
        return {
            resource.value: [a.value for a in Action if a in actions]
            for resource, actions in self._grants[role].items()
        }

    @property
    def roles(self) -> frozenset[Role]:
        return frozenset(self._grants)


DEFAULT_PERMISSION_TABLE = PermissionTable(DEFAULT_GRANTS)


# ── Guards ───────────────────────────────────────────────────────


def ensure_authenticated(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise Unauthenticated()
    return identity


def check_role(identity: Optional[Identity], allowed_roles: Iterable[Role]) -> Identity:
    """Pass the identity through if its role is in `allowed_roles`."""
    identity = ensure_authenticated(identity)
    if identity.role not in {Role(r) for r in allowed_roles}:
        raise Forbidden("Insufficient permissions")
    return identity


def check_permission(
    table: PermissionTable,
    identity: Optional[Identity],
    resource: Resource,
    action: Action,
) -> Identity:
    """Pass the identity through if the table grants (resource, action) to its role."""
    identity = ensure_authenticated(identity)
    if not table.is_allowed(identity.role, resource, action):
        raise Forbidden("Insufficient permissions for this action")
    return identity
