from .roles import Action, DEFAULT_GRANTS, Resource, Role
from .identity import Identity
from .permissions import (
    DEFAULT_PERMISSION_TABLE,
    PermissionTable,
    check_permission,
    check_role,
    ensure_authenticated,
)
from .dependencies import (
    get_identity,
    get_permission_table,
    require_auth,
    require_permission,
    require_role,
)

__all__ = [
    "Action",
    "Resource",
    "Role",
    "Identity",
    "DEFAULT_GRANTS",
    "DEFAULT_PERMISSION_TABLE",
    "PermissionTable",
    "check_permission",
    "check_role",
    "ensure_authenticated",
    "get_identity",
    "get_permission_table",
    "require_auth",
    "require_permission",
    "require_role",
]
