"""
Role, resource and action vocabularies plus the default permission matrix.

Every name is a closed enum: a role, resource or action that is not
listed here cannot be granted, and looking one up simply denies.
"""

from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    INVENTORY_MANAGER = "Inventory Manager"
    SALES_EXECUTIVE = "Sales Executive"
    HR_MANAGER = "HR Manager"
    SERVICE_STAFF = "Service Staff"


class Resource(str, Enum):
    PRODUCTS = "products"
    INVENTORY = "inventory"
    EMPLOYEES = "employees"
    CUSTOMERS = "customers"
    ORDERS = "orders"
    REPORTS = "reports"
    NOTIFICATIONS = "notifications"
    USERS = "users"
    SUPPLIERS = "suppliers"
    PURCHASE_ORDERS = "purchaseOrders"
    ATTENDANCE = "attendance"
    LEAVES = "leaves"
    TASKS = "tasks"
    COMMUNICATIONS = "communications"
    FEEDBACKS = "feedbacks"


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


CRUD = tuple(Action)

# Admin holds every action on every resource as explicit entries.
DEFAULT_GRANTS: dict[Role, dict[Resource, tuple[Action, ...]]] = {
    Role.ADMIN: {resource: CRUD for resource in Resource},
    Role.INVENTORY_MANAGER: {
        Resource.PRODUCTS: CRUD,
        Resource.INVENTORY: CRUD,
    },
    Role.SALES_EXECUTIVE: {
        Resource.CUSTOMERS: CRUD,
        Resource.ORDERS: CRUD,
    },
    Role.HR_MANAGER: {
        Resource.EMPLOYEES: CRUD,
        Resource.ATTENDANCE: CRUD,
    },
    Role.SERVICE_STAFF: {
        Resource.CUSTOMERS: (Action.READ,),
        Resource.ORDERS: (Action.READ, Action.UPDATE),
    },
}
