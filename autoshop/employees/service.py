"""Employee records. Collection: employees"""

from autoshop.rbac import Role
from autoshop.utils import serialize_mongo_doc
from autoshop.utils.crud import CollectionService

SERVICE_HANDLER_ROLES = (Role.ADMIN.value, Role.SERVICE_STAFF.value)


class EmployeeService(CollectionService):
    collection_name = "employees"
    entity = "Employee"

    async def service_handlers(self) -> list[dict]:
        """Active employees who can be assigned to a service visit, by name."""
        cursor = self.collection.find(
            {"role": {"$in": list(SERVICE_HANDLER_ROLES)}, "is_active": True}
        ).sort("name", 1)
        return [serialize_mongo_doc(d) async for d in cursor]
