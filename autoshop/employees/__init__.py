from .service import EmployeeService
from .routes import employees_router, service_handlers_router

__all__ = ["EmployeeService", "employees_router", "service_handlers_router"]
