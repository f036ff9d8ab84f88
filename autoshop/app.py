"""
AutoShop Management: Main application.

Assembles all packages: config, sessions, RBAC, auth, users and the
shop resource routers.
"""

import time
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from autoshop.config import settings, db_manager
from autoshop.middleware import SessionMiddleware
from autoshop.rbac import DEFAULT_PERMISSION_TABLE, PermissionTable
from autoshop.sessions import SessionStore, build_session_store
from autoshop.utils import Logger, error_response, set_log_level
from autoshop.utils.exceptions import Unauthenticated

# ── Route imports ────────────────────────────────────────────────
from autoshop.auth import auth_router
from autoshop.users import users_router
from autoshop.activity import activity_router
from autoshop.products import products_router
from autoshop.customers import customers_router
from autoshop.employees import employees_router, service_handlers_router
from autoshop.service_visits import service_visits_router
from autoshop.orders import orders_router
from autoshop.inventory import inventory_router
from autoshop.suppliers import suppliers_router
from autoshop.purchase_orders import purchase_orders_router
from autoshop.hr import attendance_router, leaves_router, tasks_router
from autoshop.communications import communications_router
from autoshop.feedbacks import feedbacks_router
from autoshop.notifications import notifications_router
from autoshop.reports import reports_router

logger = Logger("request")

# Routes an anonymous caller may reach; everything else answers 401 first
PUBLIC_PATHS = frozenset({"/api/auth/login", "/api/auth/logout", "/health"})


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request: method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "unknown"

        logger.debug(f"--> {method} {path} (from {client})")

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            logger.error(f"    Exception: {exc}")
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


# ── Lifespan ─────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    await db_manager.connect()
    yield
    db_manager.close()


# ── App factory ──────────────────────────────────────────────────
def create_app(
    permission_table: Optional[PermissionTable] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Build the application.

    permission_table and session_store default to the built-in role grants
    and the store named by settings.session_backend.
    """
    set_log_level(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Auto shop management with role-based access control",
        docs_url="/api/docs",
        lifespan=lifespan,
    )
    app.state.permission_table = permission_table or DEFAULT_PERMISSION_TABLE
    app.state.session_store = session_store or build_session_store(
        settings.session_backend, settings.session_ttl_minutes
    )

    # ── CORS (must be first) ─────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
    )

    # ── Request logging (runs on every request) ──────────────
    app.add_middleware(RequestLoggingMiddleware)

    # ── Session → request.state.identity ─────────────────────
    app.add_middleware(SessionMiddleware)

    # ── Exception handlers ───────────────────────────────────
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = error_response(str(exc.detail), code=exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # FastAPI parses the body before running the route guards
        if getattr(request.state, "identity", None) is None and request.url.path not in PUBLIC_PATHS:
            denied = Unauthenticated()
            return error_response(denied.detail, code=denied.status_code)
        return error_response(
            "Invalid request", code=400, details=jsonable_encoder(exc.errors())
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        if settings.debug:
            return error_response("Internal server error", code=500, details=str(exc))
        return error_response("Internal server error", code=500)

    # ── Routes ───────────────────────────────────────────────
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(users_router, prefix="/api/users", tags=["Users"])
    app.include_router(activity_router, prefix="/api/activity-logs", tags=["Activity Logs"])
    app.include_router(products_router, prefix="/api/products", tags=["Products"])
    app.include_router(customers_router, prefix="/api/customers", tags=["Customers"])
    app.include_router(employees_router, prefix="/api/employees", tags=["Employees"])
    app.include_router(
        service_handlers_router,
        prefix="/api/service-handlers",
        tags=["Employees"],
    )
    app.include_router(
        service_visits_router,
        prefix="/api/service-visits",
        tags=["Service Visits"],
    )
    app.include_router(orders_router, prefix="/api/orders", tags=["Orders"])
    app.include_router(
        inventory_router,
        prefix="/api/inventory-transactions",
        tags=["Inventory"],
    )
    app.include_router(suppliers_router, prefix="/api/suppliers", tags=["Suppliers"])
    app.include_router(
        purchase_orders_router,
        prefix="/api/purchase-orders",
        tags=["Purchase Orders"],
    )
    app.include_router(attendance_router, prefix="/api/attendance", tags=["HR"])
    app.include_router(leaves_router, prefix="/api/leaves", tags=["HR"])
    app.include_router(tasks_router, prefix="/api/tasks", tags=["HR"])
    app.include_router(
        communications_router,
        prefix="/api/communication-logs",
        tags=["Communications"],
    )
    app.include_router(feedbacks_router, prefix="/api/feedbacks", tags=["Feedbacks"])
    app.include_router(
        notifications_router,
        prefix="/api/notifications",
        tags=["Notifications"],
    )
    app.include_router(reports_router, prefix="/api/reports", tags=["Reports"])

    # ── Health check ─────────────────────────────────────────
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "database": db_manager.is_connected,
        }

    return app


# ── Create the app instance ──────────────────────────────────────
app = create_app()
