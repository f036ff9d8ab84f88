"""
Auth routes.

    POST  /login    email + password → session cookie + user summary
    POST  /logout   destroy the session, clear the cookie
    GET   /me       current user + role permissions
"""

from fastapi import APIRouter, Depends, Request, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from autoshop.activity import ActivityService, client_ip
from autoshop.config import get_database, settings
from autoshop.rbac import Identity, PermissionTable, get_permission_table, require_auth
from autoshop.sessions import new_session_token
from autoshop.utils import Logger
from autoshop.utils.exceptions import InvalidCredentials, NotFound
from .accounts import AccountRepository, get_account_repository
from .schemas import LoginRequest, LoginResponse, MeResponse
from .service import AuthService, get_auth_service

auth_router = APIRouter()
logger = Logger("auth")


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


@auth_router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    svc: AuthService = Depends(get_auth_service),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Verify credentials and start a server-side session."""
    try:
        identity = await svc.authenticate(body.email.strip(), body.password)
    except InvalidCredentials:
        logger.warning(f"Failed login from {client_ip(request)}")
        raise

    store = request.app.state.session_store
    previous = request.state.session_token
    if previous:
        await store.destroy(previous)

    token = new_session_token()
    await store.set(token, identity.to_session())
    _set_session_cookie(response, token)

    await ActivityService(db).log(
        identity, "login", "user",
        resource_id=identity.user_id,
        description=f"{identity.name} logged in",
        ip_address=client_ip(request),
    )
    logger.info(f"Login: user={identity.user_id} role={identity.role.value}")

    return LoginResponse(
        id=identity.user_id,
        email=identity.email,
        name=identity.name,
        role=identity.role.value,
    )


@auth_router.post("/logout")
async def logout(request: Request, response: Response):
    token = request.state.session_token or request.cookies.get(settings.session_cookie_name)
    if token:
        await request.app.state.session_store.destroy(token)
    response.delete_cookie(settings.session_cookie_name)
    if request.state.identity is not None:
        logger.info(f"Logout: user={request.state.identity.user_id}")
    return {"success": True}


@auth_router.get("/me", response_model=MeResponse)
async def me(
    identity: Identity = Depends(require_auth),
    table: PermissionTable = Depends(get_permission_table),
    accounts: AccountRepository = Depends(get_account_repository),
):
    account = await accounts.find_by_id(identity.user_id)
    if account is None:
        raise NotFound("User not found")
    return MeResponse(
        id=account.id,
        email=account.email,
        name=account.name,
        role=account.role.value,
        permissions=table.permissions_for(account.role),
    )
