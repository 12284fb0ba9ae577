"""FastAPI endpoints for authentication, user profiles and user administration."""

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.utils.globals import current_domain

from storefront.api.schemas import PageResponse, StatusResponse
from storefront.api.security import Principal, current_principal, require_admin
from storefront.identity.administration import CreateUser, DeleteUser, UpdateUser
from storefront.identity.api.schemas import (
    ChangePasswordRequest,
    CreateUserRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
    UserResponse,
)
from storefront.identity.authentication import authenticate, verify_current_password
from storefront.identity.credentials import hash_password, issue_access_token
from storefront.identity.password import ChangePassword, RequestPasswordReset, redeem_reset_code
from storefront.identity.profile import UpdateProfile
from storefront.identity.queries import get_user, list_users
from storefront.identity.registration import RegisterUser

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
user_router = APIRouter(prefix="/api/users", tags=["users"])
admin_user_router = APIRouter(prefix="/api/admin/users", tags=["admin-users"])


def _enum_value(value):
    return value.value if value is not None else None


# --- Authentication ---


@auth_router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest) -> LoginResponse:
    user = authenticate(body.email, body.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return LoginResponse(access_token=issue_access_token(user), user=UserResponse.from_user(user))


@auth_router.post("/register", status_code=201, response_model=UserResponse)
async def register(body: RegisterRequest) -> UserResponse:
    command = RegisterUser(
        email=body.email,
        name=body.name,
        password_hash=hash_password(body.password),
        phone=body.phone,
        gender=_enum_value(body.gender),
    )
    user_id = current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(get_user(user_id))


@auth_router.get("/account", response_model=UserResponse)
async def account(principal: Principal = Depends(current_principal)) -> UserResponse:
    return UserResponse.from_user(get_user(principal.user_id))


@auth_router.post("/forgot-password", response_model=StatusResponse)
async def forgot_password(body: ForgotPasswordRequest) -> StatusResponse:
    current_domain.process(RequestPasswordReset(email=body.email), asynchronous=False)
    return StatusResponse(message="A reset code has been sent to your email")


@auth_router.post("/reset-password", response_model=StatusResponse)
async def reset_password(body: ResetPasswordRequest) -> StatusResponse:
    redeem_reset_code(body.email, body.code, hash_password(body.new_password))
    return StatusResponse(message="Password has been reset")


@auth_router.post("/change-password", response_model=StatusResponse)
async def change_password(
    body: ChangePasswordRequest,
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    verify_current_password(get_user(principal.user_id), body.current_password)
    command = ChangePassword(
        user_id=principal.user_id,
        password_hash=hash_password(body.new_password),
        actor=principal.email,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Password changed")


# --- Users ---


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(user_id: str, principal: Principal = Depends(current_principal)) -> UserResponse:
    return UserResponse.from_user(get_user(user_id))


@user_router.put("/update-profile", response_model=UserResponse)
async def update_profile(
    body: UpdateProfileRequest,
    principal: Principal = Depends(current_principal),
) -> UserResponse:
    command = UpdateProfile(
        user_id=principal.user_id,
        name=body.name,
        phone=body.phone,
        address=body.address,
        gender=_enum_value(body.gender),
        actor=principal.email,
    )
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(get_user(principal.user_id))


# --- Administration ---


@admin_user_router.get("", response_model=PageResponse[UserResponse])
async def list_all_users(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    role: str | None = None,
    gender: str | None = None,
    principal: Principal = Depends(require_admin),
) -> PageResponse[UserResponse]:
    result = list_users(page=page, size=size, sort=sort, email=email, phone=phone, role=role, gender=gender)
    return PageResponse[UserResponse].of(result, UserResponse.from_user)


@admin_user_router.post("", status_code=201, response_model=UserResponse)
async def create_user(body: CreateUserRequest, principal: Principal = Depends(require_admin)) -> UserResponse:
    command = CreateUser(
        email=body.email,
        name=body.name,
        password_hash=hash_password(body.password),
        phone=body.phone,
        address=body.address,
        gender=_enum_value(body.gender),
        role=body.role.value,
        actor=principal.email,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(get_user(user_id))


@admin_user_router.put("", response_model=UserResponse)
async def update_user(body: UpdateUserRequest, principal: Principal = Depends(require_admin)) -> UserResponse:
    command = UpdateUser(
        user_id=body.id,
        name=body.name,
        phone=body.phone,
        address=body.address,
        gender=_enum_value(body.gender),
        role=_enum_value(body.role),
        actor=principal.email,
    )
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(get_user(body.id))


@admin_user_router.delete("/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str, principal: Principal = Depends(require_admin)) -> StatusResponse:
    current_domain.process(DeleteUser(user_id=user_id, actor=principal.email), asynchronous=False)
    return StatusResponse(message=f"User {user_id} deleted")
