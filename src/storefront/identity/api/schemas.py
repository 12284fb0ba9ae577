"""Pydantic request/response schemas for the auth, user and admin-user APIs."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.identity.user import Gender, Role

MIN_PASSWORD_LENGTH = 6

# --- Request Schemas ---


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "jane@example.com", "password": "secret123"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "password": "secret123",
                    "phone": "0901234567",
                    "gender": "FEMALE",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    phone: str | None = Field(None, max_length=20)
    gender: Gender | None = None


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=254)


class ResetPasswordRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane@example.com", "code": "48213", "new_password": "n3wpass"}]}
    }

    email: str = Field(..., max_length=254)
    code: str = Field(..., min_length=5, max_length=10)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Jane Smith", "phone": "0907654321", "address": "12 Nguyen Hue, HCMC", "gender": "FEMALE"}]
        }
    }

    name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=255)
    gender: Gender | None = None


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=255)
    gender: Gender | None = None
    role: Role = Role.USER


class UpdateUserRequest(BaseModel):
    id: str
    name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=255)
    gender: Gender | None = None
    role: Role | None = None


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    phone: str | None = None
    address: str | None = None
    avatar: str | None = None
    role: str
    gender: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    updated_by: str | None = None

    @classmethod
    def from_user(cls, user) -> UserResponse:
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone=user.phone,
            address=user.address,
            avatar=user.avatar,
            role=user.role,
            gender=user.gender,
            created_at=user.created_at,
            updated_at=user.updated_at,
            created_by=user.created_by,
            updated_by=user.updated_by,
        )


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    user: UserResponse
