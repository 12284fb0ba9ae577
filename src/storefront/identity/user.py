"""User aggregate and PasswordResetToken aggregate.

A User carries identity (email, name, contact details), a bcrypt credential,
a role and audit fields. Audit fields are filled from the ``actor`` passed
into each mutation; nothing here reads an ambient security context.
"""

import secrets
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront
from storefront.shared.clock import as_utc

DEFAULT_AVATAR = "avatar-default.webp"

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class Role(Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class Gender(Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_well_formed_email(email: str) -> bool:
    if any(ch in email for ch in " \t\n") or email.count("@") != 1:
        return False
    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part[0] == "." or local_part[-1] == ".":
        return False
    if not domain_part or "." not in domain_part:
        return False
    if domain_part[0] in ".-" or domain_part[-1] in ".-":
        return False
    return ".." not in email


@storefront.aggregate
class User:
    """A person who can sign in: a shopper (USER) or a back-office operator (ADMIN)."""

    email: String(required=True, max_length=254, unique=True)
    name: String(required=True, max_length=100)
    phone: String(max_length=20)
    address: String(max_length=255)
    avatar: String(max_length=255, default=DEFAULT_AVATAR)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.USER.value)
    gender: String(choices=Gender)
    created_at: DateTime()
    updated_at: DateTime()
    created_by: String(max_length=254)
    updated_by: String(max_length=254)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _is_well_formed_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(
        cls,
        email,
        name,
        password_hash,
        phone=None,
        address=None,
        gender=None,
        role=Role.USER.value,
        actor=None,
    ):
        """Create a new account.

        Self-registration passes no ``actor``; the account is then recorded
        as created by its own email address.
        """
        from storefront.identity.events import UserRegistered

        email = normalize_email(email)
        now = datetime.now(UTC)
        user = cls(
            email=email,
            name=name,
            password_hash=password_hash,
            phone=phone,
            address=address,
            gender=gender,
            role=role or Role.USER.value,
            avatar=DEFAULT_AVATAR,
            created_at=now,
            created_by=actor or email,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                name=user.name,
                role=user.role,
                created_by=user.created_by,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def update_details(
        self,
        actor,
        name=_UNSET,
        phone=_UNSET,
        address=_UNSET,
        gender=_UNSET,
        role=_UNSET,
    ):
        """Apply a partial update. Only the supplied keyword arguments are changed."""
        if name is not _UNSET and name is not None:
            self.name = name
        if phone is not _UNSET:
            self.phone = phone
        if address is not _UNSET:
            self.address = address
        if gender is not _UNSET:
            self.gender = gender
        if role is not _UNSET and role is not None:
            self.role = role
        self._touch(actor)

    def change_password(self, password_hash, actor):
        from storefront.identity.events import PasswordChanged

        self.password_hash = password_hash
        self._touch(actor)
        self.raise_(
            PasswordChanged(
                user_id=self.id,
                changed_by=actor,
                changed_at=self.updated_at,
            )
        )

    def _touch(self, actor):
        self.updated_at = datetime.now(UTC)
        self.updated_by = actor or ""


@storefront.aggregate
class PasswordResetToken:
    """A short-lived numeric code that lets a user set a new password by email."""

    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    token: String(required=True, max_length=10)
    expires_at: DateTime(required=True)
    created_at: DateTime()

    @staticmethod
    def generate_code() -> str:
        """Five-digit code in the range 10000..99999."""
        return str(10000 + secrets.randbelow(90000))

    @classmethod
    def issue(cls, user, ttl_minutes, code=None):
        from storefront.identity.events import PasswordResetRequested

        now = datetime.now(UTC)
        token = cls(
            user_id=user.id,
            email=user.email,
            token=code or cls.generate_code(),
            expires_at=now + timedelta(minutes=ttl_minutes),
            created_at=now,
        )
        token.raise_(
            PasswordResetRequested(
                token_id=token.id,
                user_id=user.id,
                email=user.email,
                name=user.name,
                expires_at=token.expires_at,
            )
        )
        return token

    def is_expired(self, now=None) -> bool:
        return (now or datetime.now(UTC)) >= as_utc(self.expires_at)
