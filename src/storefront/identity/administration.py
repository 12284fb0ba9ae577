"""User administration by ADMIN principals: create, update, delete."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.password import delete_reset_tokens
from storefront.identity.registration import ensure_email_available
from storefront.identity.user import Gender, Role, User
from storefront.ordering.cart import discard_cart

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class CreateUser:
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=100)
    password_hash: String(required=True, max_length=255)
    phone: String(max_length=20)
    address: String(max_length=255)
    gender: String(choices=Gender)
    role: String(choices=Role, default=Role.USER.value)
    actor: String(max_length=254)


@storefront.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    phone: String(max_length=20)
    address: String(max_length=255)
    gender: String(choices=Gender)
    role: String(choices=Role)
    actor: String(max_length=254)


@storefront.command(part_of="User")
class DeleteUser:
    """Hard-delete an account together with its cart and reset tokens. Orders stay."""

    user_id: Identifier(required=True)
    actor: String(max_length=254)


@storefront.command_handler(part_of=User)
class UserAdministrationHandler:
    @handle(CreateUser)
    def create_user(self, command):
        ensure_email_available(command.email)

        user = User.register(
            email=command.email,
            name=command.name,
            password_hash=command.password_hash,
            phone=command.phone,
            address=command.address,
            gender=command.gender,
            role=command.role,
            actor=command.actor,
        )
        current_domain.repository_for(User).add(user)
        logger.info("user.created_by_admin", user_id=str(user.id), role=user.role, actor=command.actor)
        return str(user.id)

    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        # Omitted fields keep their current value
        changes = {
            attr: getattr(command, attr)
            for attr in ("name", "phone", "address", "gender", "role")
            if getattr(command, attr) is not None
        }
        user.update_details(actor=command.actor, **changes)
        repo.add(user)

    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        removed_lines = discard_cart(user.id)
        removed_tokens = delete_reset_tokens(user.id)
        repo._dao.delete(user)
        logger.info(
            "user.deleted",
            user_id=str(user.id),
            actor=command.actor,
            cart_lines_removed=removed_lines,
            reset_tokens_removed=removed_tokens,
        )
