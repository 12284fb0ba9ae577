"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.queries import find_user_by_email
from storefront.identity.user import Gender, User


@storefront.command(part_of="User")
class RegisterUser:
    """Self-service sign-up. The password arrives already hashed."""

    email: String(required=True, max_length=254)
    name: String(required=True, max_length=100)
    password_hash: String(required=True, max_length=255)
    phone: String(max_length=20)
    gender: String(choices=Gender)


def ensure_email_available(email):
    if find_user_by_email(email) is not None:
        raise ValidationError({"email": [f"Email {email} already exists"]})


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        ensure_email_available(command.email)

        user = User.register(
            email=command.email,
            name=command.name,
            password_hash=command.password_hash,
            phone=command.phone,
            gender=command.gender,
        )
        current_domain.repository_for(User).add(user)
        return str(user.id)
