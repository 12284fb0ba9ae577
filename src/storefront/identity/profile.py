"""Self-service profile update: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import Gender, User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    phone: String(max_length=20)
    address: String(max_length=255)
    gender: String(choices=Gender)
    actor: String(max_length=254)


@storefront.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_details(
            actor=command.actor,
            name=command.name,
            phone=command.phone,
            address=command.address,
            gender=command.gender,
        )
        repo.add(user)
