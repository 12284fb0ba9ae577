"""Order cancellation by its owner, and status changes by administrators."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    actor: String(max_length=254)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)
    actor: String(max_length=254)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if str(order.user_id) != str(command.user_id):
            raise ObjectNotFoundError(f"Order {command.order_id} not found")

        order.cancel(actor=command.actor)
        repo.add(order)
        logger.info("order.cancelled", order_id=str(order.id), actor=command.actor)

    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.change_status(command.status, actor=command.actor)
        repo.add(order)
        logger.info(
            "order.status_changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
            actor=command.actor,
        )
