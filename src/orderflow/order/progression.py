"""Order progression — moving an order along its flow.

Advancing follows the flow graph from the order's current activity. Canceling
and completing use the synthesized terminal activities, which every flow
supports whether or not it declares them.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from orderflow.domain import orderflow
from orderflow.order.order import Order
from orderflow.order_config.order_config import OrderConfig
from orderflow.utils.logging import bind_order_context, clear_order_context

logger = structlog.get_logger(__name__)


@orderflow.command(part_of="Order")
class AdvanceOrder:
    """Move the order to a following activity.

    Without ``activity_code`` the first following activity is taken; with it,
    the code must name one of the branches that follow the current activity.
    """

    order_id = Identifier(required=True)
    activity_code = String(max_length=100)


@orderflow.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)


@orderflow.command(part_of="Order")
class CompleteOrder:
    order_id = Identifier(required=True)


def _select_next(config, order, activity_code=None):
    candidates = config.next_activity(order)
    if activity_code:
        activity = next((a for a in candidates if a.code == activity_code), None)
        if activity is None:
            raise ValidationError({"activity_code": [f"Activity '{activity_code}' does not follow '{order.status}'"]})
        return activity

    if not candidates:
        raise ValidationError({"status": [f"No activity follows '{order.status}'"]})
    return candidates[0]


@orderflow.command_handler(part_of=Order)
class OrderProgressionHandler:
    def _load(self, order_id):
        order = current_domain.repository_for(Order).get(order_id)
        config = current_domain.repository_for(OrderConfig).get(order.order_config_id)
        return order, config

    def _move(self, order, activity):
        bind_order_context(order_id=str(order.id), order_config_id=str(order.order_config_id))
        try:
            previous_status = order.status
            order.update_activity(activity)
            current_domain.repository_for(Order).add(order)
            logger.info(
                "Order activity updated",
                previous_status=previous_status,
                status=activity.code,
                activity=activity.key,
            )
        finally:
            clear_order_context()
        return activity.code

    @handle(AdvanceOrder)
    def advance_order(self, command):
        order, config = self._load(command.order_id)
        activity = _select_next(config, order, command.activity_code)
        return self._move(order, activity)

    @handle(CancelOrder)
    def cancel_order(self, command):
        order, config = self._load(command.order_id)
        return self._move(order, config.get_canceled_activity())

    @handle(CompleteOrder)
    def complete_order(self, command):
        order, config = self._load(command.order_id)
        return self._move(order, config.get_completed_activity())
