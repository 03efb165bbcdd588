"""Order creation — command and handler."""

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from orderflow.domain import orderflow
from orderflow.order.order import Order
from orderflow.order_config.order_config import OrderConfig


@orderflow.command(part_of="Order")
class CreateOrder:
    """Place an order that will follow the given order config."""

    order_config_id = Identifier(required=True)
    entities = Text()  # JSON list


@orderflow.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        config = current_domain.repository_for(OrderConfig).get(command.order_config_id)
        order = Order.create(config, entities=command.entities)
        current_domain.repository_for(Order).add(order)
        return str(order.id)
