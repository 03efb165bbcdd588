"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from orderflow.domain import orderflow


@orderflow.event(part_of="Order")
class OrderCreated:
    """An order was placed against an order config and entered its first activity."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_config_id = Identifier(required=True)
    status = String(required=True, max_length=100)
    entities = Text()
    created_at = DateTime(required=True)


@orderflow.event(part_of="Order")
class OrderActivityUpdated:
    """An order moved to another activity of its flow, or to a terminal one."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_config_id = Identifier(required=True)
    previous_status = String(max_length=100)
    status = String(required=True, max_length=100)
    activity_key = String(required=True, max_length=255)
    details = Text()
    updated_at = DateTime(required=True)
