"""Domain events for the OrderConfig aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from orderflow.domain import orderflow


@orderflow.event(part_of="OrderConfig")
class OrderConfigCreated:
    """A new order workflow was authored for a company."""

    __version__ = 1

    order_config_id = Identifier(required=True)
    company_id = Identifier()
    name = String(required=True, max_length=255)
    namespace = String(required=True, max_length=512)
    key = String(required=True, max_length=255)
    version = String(required=True, max_length=50)
    status = String(required=True, max_length=50)
    created_at = DateTime(required=True)


@orderflow.event(part_of="OrderConfig")
class OrderConfigDetailsUpdated:
    """Descriptive fields of an order config changed. Namespace and key never do."""

    __version__ = 1

    order_config_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    tags = Text()
    entities = Text()
    core_service = Boolean()
    updated_at = DateTime(required=True)


@orderflow.event(part_of="OrderConfig")
class OrderConfigFlowUpdated:
    """The activity flow of an order config was replaced."""

    __version__ = 1

    order_config_id = Identifier(required=True)
    flow = Text(required=True)
    activity_count = Integer(required=True)
    updated_at = DateTime(required=True)


@orderflow.event(part_of="OrderConfig")
class OrderConfigPublished:
    __version__ = 1

    order_config_id = Identifier(required=True)
    version = String(required=True, max_length=50)
    published_at = DateTime(required=True)


@orderflow.event(part_of="OrderConfig")
class OrderConfigUnpublished:
    __version__ = 1

    order_config_id = Identifier(required=True)
    version = String(required=True, max_length=50)
    unpublished_at = DateTime(required=True)
