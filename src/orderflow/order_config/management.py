"""Order config management — commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from orderflow.domain import orderflow
from orderflow.order_config.order_config import Company, OrderConfig


@orderflow.command(part_of="OrderConfig")
class CreateOrderConfig:
    """Author a new order workflow for a company."""

    company_id = Identifier()
    company_name = String(required=True, max_length=255)
    author_id = Identifier()
    category_id = Identifier()
    icon_id = Identifier()
    name = String(required=True, max_length=255)
    description = Text()
    flow = Text()  # JSON list of activity objects
    entities = Text()  # JSON list
    tags = Text()  # JSON list
    meta = Text()  # JSON object
    core_service = Boolean(default=False)


@orderflow.command(part_of="OrderConfig")
class UpdateOrderConfigDetails:
    order_config_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    entities = Text()
    tags = Text()
    meta = Text()
    core_service = Boolean()


@orderflow.command(part_of="OrderConfig")
class UpdateOrderConfigFlow:
    order_config_id = Identifier(required=True)
    flow = Text(required=True)


@orderflow.command(part_of="OrderConfig")
class PublishOrderConfig:
    order_config_id = Identifier(required=True)


@orderflow.command(part_of="OrderConfig")
class UnpublishOrderConfig:
    order_config_id = Identifier(required=True)


@orderflow.command_handler(part_of=OrderConfig)
class ManageOrderConfigHandler:
    @handle(CreateOrderConfig)
    def create_order_config(self, command):
        config = OrderConfig.create(
            name=command.name,
            company=Company(company_id=command.company_id, name=command.company_name),
            description=command.description,
            flow=command.flow,
            entities=command.entities,
            tags=command.tags,
            meta=command.meta,
            core_service=bool(command.core_service),
            author_id=command.author_id,
            category_id=command.category_id,
            icon_id=command.icon_id,
        )
        current_domain.repository_for(OrderConfig).add(config)
        return str(config.id)

    @handle(UpdateOrderConfigDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(OrderConfig)
        config = repo.get(command.order_config_id)
        config.update_details(
            name=command.name,
            description=command.description,
            tags=command.tags,
            entities=command.entities,
            meta=command.meta,
            core_service=command.core_service,
        )
        repo.add(config)

    @handle(UpdateOrderConfigFlow)
    def update_flow(self, command):
        repo = current_domain.repository_for(OrderConfig)
        config = repo.get(command.order_config_id)
        config.update_flow(command.flow)
        repo.add(config)

    @handle(PublishOrderConfig)
    def publish(self, command):
        repo = current_domain.repository_for(OrderConfig)
        config = repo.get(command.order_config_id)
        config.publish()
        repo.add(config)

    @handle(UnpublishOrderConfig)
    def unpublish(self, command):
        repo = current_domain.repository_for(OrderConfig)
        config = repo.get(command.order_config_id)
        config.unpublish()
        repo.add(config)
