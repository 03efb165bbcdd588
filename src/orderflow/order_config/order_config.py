"""OrderConfig aggregate (CQRS) — a tenant's named, versioned order workflow.

The ``flow`` field stores the activity definition as JSON. Every navigation
query rebuilds a ``FlowGraph`` from it, so results always reflect the current
flow. Namespace, key, version and status defaults are fixed once, when the
config is created.
"""

import json
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String, Text

from orderflow.domain import orderflow
from orderflow.flow.activity import Activity
from orderflow.flow.exceptions import MissingOrderContext
from orderflow.flow.graph import FlowGraph
from orderflow.flow.navigator import ActivityNavigator
from orderflow.order_config.context import OrderConfigContext
from orderflow.order_config.events import (
    OrderConfigCreated,
    OrderConfigDetailsUpdated,
    OrderConfigFlowUpdated,
    OrderConfigPublished,
    OrderConfigUnpublished,
)
from orderflow.utils.text import slugify

logger = structlog.get_logger(__name__)

INITIAL_VERSION = "0.0.1"
NAMESPACE_SEGMENT = "order-config"


class OrderConfigStatus(Enum):
    PRIVATE = "private"
    PUBLISHED = "published"


def create_namespace(name: str, company: Any) -> str:
    """Stable machine identifier for a config: ``<company>:order-config:<name>``."""
    return f"{slugify(company.name)}:{NAMESPACE_SEGMENT}:{slugify(name)}"


def _dump_json(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


def _load_json(value: str | None, default: Any) -> Any:
    if not value:
        return default
    return json.loads(value)


def _flow_problems(flow: Any) -> list[str]:
    """Structural problems that make a flow unusable; empty when well formed."""
    if not isinstance(flow, list):
        return ["Flow must be a list of activities"]

    problems = []
    for index, entry in enumerate(flow):
        if not isinstance(entry, dict):
            problems.append(f"Activity #{index} must be an object")
            continue
        for required in ("key", "code"):
            value = entry.get(required)
            if not isinstance(value, str) or not value:
                problems.append(f"Activity #{index} is missing '{required}'")
        for edge in ("next", "previous"):
            value = entry.get(edge)
            if value is None or isinstance(value, str):
                continue
            if not isinstance(value, list) or not all(isinstance(code, str) for code in value):
                problems.append(f"Activity #{index} '{edge}' must be a code or a list of codes")
    return problems


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@orderflow.value_object
class Company:
    """The tenant an order config is authored for."""

    company_id = Identifier()
    name = String(required=True, max_length=255)


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@orderflow.aggregate
class OrderConfig:
    company_id = Identifier()
    author_id = Identifier()
    category_id = Identifier()
    icon_id = Identifier()
    name = String(required=True, max_length=255)
    namespace = String(max_length=512)
    key = String(max_length=255)
    description = Text()
    status = String(
        choices=OrderConfigStatus,
        default=OrderConfigStatus.PRIVATE.value,
    )
    version = String(max_length=50, default=INITIAL_VERSION)
    core_service = Boolean(default=False)
    tags = Text()  # JSON list of strings
    flow = Text()  # JSON list of activity objects
    entities = Text()  # JSON list of entity declarations
    meta = Text()  # JSON object
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def flow_must_be_well_formed(self):
        if not self.flow:
            return

        try:
            flow = json.loads(self.flow)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"flow": ["Flow must be valid JSON"]}) from None

        problems = _flow_problems(flow)
        if problems:
            raise ValidationError({"flow": problems})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name: str,
        company: Any,
        description: str | None = None,
        flow: list[dict] | str | None = None,
        entities: list[dict] | str | None = None,
        tags: list[str] | str | None = None,
        meta: dict | str | None = None,
        core_service: bool = False,
        author_id: str | None = None,
        category_id: str | None = None,
        icon_id: str | None = None,
    ):
        """Author a new config; namespace, key, version and status are derived here only."""
        key = slugify(name)
        if not key:
            raise ValidationError({"name": ["Name must contain letters or digits"]})

        now = datetime.now(UTC)
        config = cls(
            company_id=getattr(company, "company_id", None),
            author_id=author_id,
            category_id=category_id,
            icon_id=icon_id,
            name=name,
            namespace=create_namespace(name, company),
            key=key,
            description=description,
            status=OrderConfigStatus.PRIVATE.value,
            version=INITIAL_VERSION,
            core_service=core_service,
            tags=_dump_json(tags),
            flow=_dump_json(flow) or "[]",
            entities=_dump_json(entities),
            meta=_dump_json(meta),
            created_at=now,
            updated_at=now,
        )
        config._report_flow_defects()
        config.raise_(
            OrderConfigCreated(
                order_config_id=str(config.id),
                company_id=config.company_id,
                name=name,
                namespace=config.namespace,
                key=config.key,
                version=config.version,
                status=config.status,
                created_at=now,
            )
        )
        return config

    @staticmethod
    def create_namespace(name: str, company: Any) -> str:
        return create_namespace(name, company)

    # -------------------------------------------------------------------
    # Authoring
    # -------------------------------------------------------------------
    def update_details(
        self,
        name: str | None = None,
        description: str | None = None,
        tags: list[str] | str | None = None,
        entities: list[dict] | str | None = None,
        meta: dict | str | None = None,
        core_service: bool | None = None,
    ) -> None:
        """Edit descriptive fields. A new name leaves namespace and key untouched."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if tags is not None:
            self.tags = _dump_json(tags)
        if entities is not None:
            self.entities = _dump_json(entities)
        if meta is not None:
            self.meta = _dump_json(meta)
        if core_service is not None:
            self.core_service = core_service

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            OrderConfigDetailsUpdated(
                order_config_id=str(self.id),
                name=self.name,
                description=self.description,
                tags=self.tags,
                entities=self.entities,
                core_service=self.core_service,
                updated_at=now,
            )
        )

    def update_flow(self, flow: list[dict] | str) -> None:
        """Replace the activity flow."""
        self.flow = _dump_json(flow) or "[]"
        self._report_flow_defects()

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            OrderConfigFlowUpdated(
                order_config_id=str(self.id),
                flow=self.flow,
                activity_count=len(self.flow_definition),
                updated_at=now,
            )
        )

    def publish(self) -> None:
        if self.status == OrderConfigStatus.PUBLISHED.value:
            raise ValidationError({"status": ["Order config is already published"]})

        now = datetime.now(UTC)
        self.status = OrderConfigStatus.PUBLISHED.value
        self.updated_at = now
        self.raise_(
            OrderConfigPublished(
                order_config_id=str(self.id),
                version=self.version,
                published_at=now,
            )
        )

    def unpublish(self) -> None:
        if self.status == OrderConfigStatus.PRIVATE.value:
            raise ValidationError({"status": ["Order config is not published"]})

        now = datetime.now(UTC)
        self.status = OrderConfigStatus.PRIVATE.value
        self.updated_at = now
        self.raise_(
            OrderConfigUnpublished(
                order_config_id=str(self.id),
                version=self.version,
                unpublished_at=now,
            )
        )

    def _report_flow_defects(self) -> None:
        """Log dangling edges and duplicate codes; both are tolerated at query time."""
        graph = self.flow_graph()
        for activity_key, edge, code in graph.unresolved_references():
            logger.warning(
                "Flow references an unknown activity",
                namespace=self.namespace,
                activity=activity_key,
                edge=edge,
                code=code,
            )
        duplicates = graph.duplicate_codes()
        if duplicates:
            logger.warning(
                "Flow declares duplicate activity codes",
                namespace=self.namespace,
                codes=duplicates,
            )
        duplicate_keys = graph.duplicate_keys()
        if duplicate_keys:
            logger.warning(
                "Flow declares duplicate activity keys",
                namespace=self.namespace,
                keys=duplicate_keys,
            )

    # -------------------------------------------------------------------
    # Decoded views of the JSON fields
    # -------------------------------------------------------------------
    @property
    def flow_definition(self) -> list[dict]:
        return _load_json(self.flow, [])

    @property
    def entity_definitions(self) -> list[dict]:
        return _load_json(self.entities, [])

    @property
    def tag_list(self) -> list[str]:
        return _load_json(self.tags, [])

    @property
    def meta_data(self) -> dict:
        return _load_json(self.meta, {})

    # -------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------
    def flow_graph(self) -> FlowGraph:
        return FlowGraph.from_json(self.flow)

    def navigator(self) -> ActivityNavigator:
        return ActivityNavigator(self.flow_graph())

    def activities(self) -> list[Activity]:
        """All activities of the current flow, in definition order."""
        return self.flow_graph().activities()

    def set_order_context(self, order: Any) -> OrderConfigContext:
        """Bind an order for a run of chained navigation queries."""
        return OrderConfigContext(self, order)

    def get_order_context(self, order: Any = None) -> Any:
        if order is None:
            raise MissingOrderContext()
        return order

    def current_activity(self, order: Any = None) -> Activity | None:
        """The activity whose code equals the order's status."""
        return self.navigator().current_activity(self.get_order_context(order))

    def next_activity(self, order: Any = None) -> list[Activity]:
        return self.navigator().next_activity(self.get_order_context(order))

    def next_first_activity(self, order: Any = None) -> Activity | None:
        return self.navigator().next_first_activity(self.get_order_context(order))

    def after_next_activity(self, order: Any = None) -> Activity | None:
        return self.navigator().after_next_activity(self.get_order_context(order))

    def previous_activity(self, order: Any = None) -> list[Activity]:
        return self.navigator().previous_activity(self.get_order_context(order))

    def get_created_activity(self) -> Activity | None:
        return self.navigator().get_created_activity()

    def get_dispatch_activity(self) -> Activity | None:
        return self.navigator().get_dispatch_activity()

    def get_canceled_activity(self) -> Activity:
        return self.navigator().get_canceled_activity()

    def get_completed_activity(self) -> Activity:
        return self.navigator().get_completed_activity()
