"""Pydantic API schemas for the orderflow domain.

These are the external API contracts, separate from domain commands. The
API layer translates between these schemas and commands, and renders
activities for responses.
"""

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class FlowActivityRequest(BaseModel):
    """One flow entry. Extra keys (``require_pod``, ...) pass through untouched."""

    model_config = {"extra": "allow"}

    key: str
    code: str
    status: str | None = None
    details: str | None = None
    next: str | list[str] | None = None
    previous: str | list[str] | None = None


class CreateOrderConfigRequest(BaseModel):
    company_id: str | None = None
    company_name: str
    author_id: str | None = None
    category_id: str | None = None
    icon_id: str | None = None
    name: str
    description: str | None = None
    flow: list[FlowActivityRequest] = Field(default_factory=list)
    entities: list[dict] | None = None
    tags: list[str] | None = None
    meta: dict | None = None
    core_service: bool = False


class UpdateOrderConfigRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    entities: list[dict] | None = None
    tags: list[str] | None = None
    meta: dict | None = None
    core_service: bool | None = None


class UpdateFlowRequest(BaseModel):
    flow: list[FlowActivityRequest]


class CreateOrderRequest(BaseModel):
    order_config_id: str
    entities: list[dict] | None = None


class AdvanceOrderRequest(BaseModel):
    activity_code: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class OrderConfigIdResponse(BaseModel):
    order_config_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class OrderConfigResponse(BaseModel):
    type: str = "order-config"
    id: str
    company_id: str | None = None
    name: str
    namespace: str
    key: str
    description: str | None = None
    status: str
    version: str
    core_service: bool = False
    tags: list[str] = Field(default_factory=list)
    flow: list[dict[str, Any]] = Field(default_factory=list)
    entities: list[dict[str, Any]] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_order_config(cls, config) -> "OrderConfigResponse":
        return cls(
            id=str(config.id),
            company_id=str(config.company_id) if config.company_id else None,
            name=config.name,
            namespace=config.namespace,
            key=config.key,
            description=config.description,
            status=config.status,
            version=config.version,
            core_service=bool(config.core_service),
            tags=config.tag_list,
            flow=config.flow_definition,
            entities=config.entity_definitions,
            meta=config.meta_data,
        )


class StatusResponse(BaseModel):
    status: str = "ok"


class ActivityResponse(BaseModel):
    key: str
    code: str
    status: str = ""
    details: str = ""
    synthesized: bool = False
    options: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_activity(cls, activity) -> "ActivityResponse":
        return cls(
            key=activity.key,
            code=activity.code,
            status=activity.status,
            details=activity.details,
            synthesized=activity.is_synthesized,
            options=dict(activity.options),
        )


class NavigationResponse(BaseModel):
    """Where an order stands in its flow and where it can go."""

    status: str
    current: ActivityResponse | None = None
    next: list[ActivityResponse] = Field(default_factory=list)
    next_first: ActivityResponse | None = None
    after_next: ActivityResponse | None = None
    previous: list[ActivityResponse] = Field(default_factory=list)
    canceled: ActivityResponse
    completed: ActivityResponse
