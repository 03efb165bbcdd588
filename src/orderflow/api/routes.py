"""FastAPI routes for the orderflow domain."""

import json

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from orderflow.api.schemas import (
    ActivityResponse,
    AdvanceOrderRequest,
    CreateOrderConfigRequest,
    CreateOrderRequest,
    NavigationResponse,
    OrderConfigIdResponse,
    OrderConfigResponse,
    OrderIdResponse,
    StatusResponse,
    UpdateFlowRequest,
    UpdateOrderConfigRequest,
)
from orderflow.order.creation import CreateOrder
from orderflow.order.order import Order
from orderflow.order.progression import AdvanceOrder, CancelOrder, CompleteOrder
from orderflow.order_config.management import (
    CreateOrderConfig,
    PublishOrderConfig,
    UnpublishOrderConfig,
    UpdateOrderConfigDetails,
    UpdateOrderConfigFlow,
)
from orderflow.order_config.order_config import OrderConfig


def _json_or_none(value):
    return json.dumps(value) if value is not None else None


def _dump_flow(flow):
    return json.dumps([activity.model_dump(exclude_none=True) for activity in flow])


def _get_or_404(aggregate_cls, identifier):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"{aggregate_cls.__name__} {identifier} not found") from None


def _process(command):
    """Run a command synchronously; missing aggregates are 404, rejected changes 422."""
    try:
        return current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from None
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.messages) from None


def _render(activity):
    return ActivityResponse.from_activity(activity) if activity is not None else None


def _navigation(config, order) -> NavigationResponse:
    context = config.set_order_context(order)
    return NavigationResponse(
        status=order["status"] if isinstance(order, dict) else order.status,
        current=_render(context.current_activity()),
        next=[_render(activity) for activity in context.next_activity()],
        next_first=_render(context.next_first_activity()),
        after_next=_render(context.after_next_activity()),
        previous=[_render(activity) for activity in context.previous_activity()],
        canceled=_render(context.get_canceled_activity()),
        completed=_render(context.get_completed_activity()),
    )


# ---------------------------------------------------------------------------
# Order Config Router
# ---------------------------------------------------------------------------
order_config_router = APIRouter(prefix="/order-configs", tags=["order-configs"])


@order_config_router.post("", status_code=201, response_model=OrderConfigIdResponse)
async def create_order_config(body: CreateOrderConfigRequest) -> OrderConfigIdResponse:
    """Author a new order workflow."""
    command = CreateOrderConfig(
        company_id=body.company_id,
        company_name=body.company_name,
        author_id=body.author_id,
        category_id=body.category_id,
        icon_id=body.icon_id,
        name=body.name,
        description=body.description,
        flow=_dump_flow(body.flow),
        entities=_json_or_none(body.entities),
        tags=_json_or_none(body.tags),
        meta=_json_or_none(body.meta),
        core_service=body.core_service,
    )
    result = _process(command)
    return OrderConfigIdResponse(order_config_id=result)


@order_config_router.put("/{order_config_id}", response_model=StatusResponse)
async def update_order_config(order_config_id: str, body: UpdateOrderConfigRequest) -> StatusResponse:
    """Edit descriptive fields; namespace and key are fixed at creation."""
    command = UpdateOrderConfigDetails(
        order_config_id=order_config_id,
        name=body.name,
        description=body.description,
        entities=_json_or_none(body.entities),
        tags=_json_or_none(body.tags),
        meta=_json_or_none(body.meta),
        core_service=body.core_service,
    )
    _process(command)
    return StatusResponse()


@order_config_router.put("/{order_config_id}/flow", response_model=StatusResponse)
async def update_flow(order_config_id: str, body: UpdateFlowRequest) -> StatusResponse:
    command = UpdateOrderConfigFlow(order_config_id=order_config_id, flow=_dump_flow(body.flow))
    _process(command)
    return StatusResponse(status="flow_updated")


@order_config_router.put("/{order_config_id}/publish", response_model=StatusResponse)
async def publish_order_config(order_config_id: str) -> StatusResponse:
    _process(PublishOrderConfig(order_config_id=order_config_id))
    return StatusResponse(status="published")


@order_config_router.put("/{order_config_id}/unpublish", response_model=StatusResponse)
async def unpublish_order_config(order_config_id: str) -> StatusResponse:
    _process(UnpublishOrderConfig(order_config_id=order_config_id))
    return StatusResponse(status="unpublished")


@order_config_router.get("/{order_config_id}", response_model=OrderConfigResponse)
async def get_order_config(order_config_id: str) -> OrderConfigResponse:
    config = _get_or_404(OrderConfig, order_config_id)
    return OrderConfigResponse.from_order_config(config)


@order_config_router.get("/{order_config_id}/activities", response_model=list[ActivityResponse])
async def list_activities(order_config_id: str) -> list[ActivityResponse]:
    """The config's flow, one activity per entry, in order."""
    config = _get_or_404(OrderConfig, order_config_id)
    return [_render(activity) for activity in config.activities()]


@order_config_router.get("/{order_config_id}/navigation", response_model=NavigationResponse)
async def navigate(order_config_id: str, status: str) -> NavigationResponse:
    """Navigate the flow from an arbitrary status, without a stored order."""
    config = _get_or_404(OrderConfig, order_config_id)
    return _navigation(config, {"status": status})


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def create_order(body: CreateOrderRequest) -> OrderIdResponse:
    _get_or_404(OrderConfig, body.order_config_id)
    command = CreateOrder(order_config_id=body.order_config_id, entities=_json_or_none(body.entities))
    result = _process(command)
    return OrderIdResponse(order_id=result)


@order_router.put("/{order_id}/advance", response_model=StatusResponse)
async def advance_order(order_id: str, body: AdvanceOrderRequest) -> StatusResponse:
    """Move the order to its next activity, or to the named branch."""
    command = AdvanceOrder(order_id=order_id, activity_code=body.activity_code)
    result = _process(command)
    return StatusResponse(status=result)


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str) -> StatusResponse:
    result = _process(CancelOrder(order_id=order_id))
    return StatusResponse(status=result)


@order_router.put("/{order_id}/complete", response_model=StatusResponse)
async def complete_order(order_id: str) -> StatusResponse:
    result = _process(CompleteOrder(order_id=order_id))
    return StatusResponse(status=result)


@order_router.get("/{order_id}/activity", response_model=NavigationResponse)
async def order_activity(order_id: str) -> NavigationResponse:
    """Where a stored order stands in its flow."""
    order = _get_or_404(Order, order_id)
    config = _get_or_404(OrderConfig, order.order_config_id)
    return _navigation(config, order)
