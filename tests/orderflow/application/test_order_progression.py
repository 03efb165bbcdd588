"""Application tests for creating orders and moving them along their flow."""

import json

import pytest
from orderflow.order.creation import CreateOrder
from orderflow.order.order import Order
from orderflow.order.progression import AdvanceOrder, CancelOrder, CompleteOrder
from orderflow.order_config.management import CreateOrderConfig
from protean import current_domain
from protean.exceptions import ValidationError


def _create_config(flow):
    command = CreateOrderConfig(company_name="Acme Co", name="Courier", flow=json.dumps(flow))
    return current_domain.process(command, asynchronous=False)


def _create_order(flow):
    config_id = _create_config(flow)
    return current_domain.process(CreateOrder(order_config_id=config_id), asynchronous=False)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestCreateOrder:
    def test_persists_order_at_created(self, linear_flow):
        order = _get(_create_order(linear_flow))
        assert order.status == "created"

    def test_keeps_entities(self, linear_flow):
        config_id = _create_config(linear_flow)
        order_id = current_domain.process(
            CreateOrder(order_config_id=config_id, entities=json.dumps([{"type": "parcel"}])),
            asynchronous=False,
        )
        assert json.loads(_get(order_id).entities) == [{"type": "parcel"}]


class TestAdvanceOrder:
    def test_moves_to_next_activity(self, linear_flow):
        order_id = _create_order(linear_flow)
        result = current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        assert result == "dispatched"
        assert _get(order_id).status == "dispatched"

    def test_walks_whole_flow(self, linear_flow):
        order_id = _create_order(linear_flow)
        current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        order = _get(order_id)
        assert order.status == "completed"
        assert [record.code for record in order.activities] == ["created", "dispatched", "completed"]

    def test_takes_first_branch_by_default(self, branching_flow):
        order_id = _create_order(branching_flow)
        current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        assert _get(order_id).status == "pickup"

    def test_takes_named_branch(self, branching_flow):
        order_id = _create_order(branching_flow)
        current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        current_domain.process(AdvanceOrder(order_id=order_id, activity_code="drop"), asynchronous=False)
        assert _get(order_id).status == "drop"

    def test_rejects_code_that_does_not_follow(self, branching_flow):
        order_id = _create_order(branching_flow)
        with pytest.raises(ValidationError) as exc:
            current_domain.process(AdvanceOrder(order_id=order_id, activity_code="drop"), asynchronous=False)
        assert "does not follow" in str(exc.value)

    def test_rejects_advance_past_last_activity(self):
        order_id = _create_order([{"key": "order_created", "code": "created"}])
        with pytest.raises(ValidationError) as exc:
            current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        assert "No activity follows" in str(exc.value)


class TestTerminalActivities:
    def test_cancel(self, linear_flow):
        order_id = _create_order(linear_flow)
        result = current_domain.process(CancelOrder(order_id=order_id), asynchronous=False)
        assert result == "canceled"
        assert _get(order_id).status == "canceled"

    def test_cancel_works_on_flow_without_canceled_activity(self):
        order_id = _create_order([])
        current_domain.process(CancelOrder(order_id=order_id), asynchronous=False)
        assert _get(order_id).status == "canceled"

    def test_complete(self, branching_flow):
        order_id = _create_order(branching_flow)
        current_domain.process(CompleteOrder(order_id=order_id), asynchronous=False)
        order = _get(order_id)
        assert order.status == "completed"
        assert order.activities[-1].key == "order_completed"

    def test_cannot_cancel_completed_order(self, linear_flow):
        order_id = _create_order(linear_flow)
        current_domain.process(CompleteOrder(order_id=order_id), asynchronous=False)
        with pytest.raises(ValidationError):
            current_domain.process(CancelOrder(order_id=order_id), asynchronous=False)
