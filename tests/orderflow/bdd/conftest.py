"""Shared BDD fixtures and step definitions for the orderflow domain."""

import json

import pytest
from orderflow.order.creation import CreateOrder
from orderflow.order.order import Order
from orderflow.order_config.management import CreateOrderConfig
from orderflow.order_config.order_config import OrderConfig
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


def _codes(text):
    return [code.strip() for code in text.split(",") if code.strip()]


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a courier order config with a branching flow", target_fixture="order_config")
def courier_order_config(branching_flow):
    command = CreateOrderConfig(company_name="Acme Co", name="Courier", flow=json.dumps(branching_flow))
    config_id = current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(OrderConfig).get(config_id)


@given("a new order for that config", target_fixture="order_id")
def new_order(order_config):
    return current_domain.process(CreateOrder(order_config_id=str(order_config.id)), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order_id, status):
    assert current_domain.repository_for(Order).get(order_id).status == status


@then(parsers.cfparse('the order has recorded "{codes}"'))
def order_has_recorded(order_id, codes):
    order = current_domain.repository_for(Order).get(order_id)
    assert [record.code for record in order.activities] == _codes(codes)


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
