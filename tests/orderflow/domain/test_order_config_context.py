"""Tests for binding an order to an order config for chained queries."""

from types import SimpleNamespace

import pytest
from orderflow.flow.exceptions import MissingOrderContext
from orderflow.order_config.context import OrderConfigContext
from orderflow.order_config.order_config import Company, OrderConfig


@pytest.fixture()
def config(linear_flow):
    return OrderConfig.create(name="Courier", company=Company(name="Acme Co"), flow=linear_flow)


def _order(status):
    return SimpleNamespace(status=status)


class TestBinding:
    def test_set_order_context_returns_bound_view(self, config):
        context = config.set_order_context(_order("created"))
        assert isinstance(context, OrderConfigContext)
        assert context.order_config is config

    def test_chained_queries_use_bound_order(self, config):
        context = config.set_order_context(_order("created"))
        assert context.current_activity().code == "created"
        assert context.next_first_activity().code == "dispatched"
        assert context.after_next_activity().code == "completed"
        assert [a.code for a in context.next_activity()] == ["dispatched"]
        assert context.previous_activity() == []

    def test_set_order_context_is_chainable(self, config):
        context = OrderConfigContext(config)
        assert context.set_order_context(_order("dispatched")) is context

    def test_binding_can_be_replaced(self, config):
        context = config.set_order_context(_order("created"))
        context.set_order_context(_order("dispatched"))
        assert context.current_activity().code == "dispatched"

    def test_supplied_order_wins_for_the_call(self, config):
        context = config.set_order_context(_order("created"))
        assert context.current_activity(_order("completed")).code == "completed"
        assert context.current_activity().code == "created"

    def test_first_supplied_order_becomes_binding(self, config):
        context = OrderConfigContext(config)
        order = _order("dispatched")
        assert context.get_order_context(order) is order
        assert context.get_order_context() is order

    def test_unbound_query_fails(self, config):
        context = OrderConfigContext(config)
        with pytest.raises(MissingOrderContext):
            context.next_activity()

    def test_unbound_get_order_context_fails(self, config):
        with pytest.raises(MissingOrderContext) as exc:
            OrderConfigContext(config).get_order_context()
        assert "No order context" in str(exc.value)

    def test_context_free_queries_need_no_binding(self, config):
        context = OrderConfigContext(config)
        assert context.get_created_activity().code == "created"
        assert context.get_dispatch_activity().code == "dispatched"
        assert context.get_canceled_activity().code == "canceled"
        assert context.get_completed_activity().key == "order_completed"
        assert len(context.activities()) == 3

    def test_separate_views_do_not_share_binding(self, config):
        first = config.set_order_context(_order("created"))
        second = config.set_order_context(_order("completed"))
        assert first.current_activity().code == "created"
        assert second.current_activity().code == "completed"
