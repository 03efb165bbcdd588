"""Tests for activity values decoded from flow entries."""

import dataclasses

import pytest
from orderflow.flow.activity import GraphActivity, SynthesizedActivity, normalize_codes


class TestNormalizeCodes:
    def test_absent_edge_is_none(self):
        assert normalize_codes(None) is None

    def test_single_code_becomes_tuple(self):
        assert normalize_codes("dispatched") == ("dispatched",)

    def test_list_keeps_order(self):
        assert normalize_codes(["pickup", "drop"]) == ("pickup", "drop")

    def test_empty_string_is_explicitly_no_edges(self):
        assert normalize_codes("") == ()

    def test_empty_list_is_explicitly_no_edges(self):
        assert normalize_codes([]) == ()


class TestGraphActivityFromDict:
    def test_core_fields(self):
        activity = GraphActivity.from_dict(
            {"key": "order_created", "code": "created", "status": "Order created", "details": "New order"}
        )
        assert activity.key == "order_created"
        assert activity.code == "created"
        assert activity.status == "Order created"
        assert activity.details == "New order"

    def test_optional_fields_default_to_empty(self):
        activity = GraphActivity.from_dict({"key": "k", "code": "c"})
        assert activity.status == ""
        assert activity.details == ""
        assert activity.next is None
        assert activity.previous is None

    def test_extension_flags_pass_through(self):
        activity = GraphActivity.from_dict({"key": "k", "code": "c", "require_pod": True, "color": "blue"})
        assert activity.require_pod is True
        assert activity.options["color"] == "blue"
        assert "key" not in activity.options

    def test_require_pod_defaults_to_false(self):
        assert GraphActivity.from_dict({"key": "k", "code": "c"}).require_pod is False

    def test_declared_edges_are_normalized(self):
        activity = GraphActivity.from_dict({"key": "k", "code": "c", "next": "x", "previous": ["a", "b"]})
        assert activity.next == ("x",)
        assert activity.previous == ("a", "b")

    def test_options_are_read_only(self):
        activity = GraphActivity.from_dict({"key": "k", "code": "c", "require_pod": True})
        with pytest.raises(TypeError):
            activity.options["require_pod"] = False

    def test_activity_is_immutable(self):
        activity = GraphActivity.from_dict({"key": "k", "code": "c"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            activity.code = "other"

    def test_unbound_activity_has_no_neighbours(self):
        activity = GraphActivity.from_dict({"key": "k", "code": "c"})
        assert activity.get_next() == []
        assert activity.get_previous() == []

    def test_not_synthesized(self):
        assert GraphActivity.from_dict({"key": "k", "code": "c"}).is_synthesized is False


class TestSynthesizedActivity:
    def test_is_synthesized(self):
        activity = SynthesizedActivity(key="order_canceled", code="canceled")
        assert activity.is_synthesized is True

    def test_is_terminal(self):
        activity = SynthesizedActivity(key="order_canceled", code="canceled")
        assert activity.get_next() == []
        assert activity.get_previous() == []

    def test_equal_by_value(self):
        assert SynthesizedActivity(key="a", code="b") == SynthesizedActivity(key="a", code="b")
