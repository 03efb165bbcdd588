"""Activity navigation relative to an order's live status.

The navigator answers "where is this order in its flow and where can it go"
from the order's ``status``, which holds the code of its current activity.
Nothing found is a normal outcome: lookups return ``None`` and traversals
return an empty list. The only failure is a missing order.

Canceled and completed are synthesized rather than looked up, so every flow
can be force-terminated or finished whether or not its author declared them.
"""

from collections.abc import Mapping
from typing import Any

from orderflow.flow.activity import Activity, SynthesizedActivity
from orderflow.flow.exceptions import MissingOrderContext
from orderflow.flow.graph import FlowGraph

CREATED_CODE = "created"
DISPATCHED_CODE = "dispatched"

CANCELED_ACTIVITY = SynthesizedActivity(
    key="order_canceled",
    code="canceled",
    status="Order canceled",
    details="Order was canceled",
)

COMPLETED_ACTIVITY = SynthesizedActivity(
    key="order_completed",
    code="completed",
    status="Order completed",
    details="Order was completed",
)

TERMINAL_CODES = frozenset({CANCELED_ACTIVITY.code, COMPLETED_ACTIVITY.code})


def status_of(order: Any) -> str | None:
    """Read the status code of an order, or of a mapping shaped like one."""
    if order is None:
        raise MissingOrderContext()
    if isinstance(order, Mapping):
        return order.get("status")
    return getattr(order, "status", None)


class ActivityNavigator:
    """Derives current, next, previous and after-next activities for an order."""

    def __init__(self, graph: FlowGraph):
        self.graph = graph

    def activities(self) -> list[Activity]:
        return self.graph.activities()

    def current_activity(self, order: Any) -> Activity | None:
        return self.graph.find(status_of(order))

    def next_activity(self, order: Any) -> list[Activity]:
        current = self.current_activity(order)
        if current is None:
            return []
        return current.get_next(order)

    def next_first_activity(self, order: Any) -> Activity | None:
        candidates = self.next_activity(order)
        return candidates[0] if candidates else None

    def after_next_activity(self, order: Any) -> Activity | None:
        """Look two hops ahead, following the first branch at each hop."""
        upcoming = self.next_first_activity(order)
        if upcoming is None:
            return None
        candidates = upcoming.get_next(order)
        return candidates[0] if candidates else None

    def previous_activity(self, order: Any) -> list[Activity]:
        current = self.current_activity(order)
        if current is None:
            return []
        return current.get_previous(order)

    def get_created_activity(self) -> Activity | None:
        return self.graph.find(CREATED_CODE)

    def get_dispatch_activity(self) -> Activity | None:
        return self.graph.find(DISPATCHED_CODE)

    def get_canceled_activity(self) -> Activity:
        return CANCELED_ACTIVITY

    def get_completed_activity(self) -> Activity:
        return COMPLETED_ACTIVITY
