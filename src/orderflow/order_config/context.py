"""Order context binding — run several navigation queries against one order.

Navigation on ``OrderConfig`` takes the order explicitly. This wrapper keeps
an order around so callers can chain queries without repeating it::

    context = config.set_order_context(order)
    upcoming = context.next_first_activity()
    after = context.after_next_activity()

Each wrapper belongs to one caller; concurrent callers create their own.
"""

from typing import Any

from orderflow.flow.activity import Activity
from orderflow.flow.exceptions import MissingOrderContext


class OrderConfigContext:
    def __init__(self, order_config, order: Any = None):
        self.order_config = order_config
        self._order = order

    def set_order_context(self, order: Any) -> "OrderConfigContext":
        self._order = order
        return self

    def get_order_context(self, order: Any = None) -> Any:
        """Resolve the order a query runs against.

        A supplied order wins for this call and becomes the binding if none
        exists yet. Without one, the bound order is used; with neither,
        ``MissingOrderContext`` is raised.
        """
        if order is not None:
            if self._order is None:
                self._order = order
            return order

        if self._order is None:
            raise MissingOrderContext()

        return self._order

    def activities(self) -> list[Activity]:
        return self.order_config.activities()

    def current_activity(self, order: Any = None) -> Activity | None:
        return self.order_config.current_activity(self.get_order_context(order))

    def next_activity(self, order: Any = None) -> list[Activity]:
        return self.order_config.next_activity(self.get_order_context(order))

    def next_first_activity(self, order: Any = None) -> Activity | None:
        return self.order_config.next_first_activity(self.get_order_context(order))

    def after_next_activity(self, order: Any = None) -> Activity | None:
        return self.order_config.after_next_activity(self.get_order_context(order))

    def previous_activity(self, order: Any = None) -> list[Activity]:
        return self.order_config.previous_activity(self.get_order_context(order))

    def get_created_activity(self) -> Activity | None:
        return self.order_config.get_created_activity()

    def get_dispatch_activity(self) -> Activity | None:
        return self.order_config.get_dispatch_activity()

    def get_canceled_activity(self) -> Activity:
        return self.order_config.get_canceled_activity()

    def get_completed_activity(self) -> Activity:
        return self.order_config.get_completed_activity()
