"""Order aggregate (CQRS) — the order context that moves through a flow.

An order's ``status`` is always the code of its current activity. Moving the
order records the activity it entered, so ``activities`` reads as its
timeline. Canceled and completed are terminal.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, String, Text

from orderflow.domain import orderflow
from orderflow.flow.navigator import CREATED_CODE, TERMINAL_CODES
from orderflow.order.events import OrderActivityUpdated, OrderCreated


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@orderflow.entity(part_of="Order")
class ActivityRecord:
    """An activity the order entered."""

    key = String(required=True, max_length=255)
    code = String(required=True, max_length=100)
    status = String(max_length=255)
    details = Text()
    recorded_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@orderflow.aggregate
class Order:
    order_config_id = Identifier(required=True)
    status = String(required=True, max_length=100, default=CREATED_CODE)
    entities = Text()  # JSON list of the entities the order carries
    activities = HasMany(ActivityRecord)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_CODES

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_config, entities: str | None = None):
        """Place an order; it starts at the config's ``created`` activity, else its first."""
        initial = order_config.get_created_activity()
        if initial is None:
            flow = order_config.activities()
            initial = flow[0] if flow else None

        now = datetime.now(UTC)
        order = cls(
            order_config_id=str(order_config.id),
            status=initial.code if initial else CREATED_CODE,
            entities=entities,
            created_at=now,
            updated_at=now,
        )
        if initial is not None:
            order._record(initial, now)

        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                order_config_id=str(order_config.id),
                status=order.status,
                entities=entities,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------
    def update_activity(self, activity) -> None:
        """Move the order into ``activity`` and record it."""
        if self.is_terminal:
            raise ValidationError({"status": [f"Order is already {self.status}"]})

        now = datetime.now(UTC)
        previous_status = self.status
        self.status = activity.code
        self._record(activity, now)
        self.updated_at = now
        self.raise_(
            OrderActivityUpdated(
                order_id=str(self.id),
                order_config_id=str(self.order_config_id),
                previous_status=previous_status,
                status=activity.code,
                activity_key=activity.key,
                details=activity.details,
                updated_at=now,
            )
        )

    def _record(self, activity, recorded_at: datetime) -> None:
        self.add_activities(
            ActivityRecord(
                key=activity.key,
                code=activity.code,
                status=activity.status,
                details=activity.details,
                recorded_at=recorded_at,
            )
        )
