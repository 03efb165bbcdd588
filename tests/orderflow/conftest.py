import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def orderflow_bed():
    from orderflow.domain import orderflow
    from orderflow.utils.db import drop_db, setup_db

    bed = DomainFixture(orderflow)
    bed.setup()
    setup_db(orderflow)
    yield bed
    drop_db(orderflow)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(orderflow_bed):
    with orderflow_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


# ---------------------------------------------------------------------------
# Shared flow definitions
# ---------------------------------------------------------------------------
@pytest.fixture()
def linear_flow():
    return [
        {"key": "order_created", "code": "created", "status": "Order created", "details": "New order was created."},
        {
            "key": "order_dispatched",
            "code": "dispatched",
            "status": "Order dispatched",
            "details": "Order has been dispatched.",
        },
        {
            "key": "order_completed",
            "code": "completed",
            "status": "Order completed",
            "details": "Driver completed the order.",
            "require_pod": True,
        },
    ]


@pytest.fixture()
def branching_flow():
    return [
        {"key": "order_created", "code": "created", "next": "dispatched"},
        {"key": "order_dispatched", "code": "dispatched", "next": ["pickup", "drop"], "previous": "created"},
        {"key": "driver_pickup", "code": "pickup", "next": "completed", "previous": "dispatched"},
        {"key": "driver_drop", "code": "drop", "next": "completed", "previous": "dispatched"},
        {"key": "order_completed", "code": "completed", "previous": ["pickup", "drop"]},
    ]
