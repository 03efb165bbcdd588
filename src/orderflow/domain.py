"""Orderflow bounded context — Order Configs and Order Progression.

Handles authoring of per-tenant order workflows (CQRS) and moving orders
through the activities those workflows declare.
"""

from protean.domain import Domain

from orderflow.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
orderflow = Domain(name="orderflow")
