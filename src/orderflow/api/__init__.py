"""Orderflow domain API package."""

from orderflow.api.routes import order_config_router, order_router

__all__ = ["order_config_router", "order_router"]
