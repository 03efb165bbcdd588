"""Orderflow — configurable order fulfillment workflows.

Order configs hold a named, versioned flow of activities that orders move
through. The ``flow`` package is the graph engine; ``order_config`` and
``order`` are the Protean aggregates built around it.
"""
