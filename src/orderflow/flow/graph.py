"""Flow graph — an ordered, navigable view over a flow definition.

A flow definition is the JSON list stored on an order config::

    [
        {"key": "order_created", "code": "created", "status": "Order created"},
        {"key": "order_dispatched", "code": "dispatched", "next": ["pickup", "drop"]},
        ...
    ]

Each entry becomes one ``GraphActivity`` in stored order. Entries without a
declared ``next``/``previous`` are linked to their neighbours in that order.
Declared edges are resolved by code when traversed; a code that matches no
activity is logged and skipped.
"""

import json
from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

import structlog

from orderflow.flow.activity import GraphActivity

logger = structlog.get_logger(__name__)


class FlowGraph:
    def __init__(self, definition: Sequence[Mapping[str, Any]] | None = None):
        self._activities = [
            GraphActivity.from_dict(entry, position=position, graph=self)
            for position, entry in enumerate(definition or [])
        ]

    @classmethod
    def from_json(cls, raw: str | Sequence[Mapping[str, Any]] | None) -> "FlowGraph":
        """Build a graph from the stored (JSON text) form of a flow."""
        if isinstance(raw, str):
            raw = json.loads(raw) if raw.strip() else []
        return cls(raw)

    def activities(self) -> list[GraphActivity]:
        """All activities, one per flow entry, in definition order."""
        return list(self._activities)

    def __iter__(self) -> Iterator[GraphActivity]:
        return iter(self._activities)

    def __len__(self) -> int:
        return len(self._activities)

    def __repr__(self) -> str:
        return f"FlowGraph({[activity.code for activity in self._activities]!r})"

    # -------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------
    def find(self, code: str | None) -> GraphActivity | None:
        """First activity whose code matches; duplicates resolve to the earliest."""
        if code is None:
            return None
        return next((activity for activity in self._activities if activity.code == code), None)

    # -------------------------------------------------------------------
    # Adjacency
    # -------------------------------------------------------------------
    def successors(self, activity: GraphActivity, order: Any = None) -> list[GraphActivity]:
        if activity.next is None:
            return self._at(activity.position + 1)
        return self._resolve(activity, activity.next, "next")

    def predecessors(self, activity: GraphActivity, order: Any = None) -> list[GraphActivity]:
        if activity.previous is None:
            return self._at(activity.position - 1)
        return self._resolve(activity, activity.previous, "previous")

    def _at(self, position: int) -> list[GraphActivity]:
        if 0 <= position < len(self._activities):
            return [self._activities[position]]
        return []

    def _resolve(self, activity: GraphActivity, codes: tuple[str, ...], edge: str) -> list[GraphActivity]:
        resolved = []
        for code in codes:
            target = self.find(code)
            if target is None:
                logger.warning(
                    "Unresolved activity reference",
                    activity=activity.key,
                    edge=edge,
                    code=code,
                )
                continue
            resolved.append(target)
        return resolved

    # -------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------
    def unresolved_references(self) -> list[tuple[str, str, str]]:
        """Declared edges pointing at unknown codes, as ``(activity key, edge, code)``."""
        known = {activity.code for activity in self._activities}
        problems = []
        for activity in self._activities:
            for edge, codes in (("next", activity.next), ("previous", activity.previous)):
                problems.extend((activity.key, edge, code) for code in codes or () if code not in known)
        return problems

    def duplicate_codes(self) -> list[str]:
        counts = Counter(activity.code for activity in self._activities)
        return [code for code, count in counts.items() if count > 1]

    def duplicate_keys(self) -> list[str]:
        counts = Counter(activity.key for activity in self._activities)
        return [key for key, count in counts.items() if count > 1]
