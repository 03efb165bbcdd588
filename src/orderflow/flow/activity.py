"""Activities — the steps an order moves through.

An activity is either bound to a flow graph (``GraphActivity``), where its
neighbours are resolved against sibling activities, or synthesized with fixed
content (``SynthesizedActivity``) for the terminal states every flow shares.
Both expose the same read-only surface.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from orderflow.flow.graph import FlowGraph

# Keys of a flow entry with a dedicated attribute; everything else is an option
CORE_FIELDS = ("key", "code", "status", "details", "next", "previous")


def normalize_codes(value: str | Iterable[str] | None) -> tuple[str, ...] | None:
    """Normalize a declared ``next``/``previous`` edge to a tuple of codes.

    ``None`` means no edge was declared, so adjacency falls back to flow order.
    An empty string or list is an explicit "no neighbours".
    """
    if value is None:
        return None
    if isinstance(value, str):
        return (value,) if value else ()
    return tuple(str(code) for code in value if code)


@dataclass(frozen=True)
class Activity:
    key: str
    code: str
    status: str = ""
    details: str = ""
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False)

    is_synthesized: ClassVar[bool] = False

    @property
    def require_pod(self) -> bool:
        """Whether completing this activity needs proof of delivery."""
        return bool(self.options.get("require_pod", False))

    def get_next(self, order: Any = None) -> list[Activity]:
        return []

    def get_previous(self, order: Any = None) -> list[Activity]:
        return []


@dataclass(frozen=True)
class SynthesizedActivity(Activity):
    """A fixed terminal activity that no flow has to declare."""

    is_synthesized: ClassVar[bool] = True


@dataclass(frozen=True)
class GraphActivity(Activity):
    """An activity decoded from one entry of a flow definition.

    ``next`` and ``previous`` hold the declared edge codes, or ``None`` when the
    entry declares none and definition order applies.
    """

    next: tuple[str, ...] | None = None
    previous: tuple[str, ...] | None = None
    position: int = field(default=0, compare=False)
    graph: FlowGraph | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], position: int = 0, graph: FlowGraph | None = None) -> GraphActivity:
        options = {name: value for name, value in data.items() if name not in CORE_FIELDS}
        return cls(
            key=str(data.get("key") or ""),
            code=str(data.get("code") or ""),
            status=str(data.get("status") or ""),
            details=str(data.get("details") or ""),
            options=MappingProxyType(options),
            next=normalize_codes(data.get("next")),
            previous=normalize_codes(data.get("previous")),
            position=position,
            graph=graph,
        )

    def get_next(self, order: Any = None) -> list[Activity]:
        """Activities that may follow this one.

        ``order`` is accepted so edges can later be filtered on order
        attributes; plain edge resolution ignores it.
        """
        if self.graph is None:
            return []
        return self.graph.successors(self, order)

    def get_previous(self, order: Any = None) -> list[Activity]:
        """Activities that may precede this one."""
        if self.graph is None:
            return []
        return self.graph.predecessors(self, order)
