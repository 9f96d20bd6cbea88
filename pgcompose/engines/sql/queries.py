"""
Injectable (composable) and composite (executable) queries.

``InjectableQuery`` holds nodes that can be embedded in another template.
``CompositeQuery`` is the final form: SQL text with ``$1..$n`` numbered in
node order plus the parameters in the same order.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pgcompose.core.connect import PgClient
from pgcompose.engines.sql.nodes import (
    BindingValue,
    FunctionalNode,
    QueryNode,
    QueryNodes,
    QueryParameter,
    TextNode,
)

_log = logging.getLogger(__name__)


def get_query_text(nodes: Sequence[QueryNode]) -> str:
    """Render text nodes verbatim and number parameter nodes ``$1..$n``."""
    bind_index = 0
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.value)
            continue
        bind_index += 1
        parts.append(f"${bind_index}")
    return "".join(parts)


def get_query_parameters(nodes: Sequence[QueryNode]) -> tuple[QueryParameter, ...]:
    return tuple(node for node in nodes if not isinstance(node, TextNode))


def serialize(nodes: Sequence[QueryNode]) -> tuple[str, tuple[QueryParameter, ...]]:
    """Return ``(text, parameters)``; a pure function of *nodes*."""
    return get_query_text(nodes), get_query_parameters(nodes)


@dataclass(frozen=True)
class _CompositeQueryBase:
    text: str
    parameters: tuple[QueryParameter, ...] = ()

    @property
    def is_deferred(self) -> bool:
        """True if any parameter is resolved from the execution input."""
        return any(isinstance(p, FunctionalNode) for p in self.parameters)

    @property
    def values(self) -> list[BindingValue]:
        """Bound values in ``$n`` order; not available for deferred queries."""
        if self.is_deferred:
            raise TypeError(
                "Query has parameters computed from input; use resolve_values(data)"
            )
        return [p.value for p in self.parameters]

    def resolve_values(self, data: Any = None) -> list[BindingValue]:
        return [
            p.resolve(data) if isinstance(p, FunctionalNode) else p.value
            for p in self.parameters
        ]

    async def _send_query(self, client: PgClient, data: Any) -> list[dict[str, Any]]:
        values = self.resolve_values(data)
        _log.debug("Executing query with %d parameter(s): %s", len(values), self.text)
        return await client.execute(self.text, values)


@dataclass(frozen=True)
class CompositeQuery(_CompositeQueryBase):
    @classmethod
    def from_nodes(cls, nodes: Sequence[QueryNode]) -> "CompositeQuery":
        text, parameters = serialize(nodes)
        return cls(text, parameters)

    async def execute(self, client: PgClient, data: Any = None) -> list[dict[str, Any]]:
        """Send text and values resolved against *data* to *client*; return rows."""
        return await self._send_query(client, data)


@dataclass(frozen=True)
class CompositeQueryWithClient(_CompositeQueryBase):
    """Composite query bound to a client when it was built."""

    client: PgClient | None = field(default=None, compare=False, repr=False, kw_only=True)

    @classmethod
    def from_nodes(
        cls, nodes: Sequence[QueryNode], client: PgClient
    ) -> "CompositeQueryWithClient":
        text, parameters = serialize(nodes)
        return cls(text, parameters, client=client)

    async def execute(self, data: Any = None) -> list[dict[str, Any]]:
        if self.client is None:
            raise TypeError("No client bound to this query")
        return await self._send_query(self.client, data)


@dataclass(frozen=True)
class InjectableQuery:
    """A reusable node sequence embeddable as a placeholder in other templates."""

    nodes: QueryNodes = ()

    def freeze(self) -> CompositeQuery:
        """Serialize the nodes; every call builds a new, equal query."""
        return CompositeQuery.from_nodes(self.nodes)
