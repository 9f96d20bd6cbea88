"""
Composition helpers built on ``InjectableQuery``: raw text, join, and the
``insert``/``set`` shapes for multi-row INSERT and multi-column UPDATE.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from psycopg import sql as pgsql

from pgcompose.engines.sql.collector import collect_query_nodes
from pgcompose.engines.sql.nodes import BindingNode, QueryNode, TextNode
from pgcompose.engines.sql.queries import InjectableQuery


def quote_ident(name: str) -> str:
    """Double-quote *name* as a PostgreSQL identifier (embedded quotes doubled)."""
    return pgsql.Identifier(str(name)).as_string()


def raw(value: Any) -> InjectableQuery:
    """
    Inject ``str(value)`` as literal SQL text. Not a parameter, not escaped:
    only pass trusted values (identifiers, keywords, sort directions).
    """
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return InjectableQuery((TextNode(text),))


def join(queries: Sequence[InjectableQuery], separator: str) -> InjectableQuery:
    """Concatenate *queries* with literal *separator* text between neighbours."""
    if not queries:
        raise ValueError("join() requires at least one query")
    nodes: list[QueryNode] = list(queries[0].nodes)
    for query in queries[1:]:
        if separator:
            nodes.append(TextNode(separator))
        nodes.extend(query.nodes)
    return InjectableQuery(tuple(nodes))


def _columns(keys: Sequence[str]) -> InjectableQuery:
    if not keys:
        raise ValueError("At least one key is required")
    return raw(",".join(quote_ident(key) for key in keys))


def _bindings(record: Mapping[str, Any], keys: Sequence[str]) -> InjectableQuery:
    return join([InjectableQuery((BindingNode(record[key]),)) for key in keys], ", ")


def insert(records: Sequence[Mapping[str, Any]], *keys: str) -> InjectableQuery:
    """
    ``("k1","k2") values ($1, $2), ($3, $4)`` for the given *keys* of each record.

    Raises ValueError for no records or no keys, KeyError if a record lacks a key.
    """
    columns = _columns(keys)
    if not records:
        raise ValueError("insert() requires at least one record")
    rows = join([_bindings(record, keys) for record in records], "), (")
    return InjectableQuery(
        collect_query_nodes(["(", ") values (", ")"], [columns, rows])
    )


def set_(record: Mapping[str, Any], *keys: str) -> InjectableQuery:
    """``set ("k1","k2") = row($1, $2)`` for the given *keys* of *record*."""
    columns = _columns(keys)
    return InjectableQuery(
        collect_query_nodes(
            ["set (", ") = row(", ")"], [columns, _bindings(record, keys)]
        )
    )
