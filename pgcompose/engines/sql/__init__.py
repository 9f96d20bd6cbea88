"""
Composable SQL with positional parameters.

Exports: sql, Sql, SqlWithClient, InjectableQuery, CompositeQuery,
CompositeQueryWithClient, node classes and the collector/helper functions.
"""

from pgcompose.engines.sql.collector import collect_query_nodes, split_template
from pgcompose.engines.sql.factory import Sql, SqlWithClient, create_query_factory, inject, sql
from pgcompose.engines.sql.helpers import insert, join, quote_ident, raw, set_
from pgcompose.engines.sql.nodes import BindingNode, FunctionalNode, TextNode
from pgcompose.engines.sql.queries import (
    CompositeQuery,
    CompositeQueryWithClient,
    InjectableQuery,
    serialize,
)

__all__ = [
    "sql",
    "Sql",
    "SqlWithClient",
    "create_query_factory",
    "inject",
    "raw",
    "join",
    "insert",
    "set_",
    "quote_ident",
    "collect_query_nodes",
    "split_template",
    "serialize",
    "TextNode",
    "BindingNode",
    "FunctionalNode",
    "InjectableQuery",
    "CompositeQuery",
    "CompositeQueryWithClient",
]
