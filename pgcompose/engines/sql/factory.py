"""
Query factories: the ``sql`` entry point.

``sql("select * from users where id = {}", user_id)`` returns a
``CompositeQuery``; ``sql.inject(...)`` returns an ``InjectableQuery`` that
can be placed inside another template. ``sql.with_client(client)`` gives the
same interface with queries bound to *client*.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from pgcompose.core.connect import PgClient
from pgcompose.engines.sql import helpers
from pgcompose.engines.sql.collector import Template, collect_query_nodes, to_segments
from pgcompose.engines.sql.nodes import QueryNodes
from pgcompose.engines.sql.queries import (
    CompositeQuery,
    CompositeQueryWithClient,
    InjectableQuery,
)

Result = TypeVar("Result")

QueryFactory = Callable[[QueryNodes], Result]


def create_query_factory(
    factory: QueryFactory[Result],
) -> Callable[..., Result]:
    """Wrap *factory* so it takes ``(template, *placeholders)``."""

    def build(template: Template, *placeholders: Any) -> Result:
        return factory(collect_query_nodes(to_segments(template), placeholders))

    return build


inject = create_query_factory(InjectableQuery)


class _SqlBase(Generic[Result]):
    _build: Callable[..., Result]

    def __call__(self, template: Template, *placeholders: Any) -> Result:
        return self._build(template, *placeholders)

    @staticmethod
    def inject(template: Template, *placeholders: Any) -> InjectableQuery:
        return inject(template, *placeholders)

    @staticmethod
    def raw(value: Any) -> InjectableQuery:
        return helpers.raw(value)

    @staticmethod
    def join(queries: Sequence[InjectableQuery], separator: str) -> InjectableQuery:
        return helpers.join(queries, separator)

    @staticmethod
    def insert(records: Sequence[Mapping[str, Any]], *keys: str) -> InjectableQuery:
        return helpers.insert(records, *keys)

    @staticmethod
    def set(record: Mapping[str, Any], *keys: str) -> InjectableQuery:
        return helpers.set_(record, *keys)


class Sql(_SqlBase[CompositeQuery]):
    def __init__(self) -> None:
        self._build = create_query_factory(CompositeQuery.from_nodes)

    def with_client(self, client: PgClient) -> "SqlWithClient":
        return SqlWithClient(client)


class SqlWithClient(_SqlBase[CompositeQueryWithClient]):
    def __init__(self, client: PgClient) -> None:
        self.client = client
        self._build = create_query_factory(
            lambda nodes: CompositeQueryWithClient.from_nodes(nodes, client)
        )


sql = Sql()
