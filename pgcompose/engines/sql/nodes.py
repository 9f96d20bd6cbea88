"""
Query nodes: the intermediate form between a template and SQL text.

A composed statement is a flat tuple of nodes. ``TextNode`` is emitted
verbatim, ``BindingNode`` and ``FunctionalNode`` become ``$n`` parameters.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

Input = TypeVar("Input")

# str | bool | int | float | None | date | datetime | list, or anything else
# the driver can adapt
BindingValue = Any

FunctionalValue = Callable[[Input], BindingValue]


@dataclass(frozen=True)
class TextNode:
    """Literal SQL text; never sent as a parameter."""

    value: str


@dataclass(frozen=True)
class BindingNode:
    """A value sent to the driver as a positional parameter."""

    value: BindingValue


@dataclass(frozen=True)
class FunctionalNode(Generic[Input]):
    """A parameter computed from the execution input, not at build time."""

    value: FunctionalValue[Input]

    def resolve(self, data: Input) -> BindingValue:
        return self.value(data)


QueryParameter = Union[BindingNode, FunctionalNode]
QueryNode = Union[TextNode, BindingNode, FunctionalNode]
QueryNodes = tuple[QueryNode, ...]
