"""
Template collector: text segments + placeholders -> flat node tuple.

Python has no tagged template literals, so a template is either a format
string with ``{}`` markers (``"id = {} and active = {}"``) or an explicit
sequence of text segments one longer than the placeholders.
"""

from collections.abc import Sequence
from string import Formatter
from typing import Any

from pgcompose.engines.sql.nodes import (
    BindingNode,
    FunctionalNode,
    QueryNode,
    QueryNodes,
    TextNode,
)
from pgcompose.engines.sql.queries import InjectableQuery

_FORMATTER = Formatter()

Template = str | Sequence[str]


def split_template(template: str) -> list[str]:
    """Split *template* on ``{}`` markers.

    ``{{`` and ``}}`` stand for literal braces. Named or indexed fields and
    format specs are rejected so a typo cannot silently become text.
    """
    segments: list[str] = []
    current = ""
    for literal, field, spec, conversion in _FORMATTER.parse(template):
        current += literal
        if field is None:
            continue
        if field != "" or spec or conversion:
            raise ValueError(
                f"Only bare {{}} placeholders are supported, got "
                f"{{{field}{'!' + conversion if conversion else ''}"
                f"{':' + spec if spec else ''}}}"
            )
        segments.append(current)
        current = ""
    segments.append(current)
    return segments


def to_segments(template: Template) -> list[str]:
    if isinstance(template, str):
        return split_template(template)
    return list(template)


def _placeholder_nodes(placeholder: Any) -> Sequence[QueryNode]:
    if isinstance(placeholder, InjectableQuery):
        return placeholder.nodes
    if callable(placeholder):
        return (FunctionalNode(placeholder),)
    return (BindingNode(placeholder),)


def collect_query_nodes(
    strings: Sequence[str], placeholders: Sequence[Any]
) -> QueryNodes:
    """Interleave *strings* with placeholder nodes, then drop empty text.

    Injectable queries are spliced in place, callables become
    ``FunctionalNode`` and every other value becomes ``BindingNode``.
    """
    if len(strings) != len(placeholders) + 1:
        raise ValueError(
            f"Template has {len(strings) - 1} placeholder(s) "
            f"but {len(placeholders)} value(s) were given"
        )

    nodes: list[QueryNode] = []
    for index, string in enumerate(strings):
        nodes.append(TextNode(string))
        if index < len(placeholders):
            nodes.extend(_placeholder_nodes(placeholders[index]))

    return remove_empty_text_nodes(nodes)


def remove_empty_text_nodes(nodes: Sequence[QueryNode]) -> QueryNodes:
    return tuple(
        node for node in nodes if not isinstance(node, TextNode) or node.value != ""
    )
