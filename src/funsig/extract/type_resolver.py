"""Parameter and return-type resolution.

Syntax annotations win; documentation tags (``@param {T} name``,
``@returns {T}``) from the associated comment fill the gaps. Parameter
node kinds are recognized across grammars:

- plain identifiers
- defaulted parameters (``a = 1``) -> optional
- optional markers (``a?: T``) -> optional
- rest/variadic parameters (``...args``, ``*args``) -> type "rest" unless annotated
- destructuring patterns (``{a, b}``, ``[a, b]``) -> verbatim text, type "object"/"array"
- typed wrappers carrying a pattern/name plus a type annotation
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import tree_sitter

from funsig.extract.models import (
    ARRAY_PATTERN_TYPE,
    OBJECT_PATTERN_TYPE,
    REST_TYPE,
    ParameterInfo,
)

# Balanced to one level of nesting: {Object<string, {a: number}>}
_BRACED_TYPE = r"\{(?P<type>(?:[^{}]|\{[^{}]*\})*)\}"

_PARAM_TAG_RE = re.compile(
    r"@param\s+(?:" + _BRACED_TYPE + r"\s*)?(?P<name>\[[^\]]*\]|[\w$.]+)",
)
_RETURNS_TAG_RE = re.compile(r"@returns?\s+" + _BRACED_TYPE)

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "shorthand_property_identifier_pattern",
        "variable_name",
        "self",
        "self_parameter",
        "this",
    }
)

_PATTERN_TYPES: dict[str, str] = {
    "object_pattern": OBJECT_PATTERN_TYPE,
    "array_pattern": ARRAY_PATTERN_TYPE,
}

_REST_TYPES = frozenset(
    {
        "rest_pattern",
        "rest_parameter",
        "list_splat_pattern",
        "dictionary_splat_pattern",
        "splat_parameter",
        "hash_splat_parameter",
        "variadic_parameter",
        "variadic_parameter_declaration",
        "spread_parameter",
    }
)

# Kinds that mark a parameter optional by themselves (``a?: T``, Ruby ``a = 1``)
_OPTIONAL_MARKER_TYPES = frozenset({"optional_parameter", "optional_parameter_declaration"})

_SKIPPED_TYPES = frozenset(
    {
        "comment",
        "line_comment",
        "block_comment",
        "keyword_separator",
        "positional_separator",
        "decorator",
        "attribute_list",
        "modifiers",
        "accessibility_modifier",
        "variadic_parameter_declarator",
    }
)

_TARGET_FIELDS = ("pattern", "name", "left", "declarator")
_DEFAULT_FIELDS = ("value", "default_value", "right", "default")


@dataclass
class DocTags:
    """Types declared in a documentation comment."""

    params: dict[str, str] = field(default_factory=dict)
    returns: str | None = None


def parse_doc_tags(comment: str | None) -> DocTags:
    """Extract ``@param`` and ``@returns``/``@return`` types from a comment.

    ``@param name`` without a braced type records an empty type. Optional
    bracket syntax ``[name=default]`` is reduced to ``name``. Dotted names
    (``options.key``) describe properties, not parameters, and are ignored.
    """
    tags = DocTags()
    if not comment:
        return tags
    for match in _PARAM_TAG_RE.finditer(comment):
        name = match.group("name").strip("[]").split("=", 1)[0].strip()
        if not name or "." in name:
            continue
        tags.params.setdefault(name, (match.group("type") or "").strip())
    returns = _RETURNS_TAG_RE.search(comment)
    if returns:
        tags.returns = returns.group("type").strip()
    return tags


def node_text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def annotation_text(node: tree_sitter.Node, source: bytes) -> str:
    """Type annotation text without the leading ``:`` or ``->``."""
    text = node_text(node, source).strip()
    if text.startswith(":"):
        text = text[1:]
    elif text.startswith("->"):
        text = text[2:]
    return text.strip()


def _explicit_type(node: tree_sitter.Node, source: bytes) -> str:
    type_node = node.child_by_field_name("type")
    if type_node is not None:
        return annotation_text(type_node, source)
    if node.type == "spread_parameter":
        # Java: `int... xs` carries the element type as a bare child
        for child in node.named_children:
            if child.type not in ("variable_declarator", "modifiers"):
                return f"{node_text(child, source)}..."
    return ""


def _has_default(node: tree_sitter.Node) -> bool:
    return any(node.child_by_field_name(f) is not None for f in _DEFAULT_FIELDS)


def _target(node: tree_sitter.Node, type_node: tree_sitter.Node | None) -> tree_sitter.Node | None:
    """The sub-node naming a composite parameter."""
    for field_name in _TARGET_FIELDS:
        target = node.child_by_field_name(field_name)
        if target is not None:
            return target
    for child in node.named_children:
        if child.type in _SKIPPED_TYPES:
            continue
        if type_node is not None and child == type_node:
            continue
        return child
    return None


def identifier_text(node: tree_sitter.Node, source: bytes) -> str:
    """Innermost bound name, descending declarator chains (``*p``, ``&r``)."""
    current = node
    while True:
        inner = current.child_by_field_name("declarator") or current.child_by_field_name("name")
        if inner is None or inner == current:
            break
        current = inner
    if current.type in _IDENTIFIER_TYPES or not current.named_children:
        return node_text(current, source)
    for child in current.named_children:
        if child.type in _IDENTIFIER_TYPES:
            return node_text(child, source)
    return node_text(current, source)


def _rest_name(node: tree_sitter.Node, source: bytes) -> str:
    name = node.child_by_field_name("name")
    if name is not None:
        return identifier_text(name, source)
    for child in node.named_children:
        if child.type in _IDENTIFIER_TYPES or child.type in _PATTERN_TYPES:
            return node_text(child, source)
        if child.type == "variable_declarator":
            return identifier_text(child, source)
    text = node_text(node, source)
    return text.lstrip(".*&") or text


def resolve_parameter(node: tree_sitter.Node, source: bytes) -> list[ParameterInfo]:
    """Resolve one parameter-list child into zero or more parameters.

    Several names sharing one declaration (Go ``a, b int``) yield one
    parameter each.
    """
    kind = node.type
    if kind in _SKIPPED_TYPES or not node.is_named:
        return []
    if kind in _PATTERN_TYPES:
        return [ParameterInfo(name=node_text(node, source), type=_PATTERN_TYPES[kind])]
    if kind in _REST_TYPES:
        rest_type = _explicit_type(node, source) or REST_TYPE
        return [ParameterInfo(name=_rest_name(node, source), type=rest_type)]
    if kind in _IDENTIFIER_TYPES:
        return [ParameterInfo(name=node_text(node, source))]

    type_text = _explicit_type(node, source)
    optional = kind in _OPTIONAL_MARKER_TYPES or _has_default(node)

    names = node.children_by_field_name("name")
    if len(names) > 1:
        return [
            ParameterInfo(name=node_text(n, source), type=type_text, optional=optional)
            for n in names
        ]

    target = _target(node, node.child_by_field_name("type"))
    if target is None:
        return []
    if target.type in _PATTERN_TYPES:
        return [
            ParameterInfo(
                name=node_text(target, source),
                type=_PATTERN_TYPES[target.type],
                optional=optional,
            )
        ]
    if target.type in _REST_TYPES:
        return [
            ParameterInfo(
                name=_rest_name(target, source),
                type=type_text or REST_TYPE,
                optional=optional,
            )
        ]
    return [ParameterInfo(name=identifier_text(target, source), type=type_text, optional=optional)]


def parameter_nodes(value_node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Parameter-list children of a function-like node.

    Follows ``declarator`` chains for C-family definitions, where the
    parameter list hangs off the function declarator.
    """
    current: tree_sitter.Node | None = value_node
    while current is not None:
        params = current.child_by_field_name("parameters")
        if params is not None:
            if params.type in _IDENTIFIER_TYPES:
                return [params]
            return list(params.named_children)
        single = current.child_by_field_name("parameter")
        if single is not None:
            return [single]
        current = current.child_by_field_name("declarator")
    return []


def resolve_parameters(
    value_node: tree_sitter.Node,
    source: bytes,
    doc: DocTags | None = None,
) -> list[ParameterInfo]:
    """Ordered parameters of a function-like node; doc tags fill empty types."""
    params: list[ParameterInfo] = []
    for child in parameter_nodes(value_node):
        params.extend(resolve_parameter(child, source))
    if doc is not None and doc.params:
        for param in params:
            if not param.type and param.name in doc.params:
                param.type = doc.params[param.name]
    return params


def resolve_return_type(
    value_node: tree_sitter.Node,
    source: bytes,
    return_fields: tuple[str, ...],
    doc: DocTags | None = None,
) -> str | None:
    """Annotated return type, else the ``@returns`` tag, else None."""
    for field_name in return_fields:
        type_node = value_node.child_by_field_name(field_name)
        if type_node is not None:
            return annotation_text(type_node, source)
    if doc is not None:
        return doc.returns
    return None
