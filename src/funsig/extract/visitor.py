"""Tree dispatch: classify syntax nodes into declaration shapes and walk.

The walk is pre-order and iterative (explicit stack), so deeply nested
sources cannot exhaust the interpreter's recursion limit. Dispatch is a
pure function of the node kind and the pack's ``DeclarationConfig``.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Protocol

import tree_sitter

from funsig.extract.packs import DeclarationConfig
from funsig.extract.type_resolver import identifier_text, node_text


class DeclarationShape(Enum):
    FUNCTION = "function"
    BINDING = "binding"
    CLASS = "class"
    EXPORT = "export"
    TYPE_ALIAS = "type_alias"
    PROPERTY = "property"
    UNRECOGNIZED = "unrecognized"


class Dispatch(NamedTuple):
    """Classification result. ``value`` is the node carrying the signature."""

    shape: DeclarationShape
    value: tree_sitter.Node | None = None


_UNRECOGNIZED = Dispatch(DeclarationShape.UNRECOGNIZED)

_MEMBER_ACCESS_TYPES = frozenset(
    {"member_expression", "attribute", "member_access_expression", "field_expression"}
)
_MEMBER_NAME_FIELDS = ("property", "attribute", "name", "field")
_STRING_KEY_TYPES = frozenset({"string", "string_literal"})


class DeclarationVisitor(Protocol):
    def on_function(self, node: tree_sitter.Node, value: tree_sitter.Node) -> None: ...

    def on_class(self, node: tree_sitter.Node) -> None: ...


def function_value(node: tree_sitter.Node, config: DeclarationConfig) -> tree_sitter.Node | None:
    """The function-like value bound by a binding/property node, if any."""
    for field_name in config.binding_value_fields:
        value = node.child_by_field_name(field_name)
        if value is not None and value.type in config.function_value_types:
            return value
    return None


def member_function_value(
    node: tree_sitter.Node, config: DeclarationConfig
) -> tree_sitter.Node | None:
    """Function value of a class field: an assigned function or a function type."""
    value = function_value(node, config)
    if value is not None:
        return value
    type_node = node.child_by_field_name("type")
    if type_node is None:
        return None
    if type_node.type == "type_annotation" and type_node.named_children:
        type_node = type_node.named_children[0]
    if type_node.type in config.function_type_types:
        return type_node
    return None


def is_function_prototype(node: tree_sitter.Node, config: DeclarationConfig) -> bool:
    """True when a body-less declaration declares a function (``void m();``).

    Pointer and reference declarators are looked through. A function
    declarator around a parenthesized one (``int (*fp)(int)``) is a
    function pointer, not a prototype.
    """
    current = node.child_by_field_name("declarator")
    while current is not None:
        inner = current.child_by_field_name("declarator")
        if current.type in config.function_declarator_types:
            return inner is None or inner.type != "parenthesized_declarator"
        current = inner
    return False


def classify(node: tree_sitter.Node, config: DeclarationConfig) -> Dispatch:
    kind = node.type
    if kind in config.function_types:
        return Dispatch(DeclarationShape.FUNCTION, node)
    if kind in config.class_types:
        if config.class_requires_body and node.child_by_field_name(config.class_body_field) is None:
            return _UNRECOGNIZED
        return Dispatch(DeclarationShape.CLASS)
    if kind in config.export_types:
        return Dispatch(DeclarationShape.EXPORT)
    if kind in config.binding_types:
        value = function_value(node, config)
        return Dispatch(DeclarationShape.BINDING, value) if value is not None else _UNRECOGNIZED
    if kind in config.type_alias_types:
        value = node.child_by_field_name(config.type_alias_value_field)
        if value is not None and value.type in config.function_type_types:
            return Dispatch(DeclarationShape.TYPE_ALIAS, value)
        return _UNRECOGNIZED
    if kind in config.property_types:
        value = function_value(node, config)
        return Dispatch(DeclarationShape.PROPERTY, value) if value is not None else _UNRECOGNIZED
    return _UNRECOGNIZED


def declaration_name(node: tree_sitter.Node, config: DeclarationConfig, source: bytes) -> str:
    """Declared name of a function, binding, property or class node.

    Member targets (``obj.name = ...``) resolve to the member name; quoted
    object keys lose their quotes. Returns "" when the node has no name.
    """
    for field_name in config.name_fields:
        name_node = node.child_by_field_name(field_name)
        if name_node is not None:
            return _name_text(name_node, source)
    return ""


def _name_text(node: tree_sitter.Node, source: bytes) -> str:
    if node.type in _MEMBER_ACCESS_TYPES:
        for field_name in _MEMBER_NAME_FIELDS:
            member = node.child_by_field_name(field_name)
            if member is not None:
                return node_text(member, source)
    if node.type in _STRING_KEY_TYPES:
        return node_text(node, source).strip("'\"`")
    return identifier_text(node, source)


def traverse(
    root: tree_sitter.Node,
    config: DeclarationConfig,
    visitor: DeclarationVisitor,
) -> None:
    """Walk the tree pre-order, dispatching declarations to ``visitor``.

    Function-like nodes are reported and then descended into. Class-like
    nodes are reported and descended into except for their member list,
    which the visitor handles itself. Members of an unnamed class body
    (``const Foo = class { bar() {} }``) are descended into but not
    reported. Everything else is descended into.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        shape, value = classify(node, config)
        children = node.children

        if shape is DeclarationShape.CLASS:
            visitor.on_class(node)
            body = node.child_by_field_name(config.class_body_field)
            if body is not None:
                children = [c for c in children if c != body]
        elif value is not None and not _in_member_list(node, config):
            visitor.on_function(node, value)

        stack.extend(reversed(children))


def _in_member_list(node: tree_sitter.Node, config: DeclarationConfig) -> bool:
    parent = node.parent
    return parent is not None and parent.type in config.member_list_types
