"""Declaration assembly: turn dispatched nodes into declaration records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import structlog
import tree_sitter

from funsig.extract.comments import DEFAULT_MAX_DISTANCE, CommentIndex
from funsig.extract.models import ClassDeclaration, FunctionDeclaration
from funsig.extract.packs import DeclarationConfig, LanguagePack
from funsig.extract.type_resolver import (
    parse_doc_tags,
    resolve_parameters,
    resolve_return_type,
)
from funsig.extract.visitor import (
    declaration_name,
    is_function_prototype,
    member_function_value,
)

logger = structlog.get_logger()


@dataclass
class ExtractionContext:
    """Per-run state. Ids are unique and increasing within one run."""

    next_id: int = 1

    def allocate_id(self) -> int:
        allocated = self.next_id
        self.next_id += 1
        return allocated


def class_members(
    node: tree_sitter.Node, config: DeclarationConfig
) -> Iterator[tuple[tree_sitter.Node, tree_sitter.Node]]:
    """Yield ``(member, signature_node)`` for each callable member, in order."""
    body = node.child_by_field_name(config.class_body_field)
    if body is None:
        return
    pending = list(reversed(body.named_children))
    while pending:
        member = pending.pop()
        if member.type in config.member_wrapper_types:
            unwrap = config.member_wrapper_types[member.type]
            if unwrap is None:
                pending.extend(reversed(member.named_children))
            else:
                inner = member.child_by_field_name(unwrap)
                if inner is not None:
                    pending.append(inner)
        elif member.type in config.member_function_types:
            yield member, member
        elif member.type in config.member_prototype_types:
            if is_function_prototype(member, config):
                yield member, member
        elif member.type in config.member_property_types:
            value = member_function_value(member, config)
            if value is not None:
                yield member, value


class DeclarationAssembler:
    """Collects the functions and classes of one file.

    Implements the visitor callbacks used by ``traverse``. Ids come from the
    shared ``ExtractionContext``; a class takes its id before its methods.
    """

    def __init__(
        self,
        source: bytes,
        pack: LanguagePack,
        comments: CommentIndex,
        context: ExtractionContext,
        max_comment_distance: int = DEFAULT_MAX_DISTANCE,
    ) -> None:
        self.source = source
        self.pack = pack
        self.comments = comments
        self.context = context
        self.max_comment_distance = max_comment_distance
        self.functions: list[FunctionDeclaration] = []
        self.classes: list[ClassDeclaration] = []

    @property
    def _config(self) -> DeclarationConfig:
        return self.pack.declarations

    def on_function(self, node: tree_sitter.Node, value: tree_sitter.Node) -> None:
        function = self.build_function(node, value)
        if function is not None:
            self.functions.append(function)

    def on_class(self, node: tree_sitter.Node) -> None:
        name = declaration_name(node, self._config, self.source)
        if not name:
            return
        class_id = self.context.allocate_id()
        methods = [
            method
            for member, value in class_members(node, self._config)
            if (method := self.build_function(member, value)) is not None
        ]
        self.classes.append(
            ClassDeclaration(
                id=class_id,
                class_name=name,
                line_no=node.start_point[0] + 1,
                signature=self.class_signature(node, name),
                methods=methods,
            )
        )
        logger.debug("class_found", name=name, line=node.start_point[0] + 1, methods=len(methods))

    def build_function(
        self, node: tree_sitter.Node, value: tree_sitter.Node
    ) -> FunctionDeclaration | None:
        """Build a record for a named function-like node; None when unnamed."""
        name = declaration_name(node, self._config, self.source)
        if not name:
            return None
        comment = self.comments.nearest(node.start_byte, self.max_comment_distance)
        doc = parse_doc_tags(comment)
        function = FunctionDeclaration(
            id=self.context.allocate_id(),
            function_name=name,
            line_no=node.start_point[0] + 1,
            parameters=resolve_parameters(value, self.source, doc),
            return_type=resolve_return_type(
                value, self.source, self._config.return_type_fields, doc
            ),
        )
        logger.debug("function_found", name=name, line=function.line_no)
        return function

    def class_signature(self, node: tree_sitter.Node, name: str) -> str:
        """Header text up to the member list, or ``class <name>`` as fallback."""
        body = node.child_by_field_name(self._config.class_body_field)
        if body is None:
            return f"class {name}"
        header = self.source[node.start_byte : body.start_byte].decode("utf-8", errors="replace")
        return header.strip() or f"class {name}"
