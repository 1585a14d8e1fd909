"""LanguagePack registry: single source of truth for per-language config.

Every supported language has exactly ONE LanguagePack holding:
- Grammar metadata (PyPI package, import module, loader function)
- File extension detection
- Comment syntax for the text-level comment scanner
- Declaration vocabulary: which node kinds are functions, bindings,
  classes, export wrappers, type aliases and object properties, and which
  fields hold names, parameter lists, member lists and return types

The dispatcher in ``visitor.py`` is language-agnostic and reads only this
table. JavaScript/TypeScript are the reference vocabulary; the other packs
use the same shape with their grammar's node kinds.

The PACKS registry is the canonical lookup: ``PACKS["typescript"]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# =========================================================================
# Dataclasses
# =========================================================================


@dataclass(frozen=True)
class CommentSyntax:
    """Lexical comment and string delimiters for the text scanner."""

    line_prefixes: tuple[str, ...] = ("//",)
    block_delimiters: tuple[tuple[str, str], ...] = (("/*", "*/"),)
    # String literal openers skipped by the scanner, in match priority order
    string_quotes: tuple[str, ...] = ('"', "'")
    triple_quoted: bool = False


@dataclass(frozen=True)
class DeclarationConfig:
    """Node-kind vocabulary for declaration dispatch in one grammar."""

    # Named functions, methods, generator functions -> on_function
    function_types: frozenset[str] = frozenset()
    # Name bindings; reported only when the bound value is function-like
    binding_types: frozenset[str] = frozenset()
    binding_value_fields: tuple[str, ...] = ("value", "right")
    # Anonymous function values (arrow functions, lambdas, closures)
    function_value_types: frozenset[str] = frozenset()
    # Class/interface/enum-like nodes -> on_class
    class_types: frozenset[str] = frozenset()
    class_body_field: str = "body"
    # Class-like nodes without a member list are references (``class Foo;``)
    class_requires_body: bool = False
    # Member lists; function-like nodes directly inside one are never free functions
    member_list_types: frozenset[str] = frozenset()
    # Transparent wrappers (export statements)
    export_types: frozenset[str] = frozenset()
    # Type aliases; reported only when the aliased type is function-shaped
    type_alias_types: frozenset[str] = frozenset()
    type_alias_value_field: str = "value"
    function_type_types: frozenset[str] = frozenset()
    # Object-literal properties with function values (``key: function() {}``)
    property_types: frozenset[str] = frozenset()
    # Class members
    member_function_types: frozenset[str] = frozenset()
    member_property_types: frozenset[str] = frozenset()
    # Body-less member declarations, methods when their declarator is a function
    member_prototype_types: frozenset[str] = frozenset()
    function_declarator_types: frozenset[str] = frozenset()
    # Member wrappers -> field to unwrap, or None to flatten named children
    member_wrapper_types: dict[str, str | None] = field(default_factory=dict)
    # Name lookup order across declaration kinds
    name_fields: tuple[str, ...] = (
        "name",
        "property",
        "left",
        "key",
        "pattern",
        "declarator",
        "type",
    )
    return_type_fields: tuple[str, ...] = ("return_type",)


@dataclass(frozen=True)
class LanguagePack:
    """Complete tree-sitter configuration for a single language."""

    # -- Identity --
    name: str  # Grammar identifier ("javascript", "tsx", "c_sharp", ...)

    # -- Grammar install --
    grammar_package: str  # PyPI package ("tree-sitter-python")
    grammar_module: str  # Python import ("tree_sitter_python")
    min_version: str
    language_func: str = "language"  # "language_typescript", "language_tsx", ...

    # -- File detection --
    extensions: frozenset[str] = field(default_factory=frozenset)

    # -- Extraction --
    comment_syntax: CommentSyntax = field(default_factory=CommentSyntax)
    declarations: DeclarationConfig = field(default_factory=DeclarationConfig)


# =========================================================================
# Comment syntaxes
# =========================================================================

_C_COMMENTS = CommentSyntax()

_JS_COMMENTS = CommentSyntax(string_quotes=('"', "'", "`"))

_HASH_COMMENTS = CommentSyntax(line_prefixes=("#",), block_delimiters=())

_PYTHON_COMMENTS = CommentSyntax(
    line_prefixes=("#",),
    block_delimiters=(),
    triple_quoted=True,
)

_RUBY_COMMENTS = CommentSyntax(
    line_prefixes=("#",),
    block_delimiters=(("=begin", "=end"),),
)

_PHP_COMMENTS = CommentSyntax(line_prefixes=("//", "#"))

_GO_COMMENTS = CommentSyntax(string_quotes=('"', "'", "`"))


# =========================================================================
# JAVASCRIPT / TYPESCRIPT
# =========================================================================

_JS_FUNCTION_VALUES = frozenset(
    {
        "arrow_function",
        "function_expression",
        "function",  # tree-sitter-javascript < 0.21
        "generator_function",
    }
)

_JAVASCRIPT_DECLARATIONS = DeclarationConfig(
    function_types=frozenset(
        {
            "function_declaration",
            "generator_function_declaration",
            "method_definition",
        }
    ),
    binding_types=frozenset({"variable_declarator", "assignment_expression"}),
    function_value_types=_JS_FUNCTION_VALUES,
    class_types=frozenset({"class_declaration"}),
    member_list_types=frozenset({"class_body"}),
    export_types=frozenset({"export_statement"}),
    property_types=frozenset({"pair"}),
    member_function_types=frozenset({"method_definition"}),
    member_property_types=frozenset({"field_definition"}),
)

_TYPESCRIPT_DECLARATIONS = DeclarationConfig(
    function_types=frozenset(
        {
            "function_declaration",
            "generator_function_declaration",
            "function_signature",
            "method_definition",
        }
    ),
    binding_types=frozenset({"variable_declarator", "assignment_expression"}),
    function_value_types=_JS_FUNCTION_VALUES,
    class_types=frozenset(
        {
            "class_declaration",
            "abstract_class_declaration",
            "interface_declaration",
            "enum_declaration",
        }
    ),
    member_list_types=frozenset({"class_body"}),
    export_types=frozenset({"export_statement"}),
    type_alias_types=frozenset({"type_alias_declaration"}),
    function_type_types=frozenset({"function_type"}),
    property_types=frozenset({"pair"}),
    member_function_types=frozenset(
        {
            "method_definition",
            "method_signature",
            "abstract_method_signature",
        }
    ),
    member_property_types=frozenset(
        {
            "field_definition",
            "public_field_definition",
            "property_signature",
        }
    ),
)

JAVASCRIPT_PACK = LanguagePack(
    name="javascript",
    grammar_package="tree-sitter-javascript",
    grammar_module="tree_sitter_javascript",
    min_version="0.23.0",
    extensions=frozenset({".js", ".jsx"}),
    comment_syntax=_JS_COMMENTS,
    declarations=_JAVASCRIPT_DECLARATIONS,
)

TYPESCRIPT_PACK = LanguagePack(
    name="typescript",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_typescript",
    extensions=frozenset({".ts"}),
    comment_syntax=_JS_COMMENTS,
    declarations=_TYPESCRIPT_DECLARATIONS,
)

TSX_PACK = LanguagePack(
    name="tsx",
    grammar_package="tree-sitter-typescript",
    grammar_module="tree_sitter_typescript",
    min_version="0.23.0",
    language_func="language_tsx",
    extensions=frozenset({".tsx"}),
    comment_syntax=_JS_COMMENTS,
    declarations=_TYPESCRIPT_DECLARATIONS,
)


# =========================================================================
# PYTHON
# =========================================================================

PYTHON_PACK = LanguagePack(
    name="python",
    grammar_package="tree-sitter-python",
    grammar_module="tree_sitter_python",
    min_version="0.23.0",
    extensions=frozenset({".py"}),
    comment_syntax=_PYTHON_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"function_definition"}),
        binding_types=frozenset({"assignment"}),
        function_value_types=frozenset({"lambda"}),
        class_types=frozenset({"class_definition"}),
        member_function_types=frozenset({"function_definition"}),
        member_wrapper_types={"decorated_definition": "definition"},
    ),
)


# =========================================================================
# RUBY
# =========================================================================

RUBY_PACK = LanguagePack(
    name="ruby",
    grammar_package="tree-sitter-ruby",
    grammar_module="tree_sitter_ruby",
    min_version="0.23.0",
    extensions=frozenset({".rb"}),
    comment_syntax=_RUBY_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"method", "singleton_method"}),
        binding_types=frozenset({"assignment"}),
        function_value_types=frozenset({"lambda"}),
        class_types=frozenset({"class", "module"}),
        member_function_types=frozenset({"method", "singleton_method"}),
        return_type_fields=(),
    ),
)


# =========================================================================
# JAVA
# =========================================================================

JAVA_PACK = LanguagePack(
    name="java",
    grammar_package="tree-sitter-java",
    grammar_module="tree_sitter_java",
    min_version="0.23.0",
    extensions=frozenset({".java"}),
    comment_syntax=_C_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"method_declaration", "constructor_declaration"}),
        binding_types=frozenset({"variable_declarator"}),
        function_value_types=frozenset({"lambda_expression"}),
        class_types=frozenset(
            {
                "class_declaration",
                "interface_declaration",
                "enum_declaration",
                "record_declaration",
            }
        ),
        member_function_types=frozenset(
            {
                "method_declaration",
                "constructor_declaration",
                "compact_constructor_declaration",
            }
        ),
        member_list_types=frozenset({"class_body"}),
        member_wrapper_types={"enum_body_declarations": None},
        return_type_fields=("type",),
    ),
)


# =========================================================================
# C / C++
# =========================================================================

C_PACK = LanguagePack(
    name="c",
    grammar_package="tree-sitter-c",
    grammar_module="tree_sitter_c",
    min_version="0.23.0",
    extensions=frozenset({".c", ".h"}),
    comment_syntax=_C_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"function_definition"}),
        return_type_fields=("type",),
    ),
)

CPP_PACK = LanguagePack(
    name="cpp",
    grammar_package="tree-sitter-cpp",
    grammar_module="tree_sitter_cpp",
    min_version="0.23.0",
    extensions=frozenset({".cpp", ".hpp", ".cc"}),
    comment_syntax=_C_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"function_definition"}),
        binding_types=frozenset({"init_declarator"}),
        function_value_types=frozenset({"lambda_expression"}),
        class_types=frozenset({"class_specifier", "struct_specifier"}),
        class_requires_body=True,
        member_list_types=frozenset({"field_declaration_list"}),
        member_function_types=frozenset({"function_definition"}),
        member_prototype_types=frozenset({"field_declaration", "declaration"}),
        function_declarator_types=frozenset({"function_declarator"}),
        member_wrapper_types={"template_declaration": None},
        return_type_fields=("type",),
    ),
)


# =========================================================================
# C#
# =========================================================================

CSHARP_PACK = LanguagePack(
    name="c_sharp",
    grammar_package="tree-sitter-c-sharp",
    grammar_module="tree_sitter_c_sharp",
    min_version="0.23.0",
    extensions=frozenset({".cs"}),
    comment_syntax=_C_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset(
            {"method_declaration", "constructor_declaration", "local_function_statement"}
        ),
        binding_types=frozenset({"variable_declarator"}),
        function_value_types=frozenset({"lambda_expression", "anonymous_method_expression"}),
        class_types=frozenset(
            {
                "class_declaration",
                "interface_declaration",
                "struct_declaration",
                "record_declaration",
                "enum_declaration",
            }
        ),
        member_function_types=frozenset({"method_declaration", "constructor_declaration"}),
        return_type_fields=("returns", "type"),
    ),
)


# =========================================================================
# GO
# =========================================================================

GO_PACK = LanguagePack(
    name="go",
    grammar_package="tree-sitter-go",
    grammar_module="tree_sitter_go",
    min_version="0.23.0",
    extensions=frozenset({".go"}),
    comment_syntax=_GO_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"function_declaration", "method_declaration"}),
        return_type_fields=("result",),
    ),
)


# =========================================================================
# PHP
# =========================================================================

PHP_PACK = LanguagePack(
    name="php",
    grammar_package="tree-sitter-php",
    grammar_module="tree_sitter_php",
    min_version="0.23.0",
    language_func="language_php",
    extensions=frozenset({".php"}),
    comment_syntax=_PHP_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"function_definition", "method_declaration"}),
        binding_types=frozenset({"assignment_expression"}),
        function_value_types=frozenset(
            {"anonymous_function", "anonymous_function_creation_expression", "arrow_function"}
        ),
        class_types=frozenset(
            {
                "class_declaration",
                "interface_declaration",
                "trait_declaration",
                "enum_declaration",
            }
        ),
        member_function_types=frozenset({"method_declaration"}),
    ),
)


# =========================================================================
# RUST
# =========================================================================

RUST_PACK = LanguagePack(
    name="rust",
    grammar_package="tree-sitter-rust",
    grammar_module="tree_sitter_rust",
    min_version="0.23.0",
    extensions=frozenset({".rs"}),
    comment_syntax=_C_COMMENTS,
    declarations=DeclarationConfig(
        function_types=frozenset({"function_item", "function_signature_item"}),
        binding_types=frozenset({"let_declaration"}),
        function_value_types=frozenset({"closure_expression"}),
        class_types=frozenset({"impl_item", "trait_item", "struct_item", "enum_item"}),
        member_function_types=frozenset({"function_item", "function_signature_item"}),
    ),
)


# =========================================================================
# Canonical registries
# =========================================================================

_ALL_PACKS: tuple[LanguagePack, ...] = (
    JAVASCRIPT_PACK,
    TYPESCRIPT_PACK,
    TSX_PACK,
    PYTHON_PACK,
    RUBY_PACK,
    JAVA_PACK,
    C_PACK,
    CPP_PACK,
    CSHARP_PACK,
    GO_PACK,
    PHP_PACK,
    RUST_PACK,
)

# grammar id -> Pack
PACKS: dict[str, LanguagePack] = {pack.name: pack for pack in _ALL_PACKS}

# Extension (with leading dot, lowercase) -> Pack
_EXT_TO_PACK: dict[str, LanguagePack] = {}
for _pack in _ALL_PACKS:
    for _ext in _pack.extensions:
        _EXT_TO_PACK[_ext] = _pack

# Extensions that are recognized but deliberately not parsed
SKIPPED_EXTENSIONS: frozenset[str] = frozenset({".json"})


# =========================================================================
# Public API
# =========================================================================


def get_pack_for_ext(ext: str) -> LanguagePack | None:
    """Get a LanguagePack for a file extension (with leading dot, any case)."""
    return _EXT_TO_PACK.get(ext.lower())


def get_pack(name: str) -> LanguagePack | None:
    """Get a LanguagePack by grammar identifier."""
    return PACKS.get(name)
