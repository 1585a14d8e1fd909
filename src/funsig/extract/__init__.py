"""Declaration extraction over tree-sitter syntax trees."""

from funsig.extract.engine import DeclarationExtractor, parse_directory, parse_file
from funsig.extract.grammars import GrammarResolver
from funsig.extract.models import (
    ClassDeclaration,
    FileDeclaration,
    FunctionDeclaration,
    ParameterInfo,
)

__all__ = [
    "DeclarationExtractor",
    "GrammarResolver",
    "parse_directory",
    "parse_file",
    "ClassDeclaration",
    "FileDeclaration",
    "FunctionDeclaration",
    "ParameterInfo",
]
