"""Declaration records produced by the extraction engine.

Field names are snake_case in Python; ``to_dict()`` emits the camelCase JSON
shape (``functionName``, ``lineNo``, ``returnType`` ...) consumed by
documentation and call-graph tooling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Type assigned to rest/variadic parameters that carry no annotation
REST_TYPE = "rest"
OBJECT_PATTERN_TYPE = "object"
ARRAY_PATTERN_TYPE = "array"


@dataclass
class ParameterInfo:
    """One parameter of a callable.

    ``name`` is the bound identifier, or the verbatim pattern text for a
    destructuring parameter (``{a, b}`` / ``[a, b]``). ``type`` is empty
    when unknown.
    """

    name: str
    type: str = ""
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "optional": self.optional}


@dataclass
class FunctionDeclaration:
    """A callable unit: free function, method, or function-valued property."""

    id: int
    function_name: str
    line_no: int
    parameters: list[ParameterInfo] = field(default_factory=list)
    return_type: str | None = None  # None = no annotation, "" = empty annotation
    # Legacy mode only
    file_name: str | None = None
    depend_on: set[int] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "functionName": self.function_name,
            "lineNo": self.line_no,
            "parameters": [p.to_dict() for p in self.parameters],
        }
        if self.return_type is not None:
            out["returnType"] = self.return_type
        if self.file_name is not None:
            out["fileName"] = self.file_name
        if self.depend_on is not None:
            out["dependOn"] = sorted(self.depend_on)
        return out


@dataclass
class ClassDeclaration:
    """A class, interface, or enum-like construct with its callable members."""

    id: int
    class_name: str
    line_no: int
    signature: str
    methods: list[FunctionDeclaration] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "className": self.class_name,
            "lineNo": self.line_no,
            "signature": self.signature,
            "methods": [m.to_dict() for m in self.methods],
        }


@dataclass
class FileDeclaration:
    """All declarations found in one file."""

    file_name: str
    functions: list[FunctionDeclaration] = field(default_factory=list)
    classes: list[ClassDeclaration] = field(default_factory=list)

    @classmethod
    def empty(cls, file_name: str) -> FileDeclaration:
        return cls(file_name=file_name)

    @property
    def declaration_count(self) -> int:
        """Functions + classes + methods."""
        return len(self.functions) + sum(1 + len(c.methods) for c in self.classes)

    def all_functions(self) -> list[FunctionDeclaration]:
        """Top-level functions followed by every class method, in order."""
        return [*self.functions, *(m for c in self.classes for m in c.methods)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "functions": [f.to_dict() for f in self.functions],
            "classes": [c.to_dict() for c in self.classes],
        }
