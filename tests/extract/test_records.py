"""Tests for declaration records and their JSON shape."""

from __future__ import annotations

import json

from funsig.extract.models import (
    ClassDeclaration,
    FileDeclaration,
    FunctionDeclaration,
    ParameterInfo,
)


def _function(**overrides) -> FunctionDeclaration:
    fields = {
        "id": 1,
        "function_name": "add",
        "line_no": 9,
        "parameters": [ParameterInfo("a", "number"), ParameterInfo("b", "number", True)],
    }
    fields.update(overrides)
    return FunctionDeclaration(**fields)


class TestFunctionDeclaration:
    def test_camel_case_keys(self) -> None:
        data = _function(return_type="number").to_dict()

        assert data == {
            "id": 1,
            "functionName": "add",
            "lineNo": 9,
            "parameters": [
                {"name": "a", "type": "number", "optional": False},
                {"name": "b", "type": "number", "optional": True},
            ],
            "returnType": "number",
        }

    def test_absent_return_type_omitted(self) -> None:
        assert "returnType" not in _function().to_dict()

    def test_empty_return_type_kept(self) -> None:
        assert _function(return_type="").to_dict()["returnType"] == ""

    def test_legacy_fields(self) -> None:
        data = _function(file_name="src/a.js", depend_on={7, 3}).to_dict()

        assert data["fileName"] == "src/a.js"
        assert data["dependOn"] == [3, 7]

    def test_legacy_fields_omitted_by_default(self) -> None:
        data = _function().to_dict()

        assert "fileName" not in data
        assert "dependOn" not in data

    def test_empty_dependencies_serialized(self) -> None:
        assert _function(depend_on=set()).to_dict()["dependOn"] == []


class TestFileDeclaration:
    def _record(self) -> FileDeclaration:
        method = _function(id=3, function_name="clear", line_no=20, parameters=[])
        return FileDeclaration(
            file_name="calc.js",
            functions=[_function()],
            classes=[
                ClassDeclaration(
                    id=2,
                    class_name="Calculator",
                    line_no=15,
                    signature="class Calculator",
                    methods=[method],
                )
            ],
        )

    def test_empty(self) -> None:
        record = FileDeclaration.empty("x.js")

        assert record.to_dict() == {"fileName": "x.js", "functions": [], "classes": []}
        assert record.declaration_count == 0

    def test_declaration_count(self) -> None:
        assert self._record().declaration_count == 3

    def test_all_functions_order(self) -> None:
        assert [f.function_name for f in self._record().all_functions()] == ["add", "clear"]

    def test_json_serializable(self) -> None:
        data = json.loads(json.dumps(self._record().to_dict()))

        (cls,) = data["classes"]
        assert cls["className"] == "Calculator"
        assert cls["signature"] == "class Calculator"
        assert cls["methods"][0]["functionName"] == "clear"
