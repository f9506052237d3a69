import json

import pytest
import yaml

from swagger_tree.collector.base import BaseDocument, Operation
from swagger_tree.errors import CompileError
from swagger_tree.generator.compiler import compile_tree, write_document
from swagger_tree.generator.writer import SwaggerTreeWriter


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "swagger"
    SwaggerTreeWriter(root).write(
        BaseDocument(title="Store", base_path="/api/v1"),
        [
            Operation(method="GET", path="/applications", tags=["applications"]),
            Operation(method="POST", path="/applications/{id}"),
            Operation(method="DELETE", path="/applications/{id}"),
            Operation(method="GET", path="/"),
        ],
    )
    return root


class TestCompileTree:
    def test_paths_rebuilt_from_layout(self, tree):
        doc = compile_tree(tree)
        assert doc["swagger"] == "2.0"
        assert doc["basePath"] == "/api/v1"
        assert set(doc["paths"]) == {"/", "/applications", "/applications/{id}"}
        assert set(doc["paths"]["/applications/{id}"]) == {"post", "delete"}
        assert doc["paths"]["/applications"]["get"]["tags"] == ["applications"]

    def test_missing_base_doc(self, tmp_path):
        with pytest.raises(CompileError, match="not found"):
            compile_tree(tmp_path)

    def test_invalid_yaml(self, tree):
        (tree / "paths" / "applications" / "get.yaml").write_text("tags: [broken\n")
        with pytest.raises(CompileError):
            compile_tree(tree)


class TestWriteDocument:
    def test_json(self, tree, tmp_path):
        out = write_document(compile_tree(tree), tmp_path / "swagger.json")
        assert json.loads(out.read_text())["info"]["title"] == "Store"

    def test_yaml(self, tree, tmp_path):
        out = write_document(compile_tree(tree), tmp_path / "swagger.yaml")
        assert "/applications/{id}" in yaml.safe_load(out.read_text())["paths"]
