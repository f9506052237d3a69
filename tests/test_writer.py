import pytest
import yaml

from swagger_tree.collector.base import BaseDocument, Operation
from swagger_tree.errors import OutputWriteError
from swagger_tree.generator.writer import SwaggerTreeWriter


def _ops() -> list[Operation]:
    return [
        Operation(method="GET", path="/applications", summary="List"),
        Operation(method="GET", path="/applications/{id}", hidden=True),
        Operation(method="POST", path="/applications/{id}", summary="Install"),
    ]


class TestSwaggerTreeWriter:
    def test_writes_base_doc_and_operations(self, tmp_path):
        written = SwaggerTreeWriter(tmp_path).write(BaseDocument(), _ops())

        assert written[0] == tmp_path / "base_doc.yaml"
        assert (tmp_path / "paths" / "applications" / "get.yaml").is_file()
        assert (tmp_path / "paths" / "applications" / "{id}" / "post.yaml").is_file()
        assert len(written) == 3

    def test_hidden_operation_not_written(self, tmp_path):
        SwaggerTreeWriter(tmp_path).write(BaseDocument(), _ops())
        assert not (tmp_path / "paths" / "applications" / "{id}" / "get.yaml").exists()

    def test_duplicate_keeps_first(self, tmp_path):
        ops = [
            Operation(method="GET", path="/a", summary="first"),
            Operation(method="GET", path="/a", summary="second"),
        ]
        written = SwaggerTreeWriter(tmp_path).write(BaseDocument(), ops)
        assert len(written) == 2
        doc = yaml.safe_load((tmp_path / "paths" / "a" / "get.yaml").read_text())
        assert doc["summary"] == "first"

    def test_clean_removes_stale_files(self, tmp_path):
        stale = tmp_path / "paths" / "old" / "get.yaml"
        stale.parent.mkdir(parents=True)
        stale.write_text("tags: []\n")

        SwaggerTreeWriter(tmp_path, clean=True).write(BaseDocument(), _ops())
        assert not stale.exists()

    def test_without_clean_stale_files_survive(self, tmp_path):
        stale = tmp_path / "paths" / "old" / "get.yaml"
        stale.parent.mkdir(parents=True)
        stale.write_text("tags: []\n")

        SwaggerTreeWriter(tmp_path).write(BaseDocument(), _ops())
        assert stale.exists()

    def test_rerun_is_byte_identical(self, tmp_path):
        first, second = tmp_path / "first", tmp_path / "second"
        SwaggerTreeWriter(first).write(BaseDocument(), _ops())
        SwaggerTreeWriter(second).write(BaseDocument(), _ops())

        files = sorted(p.relative_to(first) for p in first.rglob("*.yaml"))
        assert files == sorted(p.relative_to(second) for p in second.rglob("*.yaml"))
        for rel in files:
            assert (first / rel).read_bytes() == (second / rel).read_bytes()

    def test_unwritable_root(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(OutputWriteError):
            SwaggerTreeWriter(blocker / "out").write(BaseDocument(), _ops())

    def test_clean_refuses_file_root(self, tmp_path):
        target = tmp_path / "file.yaml"
        target.write_text("")
        with pytest.raises(OutputWriteError, match="not a directory"):
            SwaggerTreeWriter(target, clean=True).write(BaseDocument(), [])
