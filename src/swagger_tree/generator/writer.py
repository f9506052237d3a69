"""Path-tree writer — writes base_doc.yaml and one <method>.yaml per operation."""

import shutil
from pathlib import Path

from swagger_tree.collector.base import BaseDocument, Operation
from swagger_tree.errors import OutputWriteError
from swagger_tree.generator.document import (
    BASE_DOC_NAME,
    build_base_doc,
    build_operation_doc,
    dump_yaml,
    operation_relpath,
)
from swagger_tree.log import get_logger

logger = get_logger(__name__)


class SwaggerTreeWriter:
    """Writes a Swagger descriptor tree under ``output_root``.

    Existing files are overwritten but stale ones are not removed unless
    ``clean`` is set. A failure aborts the run and leaves whatever was
    already written in place.
    """

    def __init__(self, output_root: Path, clean: bool = False):
        self.output_root = Path(output_root)
        self.clean = clean

    def write(self, base: BaseDocument, operations: list[Operation]) -> list[Path]:
        """Write the tree; returns the written file paths in write order."""
        if self.clean:
            self._clean()

        written = [self._write_file(self.output_root / BASE_DOC_NAME, build_base_doc(base))]

        seen = set()
        for op in operations:
            if op.hidden:
                continue
            relpath = operation_relpath(op)
            if relpath in seen:
                logger.warning("duplicate_operation_skipped", method=op.method, path=op.path)
                continue
            seen.add(relpath)
            written.append(self._write_file(self.output_root / relpath, build_operation_doc(op)))

        return written

    def _clean(self) -> None:
        if not self.output_root.exists():
            return
        if not self.output_root.is_dir():
            raise OutputWriteError(f"output root {self.output_root} is not a directory")
        try:
            shutil.rmtree(self.output_root)
        except OSError as e:
            raise OutputWriteError(f"cannot clean {self.output_root}: {e}") from e
        logger.debug("output_root_cleaned", root=str(self.output_root))

    def _write_file(self, file_path: Path, doc: dict) -> Path:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(dump_yaml(doc), encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(f"cannot write {file_path}: {e}") from e
        logger.debug("file_written", path=str(file_path))
        return file_path
