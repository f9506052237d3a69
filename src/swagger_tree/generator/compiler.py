"""Tree compiler — folds a generated descriptor tree into one Swagger document."""

import json
from pathlib import Path

import yaml

from swagger_tree.errors import CompileError, OutputWriteError
from swagger_tree.generator.document import BASE_DOC_NAME, PATHS_DIR, dump_yaml


def _load(file_path: Path) -> dict:
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise CompileError(f"cannot read {file_path}: {e}") from e
    if not isinstance(data, dict):
        raise CompileError(f"{file_path}: expected a mapping")
    return data


def compile_tree(root: Path) -> dict:
    """Read base_doc.yaml and paths/**/<method>.yaml back into one document.

    Paths are keyed by URL template (the directory path under paths/),
    methods by file stem; both are emitted in sorted order.
    """
    root = Path(root)
    base_file = root / BASE_DOC_NAME
    if not base_file.is_file():
        raise CompileError(f"{base_file} not found")

    doc = _load(base_file)
    paths: dict[str, dict] = {}

    paths_dir = root / PATHS_DIR
    if paths_dir.is_dir():
        for op_file in sorted(paths_dir.rglob("*.yaml")):
            url = "/" + "/".join(op_file.parent.relative_to(paths_dir).parts)
            paths.setdefault(url, {})[op_file.stem] = _load(op_file)

    doc["paths"] = paths
    return doc


def write_document(doc: dict, output: Path) -> Path:
    """Write a compiled document; JSON for .json targets, YAML otherwise."""
    output = Path(output)
    if output.suffix == ".json":
        text = json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
    else:
        text = dump_yaml(doc)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"cannot write {output}: {e}") from e
    return output
