"""Document assembler — turns collected models into Swagger 2.0 mappings."""

from pathlib import PurePosixPath

import yaml

from swagger_tree.collector.base import BaseDocument, Operation, Parameter
from swagger_tree.errors import OutputWriteError

BASE_DOC_NAME = "base_doc.yaml"
PATHS_DIR = "paths"


def build_base_doc(base: BaseDocument) -> dict:
    """Build the base_doc.yaml mapping; unset optional keys are omitted."""
    info = {"title": base.title}
    if base.description:
        info["description"] = base.description
    if base.terms_of_service:
        info["termsOfService"] = base.terms_of_service
    if base.contact:
        contact = base.contact.model_dump(exclude_none=True)
        if contact:
            info["contact"] = contact
    if base.license:
        license_ = base.license.model_dump(exclude_none=True)
        if license_:
            info["license"] = license_
    info["version"] = base.version

    doc = {"swagger": base.swagger, "info": info}
    if base.host:
        doc["host"] = base.host
    doc["basePath"] = base.base_path
    doc["schemes"] = list(base.schemes)
    doc["consumes"] = list(base.consumes)
    doc["produces"] = list(base.produces)
    return doc


def build_operation_doc(op: Operation) -> dict:
    """Build the <method>.yaml mapping for one operation."""
    doc = {"tags": list(op.tags)}
    if op.summary:
        doc["summary"] = op.summary
    if op.description:
        doc["description"] = op.description
    if op.operation_id:
        doc["operationId"] = op.operation_id
    if op.deprecated:
        doc["deprecated"] = True
    doc["parameters"] = [_parameter_doc(p) for p in op.parameters]
    return doc


def _parameter_doc(param: Parameter) -> dict:
    doc = {"name": param.name, "in": param.location}
    if param.description:
        doc["description"] = param.description
    doc["type"] = param.data_type
    doc["required"] = param.required
    return doc


def path_segments(path: str) -> list[str]:
    """Split a URL template into directory segments, placeholders kept literally."""
    segments = [s for s in path.split("/") if s]
    for segment in segments:
        if segment in (".", ".."):
            raise OutputWriteError(f"path '{path}' contains a '{segment}' segment")
    return segments


def operation_relpath(op: Operation) -> PurePosixPath:
    """paths/<segments>/<method>.yaml, relative to the output root."""
    return PurePosixPath(PATHS_DIR, *path_segments(op.path), f"{op.method.lower()}.yaml")


def dump_yaml(doc: dict) -> str:
    return yaml.safe_dump(doc, sort_keys=False, default_flow_style=False, allow_unicode=True)
