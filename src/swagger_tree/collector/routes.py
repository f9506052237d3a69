"""FastAPI route collector.

Walks the route table of a FastAPI application or APIRouter and
converts each documented route into Operation models.
"""

import datetime
import decimal
import enum
import inspect
import types
import typing
import uuid
from collections.abc import Mapping, Sequence
from itertools import chain

from fastapi import params
from fastapi.routing import APIRoute
from pydantic import BaseModel

from swagger_tree.collector.base import Operation, Parameter
from swagger_tree.config import SwaggerConfig, parse_config
from swagger_tree.errors import ConfigError
from swagger_tree.log import get_logger

logger = get_logger(__name__)

METHOD_ORDER = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH")

_SCALAR_TYPES = (
    (bool, "boolean"),
    (int, "integer"),
    (float, "number"),
    (decimal.Decimal, "number"),
    (str, "string"),
    (bytes, "string"),
    (enum.Enum, "string"),
    (datetime.date, "string"),
    (datetime.time, "string"),
    (datetime.timedelta, "string"),
    (uuid.UUID, "string"),
    (BaseModel, "object"),
)


def collect_operations(surface, base_path: str = "/", include_hidden: bool = False) -> list[Operation]:
    """Collect operations from ``surface.routes`` in declaration order."""
    operations = []
    for route in iter_api_routes(surface.routes):
        methods = _sorted_methods(route.methods)
        for method in methods:
            operation = _build_operation(route, method, base_path, multi_method=len(methods) > 1)
            if operation.hidden and not include_hidden:
                logger.debug("hidden_operation_skipped", method=method, path=operation.path)
                continue
            operations.append(operation)

    if not operations:
        logger.warning("no_operations_found", surface=type(surface).__name__)
    return operations


def iter_api_routes(routes):
    """Yield every APIRoute in declaration order, included routers expanded in place.

    Recent FastAPI releases keep an included router as a single entry in
    ``app.routes``; its ``effective_route_contexts()`` yields one context per
    route with the include prefix, tags, dependencies and visibility applied.
    Older releases copy those routes into ``app.routes`` directly.
    """
    for route in routes:
        expand = getattr(route, "effective_route_contexts", None)
        if expand is None:
            candidates = [(route, route)]
        else:
            candidates = [(context.original_route, context) for context in expand()]

        for original, effective in candidates:
            if isinstance(original, APIRoute):
                yield effective
            else:
                logger.debug("route_skipped", path=getattr(effective, "path", None), kind=type(original).__name__)


def read_metadata(surface) -> SwaggerConfig:
    """Read base document metadata declared on the surface itself.

    FastAPI keeps unknown constructor keywords in ``app.extra``, so an
    application may carry its Swagger 2.0 settings as ``swagger={...}``.
    """
    declared = {
        "title": getattr(surface, "title", None),
        "description": getattr(surface, "description", None) or None,
        "termsOfService": getattr(surface, "terms_of_service", None),
        "contact": getattr(surface, "contact", None),
        "license": getattr(surface, "license_info", None),
        "version": getattr(surface, "version", None),
    }
    extra = getattr(surface, "extra", None) or {}
    swagger = extra.get("swagger") or {}
    if not isinstance(swagger, dict):
        raise ConfigError(f"swagger settings must be a mapping, got {type(swagger).__name__}")
    declared.update(swagger)
    return parse_config(declared, f"{type(surface).__name__} metadata")


def strip_base_path(path: str, base_path: str) -> str:
    base = base_path.rstrip("/")
    if base and (path == base or path.startswith(base + "/")):
        path = path[len(base):]
    return path or "/"


def default_operation_id(method: str, path: str) -> str:
    segments = [s.strip("{}") for s in path.split("/") if s]
    return "_".join([method.lower(), *segments])


def _sorted_methods(methods) -> list[str]:
    def key(method: str):
        return (METHOD_ORDER.index(method), method) if method in METHOD_ORDER else (len(METHOD_ORDER), method)

    return sorted((m.upper() for m in methods or ()), key=key)


def _build_operation(route, method: str, base_path: str, multi_method: bool = False) -> Operation:
    path = strip_base_path(route.path_format, base_path)
    operation_id = route.operation_id
    if operation_id and multi_method:
        # operationIds must stay unique across the methods sharing one route.
        operation_id = f"{operation_id}_{method.lower()}"
    summary = route.summary or None
    # Without a separate detail, the summary doubles as the description.
    description = route.description or summary

    return Operation(
        method=method,
        path=path,
        tags=[t.value if isinstance(t, enum.Enum) else str(t) for t in route.tags or []],
        summary=summary,
        description=description,
        operation_id=operation_id or default_operation_id(method, path),
        deprecated=bool(route.deprecated),
        hidden=not route.include_in_schema,
        parameters=_collect_parameters(route),
    )


def _collect_parameters(route) -> list[Parameter]:
    result = []
    seen = set()
    for field in _ordered_fields(route.dependant):
        location = _location(field.field_info)
        if location is None:
            logger.warning("parameter_skipped", route=route.path, name=field.alias, reason="no Swagger 2.0 location")
            continue
        if (location, field.alias) in seen:
            continue
        seen.add((location, field.alias))

        result.append(
            Parameter(
                name=field.alias,
                location=location,
                data_type=swagger_type(field.field_info),
                required=bool(field.required),
                description=field.field_info.description or None,
            )
        )
    return result


def _ordered_fields(dependant) -> list:
    """Flatten a dependant's fields following the declared signature order."""
    own = {
        field.name: field
        for field in chain(
            dependant.path_params,
            dependant.query_params,
            dependant.header_params,
            dependant.cookie_params,
            dependant.body_params,
        )
    }
    pending = list(dependant.dependencies)
    ordered = []

    # Decorator-level dependencies carry no name and run first.
    for sub in [d for d in pending if not d.name]:
        pending.remove(sub)
        ordered.extend(_ordered_fields(sub))

    for name in _signature_names(dependant.call):
        sub = next((d for d in pending if d.name == name), None)
        if sub is not None:
            pending.remove(sub)
            ordered.extend(_ordered_fields(sub))
        elif name in own:
            ordered.append(own.pop(name))

    for sub in pending:
        ordered.extend(_ordered_fields(sub))
    ordered.extend(own.values())
    return ordered


def _signature_names(call) -> list[str]:
    if call is None:
        return []
    try:
        return list(inspect.signature(call).parameters)
    except (TypeError, ValueError):
        return []


def _location(field_info) -> str | None:
    if isinstance(field_info, params.Form):
        return "formData"
    if isinstance(field_info, params.Body):
        return "body"
    if isinstance(field_info, params.Param):
        return {"path": "path", "query": "query", "header": "header"}.get(field_info.in_.value)
    return None


def swagger_type(field_info) -> str:
    """Map a field's annotation onto a Swagger 2.0 primitive type."""
    if isinstance(field_info, params.File):
        return "file"
    return _annotation_type(field_info.annotation)


def _annotation_type(annotation) -> str:
    origin = typing.get_origin(annotation)

    if origin is typing.Annotated:
        return _annotation_type(typing.get_args(annotation)[0])
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return _annotation_type(args[0]) if args else "string"
    if origin is typing.Literal:
        values = typing.get_args(annotation)
        return _annotation_type(type(values[0])) if values else "string"

    target = origin or annotation
    if inspect.isclass(target):
        if issubclass(target, (str, bytes)):
            return "string"
        if issubclass(target, Mapping):
            return "object"
        if issubclass(target, (Sequence, set, frozenset)):
            return "array"
        for cls, name in _SCALAR_TYPES:
            if issubclass(target, cls):
                return name
    return "string"

