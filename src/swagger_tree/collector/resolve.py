"""Resolve an import string into an API surface (FastAPI app or APIRouter)."""

import importlib

from swagger_tree.errors import SurfaceNotFoundError
from swagger_tree.log import get_logger

logger = get_logger(__name__)


def _split_identifier(identifier: str) -> tuple[str, str]:
    if ":" in identifier:
        module_name, _, attrs = identifier.partition(":")
    else:
        module_name, _, attrs = identifier.rpartition(".")
    if not module_name or not attrs:
        raise SurfaceNotFoundError(
            identifier, "expected 'package.module:attribute'"
        )
    if module_name.startswith("."):
        raise SurfaceNotFoundError(identifier, "relative module names are not supported")
    return module_name, attrs


def resolve_surface(identifier: str, factory: bool = False):
    """Import and return the API surface named by ``identifier``.

    Accepts ``module:attr`` (attr may be dotted) or ``module.attr``.
    With ``factory``, the resolved object is called with no arguments
    and its return value is used instead.
    """
    module_name, attrs = _split_identifier(identifier)

    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise SurfaceNotFoundError(
            identifier, f"cannot import '{module_name}': {type(e).__name__}: {e}"
        ) from e

    surface = module
    for attr in attrs.split("."):
        try:
            surface = getattr(surface, attr)
        except AttributeError:
            raise SurfaceNotFoundError(
                identifier, f"'{attr}' not found in '{module_name}'"
            ) from None

    if factory:
        if not callable(surface):
            raise SurfaceNotFoundError(identifier, "factory is not callable")
        try:
            surface = surface()
        except Exception as e:
            raise SurfaceNotFoundError(identifier, f"factory raised {type(e).__name__}: {e}") from e

    if not isinstance(getattr(surface, "routes", None), (list, tuple)):
        raise SurfaceNotFoundError(
            identifier, f"{type(surface).__name__} object has no route table"
        )

    logger.debug("surface_resolved", identifier=identifier, routes=len(surface.routes))
    return surface
