"""Base document configuration.

Metadata is layered: built-in defaults, then what the API surface
declares, then an optional YAML config file, then CLI options. Later
layers win; unset (None) values never override.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from swagger_tree.collector.base import BaseDocument, Contact, License
from swagger_tree.errors import ConfigError


class SwaggerConfig(BaseModel):
    """One layer of base document metadata; every field is optional."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str | None = None
    description: str | None = None
    terms_of_service: str | None = Field(default=None, alias="termsOfService")
    contact: Contact | None = None
    license: License | None = None
    version: str | None = None
    host: str | None = None
    base_path: str | None = Field(default=None, alias="basePath")
    schemes: list[str] | None = None
    consumes: list[str] | None = None
    produces: list[str] | None = None


def parse_config(data: object, source: str) -> SwaggerConfig:
    if data is None:
        return SwaggerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping, got {type(data).__name__}")
    try:
        return SwaggerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source}: {e}") from e


def load_config(file_path: Path) -> SwaggerConfig:
    """Load a YAML config file into a SwaggerConfig."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {file_path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {file_path}: {e}") from e
    return parse_config(data, str(file_path))


def merge_base_document(*layers: SwaggerConfig) -> BaseDocument:
    """Merge config layers (lowest precedence first) over the defaults."""
    merged: dict = {}
    for layer in layers:
        merged.update(layer.model_dump(exclude_none=True))
    try:
        return BaseDocument.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
