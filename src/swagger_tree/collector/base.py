"""Unified data models for collected API routes.

The route collector converts the host framework's route table into
these models; the document assembler turns them into Swagger mappings.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

ParamLocation = Literal["header", "path", "formData", "query", "body"]


class Parameter(BaseModel):
    """A single operation parameter, in declaration order."""

    name: str
    location: ParamLocation
    data_type: str = "string"  # string / integer / number / boolean / array / object / file
    required: bool = False
    description: str | None = None


class Operation(BaseModel):
    """One HTTP method bound to one URL template."""

    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # /applications/{id}, relative to basePath
    tags: list[str] = []
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    deprecated: bool = False
    hidden: bool = False
    parameters: list[Parameter] = []


class Contact(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    url: str | None = None


class License(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    url: str | None = None


class BaseDocument(BaseModel):
    """Top-level API description, independent of any single operation."""

    swagger: Literal["2.0"] = "2.0"
    title: str = "API"
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    version: str = "0.1.0"
    host: str | None = None
    base_path: str = "/"
    schemes: list[str] = ["https"]
    consumes: list[str] = ["application/json"]
    produces: list[str] = ["application/json"]
