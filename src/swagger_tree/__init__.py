"""Generate Swagger 2.0 YAML descriptor trees from FastAPI route tables."""

__version__ = "0.1.0"
