"""Extraction schema model and XML loader."""

from .loader import load_schema, parse_schema
from .model import (
    BlockType,
    ChildLink,
    ExtractionSchema,
    SchemaError,
    Template,
    Variable,
    validate_schema,
)

__all__ = [
    "BlockType",
    "ChildLink",
    "ExtractionSchema",
    "SchemaError",
    "Template",
    "Variable",
    "load_schema",
    "parse_schema",
    "validate_schema",
]
