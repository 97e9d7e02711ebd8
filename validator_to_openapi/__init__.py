"""Validator tree to OpenAPI

A Python package for generating OpenAPI schema objects from validator
trees, with per-node overrides and best-effort typing of transforms.
"""

__version__ = "0.1.0"

from .config import GeneratorConfig
from .generator import PARSERS, generate_schema, generate_schemas
from .merge import deep_merge
from .validator_ast import SchemaObject, ValidatorNode, openapi

__all__ = [
    "generate_schema",
    "generate_schemas",
    "openapi",
    "deep_merge",
    "PARSERS",
    "GeneratorConfig",
    "SchemaObject",
    "ValidatorNode",
]
