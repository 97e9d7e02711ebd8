"""
Deep merge of OpenAPI schema fragments.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .validator_ast.nodes import SchemaObject


def deep_merge(*schemas: Mapping[str, Any]) -> SchemaObject:
    """
    Merge schema fragments left to right into a new fragment.

    For a key present in several fragments the later value wins. Mapping
    values are merged recursively; anything else, lists included, is
    replaced outright. Inputs are never mutated and the result shares no
    mutable containers with them.

    Args:
        *schemas: Fragments in increasing order of precedence

    Returns:
        The merged fragment (``{}`` when called without arguments)
    """
    merged: SchemaObject = {}
    for schema in schemas:
        for key, value in schema.items():
            if isinstance(value, Mapping):
                base = merged.get(key)
                merged[key] = deep_merge(base, value) if isinstance(base, dict) else deep_merge(value)
            else:
                merged[key] = copy.deepcopy(value)
    return merged
