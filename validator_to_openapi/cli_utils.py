"""
CLI utilities for locating validator trees and writing schemas.
"""

import importlib
import json
from collections.abc import Mapping
from typing import Any

import click

from .validator_ast import ValidatorNode


def resolve_target(target: str) -> Any:
    """
    Import the object named by a ``package.module:attribute`` string.

    Dotted attribute paths after the colon are followed, so
    ``schemas:User.address`` is accepted.

    Args:
        target: Import path of the validator node

    Returns:
        The referenced object
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(f"expected 'module:attribute', got {target!r}", param_hint="TARGET")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import module {module_name!r}: {e}", param_hint="TARGET") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise click.BadParameter(f"{module_name!r} has no attribute {attr_path!r}", param_hint="TARGET") from e
    return obj


def split_targets(obj: Any) -> tuple[ValidatorNode | None, dict[str, ValidatorNode] | None]:
    """
    Classify a resolved target as one node or a mapping of named nodes.

    Returns:
        ``(node, None)`` or ``(None, named_nodes)``
    """
    if isinstance(obj, ValidatorNode):
        return obj, None
    if isinstance(obj, Mapping) and obj and all(isinstance(v, ValidatorNode) for v in obj.values()):
        return None, dict(obj)
    raise click.ClickException(f"target is not a validator node or a mapping of validator nodes: {type(obj).__name__}")


def dump_schema(schema: Any, indent: int | None = 2, sort_keys: bool = False) -> str:
    """Serialise a fragment to JSON; values JSON cannot represent are written with str()."""
    return json.dumps(schema, indent=indent, sort_keys=sort_keys, default=str)
