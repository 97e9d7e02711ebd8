"""
OpenAPI schema generation from validator trees.

``generate_schema`` walks a validator tree and returns an OpenAPI schema
fragment. Each node kind is handled by one parser registered in ``PARSERS``.
Parsers build a base fragment from the node's own constraints, recurse into
child nodes, and merge the node's override annotations on top.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable

from .merge import deep_merge
from .utils import probe_value, runtime_type
from .validator_ast.nodes import (
    UNSUPPORTED_KINDS,
    ArrayNode,
    EffectsNode,
    EnumNode,
    IntersectionNode,
    LiteralNode,
    NativeEnumNode,
    NullableNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    RecordNode,
    SchemaObject,
    StringNode,
    UnionNode,
    ValidatorNode,
)

logger = logging.getLogger(__name__)

Parser = Callable[[Any, list[SchemaObject], bool], SchemaObject]

# Types a transform probe may narrow a fragment to
PROBED_TYPES = {"number", "string", "boolean", "null"}


def _iterate_shape(shape: Mapping[str, ValidatorNode], use_output: bool) -> dict[str, SchemaObject]:
    return {key: generate_schema(child, use_output) for key, child in shape.items()}


def parse_object(node: ObjectNode | RecordNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    """Object and record nodes: properties plus the list of required keys.

    A field is required unless it accepts a missing value. Fields typed as
    ``never`` are listed in properties but never required.
    """
    return deep_merge(
        {
            "type": "object",
            "properties": _iterate_shape(node.shape, use_output),
            "required": [key for key, child in node.shape.items() if not child.is_optional() and child.kind != "never"],
        },
        *schemas,
    )


def parse_array(node: ArrayNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"type": "array", "items": generate_schema(node.element, use_output)}, *schemas)


def parse_string(node: StringNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    """String checks, applied in declaration order so the last one of a kind wins."""
    base_schema: SchemaObject = {"type": "string"}
    for check in node.checks:
        if check.kind == "email":
            base_schema["format"] = "email"
        elif check.kind == "uuid":
            base_schema["format"] = "uuid"
        elif check.kind == "url":
            base_schema["format"] = "uri"
        elif check.kind == "max":
            base_schema["maxLength"] = check.value
        elif check.kind == "min":
            base_schema["minLength"] = check.value
        elif check.kind == "regex":
            base_schema["regex"] = check.regex.pattern if isinstance(check.regex, re.Pattern) else check.regex
    return deep_merge(base_schema, *schemas)


def parse_number(node: NumberNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    """Number checks. Exclusive bounds are shifted by one (integer semantics)."""
    base_schema: SchemaObject = {"type": "number"}
    for check in node.checks:
        if check.kind == "max":
            base_schema["maximum"] = check.value - (0 if check.inclusive else 1)
        elif check.kind == "min":
            base_schema["minimum"] = check.value + (0 if check.inclusive else 1)
        elif check.kind == "int":
            base_schema["type"] = "integer"
    return deep_merge(base_schema, *schemas)


def parse_bigint(node: ValidatorNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"type": "integer", "format": "int64"}, *schemas)


def parse_boolean(node: ValidatorNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"type": "boolean"}, *schemas)


def parse_date(node: ValidatorNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"type": "string", "format": "date-time"}, *schemas)


def parse_null(node: ValidatorNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    # Represented as a nullable string with a "null" format, kept as is for existing consumers
    return deep_merge({"type": "string", "format": "null", "nullable": True}, *schemas)


def parse_optional_nullable(node: OptionalNode | NullableNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge(generate_schema(node.inner, use_output), *schemas)


def parse_literal(node: LiteralNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"type": runtime_type(node.value), "enum": [node.value]}, *schemas)


def parse_enum(node: EnumNode | NativeEnumNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    values = list(node.values)
    base_schema: SchemaObject = {"enum": values}
    if values:
        base_schema = {"type": runtime_type(values[0]), **base_schema}
    return deep_merge(base_schema, *schemas)


def parse_intersection(node: IntersectionNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge(
        {
            "allOf": [
                generate_schema(node.left, use_output),
                generate_schema(node.right, use_output),
            ]
        },
        *schemas,
    )


def parse_union(node: UnionNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"oneOf": [generate_schema(option, use_output) for option in node.options]}, *schemas)


def parse_never(node: ValidatorNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    return deep_merge({"readOnly": True}, *schemas)


def parse_transformation(node: EffectsNode, schemas: list[SchemaObject], use_output: bool) -> SchemaObject:
    """
    Effects nodes: the inner node's schema, narrowed by probing the transform.

    The output type of a transform is not known statically. In output mode the
    last transform is called once with a minimal value of the declared input
    type, and the runtime type of its result replaces ``type`` when it is a
    primitive. A transform that raises leaves the input type untouched.

    Args:
        node: The effects node
        schemas: Override fragments, lowest precedence first
        use_output: Whether to describe the value after transformation

    Returns:
        The schema fragment
    """
    input_schema = generate_schema(node.schema, use_output)

    output = "undefined"
    if use_output:
        transforms = [effect for effect in node.effects if effect.type == "transform" and effect.transform is not None]
        if transforms:
            effect = transforms[-1]
            try:
                output = runtime_type(effect.transform(probe_value(input_schema.get("type"))))
            except Exception as e:
                logger.debug("Transform probe raised %r, keeping the input type", e)

    if output in PROBED_TYPES:
        input_schema = {**input_schema, "type": output}
    return deep_merge(input_schema, *schemas)


def parse_catch_all(node: Any, schemas: list[SchemaObject], use_output: bool = False) -> SchemaObject:
    return deep_merge(*schemas)


PARSERS: dict[str, Parser] = {
    "object": parse_object,
    "record": parse_object,
    "string": parse_string,
    "number": parse_number,
    "bigint": parse_bigint,
    "boolean": parse_boolean,
    "date": parse_date,
    "null": parse_null,
    "optional": parse_optional_nullable,
    "nullable": parse_optional_nullable,
    "array": parse_array,
    "literal": parse_literal,
    "enum": parse_enum,
    "native_enum": parse_enum,
    "effects": parse_transformation,
    "intersection": parse_intersection,
    "union": parse_union,
    "never": parse_never,
}
PARSERS.update({kind: parse_catch_all for kind in UNSUPPORTED_KINDS})


def _collect_overrides(node: ValidatorNode) -> list[SchemaObject]:
    """Nullable marker first, then the node's annotations in order."""
    schemas: list[SchemaObject] = [{"nullable": True} if node.is_nullable() else {}]

    annotation = getattr(node, "openapi_schema", None)
    if annotation is None:
        return schemas
    if isinstance(annotation, Mapping):
        annotation = [annotation]
    for schema in annotation:
        if isinstance(schema, Mapping):
            schemas.append(schema)
        else:
            logger.warning("Ignoring OpenAPI override that is not a mapping: %r", schema)
    return schemas


def generate_schema(node: ValidatorNode, use_output: bool = False) -> SchemaObject:
    """
    Generate the OpenAPI schema fragment for a validator node.

    This never raises: unknown kinds and parser failures are logged and fall
    back to the merge of the node's override annotations.

    Args:
        node: Root of the validator tree (or any node in it)
        use_output: Describe output values (after transforms) instead of inputs

    Returns:
        A new schema fragment
    """
    schemas: list[SchemaObject] = []
    try:
        schemas = _collect_overrides(node)
        kind = getattr(node, "kind", None)
        parser = PARSERS.get(kind)
        if parser is None:
            logger.warning("No schema parser for node kind %r, using overrides only", kind)
            return parse_catch_all(node, schemas)
        return parser(node, schemas, use_output)
    except Exception:
        logger.exception("Schema generation failed for %s", type(node).__name__)
        return parse_catch_all(node, schemas)


def generate_schemas(nodes: Mapping[str, ValidatorNode], use_output: bool = False) -> dict[str, SchemaObject]:
    """Generate one fragment per named node, keeping the mapping's order."""
    return {name: generate_schema(node, use_output) for name, node in nodes.items()}
