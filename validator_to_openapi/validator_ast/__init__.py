"""
Validator AST module.

Contains the validator node definitions, the override annotation API and
shorthand builders.
"""

from __future__ import annotations

from .nodes import (
    UNSUPPORTED_KINDS,
    AnyNode,
    ArrayNode,
    BigIntNode,
    BooleanNode,
    Check,
    DateNode,
    Effect,
    EffectsNode,
    EnumNode,
    FunctionNode,
    IntersectionNode,
    LazyNode,
    LiteralNode,
    MapNode,
    NativeEnumNode,
    NeverNode,
    NullableNode,
    NullNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    PromiseNode,
    RecordNode,
    SchemaObject,
    StringNode,
    TupleNode,
    UndefinedNode,
    UnionNode,
    UnknownNode,
    ValidatorNode,
    VoidNode,
    openapi,
)

__all__ = [
    "ValidatorNode",
    "SchemaObject",
    "Check",
    "Effect",
    "StringNode",
    "NumberNode",
    "BooleanNode",
    "BigIntNode",
    "DateNode",
    "NullNode",
    "NeverNode",
    "LiteralNode",
    "EnumNode",
    "NativeEnumNode",
    "ObjectNode",
    "RecordNode",
    "ArrayNode",
    "OptionalNode",
    "NullableNode",
    "UnionNode",
    "IntersectionNode",
    "EffectsNode",
    "TupleNode",
    "MapNode",
    "FunctionNode",
    "LazyNode",
    "PromiseNode",
    "AnyNode",
    "UnknownNode",
    "VoidNode",
    "UndefinedNode",
    "UNSUPPORTED_KINDS",
    "openapi",
]
