"""
Shorthand constructors for validator trees.

Usage::

    from validator_to_openapi.validator_ast import builders as v

    user = v.object_({"email": v.string().email(), "age": v.number().int().optional()})
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Mapping

from .nodes import (
    AnyNode,
    ArrayNode,
    BigIntNode,
    BooleanNode,
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
    StringNode,
    TupleNode,
    UndefinedNode,
    UnionNode,
    UnknownNode,
    ValidatorNode,
    VoidNode,
)


def string() -> StringNode:
    return StringNode()


def number() -> NumberNode:
    return NumberNode()


def bigint() -> BigIntNode:
    return BigIntNode()


def boolean() -> BooleanNode:
    return BooleanNode()


def date() -> DateNode:
    return DateNode()


def null() -> NullNode:
    return NullNode()


def never() -> NeverNode:
    return NeverNode()


def literal(value: Any) -> LiteralNode:
    return LiteralNode(value=value)


def enum_(values: list[Any]) -> EnumNode:
    return EnumNode(values=list(values))


def native_enum(enum_class: type[enum.Enum] | Mapping[str, Any]) -> NativeEnumNode:
    return NativeEnumNode(enum_class=enum_class)


def object_(shape: Mapping[str, ValidatorNode]) -> ObjectNode:
    return ObjectNode(shape=dict(shape))


def record(value_type: ValidatorNode, key_type: ValidatorNode | None = None) -> RecordNode:
    return RecordNode(key_type=key_type or StringNode(), value_type=value_type)


def array(element: ValidatorNode) -> ArrayNode:
    return ArrayNode(element=element)


def optional(inner: ValidatorNode) -> OptionalNode:
    return OptionalNode(inner=inner)


def nullable(inner: ValidatorNode) -> NullableNode:
    return NullableNode(inner=inner)


def union(*options: ValidatorNode) -> UnionNode:
    return UnionNode(options=list(options))


def intersection(left: ValidatorNode, right: ValidatorNode) -> IntersectionNode:
    return IntersectionNode(left=left, right=right)


def preprocess(fn: Callable[[Any], Any], schema: ValidatorNode) -> EffectsNode:
    return EffectsNode(schema=schema, effects=[Effect("preprocess", transform=fn)])


def tuple_(*items: ValidatorNode) -> TupleNode:
    return TupleNode(items=list(items))


def map_(key_type: ValidatorNode, value_type: ValidatorNode) -> MapNode:
    return MapNode(key_type=key_type, value_type=value_type)


def function() -> FunctionNode:
    return FunctionNode()


def lazy(getter: Callable[[], ValidatorNode]) -> LazyNode:
    return LazyNode(getter=getter)


def promise(inner: ValidatorNode) -> PromiseNode:
    return PromiseNode(inner=inner)


def any_() -> AnyNode:
    return AnyNode()


def unknown() -> UnknownNode:
    return UnknownNode()


def void() -> VoidNode:
    return VoidNode()


def undefined() -> UndefinedNode:
    return UndefinedNode()
