"""
Validator node definitions.

A validator tree is built from these nodes. Each node carries a kind tag,
the constraint data for that kind, and an optional OpenAPI override
annotation attached out-of-band with ``openapi()``.
"""

from __future__ import annotations

import copy
import dataclasses
import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Mapping, Sequence

SchemaObject = dict[str, Any]

STRING_CHECK_KINDS = {
    "email",
    "uuid",
    "url",
    "min",
    "max",
    "length",
    "regex",
    "starts_with",
    "ends_with",
    "trim",
    "datetime",
}

NUMBER_CHECK_KINDS = {"min", "max", "int", "multiple_of"}

EFFECT_TYPES = {"transform", "refinement", "preprocess"}

# Kinds with no structural OpenAPI mapping
UNSUPPORTED_KINDS = {
    "tuple",
    "map",
    "function",
    "lazy",
    "promise",
    "any",
    "unknown",
    "void",
    "undefined",
}


@dataclass
class Check:
    """A single constraint on a string or number node."""

    kind: str
    value: Any = None
    inclusive: bool = True
    regex: re.Pattern | str | None = None
    message: str | None = None


@dataclass
class Effect:
    """A refinement, transform or preprocess step attached to an effects node."""

    type: str
    transform: Callable[[Any], Any] | None = None
    refinement: Callable[[Any], bool] | None = None

    def __post_init__(self):
        if self.type not in EFFECT_TYPES:
            raise ValueError(f"Unknown effect type: {self.type!r}")


@dataclass
class ValidatorNode:
    """Base class for all validator nodes."""

    kind: ClassVar[str] = ""

    # Override annotation: one fragment or an ordered list of fragments
    openapi_schema: SchemaObject | list[SchemaObject] | None = field(default=None, compare=False)

    def is_nullable(self) -> bool:
        """Whether ``None`` is accepted by this node."""
        return False

    def is_optional(self) -> bool:
        """Whether a missing value is accepted by this node."""
        return False

    def openapi(self, schema: SchemaObject | Sequence[SchemaObject] | None = None) -> ValidatorNode:
        return openapi(self, schema)

    def optional(self) -> OptionalNode:
        return OptionalNode(inner=self)

    def nullable(self) -> NullableNode:
        return NullableNode(inner=self)

    def array(self) -> ArrayNode:
        return ArrayNode(element=self)

    def or_(self, other: ValidatorNode) -> UnionNode:
        return UnionNode(options=[self, other])

    def and_(self, other: ValidatorNode) -> IntersectionNode:
        return IntersectionNode(left=self, right=other)

    def transform(self, fn: Callable[[Any], Any]) -> EffectsNode:
        return self._with_effect(Effect("transform", transform=fn))

    def refine(self, fn: Callable[[Any], bool]) -> EffectsNode:
        return self._with_effect(Effect("refinement", refinement=fn))

    def _with_effect(self, effect: Effect) -> EffectsNode:
        # Chained effects share one effects node, like a single pipeline
        if isinstance(self, EffectsNode):
            return dataclasses.replace(self, effects=[*self.effects, effect], openapi_schema=None)
        return EffectsNode(schema=self, effects=[effect])


@dataclass
class _CheckedNode(ValidatorNode):
    """Node whose constraints are an ordered list of checks."""

    ALLOWED_CHECKS: ClassVar[set[str]] = set()

    checks: list[Check] = field(default_factory=list)

    def __post_init__(self):
        for check in self.checks:
            if check.kind not in self.ALLOWED_CHECKS:
                raise ValueError(f"Unknown {self.kind} check: {check.kind!r}")

    def _add_check(self, check: Check):
        # Checks return a new node so that shared base nodes stay untouched
        node = copy.copy(self)
        node.checks = [*self.checks, check]
        node.openapi_schema = None
        node.__post_init__()
        return node


@dataclass
class StringNode(_CheckedNode):
    kind: ClassVar[str] = "string"
    ALLOWED_CHECKS: ClassVar[set[str]] = STRING_CHECK_KINDS

    def email(self) -> StringNode:
        return self._add_check(Check("email"))

    def uuid(self) -> StringNode:
        return self._add_check(Check("uuid"))

    def url(self) -> StringNode:
        return self._add_check(Check("url"))

    def min(self, value: int) -> StringNode:
        return self._add_check(Check("min", value))

    def max(self, value: int) -> StringNode:
        return self._add_check(Check("max", value))

    def length(self, value: int) -> StringNode:
        return self._add_check(Check("length", value))

    def regex(self, pattern: re.Pattern | str) -> StringNode:
        return self._add_check(Check("regex", regex=pattern))


@dataclass
class NumberNode(_CheckedNode):
    kind: ClassVar[str] = "number"
    ALLOWED_CHECKS: ClassVar[set[str]] = NUMBER_CHECK_KINDS

    def int(self) -> NumberNode:
        return self._add_check(Check("int"))

    def min(self, value: float) -> NumberNode:
        return self._add_check(Check("min", value, inclusive=True))

    def max(self, value: float) -> NumberNode:
        return self._add_check(Check("max", value, inclusive=True))

    def gt(self, value: float) -> NumberNode:
        return self._add_check(Check("min", value, inclusive=False))

    def lt(self, value: float) -> NumberNode:
        return self._add_check(Check("max", value, inclusive=False))

    def multiple_of(self, value: float) -> NumberNode:
        return self._add_check(Check("multiple_of", value))


@dataclass
class BooleanNode(ValidatorNode):
    kind: ClassVar[str] = "boolean"


@dataclass
class BigIntNode(ValidatorNode):
    kind: ClassVar[str] = "bigint"


@dataclass
class DateNode(ValidatorNode):
    kind: ClassVar[str] = "date"


@dataclass
class NullNode(ValidatorNode):
    kind: ClassVar[str] = "null"

    def is_nullable(self) -> bool:
        return True


@dataclass
class NeverNode(ValidatorNode):
    kind: ClassVar[str] = "never"


@dataclass
class LiteralNode(ValidatorNode):
    kind: ClassVar[str] = "literal"

    value: Any = None

    def is_nullable(self) -> bool:
        return self.value is None


@dataclass
class EnumNode(ValidatorNode):
    kind: ClassVar[str] = "enum"

    values: list[Any] = field(default_factory=list)


@dataclass
class NativeEnumNode(ValidatorNode):
    """Enum backed by a Python ``enum.Enum`` class or a plain mapping."""

    kind: ClassVar[str] = "native_enum"

    enum_class: type[enum.Enum] | Mapping[str, Any] | None = None

    @property
    def values(self) -> list[Any]:
        if self.enum_class is None:
            return []
        if isinstance(self.enum_class, Mapping):
            return list(self.enum_class.values())
        return [member.value for member in self.enum_class]


@dataclass
class ObjectNode(ValidatorNode):
    kind: ClassVar[str] = "object"

    shape: dict[str, ValidatorNode] = field(default_factory=dict)

    def extend(self, shape: Mapping[str, ValidatorNode]) -> ObjectNode:
        return ObjectNode(shape={**self.shape, **shape})


@dataclass
class RecordNode(ValidatorNode):
    """Dynamic key map. ``shape`` holds any keys declared up front."""

    kind: ClassVar[str] = "record"

    key_type: ValidatorNode | None = None
    value_type: ValidatorNode | None = None
    shape: dict[str, ValidatorNode] = field(default_factory=dict)


@dataclass
class ArrayNode(ValidatorNode):
    kind: ClassVar[str] = "array"

    element: ValidatorNode | None = None


@dataclass
class OptionalNode(ValidatorNode):
    kind: ClassVar[str] = "optional"

    inner: ValidatorNode | None = None

    def is_optional(self) -> bool:
        return True

    def is_nullable(self) -> bool:
        return self.inner is not None and self.inner.is_nullable()


@dataclass
class NullableNode(ValidatorNode):
    kind: ClassVar[str] = "nullable"

    inner: ValidatorNode | None = None

    def is_nullable(self) -> bool:
        return True

    def is_optional(self) -> bool:
        return self.inner is not None and self.inner.is_optional()


@dataclass
class UnionNode(ValidatorNode):
    kind: ClassVar[str] = "union"

    options: list[ValidatorNode] = field(default_factory=list)

    def is_nullable(self) -> bool:
        return any(option.is_nullable() for option in self.options)

    def is_optional(self) -> bool:
        return any(option.is_optional() for option in self.options)


@dataclass
class IntersectionNode(ValidatorNode):
    kind: ClassVar[str] = "intersection"

    left: ValidatorNode | None = None
    right: ValidatorNode | None = None

    def is_nullable(self) -> bool:
        return all(side is not None and side.is_nullable() for side in (self.left, self.right))

    def is_optional(self) -> bool:
        return all(side is not None and side.is_optional() for side in (self.left, self.right))


@dataclass
class EffectsNode(ValidatorNode):
    """Inner node followed by refinements and transforms."""

    kind: ClassVar[str] = "effects"

    schema: ValidatorNode | None = None
    effects: list[Effect] = field(default_factory=list)

    def is_nullable(self) -> bool:
        return self.schema is not None and self.schema.is_nullable()

    def is_optional(self) -> bool:
        return self.schema is not None and self.schema.is_optional()


# Unsupported kinds: they carry their data but map to a pass-through fragment


@dataclass
class TupleNode(ValidatorNode):
    kind: ClassVar[str] = "tuple"

    items: list[ValidatorNode] = field(default_factory=list)
    rest: ValidatorNode | None = None


@dataclass
class MapNode(ValidatorNode):
    kind: ClassVar[str] = "map"

    key_type: ValidatorNode | None = None
    value_type: ValidatorNode | None = None


@dataclass
class FunctionNode(ValidatorNode):
    kind: ClassVar[str] = "function"

    args: list[ValidatorNode] = field(default_factory=list)
    returns: ValidatorNode | None = None


@dataclass
class LazyNode(ValidatorNode):
    kind: ClassVar[str] = "lazy"

    getter: Callable[[], ValidatorNode] | None = None


@dataclass
class PromiseNode(ValidatorNode):
    kind: ClassVar[str] = "promise"

    inner: ValidatorNode | None = None


@dataclass
class AnyNode(ValidatorNode):
    kind: ClassVar[str] = "any"

    def is_nullable(self) -> bool:
        return True

    def is_optional(self) -> bool:
        return True


@dataclass
class UnknownNode(AnyNode):
    kind: ClassVar[str] = "unknown"


@dataclass
class VoidNode(ValidatorNode):
    kind: ClassVar[str] = "void"

    def is_optional(self) -> bool:
        return True


@dataclass
class UndefinedNode(VoidNode):
    kind: ClassVar[str] = "undefined"


def openapi(node: ValidatorNode, schema: SchemaObject | Sequence[SchemaObject] | None = None) -> ValidatorNode:
    """
    Attach an OpenAPI override annotation to a node.

    The annotation is merged over the generated fragment, later entries of a
    list taking precedence over earlier ones. The shape of the override is not
    checked here.

    Args:
        node: The validator node to decorate
        schema: A fragment, an ordered list of fragments, or None for ``{}``

    Returns:
        The same node, to allow chaining at tree-construction time
    """
    if schema is None:
        schema = {}
    elif not isinstance(schema, Mapping):
        schema = list(schema)
    node.openapi_schema = schema
    return node
