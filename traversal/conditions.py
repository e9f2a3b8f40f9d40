"""Conversion of configuration arguments into conditions and relation accessors.

Every argument given to a :py:class:`~traversal.description.Description` is resolved
once, when it is registered, into a :py:class:`Condition`: a small tagged variant which
knows how to evaluate itself against a node. Resolution never happens during a walk.
"""
from __future__ import annotations

import dataclasses
import enum
import re
from typing import Any, Iterable, Tuple

from traversal import constants
from traversal.errors import ArgumentsExpectedError, UnsupportedArgumentError

__all__ = (
    "AnyOf",
    "Attribute",
    "Condition",
    "Kind",
    "accessor",
    "attr",
    "condition",
    "group",
)


class Kind(enum.Enum):
    """How a :py:class:`Condition` evaluates a node."""

    CALLABLE = "callable"
    """Call the target with the node."""
    CASE = "case"
    """Case-equality: instance of a class, or a string matched by a pattern."""
    EQUALITY = "equality"
    """The node is equal to the target."""
    ATTRIBUTE = "attribute"
    """Read the named attribute from the node, calling it if it is a method."""


@dataclasses.dataclass(frozen=True)
class Condition:
    kind: Kind
    target: Any

    def __call__(self, node: Any) -> Any:
        kind, target = self.kind, self.target
        if kind is Kind.CALLABLE:
            return target(node)
        if kind is Kind.EQUALITY:
            return node == target
        if kind is Kind.ATTRIBUTE:
            value = getattr(node, target)
            return value() if callable(value) else value
        if isinstance(target, type):
            return isinstance(node, target)
        # A str pattern can't search bytes (and vice-versa), treat it as a miss.
        return (
            isinstance(node, type(target.pattern))
            and target.search(node) is not None
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind.value}: {self.target!r})"


@dataclasses.dataclass(frozen=True)
class AnyOf:
    """A disjunction of conditions registered together in a single call."""

    conditions: Tuple[Condition, ...]

    def __call__(self, node: Any) -> bool:
        return any(c(node) for c in self.conditions)

    def __iter__(self):
        return iter(self.conditions)

    def __len__(self) -> int:
        return len(self.conditions)


@dataclasses.dataclass(frozen=True)
class Attribute:
    """Refer to a node attribute by name.

    Usable anywhere a condition or relation is expected. A method is called
    without arguments, anything else is returned as-is.

    Examples
    --------
    >>> from traversal import Description, attr
    >>> desc = Description().follow(attr("children")).exclude(attr("is_hidden"))
    """

    name: str

    def __traversal_condition__(self) -> Condition:
        return Condition(Kind.ATTRIBUTE, self.name)

    def __repr__(self) -> str:
        return f"attr({self.name!r})"


attr = Attribute


def _from_hook(argument: Any, method: str) -> Condition | None:
    hook = getattr(argument, constants.CONDITION_HOOK, None)
    # Classes which define the hook expose it unbound, only instances can convert.
    if hook is None or isinstance(argument, type):
        return None
    converted = hook()
    if isinstance(converted, Condition):
        return converted
    if callable(converted):
        return Condition(Kind.CALLABLE, converted)
    raise UnsupportedArgumentError(
        method,
        argument,
        expected=f"{constants.CONDITION_HOOK}() to return a callable",
    )


def condition(argument: Any, *, method: str) -> Condition:
    """Resolve a single argument into a node predicate.

    In priority order, an argument becomes:

    1. Whatever its ``__traversal_condition__()`` hook returns.
    2. A case-equality check, if it is a class or a compiled regular expression.
    3. A call to the argument, if it is callable.
    4. An equality check against the argument.

    Raises:
        UnsupportedArgumentError: The argument's type disables equality, so none
            of the above apply.
    """
    if isinstance(argument, Condition):
        return argument
    converted = _from_hook(argument, method)
    if converted is not None:
        return converted
    if isinstance(argument, (type, re.Pattern)):
        return Condition(Kind.CASE, argument)
    if callable(argument):
        return Condition(Kind.CALLABLE, argument)
    if getattr(type(argument), "__eq__", None) is None:
        raise UnsupportedArgumentError(method, argument)
    return Condition(Kind.EQUALITY, argument)


def accessor(argument: Any, *, method: str = "follow") -> Condition:
    """Resolve a single argument into a relation accessor.

    A string names an attribute of the node (see :py:class:`Attribute`). Equality
    is meaningless for an accessor, so plain values are rejected.
    """
    if isinstance(argument, Condition):
        if argument.kind in (Kind.CALLABLE, Kind.ATTRIBUTE):
            return argument
        raise UnsupportedArgumentError(
            method, argument, expected="a callable or an attribute name"
        )
    converted = _from_hook(argument, method)
    if converted is not None:
        return converted
    if isinstance(argument, str):
        return Condition(Kind.ATTRIBUTE, argument)
    if callable(argument):
        return Condition(Kind.CALLABLE, argument)
    raise UnsupportedArgumentError(
        method, argument, expected="a callable or an attribute name"
    )


def group(arguments: Iterable[Any], *, method: str) -> AnyOf:
    """Resolve the arguments of one configuration call into a disjunction."""
    conditions = tuple(condition(a, method=method) for a in arguments)
    if not conditions:
        raise ArgumentsExpectedError(method)
    return AnyOf(conditions)
