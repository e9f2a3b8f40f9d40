from __future__ import annotations

from typing import Any

__all__ = (
    "ArgumentsExpectedError",
    "DescriptionTypeError",
    "EnvironmentValueError",
    "IncompleteDescriptionError",
    "TraversalError",
    "UnboundedTraversalWarning",
    "UnsupportedArgumentError",
    "UnsupportedRelationError",
)


class TraversalError(Exception):
    """The root exception for all Traversal-related errors."""


class IncompleteDescriptionError(TraversalError, ValueError):
    """A description was consumed before it had a start node and a relation."""

    pass


class UnsupportedArgumentError(TraversalError, TypeError):
    """An argument can't be converted into a condition or relation accessor."""

    def __init__(self, method: str, argument: Any, *, expected: str = None):
        self.method = method
        self.argument = argument
        expected = expected or (
            "a callable, a class, a compiled pattern, "
            "or a value which supports equality"
        )
        super().__init__(
            f"Unsupported argument for {method}(): {argument!r}. "
            f"Expected {expected}."
        )


class ArgumentsExpectedError(TraversalError, TypeError):
    """A configuration method was called without any arguments."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"{method}() expected at least one argument.")


class DescriptionTypeError(TraversalError, TypeError):
    """An iterator was created from something other than a Description."""

    pass


class UnsupportedRelationError(TraversalError, LookupError):
    """Raised by a relation accessor when a node doesn't expose that relation.

    The iterator treats this as "no related nodes", it never reaches the consumer.
    """

    pass


class EnvironmentValueError(TraversalError, ValueError):
    """An environment variable held a value which couldn't be coerced."""

    pass


class UnboundedTraversalWarning(UserWarning):
    """A walk may never end: uniqueness is disabled and nothing stops it."""
