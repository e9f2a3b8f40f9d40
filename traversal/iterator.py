from __future__ import annotations

import collections
import enum
import operator
import warnings
from collections.abc import Iterable
from typing import Any, Dict, Generator, List, Optional, Set

from traversal import constants
from traversal.description import Description
from traversal.errors import (
    DescriptionTypeError,
    UnboundedTraversalWarning,
    UnsupportedRelationError,
)
from traversal.settings import get_settings

__all__ = ("Iterator",)


class _Verdict(enum.Enum):
    HALT = enum.auto()
    EXPAND = enum.auto()
    LEAF = enum.auto()


_Walk = Generator[Any, None, None]
_Visit = Generator[Any, None, _Verdict]
_EXHAUSTED = object()


class _Seen:
    """Track visited nodes, by hash when possible and by identity otherwise."""

    __slots__ = ("hashable", "unhashable")

    def __init__(self):
        self.hashable: Set[Any] = set()
        self.unhashable: Dict[int, Any] = {}

    def add(self, node: Any) -> None:
        try:
            self.hashable.add(node)
        except TypeError:
            # Keep a reference so the id can't be recycled mid-walk.
            self.unhashable[id(node)] = node

    def __contains__(self, node: Any) -> bool:
        try:
            return node in self.hashable
        except TypeError:
            return id(node) in self.unhashable


class Iterator:
    """A lazy, buffered sequence of the nodes described by a :py:class:`Description`.

    The graph is only walked as far as the consumer asks: pulling the first node
    visits the start node, pulling the next one walks just far enough to find it.
    Nodes are buffered as they are produced, so the sequence may be iterated again,
    indexed or sliced without repeating the walk. Operations which need the tail of
    the sequence (:py:meth:`last`, :py:meth:`count`, :py:meth:`to_list`, negative
    indexes...) walk the graph to the end first.

    ``next(iterator)`` advances the iterator's own cursor, while
    ``iter(iterator)`` always starts over from the first node.

    An iterator performs a single walk. Create a new one (or call
    :py:meth:`Description.each` again) to re-walk a graph which may have changed.
    """

    __slots__ = ("description", "_buffer", "_cursor", "_walk", "_seen", "_error")

    def __init__(self, description: Description):
        if not isinstance(description, Description):
            raise DescriptionTypeError(
                f"{Description.__qualname__} expected, "
                f"{type(description).__qualname__} given."
            )
        self.description = description
        self._buffer: List[Any] = []
        self._cursor = 0
        self._walk: Optional[_Walk] = self._traverse()
        self._seen = _Seen()
        self._error: Optional[BaseException] = None

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} "
            f"produced={len(self._buffer)}, exhausted={self.exhausted}>"
        )

    @property
    def exhausted(self) -> bool:
        """Whether the walk has ended, naturally or because of a stop condition."""
        return self._walk is None

    # region: consumption

    def _pull(self) -> bool:
        if self._error is not None:
            raise self._error
        if self._walk is None:
            return False
        try:
            node = next(self._walk)
        except StopIteration:
            self._walk = None
            return False
        except Exception as e:
            self._walk = None
            self._error = e
            raise
        self._buffer.append(node)
        return True

    def _fill(self, size: int = None) -> int:
        buffer, pull = self._buffer, self._pull
        while (size is None or len(buffer) < size) and pull():
            continue
        return len(buffer)

    def __iter__(self):
        buffer = self._buffer
        index = 0
        while index < len(buffer) or self._pull():
            yield buffer[index]
            index += 1

    def __next__(self) -> Any:
        if self._cursor < len(self._buffer) or self._pull():
            node = self._buffer[self._cursor]
            self._cursor += 1
            return node
        raise StopIteration

    def __getitem__(self, item):
        if isinstance(item, slice):
            bounded = (
                item.stop is not None
                and item.stop >= 0
                and (item.start or 0) >= 0
                and (item.step or 1) > 0
            )
            self._fill(item.stop if bounded else None)
            return self._buffer[item]
        index = operator.index(item)
        self._fill(index + 1 if index >= 0 else None)
        return self._buffer[index]

    def __contains__(self, node: Any) -> bool:
        return any(n is node or n == node for n in self)

    def __reversed__(self):
        self._fill()
        return reversed(self._buffer)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def first(self, default: Any = None) -> Any:
        """Get the first node, or `default` if nothing is produced."""
        return self._buffer[0] if self._fill(1) else default

    def last(self, default: Any = None) -> Any:
        """Get the last node, or `default` if nothing is produced."""
        return self._buffer[-1] if self._fill() else default

    def to_list(self) -> list:
        self._fill()
        return [*self._buffer]

    def count(self, *node: Any) -> int:
        """Count the nodes produced, or the occurrences of `node` if given."""
        self._fill()
        return self._buffer.count(*node) if node else len(self._buffer)

    def index(self, node: Any) -> int:
        """Get the position of the first occurrence of `node`."""
        for i, n in enumerate(self):
            if n is node or n == node:
                return i
        raise ValueError(f"{node!r} is not in traversal")

    def is_empty(self) -> bool:
        return not self._fill(1)

    # endregion
    # region: walk

    def _traverse(self) -> _Walk:
        description = self.description
        description.validate()
        if not description.is_bounded and get_settings().warn_unbounded:
            warnings.warn(
                "Uniqueness is disabled and no stop condition is declared: "
                "this traversal will never end if the graph has a cycle.",
                UnboundedTraversalWarning,
                stacklevel=4,
            )
        start = description.start_node
        # The start node is always expanded; only a stop condition ends the walk here.
        verdict = yield from self._visit(start)
        if verdict is _Verdict.HALT:
            return
        if description.is_breadth_first:
            yield from self._breadth_first(start)
        else:
            yield from self._depth_first(start)

    def _visit(self, node: Any) -> _Visit:
        description = self.description
        if description.unique:
            self._seen.add(node)
        if description.stops(node, "before"):
            return _Verdict.HALT
        if description.includes(node):
            yield node
        if description.stops(node, "after"):
            return _Verdict.HALT
        return _Verdict.EXPAND if description.expands(node) else _Verdict.LEAF

    def _depth_first(self, start: Any) -> _Walk:
        # A stack of lazily-evaluated candidates, one entry per level of the walk.
        stack = [self._candidates(start)]
        while stack:
            node = next(stack[-1], _EXHAUSTED)
            if node is _EXHAUSTED:
                stack.pop()
                continue
            verdict = yield from self._visit(node)
            if verdict is _Verdict.HALT:
                return
            if verdict is _Verdict.EXPAND:
                stack.append(self._candidates(node))

    def _breadth_first(self, start: Any) -> _Walk:
        queue = collections.deque([start])
        while queue:
            parent = queue.popleft()
            for node in self._candidates(parent):
                verdict = yield from self._visit(node)
                if verdict is _Verdict.HALT:
                    return
                if verdict is _Verdict.EXPAND:
                    queue.append(node)

    def _candidates(self, node: Any) -> _Walk:
        if not self.description.unique:
            yield from self._relations_for(node)
            return
        seen = self._seen
        for related in self._relations_for(node):
            if related not in seen:
                yield related

    def _relations_for(self, node: Any) -> _Walk:
        for relation in self.description.relations:
            try:
                related = relation(node)
            except (AttributeError, UnsupportedRelationError):
                continue
            if related is None:
                continue
            if isinstance(related, constants.STRING_TYPES) or not isinstance(
                related, Iterable
            ):
                yield related
                continue
            yield from related

    # endregion
