from __future__ import annotations

from typing import Any, TypeVar

from traversal.description import Description

__all__ = (
    "Traversable",
    "acts_as_traversable",
    "traversable",
    "traverse",
)

_T = TypeVar("_T", bound=type)


def traverse(node: Any, *relations: Any) -> Description:
    """Start describing a walk from `node`, following `relations` if any are given.

    Examples
    --------
    >>> import traversal
    >>> tree = {1: [2, 3], 2: [4]}
    >>> traversal.traverse(1, tree.get).to_list()
    [1, 2, 4, 3]
    """
    description = Description().traverse(node)
    if relations:
        description.follow(*relations)
    return description


def _traverse_method(self, relation: Any = None) -> Description:
    """Start describing a walk from this object.

    ``node.traverse()`` is equivalent to ``Description().traverse(node)`` and
    ``node.traverse("children")`` to ``Description().traverse(node).follow("children")``.
    """
    if relation is None:
        return traverse(self)
    return traverse(self, relation)


class Traversable:
    """A mix-in which lets an object describe a walk starting from itself.

    Examples
    --------
    >>> from traversal import Traversable
    >>> class TreeNode(Traversable):
    ...     def __init__(self, *children):
    ...         self.children = [*children]
    ...
    >>> leaf = TreeNode()
    >>> root = TreeNode(leaf)
    >>> root.traverse("children").to_list() == [root, leaf]
    True
    """

    __slots__ = ()

    traverse = _traverse_method


def traversable(cls: _T) -> _T:
    """Class decorator which adds :py:meth:`Traversable.traverse` to `cls`.

    Use this instead of the mix-in when the class hierarchy can't change.

    Raises:
        TypeError: `cls` already defines a ``traverse`` attribute.
    """
    if "traverse" in vars(cls):
        raise TypeError(
            f"{cls.__qualname__!r} already defines 'traverse', "
            "refusing to overwrite it."
        )
    cls.traverse = _traverse_method  # type: ignore[attr-defined]
    return cls


acts_as_traversable = traversable
