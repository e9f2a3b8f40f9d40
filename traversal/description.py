from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from traversal import conditions
from traversal.compat import Literal, Self
from traversal.errors import ArgumentsExpectedError, IncompleteDescriptionError
from traversal.settings import get_settings
from traversal.types import Order

if TYPE_CHECKING:  # pragma: nocover
    from traversal.iterator import Iterator


__all__ = ("Description",)


def _default_order() -> Order:
    return get_settings().order


def _default_unique() -> bool:
    return get_settings().unique


@dataclasses.dataclass
class Description:
    """A declarative description of a graph walk.

    A description is configured with chained builder calls and consumed by
    :py:class:`~traversal.iterator.Iterator`. It holds no traversal state, so a
    single description may back any number of independent walks.

    Conditions registered within a single call are OR-ed together. Across calls,
    :py:meth:`include_only` and :py:meth:`expand_only` groups must *all* match,
    while :py:meth:`exclude`, :py:meth:`prune` and the stop conditions fire when
    *any* group matches.

    Examples
    --------
    >>> from traversal import Description
    >>> tree = {"root": ["a", "b"], "a": ["c"], "b": [], "c": []}
    >>> desc = Description().traverse("root").follow(tree.get)
    >>> desc.to_list()
    ['root', 'a', 'c', 'b']
    >>> desc.breadth_first().to_list()
    ['root', 'a', 'b', 'c']
    >>> desc.exclude("a").to_list()
    ['root', 'b', 'c']
    """

    start_node: Any = None
    relations: List[conditions.Condition] = dataclasses.field(default_factory=list)
    order: Order = dataclasses.field(default_factory=_default_order)
    unique: bool = dataclasses.field(default_factory=_default_unique)
    inclusions: List[conditions.AnyOf] = dataclasses.field(default_factory=list)
    exclusions: List[conditions.AnyOf] = dataclasses.field(default_factory=list)
    expansions: List[conditions.AnyOf] = dataclasses.field(default_factory=list)
    prunings: List[conditions.AnyOf] = dataclasses.field(default_factory=list)
    halts_before: List[conditions.AnyOf] = dataclasses.field(default_factory=list)
    halts_after: List[conditions.AnyOf] = dataclasses.field(default_factory=list)

    def __post_init__(self):
        self.order = Order.parse(self.order)
        self.unique = bool(self.unique)

    # region: builder

    def traverse(self, start_node: Any) -> Self:
        """Declare the node the walk starts from."""
        self.start_node = start_node
        return self

    def follow(self, *relations: Any) -> Self:
        """Declare the relation(s) to follow from each node.

        A relation is a callable (``node -> related node(s)``) or the name of a node
        attribute. Relations are followed in the order they are declared.

        Examples
        --------
        >>> desc = Description().follow("children")  # node.children
        >>> desc = Description().follow(lambda node: node.children)  # same effect
        """
        if not relations:
            raise ArgumentsExpectedError("follow")
        self.relations.extend(
            conditions.accessor(r, method="follow") for r in relations
        )
        return self

    def exclude(self, *nodes: Any) -> Self:
        """Declare which nodes to leave out of the output (their relations are kept)."""
        self.exclusions.append(conditions.group(nodes, method="exclude"))
        return self

    def include_only(self, *nodes: Any) -> Self:
        """Declare which nodes to keep in the output. The inverse of :py:meth:`exclude`."""
        self.inclusions.append(conditions.group(nodes, method="include_only"))
        return self

    exclude_unless = include_only

    def expand_only(self, *nodes: Any) -> Self:
        """Declare which nodes to expand. All others will be pruned.

        The start node is always expanded, whether or not it matches.
        """
        self.expansions.append(conditions.group(nodes, method="expand_only"))
        return self

    def prune(self, *nodes: Any) -> Self:
        """Declare which nodes' relations to ignore. The nodes themselves are kept.

        Examples
        --------
        >>> desc = Description().follow("children").prune(lambda n: n.name == "A")
        """
        self.prunings.append(conditions.group(nodes, method="prune"))
        return self

    def exclude_and_prune(self, *nodes: Any) -> Self:
        """Declare which nodes to drop from the walk together with their relations."""
        group = conditions.group(nodes, method="exclude_and_prune")
        self.exclusions.append(group)
        self.prunings.append(group)
        return self

    prune_and_exclude = exclude_and_prune

    def stop_before(self, *nodes: Any) -> Self:
        """Declare a stop pre-condition.

        The first matching node is left out and the whole walk ends.
        """
        self.halts_before.append(conditions.group(nodes, method="stop_before"))
        return self

    def stop_after(self, *nodes: Any) -> Self:
        """Declare a stop post-condition.

        The first matching node is emitted (if included) and the whole walk ends.
        """
        self.halts_after.append(conditions.group(nodes, method="stop_after"))
        return self

    def depth_first(self) -> Self:
        self.order = Order.DEPTH_FIRST
        return self

    def breadth_first(self) -> Self:
        self.order = Order.BREADTH_FIRST
        return self

    def uniq(self, flag: bool = True) -> Self:
        """Set whether a node may be emitted (and expanded) more than once."""
        self.unique = bool(flag)
        return self

    def copy(self) -> Description:
        """Get an independent copy of this description, safe to configure further."""
        return dataclasses.replace(
            self,
            relations=[*self.relations],
            inclusions=[*self.inclusions],
            exclusions=[*self.exclusions],
            expansions=[*self.expansions],
            prunings=[*self.prunings],
            halts_before=[*self.halts_before],
            halts_after=[*self.halts_after],
        )

    # endregion
    # region: consumption

    def validate(self) -> None:
        """Ensure this description may be walked.

        Raises:
            IncompleteDescriptionError: There is no start node or no relation.
        """
        if self.start_node is None:
            raise IncompleteDescriptionError(
                "Traversal description should contain start node. "
                "Use the `traverse` method."
            )
        if not self.relations:
            raise IncompleteDescriptionError(
                "Traversal description should contain relation(s). "
                "Use the `follow` method."
            )

    def each(self, callback: Callable[[Any], Any] = None) -> Optional[Iterator]:
        """Walk the described nodes.

        With a `callback`, call it with each node in turn. Without one, return a
        lazy :py:class:`~traversal.iterator.Iterator` over the nodes.
        """
        from traversal.iterator import Iterator

        self.validate()
        iterator = Iterator(self)
        if callback is None:
            return iterator
        for node in iterator:
            callback(node)
        return None

    def __iter__(self):
        return iter(self.each())

    def __getitem__(self, item):
        return self.each()[item]

    def __contains__(self, node: Any) -> bool:
        return node in self.each()

    def __reversed__(self):
        return reversed(self.each())

    def first(self, default: Any = None) -> Any:
        return self.each().first(default)

    def last(self, default: Any = None) -> Any:
        return self.each().last(default)

    def to_list(self) -> list:
        return self.each().to_list()

    def count(self, *node: Any) -> int:
        return self.each().count(*node)

    def index(self, node: Any) -> int:
        return self.each().index(node)

    def is_empty(self) -> bool:
        return self.each().is_empty()

    # endregion
    # region: predicates

    def includes(self, node: Any) -> bool:
        """Whether `node` belongs in the output."""
        return all(c(node) for c in self.inclusions) and not any(
            c(node) for c in self.exclusions
        )

    def excludes(self, node: Any) -> bool:
        return not self.includes(node)

    def expands(self, node: Any) -> bool:
        """Whether the relations of `node` should be followed."""
        return all(c(node) for c in self.expansions) and not any(
            c(node) for c in self.prunings
        )

    def prunes(self, node: Any) -> bool:
        return not self.expands(node)

    def stops(self, node: Any, when: Literal["before", "after"] = "before") -> bool:
        """Whether `node` matches one of the stop conditions."""
        halts = self.halts_after if when == "after" else self.halts_before
        return any(c(node) for c in halts)

    @property
    def is_breadth_first(self) -> bool:
        return self.order is Order.BREADTH_FIRST

    @property
    def is_unique(self) -> bool:
        return self.unique

    @property
    def is_bounded(self) -> bool:
        """Whether something other than exhausting the graph may end the walk."""
        return self.unique or bool(self.halts_before or self.halts_after)

    # endregion
