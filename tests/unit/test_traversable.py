from __future__ import annotations

import pytest

import traversal
from traversal import Description


def test_mixin_without_relation(tree):
    # When
    desc = tree.root.traverse()
    # Then
    assert desc == Description().traverse(tree.root)
    assert desc.relations == []


def test_mixin_with_relation(tree):
    # When
    desc = tree.root.traverse("children")
    # Then
    assert desc == Description().traverse(tree.root).follow("children")
    assert desc.count() == 9


def test_mixin_chains(tree):
    # When
    traversed = tree.names(tree.a.traverse("children").breadth_first())
    # Then
    assert traversed == ["a", "c", "d", "e"]


def test_decorator():
    # Given
    @traversal.traversable
    class Folder:
        def __init__(self, *folders):
            self.folders = [*folders]

    leaf = Folder()
    root = Folder(Folder(leaf), leaf)
    # When
    traversed = root.traverse("folders").to_list()
    # Then
    assert traversed == [root, root.folders[0], leaf]


def test_decorator_alias():
    # Then
    assert traversal.acts_as_traversable is traversal.traversable


def test_decorator_refuses_overwrite():
    # Given
    class Walker:
        def traverse(self):
            ...

    # When/Then
    with pytest.raises(TypeError):
        traversal.traversable(Walker)


def test_function():
    # Given
    graph = {"a": ["b"], "b": ["c"]}
    # When
    desc = traversal.traverse("a", graph.get)
    # Then
    assert desc.to_list() == ["a", "b", "c"]


def test_function_without_relations():
    # When
    desc = traversal.traverse("a")
    # Then
    assert desc.start_node == "a"
    with pytest.raises(traversal.IncompleteDescriptionError):
        desc.to_list()
