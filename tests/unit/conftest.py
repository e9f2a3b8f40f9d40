from __future__ import annotations

import dataclasses
import os
from typing import List

import pytest

import traversal


@dataclasses.dataclass(eq=False, repr=False)
class Node(traversal.Traversable):
    name: str
    level: int
    children: List[Node] = dataclasses.field(default_factory=list)

    def __repr__(self) -> str:
        return f"<Node: {self.name}>"


class Tree(dict):
    """Nodes by name, with helpers to translate walks back to names."""

    def names(self, nodes) -> list[str]:
        return [n.name for n in nodes]

    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError:
            raise AttributeError(item) from None


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for var in [*os.environ]:
        if var.upper().startswith("TRAVERSAL_"):
            monkeypatch.delenv(var)
    traversal.reset_settings()
    yield
    traversal.reset_settings()


@pytest.fixture
def tree() -> Tree:
    # Tree structure:
    #
    #         +root+
    #        /     \
    #      +a+     +b+
    #      / \       \
    #   +c+  +d+     +f+
    #  /             / \
    # +e+         +g+  +h+
    nodes = Tree(
        root=Node("root", 0),
        a=Node("a", 1),
        b=Node("b", 1),
        c=Node("c", 2),
        d=Node("d", 2),
        e=Node("e", 3),
        f=Node("f", 2),
        g=Node("g", 3),
        h=Node("h", 3),
    )
    nodes.root.children += [nodes.a, nodes.b]
    nodes.a.children += [nodes.c, nodes.d]
    nodes.c.children += [nodes.e]
    nodes.b.children += [nodes.f]
    nodes.f.children += [nodes.g, nodes.h]
    return nodes


@pytest.fixture
def description(tree) -> traversal.Description:
    return traversal.Description().traverse(tree.root).follow("children")
