from __future__ import annotations

import operator
import re

import pytest

import traversal
from traversal import conditions
from traversal.conditions import Kind


class Leaf:
    is_leaf = True

    def size(self):
        return 0


class Branch:
    is_leaf = False

    def size(self):
        return 2


class Hooked:
    def __init__(self, value):
        self.value = value

    def __traversal_condition__(self):
        return lambda node: node == self.value


class BadHook:
    def __traversal_condition__(self):
        return 1


def function(node):
    return node


@pytest.mark.suite(
    function=dict(argument=function, expected=Kind.CALLABLE),
    lambda_=dict(argument=lambda n: n, expected=Kind.CALLABLE),
    builtin=dict(argument=callable, expected=Kind.CALLABLE),
    attrgetter=dict(argument=operator.attrgetter("x"), expected=Kind.CALLABLE),
    hook=dict(argument=Hooked(1), expected=Kind.CALLABLE),
    attr=dict(argument=traversal.attr("is_leaf"), expected=Kind.ATTRIBUTE),
    cls=dict(argument=Leaf, expected=Kind.CASE),
    pattern=dict(argument=re.compile(r"^a"), expected=Kind.CASE),
    integer=dict(argument=1, expected=Kind.EQUALITY),
    string=dict(argument="children", expected=Kind.EQUALITY),
    none=dict(argument=None, expected=Kind.EQUALITY),
    instance=dict(argument=Leaf(), expected=Kind.EQUALITY),
    unhashable=dict(argument=[1, 2], expected=Kind.EQUALITY),
)
def test_condition_kind(argument, expected):
    # When
    resolved = conditions.condition(argument, method="exclude")
    # Then
    assert resolved.kind is expected


@pytest.mark.suite(
    string=dict(argument="children", expected=Kind.ATTRIBUTE),
    attr=dict(argument=traversal.attr("children"), expected=Kind.ATTRIBUTE),
    function=dict(argument=function, expected=Kind.CALLABLE),
    hook=dict(argument=Hooked(1), expected=Kind.CALLABLE),
)
def test_accessor_kind(argument, expected):
    # When
    resolved = conditions.accessor(argument)
    # Then
    assert resolved.kind is expected


@pytest.mark.suite(
    integer=dict(argument=1),
    none=dict(argument=None),
    equality_condition=dict(argument=conditions.Condition(Kind.EQUALITY, 1)),
    bad_hook=dict(argument=BadHook()),
)
def test_accessor_unsupported(argument):
    # When/Then
    with pytest.raises(traversal.UnsupportedArgumentError):
        conditions.accessor(argument)


def test_condition_bad_hook():
    # When/Then
    with pytest.raises(traversal.UnsupportedArgumentError) as e:
        conditions.condition(BadHook(), method="prune")
    assert e.value.method == "prune"
    assert "prune()" in str(e.value)


def test_condition_passthrough():
    # Given
    resolved = conditions.condition(1, method="exclude")
    # When
    again = conditions.condition(resolved, method="exclude")
    # Then
    assert again is resolved


@pytest.mark.suite(
    callable_true=dict(argument=lambda n: n > 1, node=2, expected=True),
    callable_false=dict(argument=lambda n: n > 1, node=1, expected=False),
    equality_true=dict(argument="a", node="a", expected=True),
    equality_false=dict(argument="a", node="b", expected=False),
    equality_none=dict(argument=None, node=None, expected=True),
    class_true=dict(argument=Leaf, node=Leaf(), expected=True),
    class_false=dict(argument=Leaf, node=Branch(), expected=False),
    pattern_true=dict(argument=re.compile(r"^a"), node="abc", expected=True),
    pattern_false=dict(argument=re.compile(r"^a"), node="cba", expected=False),
    pattern_not_string=dict(argument=re.compile(r"1"), node=1, expected=False),
    pattern_bytes=dict(argument=re.compile(b"^a"), node="abc", expected=False),
    attribute=dict(argument=traversal.attr("is_leaf"), node=Leaf(), expected=True),
    attribute_false=dict(
        argument=traversal.attr("is_leaf"), node=Branch(), expected=False
    ),
    method=dict(argument=traversal.attr("size"), node=Branch(), expected=2),
    hook=dict(argument=Hooked(3), node=3, expected=True),
)
def test_condition_call(argument, node, expected):
    # Given
    resolved = conditions.condition(argument, method="exclude")
    # When
    result = resolved(node)
    # Then
    assert result == expected


def test_attribute_missing_raises():
    # Given
    resolved = conditions.accessor("children")
    # When/Then
    with pytest.raises(AttributeError):
        resolved(object())


class TestGroup:
    def test_disjunction(self):
        # Given
        group = conditions.group([1, 2, Leaf], method="exclude")
        # Then
        assert group(1)
        assert group(2)
        assert group(Leaf())
        assert not group(3)
        assert len(group) == 3

    def test_empty(self):
        # When/Then
        with pytest.raises(traversal.ArgumentsExpectedError):
            conditions.group([], method="stop_before")

    def test_result_is_bool(self):
        # Given
        group = conditions.group([traversal.attr("size")], method="exclude")
        # When
        result = group(Branch())
        # Then
        assert result is True

    def test_equality(self):
        # When
        left = conditions.group([1, "a"], method="exclude")
        right = conditions.group([1, "a"], method="prune")
        # Then
        assert left == right


def test_attr_repr():
    # When
    r = repr(traversal.attr("children"))
    # Then
    assert r == "attr('children')"


def test_attr_as_follow(tree):
    # Given
    desc = traversal.Description().traverse(tree.b).follow(traversal.attr("children"))
    # When
    traversed = tree.names(desc)
    # Then
    assert traversed == ["b", "f", "g", "h"]


def test_class_condition_in_walk():
    # Given
    graph = {"a": [1, "b", 2.0], "b": [3]}
    desc = traversal.Description().traverse("a").follow(graph.get).include_only(int)
    # When
    traversed = desc.to_list()
    # Then
    assert traversed == [1, 3]
