"""Expression trees for random art, their evaluation and printing."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class NodeKind(enum.Enum):
    X = enum.auto()
    Y = enum.auto()
    RANDOM = enum.auto()
    RULE = enum.auto()
    NUMBER = enum.auto()
    MULTI = enum.auto()
    ADD = enum.auto()
    MOD = enum.auto()
    BOOLEAN = enum.auto()
    GREATER = enum.auto()
    TRIPLE = enum.auto()
    IF = enum.auto()


class EvalError(Exception):
    """Raised when an expression cannot be evaluated."""


@dataclass(frozen=True)
class Node:
    """One expression node.

    ``value`` holds the number, boolean or rule index of leaf nodes;
    ``children`` holds operands (two for binary operators, three for
    triples, and condition/then/else for ``IF``).
    """

    kind: NodeKind
    value: float | bool | int | None = None
    children: tuple[Node, ...] = ()

    def __str__(self) -> str:
        return format_node(self)


def number(value: float) -> Node:
    return Node(NodeKind.NUMBER, float(value))


def boolean(value: bool) -> Node:
    return Node(NodeKind.BOOLEAN, bool(value))


def x() -> Node:
    return Node(NodeKind.X)


def y() -> Node:
    return Node(NodeKind.Y)


def random() -> Node:
    """A grammar-only leaf that generation replaces with a random number."""
    return Node(NodeKind.RANDOM)


def rule(index: int) -> Node:
    """A grammar-only reference to the rule at ``index``."""
    return Node(NodeKind.RULE, int(index))


def add(lhs: Node, rhs: Node) -> Node:
    return Node(NodeKind.ADD, children=(lhs, rhs))


def multi(lhs: Node, rhs: Node) -> Node:
    return Node(NodeKind.MULTI, children=(lhs, rhs))


def mod(lhs: Node, rhs: Node) -> Node:
    return Node(NodeKind.MOD, children=(lhs, rhs))


def greater(lhs: Node, rhs: Node) -> Node:
    return Node(NodeKind.GREATER, children=(lhs, rhs))


def triple(first: Node, second: Node, third: Node) -> Node:
    return Node(NodeKind.TRIPLE, children=(first, second, third))


def if_(condition: Node, then: Node, otherwise: Node) -> Node:
    return Node(NodeKind.IF, children=(condition, then, otherwise))


def _fmod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


_ARITHMETIC = {
    NodeKind.ADD: lambda a, b: a + b,
    NodeKind.MULTI: lambda a, b: a * b,
    NodeKind.MOD: _fmod,
}


def _expect(node: Node, kind: NodeKind, what: str):
    if node.kind is not kind:
        raise EvalError(f"expected {what}")
    return node.value


def evaluate(node: Node, x: float, y: float) -> Node:
    """Reduce ``node`` at point (x, y) to a number, boolean or triple."""
    kind = node.kind
    if kind is NodeKind.X:
        return Node(NodeKind.NUMBER, float(x))
    if kind is NodeKind.Y:
        return Node(NodeKind.NUMBER, float(y))
    if kind in (NodeKind.NUMBER, NodeKind.BOOLEAN):
        return node
    if kind is NodeKind.RULE:
        raise EvalError(f"cannot evaluate grammar rule {node.value}")
    if kind is NodeKind.RANDOM:
        raise EvalError("cannot evaluate a node that is valid only for grammar definitions")
    if kind in _ARITHMETIC or kind is NodeKind.GREATER:
        lhs_node, rhs_node = node.children
        lhs = _expect(evaluate(lhs_node, x, y), NodeKind.NUMBER, "number")
        rhs = _expect(evaluate(rhs_node, x, y), NodeKind.NUMBER, "number")
        if kind is NodeKind.GREATER:
            return Node(NodeKind.BOOLEAN, lhs > rhs)
        return Node(NodeKind.NUMBER, _ARITHMETIC[kind](lhs, rhs))
    if kind is NodeKind.TRIPLE:
        return Node(
            NodeKind.TRIPLE, children=tuple(evaluate(c, x, y) for c in node.children)
        )
    if kind is NodeKind.IF:
        condition, then, otherwise = node.children
        chosen = _expect(evaluate(condition, x, y), NodeKind.BOOLEAN, "boolean")
        return evaluate(then if chosen else otherwise, x, y)
    raise EvalError(f"unknown node kind {kind}")


def eval_color(node: Node, x: float, y: float) -> tuple[float, float, float]:
    """Evaluate ``node`` at (x, y) and return its triple of numbers."""
    result = evaluate(node, x, y)
    _expect(result, NodeKind.TRIPLE, "triple")
    r, g, b = (_expect(c, NodeKind.NUMBER, "number") for c in result.children)
    return r, g, b


def _call(name: str, node: Node) -> str:
    return f"{name}({', '.join(format_node(c) for c in node.children)})"


_CALL_NAMES = {
    NodeKind.MULTI: "multi",
    NodeKind.MOD: "mod",
    NodeKind.ADD: "add",
    NodeKind.GREATER: "greater",
    NodeKind.TRIPLE: "",
}


def format_node(node: Node) -> str:
    """Render ``node`` in the textual form used when printing expressions."""
    kind = node.kind
    if kind is NodeKind.X:
        return "x"
    if kind is NodeKind.Y:
        return "y"
    if kind is NodeKind.NUMBER:
        return f"{node.value:f}"
    if kind is NodeKind.BOOLEAN:
        return "true" if node.value else "false"
    if kind is NodeKind.RULE:
        return f"rule({node.value})"
    if kind is NodeKind.RANDOM:
        return "random"
    if kind is NodeKind.IF:
        condition, then, otherwise = (format_node(c) for c in node.children)
        return f"if {condition} then {then} else {otherwise}"
    return _call(_CALL_NAMES[kind], node)