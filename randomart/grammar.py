"""Probabilistic grammars that generate random-art expression trees."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from typing import Protocol

from randomart import nodes
from randomart.nodes import Node, NodeKind

MAX_ATTEMPTS = 100

_LEAVES = frozenset({NodeKind.X, NodeKind.Y, NodeKind.NUMBER, NodeKind.BOOLEAN})


class _RandomSource(Protocol):
    def random(self) -> float: ...


class GenerationError(Exception):
    """Raised when a grammar cannot produce an expression."""


@dataclass(frozen=True)
class Branch:
    """One alternative of a rule, chosen with the given probability."""

    node: Node
    probability: float


@dataclass
class Grammar:
    """An ordered list of rules, each a list of weighted branches."""

    rules: list[list[Branch]] = field(default_factory=list)

    def add_rule(self, branches) -> int:
        """Append a rule made of ``branches`` and return its index."""
        self.rules.append(list(branches))
        return len(self.rules) - 1


def generate_node(
    grammar: Grammar, node: Node, depth: int, rng: _RandomSource | None = None
) -> Node:
    """Expand the rule references and random leaves inside ``node``."""
    if rng is None:
        rng = _random.Random()
    kind = node.kind
    if kind in _LEAVES:
        return node
    if kind is NodeKind.RULE:
        return generate_rule(grammar, node.value, depth - 1, rng)
    if kind is NodeKind.RANDOM:
        return nodes.number(rng.random() * 2.0 - 1.0)
    children = tuple(generate_node(grammar, child, depth - 1, rng) for child in node.children)
    return Node(kind, node.value, children)


def generate_rule(
    grammar: Grammar, rule: int, depth: int, rng: _RandomSource | None = None
) -> Node:
    """Generate an expression from rule ``rule`` within ``depth`` levels.

    A branch is picked by its probability; if expanding it runs out of depth,
    another pick is made, up to a fixed number of attempts.
    """
    if rng is None:
        rng = _random.Random()
    if depth <= 0:
        raise GenerationError("generation depth exhausted")
    if not 0 <= rule < len(grammar.rules):
        raise ValueError(f"grammar has no rule {rule}")
    branches = grammar.rules[rule]
    if not branches:
        raise ValueError(f"rule {rule} has no branches")

    for _ in range(MAX_ATTEMPTS):
        p = rng.random()
        total = 0.0
        for branch in branches:
            total += branch.probability
            if total >= p:
                try:
                    return generate_node(grammar, branch.node, depth - 1, rng)
                except GenerationError:
                    pass
                break
    raise GenerationError(
        f"could not generate rule {rule} within {MAX_ATTEMPTS} attempts"
    )


def default_grammar() -> Grammar:
    """The grammar producing colour triples of sums and products of x, y and constants."""
    grammar = Grammar()
    entry, terminal, expression = 0, 1, 2
    grammar.add_rule([
        Branch(
            nodes.triple(nodes.rule(expression), nodes.rule(expression), nodes.rule(expression)),
            1.0,
        ),
    ])
    grammar.add_rule([
        Branch(nodes.random(), 1.0 / 3.0),
        Branch(nodes.x(), 1.0 / 3.0),
        Branch(nodes.y(), 1.0 / 3.0),
    ])
    grammar.add_rule([
        Branch(nodes.rule(terminal), 1.0 / 4.0),
        Branch(nodes.add(nodes.rule(expression), nodes.rule(expression)), 3.0 / 8.0),
        Branch(nodes.multi(nodes.rule(expression), nodes.rule(expression)), 3.0 / 8.0),
    ])
    assert len(grammar.rules) == 3 and entry == 0
    return grammar