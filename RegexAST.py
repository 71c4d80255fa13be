from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


class NodeType(Enum):
    Char = 1
    Plus = 2
    Star = 3
    Question = 4
    Or = 5
    Seq = 6


QUANTIFIER_TYPES = {
    NodeType.Plus: '+',
    NodeType.Star: '*',
    NodeType.Question: '?',
}

SPECIAL_CHARS = ['\\', '(', ')', '|', '+', '*', '?']


@dataclass(frozen=True)
class ExprNode:
    """A node of the pattern tree.

    The tree is immutable: children live in a tuple and the dataclass is frozen,
    so a node can be shared with a downstream compiler without copying.
    """
    type: NodeType
    value: Optional[str] = None
    children: tuple = ()

    def __repr__(self):
        if self.type == NodeType.Char:
            return f"Char({self.value!r})"
        if self.type == NodeType.Seq:
            return f"Seq([{', '.join(repr(child) for child in self.children)}])"
        return f"{self.type.name}({', '.join(repr(child) for child in self.children)})"

    def chars(self) -> Iterator[str]:
        """Yield the literal of every Char leaf, left to right"""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.type == NodeType.Char:
                yield node.value
            else:
                stack.extend(reversed(node.children))

    def to_pattern(self) -> str:
        """Render the tree back to pattern text that parses to an equal tree"""
        return _alternative(self)


def Char(c: str) -> ExprNode:
    return ExprNode(NodeType.Char, c)


def Plus(child: ExprNode) -> ExprNode:
    return ExprNode(NodeType.Plus, children=(child,))


def Star(child: ExprNode) -> ExprNode:
    return ExprNode(NodeType.Star, children=(child,))


def Question(child: ExprNode) -> ExprNode:
    return ExprNode(NodeType.Question, children=(child,))


def Or(left: ExprNode, right: ExprNode) -> ExprNode:
    return ExprNode(NodeType.Or, children=(left, right))


def Seq(children) -> ExprNode:
    return ExprNode(NodeType.Seq, children=tuple(children))


def _alternative(node: ExprNode) -> str:
    # at the root and between '|' a Seq needs no parentheses, and neither does
    # the right-nested chain of Or nodes produced by folding
    if node.type == NodeType.Seq:
        return ''.join(_atom(child) for child in node.children)
    if node.type == NodeType.Or:
        left, right = node.children
        return f"{_alternative(left)}|{_alternative(right)}"
    return _atom(node)


def _atom(node: ExprNode) -> str:
    if node.type == NodeType.Char:
        if node.value in SPECIAL_CHARS:
            return '\\' + node.value
        return node.value
    if node.type in QUANTIFIER_TYPES:
        return _atom(node.children[0]) + QUANTIFIER_TYPES[node.type]
    return f"({_alternative(node)})"
