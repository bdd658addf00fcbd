"""Depth-first parse tree traversal with enter/exit events."""

from __future__ import annotations

from typing import ContextManager, Protocol, Union

from lark import Token, Tree


class TreeListener(Protocol):
    """Receives traversal events in tree order.

    ``rule`` is entered before a node's children are visited and left after
    the last child; leaving it normally is the node's exit event.
    """

    def rule(self, node: Tree) -> ContextManager[object]:
        ...

    def visit_terminal(self, token: Token) -> None:
        ...


def walk(listener: TreeListener, node: Union[Tree, Token]) -> None:
    """Visit ``node`` depth-first, left to right."""
    if isinstance(node, Token):
        listener.visit_terminal(node)
        return
    with listener.rule(node):
        for child in node.children:
            walk(listener, child)


__all__ = ["TreeListener", "walk"]
