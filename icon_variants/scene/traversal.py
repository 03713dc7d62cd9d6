"""Lazy tree traversal over scene nodes.

One walker serves every recursive pass in the package: the eligibility
check looks for drawable descendants, stroke application visits stroked
nodes, and the aspect lock visits lockable ones.

Usage::

    from icon_variants.scene.traversal import walk
    strokes = walk(frame, lambda n: isinstance(n, Stroked))
"""

from __future__ import annotations

from typing import Callable, Iterator

from icon_variants.scene.nodes import BaseNode, ChildrenMixin

NodePredicate = Callable[[BaseNode], bool]


def walk(
    root: BaseNode,
    predicate: NodePredicate | None = None,
    *,
    include_root: bool = True,
    descend: NodePredicate | None = None,
) -> Iterator[BaseNode]:
    """Depth-first, pre-order walk yielding nodes that match *predicate*.

    Parameters
    ----------
    root : BaseNode
        Subtree root.
    predicate : callable, optional
        Filter applied to each node.  ``None`` yields every node.
    include_root : bool
        Whether *root* itself is a candidate.
    descend : callable, optional
        Return ``False`` for a node to skip its children.  ``None``
        descends everywhere.

    Yields
    ------
    BaseNode
        Matching nodes in document order.  Children are read when their
        parent is reached, so the generator tolerates edits to nodes it
        has already yielded.
    """
    stack: list[tuple[BaseNode, bool]] = [(root, include_root)]
    while stack:
        node, candidate = stack.pop()
        if candidate and (predicate is None or predicate(node)):
            yield node
        if isinstance(node, ChildrenMixin) and (descend is None or descend(node)):
            stack.extend((child, True) for child in reversed(node.children))


def find_first(root: BaseNode, predicate: NodePredicate) -> BaseNode | None:
    """First match in document order, or ``None``."""
    return next(walk(root, predicate), None)


def contains(root: BaseNode, predicate: NodePredicate, *, include_root: bool = True) -> bool:
    """``True`` if any node of the subtree matches *predicate*."""
    return next(walk(root, predicate, include_root=include_root), None) is not None
