"""
Search and filter utilities that decide which nodes get highlighted or dimmed.
"""
from __future__ import annotations

from typing import FrozenSet, Optional

from .graph import GraphModel
from .models import Node, NodeCategory

ALL_CATEGORIES = "all"


def _matches(node: Node, needle: str) -> bool:
    if needle in node.display_name.lower() or needle in node.title.lower():
        return True
    return any(needle in skill.lower() for skill in node.skills)


def search(term: Optional[str], model: GraphModel) -> FrozenSet[str]:
    """
    Ids of nodes whose name, title, or any skill contains ``term`` (case-insensitive).

    A blank term means "no highlight" and yields an empty set.
    """
    if term is None or not term.strip():
        return frozenset()
    needle = term.lower()
    return frozenset(node.id for node in model.all_nodes() if _matches(node, needle))


def filter_by_category(
    category: Optional[NodeCategory | str], model: GraphModel
) -> FrozenSet[str]:
    """
    Ids of nodes shown at full opacity under a category filter.

    ``None`` or ``"all"`` keeps every node. The viewing user's own node is
    always kept so the graph never loses its anchor.
    """
    if category is None or category == ALL_CATEGORIES:
        return frozenset(node.id for node in model.all_nodes())
    wanted = NodeCategory(category)
    return frozenset(
        node.id
        for node in model.all_nodes()
        if node.category == wanted or node.category == NodeCategory.SELF
    )
