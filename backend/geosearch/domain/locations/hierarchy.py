"""Static location tree with index-addressed traversal.

The tree is stored as an arena: every node lives at an integer index in
a flat list, with parent and children recorded as indices.  All
traversal helpers work on indices and translate back to IDs at the edge,
so there are no parent back-references on the nodes themselves.

The module-level functions accept either a :class:`LocationHierarchy` or
a plain sequence of root :class:`TreeNode` objects.  Unknown IDs always
yield an empty result (or ``None``), never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence, Union


@dataclass(frozen=True)
class TreeNode:
    """One region, country, or state-equivalent in the location tree."""

    id: str
    label: str
    children: tuple[TreeNode, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children


class LocationHierarchy:
    """Immutable arena over a forest of :class:`TreeNode` roots."""

    def __init__(self, roots: Sequence[TreeNode]) -> None:
        self._roots: tuple[TreeNode, ...] = tuple(roots)
        self._nodes: list[TreeNode] = []
        self._parent: list[int | None] = []
        self._children: list[list[int]] = []
        self._index: dict[str, int] = {}
        self._root_indices: list[int] = [self._add(root, None) for root in self._roots]

    def _add(self, node: TreeNode, parent: int | None) -> int:
        if node.id in self._index:
            raise ValueError(f"Duplicate location id in hierarchy: {node.id!r}")
        idx = len(self._nodes)
        self._nodes.append(node)
        self._parent.append(parent)
        self._children.append([])
        self._index[node.id] = idx
        for child in node.children:
            self._children[idx].append(self._add(child, idx))
        return idx

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_dicts(cls, data: Sequence[Mapping[str, Any]]) -> LocationHierarchy:
        """Build from JSON-style ``{"id", "label", "children"}`` dicts."""
        return cls([_node_from_dict(item) for item in data])

    # -- Index primitives ----------------------------------------------------

    def index_of(self, node_id: str) -> int | None:
        return self._index.get(node_id)

    def _descendant_indices(self, idx: int) -> Iterator[int]:
        # Pre-order, iterative so deep trees don't hit the recursion limit
        stack = [idx]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._children[current]))

    # -- Public traversal ------------------------------------------------

    @property
    def roots(self) -> tuple[TreeNode, ...]:
        return self._roots

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self._nodes)

    def find(self, node_id: str) -> TreeNode | None:
        idx = self._index.get(node_id)
        return None if idx is None else self._nodes[idx]

    def descendants(self, node_id: str) -> list[str]:
        idx = self._index.get(node_id)
        if idx is None:
            return []
        return [self._nodes[i].id for i in self._descendant_indices(idx)]

    def parent(self, node_id: str) -> str | None:
        idx = self._index.get(node_id)
        if idx is None:
            return None
        parent_idx = self._parent[idx]
        return None if parent_idx is None else self._nodes[parent_idx].id

    def children(self, node_id: str) -> list[str]:
        idx = self._index.get(node_id)
        if idx is None:
            return []
        return [self._nodes[i].id for i in self._children[idx]]

    def ancestors(self, node_id: str) -> list[str]:
        idx = self._index.get(node_id)
        if idx is None:
            return []
        out: list[str] = []
        parent_idx = self._parent[idx]
        while parent_idx is not None:
            out.append(self._nodes[parent_idx].id)
            parent_idx = self._parent[parent_idx]
        return out

    def leaf_ids(self) -> list[str]:
        return [
            self._nodes[i].id
            for root in self._root_indices
            for i in self._descendant_indices(root)
            if not self._children[i]
        ]

    def walk(self) -> Iterator[tuple[int, TreeNode]]:
        """Yield ``(depth, node)`` pairs in depth-first order."""
        stack = [(0, idx) for idx in reversed(self._root_indices)]
        while stack:
            depth, idx = stack.pop()
            yield depth, self._nodes[idx]
            stack.extend((depth + 1, child) for child in reversed(self._children[idx]))


def _node_from_dict(data: Mapping[str, Any]) -> TreeNode:
    children = data.get("children") or ()
    return TreeNode(
        id=str(data["id"]),
        label=str(data.get("label", data["id"])),
        children=tuple(_node_from_dict(child) for child in children),
    )


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------

TreeLike = Union[LocationHierarchy, Sequence[TreeNode]]


def as_hierarchy(tree: TreeLike) -> LocationHierarchy:
    if isinstance(tree, LocationHierarchy):
        return tree
    return LocationHierarchy(tree)


def get_all_descendant_ids(node_id: str, tree: TreeLike) -> list[str]:
    """The node itself plus every descendant, depth-first."""
    return as_hierarchy(tree).descendants(node_id)


def expand_selected_locations(selected_ids: Sequence[str] | None, tree: TreeLike) -> list[str]:
    """Deduplicated union of every selected node's subtree, first-seen order."""
    hierarchy = as_hierarchy(tree)
    expanded: dict[str, None] = {}
    for node_id in selected_ids or ():
        for descendant in hierarchy.descendants(node_id):
            expanded.setdefault(descendant, None)
    return list(expanded)


def get_parent_id(node_id: str, tree: TreeLike) -> str | None:
    return as_hierarchy(tree).parent(node_id)


def get_direct_children_ids(node_id: str, tree: TreeLike) -> list[str]:
    return as_hierarchy(tree).children(node_id)


def get_all_ancestor_ids(node_id: str, tree: TreeLike) -> list[str]:
    """Immediate parent first, root last."""
    return as_hierarchy(tree).ancestors(node_id)


def find_node_by_id(node_id: str, tree: TreeLike) -> TreeNode | None:
    return as_hierarchy(tree).find(node_id)


__all__ = [
    "TreeNode",
    "LocationHierarchy",
    "TreeLike",
    "as_hierarchy",
    "get_all_descendant_ids",
    "expand_selected_locations",
    "get_parent_id",
    "get_direct_children_ids",
    "get_all_ancestor_ids",
    "find_node_by_id",
]
