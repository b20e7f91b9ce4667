"""Tri-state checkbox semantics derived from a flat selection set.

The set of user-toggled IDs is the only stored state.  Whether a node
shows as selected, unselected, or indeterminate is computed on every
read from that set and the static hierarchy.

An interior node that is itself in the selection while its children are
not (all) selected reports ``INDETERMINATE``.  :meth:`SelectionSet.toggle`
always expands or collapses whole subtrees, so it never creates that
state; it only appears when a selection is restored from outside, such
as a bookmarked URL or a saved search listing a region on its own.
"""

from __future__ import annotations

from enum import Enum
from typing import Collection, Iterable, Iterator

from .hierarchy import LocationHierarchy, TreeLike, as_hierarchy


class CheckboxState(str, Enum):
    SELECTED = "selected"
    UNSELECTED = "unselected"
    INDETERMINATE = "indeterminate"


def are_all_children_selected(
    node_id: str, selected_ids: Collection[str], tree: TreeLike
) -> bool:
    """True iff the node has children and every direct child is a member."""
    children = as_hierarchy(tree).children(node_id)
    if not children:
        return False
    selected = _as_set(selected_ids)
    return all(child in selected for child in children)


def are_some_children_selected(
    node_id: str, selected_ids: Collection[str], tree: TreeLike
) -> bool:
    """True iff strictly between zero and all direct children are members."""
    children = as_hierarchy(tree).children(node_id)
    if not children:
        return False
    selected = _as_set(selected_ids)
    count = sum(1 for child in children if child in selected)
    return 0 < count < len(children)


def get_checkbox_state(
    node_id: str, selected_ids: Collection[str], tree: TreeLike
) -> CheckboxState:
    hierarchy = as_hierarchy(tree)
    selected = _as_set(selected_ids)
    directly_selected = node_id in selected
    children = hierarchy.children(node_id)

    if not children:
        return CheckboxState.SELECTED if directly_selected else CheckboxState.UNSELECTED

    picked = sum(1 for child in children if child in selected)
    if picked == len(children):
        return CheckboxState.SELECTED
    if picked > 0 or directly_selected:
        return CheckboxState.INDETERMINATE
    return CheckboxState.UNSELECTED


def _as_set(ids: Collection[str] | None) -> frozenset[str] | set[str]:
    if ids is None:
        return frozenset()
    if isinstance(ids, (set, frozenset)):
        return ids
    return frozenset(ids)


class SelectionSet:
    """Mutable set of toggled location IDs bound to one hierarchy."""

    def __init__(self, hierarchy: LocationHierarchy, ids: Iterable[str] = ()) -> None:
        self._hierarchy = hierarchy
        self._ids: set[str] = {i for i in ids if i}

    @property
    def ids(self) -> tuple[str, ...]:
        """Sorted snapshot, stable for cache keys and URLs."""
        return tuple(sorted(self._ids))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def state_of(self, node_id: str) -> CheckboxState:
        return get_checkbox_state(node_id, self._ids, self._hierarchy)

    def toggle(self, node_id: str) -> CheckboxState:
        """Flip a node with its whole subtree, then fix up its ancestors.

        Returns the node's state after the toggle.  Unknown IDs are ignored.
        """
        if node_id not in self._hierarchy:
            return CheckboxState.UNSELECTED

        subtree = self._hierarchy.descendants(node_id)
        ancestors = self._hierarchy.ancestors(node_id)

        if self.state_of(node_id) is CheckboxState.SELECTED:
            self._ids.difference_update(subtree)
            self._ids.difference_update(ancestors)
        else:
            self._ids.update(subtree)
            for ancestor in ancestors:
                if are_all_children_selected(ancestor, self._ids, self._hierarchy):
                    self._ids.add(ancestor)
                else:
                    break
        return self.state_of(node_id)

    def clear(self) -> None:
        self._ids.clear()


__all__ = [
    "CheckboxState",
    "are_all_children_selected",
    "are_some_children_selected",
    "get_checkbox_state",
    "SelectionSet",
]
