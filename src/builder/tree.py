"""Id-indexed component tree.

Wraps a page's root component list with two maps, ``id -> node`` and
``id -> parent id``, so lookups are O(1) and component ids stay unique
across the whole tree (not just among siblings). The root list is mutated
in place, so the owning ``Page`` always sees the current tree.
"""

from collections.abc import Iterable, Iterator

from .errors import DuplicateComponentError, ReorderError
from .models import ComponentNode


class ComponentTree:
    """Arena over a page's component tree."""

    def __init__(self, roots: list[ComponentNode]) -> None:
        """
        Index an existing root list.

        Args:
            roots: Root-level component list (kept by reference)

        Raises:
            DuplicateComponentError: If any id occurs twice in the tree
        """
        self._roots = roots
        self._nodes: dict[str, ComponentNode] = {}
        self._parents: dict[str, str | None] = {}
        for node in roots:
            self._check_free(node)
            self._index(node, None)

    @property
    def roots(self) -> list[ComponentNode]:
        return self._roots

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ComponentNode]:
        for node in self._roots:
            yield from node.walk()

    def ids(self) -> set[str]:
        return set(self._nodes)

    def get(self, component_id: str) -> ComponentNode | None:
        return self._nodes.get(component_id)

    def parent_id(self, component_id: str) -> str | None:
        return self._parents.get(component_id)

    def siblings(self, component_id: str) -> list[ComponentNode]:
        """The list holding ``component_id``: a parent's children or the roots."""
        parent = self._parents.get(component_id)
        if parent is None:
            return self._roots
        return self._nodes[parent].children

    def root_index(self, component_id: str) -> int | None:
        """Position of a root-level component, None if absent or nested."""
        if component_id not in self._nodes or self._parents[component_id] is not None:
            return None
        return self._position(self._roots, component_id)

    def subtree_ids(self, component_id: str) -> list[str]:
        node = self._nodes.get(component_id)
        if node is None:
            return []
        return [n.id for n in node.walk()]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append_root(self, node: ComponentNode) -> None:
        self._check_free(node)
        self._roots.append(node)
        self._index(node, None)

    def insert_after(self, component_id: str, node: ComponentNode) -> None:
        """Insert ``node`` right after ``component_id``, at the same depth."""
        self._check_free(node)
        siblings = self.siblings(component_id)
        siblings.insert(self._position(siblings, component_id) + 1, node)
        self._index(node, self._parents[component_id])

    def replace(self, component_id: str, node: ComponentNode) -> None:
        """
        Swap the node at ``component_id`` (and its subtree) for ``node``.

        Raises:
            DuplicateComponentError: If ``node``'s subtree collides with ids
                outside the replaced subtree; the tree is left unchanged
        """
        old = self._nodes[component_id]
        parent = self._parents[component_id]
        self._unindex(old)
        try:
            self._check_free(node)
        except DuplicateComponentError:
            self._index(old, parent)
            raise
        siblings = self._roots if parent is None else self._nodes[parent].children
        siblings[self._position(siblings, component_id)] = node
        self._index(node, parent)

    def remove(self, component_id: str) -> ComponentNode | None:
        """Detach a node with its whole subtree; None if absent."""
        node = self._nodes.get(component_id)
        if node is None:
            return None
        siblings = self.siblings(component_id)
        del siblings[self._position(siblings, component_id)]
        self._unindex(node)
        return node

    def move_root(self, start: int, end: int) -> None:
        """Splice-move a root component from ``start`` to ``end``."""
        length = len(self._roots)
        if not (0 <= start < length and 0 <= end < length):
            raise ReorderError(start, end, length)
        node = self._roots.pop(start)
        self._roots.insert(end, node)

    def swap_roots(self, i: int, j: int) -> None:
        self._roots[i], self._roots[j] = self._roots[j], self._roots[i]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _position(nodes: list[ComponentNode], component_id: str) -> int:
        for i, node in enumerate(nodes):
            if node.id == component_id:
                return i
        raise KeyError(component_id)

    def _check_free(self, node: ComponentNode) -> None:
        seen: set[str] = set()
        for n in node.walk():
            if n.id in self._nodes or n.id in seen:
                raise DuplicateComponentError(n.id)
            seen.add(n.id)

    def _index(self, node: ComponentNode, parent: str | None) -> None:
        self._nodes[node.id] = node
        self._parents[node.id] = parent
        for child in node.children:
            self._index(child, node.id)

    def _unindex(self, node: ComponentNode) -> None:
        for n in node.walk():
            self._nodes.pop(n.id, None)
            self._parents.pop(n.id, None)


def renamed_copy(node: ComponentNode, new_ids: Iterable[str]) -> ComponentNode:
    """Deep copy of ``node`` whose pre-order ids are replaced by ``new_ids``."""
    clone = node.model_copy(deep=True)
    for n, new_id in zip(clone.walk(), new_ids):
        n.id = new_id
    return clone
