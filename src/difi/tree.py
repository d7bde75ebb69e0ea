"""Build a sorted directory/file hierarchy from changed-file paths."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from difi.models import TreeItem

__all__ = ["Node", "build_nodes", "build_tree"]

SEPARATOR = "/"


@dataclass
class Node:
    """A path segment in the changed-file trie."""

    name: str
    full_path: str
    is_dir: bool
    children: dict[str, Node] = field(default_factory=dict)

    def sorted_children(self) -> list[Node]:
        """Directories first, then case-sensitive by name."""
        return sorted(self.children.values(), key=lambda node: (not node.is_dir, node.name))


def build_nodes(paths: Iterable[str]) -> Node:
    """Return the root of a trie built from *paths*.

    A segment becomes a directory as soon as any path continues below it.
    """
    root = Node(name="", full_path="", is_dir=True)
    for path in paths:
        parts = [part for part in path.strip(SEPARATOR).split(SEPARATOR) if part]
        if not parts:
            continue
        current = root
        for index, part in enumerate(parts):
            has_more = index < len(parts) - 1
            child = current.children.get(part)
            if child is None:
                child = Node(
                    name=part,
                    full_path=SEPARATOR.join(parts[: index + 1]),
                    is_dir=has_more,
                )
                current.children[part] = child
            elif has_more:
                child.is_dir = True
            current = child
    return root


def build_tree(paths: Iterable[str]) -> list[TreeItem]:
    """Flatten *paths* into pre-order rows with depth annotations.

    The result only depends on the set of paths, so repeated calls and
    reordered input produce identical rows.
    """
    items: list[TreeItem] = []
    _flatten(build_nodes(paths), 0, items)
    return items


def _flatten(node: Node, depth: int, items: list[TreeItem]) -> None:
    for child in node.sorted_children():
        items.append(
            TreeItem(
                name=child.name,
                full_path=child.full_path,
                is_dir=child.is_dir,
                depth=depth,
            )
        )
        if child.is_dir:
            _flatten(child, depth + 1, items)
