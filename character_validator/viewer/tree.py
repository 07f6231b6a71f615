"""
Collapsible JSON tree.

``JsonTree`` owns the expansion state of every node, keyed by path.
``JsonNode`` objects are throwaway views created on demand while walking
the visible part of the tree, so collapsing a node never loses the state
of its descendants.

Paths read like ``style.all[0]``. Object keys that are empty or contain
``.``, ``[``, ``]``, ``"`` or ``\\`` are written as a quoted segment,
``settings["api.key"]``, so every node has a distinct path.
"""

import json
from typing import Any, Iterator, Optional, Tuple

from character_validator.schema.errors import json_type_name

ROOT_PATH = ""
EXPANDED_MARKER = "▼"
COLLAPSED_MARKER = "►"

_QUOTED_KEY_CHARS = frozenset('.[]"\\')


def _key_segment(key: str) -> Optional[str]:
    if not key or _QUOTED_KEY_CHARS.intersection(key):
        return None
    return key


def child_path(parent: str, key: Any, is_array: bool) -> str:
    """Path of a child node: ``parent.key`` for members, ``parent[i]`` for items."""
    if is_array:
        return f"{parent}[{key}]"
    segment = _key_segment(str(key))
    if segment is None:
        # JSON string escaping keeps quoted segments unambiguous
        return f"{parent}[{json.dumps(str(key), ensure_ascii=False)}]"
    return f"{parent}.{segment}" if parent else segment


class JsonNode:
    """View of one JSON value inside a tree."""

    __slots__ = ("name", "value", "path", "tree")

    def __init__(self, name: Optional[str], value: Any, path: str, tree: "JsonTree"):
        self.name = name
        self.value = value
        self.path = path
        self.tree = tree

    def __repr__(self) -> str:
        return f"JsonNode(path={self.path!r}, kind={self.kind!r})"

    @property
    def kind(self) -> str:
        return json_type_name(self.value)

    @property
    def is_container(self) -> bool:
        return isinstance(self.value, (dict, list))

    @property
    def size(self) -> int:
        return len(self.value) if self.is_container else 0

    @property
    def is_expanded(self) -> bool:
        return self.is_container and self.tree.is_expanded(self.path)

    @property
    def marker(self) -> str:
        return EXPANDED_MARKER if self.is_expanded else COLLAPSED_MARKER

    @property
    def summary(self) -> str:
        """Element-count summary shown in a container header."""
        if isinstance(self.value, list):
            return f"Array({len(self.value)})"
        if isinstance(self.value, dict):
            return f"Object{{{len(self.value)}}}"
        return self.display_value

    @property
    def display_value(self) -> str:
        """Scalar value formatted for display."""
        value = self.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return f'"{value}"'
        if isinstance(value, (list, dict)):
            return self.summary
        return str(value)

    def children(self) -> list["JsonNode"]:
        """
        Child views in source order.

        Array items are named by index, object members by key. Scalars
        have no children.
        """
        if isinstance(self.value, list):
            return [
                JsonNode(str(index), item, child_path(self.path, index, True), self.tree)
                for index, item in enumerate(self.value)
            ]
        if isinstance(self.value, dict):
            return [
                JsonNode(str(key), item, child_path(self.path, key, False), self.tree)
                for key, item in self.value.items()
            ]
        return []

    def visible_children(self) -> list["JsonNode"]:
        """Children shown under this node right now (none while collapsed)."""
        return self.children() if self.is_expanded else []

    def toggle(self) -> bool:
        return self.tree.toggle(self.path)


class JsonTree:
    """Expansion state for one JSON document."""

    def __init__(self, data: Any, initial_expanded: bool = False):
        self.data = data
        self._expanded: set[str] = set()
        if initial_expanded and isinstance(data, (dict, list)):
            self._expanded.add(ROOT_PATH)

    @property
    def root(self) -> JsonNode:
        return JsonNode(None, self.data, ROOT_PATH, self)

    @property
    def expanded_paths(self) -> frozenset[str]:
        return frozenset(self._expanded)

    def is_expanded(self, path: str) -> bool:
        return path in self._expanded

    def find(self, path: str) -> JsonNode:
        """
        Locate the node at ``path``.

        Raises:
            KeyError: If no node has that path
        """
        node = self.root
        while node.path != path:
            for child in node.children():
                if child.path == path or path.startswith((child.path + ".", child.path + "[")):
                    node = child
                    break
            else:
                raise KeyError(path)
        return node

    def toggle(self, path: str) -> bool:
        """
        Flip the expansion state of one container node.

        Returns:
            The new state (True = expanded)

        Raises:
            KeyError: If no node has that path
            ValueError: If the node is a scalar
        """
        node = self.find(path)
        if not node.is_container:
            raise ValueError(f"Node '{path}' holds a {node.kind} and cannot be expanded")
        if path in self._expanded:
            self._expanded.discard(path)
            return False
        self._expanded.add(path)
        return True

    def visible_nodes(self) -> Iterator[Tuple[int, JsonNode]]:
        """Depth-first walk over the nodes currently shown, as (depth, node)."""
        stack = [(0, self.root)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            children = node.visible_children()
            stack.extend((depth + 1, child) for child in reversed(children))
