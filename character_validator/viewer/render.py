"""Text and HTML renderers for ``JsonTree``."""

from typing import Callable, Optional
from urllib.parse import quote

from markupsafe import Markup

from .tree import JsonNode, JsonTree


def default_toggle_url(path: str) -> str:
    return f"/tree/toggle?path={quote(path, safe='')}"


def _text_line(node: JsonNode) -> str:
    label = f"{node.name}: " if node.name is not None else ""
    if node.is_container:
        return f"{node.marker} {label}{node.summary}"
    return f"{label}{node.display_value}"


def render_text(tree: JsonTree, indent: str = "  ") -> list[str]:
    """Render the visible part of the tree as indented lines."""
    return [f"{indent * depth}{_text_line(node)}" for depth, node in tree.visible_nodes()]


def _html_label(node: JsonNode) -> Markup:
    if node.name is None:
        return Markup("")
    return Markup('<span class="json-key">{}:</span> ').format(node.name)


def _html_node(node: JsonNode, toggle_url: Callable[[str], str]) -> Markup:
    if not node.is_container:
        return Markup('<div class="json-node json-scalar">{}<span class="json-{}">{}</span></div>').format(
            _html_label(node), node.kind, node.display_value
        )

    header = Markup(
        '<form class="json-toggle" method="post" action="{}">'
        '<button type="submit" aria-expanded="{}">'
        '<span class="json-marker">{}</span> {}<span class="json-summary">{}</span>'
        '</button></form>'
    ).format(
        toggle_url(node.path),
        "true" if node.is_expanded else "false",
        node.marker,
        _html_label(node),
        node.summary,
    )

    children = node.visible_children()
    if not children:
        return Markup('<div class="json-node json-{}">{}</div>').format(node.kind, header)

    body = Markup("").join(_html_node(child, toggle_url) for child in children)
    return Markup('<div class="json-node json-{}">{}<div class="json-children">{}</div></div>').format(
        node.kind, header, body
    )


def render_html(tree: JsonTree, toggle_url: Optional[Callable[[str], str]] = None) -> Markup:
    """
    Render the visible part of the tree as nested HTML.

    Each container header is a small form posting to ``toggle_url(path)``;
    collapsed subtrees are not rendered at all.
    """
    return Markup('<div class="json-viewer">{}</div>').format(
        _html_node(tree.root, toggle_url or default_toggle_url)
    )


__all__ = ["render_text", "render_html", "default_toggle_url"]
