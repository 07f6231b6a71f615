"""Collapsible tree view over arbitrary JSON values."""

from .tree import JsonNode, JsonTree, child_path
from .render import render_html, render_text

__all__ = [
    "JsonNode",
    "JsonTree",
    "child_path",
    "render_html",
    "render_text",
]
