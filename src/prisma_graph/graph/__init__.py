"""Diagram graph documents, layout and model editing."""

from prisma_graph.graph.document import SchemaGraph, SearchResult
from prisma_graph.graph.editing import (
    add_field,
    make_field,
    new_model,
    remove_field,
    rename_model,
    toggle_modifier,
    update_field,
)
from prisma_graph.graph.layout import layout_position, layout_positions

__all__ = [
    "SchemaGraph",
    "SearchResult",
    "add_field",
    "make_field",
    "new_model",
    "remove_field",
    "rename_model",
    "toggle_modifier",
    "update_field",
    "layout_position",
    "layout_positions",
]
