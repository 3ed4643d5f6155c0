"""Utility functions for prisma-graph."""

from prisma_graph.utils.helpers import camel_to_snake, merge_dicts

__all__ = [
    "camel_to_snake",
    "merge_dicts",
]
