"""Grid placement for model nodes."""

from prisma_graph.config.base import LayoutConfig


def layout_position(index: int, layout: LayoutConfig | None = None) -> dict[str, int]:
    """Position of the node at `index` in a row-major grid."""
    layout = layout or LayoutConfig()
    return {
        "x": (index % layout.columns) * layout.column_width + layout.margin,
        "y": (index // layout.columns) * layout.row_height + layout.margin,
    }


def layout_positions(count: int, layout: LayoutConfig | None = None) -> list[dict[str, int]]:
    """Positions for `count` nodes in declaration order."""
    return [layout_position(i, layout) for i in range(count)]
